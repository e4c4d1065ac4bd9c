"""
Unit Tests for Answer Feedback Analysis
"""

import pytest

from mkpractice.enums import MistakeType
from mkpractice.services.practice.feedback import (
    FALLBACK_MESSAGES,
    FEEDBACK_MESSAGES,
    analyze_answer,
    get_feedback_message,
)


class TestAnalyzeAnswer:
    """Tests for analyze_answer."""

    def test_exact_match(self) -> None:
        analysis = analyze_answer("книгата", "книгата")

        assert analysis.exact_match is True
        assert analysis.flexible_match is True
        assert analysis.mistake_type is None
        assert analysis.feedback_hint is None

    def test_missing_diacritic_is_flexible_match(self) -> None:
        """к instead of ќ still counts as a flexible match."""
        analysis = analyze_answer("ке", "ќе")

        assert analysis.exact_match is False
        assert analysis.flexible_match is True
        assert analysis.mistake_type == MistakeType.DIACRITICS

    def test_case_and_punctuation_are_flexible(self) -> None:
        analysis = analyze_answer("Здраво!", "здраво")

        assert analysis.flexible_match is True
        assert analysis.exact_match is False

    @pytest.mark.parametrize(
        "user,correct",
        [
            ("Како си", "Како си?"),
            ("Добро утро!", "Добро утро."),
            ("Да, благодарам", "Да благодарам"),
            ("„Здраво“", "Здраво"),
        ],
    )
    def test_punctuation_only_difference(self, user, correct) -> None:
        """Answers that differ only in punctuation are flagged as punctuation slips."""
        analysis = analyze_answer(user, correct)

        assert analysis.exact_match is False
        assert analysis.flexible_match is True
        assert analysis.mistake_type == MistakeType.PUNCTUATION
        assert analysis.feedback_hint == "Correct! (Check your punctuation)"

    def test_punctuation_with_accent_slip_is_diacritics(self) -> None:
        analysis = analyze_answer("Ке дојдам", "Ќе дојдам.")

        assert analysis.mistake_type == MistakeType.DIACRITICS

    def test_punctuation_message_exists(self) -> None:
        assert get_feedback_message(MistakeType.PUNCTUATION, "mk") == (
            FEEDBACK_MESSAGES[MistakeType.PUNCTUATION]["mk"]
        )

    def test_missing_definite_article(self) -> None:
        analysis = analyze_answer("книга", "книгата")

        assert analysis.flexible_match is False
        assert analysis.mistake_type == MistakeType.ARTICLE

    def test_wrong_article_ending(self) -> None:
        analysis = analyze_answer("градот", "градов")

        assert analysis.mistake_type == MistakeType.ARTICLE

    def test_gender_ending(self) -> None:
        """Masculine adjective where the feminine form is expected."""
        analysis = analyze_answer("македонски", "македонска")

        assert analysis.mistake_type == MistakeType.GENDER

    def test_conjugation_ending(self) -> None:
        analysis = analyze_answer("зборуваш", "зборувам")

        assert analysis.mistake_type == MistakeType.CONJUGATION

    def test_spelling_fallback(self) -> None:
        analysis = analyze_answer("hause", "house")

        assert analysis.mistake_type == MistakeType.SPELLING
        assert analysis.feedback_hint


class TestGetFeedbackMessage:
    """Tests for get_feedback_message."""

    @pytest.mark.parametrize("mistake_type", list(FEEDBACK_MESSAGES))
    def test_every_mistake_has_both_locales(self, mistake_type) -> None:
        assert get_feedback_message(mistake_type, "en") == FEEDBACK_MESSAGES[mistake_type]["en"]
        assert get_feedback_message(mistake_type, "mk") == FEEDBACK_MESSAGES[mistake_type]["mk"]

    def test_unknown_locale_uses_english(self) -> None:
        assert get_feedback_message(MistakeType.CASE, "fr") == FEEDBACK_MESSAGES[MistakeType.CASE]["en"]

    def test_no_mistake_type(self) -> None:
        assert get_feedback_message(None) == FALLBACK_MESSAGES["en"]
        assert get_feedback_message(None, "mk") == FALLBACK_MESSAGES["mk"]

    def test_accepts_string_values(self) -> None:
        assert get_feedback_message("article") == FEEDBACK_MESSAGES[MistakeType.ARTICLE]["en"]
