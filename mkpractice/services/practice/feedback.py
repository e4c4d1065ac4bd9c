"""
Answer Feedback Analysis

Explains why a typed answer differs from the expected one so the learner
gets a targeted hint instead of a bare "wrong".

Checks run in order and the first hit wins:
1. Exact match
2. Only punctuation differs (punctuation)
3. Match after normalization with diacritics folded (diacritics)
4. Case-only difference (case)
5. Definite article ending mismatch (article)
6. Gender ending mismatch (gender)
7. Different verb endings (conjugation)
8. Anything else (spelling)

Usage:
    from mkpractice.services.practice.feedback import analyze_answer, get_feedback_message

    analysis = analyze_answer("книга", "книгата")
    analysis.mistake_type                       # MistakeType.ARTICLE
    get_feedback_message(analysis.mistake_type, "mk")
"""

import re
import unicodedata
from typing import Optional

from mkpractice.enums.practice import MistakeType
from mkpractice.models.practice import AnswerAnalysis
from mkpractice.services.practice.normalizer import normalize_answer

# Suffixed definite article forms (-от/-та/-то/-те and proximal/distal variants)
ARTICLE_ENDINGS = ("от", "та", "то", "те", "ов", "ва", "во", "ве", "он", "на", "но", "не")

# (masculine, feminine, neuter) ending triples
GENDER_ENDINGS = (
    ("", "а", "о"),
    ("ен", "на", "но"),
    ("ски", "ска", "ско"),
)

VERB_ENDINGS = frozenset({"ам", "аш", "а", "ме", "те", "ат", "еш", "е", "иш", "и"})

FEEDBACK_MESSAGES: dict[MistakeType, dict[str, str]] = {
    MistakeType.DIACRITICS: {
        "en": "Almost! Check your diacritics and accents.",
        "mk": "Скоро! Провери ги дијакритичките знаци.",
    },
    MistakeType.CASE: {
        "en": "Watch your capitalization!",
        "mk": "Внимавај на големите букви!",
    },
    MistakeType.PUNCTUATION: {
        "en": "Check your punctuation.",
        "mk": "Провери ја интерпункцијата.",
    },
    MistakeType.SPELLING: {
        "en": "Check your spelling carefully.",
        "mk": "Провери го правописот.",
    },
    MistakeType.ARTICLE: {
        "en": "Check the definite article! Remember: -от (m), -та (f), -то (n)",
        "mk": "Провери го членот! Запомни: -от (м), -та (ж), -то (с)",
    },
    MistakeType.GENDER: {
        "en": "Check gender agreement! Feminine nouns often end in -а",
        "mk": "Провери го родот! Женските именки завршуваат на -а",
    },
    MistakeType.CONJUGATION: {
        "en": "Check your verb conjugation! Match the ending to the subject.",
        "mk": "Провери ја конјугацијата! Глаголот треба да се совпаѓа со субјектот.",
    },
}

FALLBACK_MESSAGES = {
    "en": "Not quite right.",
    "mk": "Не сосема точно.",
}


_WHITESPACE_RE = re.compile(r"\s+")


def _without_punctuation(text: str) -> str:
    """Drop Unicode punctuation (category P*) and collapse whitespace."""
    kept = "".join(ch for ch in text if not unicodedata.category(ch).startswith("P"))
    return _WHITESPACE_RE.sub(" ", kept).strip()


def _flexible(text: str) -> str:
    return normalize_answer(text, strip_diacritics=True)


def _is_article_mismatch(user: str, correct: str) -> bool:
    return any(correct.endswith(e) != user.endswith(e) for e in ARTICLE_ENDINGS)


def _is_gender_mismatch(user: str, correct: str) -> bool:
    for masc, fem, neut in GENDER_ENDINGS:
        if (
            (correct.endswith(fem) and user.endswith(masc))
            or (correct.endswith(masc) and user.endswith(fem))
            or (correct.endswith(neut) and user.endswith(masc))
            or (correct.endswith(neut) and user.endswith(fem))
        ):
            return True
    return False


def analyze_answer(user_answer: str, correct_answer: str) -> AnswerAnalysis:
    """
    Classify the difference between a learner answer and the expected one.

    Args:
        user_answer: What the learner typed
        correct_answer: Expected answer

    Returns:
        AnswerAnalysis with match flags, a hint and the mistake category
    """
    if user_answer == correct_answer:
        return AnswerAnalysis(exact_match=True, flexible_match=True)

    if _without_punctuation(user_answer) == _without_punctuation(correct_answer):
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=True,
            feedback_hint="Correct! (Check your punctuation)",
            mistake_type=MistakeType.PUNCTUATION,
        )

    normalized_user = _flexible(user_answer)
    normalized_correct = _flexible(correct_answer)

    if normalized_user == normalized_correct:
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=True,
            feedback_hint="Correct! (Diacritics or formatting slightly different)",
            mistake_type=MistakeType.DIACRITICS,
        )

    if user_answer.lower() == correct_answer.lower():
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=False,
            feedback_hint="Watch your capitalization!",
            mistake_type=MistakeType.CASE,
        )

    if _is_article_mismatch(normalized_user, normalized_correct):
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=False,
            feedback_hint="Check the definite article ending (-от, -та, -то, -те)",
            mistake_type=MistakeType.ARTICLE,
        )

    if _is_gender_mismatch(normalized_user, normalized_correct):
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=False,
            feedback_hint="Check the gender agreement! Feminine nouns often end in -а",
            mistake_type=MistakeType.GENDER,
        )

    user_ending = normalized_user[-2:]
    correct_ending = normalized_correct[-2:]
    if (
        user_ending in VERB_ENDINGS
        and correct_ending in VERB_ENDINGS
        and user_ending != correct_ending
    ):
        return AnswerAnalysis(
            exact_match=False,
            flexible_match=False,
            feedback_hint="Check your verb conjugation! Match the verb ending to the subject",
            mistake_type=MistakeType.CONJUGATION,
        )

    return AnswerAnalysis(
        exact_match=False,
        flexible_match=False,
        feedback_hint="Check your spelling carefully",
        mistake_type=MistakeType.SPELLING,
    )


def get_feedback_message(mistake_type: Optional[MistakeType], locale: str = "en") -> str:
    """Learner-facing message for a mistake type in English or Macedonian."""
    lang = "mk" if locale == "mk" else "en"
    if mistake_type is None:
        return FALLBACK_MESSAGES[lang]
    messages = FEEDBACK_MESSAGES.get(MistakeType(mistake_type))
    if messages is None:
        return FALLBACK_MESSAGES[lang]
    return messages[lang]
