"""
Practice Session Services

Pure helpers behind the quick practice flow.

Modules:
- normalizer: Tolerant answer normalization
- cloze: Blank-token sentence splitting
- session: Prompt filtering, answer evaluation, progress and next-card selection
- cards: Card variants, decks and deck fingerprints
- feedback: Mistake analysis and learner hints
- catalog: Practice vocabulary loading

Usage:
    from mkpractice.services.practice import (
        evaluate_practice_answer,
        build_practice_deck,
        select_next_practice_index,
    )
"""

from mkpractice.services.practice.cards import (
    build_card_id,
    build_deck_fingerprint,
    build_multiple_choice_options,
    build_practice_card,
    build_practice_deck,
    shuffle,
)
from mkpractice.services.practice.catalog import (
    get_local_practice_prompts,
    load_practice_catalog,
    parse_practice_catalog,
)
from mkpractice.services.practice.cloze import has_cloze_blank, split_cloze_sentence
from mkpractice.services.practice.feedback import analyze_answer, get_feedback_message
from mkpractice.services.practice.normalizer import fold_diacritics, normalize_answer
from mkpractice.services.practice.session import (
    ALL_CATEGORIES,
    PERFECT_RUN_BONUS,
    PRACTICE_DIFFICULTIES,
    STREAK_BONUS,
    SessionTally,
    apply_result,
    calculate_accuracy,
    calculate_answer_xp,
    calculate_session_progress,
    create_session_snapshot,
    evaluate_practice_answer,
    finalize_session_bonuses,
    get_alternate_answers,
    get_cloze_context,
    get_difficulty_preset,
    get_expected_answer,
    get_practice_categories,
    get_practice_prompts_for_session,
    new_tally,
    round_half_up,
    select_next_practice_index,
    summarize_session_progress,
)

__all__ = [
    # Normalization
    "fold_diacritics",
    "normalize_answer",
    # Cloze
    "has_cloze_blank",
    "split_cloze_sentence",
    # Session
    "ALL_CATEGORIES",
    "PERFECT_RUN_BONUS",
    "PRACTICE_DIFFICULTIES",
    "STREAK_BONUS",
    "SessionTally",
    "apply_result",
    "calculate_accuracy",
    "calculate_answer_xp",
    "calculate_session_progress",
    "create_session_snapshot",
    "evaluate_practice_answer",
    "finalize_session_bonuses",
    "get_alternate_answers",
    "get_cloze_context",
    "get_difficulty_preset",
    "get_expected_answer",
    "get_practice_categories",
    "get_practice_prompts_for_session",
    "new_tally",
    "round_half_up",
    "select_next_practice_index",
    "summarize_session_progress",
    # Cards
    "build_card_id",
    "build_deck_fingerprint",
    "build_multiple_choice_options",
    "build_practice_card",
    "build_practice_deck",
    "shuffle",
    # Feedback
    "analyze_answer",
    "get_feedback_message",
    # Catalog
    "get_local_practice_prompts",
    "load_practice_catalog",
    "parse_practice_catalog",
]
