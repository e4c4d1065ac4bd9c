"""
Practice Engine Enums

Defines enums for practice directions, drill modes, card kinds, difficulty
presets, confidence levels, and answer mistake categories.
"""

from enum import Enum


class PracticeDirection(str, Enum):
    """
    Which language is shown and which is answered.

    - MK_TO_EN: Macedonian prompt, English answer
    - EN_TO_MK: English prompt, Macedonian answer
    """

    MK_TO_EN = "mkToEn"
    EN_TO_MK = "enToMk"


class PracticeDrillMode(str, Enum):
    """
    How prompts are filtered for a session.

    Cloze drills only keep items with a context sentence containing a blank.
    """

    FLASHCARD = "flashcard"  # Whole word or phrase
    CLOZE = "cloze"  # Fill the blank in a context sentence


class PracticeCardKind(str, Enum):
    """Card variants the deck builder can materialize."""

    TYPING = "typing"
    CLOZE = "cloze"
    LISTENING = "listening"
    MULTIPLE_CHOICE = "multipleChoice"


class PracticeDifficulty(str, Enum):
    """
    Session difficulty presets.

    Presets control the heart penalty for a wrong answer and the optional
    per-card countdown timer.
    """

    CASUAL = "casual"  # No timer, gentle penalty
    FOCUS = "focus"  # Relaxed timer
    BLITZ = "blitz"  # Short timer, double penalty


class ConfidenceLevel(str, Enum):
    """
    Discrete confidence bands for a grammar topic.

    Thresholds (inclusive lower bound, configurable in settings):
    - score >= 0.85: MASTERED
    - score >= 0.65: STRONG
    - score >= 0.40: DEVELOPING
    - else: WEAK
    """

    WEAK = "weak"
    DEVELOPING = "developing"
    STRONG = "strong"
    MASTERED = "mastered"


class MistakeType(str, Enum):
    """Categories of answer mistakes used for learner feedback."""

    DIACRITICS = "diacritics"
    CASE = "case"
    PUNCTUATION = "punctuation"
    SPELLING = "spelling"
    ARTICLE = "article"
    GENDER = "gender"
    CONJUGATION = "conjugation"


class GrammarLevel(str, Enum):
    """CEFR levels used to group grammar topics."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"


class GrammarCategory(str, Enum):
    """Part-of-speech grouping for grammar topics."""

    VERBS = "verbs"
    NOUNS = "nouns"
    PRONOUNS = "pronouns"
    ADJECTIVES = "adjectives"
    ADVERBS = "adverbs"
    SYNTAX = "syntax"
    OTHER = "other"
