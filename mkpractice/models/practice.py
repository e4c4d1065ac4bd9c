"""
Practice Session Models (Pydantic)

Schemas for the vocabulary practice flow including:
- Catalog items with alternates and cloze contexts
- Answer evaluation results and mistake analysis
- Card variants rendered by clients
- Session snapshots, progress summaries and difficulty presets
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from mkpractice.enums.practice import (
    MistakeType,
    PracticeDifficulty,
    PracticeDirection,
)
from mkpractice.models.base import FrozenWireModel, WireModel


# ===========================================
# Catalog Models
# ===========================================


class ClozeContext(FrozenWireModel):
    """
    Example sentence for cloze drills.

    The sentence contains the blank token (default "{{blank}}") where the
    practiced word belongs; translation is shown as a hint.
    """

    sentence: str
    translation: str = ""


class PracticeItem(FrozenWireModel):
    """
    Bilingual vocabulary or phrase entry.

    Loaded from a static catalog at session start and never modified during
    a session. Alternates list other acceptable answers in each language.
    """

    id: Optional[str] = None
    macedonian: str
    english: str
    macedonian_alternates: list[str] = Field(default_factory=list)
    english_alternates: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    context_mk: Optional[ClozeContext] = None
    context_en: Optional[ClozeContext] = None
    audio_url: Optional[str] = None
    difficulty: Optional[str] = None


# ===========================================
# Evaluation Models
# ===========================================


class PracticeEvaluationResult(FrozenWireModel):
    """
    Outcome of checking one typed answer.

    is_correct holds iff normalized_input equals normalized_expected or one
    of the normalized alternates. matched_alternate is only set when the
    primary answer did not match.
    """

    expected_answer: str
    normalized_expected: str
    normalized_input: str
    is_correct: bool
    matched_alternate: bool = False


class ClozeSplit(FrozenWireModel):
    """Sentence segments around each blank token."""

    segments: list[str]
    has_blank: bool


class AnswerAnalysis(FrozenWireModel):
    """Why an answer differs from the expected one, for learner hints."""

    exact_match: bool
    flexible_match: bool
    feedback_hint: Optional[str] = None
    mistake_type: Optional[MistakeType] = None


# ===========================================
# Card Models
# ===========================================


class PracticeCardBase(FrozenWireModel):
    """Fields shared by every card variant."""

    id: str
    prompt: str
    answer: str
    direction: PracticeDirection
    item: PracticeItem
    audio_url: Optional[str] = None


class TypingCard(PracticeCardBase):
    """Learner types the translation of the prompt."""

    kind: Literal["typing"] = "typing"


class ClozeCard(PracticeCardBase):
    """Learner fills the blank between cloze segments."""

    kind: Literal["cloze"] = "cloze"
    cloze_segments: list[str]
    translation: Optional[str] = None


class ListeningCard(PracticeCardBase):
    """Learner answers after hearing the audio prompt."""

    kind: Literal["listening"] = "listening"


class MultipleChoiceCard(PracticeCardBase):
    """
    Learner picks the answer among shuffled choices.

    choices always contains the answer, holds no duplicates and is capped
    at MULTIPLE_CHOICE_MAX_CHOICES entries.
    """

    kind: Literal["multipleChoice"] = "multipleChoice"
    choices: list[str]


PracticeCardContent = Annotated[
    Union[TypingCard, ClozeCard, ListeningCard, MultipleChoiceCard],
    Field(discriminator="kind"),
]


# ===========================================
# Session Models
# ===========================================


class DifficultyPreset(FrozenWireModel):
    """
    Session difficulty settings.

    timer_seconds is None when cards are untimed. xp_multiplier scales the
    XP awarded for every answer.
    """

    id: PracticeDifficulty
    label: str
    heart_penalty: int = Field(1, ge=0)
    timer_seconds: Optional[int] = Field(None, gt=0)
    xp_multiplier: float = Field(1.0, gt=0)


class SessionBonus(FrozenWireModel):
    """Reward unlocked by how a session was played (flawless run, long streak)."""

    id: str
    title: str
    description: str
    xp_multiplier: float = Field(..., gt=0)


class SessionBonusResult(WireModel):
    """Bonuses earned when a session completes and the extra XP they grant."""

    bonuses: list[SessionBonus] = Field(default_factory=list)
    multiplier: float = 1.0
    bonus_xp: int = Field(0, ge=0)


class SessionProgressSummary(WireModel):
    """Totals over the answers given so far in a session."""

    total_answered: int
    correct: int
    accuracy: int = Field(..., ge=0, le=100, description="Percent correct")


class PracticeSessionMeta(WireModel):
    """Descriptive metadata stored with a session snapshot."""

    session_length: int
    deck_size: int
    difficulty: str
    generated_at: datetime


class PracticeSessionSnapshot(WireModel):
    """Prompts chosen for a session plus their metadata."""

    prompts: list[PracticeItem]
    meta: PracticeSessionMeta
