"""
Pydantic models for the practice engine.

Usage:
    from mkpractice.models import PracticeItem, GrammarPerformanceData
"""

from mkpractice.models.base import FrozenWireModel, WireModel
from mkpractice.models.performance import (
    ConfidenceResult,
    GrammarPerformanceData,
    GrammarTopic,
    PerformanceEntry,
    PerformanceSummary,
    TopicPerformance,
    WeakTopic,
)
from mkpractice.models.practice import (
    AnswerAnalysis,
    ClozeCard,
    ClozeContext,
    ClozeSplit,
    DifficultyPreset,
    ListeningCard,
    MultipleChoiceCard,
    PracticeCardBase,
    PracticeCardContent,
    PracticeEvaluationResult,
    PracticeItem,
    PracticeSessionMeta,
    PracticeSessionSnapshot,
    SessionBonus,
    SessionBonusResult,
    SessionProgressSummary,
    TypingCard,
)

__all__ = [
    # Base
    "FrozenWireModel",
    "WireModel",
    # Practice
    "AnswerAnalysis",
    "ClozeCard",
    "ClozeContext",
    "ClozeSplit",
    "DifficultyPreset",
    "ListeningCard",
    "MultipleChoiceCard",
    "PracticeCardBase",
    "PracticeCardContent",
    "PracticeEvaluationResult",
    "PracticeItem",
    "PracticeSessionMeta",
    "PracticeSessionSnapshot",
    "SessionBonus",
    "SessionBonusResult",
    "SessionProgressSummary",
    "TypingCard",
    # Performance
    "ConfidenceResult",
    "GrammarPerformanceData",
    "GrammarTopic",
    "PerformanceEntry",
    "PerformanceSummary",
    "TopicPerformance",
    "WeakTopic",
]
