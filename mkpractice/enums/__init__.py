"""
Centralized enum definitions for the practice engine.

Usage:
    from mkpractice.enums import PracticeDirection, ConfidenceLevel
"""

from mkpractice.enums.practice import (
    ConfidenceLevel,
    GrammarCategory,
    GrammarLevel,
    MistakeType,
    PracticeCardKind,
    PracticeDifficulty,
    PracticeDirection,
    PracticeDrillMode,
)

__all__ = [
    "ConfidenceLevel",
    "GrammarCategory",
    "GrammarLevel",
    "MistakeType",
    "PracticeCardKind",
    "PracticeDifficulty",
    "PracticeDirection",
    "PracticeDrillMode",
]
