"""
Grammar Performance Services

Confidence scoring and history tracking for grammar topics.

Modules:
- confidence: Recency-weighted, time-decayed confidence scores
- tracker: Recording, merging and summarizing the performance document
- topics: Grammar topic catalog
- storage: JSON file persistence for the performance document

Usage:
    from mkpractice.services.performance import (
        calculate_confidence,
        record_attempt,
        get_weak_topics,
    )
"""

from mkpractice.services.performance.confidence import (
    calculate_accuracy,
    calculate_confidence,
    get_confidence_level,
    is_weak_topic,
)
from mkpractice.services.performance.storage import PerformanceStore
from mkpractice.services.performance.topics import (
    get_topic,
    get_topics_by_category,
    get_topics_by_level,
    load_grammar_topics,
)
from mkpractice.services.performance.tracker import (
    empty_performance_data,
    get_performance_summary,
    get_topic_confidence,
    get_weak_topics,
    merge_performance_data,
    record_attempt,
)

__all__ = [
    # Confidence
    "calculate_accuracy",
    "calculate_confidence",
    "get_confidence_level",
    "is_weak_topic",
    # Tracker
    "empty_performance_data",
    "get_performance_summary",
    "get_topic_confidence",
    "get_weak_topics",
    "merge_performance_data",
    "record_attempt",
    # Topics
    "get_topic",
    "get_topics_by_category",
    "get_topics_by_level",
    "load_grammar_topics",
    # Storage
    "PerformanceStore",
]
