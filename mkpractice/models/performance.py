"""
Grammar Performance Models (Pydantic)

Schemas for per-topic attempt history and the confidence signal derived
from it.

ARCHITECTURE NOTE:
    GrammarPerformanceData is the document a host persists (device storage,
    REST sync payload, database row). ConfidenceResult, WeakTopic and
    PerformanceSummary are derived on demand and never stored.

    Data flows: stored JSON → GrammarPerformanceData → tracker/confidence
    → derived models → client
"""

from pydantic import Field

from mkpractice.enums.practice import ConfidenceLevel, GrammarCategory, GrammarLevel
from mkpractice.models.base import FrozenWireModel, WireModel


class PerformanceEntry(FrozenWireModel):
    """A single graded attempt. timestamp is epoch milliseconds."""

    correct: bool
    timestamp: int


class TopicPerformance(WireModel):
    """
    Attempt history and counters for one grammar topic.

    attempts holds at most PERFORMANCE_MAX_STORED_ATTEMPTS entries. The
    counters keep counting past that cap until a merge recomputes them from
    the retained attempts.
    """

    topic_id: str
    attempts: list[PerformanceEntry] = Field(default_factory=list)
    total_attempts: int = Field(0, ge=0)
    correct_attempts: int = Field(0, ge=0)
    last_attempt_date: str = Field(..., description="ISO date of the last attempt")


class GrammarPerformanceData(WireModel):
    """Top-level performance document keyed by topic id."""

    topics: dict[str, TopicPerformance] = Field(default_factory=dict)
    last_updated: str = Field(..., description="ISO timestamp of the last change")


class ConfidenceResult(FrozenWireModel):
    """
    Decayed, recency-weighted confidence for a topic.

    is_reliable is False until the topic has enough recorded attempts; the
    suggestion is a single learner-facing sentence.
    """

    score: float = Field(..., ge=0.0, le=1.0)
    level: ConfidenceLevel
    is_reliable: bool
    suggestion: str


class GrammarTopic(FrozenWireModel):
    """Catalog entry describing a grammar topic."""

    id: str
    name_en: str
    name_mk: str
    description: str = ""
    level: GrammarLevel
    category: GrammarCategory


class WeakTopic(WireModel):
    """A reliable low-confidence topic surfaced as a focus area."""

    topic_id: str
    name_en: str
    name_mk: str
    level: GrammarLevel
    confidence: ConfidenceResult
    total_attempts: int
    correct_attempts: int


class PerformanceSummary(WireModel):
    """Counts of reliable topics per confidence band."""

    total_topics_practiced: int = 0
    weak_count: int = 0
    strong_count: int = 0
    mastered_count: int = 0
