"""
Grammar Performance Tracker

Pure operations over the GrammarPerformanceData document: recording
attempts, merging local and server copies, and deriving per-topic
confidence, focus areas and summary counts.

The host owns persistence (see storage.PerformanceStore for a JSON file
implementation). Every mutating operation returns a new document and leaves
its input untouched.

Merge rules (local + remote):
- Topics on one side only are copied through unchanged
- Shared topics: union of attempts, deduplicated by timestamp, sorted most
  recent first, truncated to PERFORMANCE_MAX_STORED_ATTEMPTS
- Counters are recomputed from the merged attempts
- last_attempt_date is the later of the two dates

Usage:
    from mkpractice.services.performance.tracker import (
        empty_performance_data,
        record_attempt,
        get_weak_topics,
    )

    data = empty_performance_data()
    data = record_attempt(data, "definite-article", correct=False)
    focus = get_weak_topics(data)
"""

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

from mkpractice.config.settings import settings
from mkpractice.enums.practice import ConfidenceLevel
from mkpractice.models.performance import (
    ConfidenceResult,
    GrammarPerformanceData,
    GrammarTopic,
    PerformanceEntry,
    PerformanceSummary,
    TopicPerformance,
    WeakTopic,
)
from mkpractice.services.performance.confidence import calculate_confidence, is_weak_topic
from mkpractice.services.performance.topics import load_grammar_topics

logger = logging.getLogger(__name__)


def _utc_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def iso_timestamp(now: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _to_epoch_ms(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def _evict_oldest(attempts: list[PerformanceEntry], cap: int) -> list[PerformanceEntry]:
    """Drop the oldest attempts beyond cap, keeping the remaining order."""
    if len(attempts) <= cap:
        return attempts

    newest = sorted(range(len(attempts)), key=lambda i: attempts[i].timestamp, reverse=True)
    keep = set(newest[:cap])
    return [attempt for i, attempt in enumerate(attempts) if i in keep]


def empty_performance_data(now: Optional[datetime] = None) -> GrammarPerformanceData:
    """Create an empty performance document."""
    return GrammarPerformanceData(topics={}, last_updated=iso_timestamp(_utc_now(now)))


def record_attempt(
    data: GrammarPerformanceData,
    topic_id: str,
    correct: bool,
    now: Optional[datetime] = None,
) -> GrammarPerformanceData:
    """
    Record a graded attempt for a topic.

    Creates the topic record on first use, appends the attempt, evicts the
    oldest attempts beyond the storage cap and bumps the counters.

    Args:
        data: Current performance document
        topic_id: Grammar topic id
        correct: Whether the answer was correct
        now: Attempt time (defaults to now, UTC)

    Returns:
        Updated copy of the document
    """
    moment = _utc_now(now)
    today = moment.date().isoformat()

    updated = data.model_copy(deep=True)
    topic = updated.topics.get(topic_id)
    if topic is None:
        topic = TopicPerformance(topic_id=topic_id, last_attempt_date=today)
        updated.topics[topic_id] = topic

    topic.attempts.append(PerformanceEntry(correct=correct, timestamp=_to_epoch_ms(moment)))
    topic.attempts = _evict_oldest(topic.attempts, settings.PERFORMANCE_MAX_STORED_ATTEMPTS)

    topic.total_attempts += 1
    if correct:
        topic.correct_attempts += 1
    topic.last_attempt_date = today

    updated.last_updated = iso_timestamp(moment)

    logger.debug(
        f"Recorded {'correct' if correct else 'incorrect'} attempt for {topic_id} "
        f"({topic.correct_attempts}/{topic.total_attempts})"
    )
    return updated


def _merge_topic(local: TopicPerformance, remote: TopicPerformance) -> TopicPerformance:
    unique: dict[int, PerformanceEntry] = {}
    for attempt in [*local.attempts, *remote.attempts]:
        unique[attempt.timestamp] = attempt

    attempts = sorted(unique.values(), key=lambda a: a.timestamp, reverse=True)
    attempts = attempts[: settings.PERFORMANCE_MAX_STORED_ATTEMPTS]

    return TopicPerformance(
        topic_id=local.topic_id,
        attempts=attempts,
        total_attempts=len(attempts),
        correct_attempts=sum(1 for a in attempts if a.correct),
        last_attempt_date=max(local.last_attempt_date, remote.last_attempt_date),
    )


def merge_performance_data(
    local: GrammarPerformanceData,
    remote: GrammarPerformanceData,
    now: Optional[datetime] = None,
) -> GrammarPerformanceData:
    """
    Merge a server copy into the local performance document.

    The merge is order-independent and idempotent on the attempt sets, so
    repeated syncs converge.

    Args:
        local: Document held on this device
        remote: Document received from the server
        now: Merge time used for last_updated (defaults to now, UTC)

    Returns:
        Merged document
    """
    merged = local.model_copy(deep=True)

    for topic_id, remote_topic in remote.topics.items():
        local_topic = merged.topics.get(topic_id)
        if local_topic is None:
            merged.topics[topic_id] = remote_topic.model_copy(deep=True)
        else:
            merged.topics[topic_id] = _merge_topic(local_topic, remote_topic)

    merged.last_updated = iso_timestamp(_utc_now(now))

    logger.info(
        f"Merged performance data: {len(local.topics)} local + "
        f"{len(remote.topics)} remote -> {len(merged.topics)} topics"
    )
    return merged


def get_topic_confidence(
    data: GrammarPerformanceData,
    topic_id: str,
    current_time_ms: Optional[int] = None,
) -> ConfidenceResult:
    """Confidence for one topic; unpracticed topics get the empty-history result."""
    topic = data.topics.get(topic_id)
    if topic is None:
        return calculate_confidence([], current_time_ms)
    return calculate_confidence(topic.attempts, current_time_ms)


def get_weak_topics(
    data: GrammarPerformanceData,
    limit: Optional[int] = None,
    topics: Optional[Mapping[str, GrammarTopic]] = None,
    current_time_ms: Optional[int] = None,
) -> list[WeakTopic]:
    """
    Reliable low-confidence topics, weakest first.

    Args:
        data: Performance document
        limit: Maximum topics to return (defaults to settings.WEAK_TOPICS_LIMIT)
        topics: Topic catalog used for display names (defaults to the bundled one)
        current_time_ms: Reference time for decay (defaults to now)

    Returns:
        WeakTopic list sorted by ascending confidence score
    """
    if limit is None:
        limit = settings.WEAK_TOPICS_LIMIT
    catalog = topics if topics is not None else load_grammar_topics()

    weak: list[WeakTopic] = []
    for topic_id, performance in data.topics.items():
        confidence = calculate_confidence(performance.attempts, current_time_ms)
        if not is_weak_topic(confidence):
            continue

        info = catalog.get(topic_id)
        if info is None:
            logger.warning(f"Skipping weak topic '{topic_id}': not in topic catalog")
            continue

        weak.append(
            WeakTopic(
                topic_id=topic_id,
                name_en=info.name_en,
                name_mk=info.name_mk,
                level=info.level,
                confidence=confidence,
                total_attempts=performance.total_attempts,
                correct_attempts=performance.correct_attempts,
            )
        )

    weak.sort(key=lambda w: w.confidence.score)
    return weak[:limit]


def get_performance_summary(
    data: GrammarPerformanceData,
    current_time_ms: Optional[int] = None,
) -> PerformanceSummary:
    """
    Count reliable topics per confidence band.

    Weak and developing topics both count towards weak_count; unreliable
    topics only count towards total_topics_practiced.
    """
    summary = PerformanceSummary(total_topics_practiced=len(data.topics))

    for performance in data.topics.values():
        confidence = calculate_confidence(performance.attempts, current_time_ms)
        if not confidence.is_reliable:
            continue

        if confidence.level in (ConfidenceLevel.WEAK, ConfidenceLevel.DEVELOPING):
            summary.weak_count += 1
        elif confidence.level == ConfidenceLevel.STRONG:
            summary.strong_count += 1
        elif confidence.level == ConfidenceLevel.MASTERED:
            summary.mastered_count += 1

    return summary

