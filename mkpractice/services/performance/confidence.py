"""
Topic Confidence Scoring

Converts a topic's attempt history into a 0-1 confidence score, a discrete
level and one actionable suggestion.

Confidence Calculation:
- Only the 10 most recent attempts are considered
- Recency weighting: the i-th most recent attempt weighs 0.9^i
- Time decay: past a 7-day grace period the score loses 5% per day,
  never dropping below 50% of its undecayed value
- Reliability: at least 3 recorded attempts in total (the full history,
  not just the considered window)

Suggestion priority:
1. Not reliable → keep practicing
2. More than 14 days since the last attempt → refresher
3. Otherwise → message for the level

All constants are read from settings (CONFIDENCE_*) at call time.

Usage:
    from mkpractice.services.performance.confidence import (
        calculate_confidence,
        is_weak_topic,
    )

    result = calculate_confidence(topic.attempts)
    if is_weak_topic(result):
        print(result.suggestion)
"""

import logging
import time
from typing import Optional, Sequence

from mkpractice.config.settings import settings
from mkpractice.enums.practice import ConfidenceLevel
from mkpractice.models.performance import ConfidenceResult, PerformanceEntry

logger = logging.getLogger(__name__)

MS_PER_DAY = 86_400_000

START_PRACTICING_SUGGESTION = "Start practicing to build your confidence!"
NOT_RELIABLE_SUGGESTION = "Keep practicing to get a clearer picture of your progress."
REFRESHER_SUGGESTION = "It's been a while. A quick refresher will help this topic stick."

LEVEL_SUGGESTIONS: dict[ConfidenceLevel, str] = {
    ConfidenceLevel.WEAK: "Review the basics of this topic and try a few focused exercises.",
    ConfidenceLevel.DEVELOPING: "You're making progress. Regular practice will build your confidence.",
    ConfidenceLevel.STRONG: "Great work! A little more practice and you'll master this.",
    ConfidenceLevel.MASTERED: "Excellent! You've mastered this topic.",
}


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def get_confidence_level(score: float) -> ConfidenceLevel:
    """
    Map a confidence score to its level.

    Args:
        score: Confidence score (0-1)

    Returns:
        MASTERED, STRONG, DEVELOPING or WEAK using inclusive lower bounds
    """
    if score >= settings.CONFIDENCE_MASTERED_THRESHOLD:
        return ConfidenceLevel.MASTERED
    elif score >= settings.CONFIDENCE_STRONG_THRESHOLD:
        return ConfidenceLevel.STRONG
    elif score >= settings.CONFIDENCE_DEVELOPING_THRESHOLD:
        return ConfidenceLevel.DEVELOPING

    return ConfidenceLevel.WEAK


def _weighted_accuracy(recent: Sequence[PerformanceEntry]) -> float:
    """Recency-weighted share of correct attempts (most recent first)."""
    decay = settings.CONFIDENCE_RECENCY_DECAY_FACTOR
    weighted_correct = 0.0
    total_weight = 0.0
    for i, attempt in enumerate(recent):
        weight = decay**i
        total_weight += weight
        if attempt.correct:
            weighted_correct += weight

    if total_weight == 0:
        return 0.0
    return weighted_correct / total_weight


def _time_decay_multiplier(days_since_last: float) -> float:
    """Multiplier applied once the grace period is over."""
    grace = settings.CONFIDENCE_TIME_DECAY_DAYS
    if days_since_last <= grace:
        return 1.0

    return max(
        settings.CONFIDENCE_TIME_DECAY_FLOOR,
        1 - (days_since_last - grace) * settings.CONFIDENCE_TIME_DECAY_PER_DAY,
    )


def _suggestion(level: ConfidenceLevel, is_reliable: bool, days_since_last: float) -> str:
    if not is_reliable:
        return NOT_RELIABLE_SUGGESTION
    if days_since_last > settings.CONFIDENCE_REFRESHER_AFTER_DAYS:
        return REFRESHER_SUGGESTION
    return LEVEL_SUGGESTIONS[level]


def calculate_confidence(
    attempts: Sequence[PerformanceEntry],
    current_time_ms: Optional[int] = None,
) -> ConfidenceResult:
    """
    Calculate the confidence signal for a topic.

    Args:
        attempts: Full recorded history for the topic, in any order
        current_time_ms: Reference time in epoch ms (defaults to now)

    Returns:
        ConfidenceResult with score, level, reliability and suggestion
    """
    if not attempts:
        return ConfidenceResult(
            score=0.0,
            level=ConfidenceLevel.WEAK,
            is_reliable=False,
            suggestion=START_PRACTICING_SUGGESTION,
        )

    reference_ms = now_ms() if current_time_ms is None else current_time_ms

    ordered = sorted(attempts, key=lambda a: a.timestamp, reverse=True)
    recent = ordered[: settings.CONFIDENCE_MAX_ATTEMPTS_TO_CONSIDER]

    score = _weighted_accuracy(recent)

    days_since_last = (reference_ms - recent[0].timestamp) / MS_PER_DAY
    score *= _time_decay_multiplier(days_since_last)
    score = max(0.0, min(1.0, score))

    level = get_confidence_level(score)
    is_reliable = len(attempts) >= settings.CONFIDENCE_MIN_ATTEMPTS_FOR_RELIABILITY

    logger.debug(
        f"Confidence: score={score:.3f}, level={level.value}, "
        f"reliable={is_reliable}, days_since_last={days_since_last:.1f}"
    )

    return ConfidenceResult(
        score=score,
        level=level,
        is_reliable=is_reliable,
        suggestion=_suggestion(level, is_reliable, days_since_last),
    )


def is_weak_topic(confidence: ConfidenceResult) -> bool:
    """
    Whether a topic should surface as a focus area.

    Unreliable topics are never flagged, whatever their score.
    """
    return confidence.is_reliable and confidence.score < settings.WEAK_TOPIC_THRESHOLD


def calculate_accuracy(attempts: Sequence[PerformanceEntry]) -> float:
    """Unweighted fraction of correct attempts; 0.0 for an empty history."""
    if not attempts:
        return 0.0
    return sum(1 for a in attempts if a.correct) / len(attempts)
