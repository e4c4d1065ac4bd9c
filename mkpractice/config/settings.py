"""
Practice Engine Configuration

Type-safe configuration for the practice session engine and the topic
confidence scorer, loaded with Pydantic settings. Every tunable constant
lives here so hosts can override it through the environment.

All settings can be overridden via environment variables with PRACTICE_ prefix.

Usage:
    from mkpractice.config import settings

    token = settings.CLOZE_BLANK_TOKEN
    window = settings.CONFIDENCE_MAX_ATTEMPTS_TO_CONSIDER
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).parent.parent
DATA_DIR = PACKAGE_ROOT / "data"


class PracticeSettings(BaseSettings):
    """
    Practice engine configuration.

    Attributes are grouped by category:
    - Session flow (targets, hearts, card building)
    - Confidence scoring (window, decay, thresholds)
    - Performance history storage
    - Data file locations
    """

    # =========================================================================
    # SESSION FLOW
    # =========================================================================

    # Placeholder marking the blank in cloze context sentences
    CLOZE_BLANK_TOKEN: str = "{{blank}}"

    # Correct answers needed to complete a quick practice session
    SESSION_TARGET: int = 5

    # Hearts available at the start of a session
    INITIAL_HEARTS: int = 5

    # XP before the difficulty multiplier (wrong answers still earn a little)
    SESSION_XP_CORRECT: int = 10
    SESSION_XP_INCORRECT: int = 4
    SESSION_XP_INCORRECT_MIN: int = 2

    # Consecutive correct answers needed for the streak bonus
    SESSION_STREAK_BONUS_THRESHOLD: int = 10

    # Default number of prompts recorded in a session snapshot
    SESSION_DEFAULT_LENGTH: int = 10

    # Upper bound on multiple choice options (answer included)
    MULTIPLE_CHOICE_MAX_CHOICES: int = 4

    # =========================================================================
    # CONFIDENCE SCORING
    # =========================================================================

    # Only the most recent attempts feed the weighted score
    CONFIDENCE_MAX_ATTEMPTS_TO_CONSIDER: int = 10

    # Weight multiplier per step back in history (0.9 = each older attempt ~10% less)
    CONFIDENCE_RECENCY_DECAY_FACTOR: float = 0.9

    # Grace period before time decay starts (days)
    CONFIDENCE_TIME_DECAY_DAYS: float = 7.0

    # Score lost per day past the grace period
    CONFIDENCE_TIME_DECAY_PER_DAY: float = 0.05

    # Time decay never takes the score below this fraction
    CONFIDENCE_TIME_DECAY_FLOOR: float = 0.5

    # Total recorded attempts before a score counts as reliable
    CONFIDENCE_MIN_ATTEMPTS_FOR_RELIABILITY: int = 3

    # Days without practice before suggesting a refresher
    CONFIDENCE_REFRESHER_AFTER_DAYS: float = 14.0

    # Level thresholds (inclusive lower bounds)
    CONFIDENCE_MASTERED_THRESHOLD: float = 0.85
    CONFIDENCE_STRONG_THRESHOLD: float = 0.65
    CONFIDENCE_DEVELOPING_THRESHOLD: float = 0.40

    # Reliable topics below this score surface as focus areas
    WEAK_TOPIC_THRESHOLD: float = 0.6
    WEAK_TOPICS_LIMIT: int = 3

    # =========================================================================
    # PERFORMANCE HISTORY
    # =========================================================================

    # Attempts kept per topic (oldest evicted first)
    PERFORMANCE_MAX_STORED_ATTEMPTS: int = 50

    # JSON document used by PerformanceStore when no path is given
    PERFORMANCE_STORE_PATH: str = "mk-grammar-performance.json"

    # =========================================================================
    # DATA FILES
    # =========================================================================

    # None means the catalog bundled with the package
    GRAMMAR_TOPICS_PATH: Optional[str] = None
    PRACTICE_CATALOG_PATH: Optional[str] = None

    class Config:
        env_prefix = "PRACTICE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> PracticeSettings:
    """Get cached practice settings instance."""
    return PracticeSettings()


settings = get_settings()
