"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests.
"""

import os
from pathlib import Path
from typing import Callable, Generator, Iterable

import pytest
from dotenv import load_dotenv

from mkpractice.config.settings import PracticeSettings, settings
from mkpractice.models import ClozeContext, PerformanceEntry, PracticeItem

# Load .env file from project root BEFORE any fixtures run
_project_root = Path(__file__).parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


# ============================================================================
# Environment Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    Run every test against the default practice configuration.

    PRACTICE_* values from the environment or a .env file are removed and
    the shared settings instance is reset to its field defaults, so a
    developer's local overrides never change test outcomes.
    """
    original_env = os.environ.copy()
    original_values = settings.model_dump()

    for key in list(os.environ):
        if key.startswith("PRACTICE_"):
            del os.environ[key]

    for name, field in PracticeSettings.model_fields.items():
        setattr(settings, name, field.default)

    yield

    for name, value in original_values.items():
        setattr(settings, name, value)

    os.environ.clear()
    os.environ.update(original_env)


# ============================================================================
# Random Sources
# ============================================================================


def sequence_source(values: Iterable[float]) -> Callable[[], float]:
    """Random source that replays the given values, then repeats the last one."""
    values = list(values)
    state = {"index": 0}

    def draw() -> float:
        index = min(state["index"], len(values) - 1)
        state["index"] += 1
        return values[index]

    return draw


@pytest.fixture
def make_random_source() -> Callable[[Iterable[float]], Callable[[], float]]:
    """Factory for deterministic random sources."""
    return sequence_source


# ============================================================================
# Sample Practice Data
# ============================================================================


@pytest.fixture
def hello_item() -> PracticeItem:
    """Greeting item with alternates and cloze contexts in both languages."""
    return PracticeItem(
        id="hello",
        macedonian="Здраво",
        english="Hello",
        macedonian_alternates=["Здрово"],
        english_alternates=["Hi", "Hey there"],
        category="greetings",
        context_en=ClozeContext(
            sentence="I say {{blank}} every morning.",
            translation="Секое утро велам здраво.",
        ),
        context_mk=ClozeContext(
            sentence="Секое утро велам {{blank}}.",
            translation="I say hello every morning.",
        ),
    )


@pytest.fixture
def sample_items(hello_item: PracticeItem) -> list[PracticeItem]:
    """Small catalog spanning three categories."""
    return [
        hello_item,
        PracticeItem(
            id="water",
            macedonian="Вода",
            english="Water",
            category="food",
            context_mk=ClozeContext(sentence="Може ли чаша {{blank}}?"),
        ),
        PracticeItem(
            id="coffee",
            macedonian="Кафе",
            english="Coffee",
            category="food",
            context_en=ClozeContext(sentence="I drink {{blank}} after lunch."),
        ),
        PracticeItem(id="dog", macedonian="Куче", english="Dog", category="animals"),
        PracticeItem(id="misc", macedonian="Да", english="Yes"),
    ]


# ============================================================================
# Sample Performance Data
# ============================================================================

NOW_MS = 1_700_000_000_000
DAY_MS = 86_400_000


def make_attempts(results: Iterable[bool], newest_ms: int = NOW_MS) -> list[PerformanceEntry]:
    """
    Build attempts from newest to oldest, one minute apart.

    results[0] is the most recent attempt.
    """
    return [
        PerformanceEntry(correct=correct, timestamp=newest_ms - i * 60_000)
        for i, correct in enumerate(results)
    ]
