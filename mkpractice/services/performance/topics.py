"""
Grammar Topic Catalog Loader

Loads grammar topics from mkpractice/data/grammar_topics.yaml (or the file
named by PRACTICE_GRAMMAR_TOPICS_PATH).

YAML Configuration Structure:
    ```yaml
    topics:
      - id: definite-article        # Stable key used in performance data
        name_en: Definite Article
        name_mk: Определен член
        description: The suffixed definite article (-от, -та, -то)
        level: A1                   # CEFR level
        category: nouns             # verbs, nouns, pronouns, adjectives,
                                    # adverbs, syntax, other
    ```

Usage:
    from mkpractice.services.performance.topics import get_topic, get_topics_by_level

    topic = get_topic("definite-article")
    a1_topics = get_topics_by_level(GrammarLevel.A1)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from mkpractice.config.settings import DATA_DIR, settings
from mkpractice.enums.practice import GrammarCategory, GrammarLevel
from mkpractice.errors import CatalogError
from mkpractice.models.performance import GrammarTopic

logger = logging.getLogger(__name__)

DEFAULT_TOPICS_PATH = DATA_DIR / "grammar_topics.yaml"


def _read_topics(path: Path) -> dict[str, GrammarTopic]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise CatalogError(
            f"Grammar topic catalog not found: {path}", details={"path": str(path)}
        ) from e
    except yaml.YAMLError as e:
        raise CatalogError(
            f"Grammar topic catalog is not valid YAML: {e}", details={"path": str(path)}
        ) from e

    entries = raw.get("topics") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise CatalogError(
            "Grammar topic catalog must define a 'topics' list",
            details={"path": str(path)},
        )

    topics: dict[str, GrammarTopic] = {}
    for entry in entries:
        try:
            topic = GrammarTopic.model_validate(entry)
        except ValidationError as e:
            raise CatalogError(
                "Invalid grammar topic entry",
                details={"path": str(path), "errors": e.errors(include_url=False)},
            ) from e

        if topic.id in topics:
            logger.warning(f"Duplicate grammar topic '{topic.id}' in {path}, keeping last")
        topics[topic.id] = topic

    logger.info(f"Loaded {len(topics)} grammar topics from {path}")
    return topics


@lru_cache()
def _load_cached(path: str) -> dict[str, GrammarTopic]:
    return _read_topics(Path(path))


def load_grammar_topics(path: Optional[Union[str, Path]] = None) -> dict[str, GrammarTopic]:
    """
    Load the grammar topic catalog keyed by topic id.

    Results are cached per path for the life of the process.

    Args:
        path: YAML file to read (defaults to settings or the bundled catalog)

    Returns:
        Mapping of topic id to GrammarTopic, in file order

    Raises:
        CatalogError: If the file is missing, unparseable or has invalid entries
    """
    if path is None:
        path = settings.GRAMMAR_TOPICS_PATH or DEFAULT_TOPICS_PATH
    return dict(_load_cached(str(path)))


def get_topic(topic_id: str) -> Optional[GrammarTopic]:
    """Look up a topic by id; None if it is not in the catalog."""
    return load_grammar_topics().get(topic_id)


def get_topics_by_level(level: Union[GrammarLevel, str]) -> list[GrammarTopic]:
    """Topics for a CEFR level, in catalog order."""
    level = GrammarLevel(level)
    return [t for t in load_grammar_topics().values() if t.level == level]


def get_topics_by_category(category: Union[GrammarCategory, str]) -> list[GrammarTopic]:
    """Topics in a category, in catalog order."""
    category = GrammarCategory(category)
    return [t for t in load_grammar_topics().values() if t.category == category]
