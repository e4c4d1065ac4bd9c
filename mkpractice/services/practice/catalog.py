"""
Practice Catalog Loader

Loads the vocabulary catalog used for quick practice sessions. The bundled
catalog lives at mkpractice/data/practice_vocabulary.json; hosts can point
PRACTICE_PRACTICE_CATALOG_PATH at their own export.

Catalog format:
    A JSON array of items using the camelCase wire names:

    ```json
    [
      {
        "macedonian": "Здраво",
        "english": "Hello",
        "englishAlternates": ["Hi"],
        "category": "greetings",
        "contextEn": {"sentence": "I say {{blank}} every morning.",
                      "translation": "Секое утро велам здраво."}
      }
    ]
    ```

    Items without an id get "prompt-{n}" (1-based position) so card ids stay
    stable between loads.

Usage:
    from mkpractice.services.practice.catalog import load_practice_catalog

    items = load_practice_catalog()
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from mkpractice.config.settings import DATA_DIR, settings
from mkpractice.errors import CatalogError
from mkpractice.models.practice import PracticeItem

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = DATA_DIR / "practice_vocabulary.json"


def _resolve_path(path: Optional[Union[str, Path]]) -> Path:
    if path is not None:
        return Path(path)
    if settings.PRACTICE_CATALOG_PATH:
        return Path(settings.PRACTICE_CATALOG_PATH)
    return DEFAULT_CATALOG_PATH


def parse_practice_catalog(raw_items: list) -> list[PracticeItem]:
    """
    Validate raw catalog entries and assign fallback ids.

    Args:
        raw_items: Decoded JSON array

    Returns:
        Validated PracticeItem list in catalog order

    Raises:
        CatalogError: If the payload is not a list or an entry is invalid
    """
    if not isinstance(raw_items, list):
        raise CatalogError(
            "Practice catalog must be a JSON array",
            details={"type": type(raw_items).__name__},
        )

    items = []
    for index, raw in enumerate(raw_items):
        try:
            item = PracticeItem.model_validate(raw)
        except ValidationError as e:
            raise CatalogError(
                f"Invalid practice item at position {index}",
                details={"errors": e.errors(include_url=False)},
            ) from e

        if not item.id:
            item = item.model_copy(update={"id": f"prompt-{index + 1}"})
        items.append(item)

    return items


def load_practice_catalog(path: Optional[Union[str, Path]] = None) -> list[PracticeItem]:
    """
    Load and validate a practice catalog file.

    Args:
        path: JSON file to read (defaults to settings or the bundled catalog)

    Returns:
        Validated PracticeItem list

    Raises:
        CatalogError: If the file is missing, not valid JSON, or has invalid items
    """
    catalog_path = _resolve_path(path)

    try:
        with open(catalog_path, encoding="utf-8") as f:
            raw_items = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(
            f"Practice catalog not found: {catalog_path}",
            details={"path": str(catalog_path)},
        ) from e
    except json.JSONDecodeError as e:
        raise CatalogError(
            f"Practice catalog is not valid JSON: {e}",
            details={"path": str(catalog_path)},
        ) from e

    items = parse_practice_catalog(raw_items)
    logger.info(f"Loaded {len(items)} practice items from {catalog_path}")
    return items


@lru_cache()
def _default_catalog() -> tuple[PracticeItem, ...]:
    return tuple(load_practice_catalog())


def get_local_practice_prompts(limit: Optional[int] = None) -> list[PracticeItem]:
    """
    Prompts from the default catalog, loaded once per process.

    Args:
        limit: Return only the first N prompts (None or 0 for all)

    Returns:
        Catalog prompts
    """
    prompts = list(_default_catalog())
    if not limit:
        return prompts
    return prompts[:limit]
