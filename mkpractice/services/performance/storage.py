"""
Performance Document Storage

JSON file persistence for GrammarPerformanceData. Reads fail soft (a
missing or corrupt file yields an empty document) so a bad write never
locks a learner out of practice; writes go to a temporary file in the same
directory and are swapped in with os.replace.

Usage:
    from mkpractice.services.performance.storage import PerformanceStore

    store = PerformanceStore()
    data = store.record("definite-article", correct=True)
    data = store.import_remote(server_copy)
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from mkpractice.config.settings import settings
from mkpractice.errors import StorageError
from mkpractice.models.performance import GrammarPerformanceData
from mkpractice.services.performance.tracker import (
    empty_performance_data,
    merge_performance_data,
    record_attempt,
)

logger = logging.getLogger(__name__)


class PerformanceStore:
    """
    File-backed store for one learner's performance document.

    Each operation reads the file fresh; nothing is cached between calls.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize the store.

        Args:
            path: JSON file location (defaults to settings.PERFORMANCE_STORE_PATH)
        """
        self.path = Path(path if path is not None else settings.PERFORMANCE_STORE_PATH)

    def load(self) -> GrammarPerformanceData:
        """Read the document; returns an empty one if it is missing or unreadable."""
        if not self.path.exists():
            return empty_performance_data()

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return GrammarPerformanceData.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Discarding unreadable performance data at {self.path}: {e}")
            return empty_performance_data()

    def save(self, data: GrammarPerformanceData) -> None:
        """
        Write the document atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        payload = data.model_dump(by_alias=True, mode="json")
        directory = self.path.parent

        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Failed to save performance data to {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(
                f"Could not write performance data: {e}",
                details={"path": str(self.path)},
            ) from e

        logger.debug(f"Saved performance data for {len(data.topics)} topics to {self.path}")

    def record(
        self, topic_id: str, correct: bool, now: Optional[datetime] = None
    ) -> GrammarPerformanceData:
        """Record one attempt and persist the result."""
        data = record_attempt(self.load(), topic_id, correct, now)
        self.save(data)
        return data

    def import_remote(
        self, remote: GrammarPerformanceData, now: Optional[datetime] = None
    ) -> GrammarPerformanceData:
        """Merge a server copy into the stored document and persist the result."""
        data = merge_performance_data(self.load(), remote, now)
        self.save(data)
        return data

    def clear(self) -> None:
        """Delete the stored document, if any."""
        try:
            self.path.unlink()
            logger.info(f"Cleared performance data at {self.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(
                f"Could not clear performance data: {e}",
                details={"path": str(self.path)},
            ) from e
