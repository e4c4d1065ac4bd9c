"""
Unit Tests for PerformanceStore

Tests JSON persistence of the performance document:
- Fail-soft loading of missing and corrupt files
- camelCase JSON on disk
- record / import_remote / clear round trips
- StorageError on write failure
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from mkpractice.errors import StorageError
from mkpractice.services.performance.storage import PerformanceStore
from mkpractice.services.performance.tracker import empty_performance_data, record_attempt

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path: Path) -> PerformanceStore:
    return PerformanceStore(tmp_path / "performance.json")


class TestLoad:
    """Tests for PerformanceStore.load."""

    def test_missing_file_gives_empty_document(self, store) -> None:
        data = store.load()

        assert data.topics == {}
        assert data.last_updated.endswith("Z")

    def test_corrupt_json_gives_empty_document(self, store) -> None:
        store.path.write_text("{not json", encoding="utf-8")

        assert store.load().topics == {}

    def test_invalid_document_gives_empty_document(self, store) -> None:
        store.path.write_text(json.dumps({"topics": "nope"}), encoding="utf-8")

        assert store.load().topics == {}

    def test_reads_camel_case_document(self, store) -> None:
        store.path.write_text(
            json.dumps(
                {
                    "topics": {
                        "negation": {
                            "topicId": "negation",
                            "attempts": [{"correct": True, "timestamp": 1709294400000}],
                            "totalAttempts": 1,
                            "correctAttempts": 1,
                            "lastAttemptDate": "2024-03-01",
                        }
                    },
                    "lastUpdated": "2024-03-01T12:00:00.000Z",
                }
            ),
            encoding="utf-8",
        )

        data = store.load()

        assert data.topics["negation"].correct_attempts == 1


class TestSave:
    """Tests for PerformanceStore.save."""

    def test_writes_camel_case_json(self, store) -> None:
        data = record_attempt(empty_performance_data(START), "negation", True, now=START)
        store.save(data)

        raw = json.loads(store.path.read_text(encoding="utf-8"))

        assert raw["lastUpdated"] == "2024-03-01T12:00:00.000Z"
        assert raw["topics"]["negation"]["totalAttempts"] == 1
        assert raw["topics"]["negation"]["lastAttemptDate"] == "2024-03-01"

    def test_round_trip(self, store) -> None:
        data = record_attempt(empty_performance_data(START), "negation", False, now=START)
        store.save(data)

        assert store.load() == data

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        store = PerformanceStore(tmp_path / "nested" / "dir" / "performance.json")
        store.save(empty_performance_data(START))

        assert store.path.exists()

    def test_no_temp_files_left(self, store, tmp_path: Path) -> None:
        store.save(empty_performance_data(START))

        assert [p.name for p in tmp_path.iterdir()] == ["performance.json"]

    def test_write_failure_raises_storage_error(self, store, tmp_path: Path) -> None:
        with patch(
            "mkpractice.services.performance.storage.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StorageError) as exc_info:
                store.save(empty_performance_data(START))

        assert exc_info.value.error_code == "storage_error"
        assert list(tmp_path.iterdir()) == []


class TestStoreOperations:
    """Tests for record, import_remote and clear."""

    def test_record_persists(self, store) -> None:
        store.record("negation", True, now=START)
        store.record("negation", False, now=START + timedelta(minutes=1))

        topic = store.load().topics["negation"]

        assert topic.total_attempts == 2
        assert topic.correct_attempts == 1

    def test_import_remote_merges(self, store) -> None:
        store.record("negation", True, now=START)
        remote = record_attempt(
            empty_performance_data(START),
            "negation",
            False,
            now=START + timedelta(days=1),
        )

        merged = store.import_remote(remote, now=START + timedelta(days=1))

        assert merged.topics["negation"].total_attempts == 2
        assert store.load() == merged

    def test_clear(self, store) -> None:
        store.record("negation", True, now=START)
        store.clear()

        assert not store.path.exists()
        store.clear()

    @patch("mkpractice.services.performance.storage.settings")
    def test_default_path_from_settings(self, mock_settings, tmp_path: Path) -> None:
        mock_settings.PERFORMANCE_STORE_PATH = str(tmp_path / "configured.json")

        assert PerformanceStore().path == tmp_path / "configured.json"
