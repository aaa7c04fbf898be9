"""Tests for the JSON task file."""
import json
import pytest
from datetime import datetime, timedelta, timezone
from models import TaskStatus
from storage import (
    ZERO_TIMESTAMP,
    LoadError,
    SaveError,
    TaskFile,
    parse_timestamp,
    task_from_dict,
    task_to_dict,
)
from conftest import T0, make_task

TASK_ID = "6f1c7f1e-2a7b-4c52-9d0e-0d8d2b7c1a11"


def record(**overrides):
    """A valid persisted record, with optional field overrides."""
    data = {
        "id": TASK_ID,
        "description": "Buy milk",
        "status": 2,
        "time_spent": 5_000_000_000,
        "last_started_at": ZERO_TIMESTAMP,
        "created_at": "2026-03-20T09:00:00+00:00",
    }
    data.update(overrides)
    return data


class TestRoundTrip:
    """Save then load gives back equal tasks."""

    def test_round_trip_all_fields(self, task_file, sample_tasks):
        sample_tasks[2].time_spent = timedelta(seconds=300, microseconds=123456)
        task_file.save(sample_tasks)
        loaded = task_file.load()
        assert loaded == sample_tasks

    def test_in_progress_stays_in_progress(self, task_file):
        task = make_task("Running", TaskStatus.IN_PROGRESS, spent=5, started=T0)
        task_file.save([task])
        loaded = task_file.load()
        assert loaded[0].status == TaskStatus.IN_PROGRESS
        assert loaded[0].last_started_at == T0

    def test_unicode_description(self, task_file):
        task = make_task("خرید شیر 🥛")
        task_file.save([task])
        assert task_file.load()[0].description == "خرید شیر 🥛"

    def test_empty_list(self, task_file):
        task_file.save([])
        assert task_file.load() == []


class TestFileFormat:
    """Test the on-disk shape."""

    def test_saved_record_shape(self, task_file):
        task = make_task("Buy milk", TaskStatus.PAUSED, spent=5, task_id=TASK_ID)
        task_file.save([task])
        data = json.loads(task_file.path.read_text())
        assert data == [{
            "id": TASK_ID,
            "description": "Buy milk",
            "status": 2,
            "time_spent": 5_000_000_000,
            "last_started_at": ZERO_TIMESTAMP,
            "created_at": "2026-03-20T09:00:00+00:00",
        }]

    def test_save_creates_parent_directory(self, tmp_path):
        task_file = TaskFile(tmp_path / "nested" / "dir" / "tasks.json")
        task_file.save([make_task("A")])
        assert task_file.exists()

    def test_record_helpers(self):
        task = task_from_dict(record())
        assert task.status == TaskStatus.PAUSED
        assert task.time_spent == timedelta(seconds=5)
        assert task.last_started_at is None
        assert task_to_dict(task) == record()


class TestLoad:
    """Test loading edge cases."""

    def test_missing_file_is_empty(self, task_file):
        assert task_file.load() == []

    def test_null_document_is_empty(self, task_file):
        task_file.path.write_text("null")
        assert task_file.load() == []

    def test_invalid_json(self, task_file):
        task_file.path.write_text("invalid json{{{")
        with pytest.raises(LoadError, match="unmarshal tasks"):
            task_file.load()

    def test_not_a_list(self, task_file):
        task_file.path.write_text('{"tasks": []}')
        with pytest.raises(LoadError):
            task_file.load()

    @pytest.mark.parametrize("bad", [
        {"status": 7},
        {"status": "1"},
        {"id": "not-a-uuid"},
        {"id": 12},
        {"description": None},
        {"time_spent": "5s"},
        {"time_spent": -1},
        {"time_spent": 10**30},
        {"created_at": "yesterday"},
    ])
    def test_bad_record(self, task_file, bad):
        task_file.path.write_text(json.dumps([record(**bad)]))
        with pytest.raises(LoadError, match="record 0"):
            task_file.load()

    def test_missing_field(self, task_file):
        data = record()
        del data["status"]
        task_file.path.write_text(json.dumps([data]))
        with pytest.raises(LoadError, match="status"):
            task_file.load()

    def test_unreadable_path(self, tmp_path):
        # A directory where the file should be
        (tmp_path / "tasks.json").mkdir()
        with pytest.raises(LoadError, match="read tasks file"):
            TaskFile(tmp_path / "tasks.json").load()

    def test_legacy_timestamps(self, task_file):
        """Timestamps with nanoseconds and a Z suffix load."""
        task_file.path.write_text(json.dumps([record(
            status=1,
            last_started_at="2026-03-20T09:30:00.123456789Z",
            created_at="2026-03-20T12:00:00.5+03:30",
        )]))
        task = task_file.load()[0]
        assert task.last_started_at == datetime(2026, 3, 20, 9, 30, 0, 123456, tzinfo=timezone.utc)
        assert task.created_at == datetime(2026, 3, 20, 8, 30, 0, 500000, tzinfo=timezone.utc)


class TestSave:
    """Test save failures."""

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        task_file = TaskFile(blocker / "tasks.json")
        with pytest.raises(SaveError, match="write tasks"):
            task_file.save([make_task("A")])


class TestParseTimestamp:
    def test_zero_and_null_are_unset(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp(ZERO_TIMESTAMP) is None
        assert parse_timestamp("0001-01-01T00:00:00+00:00") is None

    def test_naive_is_made_aware(self):
        assert parse_timestamp("2026-03-20T09:00:00").tzinfo is not None

    def test_rejects_non_string(self):
        with pytest.raises(ValueError):
            parse_timestamp(12345)
