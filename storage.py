"""Read and write the task list as a JSON file."""
import json
import logging
import re
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from models import Task, TaskStatus

logger = logging.getLogger(__name__)

# Written for an unset timestamp; also recognised on load.
ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class TaskFileError(Exception):
    """Base class for task file problems."""


class LoadError(TaskFileError):
    """The task file exists but cannot be read or decoded."""


class SaveError(TaskFileError):
    """The task list cannot be encoded or written."""


def _duration_to_nanoseconds(duration: timedelta) -> int:
    return (duration // timedelta(microseconds=1)) * 1000


def _nanoseconds_to_duration(value: Any) -> timedelta:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"time_spent must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"time_spent must not be negative, got {value}")
    try:
        return timedelta(microseconds=value // 1000)
    except OverflowError as e:
        raise ValueError(f"time_spent out of range, got {value}") from e


def format_timestamp(value: Optional[datetime]) -> str:
    """Encode a timestamp, using the zero instant for an unset value."""
    if value is None:
        return ZERO_TIMESTAMP
    return value.isoformat()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Decode a timestamp written by format_timestamp.

    Accepts a trailing "Z", fractions longer than microseconds (truncated)
    and naive values (taken as local time).

    Args:
        value: ISO-8601 string, the zero instant, or None

    Returns:
        Timezone-aware datetime, or None for an unset value

    Raises:
        ValueError: If the value is not a recognisable timestamp
    """
    if value is None or value == ZERO_TIMESTAMP:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.year == 1 and parsed.month == 1 and parsed.day == 1:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def task_to_dict(task: Task) -> dict:
    """Convert a task to its persisted record."""
    return {
        "id": task.id,
        "description": task.description,
        "status": int(task.status),
        "time_spent": _duration_to_nanoseconds(task.time_spent),
        "last_started_at": format_timestamp(task.last_started_at),
        "created_at": format_timestamp(task.created_at),
    }


def task_from_dict(record: Mapping[str, Any]) -> Task:
    """
    Build a task from a persisted record.

    Raises:
        ValueError: If a field is missing or has the wrong shape
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"task record must be an object, got {type(record).__name__}")
    try:
        raw_id = record["id"]
        description = record["description"]
        raw_status = record["status"]
    except KeyError as e:
        raise ValueError(f"task record missing field {e.args[0]!r}") from e

    if not isinstance(raw_id, str):
        raise ValueError(f"id must be a string, got {raw_id!r}")
    task_id = str(uuid.UUID(raw_id))
    if not isinstance(description, str):
        raise ValueError(f"description must be a string, got {description!r}")
    if isinstance(raw_status, bool) or not isinstance(raw_status, int):
        raise ValueError(f"status must be an integer, got {raw_status!r}")
    status = TaskStatus(raw_status)

    return Task(
        id=task_id,
        description=description,
        status=status,
        time_spent=_nanoseconds_to_duration(record.get("time_spent", 0)),
        last_started_at=parse_timestamp(record.get("last_started_at")),
        created_at=parse_timestamp(record.get("created_at")),
    )


class TaskFile:
    """Persist the task list in a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize TaskFile.

        Args:
            path: Location of the JSON file. The parent directory is created on save.
        """
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Task]:
        """Load tasks from the file.

        Returns:
            Tasks in stored order. A missing file yields an empty list.

        Raises:
            LoadError: If the file cannot be read or decoded
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No task file at %s, starting empty", self.path)
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"read tasks file: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LoadError(f"unmarshal tasks: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise LoadError(f"unmarshal tasks: expected a list, got {type(data).__name__}")

        tasks = []
        for position, record in enumerate(data):
            try:
                tasks.append(task_from_dict(record))
            except (ValueError, OverflowError) as e:
                raise LoadError(f"unmarshal tasks: record {position}: {e}") from e

        logger.info("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]):
        """Save tasks to the file, replacing its contents.

        Raises:
            SaveError: If the tasks cannot be encoded or the file cannot be written
        """
        try:
            content = json.dumps([task_to_dict(task) for task in tasks], indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SaveError(f"marshal tasks: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SaveError(f"write tasks: {e}") from e

        logger.info("Saved %d task(s) to %s", len(tasks), self.path)
