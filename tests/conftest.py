"""Pytest configuration and shared fixtures."""
import pytest
from datetime import datetime, timedelta, timezone
from models import Task, TaskStatus, TaskStore
from storage import TaskFile

T0 = datetime(2026, 3, 20, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 0, **kwargs) -> datetime:
        self.current += timedelta(seconds=seconds, **kwargs)
        return self.current


def make_task(description: str, status: TaskStatus = TaskStatus.PENDING, spent: float = 0,
              started: datetime = None, created: datetime = T0, task_id: str = None) -> Task:
    """Build a task with readable defaults."""
    task = Task.create(description, created)
    task.status = status
    task.time_spent = timedelta(seconds=spent)
    task.last_started_at = started
    if task_id is not None:
        task.id = task_id
    return task


@pytest.fixture
def clock():
    """Fixture providing a controllable clock."""
    return FakeClock()


@pytest.fixture
def sample_tasks():
    """Fixture providing a sample list of tasks, one in each status."""
    return [
        make_task("Write report"),
        make_task("Review PR", TaskStatus.IN_PROGRESS, spent=60, started=T0),
        make_task("Call mom", TaskStatus.PAUSED, spent=300),
        make_task("Buy groceries", TaskStatus.COMPLETED, spent=1200),
    ]


@pytest.fixture
def sample_store(sample_tasks):
    """Fixture providing a TaskStore with sample tasks."""
    return TaskStore(tasks=list(sample_tasks))


@pytest.fixture
def empty_store():
    """Fixture providing an empty TaskStore."""
    return TaskStore()


@pytest.fixture
def task_file(tmp_path):
    """Fixture providing a TaskFile in a temporary directory."""
    return TaskFile(tmp_path / "tasks.json")
