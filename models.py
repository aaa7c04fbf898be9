"""Data models for task tracking."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Sequence


class TaskStatus(IntEnum):
    """Lifecycle state of a task.

    The integer values are the persisted status codes.
    """
    PENDING = 0
    IN_PROGRESS = 1
    PAUSED = 2
    COMPLETED = 3

    @property
    def label(self) -> str:
        """Human-readable label shown in the task list."""
        return STATUS_LABELS[self]


STATUS_LABELS: Dict[TaskStatus, str] = {
    TaskStatus.PENDING: "⏳ Pending",
    TaskStatus.IN_PROGRESS: "▶️ In Progress",
    TaskStatus.PAUSED: "⏸️ Paused",
    TaskStatus.COMPLETED: "✅ Completed",
}


@dataclass
class Task:
    """Represents a single tracked task.

    Time tracking fields:
    - time_spent: Time accumulated over finished in-progress sessions
    - last_started_at: When the current in-progress session began
      (None when the task is not running or the value was never set)
    """
    id: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    time_spent: timedelta = field(default_factory=timedelta)
    last_started_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, description: str, now: datetime) -> 'Task':
        """Create a new pending task with a fresh identifier."""
        return cls(id=str(uuid.uuid4()), description=description, created_at=now)

    @property
    def is_running(self) -> bool:
        return self.status == TaskStatus.IN_PROGRESS

    def running_interval(self, now: datetime) -> timedelta:
        """
        Length of the live in-progress session.

        Returns zero for tasks that are not running, for a missing start
        timestamp, and for a start timestamp in the future (clock skew).

        Args:
            now: Current time

        Returns:
            Elapsed time of the current session
        """
        if not self.is_running or self.last_started_at is None:
            return timedelta()
        delta = now - self.last_started_at
        if delta < timedelta():
            return timedelta()
        return delta

    def effective_elapsed(self, now: datetime) -> timedelta:
        """Total time spent including the live session, if any."""
        return self.time_spent + self.running_interval(now)


@dataclass
class TaskStore:
    """Ordered task collection owned by the running session.

    Index 0 is the most recently added task; new tasks are prepended.
    """
    tasks: List[Task] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __bool__(self) -> bool:
        return bool(self.tasks)

    def get(self, index: int) -> Optional[Task]:
        """Get the task at index, or None if out of range."""
        if 0 <= index < len(self.tasks):
            return self.tasks[index]
        return None

    def add(self, description: str, now: datetime) -> Task:
        """Create a task and insert it at the front."""
        task = Task.create(description, now)
        self.tasks.insert(0, task)
        return task

    def remove(self, index: int) -> Optional[Task]:
        """Remove a task by index."""
        if 0 <= index < len(self.tasks):
            return self.tasks.pop(index)
        return None

    def replace_all(self, tasks: Sequence[Task]):
        """Install the task sequence produced by a lifecycle transition."""
        if len(tasks) != len(self.tasks):
            raise ValueError(
                f"transition changed task count from {len(self.tasks)} to {len(tasks)}"
            )
        self.tasks = list(tasks)

    def in_progress_indices(self) -> List[int]:
        """Indices of tasks currently in progress."""
        return [i for i, task in enumerate(self.tasks) if task.is_running]

    def counts(self) -> Dict[TaskStatus, int]:
        """Number of tasks in each status."""
        result = {status: 0 for status in TaskStatus}
        for task in self.tasks:
            result[task.status] += 1
        return result
