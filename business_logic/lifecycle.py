"""Task lifecycle and time accounting.

Status changes and elapsed-time accrual are pure functions over a task
sequence: they take the current tasks plus "now" and return the new tasks.
LifecycleEngine binds those functions to a TaskStore and a Clock.

State machine:
    Pending    --toggle-->   InProgress
    Paused     --toggle-->   InProgress
    InProgress --toggle-->   Paused      (accrues the running session)
    any but Completed --complete--> Completed (accrues if running)

Starting a task pauses every other running task first, so at most one task
is ever in progress.
"""
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Protocol, Sequence

from models import Task, TaskStatus, TaskStore

logger = logging.getLogger(__name__)


class Action(Enum):
    """User actions that drive status transitions."""
    TOGGLE = "toggle"
    COMPLETE = "complete"


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock returning timezone-aware local time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


def accrue(task: Task, now: datetime) -> Task:
    """
    Fold the live session of a running task into time_spent and pause it.

    Tasks that are not in progress are returned unchanged. A missing start
    timestamp or a start in the future adds no time.

    Args:
        task: Task to settle
        now: Current time

    Returns:
        Paused copy of the task, or the task itself if it was not running
    """
    if not task.is_running:
        return task
    return replace(
        task,
        status=TaskStatus.PAUSED,
        time_spent=task.time_spent + task.running_interval(now),
        last_started_at=None,
    )


def transition(tasks: Sequence[Task], index: int, action: Action, now: datetime) -> List[Task]:
    """
    Apply a user action to the task at index.

    The whole sequence goes in and the whole new sequence comes out, so the
    pause of a previously running task and the start of the selected one
    happen in a single step.

    Args:
        tasks: Current tasks in display order
        index: Index of the task the action applies to
        action: TOGGLE or COMPLETE
        now: Current time

    Returns:
        New list of tasks. Unaffected tasks are the same objects.

    Raises:
        IndexError: If index is out of range
    """
    if not 0 <= index < len(tasks):
        raise IndexError(f"task index {index} out of range for {len(tasks)} task(s)")

    result = list(tasks)
    task = result[index]

    if action is Action.TOGGLE:
        if task.status in (TaskStatus.PENDING, TaskStatus.PAUSED):
            for i, other in enumerate(result):
                if i != index and other.is_running:
                    result[i] = accrue(other, now)
                    logger.debug("Paused task %s to start %s", other.id, task.id)
            result[index] = replace(task, status=TaskStatus.IN_PROGRESS, last_started_at=now)
        elif task.status == TaskStatus.IN_PROGRESS:
            result[index] = accrue(task, now)
        else:
            return result
    elif action is Action.COMPLETE:
        if task.status == TaskStatus.COMPLETED:
            return result
        result[index] = replace(accrue(task, now), status=TaskStatus.COMPLETED)
    else:
        raise ValueError(f"unknown action: {action!r}")

    logger.debug("Task %s: %s -> %s", task.id, task.status.name, result[index].status.name)
    return result


def pause_all(tasks: Sequence[Task], now: datetime) -> List[Task]:
    """Accrue and pause every running task (end of session)."""
    return [accrue(task, now) for task in tasks]


class LifecycleEngine:
    """
    Applies lifecycle transitions to a TaskStore using an injected clock.

    Features:
    - Start/pause/resume with a single toggle action
    - Completion with accrual of a running session
    - Session-end accrual so a saved file never holds a running timer
    """

    def __init__(self, store: TaskStore, clock: Clock):
        """
        Initialize LifecycleEngine.

        Args:
            store: The task store to mutate
            clock: Source of "now" for every transition
        """
        self.store = store
        self.clock = clock

    def apply(self, index: int, action: Action) -> Task:
        """Apply an action to the task at index and return its new state."""
        self.store.replace_all(transition(self.store.tasks, index, action, self.clock.now()))
        return self.store.tasks[index]

    def toggle(self, index: int) -> Task:
        """Start, pause or resume the task at index."""
        return self.apply(index, Action.TOGGLE)

    def complete(self, index: int) -> Task:
        """Mark the task at index completed."""
        return self.apply(index, Action.COMPLETE)

    def pause_all(self) -> int:
        """
        Pause every running task, accruing its time.

        Returns:
            Number of tasks that were paused
        """
        running = len(self.store.in_progress_indices())
        if running:
            self.store.replace_all(pause_all(self.store.tasks, self.clock.now()))
            logger.info("Paused %d running task(s) at session end", running)
        return running

    def elapsed(self, task: Task) -> timedelta:
        """Effective elapsed time of a task right now."""
        return task.effective_elapsed(self.clock.now())
