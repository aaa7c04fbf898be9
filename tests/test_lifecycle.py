"""Tests for task lifecycle transitions and time accounting."""
import pytest
from datetime import timedelta
from business_logic.lifecycle import Action, LifecycleEngine, SystemClock, accrue, pause_all, transition
from models import TaskStatus, TaskStore
from conftest import T0, FakeClock, make_task


def running(tasks):
    return [i for i, t in enumerate(tasks) if t.status == TaskStatus.IN_PROGRESS]


class TestToggle:
    """Test the start/pause/resume toggle."""

    def test_pending_starts(self):
        tasks = [make_task("A")]
        result = transition(tasks, 0, Action.TOGGLE, T0)
        assert result[0].status == TaskStatus.IN_PROGRESS
        assert result[0].last_started_at == T0
        assert result[0].time_spent == timedelta()

    def test_in_progress_pauses_and_accrues(self):
        """Toggled at t0 and again at t0+5s."""
        tasks = transition([make_task("A")], 0, Action.TOGGLE, T0)
        result = transition(tasks, 0, Action.TOGGLE, T0 + timedelta(seconds=5))
        assert result[0].status == TaskStatus.PAUSED
        assert result[0].time_spent == timedelta(seconds=5)
        assert result[0].last_started_at is None

    def test_paused_resumes_keeping_time(self):
        tasks = [make_task("A", TaskStatus.PAUSED, spent=30)]
        result = transition(tasks, 0, Action.TOGGLE, T0)
        assert result[0].status == TaskStatus.IN_PROGRESS
        assert result[0].time_spent == timedelta(seconds=30)
        assert result[0].last_started_at == T0

    def test_starting_pauses_other_running_task(self):
        """Starting B pauses A with the elapsed interval."""
        tasks = [make_task("A"), make_task("B")]
        tasks = transition(tasks, 0, Action.TOGGLE, T0)
        result = transition(tasks, 1, Action.TOGGLE, T0 + timedelta(seconds=42))

        assert result[0].status == TaskStatus.PAUSED
        assert result[0].time_spent == timedelta(seconds=42)
        assert result[1].status == TaskStatus.IN_PROGRESS
        assert result[1].last_started_at == T0 + timedelta(seconds=42)

    def test_toggle_completed_is_noop(self):
        tasks = [make_task("A", TaskStatus.COMPLETED, spent=10)]
        result = transition(tasks, 0, Action.TOGGLE, T0)
        assert result[0] is tasks[0]

    def test_start_without_other_running_leaves_others_untouched(self):
        tasks = [make_task("A", TaskStatus.PAUSED, spent=5), make_task("B"), make_task("C", TaskStatus.COMPLETED, spent=9)]
        result = transition(tasks, 1, Action.TOGGLE, T0)
        assert result[0] is tasks[0]
        assert result[2] is tasks[2]

    def test_input_sequence_not_mutated(self):
        tasks = [make_task("A")]
        transition(tasks, 0, Action.TOGGLE, T0)
        assert tasks[0].status == TaskStatus.PENDING

    def test_invalid_index(self):
        with pytest.raises(IndexError):
            transition([make_task("A")], 3, Action.TOGGLE, T0)
        with pytest.raises(IndexError):
            transition([], 0, Action.TOGGLE, T0)


class TestComplete:
    """Test completion."""

    def test_complete_pending(self):
        result = transition([make_task("A")], 0, Action.COMPLETE, T0)
        assert result[0].status == TaskStatus.COMPLETED
        assert result[0].time_spent == timedelta()

    def test_complete_running_accrues(self):
        tasks = [make_task("A", TaskStatus.IN_PROGRESS, spent=10, started=T0)]
        result = transition(tasks, 0, Action.COMPLETE, T0 + timedelta(seconds=20))
        assert result[0].status == TaskStatus.COMPLETED
        assert result[0].time_spent == timedelta(seconds=30)

    def test_complete_paused_keeps_time(self):
        tasks = [make_task("A", TaskStatus.PAUSED, spent=10)]
        result = transition(tasks, 0, Action.COMPLETE, T0 + timedelta(hours=1))
        assert result[0].time_spent == timedelta(seconds=10)

    def test_complete_is_terminal(self):
        tasks = [make_task("A", TaskStatus.COMPLETED, spent=10)]
        result = transition(tasks, 0, Action.COMPLETE, T0 + timedelta(hours=1))
        assert result[0] is tasks[0]


class TestDefensiveAccrual:
    """Running tasks with a missing or future start add no time."""

    def test_missing_start_adds_nothing(self):
        task = make_task("A", TaskStatus.IN_PROGRESS, spent=7, started=None)
        paused = accrue(task, T0)
        assert paused.status == TaskStatus.PAUSED
        assert paused.time_spent == timedelta(seconds=7)

    def test_future_start_adds_nothing(self):
        task = make_task("A", TaskStatus.IN_PROGRESS, spent=7, started=T0 + timedelta(minutes=5))
        assert accrue(task, T0).time_spent == timedelta(seconds=7)
        assert task.effective_elapsed(T0) == timedelta(seconds=7)

    def test_accrue_ignores_non_running(self):
        task = make_task("A", TaskStatus.PAUSED, spent=7)
        assert accrue(task, T0) is task


class TestPauseAll:
    """Session-end accrual."""

    def test_pauses_running_tasks(self):
        tasks = [
            make_task("A", TaskStatus.IN_PROGRESS, spent=1, started=T0),
            make_task("B", TaskStatus.PENDING),
        ]
        result = pause_all(tasks, T0 + timedelta(seconds=9))
        assert [t.status for t in result] == [TaskStatus.PAUSED, TaskStatus.PENDING]
        assert result[0].time_spent == timedelta(seconds=10)
        assert not running(result)


class TestInvariants:
    """Properties that hold across whole action sequences."""

    def test_at_most_one_running_and_time_never_lost(self):
        clock = FakeClock()
        store = TaskStore(tasks=[make_task(name) for name in "ABCD"])
        engine = LifecycleEngine(store, clock)

        # (index, seconds to wait before acting)
        script = [(0, 0), (1, 3), (0, 4), (2, 1), (2, 6), (3, 2), (1, 5), (1, 2), (0, 7), (3, 1)]
        expected = {t.id: timedelta() for t in store}
        active = None
        last = {t.id: timedelta() for t in store}

        for index, wait in script:
            now_before = clock.now()
            clock.advance(wait)
            if active is not None:
                expected[active] += clock.now() - now_before
            task = store.tasks[index]
            engine.toggle(index)
            active = task.id if store.tasks[index].is_running else None

            assert len(store.in_progress_indices()) <= 1
            for t in store:
                elapsed = t.effective_elapsed(clock.now())
                assert elapsed >= last[t.id]
                assert elapsed == expected[t.id]
                last[t.id] = elapsed

    def test_engine_pause_all_returns_count(self, clock):
        store = TaskStore(tasks=[make_task("A"), make_task("B")])
        engine = LifecycleEngine(store, clock)
        engine.toggle(1)
        clock.advance(12)
        assert engine.pause_all() == 1
        assert store.tasks[1].status == TaskStatus.PAUSED
        assert store.tasks[1].time_spent == timedelta(seconds=12)
        assert engine.pause_all() == 0

    def test_engine_elapsed_live(self, clock):
        store = TaskStore(tasks=[make_task("A", spent=4)])
        engine = LifecycleEngine(store, clock)
        engine.toggle(0)
        clock.advance(6)
        assert engine.elapsed(store.tasks[0]) == timedelta(seconds=10)


def test_system_clock_is_timezone_aware():
    assert SystemClock().now().tzinfo is not None
