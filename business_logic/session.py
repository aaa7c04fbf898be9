"""Session controller: routes user events to the core and composes frames.

The Textual app owns the terminal and the event loop; this module owns the
state. Every public method handles one event completely before returning.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from business_logic.lifecycle import Clock, LifecycleEngine
from business_logic.viewport import ChromeHeights, Layout, Mode, Viewport, clamp_cursor, compute_layout, move_cursor
from models import TaskStatus, TaskStore
from storage import LoadError, SaveError, TaskFile
from ui.line_renderer import CalendarVariant, LineRenderer, RenderConfig, RowOptions

logger = logging.getLogger(__name__)

TITLE = "Task Timer"
SAVING_MESSAGE = "Saving tasks..."
BYE_MESSAGE = "Bye!"


@dataclass(frozen=True)
class Frame:
    """Everything the shell needs to paint one screen."""
    title: str
    error: Optional[str]
    stats: str
    calendar: str
    rows: List[str]
    help: str
    mode: Mode
    running: bool


@dataclass(frozen=True)
class QuitResult:
    """Outcome of the quit path."""
    saved: bool
    error: Optional[str] = None


def help_line(mode: Mode) -> str:
    """One-line key reference for the current mode."""
    if mode is Mode.ADDING:
        parts = ["enter confirm (stay)", "esc cancel/back"]
    else:
        parts = [
            "a add task",
            "d delete task",
            "↑/↓ nav",
            "s start/pause/resume",
            "c complete task",
            "n toggle line #s",
            "j toggle calendar (G/J)",
            "? help",
            "q quit",
        ]
    return " │ ".join(parts)


class SessionController:
    """
    Holds the task store and view state for one run of the app.

    Events: navigate, page, begin_adding, cancel_adding, add, delete,
    toggle, complete, toggle_line_numbers, toggle_calendar, resize,
    key_pressed, tick, quit.
    """

    def __init__(self, task_file: TaskFile, clock: Clock,
                 render_config: RenderConfig = RenderConfig(),
                 chrome: ChromeHeights = ChromeHeights(),
                 renderer: Optional[LineRenderer] = None,
                 show_line_numbers: bool = False,
                 calendar: CalendarVariant = CalendarVariant.GREGORIAN):
        """
        Initialize SessionController.

        Args:
            task_file: Where the task list is loaded from and saved to
            clock: Source of the current time
            render_config: Row labels and field widths for the renderer
            chrome: Heights of the bands around the list
            renderer: Optional prebuilt renderer (defaults to one built from render_config)
            show_line_numbers: Initial line-number toggle
            calendar: Initial calendar for the date column
        """
        self.task_file = task_file
        self.clock = clock
        self.chrome = chrome
        self.renderer = renderer or LineRenderer(render_config)
        self.store = TaskStore()
        self.engine = LifecycleEngine(self.store, clock)
        self.viewport = Viewport()
        self.cursor = 0
        self.mode = Mode.VIEWING
        self.show_line_numbers = show_line_numbers
        self.calendar = calendar
        self.error: Optional[str] = None
        self.save_error: Optional[str] = None
        self.running = True
        self.terminal_width = 0
        self.terminal_height = 0
        self.input_width = 10

    # -------------------- startup / shutdown --------------------

    def start(self):
        """Load the task file and pick the initial mode."""
        try:
            self.store.tasks = self.task_file.load()
        except LoadError as e:
            logger.warning("Could not load tasks from %s: %s", self.task_file.path, e)
            self.store.tasks = []
            self.error = f"load error: {e}"
        self.cursor = 0
        self.viewport.offset = 0
        self._enter_viewing()

    def quit(self) -> QuitResult:
        """
        Pause running timers, persist the store and stop the session.

        A failed save is recorded in the error state and returned; the
        session stops either way.
        """
        self.engine.pause_all()
        self.running = False
        try:
            self.task_file.save(self.store.tasks)
        except SaveError as e:
            logger.error("Could not save tasks to %s: %s", self.task_file.path, e)
            self.save_error = f"save error: {e}"
            self.error = self.save_error
            return QuitResult(saved=False, error=self.save_error)
        return QuitResult(saved=True)

    def farewell(self) -> str:
        """Text shown once the session has ended."""
        message = f"{SAVING_MESSAGE}\n{BYE_MESSAGE}\n"
        if self.save_error is not None:
            message = f"Error on exit: {self.save_error}\n" + message
        return message

    # -------------------- modes --------------------

    def _enter_viewing(self):
        """Switch to viewing, falling through to adding when there is nothing to view."""
        self.mode = Mode.ADDING if not self.store else Mode.VIEWING
        self._relayout()

    def begin_adding(self):
        self.mode = Mode.ADDING
        self._relayout()

    def cancel_adding(self):
        """Leave adding mode; an empty list shows the placeholder."""
        self.mode = Mode.VIEWING
        self._relayout()

    # -------------------- events --------------------

    def key_pressed(self):
        """Clear a displayed error; called before any key is handled."""
        if self.error is not None:
            self.error = None
            self._relayout()

    def navigate(self, delta: int):
        """Move the cursor by delta rows, without wrapping."""
        if not self.store:
            return
        self.cursor = move_cursor(self.cursor, delta, len(self.store))
        self.viewport.follow(self.cursor, len(self.store))

    def page(self, direction: int):
        """Move the cursor by one viewport height up (-1) or down (+1)."""
        self.navigate(direction * self.viewport.height)

    def add(self, text: str) -> bool:
        """
        Add a task from submitted input.

        Args:
            text: Raw input value

        Returns:
            True if a task was created, False for empty or blank input
        """
        description = text.strip()
        if not description:
            return False
        task = self.store.add(description, self.clock.now())
        logger.debug("Added task %s", task.id)
        self.cursor = 0
        self.viewport.follow(self.cursor, len(self.store))
        return True

    def delete(self):
        """Delete the task under the cursor."""
        removed = self.store.remove(self.cursor)
        if removed is None:
            return
        logger.debug("Deleted task %s", removed.id)
        self.cursor = clamp_cursor(self.cursor, len(self.store))
        self.viewport.follow(self.cursor, len(self.store))
        if not self.store:
            self._enter_viewing()

    def toggle(self):
        """Start, pause or resume the task under the cursor."""
        if self.store:
            self.engine.toggle(self.cursor)

    def complete(self):
        """Complete the task under the cursor."""
        if self.store:
            self.engine.complete(self.cursor)

    def toggle_line_numbers(self):
        self.show_line_numbers = not self.show_line_numbers

    def toggle_calendar(self):
        self.calendar = self.calendar.toggled()

    def resize(self, width: int, height: int) -> Layout:
        """Recompute the viewport for a new terminal size."""
        self.terminal_width = width
        self.terminal_height = height
        return self._relayout()

    def tick(self) -> bool:
        """
        Periodic redraw request. Changes nothing.

        Returns:
            Whether the session is still running (and should keep ticking)
        """
        return self.running

    def _relayout(self) -> Layout:
        layout = compute_layout(self.terminal_width, self.terminal_height, self.mode,
                                self.chrome, show_error=self.error is not None)
        self.viewport.resize(layout.viewport_width, layout.viewport_height)
        self.input_width = layout.input_width
        self.viewport.follow(self.cursor, len(self.store))
        return layout

    # -------------------- output --------------------

    @property
    def selected_task(self):
        return self.store.get(self.cursor)

    def stats_text(self) -> str:
        counts = self.store.counts()
        return (f"Pending: {counts[TaskStatus.PENDING]} | "
                f"In Progress: {counts[TaskStatus.IN_PROGRESS]} | "
                f"Paused: {counts[TaskStatus.PAUSED]} | "
                f"Completed: {counts[TaskStatus.COMPLETED]}")

    def calendar_text(self) -> str:
        return f"Calendar: {self.calendar.label}"

    def visible_rows(self) -> List[str]:
        """Rows for the list viewport, or the placeholder when empty."""
        if not self.store:
            return self.renderer.render_placeholder(self.viewport.width, self.viewport.height)
        options = RowOptions(
            width=self.viewport.width,
            show_line_numbers=self.show_line_numbers,
            calendar=self.calendar,
        )
        return self.renderer.render_rows(
            self.store.tasks,
            self.cursor,
            self.viewport.visible_range(len(self.store)),
            options,
            self.clock.now(),
        )

    def frame(self) -> Frame:
        """Compose the current screen."""
        return Frame(
            title=TITLE,
            error=f"Error: {self.error}" if self.error else None,
            stats=self.stats_text(),
            calendar=self.calendar_text(),
            rows=self.visible_rows(),
            help=help_line(self.mode),
            mode=self.mode,
            running=self.running,
        )
