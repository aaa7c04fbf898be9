"""Main TUI application for the task timer."""
import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Input, Static

from business_logic.lifecycle import Clock, SystemClock
from business_logic.session import QuitResult, SessionController
from business_logic.viewport import Mode
from config import Config
from logging_setup import setup_logging
from storage import TaskFile
from ui.help_screen import HelpScreen
from ui.line_renderer import CalendarVariant, RenderConfig
from ui.task_list_widget import TaskListWidget
from ui.widgets import ErrorBanner, HelpBar, PlainStatic

logger = logging.getLogger(__name__)

NEW_TASK_PROMPT = "New Task:"
INPUT_PLACEHOLDER = "Describe your task..."
INPUT_AREA_TITLE = "📝 Add New Task"


class TaskTimerApp(App):
    """A terminal task list that tracks time spent per task."""

    TITLE = "Task Timer"

    CSS = """
    Screen {
        background: #1a1a2e;
        padding: 1;
    }

    #title {
        height: 1;
        margin-bottom: 1;
        text-align: center;
        text-style: bold;
        color: #0abdc6;
    }

    #stats {
        height: 1;
        margin-bottom: 1;
        padding: 0 1;
        text-style: bold;
        color: #e2e8f0;
    }

    #calendar {
        height: 1;
        margin-bottom: 1;
        padding: 0 1;
        text-style: italic;
        color: #8b5cf6;
    }

    #input_area {
        height: auto;
        border: round #8b5cf6;
        padding: 0 1;
        margin-bottom: 1;
        display: none;
    }

    #input_title {
        height: 1;
        width: 100%;
        text-align: center;
        text-style: bold;
    }

    #input_row {
        height: 3;
    }

    #input_prompt {
        width: auto;
        height: 3;
        padding: 1 1 0 0;
    }

    Input {
        background: #2d2d44;
        color: #ffffff;
        border: tall #8b5cf6;
    }

    Input:focus {
        border: tall #0abdc6;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("question_mark", "show_help", "Help", show=False),
        Binding("a", "add_task", "Add", show=False),
        Binding("d", "delete_task", "Delete", show=False),
        Binding("s", "toggle_timer", "Start/Pause", show=False),
        Binding("c", "complete_task", "Complete", show=False),
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
        Binding("pageup", "page_up", "Page Up", show=False),
        Binding("pagedown", "page_down", "Page Down", show=False),
        Binding("n", "toggle_line_numbers", "Line #s", show=False),
        Binding("j", "toggle_calendar", "Calendar", show=False),
        Binding("escape", "cancel_input", "Back", show=False),
    ]

    def __init__(self, config: Optional[Config] = None, clock: Optional[Clock] = None):
        super().__init__()
        self.config = config or Config.load()
        render_config = RenderConfig(min_description_width=self.config.min_description_width)
        self.session = SessionController(
            TaskFile(self.config.tasks_file),
            clock or SystemClock(),
            render_config=render_config,
            show_line_numbers=self.config.show_line_numbers,
            calendar=CalendarVariant.JALALI if self.config.jalali_calendar else CalendarVariant.GREGORIAN,
        )
        self.session.start()
        self.tick_timer = None

    def compose(self) -> ComposeResult:
        """Compose the UI."""
        yield PlainStatic(id="title")
        yield ErrorBanner(id="error")
        yield PlainStatic(id="stats")
        yield PlainStatic(id="calendar")
        with Container(id="input_area"):
            yield Static(INPUT_AREA_TITLE, id="input_title")
            with Horizontal(id="input_row"):
                yield Static(NEW_TASK_PROMPT, id="input_prompt")
                yield Input(placeholder=INPUT_PLACEHOLDER, max_length=self.config.input_char_limit,
                            id="task_input")
        yield TaskListWidget(self.session, id="task_list")
        yield HelpBar(id="help")

    def on_mount(self) -> None:
        """Set up the app after mounting."""
        self.session.resize(self.size.width, self.size.height)
        self.refresh_view()
        self._schedule_tick()

    # -------------------- timer --------------------

    def _schedule_tick(self) -> None:
        """Arm a one-shot timer for the next redraw of the live elapsed time."""
        self.tick_timer = self.set_timer(self.config.tick_interval, self._on_tick)

    def _on_tick(self) -> None:
        if not self.session.tick():
            return
        self.refresh_view()
        self._schedule_tick()

    # -------------------- painting --------------------

    def _on_main_screen(self) -> bool:
        return len(self.screen_stack) == 1

    def refresh_view(self) -> None:
        """Paint the current session frame."""
        if not self._on_main_screen():
            # Repainted by the help screen's dismiss callback
            return
        frame = self.session.frame()
        self.query_one("#title", PlainStatic).show(frame.title)
        self.query_one("#error", ErrorBanner).show_error(frame.error)
        self.query_one("#stats", PlainStatic).show(frame.stats)
        self.query_one("#calendar", PlainStatic).show(frame.calendar)
        self.query_one(HelpBar).show(frame.help)

        task_list = self.query_one(TaskListWidget)
        task_list.styles.height = self.session.viewport.height + 2
        task_list.refresh()

        input_area = self.query_one("#input_area")
        task_input = self.query_one("#task_input", Input)
        adding = frame.mode is Mode.ADDING
        input_area.display = adding
        # A hidden input must not get focus back, or viewing keys are typed into it
        task_input.can_focus = adding
        task_input.styles.width = self.session.input_width
        if adding and self.focused is not task_input:
            task_input.focus()
        elif not adding and self.focused is task_input:
            self.set_focus(None)

    def on_resize(self, event: events.Resize) -> None:
        """Recompute the viewport whenever the terminal changes size."""
        self.session.resize(event.size.width, event.size.height)
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        """Any key except quit clears a displayed error, bound or not."""
        if event.key in ("q", "ctrl+c") or self.session.error is None:
            return
        self.session.key_pressed()
        self.refresh_view()

    def _handle(self, handler, *args) -> None:
        """Run a session event for a key press and repaint."""
        self.session.key_pressed()
        handler(*args)
        self.refresh_view()

    # -------------------- actions --------------------

    def action_move_up(self) -> None:
        """Move selection up."""
        if self.session.mode is Mode.VIEWING:
            self._handle(self.session.navigate, -1)

    def action_move_down(self) -> None:
        """Move selection down."""
        if self.session.mode is Mode.VIEWING:
            self._handle(self.session.navigate, 1)

    def action_page_up(self) -> None:
        if self.session.mode is Mode.VIEWING:
            self._handle(self.session.page, -1)

    def action_page_down(self) -> None:
        if self.session.mode is Mode.VIEWING:
            self._handle(self.session.page, 1)

    def action_add_task(self) -> None:
        """Show the input to add a new task."""
        self.query_one("#task_input", Input).value = ""
        self._handle(self.session.begin_adding)

    def action_delete_task(self) -> None:
        """Delete the selected task."""
        self._handle(self.session.delete)

    def action_toggle_timer(self) -> None:
        """
        Toggle the timer of the selected task.

        How it works:
        - Press 's' on a pending or paused task to START it
        - Press 's' again to PAUSE it (elapsed time is added to the task)
        - Starting a task pauses whichever task was running
        """
        self._handle(self.session.toggle)

    def action_complete_task(self) -> None:
        """Complete the selected task."""
        self._handle(self.session.complete)

    def action_toggle_line_numbers(self) -> None:
        self._handle(self.session.toggle_line_numbers)

    def action_toggle_calendar(self) -> None:
        self._handle(self.session.toggle_calendar)

    def action_cancel_input(self) -> None:
        """Leave adding mode."""
        if len(self.screen_stack) > 1:
            return
        if self.session.mode is Mode.ADDING:
            self.query_one("#task_input", Input).value = ""
            self._handle(self.session.cancel_adding)

    def action_show_help(self) -> None:
        """Show the help screen."""
        self.push_screen(HelpScreen(), callback=lambda _: self.refresh_view())

    def action_quit(self) -> None:
        """Pause running timers, save and exit."""
        result = self.session.quit()
        if self.tick_timer is not None:
            self.tick_timer.stop()
        self.exit(result)

    # -------------------- input --------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        """Typing counts as a keystroke for clearing errors."""
        if self.session.error is not None:
            self.session.key_pressed()
            self.refresh_view()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Add the typed task and keep the input open for the next one."""
        self.session.key_pressed()
        if self.session.add(event.value):
            event.input.value = ""
        self.refresh_view()


def main():
    """Run the application."""
    config = Config.load()
    log_file = setup_logging(config.log_dir, config.log_level)
    logger.info("Starting, tasks file %s, log file %s", config.tasks_file, log_file)
    app = TaskTimerApp(config)
    result: Optional[QuitResult] = app.run()
    if result is None:
        # Exited without going through action_quit
        result = app.session.quit()
    print(app.session.farewell(), end="")
    if result is not None and not result.saved:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
