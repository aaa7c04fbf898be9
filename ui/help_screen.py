"""Help screen listing the key bindings."""
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Static

# (section, [(keys, description), ...])
KEY_SECTIONS = [
    ("Navigation", [
        ("↑/↓", "Move the cursor (stops at the first and last task)"),
        ("PgUp/PgDn", "Move the cursor by one screen"),
    ]),
    ("Tasks", [
        ("a", "Add a task; it goes to the top of the list"),
        ("enter", "Confirm the typed task and stay in the input"),
        ("esc", "Leave the input and go back to the list"),
        ("d", "Delete the selected task"),
        ("s", "Start, pause or resume the timer"),
        ("", "Starting a task pauses whichever task was running"),
        ("c", "Complete the selected task"),
    ]),
    ("Display", [
        ("n", "Show or hide line numbers"),
        ("j", "Switch the date column between Gregorian and Jalali"),
    ]),
    ("General", [
        ("?", "Show this help"),
        ("q", "Pause running timers, save and quit"),
    ]),
]

KEY_COLUMN = 12


def help_markup() -> str:
    """Build the Rich markup shown on the help screen."""
    blocks = []
    for title, keys in KEY_SECTIONS:
        lines = [f"[bold]{title}[/bold]"]
        lines.extend(f"{key:<{KEY_COLUMN}}  {text}" for key, text in keys)
        blocks.append("\n".join(lines))
    blocks.append("[dim]Press Esc or ? to close this help[/dim]")
    return "\n\n".join(blocks)


class HelpScreen(Screen):
    """Full-screen overlay with the key reference."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("question_mark", "dismiss", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
        background: rgba(26, 26, 46, 0.9);
    }

    #help_box {
        width: 72;
        height: auto;
        max-height: 90%;
        background: #2d2d44;
        border: thick #8b5cf6;
        padding: 1 2;
    }

    #help_heading {
        text-align: center;
        text-style: bold;
        color: #0abdc6;
        margin-bottom: 1;
    }

    #help_keys {
        height: auto;
        color: #e2e8f0;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help_box"):
            yield Static("Task Timer Keys", id="help_heading")
            yield Static(help_markup(), id="help_keys")

    def on_key(self, event: events.Key) -> None:
        """Swallow every key except the close keys and scrolling."""
        if event.key not in ("escape", "question_mark", "up", "down"):
            event.prevent_default()
            event.stop()

    def action_dismiss(self) -> None:
        self.dismiss()
