"""Custom UI widgets for the task timer."""
from rich.text import Text
from textual.widgets import Static


class PlainStatic(Static):
    """Static that shows its text verbatim instead of parsing Rich markup."""

    def show(self, text: str) -> None:
        self.update(Text(text))


class HelpBar(PlainStatic):
    """Bottom bar with the key reference for the current mode."""

    DEFAULT_CSS = """
    HelpBar {
        background: transparent;
        color: #0abdc6;
        dock: bottom;
        height: 1;
        text-style: bold;
        padding: 0 1;
    }
    """


class ErrorBanner(PlainStatic):
    """Bordered error message, hidden while there is no error."""

    DEFAULT_CSS = """
    ErrorBanner {
        border: round #ff006e;
        color: #ff006e;
        text-style: bold;
        text-align: center;
        height: 3;
        margin-bottom: 1;
        display: none;
    }
    """

    def show_error(self, message) -> None:
        if message:
            self.show(message)
            self.display = True
        else:
            self.display = False
