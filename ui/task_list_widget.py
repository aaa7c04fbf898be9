"""Task list widget for displaying the visible slice of tasks."""
from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

if TYPE_CHECKING:
    from business_logic.session import SessionController


class TaskListWidget(Static):
    """Widget to display the rows inside the list viewport.

    Scrolling is done by the session's viewport, so the widget only paints
    the rows it is given and highlights the cursor row.
    """

    DEFAULT_CSS = """
    TaskListWidget {
        height: 1fr;
        border: double #8b5cf6;
        color: #e2e8f0;
    }
    """

    def __init__(self, session: 'SessionController', selected_style: str = "reverse", **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.selected_style = selected_style

    def build_text(self) -> Text:
        """Build the styled text for the current frame."""
        rows = self.session.visible_rows()
        text = Text(no_wrap=True, overflow="crop")
        if not self.session.store:
            text.append("\n".join(rows), style="dim")
            return text

        selected_row = self.session.cursor - self.session.viewport.offset
        for i, row in enumerate(rows):
            if i:
                text.append("\n")
            text.append(row, style=self.selected_style if i == selected_row else "")
        return text

    def render(self) -> Text:
        """Render the task list."""
        return self.build_text()
