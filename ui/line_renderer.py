"""Turn tasks into fixed-width text rows for the list viewport."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models import STATUS_LABELS, Task, TaskStatus
from utils.jalali import to_jalali
from utils.text_width import ELLIPSIS, display_width, pad_display, trim_display, truncate_display
from utils.time_utils import format_duration

DateConverter = Callable[[int, int, int], Tuple[int, int, int]]


class CalendarVariant(Enum):
    """Which calendar the date column uses."""
    GREGORIAN = "gregorian"
    JALALI = "jalali"

    @property
    def label(self) -> str:
        return "Jalali (MM/DD)" if self is CalendarVariant.JALALI else "Gregorian (MM/DD)"

    def toggled(self) -> 'CalendarVariant':
        if self is CalendarVariant.JALALI:
            return CalendarVariant.GREGORIAN
        return CalendarVariant.JALALI


@dataclass(frozen=True)
class RenderConfig:
    """Fixed text and field widths used for every row.

    Owned by the session and handed to the renderer at construction.
    """
    status_labels: Dict[TaskStatus, str] = field(default_factory=lambda: dict(STATUS_LABELS))
    cursor_marker: str = "❯ "
    indent_marker: str = "  "
    separator: str = " "
    ellipsis: str = ELLIPSIS
    min_description_width: int = 5
    empty_message: str = "No tasks yet. Press 'a' to add one!"

    @property
    def marker_width(self) -> int:
        return max(display_width(self.cursor_marker), display_width(self.indent_marker))

    @property
    def status_width(self) -> int:
        # Widest label plus one column of air
        return max(display_width(label) for label in self.status_labels.values()) + 1

    @property
    def time_width(self) -> int:
        return display_width("[00:00:00]") + 1

    @property
    def date_width(self) -> int:
        return display_width("(00/00)") + 1

    @property
    def line_number_width(self) -> int:
        return display_width("999. ")


@dataclass(frozen=True)
class RowOptions:
    """Display toggles that apply to every row."""
    width: int
    show_line_numbers: bool = False
    calendar: CalendarVariant = CalendarVariant.GREGORIAN


class LineRenderer:
    """Renders task rows and the empty-list placeholder."""

    def __init__(self, config: RenderConfig = RenderConfig(), date_converter: DateConverter = to_jalali):
        """
        Initialize LineRenderer.

        Args:
            config: Labels, markers and field widths
            date_converter: Gregorian (y, m, d) to alternate calendar (y, m, d)
        """
        self.config = config
        self.date_converter = date_converter

    def format_date(self, created_at: Optional[datetime], calendar: CalendarVariant) -> str:
        """Format the creation date as (MM/DD) in the selected calendar."""
        if created_at is None:
            return "(--/--)"
        month, day = created_at.month, created_at.day
        if calendar is CalendarVariant.JALALI:
            # Jalali dates are taken from the UTC calendar day
            utc = created_at.astimezone(timezone.utc)
            _, month, day = self.date_converter(utc.year, utc.month, utc.day)
        return f"({month:02d}/{day:02d})"

    def format_time(self, task: Task, now: datetime) -> str:
        """Format effective elapsed time as [HH:MM:SS]."""
        return f"[{format_duration(task.effective_elapsed(now))}]"

    def description_budget(self, width: int, show_line_numbers: bool) -> int:
        """
        Columns left for the description after the fixed fields.

        Never below the configured minimum, so very narrow rows still show a
        few characters instead of a negative width.
        """
        cfg = self.config
        budget = (width
                  - cfg.marker_width
                  - (cfg.line_number_width if show_line_numbers else 0)
                  - cfg.status_width
                  - cfg.date_width
                  - cfg.time_width
                  - 3 * display_width(cfg.separator))
        return max(cfg.min_description_width, budget)

    def render_line(self, task: Task, index: int, selected: bool, options: RowOptions, now: datetime) -> str:
        """
        Render one task as a row of exactly options.width columns.

        Layout:
            marker [line no.] status date description time

        Args:
            task: Task to render
            index: Position of the task in the list (0-based)
            selected: Whether the cursor is on this row
            options: Row width and display toggles
            now: Current time, for the live elapsed time

        Returns:
            Row text
        """
        cfg = self.config
        marker = cfg.cursor_marker if selected else cfg.indent_marker
        marker = pad_display(marker, cfg.marker_width)

        line_number = ""
        if options.show_line_numbers:
            line_number = pad_display(f"{index + 1:3d}. ", cfg.line_number_width)

        status = pad_display(cfg.status_labels[task.status], cfg.status_width)
        date_part = pad_display(self.format_date(task.created_at, options.calendar), cfg.date_width)
        time_part = pad_display(self.format_time(task, now), cfg.time_width, align="right")

        budget = self.description_budget(options.width, options.show_line_numbers)
        description = pad_display(truncate_display(task.description, budget, cfg.ellipsis), budget)

        sep = cfg.separator
        line = f"{marker}{line_number}{status}{sep}{date_part}{sep}{description}{sep}{time_part}"
        return pad_display(line, options.width)

    def render_rows(self, tasks: Sequence[Task], cursor: int, rows: range, options: RowOptions,
                    now: datetime) -> List[str]:
        """Render the tasks whose indices fall in rows."""
        return [
            self.render_line(tasks[i], i, i == cursor, options, now)
            for i in rows
            if 0 <= i < len(tasks)
        ]

    def render_placeholder(self, width: int, height: int) -> List[str]:
        """
        Render the empty-list message centered in a width x height block.

        Returns:
            Exactly max(1, height) lines of width columns
        """
        height = max(1, height)
        message = trim_display(self.config.empty_message, width)
        lines = [" " * width for _ in range(height)]
        lines[(height - 1) // 2] = pad_display(message, width, align="center")
        return lines
