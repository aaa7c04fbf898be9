"""Viewport and layout calculations for the task list.

The list is one row per task, so row index and task index are the same
number. Everything here is plain integer arithmetic with no terminal access.
"""
from dataclasses import dataclass
from enum import Enum

# Outer padding around the whole screen (left+right, top+bottom)
APP_HORIZONTAL_PADDING = 2
APP_VERTICAL_PADDING = 2

MIN_VIEWPORT_HEIGHT = 1
MIN_VIEWPORT_WIDTH = 1
MIN_INPUT_WIDTH = 10


class Mode(Enum):
    """What the session is currently doing."""
    VIEWING = "viewing"
    ADDING = "adding"


@dataclass(frozen=True)
class ChromeHeights:
    """Rows taken by the bands around the task list.

    The error band only counts while an error is shown and the input area
    only counts in adding mode.
    """
    title: int = 2
    stats: int = 2
    calendar: int = 2
    help: int = 1
    error: int = 4
    input_area: int = 7
    viewport_frame: int = 2  # Top and bottom border of the list
    viewport_frame_width: int = 2  # Left and right border of the list
    input_frame_width: int = 6  # Input area border + padding + input border
    input_prompt_width: int = 10  # "New Task: "


@dataclass(frozen=True)
class Layout:
    """Result of a layout pass."""
    viewport_width: int
    viewport_height: int
    input_width: int


def compute_layout(width: int, height: int, mode: Mode, chrome: ChromeHeights = ChromeHeights(),
                   show_error: bool = False) -> Layout:
    """
    Split the terminal between the chrome bands and the task list.

    Used for the first layout and for every resize.

    Args:
        width: Terminal width in columns
        height: Terminal height in rows
        mode: Current session mode
        chrome: Heights of the fixed bands
        show_error: Whether the error band is displayed

    Returns:
        Layout with the list viewport size and the text input width
    """
    available_width = width - APP_HORIZONTAL_PADDING
    available_height = height - APP_VERTICAL_PADDING

    available_height -= chrome.title + chrome.stats + chrome.calendar + chrome.help
    if show_error:
        available_height -= chrome.error
    if mode is Mode.ADDING:
        available_height -= chrome.input_area

    viewport_width = max(MIN_VIEWPORT_WIDTH, available_width - chrome.viewport_frame_width)
    viewport_height = max(MIN_VIEWPORT_HEIGHT, available_height - chrome.viewport_frame)
    input_width = max(MIN_INPUT_WIDTH,
                      available_width - chrome.input_frame_width - chrome.input_prompt_width)
    return Layout(viewport_width=viewport_width, viewport_height=viewport_height, input_width=input_width)


def ensure_cursor_visible(cursor: int, offset: int, height: int, count: int) -> int:
    """
    Scroll just enough to bring the cursor row into the window.

    Args:
        cursor: Selected row index
        offset: Current first visible row
        height: Number of visible rows
        count: Number of rows in the list

    Returns:
        New first visible row
    """
    if count <= 0:
        return 0
    if cursor < offset:
        return cursor
    if cursor >= offset + height:
        return cursor - height + 1
    return offset


def move_cursor(cursor: int, delta: int, count: int) -> int:
    """
    Move the cursor by delta rows without wrapping.

    A single step past either end leaves the cursor where it is; larger
    jumps stop at the first or last row.
    """
    if count <= 0:
        return 0
    return min(max(cursor + delta, 0), count - 1)


def clamp_cursor(cursor: int, count: int) -> int:
    """Clamp the cursor into the list, or 0 if the list is empty."""
    if count <= 0:
        return 0
    return min(max(cursor, 0), count - 1)


@dataclass
class Viewport:
    """Visible window onto the task list."""
    offset: int = 0
    height: int = MIN_VIEWPORT_HEIGHT
    width: int = 80

    def resize(self, width: int, height: int):
        """Set the window size, clamping both sides to their minimum."""
        self.width = max(MIN_VIEWPORT_WIDTH, width)
        self.height = max(MIN_VIEWPORT_HEIGHT, height)

    def max_offset(self, count: int) -> int:
        return max(0, count - self.height)

    def follow(self, cursor: int, count: int) -> int:
        """
        Scroll so the cursor row is visible.

        After the minimal scroll the offset is clamped so the window never
        runs past the last row when there are enough rows to fill it.

        Returns:
            The new offset
        """
        offset = ensure_cursor_visible(cursor, self.offset, self.height, count)
        self.offset = min(max(offset, 0), self.max_offset(count))
        return self.offset

    def visible_range(self, count: int) -> range:
        """Indices of the rows inside the window."""
        return range(self.offset, min(count, self.offset + self.height))
