"""Terminal display-width helpers.

Storage length and on-screen width differ for wide characters (CJK, most
emoji) and zero-width ones (combining marks, variation selectors). Every
width computation in the list renderer goes through these helpers.
"""
from wcwidth import wcwidth

ELLIPSIS = "..."


def char_width(ch: str) -> int:
    """Return the number of columns a single character occupies."""
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    return sum(char_width(ch) for ch in text)


def trim_display(text: str, width: int) -> str:
    """Trim text so visible width doesn't exceed width.

    Characters are never split: a wide character that would straddle the
    limit is dropped entirely.
    """
    acc = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def truncate_display(text: str, width: int, ellipsis: str = ELLIPSIS) -> str:
    """Shorten text to at most width columns, marking the cut with an ellipsis.

    Text that already fits is returned unchanged. Otherwise the longest
    prefix fitting in ``width - display_width(ellipsis)`` columns is kept
    and the ellipsis appended.
    """
    if display_width(text) <= width:
        return text
    budget = max(0, width - display_width(ellipsis))
    return trim_display(text, budget) + ellipsis


def pad_display(text: str, width: int, align: str = "left") -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    gap = width - display_width(trimmed)
    if gap <= 0:
        return trimmed
    if align == "right":
        return " " * gap + trimmed
    if align == "center":
        left = gap // 2
        return " " * left + trimmed + " " * (gap - left)
    return trimmed + " " * gap
