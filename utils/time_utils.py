"""Duration formatting utilities for tasktimer."""

from datetime import timedelta

_MICROSECONDS_PER_SECOND = 1_000_000


def round_to_seconds(duration: timedelta) -> int:
    """
    Round a duration to the nearest whole second.

    Halves round away from zero, so 1.5s becomes 2s. Negative durations
    are not a meaningful elapsed time and are clamped to 0.

    Args:
        duration: Duration to round

    Returns:
        Number of whole seconds
    """
    microseconds = duration // timedelta(microseconds=1)
    if microseconds <= 0:
        return 0
    return (microseconds + _MICROSECONDS_PER_SECOND // 2) // _MICROSECONDS_PER_SECOND


def format_duration(duration: timedelta) -> str:
    """
    Format a duration as zero-padded HH:MM:SS.

    Hours are not wrapped at a day boundary: 30 hours renders as "30:00:00",
    100 hours as "100:00:00".

    Args:
        duration: Duration to format

    Returns:
        Formatted time string
    """
    total = round_to_seconds(duration)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
