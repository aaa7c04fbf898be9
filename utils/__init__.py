"""Utility modules for tasktimer.

This package provides duration formatting, terminal display-width handling
and calendar conversion.

Modules:
    time_utils: Duration formatting utilities
    text_width: wcwidth-based truncation and padding
    jalali: Gregorian to Jalali date conversion
"""
from utils.time_utils import format_duration
from utils.text_width import display_width, truncate_display, pad_display

__all__ = ["format_duration", "display_width", "truncate_display", "pad_display"]
