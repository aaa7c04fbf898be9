"""Calendar conversion for the alternate (Jalali) date display."""
from typing import Tuple

import jdatetime


def to_jalali(year: int, month: int, day: int) -> Tuple[int, int, int]:
    """
    Convert a Gregorian date to the Jalali (Solar Hijri) calendar.

    Args:
        year: Gregorian year
        month: Gregorian month (1-12)
        day: Gregorian day of month

    Returns:
        Tuple of (jalali_year, jalali_month, jalali_day)

    Example:
        >>> to_jalali(2012, 5, 19)
        (1391, 2, 30)
    """
    jalali = jdatetime.date.fromgregorian(year=year, month=month, day=day)
    return jalali.year, jalali.month, jalali.day
