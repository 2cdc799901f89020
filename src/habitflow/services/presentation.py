"""Display formatting for ratios, dates and relative-day labels.

Month and weekday names come from the ``calendar`` module and therefore follow
the process LC_TIME locale.
"""

from __future__ import annotations

import calendar
from typing import Optional

from ..models.calendar_day import CalendarDay
from .aggregation import clamp01

DATE_STYLES = ("full", "long", "short")


def percent(ratio: float) -> int:
    """Integer percentage for a ratio, ``round(ratio * 100)``.

    Exact halves round to the even neighbour, so 0.125 gives 12 and 0.375 gives 38.
    """

    return int(round(clamp01(ratio) * 100))


def format_percent(ratio: float) -> str:
    return f"{percent(ratio)}%"


def relative_day_label(day: CalendarDay, today: CalendarDay) -> str:
    """Label a past day relative to ``today``.

    Thresholds are plain day counts (7 per week, 30 per month) and the
    wording never switches to singular, e.g. 8 days back is "1 weeks ago".
    """

    diff = day.days_until(today)
    if diff <= 0:
        return "today"
    if diff == 1:
        return "yesterday"
    if diff < 7:
        return f"{diff} days ago"
    if diff < 30:
        return f"{diff // 7} weeks ago"
    return f"{diff // 30} months ago"


def habit_age_label(created: CalendarDay, today: CalendarDay) -> str:
    """Short "tracked for" label shown on the habit detail screen."""

    days = max(0, created.days_until(today))
    if days == 0:
        return "today"
    if days == 1:
        return "1 day"
    if days < 7:
        return f"{days} days"
    if days < 30:
        return f"{days // 7} wk"
    return f"{days // 30} mo"


def format_day(day: CalendarDay, style: str = "long") -> str:
    if style not in DATE_STYLES:
        raise ValueError(f"Unknown date style {style!r}; expected one of {', '.join(DATE_STYLES)}")
    if style == "short":
        return f"{day.day} {calendar.month_abbr[day.month]} {day.year}"
    text = f"{day.day} {calendar.month_name[day.month]} {day.year}"
    if style == "full":
        return f"{calendar.day_name[day.to_date().weekday()]}, {text}"
    return text


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def weekday_symbols(first_weekday: int = 0) -> list[str]:
    """Short weekday names starting at ``first_weekday`` (0=Monday)."""

    return [calendar.day_abbr[(first_weekday + i) % 7] for i in range(7)]


def format_reminder(hour: Optional[int], minute: Optional[int]) -> Optional[str]:
    if hour is None:
        return None
    return f"{hour:02d}:{(minute or 0):02d}"


__all__ = [
    "DATE_STYLES",
    "format_day",
    "format_percent",
    "format_reminder",
    "habit_age_label",
    "month_title",
    "percent",
    "relative_day_label",
    "weekday_symbols",
]
