"""Model exports."""

from .calendar_day import CalendarDay
from .grid import GridCell, month_grid
from .habit import CompletionRecord, Habit

__all__ = [
    "CalendarDay",
    "CompletionRecord",
    "GridCell",
    "Habit",
    "month_grid",
]
