"""Month grid layout used by the calendar screen."""

from __future__ import annotations

from dataclasses import dataclass

from .calendar_day import CalendarDay

GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * 7


@dataclass(frozen=True)
class GridCell:
    """One cell of the 6x7 month grid."""

    day: CalendarDay
    in_month: bool


def month_grid(year: int, month: int, first_weekday: int = 0) -> list[GridCell]:
    """Return the 42 cells of a month view.

    The grid starts on the last ``first_weekday`` on or before the 1st, so
    leading and trailing cells belong to the adjacent months.
    """

    start = CalendarDay(year, month, 1)
    grid_start = start.add_days(-start.weekday_index(first_weekday))
    cells = []
    for offset in range(GRID_CELLS):
        day = grid_start.add_days(offset)
        cells.append(GridCell(day=day, in_month=day.in_month(year, month)))
    return cells


__all__ = ["GRID_CELLS", "GridCell", "month_grid"]
