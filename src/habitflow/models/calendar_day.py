"""Civil calendar day used as the grouping key for completion records."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


@dataclass(frozen=True, order=True)
class CalendarDay:
    """A (year, month, day) triple with no time-of-day component.

    Ordering is lexicographic on the fields, which matches chronological order.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Delegate range checks to datetime.date (raises ValueError).
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDay":
        if isinstance(value, datetime):
            value = value.date()
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_datetime(cls, value: datetime, tz: Optional[tzinfo] = None) -> "CalendarDay":
        """Return the civil day of ``value`` in ``tz``.

        Naive timestamps are taken as already expressed in ``tz``.
        """

        tz = tz or UTC
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls, tz: Optional[tzinfo] = None) -> "CalendarDay":
        return cls.from_datetime(datetime.now(tz or UTC), tz)

    @classmethod
    def parse(cls, text: str) -> "CalendarDay":
        """Parse an ISO ``YYYY-MM-DD`` string."""

        return cls.from_date(date.fromisoformat(text.strip()))

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Return the aware timestamp for the start of this day in ``tz``."""

        return datetime.combine(self.to_date(), time.min, tzinfo=tz or UTC)

    def add_days(self, days: int) -> "CalendarDay":
        return CalendarDay.from_date(self.to_date() + timedelta(days=days))

    def days_until(self, other: "CalendarDay") -> int:
        """Signed number of days from this day to ``other``."""

        return (other.to_date() - self.to_date()).days

    def weekday_index(self, first_weekday: int = 0) -> int:
        """Position of this day within a week that starts on ``first_weekday``.

        ``first_weekday`` uses the ``datetime`` convention (0=Monday .. 6=Sunday).
        """

        return (self.to_date().weekday() - first_weekday) % 7

    def month_start(self) -> "CalendarDay":
        return CalendarDay(self.year, self.month, 1)

    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def in_month(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month

    def isoformat(self) -> str:
        return self.to_date().isoformat()

    def __str__(self) -> str:
        return self.isoformat()


def days_of_month(year: int, month: int) -> list[CalendarDay]:
    """All civil days belonging to the given month, in order."""

    last = calendar.monthrange(year, month)[1]
    return [CalendarDay(year, month, d) for d in range(1, last + 1)]


def days_ending_at(end: CalendarDay, count: int) -> list[CalendarDay]:
    """``count`` consecutive days ending at ``end`` inclusive, oldest first."""

    return [end.add_days(offset) for offset in range(-(count - 1), 1)]


__all__ = ["CalendarDay", "UTC", "days_ending_at", "days_of_month"]
