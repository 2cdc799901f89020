"""Completion statistics for the calendar, today and habit detail screens.

All figures are recomputed from a snapshot of the stores on every call, so
they always reflect the latest toggle. Empty denominators yield 0.0.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Iterable, Optional, Sequence

from ..domain.repositories import CompletionStore, HabitRepository
from ..models.calendar_day import UTC, CalendarDay, days_ending_at, days_of_month
from ..models.habit import Habit

WEEK_LENGTH = 7


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""

    if not values:
        return 0.0
    return sum(values) / len(values)


def compute_streaks(days: Iterable[CalendarDay], *, today: CalendarDay) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from completed days."""

    completed = set(days)

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in completed:
        current += 1
        cursor = cursor.add_days(-1)

    longest = 0
    run = 0
    last_day: Optional[CalendarDay] = None
    for day in sorted(completed):
        if last_day is not None and last_day.add_days(1) == day:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


@dataclass(frozen=True)
class DailyProgress:
    """Completed vs total active habits on one day."""

    day: CalendarDay
    completed: int
    total: int

    @property
    def ratio(self) -> float:
        if self.total <= 0:
            return 0.0
        return clamp01(self.completed / self.total)


class CompletionAggregator:
    """Derives ratios, series and rates from the habit and completion stores."""

    def __init__(
        self,
        habits: HabitRepository,
        records: CompletionStore,
        *,
        tz: Optional[tzinfo] = None,
        today: Optional[Callable[[], CalendarDay]] = None,
    ):
        self.habits = habits
        self.records = records
        self.tz = tz or UTC
        self._today = today or (lambda: CalendarDay.today(self.tz))

    def today(self) -> CalendarDay:
        return self._today()

    # ------------------------------------------------------------------
    # Daily figures
    # ------------------------------------------------------------------

    def _active_on(self, habits: Sequence[Habit], day: CalendarDay) -> list[Habit]:
        return [h for h in habits if h.is_active and h.created_day(self.tz) <= day]

    def _completed_by_day(self, days: Sequence[CalendarDay]) -> dict[CalendarDay, set[uuid.UUID]]:
        """Completed habit ids per day, from one read of the store."""

        done: dict[CalendarDay, set[uuid.UUID]] = {day: set() for day in days}
        if not days:
            return done
        for record in self.records.records_in_range(min(days), max(days)):
            if record.is_completed and record.day in done:
                done[record.day].add(record.habit_id)
        return done

    def _progress(self, habits: Sequence[Habit], day: CalendarDay, done: set[uuid.UUID]) -> DailyProgress:
        active = self._active_on(habits, day)
        completed = sum(1 for h in active if h.id in done)
        return DailyProgress(day=day, completed=completed, total=len(active))

    def daily_progress(self, day: Optional[CalendarDay] = None) -> DailyProgress:
        day = day or self.today()
        done = self._completed_by_day([day])[day]
        return self._progress(self.habits.list_active(), day, done)

    def completion_ratio(self, day: CalendarDay) -> float:
        """Share of habits active on ``day`` that were completed, in [0, 1]."""

        return self.daily_progress(day).ratio

    def completion_by_day(self, days: Iterable[CalendarDay]) -> dict[CalendarDay, float]:
        habits = self.habits.list_active()
        done = self._completed_by_day(list(days))
        return {day: self._progress(habits, day, ids).ratio for day, ids in done.items()}

    # ------------------------------------------------------------------
    # Weekly / monthly figures
    # ------------------------------------------------------------------

    def weekly_series(self, ending_day: CalendarDay) -> list[float]:
        """Seven ratios for ``[ending_day - 6, ending_day]``, oldest first."""

        days = days_ending_at(ending_day, WEEK_LENGTH)
        by_day = self.completion_by_day(days)
        return [clamp01(by_day.get(day, 0.0)) for day in days]

    def weekly_average(self, ending_day: CalendarDay) -> float:
        return mean(self.weekly_series(ending_day))

    def monthly_average(self, year: int, month: int) -> float:
        """Mean ratio over the days of the month; grid padding days are excluded."""

        by_day = self.completion_by_day(days_of_month(year, month))
        return mean([clamp01(v) for v in by_day.values()])

    # ------------------------------------------------------------------
    # Per-habit figures
    # ------------------------------------------------------------------

    def elapsed_weeks(self, habit: Habit, today: Optional[CalendarDay] = None) -> int:
        """Whole weeks since the habit was created, never less than one."""

        today = today or self.today()
        days = max(0, habit.created_day(self.tz).days_until(today))
        return max(1, days // WEEK_LENGTH)

    def completed_days(
        self,
        habit_id: uuid.UUID,
        *,
        since_days: Optional[int] = None,
        today: Optional[CalendarDay] = None,
    ) -> list[CalendarDay]:
        """Completed days for a habit up to ``today``, newest first."""

        today = today or self.today()
        start = today.add_days(-(since_days - 1)) if since_days is not None else None
        days = []
        for record in self.records.records_for(habit_id):
            if not record.is_completed or record.day > today:
                continue
            if start is not None and record.day < start:
                continue
            days.append(record.day)
        return days

    def success_rate(
        self,
        habit: Habit,
        since_days: Optional[int] = None,
        *,
        today: Optional[CalendarDay] = None,
    ) -> float:
        """Completions relative to ``goal_times_per_week * elapsed_weeks``, capped at 1."""

        today = today or self.today()
        expected = habit.goal_times_per_week * self.elapsed_weeks(habit, today)
        if expected <= 0:
            return 0.0
        if since_days is not None and since_days <= 0:
            return 0.0
        actual = len(self.completed_days(habit.id, since_days=since_days, today=today))
        return min(1.0, actual / expected)

    def streaks(self, habit_id: uuid.UUID, today: Optional[CalendarDay] = None) -> tuple[int, int]:
        """(current, longest) run of consecutive completed days."""

        today = today or self.today()
        return compute_streaks(self.completed_days(habit_id, today=today), today=today)

    def current_streak(self, habit_id: uuid.UUID, today: Optional[CalendarDay] = None) -> int:
        return self.streaks(habit_id, today)[0]

    def longest_streak(self, habit_id: uuid.UUID, today: Optional[CalendarDay] = None) -> int:
        return self.streaks(habit_id, today)[1]


__all__ = [
    "CompletionAggregator",
    "DailyProgress",
    "WEEK_LENGTH",
    "clamp01",
    "compute_streaks",
    "mean",
]
