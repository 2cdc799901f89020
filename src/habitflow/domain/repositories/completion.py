"""Completion record store protocol."""

from __future__ import annotations

import uuid
from typing import Iterable, Optional, Protocol

from ...models.calendar_day import CalendarDay
from ...models.habit import CompletionRecord


class CompletionStore(Protocol):
    """At most one record per (habit, day); counts are clamped, never rejected."""

    def get(self, habit_id: uuid.UUID, day: CalendarDay) -> Optional[CompletionRecord]:
        """Return the record for a habit on a day, if any."""
        ...

    def is_completed(self, habit_id: uuid.UUID, day: CalendarDay) -> bool:
        ...

    def set_completed_count(
        self, habit_id: uuid.UUID, day: CalendarDay, count: int
    ) -> CompletionRecord:
        """Upsert the (habit, day) record with ``max(0, count)``."""
        ...

    def toggle(self, habit_id: uuid.UUID, day: CalendarDay) -> CompletionRecord:
        """Flip completion: completed becomes 0, otherwise 1."""
        ...

    def records_for(self, habit_id: uuid.UUID) -> Iterable[CompletionRecord]:
        """Restartable iterable of a habit's records, newest day first."""
        ...

    def records_between(
        self, habit_id: uuid.UUID, start: CalendarDay, end: CalendarDay
    ) -> list[CompletionRecord]:
        """Records for a habit within ``[start, end]``, oldest first."""
        ...

    def records_on(self, day: CalendarDay) -> list[CompletionRecord]:
        """All records on a day, across habits."""
        ...

    def records_in_range(self, start: CalendarDay, end: CalendarDay) -> list[CompletionRecord]:
        """All records within ``[start, end]`` across habits, read as one snapshot."""
        ...

    def delete_for_habit(self, habit_id: uuid.UUID) -> int:
        """Remove every record of a habit; returns how many were removed."""
        ...

    def count(self) -> int:
        ...
