"""Session-local repositories held entirely in memory."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Optional

from ...logging_config import get_logger
from ...models.calendar_day import UTC, CalendarDay
from ...models.habit import CompletionRecord, Habit
from .history import RecordHistory

logger = get_logger(__name__)


def _aware(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


class InMemoryHabitRepository:
    """Habits keyed by id; listings are newest first, ties broken by title then id."""

    def __init__(self) -> None:
        self._habits: dict[uuid.UUID, Habit] = {}
        self._lock = threading.RLock()

    def get_by_id(self, habit_id: uuid.UUID) -> Optional[Habit]:
        with self._lock:
            habit = self._habits.get(habit_id)
            return habit.copy_detached() if habit else None

    def list_all(self, include_archived: bool = False) -> list[Habit]:
        with self._lock:
            rows = [h.copy_detached() for h in self._habits.values()]
        rows.sort(key=lambda h: (h.title, h.id.hex))
        rows.sort(key=lambda h: _aware(h.created_at), reverse=True)
        if not include_archived:
            rows = [h for h in rows if h.is_active]
        return rows

    def list_active(self) -> list[Habit]:
        return self.list_all(include_archived=False)

    def create(self, habit: Habit) -> Habit:
        with self._lock:
            self._habits[habit.id] = habit.copy_detached()
        return habit.copy_detached()

    def update(self, habit: Habit) -> Habit:
        with self._lock:
            if habit.id not in self._habits:
                raise LookupError(f"Habit {habit.id} does not exist")
            self._habits[habit.id] = habit.copy_detached()
        return habit.copy_detached()

    def delete(self, habit_id: uuid.UUID) -> None:
        with self._lock:
            self._habits.pop(habit_id, None)


class InMemoryCompletionStore:
    """Completion records keyed by (habit id, calendar day).

    Every mutation and every read runs under one lock, so readers only ever
    observe fully applied updates. Records handed out are detached copies.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[uuid.UUID, CalendarDay], CompletionRecord] = {}
        self._lock = threading.RLock()

    def get(self, habit_id: uuid.UUID, day: CalendarDay) -> Optional[CompletionRecord]:
        with self._lock:
            record = self._records.get((habit_id, day))
            return record.copy_detached() if record else None

    def is_completed(self, habit_id: uuid.UUID, day: CalendarDay) -> bool:
        with self._lock:
            record = self._records.get((habit_id, day))
            return bool(record and record.is_completed)

    def set_completed_count(
        self, habit_id: uuid.UUID, day: CalendarDay, count: int
    ) -> CompletionRecord:
        with self._lock:
            record = self._records.get((habit_id, day))
            if record is None:
                record = CompletionRecord.for_day(habit_id, day, count)
                self._records[(habit_id, day)] = record
            else:
                record.set_completed_count(count)
            logger.debug(
                "Completion count set",
                extra={"habit_id": str(habit_id), "day": str(day), "count": record.completed_count},
            )
            return record.copy_detached()

    def toggle(self, habit_id: uuid.UUID, day: CalendarDay) -> CompletionRecord:
        with self._lock:
            target = 0 if self.is_completed(habit_id, day) else 1
            return self.set_completed_count(habit_id, day, target)

    def records_for(self, habit_id: uuid.UUID) -> RecordHistory:
        def load() -> list[CompletionRecord]:
            with self._lock:
                return [
                    record.copy_detached()
                    for (owner, _), record in self._records.items()
                    if owner == habit_id
                ]

        return RecordHistory(load)

    def records_between(
        self, habit_id: uuid.UUID, start: CalendarDay, end: CalendarDay
    ) -> list[CompletionRecord]:
        with self._lock:
            rows = [
                record.copy_detached()
                for (owner, day), record in self._records.items()
                if owner == habit_id and start <= day <= end
            ]
        return sorted(rows, key=lambda r: r.occurred_on)

    def records_on(self, day: CalendarDay) -> list[CompletionRecord]:
        with self._lock:
            return [
                record.copy_detached()
                for (_, record_day), record in self._records.items()
                if record_day == day
            ]

    def records_in_range(self, start: CalendarDay, end: CalendarDay) -> list[CompletionRecord]:
        with self._lock:
            return [
                record.copy_detached()
                for (_, record_day), record in self._records.items()
                if start <= record_day <= end
            ]

    def delete_for_habit(self, habit_id: uuid.UUID) -> int:
        with self._lock:
            keys = [key for key in self._records if key[0] == habit_id]
            for key in keys:
                del self._records[key]
        if keys:
            logger.debug("Completion records removed", extra={"habit_id": str(habit_id), "count": len(keys)})
        return len(keys)

    def count(self) -> int:
        with self._lock:
            return len(self._records)
