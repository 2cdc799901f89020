"""Habit lifecycle: create, edit, archive, delete and today's toggle."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..domain.repositories import CompletionStore, HabitRepository
from ..logging_config import get_logger
from ..models.calendar_day import CalendarDay
from ..models.habit import CompletionRecord, Habit

logger = get_logger(__name__)

HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{6}$")
MAX_TITLE_LENGTH = 80
MAX_WEEKLY_GOAL = 14
DEFAULT_ICON = "sparkles"
DEFAULT_COLOR = "8A2BE2"


class HabitValidationError(ValueError):
    """Raised when habit input fails validation."""


class HabitNotFoundError(LookupError):
    """Raised when an operation targets a habit id that does not exist."""


@dataclass
class HabitInput:
    """User-entered habit fields as submitted by the add/edit form."""

    title: str
    icon_name: str = DEFAULT_ICON
    color_hex: str = DEFAULT_COLOR
    goal_times_per_week: int = 7
    reminder_hour: Optional[int] = None
    reminder_minute: Optional[int] = None


def validate_habit_input(data: HabitInput) -> HabitInput:
    """Return a normalized copy of ``data`` or raise HabitValidationError."""

    title = (data.title or "").strip()
    if not title:
        raise HabitValidationError("Habit title must not be empty.")
    if len(title) > MAX_TITLE_LENGTH:
        raise HabitValidationError(f"Habit title must be at most {MAX_TITLE_LENGTH} characters.")

    color = (data.color_hex or "").strip().lstrip("#").upper()
    if not HEX_COLOR.match(color):
        raise HabitValidationError(f"Color must be 6 hex digits, got {data.color_hex!r}.")

    if not 1 <= int(data.goal_times_per_week) <= MAX_WEEKLY_GOAL:
        raise HabitValidationError(f"Weekly goal must be between 1 and {MAX_WEEKLY_GOAL}.")

    hour, minute = data.reminder_hour, data.reminder_minute
    if hour is None and minute is not None:
        raise HabitValidationError("Reminder minute given without an hour.")
    if hour is not None:
        minute = 0 if minute is None else minute
        if not 0 <= hour <= 23:
            raise HabitValidationError("Reminder hour must be between 0 and 23.")
        if not 0 <= minute <= 59:
            raise HabitValidationError("Reminder minute must be between 0 and 59.")

    return HabitInput(
        title=title,
        icon_name=(data.icon_name or DEFAULT_ICON).strip() or DEFAULT_ICON,
        color_hex=color,
        goal_times_per_week=int(data.goal_times_per_week),
        reminder_hour=hour,
        reminder_minute=minute,
    )


class HabitService:
    """Coordinates the habit repository and the completion store."""

    def __init__(self, habits: HabitRepository, records: CompletionStore):
        self.habits = habits
        self.records = records

    def add_habit(self, data: HabitInput, *, created_at: Optional[datetime] = None) -> Habit:
        clean = validate_habit_input(data)
        habit = Habit(
            title=clean.title,
            icon_name=clean.icon_name,
            color_hex=clean.color_hex,
            goal_times_per_week=clean.goal_times_per_week,
            reminder_hour=clean.reminder_hour,
            reminder_minute=clean.reminder_minute,
            created_at=created_at or datetime.now(timezone.utc),
        )
        created = self.habits.create(habit)
        logger.info("Habit created", extra={"habit_id": str(created.id), "title": created.title})
        return created

    def _require(self, habit_id: uuid.UUID) -> Habit:
        habit = self.habits.get_by_id(habit_id)
        if habit is None:
            raise HabitNotFoundError(f"Habit {habit_id} does not exist")
        return habit

    def update_habit(self, habit_id: uuid.UUID, data: HabitInput) -> Habit:
        habit = self._require(habit_id)
        clean = validate_habit_input(data)
        habit.title = clean.title
        habit.icon_name = clean.icon_name
        habit.color_hex = clean.color_hex
        habit.goal_times_per_week = clean.goal_times_per_week
        habit.reminder_hour = clean.reminder_hour
        habit.reminder_minute = clean.reminder_minute
        updated = self.habits.update(habit)
        logger.info("Habit updated", extra={"habit_id": str(habit_id)})
        return updated

    def archive_habit(self, habit_id: uuid.UUID) -> Habit:
        """Hide a habit from listings and statistics; its records are kept."""

        habit = self._require(habit_id)
        habit.is_active = False
        archived = self.habits.update(habit)
        logger.info("Habit archived", extra={"habit_id": str(habit_id)})
        return archived

    def delete_habit(self, habit_id: uuid.UUID) -> int:
        """Delete a habit and cascade to its completion records.

        Unknown ids are ignored. Returns the number of records removed.
        """

        removed = self.records.delete_for_habit(habit_id)
        self.habits.delete(habit_id)
        logger.info("Habit deleted", extra={"habit_id": str(habit_id), "records_removed": removed})
        return removed

    def toggle(self, habit_id: uuid.UUID, day: CalendarDay) -> CompletionRecord:
        self._require(habit_id)
        return self.records.toggle(habit_id, day)

    def set_completed_count(
        self, habit_id: uuid.UUID, day: CalendarDay, count: int
    ) -> CompletionRecord:
        self._require(habit_id)
        return self.records.set_completed_count(habit_id, day, count)


__all__ = [
    "HabitInput",
    "HabitNotFoundError",
    "HabitService",
    "HabitValidationError",
    "validate_habit_input",
]
