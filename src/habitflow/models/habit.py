"""Habit tracking data structures."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone, tzinfo
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from .calendar_day import UTC, CalendarDay


class Habit(SQLModel, table=True):
    """A user-defined habit with a weekly completion goal."""

    __tablename__: ClassVar[str] = "habit"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(nullable=False, max_length=80, index=True)
    icon_name: str = Field(default="sparkles", max_length=64)
    color_hex: str = Field(default="8A2BE2", max_length=6)
    goal_times_per_week: int = Field(default=7, nullable=False)
    reminder_hour: Optional[int] = Field(default=None)
    reminder_minute: Optional[int] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    is_active: bool = Field(default=True, nullable=False)

    @property
    def reminder(self) -> Optional[time]:
        if self.reminder_hour is None:
            return None
        return time(self.reminder_hour, self.reminder_minute or 0)

    def created_day(self, tz: Optional[tzinfo] = None) -> CalendarDay:
        """Civil day the habit was created on; naive timestamps are UTC."""

        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=UTC)
        return CalendarDay.from_datetime(created, tz)

    def copy_detached(self) -> "Habit":
        return Habit(
            id=self.id,
            title=self.title,
            icon_name=self.icon_name,
            color_hex=self.color_hex,
            goal_times_per_week=self.goal_times_per_week,
            reminder_hour=self.reminder_hour,
            reminder_minute=self.reminder_minute,
            created_at=self.created_at,
            is_active=self.is_active,
        )


class CompletionRecord(SQLModel, table=True):
    """Completion count for one habit on one calendar day."""

    __tablename__: ClassVar[str] = "completion_record"
    __table_args__: ClassVar[tuple] = (
        UniqueConstraint("habit_id", "occurred_on", name="uq_completion_habit_day"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    habit_id: uuid.UUID = Field(foreign_key="habit.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    completed_count: int = Field(default=0, nullable=False)
    # Stored alongside the count; only written by set_completed_count.
    is_completed: bool = Field(default=False, nullable=False)

    @classmethod
    def for_day(cls, habit_id: uuid.UUID, day: CalendarDay, count: int = 0) -> "CompletionRecord":
        record = cls(habit_id=habit_id, occurred_on=day.to_date())
        record.set_completed_count(count)
        return record

    @property
    def day(self) -> CalendarDay:
        return CalendarDay.from_date(self.occurred_on)

    def set_completed_count(self, value: int) -> None:
        """Set the count, clamping negatives to zero, and derive the flag."""

        self.completed_count = max(0, int(value))
        self.is_completed = self.completed_count > 0

    def copy_detached(self) -> "CompletionRecord":
        return CompletionRecord(
            id=self.id,
            habit_id=self.habit_id,
            occurred_on=self.occurred_on,
            completed_count=self.completed_count,
            is_completed=self.is_completed,
        )
