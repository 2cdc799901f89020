"""SQLModel implementation of the habit repository."""

from __future__ import annotations

import uuid
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.calendar_day import UTC
from ...models.habit import Habit


def _normalize(habit: Habit) -> Habit:
    # SQLite drops tzinfo; stored timestamps are UTC.
    if habit.created_at is not None and habit.created_at.tzinfo is None:
        habit.created_at = habit.created_at.replace(tzinfo=UTC)
    return habit


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
                _normalize(obj)
            return obj

    def list_all(self, include_archived: bool = False) -> list[Habit]:
        """List habits newest first (ties by title), optionally including archived ones."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(
                Habit.created_at.desc(),  # type: ignore[attr-defined]
                Habit.title,
                Habit.id,
            )
            if not include_archived:
                statement = statement.where(Habit.is_active == True)  # noqa: E712
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return [_normalize(row) for row in rows]

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        return self.list_all(include_archived=False)

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return _normalize(habit)

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            existing = session.get(Habit, habit.id)
            if existing is None:
                raise LookupError(f"Habit {habit.id} does not exist")
            for field in (
                "title",
                "icon_name",
                "color_hex",
                "goal_times_per_week",
                "reminder_hour",
                "reminder_minute",
                "is_active",
            ):
                setattr(existing, field, getattr(habit, field))
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return _normalize(existing)

    def delete(self, habit_id: uuid.UUID) -> None:
        """Delete a habit by ID."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()
