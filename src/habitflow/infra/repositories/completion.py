"""SQLModel implementation of the completion record store."""

from __future__ import annotations

import uuid
from typing import Callable, Optional

from sqlalchemy import delete, func
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.calendar_day import CalendarDay
from ...models.habit import CompletionRecord
from .history import RecordHistory

logger = get_logger(__name__)


class SQLModelCompletionStore:
    """Durable completion store; one row per (habit_id, occurred_on)."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    @staticmethod
    def _select_one(habit_id: uuid.UUID, day: CalendarDay):
        return (
            select(CompletionRecord)
            .where(CompletionRecord.habit_id == habit_id)
            .where(CompletionRecord.occurred_on == day.to_date())
        )

    def get(self, habit_id: uuid.UUID, day: CalendarDay) -> Optional[CompletionRecord]:
        with self.session_factory() as session:
            obj = session.exec(self._select_one(habit_id, day)).first()
            if obj:
                session.expunge(obj)
            return obj

    def is_completed(self, habit_id: uuid.UUID, day: CalendarDay) -> bool:
        record = self.get(habit_id, day)
        return bool(record and record.is_completed)

    def set_completed_count(
        self, habit_id: uuid.UUID, day: CalendarDay, count: int
    ) -> CompletionRecord:
        with self.session_factory() as session:
            record = session.exec(self._select_one(habit_id, day)).first()
            if record is None:
                record = CompletionRecord.for_day(habit_id, day, count)
            else:
                record.set_completed_count(count)
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            logger.debug(
                "Completion count set",
                extra={"habit_id": str(habit_id), "day": str(day), "count": record.completed_count},
            )
            return record

    def toggle(self, habit_id: uuid.UUID, day: CalendarDay) -> CompletionRecord:
        with self.session_factory() as session:
            record = session.exec(self._select_one(habit_id, day)).first()
            if record is None:
                record = CompletionRecord.for_day(habit_id, day, 1)
            else:
                record.set_completed_count(0 if record.is_completed else 1)
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def _load_for_habit(self, habit_id: uuid.UUID) -> list[CompletionRecord]:
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(CompletionRecord).where(CompletionRecord.habit_id == habit_id)
                ).all()
            )
            session.expunge_all()
            return rows

    def records_for(self, habit_id: uuid.UUID) -> RecordHistory:
        return RecordHistory(lambda: self._load_for_habit(habit_id))

    def records_between(
        self, habit_id: uuid.UUID, start: CalendarDay, end: CalendarDay
    ) -> list[CompletionRecord]:
        with self.session_factory() as session:
            statement = (
                select(CompletionRecord)
                .where(CompletionRecord.habit_id == habit_id)
                .where(CompletionRecord.occurred_on >= start.to_date())
                .where(CompletionRecord.occurred_on <= end.to_date())
                .order_by(CompletionRecord.occurred_on)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def records_on(self, day: CalendarDay) -> list[CompletionRecord]:
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(CompletionRecord).where(CompletionRecord.occurred_on == day.to_date())
                ).all()
            )
            session.expunge_all()
            return rows

    def records_in_range(self, start: CalendarDay, end: CalendarDay) -> list[CompletionRecord]:
        with self.session_factory() as session:
            statement = (
                select(CompletionRecord)
                .where(CompletionRecord.occurred_on >= start.to_date())
                .where(CompletionRecord.occurred_on <= end.to_date())
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def delete_for_habit(self, habit_id: uuid.UUID) -> int:
        with self.session_factory() as session:
            removed = session.exec(
                select(func.count(CompletionRecord.id)).where(CompletionRecord.habit_id == habit_id)
            ).one()
            session.execute(delete(CompletionRecord).where(CompletionRecord.habit_id == habit_id))
            session.commit()
        if removed:
            logger.debug("Completion records removed", extra={"habit_id": str(habit_id), "count": removed})
        return int(removed)

    def count(self) -> int:
        with self.session_factory() as session:
            return int(session.exec(select(func.count(CompletionRecord.id))).one())
