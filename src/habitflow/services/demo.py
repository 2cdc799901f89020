"""Deterministic demo data for a fresh session."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from ..logging_config import get_logger
from ..models.calendar_day import CalendarDay
from .habits import HabitInput, HabitService

logger = get_logger(__name__)

DEMO_HABITS = [
    HabitInput(
        title="Water",
        icon_name="drop.fill",
        color_hex="00FFFF",
        goal_times_per_week=7,
        reminder_hour=10,
        reminder_minute=0,
    ),
    HabitInput(
        title="Workout",
        icon_name="figure.strengthtraining.traditional",
        color_hex="8A2BE2",
        goal_times_per_week=3,
        reminder_hour=19,
        reminder_minute=30,
    ),
    HabitInput(
        title="Reading",
        icon_name="book.fill",
        color_hex="34C759",
        goal_times_per_week=5,
        reminder_hour=21,
        reminder_minute=0,
    ),
]


@dataclass
class SeedSummary:
    habits: int
    records: int
    completed: int


def demo_score(seed: int, habit_index: int, day: CalendarDay) -> float:
    """Stable pseudo-random value in [0, 1) for a habit on a (month, day)."""

    key = f"{seed}:{habit_index}:{day.month}:{day.day}".encode("utf-8")
    digest = hashlib.blake2b(key, digest_size=8).digest()
    return int.from_bytes(digest, "big") / 2**64


def seed_demo_data(
    service: HabitService,
    *,
    today: CalendarDay,
    days: int = 60,
    seed: int = 0,
    tz: Optional[tzinfo] = None,
) -> SeedSummary:
    """Create the starter habits and ``days`` days of history ending today.

    A habit is completed on a day when its score falls below
    ``min(1, goal_times_per_week / 7)``, so completion rates track the weekly goals.
    """

    first_day = today.add_days(-(days - 1)) if days > 0 else today
    created_at = first_day.to_datetime(tz)
    records = 0
    completed = 0
    for index, template in enumerate(DEMO_HABITS):
        habit = service.add_habit(template, created_at=created_at)
        threshold = min(1.0, habit.goal_times_per_week / 7)
        for offset in range(days):
            day = first_day.add_days(offset)
            count = 1 if demo_score(seed, index, day) < threshold else 0
            service.set_completed_count(habit.id, day, count)
            records += 1
            completed += count

    summary = SeedSummary(habits=len(DEMO_HABITS), records=records, completed=completed)
    logger.info(
        "Demo data seeded",
        extra={"habits": summary.habits, "records": summary.records, "completed": summary.completed, "seed": seed},
    )
    return summary


__all__ = ["DEMO_HABITS", "SeedSummary", "demo_score", "seed_demo_data"]
