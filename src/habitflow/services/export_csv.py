"""CSV export helpers for HabitFlow."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..logging_config import get_logger
from ..models.habit import CompletionRecord, Habit

logger = get_logger(__name__)

HABIT_HEADERS = [
    "id",
    "title",
    "icon_name",
    "color_hex",
    "goal_times_per_week",
    "reminder_hour",
    "reminder_minute",
    "created_at",
    "is_active",
]
COMPLETION_HEADERS = ["id", "habit_id", "occurred_on", "completed_count", "is_completed"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _write_rows(rows: Iterable[object], headers: list[str], output_path: Path) -> int:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for row in rows:
            writer.writerow({h: _serialize_value(getattr(row, h, None)) for h in headers})
            written += 1
    return written


def export_habits_csv(*, habits: Iterable[Habit], output_path: Path) -> Path:
    """Write habits to CSV at ``output_path`` and return the path."""

    count = _write_rows(habits, HABIT_HEADERS, output_path)
    logger.info("Habits exported", extra={"path": str(output_path), "rows": count})
    return output_path


def export_completions_csv(*, records: Iterable[CompletionRecord], output_path: Path) -> Path:
    """Write completion records to CSV in the order given."""

    count = _write_rows(records, COMPLETION_HEADERS, output_path)
    logger.info("Completions exported", extra={"path": str(output_path), "rows": count})
    return output_path


__all__ = ["export_completions_csv", "export_habits_csv"]
