"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("memory", "sqlite")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitFlow"
    DB_FILENAME = "habitflow.db"
    LOG_FILENAME = "habitflow.log"
    DEMO_HISTORY_DAYS = 60

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("HABITFLOW_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.TIMEZONE_NAME = os.getenv("HABITFLOW_TIMEZONE", "UTC").strip() or "UTC"
        self.TIMEZONE = self._resolve_timezone(self.TIMEZONE_NAME)
        self.FIRST_WEEKDAY = _env_int("HABITFLOW_FIRST_WEEKDAY", 0)
        if not 0 <= self.FIRST_WEEKDAY <= 6:
            raise ValueError("HABITFLOW_FIRST_WEEKDAY must be between 0 (Monday) and 6 (Sunday).")
        self.STORAGE = os.getenv("HABITFLOW_STORAGE", "memory").strip().lower()
        if self.STORAGE not in STORAGE_BACKENDS:
            raise ValueError(
                f"HABITFLOW_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}; got {self.STORAGE!r}."
            )
        self.DATABASE_URL = os.getenv("HABITFLOW_DATABASE_URL", self._build_sqlite_url())
        self.DEMO_SEED = _env_int("HABITFLOW_DEMO_SEED", 0)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs, exports and the SQLite file live."""

        data_root = os.getenv("HABITFLOW_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _resolve_timezone(name: str) -> ZoneInfo:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"HABITFLOW_TIMEZONE {name!r} is not a known IANA timezone.") from exc

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def uses_database(self) -> bool:
        return self.STORAGE == "sqlite"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}
