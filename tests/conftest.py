"""Pytest configuration and shared fixtures for HabitFlow tests.

Stores are created fresh for every test; the SQLite fixtures use a temporary
database file so nothing touches the real data directory.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitflow import models  # noqa: F401  (registers tables on the metadata)
from habitflow.infra.database import create_session_factory
from habitflow.infra.repositories import (
    InMemoryCompletionStore,
    InMemoryHabitRepository,
    SQLModelCompletionStore,
    SQLModelHabitRepository,
)
from habitflow.logging_config import ROOT_LOGGER_NAME
from habitflow.models.calendar_day import UTC, CalendarDay
from habitflow.models.habit import Habit
from habitflow.services.aggregation import CompletionAggregator
from habitflow.services.habits import HabitService

TODAY = CalendarDay(2024, 3, 20)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Point configuration at a temp data dir and reset env-driven settings."""

    for name in (
        "HABITFLOW_TIMEZONE",
        "HABITFLOW_FIRST_WEEKDAY",
        "HABITFLOW_STORAGE",
        "HABITFLOW_DATABASE_URL",
        "HABITFLOW_DEMO_SEED",
        "HABITFLOW_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path / "data"))
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def today() -> CalendarDay:
    return TODAY


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def habit_repo() -> InMemoryHabitRepository:
    return InMemoryHabitRepository()


@pytest.fixture
def completion_store() -> InMemoryCompletionStore:
    return InMemoryCompletionStore()


@pytest.fixture
def habit_service(habit_repo, completion_store) -> HabitService:
    return HabitService(habit_repo, completion_store)


@pytest.fixture
def aggregator(habit_repo, completion_store, today) -> CompletionAggregator:
    return CompletionAggregator(habit_repo, completion_store, tz=UTC, today=lambda: today)


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture(params=["memory", "sqlite"])
def any_completion_store(request):
    """Each completion store implementation in turn."""

    if request.param == "memory":
        return InMemoryCompletionStore()
    return SQLModelCompletionStore(request.getfixturevalue("session_factory"))


@pytest.fixture(params=["memory", "sqlite"])
def any_habit_repo(request):
    """Each habit repository implementation in turn."""

    if request.param == "memory":
        return InMemoryHabitRepository()
    return SQLModelHabitRepository(request.getfixturevalue("session_factory"))


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_repo, today):
    """Factory for creating habits directly in the in-memory repository."""

    def _create_habit(
        title: str = "Test Habit",
        goal_times_per_week: int = 7,
        created_days_ago: int = 30,
        is_active: bool = True,
        created_at: datetime | None = None,
    ) -> Habit:
        """Create a habit created ``created_days_ago`` days before ``today``."""

        habit = Habit(
            title=title,
            goal_times_per_week=goal_times_per_week,
            created_at=created_at or today.add_days(-created_days_ago).to_datetime(UTC),
            is_active=is_active,
        )
        return habit_repo.create(habit)

    return _create_habit
