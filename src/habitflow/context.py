"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import BaseConfig
from .domain.repositories import CompletionStore, HabitRepository
from .infra.database import bootstrap_database
from .infra.repositories import (
    InMemoryCompletionStore,
    InMemoryHabitRepository,
    SQLModelCompletionStore,
    SQLModelHabitRepository,
)
from .logging_config import get_logger
from .models.calendar_day import CalendarDay
from .services.aggregation import CompletionAggregator
from .services.habits import HabitService

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Owns the stores and the services built on top of them."""

    config: BaseConfig
    habit_repo: HabitRepository
    completion_store: CompletionStore
    habit_service: HabitService
    aggregator: CompletionAggregator

    # Set only for the SQLite backend
    engine: Optional[Any] = None
    session_factory: Optional[Callable] = None

    def today(self) -> CalendarDay:
        return self.aggregator.today()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    today: Optional[Callable[[], CalendarDay]] = None,
) -> AppContext:
    """Create the stores selected by ``config.STORAGE`` and wire the services."""

    if config is None:
        config = BaseConfig()

    engine = None
    session_factory = None
    if config.uses_database:
        engine, session_factory = bootstrap_database(config)
        habit_repo = SQLModelHabitRepository(session_factory)
        completion_store = SQLModelCompletionStore(session_factory)
    else:
        habit_repo = InMemoryHabitRepository()
        completion_store = InMemoryCompletionStore()

    aggregator = CompletionAggregator(habit_repo, completion_store, tz=config.TIMEZONE, today=today)
    logger.debug("App context created", extra={"storage": config.STORAGE})

    return AppContext(
        config=config,
        habit_repo=habit_repo,
        completion_store=completion_store,
        habit_service=HabitService(habit_repo, completion_store),
        aggregator=aggregator,
        engine=engine,
        session_factory=session_factory,
    )
