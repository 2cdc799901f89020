"""Database infrastructure for the optional SQLite backend."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(config: BaseConfig):
    """Create SQLModel engine from configuration."""
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine) -> None:
    """Initialize database schema."""
    # Import models so their tables are registered on the metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine):
    """Create a session factory function."""

    @contextmanager
    def factory() -> Iterator[Session]:
        """Create a new session that commits on success and rolls back on error."""
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple:
    """Create engine + session factory with schema init.

    Returns (engine, session_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
