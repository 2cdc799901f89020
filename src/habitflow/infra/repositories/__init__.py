"""Concrete repository implementations (in-memory and SQLModel)."""

from .completion import SQLModelCompletionStore
from .habit import SQLModelHabitRepository
from .history import RecordHistory
from .memory import InMemoryCompletionStore, InMemoryHabitRepository

__all__ = [
    "InMemoryCompletionStore",
    "InMemoryHabitRepository",
    "RecordHistory",
    "SQLModelCompletionStore",
    "SQLModelHabitRepository",
]
