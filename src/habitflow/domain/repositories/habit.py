"""Habit repository protocol."""

from __future__ import annotations

import uuid
from typing import Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Repository for managing habit entities."""

    def get_by_id(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, include_archived: bool = False) -> list[Habit]:
        """List habits newest first, optionally including archived ones."""
        ...

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: uuid.UUID) -> None:
        """Delete a habit by ID."""
        ...
