"""HabitFlow habit tracking core."""

from __future__ import annotations

from .config import BaseConfig
from .context import AppContext, create_app_context

__all__ = ["AppContext", "BaseConfig", "create_app_context"]
