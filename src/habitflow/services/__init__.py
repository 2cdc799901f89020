"""Service module exports."""

from . import aggregation, demo, export_csv, habits, presentation

__all__ = [
    "aggregation",
    "demo",
    "export_csv",
    "habits",
    "presentation",
]
