"""Lazy, restartable view over a habit's completion history."""

from __future__ import annotations

from typing import Callable, Iterator, Sequence

from ...models.habit import CompletionRecord


class RecordHistory:
    """Iterable that reloads a fresh snapshot every time it is iterated.

    Records come out newest day first.
    """

    def __init__(self, loader: Callable[[], Sequence[CompletionRecord]]):
        self._loader = loader

    def __iter__(self) -> Iterator[CompletionRecord]:
        snapshot = sorted(self._loader(), key=lambda r: r.occurred_on, reverse=True)
        return iter(snapshot)

    def completed(self) -> list[CompletionRecord]:
        """Snapshot of completed records only."""

        return [record for record in self if record.is_completed]
