"""Abstractions for the remote history source."""

from __future__ import annotations

from typing import Collection, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

# (timestamp, raw state) as delivered by the host's history service
HistoryRow = Tuple[float, Optional[str]]
HistoryResult = Dict[str, List[HistoryRow]]


class HistoryFetchError(RuntimeError):
    """Raised by history sources when a bulk fetch fails (transport, permissions)."""


class HistorySource(Protocol):
    """Interface for asynchronous bulk history providers."""

    async def fetch_history(self, entity_ids: Collection[str], start: float, end: float) -> HistoryResult:
        """Return per-entity rows between ``start`` and ``end``, oldest first."""
        raise NotImplementedError


class StaticHistorySource:
    """History source serving fixed rows; records every request it receives."""

    def __init__(self, rows: Optional[Mapping[str, Sequence[HistoryRow]]] = None) -> None:
        self.rows: Dict[str, List[HistoryRow]] = {k: list(v) for k, v in (rows or {}).items()}
        self.requests: List[Tuple[Tuple[str, ...], float, float]] = []

    async def fetch_history(self, entity_ids: Collection[str], start: float, end: float) -> HistoryResult:
        self.requests.append((tuple(sorted(entity_ids)), start, end))
        return {
            entity: [row for row in self.rows[entity] if start <= row[0] <= end]
            for entity in entity_ids
            if entity in self.rows
        }
