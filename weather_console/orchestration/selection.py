"""Which channel's trend view is open, and when it closes on inactivity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

SELECTION_TIMEOUT_S = 120.0


class SelectionStatus(Enum):
    CLOSED = auto()
    OPEN = auto()


@dataclass(frozen=True, slots=True)
class Selection:
    channel: str
    opened_at: float


class TrendSelection:
    """Two-state machine: ``Closed`` or ``Open(channel)``.

    Every ``select`` and ``interact`` pushes the inactivity deadline to
    ``now + timeout_s``; ``expire`` closes the view once that deadline has
    passed. Time is passed in explicitly so the caller owns the clock.
    """

    def __init__(self, timeout_s: float = SELECTION_TIMEOUT_S) -> None:
        self.timeout_s = timeout_s
        self._selection: Optional[Selection] = None
        self._deadline: Optional[float] = None

    @property
    def status(self) -> SelectionStatus:
        return SelectionStatus.OPEN if self._selection else SelectionStatus.CLOSED

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def channel(self) -> Optional[str]:
        return self._selection.channel if self._selection else None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def select(self, channel: str, now: float) -> bool:
        """Open ``channel``; returns ``True`` when this is a new open that needs fresh history."""
        opened = self._selection is None or self._selection.channel != channel
        if opened:
            self._selection = Selection(channel=channel, opened_at=now)
        self._deadline = now + self.timeout_s
        return opened

    def interact(self, now: float) -> bool:
        if self._selection is None:
            return False
        self._deadline = now + self.timeout_s
        return True

    def close(self) -> bool:
        was_open = self._selection is not None
        self._selection = None
        self._deadline = None
        return was_open

    def expire(self, now: float) -> bool:
        """Close if the deadline has passed; returns ``True`` when it closed."""
        if self._deadline is None or now < self._deadline:
            return False
        return self.close()

    def remaining(self, now: float) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(self._deadline - now, 0.0)
