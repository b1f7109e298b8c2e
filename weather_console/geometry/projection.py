"""Linear mapping of a trailing time window onto a normalised plot area."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from weather_console.telemetry.series import Sample

TREND_WINDOW_S = 12 * 3600.0
MIN_VALUE_SPAN = 0.5


@dataclass(frozen=True, slots=True)
class ValueRange:
    minimum: float
    maximum: float

    @property
    def span(self) -> float:
        return self.maximum - self.minimum


def value_range(values: Sequence[float], min_span: float = MIN_VALUE_SPAN) -> ValueRange:
    """Min/max of ``values``, widened symmetrically to ``min_span`` when flatter than that."""
    if len(values) == 0:
        raise ValueError("value_range requires at least one value")
    low = float(min(values))
    high = float(max(values))
    if high - low < min_span:
        middle = (low + high) / 2.0
        low = middle - min_span / 2.0
        high = middle + min_span / 2.0
    return ValueRange(minimum=low, maximum=high)


def samples_in_window(samples: Sequence[Sample], now: float, window_s: float = TREND_WINDOW_S) -> Tuple[Sample, ...]:
    start = now - window_s
    return tuple(s for s in samples if start <= s.timestamp <= now)


@dataclass(frozen=True, slots=True)
class WindowMapping:
    """Maps (time, value) to fractions of the plot area.

    ``to_x`` runs left to right across ``[start, end]``; ``to_y`` is inverted so
    the range maximum lands at 0 (top) and the minimum at 1 (bottom). Neither
    clips.
    """

    start: float
    end: float
    values: ValueRange

    def to_x(self, timestamp: float) -> float:
        return (timestamp - self.start) / (self.end - self.start)

    def to_y(self, value: float) -> float:
        return (self.values.maximum - value) / self.values.span

    def xs(self, timestamps) -> np.ndarray:
        return (np.asarray(timestamps, dtype=np.float64) - self.start) / (self.end - self.start)

    def ys(self, values) -> np.ndarray:
        return (self.values.maximum - np.asarray(values, dtype=np.float64)) / self.values.span


def project(samples: Sequence[Sample], now: float, window_s: float = TREND_WINDOW_S) -> Optional[WindowMapping]:
    """Build the mapping for ``samples`` over ``[now - window_s, now]``.

    Returns ``None`` when fewer than two samples are given; callers render a
    placeholder in that case.
    """
    if len(samples) < 2:
        return None
    if window_s <= 0:
        raise ValueError("window_s must be positive")
    return WindowMapping(
        start=now - window_s,
        end=now,
        values=value_range([s.value for s in samples]),
    )
