"""In-memory history buffers for trend plotting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from weather_console.telemetry.readings import parse_state

RETENTION_S = 12 * 3600.0
RECORD_INTERVAL_S = 30.0

RawValue = Union[float, int, str, None]


@dataclass(frozen=True, slots=True)
class Sample:
    """Single timestamped observation of one channel."""

    timestamp: float
    value: float


@dataclass
class HistoryBuffer:
    """Chronologically ordered samples of one channel within a retention window."""

    retention_s: float = RETENTION_S
    _samples: List[Sample] = field(default_factory=list, init=False)

    def append(self, sample: Sample) -> None:
        self._samples.append(sample)
        self._prune()

    def replace(self, samples: Iterable[Sample]) -> None:
        by_timestamp: Dict[float, Sample] = {}
        for sample in samples:
            by_timestamp[sample.timestamp] = sample
        self._samples = sorted(by_timestamp.values(), key=lambda s: s.timestamp)
        self._prune()

    def _prune(self) -> None:
        if not self._samples:
            return
        cutoff = self._samples[-1].timestamp - self.retention_s
        if self._samples[0].timestamp >= cutoff:
            return
        self._samples = [s for s in self._samples if s.timestamp >= cutoff]

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def snapshot(self) -> Tuple[Sample, ...]:
        return tuple(self._samples)

    def latest(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None


def parse_rows(rows: Iterable[Tuple[float, RawValue]]) -> List[Sample]:
    """Convert ``(timestamp, raw)`` rows to samples, skipping non-numeric states.

    A row whose timestamp is not a finite number raises ``ValueError``.
    """
    samples: List[Sample] = []
    for row in rows:
        try:
            timestamp, raw = row
            timestamp = float(timestamp)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Malformed history row {row!r}") from exc
        if not math.isfinite(timestamp):
            raise ValueError(f"Malformed history row {row!r}")
        number = parse_state(raw)
        if number is None:
            continue
        samples.append(Sample(timestamp=timestamp, value=number))
    return samples


class SampleStore:
    """Per-channel history cache fed by throttled pushes and bulk refreshes.

    Locally observed values are appended at most once per ``record_interval_s``
    so a high-frequency push stream turns into a coarse series. A bulk refresh
    is authoritative: it replaces whatever was accumulated locally.
    """

    def __init__(
        self,
        record_interval_s: float = RECORD_INTERVAL_S,
        retention_s: float = RETENTION_S,
    ) -> None:
        self.record_interval_s = record_interval_s
        self.retention_s = retention_s
        self._buffers: Dict[str, HistoryBuffer] = {}

    def _buffer(self, channel: str) -> HistoryBuffer:
        buffer = self._buffers.get(channel)
        if buffer is None:
            buffer = HistoryBuffer(retention_s=self.retention_s)
            self._buffers[channel] = buffer
        return buffer

    def record_current(self, channel: str, value: RawValue, now: float) -> bool:
        """Append ``value`` unless the last sample is younger than the record interval.

        Returns ``True`` when a sample was appended.
        """
        number = parse_state(value)
        if number is None:
            return False
        latest = self._buffers[channel].latest() if channel in self._buffers else None
        if latest is not None and now - latest.timestamp < self.record_interval_s:
            return False
        self._buffer(channel).append(Sample(timestamp=float(now), value=number))
        return True

    def merge_bulk(self, channel: str, samples: Iterable[Tuple[float, RawValue]]) -> int:
        """Replace the channel's buffer with the numeric entries of ``samples``.

        Returns the number of samples kept. Raises ``ValueError`` on a row
        without a usable timestamp; the buffer is left untouched then.
        """
        return self.replace(channel, parse_rows(samples))

    def replace(self, channel: str, samples: Iterable[Sample]) -> int:
        buffer = self._buffer(channel)
        buffer.replace(samples)
        return len(buffer)

    def buffer_for(self, channel: str) -> Tuple[Sample, ...]:
        buffer = self._buffers.get(channel)
        return buffer.snapshot() if buffer is not None else ()

    def channels(self) -> List[str]:
        return sorted(self._buffers)
