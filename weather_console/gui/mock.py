"""Mock data providers for demonstrating the console without a host."""

from __future__ import annotations

import asyncio
import math
import random
import time
from typing import Collection, Dict, List, Optional

from weather_console.io import ConsoleConfig
from weather_console.sensors import HistoryFetchError, HistoryResult, HistoryRow

MOCK_ROW_INTERVAL_S = 300.0

# logical channel -> (baseline, amplitude, period in hours)
_WAVEFORMS: Dict[str, tuple] = {
    "outdoor_temp": (68.0, 9.0, 24.0),
    "outdoor_humidity": (55.0, 15.0, 24.0),
    "feels_like": (69.0, 10.0, 24.0),
    "dew_point": (52.0, 3.0, 18.0),
    "wind_speed": (6.0, 4.0, 5.0),
    "wind_gust": (11.0, 6.0, 5.0),
    "wind_direction_degrees": (200.0, 60.0, 9.0),
    "wind_avg_10min": (5.5, 3.0, 6.0),
    "indoor_temp": (71.0, 1.5, 24.0),
    "indoor_humidity": (42.0, 4.0, 24.0),
    "pressure_abs": (29.92, 0.08, 30.0),
    "pressure_rel": (30.02, 0.08, 30.0),
    "rain_rate": (0.02, 0.02, 3.0),
    "uv_index": (3.0, 3.0, 24.0),
    "solar_radiation": (350.0, 350.0, 24.0),
    "pm25_outdoor": (9.0, 4.0, 11.0),
    "pm25_indoor": (5.0, 2.0, 13.0),
    "soil_moisture": (38.0, 2.0, 48.0),
}

_FIXED_STATES: Dict[str, str] = {
    "outdoor_temp_high": "79.3",
    "outdoor_temp_low": "58.1",
    "wind_max_daily": "18.4",
    "pressure_trend": "rising",
    "pressure_change": "0.03",
    "rain_event": "0.12",
    "rain_hourly": "0.00",
    "rain_daily": "0.31",
    "rain_weekly": "0.85",
    "rain_monthly": "2.40",
    "rain_yearly": "21.70",
    "lightning_distance": "unavailable",
    "lightning_count": "0",
    "lightning_time": "unknown",
}


def _wave(name: str, timestamp: float) -> float:
    baseline, amplitude, period_h = _WAVEFORMS[name]
    value = baseline + amplitude * math.sin(2.0 * math.pi * timestamp / (period_h * 3600.0))
    if name == "wind_direction_degrees":
        return value % 360.0
    return value


def generate_mock_states(config: ConsoleConfig, timestamp: Optional[float] = None) -> Dict[str, str]:
    """Raw states keyed by entity id, as a host push would deliver them."""
    t = timestamp if timestamp is not None else time.time()
    states: Dict[str, str] = {}
    for name, entity in config.channels.items():
        if name in _WAVEFORMS:
            states[entity] = f"{_wave(name, t) + random.uniform(-0.05, 0.05):.2f}"
        elif name in _FIXED_STATES:
            states[entity] = _FIXED_STATES[name]
    return states


class MockHistorySource:
    """Synthetic history with optional random transport failures."""

    def __init__(self, config: ConsoleConfig, failure_rate: float = 0.0, latency_s: float = 0.0) -> None:
        self._names = {entity: name for name, entity in config.channels.items()}
        self.failure_rate = failure_rate
        self.latency_s = latency_s
        self.calls = 0

    async def fetch_history(self, entity_ids: Collection[str], start: float, end: float) -> HistoryResult:
        self.calls += 1
        if self.latency_s:
            await asyncio.sleep(self.latency_s)
        if self.failure_rate and random.random() < self.failure_rate:
            raise HistoryFetchError("mock history service unavailable")
        result: HistoryResult = {}
        for entity in entity_ids:
            name = self._names.get(entity)
            if name not in _WAVEFORMS:
                continue
            rows: List[HistoryRow] = []
            t = start - (start % MOCK_ROW_INTERVAL_S) + MOCK_ROW_INTERVAL_S
            while t <= end:
                rows.append((t, f"{_wave(name, t):.2f}"))
                t += MOCK_ROW_INTERVAL_S
            result[entity] = rows
        return result
