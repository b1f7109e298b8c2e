"""Interpretation and display formatting of raw channel states."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import List, Optional, Union

DEFAULT_FALLBACK = "--"
ABSENT_STATES = frozenset({"unavailable", "unknown"})

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

TREND_RISING = "↗"
TREND_FALLING = "↘"
TREND_STEADY = "→"

SYNODIC_MONTH_DAYS = 29.53
_KNOWN_NEW_MOON = datetime(2000, 1, 6, tzinfo=timezone.utc)

# (upper bound in days into the cycle, phase name)
_MOON_PHASES = (
    (1.85, "New Moon"),
    (7.38, "Waxing Crescent"),
    (9.22, "First Quarter"),
    (14.76, "Waxing Gibbous"),
    (16.61, "Full Moon"),
    (22.15, "Waning Gibbous"),
    (23.99, "Last Quarter"),
)
_MOON_EMOJI = {
    "New Moon": "\U0001F311",
    "Waxing Crescent": "\U0001F312",
    "First Quarter": "\U0001F313",
    "Waxing Gibbous": "\U0001F314",
    "Full Moon": "\U0001F315",
    "Waning Gibbous": "\U0001F316",
    "Last Quarter": "\U0001F317",
    "Waning Crescent": "\U0001F318",
}

RawState = Union[float, int, str, None]


def is_absent(raw: RawState) -> bool:
    """True for missing states: ``None``, empty strings and host sentinels."""
    if raw is None:
        return True
    if isinstance(raw, str):
        stripped = raw.strip()
        return not stripped or stripped.lower() in ABSENT_STATES
    return False


def parse_state(raw: RawState) -> Optional[float]:
    """Return the numeric value of ``raw`` or ``None`` when it is absent or not a finite number."""
    if is_absent(raw) or isinstance(raw, bool):
        return None
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def display_value(raw: RawState, decimals: int = 1, fallback: str = DEFAULT_FALLBACK) -> str:
    """Format a raw state for display.

    Numbers are rendered with ``decimals`` fixed places, descriptive tokens
    verbatim, and absent states as ``fallback``.
    """
    if is_absent(raw):
        return fallback
    value = parse_state(raw)
    if value is not None:
        return f"{value:.{decimals}f}"
    return str(raw).strip()


def format_axis_value(value: float) -> str:
    """Chart label rounding: whole numbers from magnitude 10 up, one decimal below."""
    if abs(value) >= 10:
        return f"{value:.0f}"
    return f"{value:.1f}"


def compass_point(degrees: Optional[float]) -> Optional[str]:
    """Map a bearing (0 = north, clockwise) to the nearest of 16 compass points."""
    if degrees is None or not math.isfinite(degrees):
        return None
    index = int(math.floor(degrees / 22.5 + 0.5)) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def pressure_trend_arrow(raw: RawState) -> str:
    state = "" if is_absent(raw) else str(raw).strip().lower()
    if "rising" in state or state == "up":
        return TREND_RISING
    if "falling" in state or state == "down":
        return TREND_FALLING
    return TREND_STEADY


def weather_icon(pressure: RawState, fallback: str = DEFAULT_FALLBACK) -> str:
    """Coarse forecast icon derived from barometric pressure in inHg."""
    value = parse_state(pressure)
    if value is None:
        return fallback
    if value > 30.2:
        return "☀️"
    if value > 29.8:
        return "⛅"
    if value > 29.2:
        return "☁️"
    return "⛈️"


def rain_drops(daily_rain: RawState, count: int = 4, step: float = 0.25) -> List[bool]:
    """Active flags for the rain indicator drops; drop ``i`` lights above ``i * step``."""
    value = parse_state(daily_rain)
    if value is None:
        return [False] * count
    return [value > i * step for i in range(count)]


def moon_phase(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    days = (moment - _KNOWN_NEW_MOON).total_seconds() / 86400.0
    age = days % SYNODIC_MONTH_DAYS
    for upper, name in _MOON_PHASES:
        if age < upper:
            return name
    return "Waning Crescent"


def moon_emoji(phase: str) -> str:
    return _MOON_EMOJI.get(phase, _MOON_EMOJI["New Moon"])
