"""Channel readings and history caching."""

from .readings import (
    DEFAULT_FALLBACK,
    compass_point,
    display_value,
    format_axis_value,
    is_absent,
    moon_emoji,
    moon_phase,
    parse_state,
    pressure_trend_arrow,
    rain_drops,
    weather_icon,
)
from .series import RECORD_INTERVAL_S, RETENTION_S, HistoryBuffer, Sample, SampleStore, parse_rows

__all__ = [
    "DEFAULT_FALLBACK",
    "RECORD_INTERVAL_S",
    "RETENTION_S",
    "HistoryBuffer",
    "Sample",
    "SampleStore",
    "compass_point",
    "display_value",
    "format_axis_value",
    "is_absent",
    "moon_emoji",
    "moon_phase",
    "parse_rows",
    "parse_state",
    "pressure_trend_arrow",
    "rain_drops",
    "weather_icon",
]
