"""Catalog of the logical channels a console can display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from weather_console.gui.model import ChannelCategory


@dataclass(frozen=True)
class ChannelSpec:
    name: str
    label: str
    unit: str
    category: ChannelCategory
    decimals: int = 1


def _spec(name: str, label: str, unit: str, category: ChannelCategory, decimals: int = 1) -> ChannelSpec:
    return ChannelSpec(name=name, label=label, unit=unit, category=category, decimals=decimals)


_T = ChannelCategory.TEMPERATURE
_H = ChannelCategory.HUMIDITY
_W = ChannelCategory.WIND_SPEED
_P = ChannelCategory.PRESSURE
_R = ChannelCategory.RAIN
_S = ChannelCategory.RADIATION
_G = ChannelCategory.GENERIC

CHANNEL_CATALOG: Dict[str, ChannelSpec] = {
    spec.name: spec
    for spec in (
        _spec("outdoor_temp", "Outdoor Temperature", "°F", _T),
        _spec("outdoor_temp_high", "Outdoor High", "°F", _T),
        _spec("outdoor_temp_low", "Outdoor Low", "°F", _T),
        _spec("outdoor_humidity", "Humidity", "%", _H, 0),
        _spec("feels_like", "Feels Like", "°F", _T),
        _spec("dew_point", "Dewpoint", "°F", _T),
        _spec("wind_speed", "Wind Speed", "mph", _W),
        _spec("wind_gust", "Wind Gust", "mph", _W),
        _spec("wind_direction", "Wind Direction", "", _G, 0),
        _spec("wind_direction_degrees", "Wind Direction", "°", _G, 0),
        _spec("wind_avg_10min", "10Min.Avg", "mph", _W),
        _spec("wind_max_daily", "Max Daily Gust", "mph", _W),
        _spec("indoor_temp", "Indoor Temperature", "°F", _T),
        _spec("indoor_humidity", "Indoor Humidity", "%", _H, 0),
        _spec("pressure_abs", "Absolute Pressure", "inHg", _P, 2),
        _spec("pressure_rel", "Relative Pressure", "inHg", _P, 2),
        _spec("pressure_trend", "Pressure Trend", "", _G, 0),
        _spec("pressure_change", "Pressure Change", "inHg", _P, 2),
        _spec("rain_rate", "Rain Rate", "in/h", _R, 2),
        _spec("rain_event", "Event Rain", "in", _R, 2),
        _spec("rain_hourly", "Hourly Rain", "in", _R, 2),
        _spec("rain_daily", "Daily Rain", "in", _R, 2),
        _spec("rain_weekly", "Weekly Rain", "in", _R, 2),
        _spec("rain_monthly", "Monthly Rain", "in", _R, 2),
        _spec("rain_yearly", "Yearly Rain", "in", _R, 2),
        _spec("uv_index", "UV Index", "", _S, 0),
        _spec("solar_radiation", "Solar Radiation", "w/m²", _S, 3),
        _spec("pm25_outdoor", "PM2.5 Outdoor", "ug/m³", _G, 0),
        _spec("pm25_indoor", "PM2.5 Indoor", "ug/m³", _G, 0),
        _spec("soil_moisture", "Soil Moisture", "%", _H, 0),
        _spec("lightning_distance", "Lightning Distance", "km", _G, 0),
        _spec("lightning_count", "Lightning Count", "", _G, 0),
        _spec("lightning_time", "Last Lightning", "min", _G, 0),
    )
}
