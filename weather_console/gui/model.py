"""Data models shared between the presentation layer and the console core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Union


class ChannelCategory(Enum):
    """Semantic category of a channel; selects gauge domain and color ramp."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    WIND_SPEED = "wind-speed"
    PRESSURE = "pressure"
    RAIN = "rain"
    RADIATION = "radiation"
    GENERIC = "generic"


@dataclass(slots=True)
class ChannelReading:
    """Current display state of one logical channel."""

    name: str
    label: str
    text: str
    unit: str
    value: Optional[float] = None
    entity_id: Optional[str] = None

    @property
    def expandable(self) -> bool:
        """Only mapped channels open a trend view."""
        return self.entity_id is not None


if TYPE_CHECKING:  # pragma: no cover - for type hinting only
    from weather_console.geometry.charts import ChartPlaceholder, SparklineGeometry, TrendChartGeometry
    from weather_console.geometry.gauges import GaugeGeometry, WindGaugeGeometry


@dataclass(slots=True)
class TrendView:
    """The channel whose trend chart is open, with its geometry."""

    channel: str
    opened_at: float
    chart: Union["TrendChartGeometry", "ChartPlaceholder"]


@dataclass(slots=True)
class ConsoleSnapshot:
    """Aggregated console state for one rendered frame."""

    timestamp: float
    readings: Dict[str, ChannelReading] = field(default_factory=dict)
    outdoor_gauge: Optional["GaugeGeometry"] = None
    wind_gauge: Optional["WindGaugeGeometry"] = None
    indoor_temp_gauge: Optional["GaugeGeometry"] = None
    indoor_humidity_gauge: Optional["GaugeGeometry"] = None
    sparklines: Dict[str, Union["SparklineGeometry", "ChartPlaceholder"]] = field(default_factory=dict)
    pressure_arrow: str = "→"
    weather_icon: str = "--"
    rain_drops: List[bool] = field(default_factory=list)
    moon_phase: str = ""
    moon_emoji: str = ""
    trend: Optional[TrendView] = None
