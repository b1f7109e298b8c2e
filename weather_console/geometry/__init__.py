"""Pure geometry for gauges, sparklines and trend charts."""

from .charts import (
    SPARKLINE_AREA,
    TREND_AREA,
    ChartPlaceholder,
    GridLine,
    PlotArea,
    SparklineGeometry,
    TimeTick,
    TrendChartGeometry,
    sparkline,
    trend_chart,
)
from .gauges import (
    COMPACT_DIAL,
    PRIMARY_DIAL,
    UNKNOWN_COLORS,
    Arc,
    ColorRamp,
    Dial,
    GaugeGeometry,
    GaugeMarkers,
    Needle,
    WindGaugeGeometry,
    color_ramp,
    gauge,
    wind_gauge,
)
from .projection import TREND_WINDOW_S, ValueRange, WindowMapping, project, samples_in_window, value_range

__all__ = [
    "COMPACT_DIAL",
    "PRIMARY_DIAL",
    "SPARKLINE_AREA",
    "TREND_AREA",
    "TREND_WINDOW_S",
    "UNKNOWN_COLORS",
    "Arc",
    "ChartPlaceholder",
    "ColorRamp",
    "Dial",
    "GaugeGeometry",
    "GaugeMarkers",
    "GridLine",
    "Needle",
    "PlotArea",
    "SparklineGeometry",
    "TimeTick",
    "TrendChartGeometry",
    "ValueRange",
    "WindGaugeGeometry",
    "WindowMapping",
    "color_ramp",
    "gauge",
    "project",
    "samples_in_window",
    "sparkline",
    "trend_chart",
    "value_range",
    "wind_gauge",
]
