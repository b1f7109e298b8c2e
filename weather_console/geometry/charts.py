"""Sparkline and trend-chart geometry over the trailing history window."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from weather_console.geometry.projection import (
    TREND_WINDOW_S,
    ValueRange,
    WindowMapping,
    project,
    samples_in_window,
)
from weather_console.telemetry.readings import format_axis_value
from weather_console.telemetry.series import Sample

Point = Tuple[float, float]

NO_DATA_MESSAGE = "Collecting history… no trend data yet"
GRID_LINE_COUNT = 5
HOUR_TICK_COUNT = 13


@dataclass(frozen=True, slots=True)
class PlotArea:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def clip(self, point: Point) -> Point:
        x = min(max(point[0], self.left), self.right)
        y = min(max(point[1], self.top), self.bottom)
        return (x, y)


SPARKLINE_AREA = PlotArea(left=0.0, top=2.0, width=120.0, height=24.0)
TREND_AREA = PlotArea(left=44.0, top=16.0, width=544.0, height=216.0)


@dataclass(slots=True)
class ChartPlaceholder:
    """Stand-in returned when the window holds fewer than two samples."""

    area: PlotArea
    message: str = NO_DATA_MESSAGE
    sample_count: int = 0


@dataclass(slots=True)
class SparklineGeometry:
    area: PlotArea
    points: List[Point]
    area_path: List[Point]
    values: ValueRange
    latest: Point


@dataclass(frozen=True, slots=True)
class GridLine:
    y: float
    value: float
    label: str


@dataclass(frozen=True, slots=True)
class TimeTick:
    x: float
    hours_ago: int
    label: Optional[str]


@dataclass(slots=True)
class TrendChartGeometry:
    area: PlotArea
    title: str
    unit: str
    points: List[Point]
    area_path: List[Point]
    values: ValueRange
    grid: List[GridLine] = field(default_factory=list)
    ticks: List[TimeTick] = field(default_factory=list)
    current_label: str = ""


def _polyline(samples: Sequence[Sample], mapping: WindowMapping, area: PlotArea) -> List[Point]:
    xs = area.left + mapping.xs([s.timestamp for s in samples]) * area.width
    ys = area.top + mapping.ys([s.value for s in samples]) * area.height
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def _area_path(points: List[Point], area: PlotArea) -> List[Point]:
    """Closed outline from the polyline down to the baseline, kept inside ``area``."""
    clipped = [area.clip(p) for p in points]
    baseline = area.bottom
    return clipped + [(clipped[-1][0], baseline), (clipped[0][0], baseline)]


def _windowed(samples: Sequence[Sample], now: float, window_s: float):
    in_window = samples_in_window(samples, now, window_s)
    return in_window, project(in_window, now, window_s)


def sparkline(
    samples: Sequence[Sample],
    now: float,
    area: PlotArea = SPARKLINE_AREA,
    window_s: float = TREND_WINDOW_S,
) -> Union[SparklineGeometry, ChartPlaceholder]:
    in_window, mapping = _windowed(samples, now, window_s)
    if mapping is None:
        return ChartPlaceholder(area=area, sample_count=len(in_window))
    points = _polyline(in_window, mapping, area)
    return SparklineGeometry(
        area=area,
        points=points,
        area_path=_area_path(points, area),
        values=mapping.values,
        latest=points[-1],
    )


def grid_lines(values: ValueRange, area: PlotArea, count: int = GRID_LINE_COUNT) -> List[GridLine]:
    """Evenly spaced horizontal lines from the range maximum (top) to its minimum."""
    levels = np.linspace(values.maximum, values.minimum, count)
    positions = np.linspace(area.top, area.bottom, count)
    return [GridLine(y=float(y), value=float(v), label=format_axis_value(float(v))) for y, v in zip(positions, levels)]


def hour_ticks(area: PlotArea, count: int = HOUR_TICK_COUNT) -> List[TimeTick]:
    """Hourly ticks from ``-(count-1)h`` to now; every second tick is labelled."""
    last = count - 1
    ticks = []
    for index, x in enumerate(np.linspace(area.left, area.right, count)):
        hours_ago = last - index
        label = None
        if index == last:
            label = "now"
        elif index % 2 == 0:
            label = f"-{hours_ago}h"
        ticks.append(TimeTick(x=float(x), hours_ago=hours_ago, label=label))
    return ticks


def trend_chart(
    samples: Sequence[Sample],
    now: float,
    label: str,
    unit: str,
    area: PlotArea = TREND_AREA,
    window_s: float = TREND_WINDOW_S,
) -> Union[TrendChartGeometry, ChartPlaceholder]:
    """Full trend view of one channel over the trailing window."""
    in_window, mapping = _windowed(samples, now, window_s)
    if mapping is None:
        return ChartPlaceholder(area=area, sample_count=len(in_window))
    points = _polyline(in_window, mapping, area)
    latest_value = in_window[-1].value
    return TrendChartGeometry(
        area=area,
        title=label,
        unit=unit,
        points=points,
        area_path=_area_path(points, area),
        values=mapping.values,
        grid=grid_lines(mapping.values, area),
        ticks=hour_ticks(area),
        current_label=f"{format_axis_value(latest_value)} {unit}".strip(),
    )
