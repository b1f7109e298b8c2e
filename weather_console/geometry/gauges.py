"""Dial geometry for the temperature, humidity and wind gauges.

Angles are compass style: 0 degrees points up (north) and angles grow
clockwise. Points are in screen coordinates with y growing downwards, so an
angle ``a`` on a circle of radius ``r`` lands at
``(cx + r*cos(a - 90), cy + r*sin(a - 90))``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from weather_console.gui.model import ChannelCategory
from weather_console.telemetry.readings import (
    DEFAULT_FALLBACK,
    RawState,
    compass_point,
    display_value,
    is_absent,
    parse_state,
)

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class ColorRamp:
    """Gradient endpoints plus the matching text color."""

    low: str
    high: str
    text: str


UNKNOWN_COLORS = ColorRamp(low="#555", high="#333", text="#888")

# (inclusive upper bound, colors); the last entry catches everything above
_TEMPERATURE_BANDS: Tuple[Tuple[float, ColorRamp], ...] = (
    (32, ColorRamp("#4fc3f7", "#0288d1", "#4fc3f7")),
    (50, ColorRamp("#4dd0e1", "#006064", "#4dd0e1")),
    (65, ColorRamp("#81c784", "#388e3c", "#81c784")),
    (75, ColorRamp("#fff176", "#f9a825", "#ffe57f")),
    (85, ColorRamp("#ffb74d", "#e65100", "#ffa726")),
    (95, ColorRamp("#ef9a9a", "#c62828", "#ef5350")),
    (math.inf, ColorRamp("#ce93d8", "#6a1b9a", "#ba68c8")),
)
# (exclusive upper bound, colors)
_HUMIDITY_BANDS: Tuple[Tuple[float, ColorRamp], ...] = (
    (25, ColorRamp("#81d4fa", "#0277bd", "#29b6f6")),
    (45, ColorRamp("#a5d6a7", "#2e7d32", "#66bb6a")),
    (65, ColorRamp("#b39ddb", "#4527a0", "#9575cd")),
    (math.inf, ColorRamp("#7c4dff", "#311b92", "#7c4dff")),
)

GAUGE_DOMAINS: Dict[ChannelCategory, Tuple[float, float]] = {
    ChannelCategory.TEMPERATURE: (0.0, 120.0),
    ChannelCategory.HUMIDITY: (0.0, 100.0),
}


def color_ramp(category: ChannelCategory, value: RawState) -> ColorRamp:
    number = parse_state(value)
    domain = GAUGE_DOMAINS.get(category)
    if number is None or domain is None:
        return UNKNOWN_COLORS
    if not domain[0] <= number <= domain[1]:
        return UNKNOWN_COLORS
    if category is ChannelCategory.TEMPERATURE:
        return next(colors for bound, colors in _TEMPERATURE_BANDS if number <= bound)
    return next(colors for bound, colors in _HUMIDITY_BANDS if number < bound)


def sweep_fraction(category: ChannelCategory, value: RawState) -> Optional[float]:
    """Position of ``value`` inside the category domain, clamped to ``[0, 1]``."""
    number = parse_state(value)
    domain = GAUGE_DOMAINS.get(category)
    if number is None or domain is None:
        return None
    low, high = domain
    return min(max((number - low) / (high - low), 0.0), 1.0)


def polar_point(cx: float, cy: float, radius: float, degrees: float) -> Point:
    radians = math.radians(degrees - 90.0)
    return (cx + radius * math.cos(radians), cy + radius * math.sin(radians))


@dataclass(frozen=True, slots=True)
class Arc:
    center: Point
    radius: float
    start_deg: float
    end_deg: float

    @property
    def start(self) -> Point:
        return polar_point(self.center[0], self.center[1], self.radius, self.start_deg)

    @property
    def end(self) -> Point:
        return polar_point(self.center[0], self.center[1], self.radius, self.end_deg)

    @property
    def large_arc(self) -> bool:
        return self.end_deg - self.start_deg > 180.0


@dataclass(frozen=True, slots=True)
class Dial:
    """Fixed proportions of a gauge face."""

    size: float
    radius: float
    start_deg: float
    sweep_deg: float
    track_width: float

    @property
    def center(self) -> Point:
        return (self.size / 2.0, self.size / 2.0)


PRIMARY_DIAL = Dial(size=140.0, radius=55.0, start_deg=148.0, sweep_deg=244.0, track_width=12.0)
COMPACT_DIAL = Dial(size=95.0, radius=95.0 * 0.36, start_deg=135.0, sweep_deg=270.0, track_width=95.0 * 0.11)


@dataclass(frozen=True, slots=True)
class TextAnchor:
    x: float
    y: float
    text: str
    role: str


@dataclass(frozen=True, slots=True)
class Segment:
    start: Point
    end: Point
    major: bool = False


@dataclass(frozen=True, slots=True)
class Needle:
    """Compass needle: head and tail segments from the hub plus a triangular arrowhead."""

    hub: Point
    tip: Point
    tail: Point
    arrowhead: Tuple[Point, Point, Point]
    degrees: float


@dataclass(slots=True)
class GaugeMarkers:
    """Secondary inputs of a gauge; each one is optional."""

    high: RawState = None
    low: RawState = None
    direction_degrees: RawState = None
    direction_label: RawState = None
    gust: RawState = None
    unit: str = ""


@dataclass(slots=True)
class GaugeGeometry:
    category: ChannelCategory
    dial: Dial
    value: Optional[float]
    text: str
    fraction: Optional[float]
    colors: ColorRamp
    track: Arc
    fill: Optional[Arc] = None
    labels: List[TextAnchor] = field(default_factory=list)


@dataclass(slots=True)
class WindGaugeGeometry:
    center: Point
    radius: float
    speed_text: str
    direction_text: str
    needle: Optional[Needle]
    ticks: List[Segment] = field(default_factory=list)
    labels: List[TextAnchor] = field(default_factory=list)


def _value_labels(
    category: ChannelCategory,
    dial: Dial,
    text: str,
    markers: GaugeMarkers,
    decimals: int,
    fallback: str,
) -> List[TextAnchor]:
    cx, cy = dial.center
    labels: List[TextAnchor] = []
    if dial == PRIMARY_DIAL:
        labels.append(TextAnchor(cx, cy + 10, text, "value"))
        labels.append(TextAnchor(cx + 28, cy - 4, "°", "unit"))
        if not is_absent(markers.high):
            labels.append(TextAnchor(cx - 26, cy - 18, f"↑ {display_value(markers.high, decimals, fallback)}°", "high"))
        if not is_absent(markers.low):
            labels.append(TextAnchor(cx - 26, cy + 26, f"↓ {display_value(markers.low, decimals, fallback)}°", "low"))
        return labels

    if category is ChannelCategory.HUMIDITY:
        labels.append(TextAnchor(cx, cy + dial.size * 0.07, f"{text}%", "value"))
    else:
        labels.append(TextAnchor(cx, cy + dial.size * 0.07, text, "value"))
        labels.append(TextAnchor(cx + dial.radius * 0.7, cy - dial.radius * 0.5, "°", "unit"))
    return labels


def gauge(
    category: ChannelCategory,
    value: RawState,
    markers: Optional[GaugeMarkers] = None,
    dial: Dial = PRIMARY_DIAL,
    decimals: int = 1,
    fallback: str = DEFAULT_FALLBACK,
) -> Union[GaugeGeometry, "WindGaugeGeometry"]:
    """Build the dial geometry for one reading.

    Temperature and humidity readings sweep an arc over their domain; a wind
    speed reading produces a compass whose needle comes from
    ``markers.direction_degrees``.
    """
    markers = markers or GaugeMarkers()
    if category is ChannelCategory.WIND_SPEED:
        return wind_gauge(
            value,
            markers.direction_degrees,
            direction_label=markers.direction_label,
            gust=markers.gust,
            unit=markers.unit,
            decimals=decimals,
            fallback=fallback,
        )
    if category not in GAUGE_DOMAINS:
        raise ValueError(f"No gauge defined for category '{category.value}'")

    number = parse_state(value)
    fraction = sweep_fraction(category, value)
    center = dial.center
    track = Arc(center, dial.radius, dial.start_deg, dial.start_deg + dial.sweep_deg)
    fill = None
    if fraction is not None:
        # a fill spanning the whole sweep would close the circle; stop one degree short
        end = min(dial.start_deg + fraction * dial.sweep_deg, dial.start_deg + dial.sweep_deg - 1.0)
        fill = Arc(center, dial.radius, dial.start_deg, end)

    text = display_value(value, decimals, fallback)
    return GaugeGeometry(
        category=category,
        dial=dial,
        value=number,
        text=text,
        fraction=fraction,
        colors=color_ramp(category, value),
        track=track,
        fill=fill,
        labels=_value_labels(category, dial, text, markers, decimals, fallback),
    )


def wind_direction_label(
    raw_label: RawState,
    degrees: RawState,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """Descriptive label if the host sent one, else the compass point of ``degrees``."""
    if not is_absent(raw_label) and parse_state(raw_label) is None:
        return str(raw_label).strip()
    point = compass_point(parse_state(degrees))
    return point if point is not None else fallback


def wind_needle(center: Point, radius: float, degrees: float) -> Needle:
    cx, cy = center
    head_len = radius * 0.72
    tail_len = radius * 0.28
    tip = polar_point(cx, cy, head_len, degrees)
    tail = polar_point(cx, cy, -tail_len, degrees)
    base_x, base_y = polar_point(cx, cy, head_len - 10.0, degrees)
    half_width = 5.0
    perp = math.radians(degrees)  # perpendicular to the needle in screen space
    offset_x = half_width * math.cos(perp)
    offset_y = half_width * math.sin(perp)
    arrowhead = (
        tip,
        (base_x + offset_x, base_y + offset_y),
        (base_x - offset_x, base_y - offset_y),
    )
    return Needle(hub=center, tip=tip, tail=tail, arrowhead=arrowhead, degrees=degrees)


def wind_gauge(
    speed: RawState,
    direction_degrees: RawState,
    direction_label: RawState = None,
    gust: RawState = None,
    unit: str = "",
    decimals: int = 1,
    fallback: str = DEFAULT_FALLBACK,
    size: float = 140.0,
    radius: float = 52.0,
) -> WindGaugeGeometry:
    center = (size / 2.0, size / 2.0)
    cx, cy = center
    degrees = parse_state(direction_degrees)
    needle = wind_needle(center, radius, degrees) if degrees is not None else None

    ticks = []
    for angle in range(0, 360, 45):
        major = angle % 90 == 0
        outer = radius + 1.0
        inner = outer - (8.0 if major else 5.0)
        ticks.append(Segment(polar_point(cx, cy, outer, angle), polar_point(cx, cy, inner, angle), major))

    speed_text = display_value(speed, decimals, fallback)
    direction_text = wind_direction_label(direction_label, direction_degrees, fallback)
    labels = [
        TextAnchor(cx, cy - radius + 13, "N", "cardinal"),
        TextAnchor(cx, cy + radius - 3, "S", "cardinal"),
        TextAnchor(cx + radius - 3, cy + 4, "E", "cardinal"),
        TextAnchor(cx - radius + 3, cy + 4, "W", "cardinal"),
        TextAnchor(cx - 22, cy - 22, direction_text, "direction"),
        TextAnchor(cx, cy + 18, speed_text, "value"),
        TextAnchor(cx, cy + 30, f"Gust {display_value(gust, decimals, fallback)}", "gust"),
        TextAnchor(cx, cy + 41, unit, "unit"),
    ]
    return WindGaugeGeometry(
        center=center,
        radius=radius,
        speed_text=speed_text,
        direction_text=direction_text,
        needle=needle,
        ticks=ticks,
        labels=labels,
    )
