import pytest

from weather_console.geometry import (
    COMPACT_DIAL,
    PRIMARY_DIAL,
    UNKNOWN_COLORS,
    GaugeMarkers,
    WindGaugeGeometry,
    color_ramp,
    gauge,
    wind_gauge,
)
from weather_console.geometry.gauges import polar_point, wind_direction_label
from weather_console.gui.model import ChannelCategory

YELLOW = ("#fff176", "#f9a825", "#ffe57f")


def _triple(colors):
    return (colors.low, colors.high, colors.text)


def test_temperature_above_domain_clamps_to_full_sweep():
    geometry = gauge(ChannelCategory.TEMPERATURE, 150)
    assert geometry.fraction == 1.0
    assert geometry.track.end_deg == PRIMARY_DIAL.start_deg + PRIMARY_DIAL.sweep_deg
    # full fill stops one degree short of the track end
    assert geometry.fill.end_deg == pytest.approx(391.0)


def test_temperature_below_domain_clamps_to_zero():
    geometry = gauge(ChannelCategory.TEMPERATURE, "-12")
    assert geometry.fraction == 0.0
    assert geometry.fill.end_deg == geometry.fill.start_deg


def test_temperature_sweep_fraction_and_text():
    geometry = gauge(ChannelCategory.TEMPERATURE, "60.0")
    assert geometry.fraction == pytest.approx(0.5)
    assert geometry.fill.end_deg == pytest.approx(148.0 + 122.0)
    assert geometry.text == "60.0"
    assert _triple(geometry.colors) == ("#81c784", "#388e3c", "#81c784")


def test_non_numeric_value_has_no_fill_and_unknown_colors():
    geometry = gauge(ChannelCategory.TEMPERATURE, "unavailable")
    assert geometry.fill is None
    assert geometry.fraction is None
    assert geometry.colors == UNKNOWN_COLORS
    assert geometry.text == "--"


@pytest.mark.parametrize(
    "value, expected_low",
    [(32, "#4fc3f7"), (32.1, "#4dd0e1"), (50, "#4dd0e1"), (72.4, "#fff176"), (85, "#ffb74d"), (95, "#ef9a9a"), (96, "#ce93d8")],
)
def test_temperature_color_bands(value, expected_low):
    assert color_ramp(ChannelCategory.TEMPERATURE, value).low == expected_low


def test_out_of_domain_colors_are_unknown():
    assert color_ramp(ChannelCategory.TEMPERATURE, 150) == UNKNOWN_COLORS
    assert color_ramp(ChannelCategory.HUMIDITY, 101) == UNKNOWN_COLORS
    assert color_ramp(ChannelCategory.PRESSURE, 29.9) == UNKNOWN_COLORS


@pytest.mark.parametrize(
    "value, expected_low",
    [(0, "#81d4fa"), (24.9, "#81d4fa"), (25, "#a5d6a7"), (45, "#b39ddb"), (65, "#7c4dff"), (100, "#7c4dff")],
)
def test_humidity_color_bands(value, expected_low):
    assert color_ramp(ChannelCategory.HUMIDITY, value).low == expected_low


def test_compact_humidity_dial():
    geometry = gauge(ChannelCategory.HUMIDITY, "50", dial=COMPACT_DIAL, decimals=0)
    assert geometry.fraction == pytest.approx(0.5)
    assert geometry.track.start_deg == 135.0
    assert geometry.track.end_deg == 405.0
    assert geometry.fill.end_deg == pytest.approx(270.0)
    assert [label.text for label in geometry.labels if label.role == "value"] == ["50%"]


def test_primary_dial_markers():
    geometry = gauge(ChannelCategory.TEMPERATURE, "72.4", GaugeMarkers(high="79.3", low="unavailable"))
    roles = {label.role: label.text for label in geometry.labels}
    assert roles["value"] == "72.4"
    assert roles["high"] == "↑ 79.3°"
    assert "low" not in roles
    assert _triple(geometry.colors) == YELLOW


def test_arc_endpoints_follow_compass_angles():
    center = PRIMARY_DIAL.center
    x, y = polar_point(center[0], center[1], 10.0, 90.0)
    assert (x, y) == pytest.approx((center[0] + 10.0, center[1]))
    geometry = gauge(ChannelCategory.TEMPERATURE, 60)
    assert geometry.track.large_arc
    assert geometry.fill.start == pytest.approx(geometry.track.start)


def test_gauge_rejects_categories_without_dial():
    with pytest.raises(ValueError):
        gauge(ChannelCategory.RAIN, 0.3)


def test_wind_category_builds_compass():
    geometry = gauge(ChannelCategory.WIND_SPEED, "7.2", GaugeMarkers(direction_degrees="90", gust="12", unit="mph"))
    assert isinstance(geometry, WindGaugeGeometry)
    assert geometry.direction_text == "E"
    assert geometry.speed_text == "7.2"


def test_wind_needle_points_along_direction():
    geometry = wind_gauge("5", "90")
    needle = geometry.needle
    cx, cy = geometry.center
    assert needle.tip == pytest.approx((cx + 52.0 * 0.72, cy))
    assert needle.tail == pytest.approx((cx - 52.0 * 0.28, cy))
    # arrowhead base sits 10px behind the tip, 5px either side
    assert needle.arrowhead[1] == pytest.approx((cx + 52.0 * 0.72 - 10.0, cy + 5.0))
    assert needle.arrowhead[2] == pytest.approx((cx + 52.0 * 0.72 - 10.0, cy - 5.0))


def test_wind_needle_omitted_without_direction():
    geometry = wind_gauge("5", "unavailable")
    assert geometry.needle is None
    assert geometry.direction_text == "--"
    assert len(geometry.ticks) == 8
    assert sum(1 for tick in geometry.ticks if tick.major) == 4


def test_wind_direction_label_prefers_descriptive_state():
    assert wind_direction_label("Northwest", "90") == "Northwest"
    assert wind_direction_label("270", "90") == "E"
    assert wind_direction_label(None, "359") == "N"
    assert wind_direction_label("unknown", None, fallback="?") == "?"
