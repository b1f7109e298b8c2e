import asyncio
import logging

import pytest

from weather_console.geometry import ChartPlaceholder, TrendChartGeometry
from weather_console.io import load_console_config, parse_console_config
from weather_console.orchestration import SelectionStatus, WeatherConsole
from weather_console.sensors import HistoryFetchError, StaticHistorySource

START = 1_700_000_000.0
OUTDOOR = "sensor.outdoor_temperature"


class FakeClock:
    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FailingSource:
    def __init__(self) -> None:
        self.calls = 0

    async def fetch_history(self, entity_ids, start, end):
        self.calls += 1
        raise HistoryFetchError("history service returned 503")


class GatedSource:
    """Serves one prepared result per call, each released by its own event."""

    def __init__(self, results) -> None:
        self.results = list(results)
        self.gates = []

    async def fetch_history(self, entity_ids, start, end):
        result = self.results[len(self.gates)]
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return result


class ScriptedSource:
    """Returns the prepared replies in order, repeating the last one."""

    def __init__(self, replies) -> None:
        self.replies = list(replies)
        self.calls = 0

    async def fetch_history(self, entity_ids, start, end):
        reply = self.replies[min(self.calls, len(self.replies) - 1)]
        self.calls += 1
        return reply


async def _drain(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


def _rows(*pairs):
    return [(START - ago, value) for ago, value in pairs]


def test_snapshot_of_pushed_states():
    clock = FakeClock()
    console = WeatherConsole(load_console_config(), StaticHistorySource(), clock=clock)
    console.update(OUTDOOR, "72.4")
    console.update("sensor.wind_direction_degrees", "90")
    console.update("sensor.pressure_trend", "Rising")
    console.update("sensor.barometric_pressure_abs", "30.31")
    console.update("sensor.rain_daily", "0.3")

    frame = console.snapshot()
    assert frame.outdoor_gauge.text == "72.4"
    assert frame.outdoor_gauge.colors.low == "#fff176"
    assert frame.wind_gauge.direction_text == "E"
    assert frame.wind_gauge.speed_text == "--"
    assert frame.pressure_arrow == "↗"
    assert frame.weather_icon == "☀️"
    assert frame.rain_drops == [True, True, False, False]
    assert frame.readings["outdoor_temp"].text == "72.4"
    assert frame.readings["dew_point"].text == "--"
    assert frame.trend is None


def test_unavailable_state_shows_fallback():
    console = WeatherConsole(load_console_config(), StaticHistorySource(), clock=FakeClock())
    console.update(OUTDOOR, "unavailable")
    reading = console.reading("outdoor_temp")
    assert reading.text == "--"
    assert reading.value is None
    assert console.snapshot().outdoor_gauge.fill is None


def test_push_units_and_throttled_recording():
    clock = FakeClock()
    console = WeatherConsole(load_console_config(), StaticHistorySource(), clock=clock)
    console.update("sensor.wind_speed", "4.2", unit="km/h")
    clock.now += 10.0
    console.update("sensor.wind_speed", "4.8")
    clock.now += 30.0
    console.update("sensor.wind_speed", "5.1")

    assert console.unit_for("wind_speed") == "km/h"
    assert console.reading("wind_speed").text == "5.1"
    assert [s.value for s in console.history("wind_speed")] == [4.2, 5.1]
    assert console.unit_for("wind_gust") == "mph"


def test_unmapped_channel_is_not_expandable():
    config = parse_console_config({"channels": {"outdoor_temp": OUTDOOR}})
    console = WeatherConsole(config, StaticHistorySource(), clock=FakeClock())
    console.update("sensor.soil_moisture", "40")

    reading = console.reading("soil_moisture")
    assert reading.text == "--"
    assert not reading.expandable
    assert not console.select("soil_moisture")
    assert console.selection.status is SelectionStatus.CLOSED


def test_selection_expires_lazily_without_loop():
    clock = FakeClock()
    console = WeatherConsole(load_console_config(), StaticHistorySource(), clock=clock)
    assert console.select("outdoor_temp")
    clock.now += 119.0
    assert console.snapshot().trend.channel == "outdoor_temp"
    clock.now += 1.0
    assert console.snapshot().trend is None


@pytest.mark.asyncio
async def test_reselect_fetches_history_once():
    clock = FakeClock()
    source = StaticHistorySource({OUTDOOR: _rows((900.0, "70.1"), (600.0, "70.9"), (300.0, "71.5"))})
    console = WeatherConsole(load_console_config(), source, clock=clock)

    assert console.select("outdoor_temp")
    clock.now += 5.0
    assert console.select("outdoor_temp")
    await _drain()

    assert len(source.requests) == 1
    entities, start, end = source.requests[0]
    assert entities == (OUTDOOR,)
    assert end - start == 12 * 3600.0
    assert [s.value for s in console.history("outdoor_temp")] == [70.1, 70.9, 71.5]
    console.close()


@pytest.mark.asyncio
async def test_trend_view_fills_in_after_fetch():
    clock = FakeClock()
    source = StaticHistorySource({OUTDOOR: _rows((3600.0, "68.0"), (60.0, "72.0"))})
    console = WeatherConsole(load_console_config(), source, clock=clock)

    console.select("outdoor_temp")
    assert isinstance(console.snapshot().trend.chart, ChartPlaceholder)
    await _drain()
    chart = console.snapshot().trend.chart
    assert isinstance(chart, TrendChartGeometry)
    assert chart.title == "Outdoor Temperature"
    assert chart.current_label == "72 °F"
    console.close()


@pytest.mark.asyncio
async def test_failed_fetch_keeps_cached_samples(caplog):
    clock = FakeClock()
    source = FailingSource()
    console = WeatherConsole(load_console_config(), source, clock=clock)
    console.update(OUTDOOR, "70.0")

    with caplog.at_level(logging.WARNING, logger="weather_console.orchestration.console"):
        assert await console.refresh_history(["outdoor_temp"]) is False

    assert source.calls == 1
    assert [s.value for s in console.history("outdoor_temp")] == [70.0]
    assert any("503" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_superseded_fetch_is_discarded():
    clock = FakeClock()
    stale = {OUTDOOR: _rows((900.0, "60.0"), (800.0, "61.0"))}
    fresh = {OUTDOOR: _rows((300.0, "70.0"), (200.0, "71.0"))}
    source = GatedSource([stale, fresh])
    console = WeatherConsole(load_console_config(), source, clock=clock)

    first = asyncio.create_task(console.refresh_history(["outdoor_temp"]))
    await _drain()
    second = asyncio.create_task(console.refresh_history(["outdoor_temp"]))
    await _drain()
    assert len(source.gates) == 2

    source.gates[1].set()
    assert await second
    source.gates[0].set()
    await first

    assert [s.value for s in console.history("outdoor_temp")] == [70.0, 71.0]


@pytest.mark.asyncio
async def test_channels_missing_from_result_keep_buffer():
    clock = FakeClock()
    source = StaticHistorySource({OUTDOOR: _rows((600.0, "65.0"), (300.0, "66.0"))})
    console = WeatherConsole(load_console_config(), source, clock=clock)
    console.update("sensor.indoor_temperature", "70.5")

    assert await console.refresh_history(["outdoor_temp", "indoor_temp"])
    assert [s.value for s in console.history("indoor_temp")] == [70.5]
    assert len(console.history("outdoor_temp")) == 2


@pytest.mark.asyncio
async def test_inactivity_timer_closes_view():
    config = parse_console_config(
        {"channels": {"outdoor_temp": OUTDOOR}, "options": {"selection_timeout_s": 0.3}}
    )
    console = WeatherConsole(config, StaticHistorySource())

    console.select("outdoor_temp")
    await asyncio.sleep(0.2)
    console.interact()
    await asyncio.sleep(0.2)
    assert console.selection.status is SelectionStatus.OPEN
    await asyncio.sleep(0.3)
    assert console.selection.status is SelectionStatus.CLOSED


@pytest.mark.asyncio
async def test_start_and_stop_are_idempotent():
    clock = FakeClock()
    source = StaticHistorySource({OUTDOOR: _rows((600.0, "65.0"), (300.0, "66.0"))})

    async with WeatherConsole(load_console_config(), source, clock=clock) as console:
        assert console.running
        console.start()
        await _drain()
        assert len(source.requests) == 1
        assert len(source.requests[0][0]) == len(console.config.channels)
        console.select("outdoor_temp")

    assert not console.running
    await console.stop()
    assert len(console.history("outdoor_temp")) == 2


@pytest.mark.asyncio
async def test_malformed_reply_changes_no_buffer(caplog):
    clock = FakeClock()
    indoor = "sensor.indoor_temperature"
    source = ScriptedSource([{OUTDOOR: _rows((600.0, "65.0"), (300.0, "66.0")), indoor: [(None, "70.0")]}])
    console = WeatherConsole(load_console_config(), source, clock=clock)
    console.update(OUTDOOR, "64.0")
    console.update(indoor, "70.5")

    with caplog.at_level(logging.WARNING, logger="weather_console.orchestration.console"):
        assert await console.refresh_history(["outdoor_temp", "indoor_temp"]) is False

    assert [s.value for s in console.history("outdoor_temp")] == [64.0]
    assert [s.value for s in console.history("indoor_temp")] == [70.5]
    assert any("malformed" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_non_mapping_reply_is_a_failed_fetch():
    source = ScriptedSource([[(START, "70.0")]])
    console = WeatherConsole(load_console_config(), source, clock=FakeClock())
    assert await console.refresh_history(["outdoor_temp"]) is False
    assert console.history("outdoor_temp") == ()


@pytest.mark.asyncio
async def test_refresh_loop_recovers_after_malformed_reply():
    config = parse_console_config(
        {"channels": {"outdoor_temp": OUTDOOR}, "options": {"refresh_interval_s": 0.05}}
    )
    clock = FakeClock()
    source = ScriptedSource([{OUTDOOR: [(None, "70.0")]}, {OUTDOOR: _rows((600.0, "65.0"), (300.0, "66.0"))}])

    async with WeatherConsole(config, source, clock=clock) as console:
        await asyncio.sleep(0.3)
        assert source.calls > 1
        assert console.running
        assert [s.value for s in console.history("outdoor_temp")] == [65.0, 66.0]


@pytest.mark.asyncio
async def test_selection_fetch_error_is_logged(caplog, monkeypatch):
    console = WeatherConsole(load_console_config(), StaticHistorySource(), clock=FakeClock())

    async def broken(names=None):
        raise RuntimeError("store exploded")

    monkeypatch.setattr(console, "refresh_history", broken)
    with caplog.at_level(logging.ERROR, logger="weather_console.orchestration.console"):
        console.select("outdoor_temp")
        await _drain()

    assert any(record.exc_info and "store exploded" in str(record.exc_info[1]) for record in caplog.records)
    console.close()
