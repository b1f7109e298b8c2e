"""Console composition: pushes, history refreshes, selection timing and snapshots."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from weather_console.geometry import (
    COMPACT_DIAL,
    PRIMARY_DIAL,
    ChartPlaceholder,
    GaugeMarkers,
    TrendChartGeometry,
    gauge,
    sparkline,
    trend_chart,
    wind_gauge,
)
from weather_console.gui.model import ChannelCategory, ChannelReading, ConsoleSnapshot, TrendView
from weather_console.io import CHANNEL_CATALOG, ConsoleConfig
from weather_console.orchestration.selection import TrendSelection
from weather_console.sensors import HistorySource
from weather_console.telemetry import (
    Sample,
    SampleStore,
    display_value,
    moon_emoji,
    moon_phase,
    parse_rows,
    parse_state,
    pressure_trend_arrow,
    rain_drops,
    weather_icon,
)
from weather_console.telemetry.readings import RawState

logger = logging.getLogger(__name__)


class WeatherConsole:
    """Coordinates the history cache, the trend selection and the geometry builders.

    All mutation happens on the event loop that called :meth:`start`; bulk
    fetches are the only suspension points and their results are applied in
    one step once they resolve.
    """

    def __init__(
        self,
        config: ConsoleConfig,
        history_source: HistorySource,
        clock: Callable[[], float] = time.time,
        store: Optional[SampleStore] = None,
        selection: Optional[TrendSelection] = None,
    ) -> None:
        options = config.options
        self.config = config
        self.history_source = history_source
        self.clock = clock
        self.store = store or SampleStore(
            record_interval_s=options.record_interval_s,
            retention_s=options.retention_s,
        )
        self.selection = selection or TrendSelection(timeout_s=options.selection_timeout_s)

        self._states: Dict[str, RawState] = {}
        self._units: Dict[str, str] = {}
        # channel -> number of the newest fetch issued for it
        self._generations: Dict[str, int] = {}
        self._refresh_task: Optional[asyncio.Task] = None
        self._fetch_tasks: Set[asyncio.Task] = set()
        self._timeout_handle: Optional[asyncio.TimerHandle] = None
        self._running = False

    # ------------------------------------------------------------------
    # Lifecycle
    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin the recurring history refresh on the running loop; repeated calls are no-ops."""
        if self._running:
            return
        loop = asyncio.get_running_loop()
        self._running = True
        self._refresh_task = loop.create_task(self._refresh_loop())
        logger.debug("Console started with %d mapped channels", len(self.config.channels))

    async def stop(self) -> None:
        """Cancel the refresh loop, pending fetches and the selection timer."""
        if not self._running:
            return
        self._running = False
        self._cancel_timeout()
        tasks = [task for task in (self._refresh_task, *self._fetch_tasks) if task is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._refresh_task = None
        self._fetch_tasks.clear()
        logger.debug("Console stopped")

    async def __aenter__(self) -> "WeatherConsole":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Inbound push
    def update(self, entity_id: str, raw_state: RawState, unit: Optional[str] = None) -> None:
        names = self.config.names_for(entity_id)
        if not names:
            return
        now = self.clock()
        for name in names:
            self._states[name] = raw_state
            if unit:
                self._units[name] = unit
            self.store.record_current(name, raw_state, now)

    def state(self, name: str) -> RawState:
        return self._states.get(name)

    def unit_for(self, name: str) -> str:
        return self._units.get(name) or self.config.spec_for(name).unit

    def reading(self, name: str) -> ChannelReading:
        spec = self.config.spec_for(name)
        raw = self._states.get(name)
        return ChannelReading(
            name=name,
            label=spec.label,
            text=display_value(raw, spec.decimals, self.config.options.fallback),
            unit=self.unit_for(name),
            value=parse_state(raw),
            entity_id=self.config.entity_for(name),
        )

    def history(self, name: str) -> Tuple[Sample, ...]:
        return self.store.buffer_for(name)

    # ------------------------------------------------------------------
    # History refresh
    async def _refresh_loop(self) -> None:
        interval = self.config.options.refresh_interval_s
        while True:
            try:
                await self.refresh_history()
            except Exception:
                logger.exception("Scheduled history refresh failed")
            await asyncio.sleep(interval)

    async def refresh_history(self, names: Optional[Iterable[str]] = None) -> bool:
        """Fetch the retention window for ``names`` (default: all mapped channels).

        Returns ``False`` when nothing was requested or the fetch failed; the
        cached buffers are left as they were in that case.
        """
        wanted = set(names) if names is not None else None
        targets = {
            name: entity
            for name, entity in self.config.channels.items()
            if wanted is None or name in wanted
        }
        if not targets:
            return False

        issued: Dict[str, int] = {}
        for name in targets:
            issued[name] = self._generations.get(name, 0) + 1
            self._generations[name] = issued[name]

        end = self.clock()
        start = end - self.store.retention_s
        label = ", ".join(sorted(targets))
        try:
            result = await self.history_source.fetch_history(set(targets.values()), start, end)
        except Exception as exc:
            logger.warning("History fetch for %s failed, keeping cached samples: %s", label, exc)
            return False

        # parse everything before touching a buffer so a bad reply changes nothing
        parsed: Dict[str, List[Sample]] = {}
        try:
            if not isinstance(result, Mapping):
                raise ValueError(f"expected a mapping of entity rows, got {type(result).__name__}")
            for name, entity in targets.items():
                rows = result.get(entity)
                if rows is not None:
                    parsed[name] = parse_rows(rows)
        except (TypeError, ValueError) as exc:
            logger.warning("History reply for %s is malformed, keeping cached samples: %s", label, exc)
            return False

        for name, samples in parsed.items():
            if self._generations.get(name) != issued[name]:
                logger.debug("Discarding superseded history for %s", name)
                continue
            kept = self.store.replace(name, samples)
            logger.debug("Merged %d samples for %s", kept, name)
        return True

    def _spawn_refresh(self, names: List[str]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; skipping history refresh for %s", names)
            return
        task = loop.create_task(self.refresh_history(names))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._on_fetch_done)

    def _on_fetch_done(self, task: asyncio.Task) -> None:
        self._fetch_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("History refresh task failed", exc_info=exc)

    # ------------------------------------------------------------------
    # Trend selection
    def select(self, name: str) -> bool:
        """Open the trend view of ``name``; unmapped channels cannot be expanded."""
        if self.config.entity_for(name) is None:
            return False
        opened = self.selection.select(name, self.clock())
        self._schedule_timeout()
        if opened:
            self._spawn_refresh([name])
        return True

    def interact(self) -> None:
        if self.selection.interact(self.clock()):
            self._schedule_timeout()

    def close(self) -> None:
        self.selection.close()
        self._cancel_timeout()

    def _schedule_timeout(self) -> None:
        self._cancel_timeout()
        remaining = self.selection.remaining(self.clock())
        if remaining is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # expiry is still honoured lazily by snapshot()
            return
        self._timeout_handle = loop.call_later(remaining, self._on_timeout)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _on_timeout(self) -> None:
        self._timeout_handle = None
        if self.selection.expire(self.clock()):
            logger.debug("Trend view closed after inactivity")
        else:
            self._schedule_timeout()

    # ------------------------------------------------------------------
    # Geometry
    def trend_chart(self, name: str, now: Optional[float] = None) -> Union[TrendChartGeometry, ChartPlaceholder]:
        now = self.clock() if now is None else now
        spec = self.config.spec_for(name)
        return trend_chart(self.store.buffer_for(name), now, spec.label, self.unit_for(name))

    def snapshot(self, now: Optional[float] = None) -> ConsoleSnapshot:
        now = self.clock() if now is None else now
        if self.selection.expire(now):
            self._cancel_timeout()
        fallback = self.config.options.fallback
        state = self._states.get

        trend = None
        selected = self.selection.selection
        if selected is not None:
            trend = TrendView(
                channel=selected.channel,
                opened_at=selected.opened_at,
                chart=self.trend_chart(selected.channel, now),
            )

        phase = moon_phase(datetime.fromtimestamp(now, tz=timezone.utc))
        return ConsoleSnapshot(
            timestamp=now,
            readings={name: self.reading(name) for name in CHANNEL_CATALOG},
            outdoor_gauge=gauge(
                ChannelCategory.TEMPERATURE,
                state("outdoor_temp"),
                GaugeMarkers(high=state("outdoor_temp_high"), low=state("outdoor_temp_low")),
                dial=PRIMARY_DIAL,
                fallback=fallback,
            ),
            wind_gauge=wind_gauge(
                state("wind_speed"),
                state("wind_direction_degrees"),
                direction_label=state("wind_direction"),
                gust=state("wind_gust"),
                unit=self.unit_for("wind_speed"),
                fallback=fallback,
            ),
            indoor_temp_gauge=gauge(
                ChannelCategory.TEMPERATURE,
                state("indoor_temp"),
                dial=COMPACT_DIAL,
                fallback=fallback,
            ),
            indoor_humidity_gauge=gauge(
                ChannelCategory.HUMIDITY,
                state("indoor_humidity"),
                dial=COMPACT_DIAL,
                decimals=0,
                fallback=fallback,
            ),
            sparklines={name: sparkline(self.store.buffer_for(name), now) for name in self.store.channels()},
            pressure_arrow=pressure_trend_arrow(state("pressure_trend")),
            weather_icon=weather_icon(state("pressure_abs"), fallback),
            rain_drops=rain_drops(state("rain_daily")),
            moon_phase=phase,
            moon_emoji=moon_emoji(phase),
            trend=trend,
        )
