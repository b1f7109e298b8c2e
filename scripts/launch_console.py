#!/usr/bin/env python3
"""Run the weather console against mock data and print each frame."""

from __future__ import annotations

import argparse
import asyncio
import logging
import time

from weather_console.gui.mock import MockHistorySource, generate_mock_states
from weather_console.io import load_console_config
from weather_console.orchestration import WeatherConsole


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", help="Optional path to a console YAML file.")
    parser.add_argument(
        "--interval",
        type=float,
        default=1.0,
        help="Push/render interval in seconds (default: 1.0).",
    )
    parser.add_argument("--frames", type=int, default=10, help="Number of frames to render before exiting.")
    parser.add_argument("--select", help="Channel whose trend view to open after the first frame.")
    parser.add_argument(
        "--failure-rate",
        type=float,
        default=0.0,
        help="Probability that a mock history fetch fails (0..1).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def describe(console: WeatherConsole) -> str:
    frame = console.snapshot()
    wind = frame.wind_gauge
    parts = [
        time.strftime("%H:%M:%S", time.localtime(frame.timestamp)),
        f"out {frame.outdoor_gauge.text}°",
        f"wind {wind.direction_text} {wind.speed_text}",
        f"in {frame.indoor_temp_gauge.text}° / {frame.indoor_humidity_gauge.text}%",
        f"baro {frame.readings['pressure_abs'].text} {frame.pressure_arrow} {frame.weather_icon}",
        f"{frame.moon_emoji} {frame.moon_phase}",
    ]
    if frame.trend is not None:
        chart = frame.trend.chart
        points = len(getattr(chart, "points", []))
        parts.append(f"[trend {frame.trend.channel}: {points} pts]")
    return " | ".join(parts)


async def run(args: argparse.Namespace) -> None:
    config = load_console_config(args.config) if args.config else load_console_config()
    source = MockHistorySource(config, failure_rate=args.failure_rate, latency_s=0.2)
    async with WeatherConsole(config, source) as console:
        for index in range(args.frames):
            for entity, raw in generate_mock_states(config).items():
                console.update(entity, raw)
            if index == 1 and args.select:
                if not console.select(args.select):
                    print(f"Channel '{args.select}' is not mapped; trend view unavailable.")
            print(describe(console))
            await asyncio.sleep(args.interval)


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
