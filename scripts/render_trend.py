#!/usr/bin/env python3
"""Render the trend chart of one channel from mock history to a PNG file."""

from __future__ import annotations

import argparse
import asyncio
import time
from pathlib import Path

from weather_console.gui.mock import MockHistorySource
from weather_console.gui.widgets import TrendPlot
from weather_console.io import CHANNEL_CATALOG, load_console_config
from weather_console.orchestration import WeatherConsole


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("channel", choices=sorted(CHANNEL_CATALOG), help="Logical channel to chart.")
    parser.add_argument("--config", help="Optional path to a console YAML file.")
    parser.add_argument("--output", type=Path, default=Path("output/trend.png"), help="Target PNG path.")
    parser.add_argument("--sparkline", action="store_true", help="Render the compact sparkline instead.")
    return parser.parse_args()


async def build_geometry(args: argparse.Namespace):
    config = load_console_config(args.config) if args.config else load_console_config()
    console = WeatherConsole(config, MockHistorySource(config))
    if not await console.refresh_history([args.channel]):
        raise SystemExit(f"No history available for '{args.channel}'.")
    now = time.time()
    if args.sparkline:
        return console.snapshot(now).sparklines.get(args.channel)
    return console.trend_chart(args.channel, now)


def main() -> None:
    args = parse_args()
    geometry = asyncio.run(build_geometry(args))
    if geometry is None:
        raise SystemExit(f"Channel '{args.channel}' has no history.")
    plot = TrendPlot()
    plot.draw(geometry)
    path = plot.save(args.output)
    print(f"Chart saved to {path}")


if __name__ == "__main__":
    main()
