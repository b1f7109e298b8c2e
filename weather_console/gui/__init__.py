"""Presentation-facing models and adapters for the weather console."""

from __future__ import annotations

from .model import (
    ChannelCategory,
    ChannelReading,
    ConsoleSnapshot,
    TrendView,
)

__all__ = [
    "ChannelCategory",
    "ChannelReading",
    "ConsoleSnapshot",
    "TrendView",
]
