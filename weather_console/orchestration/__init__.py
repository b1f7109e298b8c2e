"""Console orchestration: trend selection and history scheduling."""

from .console import WeatherConsole
from .selection import SELECTION_TIMEOUT_S, Selection, SelectionStatus, TrendSelection

__all__ = ["SELECTION_TIMEOUT_S", "Selection", "SelectionStatus", "TrendSelection", "WeatherConsole"]
