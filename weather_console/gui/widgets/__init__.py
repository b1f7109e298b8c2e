"""Preview adapters that draw console geometry."""

from .trend_plot import TrendPlot

__all__ = ["TrendPlot"]
