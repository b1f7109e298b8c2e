"""Matplotlib preview of sparkline and trend-chart geometry."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from weather_console.geometry.charts import ChartPlaceholder, PlotArea, SparklineGeometry, TrendChartGeometry

Geometry = Union[TrendChartGeometry, SparklineGeometry, ChartPlaceholder]


class TrendPlot:
    """Draws chart geometry onto a Matplotlib figure in the geometry's pixel space."""

    def __init__(self, figure: Optional[Figure] = None, line_color: str = "#3abccc") -> None:
        self._figure = figure or Figure(figsize=(6.6, 2.8))
        self._ax = self._figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.line_color = line_color

    @property
    def figure(self) -> Figure:
        return self._figure

    @property
    def axes(self):
        return self._ax

    def _frame(self, area: PlotArea) -> None:
        ax = self._ax
        ax.clear()
        ax.set_axis_off()
        ax.set_facecolor("#000000")
        margin = 48.0
        ax.set_xlim(area.left - margin, area.right + 12.0)
        # geometry y grows downwards
        ax.set_ylim(area.bottom + 28.0, area.top - 16.0)

    def draw(self, geometry: Geometry) -> None:
        self._frame(geometry.area)
        ax = self._ax
        if isinstance(geometry, ChartPlaceholder):
            area = geometry.area
            ax.text(
                area.left + area.width / 2.0,
                area.top + area.height / 2.0,
                geometry.message,
                ha="center",
                va="center",
                color="#5a7a80",
            )
            return

        ax.add_patch(Polygon(geometry.area_path, closed=True, facecolor=self.line_color, alpha=0.2, edgecolor="none"))
        xs = [p[0] for p in geometry.points]
        ys = [p[1] for p in geometry.points]
        ax.plot(xs, ys, color=self.line_color, linewidth=1.5)

        if isinstance(geometry, TrendChartGeometry):
            area = geometry.area
            for line in geometry.grid:
                ax.plot([area.left, area.right], [line.y, line.y], color="#0f3540", linestyle="--", linewidth=0.5)
                ax.text(area.left - 4.0, line.y, line.label, ha="right", va="center", color="#3a8898", fontsize=8)
            for tick in geometry.ticks:
                ax.plot([tick.x, tick.x], [area.bottom, area.bottom + 4.0], color="#1a6070", linewidth=0.8)
                if tick.label:
                    ax.text(tick.x, area.bottom + 8.0, tick.label, ha="center", va="top", color="#3a8898", fontsize=8)
            ax.text(area.left, area.top - 4.0, geometry.title, ha="left", va="bottom", color="#d0f0ff", fontsize=9)
            ax.text(area.right, area.top - 4.0, geometry.current_label, ha="right", va="bottom", color="#d0f0ff", fontsize=9)

    def save(self, path: Path, dpi: int = 100) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._figure.savefig(path, dpi=dpi, facecolor="#000000")
        return path
