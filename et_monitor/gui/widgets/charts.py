"""Matplotlib chart widgets embedded in Qt."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import List, Optional

from PySide6.QtWidgets import QSizePolicy, QVBoxLayout, QWidget
from matplotlib import dates as mdates
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from et_monitor.gui.model import CHART_COLORS
from et_monitor.telemetry import ComparisonView, ScatterView, TimeSeriesView


def _to_datetimes(timestamps: List[int], tz: Optional[tzinfo]) -> List[datetime]:
    return [datetime.fromtimestamp(ts / 1000.0, tz=tz) for ts in timestamps]


class _ChartWidget(QWidget):
    """Single-axes matplotlib canvas inside a layout."""

    def __init__(self, parent: Optional[QWidget] = None, figsize=(5, 3)) -> None:
        super().__init__(parent)
        self._figure = Figure(figsize=figsize)
        self._canvas = FigureCanvas(self._figure)
        self._canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        layout = QVBoxLayout()
        layout.addWidget(self._canvas)
        self.setLayout(layout)

        self._ax = self._figure.add_subplot(111)

    def _draw(self) -> None:
        self._figure.tight_layout()
        self._canvas.draw_idle()


class _DayAxisChart(_ChartWidget):
    """Chart whose x axis spans the fixed day window, labelled HH:MM."""

    def __init__(self, tz: Optional[tzinfo] = None, parent: Optional[QWidget] = None, figsize=(5, 3)) -> None:
        super().__init__(parent, figsize=figsize)
        self._tz = tz
        self._ax.xaxis.set_major_formatter(mdates.DateFormatter("%H:%M", tz=tz))
        self._ax.grid(True, axis="x", color="#f3f4f6")

    def _set_day_limits(self, x_min: int, x_max: int) -> None:
        start, end = _to_datetimes([x_min, x_max], self._tz)
        self._ax.set_xlim(start, end)


class Et0TimeSeriesChart(_DayAxisChart):
    """ET₀ against time of day with a filled area beneath the line."""

    def __init__(self, tz: Optional[tzinfo] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(tz=tz, parent=parent)
        self._ax.set_ylabel("ET₀ (mm/day)")
        self._line = self._ax.plot([], [], color=CHART_COLORS["primary"], linewidth=2, label="ET₀")[0]
        self._fill = None

    def set_view(self, view: TimeSeriesView) -> None:
        times = _to_datetimes(view.timestamps, self._tz)
        self._line.set_data(times, view.values)
        if self._fill is not None:
            self._fill.remove()
            self._fill = None
        if times:
            self._fill = self._ax.fill_between(times, view.values, color=CHART_COLORS["primary"], alpha=0.25)
            self._ax.set_ylim(0.0, max(view.values) * 1.1 or 1.0)
        self._set_day_limits(view.x_min, view.x_max)
        self._draw()


class ScatterChart(_ChartWidget):
    """One weather variable against ET₀."""

    def __init__(self, title: str, color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._color = color
        self._ax.set_title(title, fontsize=10)
        self._ax.set_ylabel("ET₀")
        self._points = self._ax.scatter([], [], s=16, color=color, alpha=0.6)

    def set_view(self, view: ScatterView) -> None:
        self._ax.set_xlabel(view.label)
        self._points.remove()
        self._points = self._ax.scatter(view.x, view.y, s=16, color=self._color, alpha=0.6)
        if view.x:
            self._ax.relim()
            self._ax.autoscale_view()
        self._draw()


class ComparisonChart(_DayAxisChart):
    """Measured vs predicted ET₀ on a shared time axis."""

    def __init__(self, tz: Optional[tzinfo] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(tz=tz, parent=parent, figsize=(10, 3))
        self._actual_line = self._ax.plot([], [], color=CHART_COLORS["primary"], label="Actual")[0]
        self._predicted_line = self._ax.plot(
            [], [], color=CHART_COLORS["accent"], linestyle="--", label="Predicted"
        )[0]
        self._ax.legend(loc="upper right")

    def set_view(self, view: ComparisonView) -> None:
        times = _to_datetimes(view.timestamps, self._tz)
        self._actual_line.set_data(times, view.actual)
        self._predicted_line.set_data(times, view.predicted)
        values = view.actual + view.predicted
        if values:
            self._ax.set_ylim(0.0, max(values) * 1.1 or 1.0)
        self._set_day_limits(view.x_min, view.x_max)
        self._draw()
