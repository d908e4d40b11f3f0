"""Qt-based main window for the ET₀ telemetry dashboard."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Callable, Dict, Optional

import yaml
from PySide6.QtCore import QTimer, Signal
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from et_monitor.gui.model import (
    CHART_COLORS,
    FILTER_FIELDS,
    METRIC_CARDS,
    MetricCardSpec,
    initial_filter_values,
    save_filter_choice,
)
from et_monitor.gui.widgets import ComparisonChart, Et0TimeSeriesChart, ScatterChart
from et_monitor.io import DashboardConfig, PathLike
from et_monitor.orchestration import DashboardSession
from et_monitor.telemetry import (
    SCATTER_FIELDS,
    TelemetryBuffer,
    comparison,
    latest_metrics,
    scatter,
    time_series,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
WINDOW_DEFAULT_SIZE = (1400, 1000)
WINDOW_TITLE = "Weather Analytics Dashboard"
DAILY_VIEW_LABEL = "Daily View (00:00 - 24:00)"


def qt_timer_factory(callback: Callable[[], None]) -> QTimer:
    """Repeating ``QTimer`` bound to ``callback``; satisfies ``PollTimer``."""
    timer = QTimer()
    timer.timeout.connect(callback)
    return timer


class MetricCard(QGroupBox):
    """Latest value of one measurement."""

    def __init__(self, entry: MetricCardSpec) -> None:
        super().__init__(entry.label)
        self.value_label = QLabel("--")
        self.value_label.setStyleSheet(f"font-size: 22px; font-weight: bold; color: {entry.color};")
        self.unit_label = QLabel(entry.unit)

        layout = QVBoxLayout()
        layout.addWidget(self.value_label)
        layout.addWidget(self.unit_label)
        self.setLayout(layout)

    def set_value(self, text: str) -> None:
        self.value_label.setText(text)


class FilterPane(QGroupBox):
    """Field-condition drop-downs. The selection is saved but does not alter telemetry."""

    filter_changed = Signal(str, str)

    def __init__(self, values: Dict[str, Optional[str]]) -> None:
        super().__init__("Field Conditions")
        self.combos: Dict[str, QComboBox] = {}
        layout = QFormLayout()
        for entry in FILTER_FIELDS:
            combo = QComboBox()
            combo.addItems(list(entry.options))
            current = values.get(entry.key)
            if current:
                combo.setCurrentText(current)
            combo.currentTextChanged.connect(lambda text, key=entry.key: self.filter_changed.emit(key, text))
            self.combos[entry.key] = combo
            layout.addRow(entry.label, combo)
        self.setLayout(layout)


class MainWindow(QMainWindow):
    """Header, metric cards, filters and the five telemetry charts."""

    def __init__(self, tz: Optional[tzinfo] = None, filter_values: Optional[Dict[str, Optional[str]]] = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*WINDOW_DEFAULT_SIZE)
        self._tz = tz
        self._rendered_version: Optional[int] = None

        title = QLabel(WINDOW_TITLE)
        title.setStyleSheet("font-size: 26px; font-weight: bold;")
        subtitle = QLabel(DAILY_VIEW_LABEL)
        self.updated_label = QLabel("Last updated: --")

        header = QVBoxLayout()
        header.addWidget(title)
        header.addWidget(subtitle)
        header.addWidget(self.updated_label)

        self.filter_pane = FilterPane(filter_values or {})
        header_row = QHBoxLayout()
        header_row.addLayout(header)
        header_row.addStretch()
        header_row.addWidget(self.filter_pane)

        self.metric_cards: Dict[str, MetricCard] = {}
        cards_row = QHBoxLayout()
        for entry in METRIC_CARDS:
            card = MetricCard(entry)
            self.metric_cards[entry.key] = card
            cards_row.addWidget(card)

        self.et0_chart = Et0TimeSeriesChart(tz=tz)
        self.scatter_charts: Dict[str, ScatterChart] = {}
        titles = {"temp": "Temperature vs ET₀", "humidity": "Humidity vs ET₀", "wind": "Wind Speed vs ET₀"}
        for field_name in SCATTER_FIELDS:
            self.scatter_charts[field_name] = ScatterChart(titles[field_name], CHART_COLORS[field_name])
        self.comparison_chart = ComparisonChart(tz=tz)

        grid = QGridLayout()
        grid.addWidget(self._wrap("ET₀ vs Time (Daily)", self.et0_chart), 0, 0)
        grid.addWidget(self._wrap(titles["temp"], self.scatter_charts["temp"]), 0, 1)
        grid.addWidget(self._wrap(titles["humidity"], self.scatter_charts["humidity"]), 1, 0)
        grid.addWidget(self._wrap(titles["wind"], self.scatter_charts["wind"]), 1, 1)
        grid.addWidget(self._wrap("Actual vs Predicted ET₀", self.comparison_chart), 2, 0, 1, 2)

        layout = QVBoxLayout()
        layout.addLayout(header_row)
        layout.addLayout(cards_row)
        layout.addLayout(grid, 1)
        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

    @staticmethod
    def _wrap(title: str, chart: QWidget) -> QGroupBox:
        box = QGroupBox(title)
        layout = QVBoxLayout()
        layout.addWidget(chart)
        box.setLayout(layout)
        return box

    def update_buffer(self, buffer: TelemetryBuffer) -> None:
        if buffer.version == self._rendered_version:
            return
        self._rendered_version = buffer.version

        for key, text in latest_metrics(buffer).formatted().items():
            self.metric_cards[key].set_value(text)
        self.et0_chart.set_view(time_series(buffer))
        for field_name, chart in self.scatter_charts.items():
            chart.set_view(scatter(buffer, field_name))
        self.comparison_chart.set_view(comparison(buffer))

    def update_clock(self, now_ms: int) -> None:
        stamp = datetime.fromtimestamp(now_ms / 1000.0, tz=self._tz)
        self.updated_label.setText(f"Last updated: {stamp.strftime('%H:%M:%S')}")


def run_dashboard(
    session: DashboardSession,
    config: Optional[DashboardConfig] = None,
    settings_file: Optional[PathLike] = None,
) -> None:
    """Show the dashboard for ``session`` until the window is closed.

    Filter changes are written back to ``settings_file`` (the default
    ``config/dashboard.yml`` when omitted).
    """
    config = config or DashboardConfig()
    app = QApplication.instance() or QApplication([])
    window = MainWindow(tz=config.zone(), filter_values=initial_filter_values(config.filters))

    def handle_filter(key: str, value: str) -> None:
        try:
            saved = save_filter_choice(key, value, settings_file)
        except (OSError, KeyError, ValueError, yaml.YAMLError) as exc:
            QMessageBox.critical(window, "Save Failed", f"Could not save filter '{key}': {exc}")
        else:
            logger.info("Filter %s set to %s in %s (no effect on telemetry)", key, value, saved)

    window.filter_pane.filter_changed.connect(handle_filter)
    session.scheduler.subscribe(window.update_buffer)
    session.on_clock(window.update_clock)
    if session.timer_factory is None:
        session.timer_factory = qt_timer_factory
    app.aboutToQuit.connect(session.close)

    session.start()
    window.update_buffer(session.buffer)
    window.show()
    app.exec()
    session.close()
