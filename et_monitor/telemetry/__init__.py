"""Telemetry core: points, the day buffer, catch-up polling and chart projections."""

from .window import DEFAULT_INTERVAL_MS, Clock, DayWindow, system_clock
from .point import Point, PointGenerator
from .buffer import TelemetryBuffer, TelemetryBufferError
from .projections import (
    SCATTER_FIELDS,
    ComparisonView,
    MetricSummary,
    ScatterView,
    TimeSeriesView,
    comparison,
    latest_metrics,
    scatter,
    time_series,
)
from .scheduler import CatchUpScheduler, PollTimer

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "Clock",
    "DayWindow",
    "system_clock",
    "Point",
    "PointGenerator",
    "TelemetryBuffer",
    "TelemetryBufferError",
    "SCATTER_FIELDS",
    "ComparisonView",
    "MetricSummary",
    "ScatterView",
    "TimeSeriesView",
    "comparison",
    "latest_metrics",
    "scatter",
    "time_series",
    "CatchUpScheduler",
    "PollTimer",
]
