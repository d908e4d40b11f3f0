"""Chart-ready projections of a telemetry buffer.

Everything here is a pure function of a ``TelemetryBuffer`` snapshot and
returns plain data; the widgets never touch the buffer directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from et_monitor.telemetry.buffer import TelemetryBuffer

SCATTER_FIELDS: Dict[str, str] = {
    "temp": "Temperature (°C)",
    "humidity": "Humidity (%)",
    "wind": "Wind Speed (m/s)",
}


@dataclass
class TimeSeriesView:
    """ET₀ over the fixed day axis."""

    x_min: int
    x_max: int
    timestamps: List[int] = field(default_factory=list)
    values: List[float] = field(default_factory=list)


@dataclass
class ScatterView:
    """``field`` against ET₀, one pair per point."""

    field: str
    label: str
    x: List[float] = field(default_factory=list)
    y: List[float] = field(default_factory=list)


@dataclass
class ComparisonView:
    """Measured and predicted ET₀ sharing one time axis."""

    x_min: int
    x_max: int
    timestamps: List[int] = field(default_factory=list)
    actual: List[float] = field(default_factory=list)
    predicted: List[float] = field(default_factory=list)


@dataclass
class MetricSummary:
    """Latest readings shown on the metric cards."""

    timestamp: Optional[int] = None
    et0: Optional[float] = None
    temp: Optional[float] = None
    humidity: Optional[float] = None
    wind: Optional[float] = None
    solar: Optional[float] = None

    def formatted(self) -> Dict[str, str]:
        def _fmt(value: Optional[float], digits: int) -> str:
            return "--" if value is None else f"{value:.{digits}f}"

        return {
            "et0": _fmt(self.et0, 2),
            "temp": _fmt(self.temp, 1),
            "humidity": _fmt(self.humidity, 0),
            "wind": _fmt(self.wind, 1),
            "solar": _fmt(self.solar, 0),
        }


def time_series(buffer: TelemetryBuffer) -> TimeSeriesView:
    return TimeSeriesView(
        x_min=buffer.window.start_ms,
        x_max=buffer.window.end_ms,
        timestamps=[p.timestamp for p in buffer],
        values=[p.et0 for p in buffer],
    )


def scatter(buffer: TelemetryBuffer, field_name: str) -> ScatterView:
    if field_name not in SCATTER_FIELDS:
        raise ValueError(f"Unsupported scatter field '{field_name}'; choose from {sorted(SCATTER_FIELDS)}")
    return ScatterView(
        field=field_name,
        label=SCATTER_FIELDS[field_name],
        x=[getattr(p, field_name) for p in buffer],
        y=[p.et0 for p in buffer],
    )


def comparison(buffer: TelemetryBuffer) -> ComparisonView:
    view = ComparisonView(x_min=buffer.window.start_ms, x_max=buffer.window.end_ms)
    for point in buffer:
        view.timestamps.append(point.timestamp)
        view.actual.append(point.et0)
        view.predicted.append(point.predicted)
    return view


def latest_metrics(buffer: TelemetryBuffer) -> MetricSummary:
    point = buffer.latest()
    if point is None:
        return MetricSummary()
    return MetricSummary(
        timestamp=point.timestamp,
        et0=point.et0,
        temp=point.temp,
        humidity=point.humidity,
        wind=point.wind,
        solar=point.solar,
    )
