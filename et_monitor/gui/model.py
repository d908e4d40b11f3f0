"""Presentation data shared by the dashboard widgets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from et_monitor.io import FilterConfig, PathLike, update_settings_value

CROP_OPTIONS: Tuple[str, ...] = ("Wheat", "Rice", "Maize", "Cotton", "Sugarcane", "Vegetables")
SOIL_TYPE_OPTIONS: Tuple[str, ...] = ("Sandy", "Loam", "Clay", "Silt")
SLOPE_OPTIONS: Tuple[str, ...] = ("Flat", "Gentle", "Moderate", "Steep")
GROWTH_STAGE_OPTIONS: Tuple[str, ...] = ("Initial", "Development", "Mid-season", "Late season")


@dataclass(frozen=True)
class FilterField:
    """One drop-down of the filter pane."""

    key: str
    label: str
    options: Tuple[str, ...]


FILTER_FIELDS: Tuple[FilterField, ...] = (
    FilterField("crop", "Crop", CROP_OPTIONS),
    FilterField("soil_type", "Soil type", SOIL_TYPE_OPTIONS),
    FilterField("slope", "Slope", SLOPE_OPTIONS),
    FilterField("growth_stage", "Growth stage", GROWTH_STAGE_OPTIONS),
)


@dataclass(frozen=True)
class MetricCardSpec:
    key: str
    label: str
    unit: str
    color: str


METRIC_CARDS: Tuple[MetricCardSpec, ...] = (
    MetricCardSpec("et0", "ET₀", "mm/day", "#3b82f6"),
    MetricCardSpec("temp", "TEMP", "°C", "#ef4444"),
    MetricCardSpec("humidity", "HUM", "%", "#06b6d4"),
    MetricCardSpec("wind", "WIND", "m/s", "#a855f7"),
    MetricCardSpec("solar", "SOLAR", "W/m²", "#eab308"),
)

CHART_COLORS: Dict[str, str] = {
    "primary": "#3b82f6",
    "accent": "#10b981",
    "temp": "#ef4444",
    "humidity": "#06b6d4",
    "wind": "#a855f7",
}


def initial_filter_values(filters: FilterConfig) -> Dict[str, Optional[str]]:
    """Current selection per filter key; values not in the option list fall back to ``None``."""
    values: Dict[str, Optional[str]] = {}
    for entry in FILTER_FIELDS:
        value = getattr(filters, entry.key)
        values[entry.key] = value if value in entry.options else None
    return values


def save_filter_choice(key: str, value: str, path: Optional[PathLike] = None) -> Path:
    """Persist one filter selection under ``filters.<key>`` in the settings file."""
    entry = next((f for f in FILTER_FIELDS if f.key == key), None)
    if entry is None:
        raise KeyError(f"Unknown filter '{key}'")
    if value not in entry.options:
        raise ValueError(f"'{value}' is not a valid {entry.label.lower()}")
    return update_settings_value(f"filters.{key}", value, path)
