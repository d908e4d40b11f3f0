"""Graphical user interface components for the ET₀ dashboard."""

from __future__ import annotations

from .model import (
    CHART_COLORS,
    FILTER_FIELDS,
    METRIC_CARDS,
    FilterField,
    MetricCardSpec,
    initial_filter_values,
    save_filter_choice,
)

__all__ = [
    "CHART_COLORS",
    "FILTER_FIELDS",
    "METRIC_CARDS",
    "FilterField",
    "MetricCardSpec",
    "initial_filter_values",
    "save_filter_choice",
]
