"""Chart widgets for the dashboard."""

from .charts import ComparisonChart, Et0TimeSeriesChart, ScatterChart

__all__ = ["ComparisonChart", "Et0TimeSeriesChart", "ScatterChart"]
