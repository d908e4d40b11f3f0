"""Live reference-evapotranspiration (ET₀) telemetry dashboard."""

__all__ = ["telemetry", "sources", "io", "orchestration", "gui"]
__version__ = "0.1.0"
