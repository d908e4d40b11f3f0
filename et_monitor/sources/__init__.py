"""Telemetry data sources (simulation, remote backend)."""

from .base import DataSource, DataSourceError
from .remote import REMOTE_POLL_INTERVAL_MS, RemoteSource
from .simulated import SIMULATED_POLL_INTERVAL_MS, SimulatedSource

__all__ = [
    "DataSource",
    "DataSourceError",
    "RemoteSource",
    "SimulatedSource",
    "REMOTE_POLL_INTERVAL_MS",
    "SIMULATED_POLL_INTERVAL_MS",
]
