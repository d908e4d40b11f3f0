"""Abstractions for telemetry data sources."""

from __future__ import annotations

from typing import List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - for type hinting only
    from et_monitor.telemetry.point import Point


class DataSourceError(RuntimeError):
    """Raised when a source cannot deliver points (transport or parse failure)."""


class DataSource(Protocol):
    """Origin of telemetry points consumed by the catch-up scheduler."""

    poll_interval_ms: int

    def pull(self, since: Optional[int]) -> List["Point"]:
        """Return ordered points with ``timestamp > since`` (all points for ``None``)."""
        raise NotImplementedError
