"""Typed view of ``config/dashboard.yml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone as dt_timezone, tzinfo
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from et_monitor.io.settings import PathLike, load_settings

SOURCE_KINDS = ("simulated", "remote")


class ConfigError(RuntimeError):
    """Raised when the dashboard settings are invalid."""


@dataclass
class RemoteConfig:
    url: Optional[str] = None
    timeout_s: float = 10.0
    poll_interval_ms: int = 15_000


@dataclass
class FilterConfig:
    """Field conditions chosen in the filter pane. Not used by the telemetry model."""

    crop: Optional[str] = None
    soil_type: Optional[str] = None
    slope: Optional[str] = None
    growth_stage: Optional[str] = None


@dataclass
class DashboardConfig:
    source: str = "simulated"
    interval_ms: int = 15 * 60 * 1000
    poll_interval_ms: int = 5_000
    clock_interval_ms: int = 1_000
    timezone: Optional[str] = None
    seed: Optional[int] = None
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)

    def zone(self) -> Optional[tzinfo]:
        """Configured zone, or ``None`` for the process-local timezone."""
        if not self.timezone:
            return None
        if self.timezone.upper() == "UTC":
            return dt_timezone.utc
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone '{self.timezone}'") from exc


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _positive_int(section: Dict[str, Any], key: str, default: int, context: str) -> int:
    raw = section.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{context}.{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{context}.{key} must be positive, got {value}")
    return value


def parse_dashboard_config(data: Dict[str, Any]) -> DashboardConfig:
    telemetry = _section(data, "telemetry")
    remote_raw = _section(data, "remote")
    filters_raw = _section(data, "filters")

    source = str(telemetry.get("source", "simulated"))
    if source not in SOURCE_KINDS:
        raise ConfigError(f"Unsupported telemetry source '{source}'; expected one of {SOURCE_KINDS}")

    try:
        timeout_s = float(remote_raw.get("timeout_s", 10.0))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"remote.timeout_s must be a number, got {remote_raw.get('timeout_s')!r}") from exc

    remote = RemoteConfig(
        url=remote_raw.get("url"),
        timeout_s=timeout_s,
        poll_interval_ms=_positive_int(remote_raw, "poll_interval_ms", 15_000, "remote"),
    )
    if source == "remote" and not remote.url:
        raise ConfigError("remote.url is required when telemetry.source is 'remote'")

    seed = telemetry.get("seed")
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"telemetry.seed must be an integer, got {seed!r}") from exc

    config = DashboardConfig(
        source=source,
        interval_ms=_positive_int(telemetry, "interval_ms", 15 * 60 * 1000, "telemetry"),
        poll_interval_ms=_positive_int(telemetry, "poll_interval_ms", 5_000, "telemetry"),
        clock_interval_ms=_positive_int(telemetry, "clock_interval_ms", 1_000, "telemetry"),
        timezone=telemetry.get("timezone"),
        seed=seed,
        remote=remote,
        filters=FilterConfig(
            crop=filters_raw.get("crop"),
            soil_type=filters_raw.get("soil_type"),
            slope=filters_raw.get("slope"),
            growth_stage=filters_raw.get("growth_stage"),
        ),
    )
    config.zone()
    return config


def load_dashboard_config(path: Optional[PathLike] = None) -> DashboardConfig:
    """Load and validate ``config/dashboard.yml`` (or ``path``)."""
    return parse_dashboard_config(load_settings(path))
