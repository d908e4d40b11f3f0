"""I/O utilities (configuration files)."""

from .settings import (
    DEFAULT_SETTINGS_PATH,
    PathLike,
    find_project_root,
    load_settings,
    settings_path,
    update_settings_value,
)
from .config import (
    ConfigError,
    DashboardConfig,
    FilterConfig,
    RemoteConfig,
    load_dashboard_config,
    parse_dashboard_config,
)

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "PathLike",
    "find_project_root",
    "load_settings",
    "settings_path",
    "update_settings_value",
    "ConfigError",
    "DashboardConfig",
    "FilterConfig",
    "RemoteConfig",
    "load_dashboard_config",
    "parse_dashboard_config",
]
