"""Session wiring: data source, buffer and timers."""

from .session import DashboardSession, build_session, build_source

__all__ = ["DashboardSession", "build_session", "build_source"]
