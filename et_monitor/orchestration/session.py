"""Wires a data source, the day buffer and both dashboard timers together."""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from et_monitor.io import DashboardConfig
from et_monitor.sources import DataSource, RemoteSource, SimulatedSource
from et_monitor.telemetry import (
    CatchUpScheduler,
    Clock,
    DayWindow,
    PointGenerator,
    PollTimer,
    TelemetryBuffer,
    system_clock,
)
from et_monitor.telemetry.scheduler import TimerFactory

logger = logging.getLogger(__name__)

ClockListener = Callable[[int], None]


class DashboardSession:
    """One dashboard lifetime: a fixed day window and the timers that serve it.

    ``start()`` backfills the buffer, then starts the catch-up poll and the
    display clock. ``close()`` stops both; a closed session cannot be
    restarted, open a new one instead.
    """

    def __init__(
        self,
        scheduler: CatchUpScheduler,
        clock: Clock = system_clock,
        timer_factory: Optional[TimerFactory] = None,
        clock_interval_ms: int = 1_000,
    ) -> None:
        self.scheduler = scheduler
        self.clock = clock
        self.timer_factory = timer_factory
        self.clock_interval_ms = clock_interval_ms
        self._clock_timer: Optional[PollTimer] = None
        self._clock_listeners: List[ClockListener] = []
        self._closed = False

    @property
    def buffer(self) -> TelemetryBuffer:
        return self.scheduler.buffer

    @property
    def window(self) -> DayWindow:
        return self.scheduler.buffer.window

    @property
    def closed(self) -> bool:
        return self._closed

    def on_clock(self, listener: ClockListener) -> None:
        self._clock_listeners.append(listener)

    def _tick_clock(self) -> None:
        now = self.clock()
        for listener in list(self._clock_listeners):
            listener(now)

    def start(self) -> None:
        if self._closed:
            raise RuntimeError("Session is closed; create a new session instead")
        if self.scheduler.buffer.version == 0:
            self.scheduler.backfill()
        if self.timer_factory is None:
            return
        if self.scheduler.timer_factory is None:
            self.scheduler.timer_factory = self.timer_factory
        self.scheduler.start()
        if self._clock_timer is None:
            self._clock_timer = self.timer_factory(self._tick_clock)
            self._clock_timer.start(self.clock_interval_ms)
        self._tick_clock()

    def close(self) -> None:
        if self._closed:
            return
        self.scheduler.stop()
        if self._clock_timer is not None:
            self._clock_timer.stop()
            self._clock_timer = None
        self._clock_listeners.clear()
        close_source = getattr(self.scheduler.source, "close", None)
        if callable(close_source):
            close_source()
        self._closed = True
        logger.debug("Dashboard session closed")

    def __enter__(self) -> "DashboardSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_source(config: DashboardConfig, window: DayWindow, clock: Clock) -> DataSource:
    if config.source == "remote":
        return RemoteSource(
            config.remote.url or "",
            timeout=config.remote.timeout_s,
            poll_interval_ms=config.remote.poll_interval_ms,
        )
    rng = random.Random(config.seed) if config.seed is not None else None
    generator = PointGenerator(rng=rng, tz=config.zone())
    return SimulatedSource(
        window,
        generator=generator,
        clock=clock,
        poll_interval_ms=config.poll_interval_ms,
    )


def build_session(
    config: Optional[DashboardConfig] = None,
    clock: Clock = system_clock,
    timer_factory: Optional[TimerFactory] = None,
    source: Optional[DataSource] = None,
) -> DashboardSession:
    """Create a session whose day window is fixed from ``clock()`` right now."""
    config = config or DashboardConfig()
    window = DayWindow.for_timestamp(clock(), tz=config.zone(), interval_ms=config.interval_ms)
    source = source or build_source(config, window, clock)
    scheduler = CatchUpScheduler(
        TelemetryBuffer(window),
        source,
        timer_factory=timer_factory,
        poll_interval_ms=source.poll_interval_ms,
    )
    logger.info(
        "Session for %s source, %d slot(s) of %d ms, polling every %d ms",
        config.source,
        window.slot_count,
        window.interval_ms,
        scheduler.poll_interval_ms,
    )
    return DashboardSession(
        scheduler,
        clock=clock,
        timer_factory=timer_factory,
        clock_interval_ms=config.clock_interval_ms,
    )
