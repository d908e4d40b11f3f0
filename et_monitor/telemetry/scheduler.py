"""Coarse polling driver that keeps the telemetry buffer current."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from et_monitor.sources.base import DataSource, DataSourceError
from et_monitor.telemetry.buffer import TelemetryBuffer, TelemetryBufferError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 5_000

BufferListener = Callable[[TelemetryBuffer], None]


class PollTimer(Protocol):
    """Repeating timer; matches the subset of ``QTimer`` the scheduler uses."""

    def start(self, interval_ms: int) -> None:
        ...

    def stop(self) -> None:
        ...


TimerFactory = Callable[[Callable[[], None]], PollTimer]


class CatchUpScheduler:
    """Advances a buffer to "now" on every poll, filling all missed slots at once.

    Polling every few seconds instead of once per slot makes the scheduler
    insensitive to throttled or suspended timers: whatever the gap since the
    last tick, one ``poll()`` appends every slot that has come due.
    """

    def __init__(
        self,
        buffer: TelemetryBuffer,
        source: DataSource,
        timer_factory: Optional[TimerFactory] = None,
        poll_interval_ms: Optional[int] = None,
    ) -> None:
        self._buffer = buffer
        self.source = source
        self.timer_factory = timer_factory
        self.poll_interval_ms = poll_interval_ms or getattr(
            source, "poll_interval_ms", DEFAULT_POLL_INTERVAL_MS
        )
        self._timer: Optional[PollTimer] = None
        self._listeners: List[BufferListener] = []

    @property
    def buffer(self) -> TelemetryBuffer:
        return self._buffer

    @property
    def running(self) -> bool:
        return self._timer is not None

    # ------------------------------------------------------------------
    # Subscribers
    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register ``listener`` for new buffer versions; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._buffer)

    # ------------------------------------------------------------------
    def poll(self) -> int:
        """Run one catch-up pass and return the number of points appended."""
        buffer = self._buffer
        if buffer.is_terminal:
            return 0
        try:
            points = self.source.pull(buffer.last_timestamp)
        except DataSourceError as exc:
            logger.warning("Telemetry source failed, keeping %d buffered point(s): %s", len(buffer), exc)
            return 0

        window = buffer.window
        in_window = [p for p in points if window.contains(p.timestamp)]
        if len(in_window) != len(points):
            logger.debug("Dropped %d point(s) outside the day window", len(points) - len(in_window))
        if not in_window:
            return 0

        try:
            self._buffer = buffer.extend(in_window)
        except TelemetryBufferError as exc:
            logger.warning("Rejected batch of %d point(s): %s", len(in_window), exc)
            return 0

        logger.debug("Appended %d point(s), buffer version %d", len(in_window), self._buffer.version)
        self._notify()
        return len(in_window)

    def backfill(self) -> int:
        """Initial synchronous pass from the start of the day up to now."""
        appended = self.poll()
        logger.info("Backfilled %d point(s) for the current day", appended)
        return appended

    # ------------------------------------------------------------------
    # Timer lifecycle
    def start(self) -> None:
        if self._timer is not None:
            return
        if self.timer_factory is None:
            raise RuntimeError("CatchUpScheduler.start() requires a timer_factory")
        self._timer = self.timer_factory(self.poll)
        self._timer.start(self.poll_interval_ms)
        logger.debug("Catch-up polling started every %d ms", self.poll_interval_ms)

    def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None
        logger.debug("Catch-up polling stopped")
