"""Immutable, versioned telemetry buffer for one day window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from et_monitor.telemetry.point import Point
from et_monitor.telemetry.window import DayWindow


class TelemetryBufferError(ValueError):
    """Raised when a point would break the buffer's grid invariants."""


@dataclass(frozen=True)
class TelemetryBuffer:
    """Gap-free sequence of points on ``window``'s grid.

    Snapshots are never modified. ``append``/``extend`` return a new buffer
    with ``version`` bumped by one, so consumers can compare versions to
    decide whether to redraw.
    """

    window: DayWindow
    points: Tuple[Point, ...] = ()
    version: int = 0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def latest(self) -> Optional[Point]:
        return self.points[-1] if self.points else None

    @property
    def last_timestamp(self) -> Optional[int]:
        return self.points[-1].timestamp if self.points else None

    @property
    def is_terminal(self) -> bool:
        """True once the last slot of the day has been filled."""
        return bool(self.points) and self.points[-1].timestamp >= self.window.last_slot

    @property
    def next_slot(self) -> Optional[int]:
        if self.is_terminal:
            return None
        return self.window.next_slot_after(self.last_timestamp)

    def append(self, point: Point) -> "TelemetryBuffer":
        return self.extend((point,))

    def extend(self, points: Iterable[Point]) -> "TelemetryBuffer":
        """Return a new snapshot with ``points`` appended, all or nothing."""
        incoming = tuple(points)
        if not incoming:
            return self
        expected = self.next_slot
        for point in incoming:
            if expected is None:
                raise TelemetryBufferError(
                    f"Buffer is full; cannot append point at {point.timestamp}"
                )
            if point.timestamp != expected:
                raise TelemetryBufferError(
                    f"Expected point at {expected}, got {point.timestamp}"
                )
            following = expected + self.window.interval_ms
            expected = following if following < self.window.end_ms else None
        return TelemetryBuffer(
            window=self.window,
            points=self.points + incoming,
            version=self.version + 1,
        )
