"""Fixed daily grid that telemetry points are aligned to."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Callable, List, Optional

Clock = Callable[[], int]

DEFAULT_INTERVAL_MS = 15 * 60 * 1000


def system_clock() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _to_ms(moment: datetime) -> int:
    return int(round(moment.timestamp() * 1000))


@dataclass(frozen=True)
class DayWindow:
    """One calendar day, split into equally spaced slots of ``interval_ms``."""

    start_ms: int
    end_ms: int
    interval_ms: int = DEFAULT_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if self.end_ms <= self.start_ms:
            raise ValueError("end_ms must be after start_ms")

    @classmethod
    def for_timestamp(
        cls,
        now_ms: int,
        tz: Optional[tzinfo] = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> "DayWindow":
        """Window from local midnight of ``now_ms`` up to the following midnight.

        With ``tz`` left as ``None`` the process-local timezone is used, so a
        day with a DST change is 23 or 25 hours long.
        """
        moment = datetime.fromtimestamp(now_ms / 1000.0, tz=tz)
        midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
        next_midnight = midnight + timedelta(days=1)
        return cls(start_ms=_to_ms(midnight), end_ms=_to_ms(next_midnight), interval_ms=interval_ms)

    @property
    def slot_count(self) -> int:
        return len(range(self.start_ms, self.end_ms, self.interval_ms))

    @property
    def last_slot(self) -> int:
        return self.start_ms + (self.slot_count - 1) * self.interval_ms

    def contains(self, timestamp: int) -> bool:
        return self.start_ms <= timestamp < self.end_ms

    def is_slot(self, timestamp: int) -> bool:
        return self.contains(timestamp) and (timestamp - self.start_ms) % self.interval_ms == 0

    def next_slot_after(self, timestamp: Optional[int]) -> int:
        """First grid timestamp strictly greater than ``timestamp`` (``start_ms`` for ``None``)."""
        if timestamp is None or timestamp < self.start_ms:
            return self.start_ms
        elapsed = timestamp - self.start_ms
        return self.start_ms + (elapsed // self.interval_ms + 1) * self.interval_ms

    def due_slots(self, after: Optional[int], now_ms: int) -> List[int]:
        """All grid timestamps after ``after`` that are due at ``now_ms``.

        A slot is due once ``slot <= now_ms``; nothing at or past ``end_ms``
        is ever returned.
        """
        slots: List[int] = []
        slot = self.next_slot_after(after)
        while slot <= now_ms and slot < self.end_ms:
            slots.append(slot)
            slot += self.interval_ms
        return slots
