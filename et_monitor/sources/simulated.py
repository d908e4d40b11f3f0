"""Source that synthesizes points for every grid slot that has elapsed."""

from __future__ import annotations

from typing import List, Optional

from et_monitor.telemetry.point import Point, PointGenerator
from et_monitor.telemetry.window import Clock, DayWindow, system_clock

SIMULATED_POLL_INTERVAL_MS = 5_000


class SimulatedSource:
    """Generates one point per due slot, however many slots were missed."""

    def __init__(
        self,
        window: DayWindow,
        generator: Optional[PointGenerator] = None,
        clock: Clock = system_clock,
        poll_interval_ms: int = SIMULATED_POLL_INTERVAL_MS,
    ) -> None:
        self.window = window
        self.generator = generator or PointGenerator()
        self.clock = clock
        self.poll_interval_ms = poll_interval_ms

    def pull(self, since: Optional[int]) -> List[Point]:
        now = self.clock()
        return [self.generator.generate(slot) for slot in self.window.due_slots(since, now)]
