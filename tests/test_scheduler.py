import logging
import random
from datetime import datetime, timezone

import pytest

from et_monitor.sources import DataSourceError, SimulatedSource
from et_monitor.telemetry import CatchUpScheduler, DayWindow, PointGenerator, TelemetryBuffer

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_START = int(datetime(2024, 5, 1, tzinfo=timezone.utc).timestamp() * 1000)
WINDOW = DayWindow(start_ms=DAY_START, end_ms=DAY_START + 24 * HOUR_MS)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class FakeTimer:
    def __init__(self, callback):
        self.callback = callback
        self.interval_ms = None
        self.active = False

    def start(self, interval_ms):
        self.interval_ms = interval_ms
        self.active = True

    def stop(self):
        self.active = False

    def fire(self):
        self.callback()


class ListSource:
    poll_interval_ms = 5000

    def __init__(self, batches):
        self.batches = list(batches)
        self.calls = []

    def pull(self, since):
        self.calls.append(since)
        batch = self.batches.pop(0) if self.batches else []
        if isinstance(batch, Exception):
            raise batch
        return batch


def at(hours, minutes=0):
    return DAY_START + hours * HOUR_MS + minutes * MINUTE_MS


def make_scheduler(now, timer_factory=None):
    clock = FakeClock(now)
    generator = PointGenerator(rng=random.Random(11), tz=timezone.utc)
    source = SimulatedSource(WINDOW, generator=generator, clock=clock)
    scheduler = CatchUpScheduler(TelemetryBuffer(WINDOW), source, timer_factory=timer_factory)
    return scheduler, clock


def test_backfill_to_00_47_yields_four_points():
    scheduler, _ = make_scheduler(at(0, 47))
    assert scheduler.backfill() == 4
    assert [p.timestamp for p in scheduler.buffer] == [at(0), at(0, 15), at(0, 30), at(0, 45)]


def test_backfill_before_day_start_is_empty():
    scheduler, _ = make_scheduler(DAY_START - 5 * MINUTE_MS)
    assert scheduler.backfill() == 0
    assert len(scheduler.buffer) == 0
    assert scheduler.buffer.version == 0


def test_sleep_gap_is_caught_up_in_one_poll():
    scheduler, clock = make_scheduler(at(8))
    scheduler.backfill()
    assert scheduler.buffer.last_timestamp == at(8)

    clock.now = at(10, 7)
    assert scheduler.poll() == 9
    stamps = [p.timestamp for p in scheduler.buffer]
    assert stamps[-9:] == [at(8, 15 * i) for i in range(1, 10)]
    assert scheduler.buffer.last_timestamp == at(10)


@pytest.mark.parametrize("minutes_later", [0, 1, 14, 15, 16, 44, 45, 61, 300])
def test_poll_appends_every_elapsed_slot(minutes_later):
    scheduler, clock = make_scheduler(at(6, 30))
    scheduler.backfill()
    last = scheduler.buffer.last_timestamp

    clock.now = last + minutes_later * MINUTE_MS
    appended = scheduler.poll()
    expected = max(0, (min(clock.now, WINDOW.end_ms) - last) // WINDOW.interval_ms)
    assert appended == expected
    assert scheduler.buffer.last_timestamp + WINDOW.interval_ms > clock.now


def test_repeated_poll_without_time_passing_is_a_no_op():
    scheduler, _ = make_scheduler(at(12, 3))
    scheduler.backfill()
    before = scheduler.buffer
    seen = []
    scheduler.subscribe(seen.append)

    assert scheduler.poll() == 0
    assert scheduler.buffer is before
    assert seen == []


def test_day_end_is_terminal():
    scheduler, clock = make_scheduler(at(23, 50))
    scheduler.backfill()
    clock.now = WINDOW.end_ms + 3 * HOUR_MS
    scheduler.poll()
    assert len(scheduler.buffer) == 96
    assert scheduler.buffer.last_timestamp == WINDOW.end_ms - WINDOW.interval_ms

    clock.now += 5 * HOUR_MS
    assert scheduler.poll() == 0
    assert len(scheduler.buffer) == 96


def test_subscribers_receive_new_versions():
    scheduler, clock = make_scheduler(at(1))
    seen = []
    unsubscribe = scheduler.subscribe(lambda buffer: seen.append(buffer.version))
    scheduler.backfill()
    clock.now = at(2)
    scheduler.poll()
    unsubscribe()
    clock.now = at(3)
    scheduler.poll()
    assert seen == [1, 2]


def test_source_failure_keeps_buffer(caplog):
    scheduler, _ = make_scheduler(at(3))
    scheduler.backfill()
    before = scheduler.buffer
    scheduler.source = ListSource([DataSourceError("connection refused")])

    with caplog.at_level(logging.WARNING, logger="et_monitor.telemetry.scheduler"):
        assert scheduler.poll() == 0
    assert scheduler.buffer is before
    assert "connection refused" in caplog.text


def test_invalid_batch_is_rejected_whole(caplog):
    generator = PointGenerator(rng=random.Random(2), tz=timezone.utc)
    batch = [generator.generate(at(0)), generator.generate(at(0, 30))]
    scheduler = CatchUpScheduler(TelemetryBuffer(WINDOW), ListSource([batch]))

    with caplog.at_level(logging.WARNING):
        assert scheduler.poll() == 0
    assert len(scheduler.buffer) == 0
    assert "Rejected" in caplog.text


def test_points_past_day_end_are_dropped():
    generator = PointGenerator(rng=random.Random(2), tz=timezone.utc)
    last = WINDOW.last_slot
    full = [generator.generate(WINDOW.start_ms + i * WINDOW.interval_ms) for i in range(95)]
    buffer = TelemetryBuffer(WINDOW).extend(full)
    batch = [generator.generate(last), generator.generate(WINDOW.end_ms)]
    scheduler = CatchUpScheduler(buffer, ListSource([batch]))

    assert scheduler.poll() == 1
    assert scheduler.buffer.is_terminal


def test_points_before_day_start_are_dropped():
    generator = PointGenerator(rng=random.Random(4), tz=timezone.utc)
    # Remote backends may answer the first pull with the tail of the previous day
    batch = [generator.generate(DAY_START + i * WINDOW.interval_ms) for i in range(-2, 4)]
    later = [generator.generate(DAY_START + i * WINDOW.interval_ms) for i in range(4, 6)]
    source = ListSource([batch, later, []])
    scheduler = CatchUpScheduler(TelemetryBuffer(WINDOW), source)

    assert scheduler.poll() == 4
    assert scheduler.buffer.points[0].timestamp == DAY_START
    assert scheduler.poll() == 2
    assert scheduler.poll() == 0
    assert len(scheduler.buffer) == 6
    assert source.calls == [None, DAY_START + 3 * WINDOW.interval_ms, DAY_START + 5 * WINDOW.interval_ms]


def test_pull_is_given_last_timestamp():
    source = ListSource([[], []])
    scheduler = CatchUpScheduler(TelemetryBuffer(WINDOW), source)
    scheduler.poll()
    assert source.calls == [None]


def test_timer_lifecycle():
    timers = []

    def factory(callback):
        timer = FakeTimer(callback)
        timers.append(timer)
        return timer

    scheduler, clock = make_scheduler(at(4), timer_factory=factory)
    scheduler.start()
    scheduler.start()
    assert len(timers) == 1
    assert timers[0].active and timers[0].interval_ms == 5000
    assert scheduler.running

    timers[0].fire()
    assert len(scheduler.buffer) == 17

    scheduler.stop()
    scheduler.stop()
    assert not timers[0].active
    assert not scheduler.running


def test_start_without_timer_factory_raises():
    scheduler, _ = make_scheduler(at(4))
    with pytest.raises(RuntimeError):
        scheduler.start()
