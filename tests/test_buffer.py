import random
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from et_monitor.telemetry import DayWindow, PointGenerator, TelemetryBuffer, TelemetryBufferError

HOUR_MS = 3600 * 1000
DAY_START = int(datetime(2024, 5, 1, tzinfo=timezone.utc).timestamp() * 1000)
WINDOW = DayWindow(start_ms=DAY_START, end_ms=DAY_START + 24 * HOUR_MS)


def _points(count, start=DAY_START):
    generator = PointGenerator(rng=random.Random(5), tz=timezone.utc)
    return [generator.generate(start + i * WINDOW.interval_ms) for i in range(count)]


def test_window_for_timestamp_in_utc():
    now = DAY_START + 13 * HOUR_MS + 5 * 60 * 1000
    window = DayWindow.for_timestamp(now, tz=timezone.utc)
    assert window.start_ms == DAY_START
    assert window.end_ms == DAY_START + 24 * HOUR_MS
    assert window.slot_count == 96
    assert window.last_slot == window.end_ms - window.interval_ms


@pytest.mark.parametrize(
    "day, slots",
    [
        ((2024, 3, 31), 92),  # clocks go forward, 23 h day
        ((2024, 10, 27), 100),  # clocks go back, 25 h day
        ((2024, 5, 1), 96),
    ],
)
def test_window_for_timestamp_across_dst(day, slots):
    berlin = ZoneInfo("Europe/Berlin")
    now = int(datetime(*day, 12, tzinfo=berlin).timestamp() * 1000)
    window = DayWindow.for_timestamp(now, tz=berlin)

    assert window.start_ms == int(datetime(*day, tzinfo=berlin).timestamp() * 1000)
    assert window.slot_count == slots
    assert window.last_slot == window.end_ms - window.interval_ms
    assert datetime.fromtimestamp(window.end_ms / 1000, tz=berlin).hour == 0


def test_due_slots():
    assert WINDOW.due_slots(None, DAY_START + 47 * 60 * 1000) == [
        DAY_START,
        DAY_START + 15 * 60 * 1000,
        DAY_START + 30 * 60 * 1000,
        DAY_START + 45 * 60 * 1000,
    ]
    assert WINDOW.due_slots(None, DAY_START - 1) == []
    assert WINDOW.due_slots(WINDOW.last_slot, WINDOW.end_ms + HOUR_MS) == []
    assert WINDOW.next_slot_after(DAY_START + 1) == DAY_START + WINDOW.interval_ms


def test_extend_returns_new_version():
    empty = TelemetryBuffer(WINDOW)
    first = empty.extend(_points(3))
    assert len(empty) == 0 and empty.version == 0
    assert len(first) == 3 and first.version == 1
    assert first.last_timestamp == DAY_START + 2 * WINDOW.interval_ms
    assert first.next_slot == DAY_START + 3 * WINDOW.interval_ms

    second = first.append(_points(1, start=first.next_slot)[0])
    assert second.version == 2
    assert len(first) == 3


def test_extend_with_nothing_keeps_snapshot():
    buffer = TelemetryBuffer(WINDOW).extend(_points(2))
    assert buffer.extend([]) is buffer


def test_extend_rejects_gaps_and_duplicates():
    buffer = TelemetryBuffer(WINDOW).extend(_points(2))
    with pytest.raises(TelemetryBufferError):
        buffer.extend(_points(1, start=DAY_START + 5 * WINDOW.interval_ms))
    with pytest.raises(TelemetryBufferError):
        buffer.extend(_points(1, start=buffer.last_timestamp))
    with pytest.raises(TelemetryBufferError):
        TelemetryBuffer(WINDOW).extend(_points(1, start=DAY_START + 60 * 1000))
    assert len(buffer) == 2


def test_full_day_is_terminal():
    buffer = TelemetryBuffer(WINDOW).extend(_points(96))
    assert buffer.is_terminal
    assert buffer.next_slot is None
    with pytest.raises(TelemetryBufferError):
        buffer.extend(_points(1, start=WINDOW.end_ms))


def test_spacing_is_constant():
    buffer = TelemetryBuffer(WINDOW).extend(_points(40))
    stamps = [p.timestamp for p in buffer]
    assert stamps[0] == DAY_START
    assert all(b - a == WINDOW.interval_ms for a, b in zip(stamps, stamps[1:]))
