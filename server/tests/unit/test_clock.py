"""Unit tests for the injectable clocks."""

from datetime import datetime, timedelta, timezone

from aircargo.core.clock import ManualClock, system_clock


def test_system_clock_is_naive_utc():
    now = system_clock.now()

    assert now.tzinfo is None
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - now) < timedelta(seconds=5)


def test_manual_clock_steps():
    clock = ManualClock(datetime(2024, 5, 1), step=timedelta(seconds=1))

    assert clock.now() == datetime(2024, 5, 1)
    assert clock.now() == datetime(2024, 5, 1, 0, 0, 1)

    clock.advance(timedelta(hours=1))
    assert clock.now() == datetime(2024, 5, 1, 1, 0, 2)

    clock.set(datetime(2024, 6, 1))
    assert clock.now() == datetime(2024, 6, 1)
