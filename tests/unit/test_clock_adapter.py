from datetime import UTC, date, datetime

from studio_passes.adapters.clock import FixedClock, SystemClock


def test_system_clock():
    clock = SystemClock()
    now = clock.now()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None
    # Sanity check: is it close to real now?
    real_now = datetime.now(UTC)
    diff = abs((real_now - now).total_seconds())
    assert diff < 1.0
    assert isinstance(clock.today(), date)


def test_fixed_clock():
    at = datetime(2025, 6, 16, 23, 30, tzinfo=UTC)
    clock = FixedClock(at)
    assert clock.now() == at
    assert clock.today() == date(2025, 6, 16)


def test_system_clock_today_follows_utc_now():
    clock = SystemClock()
    clock.now = lambda: datetime(2025, 6, 16, 23, 59, tzinfo=UTC)
    assert clock.today() == date(2025, 6, 16)
