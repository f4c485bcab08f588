from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from studio_passes.adapters.clock import FixedClock
from studio_passes.adapters.memory import (
    InMemoryAttendanceSource,
    InMemoryEnrollmentRepo,
    InMemoryPassRepo,
    InMemoryScheduleSource,
)
from studio_passes.domain.entities import ScheduleSlot
from studio_passes.rules.loader import DEFAULT_RULES_FILENAME, load_rules
from studio_passes.rules.models import StudioRules
from studio_passes.services.passes import PassService

PROJECT_ROOT = Path(__file__).parent.parent

# Monday 2025-06-16
STUDIO_TODAY = date(2025, 6, 16)


@pytest.fixture
def rules() -> StudioRules:
    """Load REAL rules from project root."""
    rules_path = PROJECT_ROOT / DEFAULT_RULES_FILENAME
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 6, 16, 9, 0, tzinfo=UTC))


@pytest.fixture
def weekly_slots() -> dict[str, ScheduleSlot]:
    """One evening class per weekday, keyed by short day name."""
    names = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]
    return {
        name: ScheduleSlot(day_of_week=i, start_time="18:00", label=f"{name} 18:00")
        for i, name in enumerate(names)
    }


@pytest.fixture
def studio(rules, clock, weekly_slots) -> PassService:
    """
    PassService wired to in-memory adapters and the real rules file.
    """
    return PassService(
        passes=InMemoryPassRepo(),
        attendance=InMemoryAttendanceSource(),
        schedules=InMemoryScheduleSource(weekly_slots.values()),
        clock=clock,
        enrollments=InMemoryEnrollmentRepo(),
        rules=rules,
    )
