"""
Entitlement component models.

Data models for remaining-class calculation, usage eligibility and
pass status classification.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from studio_passes.domain.entities import AttendanceEvent, Pass, PassStatus

# --- Entitlement Count ---


@dataclass(frozen=True)
class Count:
    """A bounded number of classes."""

    value: int

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Unbounded:
    """No cap binds (FullPass)."""


UNBOUNDED = Unbounded()

EntitlementCount = Count | Unbounded


def is_exhausted(count: EntitlementCount) -> bool:
    """True only for a bounded count of zero."""
    return isinstance(count, Count) and count.value <= 0


# --- Week Window ---


@dataclass(frozen=True)
class WeekWindow:
    """Monday-anchored half-open window [start, end_exclusive)."""

    start: date
    end_exclusive: date

    def contains(self, value: date) -> bool:
        return self.start <= value < self.end_exclusive

    @property
    def last_day(self) -> date:
        return self.end_exclusive - timedelta(days=1)


# --- Inputs ---


@dataclass(frozen=True)
class RemainingInput:
    """Input for computing remaining classes."""

    pass_: Pass
    attendances: Sequence[AttendanceEvent]
    reference_date: date


@dataclass(frozen=True)
class EligibilityInput:
    """Input for checking whether a pass covers a class occurrence."""

    pass_: Pass
    class_date: date
    attendances: Sequence[AttendanceEvent]


@dataclass(frozen=True)
class StatusInput:
    """Input for classifying pass status."""

    pass_: Pass
    attendances: Sequence[AttendanceEvent]
    reference_date: date


@dataclass(frozen=True)
class SummaryInput:
    """Input for building a pass summary."""

    pass_: Pass
    attendances: Sequence[AttendanceEvent]
    reference_date: date


@dataclass(frozen=True)
class UsageStatsInput:
    """Input for building usage statistics."""

    pass_: Pass
    attendances: Sequence[AttendanceEvent]
    reference_date: date


# --- Outputs ---


@dataclass(frozen=True)
class EligibilityOutput:
    """Output from eligibility check."""

    can_use: bool
    reason: str | None = None


@dataclass(frozen=True)
class PassSummary:
    """Point-in-time view of a pass against an attendance snapshot."""

    pass_id: UUID
    remaining: EntitlementCount
    used_classes: int
    used_this_week: int
    complete_weeks_remaining: int
    status: PassStatus
    allows_make_up_classes: bool


@dataclass(frozen=True)
class WeeklyUsage:
    """Attendance for one Monday-anchored week of a pass."""

    week_start: date
    classes_attended: int
    max_allowed: EntitlementCount
    is_current_week: bool


@dataclass(frozen=True)
class PassUsageStats:
    """Usage statistics with a weekly breakdown."""

    pass_id: UUID
    total_classes_attended: int
    classes_this_week: int
    weeks_used: int
    weeks_remaining: int
    last_attendance_date: date | None
    weekly_breakdown: tuple[WeeklyUsage, ...]
