"""
Entitlement component.

Pure functions computing remaining classes, usage eligibility and
lifecycle status for a pass against an attendance snapshot.

Every function is total and side-effect free. The attendance snapshot is
read once per call and never cached; callers own its consistency.

Week rules:
- Weeks run Monday to Sunday
- Weekly caps never roll over: unused allowance from a past week is lost,
  and future weeks cannot be drawn on early
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from studio_passes.domain.catalog import allows_make_up_classes
from studio_passes.domain.entities import (
    AttendanceEvent,
    Pass,
    PassStatus,
    day_of_week,
)

from .models import (
    UNBOUNDED,
    Count,
    EligibilityInput,
    EligibilityOutput,
    EntitlementCount,
    PassSummary,
    PassUsageStats,
    RemainingInput,
    StatusInput,
    SummaryInput,
    UsageStatsInput,
    WeeklyUsage,
    WeekWindow,
    is_exhausted,
)

DAYS_PER_WEEK = 7


def _as_date(value: date) -> date:
    """Strip time-of-day from datetimes."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _in_validity_window(pass_: Pass, value: date) -> bool:
    return pass_.start_date <= value <= pass_.end_date


def _present_for_pass(
    pass_: Pass, attendances: Sequence[AttendanceEvent]
) -> list[AttendanceEvent]:
    return [a for a in attendances if a.was_present and a.pass_id == pass_.id]


# --- Week Window ---


def week_start(value: date) -> date:
    """Return the Monday on or before the given date."""
    day = _as_date(value)
    days_since_monday = (day_of_week(day) - 1 + DAYS_PER_WEEK) % DAYS_PER_WEEK
    return day - timedelta(days=days_since_monday)


def week_window(value: date) -> WeekWindow:
    start = week_start(value)
    return WeekWindow(start=start, end_exclusive=start + timedelta(days=DAYS_PER_WEEK))


# --- Usage Aggregation ---


def used_count(pass_: Pass, attendances: Sequence[AttendanceEvent]) -> int:
    """Count present attendances recorded against the pass."""
    return len(_present_for_pass(pass_, attendances))


def used_this_week(
    pass_: Pass,
    attendances: Sequence[AttendanceEvent],
    reference_date: date,
) -> int:
    """Count present attendances in the week containing reference_date."""
    window = week_window(reference_date)
    return sum(
        1
        for a in _present_for_pass(pass_, attendances)
        if window.contains(_as_date(a.class_date))
    )


def weekly_cap(pass_: Pass) -> int | None:
    """
    Maximum classes per Monday-anchored week.

    Flexi passes carry a fixed cap regardless of the stored
    classes_per_week. None means no cap binds.
    """
    if pass_.type == "FullPass":
        return None
    if pass_.type == "Flexi4Classes":
        return 1
    if pass_.type == "Flexi8Classes":
        return 2
    return pass_.classes_per_week


def complete_weeks_remaining(pass_: Pass, reference_date: date) -> int:
    """Whole weeks left until end_date, counting reference_date itself."""
    day = _as_date(reference_date)
    if day > pass_.end_date:
        return 0
    days_inclusive = (pass_.end_date - day).days + 1
    return days_inclusive // DAYS_PER_WEEK


def is_valid_on(pass_: Pass, value: date) -> bool:
    """Check if pass is switched on and value lies inside its window."""
    return pass_.is_active and _in_validity_window(pass_, _as_date(value))


# --- Remaining Entitlement ---


def calculate_remaining(
    pass_: Pass,
    attendances: Sequence[AttendanceEvent],
    reference_date: date,
) -> EntitlementCount:
    """
    Calculate classes still usable on a pass.

    Remaining is bounded both by the unused total and by what the weekly
    cap still allows: the unused part of the current week plus the cap for
    every complete week left.

    Args:
        pass_: The pass
        attendances: Attendance snapshot (any order)
        reference_date: Day the calculation is made for

    Returns:
        Count of usable classes, or UNBOUNDED for a FullPass
    """
    day = _as_date(reference_date)

    if not pass_.is_active or not _in_validity_window(pass_, day):
        return Count(0)

    if pass_.type == "SingleClass":
        return Count(1 if used_count(pass_, attendances) == 0 else 0)

    if pass_.type == "FullPass":
        return UNBOUNDED

    # Flexi and tiered monthly passes share one formula, differing only in cap
    cap = weekly_cap(pass_) or 0
    remaining_from_total = pass_.total_classes - used_count(pass_, attendances)
    if remaining_from_total <= 0:
        return Count(0)

    weeks_remaining = complete_weeks_remaining(pass_, day)
    possible_this_week = max(0, cap - used_this_week(pass_, attendances, day))
    max_possible = possible_this_week + weeks_remaining * cap

    return Count(min(remaining_from_total, max_possible))


# --- Eligibility ---


def check_eligibility(
    pass_: Pass,
    class_date: date,
    attendances: Sequence[AttendanceEvent],
) -> EligibilityOutput:
    """
    Decide whether a pass may be applied to a class on class_date.

    Weekly counts use the week containing class_date, not today.
    """
    day = _as_date(class_date)

    if not pass_.is_active:
        return EligibilityOutput(can_use=False, reason="Pass is inactive")

    if not _in_validity_window(pass_, day):
        return EligibilityOutput(
            can_use=False,
            reason=f"Class date {day} outside pass window "
            f"{pass_.start_date}..{pass_.end_date}",
        )

    if pass_.type == "SingleClass":
        if used_count(pass_, attendances) > 0:
            return EligibilityOutput(can_use=False, reason="Single-class pass already used")
        return EligibilityOutput(can_use=True)

    if pass_.type == "FullPass":
        return EligibilityOutput(can_use=True)

    cap = weekly_cap(pass_) or 0
    this_week = used_this_week(pass_, attendances, day)
    if this_week >= cap:
        return EligibilityOutput(
            can_use=False,
            reason=f"Weekly limit reached ({this_week}/{cap})",
        )

    return EligibilityOutput(can_use=True)


def can_use_for_class(
    pass_: Pass,
    class_date: date,
    attendances: Sequence[AttendanceEvent],
) -> bool:
    return check_eligibility(pass_, class_date, attendances).can_use


# --- Status ---


def classify_status(
    pass_: Pass,
    attendances: Sequence[AttendanceEvent],
    reference_date: date,
) -> PassStatus:
    """
    Classify pass lifecycle state.

    Strict priority chain; the first matching state wins:
    inactive, not_yet_started, expired, exhausted, active.
    """
    day = _as_date(reference_date)

    if not pass_.is_active:
        return "inactive"

    if day < pass_.start_date:
        return "not_yet_started"

    if day > pass_.end_date:
        return "expired"

    if pass_.type != "FullPass" and used_count(pass_, attendances) >= pass_.total_classes:
        return "exhausted"

    if is_exhausted(calculate_remaining(pass_, attendances, day)):
        return "exhausted"

    return "active"


# --- Summaries ---


def next_class_number(pass_: Pass, attendances: Sequence[AttendanceEvent]) -> int:
    """Ordinal a new check-in would consume (class 1 of 4, 2 of 4, ...)."""
    return used_count(pass_, attendances) + 1


def summarize_pass(
    pass_: Pass,
    attendances: Sequence[AttendanceEvent],
    reference_date: date,
) -> PassSummary:
    """Build the point-in-time view shown next to a pass."""
    day = _as_date(reference_date)
    return PassSummary(
        pass_id=pass_.id,
        remaining=calculate_remaining(pass_, attendances, day),
        used_classes=used_count(pass_, attendances),
        used_this_week=used_this_week(pass_, attendances, day),
        complete_weeks_remaining=complete_weeks_remaining(pass_, day),
        status=classify_status(pass_, attendances, day),
        allows_make_up_classes=allows_make_up_classes(pass_.type),
    )


def usage_stats(
    pass_: Pass,
    attendances: Sequence[AttendanceEvent],
    reference_date: date,
) -> PassUsageStats:
    """
    Usage statistics with a Monday-anchored weekly breakdown.

    Weeks run from the week containing start_date through the week
    containing end_date.
    """
    day = _as_date(reference_date)
    present = _present_for_pass(pass_, attendances)
    present_days = sorted(_as_date(a.class_date) for a in present)

    cap = weekly_cap(pass_)
    max_allowed: EntitlementCount = UNBOUNDED if cap is None else Count(cap)
    current_week = week_start(day)

    breakdown: list[WeeklyUsage] = []
    cursor = week_start(pass_.start_date)
    while cursor <= pass_.end_date:
        window = WeekWindow(start=cursor, end_exclusive=cursor + timedelta(days=DAYS_PER_WEEK))
        breakdown.append(
            WeeklyUsage(
                week_start=cursor,
                classes_attended=sum(1 for d in present_days if window.contains(d)),
                max_allowed=max_allowed,
                is_current_week=cursor == current_week,
            )
        )
        cursor = window.end_exclusive

    return PassUsageStats(
        pass_id=pass_.id,
        total_classes_attended=len(present_days),
        classes_this_week=used_this_week(pass_, attendances, day),
        weeks_used=sum(1 for w in breakdown if w.classes_attended > 0),
        weeks_remaining=complete_weeks_remaining(pass_, day),
        last_attendance_date=present_days[-1] if present_days else None,
        weekly_breakdown=tuple(breakdown),
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: RemainingInput
    | EligibilityInput
    | StatusInput
    | SummaryInput
    | UsageStatsInput,
) -> EntitlementCount | EligibilityOutput | PassStatus | PassSummary | PassUsageStats:
    """
    Run entitlement operation based on input type.

    This is the main entry point following the atomic component pattern.

    Args:
        input_data: One of the input types

    Returns:
        Corresponding output type
    """
    if isinstance(input_data, RemainingInput):
        return calculate_remaining(
            input_data.pass_,
            input_data.attendances,
            input_data.reference_date,
        )

    if isinstance(input_data, EligibilityInput):
        return check_eligibility(
            input_data.pass_,
            input_data.class_date,
            input_data.attendances,
        )

    if isinstance(input_data, StatusInput):
        return classify_status(
            input_data.pass_,
            input_data.attendances,
            input_data.reference_date,
        )

    if isinstance(input_data, SummaryInput):
        return summarize_pass(
            input_data.pass_,
            input_data.attendances,
            input_data.reference_date,
        )

    if isinstance(input_data, UsageStatsInput):
        return usage_stats(
            input_data.pass_,
            input_data.attendances,
            input_data.reference_date,
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")
