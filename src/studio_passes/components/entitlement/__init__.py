"""
Entitlement component.

Public API for remaining-class calculation, usage eligibility and
pass status classification.
"""

from .component import (
    calculate_remaining,
    can_use_for_class,
    check_eligibility,
    classify_status,
    complete_weeks_remaining,
    is_valid_on,
    next_class_number,
    run,
    summarize_pass,
    usage_stats,
    used_count,
    used_this_week,
    week_start,
    week_window,
    weekly_cap,
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
    Unbounded,
    UsageStatsInput,
    WeeklyUsage,
    WeekWindow,
    is_exhausted,
)
from .ports import AttendanceSourcePort

__all__ = [
    # Functions
    "calculate_remaining",
    "can_use_for_class",
    "check_eligibility",
    "classify_status",
    "complete_weeks_remaining",
    "is_valid_on",
    "next_class_number",
    "run",
    "summarize_pass",
    "usage_stats",
    "used_count",
    "used_this_week",
    "week_start",
    "week_window",
    "weekly_cap",
    # Models
    "Count",
    "EligibilityInput",
    "EligibilityOutput",
    "EntitlementCount",
    "PassSummary",
    "PassUsageStats",
    "RemainingInput",
    "StatusInput",
    "SummaryInput",
    "UNBOUNDED",
    "Unbounded",
    "UsageStatsInput",
    "WeeklyUsage",
    "WeekWindow",
    "is_exhausted",
    # Ports
    "AttendanceSourcePort",
]
