from studio_passes.domain.catalog import (
    MONTHLY_PASS_TYPES,
    PASS_CATALOG,
    PassTypeConfig,
    allows_make_up_classes,
    available_monthly_passes,
    canonical_classes_per_week,
    canonical_total_classes,
    display_name,
    is_flexi_pass,
    is_monthly_pass,
)
from studio_passes.domain.entities import (
    AttendanceEvent,
    DayOfWeek,
    Enrollment,
    Pass,
    PassStatus,
    PassType,
    ScheduleSlot,
    day_of_week,
)

__all__ = [
    # Entities
    "AttendanceEvent",
    "DayOfWeek",
    "Enrollment",
    "Pass",
    "PassStatus",
    "PassType",
    "ScheduleSlot",
    "day_of_week",
    # Catalog
    "MONTHLY_PASS_TYPES",
    "PASS_CATALOG",
    "PassTypeConfig",
    "allows_make_up_classes",
    "available_monthly_passes",
    "canonical_classes_per_week",
    "canonical_total_classes",
    "display_name",
    "is_flexi_pass",
    "is_monthly_pass",
]
