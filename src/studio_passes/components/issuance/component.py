"""
Issuance component.

Pure validation of newly constructed passes and purchase requests.

Rules:
- end_date must be after start_date
- start_date may be at most one day in the past
- weekly cap and total classes must match the pass type
- every pass except SingleClass and FullPass runs for exactly 28 days
- a purchase selects one weekly slot per weekly class, and the pass must
  start on a day one of those slots runs

Every violation is reported; nothing is raised. No partial pass is built
from a failed validation.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any
from uuid import UUID

from studio_passes.domain.catalog import (
    canonical_classes_per_week,
    canonical_total_classes,
    is_monthly_pass,
)
from studio_passes.domain.entities import Pass, PassType, day_of_week

from .models import (
    IssuanceConfig,
    IssuanceInput,
    IssuanceValidationError,
    PurchaseInput,
    ValidationResult,
)

_WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Types whose counts are fixed regardless of tier arithmetic
_FIXED_COUNTS: dict[PassType, tuple[int, int]] = {
    # type: (total_classes, classes_per_week)
    "SingleClass": (1, 1),
    "Flexi4Classes": (4, 1),
    "Flexi8Classes": (8, 2),
}


def _validate_dates(
    candidate: Pass, today: date, config: IssuanceConfig
) -> list[IssuanceValidationError]:
    errors: list[IssuanceValidationError] = []

    if candidate.end_date <= candidate.start_date:
        errors.append(
            IssuanceValidationError(
                code="invalid_date_range",
                message="End date must be after start date",
                field="end_date",
            )
        )

    earliest = today - timedelta(days=config.past_start_tolerance_days)
    if candidate.start_date < earliest:
        errors.append(
            IssuanceValidationError(
                code="start_date_in_past",
                message=f"Start date {candidate.start_date} cannot be in the past",
                field="start_date",
            )
        )

    return errors


def _validate_counts(
    candidate: Pass, config: IssuanceConfig
) -> list[IssuanceValidationError]:
    errors: list[IssuanceValidationError] = []

    if candidate.type == "FullPass":
        if candidate.total_classes < 0:
            errors.append(
                IssuanceValidationError(
                    code="total_classes_mismatch",
                    message="Total classes cannot be negative",
                    field="total_classes",
                )
            )
        return errors

    if candidate.type in _FIXED_COUNTS:
        expected_total, expected_per_week = _FIXED_COUNTS[candidate.type]
        if candidate.total_classes != expected_total:
            errors.append(
                IssuanceValidationError(
                    code="total_classes_mismatch",
                    message=f"{candidate.type} pass must have exactly "
                    f"{expected_total} total classes",
                    field="total_classes",
                )
            )
        if candidate.classes_per_week != expected_per_week:
            errors.append(
                IssuanceValidationError(
                    code="weekly_cap_mismatch",
                    message=f"{candidate.type} pass allows "
                    f"{expected_per_week} classes per week",
                    field="classes_per_week",
                )
            )
        return errors

    # Tiered monthly passes
    expected_per_week = canonical_classes_per_week(candidate.type)
    if candidate.classes_per_week <= 0 or candidate.classes_per_week != expected_per_week:
        errors.append(
            IssuanceValidationError(
                code="weekly_cap_mismatch",
                message=f"{candidate.type} allows {expected_per_week} classes per week, "
                f"got {candidate.classes_per_week}",
                field="classes_per_week",
            )
        )

    expected_total = candidate.classes_per_week * config.weeks_per_pass
    if candidate.total_classes != expected_total:
        errors.append(
            IssuanceValidationError(
                code="total_classes_mismatch",
                message=f"{candidate.type} should have {expected_total} total classes "
                f"({config.weeks_per_pass} weeks x {candidate.classes_per_week} "
                f"classes/week)",
                field="total_classes",
            )
        )

    return errors


def _validate_validity_period(
    candidate: Pass, config: IssuanceConfig
) -> list[IssuanceValidationError]:
    if candidate.type in ("SingleClass", "FullPass"):
        return []

    validity_period = (candidate.end_date - candidate.start_date).days + 1
    if validity_period != config.validity_days:
        return [
            IssuanceValidationError(
                code="validity_period_mismatch",
                message=f"Pass must have exactly {config.validity_days}-day validity "
                f"period, got {validity_period} days",
                field="end_date",
            )
        ]
    return []


# --- Public Functions ---


def validate_for_issuance(
    candidate: Pass,
    *,
    today: date | None = None,
    config: IssuanceConfig | None = None,
) -> ValidationResult:
    """
    Validate that a candidate pass is internally consistent.

    Args:
        candidate: Pass about to be issued
        today: Issuance day; defaults to the system date
        config: Issuance policy

    Returns:
        ValidationResult with every violation found
    """
    config = config or IssuanceConfig()
    today = today or date.today()

    errors = [
        *_validate_dates(candidate, today, config),
        *_validate_counts(candidate, config),
        *_validate_validity_period(candidate, config),
    ]
    return ValidationResult(errors=errors)


def validate_purchase_request(
    pass_type: PassType,
    start_date: date,
    selected_slot_weekdays: Sequence[int],
    config: IssuanceConfig | None = None,
) -> ValidationResult:
    """
    Validate a purchase's weekly slot selection against its start date.

    FullPass has no fixed weekly schedule, so both checks are skipped.

    Args:
        pass_type: Type being purchased
        start_date: First day of the pass
        selected_slot_weekdays: Sunday-first weekday of each selected slot
        config: Issuance policy

    Returns:
        ValidationResult with every violation found
    """
    errors: list[IssuanceValidationError] = []

    expected_count = canonical_classes_per_week(pass_type)
    if expected_count is None:
        return ValidationResult(errors=errors)

    if len(selected_slot_weekdays) != expected_count:
        errors.append(
            IssuanceValidationError(
                code="selection_count_mismatch",
                message=f"{pass_type} requires {expected_count} weekly classes, "
                f"{len(selected_slot_weekdays)} selected",
                field="selected_schedule_ids",
            )
        )

    start_weekday = day_of_week(start_date)
    if start_weekday not in set(selected_slot_weekdays):
        errors.append(
            IssuanceValidationError(
                code="start_date_weekday_mismatch",
                message=f"Start date falls on {_WEEKDAY_NAMES[start_weekday]}, "
                "which has no selected class",
                field="start_date",
            )
        )

    return ValidationResult(errors=errors)


def build_purchased_pass(
    owner_id: UUID,
    pass_type: PassType,
    start_date: date,
    config: IssuanceConfig | None = None,
) -> Pass:
    """
    Build the canonical candidate pass for a purchase.

    The result still has to pass validate_for_issuance before it is saved.
    FullPass counts are stored as 0 and ignored by the engine.
    """
    config = config or IssuanceConfig()

    classes_per_week = canonical_classes_per_week(pass_type) or 0
    total_classes = canonical_total_classes(pass_type) or 0
    if is_monthly_pass(pass_type):
        total_classes = classes_per_week * config.weeks_per_pass

    return Pass(
        owner_id=owner_id,
        start_date=start_date,
        end_date=start_date + timedelta(days=config.validity_days - 1),
        type=pass_type,
        classes_per_week=classes_per_week,
        total_classes=total_classes,
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: IssuanceInput | PurchaseInput,
    config: IssuanceConfig | None = None,
) -> ValidationResult:
    """
    Run issuance validation based on input type.

    Args:
        input_data: One of the input types
        config: Issuance policy

    Returns:
        ValidationResult
    """
    if isinstance(input_data, IssuanceInput):
        return validate_for_issuance(
            input_data.candidate,
            today=input_data.today,
            config=config,
        )

    if isinstance(input_data, PurchaseInput):
        return validate_purchase_request(
            input_data.pass_type,
            input_data.start_date,
            input_data.selected_slot_weekdays,
            config,
        )

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: dict[str, Any]) -> IssuanceConfig:
    """
    Load IssuanceConfig from the rules document.

    Args:
        rules: Parsed rules dictionary

    Returns:
        IssuanceConfig instance
    """
    issuance = rules.get("issuance", {})
    defaults = IssuanceConfig()

    return IssuanceConfig(
        validity_days=issuance.get("validity_days", defaults.validity_days),
        weeks_per_pass=issuance.get("weeks_per_pass", defaults.weeks_per_pass),
        past_start_tolerance_days=issuance.get(
            "past_start_tolerance_days", defaults.past_start_tolerance_days
        ),
    )
