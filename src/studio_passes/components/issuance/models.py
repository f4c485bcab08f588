"""
Issuance component input/output models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from studio_passes.domain.entities import Pass, PassType

# --- Validation Error ---

IssuanceErrorCode = Literal[
    "invalid_date_range",
    "weekly_cap_mismatch",
    "total_classes_mismatch",
    "validity_period_mismatch",
    "selection_count_mismatch",
    "start_date_weekday_mismatch",
    "start_date_in_past",
]


@dataclass(frozen=True)
class IssuanceValidationError:
    """Issuance validation error."""

    code: IssuanceErrorCode
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of an issuance or purchase validation."""

    errors: list[IssuanceValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def codes(self) -> list[IssuanceErrorCode]:
        return [e.code for e in self.errors]


# --- Configuration ---


@dataclass(frozen=True)
class IssuanceConfig:
    """Issuance policy from rules."""

    validity_days: int = 28
    weeks_per_pass: int = 4
    # Tolerates same-day purchases made across timezones
    past_start_tolerance_days: int = 1


# --- Input Models ---


@dataclass(frozen=True)
class IssuanceInput:
    """Input for validating a candidate pass before it is persisted."""

    candidate: Pass
    today: date


@dataclass(frozen=True)
class PurchaseInput:
    """Input for validating a purchase request's schedule selection."""

    pass_type: PassType
    start_date: date
    # Sunday=0 ... Saturday=6, one entry per selected weekly slot
    selected_slot_weekdays: Sequence[int]
