"""
Pass catalog.

Canonical per-type configuration for every pass the studio sells.
Weekly caps and totals here are the values issuance enforces and the
entitlement engine dispatches on.
"""

from __future__ import annotations

from dataclasses import dataclass

from studio_passes.domain.entities import PassType


@dataclass(frozen=True)
class PassTypeConfig:
    """Canonical configuration for one pass type."""

    display_name: str
    classes_per_week: int | None  # None means no weekly cap (FullPass)
    total_classes: int | None  # None means unlimited
    is_flexi: bool = False
    allows_make_up_classes: bool = True


PASS_CATALOG: dict[PassType, PassTypeConfig] = {
    "SingleClass": PassTypeConfig(
        display_name="Single class",
        classes_per_week=1,
        total_classes=1,
        allows_make_up_classes=False,
    ),
    "Monthly1Course": PassTypeConfig(
        display_name="1 course per week (4 classes total)",
        classes_per_week=1,
        total_classes=4,
    ),
    "Monthly2Courses": PassTypeConfig(
        display_name="2 courses per week (8 classes total)",
        classes_per_week=2,
        total_classes=8,
    ),
    "Monthly3Courses": PassTypeConfig(
        display_name="3 courses per week (12 classes total)",
        classes_per_week=3,
        total_classes=12,
    ),
    "Monthly4Courses": PassTypeConfig(
        display_name="4 courses per week (16 classes total)",
        classes_per_week=4,
        total_classes=16,
    ),
    "Monthly5Courses": PassTypeConfig(
        display_name="5 courses per week (20 classes total)",
        classes_per_week=5,
        total_classes=20,
    ),
    "Flexi4Classes": PassTypeConfig(
        display_name="FLEXI 4 classes",
        classes_per_week=1,
        total_classes=4,
        is_flexi=True,
    ),
    "Flexi8Classes": PassTypeConfig(
        display_name="FLEXI 8 classes",
        classes_per_week=2,
        total_classes=8,
        is_flexi=True,
    ),
    "FullPass": PassTypeConfig(
        display_name="Full Pass (unlimited)",
        classes_per_week=None,
        total_classes=None,
    ),
}

MONTHLY_PASS_TYPES: tuple[PassType, ...] = (
    "Monthly1Course",
    "Monthly2Courses",
    "Monthly3Courses",
    "Monthly4Courses",
    "Monthly5Courses",
)


def is_monthly_pass(pass_type: PassType) -> bool:
    """Check if pass type is one of the tiered monthly passes."""
    return pass_type in MONTHLY_PASS_TYPES


def is_flexi_pass(pass_type: PassType) -> bool:
    return PASS_CATALOG[pass_type].is_flexi


def canonical_classes_per_week(pass_type: PassType) -> int | None:
    return PASS_CATALOG[pass_type].classes_per_week


def canonical_total_classes(pass_type: PassType) -> int | None:
    return PASS_CATALOG[pass_type].total_classes


def display_name(pass_type: PassType) -> str:
    return PASS_CATALOG[pass_type].display_name


def allows_make_up_classes(pass_type: PassType) -> bool:
    """Single-class passes cannot be used to make up a missed class."""
    return PASS_CATALOG[pass_type].allows_make_up_classes


def available_monthly_passes() -> list[PassType]:
    """Monthly pass types offered in the purchase flow, smallest tier first."""
    return list(MONTHLY_PASS_TYPES)
