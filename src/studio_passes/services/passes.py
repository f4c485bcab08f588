"""
PassService - pass issuance, lifecycle updates and entitlement queries.

Orchestrates the repository/source ports with the pure entitlement and
issuance components. Entitlement is recomputed from a fresh attendance
snapshot on every call; nothing is cached here.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any
from uuid import UUID

from studio_passes.components.entitlement import (
    AttendanceSourcePort,
    PassSummary,
    PassUsageStats,
    can_use_for_class,
    is_valid_on,
    next_class_number,
    summarize_pass,
    usage_stats,
    used_count,
)
from studio_passes.components.issuance import (
    IssuanceConfig,
    IssuanceValidationError,
    ScheduleSourcePort,
    build_purchased_pass,
    load_config_from_rules,
    validate_for_issuance,
    validate_purchase_request,
)
from studio_passes.domain.entities import Pass, PassType
from studio_passes.ports.clock import ClockPort
from studio_passes.ports.repo import EnrollmentRepoPort, PassRepoPort
from studio_passes.rules.models import StudioRules

logger = logging.getLogger(__name__)

DEFAULT_EXPIRING_WINDOW_DAYS = 7


class PassIssuanceError(Exception):
    """Raised when a pass fails issuance or update validation."""

    def __init__(self, errors: list[IssuanceValidationError]) -> None:
        self.errors = errors
        super().__init__(f"Pass rejected: {'; '.join(e.message for e in errors)}")

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]


class PassService:
    def __init__(
        self,
        passes: PassRepoPort,
        attendance: AttendanceSourcePort,
        schedules: ScheduleSourcePort,
        clock: ClockPort,
        enrollments: EnrollmentRepoPort | None = None,
        rules: StudioRules | None = None,
    ):
        self.passes = passes
        self.attendance = attendance
        self.schedules = schedules
        self.clock = clock
        self.enrollments = enrollments

        if rules is not None:
            self.config = load_config_from_rules(rules.model_dump())
            self.expiring_window_days = rules.passes.expiring_window_days
        else:
            self.config = IssuanceConfig()
            self.expiring_window_days = DEFAULT_EXPIRING_WINDOW_DAYS

    def _get(self, pass_id: UUID) -> Pass:
        pass_ = self.passes.get_by_id(pass_id)
        if not pass_:
            raise ValueError(f"Pass with ID {pass_id} not found")
        return pass_

    # --- Issuance ---

    def create_pass(self, candidate: Pass) -> Pass:
        result = validate_for_issuance(candidate, today=self.clock.today(), config=self.config)
        if not result.is_valid:
            logger.warning(
                f"Rejected pass for owner {candidate.owner_id} of type {candidate.type}: "
                f"{result.codes}"
            )
            raise PassIssuanceError(result.errors)

        saved = self.passes.save(candidate)
        logger.info(f"Created pass {saved.id} of type {saved.type} for owner {saved.owner_id}")
        return saved

    def purchase_pass(
        self,
        owner_id: UUID,
        pass_type: PassType,
        start_date: date,
        schedule_ids: list[UUID],
    ) -> Pass:
        """
        Issue a pass for a purchase with weekly class selection.
        The pass is saved and the owner enrolled only if every check passes.
        """
        # A slot listed twice is still one weekly class
        schedule_ids = list(dict.fromkeys(schedule_ids))
        slots = self.schedules.get_slots(schedule_ids)
        missing = [sid for sid in schedule_ids if sid not in slots]
        if missing:
            raise ValueError(f"Schedules not found: {', '.join(str(m) for m in missing)}")

        weekdays = [slots[sid].day_of_week for sid in schedule_ids]
        selection = validate_purchase_request(pass_type, start_date, weekdays, self.config)

        candidate = build_purchased_pass(owner_id, pass_type, start_date, self.config)
        issuance = validate_for_issuance(
            candidate, today=self.clock.today(), config=self.config
        )

        errors = [*selection.errors, *issuance.errors]
        if errors:
            logger.warning(
                f"Rejected {pass_type} purchase for owner {owner_id}: "
                f"{[e.code for e in errors]}"
            )
            raise PassIssuanceError(errors)

        # Enroll before saving so a failed enrollment leaves no issued pass
        if self.enrollments is not None:
            for schedule_id in schedule_ids:
                self.enrollments.enroll(owner_id, schedule_id, start_date)
        saved = self.passes.save(candidate)

        logger.info(f"Purchased pass {saved.id} of type {pass_type} for owner {owner_id}")
        return saved

    # --- Lifecycle updates ---

    def update_pass(
        self,
        pass_id: UUID,
        *,
        end_date: date | None = None,
        is_active: bool | None = None,
        additional_classes: int | None = None,
    ) -> Pass:
        """Apply the only mutations a pass allows after issuance."""
        existing = self._get(pass_id)

        updates: dict[str, Any] = {"updated_at": self.clock.now()}
        if end_date is not None:
            updates["end_date"] = end_date
        if is_active is not None:
            updates["is_active"] = is_active
        if additional_classes is not None:
            if additional_classes < 0:
                raise ValueError("Additional classes cannot be negative")
            updates["total_classes"] = existing.total_classes + additional_classes

        updated = existing.model_copy(update=updates)
        if updated.end_date <= updated.start_date:
            raise PassIssuanceError(
                [
                    IssuanceValidationError(
                        code="invalid_date_range",
                        message="End date must be after start date",
                        field="end_date",
                    )
                ]
            )

        saved = self.passes.save(updated)
        logger.info(f"Updated pass {pass_id}: {sorted(k for k in updates if k != 'updated_at')}")
        return saved

    def extend_pass(self, pass_id: UUID, additional_days: int) -> Pass:
        existing = self._get(pass_id)
        return self.update_pass(
            pass_id, end_date=existing.end_date + timedelta(days=additional_days)
        )

    def activate_pass(self, pass_id: UUID) -> Pass:
        return self.update_pass(pass_id, is_active=True)

    def deactivate_pass(self, pass_id: UUID) -> Pass:
        return self.update_pass(pass_id, is_active=False)

    # --- Entitlement queries ---

    def can_use_pass_for_class(self, pass_id: UUID, class_date: date) -> bool:
        pass_ = self.passes.get_by_id(pass_id)
        if pass_ is None:
            return False

        attendances = self.attendance.list_by_pass(pass_id)
        return can_use_for_class(pass_, class_date, attendances)

    def get_summary(self, pass_id: UUID, reference_date: date | None = None) -> PassSummary:
        pass_ = self._get(pass_id)
        attendances = self.attendance.list_by_pass(pass_id)
        return summarize_pass(pass_, attendances, reference_date or self.clock.today())

    def get_usage_stats(
        self, pass_id: UUID, reference_date: date | None = None
    ) -> PassUsageStats:
        pass_ = self._get(pass_id)
        attendances = self.attendance.list_by_pass(pass_id)
        return usage_stats(pass_, attendances, reference_date or self.clock.today())

    def get_used_classes(self, pass_id: UUID, from_date: date | None = None) -> int:
        pass_ = self.passes.get_by_id(pass_id)
        if pass_ is None:
            return 0

        attendances = self.attendance.list_by_pass(pass_id)
        if from_date is not None:
            attendances = [a for a in attendances if a.class_date >= from_date]
        return used_count(pass_, attendances)

    def get_next_class_number(self, pass_id: UUID) -> int:
        pass_ = self._get(pass_id)
        return next_class_number(pass_, self.attendance.list_by_pass(pass_id))

    def is_pass_valid_for_date(self, pass_id: UUID, value: date) -> bool:
        pass_ = self.passes.get_by_id(pass_id)
        if pass_ is None:
            return False
        return is_valid_on(pass_, value)

    # --- Listings ---

    def get_current_active_pass(self, owner_id: UUID) -> Pass | None:
        """Most recently started pass valid today, if any."""
        today = self.clock.today()
        valid = [p for p in self.passes.list_by_owner(owner_id) if is_valid_on(p, today)]
        if not valid:
            return None
        return max(valid, key=lambda p: p.start_date)

    def get_active_passes(self) -> list[Pass]:
        today = self.clock.today()
        return [p for p in self.passes.list_all() if is_valid_on(p, today)]

    def get_expired_passes(self) -> list[Pass]:
        today = self.clock.today()
        expired = [p for p in self.passes.list_all() if p.end_date < today]
        return sorted(expired, key=lambda p: p.end_date, reverse=True)

    def get_expiring_passes(self, days: int | None = None) -> list[Pass]:
        """Valid passes ending within the given number of days, soonest first."""
        today = self.clock.today()
        cutoff = today + timedelta(
            days=self.expiring_window_days if days is None else days
        )
        expiring = [
            p
            for p in self.passes.list_all()
            if is_valid_on(p, today) and p.end_date <= cutoff
        ]
        return sorted(expiring, key=lambda p: p.end_date)

    def get_passes_by_type(self, pass_type: PassType) -> list[Pass]:
        return [p for p in self.passes.list_all() if p.type == pass_type]
