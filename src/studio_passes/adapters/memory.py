"""
In-memory adapters.

Dict-backed implementations of the pass, attendance, schedule and
enrollment ports for local development and testing. Production wires
database-backed repositories behind the same ports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from studio_passes.domain.entities import (
    AttendanceEvent,
    Enrollment,
    Pass,
    ScheduleSlot,
)

logger = logging.getLogger(__name__)


class InMemoryPassRepo:
    """Implements PassRepoPort."""

    def __init__(self, passes: Iterable[Pass] = ()) -> None:
        self._passes: dict[UUID, Pass] = {p.id: p for p in passes}

    def get_by_id(self, pass_id: UUID) -> Pass | None:
        return self._passes.get(pass_id)

    def list_all(self) -> list[Pass]:
        return list(self._passes.values())

    def list_by_owner(self, owner_id: UUID) -> list[Pass]:
        return [p for p in self._passes.values() if p.owner_id == owner_id]

    def save(self, pass_: Pass) -> Pass:
        self._passes[pass_.id] = pass_
        logger.debug(f"InMemoryPassRepo.save: pass_id={pass_.id}, type={pass_.type}")
        return pass_


class InMemoryAttendanceSource:
    """Implements AttendanceSourcePort. Append-only."""

    def __init__(self, events: Iterable[AttendanceEvent] = ()) -> None:
        self._events: list[AttendanceEvent] = list(events)

    def record(self, event: AttendanceEvent) -> AttendanceEvent:
        self._events.append(event)
        logger.debug(
            f"InMemoryAttendanceSource.record: pass_id={event.pass_id}, "
            f"class_date={event.class_date}, present={event.was_present}"
        )
        return event

    def list_by_pass(self, pass_id: UUID) -> list[AttendanceEvent]:
        return [e for e in self._events if e.pass_id == pass_id]

    def list_by_student_and_schedule(
        self, student_id: UUID, schedule_id: UUID
    ) -> list[AttendanceEvent]:
        return [
            e
            for e in self._events
            if e.student_id == student_id and e.schedule_id == schedule_id
        ]


class InMemoryScheduleSource:
    """Implements ScheduleSourcePort."""

    def __init__(self, slots: Iterable[ScheduleSlot] = ()) -> None:
        self._slots: dict[UUID, ScheduleSlot] = {s.id: s for s in slots}

    def add(self, slot: ScheduleSlot) -> ScheduleSlot:
        self._slots[slot.id] = slot
        return slot

    def get_slots(self, schedule_ids: list[UUID]) -> dict[UUID, ScheduleSlot]:
        return {sid: self._slots[sid] for sid in schedule_ids if sid in self._slots}


class InMemoryEnrollmentRepo:
    """Implements EnrollmentRepoPort."""

    def __init__(self) -> None:
        self._enrollments: list[Enrollment] = []

    def enroll(self, student_id: UUID, schedule_id: UUID, enrolled_date: date) -> Enrollment:
        enrollment = Enrollment(
            student_id=student_id,
            schedule_id=schedule_id,
            enrolled_date=enrolled_date,
        )
        self._enrollments.append(enrollment)
        return enrollment

    def list_by_student(self, student_id: UUID) -> list[Enrollment]:
        return [e for e in self._enrollments if e.student_id == student_id]
