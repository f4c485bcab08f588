from datetime import date
from typing import Protocol
from uuid import UUID

from studio_passes.domain.entities import Enrollment, Pass


class PassRepoPort(Protocol):
    def get_by_id(self, pass_id: UUID) -> Pass | None:
        ...

    def list_all(self) -> list[Pass]:
        ...

    def list_by_owner(self, owner_id: UUID) -> list[Pass]:
        ...

    def save(self, pass_: Pass) -> Pass:
        ...


class EnrollmentRepoPort(Protocol):
    def enroll(self, student_id: UUID, schedule_id: UUID, enrolled_date: date) -> Enrollment:
        ...

    def list_by_student(self, student_id: UUID) -> list[Enrollment]:
        ...
