"""
Entitlement component ports.

External interfaces supplying attendance snapshots to the engine.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from studio_passes.domain.entities import AttendanceEvent


class AttendanceSourcePort(Protocol):
    """
    Port for reading attendance history.

    Implementations must return the complete set of events; the
    entitlement math assumes nothing is paginated away.
    """

    def list_by_pass(self, pass_id: UUID) -> list[AttendanceEvent]:
        """
        List every attendance event recorded against a pass.

        Args:
            pass_id: Pass identifier

        Returns:
            All events whose pass_id matches, in any order
        """
        ...

    def list_by_student_and_schedule(
        self, student_id: UUID, schedule_id: UUID
    ) -> list[AttendanceEvent]:
        """List attendance for one student in one schedule slot."""
        ...
