"""
Issuance component port definitions.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from studio_passes.domain.entities import ScheduleSlot


class ScheduleSourcePort(Protocol):
    """Port for resolving weekly schedule slots."""

    def get_slots(self, schedule_ids: list[UUID]) -> dict[UUID, ScheduleSlot]:
        """Get slots by ID. Unknown IDs are absent from the result."""
        ...
