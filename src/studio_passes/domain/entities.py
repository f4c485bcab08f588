from datetime import date, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
PassType = Literal[
    "SingleClass",
    "Monthly1Course",
    "Monthly2Courses",
    "Monthly3Courses",
    "Monthly4Courses",
    "Monthly5Courses",
    "Flexi4Classes",
    "Flexi8Classes",
    "FullPass",
]
PassStatus = Literal["active", "inactive", "expired", "exhausted", "not_yet_started"]

# Sunday=0 ... Saturday=6
DayOfWeek = Literal[0, 1, 2, 3, 4, 5, 6]


def day_of_week(value: date) -> int:
    """Sunday-first weekday index of a date."""
    return (value.weekday() + 1) % 7


# --- Passes ---

class Pass(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    owner_id: UUID
    start_date: date
    end_date: date
    type: PassType = "SingleClass"
    classes_per_week: int
    total_classes: int
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = None


# --- Attendance ---

class AttendanceEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    student_id: UUID | None = None
    schedule_id: UUID | None = None
    class_date: date
    was_present: bool
    pass_id: UUID | None = None  # None when attended without a pass


# --- Schedule ---

class ScheduleSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    day_of_week: DayOfWeek
    start_time: str = ""  # "18:00"
    label: str = ""  # "Monday 18:00 - Bachata P1"


class Enrollment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    student_id: UUID
    schedule_id: UUID
    enrolled_date: date
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
