from datetime import date, datetime
from typing import Protocol


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Return current UTC time."""
        ...

    def today(self) -> date:
        """Return the calendar day of now()."""
        ...
