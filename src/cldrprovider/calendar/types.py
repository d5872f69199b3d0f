"""Calendar value types.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

__all__ = ["EraStartDate", "days_in_month", "is_leap_year"]

_DATE_PATTERN = re.compile(r"(-?\d+)-(\d{1,2})-(\d{1,2})")

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap year rule (valid for any integer year)."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a proleptic Gregorian month.

    Raises:
        ValueError: If month is outside 1..12
    """
    if not 1 <= month <= 12:
        msg = f"month must be in 1..12, got {month}"
        raise ValueError(msg)
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True, slots=True, order=True)
class EraStartDate:
    """A proleptic Gregorian date on which an era begins.

    Ordered lexicographically by (year, month, day). Construction does not
    validate; use is_valid() or let EraTable validate at load time.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_str(cls, text: str) -> EraStartDate:
        """Parse ``YYYY-MM-DD`` (the year may be negative).

        Raises:
            ValueError: If the text is not a date of that shape
        """
        match = _DATE_PATTERN.fullmatch(text.strip())
        if match is None:
            msg = f"Invalid era start date: {text!r} (expected YYYY-MM-DD)"
            raise ValueError(msg)
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: datetime.date) -> EraStartDate:
        """Convert a datetime.date."""
        return cls(value.year, value.month, value.day)

    def is_valid(self) -> bool:
        """Check that month and day form a real Gregorian date."""
        if not 1 <= self.month <= 12:
            return False
        return 1 <= self.day <= days_in_month(self.year, self.month)

    def __str__(self) -> str:
        """Return ``YYYY-MM-DD``."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
