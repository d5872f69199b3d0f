"""Week-of-month and week-of-year computation.

A WeekCalculator applies a region's week rules (first day of the week and
the minimum number of days a week needs inside a month or year to count
as part of it). Week-of-month always uses a minimum of one day, so its
results increase with the day and never wrap to a neighbouring month.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from cldrprovider.diagnostics import OutOfRangeError
from cldrprovider.enums import IsoWeekday
from cldrprovider.provider.request import DataRequest

from .data import WeekDataV1, WeekDataV1Marker

if TYPE_CHECKING:
    from cldrprovider.provider.loading import DataProvider
    from cldrprovider.provider.request import DataLocale

__all__ = [
    "MIN_UNIT_DAYS",
    "RelativeUnit",
    "WeekCalculator",
    "WeekOf",
    "simple_week_of",
    "week_of",
]

# Shortest month or year the calculation supports
MIN_UNIT_DAYS = 14


class RelativeUnit(StrEnum):
    """Which month or year a week is assigned to, relative to the date's own."""

    PREVIOUS = "previous"
    CURRENT = "current"
    NEXT = "next"


@dataclass(frozen=True, slots=True)
class WeekOf:
    """A 1-based week number and the unit it belongs to."""

    week: int
    unit: RelativeUnit


def _add_to_weekday(weekday: IsoWeekday, days: int) -> IsoWeekday:
    return IsoWeekday((weekday - 1 + days) % 7 + 1)


@dataclass(frozen=True, slots=True)
class WeekCalculator:
    """Week rules of a locale.

    Attributes:
        first_weekday: First day of the week
        min_week_days: Days a week needs in a month/year to belong to it

    Example:
        >>> calc = WeekCalculator(IsoWeekday.MONDAY, 4)
        >>> calc.week_of_month(10, IsoWeekday.WEDNESDAY)
        2
    """

    first_weekday: IsoWeekday = IsoWeekday.MONDAY
    min_week_days: int = 1

    def __post_init__(self) -> None:
        """Validate the week rules.

        Raises:
            ValueError: If min_week_days is outside 1..7
        """
        object.__setattr__(self, "first_weekday", IsoWeekday(self.first_weekday))
        if not 1 <= self.min_week_days <= 7:
            msg = f"min_week_days must be in 1..7, got {self.min_week_days}"
            raise ValueError(msg)

    @classmethod
    def from_week_data(cls, data: WeekDataV1) -> WeekCalculator:
        """Build from loaded week data."""
        return cls(data.first_weekday, data.min_week_days)

    @classmethod
    def try_new(cls, provider: DataProvider, locale: DataLocale) -> WeekCalculator:
        """Load the week rules for ``locale`` (resolved by region).

        Raises:
            DataError: If the provider cannot supply week data
        """
        response = provider.load(WeekDataV1Marker, DataRequest(locale))
        return cls.from_week_data(response.take_payload().get())

    def weekday_index(self, weekday: IsoWeekday) -> int:
        """Return the 0-based position of ``weekday`` in this calendar's week."""
        return (7 + weekday - self.first_weekday) % 7

    def week_of_month(self, day_of_month: int, weekday: IsoWeekday) -> int:
        """Return the 1-based week of the month containing ``day_of_month``.

        Uses a minimum of one day per week regardless of min_week_days.
        """
        return simple_week_of(self.first_weekday, day_of_month, weekday)

    def week_of_year(
        self, days_in_prev_year: int, days_in_year: int, day_of_year: int, weekday: IsoWeekday
    ) -> WeekOf:
        """Return the week of the year, which may belong to a neighbouring year.

        Raises:
            OutOfRangeError: If a year is shorter than MIN_UNIT_DAYS
        """
        return week_of(self, days_in_prev_year, days_in_year, day_of_year, weekday)


@dataclass(frozen=True, slots=True)
class _UnitInfo:
    first_day: IsoWeekday
    duration_days: int

    @classmethod
    def new(cls, first_day: IsoWeekday, duration_days: int) -> _UnitInfo:
        if duration_days < MIN_UNIT_DAYS:
            msg = f"month/year duration must be at least {MIN_UNIT_DAYS} days"
            raise OutOfRangeError(msg)
        return cls(first_day, duration_days)

    def first_week_offset(self, calc: WeekCalculator) -> int:
        # Negative when the first week starts in the previous unit
        first_day_index = calc.weekday_index(self.first_day)
        if 7 - first_day_index >= calc.min_week_days:
            return -first_day_index
        return 7 - first_day_index

    def num_weeks(self, calc: WeekCalculator) -> int:
        days = self.duration_days - self.first_week_offset(calc)
        return (days + 7 - calc.min_week_days) // 7

    def relative_week(self, calc: WeekCalculator, day: int) -> WeekOf | None:
        days_since_first_week = day - self.first_week_offset(calc) - 1
        if days_since_first_week < 0:
            return None
        week = 1 + days_since_first_week // 7
        if week > self.num_weeks(calc):
            return WeekOf(1, RelativeUnit.NEXT)
        return WeekOf(week, RelativeUnit.CURRENT)


def week_of(
    calc: WeekCalculator,
    days_in_previous_unit: int,
    days_in_unit: int,
    day: int,
    weekday: IsoWeekday,
) -> WeekOf:
    """Return the week of a month or year containing 1-based ``day``.

    Raises:
        OutOfRangeError: If a unit is shorter than MIN_UNIT_DAYS
    """
    current = _UnitInfo.new(_add_to_weekday(weekday, 1 - day), days_in_unit)
    relative = current.relative_week(calc, day)
    if relative is not None:
        return relative
    previous = _UnitInfo.new(
        _add_to_weekday(current.first_day, -days_in_previous_unit), days_in_previous_unit
    )
    return WeekOf(previous.num_weeks(calc), RelativeUnit.PREVIOUS)


def simple_week_of(first_weekday: IsoWeekday, day: int, weekday: IsoWeekday) -> int:
    """Return the week of ``day`` with a one-day minimum; strictly non-decreasing in day."""
    calc = WeekCalculator(first_weekday, 1)
    # With a one-day minimum the previous unit's length has no effect
    return week_of(calc, MIN_UNIT_DAYS, 0xFFFF, day, weekday).week
