"""Japanese calendars.

Japanese uses the five modern eras (Meiji onwards); JapaneseExtended uses
the full era list, with pre-Meiji era codes formed as ``<name>-<start year>``
(e.g. ``keio-1865``). Dates before the first known era use the Gregorian
``bce``/``ce`` eras.

Both calendars hold a DataPayload of era data; era lookup reads the
payload's view directly, so a table decoded from a packed buffer is never
copied.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import bisect
import datetime
import logging
from dataclasses import dataclass
from operator import itemgetter
from typing import TYPE_CHECKING, ClassVar

from cldrprovider.diagnostics import OutOfRangeError, UnknownEraError
from cldrprovider.provider.request import DataRequest

from .data import (
    JapaneseDateLengthsV1Marker,
    JapaneseDateSymbolsV1Marker,
    JapaneseErasV1Marker,
    JapaneseExtendedDateLengthsV1Marker,
    JapaneseExtendedDateSymbolsV1Marker,
    JapaneseExtendedErasV1Marker,
)
from .kinds import CldrCalendar
from .types import EraStartDate

if TYPE_CHECKING:
    from cldrprovider.provider.loading import DataProvider
    from cldrprovider.provider.payload import DataPayload

    from .eras import EraTable

__all__ = [
    "HEISEI_START",
    "MEIJI_START",
    "REIWA_START",
    "SHOWA_START",
    "TAISHO_START",
    "Japanese",
    "JapaneseDate",
    "JapaneseExtended",
]

logger = logging.getLogger(__name__)

MEIJI_START = EraStartDate(1868, 9, 8)
TAISHO_START = EraStartDate(1912, 7, 30)
SHOWA_START = EraStartDate(1926, 12, 25)
HEISEI_START = EraStartDate(1989, 1, 8)
REIWA_START = EraStartDate(2019, 5, 1)

# Descending, for the modern-era fast path
_MODERN_ERAS: tuple[tuple[EraStartDate, str], ...] = (
    (REIWA_START, "reiwa"),
    (HEISEI_START, "heisei"),
    (SHOWA_START, "showa"),
    (TAISHO_START, "taisho"),
    (MEIJI_START, "meiji"),
)

_MODERN_RANGES: dict[str, tuple[EraStartDate, EraStartDate]] = {
    "heisei": (HEISEI_START, REIWA_START),
    "showa": (SHOWA_START, HEISEI_START),
    "taisho": (TAISHO_START, SHOWA_START),
    "meiji": (MEIJI_START, TAISHO_START),
}

_FALLBACK_ERA = (REIWA_START, "reiwa")


@dataclass(frozen=True, slots=True)
class JapaneseDate:
    """A date in a Japanese calendar.

    Attributes:
        year: Proleptic Gregorian year
        month: Month (1..12)
        day: Day of month
        era: Era code (``bce``/``ce`` before the first known era)
        era_year: Year within the era, starting at 1
    """

    year: int
    month: int
    day: int
    era: str
    era_year: int

    @property
    def start(self) -> EraStartDate:
        """The Gregorian date as an EraStartDate (for comparisons)."""
        return EraStartDate(self.year, self.month, self.day)


class Japanese(CldrCalendar):
    """Japanese calendar with modern eras.

    Example:
        >>> calendar = Japanese.try_new(baked_provider())
        >>> calendar.adjusted_year_for(EraStartDate(2019, 5, 1))
        (1, 'reiwa')
    """

    DEFAULT_BCP_47_IDENTIFIER: ClassVar[str] = "japanese"
    date_symbols_marker = JapaneseDateSymbolsV1Marker
    date_lengths_marker = JapaneseDateLengthsV1Marker
    debug_name: ClassVar[str] = "Japanese"

    __slots__ = ("_eras",)

    def __init__(self, eras: DataPayload[JapaneseErasV1Marker]) -> None:
        """Create a calendar over loaded era data.

        Args:
            eras: Era payload; it may borrow from a buffer
        """
        self._eras = eras

    @classmethod
    def try_new(cls, provider: DataProvider) -> Japanese:
        """Load modern era data (a singleton key; requested with root).

        Raises:
            DataError: If the provider cannot supply the eras
        """
        payload = provider.load(JapaneseErasV1Marker, DataRequest()).take_payload()
        return cls(payload)

    @property
    def eras(self) -> EraTable:
        """The era table."""
        return self._eras.get().dates_to_eras

    @property
    def payload(self) -> DataPayload[JapaneseErasV1Marker]:
        """The underlying era payload."""
        return self._eras

    # ------------------------------------------------------------------
    # Era resolution
    # ------------------------------------------------------------------

    def era_for(self, date: EraStartDate) -> tuple[EraStartDate, str]:
        """Return (start, code) of the data era for ``date``.

        Dates before the first era resolve to the first era; callers that
        need ``bce``/``ce`` use adjusted_year_for().
        """
        table = self.eras
        if len(table) and date >= MEIJI_START and table[-1][1] == "reiwa":
            for start, code in _MODERN_ERAS:
                if date >= start:
                    return start, code
        if not len(table):
            return _FALLBACK_ERA
        index = bisect.bisect_right(table, date, key=itemgetter(0)) - 1
        return table[max(index, 0)]

    def adjusted_year_for(self, date: EraStartDate) -> tuple[int, str]:
        """Return (era year, era code) for a Gregorian date.

        The year an era starts in is its year 1. Dates before the first era
        fall back to the Gregorian ``bce``/``ce`` eras.
        """
        start, era = self.era_for(date)
        if date < start:
            if date.year < 0:
                return 1 - date.year, "bce"
            return date.year, "ce"
        return date.year - start.year + 1, era

    def era_range_for(self, era: str) -> tuple[EraStartDate, EraStartDate | None]:
        """Return (start, next era's start) for era code ``era``.

        The end is None for the current era.

        Raises:
            UnknownEraError: If the era is not in the table
        """
        table = self.eras
        if era == "reiwa":
            if len(table) and table[-1][1] == era:
                return REIWA_START, None
        elif era in _MODERN_RANGES:
            return _MODERN_RANGES[era]

        entry = table.entry_for(era)
        if entry is None:
            raise UnknownEraError(era, self.debug_name)
        index, start = entry
        end = table[index + 1][0] if index + 1 < len(table) else None
        return start, end

    def date_from_era(self, era: str, year: int, month: int, day: int) -> JapaneseDate:
        """Build a date from an era code and a year within that era.

        Raises:
            OutOfRangeError: If the date falls outside the era or is invalid
            UnknownEraError: If the era code is unknown
        """
        if era in ("bce", "ce"):
            if year <= 0:
                msg = f"{era} year must be positive, got {year}"
                raise OutOfRangeError(msg)
            gregorian = 1 - year if era == "bce" else year
            return self.date_for(self._checked(EraStartDate(gregorian, month, day)))

        start, end = self.era_range_for(era)
        target = self._checked(EraStartDate(start.year + year - 1, month, day))
        if target < start or (end is not None and target >= end):
            msg = f"{era} {year}-{month:02d}-{day:02d} is outside the era"
            raise OutOfRangeError(msg)
        return JapaneseDate(target.year, target.month, target.day, era, year)

    def date_for(self, date: EraStartDate | datetime.date) -> JapaneseDate:
        """Convert a Gregorian date to a JapaneseDate."""
        if isinstance(date, datetime.date):
            date = EraStartDate.from_date(date)
        era_year, era = self.adjusted_year_for(date)
        return JapaneseDate(date.year, date.month, date.day, era, era_year)

    @staticmethod
    def _checked(date: EraStartDate) -> EraStartDate:
        if not date.is_valid():
            msg = f"{date} is not a valid date"
            raise OutOfRangeError(msg)
        return date

    def __repr__(self) -> str:
        """Return the calendar name and era count."""
        return f"{type(self).__name__}(eras={len(self.eras)})"


class JapaneseExtended(Japanese):
    """Japanese calendar with historical (pre-Meiji) eras."""

    DEFAULT_BCP_47_IDENTIFIER: ClassVar[str] = "japanext"
    date_symbols_marker = JapaneseExtendedDateSymbolsV1Marker
    date_lengths_marker = JapaneseExtendedDateLengthsV1Marker
    debug_name: ClassVar[str] = "Japanese (historical era data)"

    __slots__ = ()

    @classmethod
    def try_new(cls, provider: DataProvider) -> JapaneseExtended:
        """Load the full era list.

        Raises:
            DataError: If the provider cannot supply the eras
        """
        payload = provider.load(JapaneseExtendedErasV1Marker, DataRequest()).take_payload()
        logger.debug("Loaded %d extended Japanese eras", len(payload.get().dates_to_eras))
        return cls(payload.cast(JapaneseErasV1Marker))
