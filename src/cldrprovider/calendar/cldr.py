"""CLDR calendar bindings and calendar-kind dispatch.

Each CldrCalendar binding names the markers for its date symbols and date
lengths. The load_* functions fetch that data and erase the calendar
(not the data type) by casting to the calendar-agnostic markers, so callers
that pick a calendar at runtime get one payload type back.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cldrprovider.diagnostics import DataError
from cldrprovider.provider.request import DataRequest

from .data import (
    BuddhistDateLengthsV1Marker,
    BuddhistDateSymbolsV1Marker,
    CopticDateLengthsV1Marker,
    CopticDateSymbolsV1Marker,
    ErasedDateLengthsV1Marker,
    ErasedDateSymbolsV1Marker,
    EthiopianDateLengthsV1Marker,
    EthiopianDateSymbolsV1Marker,
    GregorianDateLengthsV1Marker,
    GregorianDateSymbolsV1Marker,
    IndianDateLengthsV1Marker,
    IndianDateSymbolsV1Marker,
)
from .japanese import Japanese, JapaneseExtended
from .kinds import AnyCalendarKind, CldrCalendar

if TYPE_CHECKING:
    from cldrprovider.provider.loading import DataProvider
    from cldrprovider.provider.payload import DataPayload
    from cldrprovider.provider.request import DataLocale

__all__ = [
    "Buddhist",
    "Coptic",
    "Ethiopian",
    "Gregorian",
    "Indian",
    "cldr_calendar_for_kind",
    "load_lengths_for_any_calendar_kind",
    "load_lengths_for_cldr_calendar",
    "load_symbols_for_any_calendar_kind",
    "load_symbols_for_cldr_calendar",
]

logger = logging.getLogger(__name__)


class Gregorian(CldrCalendar):
    """Gregorian calendar binding."""

    DEFAULT_BCP_47_IDENTIFIER = "gregory"
    date_symbols_marker = GregorianDateSymbolsV1Marker
    date_lengths_marker = GregorianDateLengthsV1Marker


class Buddhist(CldrCalendar):
    """Buddhist calendar binding."""

    DEFAULT_BCP_47_IDENTIFIER = "buddhist"
    date_symbols_marker = BuddhistDateSymbolsV1Marker
    date_lengths_marker = BuddhistDateLengthsV1Marker


class Coptic(CldrCalendar):
    """Coptic calendar binding."""

    DEFAULT_BCP_47_IDENTIFIER = "coptic"
    date_symbols_marker = CopticDateSymbolsV1Marker
    date_lengths_marker = CopticDateLengthsV1Marker


class Indian(CldrCalendar):
    """Indian national calendar binding."""

    DEFAULT_BCP_47_IDENTIFIER = "indian"
    date_symbols_marker = IndianDateSymbolsV1Marker
    date_lengths_marker = IndianDateLengthsV1Marker


class Ethiopian(CldrCalendar):
    """Ethiopian calendar binding; covers both era styles."""

    DEFAULT_BCP_47_IDENTIFIER = "ethiopic"
    date_symbols_marker = EthiopianDateSymbolsV1Marker
    date_lengths_marker = EthiopianDateLengthsV1Marker

    @classmethod
    def is_identifier_allowed_for_calendar(cls, value: str) -> bool:
        """Accept ``ethiopic`` and ``ethioaa`` (Amete Alem)."""
        return value in ("ethiopic", "ethioaa")


def load_symbols_for_cldr_calendar(
    calendar: type[CldrCalendar], provider: DataProvider, locale: DataLocale
) -> DataPayload[ErasedDateSymbolsV1Marker]:
    """Load date symbols for ``calendar`` and cast to the erased marker.

    Raises:
        DataError: If loading fails or the response has no payload
    """
    response = provider.load(calendar.date_symbols_marker, DataRequest(locale))
    return ErasedDateSymbolsV1Marker.upcast(response.take_payload())


def load_lengths_for_cldr_calendar(
    calendar: type[CldrCalendar], provider: DataProvider, locale: DataLocale
) -> DataPayload[ErasedDateLengthsV1Marker]:
    """Load date lengths for ``calendar`` and cast to the erased marker.

    Raises:
        DataError: If loading fails or the response has no payload
    """
    response = provider.load(calendar.date_lengths_marker, DataRequest(locale))
    return ErasedDateLengthsV1Marker.upcast(response.take_payload())


def cldr_calendar_for_kind(kind: AnyCalendarKind) -> type[CldrCalendar]:
    """Return the binding whose CLDR data serves ``kind``.

    Raises:
        DataError: CUSTOM for ISO, which has no CLDR data
    """
    match kind:
        case AnyCalendarKind.GREGORIAN:
            return Gregorian
        case AnyCalendarKind.BUDDHIST:
            return Buddhist
        case AnyCalendarKind.JAPANESE:
            return Japanese
        case AnyCalendarKind.JAPANESE_EXTENDED:
            return JapaneseExtended
        case AnyCalendarKind.INDIAN:
            return Indian
        case AnyCalendarKind.COPTIC:
            return Coptic
        case AnyCalendarKind.ETHIOPIAN | AnyCalendarKind.ETHIOPIAN_AMETE_ALEM:
            return Ethiopian
        case AnyCalendarKind.ISO:
            raise DataError.custom("ISO calendar does not have CLDR data")


def load_symbols_for_any_calendar_kind(
    provider: DataProvider, locale: DataLocale, kind: AnyCalendarKind
) -> DataPayload[ErasedDateSymbolsV1Marker]:
    """Load date symbols for a calendar chosen at runtime.

    Raises:
        DataError: CUSTOM for ISO; loading errors otherwise
    """
    calendar = cldr_calendar_for_kind(kind)
    logger.debug("Loading %s date symbols for %s", kind, locale)
    return load_symbols_for_cldr_calendar(calendar, provider, locale)


def load_lengths_for_any_calendar_kind(
    provider: DataProvider, locale: DataLocale, kind: AnyCalendarKind
) -> DataPayload[ErasedDateLengthsV1Marker]:
    """Load date lengths for a calendar chosen at runtime.

    Raises:
        DataError: CUSTOM for ISO; loading errors otherwise
    """
    calendar = cldr_calendar_for_kind(kind)
    logger.debug("Loading %s date lengths for %s", kind, locale)
    return load_lengths_for_cldr_calendar(calendar, provider, locale)
