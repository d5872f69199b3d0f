"""Data baked into the package.

baked_provider() returns a process-wide RegistryDataProvider over static
data: Japanese eras (modern and extended), week rules for common regions,
and Gregorian, Buddhist and Japanese symbols and lengths for root and
English. Everything is registered with from_static, so erasing it yields a
StaticRef.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import logging

from cldrprovider.enums import IsoWeekday
from cldrprovider.provider.loading import RegistryDataProvider
from cldrprovider.provider.request import DataLocale

from .data import (
    BuddhistDateLengthsV1Marker,
    BuddhistDateSymbolsV1Marker,
    DateLengthsV1,
    DateSymbolsV1,
    GregorianDateLengthsV1Marker,
    GregorianDateSymbolsV1Marker,
    JapaneseDateLengthsV1Marker,
    JapaneseDateSymbolsV1Marker,
    JapaneseErasV1,
    JapaneseErasV1Marker,
    JapaneseExtendedErasV1Marker,
    WeekDataV1,
    WeekDataV1Marker,
)
from .eras import EraTable
from .japanese import HEISEI_START, MEIJI_START, REIWA_START, SHOWA_START, TAISHO_START
from .types import EraStartDate

__all__ = [
    "JAPANESE_ERAS",
    "JAPANESE_EXTENDED_ERAS",
    "WEEK_DATA",
    "baked_provider",
]

logger = logging.getLogger(__name__)

_MODERN_ROWS = (
    (MEIJI_START, "meiji"),
    (TAISHO_START, "taisho"),
    (SHOWA_START, "showa"),
    (HEISEI_START, "heisei"),
    (REIWA_START, "reiwa"),
)

# Late Edo-period eras preceding Meiji
_EDO_ROWS = (
    (EraStartDate(1861, 3, 29), "bunkyu-1861"),
    (EraStartDate(1864, 3, 27), "genji-1864"),
    (EraStartDate(1865, 5, 1), "keio-1865"),
)

JAPANESE_ERAS = JapaneseErasV1(EraTable.from_entries(_MODERN_ROWS))
JAPANESE_EXTENDED_ERAS = JapaneseErasV1(EraTable.from_entries(_EDO_ROWS + _MODERN_ROWS))

# Region -> (first weekday, minimum days); "" is the world default
WEEK_DATA: dict[str, WeekDataV1] = {
    "": WeekDataV1(IsoWeekday.MONDAY, 1),
    "US": WeekDataV1(IsoWeekday.SUNDAY, 1),
    "CA": WeekDataV1(IsoWeekday.SUNDAY, 1),
    "JP": WeekDataV1(IsoWeekday.SUNDAY, 1),
    "BR": WeekDataV1(IsoWeekday.SUNDAY, 1),
    "GB": WeekDataV1(IsoWeekday.MONDAY, 4),
    "DE": WeekDataV1(IsoWeekday.MONDAY, 4),
    "FR": WeekDataV1(IsoWeekday.MONDAY, 4),
    "SE": WeekDataV1(IsoWeekday.MONDAY, 4),
    "EG": WeekDataV1(IsoWeekday.SATURDAY, 1),
}

_ROOT_MONTHS = tuple(f"M{n:02d}" for n in range(1, 13))
_ROOT_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_EN_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_EN_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_SYMBOLS: dict[type, dict[str, DateSymbolsV1]] = {
    GregorianDateSymbolsV1Marker: {
        "und": DateSymbolsV1(_ROOT_MONTHS, _ROOT_WEEKDAYS, (("bce", "BCE"), ("ce", "CE"))),
        "en": DateSymbolsV1(_EN_MONTHS, _EN_WEEKDAYS, (("bce", "BC"), ("ce", "AD"))),
    },
    BuddhistDateSymbolsV1Marker: {
        "und": DateSymbolsV1(_ROOT_MONTHS, _ROOT_WEEKDAYS, (("be", "BE"),)),
        "en": DateSymbolsV1(_EN_MONTHS, _EN_WEEKDAYS, (("be", "BE"),)),
    },
    JapaneseDateSymbolsV1Marker: {
        "und": DateSymbolsV1(_ROOT_MONTHS, _ROOT_WEEKDAYS, tuple((c, c) for _, c in _MODERN_ROWS)),
        "en": DateSymbolsV1(
            _EN_MONTHS,
            _EN_WEEKDAYS,
            (
                ("meiji", "Meiji"),
                ("taisho", "Taishō"),
                ("showa", "Shōwa"),
                ("heisei", "Heisei"),
                ("reiwa", "Reiwa"),
            ),
        ),
    },
}

_ROOT_LENGTHS = DateLengthsV1("y MMMM d, EEEE", "y MMMM d", "y MMM d", "y-MM-dd")

_LENGTHS: dict[type, dict[str, DateLengthsV1]] = {
    GregorianDateLengthsV1Marker: {
        "und": _ROOT_LENGTHS,
        "en": DateLengthsV1("EEEE, MMMM d, y", "MMMM d, y", "MMM d, y", "M/d/yy"),
    },
    BuddhistDateLengthsV1Marker: {
        "und": DateLengthsV1("G y MMMM d, EEEE", "G y MMMM d", "G y MMM d", "GGGGG y-MM-dd"),
    },
    JapaneseDateLengthsV1Marker: {
        "und": DateLengthsV1("G y MMMM d, EEEE", "G y MMMM d", "G y MMM d", "GGGGG y-MM-dd"),
        "en": DateLengthsV1("EEEE, MMMM d, y G", "MMMM d, y G", "MMM d, y G", "M/d/y GGGGG"),
    },
}


def _language_locale(language: str) -> DataLocale:
    return DataLocale.from_parts(language)


@functools.lru_cache(maxsize=1)
def baked_provider() -> RegistryDataProvider:
    """Return the process-wide provider over baked data (built on first call)."""
    provider = RegistryDataProvider("baked")
    provider.register_static(JapaneseErasV1Marker, DataLocale.root(), JAPANESE_ERAS)
    provider.register_static(
        JapaneseExtendedErasV1Marker, DataLocale.root(), JAPANESE_EXTENDED_ERAS
    )
    for region, week_data in WEEK_DATA.items():
        provider.register_static(WeekDataV1Marker, DataLocale.from_parts(region=region), week_data)
    for marker, by_language in (*_SYMBOLS.items(), *_LENGTHS.items()):
        for language, data in by_language.items():
            provider.register_static(marker, _language_locale(language), data)
    logger.debug("Built baked provider with %d keys", len(provider.keys()))
    return provider
