"""Calendar data and its consumers.

Data structs and markers for Japanese eras, week rules and date
symbols/lengths; era resolution; week computation; CLDR calendar dispatch;
and a provider over baked static data.

BabelDataProvider lives in cldrprovider.calendar.babel_provider and is not
imported here (it requires Babel).

Python 3.13+.
"""

from .baked import baked_provider
from .cldr import (
    Buddhist,
    Coptic,
    Ethiopian,
    Gregorian,
    Indian,
    cldr_calendar_for_kind,
    load_lengths_for_any_calendar_kind,
    load_lengths_for_cldr_calendar,
    load_symbols_for_any_calendar_kind,
    load_symbols_for_cldr_calendar,
)
from .data import (
    DateLengthsV1,
    DateSymbolsV1,
    ErasedDateLengthsV1Marker,
    ErasedDateSymbolsV1Marker,
    JapaneseErasV1,
    JapaneseErasV1Marker,
    JapaneseExtendedErasV1Marker,
    WeekDataV1,
    WeekDataV1Marker,
)
from .eras import EraTable
from .japanese import Japanese, JapaneseDate, JapaneseExtended
from .kinds import AnyCalendarKind, CldrCalendar
from .types import EraStartDate
from .week import RelativeUnit, WeekCalculator, WeekOf

__all__ = [
    "AnyCalendarKind",
    "Buddhist",
    "CldrCalendar",
    "Coptic",
    "DateLengthsV1",
    "DateSymbolsV1",
    "EraStartDate",
    "EraTable",
    "ErasedDateLengthsV1Marker",
    "ErasedDateSymbolsV1Marker",
    "Ethiopian",
    "Gregorian",
    "Indian",
    "Japanese",
    "JapaneseDate",
    "JapaneseErasV1",
    "JapaneseErasV1Marker",
    "JapaneseExtended",
    "JapaneseExtendedErasV1Marker",
    "RelativeUnit",
    "WeekCalculator",
    "WeekDataV1",
    "WeekDataV1Marker",
    "WeekOf",
    "baked_provider",
    "cldr_calendar_for_kind",
    "load_lengths_for_any_calendar_kind",
    "load_lengths_for_cldr_calendar",
    "load_symbols_for_any_calendar_kind",
    "load_symbols_for_cldr_calendar",
]
