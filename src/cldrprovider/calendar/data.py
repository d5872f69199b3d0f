"""Calendar data structs and their markers.

Each struct is a frozen dataclass with a ``from_dict()`` constructor used
by the JSON decoder. JapaneseErasV1 additionally has a packed form that
borrows from its buffer.

Markers:
    JapaneseErasV1Marker            calendar/japanese@1 (singleton)
    JapaneseExtendedErasV1Marker    calendar/japanext@1 (singleton)
    WeekDataV1Marker                datetime/week_data@1 (region fallback)
    <Calendar>DateSymbolsV1Marker   datetime/<ca>/datesymbols@1
    <Calendar>DateLengthsV1Marker   datetime/<ca>/datelengths@1
    ErasedDateSymbolsV1Marker       calendar-agnostic symbols (no key)
    ErasedDateLengthsV1Marker       calendar-agnostic lengths (no key)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cldrprovider.constants import CALENDAR_EXTENSION_KEY
from cldrprovider.enums import FallbackPriority, IsoWeekday
from cldrprovider.provider.key import DataKey, data_key
from cldrprovider.provider.marker import DataMarker, KeyedDataMarker

from .eras import EraTable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data structs
    "DateLengthsV1",
    "DateSymbolsV1",
    "JapaneseErasV1",
    "WeekDataV1",
    # Era and week markers
    "JapaneseErasV1Marker",
    "JapaneseExtendedErasV1Marker",
    "WeekDataV1Marker",
    # Symbols markers
    "BuddhistDateSymbolsV1Marker",
    "CopticDateSymbolsV1Marker",
    "ErasedDateSymbolsV1Marker",
    "EthiopianDateSymbolsV1Marker",
    "GregorianDateSymbolsV1Marker",
    "IndianDateSymbolsV1Marker",
    "JapaneseDateSymbolsV1Marker",
    "JapaneseExtendedDateSymbolsV1Marker",
    # Lengths markers
    "BuddhistDateLengthsV1Marker",
    "CopticDateLengthsV1Marker",
    "ErasedDateLengthsV1Marker",
    "EthiopianDateLengthsV1Marker",
    "GregorianDateLengthsV1Marker",
    "IndianDateLengthsV1Marker",
    "JapaneseDateLengthsV1Marker",
    "JapaneseExtendedDateLengthsV1Marker",
]


def _require(data: Mapping[str, Any], field_name: str, owner: str) -> Any:
    if not isinstance(data, Mapping):
        msg = f"{owner} expects a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    if field_name not in data:
        msg = f"{owner} is missing field {field_name!r}"
        raise ValueError(msg)
    return data[field_name]


def _str_tuple(value: Any, field_name: str, owner: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{owner}.{field_name} must be a list of strings"
        raise ValueError(msg)
    return tuple(value)


# ============================================================================
# DATA STRUCTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class JapaneseErasV1:
    """Start dates of the Japanese eras.

    Attributes:
        dates_to_eras: Era table, strictly increasing by start date
    """

    dates_to_eras: EraTable

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JapaneseErasV1:
        """Decode ``{"dates_to_eras": [[year, month, day, code], ...]}``.

        Raises:
            ValueError: If the document has the wrong shape
            DataError: INVALID_STATE if the table is invalid
        """
        rows = _require(data, "dates_to_eras", cls.__name__)
        if not isinstance(rows, list):
            msg = "JapaneseErasV1.dates_to_eras must be a list"
            raise ValueError(msg)
        return cls(EraTable.from_list(rows))

    @classmethod
    def from_packed(cls, buffer: memoryview) -> JapaneseErasV1:
        """Borrow an era table from packed records.

        Raises:
            DataError: INVALID_STATE if the records are invalid
        """
        return cls(EraTable.from_packed(buffer))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {"dates_to_eras": self.dates_to_eras.to_list()}

    def to_owned(self) -> JapaneseErasV1:
        """Return a copy that does not borrow from a buffer."""
        if not self.dates_to_eras.is_borrowed:
            return self
        return JapaneseErasV1(self.dates_to_eras.to_owned())


@dataclass(frozen=True, slots=True)
class WeekDataV1:
    """Week rules of a region.

    Attributes:
        first_weekday: First day of the week
        min_week_days: Minimum days of a week that must fall in a month or
            year for the week to count as its first week (1..7)
    """

    first_weekday: IsoWeekday = IsoWeekday.MONDAY
    min_week_days: int = 1

    def __post_init__(self) -> None:
        """Validate and coerce field values.

        Raises:
            ValueError: If min_week_days is outside 1..7 or first_weekday is invalid
        """
        object.__setattr__(self, "first_weekday", IsoWeekday(self.first_weekday))
        if not 1 <= self.min_week_days <= 7:
            msg = f"min_week_days must be in 1..7, got {self.min_week_days}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WeekDataV1:
        """Decode ``{"first_weekday": 1..7, "min_week_days": 1..7}``.

        Missing fields take their defaults.

        Raises:
            ValueError: If a field is malformed
        """
        if not isinstance(data, Mapping):
            msg = f"WeekDataV1 expects a JSON object, got {type(data).__name__}"
            raise ValueError(msg)
        first = data.get("first_weekday", IsoWeekday.MONDAY)
        minimum = data.get("min_week_days", 1)
        if not isinstance(first, int) or not isinstance(minimum, int):
            msg = "WeekDataV1 fields must be integers"
            raise ValueError(msg)
        return cls(IsoWeekday(first), minimum)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {"first_weekday": int(self.first_weekday), "min_week_days": self.min_week_days}


@dataclass(frozen=True, slots=True)
class DateSymbolsV1:
    """Localized month, weekday and era names for one calendar.

    Attributes:
        months: Wide month names, in calendar order (12 or 13)
        weekdays: Wide weekday names, Monday first
        eras: (era code, abbreviated name) pairs
    """

    months: tuple[str, ...]
    weekdays: tuple[str, ...]
    eras: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        """Validate field shapes.

        Raises:
            ValueError: If months or weekdays have the wrong length
        """
        if len(self.months) not in (12, 13):
            msg = f"DateSymbolsV1 needs 12 or 13 months, got {len(self.months)}"
            raise ValueError(msg)
        if len(self.weekdays) != 7:
            msg = f"DateSymbolsV1 needs 7 weekdays, got {len(self.weekdays)}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DateSymbolsV1:
        """Decode ``{"months": [...], "weekdays": [...], "eras": {code: name}}``.

        Raises:
            ValueError: If a field is malformed
        """
        owner = cls.__name__
        months = _str_tuple(_require(data, "months", owner), "months", owner)
        weekdays = _str_tuple(_require(data, "weekdays", owner), "weekdays", owner)
        eras = data.get("eras", {})
        if not isinstance(eras, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in eras.items()
        ):
            msg = f"{owner}.eras must map era codes to names"
            raise ValueError(msg)
        return cls(months, weekdays, tuple(eras.items()))

    def month_name(self, month: int) -> str:
        """Return the name of 1-based ``month``."""
        return self.months[month - 1]

    def weekday_name(self, weekday: IsoWeekday) -> str:
        """Return the name of ``weekday``."""
        return self.weekdays[weekday - 1]

    def era_name(self, code: str) -> str | None:
        """Return the display name of era ``code``, if known."""
        return dict(self.eras).get(code)


@dataclass(frozen=True, slots=True)
class DateLengthsV1:
    """Date format patterns by length, in CLDR pattern syntax."""

    full: str
    long: str
    medium: str
    short: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DateLengthsV1:
        """Decode ``{"full": ..., "long": ..., "medium": ..., "short": ...}``.

        Raises:
            ValueError: If a field is missing or not a string
        """
        values = []
        for name in ("full", "long", "medium", "short"):
            value = _require(data, name, cls.__name__)
            if not isinstance(value, str):
                msg = f"{cls.__name__}.{name} must be a string"
                raise ValueError(msg)
            values.append(value)
        return cls(*values)


# ============================================================================
# MARKERS
# ============================================================================


class JapaneseErasV1Marker(KeyedDataMarker):
    """Modern Japanese eras (Meiji onwards)."""

    data_type = JapaneseErasV1
    KEY = data_key("calendar/japanese@1", singleton=True)


class JapaneseExtendedErasV1Marker(KeyedDataMarker):
    """All Japanese eras, including those before Meiji."""

    data_type = JapaneseErasV1
    KEY = data_key("calendar/japanext@1", singleton=True)


class WeekDataV1Marker(KeyedDataMarker):
    """Week rules, resolved by region."""

    data_type = WeekDataV1
    KEY = data_key("datetime/week_data@1", fallback_by=FallbackPriority.REGION)


class ErasedDateSymbolsV1Marker(DataMarker):
    """Date symbols of whichever calendar was loaded."""

    data_type = DateSymbolsV1


class ErasedDateLengthsV1Marker(DataMarker):
    """Date lengths of whichever calendar was loaded."""

    data_type = DateLengthsV1


def _symbols_key(calendar: str) -> DataKey:
    return data_key(f"datetime/{calendar}/datesymbols@1", extension_key=CALENDAR_EXTENSION_KEY)


def _lengths_key(calendar: str) -> DataKey:
    return data_key(f"datetime/{calendar}/datelengths@1", extension_key=CALENDAR_EXTENSION_KEY)


class GregorianDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("gregory")


class BuddhistDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("buddhist")


class JapaneseDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("japanese")


class JapaneseExtendedDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("japanext")


class CopticDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("coptic")


class IndianDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("indian")


class EthiopianDateSymbolsV1Marker(KeyedDataMarker):
    data_type = DateSymbolsV1
    KEY = _symbols_key("ethiopic")


class GregorianDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("gregory")


class BuddhistDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("buddhist")


class JapaneseDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("japanese")


class JapaneseExtendedDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("japanext")


class CopticDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("coptic")


class IndianDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("indian")


class EthiopianDateLengthsV1Marker(KeyedDataMarker):
    data_type = DateLengthsV1
    KEY = _lengths_key("ethiopic")
