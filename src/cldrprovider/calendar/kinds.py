"""Calendar kinds selectable at runtime.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

from cldrprovider.constants import CALENDAR_EXTENSION_KEY

if TYPE_CHECKING:
    from cldrprovider.provider.marker import KeyedDataMarker
    from cldrprovider.provider.request import DataLocale

__all__ = ["AnyCalendarKind", "CldrCalendar"]


class AnyCalendarKind(StrEnum):
    """A calendar system, valued by its BCP-47 ``-u-ca-`` identifier.

    StrEnum provides automatic string conversion: str(AnyCalendarKind.GREGORIAN) == "gregory"
    """

    GREGORIAN = "gregory"
    BUDDHIST = "buddhist"
    JAPANESE = "japanese"
    JAPANESE_EXTENDED = "japanext"
    INDIAN = "indian"
    COPTIC = "coptic"
    ISO = "iso"
    ETHIOPIAN = "ethiopic"
    ETHIOPIAN_AMETE_ALEM = "ethioaa"

    @classmethod
    def from_bcp47(cls, value: str) -> AnyCalendarKind | None:
        """Return the kind for a BCP-47 calendar identifier, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def bcp47(self) -> str:
        """BCP-47 calendar identifier."""
        return self.value

    @classmethod
    def from_data_locale(cls, locale: DataLocale) -> AnyCalendarKind | None:
        """Return the kind named by the locale's ``ca`` keyword, if any and known."""
        value = locale.get_unicode_ext(CALENDAR_EXTENSION_KEY)
        return None if value is None else cls.from_bcp47(value)

    @classmethod
    def from_data_locale_with_fallback(cls, locale: DataLocale) -> AnyCalendarKind:
        """Return the locale's calendar, falling back to the language default.

        Thai defaults to the Buddhist calendar; everything else to Gregorian.
        """
        kind = cls.from_data_locale(locale)
        if kind is not None:
            return kind
        if locale.language == "th":
            return cls.BUDDHIST
        return cls.GREGORIAN


class CldrCalendar:
    """A calendar with CLDR symbols and lengths data.

    Subclasses bind a BCP-47 identifier to the markers that load the
    calendar's date symbols and date lengths.
    """

    __slots__ = ()

    DEFAULT_BCP_47_IDENTIFIER: ClassVar[str]
    date_symbols_marker: ClassVar[type[KeyedDataMarker]]
    date_lengths_marker: ClassVar[type[KeyedDataMarker]]

    @classmethod
    def is_identifier_allowed_for_calendar(cls, value: str) -> bool:
        """Check whether ``value`` (a ``-u-ca-`` identifier) selects this calendar."""
        return value == cls.DEFAULT_BCP_47_IDENTIFIER
