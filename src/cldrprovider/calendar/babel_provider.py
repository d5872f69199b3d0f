"""Data provider backed by Babel's CLDR data.

Serves week rules and Gregorian date symbols and lengths for any locale
Babel knows. Other keys raise DataError(MISSING_DATA_KEY); locales Babel
does not know raise DataError(MISSING_LOCALE).

This module requires Babel and is not imported by the package root:

    pip install cldrprovider[babel]

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from cldrprovider.core.babel_compat import get_unknown_locale_error, require_babel
from cldrprovider.diagnostics import DataError, DataErrorKind
from cldrprovider.enums import IsoWeekday
from cldrprovider.locale_utils import get_babel_locale
from cldrprovider.provider.any import AnyResponse
from cldrprovider.provider.payload import DataPayload
from cldrprovider.provider.response import DataResponse

from .data import (
    DateLengthsV1,
    DateSymbolsV1,
    GregorianDateLengthsV1Marker,
    GregorianDateSymbolsV1Marker,
    WeekDataV1,
    WeekDataV1Marker,
)

if TYPE_CHECKING:
    from babel import Locale

    from cldrprovider.provider.key import DataKey
    from cldrprovider.provider.marker import KeyedDataMarker
    from cldrprovider.provider.request import DataLocale, DataRequest

__all__ = ["BabelDataProvider"]

logger = logging.getLogger(__name__)

# Babel era indices: 0 = before the common era, 1 = common era
_GREGORIAN_ERA_CODES = ("bce", "ce")


def _week_data(locale: Locale) -> WeekDataV1:
    # Babel numbers weekdays from 0 = Monday
    return WeekDataV1(IsoWeekday(locale.first_week_day + 1), locale.min_week_days)


def _gregorian_symbols(locale: Locale) -> DateSymbolsV1:
    months = locale.months["format"]["wide"]
    days = locale.days["format"]["wide"]
    eras = locale.eras["abbreviated"]
    return DateSymbolsV1(
        months=tuple(months[m] for m in range(1, 13)),
        weekdays=tuple(days[d] for d in range(7)),
        eras=tuple(
            (code, eras[index]) for index, code in enumerate(_GREGORIAN_ERA_CODES) if index in eras
        ),
    )


def _gregorian_lengths(locale: Locale) -> DateLengthsV1:
    formats = locale.date_formats
    return DateLengthsV1(
        full=formats["full"].pattern,
        long=formats["long"].pattern,
        medium=formats["medium"].pattern,
        short=formats["short"].pattern,
    )


_BUILDERS: dict[type[KeyedDataMarker], Callable[[Locale], Any]] = {
    WeekDataV1Marker: _week_data,
    GregorianDateSymbolsV1Marker: _gregorian_symbols,
    GregorianDateLengthsV1Marker: _gregorian_lengths,
}


class BabelDataProvider:
    """DataProvider over Babel's CLDR data.

    Example:
        >>> provider = BabelDataProvider()
        >>> req = DataRequest.for_locale("en-GB")
        >>> provider.load(WeekDataV1Marker, req).take_payload().get().min_week_days
        4
    """

    __slots__ = ()

    def __init__(self) -> None:
        """Check that Babel is available.

        Raises:
            BabelImportError: If Babel is not installed
        """
        require_babel("BabelDataProvider")

    def supported_markers(self) -> list[type[KeyedDataMarker]]:
        """Return the markers this provider can load."""
        return list(_BUILDERS)

    def _babel_locale(self, key: DataKey, locale: DataLocale) -> Locale:
        unknown_locale_error = get_unknown_locale_error()
        code = str(locale.without_keywords()).replace("-", "_")
        try:
            return get_babel_locale(code)
        except (unknown_locale_error, ValueError) as exc:
            raise DataError(
                DataErrorKind.MISSING_LOCALE, key=key, str_context=str(locale)
            ) from exc

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Build data for ``marker`` from Babel.

        Raises:
            DataError: MISSING_DATA_KEY for unsupported markers,
                MISSING_LOCALE for locales Babel does not know
        """
        key = marker.KEY
        builder = _BUILDERS.get(marker)
        if builder is None:
            if not req.metadata.silent:
                logger.warning("Babel has no data for key %s", key.path)
            raise DataError(DataErrorKind.MISSING_DATA_KEY, key=key)
        babel_locale = self._babel_locale(key, req.locale)
        data = builder(babel_locale)
        logger.debug("Built %s for %s from Babel locale %s", key.path, req.locale, babel_locale)
        return DataResponse(payload=DataPayload.from_owned(marker, data))

    def load_any(self, key: DataKey, req: DataRequest) -> AnyResponse:
        """Type-erased load.

        Raises:
            DataError: Same kinds as load()
        """
        for marker in _BUILDERS:
            if marker.KEY == key:
                return AnyResponse.from_response(self.load(marker, req))
        raise DataError(DataErrorKind.MISSING_DATA_KEY, key=key)
