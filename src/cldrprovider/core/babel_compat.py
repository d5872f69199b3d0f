"""Babel compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel to ensure consistent
error messaging and import behavior across all Babel-dependent modules.

Design Rationale:
    cldrprovider supports two installation modes:
    - Core only: `pip install cldrprovider` (keys, payloads, erasure, registries)
    - With CLDR: `pip install cldrprovider[babel]` (locale parsing, Babel data provider)

    This module ensures that:
    1. Core-only installations never trigger Babel imports
    2. Babel-backed functions get consistent, helpful error messages when Babel is missing
    3. Babel types are available for TYPE_CHECKING without runtime import

Usage Pattern:
    from cldrprovider.core.babel_compat import require_babel

    def my_function(tag: str) -> None:
        require_babel("my_function")  # Raises ImportError if Babel missing
        from babel import Locale  # Safe to import Babel now
        ...

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale
    from babel.core import UnknownLocaleError as UnknownLocaleErrorType

__all__ = [
    "BabelImportError",
    "get_locale_class",
    "get_parse_locale",
    "get_unknown_locale_error",
    "is_babel_available",
    "require_babel",
]

type ParseLocale = Callable[..., tuple[str | None, ...]]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed.

    Provides a consistent, helpful error message directing users to install
    the Babel dependency.
    """

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install cldrprovider[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Returns:
        True if Babel is installed and importable, False otherwise.
    """
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


def get_locale_class() -> type[Locale]:
    """Get the Babel Locale class.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_locale_class")
    from babel import Locale  # noqa: PLC0415

    return Locale


def get_unknown_locale_error() -> type[UnknownLocaleErrorType]:
    """Get the Babel UnknownLocaleError exception class.

    Use for exception handling when you need to catch UnknownLocaleError.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_unknown_locale_error")
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    return UnknownLocaleError


def get_parse_locale() -> ParseLocale:
    """Get Babel's syntactic locale identifier parser.

    ``babel.core.parse_locale`` splits an identifier into
    (language, territory, script, variant[, modifier]) without requiring
    CLDR data for the locale, which makes it usable for arbitrary request
    locales.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_parse_locale")
    from babel.core import parse_locale  # noqa: PLC0415

    return parse_locale
