"""Locale utilities for BCP-47 and POSIX identifier handling.

Centralizes locale format normalization used throughout the codebase.
Request locales are parsed here, at the system boundary, so the rest of the
package only deals with structured DataLocale values.

Python 3.13+. Babel is required for parsing and for get_babel_locale().
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from cldrprovider.constants import MAX_LOCALE_CACHE_SIZE, ROOT_LANGUAGE
from cldrprovider.core.babel_compat import get_parse_locale, require_babel

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "normalize_locale",
    "split_language_identifier",
    "to_bcp47",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def to_bcp47(locale_code: str) -> str:
    """Convert a POSIX locale code to BCP-47 separators.

    Example:
        >>> to_bcp47("zh_Hant_TW")
        'zh-Hant-TW'
    """
    return locale_code.replace("_", "-")


def split_language_identifier(text: str) -> tuple[str, str, str, tuple[str, ...]]:
    """Split a language identifier into (language, script, region, variants).

    Parsing is delegated to Babel's syntactic parser, which validates subtag
    shapes without requiring CLDR data for the locale. Absent subtags are
    returned as empty strings. ``root`` and ``und`` both denote the root
    language.

    Args:
        text: Identifier without extensions, BCP-47 or POSIX separators

    Returns:
        Tuple of (language, script, region, variants)

    Raises:
        ValueError: If the identifier is syntactically invalid
        BabelImportError: If Babel is not installed

    Example:
        >>> split_language_identifier("zh-Hant-TW")
        ('zh', 'Hant', 'TW', ())
    """
    if not text:
        msg = "Language identifier cannot be empty"
        raise ValueError(msg)
    parse_locale = get_parse_locale()
    parts = parse_locale(normalize_locale(text))
    language, territory, script, variant = parts[:4]
    if not language or language == "root":
        language = ROOT_LANGUAGE
    variants = (variant.lower(),) if variant else ()
    return language, script or "", territory or "", variants


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. Thread-safe via
    lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If Babel has no CLDR data for the locale
        ValueError: If locale format is invalid
        BabelImportError: If Babel is not installed
    """
    require_babel("get_babel_locale")
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    normalized = normalize_locale(locale_code)
    if normalized == ROOT_LANGUAGE:
        normalized = "root"
    return Locale.parse(normalized)


def clear_locale_cache() -> None:
    """Clear the Babel Locale cache used by get_babel_locale()."""
    get_babel_locale.cache_clear()
