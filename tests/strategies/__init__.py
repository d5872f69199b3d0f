"""Hypothesis strategies for cldrprovider property-based testing.

Strategies are organized by domain:

- keys: Data key paths, valid and malformed
- locales: DataLocale values and locale tags
- eras: Gregorian dates and valid era tables

Usage:
    from tests.strategies import key_paths, data_locales
    from tests.strategies.eras import era_entries

Event-Emitting Strategies (HypoFuzz-Optimized):
    key_paths, malformed_tagged_paths, data_locales, locale_tags, era_entries
"""

from .eras import era_codes, era_entries, era_start_dates
from .keys import key_paths, key_segments, key_versions, malformed_tagged_paths
from .locales import (
    calendar_values,
    data_locales,
    keyword_pairs,
    languages,
    locale_tags,
    regions,
    scripts,
)

__all__ = [
    "calendar_values",
    "data_locales",
    "era_codes",
    "era_entries",
    "era_start_dates",
    "key_paths",
    "key_segments",
    "key_versions",
    "keyword_pairs",
    "languages",
    "locale_tags",
    "malformed_tagged_paths",
    "regions",
    "scripts",
]
