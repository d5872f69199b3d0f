"""Enumerations for cldrprovider type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class FallbackPriority(StrEnum):
    """How a data key's locale-dependence is resolved when an exact match is absent.

    StrEnum provides automatic string conversion: str(FallbackPriority.REGION) == "region"
    """

    LANGUAGE = "language"
    """Fall back by dropping region, then script: ja-JP -> ja -> und"""

    REGION = "region"
    """Keep the region, drop the language: en-GB -> und-GB -> und"""

    COLLATION = "collation"
    """Language fallback with collation-specific supplemental rules"""


class FallbackSupplement(StrEnum):
    """Supplemental fallback data a key needs in addition to the default chain."""

    COLLATION = "collation"


class BufferFormat(StrEnum):
    """Serialization format of a raw data buffer.

    Only formats with a registered decoder are usable; others surface
    DataErrorKind.UNAVAILABLE_BUFFER_FORMAT.
    """

    JSON = "json"
    """UTF-8 JSON document decoded through the data struct's from_dict()"""

    PACKED = "packed"
    """Fixed-width little-endian records, read in place without copying"""

    POSTCARD1 = "postcard1"
    """Compact binary format (declared, not compiled in)"""


class IsoWeekday(IntEnum):
    """Day of the week, ISO-8601 numbering (Monday = 1)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


__all__ = [
    "BufferFormat",
    "FallbackPriority",
    "FallbackSupplement",
    "IsoWeekday",
]
