"""Shared constants for cldrprovider.

Constants are grouped by domain:
- Key tagging: markers that surround every data key path
- Record layout: fixed-width packed era record format
- Cache limits: memory bounds for locale caches
- Environment: variables read once by the runtime configuration

Python 3.13+. Zero external dependencies.
"""

import struct

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key tagging
    "LEADING_TAG",
    "TRAILING_TAG",
    # Record layout
    "ERA_RECORD",
    "ERA_RECORD_SIZE",
    "MAX_ERA_CODE_BYTES",
    "MIN_ERA_YEAR",
    "MAX_ERA_YEAR",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Environment
    "ENV_SYNC",
    "ENV_CHECK_KEYS",
    # Locale
    "ROOT_LANGUAGE",
    "CALENDAR_EXTENSION_KEY",
]

# ============================================================================
# KEY TAGGING
# ============================================================================
#
# Every data key is stored as LEADING_TAG + path + TRAILING_TAG. The tags make
# key strings greppable in compiled or serialized artifacts and let
# DataKey.construct() reject strings that were not produced by data_key().

LEADING_TAG: str = "\ncldrprovider_key_tag"
TRAILING_TAG: str = "\n"

# ============================================================================
# RECORD LAYOUT
# ============================================================================
#
# Packed era record: year (i32), month (u8), day (u8), era code (16 bytes,
# NUL-padded ASCII). Little-endian, no alignment padding.

MAX_ERA_CODE_BYTES: int = 16
ERA_RECORD: struct.Struct = struct.Struct(f"<iBB{MAX_ERA_CODE_BYTES}s")
ERA_RECORD_SIZE: int = ERA_RECORD.size

# Signed 32-bit range of the packed year field
MIN_ERA_YEAR: int = -(2**31)
MAX_ERA_YEAR: int = 2**31 - 1

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Babel Locale objects parsed by locale_utils.get_babel_locale()
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# ENVIRONMENT
# ============================================================================

ENV_SYNC: str = "CLDRPROVIDER_SYNC"
ENV_CHECK_KEYS: str = "CLDRPROVIDER_CHECK_KEYS"

# ============================================================================
# LOCALE
# ============================================================================

ROOT_LANGUAGE: str = "und"
CALENDAR_EXTENSION_KEY: str = "ca"
