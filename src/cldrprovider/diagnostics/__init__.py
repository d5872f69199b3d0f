"""Diagnostic system for data-loading errors.

Provides the flat DataErrorKind taxonomy, the DataError exception that
carries it, and the CalendarError family raised by calendar consumers.

Python 3.13+. Zero external dependencies.
"""

from .codes import DataErrorKind
from .errors import (
    CalendarError,
    DataError,
    EraNotFoundError,
    OutOfRangeError,
    UnknownEraError,
    qualified_type_name,
)

__all__ = [
    "CalendarError",
    "DataError",
    "DataErrorKind",
    "EraNotFoundError",
    "OutOfRangeError",
    "UnknownEraError",
    "qualified_type_name",
]
