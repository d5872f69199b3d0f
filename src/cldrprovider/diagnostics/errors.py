"""Data and calendar exception hierarchy.

DataError is the single runtime error type of the data layer; its ``kind``
distinguishes the failure. Errors are immutable once raised: ``with_key()``
and ``with_str_context()`` return new instances instead of mutating.

Calendar consumers raise CalendarError subclasses for failures that are
about dates rather than data.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import errno as errno_module
from typing import TYPE_CHECKING

from cldrprovider.integrity import ImmutabilityViolationError

from .codes import DataErrorKind, message_template

if TYPE_CHECKING:
    from cldrprovider.enums import BufferFormat
    from cldrprovider.provider.key import DataKey

__all__ = [
    "CalendarError",
    "DataError",
    "EraNotFoundError",
    "OutOfRangeError",
    "UnknownEraError",
    "qualified_type_name",
]


class DataError(Exception):
    """Failure to load, type, or recover locale data.

    No retries are performed by the data layer; callers decide whether a
    given kind is worth retrying.

    Attributes:
        kind: What went wrong
        key: Data key of the failed request (optional)
        str_context: Free-form context, e.g. the erased type name (optional)
        type_name: Requested type for MISMATCHED_TYPE errors (optional)
        io_errno: errno of the underlying OSError for IO errors (optional)
        buffer_format: Offending format for UNAVAILABLE_BUFFER_FORMAT (optional)

    Example:
        >>> err = DataError(DataErrorKind.MISSING_LOCALE).with_str_context("lv")
        >>> str(err)
        'Missing data for locale (lv)'
    """

    __slots__ = (
        "_buffer_format",
        "_frozen",
        "_io_errno",
        "_key",
        "_kind",
        "_str_context",
        "_type_name",
    )

    def __init__(
        self,
        kind: DataErrorKind,
        *,
        key: DataKey | None = None,
        str_context: str | None = None,
        type_name: str | None = None,
        io_errno: int | None = None,
        buffer_format: BufferFormat | None = None,
    ) -> None:
        """Initialize DataError.

        Args:
            kind: Error kind
            key: Data key of the failed request
            str_context: Free-form context
            type_name: Requested type name (MISMATCHED_TYPE)
            io_errno: errno value (IO)
            buffer_format: Unsupported format (UNAVAILABLE_BUFFER_FORMAT)
        """
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_str_context", str_context)
        object.__setattr__(self, "_type_name", type_name)
        object.__setattr__(self, "_io_errno", io_errno)
        object.__setattr__(self, "_buffer_format", buffer_format)
        super().__init__(self._format_message())
        object.__setattr__(self, "_frozen", True)

    # Python's exception machinery sets these while propagating.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify data error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete data error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def for_type(cls, target: type) -> DataError:
        """Create a MISMATCHED_TYPE error naming the requested target type."""
        return cls(DataErrorKind.MISMATCHED_TYPE, type_name=qualified_type_name(target))

    @classmethod
    def custom(cls, message: str) -> DataError:
        """Wrap a collaborator-supplied failure description."""
        return cls(DataErrorKind.CUSTOM, str_context=message)

    @classmethod
    def from_io(cls, exc: OSError) -> DataError:
        """Convert an OSError from a byte source into an IO data error."""
        context = exc.strerror or str(exc) or None
        return cls(DataErrorKind.IO, io_errno=exc.errno, str_context=context)

    # ------------------------------------------------------------------
    # Copy-with helpers
    # ------------------------------------------------------------------

    def _replace(self, **changes: object) -> DataError:
        fields: dict[str, object] = {
            "key": self._key,
            "str_context": self._str_context,
            "type_name": self._type_name,
            "io_errno": self._io_errno,
            "buffer_format": self._buffer_format,
        }
        fields.update(changes)
        return DataError(self._kind, **fields)  # type: ignore[arg-type]

    def with_key(self, key: DataKey) -> DataError:
        """Return a copy of this error attributed to ``key``."""
        return self._replace(key=key)

    def with_str_context(self, context: str) -> DataError:
        """Return a copy of this error carrying ``context``."""
        return self._replace(str_context=context)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def kind(self) -> DataErrorKind:
        """What went wrong."""
        return self._kind

    @property
    def key(self) -> DataKey | None:
        """Data key of the failed request."""
        return self._key

    @property
    def str_context(self) -> str | None:
        """Free-form context."""
        return self._str_context

    @property
    def type_name(self) -> str | None:
        """Requested type name for MISMATCHED_TYPE errors."""
        return self._type_name

    @property
    def io_errno(self) -> int | None:
        """errno of the underlying OSError."""
        return self._io_errno

    @property
    def buffer_format(self) -> BufferFormat | None:
        """Unsupported buffer format."""
        return self._buffer_format

    def _format_message(self) -> str:
        io_name = "unknown"
        if self._io_errno is not None:
            io_name = errno_module.errorcode.get(self._io_errno, str(self._io_errno))
        message = message_template(self._kind).format(
            type_name=self._type_name or "<unknown>",
            io_name=io_name,
            buffer_format=self._buffer_format,
        )
        if self._key is not None:
            message = f"{message}: {self._key.path}"
        if self._str_context is not None:
            message = f"{message} ({self._str_context})"
        return message

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"DataError(kind={self._kind.value!r}, "
            f"key={self._key.path if self._key is not None else None!r}, "
            f"str_context={self._str_context!r})"
        )


def qualified_type_name(target: type) -> str:
    """Return ``module.QualName`` for a type, used in diagnostics only."""
    return f"{target.__module__}.{target.__qualname__}"


class CalendarError(Exception):
    """Base exception for calendar consumer failures."""


class EraNotFoundError(CalendarError):
    """The requested date precedes the earliest era in the table.

    Attributes:
        date: The (year, month, day) that was looked up
    """

    def __init__(self, message: str, *, date: tuple[int, int, int]) -> None:
        """Initialize EraNotFoundError.

        Args:
            message: Human-readable error description
            date: The (year, month, day) that was looked up
        """
        super().__init__(message)
        self.date = date


class UnknownEraError(CalendarError):
    """An era code is not present in the calendar's era table.

    Attributes:
        era: The unknown era code
        calendar: Debug name of the calendar
    """

    def __init__(self, era: str, calendar: str) -> None:
        """Initialize UnknownEraError.

        Args:
            era: The unknown era code
            calendar: Debug name of the calendar
        """
        super().__init__(f"No era named {era} for calendar {calendar}")
        self.era = era
        self.calendar = calendar


class OutOfRangeError(CalendarError):
    """A date field lies outside the range its era or calendar allows."""
