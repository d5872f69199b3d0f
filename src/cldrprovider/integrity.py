"""Construction-time integrity exceptions.

These exceptions indicate PROGRAMMING OR DATA DEFECTS, not runtime data
misses. They are raised while keys are being declared (usually at import
time) and should propagate to the top level rather than be handled.

Design:
    - NOT subclasses of DataError (different error domain)
    - Carry diagnostic context for post-mortem analysis
    - Immutable after construction
    - @final decorator prevents subclassing

Hierarchy:
    DataIntegrityError (base - construction defects)
    ├─ ImmutabilityViolationError (mutation attempt on frozen object)
    ├─ KeyCollisionError (two distinct key paths share a fingerprint)
    └─ MalformedKeyPathError (tag markers or path grammar invalid)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

__all__ = [
    "DataIntegrityError",
    "ImmutabilityViolationError",
    "IntegrityContext",
    "KeyCollisionError",
    "MalformedKeyPathError",
]


@dataclass(frozen=True, slots=True)
class IntegrityContext:
    """Context for integrity error diagnosis.

    Attributes:
        component: System component where error occurred (key, registry)
        operation: Operation being performed (construct, register)
        key: Key path or identifier involved (optional)
        expected: Expected value (optional)
        actual: Actual value found (optional)
    """

    component: str
    operation: str
    key: str | None = None
    expected: str | None = None
    actual: str | None = None


class DataIntegrityError(Exception):
    """Base exception for all construction-time integrity failures.

    This exception is immutable after construction to prevent
    tampering with error evidence.

    Attributes:
        context: Structured diagnostic context for post-mortem analysis
    """

    __slots__ = ("_context", "_frozen")

    _context: IntegrityContext | None
    _frozen: bool

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
    ) -> None:
        """Initialize DataIntegrityError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    # Python's exception machinery sets these while propagating.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject all attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify integrity error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject all attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete integrity error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    @property
    def context(self) -> IntegrityContext | None:
        """Structured diagnostic context."""
        return self._context

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self._context!r})"


@final
class ImmutabilityViolationError(DataIntegrityError):
    """Attempt to mutate an immutable object.

    Raised when code attempts to modify a frozen error object.
    """


@final
class MalformedKeyPathError(DataIntegrityError):
    """A data key string is missing its tag markers or has an invalid path.

    Raised by DataKey construction. Keys are declared at import time, so a
    malformed key stops the importing module instead of reaching runtime
    lookups.

    Attributes:
        tagged_path: The rejected key string, tags included
    """

    __slots__ = ("_tagged_path",)

    _tagged_path: str

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
        *,
        tagged_path: str = "",
    ) -> None:
        """Initialize MalformedKeyPathError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
            tagged_path: The rejected key string
        """
        object.__setattr__(self, "_tagged_path", tagged_path)
        super().__init__(message, context)

    @property
    def tagged_path(self) -> str:
        """The rejected key string, tags included."""
        return self._tagged_path


@final
class KeyCollisionError(DataIntegrityError):
    """Two distinct key paths produced the same 4-byte fingerprint.

    Fingerprints index lookup tables, so a collision would silently merge
    two data shapes. The fix is to rename one of the keys.

    Attributes:
        fingerprint: The shared fingerprint
        existing_path: Path registered first
        new_path: Path whose registration was rejected
    """

    __slots__ = ("_existing_path", "_fingerprint", "_new_path")

    _fingerprint: bytes
    _existing_path: str
    _new_path: str

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
        *,
        fingerprint: bytes = b"",
        existing_path: str = "",
        new_path: str = "",
    ) -> None:
        """Initialize KeyCollisionError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
            fingerprint: The shared fingerprint
            existing_path: Path registered first
            new_path: Path whose registration was rejected
        """
        object.__setattr__(self, "_fingerprint", bytes(fingerprint))
        object.__setattr__(self, "_existing_path", existing_path)
        object.__setattr__(self, "_new_path", new_path)
        super().__init__(message, context)

    @property
    def fingerprint(self) -> bytes:
        """The shared fingerprint."""
        return self._fingerprint

    @property
    def existing_path(self) -> str:
        """Path registered first."""
        return self._existing_path

    @property
    def new_path(self) -> str:
        """Path whose registration was rejected."""
        return self._new_path

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"KeyCollisionError({self.args[0]!r}, "
            f"fingerprint={self._fingerprint.hex()!r}, "
            f"existing_path={self._existing_path!r}, "
            f"new_path={self._new_path!r})"
        )
