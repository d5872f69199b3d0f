"""Property-based tests for integrity exception classes.

Tests construction-time integrity exceptions:
- IntegrityContext: Diagnostic context for post-mortem analysis
- DataIntegrityError: Base exception with immutability enforcement
- ImmutabilityViolationError: Mutation attempt detection
- KeyCollisionError: Fingerprint collisions between key paths
- MalformedKeyPathError: Rejected key strings
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from cldrprovider.diagnostics import DataError
from cldrprovider.integrity import (
    DataIntegrityError,
    ImmutabilityViolationError,
    IntegrityContext,
    KeyCollisionError,
    MalformedKeyPathError,
)

messages = st.text(min_size=1, max_size=80)


class TestIntegrityContext:
    """Test the diagnostic context record."""

    @given(component=st.sampled_from(["key", "registry"]), operation=st.text(max_size=20))
    def test_minimal_construction(self, component: str, operation: str) -> None:
        """Optional fields default to None."""
        event(f"component={component}")
        context = IntegrityContext(component, operation)
        assert context.key is None
        assert context.expected is None
        assert context.actual is None

    def test_context_is_frozen(self) -> None:
        """Contexts cannot be mutated."""
        context = IntegrityContext("key", "construct", key="a@1")
        with pytest.raises(AttributeError):
            context.key = "b@1"  # type: ignore[misc]


class TestDataIntegrityError:
    """Test the base exception's immutability."""

    @given(message=messages)
    def test_message_and_context(self, message: str) -> None:
        """The message is the first argument; context is optional."""
        error = DataIntegrityError(message)
        assert error.args[0] == message
        assert error.context is None

    def test_immutability_after_construction(self) -> None:
        """Attribute writes raise ImmutabilityViolationError."""
        error = DataIntegrityError("boom")
        with pytest.raises(ImmutabilityViolationError):
            error._context = IntegrityContext("key", "construct")  # type: ignore[misc]
        with pytest.raises(ImmutabilityViolationError):
            error.extra = 1  # type: ignore[attr-defined]

    def test_delattr_always_raises(self) -> None:
        """Attribute deletes raise ImmutabilityViolationError."""
        error = DataIntegrityError("boom")
        with pytest.raises(ImmutabilityViolationError):
            del error._context

    def test_exception_machinery_still_works(self) -> None:
        """Tracebacks, chaining and notes can still be attached."""
        try:
            try:
                raise ValueError("inner")
            except ValueError as inner:
                raise DataIntegrityError("outer") from inner
        except DataIntegrityError as error:
            assert isinstance(error.__cause__, ValueError)
            assert error.__traceback__ is not None
            error.add_note("checked")
            assert error.__notes__ == ["checked"]

    def test_repr_includes_context(self) -> None:
        """repr shows the message and context."""
        context = IntegrityContext("key", "construct", key="a@1")
        assert repr(DataIntegrityError("boom", context)) == (
            f"DataIntegrityError('boom', context={context!r})"
        )

    def test_not_a_data_error(self) -> None:
        """Integrity errors are a separate domain from DataError."""
        assert not issubclass(DataIntegrityError, DataError)


class TestKeyCollisionError:
    """Test the collision exception."""

    def test_attributes(self) -> None:
        """The fingerprint and both paths are kept."""
        error = KeyCollisionError(
            "collision",
            fingerprint=bytearray(b"\x01\x02\x03\x04"),
            existing_path="a@1",
            new_path="b@1",
        )
        assert error.fingerprint == b"\x01\x02\x03\x04"
        assert isinstance(error.fingerprint, bytes)
        assert error.existing_path == "a@1"
        assert error.new_path == "b@1"
        assert "01020304" in repr(error)

    def test_is_final_and_frozen(self) -> None:
        """Collision errors are DataIntegrityErrors and cannot be mutated."""
        error = KeyCollisionError("collision")
        assert isinstance(error, DataIntegrityError)
        with pytest.raises(ImmutabilityViolationError):
            error._new_path = "c@1"  # type: ignore[misc]


class TestMalformedKeyPathError:
    """Test the malformed key exception."""

    @given(path=st.text(max_size=40))
    def test_tagged_path_kept(self, path: str) -> None:
        """The rejected string is kept verbatim."""
        error = MalformedKeyPathError("bad key", tagged_path=path)
        assert error.tagged_path == path
        assert isinstance(error, DataIntegrityError)
