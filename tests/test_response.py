"""Tests for DataResponse and DataError."""

import errno

import pytest

from cldrprovider.diagnostics import DataError, DataErrorKind
from cldrprovider.enums import BufferFormat
from cldrprovider.integrity import ImmutabilityViolationError
from cldrprovider.provider import DataLocale, DataPayload, DataResponse, DataResponseMetadata
from tests.helpers.markers import CountV1Marker, Greeting, GreetingV1Marker


class TestDataResponse:
    """Test responses with and without payloads."""

    def test_response_without_payload_is_valid(self) -> None:
        """A payload-free response is an outcome, not an error."""
        response = DataResponse()
        assert response.payload is None
        assert response.metadata == DataResponseMetadata()

    def test_take_payload_without_payload_raises(self) -> None:
        """take_payload on an empty response raises MISSING_PAYLOAD."""
        with pytest.raises(DataError) as exc_info:
            DataResponse().take_payload()
        assert exc_info.value.kind is DataErrorKind.MISSING_PAYLOAD

    def test_take_payload_returns_payload(self) -> None:
        """take_payload returns the carried payload."""
        payload = DataPayload.from_owned(GreetingV1Marker, Greeting("x"))
        assert DataResponse(payload=payload).take_payload() is payload

    def test_with_payload_keeps_metadata(self) -> None:
        """with_payload swaps only the payload."""
        metadata = DataResponseMetadata(locale=DataLocale.from_parts("en"))
        response = DataResponse(metadata)
        replaced = response.with_payload(DataPayload.from_owned(CountV1Marker, 1))
        assert replaced.metadata is metadata
        assert replaced.take_payload().get() == 1

    def test_with_metadata_updates_fields(self) -> None:
        """with_metadata replaces named metadata fields."""
        response = DataResponse().with_metadata(buffer_format=BufferFormat.JSON)
        assert response.metadata.buffer_format is BufferFormat.JSON
        assert response.metadata.locale is None


class TestDataError:
    """Test the data error type and its factories."""

    def test_message_includes_key_and_context(self) -> None:
        """Messages carry the template, key path and context."""
        error = DataError(
            DataErrorKind.MISSING_LOCALE, key=GreetingV1Marker.KEY, str_context="lv"
        )
        assert str(error) == "Missing data for locale: test/greeting@1 (lv)"

    def test_with_helpers_return_new_errors(self) -> None:
        """with_key and with_str_context never mutate."""
        original = DataError(DataErrorKind.MISSING_DATA_KEY)
        keyed = original.with_key(GreetingV1Marker.KEY)
        contextual = keyed.with_str_context("ctx")
        assert original.key is None
        assert keyed.key == GreetingV1Marker.KEY
        assert contextual.str_context == "ctx"
        assert contextual.key == GreetingV1Marker.KEY
        assert contextual.kind is DataErrorKind.MISSING_DATA_KEY

    @pytest.mark.parametrize("name", ["kind", "_kind", "_str_context", "extra"])
    def test_attributes_cannot_be_set(self, name: str) -> None:
        """Attribute writes after construction raise ImmutabilityViolationError."""
        error = DataError(DataErrorKind.MISSING_LOCALE, str_context="lv")
        with pytest.raises(ImmutabilityViolationError):
            setattr(error, name, "changed")
        assert error.kind is DataErrorKind.MISSING_LOCALE
        assert error.str_context == "lv"

    def test_attributes_cannot_be_deleted(self) -> None:
        """Attribute deletion raises ImmutabilityViolationError."""
        error = DataError(DataErrorKind.MISSING_LOCALE)
        with pytest.raises(ImmutabilityViolationError):
            del error._kind

    def test_cause_chaining_still_works(self) -> None:
        """raise ... from sets __cause__ on a frozen error."""
        cause = ValueError("bad row")
        with pytest.raises(DataError) as exc_info:
            raise DataError.custom("bad row") from cause
        assert exc_info.value.__cause__ is cause

    def test_for_type(self) -> None:
        """for_type names the qualified target type."""
        error = DataError.for_type(Greeting)
        assert error.kind is DataErrorKind.MISMATCHED_TYPE
        assert error.type_name == f"{Greeting.__module__}.Greeting"
        assert "Greeting" in str(error)

    def test_custom(self) -> None:
        """custom wraps a free-form description."""
        error = DataError.custom("decoder exploded")
        assert error.kind is DataErrorKind.CUSTOM
        assert str(error) == "Custom (decoder exploded)"

    def test_from_io(self) -> None:
        """from_io keeps the errno and its symbolic name."""
        error = DataError.from_io(FileNotFoundError(errno.ENOENT, "No such file"))
        assert error.kind is DataErrorKind.IO
        assert error.io_errno == errno.ENOENT
        assert "ENOENT" in str(error)
        assert error.str_context == "No such file"

    def test_from_io_without_errno(self) -> None:
        """OSErrors without errno render as unknown."""
        error = DataError.from_io(OSError("disk gone"))
        assert error.io_errno is None
        assert "unknown" in str(error)

    def test_unavailable_buffer_format_message(self) -> None:
        """The unsupported format is named in the message."""
        error = DataError(
            DataErrorKind.UNAVAILABLE_BUFFER_FORMAT, buffer_format=BufferFormat.POSTCARD1
        )
        assert error.buffer_format is BufferFormat.POSTCARD1
        assert "postcard1" in str(error)

    def test_repr(self) -> None:
        """repr shows kind, key path and context."""
        error = DataError(DataErrorKind.IO, key=GreetingV1Marker.KEY, str_context="x")
        assert repr(error) == "DataError(kind='io', key='test/greeting@1', str_context='x')"

    @pytest.mark.parametrize("kind", list(DataErrorKind))
    def test_every_kind_has_a_message(self, kind: DataErrorKind) -> None:
        """Every kind formats without error."""
        assert str(DataError(kind))
