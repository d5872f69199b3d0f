"""Data responses.

A response carries metadata about how a request was satisfied and, usually,
a payload. A response without a payload is a valid outcome distinct from an
error: the provider recognized the request but has nothing to return.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from cldrprovider.diagnostics import DataError, DataErrorKind

if TYPE_CHECKING:
    from cldrprovider.enums import BufferFormat

    from .marker import DataMarker
    from .payload import DataPayload
    from .request import DataLocale

__all__ = ["DataResponse", "DataResponseMetadata"]


@dataclass(frozen=True, slots=True)
class DataResponseMetadata:
    """How a request was satisfied.

    Attributes:
        locale: Locale the data was actually found under, when it differs
            from (or refines) the requested one
        buffer_format: Serialization format of a buffer payload
    """

    locale: DataLocale | None = None
    buffer_format: BufferFormat | None = None


@dataclass(frozen=True, slots=True)
class DataResponse[M: DataMarker]:
    """Response to a data request.

    Attributes:
        metadata: Response metadata
        payload: The data, or None when the provider has nothing to return
    """

    metadata: DataResponseMetadata = field(default_factory=DataResponseMetadata)
    payload: DataPayload[M] | None = None

    def take_payload(self) -> DataPayload[M]:
        """Return the payload.

        Raises:
            DataError: MISSING_PAYLOAD if the response has none
        """
        if self.payload is None:
            raise DataError(DataErrorKind.MISSING_PAYLOAD)
        return self.payload

    def with_payload[M2: DataMarker](self, payload: DataPayload[M2] | None) -> DataResponse[M2]:
        """Return a response with the same metadata and a different payload."""
        return DataResponse(self.metadata, payload)

    def with_metadata(self, **changes: object) -> DataResponse[M]:
        """Return a copy with updated metadata fields."""
        metadata = replace(self.metadata, **changes)  # type: ignore[arg-type]
        return DataResponse(metadata, self.payload)
