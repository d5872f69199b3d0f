"""Buffer providers and deserialization.

A BufferProvider returns raw bytes tagged with their BufferFormat.
DeserializingBufferProvider turns such a provider into a typed
DataProvider by decoding the bytes with a per-format decoder. Decoding goes
through DataPayload.map_project(), so a decoder that reads in place (the
PACKED format) yields a view that borrows from the same cart as the raw
buffer.

Decoders:
    JSON   - json.loads() then the data struct's from_dict(); copies
    PACKED - the data struct's from_packed(memoryview); zero-copy

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
import struct
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from cldrprovider.diagnostics import DataError, DataErrorKind
from cldrprovider.enums import BufferFormat

from .fallback import fallback_chain
from .marker import DataMarker
from .payload import DataPayload
from .request import DataLocale
from .response import DataResponse, DataResponseMetadata

if TYPE_CHECKING:
    from .key import DataKey
    from .marker import KeyedDataMarker
    from .request import DataRequest

__all__ = [
    "DEFAULT_DECODERS",
    "BufferMarker",
    "BufferProvider",
    "Decoder",
    "DeserializingBufferProvider",
    "InMemoryBufferProvider",
    "decode_json",
    "decode_packed",
]

logger = logging.getLogger(__name__)

type Decoder = Callable[[type[DataMarker], memoryview], Any]


class BufferMarker(DataMarker):
    """Marker for raw bytes; the view is a read-only memoryview over the cart."""

    data_type = memoryview


class BufferProvider(Protocol):
    """Provider of raw, format-tagged bytes."""

    def load_buffer(self, key: DataKey, req: DataRequest) -> DataResponse[BufferMarker]:
        """Load bytes for ``key``; ``metadata.buffer_format`` names their format.

        Raises:
            DataError: If no bytes exist for the request
            OSError: If the byte source fails
        """
        ...


type _Cell = tuple[DataPayload[BufferMarker], BufferFormat]


class InMemoryBufferProvider:
    """BufferProvider over bytes registered up front.

    Each (key, locale) cell owns one Cart; every load shares it.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        """Initialize an empty provider."""
        self._cells: dict[bytes, dict[DataLocale, _Cell]] = {}

    def register(
        self,
        key: DataKey,
        locale: DataLocale | str,
        data: bytes,
        buffer_format: BufferFormat,
    ) -> None:
        """Register ``data`` in ``buffer_format`` for (key, locale)."""
        if isinstance(locale, str):
            locale = DataLocale.parse(locale)
        payload = DataPayload.from_owned_buffer(BufferMarker, data, lambda view: view)
        self._cells.setdefault(key.fingerprint, {})[locale] = (payload, buffer_format)

    def load_buffer(self, key: DataKey, req: DataRequest) -> DataResponse[BufferMarker]:
        """Load bytes for ``key``, walking the locale fallback chain.

        Raises:
            DataError: MISSING_DATA_KEY or MISSING_LOCALE
        """
        cells = self._cells.get(key.fingerprint)
        if cells is None:
            raise DataError(DataErrorKind.MISSING_DATA_KEY, key=key)
        for candidate in fallback_chain(req.locale, key.metadata):
            cell = cells.get(candidate)
            if cell is not None:
                payload, buffer_format = cell
                metadata = DataResponseMetadata(
                    locale=candidate if candidate != req.locale else None,
                    buffer_format=buffer_format,
                )
                return DataResponse(metadata, payload.clone())
        raise DataError(DataErrorKind.MISSING_LOCALE, key=key, str_context=str(req.locale))


def decode_json(marker: type[DataMarker], buffer: memoryview) -> Any:
    """Decode a UTF-8 JSON document through ``marker.data_type.from_dict()``.

    Raises:
        ValueError: If the document is malformed or the type has no from_dict()
    """
    from_dict = getattr(marker.data_type, "from_dict", None)
    if from_dict is None:
        msg = f"{marker.data_type.__name__} cannot be decoded from JSON"
        raise ValueError(msg)
    return from_dict(json.loads(bytes(buffer).decode("utf-8")))


def decode_packed(marker: type[DataMarker], buffer: memoryview) -> Any:
    """Decode fixed-width records in place through ``marker.data_type.from_packed()``.

    Raises:
        ValueError: If the type has no packed form
        struct.error: If the buffer is not a whole number of records
    """
    from_packed = getattr(marker.data_type, "from_packed", None)
    if from_packed is None:
        msg = f"{marker.data_type.__name__} has no packed form"
        raise ValueError(msg)
    return from_packed(buffer)


DEFAULT_DECODERS: Mapping[BufferFormat, Decoder] = MappingProxyType(
    {
        BufferFormat.JSON: decode_json,
        BufferFormat.PACKED: decode_packed,
    }
)


class DeserializingBufferProvider:
    """Typed DataProvider over a BufferProvider.

    Example:
        >>> raw = InMemoryBufferProvider()
        >>> raw.register(WeekDataV1Marker.KEY, "und", b'{"first_weekday": 1}', BufferFormat.JSON)
        >>> provider = DeserializingBufferProvider(raw)
        >>> provider.load(WeekDataV1Marker, DataRequest()).take_payload().get().first_weekday
        <IsoWeekday.MONDAY: 1>
    """

    __slots__ = ("_decoders", "_inner")

    def __init__(
        self, inner: BufferProvider, decoders: Mapping[BufferFormat, Decoder] | None = None
    ) -> None:
        """Wrap ``inner``.

        Args:
            inner: Source of raw bytes
            decoders: Decoder per format (default: DEFAULT_DECODERS)
        """
        self._inner = inner
        self._decoders = DEFAULT_DECODERS if decoders is None else decoders

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Load bytes for ``marker.KEY`` and decode them.

        Raises:
            DataError: IO if the byte source fails; UNAVAILABLE_BUFFER_FORMAT
                if no decoder handles the format; CUSTOM if decoding fails;
                errors from the inner provider and decoder propagate
        """
        key = marker.KEY
        try:
            response = self._inner.load_buffer(key, req)
        except OSError as exc:
            logger.error("I/O failure loading %s for %s: %s", key.path, req.locale, exc)
            raise DataError.from_io(exc).with_key(key) from exc

        buffer_format = response.metadata.buffer_format
        if buffer_format is None:
            raise DataError(
                DataErrorKind.INVALID_STATE, key=key, str_context="buffer response has no format"
            )
        decoder = self._decoders.get(buffer_format)
        if decoder is None:
            raise DataError(
                DataErrorKind.UNAVAILABLE_BUFFER_FORMAT, key=key, buffer_format=buffer_format
            )
        if response.payload is None:
            return DataResponse(response.metadata)

        try:
            payload = response.payload.map_project(marker, lambda view: decoder(marker, view))
        except (ValueError, struct.error) as exc:
            raise DataError.custom(str(exc)).with_key(key) from exc
        logger.debug("Decoded %s (%s) for %s", key.path, buffer_format, req.locale)
        return DataResponse(response.metadata, payload)
