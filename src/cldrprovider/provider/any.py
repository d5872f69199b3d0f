"""Type erasure for data payloads.

An AnyPayload holds a payload whose concrete data type is not known
statically. The only way back to a typed payload is downcast(), which
checks the type before any data is read:

    - StaticRef: wraps static data; downcast checks the exact data type
    - SharedAny: wraps a shared DataPayload; downcast checks the exact marker

A failed downcast raises DataError(MISMATCHED_TYPE) and leaves the erased
value untouched; callers may retry with another marker.

When ProviderConfig.sync is on, only thread-safe markers may be erased.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from cldrprovider.config import get_config
from cldrprovider.diagnostics import DataError
from cldrprovider.diagnostics.errors import qualified_type_name

from .marker import DataMarker, KeyedDataMarker
from .payload import DataPayload
from .response import DataResponse, DataResponseMetadata

if TYPE_CHECKING:
    from .key import DataKey
    from .request import DataRequest

__all__ = [
    "AnyMarker",
    "AnyPayload",
    "AnyProvider",
    "AnyResponse",
    "DowncastingAnyProvider",
    "SharedAny",
    "StaticRef",
    "downcast",
    "upcast",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StaticRef:
    """Erased reference to process-lifetime data."""

    data: Any


@dataclass(frozen=True, slots=True)
class SharedAny:
    """Erased shared payload (view plus cart)."""

    payload: DataPayload[Any]


@dataclass(frozen=True, slots=True)
class AnyPayload:
    """A payload with its concrete type erased.

    Attributes:
        inner: The erased value
        type_name: Qualified name of the erased type, for diagnostics only
    """

    inner: StaticRef | SharedAny
    type_name: str

    @classmethod
    def from_static_ref(cls, data: Any) -> AnyPayload:
        """Erase a reference to static data."""
        return cls(StaticRef(data), qualified_type_name(type(data)))

    def downcast[M: DataMarker](self, marker: type[M]) -> DataPayload[M]:
        """Recover a typed payload; see downcast()."""
        return downcast(self, marker)


def upcast(payload: DataPayload[Any]) -> AnyPayload:
    """Erase the concrete type of ``payload``.

    Static payloads become StaticRef, all others SharedAny.

    Raises:
        TypeError: If sync mode is on and the marker is not thread-safe
    """
    marker = payload.marker
    if get_config().sync and not marker.thread_safe:
        msg = (
            f"{marker.__qualname__} is not thread-safe and cannot be erased "
            "while cross-thread sharing mode is enabled"
        )
        raise TypeError(msg)
    if payload.is_static():
        return AnyPayload(StaticRef(payload.get()), qualified_type_name(marker.data_type))
    return AnyPayload(SharedAny(payload), qualified_type_name(marker))


def downcast[M: DataMarker](erased: AnyPayload, marker: type[M]) -> DataPayload[M]:
    """Recover a typed payload for ``marker`` from ``erased``.

    Raises:
        DataError: MISMATCHED_TYPE naming ``marker``, with the erased type
            name as context
    """
    match erased.inner:
        case StaticRef(data=data):
            if type(data) is marker.data_type:
                return DataPayload.from_static(marker, data)
        case SharedAny(payload=payload):
            if payload.marker is marker:
                return payload.clone()
    raise DataError.for_type(marker).with_str_context(erased.type_name)


class AnyMarker(DataMarker):
    """Marker whose data is an AnyPayload.

    Lets an erased payload travel through code that handles DataPayload
    generically.
    """

    data_type = AnyPayload

    @classmethod
    def upcast[M: DataMarker](cls, payload: DataPayload[M]) -> DataPayload[AnyMarker]:
        """Erase ``payload`` and wrap the result as DataPayload[AnyMarker]."""
        return DataPayload.from_owned(cls, upcast(payload))


@dataclass(frozen=True, slots=True)
class AnyResponse:
    """Response whose payload has its type erased."""

    metadata: DataResponseMetadata = field(default_factory=DataResponseMetadata)
    payload: AnyPayload | None = None

    @classmethod
    def from_response(cls, response: DataResponse[Any]) -> AnyResponse:
        """Erase the payload of a typed response."""
        payload = None if response.payload is None else upcast(response.payload)
        return cls(response.metadata, payload)

    def downcast[M: DataMarker](self, marker: type[M]) -> DataResponse[M]:
        """Recover a typed response.

        Raises:
            DataError: MISMATCHED_TYPE if the payload is of another type
        """
        payload = None if self.payload is None else downcast(self.payload, marker)
        return DataResponse(self.metadata, payload)


class AnyProvider(Protocol):
    """Provider that returns type-erased data for any key."""

    def load_any(self, key: DataKey, req: DataRequest) -> AnyResponse:
        """Load erased data for ``key``."""
        ...


class DowncastingAnyProvider:
    """Adapts an AnyProvider to the typed DataProvider protocol."""

    __slots__ = ("_inner",)

    def __init__(self, inner: AnyProvider) -> None:
        """Wrap ``inner``."""
        self._inner = inner

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Load and downcast data for ``marker``.

        Raises:
            DataError: From the inner provider, or MISMATCHED_TYPE on downcast
        """
        response = self._inner.load_any(marker.KEY, req)
        try:
            return response.downcast(marker)
        except DataError as exc:
            logger.debug("Downcast to %s failed: %s", marker.__qualname__, exc)
            raise exc.with_key(marker.KEY) from exc
