"""Locale-keyed data loading.

Keys say what data is wanted, DataLocale says for which locale, providers
return DataResponse objects carrying zero-copy DataPayload views. Payloads
can be type-erased into AnyPayload and recovered with a checked downcast.

Python 3.13+. Babel is only needed for DataLocale.parse().
"""

from .any import (
    AnyMarker,
    AnyPayload,
    AnyProvider,
    AnyResponse,
    DowncastingAnyProvider,
    SharedAny,
    StaticRef,
    downcast,
    upcast,
)
from .buf import (
    DEFAULT_DECODERS,
    BufferMarker,
    BufferProvider,
    DeserializingBufferProvider,
    InMemoryBufferProvider,
    decode_json,
    decode_packed,
)
from .fallback import fallback_chain
from .key import DataKey, DataKeyMetadata, KeyRegistry, data_key, default_key_registry, fxhash_32
from .loading import DataProvider, FilterDataProvider, RegistryDataProvider
from .marker import DataMarker, KeyedDataMarker
from .payload import Cart, DataPayload
from .request import DataLocale, DataRequest, DataRequestMetadata, LanguageIdentifier
from .response import DataResponse, DataResponseMetadata

__all__ = [
    "DEFAULT_DECODERS",
    "AnyMarker",
    "AnyPayload",
    "AnyProvider",
    "AnyResponse",
    "BufferMarker",
    "BufferProvider",
    "Cart",
    "DataKey",
    "DataKeyMetadata",
    "DataLocale",
    "DataMarker",
    "DataPayload",
    "DataProvider",
    "DataRequest",
    "DataRequestMetadata",
    "DataResponse",
    "DataResponseMetadata",
    "DeserializingBufferProvider",
    "DowncastingAnyProvider",
    "FilterDataProvider",
    "InMemoryBufferProvider",
    "KeyRegistry",
    "KeyedDataMarker",
    "LanguageIdentifier",
    "RegistryDataProvider",
    "SharedAny",
    "StaticRef",
    "data_key",
    "decode_json",
    "decode_packed",
    "default_key_registry",
    "downcast",
    "fallback_chain",
    "fxhash_32",
    "upcast",
]
