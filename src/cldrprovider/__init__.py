"""cldrprovider - locale-keyed, zero-copy data loading for internationalization.

Requests name what data is wanted (a DataKey, via a marker) and for which
locale (a DataLocale). Providers answer with DataResponse objects carrying
DataPayload views that may borrow from an owned byte buffer. Payloads can
be type-erased into AnyPayload and recovered with a checked downcast.

Public API:
    DataKey, data_key - Data key declaration and fingerprinting
    DataLocale, DataRequest - Locale request model
    DataPayload - Zero-copy typed payload
    AnyPayload, upcast, downcast - Type erasure and checked recovery
    RegistryDataProvider - Explicit, registry-backed provider
    DeserializingBufferProvider - Typed provider over raw buffers

Exceptions:
    DataError - Runtime data-loading errors (see DataErrorKind)
    DataIntegrityError - Construction-time defects (malformed keys, collisions)
    CalendarError - Calendar consumer errors

Submodules:
    cldrprovider.provider - Keys, requests, payloads, erasure, providers
    cldrprovider.calendar - Calendar data, era resolution, week rules
    cldrprovider.calendar.babel_provider - Babel-backed provider (needs Babel)
"""

from .config import ProviderConfig, get_config
from .diagnostics import CalendarError, DataError, DataErrorKind
from .enums import BufferFormat, FallbackPriority, IsoWeekday
from .integrity import DataIntegrityError, KeyCollisionError, MalformedKeyPathError
from .provider import (
    AnyPayload,
    DataKey,
    DataLocale,
    DataPayload,
    DataRequest,
    DataResponse,
    DeserializingBufferProvider,
    RegistryDataProvider,
    data_key,
    downcast,
    upcast,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("cldrprovider")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AnyPayload",
    "BufferFormat",
    "CalendarError",
    "DataError",
    "DataErrorKind",
    "DataIntegrityError",
    "DataKey",
    "DataLocale",
    "DataPayload",
    "DataRequest",
    "DataResponse",
    "DeserializingBufferProvider",
    "FallbackPriority",
    "IsoWeekday",
    "KeyCollisionError",
    "MalformedKeyPathError",
    "ProviderConfig",
    "RegistryDataProvider",
    "__version__",
    "data_key",
    "downcast",
    "get_config",
    "upcast",
]
