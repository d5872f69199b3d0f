"""Data keys: what kind of locale data a request is for.

A DataKey pairs a canonical tagged path string with fallback metadata and a
4-byte fingerprint of the path. The path is the source of truth for
equality and ordering; the fingerprint is a derived value used to index
lookup tables and persisted indices.

Architecture:
    - Keys are declared at import time via data_key(); malformed paths
      raise MalformedKeyPathError before any lookup runs
    - Fingerprint = FxHash-32 of the untagged UTF-8 path, little-endian.
      It never depends on PYTHONHASHSEED or memory addresses
    - KeyRegistry detects fingerprint collisions between distinct paths

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field

from cldrprovider.config import get_config
from cldrprovider.constants import LEADING_TAG, TRAILING_TAG
from cldrprovider.enums import FallbackPriority, FallbackSupplement
from cldrprovider.integrity import IntegrityContext, KeyCollisionError, MalformedKeyPathError

__all__ = [
    "DataKey",
    "DataKeyMetadata",
    "KeyRegistry",
    "data_key",
    "default_key_registry",
    "fxhash_32",
]

logger = logging.getLogger(__name__)

# segment ("/" segment)* "@" version
_PATH_PATTERN = re.compile(r"[A-Za-z0-9_]+(?:/[A-Za-z0-9_]+)*@[0-9]+")

# Unicode extension keys are two alphanumerics, the second a letter
_EXTENSION_KEY_PATTERN = re.compile(r"[a-z0-9][a-z]")

_MASK_32 = 0xFFFF_FFFF
_ROTATE = 5
_SEED_32 = 0x9E37_79B9


def _hash_word_32(hash_value: int, word: int) -> int:
    rotated = ((hash_value << _ROTATE) | (hash_value >> (32 - _ROTATE))) & _MASK_32
    return ((rotated ^ word) * _SEED_32) & _MASK_32


def fxhash_32(data: bytes, ignore_leading: int = 0, ignore_trailing: int = 0) -> int:
    """Compute the 32-bit FxHash of ``data``.

    Words are consumed four bytes at a time (little-endian), then a two-byte
    tail, then a one-byte tail. The result only depends on the bytes, so it
    is stable across processes and interpreter versions.

    Args:
        data: Bytes to hash
        ignore_leading: Number of leading bytes to skip
        ignore_trailing: Number of trailing bytes to skip

    Returns:
        Unsigned 32-bit hash value

    Example:
        >>> hex(fxhash_32(b"a"))
        '0xf3051f19'
    """
    if ignore_leading + ignore_trailing > len(data):
        msg = "ignore_leading + ignore_trailing exceeds data length"
        raise ValueError(msg)
    cursor = ignore_leading
    end = len(data) - ignore_trailing
    hash_value = 0
    while end - cursor >= 4:
        word = int.from_bytes(data[cursor : cursor + 4], "little")
        hash_value = _hash_word_32(hash_value, word)
        cursor += 4
    if end - cursor >= 2:
        word = int.from_bytes(data[cursor : cursor + 2], "little")
        hash_value = _hash_word_32(hash_value, word)
        cursor += 2
    if end - cursor >= 1:
        hash_value = _hash_word_32(hash_value, data[cursor])
    return hash_value


@dataclass(frozen=True, slots=True)
class DataKeyMetadata:
    """Fallback metadata attached to a data key.

    Attributes:
        fallback_priority: How the locale chain is walked for this key
        extension_key: Unicode extension keyword the data depends on (e.g. "ca")
        fallback_supplement: Supplemental rule tag for providers (fallback_chain ignores it)
        singleton: The data is locale-independent; requests must use root
    """

    fallback_priority: FallbackPriority = FallbackPriority.LANGUAGE
    extension_key: str | None = None
    fallback_supplement: FallbackSupplement | None = None
    singleton: bool = False

    def __post_init__(self) -> None:
        """Validate the extension key shape.

        Raises:
            ValueError: If extension_key is not a two-character unicode key
        """
        if self.extension_key is not None and not _EXTENSION_KEY_PATTERN.fullmatch(
            self.extension_key
        ):
            msg = f"extension_key must be a two-character unicode key, got: {self.extension_key!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True, order=True)
class DataKey:
    """Identifier for a data shape.

    Construct with data_key() or DataKey.construct(); both validate the
    tagged path. Equality, ordering, and hashing consider only the path.

    Attributes:
        tagged_path: LEADING_TAG + path + TRAILING_TAG
        metadata: Fallback metadata (not part of identity)
        fingerprint: 4-byte stable hash of the path (not part of identity)

    Example:
        >>> key = data_key("datetime/week_data@1")
        >>> key.path
        'datetime/week_data@1'
        >>> len(key.fingerprint)
        4
    """

    tagged_path: str
    metadata: DataKeyMetadata = field(default_factory=DataKeyMetadata, compare=False)
    fingerprint: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate tag markers and path grammar, then compute the fingerprint.

        Raises:
            MalformedKeyPathError: If tags are missing or the path is invalid
        """
        path = _validate_tagged_path(self.tagged_path)
        digest = fxhash_32(path.encode("utf-8"))
        object.__setattr__(self, "fingerprint", digest.to_bytes(4, "little"))

    @classmethod
    def construct(cls, tagged_path: str, metadata: DataKeyMetadata | None = None) -> DataKey:
        """Construct a key from an already-tagged path string.

        Args:
            tagged_path: LEADING_TAG + path + TRAILING_TAG
            metadata: Fallback metadata (default: language fallback)

        Raises:
            MalformedKeyPathError: If tags are missing or the path is invalid
        """
        return cls(tagged_path, metadata if metadata is not None else DataKeyMetadata())

    @property
    def path(self) -> str:
        """Untagged key path, e.g. ``calendar/japanese@1``."""
        return self.tagged_path[len(LEADING_TAG) : len(self.tagged_path) - len(TRAILING_TAG)]

    def hashed(self) -> bytes:
        """Return the 4-byte fingerprint."""
        return self.fingerprint

    def __str__(self) -> str:
        """Return the untagged path."""
        return self.path


def _validate_tagged_path(tagged_path: str) -> str:
    context = IntegrityContext(component="key", operation="construct", key=tagged_path)
    if not tagged_path.startswith(LEADING_TAG):
        msg = f"Data key is missing its leading tag: {tagged_path!r}"
        raise MalformedKeyPathError(msg, context, tagged_path=tagged_path)
    if not tagged_path.endswith(TRAILING_TAG) or len(tagged_path) < len(LEADING_TAG) + len(
        TRAILING_TAG
    ):
        msg = f"Data key is missing its trailing tag: {tagged_path!r}"
        raise MalformedKeyPathError(msg, context, tagged_path=tagged_path)
    path = tagged_path[len(LEADING_TAG) : len(tagged_path) - len(TRAILING_TAG)]
    if not _PATH_PATTERN.fullmatch(path):
        msg = (
            f"Invalid data key path {path!r}: expected segments of [A-Za-z0-9_] "
            "separated by '/', followed by '@' and a version number"
        )
        raise MalformedKeyPathError(msg, context, tagged_path=tagged_path)
    return path


class KeyRegistry:
    """Fingerprint uniqueness check for declared keys.

    Thread-safe. Registering the same path twice is a no-op; registering a
    different path with an already-seen fingerprint raises.
    """

    __slots__ = ("_by_fingerprint", "_lock")

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._by_fingerprint: dict[bytes, DataKey] = {}
        self._lock = threading.Lock()

    def register(self, key: DataKey) -> DataKey:
        """Record ``key``, rejecting fingerprint collisions.

        Returns:
            The registered key (for chaining at declaration sites)

        Raises:
            KeyCollisionError: If another path already owns the fingerprint
        """
        with self._lock:
            existing = self._by_fingerprint.get(key.fingerprint)
            if existing is None:
                self._by_fingerprint[key.fingerprint] = key
                logger.debug("Registered data key %s [%s]", key.path, key.fingerprint.hex())
                return key
        if existing.path != key.path:
            context = IntegrityContext(
                component="registry",
                operation="register",
                key=key.path,
                expected=existing.path,
                actual=key.path,
            )
            msg = (
                f"Data key fingerprint collision: {key.path!r} and {existing.path!r} "
                f"both hash to {key.fingerprint.hex()}"
            )
            raise KeyCollisionError(
                msg,
                context,
                fingerprint=key.fingerprint,
                existing_path=existing.path,
                new_path=key.path,
            )
        return key

    def get(self, fingerprint: bytes) -> DataKey | None:
        """Return the key registered under ``fingerprint``, if any."""
        with self._lock:
            return self._by_fingerprint.get(bytes(fingerprint))

    def __len__(self) -> int:
        """Return the number of registered keys."""
        with self._lock:
            return len(self._by_fingerprint)

    def __contains__(self, key: object) -> bool:
        """Check whether ``key`` (by path) is registered."""
        if not isinstance(key, DataKey):
            return False
        with self._lock:
            return self._by_fingerprint.get(key.fingerprint) == key


_DEFAULT_KEY_REGISTRY = KeyRegistry()


def default_key_registry() -> KeyRegistry:
    """Return the process-wide registry that data_key() records into."""
    return _DEFAULT_KEY_REGISTRY


def data_key(
    path: str,
    *,
    fallback_by: FallbackPriority = FallbackPriority.LANGUAGE,
    extension_key: str | None = None,
    fallback_supplement: FallbackSupplement | None = None,
    singleton: bool = False,
) -> DataKey:
    """Declare a data key from an untagged path.

    Adds the tag markers, validates the result, and records the key in the
    default registry when collision checking is enabled.

    Args:
        path: Untagged key path, e.g. ``"calendar/japanese@1"``
        fallback_by: Fallback priority for locale resolution
        extension_key: Unicode extension keyword the data depends on
        fallback_supplement: Extra fallback rules
        singleton: Whether the data is locale-independent

    Raises:
        MalformedKeyPathError: If the path is invalid
        KeyCollisionError: If the fingerprint collides with another key

    Example:
        >>> key = data_key("datetime/week_data@1", fallback_by=FallbackPriority.REGION)
        >>> key.metadata.fallback_priority
        <FallbackPriority.REGION: 'region'>
    """
    metadata = DataKeyMetadata(
        fallback_priority=fallback_by,
        extension_key=extension_key,
        fallback_supplement=fallback_supplement,
        singleton=singleton,
    )
    key = DataKey.construct(f"{LEADING_TAG}{path}{TRAILING_TAG}", metadata)
    if get_config().check_key_collisions:
        _DEFAULT_KEY_REGISTRY.register(key)
    return key
