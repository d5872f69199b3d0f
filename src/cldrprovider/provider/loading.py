"""Data provider protocol and the registry-backed provider.

RegistryDataProvider is an explicit table built once at start-up: each
registration binds (marker, locale) to static data, an owned buffer, a
factory, or an explicit "no payload" entry. Lookups are keyed by the data
key fingerprint and walk the key's locale fallback chain.

FilterDataProvider wraps any provider with a request predicate.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from cldrprovider.diagnostics import DataError, DataErrorKind

from .any import AnyResponse
from .fallback import fallback_chain
from .payload import DataPayload
from .request import DataLocale, DataRequest
from .response import DataResponse, DataResponseMetadata

if TYPE_CHECKING:
    from .key import DataKey
    from .marker import KeyedDataMarker

__all__ = [
    "DataProvider",
    "FilterDataProvider",
    "RegistryDataProvider",
]

logger = logging.getLogger(__name__)

type PayloadFactory = Callable[[DataLocale], DataPayload[Any]]


class DataProvider(Protocol):
    """Anything that can load typed data for a keyed marker."""

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Load data for ``marker``.

        Raises:
            DataError: If the data cannot be provided
        """
        ...


@dataclass(frozen=True, slots=True)
class _Entry:
    """One registered (marker, locale) cell.

    Exactly one of payload/factory is set, or neither for an empty entry.
    """

    payload: DataPayload[Any] | None = None
    factory: PayloadFactory | None = None

    def resolve(self, locale: DataLocale) -> DataPayload[Any] | None:
        if self.factory is not None:
            return self.factory(locale)
        if self.payload is not None:
            return self.payload.clone()
        return None


@dataclass(slots=True)
class _KeyTable:
    marker: type[KeyedDataMarker]
    entries: dict[DataLocale, _Entry]


def _as_locale(locale: DataLocale | str) -> DataLocale:
    return DataLocale.parse(locale) if isinstance(locale, str) else locale


class RegistryDataProvider:
    """Provider backed by an explicit registration table.

    Register everything before sharing the provider between threads;
    loads never mutate the table.

    Example:
        >>> provider = RegistryDataProvider()
        >>> provider.register_static(WeekDataV1Marker, DataLocale.root(), WeekDataV1())
        >>> provider.load(WeekDataV1Marker, DataRequest()).take_payload().get()
        WeekDataV1(first_weekday=<IsoWeekday.MONDAY: 1>, min_week_days=1)
    """

    __slots__ = ("_name", "_tables")

    def __init__(self, name: str = "registry") -> None:
        """Initialize an empty provider.

        Args:
            name: Debug name used in log messages
        """
        self._name = name
        self._tables: dict[bytes, _KeyTable] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _register(
        self, marker: type[KeyedDataMarker], locale: DataLocale | str, entry: _Entry
    ) -> None:
        key = marker.KEY
        table = self._tables.get(key.fingerprint)
        if table is None:
            table = _KeyTable(marker, {})
            self._tables[key.fingerprint] = table
        elif table.marker is not marker:
            msg = (
                f"Key {key.path} is already registered for {table.marker.__qualname__}, "
                f"cannot register it for {marker.__qualname__}"
            )
            raise ValueError(msg)
        table.entries[_as_locale(locale)] = entry

    def register_static(
        self, marker: type[KeyedDataMarker], locale: DataLocale | str, data: Any
    ) -> None:
        """Register process-lifetime data for (marker, locale)."""
        self._register(marker, locale, _Entry(payload=DataPayload.from_static(marker, data)))

    def register_owned(
        self, marker: type[KeyedDataMarker], locale: DataLocale | str, data: Any
    ) -> None:
        """Register an owned value for (marker, locale)."""
        self._register(marker, locale, _Entry(payload=DataPayload.from_owned(marker, data)))

    def register_owned_buffer(
        self,
        marker: type[KeyedDataMarker],
        locale: DataLocale | str,
        buffer: bytes,
        build_view: Callable[[memoryview], Any],
    ) -> None:
        """Register a buffer-backed view for (marker, locale).

        The view is built once, at registration; loads share its cart.
        """
        payload = DataPayload.from_owned_buffer(marker, buffer, build_view)
        self._register(marker, locale, _Entry(payload=payload))

    def register_factory(
        self, marker: type[KeyedDataMarker], locale: DataLocale | str, factory: PayloadFactory
    ) -> None:
        """Register a callable producing the payload on every load.

        The factory receives the matched locale; whatever it raises
        propagates from load().
        """
        self._register(marker, locale, _Entry(factory=factory))

    def register_empty(self, marker: type[KeyedDataMarker], locale: DataLocale | str) -> None:
        """Register (marker, locale) as known but without a payload."""
        self._register(marker, locale, _Entry())

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def keys(self) -> list[DataKey]:
        """Return the registered keys, sorted by path."""
        return sorted(table.marker.KEY for table in self._tables.values())

    def supported_locales(self, marker: type[KeyedDataMarker]) -> list[DataLocale]:
        """Return the locales registered for ``marker``, sorted."""
        table = self._tables.get(marker.KEY.fingerprint)
        return sorted(table.entries) if table is not None else []

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Load data for ``marker``, walking the locale fallback chain.

        Raises:
            DataError: MISSING_DATA_KEY, MISMATCHED_TYPE, EXTRANEOUS_LOCALE,
                NEEDS_LOCALE or MISSING_LOCALE; factory errors propagate
        """
        key = marker.KEY
        table = self._tables.get(key.fingerprint)
        if table is None:
            if not req.metadata.silent:
                logger.warning("[%s] No data registered for key %s", self._name, key.path)
            raise DataError(DataErrorKind.MISSING_DATA_KEY, key=key)
        if table.marker is not marker:
            raise DataError.for_type(marker).with_key(key).with_str_context(
                table.marker.__qualname__
            )

        locale = req.locale
        if key.metadata.singleton:
            if not locale.is_root():
                raise DataError(
                    DataErrorKind.EXTRANEOUS_LOCALE, key=key, str_context=str(locale)
                )
        elif locale.is_root() and locale not in table.entries:
            raise DataError(DataErrorKind.NEEDS_LOCALE, key=key)

        for candidate in fallback_chain(locale, key.metadata):
            entry = table.entries.get(candidate)
            if entry is None:
                continue
            if candidate.is_root() and not locale.is_root() and not req.metadata.silent:
                logger.warning(
                    "[%s] Falling back to root data for %s (requested %s)",
                    self._name,
                    key.path,
                    locale,
                )
            logger.debug("[%s] Loaded %s for %s from %s", self._name, key.path, locale, candidate)
            try:
                payload = entry.resolve(candidate)
            except DataError as exc:
                raise exc.with_key(key) from exc
            return DataResponse(
                DataResponseMetadata(locale=candidate if candidate != locale else None),
                payload,
            )

        if not req.metadata.silent:
            logger.warning("[%s] No data for %s in locale %s", self._name, key.path, locale)
        raise DataError(DataErrorKind.MISSING_LOCALE, key=key, str_context=str(locale))

    def load_any(self, key: DataKey, req: DataRequest) -> AnyResponse:
        """Load data for ``key`` with its type erased.

        Raises:
            DataError: Same kinds as load()
        """
        table = self._tables.get(key.fingerprint)
        if table is None:
            raise DataError(DataErrorKind.MISSING_DATA_KEY, key=key)
        return AnyResponse.from_response(self.load(table.marker, req))

    def __repr__(self) -> str:
        """Return a summary of the registered keys."""
        return f"RegistryDataProvider({self._name!r}, keys={len(self._tables)})"


class FilterDataProvider:
    """Provider that rejects requests failing a predicate.

    Rejected requests raise DataError(FILTERED_RESOURCE) without reaching
    the inner provider.
    """

    __slots__ = ("_description", "_inner", "_predicate")

    def __init__(
        self,
        inner: DataProvider,
        predicate: Callable[[DataRequest], bool],
        description: str = "filter",
    ) -> None:
        """Wrap ``inner``.

        Args:
            inner: Provider to delegate accepted requests to
            predicate: Returns True for requests that may proceed
            description: Shown in error context for rejected requests
        """
        self._inner = inner
        self._predicate = predicate
        self._description = description

    @classmethod
    def allow_languages(cls, inner: DataProvider, languages: Iterable[str]) -> FilterDataProvider:
        """Filter to requests whose language is in ``languages`` (root always passes)."""
        allowed = frozenset(languages)
        return cls(
            inner,
            lambda req: req.locale.is_langid_root() or req.locale.language in allowed,
            f"languages {sorted(allowed)}",
        )

    def _check(self, key: DataKey, req: DataRequest) -> None:
        if not self._predicate(req):
            logger.debug(
                "Request for %s in %s rejected by %s", key.path, req.locale, self._description
            )
            raise DataError(
                DataErrorKind.FILTERED_RESOURCE, key=key, str_context=self._description
            )

    def load[M: KeyedDataMarker](self, marker: type[M], req: DataRequest) -> DataResponse[M]:
        """Load from the inner provider if the predicate accepts ``req``.

        Raises:
            DataError: FILTERED_RESOURCE if rejected; inner errors otherwise
        """
        self._check(marker.KEY, req)
        return self._inner.load(marker, req)

    def load_any(self, key: DataKey, req: DataRequest) -> AnyResponse:
        """Type-erased load; the inner provider must implement load_any().

        Raises:
            DataError: FILTERED_RESOURCE if rejected; inner errors otherwise
        """
        self._check(key, req)
        load_any = getattr(self._inner, "load_any", None)
        if load_any is None:
            raise DataError(
                DataErrorKind.MISSING_DATA_KEY, key=key, str_context="not an AnyProvider"
            )
        return load_any(key, req)
