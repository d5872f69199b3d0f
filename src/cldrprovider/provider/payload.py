"""Zero-copy data payloads.

A DataPayload pairs a marker with a view (the typed data struct) and, when
the view borrows from a byte buffer, the Cart that owns that buffer. The
view and the cart travel together: there is no way to obtain a payload's
view without the payload (and therefore the cart) being reachable.

Three origins:
    - from_static(): data baked into the program, no cart
    - from_owned(): an owned value with no backing buffer
    - from_owned_buffer(): bytes moved into a Cart, view built over a
      memoryview of those bytes

Cloning is O(1) and shares the cart. Payloads are immutable.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from cldrprovider.diagnostics import DataError, DataErrorKind

if TYPE_CHECKING:
    from .marker import DataMarker

__all__ = ["Cart", "DataPayload"]


class Cart:
    """Owner of the immutable byte buffer a view borrows from.

    Carts are shared by identity between clones and projections of one
    payload; the buffer is released once the last of them is dropped.
    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        """Take ownership of ``buffer``.

        Mutable inputs are copied once so that later mutation by the caller
        cannot change data a view already borrows.
        """
        self._buffer = buffer if isinstance(buffer, bytes) else bytes(buffer)

    @property
    def buffer(self) -> bytes:
        """The owned bytes."""
        return self._buffer

    def view(self) -> memoryview:
        """Return a read-only memoryview over the whole buffer."""
        return memoryview(self._buffer)

    def __len__(self) -> int:
        """Return the buffer length in bytes."""
        return len(self._buffer)

    def __repr__(self) -> str:
        """Return a short representation (never the buffer contents)."""
        return f"Cart(<{len(self._buffer)} bytes>)"


class DataPayload[M: DataMarker]:
    """Typed data for marker ``M``, possibly borrowing from a Cart.

    Attributes:
        marker: The marker class naming the data shape

    Example:
        >>> payload = DataPayload.from_static(WeekDataV1Marker, WeekDataV1())
        >>> payload.get().min_week_days
        1
    """

    __slots__ = ("_cart", "_static", "_view", "marker")

    marker: type[M]
    _view: Any
    _cart: Cart | None
    _static: bool

    def __init__(self, marker: type[M], view: Any, cart: Cart | None, *, static: bool) -> None:
        """Assemble a payload. Prefer the from_* constructors."""
        self.marker = marker
        self._view = view
        self._cart = cart
        self._static = static

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_static(cls, marker: type[M], data: Any) -> DataPayload[M]:
        """Wrap data that lives for the whole process."""
        return cls(marker, data, None, static=True)

    @classmethod
    def from_owned(cls, marker: type[M], data: Any) -> DataPayload[M]:
        """Wrap an owned value that does not borrow from any buffer."""
        return cls(marker, data, None, static=False)

    @classmethod
    def from_owned_buffer(
        cls,
        marker: type[M],
        buffer: bytes | bytearray | memoryview,
        build_view: Callable[[memoryview], Any],
    ) -> DataPayload[M]:
        """Move ``buffer`` into a Cart and build the view over it.

        ``build_view`` receives a read-only memoryview of the cart's bytes
        and returns the typed view. Whatever it raises propagates unchanged;
        no payload is created in that case.
        """
        cart = Cart(buffer)
        view = build_view(cart.view())
        return cls(marker, view, cart, static=False)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self) -> Any:
        """Return the view."""
        return self._view

    @property
    def cart(self) -> Cart | None:
        """The shared buffer owner, or None for static and owned payloads."""
        return self._cart

    def is_static(self) -> bool:
        """Check whether the payload wraps process-lifetime data."""
        return self._static

    def into_owned(self) -> Any:
        """Return the data detached from any backing buffer.

        Payloads without a cart return their view as is. Buffer-backed views
        are converted through the data struct's ``to_owned()``.

        Raises:
            DataError: MISSING_PAYLOAD if the view cannot be detached
        """
        if self._cart is None:
            return self._view
        to_owned = getattr(self._view, "to_owned", None)
        if to_owned is None:
            msg = f"{type(self._view).__name__} cannot be detached from its buffer"
            raise DataError(DataErrorKind.MISSING_PAYLOAD, str_context=msg)
        return to_owned()

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def map_project[M2: DataMarker](
        self, marker: type[M2], transform: Callable[[Any], Any]
    ) -> DataPayload[M2]:
        """Derive a payload for ``marker`` whose view is ``transform(view)``.

        The new payload shares this payload's cart, so a view derived from
        borrowed data keeps borrowing. Errors raised by ``transform``
        propagate unchanged.
        """
        return DataPayload(marker, transform(self._view), self._cart, static=self._static)

    def cast[M2: DataMarker](self, marker: type[M2]) -> DataPayload[M2]:
        """Re-tag this payload with another marker of the same data type.

        Raises:
            DataError: MISMATCHED_TYPE if the data types differ
        """
        if marker.data_type is not self.marker.data_type:
            raise DataError.for_type(marker).with_str_context(self.marker.__qualname__)
        return DataPayload(marker, self._view, self._cart, static=self._static)

    def clone(self) -> DataPayload[M]:
        """Return a copy sharing the same view and cart."""
        return DataPayload(self.marker, self._view, self._cart, static=self._static)

    def __copy__(self) -> DataPayload[M]:
        """Support copy.copy(); same as clone()."""
        return self.clone()

    def __eq__(self, other: object) -> bool:
        """Compare marker and view."""
        if not isinstance(other, DataPayload):
            return NotImplemented
        return self.marker is other.marker and self._view == other._view

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return a representation naming the marker and origin."""
        if self._static:
            origin = "static"
        elif self._cart is not None:
            origin = repr(self._cart)
        else:
            origin = "owned"
        return f"DataPayload({self.marker.__name__}, {self._view!r}, {origin})"
