"""Data markers: compile-time names for data shapes.

A marker is a class (never instantiated) that names the data struct a
payload carries. Keyed markers also name the DataKey used to request it.
Several markers may share one data type; they are then interchangeable
through DataPayload.cast() and DataMarker.upcast().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .key import DataKey
    from .payload import DataPayload

__all__ = ["DataMarker", "KeyedDataMarker"]


class DataMarker:
    """Base class for data markers.

    Subclasses set:
        data_type: The data struct class payloads of this marker carry
        thread_safe: Whether the data may be shared across threads; erased
            payloads require this when ProviderConfig.sync is on

    Example:
        >>> class WeekDataV1Marker(KeyedDataMarker):
        ...     data_type = WeekDataV1
        ...     KEY = data_key("datetime/week_data@1")
    """

    data_type: ClassVar[type]
    thread_safe: ClassVar[bool] = True

    def __init__(self) -> None:
        msg = f"{type(self).__name__} is a marker and cannot be instantiated"
        raise TypeError(msg)

    @classmethod
    def upcast[M: DataMarker](cls, payload: DataPayload[M]) -> DataPayload:
        """Re-tag ``payload`` with this marker.

        The source marker must carry the same data type, e.g. a
        calendar-specific symbols marker upcast into its calendar-agnostic
        counterpart.

        Raises:
            DataError: MISMATCHED_TYPE if the data types differ
        """
        return payload.cast(cls)


class KeyedDataMarker(DataMarker):
    """Data marker bound to a data key."""

    KEY: ClassVar[DataKey]
