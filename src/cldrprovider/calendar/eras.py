"""Era tables and era resolution.

An EraTable maps start dates to era codes. Entries are strictly increasing
by start date; the era of a date is the last entry starting on or before
it. Tables come from two places:

    - from_entries(): an owned tuple (static or JSON-decoded data)
    - from_packed(): a zero-copy view over fixed-width records in a
      buffer (see constants.ERA_RECORD)

Both are validated once at construction; lookups assume a valid table.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Iterator, Sequence
from operator import itemgetter
from typing import overload

from cldrprovider.constants import (
    ERA_RECORD,
    ERA_RECORD_SIZE,
    MAX_ERA_CODE_BYTES,
    MAX_ERA_YEAR,
    MIN_ERA_YEAR,
)
from cldrprovider.diagnostics import DataError, DataErrorKind, EraNotFoundError

from .types import EraStartDate

__all__ = ["EraEntry", "EraTable"]

logger = logging.getLogger(__name__)

type EraEntry = tuple[EraStartDate, str]

_start_of = itemgetter(0)


def _invalid(msg: str) -> DataError:
    return DataError(DataErrorKind.INVALID_STATE, str_context=msg)


def _check_code(code: str, index: int) -> None:
    if not code:
        raise _invalid(f"era {index} has an empty code")
    if not code.isascii() or "\x00" in code:
        raise _invalid(f"era {index} code {code!r} is not NUL-free ASCII")
    if len(code) > MAX_ERA_CODE_BYTES:
        raise _invalid(f"era {index} code {code!r} exceeds {MAX_ERA_CODE_BYTES} bytes")


def _validate(entries: Iterable[EraEntry]) -> int:
    previous: EraStartDate | None = None
    count = 0
    for index, (start, code) in enumerate(entries):
        if not start.is_valid():
            raise _invalid(f"era {index} ({code}) has invalid start date {start}")
        if not MIN_ERA_YEAR <= start.year <= MAX_ERA_YEAR:
            raise _invalid(
                f"era {index} ({code}) year {start.year} is outside the signed 32-bit range"
            )
        _check_code(code, index)
        if previous is not None and start <= previous:
            raise _invalid(
                f"era {index} ({code}) starts {start}, not after the previous era ({previous})"
            )
        previous = start
        count += 1
    return count


def _decode_record(buffer: memoryview, index: int) -> EraEntry:
    year, month, day, raw_code = ERA_RECORD.unpack_from(buffer, index * ERA_RECORD_SIZE)
    return EraStartDate(year, month, day), raw_code.rstrip(b"\x00").decode("ascii")


class EraTable(Sequence[EraEntry]):
    """Ordered (start date, era code) entries.

    Example:
        >>> table = EraTable.from_entries([
        ...     (EraStartDate(1868, 9, 8), "meiji"),
        ...     (EraStartDate(1912, 7, 30), "taisho"),
        ... ])
        >>> table.era_for(1900, 1, 1)
        'meiji'
    """

    __slots__ = ("_entries", "_packed")

    _entries: tuple[EraEntry, ...] | None
    _packed: memoryview | None

    def __init__(self) -> None:
        """Create an empty table. Prefer from_entries() or from_packed()."""
        self._entries = ()
        self._packed = None

    @classmethod
    def from_entries(cls, entries: Iterable[EraEntry]) -> EraTable:
        """Build an owned table.

        Raises:
            DataError: INVALID_STATE if the entries are not a valid table
        """
        table = cls()
        table._entries = tuple(entries)
        _validate(table._entries)
        return table

    @classmethod
    def from_packed(cls, buffer: memoryview) -> EraTable:
        """Build a table that reads records in place from ``buffer``.

        The buffer is not copied; keep it alive (a DataPayload's cart does).

        Raises:
            DataError: INVALID_STATE if the buffer is not a whole number of
                records or the records are not a valid table
        """
        if len(buffer) % ERA_RECORD_SIZE:
            raise _invalid(
                f"packed era table is {len(buffer)} bytes, not a multiple of {ERA_RECORD_SIZE}"
            )
        table = cls()
        table._entries = None
        table._packed = buffer.toreadonly()
        try:
            count = _validate(table)
        except UnicodeDecodeError as exc:
            raise _invalid(f"packed era code is not ASCII: {exc}") from exc
        logger.debug("Validated packed era table with %d records", count)
        return table

    @property
    def is_borrowed(self) -> bool:
        """Whether entries are read from a borrowed buffer."""
        return self._packed is not None

    def __len__(self) -> int:
        """Return the number of eras."""
        if self._packed is not None:
            return len(self._packed) // ERA_RECORD_SIZE
        return len(self._entries or ())

    @overload
    def __getitem__(self, index: int) -> EraEntry: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[EraEntry]: ...
    def __getitem__(self, index: int | slice) -> EraEntry | Sequence[EraEntry]:
        """Return an entry (or list of entries for a slice)."""
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if self._packed is not None:
            if index < 0:
                index += len(self)
            if not 0 <= index < len(self):
                msg = "era table index out of range"
                raise IndexError(msg)
            return _decode_record(self._packed, index)
        return self._entries[index]  # type: ignore[index]

    def __iter__(self) -> Iterator[EraEntry]:
        """Iterate entries in start-date order."""
        for index in range(len(self)):
            yield self[index]

    def __eq__(self, other: object) -> bool:
        """Compare entries, regardless of backing."""
        if not isinstance(other, EraTable):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other, strict=True))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return a representation listing the eras."""
        backing = "packed" if self.is_borrowed else "owned"
        eras = ", ".join(f"{start}={code}" for start, code in self)
        return f"EraTable({backing}: {eras})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def era_for(self, year: int, month: int, day: int) -> str:
        """Return the code of the era containing the given date (binary search).

        Raises:
            EraNotFoundError: If the date precedes the first era
        """
        index = bisect.bisect_right(self, EraStartDate(year, month, day), key=_start_of) - 1
        if index < 0:
            msg = f"{year:04d}-{month:02d}-{day:02d} precedes the first era"
            raise EraNotFoundError(msg, date=(year, month, day))
        return self[index][1]

    def era_for_linear(self, year: int, month: int, day: int) -> str:
        """Return the code of the era containing the given date (linear scan).

        Agrees with era_for() on every valid table.

        Raises:
            EraNotFoundError: If the date precedes the first era
        """
        target = EraStartDate(year, month, day)
        found: str | None = None
        for start, code in self:
            if start > target:
                break
            found = code
        if found is None:
            msg = f"{year:04d}-{month:02d}-{day:02d} precedes the first era"
            raise EraNotFoundError(msg, date=(year, month, day))
        return found

    def entry_for(self, code: str) -> tuple[int, EraStartDate] | None:
        """Return (index, start date) of the era named ``code``, if present."""
        for index, (start, era) in enumerate(self):
            if era == code:
                return index, start
        return None

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_owned(self) -> EraTable:
        """Return a table that no longer borrows from a buffer."""
        if self._packed is None:
            return self
        table = EraTable()
        table._entries = tuple(self)
        return table

    def to_packed(self) -> bytes:
        """Serialize to fixed-width records."""
        return b"".join(
            ERA_RECORD.pack(start.year, start.month, start.day, code.encode("ascii"))
            for start, code in self
        )

    def to_list(self) -> list[list[int | str]]:
        """Return the JSON form: ``[[year, month, day, code], ...]``."""
        return [[start.year, start.month, start.day, code] for start, code in self]

    @classmethod
    def from_list(cls, rows: Iterable[Sequence[int | str]]) -> EraTable:
        """Build from the JSON form.

        Raises:
            ValueError: If a row is not ``[year, month, day, code]``
            DataError: INVALID_STATE if the entries are not a valid table
        """
        entries: list[EraEntry] = []
        for row in rows:
            if not isinstance(row, Sequence) or isinstance(row, (str, bytes)) or len(row) != 4:
                msg = f"era row must be [year, month, day, code], got {row!r}"
                raise ValueError(msg)
            year, month, day, code = row
            if not (isinstance(year, int) and isinstance(month, int) and isinstance(day, int)):
                msg = f"era row date fields must be integers, got {row!r}"
                raise ValueError(msg)
            if not isinstance(code, str):
                msg = f"era row code must be a string, got {row!r}"
                raise ValueError(msg)
            entries.append((EraStartDate(year, month, day), code))
        return cls.from_entries(entries)
