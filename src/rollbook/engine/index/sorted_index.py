"""Sorted-array index: binary-search lookup, positional insert."""

from __future__ import annotations

import bisect
from collections.abc import Iterator

from rollbook.records.models import StudentRecord

from .base import RecordIndex


class SortedIndex(RecordIndex):
    """Parallel lists of ascending roll numbers and their positions.

    Lookup and the duplicate check are O(log n) via ``bisect``; insert shifts
    the tail of both lists and is O(n).
    """

    name = "sorted"

    def __init__(self) -> None:
        self._keys: list[int] = []
        self._positions: list[int] = []

    def insert(self, record: StudentRecord, position: int) -> bool:
        slot = bisect.bisect_left(self._keys, record.roll)
        if slot < len(self._keys) and self._keys[slot] == record.roll:
            return False
        self._keys.insert(slot, record.roll)
        self._positions.insert(slot, position)
        return True

    def lookup(self, key: int) -> int | None:
        if not isinstance(key, int):
            return None
        slot = bisect.bisect_left(self._keys, key)
        if slot < len(self._keys) and self._keys[slot] == key:
            return self._positions[slot]
        return None

    def clear(self) -> None:
        self._keys.clear()
        self._positions.clear()

    def keys(self) -> Iterator[int]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)
