"""Hash-based index: average O(1) insert and lookup."""

from __future__ import annotations

from collections.abc import Iterator

from rollbook.records.models import StudentRecord

from .base import RecordIndex


class HashIndex(RecordIndex):
    """Dictionary from roll number to position."""

    name = "hash"

    def __init__(self) -> None:
        self._positions: dict[int, int] = {}

    def insert(self, record: StudentRecord, position: int) -> bool:
        if record.roll in self._positions:
            return False
        self._positions[record.roll] = position
        return True

    def lookup(self, key: int) -> int | None:
        if not isinstance(key, int):
            return None
        return self._positions.get(key)

    def clear(self) -> None:
        self._positions.clear()

    def keys(self) -> Iterator[int]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)
