"""Base type for key -> position indexes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

from rollbook.records.models import StudentRecord


class RecordIndex(ABC):
    """Map unique roll numbers to positions in the stored record order."""

    name: str

    @abstractmethod
    def insert(self, record: StudentRecord, position: int) -> bool:
        """Index ``record`` at ``position``; return False if the roll is taken."""

    @abstractmethod
    def lookup(self, key: int) -> int | None:
        """Return the stored position for ``key``; None when absent or not an int."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def keys(self) -> Iterator[int]:
        """Iterate indexed keys."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not None

    def rebuild(self, records: Sequence[StudentRecord]) -> None:
        """Re-index ``records`` from scratch using their sequence positions."""
        self.clear()
        for position, record in enumerate(records):
            if not self.insert(record, position):
                raise ValueError(f"Duplicate roll {record.roll} while rebuilding index.")
