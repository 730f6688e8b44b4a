"""Leaderboard ordering and bounded top-K selection."""

from __future__ import annotations

import heapq
from collections.abc import Sequence
from dataclasses import dataclass

from rollbook.records.models import StudentRecord


@dataclass(frozen=True)
class RankEntry:
    """Ranked record with its 1-based leaderboard position."""

    rank: int
    record: StudentRecord


def rank_key(record: StudentRecord) -> tuple[int, int]:
    """Sort key shared by every ranking: total descending, then roll ascending."""
    return (-record.total, record.roll)


class RankingEngine:
    """Order records by total marks without mutating the input sequence."""

    def leaderboard(self, records: Sequence[StudentRecord]) -> list[StudentRecord]:
        """Return every record, best first."""
        return sorted(records, key=rank_key)

    def standings(self, records: Sequence[StudentRecord]) -> list[RankEntry]:
        """Return the leaderboard with positions attached."""
        return [
            RankEntry(rank=index + 1, record=record)
            for index, record in enumerate(self.leaderboard(records))
        ]

    def top_k(self, records: Sequence[StudentRecord], k: int) -> list[StudentRecord]:
        """Return the ``k`` best records in leaderboard order.

        Keeps a min-heap of at most ``k`` entries while scanning once, so the
        cost is O(n log k). The heap root is always the weakest survivor:
        lowest total, and for equal totals the highest roll.
        """
        if k <= 0 or not records:
            return []

        heap: list[tuple[int, int, StudentRecord]] = []
        for record in records:
            heapq.heappush(heap, (record.total, -record.roll, record))
            if len(heap) > k:
                heapq.heappop(heap)

        return sorted((record for _, _, record in heap), key=rank_key)

    def topper(self, records: Sequence[StudentRecord]) -> StudentRecord | None:
        """Return the single best record, or None for an empty collection."""
        if not records:
            return None

        priority = [(-record.total, record.roll, record) for record in records]
        heapq.heapify(priority)
        return priority[0][2]

    def persisted_order(self, records: Sequence[StudentRecord]) -> list[StudentRecord]:
        """Return the order a persisted re-sort installs into storage.

        Uses the same stable ordering as the leaderboard so that the stored
        order and ``leaderboard()`` agree right after a sort.
        """
        return self.leaderboard(records)
