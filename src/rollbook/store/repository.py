"""In-memory student repository."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator

from rollbook.config.schema import RepositoryConfig
from rollbook.engine.history import HistoryManager, Snapshot
from rollbook.engine.index import RecordIndex, build_index
from rollbook.engine.ranking import RankEntry, RankingEngine
from rollbook.records.aggregates import ScoreRangeError, validate_scores
from rollbook.records.models import StudentRecord

from .outcomes import Outcome, RosterStats

logger = logging.getLogger(__name__)


class StudentRepository:
    """Own the record collection and keep index, ranking and history in step.

    Records are stored in insertion order (or the order installed by
    ``sort_persist``). The index maps roll numbers to positions in that order,
    so anything that reorders or shrinks storage rebuilds it. Every mutating
    call checks its preconditions before touching state; a rejected call
    leaves storage, index and history exactly as they were.
    """

    def __init__(
        self,
        config: RepositoryConfig | None = None,
        ranking: RankingEngine | None = None,
    ) -> None:
        self.config = config or RepositoryConfig()
        self.ranking = ranking or RankingEngine()
        self._records: list[StudentRecord] = []
        self._index: RecordIndex = build_index(self.config.index_strategy)
        self._history: HistoryManager | None = (
            HistoryManager(limit=self.config.history_limit) if self.config.history_enabled else None
        )

    def add(self, record: StudentRecord) -> Outcome:
        """Insert a new record; duplicates are rejected without side effects."""
        if record.roll in self._index:
            logger.info("Rejected duplicate roll %s", record.roll)
            return Outcome.DUPLICATE_KEY
        if not self._scores_allowed(record):
            return Outcome.INVALID_SCORES

        self._snapshot()
        self._index.insert(record, len(self._records))
        self._records.append(record)
        logger.debug("Added roll %s (total=%s)", record.roll, record.total)
        return Outcome.ACCEPTED

    def add_many(self, records: Iterable[StudentRecord]) -> dict[Outcome, int]:
        """Add records one by one and count the outcomes."""
        counts: Counter[Outcome] = Counter(self.add(record) for record in records)
        return dict(counts)

    def update(self, record: StudentRecord) -> Outcome:
        """Replace the record stored under ``record.roll`` wholesale."""
        position = self._index.lookup(record.roll)
        if position is None:
            return Outcome.NOT_FOUND
        if not self._scores_allowed(record):
            return Outcome.INVALID_SCORES

        self._snapshot()
        self._records[position] = record
        logger.debug("Updated roll %s (total=%s)", record.roll, record.total)
        return Outcome.OK

    def remove(self, key: int) -> Outcome:
        """Delete the record stored under ``key``."""
        position = self._index.lookup(key)
        if position is None:
            return Outcome.NOT_FOUND

        self._snapshot()
        del self._records[position]
        self._index.rebuild(self._records)
        logger.debug("Removed roll %s", key)
        return Outcome.OK

    def pay_fee(self, key: int, amount: int) -> Outcome:
        """Add ``amount`` to the paid fee; the result is clamped to the total fee."""
        position = self._index.lookup(key)
        if position is None:
            return Outcome.NOT_FOUND

        current = self._records[position]
        self._snapshot()
        self._records[position] = current.with_changes(fee_paid=current.fee_paid + int(amount))
        return Outcome.OK

    def sort_persist(self) -> Outcome:
        """Reorder storage into leaderboard order and rebuild the index."""
        self._snapshot()
        self._records = self.ranking.persisted_order(self._records)
        self._index.rebuild(self._records)
        logger.debug("Persisted ranked order for %d records", len(self._records))
        return Outcome.OK

    def undo(self) -> Outcome:
        """Restore the collection as it was before the last mutation."""
        if self._history is None:
            return Outcome.NOTHING_TO_UNDO
        previous = self._history.undo(tuple(self._records))
        if previous is None:
            return Outcome.NOTHING_TO_UNDO
        self._install(previous)
        return Outcome.OK

    def redo(self) -> Outcome:
        """Reapply the most recently undone mutation."""
        if self._history is None:
            return Outcome.NOTHING_TO_REDO
        following = self._history.redo(tuple(self._records))
        if following is None:
            return Outcome.NOTHING_TO_REDO
        self._install(following)
        return Outcome.OK

    def find(self, key: int) -> StudentRecord | None:
        """Return the record for ``key`` or None."""
        position = self._index.lookup(key)
        if position is None:
            return None
        return self._records[position]

    def leaderboard(self) -> list[StudentRecord]:
        return self.ranking.leaderboard(self._records)

    def standings(self) -> list[RankEntry]:
        return self.ranking.standings(self._records)

    def top_k(self, k: int) -> list[StudentRecord]:
        return self.ranking.top_k(self._records, k)

    def topper(self) -> StudentRecord | None:
        return self.ranking.topper(self._records)

    def records(self) -> list[StudentRecord]:
        """Return the collection in stored order."""
        return list(self._records)

    def stats(self) -> RosterStats:
        """Summarize head count, best total, mean percentage and outstanding fees.

        Students without a fee on file are counted at ``config.default_fee``.
        """
        if not self._records:
            return RosterStats(count=0, top_total=0, average_percentage=0.0, fees_due=0)

        average = sum(record.percentage for record in self._records) / len(self._records)
        fees_due = sum(
            record.fee_left if record.total_fee else self.config.default_fee
            for record in self._records
        )
        return RosterStats(
            count=len(self._records),
            top_total=max(record.total for record in self._records),
            average_percentage=round(average, 2),
            fees_due=fees_due,
        )

    @property
    def can_undo(self) -> bool:
        return self._history is not None and self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history is not None and self._history.can_redo

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.records())

    def _scores_allowed(self, record: StudentRecord) -> bool:
        if self.config.score_policy != "strict":
            return True
        try:
            validate_scores(record.scores, max_score=self.config.max_score)
        except ScoreRangeError as exc:
            logger.info("Rejected roll %s: %s", record.roll, exc)
            return False
        return True

    def _snapshot(self) -> None:
        if self._history is not None:
            self._history.record(tuple(self._records))

    def _install(self, snapshot: Snapshot) -> None:
        self._records = list(snapshot)
        self._index.rebuild(self._records)
