"""Snapshot-based undo/redo history."""

from __future__ import annotations

import logging
from collections import deque

from rollbook.records.models import StudentRecord

# Records are frozen, so a tuple of them is a full value copy of the collection.
Snapshot = tuple[StudentRecord, ...]

logger = logging.getLogger(__name__)


class HistoryManager:
    """Two LIFO stacks of full collection snapshots.

    Every entry costs O(n) memory in the collection size. Set ``limit`` to cap
    the number of undo entries kept; the oldest ones are discarded first.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be > 0 when provided.")
        self.limit = limit
        self._undo: deque[Snapshot] = deque(maxlen=limit)
        self._redo: list[Snapshot] = []

    def record(self, snapshot: Snapshot) -> None:
        """Push the pre-mutation state and invalidate any redo entries."""
        self._undo.append(tuple(snapshot))
        self._redo.clear()

    def undo(self, current: Snapshot) -> Snapshot | None:
        """Return the state to restore, or None when there is nothing to undo."""
        if not self._undo:
            logger.debug("Nothing to undo")
            return None
        self._redo.append(tuple(current))
        return self._undo.pop()

    def redo(self, current: Snapshot) -> Snapshot | None:
        """Return the state to reinstall, or None when there is nothing to redo."""
        if not self._redo:
            logger.debug("Nothing to redo")
            return None
        self._undo.append(tuple(current))
        return self._redo.pop()

    def clear(self) -> None:
        """Forget all history."""
        self._undo.clear()
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)
