"""Recoverable operation results returned by the repository."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Result of a repository operation.

    None of these are raised; callers decide how to report them.
    """

    ACCEPTED = "accepted"
    OK = "ok"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    NOTHING_TO_UNDO = "nothing_to_undo"
    NOTHING_TO_REDO = "nothing_to_redo"
    INVALID_SCORES = "invalid_scores"

    @property
    def ok(self) -> bool:
        return self in (Outcome.ACCEPTED, Outcome.OK)


@dataclass(frozen=True)
class RosterStats:
    """Summary figures over the live collection."""

    count: int
    top_total: int
    average_percentage: float
    fees_due: int
