"""Derived totals, percentages and fee balances for student records."""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from dataclasses import dataclass

SUBJECTS = ("dsa", "os", "dbms", "cn")
SUBJECT_COUNT = len(SUBJECTS)
MAX_SCORE = 100


class ScoreRangeError(ValueError):
    """Raised when a subject mark falls outside the accepted range."""


@dataclass(frozen=True)
class Aggregates:
    """Total and percentage derived from subject marks."""

    total: int
    percentage: float


@dataclass(frozen=True)
class FeeStatus:
    """Clamped fee figures."""

    total_fee: int
    fee_paid: int
    fee_left: int


def coerce_mark(subject: str, value: object) -> int:
    """Return ``value`` as an int mark; fractional or non-numeric marks raise ValueError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"Mark for '{subject}' must be a whole number, got {value!r}.")
    if isinstance(value, numbers.Integral) or float(value).is_integer():
        return int(value)
    raise ValueError(f"Mark for '{subject}' must be a whole number, got {value!r}.")


def compute_aggregates(scores: Sequence[int]) -> Aggregates:
    """Sum the subject marks and divide by the fixed subject count."""
    if len(scores) != SUBJECT_COUNT:
        raise ValueError(f"Expected {SUBJECT_COUNT} subject marks, got {len(scores)}.")

    total = sum(coerce_mark(subject, score) for subject, score in zip(SUBJECTS, scores))
    return Aggregates(total=total, percentage=total / SUBJECT_COUNT)


def settle_fees(total_fee: int, fee_paid: int) -> FeeStatus:
    """Clamp fee_paid into [0, total_fee] and derive the remaining balance."""
    total_fee = max(0, int(total_fee))
    fee_paid = min(max(0, int(fee_paid)), total_fee)
    return FeeStatus(total_fee=total_fee, fee_paid=fee_paid, fee_left=total_fee - fee_paid)


def validate_scores(scores: Sequence[int], max_score: int = MAX_SCORE) -> None:
    """Raise ScoreRangeError if any mark is outside [0, max_score]."""
    for subject, score in zip(SUBJECTS, scores):
        if score < 0 or score > max_score:
            raise ScoreRangeError(
                f"Mark for '{subject}' must be in range 0~{max_score}, got {score}."
            )
