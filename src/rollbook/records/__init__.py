"""Student records, derived aggregates and roster loading."""

from .aggregates import (
    SUBJECT_COUNT,
    SUBJECTS,
    Aggregates,
    FeeStatus,
    ScoreRangeError,
    coerce_mark,
    compute_aggregates,
    settle_fees,
    validate_scores,
)
from .loader import RosterLoader, RosterValidationError
from .models import StudentRecord

__all__ = [
    "SUBJECTS",
    "SUBJECT_COUNT",
    "Aggregates",
    "FeeStatus",
    "RosterLoader",
    "RosterValidationError",
    "ScoreRangeError",
    "StudentRecord",
    "coerce_mark",
    "compute_aggregates",
    "settle_fees",
    "validate_scores",
]
