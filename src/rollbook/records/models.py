"""Student record entity."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any

from .aggregates import SUBJECTS, coerce_mark, compute_aggregates, settle_fees


@dataclass(frozen=True)
class StudentRecord:
    """Immutable student record.

    ``total``, ``percentage`` and ``fee_left`` are derived on construction and
    cannot be passed in. Fee inputs are clamped so that
    ``0 <= fee_paid <= total_fee`` always holds.
    """

    roll: int
    name: str
    phone: str = ""
    address: str = ""
    dsa: int = 0
    os: int = 0
    dbms: int = 0
    cn: int = 0
    total_fee: int = 0
    fee_paid: int = 0

    total: int = field(init=False)
    percentage: float = field(init=False)
    fee_left: int = field(init=False)

    def __post_init__(self) -> None:
        for subject in SUBJECTS:
            object.__setattr__(self, subject, coerce_mark(subject, getattr(self, subject)))
        aggregates = compute_aggregates(self.scores)
        fees = settle_fees(self.total_fee, self.fee_paid)

        object.__setattr__(self, "roll", int(self.roll))
        object.__setattr__(self, "total", aggregates.total)
        object.__setattr__(self, "percentage", aggregates.percentage)
        object.__setattr__(self, "total_fee", fees.total_fee)
        object.__setattr__(self, "fee_paid", fees.fee_paid)
        object.__setattr__(self, "fee_left", fees.fee_left)

    @property
    def scores(self) -> tuple[int, int, int, int]:
        """Subject marks in subject order."""
        return (self.dsa, self.os, self.dbms, self.cn)

    def with_changes(self, **changes: Any) -> StudentRecord:
        """Return a copy with input fields replaced and aggregates recomputed."""
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        """Convert record, including derived fields, to a dictionary."""
        return asdict(self)
