from __future__ import annotations

import pytest

from rollbook.records import (
    SUBJECT_COUNT,
    ScoreRangeError,
    coerce_mark,
    compute_aggregates,
    settle_fees,
    validate_scores,
)


def test_total_and_percentage_from_marks():
    aggregates = compute_aggregates([92, 88, 95, 90])

    assert aggregates.total == 365
    assert aggregates.percentage == 365 / SUBJECT_COUNT


def test_out_of_range_marks_are_accepted_as_given():
    aggregates = compute_aggregates([120, -5, 0, 0])

    assert aggregates.total == 115


def test_wrong_number_of_marks_raises():
    with pytest.raises(ValueError, match="Expected 4 subject marks"):
        compute_aggregates([1, 2, 3])


@pytest.mark.parametrize(
    ("total_fee", "fee_paid", "expected"),
    [
        (1500, 500, (1500, 500, 1000)),
        (1500, 2000, (1500, 1500, 0)),
        (1500, -10, (1500, 0, 1500)),
        (-100, 50, (0, 0, 0)),
    ],
)
def test_settle_fees_clamps_paid_amount(total_fee, fee_paid, expected):
    status = settle_fees(total_fee, fee_paid)

    assert (status.total_fee, status.fee_paid, status.fee_left) == expected


def test_validate_scores_names_offending_subject():
    validate_scores([0, 50, 100, 75])

    with pytest.raises(ScoreRangeError, match="'dbms'"):
        validate_scores([10, 10, 101, 10])
    with pytest.raises(ScoreRangeError, match="0~40"):
        validate_scores([10, 10, 10, 41], max_score=40)


def test_coerce_mark_accepts_whole_numbers_only():
    assert coerce_mark("cn", 88) == 88
    assert coerce_mark("cn", 88.0) == 88

    with pytest.raises(ValueError, match="'cn' must be a whole number"):
        coerce_mark("cn", 88.25)
    with pytest.raises(ValueError, match="'cn' must be a whole number"):
        coerce_mark("cn", float("nan"))
