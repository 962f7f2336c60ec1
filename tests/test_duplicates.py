from datetime import datetime, timedelta

import pytest

from smb_finguard.duplicates import detect_duplicates
from smb_finguard.models import Transaction
from smb_finguard.validation import InputValidationError

BASE = datetime(2025, 3, 10, 9, 0)


def _tx(tid: str, amount: float, minutes: float, actor: str = "emp-1") -> Transaction:
    return Transaction(
        id=tid,
        amount=amount,
        date=BASE + timedelta(minutes=minutes),
        actor_id=actor,
        description=f"payment {tid}",
    )


def test_same_amount_fifty_minutes_apart_is_high_risk() -> None:
    """Two identical postings within the hour form one high-risk group."""
    groups = detect_duplicates([_tx("A", 1500.0, 0), _tx("B", 1500.0, 50)])

    assert len(groups) == 1
    group = groups[0]
    assert group.id == "A"
    assert group.count == 2
    assert group.risk == "high"
    assert group.actor_id == "emp-1"
    assert group.description == "payment A"


@pytest.mark.parametrize(
    "gap_minutes, expected_risk",
    [(5 * 60, "medium"), (13 * 60, "low"), (24 * 60, "low")],
)
def test_risk_depends_on_time_gap(gap_minutes: float, expected_risk: str) -> None:
    groups = detect_duplicates([_tx("A", 250.0, 0), _tx("B", 250.0, gap_minutes)])

    assert [g.risk for g in groups] == [expected_risk]


def test_outside_window_or_tolerance_is_not_a_duplicate() -> None:
    assert detect_duplicates([_tx("A", 250.0, 0), _tx("B", 250.0, 25 * 60)]) == ()
    assert detect_duplicates([_tx("A", 250.0, 0), _tx("B", 250.02, 10)]) == ()


def test_amounts_within_tolerance_match() -> None:
    groups = detect_duplicates([_tx("A", 250.0, 0), _tx("B", 250.005, 10)])

    assert len(groups) == 1


def test_custom_window_and_tolerance() -> None:
    transactions = [_tx("A", 100.0, 0), _tx("B", 101.0, 3 * 60)]

    assert detect_duplicates(transactions) == ()
    groups = detect_duplicates(transactions, tolerance=2.0, window_hours=4)
    assert len(groups) == 1
    assert groups[0].risk == "medium"


def test_repeated_postings_escalate_to_high_risk() -> None:
    """A transaction matched by three later postings counts four occurrences."""
    transactions = [
        _tx("A", 900.0, 0),
        _tx("B", 900.0, 120),
        _tx("C", 900.0, 240),
        _tx("D", 900.0, 360),
    ]

    groups = detect_duplicates(transactions)

    by_id = {g.id: g for g in groups}
    assert list(by_id) == ["A", "B", "C"]
    assert (by_id["A"].count, by_id["A"].risk) == (4, "high")
    assert (by_id["B"].count, by_id["B"].risk) == (3, "medium")
    assert (by_id["C"].count, by_id["C"].risk) == (2, "medium")


def test_unrelated_amounts_form_separate_groups() -> None:
    transactions = [
        _tx("A", 100.0, 0),
        _tx("B", 7000.0, 5),
        _tx("C", 100.0, 10),
        _tx("D", 7000.0, 15),
    ]

    groups = detect_duplicates(transactions)

    assert [g.id for g in groups] == ["A", "B"]


def test_missing_actor_is_grouped_as_unknown() -> None:
    transactions = [
        Transaction(id="A", amount=42.0, date=BASE),
        Transaction(id="B", amount=42.0, date=BASE + timedelta(minutes=1)),
    ]

    groups = detect_duplicates(transactions)

    assert len(groups) == 1
    assert groups[0].actor_id is None


def test_empty_input_has_no_duplicates() -> None:
    assert detect_duplicates([]) == ()


def test_negative_tolerance_is_rejected() -> None:
    with pytest.raises(InputValidationError):
        detect_duplicates([], tolerance=-0.01)


def test_half_amounts_round_up_into_the_group_key() -> None:
    """2.50 and 3.20 both key to 3, so their groups merge ahead of 8.00."""
    transactions = [
        _tx("A", 2.5, 0),
        _tx("B", 8.0, 1),
        _tx("C", 2.5, 2),
        _tx("D", 8.0, 3),
        _tx("E", 3.2, 4),
        _tx("F", 3.2, 5),
    ]

    groups = detect_duplicates(transactions)

    assert [g.id for g in groups] == ["A", "E", "B"]
