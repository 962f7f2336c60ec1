# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Duplicate transaction detection.

Two transactions are considered candidate duplicates when their amounts
differ by at most ``tolerance`` and their timestamps are at most
``window_hours`` apart. Matches are grouped by the rounded amount and the
actor of the earlier transaction, so that repeated postings of the same
payment by the same person end up in a single group.

Risk grading:

- the first match of a transaction sets the risk from the time gap
  (< 1 hour: high, < 12 hours: medium, otherwise low),
- each further match increments the count, and a transaction matched more
  than three times is always high risk.

Scaling note
------------
Every transaction is compared with every later one, which is quadratic in
the number of transactions. This is fine for per-period batches (hundreds
or a few thousand records). Larger volumes would call for sorting by amount
and sliding a time window over each amount bucket; the observable output
would stay the same.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from .models import Transaction
from .stats import round_half_up
from .validation import require_non_negative

Risk = Literal["low", "medium", "high"]

DEFAULT_TOLERANCE = 0.01
DEFAULT_WINDOW_HOURS = 24.0
UNKNOWN_ACTOR = "unknown"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A transaction that has at least one near-identical sibling.

    Attributes:
        id: Identifier of the earlier transaction of the matching pairs.
        amount: Amount of that transaction.
        date: Timestamp of that transaction.
        actor_id: Actor of that transaction, if known.
        description: Description of that transaction, if any.
        count: Number of occurrences (the transaction itself included).
        risk: 'low', 'medium' or 'high'.
    """

    id: str
    amount: float
    date: datetime
    actor_id: Optional[str]
    description: Optional[str]
    count: int
    risk: Risk


def _risk_from_gap(hours: float) -> Risk:
    if hours < 1:
        return "high"
    if hours < 12:
        return "medium"
    return "low"


def detect_duplicates(
    transactions: Sequence[Transaction],
    tolerance: float = DEFAULT_TOLERANCE,
    window_hours: float = DEFAULT_WINDOW_HOURS,
) -> tuple[DuplicateGroup, ...]:
    """
    Find near-identical transactions clustered in time.

    Args:
        transactions: Transactions of the analyzed period, in input order.
        tolerance: Maximum absolute amount difference (currency units).
        window_hours: Maximum time gap, in hours.

    Returns:
        The duplicate records, grouped by (rounded amount, actor) and
        flattened in first-seen order. Empty when nothing matches.

    Raises:
        InputValidationError: if tolerance or window_hours is negative or
            not finite.
    """
    tolerance = require_non_negative(tolerance, "tolerance")
    window_hours = require_non_negative(window_hours, "window_hours")

    # (rounded amount, actor) -> transaction id -> [record fields, count, risk]
    groups: dict[tuple[int, str], dict[str, list]] = {}

    for index, trans in enumerate(transactions):
        for other in transactions[index + 1 :]:
            gap_hours = abs((trans.date - other.date).total_seconds()) / 3600
            if gap_hours > window_hours:
                continue
            if abs(trans.amount - other.amount) > tolerance:
                continue

            key = (round_half_up(trans.amount), trans.actor_id or UNKNOWN_ACTOR)
            members = groups.setdefault(key, {})
            entry = members.get(trans.id)

            if entry is None:
                members[trans.id] = [trans, 2, _risk_from_gap(gap_hours)]
            else:
                entry[1] += 1
                if entry[1] > 3:
                    entry[2] = "high"

    return tuple(
        DuplicateGroup(
            id=trans.id,
            amount=trans.amount,
            date=trans.date,
            actor_id=trans.actor_id,
            description=trans.description,
            count=count,
            risk=risk,
        )
        for members in groups.values()
        for trans, count, risk in members.values()
    )
