# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Round-number pattern detection.

Manually fabricated amounts often look "too clean": 5000, 9999, 7777, 30000.
Each transaction amount is rounded to an integer and its magnitude is tested
against an ordered list of patterns. A transaction is reported once per
matching pattern, so 5000 (ends in 000 and is a digit followed by zeros)
produces two flags.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .models import Transaction
from .stats import round_half_up

Risk = Literal["medium", "high"]


@dataclass(frozen=True)
class RoundNumberPattern:
    """A named pattern tested against the integer magnitude of an amount."""

    name: str
    regex: re.Pattern[str]
    risk: Risk


PATTERNS: tuple[RoundNumberPattern, ...] = (
    RoundNumberPattern("ends with three zeros", re.compile(r"000$"), "medium"),
    RoundNumberPattern("ends with three nines", re.compile(r"999$"), "high"),
    RoundNumberPattern("repeated digit", re.compile(r"^(\d)\1+$"), "high"),
    RoundNumberPattern("single digit followed by zeros", re.compile(r"^[1-9]0+$"), "medium"),
)


@dataclass(frozen=True)
class RoundNumberFlag:
    """One pattern match for one transaction."""

    id: str
    amount: float
    pattern: str
    risk: Risk


@dataclass(frozen=True)
class RoundNumberResult:
    """
    Attributes:
        flags: One entry per (transaction, pattern) match.
        total_suspicious: Number of flags.
        percentage_suspicious: Flags per transaction, in percent (2 decimals).
    """

    flags: tuple[RoundNumberFlag, ...]
    total_suspicious: int
    percentage_suspicious: float


def detect_round_number_patterns(
    transactions: Sequence[Transaction],
) -> RoundNumberResult:
    """Flag transactions whose amount matches a fabricated-looking pattern."""
    flags: list[RoundNumberFlag] = []

    for trans in transactions:
        digits = str(round_half_up(abs(trans.amount)))
        for pattern in PATTERNS:
            if pattern.regex.search(digits):
                flags.append(
                    RoundNumberFlag(
                        id=trans.id,
                        amount=trans.amount,
                        pattern=pattern.name,
                        risk=pattern.risk,
                    )
                )

    percentage = len(flags) / len(transactions) * 100 if transactions else 0.0

    return RoundNumberResult(
        flags=tuple(flags),
        total_suspicious=len(flags),
        percentage_suspicious=round(percentage, 2),
    )
