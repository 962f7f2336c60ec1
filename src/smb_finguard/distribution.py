# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
First-digit distribution analysis (Benford's Law).

Naturally occurring amounts follow a logarithmic leading-digit distribution:
about 30% of them start with a 1 and fewer than 5% start with a 9. Ledgers
containing fabricated figures tend to drift away from that shape.

The analyzer counts the leading digit of every amount whose magnitude is at
least 1, compares the histogram against the Newcomb-Benford distribution and
computes a chi-square goodness-of-fit statistic (8 degrees of freedom). The
statistic is mapped onto three fixed risk tiers:

    chi-square > 15.51  -> high   (anomaly, 95% critical value)
    chi-square > 11.07  -> medium
    otherwise           -> low

Samples with fewer than 100 amounts are too small for a reliable test and
return a neutral "sample too small" result instead.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from .validation import finite_series

RiskLevel = Literal["low", "medium", "high"]

# Expected share of leading digits 1..9.
BENFORD_DISTRIBUTION: tuple[float, ...] = (
    0.301,
    0.176,
    0.125,
    0.097,
    0.079,
    0.067,
    0.058,
    0.051,
    0.046,
)

MIN_SAMPLE_SIZE = 100
HIGH_RISK_CHI_SQUARE = 15.51
MEDIUM_RISK_CHI_SQUARE = 11.07

MESSAGE_SAMPLE_TOO_SMALL = "Sample too small for a reliable first-digit analysis."
MESSAGE_HIGH = "Deviation above 15.51: high likelihood of manipulated figures."
MESSAGE_MEDIUM = "Deviation between 11.07 and 15.51: review recommended."
MESSAGE_LOW = "Deviation below 11.07: consistent with natural data."


@dataclass(frozen=True)
class DistributionResult:
    """
    Outcome of the first-digit test.

    Attributes:
        chi_square: Chi-square statistic (2 decimals).
        is_anomaly: True when the statistic exceeds the high-risk threshold.
        distribution: Observed share of digits 1..9 (3 decimals), empty when
            the sample is too small.
        expected_distribution: Benford shares of digits 1..9.
        deviations: Per-digit absolute deviation in percentage points
            (2 decimals), empty when the sample is too small.
        risk_level: 'low', 'medium' or 'high'.
        message: Human-readable interpretation of the risk level.
        sample_size: Number of amounts whose leading digit was counted.
    """

    chi_square: float
    is_anomaly: bool
    distribution: tuple[float, ...]
    expected_distribution: tuple[float, ...]
    deviations: tuple[float, ...]
    risk_level: RiskLevel
    message: str
    sample_size: int


def leading_digit(value: float) -> int:
    """
    Return the leading decimal digit of ``|value|``, or 0 when ``|value| < 1``.

    The integer part is used so that, for instance, 9.99 yields 9 (and not 1,
    as a rounded scientific notation would).
    """
    magnitude = abs(value)
    if magnitude < 1:
        return 0
    return int(str(int(magnitude))[0])


def _too_small(sample_size: int) -> DistributionResult:
    return DistributionResult(
        chi_square=0.0,
        is_anomaly=False,
        distribution=(),
        expected_distribution=BENFORD_DISTRIBUTION,
        deviations=(),
        risk_level="low",
        message=MESSAGE_SAMPLE_TOO_SMALL,
        sample_size=sample_size,
    )


def analyze_distribution(amounts: Iterable[float]) -> DistributionResult:
    """
    Test a series of transaction amounts against Benford's Law.

    Args:
        amounts: Signed transaction amounts. Magnitudes below 1 are ignored
            because they carry no leading digit in 1..9.

    Returns:
        A DistributionResult. Fewer than 100 amounts (or no amount with a
        magnitude of at least 1) yields a neutral low-risk result.

    Raises:
        InputValidationError: if an amount is not a finite number.
    """
    values = finite_series(amounts, "amounts")
    if len(values) < MIN_SAMPLE_SIZE:
        return _too_small(0)

    counts = [0] * 9
    for value in values:
        digit = leading_digit(value)
        if digit:
            counts[digit - 1] += 1

    total = sum(counts)
    if total == 0:
        return _too_small(0)

    chi_square = 0.0
    distribution: list[float] = []
    deviations: list[float] = []
    for observed, expected_share in zip(counts, BENFORD_DISTRIBUTION):
        expected = expected_share * total
        chi_square += (observed - expected) ** 2 / expected

        share = observed / total
        distribution.append(round(share, 3))
        deviations.append(round(abs(share - expected_share) * 100, 2))

    risk_level: RiskLevel
    if chi_square > HIGH_RISK_CHI_SQUARE:
        risk_level, message = "high", MESSAGE_HIGH
    elif chi_square > MEDIUM_RISK_CHI_SQUARE:
        risk_level, message = "medium", MESSAGE_MEDIUM
    else:
        risk_level, message = "low", MESSAGE_LOW

    return DistributionResult(
        chi_square=round(chi_square, 2),
        is_anomaly=chi_square > HIGH_RISK_CHI_SQUARE,
        distribution=tuple(distribution),
        expected_distribution=BENFORD_DISTRIBUTION,
        deviations=tuple(deviations),
        risk_level=risk_level,
        message=message,
        sample_size=total,
    )
