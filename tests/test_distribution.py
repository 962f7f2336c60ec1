import math

import pytest

from smb_finguard.distribution import (
    BENFORD_DISTRIBUTION,
    MESSAGE_LOW,
    MESSAGE_SAMPLE_TOO_SMALL,
    analyze_distribution,
    leading_digit,
)
from smb_finguard.validation import InputValidationError

# Observed counts of digits 1..9 matching Benford's shares on 1000 amounts.
BENFORD_COUNTS = [301, 176, 125, 97, 79, 67, 58, 51, 46]


def _amounts_from_counts(counts: list[int]) -> list[float]:
    """Build amounts whose leading digits follow the given counts."""
    amounts: list[float] = []
    for digit, count in enumerate(counts, start=1):
        amounts.extend(float(digit * 100 + 17) for _ in range(count))
    return amounts


def test_benford_shares_sum_to_one() -> None:
    assert sum(BENFORD_DISTRIBUTION) == pytest.approx(1.0, abs=1e-9)


@pytest.mark.parametrize(
    "value, expected",
    [(9.99, 9), (1234.5, 1), (-4321.0, 4), (0.5, 0), (0.0, 0), (1.0, 1)],
)
def test_leading_digit(value: float, expected: int) -> None:
    assert leading_digit(value) == expected


def test_uniform_digits_are_high_risk() -> None:
    """Every digit appearing equally often is far from Benford's Law."""
    result = analyze_distribution(_amounts_from_counts([100] * 9))

    assert result.risk_level == "high"
    assert result.is_anomaly is True
    assert result.chi_square > 15.51
    assert result.sample_size == 900
    assert result.distribution[0] == pytest.approx(0.111)


def test_benford_matched_counts_are_low_risk() -> None:
    result = analyze_distribution(_amounts_from_counts(BENFORD_COUNTS))

    assert result.chi_square == pytest.approx(0.0, abs=0.01)
    assert result.risk_level == "low"
    assert result.is_anomaly is False
    assert result.message == MESSAGE_LOW
    assert result.distribution == pytest.approx(BENFORD_DISTRIBUTION)
    assert all(d == pytest.approx(0.0, abs=0.01) for d in result.deviations)


def test_moderate_deviation_is_medium_risk() -> None:
    """Moving 23 amounts from digit 1 to digit 9 gives a chi-square near 13."""
    counts = list(BENFORD_COUNTS)
    counts[0] -= 23
    counts[8] += 23

    result = analyze_distribution(_amounts_from_counts(counts))

    assert 11.07 < result.chi_square <= 15.51
    assert result.risk_level == "medium"
    assert result.is_anomaly is False


def test_small_sample_returns_neutral_result() -> None:
    result = analyze_distribution([123.0] * 99)

    assert result.risk_level == "low"
    assert result.chi_square == 0.0
    assert result.message == MESSAGE_SAMPLE_TOO_SMALL
    assert result.distribution == ()
    assert result.sample_size == 0


def test_amounts_below_one_carry_no_digit() -> None:
    """A large sample of sub-unit amounts has nothing to test."""
    result = analyze_distribution([0.25] * 150)

    assert result.message == MESSAGE_SAMPLE_TOO_SMALL
    assert result.risk_level == "low"


def test_negative_amounts_use_their_magnitude() -> None:
    positive = analyze_distribution(_amounts_from_counts(BENFORD_COUNTS))
    negative = analyze_distribution([-a for a in _amounts_from_counts(BENFORD_COUNTS)])

    assert negative == positive


def test_non_finite_amount_is_rejected() -> None:
    amounts = [100.0] * 120
    amounts[5] = math.nan

    with pytest.raises(InputValidationError) as excinfo:
        analyze_distribution(amounts)

    assert excinfo.value.field == "amounts[5]"
