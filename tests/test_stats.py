import pytest

from smb_finguard.stats import population_stats, round_half_up


def test_population_stats() -> None:
    mean, std_dev = population_stats([2, 4, 4, 4, 5, 5, 7, 9])

    assert mean == pytest.approx(5.0)
    assert std_dev == pytest.approx(2.0)


def test_population_stats_of_empty_and_constant_series() -> None:
    assert population_stats([]) == (0.0, 0.0)
    assert population_stats([3.0, 3.0, 3.0]) == (3.0, 0.0)


@pytest.mark.parametrize(
    "value, expected",
    [(998.5, 999), (60.5, 61), (2.5, 3), (2.4999, 2), (0.0, 0), (-2.5, -2), (-2.6, -3)],
)
def test_round_half_up(value: float, expected: int) -> None:
    """Halves go up, as opposed to the built-in round (998.5 -> 998)."""
    assert round_half_up(value) == expected
