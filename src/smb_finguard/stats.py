# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Numeric helpers shared by the analyzers.

- population mean and standard deviation (z-scores, volatility),
- half-up rounding to whole numbers (day counts, amount magnitudes).
"""

import math
import statistics
from collections.abc import Sequence


def population_stats(values: Sequence[float]) -> tuple[float, float]:
    """
    Return the mean and the population standard deviation of ``values``.

    An empty sequence yields ``(0.0, 0.0)``.
    """
    if not values:
        return 0.0, 0.0
    mean = statistics.fmean(values)
    return mean, statistics.pstdev(values, mu=mean)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (998.5 -> 999, 60.5 -> 61).

    The built-in ``round`` sends halves to the nearest even integer, which
    would move amounts such as 998.50 out of the repeated-digit patterns.
    """
    return math.floor(value + 0.5)
