# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Z-score outlier detection over a numeric series.

The series is summarized by its population mean and standard deviation.
Every value whose absolute z-score exceeds the threshold is flagged:

    z > 4.0  -> high
    z > 3.5  -> medium
    else     -> low

Note that with population statistics the largest reachable z-score of a
series of n values is sqrt(n - 1): short series cannot produce extreme
outliers whatever their spread.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from .stats import population_stats
from .validation import finite_series, require_positive

Severity = Literal["low", "medium", "high"]

DEFAULT_THRESHOLD = 3.0
MIN_VALUES = 3


@dataclass(frozen=True)
class AnomalyFlag:
    """
    Attributes:
        value: The flagged value.
        z_score: Absolute z-score (2 decimals).
        severity: 'low', 'medium' or 'high'.
        description: Human-readable summary embedding the z-score.
    """

    value: float
    z_score: float
    severity: Severity
    description: str


def detect_anomalies(
    values: Iterable[float],
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[AnomalyFlag, ...]:
    """
    Flag the values lying more than ``threshold`` standard deviations away
    from the mean.

    Fewer than three values yield an empty tuple. A constant series has a
    zero standard deviation and therefore no outlier.

    Raises:
        InputValidationError: if a value is not finite or the threshold is
            not a positive number.
    """
    threshold = require_positive(threshold, "threshold")
    series = finite_series(values, "values")
    if len(series) < MIN_VALUES:
        return ()

    mean, std_dev = population_stats(series)

    flags: list[AnomalyFlag] = []
    for value in series:
        z = abs(value - mean) / std_dev if std_dev > 0 else 0.0
        if z <= threshold:
            continue

        severity: Severity
        if z > 4:
            severity, label = "high", "Extreme outlier"
        elif z > 3.5:
            severity, label = "medium", "Outlier"
        else:
            severity, label = "low", "Notable deviation"

        flags.append(
            AnomalyFlag(
                value=value,
                z_score=round(z, 2),
                severity=severity,
                description=f"{label} (z={z:.2f})",
            )
        )

    return tuple(flags)
