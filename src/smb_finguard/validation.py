# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Input validation helpers for SMB FinGuard.

The analyzers degrade gracefully on small or empty inputs, but malformed
numbers (NaN, infinities, negative balance figures) are contract violations
by the caller. They are rejected early with an InputValidationError that
names the offending field.
"""

import math
from collections.abc import Iterable


class InputValidationError(ValueError):
    """
    Raised when an input record or series violates the engine contract.

    Attributes:
        field: Name of the offending field (e.g. 'amount', 'values[3]').
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


def require_finite(value: float, field: str) -> float:
    """Return ``value`` as a float, or raise if it is not a finite number."""
    if isinstance(value, bool):
        raise InputValidationError(field, f"expected a number, got {value!r}")

    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InputValidationError(field, f"expected a number, got {value!r}") from exc

    if not math.isfinite(number):
        raise InputValidationError(field, f"expected a finite number, got {value!r}")

    return number


def require_non_negative(value: float, field: str) -> float:
    """Return ``value`` as a finite float, or raise if it is negative."""
    number = require_finite(value, field)
    if number < 0:
        raise InputValidationError(field, f"expected a non-negative number, got {value!r}")
    return number


def require_positive(value: float, field: str) -> float:
    """Return ``value`` as a finite float, or raise if it is not > 0."""
    number = require_finite(value, field)
    if number <= 0:
        raise InputValidationError(field, f"expected a positive number, got {value!r}")
    return number


def finite_series(values: Iterable[float], field: str) -> list[float]:
    """
    Validate a numeric series and return it as a list of floats.

    Each element is checked individually so that the error message points
    at the exact position (e.g. ``amounts[12]``).
    """
    return [require_finite(v, f"{field}[{i}]") for i, v in enumerate(values)]
