# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""Early-warning indicators computed from the period operating figures."""

from dataclasses import dataclass
from typing import Literal

from .models import OperatingFigures

IndicatorType = Literal[
    "HIGH_EXPENSE_RATIO",
    "LOW_LIQUIDITY",
    "HIGH_COST_GROWTH",
    "NEGATIVE_GROWTH",
]
Severity = Literal["warning", "danger", "critical"]


@dataclass(frozen=True)
class WarningIndicator:
    """A triggered indicator, with the measured value and its threshold."""

    type: IndicatorType
    message: str
    severity: Severity
    value: float
    threshold: float


def check_warning_indicators(figures: OperatingFigures) -> tuple[WarningIndicator, ...]:
    """
    Evaluate the early-warning indicators.

    - expenses above 80% of revenue (critical above 90%); a period without
      revenue counts as 100%,
    - cash covering less than two months of expenses (critical below one),
    - expenses growing faster than a non-negative revenue growth (danger
      when the gap exceeds 10 points),
    - shrinking revenue (critical below -10%).
    """
    warnings: list[WarningIndicator] = []

    if figures.total_revenue > 0:
        expense_ratio = figures.total_expenses / figures.total_revenue * 100
    else:
        expense_ratio = 100.0
    if expense_ratio > 80:
        warnings.append(
            WarningIndicator(
                type="HIGH_EXPENSE_RATIO",
                message=f"Expenses exceed {expense_ratio:.1f}% of revenue",
                severity="critical" if expense_ratio > 90 else "danger",
                value=round(expense_ratio, 2),
                threshold=80.0,
            )
        )

    if figures.monthly_expenses > 0:
        months_of_cash = figures.liquidity / figures.monthly_expenses
    else:
        months_of_cash = 0.0
    if months_of_cash < 2:
        warnings.append(
            WarningIndicator(
                type="LOW_LIQUIDITY",
                message=f"Cash covers only {months_of_cash:.1f} month(s) of expenses",
                severity="critical" if months_of_cash < 1 else "danger",
                value=round(months_of_cash, 2),
                threshold=2.0,
            )
        )

    revenue_growth = figures.revenue_growth
    expense_growth = figures.expense_growth
    if expense_growth > revenue_growth and revenue_growth >= 0:
        gap = expense_growth - revenue_growth
        warnings.append(
            WarningIndicator(
                type="HIGH_COST_GROWTH",
                message=(
                    f"Expense growth ({expense_growth:.1f}%) exceeds "
                    f"revenue growth ({revenue_growth:.1f}%)"
                ),
                severity="danger" if gap > 10 else "warning",
                value=round(gap, 2),
                threshold=0.0,
            )
        )

    if revenue_growth < 0:
        warnings.append(
            WarningIndicator(
                type="NEGATIVE_GROWTH",
                message=f"Revenue decreased by {abs(revenue_growth):.1f}%",
                severity="critical" if revenue_growth < -10 else "danger",
                value=round(revenue_growth, 2),
                threshold=0.0,
            )
        )

    return tuple(warnings)
