# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Computation of financial ratios for SMB FinGuard.

This module provides three families of ratios:

1. Liquidity ratios
   -----------------
   Short-term debt-paying ability, computed from a BalanceSnapshot:

       current ratio = current assets / current liabilities
       quick ratio   = (current assets - inventory) / current liabilities
       cash ratio    = cash / current liabilities

   Each ratio is returned as a RatioResult with a health status:

       current ratio: healthy in [1.5, 3.0], warning in [1.0, 1.5) or above
                      3.0 (excess liquidity left idle), critical below 1.0
       quick ratio:   healthy >= 1.0, warning >= 0.7, else critical
       cash ratio:    healthy >= 0.2, warning >= 0.1, else critical

2. Efficiency ratios
   ------------------
   How quickly inventory and receivables turn into cash:

       inventory turnover      = COGS / average inventory
       days inventory (DIO)    = 365 / inventory turnover
       receivables turnover    = credit sales / average receivables
       days receivables (DSO)  = 365 / receivables turnover
       asset turnover          = revenue / average total assets
       operating cycle         = DIO + DSO

   A zero turnover is reported as 365 days (stagnant stock or receivables).

3. Performance ratios
   -------------------
   Payroll and margin indicators computed from OperatingFigures (cost
   ratio, profit margin, staff turnover, average employee cost).

Zero denominators never raise: the ratio is reported as 0. Ratios are
rounded to 2 decimals and day counts to whole days, for display stability.
"""

from dataclasses import dataclass
from typing import Literal

from .models import BalanceSnapshot, OperatingFigures
from .stats import round_half_up

Status = Literal["healthy", "warning", "critical"]

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class RatioResult:
    """
    Computed ratio with its health assessment.

    Attributes:
        key: Internal identifier (e.g. 'current_ratio').
        label: Human-readable label for display (e.g. 'Current ratio').
        value: Numeric value rounded to 2 decimals.
        unit: Unit hint ('ratio', 'percent', 'days', 'amount').
        status: 'healthy', 'warning' or 'critical'.
        message: Human-readable interpretation of the status.
    """

    key: str
    label: str
    value: float
    unit: str
    status: Status
    message: str


@dataclass(frozen=True)
class LiquidityResult:
    """Current, quick and cash ratios of a balance snapshot."""

    current_ratio: RatioResult
    quick_ratio: RatioResult
    cash_ratio: RatioResult


@dataclass(frozen=True)
class EfficiencyResult:
    """
    Attributes:
        inventory_turnover: COGS / average inventory (2 decimals).
        days_inventory_outstanding: Whole days of stock on hand.
        receivables_turnover: Credit sales / average receivables (2 decimals).
        days_receivables_outstanding: Whole days to collect receivables.
        asset_turnover: Revenue / average total assets (2 decimals).
        operating_cycle: DIO + DSO, in whole days.
    """

    inventory_turnover: float
    days_inventory_outstanding: int
    receivables_turnover: float
    days_receivables_outstanding: int
    asset_turnover: float
    operating_cycle: int


@dataclass(frozen=True)
class PerformanceResult:
    """
    Attributes:
        cost_ratio: Salaries as a percentage of revenue.
        profit_margin: (revenue - expenses) as a percentage of revenue.
        turnover_rate: Leavers as a percentage of the average headcount.
        average_employee_cost: Expenses per employee.
        salary_to_revenue: Salaries as a percentage of revenue.
    """

    cost_ratio: float
    profit_margin: float
    turnover_rate: float
    average_employee_cost: float
    salary_to_revenue: float


def _safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is not positive."""
    return numerator / denominator if denominator > 0 else 0.0


def _days(turnover: float) -> float:
    return DAYS_PER_YEAR / turnover if turnover > 0 else float(DAYS_PER_YEAR)


def _current_ratio(value: float) -> RatioResult:
    status: Status
    if 1.5 <= value <= 3.0:
        status, message = "healthy", "Healthy liquidity."
    elif 1.0 <= value < 1.5:
        status, message = "warning", "Liquidity is relatively low."
    elif value < 1.0:
        status, message = "critical", "Critical liquidity shortfall."
    else:
        status, message = "warning", "Excess liquidity left unused."

    return RatioResult(
        key="current_ratio",
        label="Current ratio",
        value=round(value, 2),
        unit="ratio",
        status=status,
        message=message,
    )


def _quick_ratio(value: float) -> RatioResult:
    status: Status
    if value >= 1.0:
        status, message = "healthy", "Good ability to meet short-term obligations."
    elif value >= 0.7:
        status, message = "warning", "Limited ability to pay obligations quickly."
    else:
        status, message = "critical", "Difficulty meeting short-term obligations."

    return RatioResult(
        key="quick_ratio",
        label="Quick ratio",
        value=round(value, 2),
        unit="ratio",
        status=status,
        message=message,
    )


def _cash_ratio(value: float) -> RatioResult:
    status: Status
    if value >= 0.2:
        status, message = "healthy", "Sufficient cash."
    elif value >= 0.1:
        status, message = "warning", "Low cash."
    else:
        status, message = "critical", "Severe cash shortage."

    return RatioResult(
        key="cash_ratio",
        label="Cash ratio",
        value=round(value, 2),
        unit="ratio",
        status=status,
        message=message,
    )


def compute_liquidity_ratios(balance: BalanceSnapshot) -> LiquidityResult:
    """
    Compute the liquidity ratios of a balance snapshot.

    Statuses are assessed on the unrounded values; the reported values are
    rounded to 2 decimals. With no current liabilities every ratio is 0.
    """
    liabilities = balance.current_liabilities

    return LiquidityResult(
        current_ratio=_current_ratio(_safe_div(balance.current_assets, liabilities)),
        quick_ratio=_quick_ratio(
            _safe_div(balance.current_assets - balance.inventory, liabilities)
        ),
        cash_ratio=_cash_ratio(_safe_div(balance.cash, liabilities)),
    )


def compute_efficiency_ratios(balance: BalanceSnapshot) -> EfficiencyResult:
    """Compute turnover ratios and the operating cycle of a balance snapshot."""
    inventory_turnover = _safe_div(balance.cost_of_goods_sold, balance.average_inventory)
    receivables_turnover = _safe_div(balance.credit_sales, balance.average_receivables)
    asset_turnover = _safe_div(balance.revenue, balance.average_total_assets)

    dio = _days(inventory_turnover)
    dso = _days(receivables_turnover)

    return EfficiencyResult(
        inventory_turnover=round(inventory_turnover, 2),
        days_inventory_outstanding=round_half_up(dio),
        receivables_turnover=round(receivables_turnover, 2),
        days_receivables_outstanding=round_half_up(dso),
        asset_turnover=round(asset_turnover, 2),
        operating_cycle=round_half_up(dio + dso),
    )


def compute_performance_ratios(figures: OperatingFigures) -> PerformanceResult:
    """Compute payroll and margin ratios from the period totals."""
    revenue = figures.total_revenue

    return PerformanceResult(
        cost_ratio=round(_safe_div(figures.total_salaries, revenue) * 100, 2),
        profit_margin=round(
            _safe_div(revenue - figures.total_expenses, revenue) * 100, 2
        ),
        turnover_rate=round(
            _safe_div(figures.left_employees, figures.average_employee_count) * 100, 2
        ),
        average_employee_cost=round(
            _safe_div(figures.total_expenses, figures.employee_count), 2
        ),
        salary_to_revenue=round(_safe_div(figures.total_salaries, revenue) * 100, 2),
    )
