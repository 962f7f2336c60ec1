# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Short-horizon forecasting for SMB FinGuard.

This module provides three closed-form projections over a chronologically
ordered series (oldest first):

1. forecast(series)
   -----------------
   Ordinary least-squares line fitted on positions 1..n. The next period is
   the line evaluated at n + 1, floored at 0 (no negative financial
   forecast). The trend is 'increasing' for a slope above 0.01, 'decreasing'
   below -0.01 and 'stable' otherwise. Confidence is the coefficient of
   determination R², clamped to [0, 1].

   The result also carries risk factors:
   - high volatility: standard deviation of period-over-period changes above
     30% of the series mean,
   - accelerating decline: decreasing trend with a forecast below 80% of the
     mean of the last three values,
   - strong seasonality: seasonal factor more than 20% away from 1.0.

   The seasonal factor (12 points or more) is the value twelve periods back
   divided by the mean of all values but the last. It is a coarse
   approximation kept for compatibility, not a seasonal decomposition.

2. analyze_trend(series)
   ----------------------
   Average change, volatility and a naive next value (last + average change).

3. forecast_cash_flow(months, growth_factor)
   ------------------------------------------
   Three-month moving averages of revenue and expenses, projected with a
   growth rate, plus an emergency reserve of three months of expenses.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from statistics import fmean
from typing import Literal, Optional

from .models import MonthlyFigures
from .stats import population_stats, round_half_up
from .validation import finite_series, require_finite

Trend = Literal["increasing", "decreasing", "stable"]

SLOPE_EPSILON = 0.01
SEASONAL_PERIOD = 12
VOLATILITY_RISK_SHARE = 0.3
DECLINE_RISK_SHARE = 0.8
SEASONAL_RISK_DEVIATION = 0.2

RISK_HIGH_VOLATILITY = "High volatility in the data"
RISK_ACCELERATING_DECLINE = "Accelerating decline expected"
RISK_STRONG_SEASONALITY = "Strong seasonal effect"


@dataclass(frozen=True)
class ForecastResult:
    """
    Attributes:
        next_period: Forecast for the next period (>= 0, 2 decimals).
        trend: 'increasing', 'decreasing' or 'stable'.
        confidence: R² of the linear fit, in [0, 1] (4 decimals).
        confidence_pct: R² expressed as a whole percentage.
        slope: Slope of the fitted line (per period).
        intercept: Intercept of the fitted line.
        seasonal_factor: Coarse seasonal factor (1.0 below 12 points).
        risk_factors: Human-readable risk factors, possibly empty.
    """

    next_period: float
    trend: Trend
    confidence: float
    confidence_pct: int
    slope: float
    intercept: float
    seasonal_factor: float
    risk_factors: tuple[str, ...]


@dataclass(frozen=True)
class TrendAnalysis:
    """
    Attributes:
        trend: 'stable' when the average change is below half the volatility.
        average_change: Mean period-over-period change.
        volatility: Standard deviation of the period-over-period changes.
        forecast: Last value plus the average change.
    """

    trend: Trend
    average_change: float
    volatility: float
    forecast: float


@dataclass(frozen=True)
class CashFlowForecast:
    """
    Attributes:
        expected_monthly_expenses: Recent average expenses times growth.
        emergency_reserve: Three months of recent average expenses.
        growth_rate: Growth applied to the projections, in percent.
        projected_revenue: Recent average revenue times growth.
        projected_expenses: Same as expected_monthly_expenses.
        cash_flow: Projected revenue minus projected expenses.
    """

    expected_monthly_expenses: float
    emergency_reserve: float
    growth_rate: float
    projected_revenue: float
    projected_expenses: float
    cash_flow: float


def _changes(values: Sequence[float]) -> list[float]:
    return [b - a for a, b in zip(values, values[1:])]


def _volatility(changes: Sequence[float]) -> float:
    """Population standard deviation of the period-over-period changes."""
    return population_stats(changes)[1]


def _classify(slope: float) -> Trend:
    if slope > SLOPE_EPSILON:
        return "increasing"
    if slope < -SLOPE_EPSILON:
        return "decreasing"
    return "stable"


def seasonal_factor(values: Sequence[float]) -> float:
    """
    Value twelve periods back divided by the mean of all but the last value.

    Returns 1.0 for fewer than twelve points or when that mean is zero.
    """
    if len(values) < SEASONAL_PERIOD:
        return 1.0
    baseline = fmean(values[:-1])
    if baseline == 0:
        return 1.0
    return values[-SEASONAL_PERIOD] / baseline


def forecast(series: Iterable[float]) -> ForecastResult:
    """
    Forecast the next value of a series with a least-squares line.

    Args:
        series: Chronologically ordered values, oldest first.

    Returns:
        A ForecastResult. With fewer than two points the sole value (or 0)
        is returned with a 'stable' trend and a zero confidence.

    Raises:
        InputValidationError: if a value is not a finite number.
    """
    values = finite_series(series, "series")
    n = len(values)

    if n < 2:
        sole = values[0] if values else 0.0
        return ForecastResult(
            next_period=round(sole, 2),
            trend="stable",
            confidence=0.0,
            confidence_pct=0,
            slope=0.0,
            intercept=round(sole, 2),
            seasonal_factor=1.0,
            risk_factors=(),
        )

    xs = range(1, n + 1)
    sum_x = sum(xs)
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in zip(xs, values))
    sum_x2 = sum(x * x for x in xs)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    next_period = max(0.0, slope * (n + 1) + intercept)
    trend = _classify(slope)

    y_mean = sum_y / n
    total_ss = sum((y - y_mean) ** 2 for y in values)
    residual_ss = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, values))
    # a flat series is perfectly explained by a flat line
    r_squared = 1 - residual_ss / total_ss if total_ss > 0 else 1.0
    r_squared = min(1.0, max(0.0, r_squared))

    factor = seasonal_factor(values)

    risk_factors: list[str] = []
    if _volatility(_changes(values)) > y_mean * VOLATILITY_RISK_SHARE:
        risk_factors.append(RISK_HIGH_VOLATILITY)
    if trend == "decreasing" and next_period < fmean(values[-3:]) * DECLINE_RISK_SHARE:
        risk_factors.append(RISK_ACCELERATING_DECLINE)
    if abs(factor - 1) > SEASONAL_RISK_DEVIATION:
        risk_factors.append(RISK_STRONG_SEASONALITY)

    return ForecastResult(
        next_period=round(next_period, 2),
        trend=trend,
        confidence=round(r_squared, 4),
        confidence_pct=round_half_up(r_squared * 100),
        slope=round(slope, 4),
        intercept=round(intercept, 4),
        seasonal_factor=round(factor, 2),
        risk_factors=tuple(risk_factors),
    )


def analyze_trend(series: Iterable[float]) -> TrendAnalysis:
    """Summarize the period-over-period changes of a series."""
    values = finite_series(series, "series")
    if len(values) < 2:
        return TrendAnalysis(
            trend="stable",
            average_change=0.0,
            volatility=0.0,
            forecast=round(values[0], 2) if values else 0.0,
        )

    changes = _changes(values)
    average_change = fmean(changes)
    volatility = _volatility(changes)

    trend: Trend
    if abs(average_change) < volatility * 0.5:
        trend = "stable"
    elif average_change > 0:
        trend = "increasing"
    else:
        trend = "decreasing"

    return TrendAnalysis(
        trend=trend,
        average_change=round(average_change, 2),
        volatility=round(volatility, 2),
        forecast=round(values[-1] + average_change, 2),
    )


def forecast_cash_flow(
    months: Sequence[MonthlyFigures],
    growth_factor: float = 1.05,
) -> Optional[CashFlowForecast]:
    """
    Project next month's revenue, expenses and cash flow.

    The projection uses the three most recent months. When at least six
    months are available and the first three have a positive revenue mean,
    the growth factor is measured as (last-3 revenue mean) / (first-3
    revenue mean); otherwise ``growth_factor`` is applied.

    Returns:
        A CashFlowForecast, or None when fewer than three months are given.
    """
    growth = require_finite(growth_factor, "growth_factor")
    if len(months) < 3:
        return None

    recent = months[-3:]
    avg_revenue = fmean([m.revenue for m in recent])
    avg_expenses = fmean([m.expenses for m in recent])

    if len(months) >= 6:
        old_avg = fmean([m.revenue for m in months[:3]])
        if old_avg > 0:
            growth = avg_revenue / old_avg

    expected_expenses = avg_expenses * growth
    projected_revenue = avg_revenue * growth

    return CashFlowForecast(
        expected_monthly_expenses=round(expected_expenses, 2),
        emergency_reserve=round(avg_expenses * 3, 2),
        growth_rate=round((growth - 1) * 100, 2),
        projected_revenue=round(projected_revenue, 2),
        projected_expenses=round(expected_expenses, 2),
        cash_flow=round(projected_revenue - expected_expenses, 2),
    )
