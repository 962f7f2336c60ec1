# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for SMB FinGuard.

This module turns the sections of an AnalysisReport into pandas DataFrames
with a stable column order, ready to be printed as console tables or
exported as CSV files by the CLI. It contains no analysis logic: every value
comes from the report as computed by the engine.

Each builder returns an empty DataFrame with the expected columns when the
section has no rows, so that callers never need to special-case emptiness.
"""

from typing import Optional

import pandas as pd

from .anomalies import AnomalyFlag
from .behavior import BehaviorProfile
from .compliance import ComplianceFinding
from .duplicates import DuplicateGroup
from .indicators import WarningIndicator
from .ratios import EfficiencyResult, LiquidityResult, PerformanceResult
from .recommendations import Recommendation
from .report import AnalysisReport
from .round_numbers import RoundNumberResult

RATIO_COLUMNS = ["key", "label", "value", "unit", "status", "message"]
DUPLICATE_COLUMNS = ["id", "date", "amount", "actor_id", "description", "count", "risk"]
ROUND_NUMBER_COLUMNS = ["id", "amount", "pattern", "risk"]
ANOMALY_COLUMNS = ["value", "z_score", "severity", "description"]
BEHAVIOR_COLUMNS = [
    "actor_id",
    "event_count",
    "risk_score",
    "unusual_activity",
    "patterns",
    "recommendations",
]
FINDING_COLUMNS = ["rule", "severity", "details", "action"]
WARNING_COLUMNS = ["type", "severity", "value", "threshold", "message"]
RECOMMENDATION_COLUMNS = [
    "priority",
    "category",
    "recommendation",
    "expected_impact",
    "implementation",
    "estimated_roi",
]


def _frame(rows: list[dict[str, object]], columns: list[str]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows)[columns]


def ratios_to_dataframe(
    liquidity: Optional[LiquidityResult],
    efficiency: Optional[EfficiencyResult],
    performance: Optional[PerformanceResult] = None,
    decimals: int = 2,
) -> pd.DataFrame:
    """
    Convert ratio results into a single DataFrame.

    The resulting DataFrame has the following columns:
        - key:     Internal ratio identifier (e.g. "current_ratio").
        - label:   Human-readable label to display.
        - value:   Numeric value, rounded to the requested number of decimals.
        - unit:    Unit hint ("ratio", "days", "percent", "amount").
        - status:  Health status for liquidity ratios, empty otherwise.
        - message: Interpretation of the status, empty otherwise.

    Liquidity ratios come first, then efficiency, then performance ratios.
    """
    rows: list[dict[str, object]] = []

    if liquidity is not None:
        for r in (liquidity.current_ratio, liquidity.quick_ratio, liquidity.cash_ratio):
            rows.append(
                {
                    "key": r.key,
                    "label": r.label,
                    "value": round(r.value, decimals),
                    "unit": r.unit,
                    "status": r.status,
                    "message": r.message,
                }
            )

    def _plain(key: str, label: str, value: float, unit: str) -> None:
        rows.append(
            {
                "key": key,
                "label": label,
                "value": round(value, decimals),
                "unit": unit,
                "status": "",
                "message": "",
            }
        )

    if efficiency is not None:
        _plain("inventory_turnover", "Inventory turnover", efficiency.inventory_turnover, "ratio")
        _plain(
            "days_inventory_outstanding",
            "Days inventory outstanding",
            efficiency.days_inventory_outstanding,
            "days",
        )
        _plain(
            "receivables_turnover",
            "Receivables turnover",
            efficiency.receivables_turnover,
            "ratio",
        )
        _plain(
            "days_receivables_outstanding",
            "Days receivables outstanding",
            efficiency.days_receivables_outstanding,
            "days",
        )
        _plain("asset_turnover", "Asset turnover", efficiency.asset_turnover, "ratio")
        _plain("operating_cycle", "Operating cycle", efficiency.operating_cycle, "days")

    if performance is not None:
        _plain("cost_ratio", "Cost ratio", performance.cost_ratio, "percent")
        _plain("profit_margin", "Profit margin", performance.profit_margin, "percent")
        _plain("turnover_rate", "Staff turnover rate", performance.turnover_rate, "percent")
        _plain(
            "average_employee_cost",
            "Average employee cost",
            performance.average_employee_cost,
            "amount",
        )
        _plain(
            "salary_to_revenue",
            "Salaries to revenue",
            performance.salary_to_revenue,
            "percent",
        )

    return _frame(rows, RATIO_COLUMNS)


def duplicates_to_dataframe(duplicates: tuple[DuplicateGroup, ...]) -> pd.DataFrame:
    """One row per duplicate record, in detection order."""
    rows = [
        {
            "id": d.id,
            "date": d.date.isoformat(),
            "amount": d.amount,
            "actor_id": d.actor_id or "",
            "description": d.description or "",
            "count": d.count,
            "risk": d.risk,
        }
        for d in duplicates
    ]
    return _frame(rows, DUPLICATE_COLUMNS)


def round_numbers_to_dataframe(result: RoundNumberResult) -> pd.DataFrame:
    rows = [
        {"id": f.id, "amount": f.amount, "pattern": f.pattern, "risk": f.risk}
        for f in result.flags
    ]
    return _frame(rows, ROUND_NUMBER_COLUMNS)


def anomalies_to_dataframe(anomalies: tuple[AnomalyFlag, ...]) -> pd.DataFrame:
    rows = [
        {
            "value": a.value,
            "z_score": a.z_score,
            "severity": a.severity,
            "description": a.description,
        }
        for a in anomalies
    ]
    return _frame(rows, ANOMALY_COLUMNS)


def behavior_to_dataframe(profiles: dict[str, BehaviorProfile]) -> pd.DataFrame:
    """
    One row per actor, riskiest first.

    Patterns and recommendations are joined with '; ' so that each actor
    fits on one line of a table or CSV file.
    """
    rows = [
        {
            "actor_id": p.actor_id,
            "event_count": p.event_count,
            "risk_score": p.risk_score,
            "unusual_activity": p.unusual_activity,
            "patterns": "; ".join(p.patterns),
            "recommendations": "; ".join(p.recommendations),
        }
        for p in profiles.values()
    ]
    df = _frame(rows, BEHAVIOR_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("risk_score", ascending=False, kind="stable").reset_index(
        drop=True
    )


def findings_to_dataframe(findings: tuple[ComplianceFinding, ...]) -> pd.DataFrame:
    rows = [
        {"rule": f.rule, "severity": f.severity, "details": f.details, "action": f.action}
        for f in findings
    ]
    return _frame(rows, FINDING_COLUMNS)


def warnings_to_dataframe(warnings: tuple[WarningIndicator, ...]) -> pd.DataFrame:
    rows = [
        {
            "type": w.type,
            "severity": w.severity,
            "value": w.value,
            "threshold": w.threshold,
            "message": w.message,
        }
        for w in warnings
    ]
    return _frame(rows, WARNING_COLUMNS)


def recommendations_to_dataframe(
    recommendations: tuple[Recommendation, ...],
) -> pd.DataFrame:
    """One row per recommendation, in priority order (already sorted)."""
    rows = [
        {
            "priority": r.priority,
            "category": r.category,
            "recommendation": r.recommendation,
            "expected_impact": r.expected_impact,
            "implementation": r.implementation,
            "estimated_roi": r.estimated_roi,
        }
        for r in recommendations
    ]
    return _frame(rows, RECOMMENDATION_COLUMNS)


def report_sections(report: AnalysisReport, decimals: int = 2) -> dict[str, pd.DataFrame]:
    """
    Build every table available in a report, keyed by section name.

    Sections whose analyzer did not run are omitted. Single-value results
    (first-digit test, forecast, trend, cash flow) are rendered as a
    two-column 'metric' / 'value' table.
    """
    sections: dict[str, pd.DataFrame] = {}

    if report.distribution is not None:
        d = report.distribution
        sections["distribution"] = pd.DataFrame(
            {
                "metric": ["chi_square", "risk_level", "is_anomaly", "sample_size", "message"],
                "value": [d.chi_square, d.risk_level, d.is_anomaly, d.sample_size, d.message],
            }
        )
    if report.duplicates is not None:
        sections["duplicates"] = duplicates_to_dataframe(report.duplicates)
    if report.round_numbers is not None:
        sections["round_numbers"] = round_numbers_to_dataframe(report.round_numbers)
    if report.anomalies is not None:
        sections["anomalies"] = anomalies_to_dataframe(report.anomalies)
    if any(r is not None for r in (report.liquidity, report.efficiency, report.performance)):
        sections["ratios"] = ratios_to_dataframe(
            report.liquidity, report.efficiency, report.performance, decimals=decimals
        )
    if report.forecast is not None:
        f = report.forecast
        sections["forecast"] = pd.DataFrame(
            {
                "metric": [
                    "next_period",
                    "trend",
                    "confidence_pct",
                    "seasonal_factor",
                    "risk_factors",
                ],
                "value": [
                    f.next_period,
                    f.trend,
                    f.confidence_pct,
                    f.seasonal_factor,
                    "; ".join(f.risk_factors),
                ],
            }
        )
    if report.trend is not None:
        t = report.trend
        sections["trend"] = pd.DataFrame(
            {
                "metric": ["trend", "average_change", "volatility", "forecast"],
                "value": [t.trend, t.average_change, t.volatility, t.forecast],
            }
        )
    if report.cash_flow is not None:
        c = report.cash_flow
        sections["cash_flow"] = pd.DataFrame(
            {
                "metric": [
                    "projected_revenue",
                    "projected_expenses",
                    "cash_flow",
                    "emergency_reserve",
                    "growth_rate",
                ],
                "value": [
                    c.projected_revenue,
                    c.projected_expenses,
                    c.cash_flow,
                    c.emergency_reserve,
                    c.growth_rate,
                ],
            }
        )
    if report.behavior is not None:
        sections["behavior"] = behavior_to_dataframe(report.behavior)
    if report.compliance is not None:
        sections["compliance"] = findings_to_dataframe(report.compliance)
    if report.warnings is not None:
        sections["warnings"] = warnings_to_dataframe(report.warnings)

    sections["recommendations"] = recommendations_to_dataframe(report.recommendations)
    return sections
