# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Recommendation synthesis.

This is the only step that looks at other analyzers' output. It reads the
results present in an AnalysisReport (never modifying them) and emits
prioritized recommendations:

    Benford risk 'high'                  -> critical, fraud detection
    current ratio 'critical'             -> critical, liquidity management
    days receivables outstanding > 60    -> high, receivables management
    any actor with a risk score > 70     -> high, security & monitoring
    each compliance finding              -> critical (error) / medium
    decreasing forecast with risk factors -> medium, financial planning

The list is stable-sorted by priority: critical, high, medium, low.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional

if TYPE_CHECKING:
    from .report import AnalysisReport

Priority = Literal["critical", "high", "medium", "low"]

PRIORITY_RANK: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}

RECEIVABLES_DAYS_LIMIT = 60
RECEIVABLES_DAYS_TARGET = 45
HIGH_RISK_ACTOR_SCORE = 70


@dataclass(frozen=True)
class Recommendation:
    """
    Attributes:
        category: Business area (e.g. 'Fraud detection').
        priority: 'critical', 'high', 'medium' or 'low'.
        recommendation: What to do.
        expected_impact: What it should achieve.
        implementation: How to do it.
        estimated_roi: Optional estimated return, in percent.
    """

    category: str
    priority: Priority
    recommendation: str
    expected_impact: str
    implementation: str
    estimated_roi: Optional[float] = None


def synthesize_recommendations(report: AnalysisReport) -> tuple[Recommendation, ...]:
    """Build the priority-ordered recommendations of a report."""
    recommendations: list[Recommendation] = []

    if report.distribution is not None and report.distribution.risk_level == "high":
        recommendations.append(
            Recommendation(
                category="Fraud detection",
                priority="critical",
                recommendation="Run an immediate forensic audit of the financial transactions",
                expected_impact="Detect and prevent potential fraud",
                implementation="Appoint an independent external auditor within 48 hours",
            )
        )

    if (
        report.liquidity is not None
        and report.liquidity.current_ratio.status == "critical"
    ):
        recommendations.append(
            Recommendation(
                category="Liquidity management",
                priority="critical",
                recommendation="Improve liquidity urgently",
                expected_impact="Avoid defaulting on payments",
                implementation=(
                    "Accelerate collections, defer non-critical payments, "
                    "negotiate credit facilities"
                ),
            )
        )

    if report.efficiency is not None:
        dso = report.efficiency.days_receivables_outstanding
        if dso > RECEIVABLES_DAYS_LIMIT:
            recommendations.append(
                Recommendation(
                    category="Receivables management",
                    priority="high",
                    recommendation="Improve the collection process",
                    expected_impact=(
                        f"Reduce the collection period by "
                        f"{dso - RECEIVABLES_DAYS_TARGET} days"
                    ),
                    implementation=(
                        "Automated follow-ups, early-payment discounts, "
                        "stricter collection procedures"
                    ),
                    estimated_roi=15.0,
                )
            )

    if report.behavior is not None:
        high_risk = [
            p for p in report.behavior.values() if p.risk_score > HIGH_RISK_ACTOR_SCORE
        ]
        if high_risk:
            recommendations.append(
                Recommendation(
                    category="Security & monitoring",
                    priority="high",
                    recommendation=f"Review the activity of {len(high_risk)} high-risk user(s)",
                    expected_impact="Prevent internal fraudulent activity",
                    implementation=(
                        "Detailed activity audit, restricted permissions, "
                        "compliance training"
                    ),
                )
            )

    for finding in report.compliance or ():
        recommendations.append(
            Recommendation(
                category="Compliance & governance",
                priority="critical" if finding.severity == "error" else "medium",
                recommendation=finding.action or "Resolve the compliance issue",
                expected_impact=f"Restore compliance with rule: {finding.rule}",
                implementation=finding.details,
            )
        )

    if (
        report.forecast is not None
        and report.forecast.trend == "decreasing"
        and report.forecast.risk_factors
    ):
        recommendations.append(
            Recommendation(
                category="Financial planning",
                priority="medium",
                recommendation="Prepare a contingency plan for the expected decline",
                expected_impact="Mitigate the impact of the expected decline",
                implementation=(
                    "Diversify revenue streams, cut variable costs, build a reserve"
                ),
            )
        )

    # sorted() is stable: equal priorities keep their trigger order
    return tuple(sorted(recommendations, key=lambda r: PRIORITY_RANK[r.priority]))
