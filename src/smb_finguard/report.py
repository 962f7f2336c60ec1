# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
The AnalysisReport aggregate and its serialization.

A report holds one optional result per analyzer: a field is None when the
analyzer did not run (missing input) or its preconditions were not met.
Reports are frozen. The orchestrator builds a first report without
recommendations, then derives the final one with ``dataclasses.replace``.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .anomalies import AnomalyFlag
from .behavior import BehaviorProfile
from .compliance import ComplianceFinding
from .distribution import DistributionResult
from .duplicates import DuplicateGroup
from .forecast import CashFlowForecast, ForecastResult, TrendAnalysis
from .indicators import WarningIndicator
from .ratios import EfficiencyResult, LiquidityResult, PerformanceResult
from .recommendations import Recommendation
from .round_numbers import RoundNumberResult


@dataclass(frozen=True)
class AnalysisReport:
    """Output of one analysis run."""

    distribution: Optional[DistributionResult] = None
    duplicates: Optional[tuple[DuplicateGroup, ...]] = None
    round_numbers: Optional[RoundNumberResult] = None
    anomalies: Optional[tuple[AnomalyFlag, ...]] = None
    liquidity: Optional[LiquidityResult] = None
    efficiency: Optional[EfficiencyResult] = None
    performance: Optional[PerformanceResult] = None
    forecast: Optional[ForecastResult] = None
    trend: Optional[TrendAnalysis] = None
    cash_flow: Optional[CashFlowForecast] = None
    behavior: Optional[dict[str, BehaviorProfile]] = None
    compliance: Optional[tuple[ComplianceFinding, ...]] = None
    warnings: Optional[tuple[WarningIndicator, ...]] = None
    recommendations: tuple[Recommendation, ...] = ()


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def report_to_dict(report: AnalysisReport) -> dict[str, Any]:
    """
    Convert a report into plain JSON-serializable data.

    Dataclasses become dicts, tuples become lists and timestamps become ISO
    8601 strings. Absent results are kept as None.
    """
    return _plain(dataclasses.asdict(report))
