# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Analysis orchestrator for SMB FinGuard.

The engine turns one AnalysisSnapshot into one AnalysisReport:

1. Independent analyzers
   ----------------------
   Each analyzer is a pure function of part of the snapshot and runs only
   when that part is present:

   - transactions -> first-digit test, duplicates, round numbers,
                     z-score anomalies over the amounts,
   - balance      -> liquidity and efficiency ratios,
   - series       -> linear forecast and trend analysis,
   - monthly      -> cash-flow projection,
   - activities   -> behavioral profiles,
   - compliance   -> compliance findings,
   - operating    -> performance ratios and early-warning indicators.

   None of them reads another one's output, so they may run sequentially or
   in a thread pool (fork-join) with identical results.

2. Recommendations
   ----------------
   Once every analyzer has completed, the synthesizer reads the collected
   results and the final report is derived with the recommendations
   attached. The intermediate report is never modified.

The engine keeps no state between runs: concurrent or repeated calls with
different snapshots never interfere.
"""

import dataclasses
import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Optional

from .anomalies import DEFAULT_THRESHOLD, detect_anomalies
from .behavior import profile_behavior
from .compliance import check_compliance
from .distribution import analyze_distribution
from .duplicates import DEFAULT_TOLERANCE, DEFAULT_WINDOW_HOURS, detect_duplicates
from .forecast import analyze_trend, forecast, forecast_cash_flow
from .indicators import check_warning_indicators
from .models import AnalysisSnapshot
from .ratios import (
    compute_efficiency_ratios,
    compute_liquidity_ratios,
    compute_performance_ratios,
)
from .recommendations import synthesize_recommendations
from .report import AnalysisReport
from .round_numbers import detect_round_number_patterns
from .validation import require_non_negative, require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Tunable parameters of an analysis run.

    Attributes:
        duplicate_tolerance: Max amount difference of two duplicates.
        duplicate_window_hours: Max time gap of two duplicates, in hours.
        anomaly_threshold: z-score above which an amount is an outlier.
        parallel: Run the analyzers in a thread pool.
        max_workers: Thread pool size when ``parallel`` is set.
    """

    duplicate_tolerance: float = DEFAULT_TOLERANCE
    duplicate_window_hours: float = DEFAULT_WINDOW_HOURS
    anomaly_threshold: float = DEFAULT_THRESHOLD
    parallel: bool = False
    max_workers: int = 4

    def __post_init__(self) -> None:
        require_non_negative(self.duplicate_tolerance, "duplicate_tolerance")
        require_non_negative(self.duplicate_window_hours, "duplicate_window_hours")
        require_positive(self.anomaly_threshold, "anomaly_threshold")
        require_positive(self.max_workers, "max_workers")


def _plan(
    snapshot: AnalysisSnapshot, settings: AnalysisSettings
) -> dict[str, Callable[[], Any]]:
    """Map each report field to the zero-argument call producing it."""
    tasks: dict[str, Callable[[], Any]] = {}

    transactions = tuple(snapshot.transactions)
    if transactions:
        amounts = [t.amount for t in transactions]
        tasks["distribution"] = partial(analyze_distribution, amounts)
        tasks["duplicates"] = partial(
            detect_duplicates,
            transactions,
            tolerance=settings.duplicate_tolerance,
            window_hours=settings.duplicate_window_hours,
        )
        tasks["round_numbers"] = partial(detect_round_number_patterns, transactions)
        tasks["anomalies"] = partial(
            detect_anomalies, amounts, threshold=settings.anomaly_threshold
        )

    if snapshot.balance is not None:
        tasks["liquidity"] = partial(compute_liquidity_ratios, snapshot.balance)
        tasks["efficiency"] = partial(compute_efficiency_ratios, snapshot.balance)

    if snapshot.series:
        series = tuple(snapshot.series)
        tasks["forecast"] = partial(forecast, series)
        tasks["trend"] = partial(analyze_trend, series)

    if snapshot.monthly:
        tasks["cash_flow"] = partial(forecast_cash_flow, tuple(snapshot.monthly))

    if snapshot.activities:
        tasks["behavior"] = partial(profile_behavior, tuple(snapshot.activities))

    if snapshot.compliance is not None:
        tasks["compliance"] = partial(check_compliance, snapshot.compliance)

    if snapshot.operating is not None:
        tasks["performance"] = partial(compute_performance_ratios, snapshot.operating)
        tasks["warnings"] = partial(check_warning_indicators, snapshot.operating)

    return tasks


def _timed(name: str, task: Callable[[], Any]) -> Any:
    started = time.perf_counter()
    result = task()
    logger.debug(
        "Analyzer %s completed in %.2f ms",
        name,
        (time.perf_counter() - started) * 1000,
    )
    return result


def run_analysis(
    snapshot: AnalysisSnapshot,
    settings: Optional[AnalysisSettings] = None,
) -> AnalysisReport:
    """
    Run every applicable analyzer on a snapshot and synthesize recommendations.

    Args:
        snapshot: Immutable inputs of the run.
        settings: Optional tuning; defaults to AnalysisSettings().

    Returns:
        A frozen AnalysisReport with its recommendations.

    Raises:
        InputValidationError: if a series or setting violates the engine
            contract. Errors raised by an analyzer propagate unchanged, in
            sequential and parallel mode alike.
    """
    settings = settings or AnalysisSettings()
    tasks = _plan(snapshot, settings)

    logger.info(
        "Starting analysis: %d transaction(s), %d activity event(s), %d analyzer(s)",
        len(snapshot.transactions),
        len(snapshot.activities),
        len(tasks),
    )

    if settings.parallel and len(tasks) > 1:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
            futures = {
                name: executor.submit(_timed, name, task) for name, task in tasks.items()
            }
            results = {name: future.result() for name, future in futures.items()}
    else:
        results = {name: _timed(name, task) for name, task in tasks.items()}

    report = AnalysisReport(**results)
    final = dataclasses.replace(
        report, recommendations=synthesize_recommendations(report)
    )

    logger.info(
        "Analysis completed: %d recommendation(s)", len(final.recommendations)
    )
    return final
