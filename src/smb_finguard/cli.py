# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for SMB FinGuard.

This module wires together the main building blocks of SMB FinGuard:

- application configuration (analyzer settings, financial figures,
  display and logging options),
- CSV readers for transactions, activity logs, approvals and users,
- the analysis engine (fraud detection, ratios, forecasting, behavior,
  compliance, early warnings, recommendations),
- view helpers (tabular rendering).

The CLI is intentionally thin: it does not implement any financial logic
itself. It builds one AnalysisSnapshot from its inputs, runs the engine
once and renders the resulting report.


High-level pipeline
-------------------

1) Load the main TOML configuration (``smb_finguard_config.toml`` by
   default). When ``--config`` is omitted and the default file does not
   exist, built-in defaults are used: analyzer defaults, no balance
   snapshot, no operating figures.

2) Configure logging (level and format from the configuration, level
   overridable with ``--log-level``). Log records go to stderr so that
   stdout only carries the rendered report.

3) Read the transactions CSV and, when given, the activity log, approvals
   and users CSV files.

4) Build the snapshot for the requested scope:

   - fraud      : transactions (first-digit test, duplicates, round
                  numbers, z-score anomalies),
   - ratios     : balance snapshot and operating figures from the config
                  (liquidity, efficiency, performance, early warnings),
   - forecast   : monthly totals and monthly revenue/expenses derived from
                  the transactions (forecast, trend, cash-flow projection),
   - behavior   : activity log,
   - compliance : transactions, approvals, users and compliance ratios,
   - all        : everything above.

5) Run the engine, sequentially or in a thread pool (``--parallel``).

6) Render the report as console tables, CSV files, or one JSON document,
   depending on the display mode.


Examples
--------

    python -m smb_finguard.cli --transactions data/transactions.csv

    python -m smb_finguard.cli --transactions data/transactions.csv \\
        --activities data/activity.csv --scope behavior

    python -m smb_finguard.cli --transactions data/transactions.csv \\
        --display-mode json --parallel
"""

import argparse
import dataclasses
import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import __version__
from .config import (
    DEFAULT_CONFIG_FILE,
    DISPLAY_MODES,
    AppConfig,
    default_app_config,
    load_app_config,
)
from .engine import run_analysis
from .io import (
    monthly_figures,
    monthly_totals,
    read_activities,
    read_approvals,
    read_transactions,
    read_users,
)
from .logging_config import setup_logging
from .models import AnalysisSnapshot, ComplianceBag
from .report import AnalysisReport, report_to_dict
from .views import report_sections

logger = logging.getLogger(__name__)

SCOPES: tuple[str, ...] = ("fraud", "ratios", "forecast", "behavior", "compliance", "all")

SECTION_TITLES: dict[str, str] = {
    "distribution": "First-digit distribution",
    "duplicates": "Duplicate transactions",
    "round_numbers": "Round-number patterns",
    "anomalies": "Statistical anomalies",
    "ratios": "Financial ratios",
    "warnings": "Early-warning indicators",
    "forecast": "Forecast",
    "trend": "Trend analysis",
    "cash_flow": "Cash-flow projection",
    "behavior": "Behavioral profiles",
    "compliance": "Compliance findings",
    "recommendations": "Recommendations",
}


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m smb_finguard.cli",
        description=(
            "SMB FinGuard - Financial Intelligence Engine for SMBs. "
            "Reads transactions and activity logs, detects fraud signals, "
            "computes ratios, forecasts, behavioral and compliance findings, "
            "and prints prioritized recommendations."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of smb_finguard and exit.",
    )

    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the main TOML configuration file. "
            f"If omitted, '{DEFAULT_CONFIG_FILE}' in the current directory is "
            "used when it exists, built-in defaults otherwise."
        ),
    )

    # Inputs
    ap.add_argument(
        "--transactions",
        dest="transactions_path",
        metavar="CSV_PATH",
        help="Transactions CSV file (id, date, amount [, actor_id, description, approved]).",
    )
    ap.add_argument(
        "--activities",
        dest="activities_path",
        metavar="CSV_PATH",
        help="Activity log CSV file (actor_id, timestamp, action [, amount]).",
    )
    ap.add_argument(
        "--approvals",
        dest="approvals_path",
        metavar="CSV_PATH",
        help="Approvals CSV file (id, created_by, approved_by).",
    )
    ap.add_argument(
        "--users",
        dest="users_path",
        metavar="CSV_PATH",
        help="Users CSV file (id, role).",
    )

    # Run options
    ap.add_argument(
        "--scope",
        choices=SCOPES,
        default="all",
        help="Which analyses to run (default: all).",
    )
    ap.add_argument(
        "--parallel",
        action="store_true",
        help="Run the independent analyzers in a thread pool.",
    )

    # Output options
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=DISPLAY_MODES,
        help="Override the display mode from the configuration.",
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help="Output directory for CSV files (default: data/output).",
    )
    ap.add_argument(
        "--log-level",
        dest="log_level",
        help="Override the logging level from the configuration (e.g. DEBUG).",
    )

    return ap


def _load_config(config_path: Optional[str]) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no file is used.

    An explicit ``--config`` path must exist; the default file is optional.

    Raises
    ------
    SystemExit
        If the configuration cannot be loaded.
    """
    try:
        if config_path:
            return load_app_config(config_path)
        if Path(DEFAULT_CONFIG_FILE).is_file():
            return load_app_config()
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    return default_app_config()


def _build_snapshot(
    args: argparse.Namespace, config: AppConfig
) -> AnalysisSnapshot:
    """
    Read the CSV inputs and assemble the snapshot for the requested scope.

    Raises
    ------
    SystemExit
        If an input file cannot be read or parsed.
    """
    scope = args.scope

    def wants(name: str) -> bool:
        return scope in {name, "all"}

    try:
        transactions = read_transactions(args.transactions_path)
        activities = read_activities(args.activities_path) if args.activities_path else []
        approvals = read_approvals(args.approvals_path) if args.approvals_path else None
        users = read_users(args.users_path) if args.users_path else None
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Input error: {exc}") from exc

    snapshot = AnalysisSnapshot()

    if wants("fraud"):
        snapshot = dataclasses.replace(snapshot, transactions=tuple(transactions))

    if wants("ratios"):
        if config.balance is None and config.operating is None:
            logger.warning(
                "Ratios requested in scope, but neither [balance] nor [operating] "
                "is configured. Skipping ratio computation."
            )
        snapshot = dataclasses.replace(
            snapshot, balance=config.balance, operating=config.operating
        )

    if wants("forecast"):
        try:
            snapshot = dataclasses.replace(
                snapshot,
                series=tuple(monthly_totals(transactions)),
                monthly=tuple(monthly_figures(transactions)),
            )
        except ValueError as exc:
            raise SystemExit(f"Input error: {exc}") from exc

    if wants("behavior"):
        if not activities:
            logger.warning(
                "Behavior analysis requested but no --activities file given. Skipping."
            )
        snapshot = dataclasses.replace(snapshot, activities=tuple(activities))

    if wants("compliance"):
        snapshot = dataclasses.replace(
            snapshot,
            compliance=ComplianceBag(
                transactions=tuple(transactions),
                approvals=tuple(approvals) if approvals is not None else None,
                users=tuple(users) if users is not None else None,
                financial_ratios=config.compliance_ratios,
            ),
        )

    return snapshot


def _render_tables(report: AnalysisReport, decimals: int) -> None:
    for name, df in report_sections(report, decimals=decimals).items():
        print()
        print(f"=== {SECTION_TITLES.get(name, name)} ===")
        if df.empty:
            print("(none)")
        else:
            print(df.to_string(index=False))


def _write_csv(report: AnalysisReport, decimals: int, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    for name, df in report_sections(report, decimals=decimals).items():
        path = output_dir / f"{name}_{timestamp}.csv"
        df.to_csv(path, index=False)
        print(f"Wrote {path} ({len(df)} rows)")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the SMB FinGuard CLI.

    This function parses command-line arguments, loads the configuration,
    configures logging, reads the CSV inputs, runs one analysis for the
    requested scope and renders the report as console tables, CSV files
    and/or a JSON document.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"smb_finguard version {__version__}")
        return

    if not args.transactions_path:
        parser.error("--transactions is required.")
    if not Path(args.transactions_path).is_file():
        parser.error(f"Transactions file not found: {args.transactions_path}")

    # 1) Configuration and logging
    config = _load_config(args.config_path)
    try:
        setup_logging(args.log_level or config.logging.level, config.logging.format)
    except ValueError as exc:
        parser.error(str(exc))

    # 2) Inputs
    snapshot = _build_snapshot(args, config)

    # 3) Analysis
    settings = config.settings
    if args.parallel:
        settings = dataclasses.replace(settings, parallel=True)

    try:
        report = run_analysis(snapshot, settings)
    except ValueError as exc:
        logger.error("Analysis failed: %s", exc)
        raise SystemExit(f"Analysis error: {exc}") from exc

    # 4) Rendering
    display_mode = args.display_mode or config.display.mode
    decimals = config.display.decimals

    if display_mode == "json":
        print(json.dumps(report_to_dict(report), indent=2))
        return

    if display_mode in {"table", "both"}:
        _render_tables(report, decimals)

    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else Path("data/output")
        _write_csv(report, decimals, output_dir)


if __name__ == "__main__":
    main()
