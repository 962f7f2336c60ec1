# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for SMB FinGuard.

This module is responsible for:
- loading the application configuration from a TOML file,
- turning the optional financial inputs ([balance], [operating],
  [compliance]) into validated engine records,
- exposing typed dataclasses used by the CLI.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import tomllib  # Python 3.11+

from .engine import AnalysisSettings
from .models import BalanceSnapshot, ComplianceRatios, OperatingFigures

DEFAULT_CONFIG_FILE = "smb_finguard_config.toml"
DISPLAY_MODES: tuple[str, ...] = ("table", "csv", "json", "both")
LOG_FORMATS: tuple[str, ...] = ("text", "json")


@dataclass(frozen=True)
class DisplayConfig:
    """How the CLI renders a report."""

    mode: str
    decimals: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging level name and output format ('text' or 'json')."""

    level: str
    format: str


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for SMB FinGuard.

    This aggregates:
    - the analyzer settings (duplicate tolerance/window, anomaly threshold,
      parallel execution),
    - the optional balance snapshot used by the liquidity/efficiency ratios,
    - the optional operating figures used by the performance ratios and
      early-warning indicators,
    - the optional ratio inputs of the compliance rules,
    - display and logging options.
    """

    settings: AnalysisSettings
    balance: Optional[BalanceSnapshot]
    operating: Optional[OperatingFigures]
    compliance_ratios: Optional[ComplianceRatios]
    display: DisplayConfig
    logging: LoggingConfig


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed or is not a table.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Invalid TOML root type in {path}, expected a table.")

    return data


def _section(raw: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    """Return a table of the config, None if absent, or raise if not a table."""
    value = raw.get(name)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"Config section [{name}] must be a table.")
    return value


def _record_from_section(cls: type, section: Mapping[str, Any], name: str) -> Any:
    """
    Build a record dataclass from a config table.

    Every field of the record is required: financial figures are never
    defaulted silently.
    """
    expected = [f.name for f in fields(cls)]
    missing = [key for key in expected if key not in section]
    if missing:
        raise ValueError(
            f"Config section [{name}] is missing required key(s): {', '.join(missing)}."
        )

    unknown = sorted(set(section) - set(expected))
    if unknown:
        raise ValueError(
            f"Config section [{name}] has unknown key(s): {', '.join(unknown)}."
        )

    return cls(**{key: section[key] for key in expected})


def _parse_settings(section: Optional[Mapping[str, Any]]) -> AnalysisSettings:
    section = section or {}
    defaults = AnalysisSettings()

    parallel = section.get("parallel", defaults.parallel)
    if not isinstance(parallel, bool):
        raise ValueError(
            f"Invalid value in [analysis] section: analysis.parallel must be "
            f"true or false, got {parallel!r}."
        )

    try:
        return AnalysisSettings(
            duplicate_tolerance=float(
                section.get("duplicate_tolerance", defaults.duplicate_tolerance)
            ),
            duplicate_window_hours=float(
                section.get("duplicate_window_hours", defaults.duplicate_window_hours)
            ),
            anomaly_threshold=float(
                section.get("anomaly_threshold", defaults.anomaly_threshold)
            ),
            parallel=parallel,
            max_workers=int(section.get("max_workers", defaults.max_workers)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value in [analysis] section: {exc}") from exc


def _parse_compliance(section: Optional[Mapping[str, Any]]) -> Optional[ComplianceRatios]:
    if section is None:
        return None
    return ComplianceRatios(
        current_ratio=section.get("current_ratio"),
        debt_to_equity=section.get("debt_to_equity"),
    )


def _parse_display(section: Optional[Mapping[str, Any]]) -> DisplayConfig:
    section = section or {}

    mode = str(section.get("mode", "table"))
    if mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid display.mode {mode!r}, expected one of: {', '.join(DISPLAY_MODES)}."
        )

    try:
        decimals = int(section.get("decimals", 2))
    except (TypeError, ValueError):
        decimals = 2

    return DisplayConfig(mode=mode, decimals=decimals)


def _parse_logging(section: Optional[Mapping[str, Any]]) -> LoggingConfig:
    section = section or {}

    log_format = str(section.get("format", "text"))
    if log_format not in LOG_FORMATS:
        raise ValueError(
            f"Invalid logging.format {log_format!r}, expected 'text' or 'json'."
        )

    return LoggingConfig(level=str(section.get("level", "INFO")).upper(), format=log_format)


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the SMB FinGuard application configuration from a TOML file.

    Expected top-level sections in the TOML file
    --------------------------------------------
    [analysis]
        Analyzer settings: duplicate_tolerance, duplicate_window_hours,
        anomaly_threshold, parallel, max_workers. All optional.

    [balance]
        Optional balance snapshot. When present, every BalanceSnapshot
        field is required (current_assets, current_liabilities, inventory,
        cash, revenue, cost_of_goods_sold, average_inventory, credit_sales,
        average_receivables, average_total_assets).

    [operating]
        Optional operating figures. When present, every OperatingFigures
        field is required.

    [compliance]
        Optional current_ratio and debt_to_equity inputs of the
        compliance rules.

    [display]
        mode (table, csv, json, both) and decimals.

    [logging]
        level (DEBUG, INFO, ...) and format (text, json).

    Parameters
    ----------
    config_path : str, optional
        Path to the TOML configuration file. Defaults to
        'smb_finguard_config.toml' in the current directory.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    ValueError
        If the file cannot be parsed or a value is invalid.
    """
    config_file = Path(config_path or DEFAULT_CONFIG_FILE).resolve()
    raw = _load_toml(config_file)

    balance_section = _section(raw, "balance")
    operating_section = _section(raw, "operating")

    balance = (
        _record_from_section(BalanceSnapshot, balance_section, "balance")
        if balance_section is not None
        else None
    )
    operating = (
        _record_from_section(OperatingFigures, operating_section, "operating")
        if operating_section is not None
        else None
    )

    return AppConfig(
        settings=_parse_settings(_section(raw, "analysis")),
        balance=balance,
        operating=operating,
        compliance_ratios=_parse_compliance(_section(raw, "compliance")),
        display=_parse_display(_section(raw, "display")),
        logging=_parse_logging(_section(raw, "logging")),
    )


def default_app_config() -> AppConfig:
    """
    Configuration used when no TOML file is available.

    Analyzer settings keep their defaults and no financial figure is
    assumed: ratio, performance and compliance-ratio inputs are absent.
    """
    return AppConfig(
        settings=AnalysisSettings(),
        balance=None,
        operating=None,
        compliance_ratios=None,
        display=DisplayConfig(mode="table", decimals=2),
        logging=LoggingConfig(level="INFO", format="text"),
    )
