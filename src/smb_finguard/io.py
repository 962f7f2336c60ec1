# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for SMB FinGuard.

This module reads the CSV exports supplied by the surrounding application
and normalizes them into the immutable records consumed by the engine.
Column names are case-insensitive and surrounding whitespace is ignored.

Supported files
---------------

1) Transactions
       id, date, amount [, actor_id, description, approved]

   - ``employee_id`` is accepted as an alias for ``actor_id``,
   - ``label`` is accepted as an alias for ``description``,
   - ``approved`` accepts true/false, yes/no, 1/0 (missing means false).

2) Activity log
       actor_id, timestamp, action [, amount]

   - ``user_id`` is accepted as an alias for ``actor_id``.

3) Approvals
       id, created_by, approved_by

4) Users
       id, role

Dates and timestamps use ISO 8601 (``2025-01-31`` or ``2025-01-31 14:05:00``).
If a file does not contain the required columns, or if dates or numbers
cannot be parsed, a ValueError with a clear message is raised.
"""

import logging
import os
from collections.abc import Sequence
from typing import Optional, Union

import pandas as pd

from .models import ActivityEvent, Approval, MonthlyFigures, Transaction, UserAccount

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_TRUE_VALUES = {"true", "yes", "y", "1"}
_FALSE_VALUES = {"false", "no", "n", "0", ""}


def _read_csv(
    path: PathLike,
    required: set[str],
    aliases: Optional[dict[str, str]] = None,
) -> pd.DataFrame:
    """Read a CSV file, normalize its column names and check required ones."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.lower().strip() for c in df.columns]

    for alias, canonical in (aliases or {}).items():
        if alias in df.columns and canonical not in df.columns:
            df = df.rename(columns={alias: canonical})

    missing = required - set(df.columns)
    if missing:
        raise ValueError(
            f"Invalid CSV structure in {path}: missing column(s) "
            f"{', '.join(sorted(missing))}."
        )

    return df


def _parse_datetimes(df: pd.DataFrame, column: str) -> pd.Series:
    # dates and timestamps may be mixed within one column
    try:
        return pd.to_datetime(df[column], format="ISO8601", errors="raise")
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Invalid values in '{column}' column.") from exc


def _parse_amounts(df: pd.DataFrame, column: str, allow_missing: bool) -> pd.Series:
    raw = df[column].str.strip()
    amounts = pd.to_numeric(raw.where(raw != ""), errors="coerce")

    invalid = amounts.isna() & (raw != "") if allow_missing else amounts.isna()
    if invalid.any():
        raise ValueError(f"Invalid numeric values in '{column}' column.")

    return amounts


def _parse_flag(value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value in 'approved' column: {value!r}.")


def _optional_text(value: str) -> Optional[str]:
    text = value.strip()
    return text or None


def read_transactions(path: PathLike) -> list[Transaction]:
    """
    Read transactions from a CSV file.

    Returns
    -------
    list[Transaction]
        One record per row, in file order.

    Raises
    ------
    ValueError
        If required columns are missing or values cannot be parsed.
    """
    df = _read_csv(
        path,
        required={"id", "date", "amount"},
        aliases={"employee_id": "actor_id", "label": "description"},
    )
    dates = _parse_datetimes(df, "date")
    amounts = _parse_amounts(df, "amount", allow_missing=False)

    actors = df["actor_id"] if "actor_id" in df.columns else pd.Series("", index=df.index)
    descriptions = (
        df["description"] if "description" in df.columns else pd.Series("", index=df.index)
    )
    approved = df["approved"] if "approved" in df.columns else pd.Series("", index=df.index)

    transactions = [
        Transaction(
            id=str(tid).strip(),
            amount=float(amount),
            date=ts.to_pydatetime(),
            actor_id=_optional_text(actor),
            description=_optional_text(desc),
            approved=_parse_flag(flag),
        )
        for tid, amount, ts, actor, desc, flag in zip(
            df["id"], amounts, dates, actors, descriptions, approved
        )
    ]

    logger.info("Read %d transaction(s) from %s", len(transactions), path)
    return transactions


def read_activities(path: PathLike) -> list[ActivityEvent]:
    """Read an activity log from a CSV file (rows with no amount keep None)."""
    df = _read_csv(
        path,
        required={"actor_id", "timestamp", "action"},
        aliases={"user_id": "actor_id"},
    )
    timestamps = _parse_datetimes(df, "timestamp")

    if "amount" in df.columns:
        amounts = _parse_amounts(df, "amount", allow_missing=True)
    else:
        amounts = pd.Series(float("nan"), index=df.index)

    events = [
        ActivityEvent(
            actor_id=str(actor).strip(),
            timestamp=ts.to_pydatetime(),
            action=str(action).strip(),
            amount=None if pd.isna(amount) else float(amount),
        )
        for actor, ts, action, amount in zip(
            df["actor_id"], timestamps, df["action"], amounts
        )
    ]

    logger.info("Read %d activity event(s) from %s", len(events), path)
    return events


def read_approvals(path: PathLike) -> list[Approval]:
    """Read approval records (id, created_by, approved_by) from a CSV file."""
    df = _read_csv(path, required={"id", "created_by", "approved_by"})
    return [
        Approval(id=str(aid).strip(), created_by=str(by).strip(), approved_by=str(ap).strip())
        for aid, by, ap in zip(df["id"], df["created_by"], df["approved_by"])
    ]


def read_users(path: PathLike) -> list[UserAccount]:
    """Read user accounts (id, role) from a CSV file."""
    df = _read_csv(path, required={"id", "role"})
    return [
        UserAccount(id=str(uid).strip(), role=str(role).strip().lower())
        for uid, role in zip(df["id"], df["role"])
    ]


def monthly_totals(transactions: Sequence[Transaction]) -> list[float]:
    """
    Sum transaction amounts per calendar month, oldest month first.

    Months without any transaction inside the covered range are reported as
    0 so that the series keeps a regular spacing for the forecast.
    """
    if not transactions:
        return []

    df = pd.DataFrame(
        {
            "date": pd.to_datetime([t.date for t in transactions]),
            "amount": [t.amount for t in transactions],
        }
    )
    months = df["date"].dt.to_period("M")
    totals = df.groupby(months)["amount"].sum()

    full_range = pd.period_range(totals.index.min(), totals.index.max(), freq="M")
    totals = totals.reindex(full_range, fill_value=0.0)

    return [float(v) for v in totals]


def monthly_figures(transactions: Sequence[Transaction]) -> list[MonthlyFigures]:
    """
    Split transactions into monthly revenue (credits) and expenses (debits).

    Expenses are reported as positive magnitudes. Months are ordered oldest
    first, with empty months in the covered range reported as zeros.
    """
    if not transactions:
        return []

    df = pd.DataFrame(
        {
            "date": pd.to_datetime([t.date for t in transactions]),
            "amount": [t.amount for t in transactions],
        }
    )
    df["month"] = df["date"].dt.to_period("M")
    df["revenue"] = df["amount"].clip(lower=0)
    df["expenses"] = (-df["amount"]).clip(lower=0)

    grouped = df.groupby("month")[["revenue", "expenses"]].sum()
    full_range = pd.period_range(grouped.index.min(), grouped.index.max(), freq="M")
    grouped = grouped.reindex(full_range, fill_value=0.0)

    return [
        MonthlyFigures(revenue=float(row.revenue), expenses=float(row.expenses))
        for row in grouped.itertuples()
    ]
