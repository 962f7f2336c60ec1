# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Input records consumed by the SMB FinGuard analyzers.

All records are immutable value objects. They are validated on construction
so that every analyzer can assume finite numbers and well-formed identifiers:

- Transaction       : one ledger movement (signed amount, timestamp, actor).
- BalanceSnapshot   : aggregate balance-sheet / income figures for a period.
- ActivityEvent     : one user action, used by the behavioral profiler.
- Approval          : who created and who approved a document.
- UserAccount       : a user and its role.
- ComplianceRatios  : ratio inputs for the compliance rule engine.
- ComplianceBag     : optional inputs of the compliance rule engine.
- OperatingFigures  : period totals for performance ratios and early warnings.
- MonthlyFigures    : revenue/expenses of one month (cash-flow projection).
- AnalysisSnapshot  : everything the orchestrator needs for one run.

Result types live next to the analyzer that produces them.
"""

from collections.abc import Sequence
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional

from .validation import (
    InputValidationError,
    require_finite,
    require_non_negative,
)


def _require_text(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InputValidationError(field_name, "expected a non-empty string")


@dataclass(frozen=True)
class Transaction:
    """
    A single financial transaction.

    Attributes:
        id: Unique identifier of the transaction.
        amount: Signed amount (credit positive, debit negative).
        date: Timestamp of the transaction.
        actor_id: Optional identifier of the employee/user who booked it.
        description: Optional free-text label.
        approved: Whether the transaction carries an approval flag.
    """

    id: str
    amount: float
    date: datetime
    actor_id: Optional[str] = None
    description: Optional[str] = None
    approved: bool = False

    def __post_init__(self) -> None:
        _require_text(self.id, "id")
        object.__setattr__(self, "amount", require_finite(self.amount, "amount"))
        if not isinstance(self.date, datetime):
            raise InputValidationError("date", f"expected a datetime, got {self.date!r}")


@dataclass(frozen=True)
class BalanceSnapshot:
    """
    Point-in-time aggregate figures for a period.

    Every field is required: the engine never assumes a default for a
    financial figure. All values must be finite and non-negative; the caller
    is responsible for consistent units and currency.
    """

    current_assets: float
    current_liabilities: float
    inventory: float
    cash: float
    revenue: float
    cost_of_goods_sold: float
    average_inventory: float
    credit_sales: float
    average_receivables: float
    average_total_assets: float

    def __post_init__(self) -> None:
        for f in fields(self):
            value = require_non_negative(getattr(self, f.name), f.name)
            object.__setattr__(self, f.name, value)


@dataclass(frozen=True)
class ActivityEvent:
    """One action performed by an actor (user, employee, service account)."""

    actor_id: str
    timestamp: datetime
    action: str
    amount: Optional[float] = None

    def __post_init__(self) -> None:
        _require_text(self.actor_id, "actor_id")
        _require_text(self.action, "action")
        if not isinstance(self.timestamp, datetime):
            raise InputValidationError(
                "timestamp", f"expected a datetime, got {self.timestamp!r}"
            )
        if self.amount is not None:
            object.__setattr__(self, "amount", require_finite(self.amount, "amount"))


@dataclass(frozen=True)
class Approval:
    """Approval record: the user who created a document and the approver."""

    id: str
    created_by: str
    approved_by: str


@dataclass(frozen=True)
class UserAccount:
    """Application user and its role (e.g. 'admin', 'manager', 'employee')."""

    id: str
    role: str


@dataclass(frozen=True)
class ComplianceRatios:
    """
    Ratio inputs for the compliance rule engine.

    A field left to None means the figure is not available and the
    corresponding rule is skipped.
    """

    current_ratio: Optional[float] = None
    debt_to_equity: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ("current_ratio", "debt_to_equity"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, require_finite(value, name))


@dataclass(frozen=True)
class ComplianceBag:
    """
    Optional inputs of the compliance rule engine.

    None means "not supplied": the rules depending on that input are skipped.
    An empty sequence is a supplied input with nothing to check.
    """

    transactions: Optional[Sequence[Transaction]] = None
    approvals: Optional[Sequence[Approval]] = None
    users: Optional[Sequence[UserAccount]] = None
    financial_ratios: Optional[ComplianceRatios] = None


@dataclass(frozen=True)
class OperatingFigures:
    """
    Period totals used by the performance ratios and early-warning indicators.

    Attributes:
        total_revenue: Revenue of the period.
        total_expenses: Expenses of the period (salaries included).
        total_salaries: Payroll cost of the period.
        employee_count: Headcount at period end.
        left_employees: Employees who left during the period.
        average_employee_count: Average headcount over the period.
        liquidity: Available cash at period end.
        monthly_expenses: Average monthly expenses.
        revenue_growth: Revenue growth versus the previous period, in percent.
        expense_growth: Expense growth versus the previous period, in percent.
    """

    total_revenue: float
    total_expenses: float
    total_salaries: float
    employee_count: float
    left_employees: float
    average_employee_count: float
    liquidity: float
    monthly_expenses: float
    revenue_growth: float
    expense_growth: float

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            # growth rates are signed, every other figure is a magnitude
            if f.name.endswith("_growth"):
                checked = require_finite(value, f.name)
            else:
                checked = require_non_negative(value, f.name)
            object.__setattr__(self, f.name, checked)


@dataclass(frozen=True)
class MonthlyFigures:
    """Revenue and expenses of one month."""

    revenue: float
    expenses: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "revenue", require_finite(self.revenue, "revenue"))
        object.__setattr__(self, "expenses", require_finite(self.expenses, "expenses"))


@dataclass(frozen=True)
class AnalysisSnapshot:
    """
    Immutable input of one analysis run.

    Each analyzer only runs when its input is present: no balance means no
    ratios, an empty series means a flat forecast, no compliance bag means
    no compliance evaluation, and so on.
    """

    transactions: Sequence[Transaction] = ()
    balance: Optional[BalanceSnapshot] = None
    activities: Sequence[ActivityEvent] = ()
    series: Sequence[float] = ()
    compliance: Optional[ComplianceBag] = None
    operating: Optional[OperatingFigures] = None
    monthly: Sequence[MonthlyFigures] = ()
