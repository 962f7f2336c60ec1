import math
from datetime import datetime

import pytest

from smb_finguard.models import (
    ActivityEvent,
    BalanceSnapshot,
    ComplianceRatios,
    OperatingFigures,
    Transaction,
)
from smb_finguard.validation import InputValidationError


def _balance(**overrides: float) -> dict[str, float]:
    values = {
        "current_assets": 150.0,
        "current_liabilities": 100.0,
        "inventory": 0.0,
        "cash": 100.0,
        "revenue": 1000.0,
        "cost_of_goods_sold": 400.0,
        "average_inventory": 100.0,
        "credit_sales": 500.0,
        "average_receivables": 100.0,
        "average_total_assets": 500.0,
    }
    values.update(overrides)
    return values


def test_transaction_coerces_amount_to_float() -> None:
    t = Transaction(id="T1", amount=12, date=datetime(2025, 1, 1))

    assert isinstance(t.amount, float)
    assert t.actor_id is None
    assert t.approved is False


def test_transaction_rejects_nan_amount_and_empty_id() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        Transaction(id="T1", amount=math.nan, date=datetime(2025, 1, 1))
    assert excinfo.value.field == "amount"

    with pytest.raises(InputValidationError) as excinfo:
        Transaction(id="  ", amount=1.0, date=datetime(2025, 1, 1))
    assert excinfo.value.field == "id"


def test_transaction_requires_a_datetime() -> None:
    with pytest.raises(InputValidationError):
        Transaction(id="T1", amount=1.0, date="2025-01-01")  # type: ignore[arg-type]


def test_transaction_is_immutable() -> None:
    t = Transaction(id="T1", amount=1.0, date=datetime(2025, 1, 1))
    with pytest.raises(AttributeError):
        t.amount = 2.0  # type: ignore[misc]


def test_balance_snapshot_rejects_negative_figures() -> None:
    """Balance figures are magnitudes: a negative value names its field."""
    with pytest.raises(InputValidationError) as excinfo:
        BalanceSnapshot(**_balance(cash=-1.0))

    assert excinfo.value.field == "cash"


def test_balance_snapshot_requires_every_field() -> None:
    values = _balance()
    del values["credit_sales"]
    with pytest.raises(TypeError):
        BalanceSnapshot(**values)


def test_operating_figures_allow_signed_growth_only() -> None:
    figures = OperatingFigures(
        total_revenue=1000,
        total_expenses=800,
        total_salaries=300,
        employee_count=10,
        left_employees=1,
        average_employee_count=10,
        liquidity=5000,
        monthly_expenses=1000,
        revenue_growth=-5,
        expense_growth=3,
    )
    assert figures.revenue_growth == -5.0

    with pytest.raises(InputValidationError):
        OperatingFigures(
            total_revenue=-1000,
            total_expenses=800,
            total_salaries=300,
            employee_count=10,
            left_employees=1,
            average_employee_count=10,
            liquidity=5000,
            monthly_expenses=1000,
            revenue_growth=0,
            expense_growth=0,
        )


def test_activity_event_amount_is_optional() -> None:
    event = ActivityEvent(actor_id="u1", timestamp=datetime(2025, 1, 1, 10), action="login")
    assert event.amount is None

    with pytest.raises(InputValidationError):
        ActivityEvent(
            actor_id="u1",
            timestamp=datetime(2025, 1, 1, 10),
            action="pay",
            amount=math.inf,
        )


def test_compliance_ratios_validate_present_values() -> None:
    assert ComplianceRatios().current_ratio is None
    with pytest.raises(InputValidationError):
        ComplianceRatios(debt_to_equity=math.nan)
