import pytest

from smb_finguard.models import BalanceSnapshot, OperatingFigures
from smb_finguard.ratios import (
    RatioResult,
    compute_efficiency_ratios,
    compute_liquidity_ratios,
    compute_performance_ratios,
)


def _balance(**overrides: float) -> BalanceSnapshot:
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
    return BalanceSnapshot(**values)


def _figures(**overrides: float) -> OperatingFigures:
    values = {
        "total_revenue": 1000.0,
        "total_expenses": 800.0,
        "total_salaries": 300.0,
        "employee_count": 10.0,
        "left_employees": 1.0,
        "average_employee_count": 5.0,
        "liquidity": 5000.0,
        "monthly_expenses": 1000.0,
        "revenue_growth": 5.0,
        "expense_growth": 3.0,
    }
    values.update(overrides)
    return OperatingFigures(**values)


def test_liquidity_ratios_healthy_balance() -> None:
    """
    Current assets 150, liabilities 100, no inventory, cash 100:
    all three ratios are healthy.
    """
    result = compute_liquidity_ratios(_balance())

    assert isinstance(result.current_ratio, RatioResult)
    assert result.current_ratio.value == pytest.approx(1.5)
    assert result.current_ratio.status == "healthy"
    assert result.current_ratio.message == "Healthy liquidity."
    assert result.quick_ratio.value == pytest.approx(1.5)
    assert result.quick_ratio.status == "healthy"
    assert result.cash_ratio.value == pytest.approx(1.0)
    assert result.cash_ratio.status == "healthy"


@pytest.mark.parametrize(
    "current_assets, expected_status, expected_message",
    [
        (120.0, "warning", "Liquidity is relatively low."),
        (80.0, "critical", "Critical liquidity shortfall."),
        (350.0, "warning", "Excess liquidity left unused."),
        (300.0, "healthy", "Healthy liquidity."),
    ],
)
def test_current_ratio_bands(
    current_assets: float, expected_status: str, expected_message: str
) -> None:
    result = compute_liquidity_ratios(_balance(current_assets=current_assets))

    assert result.current_ratio.status == expected_status
    assert result.current_ratio.message == expected_message


def test_quick_and_cash_ratio_bands() -> None:
    result = compute_liquidity_ratios(
        _balance(current_assets=150.0, inventory=70.0, cash=15.0)
    )

    assert result.quick_ratio.value == pytest.approx(0.8)
    assert result.quick_ratio.status == "warning"
    assert result.cash_ratio.value == pytest.approx(0.15)
    assert result.cash_ratio.status == "warning"

    result = compute_liquidity_ratios(_balance(inventory=100.0, cash=5.0))
    assert result.quick_ratio.status == "critical"
    assert result.cash_ratio.status == "critical"


def test_liquidity_without_liabilities_reports_zero() -> None:
    """No current liabilities: ratios fall back to 0 instead of dividing by zero."""
    result = compute_liquidity_ratios(_balance(current_liabilities=0.0))

    assert result.current_ratio.value == 0.0
    assert result.current_ratio.status == "critical"
    assert result.cash_ratio.value == 0.0


def test_efficiency_ratios() -> None:
    result = compute_efficiency_ratios(_balance())

    assert result.inventory_turnover == pytest.approx(4.0)
    assert result.days_inventory_outstanding == 91
    assert result.receivables_turnover == pytest.approx(5.0)
    assert result.days_receivables_outstanding == 73
    assert result.asset_turnover == pytest.approx(2.0)
    assert result.operating_cycle == 164


def test_half_days_round_up() -> None:
    """365 / (730 / 121) is exactly 60.5 days of receivables."""
    result = compute_efficiency_ratios(
        _balance(credit_sales=730.0, average_receivables=121.0)
    )

    assert result.days_receivables_outstanding == 61
    assert result.operating_cycle == 91 + 61


def test_efficiency_with_zero_turnover_counts_a_full_year() -> None:
    result = compute_efficiency_ratios(_balance(average_inventory=0.0))

    assert result.inventory_turnover == 0.0
    assert result.days_inventory_outstanding == 365
    assert result.operating_cycle == 365 + 73


def test_performance_ratios() -> None:
    result = compute_performance_ratios(_figures())

    assert result.cost_ratio == pytest.approx(30.0)
    assert result.profit_margin == pytest.approx(20.0)
    assert result.turnover_rate == pytest.approx(20.0)
    assert result.average_employee_cost == pytest.approx(80.0)
    assert result.salary_to_revenue == pytest.approx(30.0)


def test_performance_without_revenue_or_staff() -> None:
    result = compute_performance_ratios(
        _figures(total_revenue=0.0, employee_count=0.0, average_employee_count=0.0)
    )

    assert result.cost_ratio == 0.0
    assert result.profit_margin == 0.0
    assert result.turnover_rate == 0.0
    assert result.average_employee_cost == 0.0
