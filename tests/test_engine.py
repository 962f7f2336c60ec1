import json
import math
from datetime import datetime, timedelta

import pytest

from smb_finguard.engine import AnalysisSettings, run_analysis
from smb_finguard.models import (
    ActivityEvent,
    AnalysisSnapshot,
    Approval,
    BalanceSnapshot,
    ComplianceBag,
    ComplianceRatios,
    MonthlyFigures,
    OperatingFigures,
    Transaction,
    UserAccount,
)
from smb_finguard.recommendations import PRIORITY_RANK
from smb_finguard.report import AnalysisReport, report_to_dict
from smb_finguard.validation import InputValidationError

BASE = datetime(2025, 6, 2, 9, 0)


def _snapshot() -> AnalysisSnapshot:
    transactions = [
        Transaction(
            id=f"T{i}",
            amount=float(100 + i * 37),
            date=BASE + timedelta(hours=i),
            actor_id="emp-1",
        )
        for i in range(30)
    ]
    transactions += [
        Transaction(id="D1", amount=5000.0, date=BASE, actor_id="emp-2"),
        Transaction(id="D2", amount=5000.0, date=BASE + timedelta(minutes=30), actor_id="emp-2"),
        Transaction(id="BIG", amount=250_000.0, date=BASE + timedelta(days=2)),
    ]

    activities = [
        ActivityEvent(
            actor_id="night-owl",
            timestamp=BASE.replace(hour=23) + timedelta(days=i),
            action="payment",
            amount=1000.0 if i == 30 else 10.0,
        )
        for i in range(31)
    ]
    activities.append(ActivityEvent(actor_id="alice", timestamp=BASE, action="login"))

    return AnalysisSnapshot(
        transactions=tuple(transactions),
        balance=BalanceSnapshot(
            current_assets=80.0,
            current_liabilities=100.0,
            inventory=20.0,
            cash=10.0,
            revenue=1000.0,
            cost_of_goods_sold=400.0,
            average_inventory=100.0,
            credit_sales=500.0,
            average_receivables=200.0,
            average_total_assets=500.0,
        ),
        activities=tuple(activities),
        series=(100.0, 80.0, 60.0, 40.0),
        compliance=ComplianceBag(
            transactions=tuple(transactions),
            approvals=(Approval(id="P1", created_by="u1", approved_by="u1"),),
            users=(UserAccount(id="u1", role="admin"), UserAccount(id="u2", role="employee")),
            financial_ratios=ComplianceRatios(current_ratio=0.8, debt_to_equity=1.0),
        ),
        operating=OperatingFigures(
            total_revenue=1000.0,
            total_expenses=950.0,
            total_salaries=400.0,
            employee_count=8.0,
            left_employees=2.0,
            average_employee_count=8.0,
            liquidity=500.0,
            monthly_expenses=1000.0,
            revenue_growth=-3.0,
            expense_growth=2.0,
        ),
        monthly=tuple(MonthlyFigures(revenue=1000.0, expenses=900.0) for _ in range(4)),
    )


def test_empty_snapshot_runs_nothing() -> None:
    report = run_analysis(AnalysisSnapshot())

    assert report == AnalysisReport()


def test_analyzers_run_only_for_present_inputs() -> None:
    snapshot = AnalysisSnapshot(series=(1.0, 2.0, 3.0))

    report = run_analysis(snapshot)

    assert report.forecast is not None
    assert report.trend is not None
    assert report.distribution is None
    assert report.liquidity is None
    assert report.behavior is None
    assert report.compliance is None
    assert report.cash_flow is None


def test_full_snapshot_populates_every_section() -> None:
    report = run_analysis(_snapshot())

    assert report.distribution is not None
    assert [d.id for d in report.duplicates] == ["D1"]
    assert report.round_numbers.total_suspicious >= 2
    assert report.anomalies is not None
    assert report.liquidity.current_ratio.status == "critical"
    assert report.efficiency.days_receivables_outstanding == 146
    assert report.performance is not None
    assert report.forecast.trend == "decreasing"
    assert report.trend is not None
    assert report.cash_flow is not None
    assert list(report.behavior) == ["night-owl", "alice"]
    assert report.behavior["night-owl"].risk_score == 65
    assert len(report.compliance) == 4
    assert {w.type for w in report.warnings} == {
        "HIGH_EXPENSE_RATIO",
        "LOW_LIQUIDITY",
        "NEGATIVE_GROWTH",
    }


def test_recommendations_are_sorted_by_priority() -> None:
    report = run_analysis(_snapshot())
    ranks = [PRIORITY_RANK[r.priority] for r in report.recommendations]

    assert report.recommendations
    assert ranks == sorted(ranks)
    assert report.recommendations[0].priority == "critical"


def test_parallel_run_matches_sequential_run() -> None:
    snapshot = _snapshot()

    sequential = run_analysis(snapshot, AnalysisSettings(parallel=False))
    parallel = run_analysis(snapshot, AnalysisSettings(parallel=True, max_workers=8))

    assert parallel == sequential


def test_repeated_runs_are_identical() -> None:
    snapshot = _snapshot()

    assert run_analysis(snapshot) == run_analysis(snapshot)


def test_settings_are_forwarded_to_analyzers() -> None:
    transactions = (
        Transaction(id="A", amount=100.0, date=BASE),
        Transaction(id="B", amount=100.0, date=BASE + timedelta(hours=30)),
    )
    snapshot = AnalysisSnapshot(transactions=transactions)

    assert run_analysis(snapshot).duplicates == ()
    wide = run_analysis(snapshot, AnalysisSettings(duplicate_window_hours=48))
    assert [d.id for d in wide.duplicates] == ["A"]


def test_invalid_settings_are_rejected() -> None:
    with pytest.raises(InputValidationError):
        AnalysisSettings(anomaly_threshold=0)
    with pytest.raises(InputValidationError):
        AnalysisSettings(duplicate_tolerance=-1)
    with pytest.raises(InputValidationError):
        AnalysisSettings(max_workers=0)


@pytest.mark.parametrize("parallel", [False, True])
def test_analyzer_errors_propagate(parallel: bool) -> None:
    snapshot = AnalysisSnapshot(
        series=(1.0, math.nan, 3.0),
        activities=(ActivityEvent(actor_id="u", timestamp=BASE, action="login"),),
    )

    with pytest.raises(InputValidationError):
        run_analysis(snapshot, AnalysisSettings(parallel=parallel))


def test_report_to_dict_is_json_serializable() -> None:
    data = report_to_dict(run_analysis(_snapshot()))

    text = json.dumps(data)

    assert json.loads(text)["duplicates"][0]["date"] == BASE.isoformat()
    assert data["behavior"]["night-owl"]["risk_score"] == 65
    assert isinstance(data["recommendations"], list)
    assert data["liquidity"]["current_ratio"]["status"] == "critical"
