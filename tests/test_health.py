import pytest

from budget_dashboard import health
from budget_dashboard.budget_calculations import BudgetAnalytics


def _analytics(**overrides):
    values = dict(
        total_income=5000.0,
        total_expenses=3750.0,
        net_income=1250.0,
        savings_rate=25.0,
        break_even_point=3500.0,
        expense_volatility_index=10.0,
        cash_flow_cushion=7.0,
        sustainability_months=12.0,
        stable_income=5000.0,
        total_savings=14000.0,
        average_monthly_savings=1000.0,
    )
    values.update(overrides)
    return BudgetAnalytics(**values)


def test_strong_finances_score_full_marks():
    analytics = _analytics()
    score = health.financial_health_score(analytics)
    assert score == 100
    assert health.health_score_label(score) == 'Excellent'
    titles = [item.title for item in health.recommendations(analytics)]
    assert titles == ['Excellent Financial Health!']


def test_small_deficit_earns_partial_cash_flow_points():
    analytics = _analytics(
        net_income=-300.0,
        savings_rate=-6.0,
        cash_flow_cushion=2.0,
        expense_volatility_index=35.0,
    )
    # 0 savings + 10 cushion + 10 small deficit + 5 volatility
    assert health.financial_health_score(analytics) == 25
    assert health.health_score_label(25) == 'Needs Improvement'


def test_recommendations_for_struggling_budget():
    analytics = _analytics(
        net_income=-1000.0,
        savings_rate=-20.0,
        cash_flow_cushion=1.0,
        expense_volatility_index=45.0,
    )
    items = health.recommendations(analytics, 'USD')
    titles = [item.title for item in items]
    assert titles == ['Increase Savings Rate', 'Build Emergency Fund', 'Stabilize Spending', 'Address Deficit']
    deficit = items[-1]
    assert '$1,000' in deficit.message
    assert deficit.status == health.DESTRUCTIVE


@pytest.mark.parametrize('value, expected', [(6, 'success'), (4, 'warning'), (1, 'destructive')])
def test_cushion_status(value, expected):
    assert health.cushion_status(value) == expected


def test_volatility_status_prefers_low_values():
    assert health.volatility_status(10) == health.SUCCESS
    assert health.volatility_status(25) == health.WARNING
    assert health.volatility_status(60) == health.DESTRUCTIVE


def test_health_color_maps_status():
    assert health.health_color(25, 20, 10) == health.STATUS_COLORS['success']


def test_radar_scores_are_clamped():
    scores = health.radar_scores(_analytics(savings_rate=150.0, cash_flow_cushion=12.0, expense_volatility_index=130.0))
    assert set(scores) == {
        'Savings Rate', 'Emergency Fund', 'Income Stability',
        'Cash Flow Health', 'Expense Control', 'Financial Stability',
    }
    assert all(0 <= value <= 100 for value in scores.values())
    assert scores['Savings Rate'] == 100
    assert scores['Expense Control'] == 0


def test_radar_scores_without_income():
    scores = health.radar_scores(_analytics(total_income=0.0, stable_income=0.0, net_income=-500.0, savings_rate=0.0))
    assert scores['Income Stability'] == 0
    assert scores['Cash Flow Health'] == 0


def test_emergency_fund_progress():
    assert health.emergency_fund_progress(_analytics(cash_flow_cushion=3.0), 6) == pytest.approx(50.0)
    assert health.emergency_fund_progress(_analytics(cash_flow_cushion=9.0), 6) == 100.0
    assert health.emergency_fund_progress(_analytics(), 0) == 100.0


def test_radar_health_level_averages_axes():
    scores = {'A': 100.0, 'B': 80.0, 'C': 60.0, 'D': 40.0, 'E': 20.0, 'F': 0.0}
    average, level = health.radar_health_level(scores)
    assert average == pytest.approx(50.0)
    assert level == 'Fair'
    assert health.radar_health_level({'A': 85.0, 'B': 95.0}) == (90.0, 'Excellent')
    assert health.radar_health_level({}) == (0.0, 'Needs Improvement')
