"""Financial health scoring and recommendations.

These helpers read an analytics bundle produced by
:class:`~budget_dashboard.budget_calculations.BudgetCalculator` and turn it
into scores, status levels and plain-language recommendations for the
dashboard.  Nothing here recomputes the underlying metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from . import config
from .budget_calculations import BudgetAnalytics
from .formatting import format_currency, format_months, format_percentage

SUCCESS = 'success'
WARNING = 'warning'
DESTRUCTIVE = 'destructive'

STATUS_COLORS = {
    SUCCESS: '#10B981',
    WARNING: '#F59E0B',
    DESTRUCTIVE: '#EF4444',
}

# Months of expenses at which cushion/sustainability count as good/acceptable
MONTHS_GOOD = 6.0
MONTHS_WARNING = 3.0
# Volatility percentages (lower is better)
VOLATILITY_GOOD = 20.0
VOLATILITY_WARNING = 40.0
VOLATILITY_ALERT = 30.0


@dataclass(frozen=True)
class Recommendation:
    title: str
    message: str
    status: str


def health_status(value: float, good: float, warning: float) -> str:
    """Classify a higher-is-better value against two thresholds."""
    if value >= good:
        return SUCCESS
    if value >= warning:
        return WARNING
    return DESTRUCTIVE


def health_color(value: float, good: float, warning: float) -> str:
    return STATUS_COLORS[health_status(value, good, warning)]


def cushion_status(months: float) -> str:
    return health_status(months, MONTHS_GOOD, MONTHS_WARNING)


def sustainability_status(months: float) -> str:
    return health_status(months, MONTHS_GOOD, MONTHS_WARNING)


def volatility_status(volatility: float) -> str:
    if volatility < VOLATILITY_GOOD:
        return SUCCESS
    if volatility < VOLATILITY_WARNING:
        return WARNING
    return DESTRUCTIVE


def savings_rate_status(rate: float) -> str:
    return health_status(rate, config.TARGET_SAVINGS_RATE, 10.0)


def financial_health_score(analytics: BudgetAnalytics) -> int:
    """Score overall financial health from 0 to 100.

    Savings rate contributes up to 40 points, the emergency cushion 30,
    cash-flow sign 20 and expense stability 10.
    """
    score = 0

    rate = analytics.savings_rate
    if rate >= 20:
        score += 40
    elif rate >= 15:
        score += 30
    elif rate >= 10:
        score += 20
    elif rate >= 5:
        score += 10

    cushion = analytics.cash_flow_cushion
    if cushion >= 6:
        score += 30
    elif cushion >= 3:
        score += 20
    elif cushion >= 1:
        score += 10

    if analytics.net_income > 0:
        score += 20
    elif analytics.net_income >= -analytics.total_income * 0.1:
        score += 10

    if analytics.expense_volatility_index < VOLATILITY_GOOD:
        score += 10
    elif analytics.expense_volatility_index < VOLATILITY_WARNING:
        score += 5

    return min(100, score)


def health_score_label(score: float) -> str:
    if score >= 80:
        return 'Excellent'
    if score >= 60:
        return 'Good'
    if score >= 40:
        return 'Fair'
    return 'Needs Improvement'


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def radar_scores(analytics: BudgetAnalytics) -> Dict[str, float]:
    """Scores (0-100) for each axis of the health radar chart."""
    income = analytics.total_income
    stable_share = (analytics.stable_income / income * 100) if income > 0 else 0.0
    if analytics.net_income >= 0:
        cash_flow = min(analytics.net_income / max(income, 1) * 100, 100)
    else:
        cash_flow = 0.0
    return {
        'Savings Rate': _clamp(analytics.savings_rate),
        # 6 months of cushion maps to a full score
        'Emergency Fund': _clamp(analytics.cash_flow_cushion * 100 / MONTHS_GOOD),
        'Income Stability': _clamp(stable_share),
        'Cash Flow Health': cash_flow,
        'Expense Control': _clamp(100 - analytics.expense_volatility_index),
        'Financial Stability': _clamp(analytics.stable_income / max(income, 1) * 100),
    }


def radar_health_level(scores: Dict[str, float]) -> Tuple[float, str]:
    """Average of the radar axes and its health label."""
    if not scores:
        return 0.0, health_score_label(0)
    average = sum(scores.values()) / len(scores)
    return average, health_score_label(average)


def emergency_fund_progress(analytics: BudgetAnalytics, target_months: float) -> float:
    """Percent of the emergency-fund target covered, capped at 100."""
    if target_months <= 0:
        return 100.0
    return _clamp(analytics.cash_flow_cushion / target_months * 100)


def recommendations(analytics: BudgetAnalytics, currency: str = 'USD') -> List[Recommendation]:
    """Build the personalised recommendation list shown on the analysis tab."""
    items: List[Recommendation] = []

    if analytics.savings_rate < config.TARGET_SAVINGS_RATE:
        items.append(Recommendation(
            'Increase Savings Rate',
            f"Your current savings rate is {format_percentage(analytics.savings_rate)}. "
            f"Consider reducing variable expenses to reach the recommended "
            f"{config.TARGET_SAVINGS_RATE:.0f}% savings rate.",
            WARNING,
        ))

    if analytics.cash_flow_cushion < MONTHS_WARNING:
        items.append(Recommendation(
            'Build Emergency Fund',
            f"You have {format_months(analytics.cash_flow_cushion)} of essential expenses saved. "
            "Build up to at least 3-6 months for financial security.",
            DESTRUCTIVE,
        ))

    if analytics.expense_volatility_index > VOLATILITY_ALERT:
        items.append(Recommendation(
            'Stabilize Spending',
            f"Your expense volatility is {format_percentage(analytics.expense_volatility_index)}. "
            "Consider creating more consistent spending patterns for better budgeting.",
            WARNING,
        ))

    if analytics.net_income < 0:
        items.append(Recommendation(
            'Address Deficit',
            f"You have a monthly deficit of {format_currency(abs(analytics.net_income), currency)}. "
            "Consider increasing income or reducing expenses immediately.",
            DESTRUCTIVE,
        ))

    if financial_health_score(analytics) >= 80:
        items.append(Recommendation(
            'Excellent Financial Health!',
            "You're doing great! Consider exploring investment opportunities to grow your wealth further.",
            SUCCESS,
        ))

    return items
