"""Plotly visualisation helpers for the Budget Dashboard.

Each function accepts output from
:class:`~budget_dashboard.budget_calculations.BudgetCalculator` (an
analytics bundle, a projection DataFrame or an expense breakdown) and
returns a `plotly.graph_objects.Figure` that Streamlit can render via
``st.plotly_chart``.  Empty input produces an empty figure with a
"No data to display" title rather than an error.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .budget_calculations import BudgetAnalytics
from .formatting import currency_symbol
from .health import STATUS_COLORS, savings_rate_status


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_overview_chart(analytics: BudgetAnalytics, currency: str = 'USD', title: str | None = None) -> go.Figure:
    """Bar chart of monthly income, expenses and net income.

    Parameters
    ----------
    analytics : BudgetAnalytics
        Bundle returned by ``BudgetCalculator.get_analytics``.
    currency : str
        Currency code used for the axis prefix.
    title : str, optional
        Chart title.
    """
    df = pd.DataFrame({
        "Metric": ["Income", "Expenses", "Net Income"],
        "Amount": [analytics.total_income, analytics.total_expenses, analytics.net_income],
    })
    fig = px.bar(
        df,
        x="Metric",
        y="Amount",
        color="Metric",
        color_discrete_map={
            "Income": STATUS_COLORS['success'],
            "Expenses": STATUS_COLORS['destructive'],
            "Net Income": "#6366F1",
        },
    )
    fig.update_layout(
        title=title or "Monthly overview",
        xaxis_title="",
        yaxis_title="Monthly amount",
        yaxis_tickprefix=currency_symbol(currency),
        showlegend=False,
    )
    return fig


def create_projection_chart(projection: pd.DataFrame, currency: str = 'USD', title: str | None = None) -> go.Figure:
    """Line chart of projected income, inflation-adjusted expenses and surplus.

    Parameters
    ----------
    projection : pandas.DataFrame
        Output of ``BudgetCalculator.projection_frame`` with ``Month``,
        ``Income``, ``Expenses`` and ``Surplus`` columns.
    """
    if projection.empty:
        return _empty_figure()
    long_df = projection.melt(
        id_vars="Month",
        value_vars=["Income", "Expenses", "Surplus"],
        var_name="Series",
        value_name="Amount",
    )
    long_df["Series"] = long_df["Series"].replace({
        "Expenses": "Expenses (Inflation Adjusted)",
        "Surplus": "Net Income",
    })
    fig = px.line(long_df, x="Month", y="Amount", color="Series", markers=True)
    fig.update_layout(
        title=title or "Inflation-adjusted projection",
        xaxis_title="Month",
        yaxis_title="Amount",
        yaxis_tickprefix=currency_symbol(currency),
    )
    return fig


def create_cumulative_savings_chart(projection: pd.DataFrame, currency: str = 'USD', title: str | None = None) -> go.Figure:
    """Area chart of the projection's running savings total."""
    if projection.empty or "Cumulative Savings" not in projection.columns:
        return _empty_figure()
    fig = px.area(projection, x="Month", y="Cumulative Savings")
    fig.update_layout(
        title=title or "Projected cumulative savings",
        xaxis_title="Month",
        yaxis_title="Cumulative savings",
        yaxis_tickprefix=currency_symbol(currency),
    )
    return fig


def create_volatility_chart(breakdown: pd.DataFrame, currency: str = 'USD', title: str | None = None) -> go.Figure:
    """Scatter of monthly amount against volatility for each expense category.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of ``BudgetCalculator.expense_breakdown``.
    """
    if breakdown.empty:
        return _empty_figure()
    fig = px.scatter(
        breakdown,
        x="Monthly Amount",
        y="Volatility",
        color="Type",
        hover_name="Name",
    )
    fig.update_traces(marker={"size": 14})
    fig.update_layout(
        title=title or "Expense volatility",
        xaxis_title="Monthly amount",
        xaxis_tickprefix=currency_symbol(currency),
        yaxis_title="Volatility",
        yaxis_ticksuffix="%",
    )
    return fig


def create_expense_pie_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Pie chart of monthly expense amounts by category, in each category's colour."""
    if breakdown.empty or breakdown["Monthly Amount"].sum() <= 0:
        return _empty_figure()
    fig = go.Figure(go.Pie(
        labels=breakdown["Name"],
        values=breakdown["Monthly Amount"],
        marker={"colors": list(breakdown["Color"])},
        hole=0.4,
    ))
    fig.update_layout(title=title or "Expense breakdown")
    return fig


def create_savings_gauge(savings_rate: float, target: float = 20.0, title: str | None = None) -> go.Figure:
    """Gauge of the savings rate with the target marked as a threshold line."""
    value = max(0.0, min(100.0, savings_rate))
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        number={"suffix": "%", "valueformat": ".1f"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": STATUS_COLORS[savings_rate_status(savings_rate)]},
            "threshold": {
                "line": {"color": "#111827", "width": 3},
                "thickness": 0.8,
                "value": max(0.0, min(100.0, target)),
            },
        },
    ))
    fig.update_layout(title=title or "Savings rate")
    return fig


def create_health_radar(scores: Dict[str, float], title: str | None = None) -> go.Figure:
    """Radar chart of the financial health axes (each scored 0-100)."""
    if not scores:
        return _empty_figure()
    labels = list(scores.keys())
    values = list(scores.values())
    fig = go.Figure(go.Scatterpolar(
        r=values + values[:1],
        theta=labels + labels[:1],
        fill="toself",
        name="Score",
    ))
    fig.update_layout(
        title=title or "Financial health",
        polar={"radialaxis": {"visible": True, "range": [0, 100]}},
        showlegend=False,
    )
    return fig
