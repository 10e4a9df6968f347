from datetime import date

import pandas as pd
import plotly.graph_objects as go

from budget_dashboard import visualization as viz
from budget_dashboard.budget_calculations import BudgetCalculator
from budget_dashboard.health import radar_scores
from budget_dashboard.models import BudgetData


def _calculator():
    data = BudgetData.from_dict({
        'incomes': [{'id': 'i', 'name': 'Salary', 'amount': 4000, 'frequency': 'monthly', 'startDate': '2024-01-01'}],
        'expenses': [
            {'id': 'e1', 'name': 'Rent', 'type': 'fixed', 'budget': 1500, 'frequency': 'monthly', 'startDate': '2024-01-01'},
            {'id': 'e2', 'name': 'Food', 'type': 'variable', 'budget': 100, 'frequency': 'weekly', 'startDate': '2024-01-01'},
        ],
    })
    return BudgetCalculator(data, as_of=date(2024, 6, 1))


def test_overview_chart_has_three_bars():
    fig = viz.create_overview_chart(_calculator().get_analytics())
    assert isinstance(fig, go.Figure)
    assert sum(len(trace.x) for trace in fig.data) == 3


def test_projection_chart_plots_three_series():
    fig = viz.create_projection_chart(_calculator().projection_frame(6))
    assert len(fig.data) == 3


def test_empty_inputs_give_placeholder_figures():
    assert viz.create_projection_chart(pd.DataFrame()).layout.title.text == "No data to display"
    assert viz.create_volatility_chart(pd.DataFrame()).layout.title.text == "No data to display"
    assert viz.create_expense_pie_chart(
        pd.DataFrame(columns=['Name', 'Monthly Amount', 'Color'])
    ).layout.title.text == "No data to display"
    assert viz.create_health_radar({}).layout.title.text == "No data to display"


def test_volatility_and_pie_charts_use_breakdown():
    breakdown = _calculator().expense_breakdown()
    assert len(viz.create_volatility_chart(breakdown).data) == 2
    pie = viz.create_expense_pie_chart(breakdown)
    assert list(pie.data[0].labels) == ['Rent', 'Food']


def test_savings_gauge_clamps_value():
    fig = viz.create_savings_gauge(150.0)
    assert fig.data[0].value == 100.0


def test_health_radar_closes_polygon():
    fig = viz.create_health_radar(radar_scores(_calculator().get_analytics()))
    trace = fig.data[0]
    assert len(trace.r) == 7
    assert trace.theta[0] == trace.theta[-1]
