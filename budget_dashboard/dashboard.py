"""Streamlit app for the Budget Dashboard.

The app keeps the record set in ``st.session_state``, persists every
change through :class:`~budget_dashboard.storage.BudgetStorage` and
rebuilds a :class:`~budget_dashboard.budget_calculations.BudgetCalculator`
from the current snapshot on each rerun.

To run the dashboard from the command line::

    streamlit run budget_dashboard/dashboard.py

or use ``run_dashboard.py`` in the project root.
"""

from __future__ import annotations

import os
import sys
from datetime import date

import pandas as pd
import streamlit as st

# Support ``streamlit run budget_dashboard/dashboard.py`` as well as
# package imports.
if __package__:
    from . import config
    from . import health
    from . import records
    from . import storage
    from . import visualization as viz
    from .budget_calculations import BudgetCalculator
    from .formatting import format_currency, format_months, format_percentage
    from .models import BudgetData, ExpenseType, Frequency, IncomeCategory
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from budget_dashboard import config  # type: ignore
    from budget_dashboard import health  # type: ignore
    from budget_dashboard import records  # type: ignore
    from budget_dashboard import storage  # type: ignore
    from budget_dashboard import visualization as viz  # type: ignore
    from budget_dashboard.budget_calculations import BudgetCalculator  # type: ignore
    from budget_dashboard.formatting import format_currency, format_months, format_percentage  # type: ignore
    from budget_dashboard.models import BudgetData, ExpenseType, Frequency, IncomeCategory  # type: ignore

FREQUENCY_OPTIONS = [f.value for f in Frequency]
EXPENSE_TYPE_OPTIONS = [t.value for t in ExpenseType]
INCOME_CATEGORY_OPTIONS = [c.value for c in IncomeCategory]


def _store() -> storage.BudgetStorage:
    return storage.BudgetStorage()


def _current_data() -> BudgetData:
    if 'budget_data' not in st.session_state:
        st.session_state.budget_data = _store().load()
    return st.session_state.budget_data


def _commit(data: BudgetData) -> None:
    """Persist a new snapshot and rerun so every view recomputes."""
    st.session_state.budget_data = data
    try:
        _store().save(data)
    except OSError as exc:  # pragma: no cover - UI display only
        st.error(str(exc))
        return
    st.rerun()


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(
        page_title="Budget Dashboard",
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.title("Budget Dashboard")

    data = _current_data()
    calculator = BudgetCalculator(data)
    currency = data.settings.currency

    _render_sidebar(data)

    overview, income_tab, expense_tab, savings_tab, analysis_tab, settings_tab = st.tabs(
        ["📊 Overview", "💵 Income", "🧾 Expenses", "🏦 Savings", "📈 Analysis", "⚙️ Settings"]
    )
    with overview:
        _render_overview(calculator, currency)
    with income_tab:
        _render_incomes(data, calculator, currency)
    with expense_tab:
        _render_expenses(data, calculator, currency)
    with savings_tab:
        _render_savings(data, calculator, currency)
    with analysis_tab:
        _render_analysis(data, calculator, currency)
    with settings_tab:
        _render_settings(data)


def _render_sidebar(data: BudgetData) -> None:
    st.sidebar.subheader("💾 Data")
    st.sidebar.download_button(
        label="Export JSON",
        data=storage.export_json(data),
        file_name=storage.export_filename(),
        mime="application/json",
    )
    uploaded = st.sidebar.file_uploader("Import JSON", type=["json"])
    if uploaded is not None and st.sidebar.button("Load imported data"):
        try:
            imported = storage.import_json(uploaded.getvalue().decode('utf-8'))
        except (ValueError, UnicodeDecodeError) as exc:
            st.sidebar.error(f"Failed to import file: {exc}")
        else:
            _commit(imported)

    if st.sidebar.button("🗑️ Clear All Data"):
        st.session_state.confirm_clear = True
    if st.session_state.get('confirm_clear', False):
        st.sidebar.warning("⚠️ This will delete ALL budget data!")
        col1, col2 = st.sidebar.columns(2)
        with col1:
            if st.button("✅ Confirm", key="confirm_clear_btn"):
                st.session_state.confirm_clear = False
                st.session_state.budget_data = _store().clear()
                st.rerun()
        with col2:
            if st.button("❌ Cancel", key="cancel_clear_btn"):
                st.session_state.confirm_clear = False
                st.rerun()


def _render_overview(calculator: BudgetCalculator, currency: str) -> None:
    analytics = calculator.get_analytics()
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Monthly Income", format_currency(analytics.total_income, currency))
    col2.metric("Monthly Expenses", format_currency(analytics.total_expenses, currency))
    col3.metric("Net Income", format_currency(analytics.net_income, currency))
    col4.metric("Savings Rate", format_percentage(analytics.savings_rate))

    col1, col2, col3 = st.columns(3)
    col1.metric("Break-Even Point", format_currency(analytics.break_even_point, currency))
    col2.metric("Total Savings", format_currency(analytics.total_savings, currency))
    col3.metric("Stable Income", format_currency(analytics.stable_income, currency))

    left, right = st.columns(2)
    with left:
        st.plotly_chart(viz.create_overview_chart(analytics, currency), use_container_width=True)
    with right:
        st.plotly_chart(
            viz.create_savings_gauge(analytics.savings_rate, config.TARGET_SAVINGS_RATE),
            use_container_width=True,
        )


def _records_frame(items) -> pd.DataFrame:
    return pd.DataFrame([item.to_dict() for item in items])


def _render_incomes(data: BudgetData, calculator: BudgetCalculator, currency: str) -> None:
    st.subheader("Income Sources")
    with st.form("add_income", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        name = col1.text_input("Name")
        amount = col2.number_input("Amount", min_value=0.0, step=50.0)
        frequency = col3.selectbox("Frequency", FREQUENCY_OPTIONS)
        col1, col2, col3, col4 = st.columns(4)
        category = col1.selectbox("Category", INCOME_CATEGORY_OPTIONS)
        is_recurring = col2.checkbox("Recurring", value=True)
        start_date = col3.date_input("Start date", value=date.today())
        has_end = col4.checkbox("Has end date")
        end_date = st.date_input("End date", value=date.today()) if has_end else None
        if st.form_submit_button("Add income") and name:
            _commit(records.add_income(
                data,
                name=name,
                amount=amount,
                frequency=frequency,
                category=category,
                is_recurring=is_recurring,
                start_date=start_date,
                end_date=end_date,
            ))

    if not data.incomes:
        st.info("No income sources yet.")
        return
    for income in data.incomes:
        active = "active" if calculator.is_income_active(income) else "inactive"
        col1, col2 = st.columns([5, 1])
        col1.write(
            f"**{income.name}** · {format_currency(income.amount, currency)} {income.frequency.value} "
            f"({format_currency(calculator.to_monthly_amount(income.amount, income.frequency), currency)}/mo, {active})"
        )
        if col2.button("Delete", key=f"del_income_{income.id}"):
            _commit(records.delete_income(data, income.id))
    st.download_button(
        "Download incomes CSV",
        data=storage.records_to_csv(data, 'incomes'),
        file_name="incomes.csv",
        mime="text/csv",
    )


def _render_expenses(data: BudgetData, calculator: BudgetCalculator, currency: str) -> None:
    st.subheader("Expense Categories")
    with st.form("add_expense", clear_on_submit=True):
        col1, col2, col3, col4 = st.columns(4)
        name = col1.text_input("Name")
        budget = col2.number_input("Budget", min_value=0.0, step=25.0)
        frequency = col3.selectbox("Frequency", FREQUENCY_OPTIONS)
        expense_type = col4.selectbox("Type", EXPENSE_TYPE_OPTIONS)
        col1, col2, col3 = st.columns(3)
        color = col1.color_picker("Colour", value="#6366F1")
        start_date = col2.date_input("Start date", value=date.today())
        has_end = col3.checkbox("Has end date")
        end_date = st.date_input("End date", value=date.today(), key="expense_end") if has_end else None
        if st.form_submit_button("Add expense") and name:
            _commit(records.add_expense(
                data,
                name=name,
                budget=budget,
                frequency=frequency,
                type=expense_type,
                color=color,
                start_date=start_date,
                end_date=end_date,
            ))

    breakdown = calculator.expense_breakdown()
    if breakdown.empty:
        st.info("No active expense categories.")
    else:
        st.plotly_chart(viz.create_expense_pie_chart(breakdown), use_container_width=True)

    for expense in data.expenses:
        col1, col2 = st.columns([5, 1])
        col1.write(
            f"**{expense.name}** ({expense.type.value}) · {format_currency(expense.budget, currency)} "
            f"{expense.frequency.value}"
        )
        if col2.button("Delete", key=f"del_expense_{expense.id}"):
            _commit(records.delete_expense(data, expense.id))
    if data.expenses:
        st.download_button(
            "Download expenses CSV",
            data=storage.records_to_csv(data, 'expenses'),
            file_name="expenses.csv",
            mime="text/csv",
        )


def _render_savings(data: BudgetData, calculator: BudgetCalculator, currency: str) -> None:
    st.subheader("Monthly Savings")
    with st.form("add_savings", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        month = col1.text_input("Month (YYYY-MM)", value=date.today().strftime('%Y-%m'))
        amount = col2.number_input("Amount", min_value=0.0, step=50.0)
        description = col3.text_input("Description")
        if st.form_submit_button("Add savings"):
            try:
                updated = records.add_savings(data, month, amount, description or None)
            except ValueError as exc:
                st.error(str(exc))
            else:
                _commit(updated)

    col1, col2 = st.columns(2)
    col1.metric("Total Savings", format_currency(calculator.get_total_savings(), currency))
    col2.metric("Average per Entry", format_currency(calculator.get_average_monthly_savings(), currency))

    if data.monthly_savings:
        frame = _records_frame(data.monthly_savings)
        st.dataframe(frame.sort_values('month', ascending=False), use_container_width=True, hide_index=True)
        for entry in data.monthly_savings:
            if st.button(f"Delete {entry.month} · {format_currency(entry.amount, currency)}", key=f"del_savings_{entry.id}"):
                _commit(records.delete_savings(data, entry.id))


def _render_analysis(data: BudgetData, calculator: BudgetCalculator, currency: str) -> None:
    analytics = calculator.get_analytics()
    score = health.financial_health_score(analytics)
    st.subheader(f"Financial Health Score: {score}/100 · {health.health_score_label(score)}")
    st.caption("Based on savings rate, emergency fund, income stability, and expense management")

    col1, col2, col3 = st.columns(3)
    col1.metric("Cash Flow Cushion", format_months(analytics.cash_flow_cushion))
    col2.metric("Sustainability", format_months(analytics.sustainability_months))
    col3.metric("Expense Volatility", format_percentage(analytics.expense_volatility_index))
    st.progress(
        health.emergency_fund_progress(analytics, data.settings.emergency_fund_target) / 100,
        text=f"Emergency fund target: {data.settings.emergency_fund_target:.0f} months",
    )

    months = st.slider("Projection months", min_value=3, max_value=60, value=config.PROJECTION_MONTHS)
    include_one_time = st.checkbox("Include one-time items in their month")
    projection = calculator.projection_frame(months, include_one_time=include_one_time)
    st.plotly_chart(viz.create_projection_chart(projection, currency), use_container_width=True)
    st.plotly_chart(viz.create_cumulative_savings_chart(projection, currency), use_container_width=True)
    if not projection.empty:
        st.download_button(
            "Download projection CSV",
            data=projection.to_csv(index=False),
            file_name="projection.csv",
            mime="text/csv",
        )

    left, right = st.columns(2)
    with left:
        st.plotly_chart(viz.create_volatility_chart(calculator.expense_breakdown(), currency), use_container_width=True)
    with right:
        scores = health.radar_scores(analytics)
        st.plotly_chart(viz.create_health_radar(scores), use_container_width=True)
        average, level = health.radar_health_level(scores)
        st.caption(f"Overall health: {level} ({average:.0f}/100)")

    st.subheader("Personalized Recommendations")
    for item in health.recommendations(analytics, currency):
        if item.status == health.SUCCESS:
            st.success(f"**{item.title}**  \n{item.message}")
        elif item.status == health.WARNING:
            st.warning(f"**{item.title}**  \n{item.message}")
        else:
            st.error(f"**{item.title}**  \n{item.message}")


def _render_settings(data: BudgetData) -> None:
    st.subheader("Settings")
    with st.form("settings"):
        currency = st.text_input("Currency", value=data.settings.currency, max_chars=3)
        inflation = st.number_input(
            "Inflation rate (% per year)", value=float(data.settings.inflation_rate), step=0.1
        )
        target = st.number_input(
            "Emergency fund target (months)",
            min_value=0.0,
            value=float(data.settings.emergency_fund_target),
            step=1.0,
        )
        if st.form_submit_button("Save settings"):
            _commit(records.update_settings(
                data,
                currency=currency.upper(),
                inflation_rate=inflation,
                emergency_fund_target=target,
            ))


if __name__ == "__main__":
    main()
