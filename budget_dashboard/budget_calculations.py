"""Budget analytics engine.

This module turns a snapshot of income sources, expense categories and
savings entries into normalized monthly aggregates, risk/health metrics
and an inflation-adjusted projection.  All calculations are pure: the
calculator never mutates the snapshot and every query is a function of
the snapshot plus the evaluation date captured at construction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .models import (
    BudgetData,
    ExpenseCategory,
    ExpenseType,
    Frequency,
    IncomeSource,
    MonthlyData,
)

WEEKLY_MULTIPLIER = 4.33
BIWEEKLY_MULTIPLIER = 2.17

# Volatility (percent) assumed when a category has too little history
FALLBACK_VOLATILITY: Dict[ExpenseType, float] = {
    ExpenseType.FIXED: 5.0,
    ExpenseType.VARIABLE: 25.0,
    ExpenseType.OCCASIONAL: 40.0,
}

# Floor for the sustainability denominator, as a share of monthly expenses
SUSTAINABILITY_FLOOR = 0.1


@dataclass(frozen=True)
class BudgetAnalytics:
    """Snapshot-in-time bundle of the headline metrics."""

    total_income: float
    total_expenses: float
    net_income: float
    savings_rate: float
    break_even_point: float
    expense_volatility_index: float
    cash_flow_cushion: float
    sustainability_months: float
    stable_income: float
    total_savings: float
    average_monthly_savings: float

    def to_dict(self) -> Dict[str, float]:
        """Return the bundle keyed the way the stored data and UI name them."""
        values = asdict(self)
        return {_camel(key): value for key, value in values.items()}


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def to_monthly_amount(amount: float, frequency: Union[Frequency, str]) -> float:
    """Convert an amount at ``frequency`` into its monthly equivalent.

    Flat multipliers are used rather than calendar-exact conversions.
    One-time amounts contribute nothing to recurring monthly figures.
    """
    frequency = Frequency.parse(frequency)
    if frequency is Frequency.MONTHLY:
        return amount
    if frequency is Frequency.WEEKLY:
        return amount * WEEKLY_MULTIPLIER
    if frequency is Frequency.BIWEEKLY:
        return amount * BIWEEKLY_MULTIPLIER
    if frequency is Frequency.YEARLY:
        return amount / 12
    if frequency is Frequency.ONE_TIME:
        return 0.0
    raise ValueError(f"Unhandled frequency: {frequency!r}")


def _within(start: Optional[date], end: Optional[date], first: date, last: date) -> bool:
    """True when ``[start, end]`` overlaps ``[first, last]``; missing bounds are open."""
    if start is not None and start > last:
        return False
    if end is not None and end < first:
        return False
    return True


def _as_date(value: Optional[date]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _counts_as_recurring(income: IncomeSource) -> bool:
    return income.is_recurring or income.frequency is not Frequency.ONE_TIME


class BudgetCalculator:
    """Stateless calculator over one :class:`BudgetData` snapshot."""

    def __init__(self, data: BudgetData, as_of: Optional[date] = None):
        """Initialize with a record snapshot.

        Args:
            data: The record set to analyse.
            as_of: Evaluation date for every activation check.  Defaults to
                today, captured once so all metrics agree on "now".
        """
        self.data = data
        self.as_of = _as_date(as_of) or date.today()

    # ------------------------------------------------------------------
    # Frequency normalization and activation
    # ------------------------------------------------------------------
    def to_monthly_amount(self, amount: float, frequency: Union[Frequency, str]) -> float:
        return to_monthly_amount(amount, frequency)

    def is_income_active(self, income: IncomeSource, at: Optional[date] = None) -> bool:
        """Check whether an income source is in effect on ``at`` (default: as-of date)."""
        at = _as_date(at) or self.as_of
        if income.start_date is None:
            return _counts_as_recurring(income)
        return _within(income.start_date, income.end_date, at, at)

    def is_expense_active(self, expense: ExpenseCategory, at: Optional[date] = None) -> bool:
        """Check whether an expense is in effect on ``at``; undated expenses always are."""
        at = _as_date(at) or self.as_of
        if expense.start_date is None:
            return True
        return _within(expense.start_date, expense.end_date, at, at)

    def active_incomes(self) -> List[IncomeSource]:
        return [income for income in self.data.incomes if self.is_income_active(income)]

    def active_expenses(self) -> List[ExpenseCategory]:
        return [expense for expense in self.data.expenses if self.is_expense_active(expense)]

    def _expense_total(self, expenses: Iterable[ExpenseCategory]) -> float:
        return sum((self.to_monthly_amount(exp.budget, exp.frequency) for exp in expenses), 0.0)

    def _income_total(self, incomes: Iterable[IncomeSource]) -> float:
        return sum((self.to_monthly_amount(inc.amount, inc.frequency) for inc in incomes), 0.0)

    # ------------------------------------------------------------------
    # Aggregate scalar metrics
    # ------------------------------------------------------------------
    def get_total_monthly_income(self) -> float:
        """Calculate total monthly income from active sources."""
        return self._income_total(self.active_incomes())

    def get_total_monthly_expenses(self) -> float:
        """Calculate total monthly expenses from active categories."""
        return self._expense_total(self.active_expenses())

    def get_net_income(self) -> float:
        return self.get_total_monthly_income() - self.get_total_monthly_expenses()

    def get_savings_rate(self) -> float:
        """Net income as a percentage of income, 0 without income."""
        income = self.get_total_monthly_income()
        if income == 0:
            return 0.0
        return (income - self.get_total_monthly_expenses()) / income * 100

    def get_break_even_point(self) -> float:
        """Minimum monthly income covering active fixed and variable expenses."""
        essential = [
            exp for exp in self.active_expenses()
            if exp.type in (ExpenseType.FIXED, ExpenseType.VARIABLE)
        ]
        return self._expense_total(essential)

    def get_fixed_expenses(self) -> float:
        return self._expense_total(
            exp for exp in self.active_expenses() if exp.type is ExpenseType.FIXED
        )

    def get_stable_income(self) -> float:
        """Monthly income from recurring, non-one-time active sources."""
        stable = [
            inc for inc in self.active_incomes()
            if inc.is_recurring and inc.frequency is not Frequency.ONE_TIME
        ]
        return self._income_total(stable)

    def get_total_savings(self) -> float:
        """Lifetime sum of every recorded savings entry."""
        return sum((entry.amount for entry in self.data.monthly_savings), 0.0)

    def get_average_monthly_savings(self) -> float:
        count = len(self.data.monthly_savings)
        if count == 0:
            return 0.0
        return self.get_total_savings() / count

    def get_cash_flow_cushion(self) -> float:
        """Months of fixed expenses covered by total savings."""
        fixed = self.get_fixed_expenses()
        if fixed == 0:
            return 0.0
        return self.get_total_savings() / fixed

    def get_savings_sustainability(self) -> float:
        """Estimate how many months current savings would last.

        With a positive net income the burn is expenses less net income,
        floored at 10% of expenses so a thin surplus does not produce an
        absurd figure.  A deficit adds to the burn.
        """
        expenses = self.get_total_monthly_expenses()
        if expenses <= 0:
            return 0.0
        net_income = self.get_total_monthly_income() - expenses
        savings = self.get_total_savings()
        if net_income > 0:
            burn = max(expenses - net_income, expenses * SUSTAINABILITY_FLOOR)
        else:
            burn = expenses + abs(net_income)
        return savings / burn

    # ------------------------------------------------------------------
    # Volatility
    # ------------------------------------------------------------------
    def get_category_volatility(self) -> Dict[str, float]:
        """Calculate the coefficient of variation (percent) for each expense category.

        The series for a category is drawn from the months in
        ``monthly_history``; a month that does not record the category counts
        as zero spend.  With fewer than two months a type-based estimate is
        used instead.
        """
        volatility: Dict[str, float] = {}
        for category in self.data.expenses:
            series = [
                month.categories.get(category.id, 0.0)
                for month in self.data.monthly_history
            ]
            if len(series) < 2:
                volatility[category.id] = FALLBACK_VOLATILITY.get(category.type, 40.0)
                continue
            values = np.asarray(series, dtype=float)
            mean = float(values.mean())
            if mean <= 0:
                volatility[category.id] = 0.0
                continue
            std_dev = float(values.std(ddof=0))
            volatility[category.id] = std_dev / mean * 100
        return volatility

    def get_expense_volatility_index(self) -> float:
        """Mean of the per-category volatility values, 0 without categories."""
        volatility = self.get_category_volatility()
        if not volatility:
            return 0.0
        return sum(volatility.values()) / len(volatility)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------
    def projection_start(self) -> date:
        """First day of the month holding the earliest income start date."""
        starts = [inc.start_date for inc in self.data.incomes if inc.start_date is not None]
        anchor = min(starts) if starts else self.as_of
        return anchor.replace(day=1)

    def get_inflation_adjusted_projection(
        self,
        months_ahead: int,
        include_one_time: bool = False,
    ) -> List[MonthlyData]:
        """Project income, inflated expenses and cumulative savings month by month.

        Args:
            months_ahead: Number of calendar months to emit.
            include_one_time: Count one-time incomes and expenses at full
                value in the month their start date falls in.

        Returns:
            One :class:`MonthlyData` per month, oldest first.  The running
            savings total is stored under ``categories['savings']``.
        """
        projections: List[MonthlyData] = []
        if months_ahead <= 0:
            return projections

        monthly_inflation = self.data.settings.inflation_rate / 100 / 12
        first_period = pd.Period(self.projection_start().strftime('%Y-%m'), freq='M')
        cumulative_savings = 0.0

        for i in range(months_ahead):
            period = first_period + i
            month_start = period.start_time.date()
            month_end = period.end_time.date()

            income = self._income_total(
                inc for inc in self.data.incomes
                if _counts_as_recurring(inc)
                and _within(inc.start_date, inc.end_date, month_start, month_end)
            )
            raw_expenses = self._expense_total(
                exp for exp in self.data.expenses
                if _within(exp.start_date, exp.end_date, month_start, month_end)
            )
            if include_one_time:
                income += self._one_time_total(self.data.incomes, 'amount', month_start, month_end)
                raw_expenses += self._one_time_total(self.data.expenses, 'budget', month_start, month_end)

            inflation_multiplier = (1 + monthly_inflation) ** i
            adjusted_expenses = raw_expenses * inflation_multiplier
            surplus = income - adjusted_expenses
            cumulative_savings += surplus

            projections.append(MonthlyData(
                month=str(period),
                income=income,
                expenses=adjusted_expenses,
                surplus=surplus,
                savings=surplus,
                categories={'savings': cumulative_savings},
            ))

        return projections

    @staticmethod
    def _one_time_total(records, amount_attr: str, month_start: date, month_end: date) -> float:
        total = 0.0
        for record in records:
            if record.frequency is not Frequency.ONE_TIME or record.start_date is None:
                continue
            if month_start <= record.start_date <= month_end:
                total += getattr(record, amount_attr)
        return total

    def projection_frame(self, months_ahead: int, include_one_time: bool = False) -> pd.DataFrame:
        """Return the projection as a DataFrame for charts and CSV export."""
        columns = ['Month', 'Income', 'Expenses', 'Surplus', 'Cumulative Savings']
        rows = [
            {
                'Month': point.month,
                'Income': point.income,
                'Expenses': point.expenses,
                'Surplus': point.surplus,
                'Cumulative Savings': point.categories.get('savings', 0.0),
            }
            for point in self.get_inflation_adjusted_projection(months_ahead, include_one_time)
        ]
        return pd.DataFrame(rows, columns=columns)

    def expense_breakdown(self) -> pd.DataFrame:
        """Active expenses with their monthly amount and volatility."""
        columns = ['Id', 'Name', 'Type', 'Monthly Amount', 'Volatility', 'Color']
        volatility = self.get_category_volatility()
        rows = [
            {
                'Id': exp.id,
                'Name': exp.name,
                'Type': exp.type.value,
                'Monthly Amount': self.to_monthly_amount(exp.budget, exp.frequency),
                'Volatility': volatility.get(exp.id, 0.0),
                'Color': exp.color,
            }
            for exp in self.active_expenses()
        ]
        return pd.DataFrame(rows, columns=columns)

    # ------------------------------------------------------------------
    # Aggregate bundle
    # ------------------------------------------------------------------
    def get_analytics(self) -> BudgetAnalytics:
        """Generate the comprehensive analytics bundle."""
        total_income = self.get_total_monthly_income()
        total_expenses = self.get_total_monthly_expenses()
        net_income = total_income - total_expenses
        savings_rate = (net_income / total_income * 100) if total_income != 0 else 0.0

        return BudgetAnalytics(
            total_income=total_income,
            total_expenses=total_expenses,
            net_income=net_income,
            savings_rate=savings_rate,
            break_even_point=self.get_break_even_point(),
            expense_volatility_index=self.get_expense_volatility_index(),
            cash_flow_cushion=self.get_cash_flow_cushion(),
            sustainability_months=self.get_savings_sustainability(),
            stable_income=self.get_stable_income(),
            total_savings=self.get_total_savings(),
            average_monthly_savings=self.get_average_monthly_savings(),
        )
