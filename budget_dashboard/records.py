"""Editing helpers for the record set.

Every function takes a :class:`BudgetData` snapshot and returns a new one;
the input is never modified.  The dashboard persists the returned snapshot
and builds a fresh calculator from it.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, Callable, Optional, Tuple, TypeVar

from .models import (
    BudgetData,
    ExpenseCategory,
    ExpenseType,
    Frequency,
    IncomeCategory,
    IncomeSource,
    MonthlySavings,
    Settings,
    parse_date,
)

T = TypeVar('T')

# Fields whose values arrive as strings from forms and imports
_INCOME_PARSERS: dict = {
    'frequency': Frequency.parse,
    'category': IncomeCategory.parse,
    'start_date': parse_date,
    'end_date': parse_date,
    'amount': float,
}
_EXPENSE_PARSERS: dict = {
    'frequency': Frequency.parse,
    'type': ExpenseType.parse,
    'start_date': parse_date,
    'end_date': parse_date,
    'budget': float,
    'spent': float,
    'subcategories': tuple,
}


def new_id() -> str:
    return str(uuid.uuid4())


def _coerce(updates: dict, parsers: dict) -> dict:
    coerced = {}
    for key, value in updates.items():
        parser = parsers.get(key)
        if parser is not None and value is not None:
            value = parser(value)
        coerced[key] = value
    return coerced


def _replace_item(items: Tuple[T, ...], item_id: str, change: Callable[[T], T]) -> Tuple[T, ...]:
    if not any(item.id == item_id for item in items):
        raise KeyError(item_id)
    return tuple(change(item) if item.id == item_id else item for item in items)


def _drop_item(items: Tuple[T, ...], item_id: str) -> Tuple[T, ...]:
    remaining = tuple(item for item in items if item.id != item_id)
    if len(remaining) == len(items):
        raise KeyError(item_id)
    return remaining


def add_income(data: BudgetData, **fields: Any) -> BudgetData:
    """Append a new income source built from ``fields`` (an id is generated)."""
    fields = _coerce(fields, _INCOME_PARSERS)
    income = IncomeSource(id=new_id(), **fields)
    return data.with_changes(incomes=data.incomes + (income,))


def update_income(data: BudgetData, income_id: str, **updates: Any) -> BudgetData:
    """Apply a partial update to one income source.

    Raises:
        KeyError: If no income has ``income_id``
    """
    updates = _coerce(updates, _INCOME_PARSERS)
    incomes = _replace_item(data.incomes, income_id, lambda item: replace(item, **updates))
    return data.with_changes(incomes=incomes)


def delete_income(data: BudgetData, income_id: str) -> BudgetData:
    return data.with_changes(incomes=_drop_item(data.incomes, income_id))


def add_expense(data: BudgetData, **fields: Any) -> BudgetData:
    """Append a new expense category built from ``fields`` (an id is generated)."""
    fields = _coerce(fields, _EXPENSE_PARSERS)
    expense = ExpenseCategory(id=new_id(), **fields)
    return data.with_changes(expenses=data.expenses + (expense,))


def update_expense(data: BudgetData, expense_id: str, **updates: Any) -> BudgetData:
    """Apply a partial update to one expense category.

    Raises:
        KeyError: If no expense has ``expense_id``
    """
    updates = _coerce(updates, _EXPENSE_PARSERS)
    expenses = _replace_item(data.expenses, expense_id, lambda item: replace(item, **updates))
    return data.with_changes(expenses=expenses)


def delete_expense(data: BudgetData, expense_id: str) -> BudgetData:
    return data.with_changes(expenses=_drop_item(data.expenses, expense_id))


def add_savings(
    data: BudgetData,
    month: str,
    amount: float,
    description: Optional[str] = None,
) -> BudgetData:
    """Record a savings deposit; several entries for one month are all kept."""
    entry = MonthlySavings.from_dict({
        'id': new_id(),
        'month': month,
        'amount': amount,
        'description': description,
    })
    return data.with_changes(monthly_savings=data.monthly_savings + (entry,))


def delete_savings(data: BudgetData, savings_id: str) -> BudgetData:
    return data.with_changes(monthly_savings=_drop_item(data.monthly_savings, savings_id))


def update_settings(data: BudgetData, **updates: Any) -> BudgetData:
    """Change currency, inflation rate or emergency fund target."""
    settings: Settings = replace(data.settings, **updates)
    return data.with_changes(settings=settings)
