from datetime import date

import pytest

from budget_dashboard import records
from budget_dashboard.models import BudgetData, ExpenseType, Frequency


def _with_income():
    return records.add_income(
        BudgetData(),
        name='Salary',
        amount='3500',
        frequency='biweekly',
        category='salary',
        start_date='2024-01-15',
    )


def test_add_income_generates_id_and_parses_fields():
    data = _with_income()
    income = data.incomes[0]
    assert income.id
    assert income.amount == 3500.0
    assert income.frequency is Frequency.BIWEEKLY
    assert income.start_date == date(2024, 1, 15)


def test_edits_return_new_snapshot():
    original = BudgetData()
    updated = records.add_expense(original, name='Food', budget=400, frequency='monthly', type='variable')
    assert original.expenses == ()
    assert updated.expenses[0].type is ExpenseType.VARIABLE


def test_update_income_applies_partial_changes():
    data = _with_income()
    income_id = data.incomes[0].id
    updated = records.update_income(data, income_id, amount=3600, end_date='2024-12-31')
    income = updated.incomes[0]
    assert income.amount == 3600.0
    assert income.end_date == date(2024, 12, 31)
    assert income.name == 'Salary'
    assert data.incomes[0].amount == 3500.0


def test_update_and_delete_unknown_id_raise_key_error():
    data = _with_income()
    with pytest.raises(KeyError):
        records.update_income(data, 'missing', amount=1)
    with pytest.raises(KeyError):
        records.delete_expense(data, 'missing')


def test_delete_income_removes_only_that_record():
    data = records.add_income(_with_income(), name='Rental', amount=900, frequency='monthly')
    salary_id = data.incomes[0].id
    remaining = records.delete_income(data, salary_id)
    assert [income.name for income in remaining.incomes] == ['Rental']


def test_update_expense_changes_type():
    data = records.add_expense(BudgetData(), name='Car', budget=250, frequency='monthly', type='variable')
    expense_id = data.expenses[0].id
    updated = records.update_expense(data, expense_id, type='fixed')
    assert updated.expenses[0].type is ExpenseType.FIXED


def test_savings_entries_for_same_month_are_kept():
    data = records.add_savings(BudgetData(), '2024-04', 100)
    data = records.add_savings(data, '2024-04', 250, 'Bonus')
    assert [entry.amount for entry in data.monthly_savings] == [100.0, 250.0]
    assert len({entry.id for entry in data.monthly_savings}) == 2

    trimmed = records.delete_savings(data, data.monthly_savings[0].id)
    assert [entry.amount for entry in trimmed.monthly_savings] == [250.0]


def test_add_savings_rejects_bad_month():
    with pytest.raises(ValueError):
        records.add_savings(BudgetData(), '04/2024', 100)


def test_update_settings():
    data = records.update_settings(BudgetData(), currency='GBP', inflation_rate=4.0)
    assert data.settings.currency == 'GBP'
    assert data.settings.inflation_rate == 4.0
