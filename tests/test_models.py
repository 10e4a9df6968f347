from datetime import date

import pytest

from budget_dashboard.models import (
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


def _payload():
    return {
        'incomes': [
            {
                'id': 'a1',
                'name': 'Salary',
                'amount': 5200,
                'frequency': 'monthly',
                'category': 'salary',
                'isRecurring': True,
                'startDate': '2024-01-01',
            },
            {
                'id': 'a2',
                'name': 'Consulting',
                'amount': 900,
                'frequency': 'biweekly',
                'category': 'freelancing',
                'isRecurring': False,
                'startDate': '2024-02-01T00:00:00.000Z',
                'endDate': '2024-12-31',
            },
        ],
        'expenses': [
            {
                'id': 'b1',
                'name': 'Rent',
                'type': 'fixed',
                'budget': 1800,
                'spent': 1800,
                'frequency': 'monthly',
                'color': '#EF4444',
                'subcategories': ['rent', 'renters insurance'],
                'startDate': '2024-01-01',
            },
        ],
        'monthlySavings': [
            {'id': 'c1', 'month': '2024-03', 'amount': 400, 'description': 'Emergency fund'},
        ],
        'settings': {'currency': 'EUR', 'inflationRate': 2.5, 'emergencyFundTarget': 4},
    }


def test_budget_data_from_dict_parses_records():
    data = BudgetData.from_dict(_payload())

    salary, consulting = data.incomes
    assert salary.frequency is Frequency.MONTHLY
    assert salary.category is IncomeCategory.SALARY
    assert salary.start_date == date(2024, 1, 1)
    assert salary.end_date is None
    assert consulting.start_date == date(2024, 2, 1)
    assert consulting.is_recurring is False

    rent = data.expenses[0]
    assert rent.type is ExpenseType.FIXED
    assert rent.subcategories == ('rent', 'renters insurance')
    assert data.monthly_savings[0].description == 'Emergency fund'
    assert data.settings == Settings(currency='EUR', inflation_rate=2.5, emergency_fund_target=4)


def test_to_dict_uses_stored_key_names():
    payload = BudgetData.from_dict(_payload()).to_dict()
    assert payload['incomes'][1]['endDate'] == '2024-12-31'
    assert payload['incomes'][1]['startDate'] == '2024-02-01'
    assert 'endDate' not in payload['incomes'][0]
    assert payload['expenses'][0]['subcategories'] == ['rent', 'renters insurance']
    assert payload['settings'] == {'currency': 'EUR', 'inflationRate': 2.5, 'emergencyFundTarget': 4.0}
    assert payload['monthlyHistory'] == []


def test_missing_start_date_is_treated_as_legacy():
    income = IncomeSource.from_dict({'id': 'x', 'name': 'Old', 'amount': 10, 'frequency': 'weekly'})
    assert income.start_date is None
    assert income.category is IncomeCategory.OTHER


def test_unknown_frequency_is_rejected():
    with pytest.raises(ValueError, match='frequency'):
        Frequency.parse('quarterly')
    with pytest.raises(ValueError):
        ExpenseCategory.from_dict({'id': 'x', 'type': 'fixed', 'budget': 1, 'frequency': 'daily'})


def test_unknown_expense_type_is_rejected():
    with pytest.raises(ValueError, match='expense type'):
        ExpenseType.parse('luxury')


def test_frequency_parse_is_case_insensitive():
    assert Frequency.parse(' Weekly ') is Frequency.WEEKLY
    assert Frequency.parse(Frequency.ONE_TIME) is Frequency.ONE_TIME


def test_parse_date_variants():
    assert parse_date(None) is None
    assert parse_date('') is None
    assert parse_date(date(2024, 5, 1)) == date(2024, 5, 1)
    with pytest.raises(ValueError):
        parse_date('next tuesday')


def test_savings_month_must_be_year_month():
    with pytest.raises(ValueError):
        MonthlySavings.from_dict({'id': 's', 'month': 'March', 'amount': 10})


def test_settings_fill_missing_values_with_defaults():
    settings = Settings.from_dict({'currency': 'GBP'})
    assert settings.currency == 'GBP'
    assert settings.inflation_rate == Settings().inflation_rate
    assert settings.emergency_fund_target == Settings().emergency_fund_target


def test_budget_data_requires_object():
    with pytest.raises(ValueError):
        BudgetData.from_dict([])
    with pytest.raises(ValueError):
        BudgetData.from_dict({'incomes': 'not a list'})
