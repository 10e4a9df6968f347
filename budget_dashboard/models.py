"""Record types for the budget dashboard.

The stored record set is a JSON document with camelCase keys.  Each record
type here is a frozen dataclass with ``from_dict``/``to_dict`` helpers so the
storage layer can round-trip that document while the analytics engine works
with typed, immutable values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from . import config


class Frequency(str, Enum):
    """Cadence at which a monetary amount recurs."""

    MONTHLY = 'monthly'
    WEEKLY = 'weekly'
    BIWEEKLY = 'biweekly'
    YEARLY = 'yearly'
    ONE_TIME = 'one-time'

    @classmethod
    def parse(cls, value: Any) -> 'Frequency':
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown frequency: {value!r}") from None


class ExpenseType(str, Enum):
    FIXED = 'fixed'
    VARIABLE = 'variable'
    OCCASIONAL = 'occasional'

    @classmethod
    def parse(cls, value: Any) -> 'ExpenseType':
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown expense type: {value!r}") from None


class IncomeCategory(str, Enum):
    SALARY = 'salary'
    FREELANCING = 'freelancing'
    INVESTMENTS = 'investments'
    RENTAL = 'rental'
    BUSINESS = 'business'
    OTHER = 'other'

    @classmethod
    def parse(cls, value: Any) -> 'IncomeCategory':
        if isinstance(value, cls):
            return value
        if value is None or value == '':
            return cls.OTHER
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown income category: {value!r}") from None


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (or ISO timestamp) into a ``date``.

    Empty values return ``None`` so optional and legacy dates stay open-ended.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None


def format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_month(value: Any) -> str:
    """Validate a ``YYYY-MM`` month key."""
    text = str(value).strip()[:7]
    try:
        datetime.strptime(text, '%Y-%m')
    except ValueError:
        raise ValueError(f"Invalid month (expected YYYY-MM): {value!r}") from None
    return text


@dataclass(frozen=True)
class IncomeSource:
    """One income stream at a nominal amount per ``frequency``."""

    id: str
    name: str
    amount: float
    frequency: Frequency
    category: IncomeCategory = IncomeCategory.OTHER
    is_recurring: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'IncomeSource':
        return cls(
            id=str(payload['id']),
            name=str(payload.get('name', '')),
            amount=float(payload.get('amount', 0) or 0),
            frequency=Frequency.parse(payload.get('frequency', Frequency.MONTHLY)),
            category=IncomeCategory.parse(payload.get('category')),
            is_recurring=bool(payload.get('isRecurring', True)),
            start_date=parse_date(payload.get('startDate')),
            end_date=parse_date(payload.get('endDate')),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'amount': self.amount,
            'frequency': self.frequency.value,
            'category': self.category.value,
            'isRecurring': self.is_recurring,
            'startDate': format_date(self.start_date),
        }
        if self.end_date is not None:
            payload['endDate'] = format_date(self.end_date)
        return payload


@dataclass(frozen=True)
class ExpenseCategory:
    """A budgeted expense line.

    ``spent`` and ``color`` are carried for display only; the analytics
    engine never reads them.
    """

    id: str
    name: str
    type: ExpenseType
    budget: float
    frequency: Frequency
    spent: float = 0.0
    color: str = '#6366F1'
    subcategories: Tuple[str, ...] = ()
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'ExpenseCategory':
        return cls(
            id=str(payload['id']),
            name=str(payload.get('name', '')),
            type=ExpenseType.parse(payload.get('type', ExpenseType.VARIABLE)),
            budget=float(payload.get('budget', 0) or 0),
            frequency=Frequency.parse(payload.get('frequency', Frequency.MONTHLY)),
            spent=float(payload.get('spent', 0) or 0),
            color=str(payload.get('color') or '#6366F1'),
            subcategories=tuple(payload.get('subcategories') or ()),
            start_date=parse_date(payload.get('startDate')),
            end_date=parse_date(payload.get('endDate')),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'type': self.type.value,
            'budget': self.budget,
            'spent': self.spent,
            'frequency': self.frequency.value,
            'color': self.color,
            'startDate': format_date(self.start_date),
        }
        if self.subcategories:
            payload['subcategories'] = list(self.subcategories)
        if self.end_date is not None:
            payload['endDate'] = format_date(self.end_date)
        return payload


@dataclass(frozen=True)
class MonthlySavings:
    """A savings deposit recorded against a calendar month."""

    id: str
    month: str
    amount: float
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'MonthlySavings':
        return cls(
            id=str(payload['id']),
            month=_parse_month(payload['month']),
            amount=float(payload.get('amount', 0) or 0),
            description=payload.get('description') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'id': self.id, 'month': self.month, 'amount': self.amount}
        if self.description:
            payload['description'] = self.description
        return payload


@dataclass(frozen=True)
class MonthlyData:
    """One month of income/expense figures.

    Produced by the projection and also used for recorded spending history,
    where ``categories`` maps expense category ids to the amount spent.
    """

    month: str
    income: float = 0.0
    expenses: float = 0.0
    surplus: float = 0.0
    savings: float = 0.0
    categories: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'MonthlyData':
        categories = payload.get('categories') or {}
        return cls(
            month=_parse_month(payload['month']),
            income=float(payload.get('income', 0) or 0),
            expenses=float(payload.get('expenses', 0) or 0),
            surplus=float(payload.get('surplus', 0) or 0),
            savings=float(payload.get('savings', 0) or 0),
            categories={str(k): float(v) for k, v in categories.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month,
            'income': self.income,
            'expenses': self.expenses,
            'surplus': self.surplus,
            'savings': self.savings,
            'categories': dict(self.categories),
        }


@dataclass(frozen=True)
class Settings:
    currency: str = config.DEFAULT_CURRENCY
    inflation_rate: float = config.DEFAULT_INFLATION_RATE
    emergency_fund_target: float = config.DEFAULT_EMERGENCY_FUND_TARGET

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> 'Settings':
        merged = config.default_settings()
        merged.update({k: v for k, v in (payload or {}).items() if v is not None})
        return cls(
            currency=str(merged['currency']),
            inflation_rate=float(merged['inflationRate']),
            emergency_fund_target=float(merged['emergencyFundTarget']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'currency': self.currency,
            'inflationRate': self.inflation_rate,
            'emergencyFundTarget': self.emergency_fund_target,
        }


@dataclass(frozen=True)
class BudgetData:
    """Immutable snapshot of the whole record set."""

    incomes: Tuple[IncomeSource, ...] = ()
    expenses: Tuple[ExpenseCategory, ...] = ()
    monthly_savings: Tuple[MonthlySavings, ...] = ()
    monthly_history: Tuple[MonthlyData, ...] = ()
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'BudgetData':
        if not isinstance(payload, Mapping):
            raise ValueError("Budget data must be a JSON object")
        return cls(
            incomes=_build(IncomeSource, payload.get('incomes')),
            expenses=_build(ExpenseCategory, payload.get('expenses')),
            monthly_savings=_build(MonthlySavings, payload.get('monthlySavings')),
            monthly_history=_build(MonthlyData, payload.get('monthlyHistory')),
            settings=Settings.from_dict(payload.get('settings')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'incomes': [item.to_dict() for item in self.incomes],
            'expenses': [item.to_dict() for item in self.expenses],
            'monthlySavings': [item.to_dict() for item in self.monthly_savings],
            'monthlyHistory': [item.to_dict() for item in self.monthly_history],
            'settings': self.settings.to_dict(),
        }

    def with_changes(self, **changes: Any) -> 'BudgetData':
        return replace(self, **changes)


def _build(record_type, items: Optional[Iterable[Mapping[str, Any]]]) -> tuple:
    if not items:
        return ()
    if not isinstance(items, (list, tuple)):
        raise ValueError(f"Expected a list of {record_type.__name__} records")
    return tuple(record_type.from_dict(item) for item in items)
