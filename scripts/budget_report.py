#!/usr/bin/env python3
"""Print the analytics bundle and projection for a saved budget data file."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_dashboard import config, health
from budget_dashboard.budget_calculations import BudgetCalculator
from budget_dashboard.formatting import format_currency, format_months, format_percentage
from budget_dashboard.storage import BudgetStorage, import_json


def main(path: Optional[Path] = None, months: int = 12, as_of: Optional[date] = None) -> int:
    if path is None:
        data = BudgetStorage().load()
    else:
        try:
            data = import_json(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as exc:
            print(f"Could not read {path}: {exc}")
            return 1

    calculator = BudgetCalculator(data, as_of=as_of)
    analytics = calculator.get_analytics()
    currency = data.settings.currency

    print(f"Budget report as of {calculator.as_of.isoformat()}")
    print(f"  Monthly income:     {format_currency(analytics.total_income, currency)}")
    print(f"  Monthly expenses:   {format_currency(analytics.total_expenses, currency)}")
    print(f"  Net income:         {format_currency(analytics.net_income, currency)}")
    print(f"  Savings rate:       {format_percentage(analytics.savings_rate)}")
    print(f"  Break-even point:   {format_currency(analytics.break_even_point, currency)}")
    print(f"  Stable income:      {format_currency(analytics.stable_income, currency)}")
    print(f"  Total savings:      {format_currency(analytics.total_savings, currency)}")
    print(f"  Cash-flow cushion:  {format_months(analytics.cash_flow_cushion)}")
    print(f"  Sustainability:     {format_months(analytics.sustainability_months)}")
    print(f"  Volatility index:   {format_percentage(analytics.expense_volatility_index)}")

    score = health.financial_health_score(analytics)
    print(f"\nHealth score: {score}/100 ({health.health_score_label(score)})")
    for item in health.recommendations(analytics, currency):
        print(f"  - {item.title}: {item.message}")

    projection = calculator.projection_frame(months)
    if not projection.empty:
        print("\nProjection:")
        print(projection.round(2).to_string(index=False))
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Print budget analytics for a data file.')
    parser.add_argument('path', nargs='?', type=Path, help='Exported JSON file (defaults to the stored data)')
    parser.add_argument('--months', type=int, default=config.PROJECTION_MONTHS, help='Projection length in months')
    parser.add_argument('--as-of', type=date.fromisoformat, default=None, help='Evaluation date (YYYY-MM-DD)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    raise SystemExit(main(args.path, months=args.months, as_of=args.as_of))
