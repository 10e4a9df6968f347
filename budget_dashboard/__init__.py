"""Top‑level package for the Budget Dashboard.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``budget_calculations`` – the analytics engine over a record snapshot
* ``health`` – health scores and recommendations derived from analytics
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_dashboard/dashboard.py
```
"""

from . import budget_calculations  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience
from .budget_calculations import BudgetAnalytics, BudgetCalculator, to_monthly_amount
from .models import BudgetData
# Import dashboard lazily.  Streamlit may not be installed in all
# environments (e.g. during unit testing).
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = [
    "budget_calculations",
    "visualization",
    "dashboard",
    "BudgetAnalytics",
    "BudgetCalculator",
    "BudgetData",
    "to_monthly_amount",
]
