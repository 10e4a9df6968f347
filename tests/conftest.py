"""Shared pytest configuration for the project test suite."""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure the repository root (which contains the ``budget_dashboard`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
