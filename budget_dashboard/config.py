"""Configuration management for the budget dashboard.

This module centralizes all configuration values including paths,
default settings, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DATA_DIR", _PROJECT_ROOT / "data"))
EXPORTS_DIR = DATA_DIR / "exports"

# Stored record set (the dashboard's key-value store)
DATA_FILE = Path(
    os.getenv("BUDGET_DATA_FILE", DATA_DIR / "budget-calculator-data.json")
).resolve()

# Default settings for a fresh record set
DEFAULT_CURRENCY = os.getenv("BUDGET_DEFAULT_CURRENCY", "USD")
DEFAULT_INFLATION_RATE = float(os.getenv("BUDGET_DEFAULT_INFLATION", "3.5"))
DEFAULT_EMERGENCY_FUND_TARGET = float(os.getenv("BUDGET_EMERGENCY_FUND_TARGET", "6"))

# Months shown by the projection chart
PROJECTION_MONTHS = int(os.getenv("BUDGET_PROJECTION_MONTHS", "12"))

# Recommended savings rate (percent) used by the gauge and recommendations
TARGET_SAVINGS_RATE = 20.0


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, EXPORTS_DIR, DATA_FILE.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def default_settings() -> dict:
    """Return the settings block used when no stored data exists."""
    return {
        "currency": DEFAULT_CURRENCY,
        "inflationRate": DEFAULT_INFLATION_RATE,
        "emergencyFundTarget": DEFAULT_EMERGENCY_FUND_TARGET,
    }
