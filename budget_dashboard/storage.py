"""Persistence, import and export for the budget record set.

The record set lives in a single JSON document.  Loading is forgiving (a
missing or corrupt file yields the default, empty record set) while
importing user-supplied JSON is strict so bad files are reported.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from . import config
from .models import BudgetData

logger = logging.getLogger(__name__)

CSV_COLUMNS = {
    'incomes': ['id', 'name', 'amount', 'frequency', 'category', 'isRecurring', 'startDate', 'endDate'],
    'expenses': ['id', 'name', 'type', 'budget', 'spent', 'frequency', 'color', 'startDate', 'endDate'],
    'monthlySavings': ['id', 'month', 'amount', 'description'],
}


def default_payload() -> Dict[str, Any]:
    return {
        'incomes': [],
        'expenses': [],
        'monthlySavings': [],
        'monthlyHistory': [],
        'settings': config.default_settings(),
    }


def merge_with_defaults(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay a stored/imported document on top of the defaults."""
    merged = default_payload()
    merged.update({k: v for k, v in payload.items() if k in merged and v is not None})
    settings = config.default_settings()
    settings.update(payload.get('settings') or {})
    merged['settings'] = settings
    return merged


class BudgetStorage:
    """Handles the on-disk record set."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize storage.

        Args:
            path: Optional custom JSON file.  Defaults to DATA_FILE from config.
        """
        self.path = Path(path) if path is not None else config.DATA_FILE

    def load(self) -> BudgetData:
        """Load the stored record set.

        Returns:
            The stored snapshot, or an empty one when the file is missing
            or cannot be read.
        """
        if not self.path.exists():
            return BudgetData.from_dict(default_payload())
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                payload = json.load(handle)
            return BudgetData.from_dict(merge_with_defaults(payload))
        except (json.JSONDecodeError, OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Could not load budget data from %s: %s", self.path, e)
            return BudgetData.from_dict(default_payload())

    def save(self, data: BudgetData) -> None:
        """Write the record set to disk.

        Raises:
            OSError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(data.to_dict(), handle, indent=2)
        except OSError as e:
            raise OSError(f"Failed to save budget data to {self.path}: {e}") from e
        logger.debug("Saved budget data to %s", self.path)

    def clear(self) -> BudgetData:
        """Remove the stored file and return an empty record set."""
        if self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                raise OSError(f"Failed to delete budget data file {self.path}: {e}") from e
            logger.info("Cleared budget data at %s", self.path)
        return BudgetData.from_dict(default_payload())


def export_json(data: BudgetData) -> str:
    """Serialize the record set as pretty-printed JSON."""
    return json.dumps(data.to_dict(), indent=2)


def import_json(text: str) -> BudgetData:
    """Parse an exported document, filling absent sections with defaults.

    Raises:
        ValueError: If the text is not valid JSON or holds malformed records
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid budget data file: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Invalid budget data file: expected a JSON object")
    try:
        return BudgetData.from_dict(merge_with_defaults(payload))
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid budget data file: {e}") from e


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"budget-data-{today.isoformat()}.json"


def records_to_csv(data: BudgetData, kind: str) -> str:
    """Render one collection (incomes, expenses or monthlySavings) as CSV text."""
    if kind not in CSV_COLUMNS:
        raise ValueError(f"Unknown record collection: {kind!r}")
    rows = data.to_dict()[kind]
    frame = pd.DataFrame(rows, columns=CSV_COLUMNS[kind])
    return frame.to_csv(index=False)
