"""Load the user's existing expense and income records."""
import json
import logging
from pathlib import Path
from typing import List, Tuple

from ..models import ExistingRecord

logger = logging.getLogger(__name__)


def parse_existing_records(data: dict) -> Tuple[List[ExistingRecord], List[ExistingRecord]]:
    """
    Parse an export of existing records.

    Expected shape::

        {
          "expenses": [{"date": "2024-03-05", "amount": 42.0, "description": "..."}],
          "incomes":  [{"date": "2024-03-01", "amount": 2500, "source": "..."}]
        }

    Returns:
        Tuple of (expenses, incomes)

    Raises:
        ValueError: If the payload or a record is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Existing records must be a JSON object")

    expenses = [ExistingRecord.from_dict(row) for row in data.get('expenses') or []]
    incomes = [ExistingRecord.from_dict(row) for row in data.get('incomes') or []]
    return expenses, incomes


def load_existing_records(path: Path) -> Tuple[List[ExistingRecord], List[ExistingRecord]]:
    """
    Load existing records from a JSON file.

    Args:
        path: JSON file in the shape accepted by :func:`parse_existing_records`

    Returns:
        Tuple of (expenses, incomes)
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    expenses, incomes = parse_existing_records(data)
    logger.info(f"Loaded {len(expenses)} existing expenses and {len(incomes)} existing incomes")
    return expenses, incomes
