"""
Flag candidate transactions that match records the user already has.

A candidate is a duplicate when an existing record of the same kind
(expense vs income) falls on the same calendar day with exactly the same
amount. There is no tolerance on either side: a one-cent or one-day
difference is not a duplicate. Candidates are not compared with each other.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Sequence, Set, Tuple

from ..models import (
    AnnotatedTransaction,
    ExistingRecord,
    SuggestedAction,
    Transaction,
    TransactionType,
)
from ..utils.date_parser import to_calendar_day

logger = logging.getLogger(__name__)


def _record_keys(records: Iterable[ExistingRecord]) -> Set[Tuple[date, Decimal]]:
    """Index records by (calendar day, amount)."""
    return {(to_calendar_day(r.date), r.amount) for r in records}


def annotate_duplicates(
    candidates: Sequence[Transaction],
    existing_expenses: Sequence[ExistingRecord] = (),
    existing_incomes: Sequence[ExistingRecord] = ()
) -> List[AnnotatedTransaction]:
    """
    Annotate each candidate with its duplicate status.

    Args:
        candidates: Extracted transactions, in order
        existing_expenses: The user's stored expense records
        existing_incomes: The user's stored income records

    Returns:
        One annotation per candidate, in candidate order
    """
    # Decimal('42.0') == Decimal('42.00') and both hash equal, so a set works
    expense_keys = _record_keys(existing_expenses)
    income_keys = _record_keys(existing_incomes)

    annotated = []
    for txn in candidates:
        keys = expense_keys if txn.type is TransactionType.EXPENSE else income_keys
        is_duplicate = (to_calendar_day(txn.date), txn.amount) in keys

        annotated.append(AnnotatedTransaction(
            transaction=txn,
            is_duplicate=is_duplicate,
            suggested_action=SuggestedAction.SKIP if is_duplicate else SuggestedAction.IMPORT,
        ))

    duplicates = sum(1 for a in annotated if a.is_duplicate)
    if duplicates:
        logger.info(f"Flagged {duplicates} of {len(annotated)} transactions as possible duplicates")

    return annotated
