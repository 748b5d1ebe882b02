"""Merge per-segment extraction results into one result."""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence

from ..models import BatchResult, BatchSummary, DateRange, MergedResult, Transaction

logger = logging.getLogger(__name__)


def merge_batch_results(
    results: Sequence[BatchResult],
    today: Optional[date] = None
) -> MergedResult:
    """
    Combine batch results in segment order.

    Transactions are concatenated without reordering or deduplication.
    Income and expense totals are summed from the batch summaries, not
    recomputed from transactions. The transaction count is always the
    length of the merged list. The date range spans the earliest start and
    latest end (ISO strings compare chronologically).

    Args:
        results: One result per segment, in segment order
        today: Date used for the range of an empty merge (UTC today if None)

    Returns:
        Merged result; inputs are left untouched
    """
    if not results:
        day = (today or datetime.now(timezone.utc).date()).isoformat()
        return BatchResult(
            transactions=[],
            summary=BatchSummary(
                total_income=Decimal('0'),
                total_expenses=Decimal('0'),
                transaction_count=0,
                date_range=DateRange(start=day, end=day),
            ),
        )

    transactions: List[Transaction] = []
    total_income = Decimal('0')
    total_expenses = Decimal('0')

    for batch_number, result in enumerate(results, start=1):
        if result.summary.transaction_count != len(result.transactions):
            logger.warning(
                f"Batch {batch_number} reported {result.summary.transaction_count} transactions "
                f"but returned {len(result.transactions)}"
            )

        transactions.extend(result.transactions)
        total_income += result.summary.total_income
        total_expenses += result.summary.total_expenses

    start = min(r.summary.date_range.start for r in results)
    end = max(r.summary.date_range.end for r in results)

    logger.info(
        f"Merged {len(results)} batch(es) into {len(transactions)} transactions "
        f"({start} to {end})"
    )

    return BatchResult(
        transactions=transactions,
        summary=BatchSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            transaction_count=len(transactions),
            date_range=DateRange(start=start, end=end),
        ),
    )
