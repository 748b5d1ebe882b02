"""Per-segment and merged extraction result models."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .transaction import Transaction
from ..utils.currency_parser import to_decimal
from ..utils.date_parser import to_calendar_day


@dataclass(frozen=True)
class Segment:
    """
    One self-contained slice of statement text sent to the extractor.

    ``batch_number`` is 1-based; it and ``total_batches`` only give the
    extractor and the logs context.
    """
    text: str
    batch_number: int
    total_batches: int
    duplicate_hint: Optional[str] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive ISO ``YYYY-MM-DD`` date range."""
    start: str
    end: str

    def to_dict(self) -> dict:
        return {'start': self.start, 'end': self.end}


def _to_count(value) -> int:
    """Coerce a reported transaction count."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid transaction count: {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Invalid transaction count: {value!r}") from e
    if count < 0:
        raise ValueError(f"Invalid transaction count: {value!r}")
    return count


def _to_iso_day(value, field_name: str) -> str:
    """Validate one end of a date range and return it as ``YYYY-MM-DD``."""
    if not isinstance(value, str):
        raise ValueError(f"'summary.dateRange.{field_name}' must be a date string, got {value!r}")
    day = to_calendar_day(value)
    if day is None:
        raise ValueError(f"Invalid date in 'summary.dateRange.{field_name}': {value!r}")
    return day.isoformat()


@dataclass(frozen=True)
class BatchSummary:
    """
    Summary reported alongside a batch of transactions.

    Attributes:
        total_income: Sum of income amounts
        total_expenses: Sum of expense amounts
        transaction_count: Reported number of transactions
        date_range: First and last transaction dates
    """
    total_income: Decimal
    total_expenses: Decimal
    transaction_count: int
    date_range: DateRange

    @classmethod
    def from_dict(cls, data: dict) -> "BatchSummary":
        """
        Build a summary from the extraction schema.

        Range dates are normalized to ``YYYY-MM-DD`` so that merged ranges
        can be compared as strings.

        Raises:
            ValueError: If the summary, its count or its date range is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("'summary' must be a JSON object")

        date_range = data.get('dateRange')
        if not isinstance(date_range, dict):
            raise ValueError("'summary.dateRange' must be an object with start and end")

        return cls(
            total_income=to_decimal(data.get('totalIncome', 0)),
            total_expenses=to_decimal(data.get('totalExpenses', 0)),
            transaction_count=_to_count(data.get('transactionCount', 0)),
            date_range=DateRange(
                start=_to_iso_day(date_range.get('start'), 'start'),
                end=_to_iso_day(date_range.get('end'), 'end'),
            ),
        )

    def to_dict(self) -> dict:
        """Convert summary to dictionary."""
        return {
            'totalIncome': float(self.total_income),
            'totalExpenses': float(self.total_expenses),
            'transactionCount': self.transaction_count,
            'dateRange': self.date_range.to_dict(),
        }


@dataclass(frozen=True)
class BatchResult:
    """
    Structured extraction output for one segment, or the merge of several.

    ``summary.transaction_count`` is whatever the extractor reported and may
    disagree with ``len(transactions)``.
    """
    transactions: List[Transaction] = field(default_factory=list)
    summary: BatchSummary = field(
        default_factory=lambda: BatchSummary(Decimal('0'), Decimal('0'), 0, DateRange('', ''))
    )

    @classmethod
    def from_dict(cls, data: dict) -> "BatchResult":
        """
        Build a batch result from the extraction schema.

        Raises:
            ValueError: If the payload or any transaction is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Extraction result must be a JSON object")

        raw_transactions = data.get('transactions') or []
        if not isinstance(raw_transactions, list):
            raise ValueError("'transactions' must be a list")

        return cls(
            transactions=[Transaction.from_dict(t) for t in raw_transactions],
            summary=BatchSummary.from_dict(data.get('summary')),
        )

    def to_dict(self) -> dict:
        """Convert batch result to dictionary."""
        return {
            'transactions': [t.to_dict() for t in self.transactions],
            'summary': self.summary.to_dict(),
        }


# The merged result has the same shape as a single batch
MergedResult = BatchResult
