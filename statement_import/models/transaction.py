"""Transaction data models."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from ..config import get_category_vocabulary
from ..utils.currency_parser import to_decimal
from ..utils.date_parser import to_calendar_day

logger = logging.getLogger(__name__)


class TransactionType(Enum):
    """Transaction type enumeration."""
    INCOME = "income"
    EXPENSE = "expense"


class SuggestedAction(Enum):
    """What the import review suggests doing with a candidate."""
    IMPORT = "import"
    SKIP = "skip"


@dataclass(frozen=True)
class Transaction:
    """
    A candidate transaction extracted from one statement segment.

    Attributes:
        date: Calendar date of the transaction
        description: Readable description
        amount: Non-negative amount; direction is carried by ``type``
        type: Income or expense
        category: Value from the category vocabulary for ``type``
        is_recurring: Whether it looks like a recurring payment
        merchant_name: Merchant or company name, if identified
    """
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    is_recurring: bool = False
    merchant_name: Optional[str] = None

    def __post_init__(self):
        """Validate transaction data."""
        if self.amount < 0:
            raise ValueError("amount cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """
        Build a transaction from the extraction schema.

        Dates may be ISO dates or datetimes; only the calendar day is kept.
        Categories are normalized through the vocabulary for the type.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Transaction must be a JSON object, got {data!r}")

        try:
            txn_type = TransactionType(str(data['type']).lower())
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid transaction type: {data.get('type')!r}") from e

        txn_date = to_calendar_day(data.get('date'))
        if txn_date is None:
            raise ValueError(f"Invalid transaction date: {data.get('date')!r}")

        amount = to_decimal(data.get('amount'))
        if amount < 0:
            logger.debug(f"Negative amount {amount} for {data.get('description')!r}, using absolute value")
            amount = abs(amount)

        merchant_name = data.get('merchantName')
        if merchant_name:
            merchant_name = str(merchant_name).strip() or None
        else:
            merchant_name = None

        return cls(
            date=txn_date,
            description=str(data.get('description') or '').strip(),
            amount=amount,
            type=txn_type,
            category=get_category_vocabulary().normalize(txn_type.value, data.get('category')),
            is_recurring=bool(data.get('isRecurring', False)),
            merchant_name=merchant_name,
        )

    def to_dict(self) -> dict:
        """Convert transaction to dictionary (extraction schema keys)."""
        result = {
            'date': self.date.isoformat(),
            'description': self.description,
            'amount': float(self.amount),
            'type': self.type.value,
            'category': self.category,
            'isRecurring': self.is_recurring,
        }
        if self.merchant_name:
            result['merchantName'] = self.merchant_name
        return result


@dataclass(frozen=True)
class ExistingRecord:
    """
    An already-persisted expense or income record used for duplicate checks.

    Attributes:
        date: Record date (a datetime's time-of-day is ignored when matching)
        amount: Stored amount
        description: Expense description or income source
    """
    date: Union[date, datetime]
    amount: Decimal
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ExistingRecord":
        """Build a record from a store row (``description`` or ``source``)."""
        if not isinstance(data, dict):
            raise ValueError(f"Record must be a JSON object, got {data!r}")

        record_date = data.get('date')
        if isinstance(record_date, str):
            record_date = to_calendar_day(record_date)
        elif not isinstance(record_date, date):
            record_date = None
        if record_date is None:
            raise ValueError(f"Invalid record date: {data.get('date')!r}")

        return cls(
            date=record_date,
            amount=to_decimal(data.get('amount')),
            description=data.get('description') or data.get('source'),
        )

    def to_dict(self) -> dict:
        """Convert record to dictionary."""
        return {
            'date': self.date.isoformat(),
            'amount': float(self.amount),
            'description': self.description,
        }


@dataclass(frozen=True)
class AnnotatedTransaction:
    """A candidate transaction with its duplicate-check outcome."""
    transaction: Transaction
    is_duplicate: bool
    suggested_action: SuggestedAction

    def to_dict(self) -> dict:
        """Flatten into the transaction dict plus annotation keys."""
        result = self.transaction.to_dict()
        result['isDuplicate'] = self.is_duplicate
        result['suggestedAction'] = self.suggested_action.value
        return result
