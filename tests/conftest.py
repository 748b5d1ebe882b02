"""Pytest configuration and fixtures."""
import pytest
from datetime import date, datetime
from decimal import Decimal

from statement_import.segmentation import LineClassifier
from statement_import.models import (
    BatchResult,
    BatchSummary,
    DateRange,
    ExistingRecord,
    Segment,
    Transaction,
    TransactionType,
)


def _transaction(day=date(2024, 3, 5), amount="42.00", txn_type=TransactionType.EXPENSE,
                 description="GROCERY STORE", category=None):
    if category is None:
        category = "FOOD" if txn_type is TransactionType.EXPENSE else "SALARY"
    return Transaction(
        date=day,
        description=description,
        amount=Decimal(amount),
        type=txn_type,
        category=category,
    )


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""
    return _transaction


@pytest.fixture
def make_batch():
    """Factory for batch results built from a list of transactions."""
    def _make(transactions, income="0", expenses="0", start="2024-03-01", end="2024-03-31",
              reported_count=None):
        return BatchResult(
            transactions=list(transactions),
            summary=BatchSummary(
                total_income=Decimal(income),
                total_expenses=Decimal(expenses),
                transaction_count=len(transactions) if reported_count is None else reported_count,
                date_range=DateRange(start=start, end=end),
            ),
        )
    return _make


@pytest.fixture
def sample_transactions():
    """Create a list of sample candidate transactions."""
    return [
        _transaction(date(2024, 3, 1), "2500.00", TransactionType.INCOME, "ACME CORP PAYROLL"),
        _transaction(date(2024, 3, 5), "42.00", TransactionType.EXPENSE, "GROCERY STORE"),
        _transaction(date(2024, 3, 9), "15.99", TransactionType.EXPENSE, "NETFLIX.COM", "SUBSCRIPTIONS"),
    ]


@pytest.fixture
def existing_expenses():
    """Existing expense records as stored by the tracker."""
    return [
        ExistingRecord(date=date(2024, 3, 5), amount=Decimal("42.00"), description="Grocery store"),
        ExistingRecord(date=date(2024, 2, 9), amount=Decimal("15.99"), description="Netflix"),
    ]


@pytest.fixture
def existing_incomes():
    """Existing income records as stored by the tracker."""
    return [
        ExistingRecord(date=date(2024, 2, 1), amount=Decimal("2500.00"), description="Salary"),
    ]


@pytest.fixture
def statement_header():
    """Header block of a typical statement export."""
    return [
        "FIRST NATIONAL BANK",
        "Account: Checking ****1234",
        "Statement Period: 03/01/2024 to 03/31/2024",
        "Date        Description                 Amount",
    ]


@pytest.fixture
def make_statement(statement_header):
    """Factory for statement text with ``count`` transaction lines."""
    def _make(count, header=True):
        lines = list(statement_header) if header else []
        for i in range(count):
            day = (i % 28) + 1
            lines.append(f"03/{day:02d}/2024  PURCHASE AT STORE #{i:03d}      ${10 + i}.{i % 100:02d}")
        return "\n".join(lines)
    return _make


class FakeExtractor:
    """Extractor returning canned batch results, recording the segments it saw."""

    def __init__(self, results=None, fail_on=None, factory=None):
        self.results = list(results or [])
        self.fail_on = fail_on
        self.factory = factory
        self.segments = []

    def extract(self, segment: Segment) -> BatchResult:
        self.segments.append(segment)
        if self.fail_on is not None and segment.batch_number == self.fail_on:
            raise RuntimeError(f"model unavailable for batch {segment.batch_number}")
        if self.factory is not None:
            return self.factory(segment)
        return self.results[segment.batch_number - 1]


def parse_segment(segment: Segment) -> BatchResult:
    """Turn the transaction lines of a generated statement segment into a batch result."""
    classifier = LineClassifier()
    transactions = []
    for line in segment.text.split('\n'):
        if not line.strip() or not classifier.is_transaction_line(line):
            continue
        day = datetime.strptime(line[:10], "%m/%d/%Y").date()
        description, amount = line[10:].rsplit('$', 1)
        transactions.append(_transaction(day, amount, description=description.strip()))

    days = [t.date.isoformat() for t in transactions]
    return BatchResult(
        transactions=transactions,
        summary=BatchSummary(
            total_income=Decimal('0'),
            total_expenses=sum((t.amount for t in transactions), Decimal('0')),
            transaction_count=len(transactions),
            date_range=DateRange(start=min(days, default=''), end=max(days, default='')),
        ),
    )


@pytest.fixture
def fake_extractor_class():
    """The fake extractor class (tests build instances with their own results)."""
    return FakeExtractor


@pytest.fixture
def statement_extractor():
    """Fake extractor that reads transactions straight out of generated statements."""
    return FakeExtractor(factory=parse_segment)


@pytest.fixture
def segment_parser():
    """The segment parser used by :func:`statement_extractor`."""
    return parse_segment
