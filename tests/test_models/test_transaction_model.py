"""Tests for transaction and batch result models."""
from datetime import date
from decimal import Decimal

import pytest

from statement_import.models import (
    BatchResult,
    BatchSummary,
    ImportResult,
    SuggestedAction,
    AnnotatedTransaction,
    Transaction,
    TransactionType,
)


class TestTransactionFromDict:
    """Test building transactions from extractor output."""

    def test_full_record(self):
        txn = Transaction.from_dict({
            "date": "2024-03-09",
            "description": "  NETFLIX.COM  ",
            "amount": 15.99,
            "type": "expense",
            "category": "SUBSCRIPTIONS",
            "isRecurring": True,
            "merchantName": "Netflix",
        })

        assert txn.date == date(2024, 3, 9)
        assert txn.description == "NETFLIX.COM"
        assert txn.amount == Decimal("15.99")
        assert txn.type is TransactionType.EXPENSE
        assert txn.category == "SUBSCRIPTIONS"
        assert txn.is_recurring is True
        assert txn.merchant_name == "Netflix"

    def test_category_alias_and_fallback(self):
        shopping = Transaction.from_dict(
            {"date": "2024-03-09", "amount": 20, "type": "expense", "category": "shopping"}
        )
        unknown = Transaction.from_dict(
            {"date": "2024-03-09", "amount": 20, "type": "income", "category": "LOTTERY"}
        )

        assert shopping.category == "ENTERTAINMENT"
        assert unknown.category == "OTHER"

    def test_negative_amount_made_positive(self):
        txn = Transaction.from_dict({"date": "2024-03-09", "amount": -42.5, "type": "EXPENSE"})

        assert txn.amount == Decimal("42.5")
        assert txn.type is TransactionType.EXPENSE

    def test_datetime_reduced_to_day(self):
        txn = Transaction.from_dict({"date": "2024-03-09T23:10:00", "amount": 1, "type": "income"})

        assert txn.date == date(2024, 3, 9)

    @pytest.mark.parametrize("data", [
        {"date": "2024-03-09", "amount": 1, "type": "transfer"},
        {"date": "2024-03-09", "amount": 1},
        {"date": "not a date", "amount": 1, "type": "expense"},
        {"date": 20240309, "amount": 1, "type": "expense"},
        {"date": "2024-03-09", "amount": "lots", "type": "expense"},
        {"date": "2024-03-09", "amount": float("nan"), "type": "expense"},
        {"date": "2024-03-09", "amount": float("-inf"), "type": "expense"},
        "not an object",
        None,
    ])
    def test_invalid_records(self, data):
        with pytest.raises(ValueError):
            Transaction.from_dict(data)

    def test_negative_amount_rejected_on_construction(self):
        with pytest.raises(ValueError):
            Transaction(date(2024, 3, 9), "x", Decimal("-1"), TransactionType.EXPENSE, "OTHER")

    def test_to_dict(self, make_transaction):
        data = make_transaction().to_dict()

        assert data == {
            "date": "2024-03-05",
            "description": "GROCERY STORE",
            "amount": 42.0,
            "type": "expense",
            "category": "FOOD",
            "isRecurring": False,
        }


class TestBatchResultFromDict:
    """Test parsing a full extraction payload."""

    def test_payload(self):
        result = BatchResult.from_dict({
            "transactions": [
                {"date": "2024-03-01", "description": "Payroll", "amount": 2500, "type": "income",
                 "category": "SALARY"},
            ],
            "summary": {
                "totalIncome": 2500,
                "totalExpenses": 0,
                "transactionCount": 1,
                "dateRange": {"start": "2024-03-01", "end": "2024-03-01"},
            },
        })

        assert len(result.transactions) == 1
        assert result.summary.total_income == Decimal("2500")
        assert result.summary.date_range.start == "2024-03-01"

    def test_missing_summary(self):
        with pytest.raises(ValueError):
            BatchResult.from_dict({"transactions": []})

    @pytest.mark.parametrize("payload", [[], "text", {"transactions": {"a": 1}}])
    def test_malformed_payload(self, payload):
        with pytest.raises(ValueError):
            BatchResult.from_dict(payload)

    def test_non_object_transaction(self):
        with pytest.raises(ValueError, match="JSON object"):
            BatchResult.from_dict({"transactions": ["not an object"], "summary": {}})


class TestBatchSummaryFromDict:
    """Test validation of the reported summary."""

    RANGE = {"start": "2024-03-01", "end": "2024-03-31"}

    def test_range_dates_normalized(self):
        summary = BatchSummary.from_dict(
            {"transactionCount": "3", "dateRange": {"start": "2024-03-01T00:00:00", "end": "2024-03-31"}}
        )

        assert summary.date_range.start == "2024-03-01"
        assert summary.date_range.end == "2024-03-31"
        assert summary.transaction_count == 3

    def test_missing_count_defaults_to_zero(self):
        assert BatchSummary.from_dict({"dateRange": self.RANGE}).transaction_count == 0

    @pytest.mark.parametrize("date_range", [
        None,
        {},
        {"start": "2024-03-01"},
        {"end": "2024-03-31"},
        {"start": "", "end": "2024-03-31"},
        {"start": 20240301, "end": "2024-03-31"},
        {"start": "2024-03-01", "end": "soon"},
        "2024-03-01..2024-03-31",
    ])
    def test_invalid_date_range(self, date_range):
        with pytest.raises(ValueError):
            BatchSummary.from_dict({"transactionCount": 1, "dateRange": date_range})

    @pytest.mark.parametrize("count", [None, "many", -1, True, [1]])
    def test_invalid_count(self, count):
        with pytest.raises(ValueError, match="transaction count"):
            BatchSummary.from_dict({"transactionCount": count, "dateRange": self.RANGE})

    @pytest.mark.parametrize("data", [None, [], "summary"])
    def test_not_an_object(self, data):
        with pytest.raises(ValueError):
            BatchSummary.from_dict(data)


class TestImportResult:
    """Test import result helpers."""

    def test_counts(self, sample_transactions):
        annotated = [
            AnnotatedTransaction(t, i == 1, SuggestedAction.SKIP if i == 1 else SuggestedAction.IMPORT)
            for i, t in enumerate(sample_transactions)
        ]
        result = ImportResult(transactions=annotated, segments_processed=2)

        assert result.transaction_count == 3
        assert result.duplicate_count == 1
        assert [a.transaction for a in result.importable_transactions] == [
            sample_transactions[0], sample_transactions[2]
        ]

        data = result.to_dict()
        assert data["segmentsProcessed"] == 2
        assert data["duplicateCount"] == 1
        assert data["summary"] is None
