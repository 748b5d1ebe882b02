"""Tests for the statement import pipeline."""
import time
from datetime import date
from decimal import Decimal

import pytest

from statement_import.models import ExistingRecord, SuggestedAction
from statement_import.pipeline import RETRY_HINT, StatementImportPipeline


class TestProcessText:
    """Test end-to-end analysis of statement text."""

    def test_large_statement(self, make_statement, statement_extractor):
        pipeline = StatementImportPipeline(statement_extractor, max_transactions_per_segment=30)

        result = pipeline.process_text(make_statement(45))

        assert result.success
        assert result.segments_processed == 2
        assert result.transaction_count == 45
        assert result.summary.transaction_count == 45
        assert result.summary.date_range.start == "2024-03-01"
        assert result.summary.date_range.end == "2024-03-28"
        assert [s.batch_number for s in statement_extractor.segments] == [1, 2]
        assert all(s.total_batches == 2 for s in statement_extractor.segments)
        assert result.warnings == []

    def test_headerless_statement(self, make_statement, statement_extractor):
        result = StatementImportPipeline(statement_extractor, 30).process_text(
            make_statement(45, header=False)
        )

        first, second = statement_extractor.segments
        assert len(first.text.split('\n')) == 30
        assert len(second.text.split('\n')) == 15
        assert result.transaction_count == 45
        assert result.summary.transaction_count == 45

    def test_order_matches_statement(self, make_statement, statement_extractor):
        result = StatementImportPipeline(statement_extractor, 10).process_text(make_statement(35))

        descriptions = [a.transaction.description for a in result.transactions]
        assert descriptions == [f"PURCHASE AT STORE #{i:03d}" for i in range(35)]

    def test_totals_summed(self, make_statement, statement_extractor):
        result = StatementImportPipeline(statement_extractor, 30).process_text(make_statement(45))

        expected = sum((Decimal(f"{10 + i}.{i:02d}") for i in range(45)), Decimal("0"))
        assert result.summary.total_expenses == expected
        assert result.summary.total_income == Decimal("0")

    def test_duplicates_flagged(self, make_statement, statement_extractor):
        existing = [
            ExistingRecord(date=date(2024, 3, 1), amount=Decimal("10.00")),
            ExistingRecord(date=date(2024, 3, 2), amount=Decimal("99.99")),
        ]

        result = StatementImportPipeline(statement_extractor, 30).process_text(
            make_statement(45), existing_expenses=existing
        )

        assert result.duplicate_count == 1
        assert result.transactions[0].suggested_action is SuggestedAction.SKIP
        assert len(result.importable_transactions) == 44

    def test_duplicate_hint_only_on_first_segment(self, make_statement, statement_extractor,
                                                  existing_expenses):
        StatementImportPipeline(statement_extractor, 30).process_text(
            make_statement(45), existing_expenses=existing_expenses
        )

        first, second = statement_extractor.segments
        assert first.duplicate_hint.startswith("Expenses: ")
        assert second.duplicate_hint is None

    def test_no_hint_without_existing_records(self, make_statement, statement_extractor):
        StatementImportPipeline(statement_extractor, 30).process_text(make_statement(5))

        assert statement_extractor.segments[0].duplicate_hint is None

    def test_count_mismatch_warning(self, make_statement, fake_extractor_class, make_transaction,
                                    make_batch):
        batch = make_batch([make_transaction()], reported_count=3)
        extractor = fake_extractor_class(results=[batch])

        result = StatementImportPipeline(extractor).process_text(make_statement(3))

        assert result.success
        assert result.summary.transaction_count == 1
        assert result.warnings == ["Batch 1 reported 3 transactions but returned 1"]

    def test_failure_aborts_run(self, make_statement, statement_extractor):
        statement_extractor.fail_on = 2

        result = StatementImportPipeline(statement_extractor, 30).process_text(make_statement(95))

        assert not result.success
        assert result.transactions == []
        assert result.summary is None
        assert result.segments_processed == 4
        assert result.error_message.startswith("Failed to analyze statement: model unavailable for batch 2")
        assert result.error_message.endswith(RETRY_HINT)
        assert [s.batch_number for s in statement_extractor.segments] == [1, 2]

    @pytest.mark.parametrize("text", ["", "   \n\t "])
    def test_empty_text(self, text, statement_extractor):
        result = StatementImportPipeline(statement_extractor).process_text(text)

        assert not result.success
        assert result.error_message == "No statement content provided"
        assert statement_extractor.segments == []

    def test_invalid_concurrency(self, statement_extractor):
        with pytest.raises(ValueError):
            StatementImportPipeline(statement_extractor, max_concurrency=0)


class TestConcurrentExtraction:
    """Test bounded parallel extraction."""

    def test_results_in_segment_order(self, make_statement, fake_extractor_class, segment_parser):
        def slow_early_batches(segment):
            time.sleep(0.05 * (segment.total_batches - segment.batch_number))
            return segment_parser(segment)

        extractor = fake_extractor_class(factory=slow_early_batches)
        pipeline = StatementImportPipeline(extractor, max_transactions_per_segment=10, max_concurrency=4)

        result = pipeline.process_text(make_statement(40))

        assert result.success
        assert result.segments_processed == 4
        descriptions = [a.transaction.description for a in result.transactions]
        assert descriptions == [f"PURCHASE AT STORE #{i:03d}" for i in range(40)]

    def test_failure_aborts_run(self, make_statement, statement_extractor):
        statement_extractor.fail_on = 3
        pipeline = StatementImportPipeline(statement_extractor, 10, max_concurrency=2)

        result = pipeline.process_text(make_statement(40))

        assert not result.success
        assert result.transactions == []
        assert "batch 3" in result.error_message


class TestProcessFile:
    """Test analysis of statement files."""

    def test_text_file(self, tmp_path, make_statement, statement_extractor):
        path = tmp_path / "march.txt"
        path.write_text(make_statement(12), encoding="utf-8")

        result = StatementImportPipeline(statement_extractor).process_file(path)

        assert result.success
        assert result.transaction_count == 12

    def test_unreadable_file(self, tmp_path, statement_extractor):
        path = tmp_path / "scan.jpg"
        path.write_bytes(b"\xff\xd8\xff")

        result = StatementImportPipeline(statement_extractor).process_file(path)

        assert not result.success
        assert result.error_message.startswith("Could not read statement")
        assert statement_extractor.segments == []
