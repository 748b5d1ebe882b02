"""
Statement import pipeline.

Coordinates segmentation, per-segment extraction, merging and duplicate
detection for one uploaded statement.

Phases:
1. Segment - split raw text into transaction-bounded segments
2. Extract - one extractor call per segment (sequential by default)
3. Merge - combine batch results in segment order
4. Annotate - flag candidates that match existing records
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Sequence

from .aggregation import merge_batch_results
from .config.settings import (
    MAX_TRANSACTIONS_PER_SEGMENT,
    MAX_CONCURRENT_EXTRACTIONS,
    DUPLICATE_HINT_LIMIT,
)
from .dedup import annotate_duplicates
from .extractors import TransactionExtractor, build_duplicate_hint, load_statement_text
from .models import BatchResult, ExistingRecord, ImportResult, Segment
from .segmentation import StatementSegmenter, estimate_transaction_count
from .utils import setup_logger, log_import_audit

logger = setup_logger()

RETRY_HINT = "Please try again, or upload a shorter or cleaner statement."


class StatementImportPipeline:
    """
    Main pipeline for turning a statement into an import-review list.

    Any segment failing extraction aborts the whole run: a dropped segment
    would silently corrupt the merged totals, so no partial result is
    returned.
    """

    def __init__(
        self,
        extractor: TransactionExtractor,
        max_transactions_per_segment: int = MAX_TRANSACTIONS_PER_SEGMENT,
        max_concurrency: int = MAX_CONCURRENT_EXTRACTIONS,
        duplicate_hint_limit: int = DUPLICATE_HINT_LIMIT
    ):
        """
        Initialize pipeline.

        Args:
            extractor: Segment -> BatchResult collaborator
            max_transactions_per_segment: Transaction-line budget per segment
            max_concurrency: Parallel extractor calls (1 = sequential)
            duplicate_hint_limit: Existing records of each kind shown to the
                extractor with the first segment

        Raises:
            ValueError: If a limit is not positive
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.extractor = extractor
        self.segmenter = StatementSegmenter(max_transactions_per_segment)
        self.max_concurrency = max_concurrency
        self.duplicate_hint_limit = duplicate_hint_limit

    def process_file(
        self,
        file_path: Path,
        existing_expenses: Sequence[ExistingRecord] = (),
        existing_incomes: Sequence[ExistingRecord] = ()
    ) -> ImportResult:
        """
        Load a statement file and analyze it.

        Args:
            file_path: PDF, CSV or text statement
            existing_expenses: The user's stored expenses
            existing_incomes: The user's stored incomes

        Returns:
            ImportResult (``success=False`` on any failure)
        """
        start_time = time.time()

        try:
            text = load_statement_text(file_path)
        except Exception as e:
            logger.exception(f"Could not read statement: {e}")
            log_import_audit(source=str(file_path), success=False, error=str(e))
            return self._create_error_result(
                f"Could not read statement: {e}",
                processing_time=time.time() - start_time
            )

        return self.process_text(
            text,
            existing_expenses=existing_expenses,
            existing_incomes=existing_incomes,
            source=str(file_path)
        )

    def process_text(
        self,
        text: str,
        existing_expenses: Sequence[ExistingRecord] = (),
        existing_incomes: Sequence[ExistingRecord] = (),
        source: str = "text"
    ) -> ImportResult:
        """
        Analyze raw statement text end-to-end.

        Args:
            text: Raw statement text
            existing_expenses: The user's stored expenses
            existing_incomes: The user's stored incomes
            source: Label for logs and the audit trail

        Returns:
            ImportResult with annotated transactions and merged summary
        """
        logger.info(f"Analyzing statement: {source}")
        start_time = time.time()

        if not text or not text.strip():
            return self._create_error_result(
                "No statement content provided",
                processing_time=time.time() - start_time
            )

        segments: List[Segment] = []
        try:
            # Phase 1: SEGMENT
            segment_texts = self.segmenter.split(text)
            hint = build_duplicate_hint(existing_expenses, existing_incomes, self.duplicate_hint_limit)
            segments = [
                Segment(
                    text=segment_text,
                    batch_number=index,
                    total_batches=len(segment_texts),
                    duplicate_hint=hint if index == 1 else None,
                )
                for index, segment_text in enumerate(segment_texts, start=1)
            ]
            logger.info(
                f"Phase 1: SEGMENT - {len(segments)} segment(s), "
                f"~{estimate_transaction_count(text)} transactions estimated"
            )

            # Phase 2: EXTRACT
            logger.info("Phase 2: EXTRACT")
            batch_results = self._extract_all(segments)

            # Phase 3: MERGE
            logger.info("Phase 3: MERGE")
            merged = merge_batch_results(batch_results)

            # Phase 4: ANNOTATE
            logger.info("Phase 4: ANNOTATE")
            annotated = annotate_duplicates(merged.transactions, existing_expenses, existing_incomes)

        except Exception as e:
            logger.exception(f"Statement analysis failed: {e}")
            log_import_audit(source=source, success=False, segments=len(segments), error=str(e))
            return self._create_error_result(
                f"Failed to analyze statement: {e}. {RETRY_HINT}",
                processing_time=time.time() - start_time,
                segments_processed=len(segments)
            )

        warnings = [
            f"Batch {index} reported {r.summary.transaction_count} transactions "
            f"but returned {len(r.transactions)}"
            for index, r in enumerate(batch_results, start=1)
            if r.summary.transaction_count != len(r.transactions)
        ]

        result = ImportResult(
            transactions=annotated,
            summary=merged.summary,
            segments_processed=len(segments),
            success=True,
            warnings=warnings,
            processing_time=time.time() - start_time
        )

        log_import_audit(
            source=source,
            success=True,
            segments=result.segments_processed,
            transaction_count=result.transaction_count,
            duplicate_count=result.duplicate_count
        )

        logger.info(
            f"Analysis complete in {result.processing_time:.2f} seconds: "
            f"{result.transaction_count} transactions, {result.duplicate_count} possible duplicates, "
            f"{result.segments_processed} segment(s)"
        )
        return result

    def _extract_all(self, segments: List[Segment]) -> List[BatchResult]:
        """
        Run the extractor over every segment.

        Results are returned in segment order regardless of completion
        order. The first failure is re-raised and pending calls are
        cancelled.
        """
        if self.max_concurrency == 1 or len(segments) <= 1:
            return [self.extractor.extract(segment) for segment in segments]

        results: List[Optional[BatchResult]] = [None] * len(segments)
        workers = min(self.max_concurrency, len(segments))

        with ThreadPoolExecutor(max_workers=workers) as pool:
            future_to_index = {
                pool.submit(self.extractor.extract, segment): index
                for index, segment in enumerate(segments)
            }
            try:
                for future in as_completed(future_to_index):
                    results[future_to_index[future]] = future.result()
            except Exception:
                for future in future_to_index:
                    future.cancel()
                raise

        return results

    def _create_error_result(
        self,
        error_message: str,
        processing_time: float,
        segments_processed: int = 0
    ) -> ImportResult:
        """Create error result."""
        logger.error(error_message)

        return ImportResult(
            transactions=[],
            summary=None,
            segments_processed=segments_processed,
            success=False,
            error_message=error_message,
            processing_time=processing_time
        )
