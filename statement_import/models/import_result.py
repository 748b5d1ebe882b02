"""Import result model."""
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime

from .transaction import AnnotatedTransaction, SuggestedAction
from .batch_result import BatchSummary


@dataclass
class ImportResult:
    """
    Complete result of analyzing one statement for import.

    Attributes:
        transactions: Annotated candidate transactions in statement order
        summary: Merged summary (None if the run failed)
        segments_processed: Number of segments sent to the extractor
        success: Whether analysis succeeded
        error_message: Error message if analysis failed
        warnings: Non-fatal issues found during analysis
        processing_time: Time taken to process (seconds)
        extracted_at: Timestamp of analysis
    """
    transactions: List[AnnotatedTransaction] = field(default_factory=list)
    summary: Optional[BatchSummary] = None
    segments_processed: int = 0
    success: bool = True
    error_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    extracted_at: datetime = field(default_factory=datetime.now)

    @property
    def transaction_count(self) -> int:
        """Get number of candidate transactions."""
        return len(self.transactions)

    @property
    def duplicate_count(self) -> int:
        """Get number of candidates flagged as duplicates."""
        return sum(1 for t in self.transactions if t.is_duplicate)

    @property
    def importable_transactions(self) -> List[AnnotatedTransaction]:
        """Get candidates suggested for import."""
        return [t for t in self.transactions if t.suggested_action is SuggestedAction.IMPORT]

    def to_dict(self) -> dict:
        """Convert import result to dictionary."""
        return {
            'success': self.success,
            'segmentsProcessed': self.segments_processed,
            'transactionCount': self.transaction_count,
            'duplicateCount': self.duplicate_count,
            'processingTime': round(self.processing_time, 2),
            'extractedAt': self.extracted_at.isoformat(),
            'summary': self.summary.to_dict() if self.summary else None,
            'transactions': [t.to_dict() for t in self.transactions],
            'warnings': self.warnings,
            'errorMessage': self.error_message,
        }
