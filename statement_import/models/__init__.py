"""Data models for statement import."""
from .transaction import (
    Transaction,
    TransactionType,
    ExistingRecord,
    AnnotatedTransaction,
    SuggestedAction,
)
from .batch_result import Segment, DateRange, BatchSummary, BatchResult, MergedResult
from .import_result import ImportResult

__all__ = [
    'Transaction',
    'TransactionType',
    'ExistingRecord',
    'AnnotatedTransaction',
    'SuggestedAction',
    'Segment',
    'DateRange',
    'BatchSummary',
    'BatchResult',
    'MergedResult',
    'ImportResult',
]
