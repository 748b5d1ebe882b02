"""Statement text segmentation."""
from .line_classifier import LineClassifier, estimate_transaction_count
from .segmenter import StatementSegmenter, split_statement, DEFAULT_MAX_TRANSACTIONS_PER_SEGMENT

__all__ = [
    'LineClassifier',
    'estimate_transaction_count',
    'StatementSegmenter',
    'split_statement',
    'DEFAULT_MAX_TRANSACTIONS_PER_SEGMENT',
]
