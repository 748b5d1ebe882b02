"""
Split statement text into transaction-bounded segments.

Large statements hold more transactions than one extraction call can
return reliably. The segmenter cuts the text into pieces of at most
``max_transactions_per_segment`` transaction lines, only ever between
lines, and repeats the statement header (account name, period, column
titles) at the top of every piece so each one can be extracted on its own.
"""
import logging
from typing import List, Optional

from .line_classifier import LineClassifier

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRANSACTIONS_PER_SEGMENT = 30


class StatementSegmenter:
    """Split raw statement text into self-contained segments."""

    def __init__(
        self,
        max_transactions_per_segment: int = DEFAULT_MAX_TRANSACTIONS_PER_SEGMENT,
        classifier: Optional[LineClassifier] = None
    ):
        """
        Initialize segmenter.

        Args:
            max_transactions_per_segment: Transaction-line budget per segment
            classifier: Line classifier (default heuristic if None)

        Raises:
            ValueError: If the budget is not a positive integer
        """
        if not isinstance(max_transactions_per_segment, int) or max_transactions_per_segment < 1:
            raise ValueError("max_transactions_per_segment must be a positive integer")

        self.max_transactions_per_segment = max_transactions_per_segment
        self.classifier = classifier or LineClassifier()

    def split(self, text: str) -> List[str]:
        """
        Split text into segments.

        Every line of the input lands in exactly one segment, in order. The
        header (lines before the first transaction line) additionally opens
        every segment after the first.

        Args:
            text: Raw statement text

        Returns:
            Segment texts in statement order; ``[]`` for an empty string
        """
        if not text:
            return []

        lines = text.split('\n')
        is_txn = [self.classifier.is_transaction_line(line) for line in lines]

        header = self._find_header(lines, is_txn)

        segments: List[str] = []
        current: List[str] = []
        txn_count = 0

        for line, transaction_line in zip(lines, is_txn):
            # Blank lines ride along with the open segment
            if transaction_line and line.strip():
                txn_count += 1

                if txn_count > self.max_transactions_per_segment and current:
                    segments.append('\n'.join(current))
                    current = list(header)
                    txn_count = 1

            current.append(line)

        if len(current) > len(header):
            segments.append('\n'.join(current))

        if not segments:
            segments.append(text)

        logger.info(
            f"Split statement into {len(segments)} segment(s) of up to "
            f"{self.max_transactions_per_segment} transactions"
        )
        return segments

    def _find_header(self, lines: List[str], is_txn: List[bool]) -> List[str]:
        """Get the lines before the first transaction line (empty if none)."""
        for index, transaction_line in enumerate(is_txn):
            if transaction_line and lines[index].strip():
                return lines[:index]
        return []


def split_statement(
    text: str,
    max_transactions_per_segment: int = DEFAULT_MAX_TRANSACTIONS_PER_SEGMENT
) -> List[str]:
    """Split text with the default classifier."""
    return StatementSegmenter(max_transactions_per_segment).split(text)
