"""
Heuristic classification of statement text lines.

A line counts as a transaction line when it looks like it carries a date
and/or a currency amount. The rule intentionally over-triggers on long
lines; the segmenter only needs a stable count, not an exact parse.
"""
import re
from typing import List, Optional, Pattern


# All tables are ASCII-only: \d and \w must not match non-Latin digits or letters

# Dates must open the line (after indentation)
DATE_PATTERNS: List[Pattern] = [
    re.compile(r'^\s*\d{1,2}[-/]\d{1,2}[-/]\d{2,4}', re.ASCII),   # MM/DD/YYYY or MM-DD-YYYY
    re.compile(r'^\s*\d{4}[-/]\d{2}[-/]\d{2}', re.ASCII),         # YYYY-MM-DD
    re.compile(r'^\s*\w{3}\s+\d{1,2},?\s+\d{4}', re.ASCII),       # Jan 1, 2024
]

# Amounts may appear anywhere on the line
AMOUNT_PATTERNS: List[Pattern] = [
    re.compile(r'\$[\d,]+\.\d{2}', re.ASCII),                      # $1,234.56
    re.compile(r'[\d,]+\.\d{2}\s*(?:CR|DR)?', re.IGNORECASE | re.ASCII),  # 1,234.56 CR
]

# Used only for rough per-text estimates (progress and previews)
ESTIMATE_PATTERNS: List[Pattern] = [
    re.compile(r'\$[\d,]+\.\d{2}', re.ASCII),
    re.compile(r'\d{1,2}/\d{1,2}/\d{2,4}', re.ASCII),
    re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII),
    re.compile(r'(?:debit|credit|withdrawal|deposit|payment|purchase)', re.IGNORECASE | re.ASCII),
]


class LineClassifier:
    """
    Decide whether a line of statement text is a transaction line.

    Subclass or pass different pattern tables to change the heuristic
    without touching segmentation.
    """

    # A line with an amount but no date needs some description next to it
    AMOUNT_ONLY_MIN_LENGTH = 20
    # A line with a date but no amount needs some description next to it
    DATE_ONLY_MIN_LENGTH = 15

    def __init__(
        self,
        date_patterns: Optional[List[Pattern]] = None,
        amount_patterns: Optional[List[Pattern]] = None
    ):
        """
        Initialize classifier.

        Args:
            date_patterns: Patterns recognising a leading date
            amount_patterns: Patterns recognising a currency amount
        """
        self.date_patterns = date_patterns if date_patterns is not None else DATE_PATTERNS
        self.amount_patterns = amount_patterns if amount_patterns is not None else AMOUNT_PATTERNS

    def has_date(self, line: str) -> bool:
        """Check whether the line opens with a recognised date."""
        return any(p.search(line) for p in self.date_patterns)

    def has_amount(self, line: str) -> bool:
        """Check whether the line contains a recognised amount."""
        return any(p.search(line) for p in self.amount_patterns)

    def is_transaction_line(self, line: str) -> bool:
        """
        Classify a single line.

        A line is a transaction line if it has a date and an amount, an
        amount and more than 20 characters, or a date and more than 15
        characters. Length is measured on the raw line.

        Args:
            line: One line of statement text

        Returns:
            True if the line should count towards a segment's budget
        """
        has_date = self.has_date(line)
        has_amount = self.has_amount(line)

        return (
            (has_date and has_amount)
            or (has_amount and len(line) > self.AMOUNT_ONLY_MIN_LENGTH)
            or (has_date and len(line) > self.DATE_ONLY_MIN_LENGTH)
        )

    def __call__(self, line: str) -> bool:
        return self.is_transaction_line(line)


def estimate_transaction_count(text: str) -> int:
    """
    Estimate how many transactions a block of text contains.

    Counts lines that match at least two of the estimate patterns. This is
    a looser signal than :class:`LineClassifier` and is never used to decide
    segment boundaries.

    Args:
        text: Statement text

    Returns:
        Estimated number of transaction lines
    """
    count = 0
    for line in text.split('\n'):
        matches = sum(1 for p in ESTIMATE_PATTERNS if p.search(line))
        if matches >= 2:
            count += 1
    return count
