"""Date parsing for extracted transactions and stored records."""
import logging
import re
from datetime import date, datetime
from typing import Optional, List, Union

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMATS = [
    "%Y-%m-%d",           # 2024-03-05 (ISO, what the extractor is asked for)
    "%Y-%m-%dT%H:%M:%S",  # 2024-03-05T00:00:00
    "%Y-%m-%dT%H:%M:%S.%f",
    "%m/%d/%Y",           # 03/05/2024
    "%m-%d-%Y",           # 03-05-2024
    "%b %d, %Y",          # Mar 5, 2024
    "%b %d %Y",           # Mar 5 2024
    "%B %d, %Y",          # March 5, 2024
]


def parse_date(
    date_string: str,
    date_formats: Optional[List[str]] = None
) -> Optional[datetime]:
    """
    Parse date string using multiple strategies.

    Args:
        date_string: String containing date
        date_formats: List of strptime formats to try before falling back
            to dateutil

    Returns:
        datetime object or None if parsing fails
    """
    if not date_string or not isinstance(date_string, str):
        return None

    date_string = normalize_date_string(date_string)

    if not date_string:
        return None

    for fmt in date_formats or DEFAULT_DATE_FORMATS:
        try:
            return datetime.strptime(date_string, fmt)
        except ValueError:
            continue

    # dateutil handles offsets ("Z", "+02:00") and the long tail of formats
    try:
        return dateutil_parser.parse(date_string)
    except (ValueError, OverflowError):
        pass

    logger.warning(f"Could not parse date: {date_string}")
    return None


def to_calendar_day(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Reduce a date, datetime or date string to its calendar day.

    Time-of-day is discarded; a datetime keeps the day it carries in its
    own timezone.
    """
    if value is None:
        return None
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(value)
    return parsed.date() if parsed else None


def normalize_date_string(date_str: str) -> str:
    """
    Normalize date string for consistent parsing.

    Args:
        date_str: Raw date string

    Returns:
        Normalized date string
    """
    normalized = ' '.join(date_str.split())

    # Month abbreviations with periods ("Mar. 5")
    normalized = re.sub(r'\b([A-Za-z]{3})\.', r'\1', normalized)

    # Ordinal suffixes (1st, 2nd, 3rd, 4th)
    normalized = re.sub(r'(\d+)(?:st|nd|rd|th)\b', r'\1', normalized)

    return normalized
