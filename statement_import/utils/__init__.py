"""Utility functions."""
from .logger import setup_logger, log_import_audit
from .currency_parser import parse_currency, to_decimal, format_currency
from .date_parser import parse_date, to_calendar_day, normalize_date_string

__all__ = [
    'setup_logger',
    'log_import_audit',
    'parse_currency',
    'to_decimal',
    'format_currency',
    'parse_date',
    'to_calendar_day',
    'normalize_date_string',
]
