"""Duplicate detection against existing records."""
from .deduplicator import annotate_duplicates
from .existing_records import load_existing_records, parse_existing_records

__all__ = ['annotate_duplicates', 'load_existing_records', 'parse_existing_records']
