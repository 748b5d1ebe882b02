"""Extractors for statement files and statement segments."""
from .base_extractor import BaseExtractor, ExtractionError
from .pdf_extractor import PDFExtractor
from .text_extractor import TextFileExtractor
from .document_loader import get_file_type, is_file_supported, load_statement_text
from .llm_extractor import (
    AnthropicTransactionExtractor,
    SegmentExtractionError,
    TransactionExtractor,
    build_duplicate_hint,
)

__all__ = [
    'BaseExtractor',
    'ExtractionError',
    'PDFExtractor',
    'TextFileExtractor',
    'get_file_type',
    'is_file_supported',
    'load_statement_text',
    'AnthropicTransactionExtractor',
    'SegmentExtractionError',
    'TransactionExtractor',
    'build_duplicate_hint',
]
