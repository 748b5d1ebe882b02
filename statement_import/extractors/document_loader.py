"""Turn an uploaded statement file into raw text."""
import logging
from pathlib import Path

from .base_extractor import ExtractionError
from .pdf_extractor import PDFExtractor
from .text_extractor import TextFileExtractor

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({'.png', '.jpg', '.jpeg', '.gif', '.bmp'})
SUPPORTED_EXTENSIONS = frozenset({'.pdf', '.csv', '.txt', '.png', '.jpg', '.jpeg'})


def get_file_type(file_path: Path) -> str:
    """
    Classify a statement file by its suffix.

    Returns:
        One of ``pdf``, ``csv``, ``text``, ``image`` or ``unknown``
    """
    suffix = file_path.suffix.lower()
    if suffix == '.pdf':
        return 'pdf'
    if suffix == '.csv':
        return 'csv'
    if suffix in IMAGE_EXTENSIONS:
        return 'image'
    if suffix == '.txt':
        return 'text'
    return 'unknown'


def is_file_supported(file_path: Path) -> bool:
    """Check whether the file type is accepted for upload."""
    return file_path.suffix.lower() in SUPPORTED_EXTENSIONS


def load_statement_text(file_path: Path) -> str:
    """
    Extract raw statement text from a file.

    Args:
        file_path: PDF, CSV or text statement

    Returns:
        Extracted text (empty if a PDF has no text layer)

    Raises:
        ExtractionError: If the type is unsupported or extraction fails
    """
    if not is_file_supported(file_path):
        raise ExtractionError(f"Unsupported file type: {file_path.suffix or 'unknown'}")

    file_type = get_file_type(file_path)
    logger.info(f"Loading {file_type} statement: {file_path.name}")

    if file_type == 'pdf':
        text, _ = PDFExtractor().extract(file_path)
        return text

    if file_type in ('csv', 'text'):
        text, _ = TextFileExtractor().extract(file_path)
        return text

    if file_type == 'image':
        raise ExtractionError(
            f"Image statements need OCR, which is not supported: {file_path.name}. "
            "Export the statement as PDF or CSV instead."
        )

    raise ExtractionError(f"Unsupported file type: {file_path.suffix}")
