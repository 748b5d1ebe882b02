"""Plain text and CSV statement loading."""
import logging
from pathlib import Path

from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class TextFileExtractor(BaseExtractor):
    """Read CSV exports and text files as-is."""

    SUPPORTED_EXTENSIONS = frozenset({'.csv', '.txt'})

    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        Read the file as UTF-8 text (a leading BOM is dropped).

        Args:
            file_path: Path to CSV or text file

        Returns:
            Tuple of (text, 100.0)

        Raises:
            ExtractionError: If the file cannot be read
        """
        self.validate_file(file_path)

        if not self.can_handle(file_path):
            raise ExtractionError(f"Not a text or CSV file: {file_path}")

        try:
            text = file_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading text file: {e}")
            raise ExtractionError(f"Failed to read text file content: {e}") from e

        logger.info(f"Read {len(text)} characters from {file_path.name}")
        return text, 100.0
