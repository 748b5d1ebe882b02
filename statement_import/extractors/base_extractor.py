"""Base extractor abstract class."""
from abc import ABC, abstractmethod
from pathlib import Path


class BaseExtractor(ABC):
    """
    Abstract base class for statement text extractors.

    Each extractor turns one kind of uploaded file into the raw text that
    the segmenter consumes.
    """

    # Lower-case file suffixes this extractor accepts
    SUPPORTED_EXTENSIONS: frozenset = frozenset()

    def __init__(self):
        """Initialize the extractor."""
        self.name = self.__class__.__name__

    @abstractmethod
    def extract(self, file_path: Path) -> tuple[str, float]:
        """
        Extract text from a document.

        Args:
            file_path: Path to the document file

        Returns:
            Tuple of (extracted_text, confidence_score)
            confidence_score is between 0.0 and 100.0

        Raises:
            ExtractionError: If extraction fails
        """
        pass

    def can_handle(self, file_path: Path) -> bool:
        """
        Check if this extractor can handle the given file.

        Args:
            file_path: Path to the document file

        Returns:
            True if this extractor can process the file
        """
        return file_path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    def validate_file(self, file_path: Path) -> None:
        """
        Validate that the file exists and is readable.

        Args:
            file_path: Path to the document file

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a non-empty file
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Not a file: {file_path}")

        if not file_path.stat().st_size > 0:
            raise ValueError(f"File is empty: {file_path}")


class ExtractionError(Exception):
    """Custom exception for extraction errors."""
    pass
