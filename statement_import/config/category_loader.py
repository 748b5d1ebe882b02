"""Load and manage the transaction category vocabulary."""
import logging
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from .settings import CATEGORIES_FILE

logger = logging.getLogger(__name__)


class CategorySet:
    """Categories, aliases and fallback for one transaction type."""

    def __init__(self, config_dict: dict, transaction_type: str):
        """Initialize category set from dictionary."""
        self.transaction_type = transaction_type
        self._config = config_dict

    @property
    def categories(self) -> List[str]:
        """Get the allowed category values."""
        return [c.upper() for c in self._config.get('categories', [])]

    @property
    def aliases(self) -> Dict[str, str]:
        """Get alias -> category mappings."""
        aliases = self._config.get('aliases') or {}
        return {k.upper(): v.upper() for k, v in aliases.items()}

    @property
    def fallback(self) -> str:
        """Get the category used for unknown values."""
        return self._config.get('fallback', 'OTHER').upper()

    def normalize(self, raw: Optional[str]) -> str:
        """
        Map a raw category label onto the controlled vocabulary.

        Args:
            raw: Category as returned by the extractor

        Returns:
            A value from ``categories``
        """
        if not raw:
            return self.fallback

        key = str(raw).strip().upper().replace(' ', '_').replace('-', '_')
        if key in self.categories:
            return key
        if key in self.aliases:
            return self.aliases[key]

        logger.debug(f"Unknown {self.transaction_type} category {raw!r}, using {self.fallback}")
        return self.fallback


class CategoryVocabulary:
    """Loads the category vocabulary for income and expense transactions."""

    def __init__(self, config_file: Path = CATEGORIES_FILE):
        """
        Initialize vocabulary.

        Args:
            config_file: YAML file with one top-level key per transaction type
        """
        self.config_file = config_file
        self._sets: Dict[str, CategorySet] = {}
        self._load()

    def _load(self) -> None:
        """Load the vocabulary file."""
        if not self.config_file.exists():
            logger.warning(f"Category file not found: {self.config_file}")
            return

        with open(self.config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        for transaction_type, config_dict in data.items():
            if isinstance(config_dict, dict):
                self._sets[transaction_type.lower()] = CategorySet(config_dict, transaction_type.lower())
                logger.debug(f"Loaded {transaction_type} categories")

    def get(self, transaction_type: str) -> Optional[CategorySet]:
        """Get the category set for a transaction type (case-insensitive)."""
        return self._sets.get(transaction_type.lower())

    def categories_for(self, transaction_type: str) -> List[str]:
        """Get allowed categories for a transaction type."""
        category_set = self.get(transaction_type)
        return category_set.categories if category_set else ['OTHER']

    def normalize(self, transaction_type: str, raw: Optional[str]) -> str:
        """Normalize a raw category for the given transaction type."""
        category_set = self.get(transaction_type)
        if category_set is None:
            return 'OTHER'
        return category_set.normalize(raw)

    @property
    def transaction_types(self) -> List[str]:
        """Get the transaction types with a configured vocabulary."""
        return list(self._sets.keys())


# Singleton instance
_vocabulary: Optional[CategoryVocabulary] = None


def get_category_vocabulary() -> CategoryVocabulary:
    """Get singleton instance of CategoryVocabulary."""
    global _vocabulary
    if _vocabulary is None:
        _vocabulary = CategoryVocabulary()
    return _vocabulary
