"""Configuration management."""
from .settings import *
from .category_loader import CategorySet, CategoryVocabulary, get_category_vocabulary

__all__ = ['CategorySet', 'CategoryVocabulary', 'get_category_vocabulary']
