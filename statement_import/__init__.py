"""Bank statement batching, extraction and import review."""

__version__ = "0.1.0"
