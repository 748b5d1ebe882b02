"""Logging configuration for the application."""
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config.settings import LOG_LEVEL, LOG_FILE


def setup_logger(name: str = "statement_import") -> logging.Logger:
    """
    Set up logger with file and console handlers.

    Module loggers created with ``logging.getLogger(__name__)`` inside the
    package propagate to this logger, so it only needs configuring once.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # Console handler (INFO and above)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    # File handler (DEBUG and above)
    try:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not set up file logging: {e}")

    return logger


def log_import_audit(
    source: str,
    success: bool,
    segments: int = 0,
    transaction_count: int = 0,
    duplicate_count: int = 0,
    error: Optional[str] = None
) -> None:
    """
    Log an audit line for one statement import run.

    Args:
        source: File name or other label for the analyzed statement
        success: Whether the import analysis succeeded
        segments: Number of segments sent to the extractor
        transaction_count: Number of candidate transactions returned
        duplicate_count: Number of candidates flagged as duplicates
        error: Error message if failed
    """
    logger = logging.getLogger("statement_import.audit")

    audit_data = {
        "timestamp": datetime.now().isoformat(),
        "source": Path(source).name if source else "text",
        "success": success,
        "segments": segments,
        "transactions": transaction_count,
        "duplicates": duplicate_count,
    }

    if error:
        audit_data["error"] = error

    audit_message = " | ".join(f"{k}={v}" for k, v in audit_data.items())
    logger.info(f"AUDIT: {audit_message}")
