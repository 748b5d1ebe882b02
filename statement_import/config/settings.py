"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
CONFIG_DIR = Path(__file__).parent
OUTPUT_DIR = Path(os.getenv("STATEMENT_IMPORT_OUTPUT_DIR", str(PROJECT_ROOT / "output")))
LOGS_DIR = Path(os.getenv("STATEMENT_IMPORT_LOG_DIR", str(PROJECT_ROOT / "logs")))

# Category vocabulary understood by the extractor
CATEGORIES_FILE = CONFIG_DIR / "categories.yaml"

# API Keys
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")

# Extraction settings
EXTRACTION_MODEL = os.getenv("EXTRACTION_MODEL", "claude-sonnet-4-5-20250929")
EXTRACTION_TEMPERATURE = float(os.getenv("EXTRACTION_TEMPERATURE", "0.3"))
EXTRACTION_MAX_TOKENS = int(os.getenv("EXTRACTION_MAX_TOKENS", "8192"))

# Segmentation settings
MAX_TRANSACTIONS_PER_SEGMENT = int(os.getenv("MAX_TRANSACTIONS_PER_SEGMENT", "30"))

# 1 keeps extraction calls sequential in segment order
MAX_CONCURRENT_EXTRACTIONS = int(os.getenv("MAX_CONCURRENT_EXTRACTIONS", "1"))

# How many existing records of each kind are shown to the extractor
DUPLICATE_HINT_LIMIT = int(os.getenv("DUPLICATE_HINT_LIMIT", "20"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = LOGS_DIR / "statement_import.log"

# Currency settings
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")
