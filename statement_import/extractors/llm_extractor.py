"""Structured transaction extraction from statement segments using Anthropic Claude."""
import json
import logging
from typing import Any, Optional, Protocol, Sequence

import anthropic

from .base_extractor import ExtractionError
from ..config import get_category_vocabulary
from ..config.settings import (
    ANTHROPIC_API_KEY,
    EXTRACTION_MODEL,
    EXTRACTION_TEMPERATURE,
    EXTRACTION_MAX_TOKENS,
    DUPLICATE_HINT_LIMIT,
)
from ..models import BatchResult, ExistingRecord, Segment

logger = logging.getLogger(__name__)


class TransactionExtractor(Protocol):
    """Anything that turns one segment into a batch result (or raises)."""

    def extract(self, segment: Segment) -> BatchResult:
        ...


class SegmentExtractionError(ExtractionError):
    """Extraction of one segment failed."""

    def __init__(self, batch_number: int, total_batches: int, message: str):
        self.batch_number = batch_number
        self.total_batches = total_batches
        super().__init__(f"Batch {batch_number}/{total_batches}: {message}")


def build_duplicate_hint(
    existing_expenses: Sequence[ExistingRecord],
    existing_incomes: Sequence[ExistingRecord],
    limit: int = DUPLICATE_HINT_LIMIT
) -> Optional[str]:
    """
    Summarize existing records for the extractor.

    Only the first ``limit`` records of each kind are included. Returns None
    when there is nothing to show.
    """
    if not existing_expenses and not existing_incomes:
        return None

    expenses = json.dumps([r.to_dict() for r in existing_expenses[:limit]])
    incomes = json.dumps([r.to_dict() for r in existing_incomes[:limit]])
    return f"Expenses: {expenses}\nIncome: {incomes}"


class AnthropicTransactionExtractor:
    """
    Extract structured transactions from one statement segment.

    Each call sends the segment text plus the category vocabulary and asks
    for a JSON object with ``transactions`` and ``summary``. The response is
    validated into a :class:`BatchResult`.
    """

    EXTRACTION_PROMPT = """You are a financial data extraction expert. Analyze the provided bank statement text and extract all transactions.

For each transaction, determine:
1. date (format: YYYY-MM-DD)
2. description (clean, readable description)
3. amount (positive number)
4. type ("income" or "expense" based on context)
5. category (use these exact values):
   - For expenses: {expense_categories}
   - For income: {income_categories}
6. isRecurring (true if it appears to be a recurring transaction)
7. merchantName (the merchant/company name if it can be identified)

Return a JSON object with this EXACT structure:
{{
  "transactions": [
    {{
      "date": "YYYY-MM-DD",
      "description": "Transaction description",
      "amount": 0.00,
      "type": "expense",
      "category": "OTHER",
      "isRecurring": false,
      "merchantName": "Merchant"
    }}
  ],
  "summary": {{
    "totalIncome": 0.00,
    "totalExpenses": 0.00,
    "transactionCount": 0,
    "dateRange": {{"start": "YYYY-MM-DD", "end": "YYYY-MM-DD"}}
  }}
}}

Important:
- Extract EVERY transaction in the text - do not skip any
- Clean up transaction descriptions to be readable
- Detect recurring patterns (subscriptions, regular payments)
- Categorize accurately based on merchant names and descriptions
- Return ONLY valid JSON - no explanatory text
{batch_context}{duplicate_context}
Bank statement content:
{content}"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = EXTRACTION_MODEL,
        temperature: float = EXTRACTION_TEMPERATURE,
        max_tokens: int = EXTRACTION_MAX_TOKENS,
        client: Optional[Any] = None
    ):
        """
        Initialize extractor.

        Args:
            api_key: Anthropic API key (if not provided, reads ANTHROPIC_API_KEY)
            model: Model name
            temperature: Sampling temperature
            max_tokens: Output token limit per segment
            client: Pre-built client exposing ``messages.create`` (tests)

        Raises:
            ValueError: If no client is given and no API key is configured
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        if client is not None:
            self.client = client
        else:
            self.api_key = api_key or ANTHROPIC_API_KEY
            if not self.api_key:
                raise ValueError(
                    "Anthropic API key required. Set ANTHROPIC_API_KEY environment variable "
                    "or pass api_key parameter"
                )
            self.client = anthropic.Anthropic(api_key=self.api_key)

        logger.debug(f"Transaction extractor initialized (model={self.model})")

    def build_prompt(self, segment: Segment) -> str:
        """Render the extraction prompt for one segment."""
        vocabulary = get_category_vocabulary()

        batch_context = ""
        if segment.total_batches > 1:
            batch_context = (
                f"\nThis is batch {segment.batch_number} of {segment.total_batches} "
                "from a larger statement. Extract only the transactions in this batch; "
                "the summary must describe this batch alone.\n"
            )

        duplicate_context = ""
        if segment.duplicate_hint:
            duplicate_context = (
                "\nExisting transactions to check for duplicates:\n"
                f"{segment.duplicate_hint}\n"
            )

        return self.EXTRACTION_PROMPT.format(
            expense_categories=", ".join(vocabulary.categories_for('expense')),
            income_categories=", ".join(vocabulary.categories_for('income')),
            batch_context=batch_context,
            duplicate_context=duplicate_context,
            content=segment.text,
        )

    def extract(self, segment: Segment) -> BatchResult:
        """
        Extract transactions from one segment.

        Args:
            segment: Segment to analyze

        Returns:
            Parsed batch result

        Raises:
            SegmentExtractionError: If the API call fails or the response
                is not a valid result
        """
        logger.info(f"Extracting batch {segment.batch_number}/{segment.total_batches}")

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[
                    {
                        "role": "user",
                        "content": self.build_prompt(segment),
                    }
                ],
            )
        except anthropic.APIError as e:
            logger.error(f"Extraction API call failed for batch {segment.batch_number}: {e}")
            raise SegmentExtractionError(segment.batch_number, segment.total_batches, str(e)) from e

        if getattr(message, 'stop_reason', None) == 'max_tokens':
            logger.warning(f"Batch {segment.batch_number} hit the output token limit")

        try:
            response_text = message.content[0].text
            result = BatchResult.from_dict(json.loads(self._extract_json(response_text)))
        except (IndexError, AttributeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Invalid extraction response for batch {segment.batch_number}: {e}")
            raise SegmentExtractionError(
                segment.batch_number,
                segment.total_batches,
                f"invalid response: {e}"
            ) from e

        logger.info(f"Extracted {len(result.transactions)} transactions from batch {segment.batch_number}")
        return result

    def _extract_json(self, text: str) -> str:
        """
        Extract JSON from response text (handles markdown code blocks).

        Args:
            text: Response text that may contain JSON

        Returns:
            Clean JSON string
        """
        if '```json' in text:
            start = text.find('```json') + 7
            end = text.find('```', start)
            return text[start:end].strip()
        elif '```' in text:
            start = text.find('```') + 3
            end = text.find('```', start)
            return text[start:end].strip()
        else:
            return text.strip()
