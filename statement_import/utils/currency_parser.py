"""Parse currency amounts from various formats."""
import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


def parse_currency(amount_string: str) -> Optional[Decimal]:
    """
    Parse currency amount from string.

    Handles various formats:
    - $1,234.56
    - £1,234.56
    - €1.234,56
    - 1234.56
    - (1234.56) - negative amount
    - 1234.56 CR - credit (negative)

    Args:
        amount_string: String containing currency amount

    Returns:
        Decimal amount or None if parsing fails
    """
    if not amount_string or not isinstance(amount_string, str):
        return None

    cleaned = amount_string.strip()

    if not cleaned:
        return None

    is_negative = False

    # Credit/debit markers
    if cleaned.upper().endswith('CR') or cleaned.upper().endswith('DR'):
        is_negative = True
        cleaned = re.sub(r'(?i)(CR|DR)$', '', cleaned).strip()

    # Parentheses notation for negative
    if cleaned.startswith('(') and cleaned.endswith(')'):
        is_negative = True
        cleaned = cleaned[1:-1].strip()

    if cleaned.startswith('-'):
        is_negative = True
        cleaned = cleaned[1:].strip()

    cleaned = re.sub(r'[£$€¥₹]', '', cleaned).strip()

    # European format (1.234,56) vs US/UK format (1,234.56)
    if ',' in cleaned and '.' in cleaned:
        if cleaned.rfind(',') > cleaned.rfind('.'):
            cleaned = cleaned.replace('.', '').replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    elif ',' in cleaned:
        # Two digits after a lone comma means a decimal comma
        if re.search(r',\d{2}$', cleaned):
            cleaned = cleaned.replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')

    cleaned = re.sub(r'[^\d.]', '', cleaned)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        logger.warning(f"Could not parse currency amount: {amount_string}")
        return None

    return -amount if is_negative else amount


def to_decimal(value: Optional[Number]) -> Decimal:
    """
    Convert a JSON/DB amount to an exact Decimal.

    Floats go through ``str`` so that ``42.1`` becomes ``Decimal('42.1')``
    rather than its binary expansion.

    Raises:
        ValueError: If the value cannot be interpreted as a finite amount
    """
    if value is None:
        return Decimal('0')
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = parse_currency(value)
        if amount is None:
            raise ValueError(f"Not an amount: {value!r}")
    else:
        raise ValueError(f"Not an amount: {value!r}")

    # NaN and infinities cannot be compared or summed as money
    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return amount


def format_currency(amount: Number, currency: str = "USD") -> str:
    """
    Format amount as currency string.

    Args:
        amount: Numeric amount
        currency: Currency code (USD, GBP, EUR)

    Returns:
        Formatted currency string
    """
    symbols = {
        "USD": "$",
        "GBP": "£",
        "EUR": "€"
    }

    symbol = symbols.get(currency, "$")
    value = to_decimal(amount)

    formatted = f"{abs(value):,.2f}"

    if value < 0:
        return f"-{symbol}{formatted}"
    return f"{symbol}{formatted}"
