"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "£123.45"
    - "-123.45"
    - "-£123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace and stray quotes
    amount_str = amount_str.strip().replace('"', "")

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def is_number(value: Optional[str]) -> bool:
    """Return True if the value parses as an amount."""
    try:
        parse_amount(value or "")
    except ValueError:
        return False
    return True


def parse_amount_or_default(value: Optional[str], default: Decimal = Decimal("0")) -> Decimal:
    """Parse an amount, returning default for blank or unparseable input."""
    if value is None or not value.strip():
        return default
    try:
        return parse_amount(value)
    except ValueError:
        return default


def parse_int_or_default(value: Optional[str], default: int = 1) -> int:
    """Parse a whole number, truncating any fractional part."""
    amount = parse_amount_or_default(value, Decimal(default))
    return int(amount)
