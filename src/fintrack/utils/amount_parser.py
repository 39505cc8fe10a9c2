"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import logging
import re

logger = logging.getLogger(__name__)

_CURRENCY_SYMBOLS = r"[$€£¥₹]"


def _normalize(amount_str: str) -> tuple[str, bool]:
    """Strip currency symbols, thousands separators and parentheses."""
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(_CURRENCY_SYMBOLS, "", amount_str)
    amount_str = amount_str.replace(",", "").strip()
    return amount_str, is_negative


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45" / "$123.45"
    - "-123.45"
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

    normalized, is_negative = _normalize(amount_str)

    try:
        amount = Decimal(normalized)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def coerce_amount(value) -> Decimal:
    """Convert a loosely typed value into a Decimal, defaulting to zero.

    Entry forms are forgiving: None, blanks and non-numeric text become 0
    instead of failing the whole entry.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float)):
        amount = Decimal(str(value))
        return amount if amount.is_finite() else Decimal("0")
    try:
        return parse_amount(str(value))
    except ValueError:
        logger.debug("Coercing non-numeric amount %r to 0", value)
        return Decimal("0")
