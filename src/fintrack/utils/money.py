"""Currency and percentage formatting for the presentation boundary."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CURRENCIES = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

DEFAULT_CURRENCY = "INR"

CENT = Decimal("0.01")


def quantize_money(value) -> Decimal:
    """Round a numeric value to two decimal places (half up)."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_currency(currency: Optional[str]) -> str:
    """Map a stored currency setting like "USD ($)" to its ISO code."""
    if not currency:
        return DEFAULT_CURRENCY
    for code in CURRENCIES:
        if code in currency.upper():
            return code
    return DEFAULT_CURRENCY


def _group_indian(digits: str) -> str:
    """Group an integer digit string the en-IN way (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount, currency: Optional[str] = None) -> str:
    """Format an amount with the currency symbol.

    Whole amounts are shown without decimals. INR uses Indian digit grouping,
    EUR uses the German separators, USD and GBP use western grouping.
    """
    code = resolve_currency(currency)
    symbol = CURRENCIES[code]
    value = quantize_money(amount)
    negative = value < 0
    value = abs(value)

    if value == value.to_integral_value():
        integer_part, fraction = str(int(value)), ""
    else:
        integer_part, fraction = f"{value:.2f}".split(".")

    if code == "INR":
        grouped = _group_indian(integer_part)
        text = f"{symbol}{grouped}" + (f".{fraction}" if fraction else "")
    elif code == "EUR":
        grouped = f"{int(integer_part):,}".replace(",", ".")
        text = grouped + (f",{fraction}" if fraction else "") + f" {symbol}"
    else:
        grouped = f"{int(integer_part):,}"
        text = f"{symbol}{grouped}" + (f".{fraction}" if fraction else "")

    return f"-{text}" if negative else text


def format_percentage(value, decimals: int = 2) -> str:
    """Format a percentage with a fixed number of decimals."""
    return f"{Decimal(str(value)):.{decimals}f}%"
