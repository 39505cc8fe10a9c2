"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date, parse_month
from fintrack.utils.amount_parser import parse_amount, coerce_amount
from fintrack.utils.money import format_currency, format_percentage

__all__ = [
    "parse_date",
    "parse_month",
    "parse_amount",
    "coerce_amount",
    "format_currency",
    "format_percentage",
]
