"""Invoice domain service."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from fintrack.database.base import Database
from fintrack.domain.entities import ZERO, Invoice as InvoiceEntity
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_invoice_number,
    invoice_not_found,
)
from fintrack.utils.money import quantize_money

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_TERMS_DAYS = 30


@dataclass(frozen=True)
class InvoiceLine:
    """Line item as entered, before its amount is derived."""

    description: str
    quantity: Decimal
    rate: Decimal


class InvoiceService:
    """Service for managing invoice records."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def next_invoice_number(self, on_date: date) -> str:
        """Return the number after the highest INV-YYYY-MM-NNN used in a month."""
        prefix = f"INV-{on_date.year:04d}-{on_date.month:02d}-"
        last = 0
        for inv in self.db.list_invoices():
            suffix = inv.invoice_number[len(prefix):]
            if inv.invoice_number.startswith(prefix) and suffix.isdigit():
                last = max(last, int(suffix))
        return f"{prefix}{last + 1:03d}"

    def create_invoice(
        self,
        account_name: str,
        client_name: str,
        lines: Iterable[InvoiceLine],
        invoice_date: Optional[date] = None,
        due_date: Optional[date] = None,
        invoice_number: Optional[str] = None,
        client_email: Optional[str] = None,
        client_address: Optional[str] = None,
        notes: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> int:
        """Create an invoice; item amounts are quantity times rate.

        Args:
            account_name: Name shown as the issuer
            client_name: Client billed
            lines: Line items
            invoice_date: Invoice date (defaults to today)
            due_date: Due date (defaults to 30 days after the invoice date)
            invoice_number: Number to use (defaults to the next in sequence)

        Returns:
            Invoice ID

        Raises:
            ConflictError: If the invoice number is already taken
            ValidationError: If the client is missing, there are no items, an
                item is invalid or the due date precedes the invoice date
        """
        if not client_name or not client_name.strip():
            raise ValidationError("Client name cannot be empty")

        invoice_date = invoice_date or date.today()
        due_date = due_date or invoice_date + relativedelta(days=DEFAULT_PAYMENT_TERMS_DAYS)
        if due_date < invoice_date:
            raise ValidationError("Due date cannot be before the invoice date")

        items = []
        for line in lines:
            if not line.description or not line.description.strip():
                raise ValidationError("Item description cannot be empty")
            if line.quantity <= 0:
                raise ValidationError("Item quantity must be greater than zero")
            if line.rate < 0:
                raise ValidationError("Item rate cannot be negative")
            items.append(
                {
                    "description": line.description.strip(),
                    "quantity": line.quantity,
                    "rate": line.rate,
                    "amount": quantize_money(line.quantity * line.rate),
                }
            )
        if not items:
            raise ValidationError("An invoice needs at least one item")

        total = sum((item["amount"] for item in items), ZERO)
        number = invoice_number or self.next_invoice_number(invoice_date)
        if any(inv.invoice_number == number for inv in self.db.list_invoices()):
            raise ConflictError(duplicate_invoice_number(number))
        invoice_id = self.db.create_invoice(
            invoice_number=number,
            account_name=account_name,
            client_name=client_name.strip(),
            date=invoice_date,
            due_date=due_date,
            items=items,
            total_amount=total,
            client_email=client_email,
            client_address=client_address,
            notes=notes,
            logo_url=logo_url,
        )
        logger.info("Created invoice %s for %s", number, client_name)
        return invoice_id

    def get_invoice(self, invoice_id: int) -> InvoiceEntity:
        """Get invoice by ID.

        Raises:
            NotFoundError: If invoice not found
        """
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def list_invoices(self) -> list[InvoiceEntity]:
        """List invoices, newest first."""
        return self.db.list_invoices()

    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice and its items."""
        self.get_invoice(invoice_id)
        self.db.delete_invoice(invoice_id)
