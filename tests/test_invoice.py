"""Tests for invoices."""

from datetime import date
from decimal import Decimal

import pytest

from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from fintrack.domain.invoice import InvoiceLine


def _lines():
    return [
        InvoiceLine("Design work", Decimal("10"), Decimal("1500")),
        InvoiceLine("Hosting", Decimal("1.5"), Decimal("333.33")),
    ]


def test_create_invoice(invoice_service):
    invoice_id = invoice_service.create_invoice(
        account_name="Main Account",
        client_name=" Acme Corp ",
        lines=_lines(),
        invoice_date=date(2024, 3, 5),
        client_email="billing@acme.test",
    )

    invoice = invoice_service.get_invoice(invoice_id)
    assert invoice.client_name == "Acme Corp"
    assert invoice.invoice_number == "INV-2024-03-001"
    assert invoice.due_date == date(2024, 4, 4)
    assert [item.amount for item in invoice.items] == [Decimal("15000"), Decimal("500.00")]
    assert invoice.total_amount == Decimal("15500.00")


def test_invoice_numbers_are_sequential_per_month(invoice_service):
    for on_date in (date(2024, 3, 1), date(2024, 3, 20), date(2024, 4, 1)):
        invoice_service.create_invoice("Main", "Client", _lines(), invoice_date=on_date)

    numbers = sorted(inv.invoice_number for inv in invoice_service.list_invoices())

    assert numbers == ["INV-2024-03-001", "INV-2024-03-002", "INV-2024-04-001"]


def test_invoice_numbers_skip_past_deleted_ones(invoice_service):
    first = invoice_service.create_invoice(
        "Main", "A", _lines(), invoice_date=date(2024, 3, 1)
    )
    invoice_service.create_invoice("Main", "B", _lines(), invoice_date=date(2024, 3, 2))

    invoice_service.delete_invoice(first)
    invoice_service.create_invoice("Main", "C", _lines(), invoice_date=date(2024, 3, 3))

    numbers = sorted(inv.invoice_number for inv in invoice_service.list_invoices())
    assert numbers == ["INV-2024-03-002", "INV-2024-03-003"]


def test_duplicate_invoice_number_rejected(invoice_service, temp_db):
    invoice_service.create_invoice(
        "Main", "A", _lines(), invoice_date=date(2024, 3, 1), invoice_number="INV-X"
    )

    with pytest.raises(ConflictError, match="INV-X"):
        invoice_service.create_invoice(
            "Main", "B", _lines(), invoice_date=date(2024, 3, 2), invoice_number="INV-X"
        )
    # The column itself refuses duplicates
    with pytest.raises(PersistenceError):
        temp_db.create_invoice(
            invoice_number="INV-X",
            account_name="Main",
            client_name="B",
            date=date(2024, 3, 2),
            due_date=date(2024, 3, 2),
            items=[],
            total_amount=Decimal("0"),
        )
    assert len(invoice_service.list_invoices()) == 1


def test_list_invoices_newest_first(invoice_service):
    invoice_service.create_invoice("Main", "Old", _lines(), invoice_date=date(2024, 1, 1))
    invoice_service.create_invoice("Main", "New", _lines(), invoice_date=date(2024, 6, 1))

    assert [inv.client_name for inv in invoice_service.list_invoices()] == ["New", "Old"]


@pytest.mark.parametrize(
    "client,lines,due",
    [
        ("", _lines(), None),
        ("Acme", [], None),
        ("Acme", [InvoiceLine(" ", Decimal("1"), Decimal("1"))], None),
        ("Acme", [InvoiceLine("Work", Decimal("0"), Decimal("1"))], None),
        ("Acme", [InvoiceLine("Work", Decimal("1"), Decimal("-1"))], None),
        ("Acme", _lines(), date(2024, 3, 1)),
    ],
)
def test_invoice_validation(invoice_service, client, lines, due):
    with pytest.raises(ValidationError):
        invoice_service.create_invoice(
            "Main", client, lines, invoice_date=date(2024, 3, 5), due_date=due
        )


def test_delete_invoice(invoice_service):
    invoice_id = invoice_service.create_invoice("Main", "Acme", _lines())

    invoice_service.delete_invoice(invoice_id)

    assert invoice_service.list_invoices() == []
    with pytest.raises(NotFoundError):
        invoice_service.get_invoice(invoice_id)


def test_invoice_cli(run_cli):
    result = run_cli(
        "invoice",
        "create",
        "--client",
        "Acme",
        "--item",
        "Consulting: day rate:2:5000",
        "--date",
        "2024-03-05",
    )
    assert result.exit_code == 0, result.output
    assert "Created invoice INV-2024-03-001" in result.output

    result = run_cli("invoice", "show", "1")
    assert result.exit_code == 0, result.output
    assert "Consulting: day rate" in result.output
    assert "₹10,000" in result.output

    result = run_cli("invoice", "create", "--client", "Acme", "--item", "bad")
    assert result.exit_code != 0
