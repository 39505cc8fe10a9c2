"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the aggregation engine only ever
sees plain domain entities with non-null Decimal amounts.
"""

from decimal import Decimal

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Account as ORMAccount,
    SalaryEntry as ORMSalaryEntry,
    Transaction as ORMTransaction,
    Invoice as ORMInvoice,
    InvoiceItem as ORMInvoiceItem,
    Profile as ORMProfile,
)
from fintrack.utils.amount_parser import coerce_amount
from fintrack.utils.money import DEFAULT_CURRENCY


def account_to_domain(orm_account: ORMAccount, account_number: int) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity.

    Args:
        account_number: 1-based display position in creation order
    """
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        is_active=bool(orm_account.is_active),
        account_number=account_number,
        created_at=orm_account.created_at,
    )


def salary_entry_to_domain(orm_entry: ORMSalaryEntry) -> domain.SalaryEntry:
    """Convert SQLAlchemy SalaryEntry model to domain SalaryEntry entity."""
    return domain.SalaryEntry(
        id=orm_entry.id,
        name=orm_entry.name,
        purpose=orm_entry.purpose or "",
        amount=coerce_amount(orm_entry.amount),
        date=orm_entry.date,
        transaction_id=orm_entry.transaction_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        investment=coerce_amount(orm_transaction.investment),
        earnings=coerce_amount(orm_transaction.earnings),
        spending=coerce_amount(orm_transaction.spending),
        to_be_credit=coerce_amount(orm_transaction.to_be_credit),
        salary=coerce_amount(orm_transaction.salary),
        debt=coerce_amount(orm_transaction.debt),
        interest_rate=coerce_amount(orm_transaction.interest_rate),
        salary_entries=tuple(
            salary_entry_to_domain(entry) for entry in orm_transaction.salary_entries
        ),
        created_at=orm_transaction.created_at,
    )


def invoice_item_to_domain(orm_item: ORMInvoiceItem) -> domain.InvoiceItem:
    """Convert SQLAlchemy InvoiceItem model to domain InvoiceItem entity."""
    return domain.InvoiceItem(
        id=orm_item.id,
        description=orm_item.description,
        quantity=coerce_amount(orm_item.quantity),
        rate=coerce_amount(orm_item.rate),
        amount=coerce_amount(orm_item.amount),
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        account_name=orm_invoice.account_name,
        client_name=orm_invoice.client_name,
        client_email=orm_invoice.client_email,
        client_address=orm_invoice.client_address,
        date=orm_invoice.date,
        due_date=orm_invoice.due_date,
        notes=orm_invoice.notes,
        logo_url=orm_invoice.logo_url,
        total_amount=coerce_amount(orm_invoice.total_amount),
        items=tuple(invoice_item_to_domain(item) for item in orm_invoice.items),
        created_at=orm_invoice.created_at,
    )


def profile_to_domain(orm_profile: ORMProfile) -> domain.Profile:
    """Convert SQLAlchemy Profile model to domain Profile entity."""
    return domain.Profile(
        id=orm_profile.id,
        name=orm_profile.name,
        phone=orm_profile.phone,
        currency=orm_profile.currency or DEFAULT_CURRENCY,
        show_debt_feature=bool(orm_profile.show_debt_feature),
        show_all_accounts_analysis=bool(orm_profile.show_all_accounts_analysis),
        debt_principal=(
            Decimal(orm_profile.debt_principal)
            if orm_profile.debt_principal is not None
            else None
        ),
        debt_interest_rate=(
            Decimal(orm_profile.debt_interest_rate)
            if orm_profile.debt_interest_rate is not None
            else None
        ),
    )
