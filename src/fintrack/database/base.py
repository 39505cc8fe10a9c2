"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly so this module never pulls in domain services
from fintrack.domain.entities import (
    Account,
    Invoice,
    Profile,
    SalaryEntry,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for fintrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, is_active: bool = False) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in creation order."""
        pass

    @abstractmethod
    def update_account_name(self, account_id: int, name: str) -> None:
        """Rename an account."""
        pass

    @abstractmethod
    def set_active_account(self, account_id: int) -> None:
        """Mark one account active and every other account inactive."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account with its transactions and salary entries."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Count transactions in an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        investment: Decimal = Decimal("0"),
        earnings: Decimal = Decimal("0"),
        spending: Decimal = Decimal("0"),
        to_be_credit: Decimal = Decimal("0"),
        salary: Decimal = Decimal("0"),
        debt: Decimal = Decimal("0"),
        interest_rate: Decimal = Decimal("0"),
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, including its salary entries."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields: Any) -> None:
        """Update transaction fields given as keyword arguments."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its salary entries."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date, then ID.

        Args:
            account_id: Optional account filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
        """
        pass

    # Salary entry operations
    @abstractmethod
    def add_salary_entry(
        self,
        transaction_id: int,
        name: str,
        purpose: str,
        amount: Decimal,
        date: date,
    ) -> int:
        """Attach a salary entry to a transaction. Returns entry ID."""
        pass

    @abstractmethod
    def record_salary(
        self,
        account_id: int,
        transaction_id: Optional[int],
        name: str,
        purpose: str,
        amount: Decimal,
        date: date,
    ) -> int:
        """Raise a transaction's salary and attach the matching entry in one write.

        When transaction_id is None a new transaction holding only the
        salary is created. Returns the transaction ID.
        """
        pass

    @abstractmethod
    def list_salary_entries(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[SalaryEntry]:
        """List salary entries ordered by date."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_number: str,
        account_name: str,
        client_name: str,
        date: date,
        due_date: date,
        items: list[dict[str, Any]],
        total_amount: Decimal,
        client_email: Optional[str] = None,
        client_address: Optional[str] = None,
        notes: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> int:
        """Create an invoice with its items. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID, including items."""
        pass

    @abstractmethod
    def list_invoices(self) -> list[Invoice]:
        """List invoices, newest first."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice and its items."""
        pass

    # Profile operations
    @abstractmethod
    def get_profile(self) -> Profile:
        """Get the profile, creating a default one if none exists."""
        pass

    @abstractmethod
    def update_profile(self, **fields: Any) -> None:
        """Update profile fields given as keyword arguments."""
        pass
