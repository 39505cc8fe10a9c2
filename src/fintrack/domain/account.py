"""Account domain service."""

import logging
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import Account as AccountEntity
from fintrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_name,
    last_account_delete_blocked,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_NAME = "Main Account"


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Account name cannot be empty")
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == cleaned:
                raise ConflictError(duplicate_account_name(cleaned))
        return cleaned

    def _require(self, account_id: int) -> AccountEntity:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def create_account(self, name: str) -> int:
        """Create a new account.

        New accounts start inactive unless they are the first account.

        Args:
            name: Account name

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If account name already exists
        """
        cleaned = self._clean_name(name)
        is_first = not self.db.list_accounts()
        account_id = self.db.create_account(name=cleaned, is_active=is_first)
        logger.info("Created account '%s' (ID %d)", cleaned, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts in creation order."""
        return self.db.list_accounts()

    def ensure_default_account(self) -> AccountEntity:
        """Create the default account when there are no accounts.

        Returns:
            The active account
        """
        if not self.db.list_accounts():
            self.db.create_account(name=DEFAULT_ACCOUNT_NAME, is_active=True)
            logger.info("Created default account '%s'", DEFAULT_ACCOUNT_NAME)
        return self.get_active_account()

    def get_active_account(self) -> AccountEntity:
        """Return the active account, activating the first one if none is.

        Raises:
            NotFoundError: If there are no accounts
        """
        accounts = self.db.list_accounts()
        if not accounts:
            raise NotFoundError("No accounts found")

        for acc in accounts:
            if acc.is_active:
                return acc

        self.db.set_active_account(accounts[0].id)
        return self._require(accounts[0].id)

    def switch_account(self, account_id: int) -> AccountEntity:
        """Make an account the only active one.

        Raises:
            NotFoundError: If account not found
        """
        self._require(account_id)
        self.db.set_active_account(account_id)
        return self._require(account_id)

    def rename_account(self, account_id: int, name: str) -> None:
        """Rename an account.

        Args:
            account_id: Account ID to rename
            name: New account name

        Raises:
            NotFoundError: If account not found
            ValidationError: If the name is empty
            ConflictError: If name already exists
        """
        self._require(account_id)
        cleaned = self._clean_name(name, exclude_id=account_id)
        self.db.update_account_name(account_id=account_id, name=cleaned)

    def delete_account(self, account_id: int) -> int:
        """Delete an account together with its transactions.

        If the deleted account was active, the first remaining account
        becomes active.

        Args:
            account_id: Account ID to delete

        Returns:
            Number of transactions deleted with the account

        Raises:
            NotFoundError: If account not found
            DependencyError: If it is the only account
        """
        account = self._require(account_id)
        if len(self.db.list_accounts()) <= 1:
            raise DependencyError(last_account_delete_blocked(account_id))

        transaction_count = self.db.get_account_transaction_count(account_id)
        self.db.delete_account(account_id)
        logger.info(
            "Deleted account '%s' with %d transaction(s)", account.name, transaction_count
        )

        if account.is_active:
            self.db.set_active_account(self.db.list_accounts()[0].id)
        return transaction_count
