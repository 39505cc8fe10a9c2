"""Transaction domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from fintrack.database.base import Database
from fintrack.domain.entities import ZERO, Transaction as TransactionEntity
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    insufficient_credit,
    transaction_not_found,
)
from fintrack.utils.amount_parser import coerce_amount

logger = logging.getLogger(__name__)

AMOUNT_FIELDS = (
    "investment",
    "earnings",
    "spending",
    "to_be_credit",
    "salary",
    "debt",
    "interest_rate",
)


class TransactionService:
    """Service for managing transactions and the flows that mutate them."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _require_transaction(self, transaction_id: int) -> TransactionEntity:
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def _on_date(self, account_id: int, on_date: date) -> list[TransactionEntity]:
        return self.db.list_transactions(
            account_id=account_id, start_date=on_date, end_date=on_date
        )

    def create_entry(
        self,
        account_id: int,
        date: date,
        investment=0,
        earnings=0,
        spending=0,
        to_be_credit=0,
        salary=0,
        debt=0,
        interest_rate=0,
    ) -> int:
        """Record one day of activity.

        Amounts are coerced the way the entry form reads them: blanks and
        non-numeric values become 0.

        Args:
            account_id: Account ID
            date: Entry date
            investment: Amount invested
            earnings: Amount earned
            spending: Amount spent
            to_be_credit: Amount earned but not yet received
            salary: Salary lump sum
            debt: Debt principal
            interest_rate: Annual interest rate in percent

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If account doesn't exist
            ValidationError: If an amount is negative
        """
        self._require_account(account_id)
        amounts = {
            "investment": coerce_amount(investment),
            "earnings": coerce_amount(earnings),
            "spending": coerce_amount(spending),
            "to_be_credit": coerce_amount(to_be_credit),
            "salary": coerce_amount(salary),
            "debt": coerce_amount(debt),
            "interest_rate": coerce_amount(interest_rate),
        }
        negative = [name for name, value in amounts.items() if value < 0]
        if negative:
            raise ValidationError(f"Amounts cannot be negative: {', '.join(negative)}")

        transaction_id = self.db.create_transaction(account_id=account_id, date=date, **amounts)
        logger.debug("Created transaction %d for %s", transaction_id, date)
        return transaction_id

    def get_entry(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_entry(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        **amounts,
    ) -> None:
        """Update an entry's date or amounts.

        Only the fields passed are changed; amounts are coerced like on create.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If an unknown field or a negative amount is given
        """
        self._require_transaction(transaction_id)

        unknown = set(amounts) - set(AMOUNT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown entry field(s): {', '.join(sorted(unknown))}")

        fields = {
            name: coerce_amount(value) for name, value in amounts.items() if value is not None
        }
        negative = [name for name, value in fields.items() if value < 0]
        if negative:
            raise ValidationError(f"Amounts cannot be negative: {', '.join(negative)}")
        if date is not None:
            fields["date"] = date
        if not fields:
            return

        self.db.update_transaction(transaction_id, **fields)

    def delete_entry(self, transaction_id: int) -> None:
        """Delete an entry and its salary entries.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self._require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_entries(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List entries ordered by date.

        Args:
            account_id: Optional account filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
        """
        return self.db.list_transactions(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def transfer_credit(self, account_id: int, on_date: date, amount: Decimal) -> int:
        """Move an amount from "to be credited" to earnings.

        The first transaction on the date holding at least the amount is used.

        Returns:
            ID of the updated transaction

        Raises:
            ValidationError: If amount is not positive or no transaction on the
                date has enough to be credited
        """
        if amount <= 0:
            raise ValidationError("Transfer amount must be greater than zero")
        self._require_account(account_id)

        for txn in self._on_date(account_id, on_date):
            if txn.to_be_credit >= amount:
                self.db.update_transaction(
                    txn.id,
                    to_be_credit=txn.to_be_credit - amount,
                    earnings=txn.earnings + amount,
                )
                logger.info("Transferred %s to earnings on %s", amount, on_date)
                return txn.id

        raise ValidationError(insufficient_credit(on_date, amount))

    def add_salary_entry(
        self,
        account_id: int,
        name: str,
        amount: Decimal,
        on_date: date,
        purpose: str = "",
        transaction_id: Optional[int] = None,
    ) -> int:
        """Add a named salary entry and raise the owning transaction's salary.

        The entry is attached to the given transaction, else to the first
        transaction on the date, else to a new transaction holding only the
        salary.

        Returns:
            ID of the transaction the entry was attached to

        Raises:
            ValidationError: If name is empty or amount is not positive
            NotFoundError: If the given transaction doesn't exist in the account
        """
        if not name or not name.strip():
            raise ValidationError("Salary entry name cannot be empty")
        if amount <= 0:
            raise ValidationError("Salary amount must be greater than zero")
        self._require_account(account_id)

        if transaction_id is not None:
            txn = self._require_transaction(transaction_id)
            if txn.account_id != account_id:
                raise NotFoundError(transaction_not_found(transaction_id))
        else:
            existing = self._on_date(account_id, on_date)
            txn = existing[0] if existing else None

        return self.db.record_salary(
            account_id=account_id,
            transaction_id=txn.id if txn is not None else None,
            name=name.strip(),
            purpose=purpose or "",
            amount=amount,
            date=on_date,
        )

    def add_debt_entry(
        self,
        account_id: int,
        amount: Decimal,
        interest_rate: Decimal,
        on_date: date,
    ) -> int:
        """Add debt to the transaction on a date, creating one if needed.

        The date's debt grows by the amount and its interest rate is replaced.

        Returns:
            ID of the updated or created transaction

        Raises:
            ValidationError: If debt tracking is disabled or values are invalid
        """
        if not self.db.get_profile().show_debt_feature:
            raise ValidationError(
                "Debt tracking is disabled. Enable it with 'fintrack profile features --debt'"
            )
        if amount <= 0:
            raise ValidationError("Debt amount must be greater than zero")
        if interest_rate < 0:
            raise ValidationError("Interest rate cannot be negative")
        self._require_account(account_id)

        existing = self._on_date(account_id, on_date)
        if existing:
            txn = existing[0]
            self.db.update_transaction(
                txn.id, debt=(txn.debt or ZERO) + amount, interest_rate=interest_rate
            )
            return txn.id

        return self.db.create_transaction(
            account_id=account_id, date=on_date, debt=amount, interest_rate=interest_rate
        )
