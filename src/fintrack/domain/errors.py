"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class PersistenceError(DomainError):
    """A database write failed and was rolled back."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def goal_not_found(goal_id: str) -> str:
    """Return message for missing savings goal."""
    return f"Savings goal '{goal_id}' not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def duplicate_invoice_number(number: str) -> str:
    """Return message for an invoice number that is already taken."""
    return f"Invoice number '{number}' already exists"


def last_account_delete_blocked(account_id: int) -> str:
    """Return message when deleting the only account."""
    return f"Cannot delete account {account_id}: you must have at least one account."


def insufficient_credit(on_date, amount) -> str:
    """Return message when no transaction on a date holds enough credit."""
    return (
        f"No transaction on {on_date} has at least {amount} to be credited"
    )
