"""Utility for resolving account names to IDs."""

from fintrack.domain.account import AccountService
from fintrack.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name, ID or display number to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    name = account.strip()
    for acc in account_service.list_accounts():
        if acc.name == name:
            return acc.id
    # Fall back to a case-insensitive match
    for acc in account_service.list_accounts():
        if acc.name.lower() == name.lower():
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
