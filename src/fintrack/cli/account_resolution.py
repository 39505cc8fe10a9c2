"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from fintrack.domain.account import AccountService
from fintrack.domain.entities import Account
from fintrack.domain.errors import DomainError
from fintrack.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def selected_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | None
) -> Account:
    """Return the named account, or the active one when no name is given.

    The default account is created first if there are no accounts yet.
    """
    try:
        active = account_service.ensure_default_account()
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

    if account is None:
        return active

    account_id = resolve_account_or_exit(ctx, account_service, account)
    return account_service.get_account(account_id)
