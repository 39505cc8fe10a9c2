"""Account management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--switch", is_flag=True, help="Make the new account active")
@click.pass_context
def create_account(ctx, name: str, switch: bool):
    """Create a new account.

    New accounts start inactive unless --switch is given.

    Examples:
        fintrack account create "Business"
        fintrack account create "Side Project" --switch
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        service.ensure_default_account()
        account_id = service.create_account(name=name)
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
        if switch:
            service.switch_account(account_id)
            click.echo(f"Switched to '{name.strip()}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts. The active account is marked with '*'."""
    db = ctx.obj["db"]
    service = AccountService(db)

    service.ensure_default_account()
    accounts = service.list_accounts()

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        marker = "*" if acc.is_active else " "
        count = db.get_account_transaction_count(acc.id)
        click.echo(
            f"{marker} #{acc.account_number:<3d} ID: {acc.id:3d} | {acc.name:20s} | "
            f"{count} entr{'y' if count == 1 else 'ies'}"
        )


@account_group.command("switch")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def switch_account(ctx, account: str) -> None:
    """Make ACCOUNT the active account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    service.ensure_default_account()
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        switched = service.switch_account(account_id)
        click.echo(f"Switched to '{switched.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.
    NEW_NAME is the new name for the account.

    Examples:
        fintrack account rename "Main Account" "Personal"
        fintrack account rename 2 "Business"
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.rename_account(account_id=account_id, name=new_name)
        click.echo(f"Renamed account to '{new_name.strip()}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account and all of its entries.

    ACCOUNT can be an account name or ID. The last remaining account
    cannot be deleted.

    Examples:
        fintrack account delete "Business"
        fintrack account delete 2 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    transaction_count = db.get_account_transaction_count(account_id)
    if not yes:
        prompt = f"Delete account '{account_obj.name}'"
        if transaction_count:
            prompt += f" and its {transaction_count} entr{'y' if transaction_count == 1 else 'ies'}"
        if not click.confirm(prompt + "?"):
            click.echo("Deletion cancelled.")
            return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
