"""Savings goal commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.tables import current_currency
from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError
from fintrack.domain.savings import GOAL_CATEGORIES, GoalService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import parse_date
from fintrack.utils.money import format_currency, format_percentage


def _parse_or_exit(ctx, value: str, label: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _deadline_or_exit(ctx, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return parse_date(value).isoformat()
    except ValueError as e:
        click.echo(f"Error: Invalid deadline: {e}", err=True)
        ctx.exit(1)


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("add")
@click.argument("name")
@click.argument("target")
@click.option("--current", default="0", help="Amount already saved")
@click.option("--deadline", help="Target date")
@click.option(
    "--category",
    type=click.Choice(GOAL_CATEGORIES),
    default="Emergency Fund",
    show_default=True,
)
@click.pass_context
def add_goal(ctx, name: str, target: str, current: str, deadline: str | None, category: str):
    """Add a savings goal NAME with a TARGET amount."""
    service = GoalService(ctx.obj["store"])
    target_value = _parse_or_exit(ctx, target, "target")
    current_value = _parse_or_exit(ctx, current, "current amount")
    try:
        goal = service.add_goal(
            name=name,
            target_amount=target_value,
            current_amount=current_value,
            deadline=_deadline_or_exit(ctx, deadline),
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added goal '{goal.name}' ({goal.id[:8]})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List savings goals with progress."""
    goals = GoalService(ctx.obj["store"]).list_goals()
    if not goals:
        click.echo("No savings goals found.")
        return

    currency = current_currency(ctx)
    click.echo("\nSavings goals:")
    click.echo("-" * 90)
    for goal in goals:
        progress = (
            goal.current_amount / goal.target_amount * 100 if goal.target_amount > 0 else 0
        )
        deadline = f" due {goal.deadline}" if goal.deadline else ""
        click.echo(
            f"{goal.id[:8]}  {goal.name:<20} {goal.category:<15} "
            f"{format_currency(goal.current_amount, currency):>12} / "
            f"{format_currency(goal.target_amount, currency):<12} "
            f"{format_percentage(min(progress, 100), 0):>5}{deadline}"
        )


@goal_group.command("update")
@click.argument("goal_id")
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--current", help="New saved amount")
@click.option("--deadline", help="New target date")
@click.option("--category", type=click.Choice(GOAL_CATEGORIES))
@click.pass_context
def update_goal(ctx, goal_id: str, name, target, current, deadline, category):
    """Update a goal. GOAL_ID may be a unique prefix."""
    service = GoalService(ctx.obj["store"])
    try:
        goal = service.update_goal(
            goal_id,
            name=name,
            target_amount=_parse_or_exit(ctx, target, "target") if target else None,
            current_amount=_parse_or_exit(ctx, current, "current amount") if current else None,
            deadline=_deadline_or_exit(ctx, deadline),
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated goal '{goal.name}'")


@goal_group.command("delete")
@click.argument("goal_id")
@click.pass_context
def delete_goal(ctx, goal_id: str):
    """Delete a goal. GOAL_ID may be a unique prefix."""
    try:
        goal = GoalService(ctx.obj["store"]).delete_goal(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal '{goal.name}'")


@goal_group.command("allocate")
@click.option("--account", help="Account name or ID (defaults to every account)")
@click.pass_context
def allocate(ctx, account: str | None):
    """Distribute available savings across goals."""
    db = ctx.obj["db"]
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    result = GoalService(ctx.obj["store"]).allocate(db.list_transactions(account_id=account_id))
    currency = current_currency(ctx)

    click.echo(f"Available savings: {format_currency(result.available, currency)}")
    if not result.goals:
        click.echo("No savings goals found.")
        return
    if result.available <= 0:
        click.echo("Nothing to allocate.")
        return
    if result.fully_funded:
        click.echo("All goals are fully funded.")
    for goal in result.goals:
        click.echo(
            f"  {goal.name:<20} {format_currency(goal.current_amount, currency):>12} / "
            f"{format_currency(goal.target_amount, currency)}"
        )


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
