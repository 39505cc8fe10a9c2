"""Invoice commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_date_option
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.tables import current_currency
from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError
from fintrack.domain.invoice import InvoiceLine, InvoiceService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.money import format_currency


def parse_item(value: str) -> InvoiceLine:
    """Parse an item given as DESCRIPTION:QUANTITY:RATE.

    Raises:
        ValueError: If the item is malformed
    """
    parts = value.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Item '{value}' must look like DESCRIPTION:QUANTITY:RATE")
    description, quantity, rate = parts
    return InvoiceLine(
        description=description, quantity=parse_amount(quantity), rate=parse_amount(rate)
    )


@click.group()
def invoice_group():
    """Create and review invoices."""
    pass


@invoice_group.command("create")
@click.option("--client", required=True, help="Client name")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Line item as DESCRIPTION:QUANTITY:RATE (repeatable)",
)
@click.option("--email", help="Client email")
@click.option("--address", help="Client address")
@click.option("--date", "date_str", help="Invoice date (defaults to today)")
@click.option("--due", "due_str", help="Due date (defaults to 30 days later)")
@click.option("--number", help="Invoice number (defaults to the next in sequence)")
@click.option("--notes", help="Notes printed on the invoice")
@click.option("--account", help="Issuing account name or ID (defaults to the active account)")
@click.pass_context
def create_invoice(ctx, client, items, email, address, date_str, due_str, number, notes, account):
    """Create an invoice.

    Examples:
        fintrack invoice create --client "Acme" --item "Design:10:1500"
        fintrack invoice create --client "Acme" --item "Logo:1:5000" --item "Hosting:12:300"
    """
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)

    try:
        lines = [parse_item(item) for item in items]
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    invoice_date = resolve_date_option(ctx, date_str, "invoice date")
    due_date = resolve_date_option(ctx, due_str, "due date") if due_str else None

    service = InvoiceService(db)
    try:
        invoice_id = service.create_invoice(
            account_name=account_obj.name,
            client_name=client,
            lines=lines,
            invoice_date=invoice_date,
            due_date=due_date,
            invoice_number=number,
            client_email=email,
            client_address=address,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    invoice = service.get_invoice(invoice_id)
    click.echo(
        f"Created invoice {invoice.invoice_number} (ID: {invoice_id}) for {invoice.client_name}: "
        f"{format_currency(invoice.total_amount, current_currency(ctx))}"
    )


@invoice_group.command("list")
@click.pass_context
def list_invoices(ctx):
    """List invoices, newest first."""
    invoices = InvoiceService(ctx.obj["db"]).list_invoices()
    if not invoices:
        click.echo("No invoices found.")
        return

    currency = current_currency(ctx)
    click.echo("\nInvoices:")
    click.echo("-" * 80)
    for inv in invoices:
        click.echo(
            f"ID: {inv.id:3d} | {inv.invoice_number:<16} | {inv.date} | "
            f"{inv.client_name:<20} | {format_currency(inv.total_amount, currency):>12}"
        )


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with its items."""
    try:
        inv = InvoiceService(ctx.obj["db"]).get_invoice(invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    currency = current_currency(ctx)
    click.echo(f"\nInvoice {inv.invoice_number}")
    click.echo(f"From: {inv.account_name}")
    click.echo(f"To:   {inv.client_name}")
    if inv.client_email:
        click.echo(f"      {inv.client_email}")
    if inv.client_address:
        click.echo(f"      {inv.client_address}")
    click.echo(f"Date: {inv.date}   Due: {inv.due_date}")
    click.echo("-" * 70)
    click.echo(f"{'Description':<30} {'Qty':>8} {'Rate':>14} {'Amount':>14}")
    for item in inv.items:
        click.echo(
            f"{item.description[:30]:<30} {item.quantity:>8} "
            f"{format_currency(item.rate, currency):>14} "
            f"{format_currency(item.amount, currency):>14}"
        )
    click.echo("-" * 70)
    click.echo(f"{'Total':<54} {format_currency(inv.total_amount, currency):>14}")
    if inv.notes:
        click.echo(f"\nNotes: {inv.notes}")


@invoice_group.command("delete")
@click.argument("invoice_id", type=int)
@click.pass_context
def delete_invoice(ctx, invoice_id: int):
    """Delete an invoice."""
    try:
        InvoiceService(ctx.obj["db"]).delete_invoice(invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted invoice {invoice_id}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
