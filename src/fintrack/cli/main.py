"""Main CLI entry point."""

import logging

import click
from fintrack.database.factories import create_sqlite_database
from fintrack.database.local_store import create_local_store

# Import and register all commands at module level
from fintrack.cli.commands import (
    account,
    analytics,
    debt,
    entry,
    export,
    goal,
    invoice,
    note,
    profile,
    salary,
    summary,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send fintrack log records to stderr at the requested level."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("fintrack").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory for goals and notes (overrides FINTRACK_DATA_DIR environment variable)",
    envvar="FINTRACK_DATA_DIR",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, data_dir: str | None, verbose: bool):
    """Fintrack - Personal finance tracking.

    Record daily investment, earnings, spending, salary and debt per account,
    then review monthly and yearly summaries, ROI and savings goals.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["store"] = create_local_store(data_dir)


# Register all commands
account.register_commands(cli)
entry.register_commands(cli)
salary.register_commands(cli)
debt.register_commands(cli)
summary.register_commands(cli)
analytics.register_commands(cli)
goal.register_commands(cli)
note.register_commands(cli)
export.register_commands(cli)
invoice.register_commands(cli)
profile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
