"""CLI error handling helpers."""

import logging

import click

from fintrack.domain.errors import DomainError, PersistenceError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, PersistenceError):
        logger.error("Write failed: %s", error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
