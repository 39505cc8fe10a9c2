"""Notepad commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import DomainError
from fintrack.domain.notes import NoteService


@click.group()
def note_group():
    """Keep short notes."""
    pass


@note_group.command("add")
@click.argument("title")
@click.argument("content", required=False, default="")
@click.pass_context
def add_note(ctx, title: str, content: str):
    """Add a note with a TITLE and optional CONTENT."""
    try:
        note = NoteService(ctx.obj["store"]).add_note(title, content)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added note '{note.title}' ({note.id[:8]})")


@note_group.command("list")
@click.pass_context
def list_notes(ctx):
    """List notes, newest first."""
    notes = NoteService(ctx.obj["store"]).list_notes()
    if not notes:
        click.echo("No notes found.")
        return
    for note in notes:
        click.echo(f"{note.id[:8]}  {note.created_at[:16]}  {note.title}")
        if note.content:
            click.echo(f"          {note.content}")


@note_group.command("delete")
@click.argument("note_id")
@click.pass_context
def delete_note(ctx, note_id: str):
    """Delete a note. NOTE_ID may be a unique prefix."""
    try:
        NoteService(ctx.obj["store"]).delete_note(note_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Deleted note")


def register_commands(cli):
    """Register note commands with main CLI."""
    cli.add_command(note_group, name="note")
