"""Notepad domain service."""

import uuid
from dataclasses import asdict
from datetime import datetime, UTC

from fintrack.database.local_store import LocalStore
from fintrack.domain.entities import Note
from fintrack.domain.errors import NotFoundError, ValidationError

NOTES_KEY = "notepad_notes"


class NoteService:
    """Service for notes kept in the local store."""

    def __init__(self, store: LocalStore):
        self.store = store

    def list_notes(self) -> list[Note]:
        """List notes, newest first."""
        notes = [
            Note(
                id=str(item.get("id", "")),
                title=str(item.get("title", "")),
                content=str(item.get("content", "")),
                created_at=str(item.get("created_at", "")),
            )
            for item in self.store.load(NOTES_KEY)
            if isinstance(item, dict)
        ]
        return sorted(notes, key=lambda n: n.created_at, reverse=True)

    def add_note(self, title: str, content: str = "") -> Note:
        """Add a note.

        Raises:
            ValidationError: If the title is empty
        """
        if not title or not title.strip():
            raise ValidationError("Note title cannot be empty")
        note = Note(
            id=str(uuid.uuid4()),
            title=title.strip(),
            content=content,
            created_at=datetime.now(UTC).isoformat(),
        )
        items = self.store.load(NOTES_KEY)
        items.append(asdict(note))
        self.store.save(NOTES_KEY, items)
        return note

    def delete_note(self, note_id: str) -> None:
        """Delete a note by ID or unique ID prefix."""
        items = self.store.load(NOTES_KEY)
        matches = [
            item for item in items
            if isinstance(item, dict) and str(item.get("id", "")).startswith(note_id)
        ]
        if len(matches) != 1:
            raise NotFoundError(f"Note '{note_id}' not found")
        self.store.save(NOTES_KEY, [item for item in items if item is not matches[0]])
