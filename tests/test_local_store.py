"""Tests for the JSON-backed local store and notes."""

import pytest

from fintrack.database.local_store import LocalStore, create_local_store
from fintrack.domain.errors import NotFoundError, ValidationError
from fintrack.domain.notes import NOTES_KEY, NoteService


def test_missing_key_reads_as_empty(local_store):
    assert local_store.load("savings_goals") == []


def test_save_and_load(local_store):
    local_store.save("notepad_notes", [{"id": "1"}, {"id": "2"}])
    assert local_store.load("notepad_notes") == [{"id": "1"}, {"id": "2"}]


def test_malformed_json_is_reset(local_store):
    """Corrupt content is replaced with an empty list."""
    local_store.root.mkdir(parents=True)
    path = local_store.root / "savings_goals.json"
    path.write_text("{not json", encoding="utf-8")

    assert local_store.load("savings_goals") == []
    assert path.read_text(encoding="utf-8").strip() == "[]"


def test_non_list_is_reset(local_store):
    local_store.root.mkdir(parents=True)
    (local_store.root / "savings_goals.json").write_text('{"a": 1}', encoding="utf-8")

    assert local_store.load("savings_goals") == []


@pytest.mark.parametrize("key", ["", "../escape", "Upper", "with-dash"])
def test_invalid_keys_are_rejected(local_store, key):
    with pytest.raises(ValueError, match="Invalid store key"):
        local_store.load(key)


def test_clear(local_store):
    local_store.save("notepad_notes", [1])
    local_store.clear("notepad_notes")
    local_store.clear("notepad_notes")
    assert local_store.load("notepad_notes") == []


def test_create_local_store_uses_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path / "env"))
    assert create_local_store().root == tmp_path / "env"
    assert create_local_store(str(tmp_path / "arg")).root == tmp_path / "arg"


def test_note_service(local_store):
    service = NoteService(local_store)

    note = service.add_note("  Groceries ", "milk, eggs")

    [stored] = service.list_notes()
    assert stored == note
    assert stored.title == "Groceries"
    assert local_store.load(NOTES_KEY)[0]["content"] == "milk, eggs"

    service.delete_note(note.id[:8])
    assert service.list_notes() == []


def test_note_service_validation(local_store):
    service = NoteService(local_store)

    with pytest.raises(ValidationError):
        service.add_note("   ")
    with pytest.raises(NotFoundError):
        service.delete_note("missing")


def test_note_service_skips_malformed_items(local_store):
    local_store.save(NOTES_KEY, ["junk", {"id": "abc", "title": "Kept"}])

    [note] = NoteService(local_store).list_notes()

    assert note.title == "Kept"
    assert note.content == ""


def test_store_survives_reopen(tmp_path):
    LocalStore(tmp_path).save("savings_goals", [{"id": "x"}])
    assert LocalStore(tmp_path).load("savings_goals") == [{"id": "x"}]
