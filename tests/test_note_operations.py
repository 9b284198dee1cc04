"""Tests for note CRUD and search payload operations."""

import pytest

from obsidian_graph.core.note_operations import (
    create_note,
    delete_note,
    read_note,
    read_notes,
    update_note,
)
from obsidian_graph.core.search_operations import search_vault
from obsidian_graph.errors import NoteNotFoundError


def test_create_note_payload(index):
    payload = create_note(index, "Journal/Today", "Met [[Lonely]] #daily", {"mood": "good"})

    assert payload["success"] is True
    assert payload["note"]["path"] == "Journal/Today.md"
    assert payload["note"]["name"] == "Today"
    assert payload["note"]["tags"] == ["daily"]
    assert payload["note"]["word_count"] == 3


def test_read_note_includes_backlinks(index):
    payload = read_note(index, "projects/Project Alpha")

    assert payload["content"].startswith("Alpha plan")
    assert payload["frontmatter"] == {"title": "Alpha Launch", "tags": ["project"]}
    assert payload["backlinks"] == ["index.md"]
    assert payload["links"] == ["index", "Ghost", "Roadmap.md"]


def test_read_note_missing(index):
    with pytest.raises(NoteNotFoundError):
        read_note(index, "Missing")


def test_read_notes_collects_errors(index):
    payload = read_notes(index, ["Ideas", "Missing", "../escape"])

    assert [note["path"] for note in payload["notes"]] == ["Ideas.md"]
    assert [error["path"] for error in payload["errors"]] == ["Missing", "../escape"]


def test_update_note_append_and_prepend(index):
    update_note(index, "Lonely", "- appended", operation="append")
    assert index.read("Lonely").content == "Nobody links here.\n\n- appended"

    update_note(index, "Lonely", "Intro", operation="prepend")
    assert index.read("Lonely").content == "Intro\n\nNobody links here.\n\n- appended"


def test_update_note_replace(index):
    payload = update_note(index, "Lonely", "Fresh")
    assert payload["success"] is True
    assert index.read("Lonely").content == "Fresh"


def test_update_note_unknown_operation(index):
    with pytest.raises(ValueError):
        update_note(index, "Lonely", "x", operation="merge")


def test_update_note_missing(index):
    with pytest.raises(NoteNotFoundError):
        update_note(index, "Missing", "x", operation="append")


def test_delete_requires_confirmation(index, sample_vault):
    payload = delete_note(index, "Lonely")

    assert payload["success"] is False
    assert "confirm" in payload["warning"]
    assert (sample_vault / "Lonely.md").exists()


def test_delete_confirmed(index, sample_vault):
    payload = delete_note(index, "Lonely", confirm=True)

    assert payload == {"success": True, "message": "Deleted note: Lonely.md", "path": "Lonely.md"}
    assert not (sample_vault / "Lonely.md").exists()


def test_search_vault_payload(index):
    payload = search_vault(index, "alpha", limit=2)

    assert payload["query"] == "alpha"
    assert payload["total_results"] == 2
    first = payload["results"][0]
    assert first["path"] == "projects/Project Alpha.md"
    assert "content" not in first
    assert {"key", "value", "indices"} <= set(first["matches"][0])


def test_search_vault_include_content(index):
    payload = search_vault(index, "lonely", include_content=True)
    assert payload["results"][0]["content"] == "Nobody links here."


def test_search_vault_date_range(index):
    assert search_vault(index, "alpha", modified_after="2999-01-01")["total_results"] == 0
    assert search_vault(index, "alpha", modified_before="2999-01-01T00:00:00Z")["total_results"] >= 1


def test_search_vault_rejects_bad_date(index):
    with pytest.raises(ValueError):
        search_vault(index, "alpha", modified_after="last tuesday")
