"""Core business logic for note CRUD operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

from obsidian_graph.core.vault_index import VaultIndex
from obsidian_graph.errors import VaultError

logger = logging.getLogger(__name__)

UPDATE_OPERATIONS = ("replace", "append", "prepend")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _combine_with_blank_line(first: str, second: str) -> str:
    """Join two markdown fragments with exactly one blank line between them.

    Args:
        first: Text that ends up on top.
        second: Text that ends up below.

    Returns:
        The combined text. Empty fragments are dropped rather than leaving a
        dangling blank line.
    """
    if not first:
        return second
    if not second:
        return first
    return first.rstrip("\n") + "\n\n" + second.lstrip("\n")


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def create_note(
    index: VaultIndex,
    path: str,
    content: str,
    frontmatter: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Create (or overwrite) a note and index it.

    Args:
        index: Vault index owning the target vault.
        path: Vault-relative note path; ``.md`` is appended when missing.
        content: Markdown body.
        frontmatter: Optional metadata; written only when non-empty.

    Returns:
        A dictionary describing the created note.

    Raises:
        AccessDeniedError: If ``path`` escapes the vault or is hidden.
        ValueError: If ``frontmatter`` cannot be serialized.
    """
    note = index.create(path, content, frontmatter)
    return {
        "success": True,
        "message": f"Created note: {note.path}",
        "note": {
            "path": note.path,
            "name": note.name,
            "word_count": note.word_count,
            "tags": note.tags,
            "created": note.created.isoformat(),
        },
    }


def read_note(index: VaultIndex, path: str) -> dict[str, Any]:
    """Return the full note, including its current backlinks.

    Raises:
        AccessDeniedError: If ``path`` escapes the vault or is hidden.
        NoteNotFoundError: If the note does not exist.
    """
    note = index.read(path)
    payload = note.as_payload(include_content=True)
    payload["backlinks"] = index.get_backlinks(note.path)
    return payload


def read_notes(index: VaultIndex, paths: list[str]) -> dict[str, Any]:
    """Read several notes; a failing path yields an error entry instead of aborting.

    Returns:
        ``{"notes": [...], "errors": [{"path", "error"}, ...]}``.
    """
    notes: list[dict[str, Any]] = []
    errors: list[dict[str, str]] = []

    for path in paths:
        try:
            notes.append(read_note(index, path))
        except (VaultError, OSError, ValueError) as exc:
            logger.debug("Batch read skipped '%s': %s", path, exc)
            errors.append({"path": path, "error": str(exc)})

    return {"notes": notes, "errors": errors}


def update_note(
    index: VaultIndex,
    path: str,
    content: Optional[str] = None,
    frontmatter: Optional[dict[str, Any]] = None,
    operation: str = "replace",
) -> dict[str, Any]:
    """Update note content and/or front-matter.

    Args:
        index: Vault index owning the target vault.
        path: Note path.
        content: New text. ``None`` keeps the current body.
        frontmatter: New metadata. ``None`` keeps the current block.
        operation: ``replace`` swaps the body for ``content``; ``append`` and
            ``prepend`` join ``content`` to the existing body with a blank line.

    Returns:
        A dictionary describing the updated note.

    Raises:
        ValueError: If ``operation`` is unknown.
        NoteNotFoundError: If the note does not exist.
    """
    if operation not in UPDATE_OPERATIONS:
        raise ValueError(f"Unknown update operation '{operation}'. Use one of: {', '.join(UPDATE_OPERATIONS)}.")

    final_content = content
    if content is not None and operation != "replace":
        existing = index.read(path)
        if operation == "append":
            final_content = _combine_with_blank_line(existing.content, content)
        else:
            final_content = _combine_with_blank_line(content, existing.content)

    note = index.update(path, final_content, frontmatter)
    return {
        "success": True,
        "message": f"Updated note: {note.path}",
        "note": {
            "path": note.path,
            "name": note.name,
            "word_count": note.word_count,
            "last_modified": note.last_modified.isoformat(),
        },
    }


def delete_note(index: VaultIndex, path: str, confirm: bool = False) -> dict[str, Any]:
    """Delete a note once the caller has confirmed.

    Without ``confirm`` nothing is touched and a warning payload is returned.

    Raises:
        NoteNotFoundError: If the note does not exist.
    """
    if not confirm:
        return {
            "success": False,
            "warning": "Deletion requires confirmation. Set confirm: true to proceed.",
            "path": path,
        }

    deleted = index.delete(path)
    return {
        "success": True,
        "message": f"Deleted note: {deleted}",
        "path": deleted,
    }
