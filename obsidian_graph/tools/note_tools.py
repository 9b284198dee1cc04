"""Note management MCP tools.

This module provides MCP tool wrappers for note CRUD operations:
- Create notes
- Read one or several notes
- Update notes (replace, append, prepend, front-matter)
- Delete notes

All tools delegate to core operations in obsidian_graph.core.note_operations.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_graph.server import mcp
from obsidian_graph.session import resolve_vault
from obsidian_graph.registry import get_vault_index
from obsidian_graph.models import (
    CreateNoteInput,
    ReadNoteInput,
    ReadNotesInput,
    UpdateNoteInput,
    DeleteNoteInput,
)
from obsidian_graph.core.note_operations import (
    create_note,
    read_note,
    read_notes,
    update_note,
    delete_note,
)


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================

@mcp.tool()
async def create_obsidian_note(
    input: CreateNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a note with markdown content and optional front-matter.

    Appends .md when missing and creates parent folders. An existing note at
    the same path is overwritten.

    Args:
        input (CreateNoteInput): Validated input containing:
            - path (str): Vault-relative note path
            - content (str): Markdown body
            - frontmatter (dict, optional): YAML properties
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "success": True,
            "message": str,
            "note": {"path", "name", "word_count", "tags", "created"}
        }

    Error Handling:
        - Path escapes the vault or has a hidden segment → access denied
        - Front-matter not serializable → Error describing the bad value
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return create_note(index, input.path, input.content, input.frontmatter)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

@mcp.tool()
async def read_obsidian_note(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read a note with its front-matter, links, tags and backlinks.

    Args:
        input (ReadNoteInput): Validated input containing:
            - path (str): Note path, with or without .md
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "path", "name", "content", "frontmatter", "links", "tags",
            "last_modified", "created", "word_count", "backlinks"
        }

    Error Handling:
        - Note not found → Error, use search_obsidian_vault() to locate it
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return read_note(index, input.path)


@mcp.tool()
async def read_obsidian_notes(
    input: ReadNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read several notes in one call.

    Returns:
        {"notes": [<read_obsidian_note payload>], "errors": [{"path", "error"}]}
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return read_notes(index, input.paths)


# ==============================================================================
# UPDATE OPERATIONS
# ==============================================================================

@mcp.tool()
async def update_obsidian_note(
    input: UpdateNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Update an existing note's body and/or front-matter.

    Args:
        input (UpdateNoteInput): Validated input containing:
            - path (str): Note path
            - content (str, optional): New text
            - frontmatter (dict, optional): Replacement front-matter
            - operation ('replace' | 'append' | 'prepend'): How content applies
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"success": True, "message": str, "note": {"path", "name", "word_count", "last_modified"}}

    Examples:
        - Use when: Adding a log entry → operation="append"
        - Use when: Changing status → frontmatter only

    Error Handling:
        - Note not found → Error, create it with create_obsidian_note()
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return update_note(index, input.path, input.content, input.frontmatter, input.operation)


# ==============================================================================
# DELETE OPERATIONS
# ==============================================================================

@mcp.tool()
async def delete_obsidian_note(
    input: DeleteNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Delete a note permanently (requires confirm=true).

    Without confirmation nothing is deleted and a warning is returned.

    Returns:
        {"success": True, "message": str, "path": str}
        or {"success": False, "warning": str, "path": str}

    Error Handling:
        - Note not found → Error with the requested path
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return delete_note(index, input.path, input.confirm)
