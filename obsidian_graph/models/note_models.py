"""Pydantic input models for note CRUD operations.

This module defines input models for basic note management operations:
- Create notes
- Read one or several notes
- Update note content and front-matter
- Delete notes
"""

from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import Field, field_validator

from .base import BaseNoteInput, VaultScopedInput


class CreateNoteInput(BaseNoteInput):
    """Input model for create_obsidian_note tool.

    Writes a markdown file (overwriting any existing one) and indexes it.
    Parent folders are created automatically.

    Examples:
        >>> CreateNoteInput(path="Projects/New Project", content="# New Project")
        >>> CreateNoteInput(path="Ideas", content="", frontmatter={"tags": ["idea"]})
    """

    content: str = Field(
        description=(
            "Markdown body for the note. "
            "Can be empty string to create a blank note."
        )
    )

    frontmatter: Optional[dict[str, Any]] = Field(
        None,
        description=(
            "Optional YAML front-matter properties. "
            "Omitted or empty means no front-matter block is written."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Projects/New Project",
                    "content": "# New Project\n\nRelated: [[Roadmap]]",
                    "frontmatter": {"tags": ["project"], "status": "active"},
                    "vault": None
                }
            ]
        }


class ReadNoteInput(BaseNoteInput):
    """Input model for read_obsidian_note tool.

    Examples:
        >>> ReadNoteInput(path="Daily Notes/2025-10-27")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Daily Notes/2025-10-27", "vault": None},
                {"path": "Projects/Roadmap.md", "vault": "work"}
            ]
        }


class ReadNotesInput(VaultScopedInput):
    """Input model for read_obsidian_notes tool (batch read)."""

    paths: list[str] = Field(
        min_length=1,
        description=(
            "Vault-relative note paths to read. "
            "A path that fails is reported in 'errors' without aborting the batch."
        ),
        examples=[["Projects/Roadmap", "Ideas.md"]]
    )

    @field_validator('paths')
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        cleaned = [path.strip() for path in v if path and path.strip()]
        if not cleaned:
            raise ValueError("Provide at least one non-empty note path.")
        return cleaned


class UpdateNoteInput(BaseNoteInput):
    """Input model for update_obsidian_note tool.

    Fields left unset keep their current value.

    Examples:
        >>> UpdateNoteInput(path="Log", content="- new entry", operation="append")
        >>> UpdateNoteInput(path="Ideas", frontmatter={"status": "done"})
    """

    content: Optional[str] = Field(
        None,
        description=(
            "New markdown text. With operation 'replace' it becomes the body; "
            "with 'append'/'prepend' it is joined to the existing body."
        )
    )

    frontmatter: Optional[dict[str, Any]] = Field(
        None,
        description="Replacement front-matter. Omit to keep the current block."
    )

    operation: Literal["replace", "append", "prepend"] = Field(
        "replace",
        description="How 'content' is applied to the existing body."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Log", "content": "- shipped v1", "operation": "append", "vault": None},
                {"path": "Ideas", "frontmatter": {"status": "done"}, "vault": None}
            ]
        }


class DeleteNoteInput(BaseNoteInput):
    """Input model for delete_obsidian_note tool.

    Deletion is permanent, so it requires an explicit ``confirm=True``.
    """

    confirm: bool = Field(
        False,
        description="Must be true to actually delete the note."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Scratch/Old idea", "confirm": True, "vault": None}
            ]
        }
