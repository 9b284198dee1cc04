"""Pydantic input models for search operations."""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator

from obsidian_graph.constants import DEFAULT_SEARCH_LIMIT

from .base import VaultScopedInput


class SearchVaultInput(VaultScopedInput):
    """Input model for search_obsidian_vault tool.

    Ranked fuzzy search over note names, bodies, tags and front-matter titles.

    Examples:
        >>> SearchVaultInput(query="roadmap")
        >>> SearchVaultInput(query="meeting", tags=["work"], limit=5)
    """

    query: str = Field(
        min_length=1,
        description="Search text. Matching is fuzzy and case-insensitive.",
        examples=["roadmap", "weekly review"]
    )

    tags: Optional[list[str]] = Field(
        None,
        description=(
            "Only return notes carrying at least one of these tags. "
            "A leading '#' is ignored; comparison is case-insensitive."
        ),
        examples=[["project", "#work"]]
    )

    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=1,
        le=200,
        description="Maximum number of results."
    )

    include_content: bool = Field(
        False,
        description="Include each matching note's full body."
    )

    modified_after: Optional[str] = Field(
        None,
        description="ISO-8601 date or datetime; keep notes modified at or after it.",
        examples=["2025-01-01"]
    )

    modified_before: Optional[str] = Field(
        None,
        description="ISO-8601 date or datetime; keep notes modified at or before it.",
        examples=["2025-12-31T23:59:59"]
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Search query cannot be empty or whitespace.")
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "roadmap", "limit": 10},
                {"query": "standup", "tags": ["work"], "modified_after": "2025-10-01"}
            ]
        }
