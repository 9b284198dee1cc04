"""Pydantic input models for link-graph and analytics operations."""

from __future__ import annotations

from typing import Literal
from pydantic import Field

from .base import BaseNoteInput, VaultScopedInput


class BacklinksInput(BaseNoteInput):
    """Input model for get_obsidian_backlinks tool."""

    include_content: bool = Field(
        False,
        description="Include the body of each linking note."
    )


class ForwardLinksInput(BaseNoteInput):
    """Input model for get_obsidian_forward_links tool."""

    include_content: bool = Field(
        False,
        description="Include the body of each linked note."
    )


class AnalyzeLinkNetworkInput(VaultScopedInput):
    """Input model for analyze_obsidian_link_network tool.

    Examples:
        >>> AnalyzeLinkNetworkInput()
        >>> AnalyzeLinkNetworkInput(export_format="mermaid")
    """

    export_format: Literal["json", "mermaid", "graphviz"] = Field(
        "json",
        description=(
            "'json' returns the analysis only; 'mermaid' and 'graphviz' "
            "add a diagram of the central notes."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"export_format": "json"},
                {"export_format": "mermaid", "vault": "work"}
            ]
        }


class FindOrphanedNotesInput(VaultScopedInput):
    """Input model for find_obsidian_orphaned_notes tool."""

    include_recent: bool = Field(
        True,
        description="Include notes created within 'day_threshold' days."
    )

    day_threshold: int = Field(
        7,
        ge=0,
        description="Age in days under which a note counts as recent."
    )


class VaultStatisticsInput(VaultScopedInput):
    """Input model for get_obsidian_vault_statistics tool (vault only)."""


class SuggestConnectionsInput(BaseNoteInput):
    """Input model for suggest_obsidian_connections tool."""

    max_suggestions: int = Field(
        5,
        ge=1,
        le=50,
        description="Maximum number of suggestions to return."
    )

    threshold: float = Field(
        0.0,
        ge=0.0,
        le=1.0,
        description="Minimum shared-tag score (0-1) for a suggestion."
    )
