"""Base Pydantic models for MCP tool input validation.

Base Models:
- VaultScopedInput: optional vault name shared by every vault-level tool
- BaseNoteInput: adds the note path used by note-level tools
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class VaultScopedInput(BaseModel):
    """Base model for operations that target a whole vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Args:
            v: The vault name to validate

        Returns:
            The validated vault name or None

        Raises:
            ValueError: If vault name is empty string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BaseNoteInput(VaultScopedInput):
    """Base model for note operations with common validation.

    Path legality (traversal, hidden segments, vault containment) is enforced
    by the vault's path guard, not here, so a rejected path surfaces as an
    access-denied error rather than a schema error.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Vault-relative note path, with or without the .md extension. "
            "Examples: 'Daily Notes/2025-10-27', 'Projects/New Project.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Daily Notes/2025-10-27", "Projects/New Project.md", "README"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(
                "Note path cannot be empty. "
                "Provide a vault-relative path like 'Daily Notes/2025-10-27'."
            )
        return cleaned
