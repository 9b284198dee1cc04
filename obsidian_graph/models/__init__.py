"""Pydantic input models for MCP tool validation.

Each model is the input schema of one MCP tool, with field-level validation
and descriptions that end up in the JSON schema shown to clients.

Architecture:
- base: VaultScopedInput and BaseNoteInput shared fields
- note_models: note CRUD
- search_models: ranked search
- graph_models: links, network analysis, statistics, suggestions
- vault_models: vault management
"""

from .base import BaseNoteInput, VaultScopedInput
from .note_models import (
    CreateNoteInput,
    ReadNoteInput,
    ReadNotesInput,
    UpdateNoteInput,
    DeleteNoteInput,
)
from .search_models import SearchVaultInput
from .graph_models import (
    BacklinksInput,
    ForwardLinksInput,
    AnalyzeLinkNetworkInput,
    FindOrphanedNotesInput,
    VaultStatisticsInput,
    SuggestConnectionsInput,
)
from .vault_models import ListVaultsInput, SetActiveVaultInput

__all__ = [
    "BaseNoteInput",
    "VaultScopedInput",
    "CreateNoteInput",
    "ReadNoteInput",
    "ReadNotesInput",
    "UpdateNoteInput",
    "DeleteNoteInput",
    "SearchVaultInput",
    "BacklinksInput",
    "ForwardLinksInput",
    "AnalyzeLinkNetworkInput",
    "FindOrphanedNotesInput",
    "VaultStatisticsInput",
    "SuggestConnectionsInput",
    "ListVaultsInput",
    "SetActiveVaultInput",
]
