"""Advanced MCP tools, registered only when OBSIDIAN_ENABLE_ADVANCED_FEATURES is on."""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_graph.server import mcp
from obsidian_graph.session import resolve_vault
from obsidian_graph.registry import get_vault_index
from obsidian_graph.models import SuggestConnectionsInput
from obsidian_graph.core.graph_operations import suggest_connections


@mcp.tool()
async def suggest_obsidian_connections(
    input: SuggestConnectionsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Suggest notes that share tags with the given note.

    Score is common tags divided by the larger tag count of the two notes.

    Returns:
        {"note_path": str, "threshold": float, "suggestions": [{"note", "reason", "score"}]}
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return suggest_connections(index, input.path, input.max_suggestions, input.threshold)
