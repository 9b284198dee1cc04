"""Link-graph and analytics MCP tools.

- Backlinks and forward links of a note
- Whole-vault link network analysis (with diagram export)
- Orphaned notes
- Vault statistics

All tools delegate to obsidian_graph.core.graph_operations.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_graph.server import mcp
from obsidian_graph.session import resolve_vault
from obsidian_graph.registry import get_vault_index
from obsidian_graph.models import (
    BacklinksInput,
    ForwardLinksInput,
    AnalyzeLinkNetworkInput,
    FindOrphanedNotesInput,
    VaultStatisticsInput,
)
from obsidian_graph.core.graph_operations import (
    analyze_link_network,
    find_orphaned_notes,
    get_backlinks,
    get_forward_links,
    vault_statistics,
)


# ==============================================================================
# LINK LOOKUPS
# ==============================================================================

@mcp.tool()
async def get_obsidian_backlinks(
    input: BacklinksInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List notes that link to the given note.

    An unknown note simply has no backlinks.

    Returns:
        {"note_path": str, "total_backlinks": int, "backlinks": [{"path", "name", "tags", "last_modified"}]}
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return get_backlinks(index, input.path, input.include_content)


@mcp.tool()
async def get_obsidian_forward_links(
    input: ForwardLinksInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List notes the given note links to (resolved links only).

    Returns:
        {"note_path": str, "total_links": int, "links": [{"path", "name", "tags", "last_modified"}]}
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return get_forward_links(index, input.path, input.include_content)


# ==============================================================================
# VAULT ANALYTICS
# ==============================================================================

@mcp.tool()
async def analyze_obsidian_link_network(
    input: AnalyzeLinkNetworkInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Analyze the vault's link network.

    Returns:
        {
            "total_links": int,
            "broken_links": ["<note path>: <reference>"],
            "orphaned_notes": [str],
            "central_notes": [{"note", "connections"}],   # top 10 by degree
            "clusters": [{"theme", "notes"}],             # notes sharing a tag
            "export_format": str, "diagram": str          # mermaid/graphviz only
        }
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return analyze_link_network(index, input.export_format)


@mcp.tool()
async def find_obsidian_orphaned_notes(
    input: FindOrphanedNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find notes with no links in or out.

    Returns:
        {"total_orphaned": int, "orphaned_notes": [str], "include_recent": bool, "day_threshold": int}
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return find_orphaned_notes(index, input.include_recent, input.day_threshold)


@mcp.tool()
async def get_obsidian_vault_statistics(
    input: VaultStatisticsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Aggregate vault statistics.

    Returns:
        {
            "total_notes", "total_words", "average_words_per_note", "total_tags",
            "most_used_tags": [{"tag", "count"}],
            "recent_notes": [{"path", "last_modified"}]
        }
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return vault_statistics(index)
