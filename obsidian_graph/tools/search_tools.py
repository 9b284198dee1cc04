"""Search MCP tools."""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_graph.server import mcp
from obsidian_graph.session import resolve_vault
from obsidian_graph.registry import get_vault_index
from obsidian_graph.models import SearchVaultInput
from obsidian_graph.core.search_operations import search_vault


@mcp.tool()
async def search_obsidian_vault(
    input: SearchVaultInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Ranked fuzzy search across note names, content, tags and titles.

    Field weights: content 0.4, name 0.3, tags 0.2, front-matter title 0.1.
    Lower scores are better (0 is an exact match).

    Args:
        input (SearchVaultInput): Validated input containing:
            - query (str): Search text
            - tags (list[str], optional): Any-match tag filter. Comparison ignores
                case and a leading "#", so "#Work" also matches "work"
            - limit (int): Maximum results (default 10)
            - include_content (bool): Embed note bodies
            - modified_after / modified_before (str, optional): ISO-8601 bounds
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "query": str,
            "total_results": int,
            "results": [
                {"path", "name", "tags", "last_modified", "score", "word_count",
                 "matches": [{"key", "value", "indices"}]}
            ]
        }

    Examples:
        - Use when: Locating a note by topic before reading it
        - Workflow: search_obsidian_vault() → read_obsidian_note()
    """
    index = get_vault_index(resolve_vault(input.vault, ctx))
    return search_vault(
        index,
        input.query,
        tags=input.tags,
        limit=input.limit,
        include_content=input.include_content,
        modified_after=input.modified_after,
        modified_before=input.modified_before,
    )
