"""MCP resources: vault statistics and raw note bodies."""

import json
from urllib.parse import unquote

from obsidian_graph.server import mcp
from obsidian_graph.session import resolve_vault
from obsidian_graph.registry import get_vault_index
from obsidian_graph.core.graph_operations import vault_statistics


@mcp.resource(
    "obsidian://vault/statistics",
    name="Vault Statistics",
    description="Statistics about the default Obsidian vault",
    mime_type="application/json",
)
def vault_statistics_resource() -> str:
    index = get_vault_index(resolve_vault(None))
    return json.dumps(vault_statistics(index), indent=2)


@mcp.resource(
    "obsidian://note/{path}",
    name="Obsidian Note",
    description="Markdown body of a note in the default vault (URL-encoded path)",
    mime_type="text/markdown",
)
def note_resource(path: str) -> str:
    index = get_vault_index(resolve_vault(None))
    return index.read(unquote(path)).content
