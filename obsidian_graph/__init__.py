"""Obsidian Graph MCP Server

Knowledge-graph tooling for Obsidian vaults via Model Context Protocol:
note CRUD, fuzzy search, backlinks and link-network analysis.
"""

from obsidian_graph.config import get_vault_configuration, set_vault_configuration
from obsidian_graph.data_models import VaultMetadata, VaultConfiguration
from obsidian_graph.session import resolve_vault, set_active_vault, get_active_vault
from obsidian_graph.server import mcp, run_server

# Import tools to register them with the MCP server
from obsidian_graph import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "set_vault_configuration",
    "VaultMetadata",
    "VaultConfiguration",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
]
