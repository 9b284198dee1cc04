"""MCP tool definitions for Obsidian vault operations.

Importing a tool module registers its @mcp.tool() and @mcp.resource()
functions with the server. Advanced tools are registered only when
OBSIDIAN_ENABLE_ADVANCED_FEATURES is set.
"""

from obsidian_graph.config import advanced_features_enabled

# Import all tool modules to register their decorated functions
from obsidian_graph.tools import vault_tools
from obsidian_graph.tools import note_tools
from obsidian_graph.tools import search_tools
from obsidian_graph.tools import graph_tools
from obsidian_graph.tools import resources

__all__ = [
    "vault_tools",
    "note_tools",
    "search_tools",
    "graph_tools",
    "resources",
]

if advanced_features_enabled():
    from obsidian_graph.tools import advanced_tools  # noqa: F401

    __all__.append("advanced_tools")
