"""FastMCP server initialization and tool registration."""

import logging
from mcp.server.fastmcp import FastMCP

from obsidian_graph.constants import LOG_LEVEL
from obsidian_graph.registry import close_vault_indexes

# Initialize logger (stderr; stdout carries the stdio transport)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("obsidian_graph")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server():
    """Start the MCP server with stdio transport."""
    logger.info("Starting Obsidian Graph MCP Server")
    try:
        mcp.run(transport="stdio")
    finally:
        close_vault_indexes()
        logger.info("Obsidian Graph MCP Server stopped")


if __name__ == "__main__":
    run_server()
