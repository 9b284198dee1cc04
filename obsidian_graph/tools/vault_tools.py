"""MCP tools for vault management."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from obsidian_graph.server import mcp
from obsidian_graph.models import ListVaultsInput, SetActiveVaultInput
from obsidian_graph.config import get_vault_configuration
from obsidian_graph.session import (
    set_active_vault as set_active_vault_session,
    get_active_vault,
    get_session_key,
)

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List configured Obsidian vaults and current session state.

    Args:
        input (ListVaultsInput): Validated input (no fields required)
        ctx (Context, optional): FastMCP context for session state

    Returns:
        {
            "default": str,    # System default vault name
            "active": str,     # Currently active vault (or None)
            "vaults": [{"name", "path", "description", "exists"}]
        }

    Examples:
        - Use when: Starting conversation, need to see available vaults
        - Don't use: Already know vault name and just need to switch
    """
    configuration = get_vault_configuration()

    active = None
    if ctx is not None:
        try:
            active = get_active_vault(ctx).name
        except ValueError:
            active = None

    return {
        "default": configuration.default_vault,
        "active": active,
        "vaults": [metadata.as_payload() for metadata in configuration.vaults.values()],
    }


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Set the active vault for this conversation session.

    All subsequent tool calls that omit the vault parameter will use the
    active vault.

    Args:
        input (SetActiveVaultInput): Validated input containing:
            - vault (str): Friendly vault name from vaults.yaml
        ctx (Context): FastMCP context for session state

    Returns:
        {"vault": str, "path": str, "status": "active"}

    Error Handling:
        - Unknown vault → Error listing available vaults
    """
    metadata = set_active_vault_session(ctx, input.vault)
    logger.info("Active vault for session %s set to '%s'", get_session_key(ctx), metadata.name)
    return {
        "vault": metadata.name,
        "path": str(metadata.path),
        "status": "active",
    }
