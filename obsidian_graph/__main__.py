"""Command-line entry point: ``obsidian-graph-mcp [VAULT_DIR]``."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from obsidian_graph import __version__, run_server
from obsidian_graph.config import (
    get_vault_configuration,
    load_vault_configuration,
    set_vault_configuration,
    single_vault_configuration,
)
from obsidian_graph.constants import LOG_LEVEL

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obsidian-graph-mcp",
        description="Serve an Obsidian vault's notes and link graph over MCP (stdio).",
    )
    parser.add_argument(
        "vault_dir",
        nargs="?",
        help="Vault directory to serve. Omit to use the vaults.yaml configuration.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a vaults.yaml file (ignored when VAULT_DIR is given).",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: %(default)s).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    if args.vault_dir:
        set_vault_configuration(single_vault_configuration(args.vault_dir))
    elif args.config:
        set_vault_configuration(load_vault_configuration(args.config))

    configuration = get_vault_configuration()
    default = configuration.get(configuration.default_vault)
    if not default.exists:
        logger.warning("Default vault '%s' does not exist at %s", default.name, default.path)

    run_server()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
