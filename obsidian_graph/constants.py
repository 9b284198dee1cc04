"""Module-level constants for the Obsidian graph MCP server."""

import os
from pathlib import Path

# Configuration
CONFIG_PATH = Path(os.environ.get("OBSIDIAN_VAULTS_CONFIG", Path(__file__).parent.parent / "vaults.yaml"))
ADVANCED_FEATURES_ENV = "OBSIDIAN_ENABLE_ADVANCED_FEATURES"

# Limits
MAX_FRONTMATTER_BYTES = 10_240
SNIPPET_CONTEXT_CHARS = 100
DEFAULT_SEARCH_LIMIT = 10
CENTRAL_NOTES_LIMIT = 10
MOST_USED_TAGS_LIMIT = 5
RECENT_NOTES_LIMIT = 10

# Search engine: field weights and fuzziness (0 = exact match, 1 = match anything)
SEARCH_KEYS = (
    ("name", 0.3),
    ("content", 0.4),
    ("tags", 0.2),
    ("frontmatter.title", 0.1),
)
SEARCH_THRESHOLD = 0.3

# Logging
LOG_LEVEL = os.environ.get("OBSIDIAN_LOG_LEVEL", "INFO").upper()
