"""Search and discovery operations for notes."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from obsidian_graph.constants import DEFAULT_SEARCH_LIMIT
from obsidian_graph.core.vault_index import VaultIndex

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _parse_timestamp(value: Optional[str], field_name: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime supplied by the caller.

    Timezone-aware values are converted to naive local time so they compare
    with note timestamps.

    Raises:
        ValueError: If ``value`` is not ISO-8601.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"'{field_name}' must be an ISO-8601 date or datetime, got '{value}'.") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_vault(
    index: VaultIndex,
    query: str,
    tags: Optional[list[str]] = None,
    limit: Optional[int] = DEFAULT_SEARCH_LIMIT,
    include_content: bool = False,
    modified_after: Optional[str] = None,
    modified_before: Optional[str] = None,
) -> dict[str, Any]:
    """Ranked fuzzy search across note names, bodies, tags and titles.

    Args:
        index: Vault index to query.
        query: Search text.
        tags: Keep only notes carrying at least one of these tags.
        limit: Maximum number of results (``None`` for all).
        include_content: Embed each note's body in the payload.
        modified_after: ISO-8601 lower bound on last-modified time (inclusive).
        modified_before: ISO-8601 upper bound on last-modified time (inclusive).

    Returns:
        ``{"query", "total_results", "results": [...]}``; each result carries
        ``score`` (0 is a perfect match) and per-field ``matches``.

    Raises:
        ValueError: If a date bound is not ISO-8601.
    """
    after = _parse_timestamp(modified_after, "modified_after")
    before = _parse_timestamp(modified_before, "modified_before")

    date_filtered = after is not None or before is not None
    results = index.search(query, tags=tags, limit=None if date_filtered else limit)

    if date_filtered:
        results = [
            result
            for result in results
            if (after is None or result.note.last_modified >= after)
            and (before is None or result.note.last_modified <= before)
        ]
        if limit:
            results = results[:limit]

    payload_results = []
    for result in results:
        entry = result.note.summary_payload(include_content=include_content)
        entry["score"] = result.score
        entry["word_count"] = result.note.word_count
        entry["matches"] = [match.as_payload() for match in result.matches]
        payload_results.append(entry)

    return {
        "query": query,
        "total_results": len(payload_results),
        "results": payload_results,
    }
