"""Knowledge-graph operations: links, network analysis, statistics and suggestions."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from obsidian_graph.core.graph_export import to_graphviz, to_mermaid
from obsidian_graph.core.note_parser import display_name
from obsidian_graph.core.vault_index import VaultIndex
from obsidian_graph.errors import VaultError

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "mermaid", "graphviz")


def _linked_notes(index: VaultIndex, paths: list[str], include_content: bool) -> list[dict[str, Any]]:
    linked: list[dict[str, Any]] = []
    for linked_path in paths:
        try:
            note = index.read(linked_path)
        except (VaultError, OSError, ValueError) as exc:
            logger.debug("Linked note '%s' could not be read: %s", linked_path, exc)
            linked.append(
                {
                    "path": linked_path,
                    "name": display_name(linked_path),
                    "error": "Note not found (broken link)",
                }
            )
            continue
        linked.append(note.summary_payload(include_content=include_content))
    return linked


def get_backlinks(index: VaultIndex, path: str, include_content: bool = False) -> dict[str, Any]:
    """Notes linking to ``path``. Unknown notes simply have no backlinks."""
    backlinks = index.get_backlinks(path)
    return {
        "note_path": path,
        "total_backlinks": len(backlinks),
        "backlinks": _linked_notes(index, backlinks, include_content),
    }


def get_forward_links(index: VaultIndex, path: str, include_content: bool = False) -> dict[str, Any]:
    """Notes that ``path`` links to (resolved targets only)."""
    forward_links = index.get_forward_links(path)
    return {
        "note_path": path,
        "total_links": len(forward_links),
        "links": _linked_notes(index, forward_links, include_content),
    }


def analyze_link_network(index: VaultIndex, export_format: Optional[str] = None) -> dict[str, Any]:
    """Link totals, broken links, orphans, central notes and tag clusters.

    Args:
        index: Vault index to analyze.
        export_format: ``json`` (default), ``mermaid`` or ``graphviz``. The two
            diagram formats add a ``diagram`` string covering the central notes.

    Raises:
        ValueError: If ``export_format`` is unknown.
    """
    fmt = (export_format or "json").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format '{export_format}'. Use one of: {', '.join(EXPORT_FORMATS)}.")

    analysis = index.analyze_link_network()
    payload = analysis.as_payload()

    if fmt != "json":
        forward = {entry.note: index.get_forward_links(entry.note) for entry in analysis.central_notes}
        render = to_mermaid if fmt == "mermaid" else to_graphviz
        payload["export_format"] = fmt
        payload["diagram"] = render(analysis, forward)

    return payload


def find_orphaned_notes(
    index: VaultIndex,
    include_recent: bool = True,
    day_threshold: int = 7,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Notes with neither forward links nor backlinks.

    Args:
        index: Vault index to analyze.
        include_recent: When ``False`` drop notes created within ``day_threshold``
            days; fresh notes often have not been linked yet.
        day_threshold: Age in days below which a note counts as recent.
        now: Reference time, for tests.
    """
    orphaned = index.analyze_link_network().orphaned_notes

    if not include_recent and day_threshold > 0:
        cutoff = (now or datetime.now()) - timedelta(days=day_threshold)
        recent = index.recently_created(cutoff)
        orphaned = [path for path in orphaned if path not in recent]

    return {
        "total_orphaned": len(orphaned),
        "orphaned_notes": orphaned,
        "include_recent": include_recent,
        "day_threshold": day_threshold,
    }


def vault_statistics(index: VaultIndex) -> dict[str, Any]:
    return index.statistics().as_payload()


def suggest_connections(
    index: VaultIndex,
    path: str,
    max_suggestions: int = 5,
    threshold: float = 0.0,
) -> dict[str, Any]:
    """Suggest notes sharing tags with ``path``.

    Score is ``len(common) / max(len(tags_a), len(tags_b))``. Notes already
    linked in either direction are still suggested; the caller decides.

    Raises:
        NoteNotFoundError: If ``path`` does not exist.
    """
    note = index.read(path)
    own_tags = set(note.tags)

    suggestions: list[dict[str, Any]] = []
    if own_tags:
        for other in index.notes():
            if other.path == note.path:
                continue
            other_tags = set(other.tags)
            common = [tag for tag in note.tags if tag in other_tags]
            if not common:
                continue
            score = len(common) / max(len(own_tags), len(other_tags))
            if score < threshold:
                continue
            suggestions.append(
                {
                    "note": other.path,
                    "reason": f"Shares tags: {', '.join(common)}",
                    "score": score,
                }
            )

    suggestions.sort(key=lambda item: (-item["score"], item["note"]))
    return {
        "note_path": note.path,
        "threshold": threshold,
        "suggestions": suggestions[:max_suggestions],
    }
