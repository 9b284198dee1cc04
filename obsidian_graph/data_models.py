"""Data models for vault configuration, notes and graph analytics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional


def _jsonable(value: Any) -> Any:
    """Convert YAML-derived values (dates, nested mappings) into JSON-safe data."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(item) for item in value]
    return value


# ==============================================================================
# VAULT CONFIGURATION
# ==============================================================================


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


class VaultConfiguration:
    """Holds vault metadata and default resolution helpers.

    Loaded lazily from vaults.yaml, or built from a single directory passed on
    the command line.
    """

    def __init__(self, default_vault: str, vaults: dict[str, VaultMetadata]) -> None:
        self.default_vault = default_vault
        self.vaults = vaults

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            raise ValueError(f"Unknown vault '{name}'") from exc

    def as_payload(self) -> dict[str, Any]:
        """Return serializable configuration payload."""
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


# ==============================================================================
# NOTES
# ==============================================================================


@dataclass(frozen=True)
class Note:
    """A parsed markdown note, keyed by its vault-relative path.

    Every field is derived from one read of the file; a modified file produces a
    brand new ``Note``. Backlinks are not stored here, they live in the index's
    link graph.
    """

    path: str
    name: str
    content: str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    #: Outgoing references as written in the body, first-seen order
    links: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    last_modified: datetime = field(default_factory=datetime.now)
    created: datetime = field(default_factory=datetime.now)
    word_count: int = 0

    @property
    def title(self) -> Optional[str]:
        value = self.frontmatter.get("title")
        if value is None or isinstance(value, (Mapping, list)):
            return None
        return str(value)

    def as_payload(self, include_content: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "path": self.path,
            "name": self.name,
            "frontmatter": _jsonable(self.frontmatter),
            "links": list(self.links),
            "tags": list(self.tags),
            "last_modified": self.last_modified.isoformat(),
            "created": self.created.isoformat(),
            "word_count": self.word_count,
        }
        if include_content:
            payload["content"] = self.content
        return payload

    def summary_payload(self, include_content: bool = False) -> dict[str, Any]:
        """Compact view used when listing linked or matching notes."""
        payload: dict[str, Any] = {
            "path": self.path,
            "name": self.name,
            "tags": list(self.tags),
            "last_modified": self.last_modified.isoformat(),
        }
        if include_content:
            payload["content"] = self.content
        return payload


# ==============================================================================
# SEARCH
# ==============================================================================


@dataclass(frozen=True)
class SearchMatch:
    """Where a query matched inside one searchable field.

    ``indices`` holds inclusive ``(start, end)`` character offsets into the full
    field value. For the ``content`` field ``value`` is a bounded snippet around
    the match rather than the whole body.
    """

    key: str
    value: str
    indices: tuple[tuple[int, int], ...]

    def as_payload(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "indices": [list(span) for span in self.indices],
        }


@dataclass(frozen=True)
class SearchResult:
    """A ranked hit. Lower ``score`` is better; ``0.0`` is an exact match."""

    note: Note
    score: float
    matches: tuple[SearchMatch, ...] = ()


# ==============================================================================
# GRAPH ANALYTICS
# ==============================================================================


@dataclass(frozen=True)
class CentralNote:
    note: str
    connections: int


@dataclass(frozen=True)
class NoteCluster:
    """Notes grouped under a shared tag."""

    notes: list[str]
    theme: Optional[str] = None


@dataclass
class LinkAnalysis:
    total_links: int
    broken_links: list[str]
    orphaned_notes: list[str]
    central_notes: list[CentralNote]
    clusters: list[NoteCluster] = field(default_factory=list)

    def as_payload(self) -> dict[str, Any]:
        return {
            "total_links": self.total_links,
            "broken_links": list(self.broken_links),
            "orphaned_notes": list(self.orphaned_notes),
            "central_notes": [
                {"note": central.note, "connections": central.connections}
                for central in self.central_notes
            ],
            "clusters": [
                {"notes": list(cluster.notes), "theme": cluster.theme}
                for cluster in self.clusters
            ],
        }


@dataclass
class VaultStatistics:
    total_notes: int
    total_words: int
    average_words_per_note: int
    total_tags: int
    most_used_tags: list[tuple[str, int]]
    recent_notes: list[tuple[str, datetime]]

    def as_payload(self) -> dict[str, Any]:
        return {
            "total_notes": self.total_notes,
            "total_words": self.total_words,
            "average_words_per_note": self.average_words_per_note,
            "total_tags": self.total_tags,
            "most_used_tags": [{"tag": tag, "count": count} for tag, count in self.most_used_tags],
            "recent_notes": [
                {"path": path, "last_modified": modified.isoformat()}
                for path, modified in self.recent_notes
            ],
        }
