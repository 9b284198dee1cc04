"""In-memory vault index: note cache, bidirectional link graph and search index.

The index is the single owner of all derived vault state. Notes are replaced
wholesale whenever their file changes, the link graph is rebuilt from scratch
whenever any note's outgoing references may have changed, and the search index
is a disposable cache rebuilt after every mutation batch.

Mutations arrive from two places: tool calls and the filesystem watcher, whose
callbacks run on the observer thread. A per-index re-entrant lock serializes
both, so no operation ever observes a half-rebuilt graph.
"""

from __future__ import annotations

import copy
import logging
import math
import os
import threading
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from obsidian_graph.constants import (
    CENTRAL_NOTES_LIMIT,
    MOST_USED_TAGS_LIMIT,
    RECENT_NOTES_LIMIT,
    SEARCH_KEYS,
    SEARCH_THRESHOLD,
)
from obsidian_graph.core.link_resolver import LinkResolver
from obsidian_graph.core.note_parser import build_note, serialize_note
from obsidian_graph.core.path_guard import NOTE_SUFFIX, PathGuard, ensure_vault_ready
from obsidian_graph.core.search_engine import SearchEngine
from obsidian_graph.core.watcher import VaultWatcher
from obsidian_graph.data_models import (
    CentralNote,
    LinkAnalysis,
    Note,
    NoteCluster,
    SearchResult,
    VaultStatistics,
)
from obsidian_graph.errors import NoteNotFoundError

logger = logging.getLogger(__name__)


class VaultIndex:
    """Cache of parsed notes plus forward/back link graphs for one vault.

    Args:
        root: Vault root directory. ``~`` is expanded.
        search_keys: ``(field, weight)`` pairs for the search engine.
        search_threshold: Fuzziness threshold for the search engine.
    """

    def __init__(
        self,
        root: Path | str,
        search_keys: tuple[tuple[str, float], ...] = SEARCH_KEYS,
        search_threshold: float = SEARCH_THRESHOLD,
    ) -> None:
        self.guard = PathGuard(root)
        self.root = self.guard.root
        self._search_keys = search_keys
        self._search_threshold = search_threshold

        self._notes: dict[str, Note] = {}
        self._forward: dict[str, set[str]] = {}
        self._backward: dict[str, set[str]] = {}
        self._search: Optional[SearchEngine] = None
        self._lock = threading.RLock()
        self._watcher: Optional[VaultWatcher] = None

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, relative_path: object) -> bool:
        return relative_path in self._notes

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    def initialize(self) -> None:
        """Validate the vault root, scan every note, then build graph and search.

        Raises:
            VaultNotAccessibleError: If the root is missing.
            VaultNotADirectoryError: If the root is not a directory.
        """
        logger.info("Initializing vault at: %s", self.root)
        ensure_vault_ready(self.root)
        self.rescan()
        logger.info("Vault initialized with %d notes", len(self._notes))

    def rescan(self) -> None:
        """Drop the cache and rebuild it from disk.

        A file that cannot be read or parsed is logged and skipped; it never
        aborts the scan.
        """
        with self._lock:
            self._notes.clear()
            for relative_path in self._find_markdown_files():
                try:
                    self.upsert(relative_path)
                except (OSError, UnicodeDecodeError, ValueError) as exc:
                    logger.warning("Failed to process file '%s': %s", relative_path, exc)
            self.refresh()

    def _find_markdown_files(self) -> list[str]:
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
            for filename in sorted(filenames):
                if filename.startswith(".") or not filename.endswith(NOTE_SUFFIX):
                    continue
                found.append(self.guard.relative_key(os.path.join(dirpath, filename)))
        return found

    def start_watching(self) -> None:
        """Begin feeding filesystem events into this index."""
        with self._lock:
            if self._watcher is None:
                self._watcher = VaultWatcher(self)
                self._watcher.start()

    def dispose(self) -> None:
        """Release the watcher, if one is running."""
        with self._lock:
            watcher, self._watcher = self._watcher, None
        if watcher is not None:
            watcher.stop()

    # ==========================================================================
    # CACHE MAINTENANCE
    # ==========================================================================

    def upsert(self, relative_path: str) -> Note:
        """Re-read one file and replace its cache entry wholesale.

        The caller triggers :meth:`refresh` afterwards, once per batch.

        Raises:
            OSError: If the file cannot be stat'ed or read.
            NoteParseError: If its front-matter is malformed.
        """
        full_path = self.root / relative_path
        stat_result = full_path.stat()
        text = full_path.read_text(encoding="utf-8")
        note = build_note(relative_path, text, stat_result)
        with self._lock:
            self._notes[relative_path] = note
        return note

    def remove(self, relative_path: str) -> bool:
        """Drop a note from the cache and purge it from every graph set."""
        with self._lock:
            existed = self._notes.pop(relative_path, None) is not None
            self._forward.pop(relative_path, None)
            self._backward.pop(relative_path, None)
            for targets in self._forward.values():
                targets.discard(relative_path)
            for sources in self._backward.values():
                sources.discard(relative_path)
        return existed

    def rebuild_graph(self) -> None:
        """Recompute both link maps from the cached references."""
        with self._lock:
            resolver = LinkResolver(self._notes)
            forward: dict[str, set[str]] = {path: set() for path in self._notes}
            backward: dict[str, set[str]] = {path: set() for path in self._notes}

            for path, note in self._notes.items():
                for link in note.links:
                    target = resolver.resolve(link)
                    if target is None:
                        continue
                    forward[path].add(target.path)
                    backward[target.path].add(path)

            self._forward = forward
            self._backward = backward

    def rebuild_search_index(self) -> None:
        with self._lock:
            self._search = SearchEngine(
                self._notes.values(),
                keys=self._search_keys,
                threshold=self._search_threshold,
            )

    def refresh(self) -> None:
        """Rebuild the link graph and then the search index."""
        with self._lock:
            self.rebuild_graph()
            self.rebuild_search_index()

    def apply_file_event(self, event: str, relative_path: str) -> None:
        """Apply one watcher event (``add``, ``change`` or ``delete``).

        Failures are logged and swallowed so a single bad event never stops the
        watcher.
        """
        try:
            with self._lock:
                if event == "delete":
                    self.remove(relative_path)
                elif event in ("add", "change"):
                    self.upsert(relative_path)
                else:
                    raise ValueError(f"Unknown file event '{event}'")
                self.refresh()
        except Exception as exc:
            logger.warning("Failed to handle file %s event for '%s': %s", event, relative_path, exc)

    # ==========================================================================
    # CRUD
    # ==========================================================================

    def _cached(self, relative_path: str) -> Note:
        note = self._notes.get(relative_path)
        if note is None:
            raise NoteNotFoundError(f"Note not found: {relative_path}")
        return note

    def create(self, path: str, content: str, frontmatter: Optional[dict[str, Any]] = None) -> Note:
        """Write a new note (overwriting any existing file) and index it.

        Front-matter is only written when non-empty. Parent folders are created.

        Raises:
            AccessDeniedError: If ``path`` escapes the vault or is hidden.
            ValueError: If ``frontmatter`` cannot be serialized.
            OSError: If the file cannot be written.
        """
        full_path, relative_path = self.guard.resolve_note(path)
        file_content = serialize_note(content, frontmatter)

        with self._lock:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(file_content, encoding="utf-8")
            note = self.upsert(relative_path)
            self.refresh()

        logger.info("Created note: %s", relative_path)
        return copy.deepcopy(note)

    def update(
        self,
        path: str,
        content: Optional[str] = None,
        frontmatter: Optional[dict[str, Any]] = None,
    ) -> Note:
        """Rewrite an existing note; omitted fields keep their current values.

        Raises:
            AccessDeniedError: If ``path`` escapes the vault or is hidden.
            NoteNotFoundError: If the note is not in the cache.
        """
        full_path, relative_path = self.guard.resolve_note(path)

        with self._lock:
            existing = self._cached(relative_path)
            new_content = existing.content if content is None else content
            new_frontmatter = existing.frontmatter if frontmatter is None else frontmatter

            full_path.write_text(serialize_note(new_content, new_frontmatter), encoding="utf-8")
            note = self.upsert(relative_path)
            self.refresh()

        logger.info("Updated note: %s", relative_path)
        return copy.deepcopy(note)

    def delete(self, path: str) -> str:
        """Remove a note from disk, cache and graph.

        Returns:
            The vault-relative path of the deleted note.

        Raises:
            AccessDeniedError: If ``path`` escapes the vault or is hidden.
            NoteNotFoundError: If the note is not in the cache.
        """
        full_path, relative_path = self.guard.resolve_note(path)

        with self._lock:
            self._cached(relative_path)
            full_path.unlink(missing_ok=True)
            self.remove(relative_path)
            # A reference that used to hit this note may now resolve elsewhere.
            self.refresh()

        logger.info("Deleted note: %s", relative_path)
        return relative_path

    def read(self, path: str) -> Note:
        """Return a note, loading it from disk if the watcher has not seen it yet.

        Raises:
            AccessDeniedError: If ``path`` escapes the vault or is hidden.
            NoteNotFoundError: If the note is neither cached nor on disk.
        """
        full_path, relative_path = self.guard.resolve_note(path)

        with self._lock:
            note = self._notes.get(relative_path)
            if note is None and full_path.is_file():
                note = self.upsert(relative_path)
                self.refresh()

        if note is None:
            raise NoteNotFoundError(f"Note not found: {relative_path}")
        return copy.deepcopy(note)

    def notes(self) -> list[Note]:
        """Snapshot of every cached note in path order."""
        with self._lock:
            return [copy.deepcopy(self._notes[path]) for path in sorted(self._notes)]

    # ==========================================================================
    # SEARCH
    # ==========================================================================

    def search(
        self,
        query: str,
        tags: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> list[SearchResult]:
        """Ranked fuzzy search, optionally restricted to notes carrying any of ``tags``.

        Tags compare case-insensitively and a leading ``#`` is ignored.
        """
        with self._lock:
            if self._search is None:
                self.rebuild_search_index()
            results = self._search.query(query)

        wanted = {tag.strip().lstrip("#").lower() for tag in tags or ()}
        wanted.discard("")
        if wanted:
            results = [
                result
                for result in results
                if any(tag.lower() in wanted for tag in result.note.tags)
            ]

        if limit:
            results = results[:limit]

        return [
            SearchResult(note=copy.deepcopy(result.note), score=result.score, matches=result.matches)
            for result in results
        ]

    # ==========================================================================
    # GRAPH QUERIES
    # ==========================================================================

    def _graph_key(self, path: str) -> str:
        return self.guard.resolve_note(path)[1]

    def get_backlinks(self, path: str) -> list[str]:
        """Notes that link to ``path``; empty for unknown notes."""
        key = self._graph_key(path)
        with self._lock:
            return sorted(self._backward.get(key, ()))

    def get_forward_links(self, path: str) -> list[str]:
        """Notes that ``path`` links to; empty for unknown notes."""
        key = self._graph_key(path)
        with self._lock:
            return sorted(self._forward.get(key, ()))

    def analyze_link_network(self) -> LinkAnalysis:
        with self._lock:
            resolver = LinkResolver(self._notes)
            ordered = sorted(self._notes)

            total_links = sum(len(targets) for targets in self._forward.values())

            broken_links = [
                f"{path}: {link}"
                for path in ordered
                for link in self._notes[path].links
                if resolver.resolve(link) is None
            ]

            degrees = {
                path: len(self._forward.get(path, ())) + len(self._backward.get(path, ()))
                for path in ordered
            }
            orphaned_notes = [
                path
                for path in ordered
                if not self._forward.get(path) and not self._backward.get(path)
            ]
            central_notes = [
                CentralNote(note=path, connections=degree)
                for path, degree in sorted(degrees.items(), key=lambda item: (-item[1], item[0]))
            ][:CENTRAL_NOTES_LIMIT]

            return LinkAnalysis(
                total_links=total_links,
                broken_links=broken_links,
                orphaned_notes=orphaned_notes,
                central_notes=central_notes,
                clusters=self._tag_clusters(),
            )

    def _tag_clusters(self) -> list[NoteCluster]:
        members: dict[str, list[str]] = {}
        for path in sorted(self._notes):
            for tag in self._notes[path].tags:
                members.setdefault(tag, []).append(path)

        clusters = [
            NoteCluster(notes=paths, theme=tag)
            for tag, paths in members.items()
            if len(paths) >= 2
        ]
        clusters.sort(key=lambda cluster: (-len(cluster.notes), cluster.theme or ""))
        return clusters

    # ==========================================================================
    # STATISTICS
    # ==========================================================================

    def statistics(self) -> VaultStatistics:
        with self._lock:
            notes = list(self._notes.values())

        total_words = sum(note.word_count for note in notes)
        average = math.floor(total_words / len(notes) + 0.5) if notes else 0

        tag_counts = Counter(tag for note in notes for tag in note.tags)
        most_used = sorted(tag_counts.items(), key=lambda item: (-item[1], item[0]))

        recent = sorted(notes, key=lambda note: (-note.last_modified.timestamp(), note.path))

        return VaultStatistics(
            total_notes=len(notes),
            total_words=total_words,
            average_words_per_note=average,
            total_tags=len(tag_counts),
            most_used_tags=most_used[:MOST_USED_TAGS_LIMIT],
            recent_notes=[(note.path, note.last_modified) for note in recent[:RECENT_NOTES_LIMIT]],
        )

    def recently_created(self, since: datetime) -> set[str]:
        """Paths of notes created at or after ``since``."""
        with self._lock:
            return {path for path, note in self._notes.items() if note.created >= since}
