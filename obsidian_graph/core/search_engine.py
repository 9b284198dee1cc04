"""Weighted fuzzy search over the note cache.

Scores follow the "distance" convention: ``0.0`` is a perfect match and ``1.0``
matches nothing. A field matches when its distance is within the threshold; a
note's score is the weighted product of its matching fields' distances, so
matching more fields, or heavier fields, ranks higher.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from rapidfuzz import fuzz

from obsidian_graph.constants import SEARCH_KEYS, SEARCH_THRESHOLD, SNIPPET_CONTEXT_CHARS
from obsidian_graph.data_models import Note, SearchMatch, SearchResult

logger = logging.getLogger(__name__)


def _field_values(note: Note, key: str) -> list[str]:
    if key == "name":
        return [note.name]
    if key == "content":
        return [note.content] if note.content else []
    if key == "tags":
        return list(note.tags)
    if key == "frontmatter.title":
        return [note.title] if note.title else []
    raise ValueError(f"Unsupported search key '{key}'")


def _snippet(text: str, start: int, end: int) -> str:
    """Bounded excerpt around ``text[start:end]`` with ellipses when truncated."""
    snippet_start = max(0, start - SNIPPET_CONTEXT_CHARS)
    snippet_end = min(len(text), end + SNIPPET_CONTEXT_CHARS)
    snippet = text[snippet_start:snippet_end]
    if snippet_start > 0:
        snippet = "..." + snippet
    if snippet_end < len(text):
        snippet = snippet + "..."
    return snippet


@dataclass(frozen=True)
class _IndexedNote:
    note: Note
    # key -> [(original, lowercased), ...]
    fields: dict[str, list[tuple[str, str]]]


class SearchEngine:
    """A disposable ranked index built from a snapshot of notes.

    Args:
        notes: Notes to index.
        keys: ``(field, weight)`` pairs; weights are normalized to sum to 1.
        threshold: Maximum per-field distance that still counts as a match.
    """

    def __init__(
        self,
        notes: Iterable[Note],
        keys: Sequence[tuple[str, float]] = SEARCH_KEYS,
        threshold: float = SEARCH_THRESHOLD,
    ) -> None:
        total_weight = sum(weight for _, weight in keys) or 1.0
        self.weights = {key: weight / total_weight for key, weight in keys}
        self.threshold = threshold
        self._entries = [
            _IndexedNote(
                note=note,
                fields={
                    key: [(value, value.lower()) for value in _field_values(note, key)]
                    for key in self.weights
                },
            )
            for note in notes
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def _match_field(self, query: str, key: str, values: list[tuple[str, str]]) -> Optional[tuple[float, SearchMatch]]:
        best: Optional[tuple[float, SearchMatch]] = None
        cutoff = (1.0 - self.threshold) * 100

        for original, lowered in values:
            if len(lowered) < len(query):
                # partial_ratio would slide the value along the query instead
                score = fuzz.ratio(query, lowered, score_cutoff=cutoff)
                if not score:
                    continue
                start, end = 0, len(lowered)
            else:
                alignment = fuzz.partial_ratio_alignment(query, lowered, score_cutoff=cutoff)
                if alignment is None:
                    continue
                score = alignment.score
                start, end = alignment.dest_start, alignment.dest_end

            distance = 1.0 - score / 100.0
            if best is not None and distance >= best[0]:
                continue

            value = _snippet(original, start, end) if key == "content" else original
            best = (
                distance,
                SearchMatch(key=key, value=value, indices=((start, max(start, end - 1)),)),
            )

        return best

    def query(self, text: str) -> list[SearchResult]:
        """Return notes matching ``text``, best first (ties by path)."""
        query = text.strip().lower()
        if not query:
            return []

        results: list[SearchResult] = []
        for entry in self._entries:
            score = 1.0
            matches: list[SearchMatch] = []
            for key, weight in self.weights.items():
                hit = self._match_field(query, key, entry.fields[key])
                if hit is None:
                    continue
                distance, match = hit
                score *= max(distance, sys.float_info.epsilon) ** weight
                matches.append(match)

            if matches:
                results.append(SearchResult(note=entry.note, score=score, matches=tuple(matches)))

        results.sort(key=lambda result: (result.score, result.note.path))
        logger.debug("Search for '%s' matched %d of %d notes", query, len(results), len(self._entries))
        return results
