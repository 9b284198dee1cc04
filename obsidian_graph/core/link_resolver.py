"""Resolution of raw reference strings to notes in the cache."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from obsidian_graph.data_models import Note


def clean_reference(reference: str) -> str:
    """Strip surrounding whitespace and one trailing ``.md`` suffix."""
    cleaned = reference.strip()
    return cleaned[: -len(".md")] if cleaned.endswith(".md") else cleaned


class LinkResolver:
    """Maps references to notes over one snapshot of the note cache.

    Matching happens in two tiers:

    1. exact: the cleaned reference equals a note's display name, its
       vault-relative path, or that path without ``.md``;
    2. partial: the first note, in lexicographic path order, whose display name
       contains the cleaned reference case-insensitively.

    Build a new resolver whenever the cache changes; it does not observe the
    mapping it was created from.
    """

    def __init__(self, notes: Mapping[str, Note]) -> None:
        self._ordered: list[Note] = [notes[path] for path in sorted(notes)]
        self._exact: dict[str, Note] = {}
        for note in self._ordered:
            stem_path = note.path[: -len(".md")] if note.path.endswith(".md") else note.path
            for key in (note.name, note.path, stem_path):
                self._exact.setdefault(key, note)

    def resolve(self, reference: str) -> Optional[Note]:
        cleaned = clean_reference(reference)
        if not cleaned:
            return None

        exact = self._exact.get(cleaned)
        if exact is not None:
            return exact

        needle = cleaned.lower()
        for note in self._ordered:
            if needle in note.name.lower():
                return note

        return None


def resolve_link(reference: str, notes: Mapping[str, Note]) -> Optional[Note]:
    """One-off resolution; prefer :class:`LinkResolver` when resolving many links."""
    return LinkResolver(notes).resolve(reference)
