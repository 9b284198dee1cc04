"""Markdown note parsing: front-matter, outgoing references and tags."""

from __future__ import annotations

import copy
import os
import re
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import PurePosixPath
from typing import Any

import frontmatter
import yaml

from obsidian_graph.constants import MAX_FRONTMATTER_BYTES
from obsidian_graph.data_models import Note
from obsidian_graph.errors import NoteParseError

# [[Target]] or [[Target|Alias]]
_WIKILINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")
# [label](target)
_MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
# ![[Target]] or ![[Target|size]]
_EMBED_RE = re.compile(r"!\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")
# http://, https://, mailto: and friends
_URL_SCHEME_RE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.-]*://|mailto:)", re.IGNORECASE)
_INLINE_TAG_RE = re.compile(r"#([A-Za-z0-9_/-]+)")


# ==============================================================================
# FRONT-MATTER
# ==============================================================================


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split YAML front-matter metadata from the note body.

    Args:
        text: Raw markdown text, possibly starting with a ``---`` delimited block.

    Returns:
        ``(metadata, body)``. ``metadata`` is empty when there is no block, in
        which case ``body`` is the whole text.

    Raises:
        NoteParseError: If the block exists but is not valid YAML, or is not a
            mapping.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise NoteParseError(f"Frontmatter contains invalid YAML: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise NoteParseError(f"Unable to parse frontmatter: {exc}") from exc

    metadata = dict(post.metadata or {})

    def _convert(value: Any) -> Any:
        if isinstance(value, Mapping):
            return {k: _convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_convert(item) for item in value]
        return value

    metadata = {str(key): _convert(value) for key, value in metadata.items()}
    content = post.content if post.content is not None else ""
    return metadata, content


def ensure_valid_frontmatter(metadata: Mapping[str, Any]) -> dict[str, Any]:
    """Validate caller-supplied metadata and return a YAML-safe copy.

    Dates stay native YAML timestamps and tuples become lists. Keys must be
    non-empty strings and the serialized block must stay under ``MAX_FRONTMATTER_BYTES``.

    Raises:
        ValueError: If the metadata is not a mapping, contains invalid keys or
            unsupported value types, or is too large.
    """
    if not isinstance(metadata, Mapping):
        raise ValueError("Frontmatter must be a dictionary of key/value pairs.")

    def _sanitize(value: Any, path: str) -> Any:
        if isinstance(value, (str, int, float, bool)) or value is None:
            return value
        if isinstance(value, (datetime, date)):
            return value
        if isinstance(value, (list, tuple)):
            return [_sanitize(item, f"{path}[{index}]") for index, item in enumerate(value)]
        if isinstance(value, Mapping):
            nested: dict[str, Any] = {}
            for sub_key, sub_value in value.items():
                if not isinstance(sub_key, str) or not sub_key.strip():
                    raise ValueError(f"Frontmatter key '{path}.{sub_key}' must be a non-empty string.")
                nested[sub_key] = _sanitize(sub_value, f"{path}.{sub_key}" if path else sub_key)
            return nested
        raise ValueError(f"Frontmatter field '{path}' uses unsupported type '{type(value).__name__}'.")

    sanitized: dict[str, Any] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or not key.strip():
            raise ValueError("Frontmatter keys must be non-empty strings.")
        sanitized[key] = _sanitize(copy.deepcopy(value), key)

    try:
        dumped = yaml.safe_dump(sanitized, sort_keys=False)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter cannot be serialized to YAML: {exc}") from exc

    if len(dumped.encode("utf-8")) > MAX_FRONTMATTER_BYTES:
        raise ValueError(
            f"Frontmatter exceeds maximum size of {MAX_FRONTMATTER_BYTES // 1024}KB."
        )

    return sanitized


def serialize_note(content: str, metadata: Mapping[str, Any] | None) -> str:
    """Render a note for disk: optional front-matter block, then the body.

    An empty or missing ``metadata`` writes the body verbatim, with no block.
    """
    if not metadata:
        return content

    post = frontmatter.Post(content)
    post.metadata.update(ensure_valid_frontmatter(metadata))
    return frontmatter.dumps(post, sort_keys=False)


# ==============================================================================
# REFERENCES AND TAGS
# ==============================================================================


def extract_references(body: str) -> list[str]:
    """Return outgoing references in first-seen order, without duplicates.

    ``[[wiki]]`` links come first (alias dropped). That pass also picks up the
    target of every ``![[embed]]``, so embeds sit among the wiki links. Then
    come ``[label](target)`` links whose target is not a web URL.
    """
    found: list[str] = []

    found.extend(match.group(1) for match in _WIKILINK_RE.finditer(body))
    found.extend(
        match.group(2)
        for match in _MARKDOWN_LINK_RE.finditer(body)
        if not _URL_SCHEME_RE.match(match.group(2))
    )
    found.extend(match.group(1) for match in _EMBED_RE.finditer(body))

    return list(dict.fromkeys(found))


def _frontmatter_tags(metadata: Mapping[str, Any]) -> list[str]:
    raw = metadata.get("tags")
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set)):
        return [str(tag) for tag in raw if tag is not None]
    return [str(raw)]


def extract_tags(body: str, metadata: Mapping[str, Any]) -> list[str]:
    """Union of front-matter ``tags`` and inline ``#tag`` tokens, deduplicated."""
    inline = [match.group(1) for match in _INLINE_TAG_RE.finditer(body)]
    return list(dict.fromkeys(_frontmatter_tags(metadata) + inline))


def count_words(body: str) -> int:
    return len(body.split())


def display_name(relative_path: str) -> str:
    """``folder/My Note.md`` -> ``My Note``."""
    name = PurePosixPath(relative_path).name
    return name[: -len(".md")] if name.endswith(".md") else name


# ==============================================================================
# NOTE CONSTRUCTION
# ==============================================================================


def build_note(relative_path: str, text: str, stat_result: os.stat_result) -> Note:
    """Derive every field of a :class:`Note` from one file read.

    Args:
        relative_path: Vault-relative cache key (``folder/note.md``).
        text: Raw UTF-8 file contents.
        stat_result: ``os.stat`` of the file, read just before ``text``.

    Raises:
        NoteParseError: If the front-matter is malformed.
    """
    metadata, body = parse_frontmatter(text)
    modified = datetime.fromtimestamp(stat_result.st_mtime)
    birthtime = getattr(stat_result, "st_birthtime", None)
    created = datetime.fromtimestamp(birthtime) if birthtime else modified

    return Note(
        path=relative_path,
        name=display_name(relative_path),
        content=body,
        frontmatter=metadata,
        links=extract_references(body),
        tags=extract_tags(body, metadata),
        last_modified=modified,
        created=created,
        word_count=count_words(body),
    )
