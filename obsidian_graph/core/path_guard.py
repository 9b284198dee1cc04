"""Vault sandbox: validation and resolution of caller-supplied note paths."""

from __future__ import annotations

import os
import re
import stat
from pathlib import Path

from obsidian_graph.errors import (
    AccessDeniedError,
    VaultNotADirectoryError,
    VaultNotAccessibleError,
)

NOTE_SUFFIX = ".md"

_SEGMENT_SPLIT_RE = re.compile(r"[\\/]")


def expand_home(path: str) -> str:
    """Expand a leading ``~`` or ``~/`` to the current user's home directory."""
    if path == "~" or path.startswith("~/"):
        return os.path.expanduser(path)
    return path


def _normalize(path: str) -> str:
    """Lexically normalize a path for containment checks.

    Case is folded only where the platform folds it (``os.path.normcase``).
    """
    return os.path.normcase(os.path.normpath(path))


def ensure_vault_ready(root: Path) -> None:
    """Ensure the vault root is an accessible directory.

    Args:
        root: Absolute path of the vault root.

    Raises:
        VaultNotAccessibleError: If the root does not exist or cannot be stat'ed.
        VaultNotADirectoryError: If the root exists but is not a directory.
    """
    try:
        stat_result = root.stat()
    except OSError as exc:
        raise VaultNotAccessibleError(f"Cannot access vault directory: {root}") from exc

    if not stat.S_ISDIR(stat_result.st_mode):
        raise VaultNotADirectoryError(f"Vault path is not a directory: {root}")


def with_note_suffix(path: str) -> str:
    """Append ``.md`` to a note identifier that does not already carry it."""
    return path if path.endswith(NOTE_SUFFIX) else f"{path}{NOTE_SUFFIX}"


class PathGuard:
    """Resolves user-supplied paths against one vault root.

    This is the only place where untrusted paths are turned into filesystem
    locations; every read and write of a note goes through :meth:`resolve`.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(os.path.abspath(expand_home(str(root))))
        self._allowed = _normalize(str(self.root))

    def _contains(self, candidate: str) -> bool:
        normalized = _normalize(candidate)
        if normalized == self._allowed:
            return True
        prefix = self._allowed if self._allowed.endswith(os.sep) else self._allowed + os.sep
        return normalized.startswith(prefix)

    def resolve(self, requested: str) -> Path:
        """Resolve ``requested`` to an absolute path inside the vault.

        Args:
            requested: Vault-relative (or absolute) path supplied by the caller.
                A leading ``~`` is expanded.

        Returns:
            The absolute, lexically normalized :class:`Path`.

        Raises:
            AccessDeniedError: If any segment of ``requested`` starts with ``.``
                (hidden files, ``.`` and ``..``), or the resolved path lies outside
                the vault root.
        """
        if any(part.startswith(".") for part in _SEGMENT_SPLIT_RE.split(requested)):
            raise AccessDeniedError(
                f"Access denied - hidden files/directories not allowed: {requested}"
            )

        expanded = expand_home(requested)
        if os.path.isabs(expanded):
            absolute = os.path.normpath(expanded)
        else:
            absolute = os.path.normpath(os.path.join(str(self.root), expanded))

        if not self._contains(absolute):
            raise AccessDeniedError(
                f"Access denied - path outside vault: {absolute} not in {self.root}"
            )

        return Path(absolute)

    def resolve_note(self, requested: str) -> tuple[Path, str]:
        """Resolve a note identifier, normalizing the ``.md`` extension.

        Returns:
            ``(absolute_path, relative_key)`` where ``relative_key`` is the
            slash-separated vault-relative path used as the cache key.
        """
        absolute = self.resolve(with_note_suffix(requested.strip()))
        return absolute, self.relative_key(absolute)

    def relative_key(self, absolute: Path | str) -> str:
        """Convert an absolute path inside the vault into its cache key."""
        relative = os.path.relpath(str(absolute), str(self.root))
        return Path(relative).as_posix()
