"""Filesystem watcher feeding vault changes into a :class:`VaultIndex`."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Callable, Optional

from watchdog.events import (
    FileSystemEvent,
    FileSystemEventHandler,
    FileSystemMovedEvent,
)
from watchdog.observers import Observer

from obsidian_graph.core.path_guard import NOTE_SUFFIX

if TYPE_CHECKING:
    from obsidian_graph.core.vault_index import VaultIndex

logger = logging.getLogger(__name__)


class VaultEventHandler(FileSystemEventHandler):
    """Translates watchdog events into ``add``/``change``/``delete`` calls.

    Only ``.md`` files under the vault root are considered, and any path with a
    dot-prefixed segment (``.obsidian/``, ``.trash/``, dotfiles) is ignored.
    Directory deletions and moves trigger a full rescan because the platform
    does not always report the files they contained.
    """

    def __init__(self, index: VaultIndex) -> None:
        super().__init__()
        self.index = index

    def _relative(self, path: str | bytes) -> Optional[str]:
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        relative = os.path.relpath(path, str(self.index.root))
        parts = relative.replace(os.sep, "/").split("/")
        if parts[0] == ".." or any(part.startswith(".") for part in parts):
            return None
        return "/".join(parts)

    def _note_path(self, path: str | bytes) -> Optional[str]:
        relative = self._relative(path)
        if relative is None or not relative.endswith(NOTE_SUFFIX):
            return None
        return relative

    def _dispatch_file(self, kind: str, path: str | bytes) -> None:
        relative = self._note_path(path)
        if relative is None:
            return
        logger.debug("Vault event %s: %s", kind, relative)
        self.index.apply_file_event(kind, relative)

    def _rescan(self, reason: str) -> None:
        logger.info("Rescanning vault %s after %s", self.index.root, reason)
        try:
            self.index.rescan()
        except Exception as exc:
            logger.warning("Vault rescan after %s failed: %s", reason, exc)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._dispatch_file("add", event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._dispatch_file("change", event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            if self._relative(event.src_path) is not None:
                self._rescan("directory deletion")
            return
        self._dispatch_file("delete", event.src_path)

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        if event.is_directory:
            if self._relative(event.src_path) is not None or self._relative(event.dest_path) is not None:
                self._rescan("directory move")
            return
        self._dispatch_file("delete", event.src_path)
        self._dispatch_file("add", event.dest_path)


class VaultWatcher:
    """Owns the watchdog observer for one vault index.

    No events are emitted for files that already exist when watching starts;
    the index's initial scan covers those.

    Args:
        index: The index to keep up to date.
        observer_factory: Callable returning a watchdog observer. Tests pass a
            polling observer or a stub.
    """

    def __init__(self, index: VaultIndex, observer_factory: Callable[[], Observer] = Observer) -> None:
        self.index = index
        self.handler = VaultEventHandler(index)
        self._observer_factory = observer_factory
        self._observer: Optional[Observer] = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        if self._observer is not None:
            return
        observer = self._observer_factory()
        observer.schedule(self.handler, str(self.index.root), recursive=True)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("Watching vault %s for changes", self.index.root)

    def stop(self) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join()
        logger.info("Stopped watching vault %s", self.index.root)
