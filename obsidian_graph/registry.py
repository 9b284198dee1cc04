"""One live :class:`VaultIndex` per configured vault."""

from __future__ import annotations

import logging
import threading

from obsidian_graph.core.vault_index import VaultIndex
from obsidian_graph.data_models import VaultMetadata

logger = logging.getLogger(__name__)

_INDEXES: dict[str, VaultIndex] = {}
_LOCK = threading.Lock()


def get_vault_index(vault: VaultMetadata, watch: bool = True) -> VaultIndex:
    """Return the index for ``vault``, scanning it (and starting its watcher) on first use.

    Raises:
        VaultNotAccessibleError: If the vault directory is missing.
        VaultNotADirectoryError: If the vault path is not a directory.
    """
    key = str(vault.path)
    with _LOCK:
        index = _INDEXES.get(key)
        if index is None:
            index = VaultIndex(vault.path)
            index.initialize()
            if watch:
                index.start_watching()
            _INDEXES[key] = index
            logger.info("Vault '%s' ready (%d notes)", vault.name, len(index))
    return index


def close_vault_indexes() -> None:
    """Dispose every index and release its watcher."""
    with _LOCK:
        indexes = list(_INDEXES.values())
        _INDEXES.clear()
    for index in indexes:
        index.dispose()
