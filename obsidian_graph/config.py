"""Configuration loading and vault registry."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from obsidian_graph.constants import ADVANCED_FEATURES_ENV, CONFIG_PATH
from obsidian_graph.data_models import VaultMetadata, VaultConfiguration

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}

_configuration: Optional[VaultConfiguration] = None


def _vault_metadata(name: str, raw_path: str, description: str = "") -> VaultMetadata:
    resolved_path = Path(raw_path).expanduser()
    try:
        resolved_path = resolved_path.resolve(strict=False)
    except RuntimeError:
        # resolve can raise on symlink loops; keep the expanded path
        pass

    return VaultMetadata(
        name=name,
        path=resolved_path,
        description=description,
        exists=resolved_path.is_dir(),
    )


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
            at the repository root, or ``$OBSIDIAN_VAULTS_CONFIG``.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata and the configured default vault name.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        description = (entry.get("description") or "").strip()
        processed[name] = _vault_metadata(name, raw_path, description)

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    return VaultConfiguration(default_vault=default_vault, vaults=processed)


def single_vault_configuration(vault_path: str, name: Optional[str] = None) -> VaultConfiguration:
    """Build a one-vault configuration from a directory given on the command line."""
    metadata = _vault_metadata(name or Path(vault_path).expanduser().name or "vault", vault_path)
    return VaultConfiguration(default_vault=metadata.name, vaults={metadata.name: metadata})


def get_vault_configuration() -> VaultConfiguration:
    """Return the active configuration, loading ``vaults.yaml`` on first use."""
    global _configuration
    if _configuration is None:
        _configuration = load_vault_configuration(CONFIG_PATH)
        logger.info(
            "Loaded %d vault(s) from configuration, default '%s'",
            len(_configuration.vaults),
            _configuration.default_vault,
        )
    return _configuration


def set_vault_configuration(configuration: Optional[VaultConfiguration]) -> None:
    """Install a configuration explicitly (``None`` forces a reload on next use)."""
    global _configuration
    _configuration = configuration


def advanced_features_enabled() -> bool:
    return os.environ.get(ADVANCED_FEATURES_ENV, "").strip().lower() in _TRUTHY
