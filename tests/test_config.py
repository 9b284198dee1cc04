"""Tests for configuration loading and session vault resolution."""

from types import SimpleNamespace

import pytest

from obsidian_graph import config, session
from obsidian_graph.config import (
    advanced_features_enabled,
    get_vault_configuration,
    load_vault_configuration,
    set_vault_configuration,
    single_vault_configuration,
)


@pytest.fixture
def config_file(tmp_path):
    (tmp_path / "personal").mkdir()
    path = tmp_path / "vaults.yaml"
    path.write_text(
        f"""
default: personal
vaults:
  personal:
    path: {tmp_path / "personal"}
    description: "  Personal notes  "
  work:
    path: {tmp_path / "work"}
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def reset_configuration():
    yield
    set_vault_configuration(None)
    session._ACTIVE_VAULTS.clear()


def test_load_configuration(config_file, tmp_path):
    configuration = load_vault_configuration(config_file)

    assert configuration.default_vault == "personal"
    personal = configuration.get("personal")
    assert personal.description == "Personal notes"
    assert personal.exists is True
    assert configuration.get("work").exists is False


def test_missing_configuration_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_vault_configuration(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "body",
    [
        "vaults: {}\ndefault: a\n",
        "vaults:\n  a: not-a-mapping\ndefault: a\n",
        "vaults:\n  a:\n    description: no path\ndefault: a\n",
        "vaults:\n  a:\n    path: /tmp\ndefault: b\n",
    ],
)
def test_malformed_configuration(tmp_path, body):
    path = tmp_path / "vaults.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_vault_configuration(path)


def test_unknown_vault_raises(config_file):
    with pytest.raises(ValueError):
        load_vault_configuration(config_file).get("missing")


def test_single_vault_configuration(tmp_path):
    vault = tmp_path / "MyVault"
    vault.mkdir()
    configuration = single_vault_configuration(str(vault))

    assert configuration.default_vault == "MyVault"
    assert configuration.get("MyVault").path == vault.resolve()


def test_configuration_is_loaded_lazily(config_file, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_PATH", config_file)
    set_vault_configuration(None)

    assert get_vault_configuration().default_vault == "personal"


def test_advanced_features_flag(monkeypatch):
    monkeypatch.delenv("OBSIDIAN_ENABLE_ADVANCED_FEATURES", raising=False)
    assert advanced_features_enabled() is False
    monkeypatch.setenv("OBSIDIAN_ENABLE_ADVANCED_FEATURES", "TRUE")
    assert advanced_features_enabled() is True


def test_session_active_vault(config_file):
    set_vault_configuration(load_vault_configuration(config_file))
    ctx = SimpleNamespace(session=object())
    other = SimpleNamespace(session=object())

    assert session.resolve_vault(None, ctx).name == "personal"
    session.set_active_vault(ctx, "work")

    assert session.resolve_vault(None, ctx).name == "work"
    assert session.resolve_vault(None, other).name == "personal"
    assert session.resolve_vault("personal", ctx).name == "personal"
    assert session.resolve_vault(None).name == "personal"

    with pytest.raises(ValueError):
        session.set_active_vault(ctx, "missing")
