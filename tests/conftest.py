"""Shared fixtures: a small sample vault and an initialized index over it."""

import pytest

from obsidian_graph.core.vault_index import VaultIndex


def write_note(root, relative_path, text):
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def sample_vault(tmp_path):
    """Create a vault with linked, broken, tagged and orphaned notes.

    Link structure:
        index.md -> projects/Project Alpha.md, Ideas.md
        projects/Project Alpha.md -> index.md (+ broken: Ghost, Roadmap.md)
        Lonely.md has no links in or out.
    """
    vault_path = tmp_path / "vault"
    vault_path.mkdir()

    write_note(vault_path, "index.md", """# Home

See [[Project Alpha]] and [[Ideas|my ideas]].
#hub
""")

    write_note(vault_path, "projects/Project Alpha.md", """---
title: Alpha Launch
tags: [project]
---
Alpha plan links back to [[index]] and [roadmap](Roadmap.md). Missing [[Ghost]].
""")

    write_note(vault_path, "Ideas.md", "Random ideas #project #brainstorm\n")
    write_note(vault_path, "Lonely.md", "Nobody links here.\n")

    # Ignored by the scan
    write_note(vault_path, ".obsidian/workspace.md", "[[index]]\n")
    write_note(vault_path, "attachments/readme.txt", "not a note")

    return vault_path


@pytest.fixture
def index(sample_vault):
    vault_index = VaultIndex(sample_vault)
    vault_index.initialize()
    yield vault_index
    vault_index.dispose()
