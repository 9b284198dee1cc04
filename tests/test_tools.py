"""End-to-end checks of the FastMCP tool functions against a real vault."""

import asyncio

import pytest

from obsidian_graph.config import set_vault_configuration, single_vault_configuration
from obsidian_graph.models import (
    AnalyzeLinkNetworkInput,
    CreateNoteInput,
    DeleteNoteInput,
    ListVaultsInput,
    ReadNoteInput,
    SearchVaultInput,
    VaultStatisticsInput,
)
from obsidian_graph.registry import close_vault_indexes, get_vault_index
from obsidian_graph.tools.graph_tools import analyze_obsidian_link_network, get_obsidian_vault_statistics
from obsidian_graph.tools.note_tools import create_obsidian_note, delete_obsidian_note, read_obsidian_note
from obsidian_graph.tools.resources import note_resource
from obsidian_graph.tools.search_tools import search_obsidian_vault
from obsidian_graph.tools.vault_tools import list_vaults
from obsidian_graph.errors import NoteNotFoundError
from obsidian_graph.session import resolve_vault


@pytest.fixture
def served_vault(sample_vault):
    set_vault_configuration(single_vault_configuration(str(sample_vault), name="sample"))
    yield sample_vault
    close_vault_indexes()
    set_vault_configuration(None)


def run(coro):
    return asyncio.run(coro)


def test_list_vaults(served_vault):
    payload = run(list_vaults(ListVaultsInput()))
    assert payload["default"] == "sample"
    assert payload["active"] is None
    assert payload["vaults"][0]["exists"] is True


def test_registry_reuses_one_index(served_vault):
    metadata = resolve_vault(None)
    assert get_vault_index(metadata) is get_vault_index(metadata)


def test_create_read_delete_cycle(served_vault):
    created = run(create_obsidian_note(CreateNoteInput(path="Tooling", content="Uses [[index]]")))
    assert created["success"] is True

    read = run(read_obsidian_note(ReadNoteInput(path="Tooling.md")))
    assert read["content"] == "Uses [[index]]"

    deleted = run(delete_obsidian_note(DeleteNoteInput(path="Tooling", confirm=True)))
    assert deleted["success"] is True

    with pytest.raises(NoteNotFoundError):
        run(read_obsidian_note(ReadNoteInput(path="Tooling")))


def test_search_and_analysis_tools(served_vault):
    search = run(search_obsidian_vault(SearchVaultInput(query="alpha")))
    assert search["results"][0]["path"] == "projects/Project Alpha.md"

    analysis = run(analyze_obsidian_link_network(AnalyzeLinkNetworkInput(export_format="mermaid")))
    assert analysis["orphaned_notes"] == ["Lonely.md"]
    assert analysis["diagram"].startswith("graph TD")

    stats = run(get_obsidian_vault_statistics(VaultStatisticsInput()))
    assert stats["total_notes"] == 4


def test_note_resource_decodes_path(served_vault):
    assert note_resource("projects%2FProject%20Alpha.md").startswith("Alpha plan")


def test_search_tool_tag_filter_ignores_case(served_vault):
    payload = run(search_obsidian_vault(SearchVaultInput(query="ideas", tags=["#BRAINSTORM"])))
    assert [result["path"] for result in payload["results"]] == ["Ideas.md"]
