"""Tests for link-network analysis, orphans, statistics and suggestions."""

import os
from datetime import datetime, timedelta

import pytest

from obsidian_graph.core.graph_operations import (
    analyze_link_network,
    find_orphaned_notes,
    get_backlinks,
    get_forward_links,
    suggest_connections,
    vault_statistics,
)
from obsidian_graph.core.vault_index import VaultIndex
from obsidian_graph.errors import NoteNotFoundError

from conftest import write_note


def test_link_network_summary(index):
    analysis = index.analyze_link_network()

    assert analysis.total_links == 3
    assert analysis.broken_links == [
        "projects/Project Alpha.md: Ghost",
        "projects/Project Alpha.md: Roadmap.md",
    ]
    assert analysis.orphaned_notes == ["Lonely.md"]


def test_central_notes_rank_by_degree_then_path(index):
    central = [(entry.note, entry.connections) for entry in index.analyze_link_network().central_notes]
    assert central == [
        ("index.md", 3),
        ("projects/Project Alpha.md", 2),
        ("Ideas.md", 1),
        ("Lonely.md", 0),
    ]


def test_central_notes_capped_at_ten(tmp_path):
    vault = tmp_path / "hub"
    vault.mkdir()
    write_note(vault, "Hub.md", " ".join(f"[[N{i:02d}]]" for i in range(15)))
    for i in range(15):
        write_note(vault, f"N{i:02d}.md", "leaf")

    vault_index = VaultIndex(vault)
    vault_index.initialize()
    central = vault_index.analyze_link_network().central_notes

    assert len(central) == 10
    assert central[0].note == "Hub.md"
    assert central[0].connections == 15
    assert [entry.note for entry in central[1:3]] == ["N00.md", "N01.md"]


def test_tag_clusters(index):
    clusters = index.analyze_link_network().clusters
    assert [(cluster.theme, cluster.notes) for cluster in clusters] == [
        ("project", ["Ideas.md", "projects/Project Alpha.md"]),
    ]


def test_orphan_becomes_connected(index):
    index.create("Linker", "[[Lonely]]")
    assert "Lonely.md" not in index.analyze_link_network().orphaned_notes


def test_statistics_example(tmp_path):
    vault = tmp_path / "stats"
    vault.mkdir()
    a = write_note(vault, "a.md", "#x w2 w3 w4 w5 w6 w7 w8")
    b = write_note(vault, "b.md", "#x #y w3 w4 w5 w6 w7 w8")
    c = write_note(vault, "c.md", "#y w2 w3 w4 w5 w6")
    base = datetime(2025, 1, 1).timestamp()
    for offset, path in enumerate((a, b, c)):
        os.utime(path, (base + offset * 60, base + offset * 60))

    vault_index = VaultIndex(vault)
    vault_index.initialize()
    stats = vault_index.statistics()

    assert stats.total_notes == 3
    assert stats.total_words == 22
    assert stats.average_words_per_note == 7
    assert stats.total_tags == 2
    assert stats.most_used_tags == [("x", 2), ("y", 2)]
    assert [path for path, _ in stats.recent_notes] == ["c.md", "b.md", "a.md"]


def test_statistics_empty_vault(tmp_path):
    vault_index = VaultIndex(tmp_path)
    vault_index.initialize()
    payload = vault_statistics(vault_index)

    assert payload["total_notes"] == 0
    assert payload["average_words_per_note"] == 0
    assert payload["most_used_tags"] == []


# ==============================================================================
# PAYLOAD OPERATIONS
# ==============================================================================


def test_backlinks_payload(index):
    payload = get_backlinks(index, "index")
    assert payload["total_backlinks"] == 1
    (entry,) = payload["backlinks"]
    assert entry["path"] == "projects/Project Alpha.md"
    assert entry["tags"] == ["project"]
    assert "content" not in entry

    with_content = get_backlinks(index, "index", include_content=True)
    assert with_content["backlinks"][0]["content"].startswith("Alpha plan")


def test_forward_links_payload(index):
    payload = get_forward_links(index, "index.md")
    assert payload["total_links"] == 2
    assert [entry["name"] for entry in payload["links"]] == ["Ideas", "Project Alpha"]


def test_analyze_json_payload(index):
    payload = analyze_link_network(index)
    assert payload["total_links"] == 3
    assert payload["clusters"][0]["theme"] == "project"
    assert "diagram" not in payload


def test_analyze_mermaid_export(index):
    payload = analyze_link_network(index, "mermaid")
    diagram = payload["diagram"]

    assert payload["export_format"] == "mermaid"
    assert diagram.startswith("graph TD\n")
    assert '    index_md["index"]' in diagram
    assert "    index_md --> Ideas_md" in diagram
    assert "    projects_Project_Alpha_md --> index_md" in diagram


def test_analyze_graphviz_export(index):
    diagram = analyze_link_network(index, "graphviz")["diagram"]
    assert diagram.startswith("digraph vault {")
    assert "    index_md -> projects_Project_Alpha_md;" in diagram


def test_analyze_unknown_format(index):
    with pytest.raises(ValueError):
        analyze_link_network(index, "dot")


def test_find_orphans_excludes_recent_notes(index):
    payload = find_orphaned_notes(index, include_recent=False, day_threshold=7)
    assert payload["orphaned_notes"] == []

    later = datetime.now() + timedelta(days=30)
    payload = find_orphaned_notes(index, include_recent=False, day_threshold=7, now=later)
    assert payload["orphaned_notes"] == ["Lonely.md"]


def test_find_orphans_default(index):
    payload = find_orphaned_notes(index)
    assert payload == {
        "total_orphaned": 1,
        "orphaned_notes": ["Lonely.md"],
        "include_recent": True,
        "day_threshold": 7,
    }


def test_suggest_connections_by_shared_tags(index):
    payload = suggest_connections(index, "Ideas")
    assert payload["suggestions"] == [
        {
            "note": "projects/Project Alpha.md",
            "reason": "Shares tags: project",
            "score": 0.5,
        }
    ]
    assert suggest_connections(index, "Ideas", threshold=0.6)["suggestions"] == []


def test_suggest_connections_missing_note(index):
    with pytest.raises(NoteNotFoundError):
        suggest_connections(index, "Missing")
