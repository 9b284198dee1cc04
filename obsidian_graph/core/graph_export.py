"""Text renderings of the central part of a link network."""

from __future__ import annotations

import re
from collections.abc import Mapping

from obsidian_graph.core.note_parser import display_name
from obsidian_graph.data_models import LinkAnalysis

_NODE_ID_RE = re.compile(r"[^a-zA-Z0-9]")


def node_id(path: str) -> str:
    """``Projects/My Note.md`` -> ``Projects_My_Note_md``."""
    return _NODE_ID_RE.sub("_", path)


def _central_edges(analysis: LinkAnalysis, forward_links: Mapping[str, list[str]]) -> list[tuple[str, str]]:
    central = [entry.note for entry in analysis.central_notes]
    members = set(central)
    return [
        (source, target)
        for source in central
        for target in forward_links.get(source, [])
        if target in members
    ]


def to_mermaid(analysis: LinkAnalysis, forward_links: Mapping[str, list[str]]) -> str:
    """Mermaid ``graph TD`` of the central notes and the links between them."""
    lines = ["graph TD"]
    for entry in analysis.central_notes:
        label = display_name(entry.note).replace('"', "'")
        lines.append(f'    {node_id(entry.note)}["{label}"]')
    for source, target in _central_edges(analysis, forward_links):
        lines.append(f"    {node_id(source)} --> {node_id(target)}")
    return "\n".join(lines) + "\n"


def to_graphviz(analysis: LinkAnalysis, forward_links: Mapping[str, list[str]]) -> str:
    """Graphviz ``digraph`` equivalent of :func:`to_mermaid`."""
    lines = ["digraph vault {"]
    for entry in analysis.central_notes:
        label = display_name(entry.note).replace('"', '\\"')
        lines.append(f'    {node_id(entry.note)} [label="{label}"];')
    for source, target in _central_edges(analysis, forward_links):
        lines.append(f"    {node_id(source)} -> {node_id(target)};")
    lines.append("}")
    return "\n".join(lines) + "\n"
