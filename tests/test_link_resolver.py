"""Tests for reference resolution tiers."""

from obsidian_graph.core.link_resolver import LinkResolver, clean_reference, resolve_link
from obsidian_graph.data_models import Note


def _note(path):
    name = path.rsplit("/", 1)[-1][:-3]
    return Note(path=path, name=name, content="")


def _notes(*paths):
    return {path: _note(path) for path in paths}


def test_clean_reference_strips_md_suffix():
    assert clean_reference(" Note.md ") == "Note"
    assert clean_reference("Note") == "Note"


def test_exact_match_on_display_name():
    notes = _notes("a/Project.md", "Project Plan.md")
    assert resolve_link("Project", notes).path == "a/Project.md"


def test_exact_match_on_path_with_or_without_extension():
    notes = _notes("a/Project.md", "b/Project.md")
    assert resolve_link("b/Project.md", notes).path == "b/Project.md"
    assert resolve_link("b/Project", notes).path == "b/Project.md"


def test_partial_match_is_case_insensitive_and_lexicographic():
    notes = _notes("z/Weekly Review.md", "a/Review Checklist.md")
    assert resolve_link("review", notes).path == "a/Review Checklist.md"


def test_exact_match_beats_partial():
    notes = _notes("a/Alpha Team.md", "z/Alpha.md")
    assert resolve_link("Alpha", notes).path == "z/Alpha.md"


def test_unresolved_reference_returns_none():
    notes = _notes("a/Alpha.md")
    assert resolve_link("Ghost", notes) is None
    assert resolve_link("", notes) is None


def test_resolver_is_a_snapshot():
    notes = _notes("a/Alpha.md")
    resolver = LinkResolver(notes)
    notes["b/Beta.md"] = _note("b/Beta.md")
    assert resolver.resolve("Beta") is None
