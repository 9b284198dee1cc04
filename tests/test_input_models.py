"""Tests for Pydantic input models.

This test suite validates the input validation logic for MCP tools,
ensuring that:
- Valid inputs are accepted and normalized correctly
- Invalid inputs raise ValidationError with descriptive messages
- Schema generation produces JSON schemas for MCP
"""

import pytest
from pydantic import ValidationError

from obsidian_graph.models import (
    AnalyzeLinkNetworkInput,
    BaseNoteInput,
    CreateNoteInput,
    DeleteNoteInput,
    FindOrphanedNotesInput,
    ReadNotesInput,
    SearchVaultInput,
    SetActiveVaultInput,
    SuggestConnectionsInput,
    UpdateNoteInput,
)


class TestBaseNoteInput:
    """Test suite for BaseNoteInput model validation."""

    def test_valid_nested_path(self):
        model = BaseNoteInput(path="Daily Notes/2025-10-27")
        assert model.path == "Daily Notes/2025-10-27"
        assert model.vault is None

    def test_path_keeps_extension(self):
        """The .md suffix is normalized by the path guard, not the model."""
        assert BaseNoteInput(path="Note.md").path == "Note.md"

    def test_path_is_stripped(self):
        assert BaseNoteInput(path="  Note  ").path == "Note"

    def test_blank_path_rejected(self):
        with pytest.raises(ValidationError):
            BaseNoteInput(path="   ")

    def test_missing_path_rejected(self):
        with pytest.raises(ValidationError):
            BaseNoteInput()

    def test_vault_name_stripped(self):
        assert BaseNoteInput(path="a", vault=" work ").vault == "work"

    def test_blank_vault_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            BaseNoteInput(path="a", vault="  ")
        assert "Vault name cannot be empty" in str(exc_info.value)


class TestNoteModels:
    def test_create_with_frontmatter(self):
        model = CreateNoteInput(path="a", content="", frontmatter={"tags": ["x"]})
        assert model.frontmatter == {"tags": ["x"]}

    def test_create_requires_content(self):
        with pytest.raises(ValidationError):
            CreateNoteInput(path="a")

    def test_update_defaults(self):
        model = UpdateNoteInput(path="a")
        assert model.operation == "replace"
        assert model.content is None
        assert model.frontmatter is None

    def test_update_rejects_unknown_operation(self):
        with pytest.raises(ValidationError):
            UpdateNoteInput(path="a", content="x", operation="merge")

    def test_delete_defaults_to_unconfirmed(self):
        assert DeleteNoteInput(path="a").confirm is False

    def test_read_notes_drops_blank_paths(self):
        assert ReadNotesInput(paths=["a", " ", "b "]).paths == ["a", "b"]

    def test_read_notes_requires_a_path(self):
        with pytest.raises(ValidationError):
            ReadNotesInput(paths=["  "])


class TestSearchAndGraphModels:
    def test_search_defaults(self):
        model = SearchVaultInput(query=" alpha ")
        assert model.query == "alpha"
        assert model.limit == 10
        assert model.include_content is False
        assert model.tags is None

    def test_search_rejects_blank_query(self):
        with pytest.raises(ValidationError):
            SearchVaultInput(query="   ")

    def test_search_limit_bounds(self):
        with pytest.raises(ValidationError):
            SearchVaultInput(query="a", limit=0)

    def test_export_format_literal(self):
        assert AnalyzeLinkNetworkInput().export_format == "json"
        assert AnalyzeLinkNetworkInput(export_format="graphviz").export_format == "graphviz"
        with pytest.raises(ValidationError):
            AnalyzeLinkNetworkInput(export_format="svg")

    def test_orphan_defaults(self):
        model = FindOrphanedNotesInput()
        assert model.include_recent is True
        assert model.day_threshold == 7

    def test_suggest_threshold_range(self):
        with pytest.raises(ValidationError):
            SuggestConnectionsInput(path="a", threshold=1.5)

    def test_set_active_vault_strips(self):
        assert SetActiveVaultInput(vault=" work ").vault == "work"


def test_json_schema_exposes_descriptions():
    schema = SearchVaultInput.model_json_schema()
    assert "query" in schema["required"]
    assert "description" in schema["properties"]["tags"]
