"""Unit tests for export validation and optimization."""

import logging

import pytest
from pydantic import BaseModel, Field

from builder_export.validation import (
    ValidationReport,
    optimize_export,
    validate_export,
)


class Node(BaseModel):
    id: str
    type: str = Field(min_length=1)
    children: list["Node"] = Field(default_factory=list)


class Document(BaseModel):
    content: list[Node] = Field(default_factory=list)


class TestValidateExport:
    """Tests for validate_export."""

    @pytest.mark.unit
    def test_valid_document(self):
        """A well-formed document has no issues."""
        document = {"content": [{"id": "a", "type": "section", "children": []}]}
        report = validate_export(document, model=Document, content_key="content")
        assert isinstance(report, ValidationReport)
        assert report.is_valid
        assert report.errors == []
        assert not report.has_warnings

    @pytest.mark.unit
    def test_missing_document(self):
        """A None document is an error, not an exception."""
        report = validate_export(None)
        assert not report.is_valid
        assert report.errors[0].issue_type == "missing_document"

    @pytest.mark.unit
    def test_empty_content_warns(self):
        """Empty content is valid but warned about."""
        report = validate_export({"content": []}, content_key="content")
        assert report.is_valid
        assert [w.issue_type for w in report.warnings] == ["empty_content"]

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate node ids anywhere in the tree are errors."""
        document = {
            "content": [
                {"id": "a", "type": "section", "children": [{"id": "a", "type": "w"}]}
            ]
        }
        report = validate_export(document, content_key="content")
        assert not report.is_valid
        assert report.errors[0].issue_type == "duplicate_id"
        assert "'a' appears 2 times" in report.errors[0].message

    @pytest.mark.unit
    def test_settings_ids_ignored(self):
        """Ids inside settings payloads are not node ids."""
        document = {
            "content": [
                {"id": "a", "settings": {"gallery": [{"id": 1}, {"id": 1}]}},
            ]
        }
        assert validate_export(document, content_key="content").is_valid

    @pytest.mark.unit
    def test_beaver_style_node_keys(self):
        """Nodes identified by a 'node' key are checked too."""
        document = {"nodes": [{"node": "n1"}, {"node": "n1"}]}
        report = validate_export(document, content_key="nodes")
        assert not report.is_valid

    @pytest.mark.unit
    def test_schema_errors_become_issues(self):
        """Every model error is reported with its location."""
        document = {"content": [{"id": "a", "type": ""}]}
        report = validate_export(document, model=Document, content_key="content")
        assert not report.is_valid
        assert report.errors[0].issue_type == "schema"
        assert report.errors[0].path == "content.0.type"

    @pytest.mark.unit
    def test_unreferenced_globals_warn(self):
        """Registered ids missing from the content are warnings."""
        document = {"content": [{"id": "a", "settings": {"c": "globals/colors?id=color_3e8"}}]}
        report = validate_export(
            document, content_key="content", registered_ids=["color_3e8", "font_3e9"]
        )
        assert report.is_valid
        assert [w.path for w in report.warnings] == ["font_3e9"]

    @pytest.mark.unit
    def test_failures_logged_at_warning(self, caplog):
        """Failed validation logs at WARNING."""
        with caplog.at_level(logging.WARNING):
            validate_export(None)
        assert any(record.levelno == logging.WARNING for record in caplog.records)


class TestOptimizeExport:
    """Tests for optimize_export."""

    @pytest.mark.unit
    def test_drops_empty_values(self):
        """None, empty strings and empty containers are removed."""
        document = {"a": None, "b": "", "c": {}, "d": [], "e": 0, "f": False, "g": "x"}
        assert optimize_export(document) == {"e": 0, "f": False, "g": "x"}

    @pytest.mark.unit
    def test_bottom_up(self):
        """A container emptied by pruning is removed as well."""
        document = {"settings": {"inner": {"x": None}, "list": [{"y": ""}]}, "keep": 1}
        assert optimize_export(document) == {"keep": 1}

    @pytest.mark.unit
    def test_registries_deduplicated(self):
        """Identical registry entries collapse to the first one."""
        document = {
            "saved_modules": [{"name": "a"}, {"name": "b"}, {"name": "a"}],
            "content": [{"name": "a"}, {"name": "a"}],
        }
        optimized = optimize_export(document)
        assert optimized["saved_modules"] == [{"name": "a"}, {"name": "b"}]
        assert optimized["content"] == [{"name": "a"}, {"name": "a"}]

    @pytest.mark.unit
    def test_idempotent(self):
        """Optimizing twice equals optimizing once."""
        document = {
            "content": [{"id": "1", "settings": {"a": {"b": []}, "c": "d"}}, None],
            "patterns": [{"x": 1, "y": None}, {"x": 1}],
        }
        once = optimize_export(document)
        assert optimize_export(once) == once

    @pytest.mark.unit
    def test_input_not_modified(self):
        """The input document is left untouched."""
        document = {"a": None, "b": {"c": ""}}
        optimize_export(document)
        assert document == {"a": None, "b": {"c": ""}}
