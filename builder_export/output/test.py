"""Tests for output module."""

import pytest

from builder_export.exporters import get_exporter
from builder_export.ir import load_component_tree
from builder_export.output import format_component_tree, format_export_summary


class TestFormatComponentTree:
    """Tests for format_component_tree function."""

    @pytest.mark.unit
    def test_single_node(self):
        """Test formatting single node."""
        tree = load_component_tree({"componentType": "heading", "tagName": "h2", "textContent": "Hi"})
        assert format_component_tree(tree) == 'h2 [heading] "Hi"'

    @pytest.mark.unit
    def test_nested_tree(self, card_tree):
        """Test formatting nested tree with connectors."""
        lines = format_component_tree(card_tree).splitlines()

        assert lines[0] == "div.card.shadow [card]"
        assert lines[1].startswith("├── h3 [heading]")
        assert lines[3].startswith("└── a.btn.btn-primary [button]")

    @pytest.mark.unit
    def test_column_width_marker(self, landing_tree):
        """Test column spans are shown as percentages."""
        result = format_component_tree(landing_tree)
        assert "div.col-8 [column, 67%]" in result
        assert "div.col-4 [column, 33%]" in result

    @pytest.mark.unit
    def test_forest_roots_unindented(self, landing_tree):
        """Test every root starts at column zero."""
        roots = [line for line in format_component_tree(landing_tree).splitlines() if line[0] not in "├└│ "]
        assert len(roots) == 3


class TestFormatExportSummary:
    """Tests for format_export_summary function."""

    @pytest.mark.unit
    def test_summary_lines(self, card_tree):
        """Test summary reports target, coverage and validation."""
        exporter = get_exporter("elementor")
        result = exporter.export(card_tree)
        summary = format_export_summary(result, card_tree).splitlines()

        assert summary[0] == "Target: elementor"
        assert summary[1] == "Nodes mapped: 4/4"
        assert summary[2].startswith("Validation: passed")
