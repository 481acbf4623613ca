"""Unit tests for the Beaver Builder exporter."""

import json

import pytest

from builder_export.exporters import ExportOptions
from builder_export.exporters.beaver import BeaverBuilderExporter, BeaverDocument
from builder_export.ir import count_components, load_component_tree


@pytest.fixture
def exporter():
    """Create a BeaverBuilderExporter instance."""
    return BeaverBuilderExporter()


def _children(nodes: dict, parent: str) -> list[dict]:
    found = [node for node in nodes.values() if node.get("parent") == parent]
    return sorted(found, key=lambda node: node.get("position", 0))


class TestBeaverStructure:
    """Tests for the flat row/column/module node map."""

    @pytest.mark.unit
    def test_exporter_name(self, exporter):
        """Exporter is registered under beaver-builder."""
        assert exporter.name == "beaver-builder"
        assert exporter.content_key == "nodes"

    @pytest.mark.unit
    def test_card_becomes_row(self, exporter, card_tree):
        """Card maps to a row, a column group, one column and three modules."""
        result = exporter.export(card_tree)
        nodes = result.document["nodes"]

        assert list(nodes) == [f"node_{index}" for index in range(1, 7)]
        row = nodes["node_1"]
        assert row["type"] == "row"
        assert "parent" not in row
        [group] = _children(nodes, "node_1")
        assert group["type"] == "column-group"
        [column] = _children(nodes, group["node"])
        assert column["settings"]["size"] == 100

        modules = _children(nodes, column["node"])
        assert [module["settings"]["type"] for module in modules] == [
            "heading",
            "rich-text",
            "button",
        ]
        assert [module.get("position", 0) for module in modules] == [0, 1, 2]
        heading, text, button = (module["settings"] for module in modules)
        assert heading["heading"] == "Card Title"
        assert heading["tag"] == "h3"
        assert text["text"] == "Body copy for the card."
        assert button["link"] == "/x"
        assert button["text"] == "Read more"
        assert button["style"] == "flat"
        BeaverDocument.model_validate(result.document)
        assert result.is_valid

    @pytest.mark.unit
    def test_row_settings(self, exporter, card_tree):
        """Row settings carry width, padding, background and classes."""
        result = exporter.export(card_tree)
        settings = result.document["nodes"]["node_1"]["settings"]

        assert settings["width"] == "fixed"
        assert settings["padding_top"] == "24px"
        assert settings["padding_left"] == "24px"
        assert settings["bg_color"] == "ffffff"
        assert settings["class"] == "card shadow"

    @pytest.mark.unit
    def test_color_presets(self, exporter, card_tree):
        """Every distinct literal color is collected once, without '#'."""
        result = exporter.export(card_tree)
        assert result.document["color_presets"] == ["ffffff", "202124", "1a73e8"]
        assert not any(
            warning.issue_type == "unreferenced_global" for warning in result.report.warnings
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("background", ["rgba(0, 0, 0, 0)", "transparent"])
    def test_transparent_background_ignored(self, exporter, background):
        """Fully transparent backgrounds are neither set nor collected."""
        tree = load_component_tree(
            {
                "componentType": "card",
                "tagName": "div",
                "className": "card",
                "styles": {"backgroundColor": background},
                "children": [{"componentType": "heading", "tagName": "h3", "textContent": "Hi"}],
            }
        )
        result = exporter.export(tree)

        assert "bg_color" not in result.document["nodes"]["node_1"]["settings"]
        assert result.document.get("color_presets", []) == []

    @pytest.mark.unit
    def test_translucent_background_kept(self, exporter):
        """A semi-transparent background keeps its alpha and is not a preset."""
        tree = load_component_tree(
            {
                "componentType": "card",
                "tagName": "div",
                "className": "card",
                "styles": {"backgroundColor": "rgba(0, 0, 0, 0.5)"},
                "children": [{"componentType": "heading", "tagName": "h3", "textContent": "Hi"}],
            }
        )
        result = exporter.export(tree)

        assert result.document["nodes"]["node_1"]["settings"]["bg_color"] == "rgba(0, 0, 0, 0.5)"
        assert result.document.get("color_presets", []) == []

    @pytest.mark.unit
    def test_explicit_columns(self, exporter, landing_tree):
        """Column classes size the columns; nested containers become column groups."""
        result = exporter.export(landing_tree)
        nodes = result.document["nodes"]
        row = nodes[result.node_map["1"]]
        [group] = _children(nodes, row["node"])
        columns = _children(nodes, group["node"])

        assert [column["settings"]["size"] for column in columns] == [66.67, 33.33]
        nested = nodes[result.node_map["1.0.1"]]
        assert nested["type"] == "column-group"
        assert nested["parent"] == columns[0]["node"]
        assert nested["position"] == 1

    @pytest.mark.unit
    def test_node_map_complete(self, exporter, landing_tree):
        """Every source node maps to an existing node id."""
        result = exporter.export(landing_tree)
        nodes = result.document["nodes"]

        assert len(result.node_map) == count_components(landing_tree)
        assert all(node_id in nodes for node_id in result.node_map.values())

    @pytest.mark.unit
    def test_bare_leaf_is_wrapped(self, exporter):
        """A top-level leaf gets a synthesized row, group and column."""
        tree = load_component_tree({"componentType": "heading", "tagName": "h2", "textContent": "Hi"})
        result = exporter.export(tree)
        types = [node["type"] for node in result.document["nodes"].values()]

        assert types == ["row", "column-group", "column", "module"]
        assert result.node_map == {"0": "node_4"}

    @pytest.mark.unit
    def test_unknown_leaf_is_rich_text(self, exporter):
        """Untyped leaves fall back to a rich-text module."""
        tree = load_component_tree({"tagName": "span", "textContent": "Loose"})
        result = exporter.export(tree)
        module = result.document["nodes"]["node_4"]
        assert module["settings"]["type"] == "rich-text"
        assert module["settings"]["text"] == "Loose"


class TestBeaverSettings:
    """Tests for behavior and token settings."""

    @pytest.mark.unit
    def test_hero_behavior(self, exporter, landing_tree):
        """Visibility, animation, parallax and shadow reach the row."""
        result = exporter.export(landing_tree)
        settings = result.document["nodes"]["node_1"]["settings"]

        assert settings["id"] == "hero"
        assert settings["responsive_display"] == "desktop,medium"
        assert settings["animation"] == "fade-in"
        assert settings["animation_duration"] == 0.8
        assert settings["animation_delay"] == 0.2
        assert settings["padding_responsive"] == "20px 10px"
        assert settings["bg_color"] == "1a73e8"
        assert settings["bg_type"] == "parallax"
        assert settings["box_shadow"]["blur"] == 12

    @pytest.mark.unit
    def test_hover_settings(self, exporter, landing_tree):
        """Hover state becomes hover color and transform settings."""
        result = exporter.export(landing_tree)
        button = result.document["nodes"]["node_5"]["settings"]

        assert button["type"] == "button"
        assert button["bg_hover_color"] == "c5221f"
        assert button["transform_hover"] == "scale(1.05)"

    @pytest.mark.unit
    def test_palette_presets(self, exporter, card_tree, color_palette):
        """Palette matches are linked through color presets."""
        result = exporter.export(card_tree, ExportOptions(palette=color_palette))
        nodes = result.document["nodes"]

        assert nodes["node_1"]["settings"]["bg_color_preset"] == "neutral-1"
        assert nodes["node_6"]["settings"]["bg_color_preset"] == "primary-1"
        scheme = result.document["color_scheme"]
        assert scheme["primary"] == ["#1a73e8"]
        assert scheme["neutral"] == ["#ffffff", "#202124"]
        assert scheme["semantic"] == {"success": "#34a853"}

    @pytest.mark.unit
    def test_dynamic_connection(self, exporter):
        """Template tags become field connections."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "{{ post_title }}"}
        )
        result = exporter.export(tree)
        settings = result.document["nodes"]["node_4"]["settings"]
        assert settings["connections"] == {"heading": {"object": "post", "property": "post_title"}}


class TestBeaverWidgets:
    """Tests for specialized modules."""

    @pytest.mark.unit
    def test_icon(self, exporter, landing_tree):
        """A standalone icon becomes an icon module."""
        result = exporter.export(landing_tree)
        icon = result.document["nodes"][result.node_map["2"]]["settings"]

        assert icon["type"] == "icon"
        assert icon["icon"] == "fas fa-star"
        assert icon["color"] == "fbbc05"

    @pytest.mark.unit
    def test_gallery(self, exporter, gallery_tree):
        """Five images become one gallery module."""
        result = exporter.export(gallery_tree)
        gallery = result.document["nodes"]["node_4"]["settings"]

        assert gallery["type"] == "gallery"
        assert len(gallery["photos"]) == 5
        assert gallery["columns"] == 3
        assert gallery["click_action"] == "lightbox"
        assert set(result.node_map.values()) == {"node_4"}


class TestBeaverExtras:
    """Tests for saved modules, templates and global settings."""

    @pytest.mark.unit
    def test_saved_modules_from_repeats(self, exporter, landing_tree):
        """Module types used twice are saved."""
        result = exporter.export(landing_tree)
        [saved] = result.document["saved_modules"]

        assert saved["name"] == "Saved rich-text"
        assert saved["type"] == "rich-text"
        assert saved["settings"]["text"] == "Left"

    @pytest.mark.unit
    def test_converted_template(self, exporter, card_tree):
        """Without a library the layout is stored as one template."""
        result = exporter.export(card_tree)
        [template] = result.document["templates"]

        assert template["name"] == "Converted Template"
        assert template["category"] == "Converted"
        assert "node_1" in json.loads(template["content"])

    @pytest.mark.unit
    def test_library_promotion(self, exporter, card_tree, component_library):
        """Library scores decide saved modules, global flags and templates."""
        result = exporter.export(card_tree, ExportOptions(library=component_library))
        document = result.document

        saved = document["saved_modules"]
        assert [module["name"] for module in saved] == ["Hero Banner", "Feature Card"]
        assert saved[0]["global"] is True
        assert saved[1]["global"] is False
        assert [template["id"] for template in document["templates"]] == [1, 2]
        assert document["templates"][0]["category"] == "Heroes"

    @pytest.mark.unit
    def test_template_parts(self, exporter, card_tree, template_parts):
        """Confident header and footer become fixed-id templates."""
        result = exporter.export(card_tree, ExportOptions(template_parts=template_parts))
        document = result.document

        assert document["header"]["id"] == 9999
        assert document["header"]["category"] == "Header"
        assert document["footer"]["id"] == 9998
        assert "sidebar" not in document

    @pytest.mark.unit
    def test_typography(self, exporter, card_tree, typography_system):
        """Typography follows the theme settings keys."""
        result = exporter.export(card_tree, ExportOptions(typography=typography_system))
        typography = result.document["typography"]

        assert typography["body_font_family"] == "Georgia"
        assert typography["heading_font_family"] == "Inter"
        assert typography["body_font_size"] == "16px"
        assert typography["h1_font_size"] == "48px"
        assert typography["h2_line_height"] == "1.3"
        assert "h3_font_size" not in typography

    @pytest.mark.unit
    def test_native_is_node_json(self, exporter, card_tree):
        """Native output is the node map as JSON."""
        result = exporter.export(card_tree)
        nodes = json.loads(exporter.serialize(result, "native"))
        assert list(nodes) == list(result.document["nodes"])

    @pytest.mark.unit
    def test_repeat_export_identical(self, exporter, landing_tree):
        """Two exports on one instance produce the same document."""
        first = exporter.export(landing_tree)
        second = exporter.export(landing_tree)
        assert first.document == second.document
