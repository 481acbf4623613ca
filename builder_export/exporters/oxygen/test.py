"""Unit tests for the Oxygen exporter."""

import pytest

from builder_export.exporters import ExportOptions
from builder_export.exporters.oxygen import OxygenDocument, OxygenExporter, tree_to_shortcodes
from builder_export.ir import count_components, load_component_tree


@pytest.fixture
def exporter():
    """Create an OxygenExporter instance."""
    return OxygenExporter()


def _walk(nodes):
    for node in nodes:
        yield node
        yield from _walk(node.get("children", []))


class TestOxygenStructure:
    """Tests for the section/column/element tree."""

    @pytest.mark.unit
    def test_exporter_name(self, exporter):
        """Exporter is registered under oxygen."""
        assert exporter.name == "oxygen"
        assert exporter.content_key == "tree"

    @pytest.mark.unit
    def test_card_becomes_section(self, exporter, card_tree):
        """Card maps to a section with one column of three elements."""
        result = exporter.export(card_tree)
        [section] = result.document["tree"]

        assert section["name"] == "ct_section"
        assert section["id"] == 1
        [column] = section["children"]
        assert column["name"] == "ct_div_block"
        assert column["options"]["width"] == "100"
        assert [node["name"] for node in column["children"]] == [
            "ct_headline",
            "ct_text_block",
            "oxy_button",
        ]
        heading, text, button = column["children"]
        assert heading["options"]["tag"] == "h3"
        assert heading["options"]["ct_content"] == "Card Title"
        assert text["options"]["ct_content"] == "Body copy for the card."
        assert button["options"]["button_link"] == "/x"
        assert button["options"]["button_text"] == "Read more"
        OxygenDocument.model_validate(result.document)
        assert result.is_valid

    @pytest.mark.unit
    def test_parent_links(self, exporter, card_tree):
        """ct_parent points at the enclosing component."""
        result = exporter.export(card_tree)
        section = result.document["tree"][0]
        column = section["children"][0]

        assert section["options"]["ct_id"] == 1
        assert column["options"]["ct_parent"] == 1
        assert all(node["options"]["ct_parent"] == column["id"] for node in column["children"])

    @pytest.mark.unit
    def test_style_options(self, exporter, card_tree):
        """Styles become flat kebab-case options."""
        result = exporter.export(card_tree)
        section = result.document["tree"][0]
        options = section["options"]

        assert options["padding-top"] == "24px"
        assert options["padding-left"] == "24px"
        assert options["background-color"] == "#ffffff"
        assert options["classes"] == ["card", "shadow"]
        heading = section["children"][0]["children"][0]
        assert heading["options"]["font-size"] == "24px"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "background,expected",
        [("rgba(0, 0, 0, 0)", None), ("transparent", None), ("rgba(0, 0, 0, 0.5)", "rgba(0, 0, 0, 0.5)")],
    )
    def test_transparent_background_dropped(self, exporter, background, expected):
        """Fully transparent backgrounds are omitted; translucent ones are kept."""
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
        assert result.document["tree"][0]["options"].get("background-color") == expected

    @pytest.mark.unit
    def test_explicit_columns(self, exporter, landing_tree):
        """Column classes size the div blocks."""
        result = exporter.export(landing_tree)
        row = result.document["tree"][1]

        assert row["name"] == "ct_section"
        widths = [column["options"]["width"] for column in row["children"]]
        assert widths == ["66.67", "33.33"]
        assert row["children"][0]["options"]["width-unit"] == "%"
        nested = row["children"][0]["children"][1]
        assert nested["name"] == "ct_div_block"
        assert nested["children"][0]["name"] == "ct_text_block"

    @pytest.mark.unit
    def test_node_map_complete(self, exporter, landing_tree):
        """Every source node maps to a component id."""
        result = exporter.export(landing_tree)
        ids = {str(node["id"]) for node in _walk(result.document["tree"])}

        assert len(result.node_map) == count_components(landing_tree)
        assert set(result.node_map.values()) <= ids

    @pytest.mark.unit
    def test_ids_unique(self, exporter, landing_tree):
        """Component ids are unique across the tree."""
        result = exporter.export(landing_tree)
        ids = [node["id"] for node in _walk(result.document["tree"])]
        assert len(ids) == len(set(ids))


class TestOxygenOptions:
    """Tests for behavior and token options."""

    @pytest.mark.unit
    def test_hero_behavior(self, exporter, landing_tree):
        """Visibility, animation and shadow reach the section options."""
        result = exporter.export(landing_tree)
        options = result.document["tree"][0]["options"]

        assert options["selector"] == "hero"
        assert options["hide-mobile"] == "true"
        assert options["animation-name"] == "fade-in"
        assert options["animation-duration"] == "800ms"
        assert options["animation-delay"] == "200ms"
        assert options["box-shadow-blur"] == 12
        assert options["padding-mobile"] == "20px 10px"

    @pytest.mark.unit
    def test_hover_options(self, exporter, landing_tree):
        """Hover state becomes -hover options."""
        result = exporter.export(landing_tree)
        hero = result.document["tree"][0]
        button = hero["children"][0]["children"][1]
        options = button["options"]

        assert button["name"] == "oxy_button"
        assert options["background-color-hover"] == "#c5221f"
        assert options["transform-hover"] == "scale(1.05)"

    @pytest.mark.unit
    def test_palette_color_classes(self, exporter, card_tree, color_palette):
        """Palette colors replace literals with color classes."""
        result = exporter.export(card_tree, ExportOptions(palette=color_palette))
        document = result.document
        column = document["tree"][0]["children"][0]
        button = column["children"][2]["options"]

        assert button["background-color-class"] == "color-primary-1"
        assert "background-color" not in button
        classes = document["color_classes"]
        assert classes[0] == {"className": "color-primary-1", "color": "#1a73e8", "name": "Brand Blue"}
        assert classes[-1]["className"] == "color-success"

    @pytest.mark.unit
    def test_class_registry(self, exporter, card_tree):
        """Styled class names are registered once."""
        result = exporter.export(card_tree)
        keys = [entry["key"] for entry in result.document["classes"]]

        assert keys[:2] == ["card", "shadow"]
        assert len(keys) == len(set(keys))
        assert result.document["classes"][0]["original"]["padding-top"] == "24px"

    @pytest.mark.unit
    def test_dynamic_content(self, exporter):
        """Template tags become Oxygen dynamic data."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "{{ post_title }}"}
        )
        result = exporter.export(tree)
        headline = result.document["tree"][0]["children"][0]["children"][0]
        assert headline["options"]["ct_content"] == '[oxygen data="meta" key="post_title"]'


class TestOxygenWidgets:
    """Tests for specialized components."""

    @pytest.mark.unit
    def test_icon(self, exporter, landing_tree):
        """A standalone icon becomes a fancy icon inside a section."""
        result = exporter.export(landing_tree)
        icon = result.document["tree"][2]["children"][0]["children"][0]

        assert icon["name"] == "ct_fancy_icon"
        assert icon["options"]["icon_class"] == "fas fa-star"
        assert icon["options"]["icon-id"] == "FontAwesomeicon-star"

    @pytest.mark.unit
    def test_gallery(self, exporter, gallery_tree):
        """Five images become one oxy-gallery component."""
        result = exporter.export(gallery_tree)
        gallery = result.document["tree"][0]["children"][0]["children"][0]

        assert gallery["name"] == "oxy-gallery"
        assert len(gallery["options"]["images"]) == 5
        assert gallery["options"]["columns"] == 3
        assert len(result.node_map) == 6
        assert set(result.node_map.values()) == {str(gallery["id"])}


class TestOxygenExtras:
    """Tests for reusable blocks, templates, typography and shortcodes."""

    @pytest.mark.unit
    def test_reusable_blocks(self, exporter):
        """Repeated top-level components become reusable blocks with fresh ids."""
        tree = load_component_tree(
            [
                {"componentType": "card", "tagName": "div", "children": [{"tagName": "p", "textContent": "A"}]},
                {"componentType": "card", "tagName": "div", "children": [{"tagName": "p", "textContent": "B"}]},
            ]
        )
        result = exporter.export(tree)
        [block] = result.document["reusable_blocks"]
        tree_ids = {node["id"] for node in _walk(result.document["tree"])}

        assert block["name"] == "Reusable card:div"
        assert block["content"][0]["name"] == "ct_section"
        assert block["content"][0]["id"] not in tree_ids

    @pytest.mark.unit
    def test_reusable_disabled(self, exporter):
        """No reusable blocks when extraction is off."""
        tree = load_component_tree(
            [
                {"componentType": "card", "tagName": "div", "children": [{"tagName": "p", "textContent": "A"}]},
                {"componentType": "card", "tagName": "div", "children": [{"tagName": "p", "textContent": "B"}]},
            ]
        )
        result = exporter.export(tree, ExportOptions(extract_reusable=False))
        assert "reusable_blocks" not in result.document

    @pytest.mark.unit
    def test_page_template(self, exporter, card_tree):
        """The page tree is also stored as a page template."""
        result = exporter.export(card_tree)
        [template] = result.document["templates"]

        assert template["name"] == "Converted Template"
        assert template["type"] == "page"
        assert template["content"] == result.document["tree"]
        assert result.document["stylesheets"][0]["id"] == "main"

    @pytest.mark.unit
    def test_typography(self, exporter, card_tree, typography_system):
        """Typography settings cover globals and heading selectors."""
        result = exporter.export(card_tree, ExportOptions(typography=typography_system))
        typography = result.document["typography"]

        assert typography["global_settings"]["base_font_family"] == "Georgia"
        assert typography["global_settings"]["heading_font_family"] == "Inter"
        assert typography["global_settings"]["base_font_size"] == "16px"
        assert typography["selectors"]["h1"]["font-size"] == "48px"
        assert typography["selectors"]["p"]["font-family"] == "Georgia"

    @pytest.mark.unit
    def test_native_shortcodes(self, exporter, card_tree):
        """Native output is nested Oxygen shortcodes."""
        result = exporter.export(card_tree)
        text = exporter.serialize(result, "native")

        assert text.startswith('[oxygen component="ct_section" id="1"')
        assert text.endswith("[/oxygen]")
        assert 'button_link="/x"' in text

    @pytest.mark.unit
    def test_shortcode_escaping(self):
        """Attribute values are escaped and structures JSON-encoded."""
        text = tree_to_shortcodes(
            [{"id": 1, "name": "ct_text_block", "options": {"ct_content": 'Say "hi"', "classes": ["a"]}}]
        )
        assert text == (
            '[oxygen component="ct_text_block" id="1" '
            'ct_content="Say &quot;hi&quot;" classes="[&quot;a&quot;]"]'
        )

    @pytest.mark.unit
    def test_repeat_export_identical(self, exporter, landing_tree):
        """Two exports on one instance produce the same document."""
        first = exporter.export(landing_tree)
        second = exporter.export(landing_tree)
        assert first.document == second.document
