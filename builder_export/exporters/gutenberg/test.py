"""Unit tests for the Gutenberg exporter."""

import pytest

from builder_export.exporters import ExportOptions
from builder_export.exporters.gutenberg import (
    GutenbergDocument,
    GutenbergExporter,
    serialize_block_attributes,
    serialize_block_grammar,
)
from builder_export.ir import count_components, load_component_tree


@pytest.fixture
def exporter():
    """Create a GutenbergExporter instance."""
    return GutenbergExporter()


def _card(title: str) -> dict:
    return {
        "componentType": "card",
        "tagName": "div",
        "className": "card",
        "children": [
            {"componentType": "heading", "tagName": "h3", "textContent": title},
            {"componentType": "paragraph", "tagName": "p", "textContent": "Copy"},
        ],
    }


class TestGutenbergBlocks:
    """Tests for block structure and attributes."""

    @pytest.mark.unit
    def test_exporter_name(self, exporter):
        """Exporter is registered under gutenberg."""
        assert exporter.name == "gutenberg"
        assert exporter.content_key == "blocks"

    @pytest.mark.unit
    def test_card_becomes_group(self, exporter, card_tree):
        """Card maps to core/group holding heading, paragraph and button."""
        result = exporter.export(card_tree)
        [group] = result.document["blocks"]

        assert group["blockName"] == "core/group"
        assert [block["blockName"] for block in group["innerBlocks"]] == [
            "core/heading",
            "core/paragraph",
            "core/button",
        ]
        heading, _, button = group["innerBlocks"]
        assert heading["attrs"]["level"] == 3
        assert button["attrs"]["url"] == "/x"
        assert button["attrs"]["text"] == "Read more"
        GutenbergDocument.model_validate(result.document)
        assert result.is_valid

    @pytest.mark.unit
    def test_group_padding_style(self, exporter, card_tree):
        """Padding lands under style.spacing."""
        result = exporter.export(card_tree)
        group = result.document["blocks"][0]

        assert group["attrs"]["style"]["spacing"]["padding"] == {
            "top": "24px",
            "right": "24px",
            "bottom": "24px",
            "left": "24px",
        }
        assert group["attrs"]["className"] == "card shadow"

    @pytest.mark.unit
    def test_literal_colors_registered(self, exporter, card_tree):
        """Literal colors become palette presets referenced by slug."""
        result = exporter.export(card_tree)
        group = result.document["blocks"][0]
        heading, _, button = group["innerBlocks"]

        assert group["attrs"]["backgroundColor"] == "color-1"
        assert heading["attrs"]["textColor"] == "color-2"
        assert button["attrs"]["backgroundColor"] == "color-3"
        assert button["attrs"]["textColor"] == "color-1"

        palette = result.document["global_styles"]["settings"]["color"]["palette"]
        assert [entry["color"] for entry in palette] == ["#ffffff", "#202124", "#1a73e8"]

    @pytest.mark.unit
    def test_transparent_background_ignored(self, exporter):
        """The computed default rgba(0, 0, 0, 0) is not registered as black."""
        tree = load_component_tree({**_card("Hi"), "styles": {"backgroundColor": "rgba(0, 0, 0, 0)"}})
        result = exporter.export(tree)
        group = result.document["blocks"][0]

        assert "backgroundColor" not in group.get("attrs", {})
        settings = result.document.get("global_styles", {}).get("settings", {})
        assert settings.get("color", {}).get("palette", []) == []

    @pytest.mark.unit
    def test_translucent_color_keeps_alpha(self, exporter):
        """A semi-transparent background becomes an 8-digit hex preset."""
        tree = load_component_tree({**_card("Hi"), "styles": {"backgroundColor": "rgba(0, 0, 0, 0.5)"}})
        result = exporter.export(tree)

        assert result.document["blocks"][0]["attrs"]["backgroundColor"] == "color-1"
        palette = result.document["global_styles"]["settings"]["color"]["palette"]
        assert [entry["color"] for entry in palette] == ["#00000080"]

    @pytest.mark.unit
    def test_palette_tokens(self, exporter, card_tree, color_palette):
        """With a palette, colors reference palette slugs."""
        result = exporter.export(card_tree, ExportOptions(palette=color_palette))
        group = result.document["blocks"][0]
        button = group["innerBlocks"][2]

        assert group["attrs"]["backgroundColor"] == "neutral-1"
        assert button["attrs"]["backgroundColor"] == "primary-1"
        palette = result.document["global_styles"]["settings"]["color"]["palette"]
        assert [entry["slug"] for entry in palette] == [
            "primary-1",
            "secondary-1",
            "accent-1",
            "neutral-1",
            "neutral-2",
            "success",
        ]

    @pytest.mark.unit
    def test_explicit_columns(self, exporter, landing_tree):
        """A container whose children are all columns becomes core/columns."""
        result = exporter.export(landing_tree)
        row = result.document["blocks"][1]

        assert row["blockName"] == "core/columns"
        widths = [column["attrs"]["width"] for column in row["innerBlocks"]]
        assert widths == ["66.67%", "33.33%"]
        assert row["innerBlocks"][0]["innerBlocks"][1]["blockName"] == "core/group"

    @pytest.mark.unit
    def test_stray_column_is_group(self, exporter):
        """A column outside core/columns is demoted to core/group."""
        tree = load_component_tree(
            {
                "componentType": "container",
                "tagName": "div",
                "children": [
                    {
                        "componentType": "column",
                        "tagName": "div",
                        "children": [{"componentType": "paragraph", "tagName": "p", "textContent": "A"}],
                    },
                    {"componentType": "paragraph", "tagName": "p", "textContent": "B"},
                ],
            }
        )
        result = exporter.export(tree)
        [group] = result.document["blocks"]
        assert group["blockName"] == "core/group"
        assert group["innerBlocks"][0]["blockName"] == "core/group"

    @pytest.mark.unit
    def test_node_map_uses_block_paths(self, exporter, landing_tree):
        """Every source node maps to a dotted block path."""
        result = exporter.export(landing_tree)

        assert len(result.node_map) == count_components(landing_tree)
        assert result.node_map["1.0.1.0"] == "1.0.1.0"
        assert result.node_map["2"] == "2"

    @pytest.mark.unit
    def test_hero_descriptors(self, exporter, landing_tree):
        """Animation, visibility, parallax and shadow reach block attributes."""
        result = exporter.export(landing_tree)
        cover = result.document["blocks"][0]
        attrs = cover["attrs"]

        assert cover["blockName"] == "core/cover"
        classes = attrs["className"].split()
        assert "animate__animated" in classes
        assert "hide-on-mobile" in classes
        assert attrs["hasParallax"] is True
        assert attrs["anchor"] == "hero"
        assert "12px" in attrs["style"]["shadow"]

    @pytest.mark.unit
    def test_custom_css_in_global_styles(self, exporter, card_tree):
        """Per-node CSS is collected into the theme.json styles."""
        result = exporter.export(card_tree)
        css = result.document["global_styles"]["styles"]["css"]
        assert ".card {" in css

    @pytest.mark.unit
    def test_dynamic_binding(self, exporter):
        """Template tags bind the heading content to post meta."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "{{ post_title }}"}
        )
        result = exporter.export(tree)
        binding = result.document["blocks"][0]["attrs"]["metadata"]["bindings"]["content"]
        assert binding == {"source": "core/post-meta", "args": {"key": "post_title"}}


class TestGutenbergWidgets:
    """Tests for specialized widget blocks."""

    @pytest.mark.unit
    def test_gallery(self, exporter, gallery_tree):
        """Five images become a core/gallery of five image blocks."""
        result = exporter.export(gallery_tree)
        [gallery] = result.document["blocks"]

        assert gallery["blockName"] == "core/gallery"
        assert gallery["attrs"]["columns"] == 3
        assert len(gallery["innerBlocks"]) == 5
        assert set(result.node_map.values()) == {"0"}
        assert len(result.node_map) == 6

    @pytest.mark.unit
    def test_icon_is_html(self, exporter, landing_tree):
        """A standalone icon becomes a core/html block."""
        result = exporter.export(landing_tree)
        icon = result.document["blocks"][2]
        assert icon["blockName"] == "core/html"
        assert 'class="fas fa-star"' in icon["innerHTML"]


class TestGutenbergExtras:
    """Tests for patterns, reusable blocks, template parts and global styles."""

    @pytest.mark.unit
    def test_patterns_from_repeats(self, exporter):
        """Repeated structures become block patterns."""
        tree = load_component_tree(
            {"componentType": "container", "tagName": "div", "children": [_card("A"), _card("B")]}
        )
        result = exporter.export(tree)
        [pattern] = result.document["patterns"]

        assert pattern["slug"] == "pattern-1"
        assert pattern["categories"] == ["custom"]
        assert pattern["content"].startswith("<!-- wp:group")

    @pytest.mark.unit
    def test_patterns_disabled(self, exporter):
        """No patterns are derived when use_patterns is off."""
        tree = load_component_tree(
            {"componentType": "container", "tagName": "div", "children": [_card("A"), _card("B")]}
        )
        result = exporter.export(tree, ExportOptions(use_patterns=False))
        assert "patterns" not in result.document

    @pytest.mark.unit
    def test_reusable_blocks_from_types(self, exporter, card_tree):
        """Cards are extracted as synced reusable blocks."""
        result = exporter.export(card_tree)
        [reusable] = result.document["reusable_blocks"]

        assert reusable["title"] == "Reusable card"
        assert reusable["syncStatus"] == "sync"
        assert "<!-- wp:heading" in reusable["content"]

    @pytest.mark.unit
    def test_library_promotion(self, exporter, card_tree, component_library):
        """Library templates are promoted by score."""
        result = exporter.export(card_tree, ExportOptions(library=component_library))
        document = result.document

        assert [pattern["slug"] for pattern in document["patterns"]] == [
            "tpl-101",
            "tpl-102",
            "tpl-103",
        ]
        assert document["patterns"][0]["categories"] == ["featured"]
        assert [block["id"] for block in document["reusable_blocks"]] == [101, 102]

    @pytest.mark.unit
    def test_template_parts(self, exporter, card_tree, template_parts):
        """Confident header and footer parts are exported; the sidebar is not."""
        result = exporter.export(card_tree, ExportOptions(template_parts=template_parts))
        parts = result.document["template_parts"]

        assert [part["area"] for part in parts] == ["header", "footer"]
        assert parts[0]["content"].startswith('<!-- wp:group {"tagName":"header"} -->')
        assert "<nav>Menu</nav>" in parts[0]["content"]

    @pytest.mark.unit
    def test_theme_json(self, exporter, card_tree, color_palette, typography_system):
        """Global styles follow theme.json version 2."""
        result = exporter.export(
            card_tree, ExportOptions(palette=color_palette, typography=typography_system)
        )
        styles = result.document["global_styles"]
        settings = styles["settings"]

        assert styles["version"] == 2
        assert settings["color"]["gradients"][0]["gradient"] == (
            "linear-gradient(90deg, #1a73e8 0%, #34a853 100%)"
        )
        families = settings["typography"]["fontFamilies"]
        assert families[0] == {"slug": "inter", "fontFamily": "Inter, sans-serif", "name": "Inter"}
        sizes = [size["slug"] for size in settings["typography"]["fontSizes"]]
        assert sizes[:4] == ["sm", "base", "lg", "xl"]
        assert styles["styles"]["elements"]["h1"]["typography"]["fontSize"] == "48px"
        assert styles["styles"]["color"]["text"] == "#202124"


class TestBlockGrammar:
    """Tests for block comment serialization."""

    @pytest.mark.unit
    def test_void_block(self):
        """Blocks without markup serialize as self-closing comments."""
        assert serialize_block_grammar(
            [{"blockName": "core/spacer", "attrs": {"height": "40px"}}]
        ) == '<!-- wp:spacer {"height":"40px"} /-->'

    @pytest.mark.unit
    def test_inner_blocks_inside_wrapper(self):
        """Inner blocks are placed inside the wrapper element."""
        block = {
            "blockName": "core/group",
            "attrs": {},
            "innerHTML": '<div class="wp-block-group"></div>',
            "innerBlocks": [{"blockName": "core/paragraph", "innerHTML": "<p>Hi</p>"}],
        }
        assert serialize_block_grammar([block]) == (
            "<!-- wp:group -->\n"
            '<div class="wp-block-group">\n'
            "<!-- wp:paragraph -->\n<p>Hi</p>\n<!-- /wp:paragraph -->\n"
            "</div>\n"
            "<!-- /wp:group -->"
        )

    @pytest.mark.unit
    def test_attributes_escaped(self):
        """Comment-breaking characters in attributes are unicode-escaped."""
        text = serialize_block_attributes({"text": 'Next --> <b>"A&B"</b>'})
        assert text == (
            '{"text":"Next \\u002d\\u002d\\u003e \\u003cb\\u003e'
            '\\u0022A\\u0026B\\u0022\\u003c/b\\u003e"}'
        )
        assert "-->" not in serialize_block_grammar(
            [{"blockName": "core/spacer", "attrs": {"anchor": "a-->b"}}]
        )[: -len("/-->")]

    @pytest.mark.unit
    def test_button_text_with_comment_close(self, exporter):
        """Button text containing --> stays inside the attribute JSON."""
        tree = load_component_tree(
            {
                "componentType": "button",
                "tagName": "a",
                "className": "btn",
                "attributes": {"href": "/next"},
                "textContent": "Next -->",
            }
        )
        text = exporter.serialize(exporter.export(tree), "native")
        assert text.count("-->") == text.count("<!--")
        assert "Next \\u002d\\u002d\\u003e" in text

    @pytest.mark.unit
    def test_text_fallback_escaped(self, exporter):
        """Text without markup is HTML-escaped in the block body."""
        tree = load_component_tree(
            {"componentType": "paragraph", "tagName": "p", "textContent": "Fish & <chips>"}
        )
        result = exporter.export(tree)
        [paragraph] = result.document["blocks"]
        assert paragraph["innerHTML"] == "<p>Fish &amp; &lt;chips&gt;</p>"

    @pytest.mark.unit
    def test_native_serialization(self, exporter, card_tree):
        """Native output is block grammar, not JSON."""
        result = exporter.export(card_tree)
        text = exporter.serialize(result, "native")
        assert text.startswith('<!-- wp:group {"')
        assert "<!-- wp:button" in text
        assert text.rstrip().endswith("<!-- /wp:group -->")

    @pytest.mark.unit
    def test_repeat_export_identical(self, exporter, landing_tree):
        """Two exports on one instance produce the same document."""
        first = exporter.export(landing_tree)
        second = exporter.export(landing_tree)
        assert first.document == second.document
