"""Unit tests for the Elementor exporter."""

import json

import pytest

from builder_export.config import EnvVar, get_environment
from builder_export.exporters import ExportOptions
from builder_export.exporters.elementor import ElementorDocument, ElementorExporter
from builder_export.ir import count_components, load_component_tree


@pytest.fixture
def exporter():
    """Create an ElementorExporter instance."""
    return ElementorExporter()


def _column_widgets(section: dict) -> list[dict]:
    return [element for column in section["elements"] for element in column["elements"]]


class TestElementorStructure:
    """Tests for section/column/widget layout."""

    @pytest.mark.unit
    def test_exporter_name(self, exporter):
        """Exporter is registered under elementor."""
        assert exporter.name == "elementor"
        assert exporter.content_key == "content"

    @pytest.mark.unit
    def test_card_becomes_section(self, exporter, card_tree):
        """Card maps to one section with heading, text and button widgets."""
        result = exporter.export(card_tree)
        [section] = result.document["content"]

        assert section["elType"] == "section"
        assert len(section["elements"]) == 1
        column = section["elements"][0]
        assert column["settings"]["_column_size"] == 100

        widgets = column["elements"]
        assert [widget["widgetType"] for widget in widgets] == [
            "heading",
            "text-editor",
            "button",
        ]
        assert widgets[0]["settings"]["title"] == "Card Title"
        assert widgets[0]["settings"]["header_size"] == "h3"
        button = widgets[2]["settings"]
        assert button["link"]["url"] == "/x"
        assert button["button_type"] == "primary"
        assert button["size"] == "md"

    @pytest.mark.unit
    def test_document_envelope(self, exporter, card_tree):
        """Document carries version, title, page type and draft settings."""
        result = exporter.export(card_tree, ExportOptions(title="Home"))
        document = result.document

        assert document["version"] == get_environment(EnvVar.ELEMENTOR_VERSION)
        assert document["title"] == "Home"
        assert document["type"] == "page"
        assert document["page_settings"]["post_status"] == "draft"
        assert document["page_settings"]["template"] == "default"
        ElementorDocument.model_validate(document)

    @pytest.mark.unit
    def test_ids_start_at_seed(self, exporter, card_tree):
        """Element ids are hex values counted from the configured seed."""
        result = exporter.export(card_tree)
        section = result.document["content"][0]
        assert len(section["id"]) == 7
        assert int(section["id"], 16) == get_environment(EnvVar.ELEMENTOR_ID_SEED)

    @pytest.mark.unit
    def test_node_map_complete(self, exporter, landing_tree):
        """Every source node maps to an output element."""
        result = exporter.export(landing_tree)
        assert len(result.node_map) == count_components(landing_tree)
        assert result.is_valid

    @pytest.mark.unit
    def test_columns_from_col_classes(self, exporter, landing_tree):
        """col-8/col-4 children become 67%/33% columns."""
        result = exporter.export(landing_tree)
        row = result.document["content"][1]

        sizes = [column["settings"]["_column_size"] for column in row["elements"]]
        assert sizes == [67, 33]
        assert row["elements"][0]["settings"]["_inline_size"] == 66.67

    @pytest.mark.unit
    def test_nested_container_is_inner_section(self, exporter, landing_tree):
        """A container inside a column becomes an inner section."""
        result = exporter.export(landing_tree)
        left_column = result.document["content"][1]["elements"][0]
        inner = left_column["elements"][1]

        assert inner["elType"] == "section"
        assert inner["isInner"] is True
        assert result.node_map["1.0.1"] == inner["id"]
        assert result.node_map["1.0.1.0"] == inner["elements"][0]["elements"][0]["id"]

    @pytest.mark.unit
    def test_bare_leaf_is_wrapped(self, exporter, landing_tree):
        """A top-level icon is wrapped in a synthesized section and column."""
        result = exporter.export(landing_tree)
        wrapper = result.document["content"][2]

        assert wrapper["elType"] == "section"
        [icon] = _column_widgets(wrapper)
        assert icon["widgetType"] == "icon"
        assert icon["settings"]["selected_icon"] == {"value": "fas fa-star", "library": "fa-solid"}
        assert result.node_map["2"] == icon["id"]

    @pytest.mark.unit
    def test_unknown_leaf_falls_back_to_html(self, exporter):
        """A leaf matching no type becomes an html widget."""
        tree = load_component_tree({"tagName": "span", "textContent": "Hi"})
        result = exporter.export(tree)
        [widget] = _column_widgets(result.document["content"][0])
        assert widget["widgetType"] == "html"
        assert widget["settings"]["html"] == "Hi"


class TestElementorSettings:
    """Tests for style, behavior and token settings."""

    @pytest.mark.unit
    def test_responsive_and_visibility(self, exporter, landing_tree):
        """Breakpoint overrides use suffixed keys; hidden breakpoints use hide_*."""
        result = exporter.export(landing_tree)
        settings = result.document["content"][0]["settings"]

        assert settings["_padding_tablet"] == {
            "unit": "px",
            "top": "40",
            "right": "20",
            "bottom": "40",
            "left": "20",
            "isLinked": False,
        }
        assert settings["hide_mobile"] == "yes"
        assert "typography_font_size_tablet" not in settings

    @pytest.mark.unit
    def test_mixed_unit_padding_converted(self, exporter):
        """px and em sides are stored together in px."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "Hi", "styles": {"padding": "10px 2em"}}
        )
        result = exporter.export(tree)
        [heading] = _column_widgets(result.document["content"][0])

        assert heading["settings"]["_padding"] == {
            "unit": "px",
            "top": "10",
            "right": "32",
            "bottom": "10",
            "left": "32",
            "isLinked": False,
        }

    @pytest.mark.unit
    def test_unconvertible_padding_omitted(self, exporter):
        """A px/% mix has no single unit, so padding is left out with a warning."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "Hi", "styles": {"padding": "10px 5%"}}
        )
        result = exporter.export(tree)
        [heading] = _column_widgets(result.document["content"][0])

        assert "_padding" not in heading["settings"]
        assert [warning.message for warning in result.warnings] == ["Mixed units in padding"]

    @pytest.mark.unit
    def test_zero_side_takes_other_unit(self, exporter):
        """A bare zero side does not force px onto em sides."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "Hi", "styles": {"margin": "0 1.5em"}}
        )
        result = exporter.export(tree)
        [heading] = _column_widgets(result.document["content"][0])

        margin = heading["settings"]["_margin"]
        assert margin["unit"] == "em"
        assert (margin["top"], margin["right"]) == ("0", "1.5")

    @pytest.mark.unit
    def test_animation_and_motion(self, exporter, landing_tree):
        """Entrance animation, parallax and box shadow are translated."""
        result = exporter.export(landing_tree)
        settings = result.document["content"][0]["settings"]

        assert settings["_animation"] == "fadeIn"
        assert settings["animation_duration"] == 800
        assert settings["_animation_delay"] == 200
        assert settings["motion_fx_translateY_effect"] == "yes"
        assert settings["_box_shadow_box_shadow_type"] == "yes"
        assert settings["_box_shadow_box_shadow"]["blur"] == 12

    @pytest.mark.unit
    def test_hover_effects(self, exporter, landing_tree):
        """Hover scale becomes a grow animation with transition duration."""
        result = exporter.export(landing_tree)
        button = _column_widgets(result.document["content"][0])[1]

        assert button["widgetType"] == "button"
        settings = button["settings"]
        assert settings["_hover_animation"] == "grow"
        assert settings["button_background_hover_color"] == "#c5221f"
        assert settings["hover_transition_duration"] == {"unit": "ms", "size": 300}

    @pytest.mark.unit
    def test_literal_colors_become_globals(self, exporter, card_tree):
        """Each distinct literal color is registered once and referenced."""
        result = exporter.export(card_tree)
        page = result.document["page_settings"]

        assert [entry["color"] for entry in page["custom_colors"]] == [
            "#ffffff",
            "#202124",
            "#1a73e8",
        ]
        section = result.document["content"][0]
        white = page["custom_colors"][0]["_id"]
        assert white.startswith("color_")
        assert section["settings"]["__globals__"]["_background_color"] == (
            f"globals/colors?id={white}"
        )
        assert not result.report.has_warnings

    @pytest.mark.unit
    def test_translucent_color_keeps_alpha(self, exporter):
        """A semi-transparent background registers an 8-digit hex global."""
        tree = load_component_tree(
            {
                "componentType": "card",
                "tagName": "div",
                "className": "card",
                "styles": {"backgroundColor": "rgba(0,0,0,0.5)"},
                "children": [{"componentType": "heading", "tagName": "h3", "textContent": "Hi"}],
            }
        )
        result = exporter.export(tree)
        page = result.document["page_settings"]

        assert [entry["color"] for entry in page["custom_colors"]] == ["#00000080"]
        assert result.document["content"][0]["settings"]["_background_color"] == "rgba(0,0,0,0.5)"

    @pytest.mark.unit
    @pytest.mark.parametrize("background", ["rgba(0,0,0,0)", "rgba(255, 255, 255, 0.0)", "transparent"])
    def test_transparent_background_ignored(self, exporter, background):
        """Fully transparent backgrounds set nothing and register nothing."""
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
        settings = result.document["content"][0]["settings"]

        assert "_background_color" not in settings
        assert "custom_colors" not in result.document["page_settings"]

    @pytest.mark.unit
    def test_palette_tokens_override_literals(self, exporter, card_tree, color_palette):
        """With a palette, globals reference tokens and nothing is registered."""
        result = exporter.export(card_tree, ExportOptions(palette=color_palette))
        page = result.document["page_settings"]
        section = result.document["content"][0]

        assert "custom_colors" not in page
        assert section["settings"]["__globals__"]["_background_color"] == (
            "globals/colors?id=neutral-1"
        )
        assert [entry["_id"] for entry in page["system_colors"]][:2] == [
            "primary-1",
            "secondary-1",
        ]

    @pytest.mark.unit
    def test_font_registered(self, exporter, landing_tree):
        """A literal font family is registered as a global font."""
        result = exporter.export(landing_tree)
        fonts = result.document["page_settings"]["custom_fonts"]

        assert [font["typography_font_family"] for font in fonts] == ["Inter"]
        heading = _column_widgets(result.document["content"][0])[0]
        assert heading["settings"]["__globals__"]["typography_typography"] == (
            f"globals/typography?id={fonts[0]['_id']}"
        )

    @pytest.mark.unit
    def test_page_custom_css(self, exporter, card_tree):
        """Per-node CSS is collected into page_custom_css."""
        result = exporter.export(card_tree)
        css = result.document["page_settings"]["page_custom_css"]
        assert ".card {" in css
        assert "padding: 24px;" in css

    @pytest.mark.unit
    def test_dynamic_content(self, exporter):
        """Template tags in a heading become a dynamic tag."""
        tree = load_component_tree(
            {"componentType": "heading", "tagName": "h2", "textContent": "{{ post_title }}"}
        )
        result = exporter.export(tree)
        [heading] = _column_widgets(result.document["content"][0])
        assert heading["settings"]["__dynamic__"]["title"].startswith("[elementor-tag")


class TestElementorWidgets:
    """Tests for specialized widget conversion."""

    @pytest.mark.unit
    def test_gallery(self, exporter, gallery_tree):
        """Five images become an image-gallery with five entries."""
        result = exporter.export(gallery_tree)
        [gallery] = _column_widgets(result.document["content"][0])

        assert gallery["widgetType"] == "image-gallery"
        assert len(gallery["settings"]["wp_gallery"]) == 5
        assert gallery["settings"]["gallery_columns"] == "3"
        assert len(result.node_map) == 6
        assert set(result.node_map.values()) == {gallery["id"]}

    @pytest.mark.unit
    def test_single_image_is_not_gallery(self, exporter, single_image_tree):
        """One image stays an image widget."""
        result = exporter.export(single_image_tree)
        [image] = _column_widgets(result.document["content"][0])
        assert image["widgetType"] == "image"
        assert image["settings"]["image"]["url"] == "/img/hero.jpg"

    @pytest.mark.unit
    def test_preview_card_not_testimonial(self, exporter):
        """A class merely containing 'review' keeps its widgets."""
        tree = load_component_tree(
            {
                "componentType": "container",
                "tagName": "div",
                "className": "preview-card",
                "children": [
                    {"componentType": "heading", "tagName": "h3", "textContent": "Title"},
                    {"componentType": "paragraph", "tagName": "p", "textContent": "Copy"},
                    {
                        "componentType": "button",
                        "tagName": "a",
                        "className": "btn",
                        "attributes": {"href": "/x"},
                        "textContent": "Go",
                    },
                ],
            }
        )
        result = exporter.export(tree)
        widgets = _column_widgets(result.document["content"][0])
        assert [widget["widgetType"] for widget in widgets] == ["heading", "text-editor", "button"]

    @pytest.mark.unit
    def test_pricing_table_plans(self, exporter):
        """Each pricing plan becomes its own price-table column."""
        plans = [
            {
                "tagName": "div",
                "className": "pricing-plan",
                "children": [
                    {"tagName": "h3", "textContent": name},
                    {"tagName": "span", "className": "price", "textContent": price},
                    {
                        "tagName": "ul",
                        "children": [{"tagName": "li", "textContent": "Support"}],
                    },
                    {"tagName": "a", "attributes": {"href": "/buy"}, "textContent": "Buy"},
                ],
            }
            for name, price in (("Basic", "$19"), ("Pro", "$49"))
        ]
        tree = load_component_tree({"tagName": "div", "className": "pricing", "children": plans})
        result = exporter.export(tree)

        inner = result.document["content"][0]["elements"][0]["elements"][0]
        assert inner["isInner"] is True
        tables = _column_widgets(inner)
        assert [table["widgetType"] for table in tables] == ["price-table", "price-table"]
        assert tables[0]["settings"]["price"] == "19"
        assert tables[0]["settings"]["currency_symbol"] == "dollar"
        assert tables[1]["settings"]["heading"] == "Pro"
        assert set(result.node_map.values()) == {inner["id"]}
        assert result.is_valid


class TestElementorLifecycle:
    """Tests for reset and serialization."""

    @pytest.mark.unit
    def test_repeat_export_identical(self, exporter, landing_tree):
        """Two exports on one instance produce the same document."""
        first = exporter.export(landing_tree)
        second = exporter.export(landing_tree)
        assert first.document == second.document
        assert first.node_map == second.node_map

    @pytest.mark.unit
    def test_serialize_json(self, exporter, card_tree):
        """JSON and native output both parse back to the document."""
        result = exporter.export(card_tree)
        assert json.loads(exporter.serialize(result)) == result.document
        assert json.loads(exporter.serialize(result, "native")) == result.document

    @pytest.mark.unit
    def test_serialize_unknown_format(self, exporter, card_tree):
        """Unknown output formats raise ValueError."""
        result = exporter.export(card_tree)
        with pytest.raises(ValueError, match="Unknown output format"):
            exporter.serialize(result, "xml")
