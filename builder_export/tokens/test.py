"""Unit tests for design token linking."""

import copy

import pytest

from builder_export.ir import ColorPalette, ComponentInfo, TypographySystem
from builder_export.tokens import (
    DesignTokenReference,
    build_design_token_references,
    is_transparent_color,
    link_to_design_tokens,
    normalize_color_to_hex,
    palette_tokens,
)


class TestNormalizeColorToHex:
    """Tests for color normalization."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#FF0000", "#ff0000"),
            ("#abc", "#aabbcc"),
            ("rgb(0, 128, 255)", "#0080ff"),
            ("rgba(17,34,51,0.4)", "#11223366"),
            ("rgba(17, 34, 51, 1)", "#112233"),
            ("rgb(17 34 51 / 50%)", "#11223380"),
            ("#11223380", "#11223380"),
            ("#abcf", "#aabbcc"),
            ("Red", "red"),
            (None, ""),
        ],
    )
    def test_normalization(self, value, expected):
        """Hex, short hex and rgb() forms normalize, keeping alpha below 1."""
        assert normalize_color_to_hex(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("transparent", True),
            ("rgba(0, 0, 0, 0)", True),
            ("rgba(255,255,255,0)", True),
            ("#ffffff00", True),
            ("inherit", True),
            ("rgba(0, 0, 0, 0.5)", False),
            ("#000000", False),
            ("", False),
            (None, False),
        ],
    )
    def test_transparent_colors(self, value, expected):
        """Fully transparent colors and keywords paint nothing."""
        assert is_transparent_color(value) is expected


class TestBuildDesignTokenReferences:
    """Tests for token table construction."""

    @pytest.mark.unit
    def test_palette_roles(self, color_palette):
        """Palette roles get 1-based slugs and semantic names."""
        ref = build_design_token_references(color_palette)
        assert ref.colors["#1a73e8"] == "primary-1"
        assert ref.colors["#34a853"] == "success"

    @pytest.mark.unit
    def test_typography_tables(self, typography_system):
        """Font families and type-scale sizes are indexed."""
        ref = build_design_token_references(None, typography_system)
        assert ref.fonts["inter"] == "Inter"
        assert ref.sizes["16px"] == "base"
        assert ref.colors == {}

    @pytest.mark.unit
    def test_empty_inputs(self):
        """No inputs gives empty tables."""
        ref = build_design_token_references()
        assert ref == DesignTokenReference()

    @pytest.mark.unit
    def test_palette_token_order(self, color_palette):
        """Grouped roles come first, semantic colors last."""
        names = [token for token, _ in palette_tokens(color_palette)]
        assert names == [
            "primary-1",
            "secondary-1",
            "accent-1",
            "neutral-1",
            "neutral-2",
            "success",
        ]


class TestLinkToDesignTokens:
    """Tests for component-level token linking."""

    @pytest.mark.unit
    def test_links_all_kinds(self, color_palette, typography_system):
        """Colors, font families and sizes link through the tables."""
        ref = build_design_token_references(color_palette, typography_system)
        component = ComponentInfo(
            styles={
                "color": "rgb(26, 115, 232)",
                "backgroundColor": "#FFF",
                "fontFamily": '"Inter", sans-serif',
                "fontSize": "16px",
            }
        )
        links = link_to_design_tokens(component, ref)
        assert links.color_tokens == {"color": "primary-1", "backgroundColor": "neutral-1"}
        assert links.font_tokens == {"fontFamily": "Inter"}
        assert links.size_tokens == {"fontSize": "base"}

    @pytest.mark.unit
    def test_unmatched_values_omitted(self, color_palette):
        """Literal values without a token are not linked."""
        ref = build_design_token_references(color_palette)
        links = link_to_design_tokens(ComponentInfo(styles={"color": "#123456"}), ref)
        assert links.is_empty

    @pytest.mark.unit
    def test_no_palette_no_color_tokens(self, typography_system):
        """Without a palette no color is ever linked."""
        ref = build_design_token_references(None, typography_system)
        links = link_to_design_tokens(ComponentInfo(styles={"color": "#1a73e8"}), ref)
        assert links.color_tokens == {}

    @pytest.mark.unit
    def test_pure(self, color_palette):
        """Linking leaves the component and token tables untouched."""
        ref = build_design_token_references(color_palette)
        component = ComponentInfo(styles={"color": "#1A73E8"})
        before_ref = copy.deepcopy(ref)
        before_component = component.model_copy(deep=True)

        links = link_to_design_tokens(component, ref)

        assert set(links.color_tokens.values()) <= set(ref.colors.values())
        assert ref == before_ref
        assert component == before_component

    @pytest.mark.unit
    def test_none_reference(self):
        """A missing reference links nothing."""
        assert link_to_design_tokens(ComponentInfo(styles={"color": "red"}), None).is_empty

    @pytest.mark.unit
    def test_typography_without_sizes(self):
        """Empty typography yields no size tokens."""
        ref = build_design_token_references(ColorPalette(), TypographySystem())
        links = link_to_design_tokens(ComponentInfo(styles={"fontSize": "16px"}), ref)
        assert links.size_tokens == {}
