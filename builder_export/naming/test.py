"""Unit tests for per-target naming tables."""

import pytest

from builder_export.ir import ComponentInfo
from builder_export.naming import (
    BEAVER_BUILDER,
    ELEMENTOR,
    ENTRANCE_ANIMATIONS,
    GUTENBERG,
    OXYGEN,
    RuleKind,
    TypeRule,
    get_vocabulary,
    match_type_rules,
)


class TestTypeRules:
    """Tests for ordered heuristic matching."""

    @pytest.mark.unit
    def test_kinds(self):
        """Tag regex, class substring and tag-with-class all match."""
        node = ComponentInfo(tag_name="a", class_name="btn btn-lg")
        assert TypeRule(RuleKind.TAG, "a|span", "x").matches(node)
        assert TypeRule(RuleKind.CLASS, "btn-l", "x").matches(node)
        assert TypeRule(RuleKind.TAG_CLASS, "a.btn", "x").matches(node)
        assert not TypeRule(RuleKind.TAG_CLASS, "button.btn", "x").matches(node)

    @pytest.mark.unit
    def test_tag_is_full_match(self):
        """Tag patterns do not match prefixes."""
        assert not TypeRule(RuleKind.TAG, "p", "x").matches(ComponentInfo(tag_name="pre"))

    @pytest.mark.unit
    def test_first_match_wins(self):
        """Rule order decides ties; misses use the default."""
        rules = (
            TypeRule(RuleKind.CLASS, "columns", "core/columns"),
            TypeRule(RuleKind.CLASS, "column", "core/column"),
        )
        assert match_type_rules(ComponentInfo(class_name="wp-columns"), rules) == "core/columns"
        assert match_type_rules(ComponentInfo(class_name="column"), rules) == "core/column"
        assert match_type_rules(ComponentInfo(), rules, "core/group") == "core/group"


class TestMapType:
    """Tests for per-target type resolution."""

    @pytest.mark.unit
    def test_static_map_first(self):
        """component_type wins over tag heuristics."""
        node = ComponentInfo(component_type="button", tag_name="div")
        assert ELEMENTOR.map_type(node) == "button"
        assert OXYGEN.map_type(node) == "oxy_button"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "tag,classes,expected",
        [
            ("h4", "", "core/heading"),
            ("p", "", "core/paragraph"),
            ("a", "btn", "core/button"),
            ("ol", "", "core/list"),
            ("div", "col-md-6", "core/column"),
            ("div", "row", "core/columns"),
            ("div", "hero", "core/cover"),
        ],
    )
    def test_gutenberg_heuristics(self, tag, classes, expected):
        """Unknown types fall back to tag and class rules."""
        assert GUTENBERG.map_type(ComponentInfo(tag_name=tag, class_name=classes)) == expected

    @pytest.mark.unit
    def test_default(self):
        """A total miss returns the caller's default."""
        node = ComponentInfo(tag_name="span")
        assert BEAVER_BUILDER.map_type(node, "rich-text") == "rich-text"
        assert ELEMENTOR.map_type(node) is None

    @pytest.mark.unit
    def test_container_types(self):
        """Structural types are containers."""
        assert GUTENBERG.is_container_type("core/group")
        assert not GUTENBERG.is_container_type("core/heading")


class TestAnimations:
    """Tests for animation naming."""

    @pytest.mark.unit
    def test_known_names(self):
        """Canonical names translate per target."""
        assert OXYGEN.animation_name("slideInUp") == "slide-in-up"
        assert BEAVER_BUILDER.animation_name("slideInUp") == "slide-up"
        assert ELEMENTOR.animation_name("zoomIn") == "zoomIn"

    @pytest.mark.unit
    @pytest.mark.parametrize("target", ["elementor", "gutenberg", "oxygen", "beaver-builder"])
    def test_every_canonical_name_resolves(self, target):
        """Every canonical animation has a non-empty name on every target."""
        vocabulary = get_vocabulary(target)
        for canonical in ENTRANCE_ANIMATIONS:
            assert vocabulary.animation_name(canonical)

    @pytest.mark.unit
    def test_unknown_falls_back(self):
        """Unmapped names use the target default."""
        assert ELEMENTOR.animation_name("zoomOut") == "fadeIn"
        assert OXYGEN.animation_name("wobble") == "fade-in"
        assert BEAVER_BUILDER.animation_name("fadeOut") == "fade-in"

    @pytest.mark.unit
    def test_hover_animations(self):
        """Hover categories resolve, missing ones are None."""
        assert ELEMENTOR.hover_animation("grow") == "grow"
        assert GUTENBERG.hover_animation("grow") is None
        assert ELEMENTOR.hover_animation(None) is None


class TestResponsiveKeys:
    """Tests for responsive and visibility key naming."""

    @pytest.mark.unit
    def test_elementor(self):
        """Elementor uses underscore suffixes and hide_ flags."""
        assert ELEMENTOR.responsive_key("padding", "tablet") == "_padding_tablet"
        assert ELEMENTOR.hide_key("mobile") == "hide_mobile"
        assert ELEMENTOR.visibility_settings({"tablet"}) == {"hide_tablet": "yes"}

    @pytest.mark.unit
    def test_oxygen(self):
        """Oxygen uses kebab keys with dash suffixes."""
        assert OXYGEN.responsive_key("fontSize", "mobile") == "font-size-mobile"
        assert OXYGEN.responsive_key("justifyContent", "tablet") == "justify-content-tablet"
        assert OXYGEN.visibility_settings({"mobile"}) == {"hide-mobile": "true"}

    @pytest.mark.unit
    def test_beaver_builder(self):
        """Beaver Builder keys mobile only and lists visible breakpoints."""
        assert BEAVER_BUILDER.responsive_key("padding", "mobile") == "padding_responsive"
        assert BEAVER_BUILDER.responsive_key("padding", "tablet") is None
        assert BEAVER_BUILDER.responsive_key("display", "mobile") is None
        assert BEAVER_BUILDER.hide_key("mobile") == "responsive_display"
        assert BEAVER_BUILDER.visibility_settings({"mobile"}) == {
            "responsive_display": "desktop,medium"
        }

    @pytest.mark.unit
    def test_gutenberg_has_none(self):
        """Gutenberg has no responsive or visibility keys."""
        assert GUTENBERG.responsive_key("padding", "mobile") is None
        assert GUTENBERG.visibility_settings({"mobile"}) == {}

    @pytest.mark.unit
    def test_empty_hidden(self):
        """Nothing hidden means no settings."""
        assert BEAVER_BUILDER.visibility_settings(set()) == {}


class TestGetVocabulary:
    """Tests for vocabulary lookup."""

    @pytest.mark.unit
    def test_known(self):
        """Known targets resolve."""
        assert get_vocabulary("oxygen") is OXYGEN

    @pytest.mark.unit
    def test_unknown_raises(self):
        """Unknown targets raise KeyError listing the available ones."""
        with pytest.raises(KeyError, match="Available: beaver-builder, elementor"):
            get_vocabulary("divi")
