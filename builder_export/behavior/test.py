"""Unit tests for behavior descriptors."""

import pytest

from builder_export.behavior import (
    camel_to_kebab,
    describe_component,
    detect_dynamic_content,
    extract_entrance_animation,
    extract_hover_effects,
    extract_motion_effects,
    extract_responsive_settings,
    generate_custom_css,
    map_animation_name,
    parse_time_ms,
)
from builder_export.ir import ComponentInfo
from builder_export.tokens import build_design_token_references


def _node(**analysis) -> ComponentInfo:
    return ComponentInfo.model_validate({"advancedAnalysis": analysis})


class TestResponsiveSettings:
    """Tests for per-breakpoint extraction."""

    @pytest.mark.unit
    def test_only_differences_kept(self):
        """Breakpoints keep only fields differing from desktop."""
        node = _node(
            responsiveStyles={
                "desktop": {"padding": "40px", "fontSize": "20px", "color": "red"},
                "tablet": {"padding": "40px", "fontSize": "18px"},
                "mobile": {"padding": "10px", "fontSize": "20px"},
            }
        )
        settings = extract_responsive_settings(node)
        assert settings.desktop == {"padding": "40px", "fontSize": "20px"}
        assert settings.tablet == {"fontSize": "18px"}
        assert settings.mobile == {"padding": "10px"}
        assert settings.laptop == {}

    @pytest.mark.unit
    def test_hidden_breakpoints(self):
        """display:none marks a breakpoint hidden."""
        node = _node(responsiveStyles={"mobile": {"display": "none"}})
        settings = extract_responsive_settings(node)
        assert settings.hidden == {"mobile"}
        assert settings.overrides() == {"mobile": {"display": "none"}}

    @pytest.mark.unit
    def test_no_analysis(self):
        """Missing analysis gives an empty descriptor."""
        assert extract_responsive_settings(ComponentInfo()).is_empty


class TestHoverEffects:
    """Tests for hover diffing."""

    @pytest.mark.unit
    def test_scale_is_grow(self):
        """scale() transforms map to grow with parsed transition."""
        node = _node(
            interactiveStates={
                "normal": {"transform": "none", "color": "#000"},
                "hover": {
                    "transform": "scale(1.1)",
                    "color": "#000",
                    "transition": "transform 250ms ease-out 0s",
                },
            }
        )
        hover = extract_hover_effects(node)
        assert hover.animation == "grow"
        assert hover.color is None
        assert hover.transition.property == "transform"
        assert hover.transition.timing_function == "ease-out"
        assert hover.transition_ms == 250

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "transform,expected",
        [("translateY(-4px)", "float"), ("rotate(5deg)", "rotate"), ("skewX(2deg)", None)],
    )
    def test_transform_categories(self, transform, expected):
        """translateY floats and rotate rotates."""
        node = _node(interactiveStates={"hover": {"transform": transform}})
        assert extract_hover_effects(node).animation == expected

    @pytest.mark.unit
    def test_hover_box_shadow(self):
        """A changed box-shadow is parsed."""
        node = _node(interactiveStates={"hover": {"boxShadow": "0px 8px 16px 0px #333"}})
        assert extract_hover_effects(node).box_shadow.blur == 16

    @pytest.mark.unit
    def test_identical_states(self):
        """No difference means no hover effects."""
        node = _node(interactiveStates={"normal": {"color": "red"}, "hover": {"color": "red"}})
        assert extract_hover_effects(node) is None


class TestEntranceAnimation:
    """Tests for entrance animation extraction."""

    @pytest.mark.unit
    def test_mapped_name_and_times(self):
        """Names map by substring and times convert to ms."""
        node = _node(
            behavior={
                "hasAnimations": True,
                "animations": [
                    {"name": "slideInLeftCustom", "duration": "0.5s", "delay": "150ms"}
                ],
            }
        )
        animation = extract_entrance_animation(node)
        assert animation.type == "slideInLeft"
        assert animation.duration == 500
        assert animation.delay == 150

    @pytest.mark.unit
    def test_unknown_name_falls_back(self):
        """Unknown names become fadeIn."""
        assert map_animation_name("wobble-things") == "fadeIn"

    @pytest.mark.unit
    def test_unparseable_times(self):
        """Bad duration gives 1000, bad delay gives 0."""
        node = _node(
            behavior={
                "hasAnimations": True,
                "animations": [{"name": "zoomIn", "duration": "slow", "delay": "x"}],
            }
        )
        animation = extract_entrance_animation(node)
        assert (animation.duration, animation.delay) == (1000, 0)

    @pytest.mark.unit
    def test_no_animations(self):
        """No animation list means no entrance animation."""
        assert extract_entrance_animation(_node(behavior={"hasAnimations": False})) is None

    @pytest.mark.unit
    def test_flag_gates_animation_list(self):
        """Recorded animations are ignored unless hasAnimations is set."""
        node = _node(behavior={"hasAnimations": False, "animations": [{"name": "zoomIn"}]})
        assert extract_entrance_animation(node) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [("2s", 2000), ("1.5s", 1500), ("80ms", 80), (300, 300)])
    def test_parse_time_ms(self, value, expected):
        """Seconds and milliseconds both parse."""
        assert parse_time_ms(value) == expected


class TestMotionEffects:
    """Tests for scroll and sticky detection."""

    @pytest.mark.unit
    def test_parallax(self):
        """Fixed backgrounds become parallax."""
        motion = extract_motion_effects(ComponentInfo(styles={"backgroundAttachment": "fixed"}))
        assert motion.has("parallax")
        assert motion.scroll_effects[0].viewport == (0, 100)

    @pytest.mark.unit
    def test_sticky(self):
        """Sticky position records offsets."""
        motion = extract_motion_effects(ComponentInfo(styles={"position": "sticky", "top": "0px"}))
        assert motion.sticky.top == "0px"
        assert motion.sticky.offset == 0

    @pytest.mark.unit
    def test_scroll_reveal_class(self):
        """aos- classes reveal on scroll."""
        motion = extract_motion_effects(ComponentInfo(class_name="box aos-fade"))
        assert motion.scroll_effects[0].type == "fadeIn"
        assert motion.scroll_effects[0].viewport == (0, 80)

    @pytest.mark.unit
    def test_nothing(self):
        """Plain nodes have no motion."""
        assert extract_motion_effects(ComponentInfo()) is None


class TestCustomCss:
    """Tests for custom CSS generation."""

    @pytest.mark.unit
    def test_full_css(self):
        """Base, hover, pseudo and media blocks are emitted in order."""
        node = ComponentInfo.model_validate(
            {
                "id": "promo",
                "styles": {"backgroundColor": "#fff", "borderTopWidth": "", "zIndex": 2},
                "advancedAnalysis": {
                    "interactiveStates": {"hover": {"color": "red"}},
                    "pseudoElements": {"before": {"content": "''"}},
                    "responsiveStyles": {
                        "mobile": {"fontSize": "14px"},
                        "tablet": {"fontSize": "16px"},
                    },
                },
            }
        )
        css = generate_custom_css(node)
        assert css.startswith("#promo {\n  background-color: #fff;\n  z-index: 2;\n}")
        assert "border-top-width" not in css
        assert "#promo:hover {\n  color: red;\n}" in css
        assert "#promo::before" in css
        assert "@media (max-width: 767px) {\n  #promo {\n    font-size: 14px;\n  }\n}" in css
        assert "@media (min-width: 768px) and (max-width: 1023px)" in css

    @pytest.mark.unit
    def test_selector_fallbacks(self):
        """Class then .element selectors are used without an id."""
        assert generate_custom_css(ComponentInfo(class_name="a b", styles={"color": "red"})).startswith(".a {")
        assert generate_custom_css(ComponentInfo(styles={"color": "red"})).startswith(".element {")

    @pytest.mark.unit
    def test_nested_padding_value(self):
        """Side mappings render as shorthand."""
        node = ComponentInfo(styles={"padding": {"top": "1px", "right": "2px", "bottom": "1px", "left": "2px"}})
        assert "padding: 1px 2px;" in generate_custom_css(node)

    @pytest.mark.unit
    def test_camel_to_kebab(self):
        """camelCase converts to kebab-case."""
        assert camel_to_kebab("borderTopLeftRadius") == "border-top-left-radius"


class TestDynamicContent:
    """Tests for dynamic content detection."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["Hi {{ user.name }}", "{% if x %}", "[contact-form id=1]"])
    def test_template_text(self, text):
        """Template tags and shortcodes are dynamic."""
        dynamic = detect_dynamic_content(ComponentInfo(text_content=text))
        assert dynamic.type == "custom_field"
        assert dynamic.source == text

    @pytest.mark.unit
    def test_data_attribute(self):
        """data-dynamic-content names the source."""
        node = ComponentInfo(attributes={"data-dynamic-content": "price"})
        assert detect_dynamic_content(node).source == "price"

    @pytest.mark.unit
    def test_static_text(self):
        """Plain text is static."""
        assert detect_dynamic_content(ComponentInfo(text_content="Hello")) is None


class TestDescribeComponent:
    """Tests for the descriptor bundle."""

    @pytest.mark.unit
    def test_bundle(self, color_palette):
        """All descriptors are computed together."""
        ref = build_design_token_references(color_palette)
        node = ComponentInfo(styles={"color": "#1a73e8", "padding": "8px", "boxShadow": "1px 1px 2px 0px #000"})
        descriptors = describe_component(node, ref)
        assert descriptors.tokens.color_tokens == {"color": "primary-1"}
        assert descriptors.box_model.padding.is_linked
        assert descriptors.box_shadow.horizontal == 1
        assert descriptors.hover is None
        assert descriptors.custom_css.startswith(".element {")
