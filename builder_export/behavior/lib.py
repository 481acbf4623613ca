"""Cross-cutting style and behavior descriptors.

Each extractor reads one ComponentInfo and returns a small dataclass (or
None) describing responsive overrides, hover effects, entrance animations,
scroll/sticky motion and dynamic content. Exporters translate these
descriptors through their target vocabulary; nothing here knows about a
particular page builder.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from builder_export.core.log import get_logger
from builder_export.dimension import (
    BoxModel,
    BoxShadow,
    extract_box_model,
    extract_box_shadow,
    format_dimension_set,
    format_number,
    parse_shorthand_dimension,
)
from builder_export.ir import ComponentInfo
from builder_export.tokens import DesignTokenReference, TokenLinks, link_to_design_tokens

logger = get_logger(__name__)

BREAKPOINTS = ("desktop", "laptop", "tablet", "mobile")

RESPONSIVE_FIELDS = (
    "display",
    "flexDirection",
    "justifyContent",
    "alignItems",
    "width",
    "height",
    "minWidth",
    "maxWidth",
    "margin",
    "padding",
    "fontSize",
    "lineHeight",
    "textAlign",
)

HOVER_FIELDS = (
    "transform",
    "backgroundColor",
    "color",
    "borderColor",
    "boxShadow",
    "opacity",
)

# Substring of the lowercased keyframes name -> canonical animation.
ANIMATION_NAMES = (
    ("fadein", "fadeIn"),
    ("fadeout", "fadeOut"),
    ("slideinup", "slideInUp"),
    ("slideindown", "slideInDown"),
    ("slideinleft", "slideInLeft"),
    ("slideinright", "slideInRight"),
    ("zoomin", "zoomIn"),
    ("zoomout", "zoomOut"),
    ("rotatein", "rotateIn"),
    ("flipin", "flipIn"),
    ("bouncein", "bounceIn"),
)
DEFAULT_ANIMATION = "fadeIn"
DEFAULT_ANIMATION_MS = 1000

TIME_PATTERN = re.compile(r"(\d+(?:\.\d+)?)(ms|s)\b")
SHORTCODE_PATTERN = re.compile(r"\[[^\[\]]+\]")
CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

MOBILE_MEDIA = "@media (max-width: 767px)"
TABLET_MEDIA = "@media (min-width: 768px) and (max-width: 1023px)"


# =============================================================================
# Descriptors
# =============================================================================


@dataclass
class ResponsiveSettings:
    """Per-breakpoint overrides.

    ``desktop`` holds the filtered base styles; every other breakpoint
    holds only fields whose value differs from desktop. ``hidden`` names
    the breakpoints where the element has ``display: none``.
    """

    desktop: dict[str, Any] = field(default_factory=dict)
    laptop: dict[str, Any] = field(default_factory=dict)
    tablet: dict[str, Any] = field(default_factory=dict)
    mobile: dict[str, Any] = field(default_factory=dict)
    hidden: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (
            self.desktop or self.laptop or self.tablet or self.mobile or self.hidden
        )

    def overrides(self) -> dict[str, dict[str, Any]]:
        """Non-desktop breakpoints that carry differences."""
        return {
            name: getattr(self, name)
            for name in ("laptop", "tablet", "mobile")
            if getattr(self, name)
        }


@dataclass
class TransitionEffect:
    property: str = "all"
    duration: str = "0.3s"
    timing_function: str = "ease"
    delay: str = "0s"


@dataclass
class HoverEffects:
    transform: str | None = None
    background_color: str | None = None
    color: str | None = None
    border_color: str | None = None
    box_shadow: BoxShadow | None = None
    opacity: str | None = None
    animation: str | None = None
    transition: TransitionEffect | None = None
    transition_ms: int | None = None


@dataclass
class EntranceAnimation:
    """Entrance animation with times in milliseconds."""

    type: str
    duration: int = DEFAULT_ANIMATION_MS
    delay: int = 0
    easing: str = "ease"


@dataclass
class ScrollEffect:
    type: str
    direction: str | None = None
    speed: float = 5
    viewport: tuple[int, int] = (0, 100)


@dataclass
class StickyEffect:
    position: str = "sticky"
    top: str | None = None
    bottom: str | None = None
    offset: int = 0


@dataclass
class MotionEffects:
    scroll_effects: list[ScrollEffect] = field(default_factory=list)
    sticky: StickyEffect | None = None

    def has(self, effect_type: str) -> bool:
        return any(effect.type == effect_type for effect in self.scroll_effects)


@dataclass
class DynamicContent:
    type: str
    source: str
    fallback: str | None = None


@dataclass
class ComponentDescriptors:
    """Everything derived from one node, computed once per export."""

    responsive: ResponsiveSettings
    hover: HoverEffects | None
    animation: EntranceAnimation | None
    motion: MotionEffects | None
    dynamic: DynamicContent | None
    box_model: BoxModel
    box_shadow: BoxShadow | None
    custom_css: str
    tokens: TokenLinks


# =============================================================================
# Helpers
# =============================================================================


def camel_to_kebab(name: str) -> str:
    """Convert a camelCase CSS property to kebab-case."""
    return CAMEL_BOUNDARY.sub(r"\1-\2", name).lower()


def parse_time_ms(value: Any, default: int = 0) -> int:
    """Parse '1.5s' / '300ms' into milliseconds.

    Bare numbers are taken as milliseconds. Anything else yields ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return int(value)
    match = TIME_PATTERN.search(str(value))
    if not match:
        return default
    amount, unit = float(match.group(1)), match.group(2)
    return int(round(amount if unit == "ms" else amount * 1000))


def css_value(value: Any) -> str | None:
    """Render a style value as CSS text, None when empty or unrenderable."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, Mapping):
        rendered = format_dimension_set(parse_shorthand_dimension(value))
        return rendered or None
    if isinstance(value, (int, float)):
        return str(format_number(value))
    if isinstance(value, (list, tuple)):
        return None
    return str(value)


def _filter_fields(styles: Mapping[str, Any] | None) -> dict[str, Any]:
    if not styles:
        return {}
    return {
        name: styles[name]
        for name in RESPONSIVE_FIELDS
        if styles.get(name) not in (None, "")
    }


# =============================================================================
# Extractors
# =============================================================================


def extract_responsive_settings(component: ComponentInfo) -> ResponsiveSettings:
    """Per-breakpoint differences from the desktop layout."""
    analysis = component.advanced_analysis
    if analysis is None or analysis.responsive_styles is None:
        return ResponsiveSettings()

    styles = analysis.responsive_styles
    desktop = _filter_fields(styles.desktop)
    settings = ResponsiveSettings(desktop=desktop)

    for name in BREAKPOINTS:
        filtered = _filter_fields(getattr(styles, name))
        if filtered.get("display") == "none":
            settings.hidden.add(name)
        if name == "desktop":
            continue
        setattr(
            settings,
            name,
            {key: value for key, value in filtered.items() if desktop.get(key) != value},
        )
    return settings


def hover_animation_for(transform: str | None) -> str | None:
    """Category of a hover transform: grow, float or rotate."""
    if not transform:
        return None
    if "scale" in transform:
        return "grow"
    if "translateY" in transform:
        return "float"
    if "rotate" in transform:
        return "rotate"
    return None


def parse_transition(transition: str) -> TransitionEffect:
    """Split 'property duration timing delay' into its parts."""
    parts = transition.split()
    defaults = TransitionEffect()
    return TransitionEffect(
        property=parts[0] if len(parts) > 0 else defaults.property,
        duration=parts[1] if len(parts) > 1 else defaults.duration,
        timing_function=parts[2] if len(parts) > 2 else defaults.timing_function,
        delay=parts[3] if len(parts) > 3 else defaults.delay,
    )


def extract_hover_effects(component: ComponentInfo) -> HoverEffects | None:
    """Diff the hover state against the normal state.

    Returns None when the hover state changes none of the tracked
    properties.
    """
    analysis = component.advanced_analysis
    if analysis is None or analysis.interactive_states is None:
        return None
    states = analysis.interactive_states
    hover, normal = states.hover, states.normal
    if not hover:
        return None

    changed = {
        name: hover.get(name)
        for name in HOVER_FIELDS
        if hover.get(name) not in (None, "") and hover.get(name) != normal.get(name)
    }
    if not changed:
        return None

    effects = HoverEffects(
        transform=changed.get("transform"),
        background_color=changed.get("backgroundColor"),
        color=changed.get("color"),
        border_color=changed.get("borderColor"),
        box_shadow=extract_box_shadow(changed.get("boxShadow")),
        opacity=css_value(changed.get("opacity")),
    )
    effects.animation = hover_animation_for(effects.transform)

    transition = hover.get("transition") or normal.get("transition")
    if isinstance(transition, str) and transition.strip():
        effects.transition = parse_transition(transition)
        match = TIME_PATTERN.search(transition)
        if match:
            effects.transition_ms = parse_time_ms(match.group(0))
    return effects


def map_animation_name(name: str) -> str:
    """Canonical entrance animation for a keyframes name.

    Unrecognized names map to fadeIn rather than being dropped.
    """
    lowered = (name or "").lower()
    for fragment, canonical in ANIMATION_NAMES:
        if fragment in lowered:
            return canonical
    return DEFAULT_ANIMATION


def extract_entrance_animation(component: ComponentInfo) -> EntranceAnimation | None:
    """First observed animation as an entrance animation."""
    analysis = component.advanced_analysis
    behavior = analysis.behavior if analysis is not None else None
    if behavior is None or not behavior.has_animations or not behavior.animations:
        return None

    animation = behavior.animations[0]
    return EntranceAnimation(
        type=map_animation_name(animation.name),
        duration=parse_time_ms(animation.duration, default=DEFAULT_ANIMATION_MS),
        delay=parse_time_ms(animation.delay),
        easing=animation.timing_function or "ease",
    )


def extract_motion_effects(component: ComponentInfo) -> MotionEffects | None:
    """Parallax, sticky positioning and scroll-reveal classes."""
    styles = component.styles
    effects = MotionEffects()

    if styles.get("backgroundAttachment") == "fixed":
        effects.scroll_effects.append(
            ScrollEffect(type="parallax", speed=5, viewport=(0, 100))
        )

    position = styles.get("position")
    if position in ("sticky", "fixed"):
        effects.sticky = StickyEffect(
            position=position,
            top=css_value(styles.get("top")),
            bottom=css_value(styles.get("bottom")),
            offset=0,
        )

    if component.has_class("aos-") or component.has_class("scroll-"):
        effects.scroll_effects.append(
            ScrollEffect(type="fadeIn", speed=5, viewport=(0, 80))
        )

    if not effects.scroll_effects and effects.sticky is None:
        return None
    return effects


def detect_dynamic_content(component: ComponentInfo) -> DynamicContent | None:
    """Template tags, shortcodes or a data-dynamic-content attribute."""
    text = component.text_content or ""
    if "{{" in text or "{%" in text or SHORTCODE_PATTERN.search(text):
        return DynamicContent(type="custom_field", source=text, fallback=text)

    source = component.attributes.get("data-dynamic-content")
    if source:
        return DynamicContent(type="custom_field", source=source)
    return None


def _css_block(selector: str, styles: Mapping[str, Any] | None, indent: str = "") -> str | None:
    lines = []
    for prop, value in (styles or {}).items():
        rendered = css_value(value)
        if rendered is None:
            continue
        lines.append(f"{indent}  {camel_to_kebab(prop)}: {rendered};")
    if not lines:
        return None
    body = "\n".join(lines)
    return f"{indent}{selector} {{\n{body}\n{indent}}}"


def css_selector(component: ComponentInfo) -> str:
    if component.id:
        return f"#{component.id}"
    if component.classes:
        return f".{component.classes[0]}"
    return ".element"


def generate_custom_css(component: ComponentInfo) -> str:
    """Standalone CSS for a node: base, :hover, pseudo-elements and media queries."""
    selector = css_selector(component)
    analysis = component.advanced_analysis
    blocks = [_css_block(selector, component.styles)]

    if analysis is not None:
        if analysis.interactive_states is not None:
            blocks.append(_css_block(f"{selector}:hover", analysis.interactive_states.hover))
        if analysis.pseudo_elements is not None:
            blocks.append(_css_block(f"{selector}::before", analysis.pseudo_elements.before))
            blocks.append(_css_block(f"{selector}::after", analysis.pseudo_elements.after))
        if analysis.responsive_styles is not None:
            for media, styles in (
                (MOBILE_MEDIA, analysis.responsive_styles.mobile),
                (TABLET_MEDIA, analysis.responsive_styles.tablet),
            ):
                inner = _css_block(selector, styles, indent="  ")
                if inner:
                    blocks.append(f"{media} {{\n{inner}\n}}")

    return "\n\n".join(block for block in blocks if block)


def describe_component(
    component: ComponentInfo, token_ref: DesignTokenReference | None = None
) -> ComponentDescriptors:
    """Compute every descriptor for one node.

    Args:
        component: Source node.
        token_ref: Token tables for the export, if any.

    Returns:
        ComponentDescriptors bundle.
    """
    descriptors = ComponentDescriptors(
        responsive=extract_responsive_settings(component),
        hover=extract_hover_effects(component),
        animation=extract_entrance_animation(component),
        motion=extract_motion_effects(component),
        dynamic=detect_dynamic_content(component),
        box_model=extract_box_model(component.styles),
        box_shadow=extract_box_shadow(component.styles),
        custom_css=generate_custom_css(component),
        tokens=link_to_design_tokens(component, token_ref),
    )
    logger.debug(
        "Described <%s> %s: hover=%s animation=%s motion=%s",
        component.tag,
        component.component_type,
        descriptors.hover is not None,
        descriptors.animation is not None,
        descriptors.motion is not None,
    )
    return descriptors
