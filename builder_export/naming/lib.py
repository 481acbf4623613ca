"""Per-target naming tables.

One TargetVocabulary per page builder holds every name that differs between
targets: element/block/module type names, ordered tag/class heuristics,
entrance and hover animation names, and the way responsive, visibility and
style settings are keyed. Exporters look names up here instead of carrying
their own ad hoc maps.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from builder_export.ir import ComponentInfo

CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


class RuleKind(str, Enum):
    """How a TypeRule pattern is matched against a component."""

    TAG = "tag"  # regex, full match on the lowercase tag
    CLASS = "class"  # substring of the class attribute
    TAG_CLASS = "tag_class"  # "tag.class": exact tag and class substring


@dataclass(frozen=True)
class TypeRule:
    kind: RuleKind
    pattern: str
    result: str

    def matches(self, component: ComponentInfo) -> bool:
        if self.kind is RuleKind.TAG:
            return re.fullmatch(self.pattern, component.tag) is not None
        if self.kind is RuleKind.CLASS:
            return component.has_class(self.pattern)
        tag, _, fragment = self.pattern.partition(".")
        return component.tag == tag and component.has_class(fragment)


def match_type_rules(
    component: ComponentInfo, rules: tuple[TypeRule, ...], default: str | None = None
) -> str | None:
    """First matching rule's result, or ``default`` when none match."""
    for rule in rules:
        if rule.matches(component):
            return rule.result
    return default


def _convert_case(name: str, case: str | None) -> str | None:
    if case is None:
        return None
    if case == "camel":
        return name
    separator = "-" if case == "kebab" else "_"
    return CAMEL_BOUNDARY.sub(rf"\1{separator}\2", name).lower()


@dataclass(frozen=True)
class TargetVocabulary:
    """Naming conventions of one page builder.

    Attributes:
        name: Target identifier (registry name).
        type_map: Analyzer component type to target type.
        type_rules: Ordered tag/class heuristics used on a type_map miss.
        container_types: Target types that nest their children.
        animations: Canonical entrance animation to target name.
        default_animation: Used for animations missing from ``animations``.
        hover_animations: Hover category (grow/float/rotate) to target name.
        property_keys: Canonical camelCase CSS property to settings key.
        key_case: Case used for properties missing from ``property_keys``
            (snake, kebab, camel), or None to drop them.
        responsive_pattern: Format for per-breakpoint keys, with ``{key}``
            and ``{suffix}`` fields. None when the target has none.
        breakpoint_suffixes: Breakpoint to key suffix for responsive keys.
        hide_pattern: Format for visibility keys, with a ``{suffix}`` field.
        hide_breakpoints: Breakpoint to suffix for visibility keys.
        hide_value: Value written under a visibility key.
        display_key: Single key listing visible breakpoints, for targets
            that use one instead of per-breakpoint hide flags.
        display_names: Breakpoint to name used in ``display_key`` values.
    """

    name: str
    type_map: dict[str, str] = field(default_factory=dict)
    type_rules: tuple[TypeRule, ...] = ()
    container_types: frozenset[str] = frozenset()
    animations: dict[str, str] = field(default_factory=dict)
    default_animation: str = "fadeIn"
    hover_animations: dict[str, str] = field(default_factory=dict)
    property_keys: dict[str, str] = field(default_factory=dict)
    key_case: str | None = None
    responsive_pattern: str | None = None
    breakpoint_suffixes: dict[str, str] = field(default_factory=dict)
    hide_pattern: str | None = None
    hide_breakpoints: dict[str, str] = field(default_factory=dict)
    hide_value: str = "yes"
    display_key: str | None = None
    display_names: dict[str, str] = field(default_factory=dict)

    def map_type(self, component: ComponentInfo, default: str | None = None) -> str | None:
        """Target type for a component: static map first, then heuristics."""
        mapped = self.type_map.get(component.component_type.lower())
        if mapped is not None:
            return mapped
        return match_type_rules(component, self.type_rules, default)

    def is_container_type(self, target_type: str | None) -> bool:
        return target_type in self.container_types

    def animation_name(self, canonical: str) -> str:
        return self.animations.get(canonical, self.default_animation)

    def hover_animation(self, category: str | None) -> str | None:
        if category is None:
            return None
        return self.hover_animations.get(category)

    def property_key(self, prop: str) -> str | None:
        if prop in self.property_keys:
            return self.property_keys[prop]
        return _convert_case(prop, self.key_case)

    def responsive_key(self, prop: str, breakpoint: str) -> str | None:
        """Settings key for ``prop`` at ``breakpoint``, None if unsupported."""
        suffix = self.breakpoint_suffixes.get(breakpoint)
        key = self.property_key(prop)
        if self.responsive_pattern is None or suffix is None or key is None:
            return None
        return self.responsive_pattern.format(key=key, suffix=suffix)

    def hide_key(self, breakpoint: str) -> str | None:
        if self.display_key is not None:
            return self.display_key
        suffix = self.hide_breakpoints.get(breakpoint)
        if self.hide_pattern is None or suffix is None:
            return None
        return self.hide_pattern.format(suffix=suffix)

    def visibility_settings(self, hidden: set[str]) -> dict[str, str]:
        """Settings hiding the element at each breakpoint in ``hidden``."""
        if not hidden:
            return {}
        if self.display_key is not None:
            visible = [
                name
                for breakpoint, name in self.display_names.items()
                if breakpoint not in hidden
            ]
            return {self.display_key: ",".join(dict.fromkeys(visible))}
        settings = {}
        for breakpoint in sorted(hidden):
            key = self.hide_key(breakpoint)
            if key is not None:
                settings[key] = self.hide_value
        return settings


# =============================================================================
# Shared Rules
# =============================================================================

HEADING = r"h[1-6]"

ENTRANCE_ANIMATIONS = (
    "fadeIn",
    "fadeOut",
    "slideInUp",
    "slideInDown",
    "slideInLeft",
    "slideInRight",
    "zoomIn",
    "zoomOut",
    "rotateIn",
    "flipIn",
    "bounceIn",
)

KEBAB_ANIMATIONS = {
    "fadeIn": "fade-in",
    "slideInUp": "slide-in-up",
    "slideInDown": "slide-in-down",
    "slideInLeft": "slide-in-left",
    "slideInRight": "slide-in-right",
    "zoomIn": "zoom-in",
    "bounceIn": "bounce-in",
    "rotateIn": "rotate-in",
    "flipIn": "flip-in",
}


# =============================================================================
# Elementor
# =============================================================================

ELEMENTOR = TargetVocabulary(
    name="elementor",
    type_map={
        "heading": "heading",
        "text": "text-editor",
        "paragraph": "text-editor",
        "button": "button",
        "image": "image",
        "icon": "icon",
        "spacer": "spacer",
        "divider": "divider",
        "video": "video",
        "html": "html",
    },
    type_rules=(
        TypeRule(RuleKind.TAG, HEADING, "heading"),
        TypeRule(RuleKind.TAG, "p", "text-editor"),
        TypeRule(RuleKind.TAG, "img", "image"),
        TypeRule(RuleKind.TAG, "button", "button"),
        TypeRule(RuleKind.TAG_CLASS, "a.btn", "button"),
        TypeRule(RuleKind.TAG_CLASS, "a.button", "button"),
        TypeRule(RuleKind.TAG, "video", "video"),
        TypeRule(RuleKind.TAG, "hr", "divider"),
    ),
    container_types=frozenset({"section", "column"}),
    animations={
        name: name
        for name in (
            "fadeIn",
            "slideInUp",
            "slideInDown",
            "slideInLeft",
            "slideInRight",
            "zoomIn",
            "rotateIn",
            "bounceIn",
        )
    },
    default_animation="fadeIn",
    hover_animations={"grow": "grow", "float": "float", "rotate": "rotate"},
    property_keys={
        "padding": "_padding",
        "margin": "_margin",
        "fontSize": "typography_font_size",
        "lineHeight": "typography_line_height",
        "textAlign": "align",
        "width": "_element_custom_width",
        "flexDirection": "flex_direction",
        "justifyContent": "flex_justify_content",
        "alignItems": "flex_align_items",
        "color": "color",
        "backgroundColor": "_background_color",
        "fontFamily": "typography_font_family",
    },
    responsive_pattern="{key}_{suffix}",
    breakpoint_suffixes={"laptop": "laptop", "tablet": "tablet", "mobile": "mobile"},
    hide_pattern="hide_{suffix}",
    hide_breakpoints={
        "desktop": "desktop",
        "laptop": "laptop",
        "tablet": "tablet",
        "mobile": "mobile",
    },
    hide_value="yes",
)


# =============================================================================
# Gutenberg
# =============================================================================

GUTENBERG = TargetVocabulary(
    name="gutenberg",
    type_map={
        "paragraph": "core/paragraph",
        "text": "core/paragraph",
        "heading": "core/heading",
        "list": "core/list",
        "quote": "core/quote",
        "code": "core/code",
        "preformatted": "core/preformatted",
        "image": "core/image",
        "gallery": "core/gallery",
        "audio": "core/audio",
        "video": "core/video",
        "file": "core/file",
        "cover": "core/cover",
        "hero": "core/cover",
        "button": "core/button",
        "buttons": "core/buttons",
        "columns": "core/columns",
        "column": "core/column",
        "group": "core/group",
        "container": "core/group",
        "card": "core/group",
        "row": "core/row",
        "stack": "core/stack",
        "separator": "core/separator",
        "spacer": "core/spacer",
        "shortcode": "core/shortcode",
        "html": "core/html",
        "calendar": "core/calendar",
        "search": "core/search",
        "navigation": "core/navigation",
        "social-links": "core/social-links",
        "site-logo": "core/site-logo",
        "site-title": "core/site-title",
        "site-tagline": "core/site-tagline",
        "post-title": "core/post-title",
        "post-content": "core/post-content",
        "post-excerpt": "core/post-excerpt",
        "post-featured-image": "core/post-featured-image",
        "embed": "core/embed",
    },
    type_rules=(
        TypeRule(RuleKind.TAG, HEADING, "core/heading"),
        TypeRule(RuleKind.TAG, "p", "core/paragraph"),
        TypeRule(RuleKind.TAG, "img", "core/image"),
        TypeRule(RuleKind.TAG, "button", "core/button"),
        TypeRule(RuleKind.TAG_CLASS, "a.btn", "core/button"),
        TypeRule(RuleKind.TAG, "ul|ol", "core/list"),
        TypeRule(RuleKind.TAG, "blockquote", "core/quote"),
        TypeRule(RuleKind.TAG, "nav", "core/navigation"),
        TypeRule(RuleKind.TAG, "hr", "core/separator"),
        TypeRule(RuleKind.TAG, "video", "core/video"),
        TypeRule(RuleKind.TAG, "pre", "core/preformatted"),
        TypeRule(RuleKind.CLASS, "columns", "core/columns"),
        TypeRule(RuleKind.CLASS, "row", "core/columns"),
        TypeRule(RuleKind.CLASS, "column", "core/column"),
        TypeRule(RuleKind.CLASS, "col-", "core/column"),
        TypeRule(RuleKind.CLASS, "group", "core/group"),
        TypeRule(RuleKind.CLASS, "container", "core/group"),
        TypeRule(RuleKind.CLASS, "cover", "core/cover"),
        TypeRule(RuleKind.CLASS, "hero", "core/cover"),
    ),
    container_types=frozenset(
        {
            "core/group",
            "core/columns",
            "core/column",
            "core/cover",
            "core/buttons",
            "core/row",
            "core/stack",
        }
    ),
    animations={name: name for name in ENTRANCE_ANIMATIONS},
    default_animation="fadeIn",
    property_keys={
        "color": "textColor",
        "backgroundColor": "backgroundColor",
        "fontSize": "fontSize",
        "textAlign": "textAlign",
    },
)


# =============================================================================
# Oxygen
# =============================================================================

OXYGEN = TargetVocabulary(
    name="oxygen",
    type_map={
        "section": "ct_section",
        "div": "ct_div_block",
        "container": "ct_div_block",
        "card": "ct_div_block",
        "link-wrapper": "ct_link",
        "heading": "ct_headline",
        "text": "ct_text_block",
        "paragraph": "ct_text_block",
        "rich-text": "ct_rich_text",
        "image": "ct_image",
        "video": "ct_video",
        "icon": "ct_fancy_icon",
        "svg": "ct_svg",
        "button": "oxy_button",
        "link": "ct_link_text",
        "code-block": "ct_code_block",
        "shortcode": "ct_shortcode",
        "post-title": "oxy-post-title",
        "post-content": "oxy-post-content",
        "post-meta": "oxy-post-meta-data",
        "post-featured-image": "oxy-featured-image",
        "comments": "oxy-comments",
        "menu": "oxy-nav-menu",
        "navigation": "oxy-nav-menu",
        "slider": "oxy-easy-posts",
        "tabs": "oxy-tabs",
        "accordion": "oxy-accordion",
        "modal": "oxy-modal",
        "repeater": "oxy-posts-grid",
        "gallery": "oxy-gallery",
        "map": "oxy-map",
        "progress-bar": "oxy-progress-bar",
        "counter": "oxy-counter",
        "slider-builder": "oxy-slider-builder",
        "header-builder": "oxy-header-builder",
        "content-timeline": "oxy-content-timeline",
        "pricing-box": "oxy-pricing-box",
        "login-form": "oxy-login-form",
        "search-form": "oxy-search-form",
    },
    type_rules=(
        TypeRule(RuleKind.TAG, "section", "ct_section"),
        TypeRule(RuleKind.TAG, "div", "ct_div_block"),
        TypeRule(RuleKind.TAG, HEADING, "ct_headline"),
        TypeRule(RuleKind.TAG, "p", "ct_text_block"),
        TypeRule(RuleKind.TAG, "img", "ct_image"),
        TypeRule(RuleKind.TAG, "video", "ct_video"),
        TypeRule(RuleKind.TAG, "button", "oxy_button"),
        TypeRule(RuleKind.TAG_CLASS, "a.btn", "oxy_button"),
        TypeRule(RuleKind.TAG, "a", "ct_link_text"),
        TypeRule(RuleKind.TAG, "nav", "oxy-nav-menu"),
    ),
    container_types=frozenset({"ct_section", "ct_div_block", "ct_link"}),
    animations=KEBAB_ANIMATIONS,
    default_animation="fade-in",
    hover_animations={"grow": "scale(1.05)", "float": "translateY(-5px)", "rotate": "rotate(5deg)"},
    property_keys={"fontSize": "font-size"},
    key_case="kebab",
    responsive_pattern="{key}-{suffix}",
    breakpoint_suffixes={"tablet": "tablet", "mobile": "mobile"},
    hide_pattern="hide-{suffix}",
    hide_breakpoints={"tablet": "tablet", "mobile": "mobile"},
    hide_value="true",
)


# =============================================================================
# Beaver Builder
# =============================================================================

BEAVER_BUILDER = TargetVocabulary(
    name="beaver-builder",
    type_map={
        "heading": "heading",
        "paragraph": "rich-text",
        "text": "rich-text",
        "html": "html",
        "image": "photo",
        "gallery": "gallery",
        "video": "video",
        "slider": "slideshow",
        "button": "button",
        "cta": "callout",
        "form": "contact-form",
        "subscribe": "subscribe-form",
        "accordion": "accordion",
        "tabs": "tabs",
        "post-grid": "post-grid",
        "post-slider": "post-slider",
        "post-carousel": "post-carousel",
        "testimonials": "testimonials",
        "social-buttons": "social-buttons",
        "sidebar": "sidebar",
        "menu": "menu",
        "search": "search",
        "separator": "separator",
        "spacer": "spacer",
        "countdown": "countdown",
        "map": "map",
        "icon": "icon",
        "icon-group": "icon-group",
        "pricing-table": "pricing-table",
        "content-slider": "content-slider",
    },
    type_rules=(
        TypeRule(RuleKind.TAG, HEADING, "heading"),
        TypeRule(RuleKind.TAG, "p", "rich-text"),
        TypeRule(RuleKind.TAG, "img", "photo"),
        TypeRule(RuleKind.TAG, "button", "button"),
        TypeRule(RuleKind.TAG_CLASS, "a.btn", "button"),
        TypeRule(RuleKind.TAG, "form", "contact-form"),
        TypeRule(RuleKind.TAG, "hr", "separator"),
    ),
    container_types=frozenset({"row", "column-group", "column"}),
    animations={
        "fadeIn": "fade-in",
        "slideInUp": "slide-up",
        "slideInDown": "slide-down",
        "slideInLeft": "slide-left",
        "slideInRight": "slide-right",
        "zoomIn": "zoom-in",
        "bounceIn": "bounce-in",
        "rotateIn": "rotate-in",
        "flipIn": "flip-in",
    },
    default_animation="fade-in",
    hover_animations={"grow": "scale(1.05)", "float": "translateY(-5px)", "rotate": "rotate(5deg)"},
    property_keys={
        "padding": "padding",
        "margin": "margin",
        "fontSize": "font_size_unit",
        "lineHeight": "line_height",
        "textAlign": "align",
    },
    responsive_pattern="{key}_{suffix}",
    breakpoint_suffixes={"mobile": "responsive"},
    display_key="responsive_display",
    display_names={"desktop": "desktop", "tablet": "medium", "mobile": "mobile"},
)


VOCABULARIES: dict[str, TargetVocabulary] = {
    vocabulary.name: vocabulary
    for vocabulary in (ELEMENTOR, GUTENBERG, OXYGEN, BEAVER_BUILDER)
}


def get_vocabulary(target: str) -> TargetVocabulary:
    """Resolve a target's vocabulary.

    Raises:
        KeyError: If the target has no vocabulary.
    """
    try:
        return VOCABULARIES[target]
    except KeyError:
        available = ", ".join(sorted(VOCABULARIES))
        raise KeyError(f"Unknown target '{target}'. Available: {available}") from None
