"""Oxygen Builder exporter.

Oxygen stores a page as a tree of numbered components, each with a flat
``options`` dict of kebab-case CSS keys plus element-specific options.
Class names used on the page are collected into a class registry, and the
page can also be emitted as ``[oxygen ...]`` shortcodes.
"""

import copy
import json
from html import escape
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from builder_export.behavior import ComponentDescriptors, css_value
from builder_export.dimension import BoxShadow, DimensionSet, format_number
from builder_export.exporters.lib import (
    BuilderExporter,
    ColumnPlan,
    background_image,
    font_for_context,
    heading_level,
    html_of,
    icon_class,
    link_of,
    plan_columns,
    register_exporter,
    repeated_signatures,
    text_of,
)
from builder_export.ir import ComponentInfo, TextStyle, TypographySystem
from builder_export.tokens import is_transparent_color, normalize_color_to_hex, palette_tokens
from builder_export.widgets import (
    CarouselWidget,
    GalleryWidget,
    IconListWidget,
    IconWidget,
    PricingPlan,
    PricingTableWidget,
    SpecializedWidget,
    TestimonialWidget,
    WidgetKind,
)

# Style properties copied verbatim into options, kebab-cased
STYLE_PROPERTIES = (
    "backgroundColor",
    "color",
    "fontSize",
    "fontFamily",
    "fontWeight",
    "lineHeight",
    "letterSpacing",
    "textTransform",
    "textAlign",
    "width",
    "height",
    "minHeight",
    "maxWidth",
    "borderRadius",
    "border",
    "opacity",
    "zIndex",
)

FLEX_PROPERTIES = ("flexDirection", "justifyContent", "alignItems", "flexWrap", "gap")
GRID_PROPERTIES = ("gridTemplateColumns", "gridTemplateRows", "gap")

# Element option receiving dynamic data
DYNAMIC_OPTIONS = {"ct_headline": "ct_content", "ct_text_block": "ct_content", "oxy_button": "button_text"}

# Breakpoint name used in the class registry media map
CLASS_MEDIA = {"tablet": "tablet", "mobile": "phone-portrait"}

TYPOGRAPHY_SELECTORS = ("h1", "h2", "h3", "h4", "h5", "h6")


# =============================================================================
# Document Model
# =============================================================================


class OxygenNode(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int = Field(ge=1)
    name: str = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)
    children: list["OxygenNode"] = Field(default_factory=list)


class OxygenClass(BaseModel):
    key: str = Field(min_length=1)
    original: dict[str, Any] = Field(default_factory=dict)
    media: dict[str, dict[str, Any]] = Field(default_factory=dict)


class OxygenStylesheet(BaseModel):
    id: str
    name: str
    parent: str = ""
    css: str = ""


class OxygenReusableBlock(BaseModel):
    id: int
    name: str
    type: str
    content: list[OxygenNode] = Field(default_factory=list)


class OxygenTemplate(BaseModel):
    id: int
    name: str
    type: Literal["single", "archive", "page", "header", "footer"] = "page"
    content: list[OxygenNode] = Field(default_factory=list)
    conditions: list[Any] = Field(default_factory=list)


class OxygenColorClass(BaseModel):
    className: str
    color: str
    name: str


class OxygenDocument(BaseModel):
    """Top level of an Oxygen export."""

    model_config = ConfigDict(extra="allow")

    tree: list[OxygenNode] = Field(default_factory=list)
    classes: list[OxygenClass] = Field(default_factory=list)
    stylesheets: list[OxygenStylesheet] = Field(default_factory=list)
    reusable_blocks: list[OxygenReusableBlock] = Field(default_factory=list)
    templates: list[OxygenTemplate] = Field(default_factory=list)
    color_classes: list[OxygenColorClass] | None = None
    typography: dict[str, Any] | None = None


# =============================================================================
# Helpers
# =============================================================================


def _kebab_options(vocabulary, styles: dict[str, Any], properties) -> dict[str, str]:
    options = {}
    for prop in properties:
        value = css_value(styles.get(prop))
        key = vocabulary.property_key(prop)
        if value is not None and key is not None:
            options[key] = value
    return options


def _sides(prefix: str, dimensions: DimensionSet | None) -> dict[str, str]:
    if dimensions is None:
        return {}
    return {
        f"{prefix}-{side}": value.css()
        for side, value in (
            ("top", dimensions.top),
            ("right", dimensions.right),
            ("bottom", dimensions.bottom),
            ("left", dimensions.left),
        )
        if value is not None
    }


def _shadow(shadow: BoxShadow, suffix: str = "") -> dict[str, Any]:
    options = {
        "box-shadow-horizontal-offset": format_number(shadow.horizontal),
        "box-shadow-vertical-offset": format_number(shadow.vertical),
        "box-shadow-blur": format_number(shadow.blur),
        "box-shadow-spread": format_number(shadow.spread),
        "box-shadow-color": shadow.color,
    }
    if shadow.inset:
        options["box-shadow-inset"] = "inset"
    return {f"{key}{suffix}": value for key, value in options.items()}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _attribute(value: Any) -> str:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return escape(str(value), quote=True)


def node_to_shortcode(node: dict[str, Any]) -> str:
    """Render one component (and its children) as an ``[oxygen]`` shortcode."""
    attrs = " ".join(
        f'{key}="{_attribute(value)}"' for key, value in (node.get("options") or {}).items()
    )
    opening = f'[oxygen component="{node["name"]}" id="{node["id"]}"'
    if attrs:
        opening = f"{opening} {attrs}"
    children = node.get("children") or []
    if not children:
        return f"{opening}]"
    return f"{opening}]{tree_to_shortcodes(children)}[/oxygen]"


def tree_to_shortcodes(tree: list[dict[str, Any]]) -> str:
    """Render a component tree as newline-separated shortcodes."""
    return "\n".join(node_to_shortcode(node) for node in tree)


def _typography_rule(style: TextStyle | None) -> dict[str, Any] | None:
    if style is None:
        return None
    return {
        "font-family": None if style.font_family == "inherit" else style.font_family,
        "font-size": style.font_size,
        "font-weight": str(style.font_weight),
        "line-height": str(style.line_height),
        "letter-spacing": style.letter_spacing,
        "color": style.color,
    }


# =============================================================================
# Exporter
# =============================================================================


@register_exporter
class OxygenExporter(BuilderExporter):
    """Export component trees as Oxygen component trees.

    Top-level containers become ``ct_section`` components holding one
    ``ct_div_block`` per column; nested containers become nested
    ``ct_div_block`` components. Ids are sequential integers starting at 1,
    and ``ct_parent`` records the enclosing component (0 at the top).
    """

    @property
    def name(self) -> str:
        return "oxygen"

    @property
    def content_key(self) -> str:
        return "tree"

    @property
    def document_model(self) -> type[BaseModel]:
        return OxygenDocument

    def reset(self) -> None:
        super().reset()
        self.classes: dict[str, dict[str, Any]] = {}
        self.custom_css: list[str] = []

    def serialize_native(self, document: dict[str, Any]) -> str:
        return tree_to_shortcodes(document.get("tree", []))

    def build_document(self, components: list[ComponentInfo]) -> dict[str, Any]:
        tree = [
            self._top_level(component, str(index))
            for index, component in enumerate(components)
        ]
        document: dict[str, Any] = {
            "tree": tree,
            "classes": list(self.classes.values()),
            "stylesheets": [
                {
                    "id": "main",
                    "name": "Main Stylesheet",
                    "parent": "",
                    "css": "\n\n".join(self.custom_css),
                }
            ],
            "reusable_blocks": self._reusable_blocks(components, tree),
            "templates": [
                {
                    "id": 1,
                    "name": "Converted Template",
                    "type": "page",
                    "content": copy.deepcopy(tree),
                    "conditions": [],
                }
            ],
        }
        if self.options.palette is not None:
            document["color_classes"] = self._color_classes()
        if self.options.typography is not None:
            document["typography"] = self._typography(self.options.typography)
        return document

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def _node(self, name: str, parent_id: int, options: dict[str, Any]) -> dict[str, Any]:
        node_id = self.next_id()
        options = {"ct_id": node_id, "ct_parent": parent_id, **options}
        options = {key: value for key, value in options.items() if value is not None}
        options.setdefault("selector", f"{name.replace('_', '-')}-{node_id}")
        return {"id": node_id, "name": name, "options": options, "children": []}

    def _classify(self, component: ComponentInfo) -> tuple[SpecializedWidget | None, str | None]:
        widget = self.detect_widget(component)
        element_type = None if widget else self.vocabulary.map_type(component)
        return widget, element_type

    def _top_level(self, component: ComponentInfo, path: str) -> dict[str, Any]:
        widget, element_type = self._classify(component)
        if widget is None and self.is_container(component, element_type):
            section = self._node("ct_section", 0, {})
            self.map_node(path, section["id"])
            section["options"].update(
                self._options(component, path, "ct_section", {"section-width": "page-width"})
            )
            section["children"] = self._columns(component, path, section["id"], synthesize=True)
            return section

        section = self._node("ct_section", 0, {"section-width": "page-width"})
        column = self._column_node(ColumnPlan(size=100), section["id"])
        column["children"] = [self._element(component, path, column["id"], widget, element_type)]
        section["children"] = [column]
        return section

    def _child(self, component: ComponentInfo, path: str, parent_id: int) -> dict[str, Any]:
        widget, element_type = self._classify(component)
        if widget is None and self.is_container(component, element_type):
            name = "ct_link" if element_type == "ct_link" else "ct_div_block"
            block = self._node(name, parent_id, {})
            self.map_node(path, block["id"])
            block["options"].update(self._options(component, path, name, {}))
            block["children"] = self._columns(component, path, block["id"], synthesize=False)
            return block
        return self._element(component, path, parent_id, widget, element_type)

    def _columns(
        self, component: ComponentInfo, path: str, parent_id: int, synthesize: bool
    ) -> list[dict[str, Any]]:
        plans = plan_columns(component, path)
        if len(plans) == 1 and plans[0].component is None and not synthesize:
            return [self._child(child, child_path, parent_id) for child_path, child in plans[0].items]
        columns = []
        for plan in plans:
            column = self._column_node(plan, parent_id)
            column["children"] = [
                self._child(child, child_path, column["id"]) for child_path, child in plan.items
            ]
            columns.append(column)
        return columns

    def _column_node(self, plan: ColumnPlan, parent_id: int) -> dict[str, Any]:
        defaults = {"width": str(format_number(plan.size)), "width-unit": "%"}
        column = self._node("ct_div_block", parent_id, dict(defaults))
        if plan.component is not None:
            self.map_node(plan.path, column["id"])
            column["options"].update(self._options(plan.component, plan.path, "ct_div_block", defaults))
        return column

    def _element(
        self,
        component: ComponentInfo,
        path: str,
        parent_id: int,
        widget: SpecializedWidget | None,
        element_type: str | None,
    ) -> dict[str, Any]:
        if widget is not None:
            return self._specialized(component, path, parent_id, widget)

        name = element_type or ("ct_text_block" if html_of(component) else "ct_div_block")
        node = self._node(name, parent_id, {})
        self.absorb(component, path, node["id"])
        node["options"].update(
            self._options(component, path, name, self._type_defaults(component, name))
        )
        return node

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def _type_defaults(self, component: ComponentInfo, name: str) -> dict[str, Any]:
        attributes = component.attributes
        text = text_of(component)

        if name == "ct_headline":
            return {"tag": f"h{heading_level(component)}", "ct_content": html_of(component)}
        if name == "ct_text_block":
            return {"ct_content": html_of(component)}
        if name == "ct_rich_text":
            return {"ct_content": component.inner_html or text}
        if name == "ct_image":
            return {
                "image_type": 2,
                "src": attributes.get("src", ""),
                "attachment_url": attributes.get("src", ""),
                "alt": attributes.get("alt", ""),
            }
        if name == "ct_video":
            return {"src": attributes.get("src", ""), "embed_src": attributes.get("src", "")}
        if name == "oxy_button":
            return {
                "button_text": text or "Button",
                "button_link": link_of(component) or "#",
                "button_size": "medium",
                "button_style": "primary",
                "button_target": attributes.get("target", "_self"),
            }
        if name in ("ct_link_text", "ct_link"):
            return {
                "url": link_of(component) or "#",
                "target": attributes.get("target", "_self"),
                "ct_content": text,
            }
        if name == "oxy-nav-menu":
            return {"menu_id": "", "direction": "horizontal", "dropdown_arrow": "true", "mobile_icon": "true"}
        if name == "oxy-post-title":
            return {"tag": "h1"}
        if name == "oxy-featured-image":
            return {"size": "large"}
        if name == "oxy-tabs":
            return {"active_tab": 1, "horizontal_vertical": "horizontal"}
        if name == "oxy-accordion":
            return {"initial_open": 1, "toggle_all": "off"}
        if name == "oxy-modal":
            return {"trigger_type": "click", "close_button": "true"}
        if name == "oxy-map":
            return {"address": text, "zoom": 14, "height": 400}
        if name == "ct_code_block":
            return {"code-php": html_of(component)}
        if name == "ct_shortcode":
            return {"full_shortcode": text}
        if name == "ct_fancy_icon":
            return {"icon-id": "FontAwesomeicon-star"}
        return {}

    def _options(
        self,
        component: ComponentInfo,
        path: str,
        name: str,
        defaults: dict[str, Any],
    ) -> dict[str, Any]:
        """Assemble options: defaults, styles, descriptors, then tokens."""
        descriptors = self.describe(component)
        options = dict(defaults)
        self._style_options(options, component, descriptors)
        self._descriptor_options(options, name, descriptors)
        self._token_options(options, descriptors)
        if component.id:
            options["selector"] = component.id
        if component.classes:
            options["classes"] = list(component.classes)
            self._register_classes(component, descriptors)
        if descriptors.custom_css:
            self.custom_css.append(descriptors.custom_css)
        return {key: value for key, value in options.items() if value is not None}

    def _style_options(
        self, options: dict[str, Any], component: ComponentInfo, descriptors: ComponentDescriptors
    ) -> None:
        styles = component.styles
        vocabulary = self.vocabulary
        options.update(_kebab_options(vocabulary, styles, STYLE_PROPERTIES))
        for key in ("background-color", "color"):
            if is_transparent_color(options.get(key)):
                del options[key]
        image = background_image(component)
        if image:
            options["background-image"] = image
        box = descriptors.box_model
        options.update(_sides("padding", box.padding))
        options.update(_sides("margin", box.margin))

        display = styles.get("display")
        if display in ("flex", "inline-flex"):
            options["display"] = "flex"
            options.update(_kebab_options(vocabulary, styles, FLEX_PROPERTIES))
        elif display == "grid":
            options["display"] = "grid"
            options.update(_kebab_options(vocabulary, styles, GRID_PROPERTIES))

    def _descriptor_options(
        self, options: dict[str, Any], name: str, descriptors: ComponentDescriptors
    ) -> None:
        vocabulary = self.vocabulary

        for breakpoint, overrides in descriptors.responsive.overrides().items():
            for prop, value in overrides.items():
                key = vocabulary.responsive_key(prop, breakpoint)
                rendered = css_value(value)
                if key is not None and rendered is not None:
                    options[key] = rendered
        options.update(vocabulary.visibility_settings(descriptors.responsive.hidden))

        hover = descriptors.hover
        if hover is not None:
            if hover.background_color:
                options["background-color-hover"] = hover.background_color
            if hover.color:
                options["color-hover"] = hover.color
            if hover.border_color:
                options["border-color-hover"] = hover.border_color
            transform = vocabulary.hover_animation(hover.animation) or hover.transform
            if transform and transform != "none":
                options["transform-hover"] = transform
            if hover.box_shadow is not None:
                options.update(_shadow(hover.box_shadow, suffix="-hover"))
            if hover.transition is not None:
                transition = hover.transition
                options["transition"] = (
                    f"{transition.property} {transition.duration} {transition.timing_function}"
                )

        entrance = descriptors.animation
        if entrance is not None:
            options["animation-name"] = vocabulary.animation_name(entrance.type)
            options["animation-duration"] = f"{entrance.duration}ms"
            options["animation-delay"] = f"{entrance.delay}ms"
            options["animation-timing-function"] = entrance.easing

        motion = descriptors.motion
        if motion is not None:
            if motion.scroll_effects:
                effect = motion.scroll_effects[0]
                options["scroll-effect-type"] = effect.type
                options["scroll-effect-direction"] = effect.direction
                options["scroll-effect-speed"] = effect.speed
            if motion.sticky is not None:
                options["position"] = "sticky"
                options["top"] = motion.sticky.top
                options["bottom"] = motion.sticky.bottom

        if descriptors.box_shadow is not None:
            options.update(_shadow(descriptors.box_shadow))

        dynamic = descriptors.dynamic
        if dynamic is not None and name in DYNAMIC_OPTIONS:
            key = dynamic.source.strip("{}%[] ")
            options[DYNAMIC_OPTIONS[name]] = f'[oxygen data="meta" key="{escape(key, quote=True)}"]'

    def _token_options(self, options: dict[str, Any], descriptors: ComponentDescriptors) -> None:
        """Replace literal colors with palette color classes."""
        links = descriptors.tokens
        for prop, key in (("color", "color"), ("backgroundColor", "background-color")):
            token = links.color_tokens.get(prop)
            if token:
                options[f"{key}-class"] = f"color-{token}"
                options.pop(key, None)
        font = links.font_tokens.get("fontFamily")
        if font:
            options["font-family"] = font

    def _register_classes(self, component: ComponentInfo, descriptors: ComponentDescriptors) -> None:
        """Record each class name the first time it appears with styles."""
        if not component.styles:
            return
        original = _kebab_options(self.vocabulary, component.styles, STYLE_PROPERTIES)
        original.update(_sides("padding", descriptors.box_model.padding))
        original.update(_sides("margin", descriptors.box_model.margin))
        media = {}
        for breakpoint, overrides in descriptors.responsive.overrides().items():
            if breakpoint in CLASS_MEDIA and overrides:
                media[CLASS_MEDIA[breakpoint]] = _kebab_options(
                    self.vocabulary, overrides, list(overrides)
                )
        for class_name in component.classes:
            if class_name not in self.classes:
                self.classes[class_name] = {"key": class_name, "original": original, "media": media}

    # -------------------------------------------------------------------------
    # Specialized Widgets
    # -------------------------------------------------------------------------

    def _specialized(
        self,
        component: ComponentInfo,
        path: str,
        parent_id: int,
        detected: SpecializedWidget,
    ) -> dict[str, Any]:
        widget = detected.widget
        if detected.kind is WidgetKind.ICON_LIST:
            return self._icon_list_block(component, path, parent_id, widget)
        if detected.kind is WidgetKind.TESTIMONIAL and len(widget.testimonials) > 1:
            return self._group_block(
                component, path, parent_id, "oxy-testimonial",
                [self._testimonial_options(item) for item in widget.testimonials],
            )
        if detected.kind is WidgetKind.PRICING_TABLE and len(widget.plans) > 1:
            return self._group_block(
                component, path, parent_id, "oxy-pricing-box",
                [self._plan_options(plan, widget) for plan in widget.plans],
            )

        converters = {
            WidgetKind.ICON: self._icon_widget,
            WidgetKind.GALLERY: self._gallery_widget,
            WidgetKind.CAROUSEL: self._carousel_widget,
            WidgetKind.TESTIMONIAL: self._testimonial_widget,
            WidgetKind.PRICING_TABLE: self._pricing_widget,
        }
        name, defaults = converters[detected.kind](component, widget)
        node = self._node(name, parent_id, {})
        self.absorb(component, path, node["id"])
        node["options"].update(self._options(component, path, name, defaults))
        return node

    def _group_block(
        self,
        component: ComponentInfo,
        path: str,
        parent_id: int,
        name: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Div block holding one generated component per item."""
        block = self._node("ct_div_block", parent_id, {})
        self.absorb(component, path, block["id"])
        block["options"].update(
            self._options(component, path, "ct_div_block", {"display": "flex", "flex-direction": "row"})
        )
        for options in children:
            child = self._node(name, block["id"], {})
            child["options"].update(options)
            block["children"].append(child)
        return block

    def _icon_widget(self, component: ComponentInfo, widget: IconWidget) -> tuple[str, dict]:
        css = icon_class(widget.icon, widget.library, component.classes)
        options: dict[str, Any] = {
            "icon-id": f"FontAwesomeicon-{widget.icon.removeprefix('fa-')}",
            "icon_set": widget.library,
            "icon_class": css,
            "icon-size": widget.size,
            "icon-color": widget.color,
            "icon-color-hover": widget.hover_color,
            "alignment": widget.alignment,
        }
        if widget.link:
            options["icon_link"] = widget.link
            options["icon_link_target"] = widget.link_target or "_self"
        if widget.rotation:
            options["transform"] = f"rotate({format_number(widget.rotation)}deg)"
        return "ct_fancy_icon", options

    def _icon_list_block(
        self, component: ComponentInfo, path: str, parent_id: int, widget: IconListWidget
    ) -> dict[str, Any]:
        """Div block with an icon and a text block per list item."""
        vertical = widget.layout != "horizontal"
        block = self._node("ct_div_block", parent_id, {})
        self.absorb(component, path, block["id"])
        block["options"].update(
            self._options(
                component,
                path,
                "ct_div_block",
                {"display": "flex", "flex-direction": "column" if vertical else "row", "gap": f"{widget.spacing}px"},
            )
        )
        for item in widget.items:
            row = self._node("ct_div_block", block["id"], {"display": "flex", "flex-direction": "row"})
            icon = self._node(
                "ct_fancy_icon",
                row["id"],
                {"icon_class": icon_class(item.icon, item.library), "icon-color": item.icon_color},
            )
            text_name = "ct_link_text" if item.link else "ct_text_block"
            text_options: dict[str, Any] = {"ct_content": item.text}
            if item.link:
                text_options["url"] = item.link
            text = self._node(text_name, row["id"], text_options)
            row["children"] = [icon, text]
            block["children"].append(row)
        return block

    def _gallery_widget(self, component: ComponentInfo, widget: GalleryWidget) -> tuple[str, dict]:
        return "oxy-gallery", {
            "images": [
                {"url": image.url, "alt": image.alt, "title": image.title, "caption": image.caption}
                for image in widget.images
            ],
            "layout": widget.layout,
            "columns": widget.desktop_columns,
            "gap": widget.gap,
            "lightbox": _flag(widget.lightbox),
            "show_captions": _flag(widget.captions),
            "hover_effect": widget.hover_effect,
            "lazy_load": _flag(widget.lazy_load),
        }

    def _carousel_widget(self, component: ComponentInfo, widget: CarouselWidget) -> tuple[str, dict]:
        return "oxy-slider-builder", {
            "slides": [
                {
                    "image": slide.image,
                    "title": slide.title,
                    "subtitle": slide.subtitle,
                    "content": slide.content,
                    "link": slide.link,
                }
                for slide in widget.slides
            ],
            "autoplay": _flag(widget.autoplay),
            "autoplay_speed": widget.autoplay_speed,
            "navigation": _flag(widget.arrows),
            "pagination": _flag(widget.dots),
            "transition": widget.effect,
            "speed": widget.speed,
            "loop": _flag(widget.infinite),
            "slides_to_show": widget.slides_to_show,
        }

    def _testimonial_options(self, item) -> dict[str, Any]:
        return {
            "testimonial_text": item.content,
            "testimonial_author": item.author_name,
            "testimonial_author_info": item.author_title,
            "testimonial_image": item.author_image,
            "testimonial_rating": item.rating,
        }

    def _testimonial_widget(
        self, component: ComponentInfo, widget: TestimonialWidget
    ) -> tuple[str, dict]:
        options = self._testimonial_options(widget.testimonials[0])
        options["testimonial_layout"] = widget.alignment
        return "oxy-testimonial", options

    def _plan_options(self, plan: PricingPlan, table: PricingTableWidget) -> dict[str, Any]:
        price = format_number(plan.price)
        return {
            "title": plan.title,
            "price": f"{table.currency}{price}" if table.currency_position == "before" else f"{price}{table.currency}",
            "period": table.period,
            "features": "\n".join(feature.text for feature in plan.features if feature.included),
            "button_text": plan.button_text,
            "button_url": plan.button_link,
            "highlighted": _flag(plan.highlighted),
            "ribbon_text": plan.ribbon,
        }

    def _pricing_widget(self, component: ComponentInfo, widget: PricingTableWidget) -> tuple[str, dict]:
        return "oxy-pricing-box", self._plan_options(widget.plans[0], widget)

    # -------------------------------------------------------------------------
    # Reusable Blocks & Globals
    # -------------------------------------------------------------------------

    def _renumber(self, node: dict[str, Any], parent_id: int) -> dict[str, Any]:
        node_id = self.next_id()
        node["id"] = node_id
        node["options"]["ct_id"] = node_id
        node["options"]["ct_parent"] = parent_id
        for child in node.get("children", []):
            self._renumber(child, node_id)
        return node

    def _reusable_blocks(
        self, components: list[ComponentInfo], tree: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """Repeated top-level component/tag signatures as reusable blocks."""
        if not self.options.extract_reusable:
            return []
        roots = list(zip(components, tree))
        repeated = repeated_signatures(
            roots,
            lambda pair: f"{pair[0].component_type}:{pair[0].tag}",
            self.options.thresholds.pattern_min_occurrences,
        )
        return [
            {
                "id": index,
                "name": f"Reusable {signature}",
                "type": signature,
                "content": [self._renumber(copy.deepcopy(node), 0)],
            }
            for index, (signature, (_, node)) in enumerate(repeated, start=1)
        ]

    def _color_classes(self) -> list[dict[str, str]]:
        return [
            {
                "className": f"color-{token}",
                "color": normalize_color_to_hex(color.hex),
                "name": color.name or token.replace("-", " ").title(),
            }
            for token, color in palette_tokens(self.options.palette)
        ]

    def _typography(self, typography: TypographySystem) -> dict[str, Any]:
        settings = typography.global_settings
        body = font_for_context(typography, "body")
        heading = font_for_context(typography, "heading") or body
        styles = typography.text_styles
        selectors = {level: _typography_rule(getattr(styles, level)) for level in TYPOGRAPHY_SELECTORS}
        selectors["p"] = _typography_rule(styles.body)
        selectors["a"] = _typography_rule(styles.link)
        return {
            "global_settings": {
                "base_font_family": body.name if body else settings.base_font_family,
                "base_font_size": f"{format_number(settings.base_font_size)}px",
                "base_line_height": str(format_number(settings.base_line_height)),
                "base_color": settings.base_color,
                "heading_font_family": (
                    heading.name if heading else settings.heading_font_family or "sans-serif"
                ),
                "heading_font_weight": str(settings.heading_font_weight or 700),
                "heading_color": settings.heading_color,
            },
            "selectors": selectors,
        }
