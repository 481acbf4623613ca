"""Beaver Builder exporter.

Beaver Builder keeps a layout as a flat map of nodes keyed by node id.
Each node names its ``parent`` and its ``position`` among siblings, so the
tree is rebuilt from parent links: row > column-group > column > module,
with further column-groups nested inside columns.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

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
    promoted_templates,
    register_exporter,
    text_of,
)
from builder_export.ir import ComponentInfo, ComponentLibrary, TemplateParts, TypographySystem
from builder_export.tokens import is_transparent_color, normalize_color_to_hex
from builder_export.widgets import (
    CarouselWidget,
    GalleryWidget,
    IconListWidget,
    IconWidget,
    PricingTableWidget,
    SpecializedWidget,
    TestimonialWidget,
    WidgetKind,
)

# Saved module type for a library template's component type
LIBRARY_MODULE_TYPES = {
    "heading": "heading",
    "paragraph": "rich-text",
    "button": "button",
    "image": "photo",
    "gallery": "gallery",
    "card": "callout",
    "form": "contact-form",
    "navigation": "menu",
}

# Module setting receiving a field connection for dynamic content
CONNECTION_FIELDS = {"heading": "heading", "rich-text": "text", "button": "text", "photo": "photo_src"}

HEADER_TEMPLATE_ID = 9999
FOOTER_TEMPLATE_ID = 9998


# =============================================================================
# Document Model
# =============================================================================


class BeaverNode(BaseModel):
    model_config = ConfigDict(extra="allow")

    node: str = Field(min_length=1)
    type: Literal["row", "column-group", "column", "module"]
    parent: str | None = None
    position: int = Field(default=0, ge=0)
    settings: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _module_has_type(self) -> "BeaverNode":
        if self.type == "module" and not self.settings.get("type"):
            raise ValueError(f"Module {self.node} has no module type")
        return self


class BeaverSavedModule(BaseModel):
    id: int
    name: str
    type: str = Field(min_length=1)
    settings: dict[str, Any] = Field(default_factory=dict)
    global_: bool = Field(default=False, alias="global")


class BeaverTemplate(BaseModel):
    id: int
    name: str
    content: str = ""
    category: str | None = None


class BeaverDocument(BaseModel):
    """Top level of a Beaver Builder export."""

    model_config = ConfigDict(extra="allow")

    nodes: dict[str, BeaverNode] = Field(default_factory=dict)
    saved_modules: list[BeaverSavedModule] = Field(default_factory=list)
    templates: list[BeaverTemplate] = Field(default_factory=list)
    color_presets: list[str] = Field(default_factory=list)
    color_scheme: dict[str, Any] | None = None
    typography: dict[str, str] | None = None
    header: BeaverTemplate | None = None
    footer: BeaverTemplate | None = None


# =============================================================================
# Helpers
# =============================================================================


def _sides(prefix: str, dimensions: DimensionSet | None) -> dict[str, str]:
    if dimensions is None:
        return {}
    return {
        f"{prefix}_{side}": value.css()
        for side, value in (
            ("top", dimensions.top),
            ("right", dimensions.right),
            ("bottom", dimensions.bottom),
            ("left", dimensions.left),
        )
        if value is not None
    }


def _shadow(shadow: BoxShadow) -> dict[str, Any]:
    return {
        "color": shadow.color,
        "horizontal": format_number(shadow.horizontal),
        "vertical": format_number(shadow.vertical),
        "blur": format_number(shadow.blur),
        "spread": format_number(shadow.spread),
    }


def _seconds(milliseconds: int) -> int | float:
    return format_number(milliseconds / 1000)


def _child_of(component: ComponentInfo, predicate) -> ComponentInfo | None:
    return next((child for child in component.children if predicate(child)), None)


# =============================================================================
# Exporter
# =============================================================================


@register_exporter
class BeaverBuilderExporter(BuilderExporter):
    """Export component trees as Beaver Builder node maps.

    Node ids are ``node_N``, counted from 1 in creation order. Colors are
    written as hex without the leading ``#`` and every distinct color is
    collected into ``color_presets``.
    """

    @property
    def name(self) -> str:
        return "beaver-builder"

    @property
    def content_key(self) -> str:
        return "nodes"

    @property
    def document_model(self) -> type[BaseModel]:
        return BeaverDocument

    def reset(self) -> None:
        super().reset()
        self.nodes: dict[str, dict[str, Any]] = {}
        self.color_presets: dict[str, None] = {}
        self.custom_css: list[str] = []

    def registered_ids(self) -> list[str]:
        return list(self.color_presets)

    def serialize_native(self, document: dict[str, Any]) -> str:
        return json.dumps(document.get("nodes", {}), indent=2, ensure_ascii=False)

    def build_document(self, components: list[ComponentInfo]) -> dict[str, Any]:
        for position, component in enumerate(components):
            self._top_level(component, str(position), position)

        options = self.options
        document: dict[str, Any] = {"nodes": self.nodes}
        document["saved_modules"] = (
            self._library_saved_modules(options.library)
            if options.library is not None
            else self._repeated_saved_modules()
        )
        document["templates"] = (
            self._library_templates(options.library)
            if options.library is not None
            else [
                {
                    "id": 1,
                    "name": "Converted Template",
                    "content": json.dumps(self.nodes, ensure_ascii=False),
                    "category": "Converted",
                }
            ]
        )
        document["color_presets"] = list(self.color_presets)
        if options.palette is not None:
            palette = options.palette
            document["color_scheme"] = {
                "primary": [normalize_color_to_hex(color.hex) for color in palette.primary],
                "secondary": [normalize_color_to_hex(color.hex) for color in palette.secondary],
                "accent": [normalize_color_to_hex(color.hex) for color in palette.accent],
                "neutral": [normalize_color_to_hex(color.hex) for color in palette.neutral],
                "semantic": {
                    role: normalize_color_to_hex(color.hex)
                    for role in ("success", "warning", "error", "info")
                    if (color := getattr(palette.semantic, role)) is not None
                },
            }
        if options.typography is not None:
            document["typography"] = self._typography(options.typography)
        if options.template_parts is not None:
            document.update(self._template_parts(options.template_parts))
        if self.custom_css:
            document["layout_settings"] = {"css": "\n\n".join(self.custom_css)}
        return document

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def _node(self, kind: str, parent: str | None, position: int) -> dict[str, Any]:
        node_id = f"node_{self.next_id()}"
        node = {"node": node_id, "type": kind, "parent": parent, "position": position, "settings": {}}
        self.nodes[node_id] = node
        return node

    def _classify(self, component: ComponentInfo) -> tuple[SpecializedWidget | None, str | None]:
        widget = self.detect_widget(component)
        module_type = None if widget else self.vocabulary.map_type(component)
        return widget, module_type

    def _top_level(self, component: ComponentInfo, path: str, position: int) -> None:
        widget, module_type = self._classify(component)
        row = self._node("row", None, position)
        if widget is None and self.is_container(component, module_type):
            self.map_node(path, row["node"])
            row["settings"] = self._settings(component, path, "row", {"width": "fixed"})
            self._column_group(component, path, row["node"], 0)
            return

        row["settings"] = {"width": "fixed"}
        group = self._node("column-group", row["node"], 0)
        column = self._column(ColumnPlan(size=100), group["node"], 0)
        self._module(component, path, column["node"], 0, widget, module_type)

    def _column_group(
        self, component: ComponentInfo, path: str, parent: str, position: int
    ) -> dict[str, Any]:
        group = self._node("column-group", parent, position)
        for index, plan in enumerate(plan_columns(component, path)):
            column = self._column(plan, group["node"], index)
            for child_position, (child_path, child) in enumerate(plan.items):
                self._child(child, child_path, column["node"], child_position)
        return group

    def _column(self, plan: ColumnPlan, parent: str, position: int) -> dict[str, Any]:
        column = self._node("column", parent, position)
        defaults = {"size": format_number(plan.size)}
        if plan.component is None:
            column["settings"] = defaults
        else:
            self.map_node(plan.path, column["node"])
            column["settings"] = self._settings(plan.component, plan.path, "column", defaults)
        return column

    def _child(self, component: ComponentInfo, path: str, parent: str, position: int) -> None:
        widget, module_type = self._classify(component)
        if widget is None and self.is_container(component, module_type):
            group = self._column_group(component, path, parent, position)
            self.map_node(path, group["node"])
            group["settings"] = self._settings(component, path, "column-group", {})
            return
        self._module(component, path, parent, position, widget, module_type)

    def _module(
        self,
        component: ComponentInfo,
        path: str,
        parent: str,
        position: int,
        widget: SpecializedWidget | None,
        module_type: str | None,
    ) -> dict[str, Any]:
        if widget is not None:
            module_type, defaults = self._specialized(component, widget)
        else:
            module_type = module_type or "rich-text"
            defaults = self._type_defaults(component, module_type)

        module = self._node("module", parent, position)
        self.absorb(component, path, module["node"])
        module["settings"] = {"type": module_type, **self._settings(component, path, module_type, defaults)}
        return module

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def _color(self, value: Any) -> str | None:
        """Preset form of a color (hex without ``#``), registering it.

        Translucent colors keep their rgba() text and are not presets.
        """
        text = css_value(value)
        if text is None or is_transparent_color(text):
            return None
        hex_value = normalize_color_to_hex(text)
        if not hex_value.startswith("#"):
            return hex_value
        if len(hex_value) == 9:
            return text.strip()
        preset = hex_value[1:]
        self.color_presets.setdefault(preset, None)
        return preset

    def _type_defaults(self, component: ComponentInfo, module_type: str) -> dict[str, Any]:
        styles = component.styles
        attributes = component.attributes

        if module_type == "heading":
            return {
                "heading": text_of(component),
                "tag": f"h{heading_level(component)}",
                "color": self._color(styles.get("color")),
                "font_size": css_value(styles.get("fontSize")),
                "alignment": styles.get("textAlign") or "left",
            }
        if module_type == "rich-text":
            return {"text": html_of(component), "color": self._color(styles.get("color"))}
        if module_type == "html":
            return {"html": component.inner_html or text_of(component)}
        if module_type == "photo":
            src = attributes.get("src", "")
            return {
                "photo_src": src,
                "photo": {"url": src},
                "alt": attributes.get("alt", ""),
                "caption": attributes.get("title", ""),
                "link_type": "none",
                "alignment": "center",
            }
        if module_type == "button":
            return {
                "text": text_of(component) or "Click Here",
                "link": link_of(component) or "#",
                "link_target": attributes.get("target", "_self"),
                "bg_color": self._color(styles.get("backgroundColor")),
                "text_color": self._color(styles.get("color")),
                "style": "flat",
                "width": "auto",
                "align": "center",
            }
        if module_type == "callout":
            heading = _child_of(component, lambda child: heading_level(child, 0) > 0)
            paragraph = _child_of(component, lambda child: child.tag == "p")
            button = _child_of(
                component, lambda child: child.tag == "button" or child.has_class("btn")
            )
            return {
                "heading": text_of(heading) if heading else "",
                "text": text_of(paragraph) if paragraph else "",
                "btn_text": (text_of(button) if button else "") or "Click Here",
                "btn_link": (link_of(button) if button else None) or "#",
                "btn_style": "flat",
                "align": "center",
            }
        if module_type == "gallery":
            return {"photos": [], "layout": "grid", "columns": 3, "spacing": 20, "show_captions": "hover"}
        if module_type == "slideshow":
            return {
                "photos": [],
                "transition": "fade",
                "speed": 3,
                "auto_play": True,
                "show_thumbs": True,
                "show_arrows": True,
                "show_dots": True,
            }
        if module_type == "video":
            return {"video_type": "media_library", "video": attributes.get("src", "")}
        if module_type == "accordion":
            return {"items": [], "border_color": "cccccc", "open_first": True, "collapse": True}
        if module_type == "tabs":
            return {"items": [], "layout": "horizontal", "style": "default"}
        if module_type == "contact-form":
            return {
                "name_toggle": "show",
                "subject_toggle": "show",
                "email_toggle": "show",
                "phone_toggle": "hide",
                "message_toggle": "show",
                "btn_text": "Send",
                "success_message": "Thanks for your message!",
            }
        if module_type == "menu":
            return {"menu": "", "menu_layout": "horizontal", "mobile_toggle": "hamburger"}
        if module_type == "map":
            return {"address": text_of(component), "height": 400, "zoom": 14}
        if module_type == "icon":
            return {"icon": "fa-star", "size": 50, "color": self._color(styles.get("color")), "align": "center"}
        if module_type == "separator":
            return {"color": "cccccc", "height": 1, "width": 100, "style": "solid", "align": "center"}
        if module_type == "spacer":
            return {"size": css_value(styles.get("height")) or "50"}
        return {}

    def _settings(
        self,
        component: ComponentInfo,
        path: str,
        kind: str,
        defaults: dict[str, Any],
    ) -> dict[str, Any]:
        """Assemble settings: defaults, styles, descriptors, then tokens."""
        descriptors = self.describe(component)
        settings = dict(defaults)
        self._style_settings(settings, component, descriptors)
        self._descriptor_settings(settings, component, path, kind, descriptors)
        self._token_settings(settings, descriptors)
        if component.id:
            settings["id"] = component.id
        if component.classes:
            settings["class"] = " ".join(component.classes)
        if descriptors.custom_css:
            self.custom_css.append(descriptors.custom_css)
        return {key: value for key, value in settings.items() if value is not None}

    def _style_settings(
        self, settings: dict[str, Any], component: ComponentInfo, descriptors: ComponentDescriptors
    ) -> None:
        if "bg_color" not in settings:
            bg_color = self._color(component.styles.get("backgroundColor"))
            if bg_color:
                settings["bg_color"] = bg_color
        image = background_image(component)
        if image:
            settings["bg_image"] = image
            settings["bg_parallax"] = "scroll"
        settings.update(_sides("padding", descriptors.box_model.padding))
        settings.update(_sides("margin", descriptors.box_model.margin))

    def _descriptor_settings(
        self,
        settings: dict[str, Any],
        component: ComponentInfo,
        path: str,
        kind: str,
        descriptors: ComponentDescriptors,
    ) -> None:
        vocabulary = self.vocabulary

        for breakpoint, overrides in descriptors.responsive.overrides().items():
            for prop, value in overrides.items():
                key = vocabulary.responsive_key(prop, breakpoint)
                rendered = css_value(value)
                if key is not None and rendered is not None:
                    settings[key] = rendered
        settings.update(vocabulary.visibility_settings(descriptors.responsive.hidden))

        hover = descriptors.hover
        if hover is not None:
            settings["bg_hover_color"] = self._color(hover.background_color)
            settings["text_hover_color"] = self._color(hover.color)
            settings["border_hover_color"] = self._color(hover.border_color)
            transform = vocabulary.hover_animation(hover.animation) or hover.transform
            if transform and transform != "none":
                settings["transform_hover"] = transform
            if hover.transition is not None:
                settings["transition"] = f"{hover.transition.duration} {hover.transition.timing_function}"

        entrance = descriptors.animation
        if entrance is not None:
            settings["animation"] = vocabulary.animation_name(entrance.type)
            settings["animation_delay"] = _seconds(entrance.delay)
            settings["animation_duration"] = _seconds(entrance.duration)

        motion = descriptors.motion
        if motion is not None:
            if motion.has("parallax"):
                if kind == "row":
                    settings["bg_type"] = "parallax"
                    settings["bg_parallax_speed"] = format_number(motion.scroll_effects[0].speed)
                else:
                    self.warn(path, "Parallax backgrounds are only supported on rows")
            if motion.sticky is not None:
                self.warn(path, "Sticky positioning has no Beaver Builder setting", motion.sticky.position)

        if descriptors.box_shadow is not None:
            settings["box_shadow"] = _shadow(descriptors.box_shadow)

        dynamic = descriptors.dynamic
        if dynamic is not None:
            field = CONNECTION_FIELDS.get(kind)
            if field is None:
                self.warn(path, "Dynamic content dropped for this module type", dynamic.source)
            else:
                settings["connections"] = {
                    field: {"object": "post", "property": dynamic.source.strip("{}%[] ")}
                }

    def _token_settings(self, settings: dict[str, Any], descriptors: ComponentDescriptors) -> None:
        colors = descriptors.tokens.color_tokens
        if colors.get("color"):
            settings["color_preset"] = colors["color"]
        if colors.get("backgroundColor"):
            settings["bg_color_preset"] = colors["backgroundColor"]

    # -------------------------------------------------------------------------
    # Specialized Widgets
    # -------------------------------------------------------------------------

    def _specialized(
        self, component: ComponentInfo, detected: SpecializedWidget
    ) -> tuple[str, dict[str, Any]]:
        converters = {
            WidgetKind.ICON: self._icon_module,
            WidgetKind.ICON_LIST: self._icon_group_module,
            WidgetKind.GALLERY: self._gallery_module,
            WidgetKind.CAROUSEL: self._slideshow_module,
            WidgetKind.TESTIMONIAL: self._testimonials_module,
            WidgetKind.PRICING_TABLE: self._pricing_table_module,
        }
        return converters[detected.kind](component, detected.widget)

    def _icon_module(self, component: ComponentInfo, widget: IconWidget) -> tuple[str, dict]:
        return "icon", {
            "icon": icon_class(widget.icon, widget.library, component.classes),
            "size": widget.size,
            "color": self._color(widget.color),
            "hover_color": self._color(widget.hover_color),
            "align": widget.alignment or "center",
            "link": widget.link,
            "link_target": widget.link_target or "_self",
        }

    def _icon_group_module(self, component: ComponentInfo, widget: IconListWidget) -> tuple[str, dict]:
        return "icon-group", {
            "icons": [
                {
                    "icon": icon_class(item.icon, item.library),
                    "text": item.text,
                    "link": item.link,
                    "color": self._color(item.icon_color),
                }
                for item in widget.items
            ],
            "layout": widget.layout,
            "spacing": widget.spacing,
            "align": "left",
        }

    def _gallery_module(self, component: ComponentInfo, widget: GalleryWidget) -> tuple[str, dict]:
        return "gallery", {
            "photos": [
                {"url": image.url, "alt": image.alt, "caption": image.caption, "title": image.title}
                for image in widget.images
            ],
            "layout": "masonry" if widget.layout == "masonry" else "grid",
            "columns": widget.desktop_columns,
            "spacing": widget.gap,
            "show_captions": "hover" if widget.captions else "never",
            "click_action": "lightbox" if widget.lightbox else "none",
        }

    def _slideshow_module(self, component: ComponentInfo, widget: CarouselWidget) -> tuple[str, dict]:
        return "slideshow", {
            "photos": [
                {"url": slide.image or "", "title": slide.title, "caption": slide.content}
                for slide in widget.slides
            ],
            "transition": "fade" if widget.effect == "fade" else "slide",
            "speed": _seconds(widget.autoplay_speed or 3000),
            "auto_play": widget.autoplay,
            "show_arrows": widget.arrows,
            "show_dots": widget.dots,
        }

    def _testimonials_module(
        self, component: ComponentInfo, widget: TestimonialWidget
    ) -> tuple[str, dict]:
        return "testimonials", {
            "testimonials": [
                {
                    "content": item.content,
                    "name": item.author_name,
                    "title": item.author_title or "",
                    "photo": item.author_image,
                    "rating": item.rating,
                }
                for item in widget.testimonials
            ],
            "layout": "slider" if widget.layout == "carousel" else "grid",
            "columns": 1,
            "auto_play": widget.layout == "carousel",
        }

    def _pricing_table_module(
        self, component: ComponentInfo, widget: PricingTableWidget
    ) -> tuple[str, dict]:
        def price(plan) -> str:
            amount = format_number(plan.price)
            if widget.currency_position == "before":
                return f"{widget.currency}{amount}"
            return f"{amount}{widget.currency}"

        return "pricing-table", {
            "columns": len(widget.plans),
            "pricing_columns": [
                {
                    "title": plan.title,
                    "price": price(plan),
                    "duration": widget.period,
                    "features": "\n".join(feature.text for feature in plan.features),
                    "button_text": plan.button_text,
                    "button_url": plan.button_link,
                    "featured": plan.highlighted,
                    "ribbon": plan.ribbon,
                }
                for plan in widget.plans
            ],
        }

    # -------------------------------------------------------------------------
    # Saved Modules, Templates & Globals
    # -------------------------------------------------------------------------

    def _library_saved_modules(self, library: ComponentLibrary) -> list[dict[str, Any]]:
        thresholds = self.options.thresholds
        return [
            {
                "id": index,
                "name": template.name,
                "type": LIBRARY_MODULE_TYPES.get(template.component_type, "html"),
                "settings": dict(template.styles),
                "global": template.reusability_score >= thresholds.global_block_min_score,
            }
            for index, template in enumerate(
                promoted_templates(library, thresholds.saved_block_min_score), start=1
            )
        ]

    def _repeated_saved_modules(self) -> list[dict[str, Any]]:
        """Module types used at least twice, saved from their first use."""
        if not self.options.extract_reusable:
            return []
        by_type: dict[str, list[dict[str, Any]]] = {}
        for node in self.nodes.values():
            if node["type"] == "module":
                by_type.setdefault(node["settings"]["type"], []).append(node)
        minimum = self.options.thresholds.pattern_min_occurrences
        saved = []
        for module_type, modules in by_type.items():
            if len(modules) >= minimum:
                saved.append(
                    {
                        "id": len(saved) + 1,
                        "name": f"Saved {module_type}",
                        "type": module_type,
                        "settings": dict(modules[0]["settings"]),
                        "global": False,
                    }
                )
        return saved

    def _library_templates(self, library: ComponentLibrary) -> list[dict[str, Any]]:
        return [
            {
                "id": index,
                "name": template.name,
                "content": template.html,
                "category": template.category.capitalize(),
            }
            for index, template in enumerate(
                promoted_templates(library, self.options.thresholds.template_min_score), start=1
            )
        ]

    def _template_parts(self, parts: TemplateParts) -> dict[str, Any]:
        minimum = self.options.thresholds.template_part_min_confidence
        exported = {}
        for key, part, template_id in (
            ("header", parts.header, HEADER_TEMPLATE_ID),
            ("footer", parts.footer, FOOTER_TEMPLATE_ID),
        ):
            if part is not None and part.confidence >= minimum:
                exported[key] = {
                    "id": template_id,
                    "name": part.name,
                    "content": part.html,
                    "category": key.capitalize(),
                }
        return exported

    def _typography(self, typography: TypographySystem) -> dict[str, str]:
        settings = typography.global_settings
        body = font_for_context(typography, "body")
        heading = font_for_context(typography, "heading") or body
        values = {
            "body_font_family": body.name if body else settings.base_font_family,
            "body_font_weight": "400",
            "body_font_size": f"{format_number(settings.base_font_size)}px",
            "body_line_height": str(format_number(settings.base_line_height)),
            "heading_font_family": (
                heading.name if heading else settings.heading_font_family or "sans-serif"
            ),
            "heading_font_weight": str(settings.heading_font_weight or 700),
        }
        for level, style in typography.text_styles.headings():
            values[f"{level}_font_size"] = style.font_size
            values[f"{level}_line_height"] = str(style.line_height)
        return values
