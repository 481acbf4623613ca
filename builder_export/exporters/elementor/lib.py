"""Elementor exporter.

Elementor stores a page as nested sections, columns and widgets, each with
a flat settings dict. Colors and fonts used on the page are registered as
page-level globals and referenced from each element's ``__globals__``.
"""

import json
import re
from typing import Annotated, Any, Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from builder_export.behavior import ComponentDescriptors, DynamicContent, css_value
from builder_export.config import EnvVar, get_environment
from builder_export.dimension import (
    BoxShadow,
    DimensionSet,
    format_dimension_set,
    format_number,
    parse_dimension,
    parse_shorthand_dimension,
    uniform_dimension_set,
)
from builder_export.exporters.lib import (
    FONTAWESOME_STYLES,
    BuilderExporter,
    ColumnPlan,
    background_image,
    heading_level,
    html_of,
    icon_class,
    link_of,
    plan_columns,
    register_exporter,
    text_of,
)
from builder_export.ir import ComponentInfo
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

UNITLESS = re.compile(r"-?\d+(?:\.\d+)?")

CONTAINERS = ("section", "column")

# Per-widget key of the main text color
COLOR_KEYS = {
    "heading": "title_color",
    "text-editor": "text_color",
    "button": "button_text_color",
    "icon": "primary_color",
    "divider": "color",
}

HOVER_COLOR_KEYS = {"button": "hover_color", "icon": "hover_primary_color"}

# Per-widget key receiving dynamic content
DYNAMIC_KEYS = {"heading": "title", "text-editor": "editor", "button": "text"}

TYPOGRAPHY_KEYS = {
    "fontSize": "typography_font_size",
    "lineHeight": "typography_line_height",
    "letterSpacing": "typography_letter_spacing",
}

RESPONSIVE_SLIDERS = frozenset(
    {"fontSize", "lineHeight", "width", "height", "minWidth", "maxWidth", "gap"}
)

CURRENCY_SYMBOLS = {
    "$": "dollar",
    "€": "euro",
    "£": "pound",
    "¥": "yen",
    "₹": "rupee",
    "₽": "ruble",
}

GALLERY_HOVER = {"zoom": "zoom-in", "slide": "move-up"}


# =============================================================================
# Document Model
# =============================================================================


class ElementorElement(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    isInner: bool = False
    settings: dict[str, Any] = Field(default_factory=dict)


class ElementorWidget(ElementorElement):
    elType: Literal["widget"]
    widgetType: str = Field(min_length=1)
    elements: list[Any] = Field(default_factory=list, max_length=0)


class ElementorSection(ElementorElement):
    elType: Literal["section"]
    elements: list["ElementorColumn"] = Field(default_factory=list)


class ElementorColumn(ElementorElement):
    elType: Literal["column"]
    elements: list[
        Annotated[ElementorSection | ElementorWidget, Field(discriminator="elType")]
    ] = Field(default_factory=list)


ElementorSection.model_rebuild()


class ElementorDocument(BaseModel):
    """Top level of an Elementor page export."""

    model_config = ConfigDict(extra="allow")

    version: str = Field(min_length=1)
    title: str = ""
    type: Literal["page"] = "page"
    content: list[ElementorSection] = Field(default_factory=list)
    page_settings: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Value Helpers
# =============================================================================


def _is_color(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip()) and not is_transparent_color(value)


def _font_family(value: Any) -> str:
    if not value:
        return ""
    return str(value).split(",")[0].strip().strip("'\"")


def _slider(value: Any, unitless: str | None = None) -> dict | None:
    """Elementor slider value, None when the length can't be parsed."""
    if unitless and value is not None and UNITLESS.fullmatch(str(value).strip()):
        return {"unit": unitless, "size": format_number(float(value))}
    dimension = parse_dimension(value)
    if dimension is None or dimension.is_keyword:
        return None
    return {"unit": dimension.unit, "size": format_number(dimension.value)}


def _dimensions(dimensions: DimensionSet | None) -> dict | None:
    """Elementor dimensions control, None when the sides share no unit."""
    dimensions = uniform_dimension_set(dimensions)
    if dimensions is None:
        return None
    values = dimensions.values()
    return {
        "unit": dimensions.unit,
        **{side: str(value) for side, value in values.items()},
        "isLinked": dimensions.is_linked,
    }


def _shadow(shadow: BoxShadow) -> dict:
    return {
        "horizontal": format_number(shadow.horizontal),
        "vertical": format_number(shadow.vertical),
        "blur": format_number(shadow.blur),
        "spread": format_number(shadow.spread),
        "color": shadow.color,
    }


def _responsive_value(prop: str, value: Any) -> Any:
    if prop in ("padding", "margin"):
        return _dimensions(parse_shorthand_dimension(value))
    if prop in RESPONSIVE_SLIDERS:
        return _slider(value, unitless="em" if prop == "lineHeight" else None)
    return css_value(value)


def _icon_value(icon: str, library: str, classes: list[str] | tuple = ()) -> dict:
    """Elementor ``selected_icon`` value."""
    value = icon_class(icon, library, classes)
    if library == "fontawesome":
        return {"value": value, "library": FONTAWESOME_STYLES[value.split()[0]]}
    if library == "material":
        return {"value": f"material-icons {icon}", "library": "material"}
    return {"value": value, "library": library}


def _dynamic_tag(dynamic: DynamicContent) -> str:
    payload = quote(json.dumps({"key": dynamic.source, "fallback": dynamic.fallback or ""}))
    return f'[elementor-tag id="" name="post-custom-field" settings="{payload}"]'


def _switch(flag: bool) -> str:
    return "yes" if flag else "no"


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


# =============================================================================
# Exporter
# =============================================================================


@register_exporter
class ElementorExporter(BuilderExporter):
    """Export component trees as Elementor page JSON.

    Top-level containers become sections, column-like children become
    columns and everything else becomes a widget. Containers nested inside
    a column become inner sections.
    """

    @property
    def name(self) -> str:
        return "elementor"

    @property
    def content_key(self) -> str:
        return "content"

    @property
    def document_model(self) -> type[BaseModel]:
        return ElementorDocument

    @property
    def id_seed(self) -> int:
        return get_environment(EnvVar.ELEMENTOR_ID_SEED)

    def reset(self) -> None:
        super().reset()
        self.global_colors: dict[str, dict[str, str]] = {}
        self.global_fonts: dict[tuple[str, str], dict[str, str]] = {}
        self.custom_css: list[str] = []

    def registered_ids(self) -> list[str]:
        return [entry["_id"] for entry in self.global_colors.values()] + [
            entry["_id"] for entry in self.global_fonts.values()
        ]

    def build_document(self, components: list[ComponentInfo]) -> dict[str, Any]:
        content = [
            self._top_level(component, str(index))
            for index, component in enumerate(components)
        ]
        return {
            "version": get_environment(EnvVar.ELEMENTOR_VERSION),
            "title": self.options.title,
            "type": "page",
            "content": content,
            "page_settings": self._page_settings(),
        }

    # -------------------------------------------------------------------------
    # Globals
    # -------------------------------------------------------------------------

    def _element_id(self) -> str:
        return f"{self.next_id():07x}"

    def register_color(self, value: str) -> str:
        """Global color id for a literal color, registering it on first use."""
        key = normalize_color_to_hex(value)
        if key not in self.global_colors:
            self.global_colors[key] = {
                "_id": f"color_{self.next_id():x}",
                "title": f"Color {len(self.global_colors) + 1}",
                "color": key,
            }
        return self.global_colors[key]["_id"]

    def register_font(self, family: str, weight: Any = None) -> str:
        """Global typography id for a font family and weight."""
        key = (family.lower(), str(weight or "400"))
        if key not in self.global_fonts:
            self.global_fonts[key] = {
                "_id": f"font_{self.next_id():x}",
                "title": family,
                "typography_typography": "custom",
                "typography_font_family": family,
                "typography_font_weight": key[1],
            }
        return self.global_fonts[key]["_id"]

    def _page_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "post_status": "draft",
            "template": "default",
            "custom_colors": list(self.global_colors.values()),
            "custom_fonts": list(self.global_fonts.values()),
            "page_custom_css": "\n\n".join(self.custom_css),
        }
        palette = self.options.palette
        if palette is not None:
            settings["system_colors"] = [
                {"_id": token, "title": color.name or token, "color": normalize_color_to_hex(color.hex)}
                for token, color in palette_tokens(palette)
            ]
        typography = self.options.typography
        if typography is not None:
            settings["system_typography"] = [
                {
                    "_id": _slug(family.name),
                    "title": family.name,
                    "typography_typography": "custom",
                    "typography_font_family": family.name,
                }
                for family in typography.font_families
            ]
        return settings

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def _classify(self, component: ComponentInfo) -> tuple[SpecializedWidget | None, str | None]:
        widget = self.detect_widget(component)
        element_type = None if widget else self.vocabulary.map_type(component)
        return widget, element_type

    def _top_level(self, component: ComponentInfo, path: str) -> dict[str, Any]:
        widget, element_type = self._classify(component)
        if widget is None and self.is_container(component, element_type):
            return self._section(component, path, is_inner=False)
        return self._wrap(self._element(component, path, widget, element_type))

    def _child(self, component: ComponentInfo, path: str) -> dict[str, Any]:
        widget, element_type = self._classify(component)
        if widget is None and self.is_container(component, element_type):
            return self._section(component, path, is_inner=True)
        return self._element(component, path, widget, element_type)

    def _wrap(self, element: dict[str, Any]) -> dict[str, Any]:
        """Synthesized full-width section and column around a bare element."""
        section_id = self._element_id()
        column = self._column(ColumnPlan(size=100), elements=[element])
        return {
            "id": section_id,
            "elType": "section",
            "isInner": False,
            "settings": {},
            "elements": [column],
        }

    def _section(self, component: ComponentInfo, path: str, is_inner: bool) -> dict[str, Any]:
        section_id = self._element_id()
        self.map_node(path, section_id)
        settings = self._settings(component, path, "section", {"layout": "boxed"})
        columns = [self._column(plan) for plan in plan_columns(component, path)]
        return {
            "id": section_id,
            "elType": "section",
            "isInner": is_inner,
            "settings": settings,
            "elements": columns,
        }

    def _column(self, plan: ColumnPlan, elements: list | None = None) -> dict[str, Any]:
        column_id = self._element_id()
        defaults: dict[str, Any] = {"_column_size": int(round(plan.size))}
        if plan.size != 100:
            defaults["_inline_size"] = plan.size
        if plan.component is not None:
            self.map_node(plan.path, column_id)
            settings = self._settings(plan.component, plan.path, "column", defaults)
        else:
            settings = defaults
        if elements is None:
            elements = [self._child(child, child_path) for child_path, child in plan.items]
        return {
            "id": column_id,
            "elType": "column",
            "isInner": False,
            "settings": settings,
            "elements": elements,
        }

    def _widget_element(self, element_id: str, widget_type: str, settings: dict) -> dict[str, Any]:
        return {
            "id": element_id,
            "elType": "widget",
            "widgetType": widget_type,
            "isInner": False,
            "settings": settings,
            "elements": [],
        }

    def _element(
        self,
        component: ComponentInfo,
        path: str,
        widget: SpecializedWidget | None,
        element_type: str | None,
    ) -> dict[str, Any]:
        if widget is not None:
            return self._specialized(component, path, widget)

        widget_type = element_type or "html"
        element_id = self._element_id()
        self.absorb(component, path, element_id)
        defaults = self._type_defaults(component, widget_type)
        settings = self._settings(component, path, widget_type, defaults)
        return self._widget_element(element_id, widget_type, settings)

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def _type_defaults(self, component: ComponentInfo, widget_type: str) -> dict[str, Any]:
        text = text_of(component)
        attributes = component.attributes

        if widget_type == "heading":
            return {"title": text, "header_size": f"h{heading_level(component)}"}
        if widget_type == "text-editor":
            return {"editor": html_of(component)}
        if widget_type == "button":
            return {
                "text": text or "Click here",
                "link": {
                    "url": link_of(component) or "#",
                    "is_external": "on" if attributes.get("target") == "_blank" else "",
                },
                "button_type": "primary",
                "size": "md",
                "align": "center",
            }
        if widget_type == "image":
            settings: dict[str, Any] = {
                "image": {"url": attributes.get("src", ""), "alt": attributes.get("alt", "")},
                "image_size": "full",
            }
            link = link_of(component)
            if link:
                settings["link_to"] = "custom"
                settings["link"] = {"url": link}
            return settings
        if widget_type == "video":
            source = attributes.get("src", "")
            if "youtube" in source or "youtu.be" in source:
                return {"video_type": "youtube", "youtube_url": source}
            return {"video_type": "hosted", "hosted_url": {"url": source}}
        if widget_type == "spacer":
            return {"space": _slider(component.styles.get("height"))}
        if widget_type == "divider":
            return {"style": str(component.styles.get("borderTopStyle") or "solid")}
        if widget_type == "icon":
            return {"selected_icon": {"value": "fas fa-star", "library": "fa-solid"}}
        return {"html": html_of(component)}

    def _settings(
        self,
        component: ComponentInfo,
        path: str,
        element_type: str,
        defaults: dict[str, Any],
    ) -> dict[str, Any]:
        """Assemble settings: defaults, styles, descriptors, then tokens."""
        descriptors = self.describe(component)
        settings = dict(defaults)
        slots = self._style_settings(settings, component, path, element_type, descriptors)
        self._descriptor_settings(settings, path, element_type, descriptors)
        self._global_settings(settings, slots, descriptors)
        if descriptors.custom_css:
            self.custom_css.append(descriptors.custom_css)
        return settings

    def _style_settings(
        self,
        settings: dict[str, Any],
        component: ComponentInfo,
        path: str,
        element_type: str,
        descriptors: ComponentDescriptors,
    ) -> list[tuple[str, str]]:
        """Write style-derived settings.

        Returns:
            (settings key, CSS property) pairs eligible for global references.
        """
        styles = component.styles
        slots: list[tuple[str, str]] = []
        is_container = element_type in CONTAINERS

        background = styles.get("backgroundColor")
        if _is_color(background):
            if element_type == "button":
                key = "background_color"
            else:
                key = "_background_color"
                settings["_background_background"] = "classic"
            settings[key] = background
            slots.append((key, "backgroundColor"))
        image = background_image(component)
        if image:
            settings["_background_background"] = "classic"
            settings["_background_image"] = {"url": image}

        color_key = COLOR_KEYS.get(element_type)
        if color_key and _is_color(styles.get("color")):
            settings[color_key] = styles["color"]
            slots.append((color_key, "color"))

        # Typography
        family = _font_family(styles.get("fontFamily"))
        if family:
            settings["typography_typography"] = "custom"
            settings["typography_font_family"] = family
            slots.append(("typography_font_family", "fontFamily"))
        for prop, key in TYPOGRAPHY_KEYS.items():
            slider = _slider(styles.get(prop), unitless="em" if prop == "lineHeight" else None)
            if slider:
                settings["typography_typography"] = "custom"
                settings[key] = slider
        if styles.get("fontWeight") not in (None, ""):
            settings["typography_typography"] = "custom"
            settings["typography_font_weight"] = str(styles["fontWeight"])
        if styles.get("textTransform"):
            settings["typography_text_transform"] = styles["textTransform"]
        if styles.get("textAlign") and not is_container:
            settings["align"] = styles["textAlign"]

        # Spacing and borders
        box = descriptors.box_model
        radius = parse_shorthand_dimension(styles.get("borderRadius"))
        for key, prop, dimensions in (
            ("_padding", "padding", box.padding),
            ("_margin", "margin", box.margin),
            ("_border_width", "borderWidth", box.border),
            ("_border_radius", "borderRadius", radius),
        ):
            if dimensions is None:
                continue
            converted = _dimensions(dimensions)
            if converted is None:
                self.warn(path, f"Mixed units in {prop}", format_dimension_set(dimensions))
                continue
            settings[key] = converted
        if "_border_width" in settings:
            settings["_border_border"] = str(styles.get("borderStyle") or "solid")
            if _is_color(styles.get("borderColor")):
                settings["_border_color"] = styles["borderColor"]
                slots.append(("_border_color", "borderColor"))

        # Sizing
        if box.width is not None and not box.width.is_keyword and not is_container:
            settings["_element_width"] = "initial"
            settings["_element_custom_width"] = _slider(box.width.original)
        if element_type == "section" and box.min_height is not None and not box.min_height.is_keyword:
            settings["height"] = "min-height"
            settings["custom_height"] = _slider(box.min_height.original)

        # Layout
        if is_container and styles.get("display") in ("flex", "inline-flex"):
            for prop in ("flexDirection", "justifyContent", "alignItems"):
                if styles.get(prop):
                    settings[self.vocabulary.property_key(prop)] = styles[prop]
            gap = _slider(styles.get("gap"))
            if gap:
                settings["flex_gap"] = gap
        elif is_container and styles.get("display") == "grid":
            template = str(styles.get("gridTemplateColumns") or "")
            if template:
                settings["grid_columns_grid"] = {"unit": "fr", "size": len(template.split())}
            gap = _slider(styles.get("gap"))
            if gap:
                settings["grid_gaps"] = {"column": gap["size"], "row": gap["size"], "unit": gap["unit"]}

        return slots

    def _descriptor_settings(
        self,
        settings: dict[str, Any],
        path: str,
        element_type: str,
        descriptors: ComponentDescriptors,
    ) -> None:
        vocabulary = self.vocabulary

        # Responsive
        for breakpoint, overrides in descriptors.responsive.overrides().items():
            for prop, value in overrides.items():
                key = vocabulary.responsive_key(prop, breakpoint)
                if key is None:
                    continue
                converted = _responsive_value(prop, value)
                if converted is None:
                    self.warn(path, f"Unparseable {prop} override at {breakpoint}", value)
                    continue
                settings[key] = converted
        settings.update(vocabulary.visibility_settings(descriptors.responsive.hidden))

        # Hover
        hover = descriptors.hover
        if hover is not None:
            animation = vocabulary.hover_animation(hover.animation)
            if animation:
                settings["_hover_animation"] = animation
            if hover.background_color:
                if element_type == "button":
                    settings["button_background_hover_color"] = hover.background_color
                else:
                    settings["_background_hover_background"] = "classic"
                    settings["_background_hover_color"] = hover.background_color
            if hover.color and element_type in HOVER_COLOR_KEYS:
                settings[HOVER_COLOR_KEYS[element_type]] = hover.color
            if hover.border_color:
                settings["_border_hover_color"] = hover.border_color
            if hover.box_shadow is not None:
                settings["_box_shadow_hover_box_shadow_type"] = "yes"
                settings["_box_shadow_hover_box_shadow"] = _shadow(hover.box_shadow)
            if hover.transition_ms is not None:
                settings["hover_transition_duration"] = {"unit": "ms", "size": hover.transition_ms}

        # Entrance animation
        entrance = descriptors.animation
        if entrance is not None:
            settings["_animation"] = vocabulary.animation_name(entrance.type)
            settings["animation_duration"] = entrance.duration
            settings["_animation_delay"] = entrance.delay

        # Motion effects
        motion = descriptors.motion
        if motion is not None:
            for effect in motion.scroll_effects:
                settings["motion_fx_motion_fx_scrolling"] = "yes"
                start, end = effect.viewport
                viewport = {"unit": "%", "sizes": {"start": start, "end": end}}
                if effect.type == "parallax":
                    settings["motion_fx_translateY_effect"] = "yes"
                    settings["motion_fx_translateY_speed"] = {"size": effect.speed}
                    settings["motion_fx_translateY_affectedRange"] = viewport
                    if effect.direction:
                        settings["motion_fx_translateY_direction"] = effect.direction
                elif effect.type == "fadeIn":
                    settings["motion_fx_opacity_effect"] = "yes"
                    settings["motion_fx_opacity_range"] = viewport
            if motion.sticky is not None:
                sticky = motion.sticky
                settings["sticky"] = "bottom" if sticky.bottom and not sticky.top else "top"
                settings["sticky_offset"] = sticky.offset

        # Box shadow
        shadow = descriptors.box_shadow
        if shadow is not None:
            settings["_box_shadow_box_shadow_type"] = "yes"
            settings["_box_shadow_box_shadow"] = _shadow(shadow)
            if shadow.inset:
                settings["_box_shadow_box_shadow_position"] = "inset"

        # Dynamic content
        dynamic = descriptors.dynamic
        if dynamic is not None and element_type in DYNAMIC_KEYS:
            settings["__dynamic__"] = {DYNAMIC_KEYS[element_type]: _dynamic_tag(dynamic)}

    def _global_settings(
        self,
        settings: dict[str, Any],
        slots: list[tuple[str, str]],
        descriptors: ComponentDescriptors,
    ) -> None:
        """Reference global colors/fonts, preferring design tokens."""
        links = descriptors.tokens
        references: dict[str, str] = {}
        for key, prop in slots:
            value = settings.get(key)
            if not value:
                continue
            if prop == "fontFamily":
                token = links.font_tokens.get(prop)
                font_id = _slug(token) if token else self.register_font(
                    value, settings.get("typography_font_weight")
                )
                references["typography_typography"] = f"globals/typography?id={font_id}"
            else:
                token = links.color_tokens.get(prop)
                color_id = token or self.register_color(value)
                references[key] = f"globals/colors?id={color_id}"
        if references:
            settings["__globals__"] = references

    # -------------------------------------------------------------------------
    # Specialized Widgets
    # -------------------------------------------------------------------------

    def _specialized(
        self, component: ComponentInfo, path: str, detected: SpecializedWidget
    ) -> dict[str, Any]:
        widget = detected.widget
        if detected.kind is WidgetKind.PRICING_TABLE and len(widget.plans) > 1:
            return self._pricing_section(component, path, widget)

        element_id = self._element_id()
        self.absorb(component, path, element_id)
        converters = {
            WidgetKind.ICON: self._icon_widget,
            WidgetKind.ICON_LIST: self._icon_list_widget,
            WidgetKind.GALLERY: self._gallery_widget,
            WidgetKind.CAROUSEL: self._carousel_widget,
            WidgetKind.TESTIMONIAL: self._testimonial_widget,
            WidgetKind.PRICING_TABLE: self._price_table_widget,
        }
        widget_type, defaults = converters[detected.kind](component, widget)
        settings = self._settings(component, path, widget_type, defaults)
        return self._widget_element(element_id, widget_type, settings)

    def _icon_widget(self, component: ComponentInfo, widget: IconWidget) -> tuple[str, dict]:
        settings: dict[str, Any] = {
            "selected_icon": _icon_value(widget.icon, widget.library, component.classes),
            "size": {"unit": "px", "size": widget.size},
            "primary_color": widget.color,
            "align": widget.alignment,
        }
        if widget.hover_color:
            settings["hover_primary_color"] = widget.hover_color
        if widget.rotation:
            settings["rotate"] = {"unit": "deg", "size": format_number(widget.rotation)}
        if widget.link:
            settings["link"] = {
                "url": widget.link,
                "is_external": "on" if widget.link_target == "_blank" else "",
            }
        return "icon", settings

    def _icon_list_widget(self, component: ComponentInfo, widget: IconListWidget) -> tuple[str, dict]:
        items = [
            {
                "_id": self._element_id(),
                "text": item.text,
                "selected_icon": _icon_value(item.icon, item.library),
                "link": {"url": item.link} if item.link else None,
            }
            for item in widget.items
        ]
        settings: dict[str, Any] = {
            "icon_list": items,
            "view": "inline" if widget.layout == "horizontal" else "traditional",
            "space_between": {"unit": "px", "size": widget.spacing},
        }
        icon_color = next((item.icon_color for item in widget.items if item.icon_color), None)
        if icon_color:
            settings["icon_color"] = icon_color
        if widget.divider:
            settings["divider"] = "yes"
        return "icon-list", settings

    def _gallery_widget(self, component: ComponentInfo, widget: GalleryWidget) -> tuple[str, dict]:
        columns = widget.columns if isinstance(widget.columns, dict) else {}
        if widget.layout in ("masonry", "justified"):
            settings: dict[str, Any] = {
                "gallery": [{"url": image.url, "alt": image.alt} for image in widget.images],
                "gallery_layout": widget.layout,
                "columns": widget.desktop_columns,
                "columns_tablet": columns.get("tablet"),
                "columns_mobile": columns.get("mobile"),
                "gap": {"unit": "px", "size": widget.gap},
                "link_to": "file" if widget.lightbox else "none",
                "lazyload": "yes" if widget.lazy_load else "",
            }
            if widget.captions:
                settings["overlay_title"] = "caption"
            if widget.hover_effect in GALLERY_HOVER:
                settings["image_hover_animation"] = GALLERY_HOVER[widget.hover_effect]
            return "gallery", settings

        settings = {
            "wp_gallery": [{"url": image.url, "alt": image.alt} for image in widget.images],
            "gallery_columns": str(widget.desktop_columns),
            "gallery_link": "file" if widget.lightbox else "none",
            "open_lightbox": _switch(widget.lightbox),
            "gallery_display_caption": "" if widget.captions else "none",
            "image_spacing": "custom",
            "image_spacing_custom": {"unit": "px", "size": widget.gap},
        }
        if widget.hover_effect in GALLERY_HOVER:
            settings["image_hover_animation"] = GALLERY_HOVER[widget.hover_effect]
        return "image-gallery", settings

    def _carousel_widget(self, component: ComponentInfo, widget: CarouselWidget) -> tuple[str, dict]:
        if widget.arrows and widget.dots:
            navigation = "both"
        elif widget.arrows:
            navigation = "arrows"
        elif widget.dots:
            navigation = "dots"
        else:
            navigation = "none"
        common = {
            "autoplay": _switch(widget.autoplay),
            "autoplay_speed": widget.autoplay_speed,
            "pause_on_hover": _switch(widget.pause_on_hover),
            "infinite": _switch(widget.infinite),
            "speed": widget.speed,
            "effect": widget.effect,
            "navigation": navigation,
            "slides_to_show": str(widget.slides_to_show),
            "slides_to_scroll": str(widget.slides_to_scroll),
        }
        if all(slide.type == "image" for slide in widget.slides):
            return "image-carousel", {
                "carousel": [{"url": slide.image} for slide in widget.slides],
                **common,
            }

        slides = [
            {
                "_id": self._element_id(),
                "heading": slide.title,
                "description": slide.content,
                "background_image": {"url": slide.image} if slide.image else None,
                "link": {"url": slide.link} if slide.link else None,
            }
            for slide in widget.slides
        ]
        return "slides", {"slides": slides, **common}

    def _testimonial_widget(
        self, component: ComponentInfo, widget: TestimonialWidget
    ) -> tuple[str, dict]:
        if len(widget.testimonials) == 1:
            item = widget.testimonials[0]
            return "testimonial", {
                "testimonial_content": item.content,
                "testimonial_name": item.author_name,
                "testimonial_job": item.author_title,
                "testimonial_image": {"url": item.author_image} if item.author_image else None,
                "testimonial_image_position": "aside" if item.author_image else "top",
                "testimonial_alignment": widget.alignment,
            }

        slides = [
            {
                "_id": self._element_id(),
                "content": item.content,
                "name": item.author_name,
                "title": item.author_title,
                "image": {"url": item.author_image} if item.author_image else None,
                "rating": item.rating,
            }
            for item in widget.testimonials
        ]
        widget_type = "reviews" if widget.show_rating else "testimonial-carousel"
        return widget_type, {"slides": slides, "image_shape": widget.image_shape}

    def _plan_settings(self, plan: PricingPlan, table: PricingTableWidget) -> dict[str, Any]:
        symbol = CURRENCY_SYMBOLS.get(table.currency)
        settings: dict[str, Any] = {
            "heading": plan.title,
            "currency_symbol": symbol or "custom",
            "currency_symbol_custom": None if symbol else table.currency,
            "currency_position": table.currency_position,
            "price": str(format_number(plan.price)),
            "period": table.period,
            "features_list": [
                {
                    "_id": self._element_id(),
                    "item_text": feature.text,
                    "selected_item_icon": {
                        "value": "fas fa-check" if feature.included else "fas fa-times",
                        "library": "fa-solid",
                    },
                }
                for feature in plan.features
            ],
            "button_text": plan.button_text,
            "link": {"url": plan.button_link},
        }
        if plan.ribbon or plan.highlighted:
            settings["show_ribbon"] = "yes"
            settings["ribbon_title"] = plan.ribbon or "Popular"
        return settings

    def _price_table_widget(
        self, component: ComponentInfo, widget: PricingTableWidget
    ) -> tuple[str, dict]:
        return "price-table", self._plan_settings(widget.plans[0], widget)

    def _pricing_section(
        self, component: ComponentInfo, path: str, widget: PricingTableWidget
    ) -> dict[str, Any]:
        """Inner section with one price-table widget per plan."""
        section_id = self._element_id()
        self.absorb(component, path, section_id)
        settings = self._settings(component, path, "section", {"layout": "boxed"})
        size = round(100 / len(widget.plans), 2)
        columns = []
        for plan in widget.plans:
            element = self._widget_element(
                self._element_id(), "price-table", self._plan_settings(plan, widget)
            )
            columns.append(self._column(ColumnPlan(size=size), elements=[element]))
        return {
            "id": section_id,
            "elType": "section",
            "isInner": True,
            "settings": settings,
            "elements": columns,
        }
