"""Gutenberg (block editor) exporter.

Produces parsed-block dicts (``blockName``/``attrs``/``innerBlocks``/
``innerHTML``), block patterns, reusable blocks, template parts and a
theme.json (version 2) global styles object. ``serialize_block_grammar``
renders blocks as the ``<!-- wp:... -->`` comment grammar WordPress stores
in post content.
"""

import json
import re
from html import escape
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from builder_export.behavior import ComponentDescriptors
from builder_export.dimension import DimensionSet, format_number, parse_dimension, parse_shorthand_dimension
from builder_export.exporters.lib import (
    BuilderExporter,
    background_image,
    column_span,
    heading_level,
    html_of,
    icon_class,
    link_of,
    promoted_templates,
    register_exporter,
    repeated_signatures,
    text_of,
)
from builder_export.ir import ComponentInfo, ComponentTemplate, Gradient, TemplatePart, iter_components
from builder_export.tokens import (
    is_transparent_color,
    normalize_color_to_hex,
    palette_tokens,
    primary_font_family,
)
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

GROUP_TAGS = frozenset({"section", "header", "footer", "main", "aside", "article", "nav"})
GROUP_BLOCKS = frozenset({"core/group", "core/row", "core/stack"})

# Blocks rendered server-side, stored without markup
DYNAMIC_BLOCKS = frozenset(
    {
        "core/navigation",
        "core/social-links",
        "core/calendar",
        "core/search",
        "core/site-logo",
        "core/site-title",
        "core/site-tagline",
        "core/post-title",
        "core/post-content",
        "core/post-excerpt",
        "core/post-featured-image",
    }
)

REUSABLE_TYPES = ("card", "buttons", "social-links", "navigation")

# Block attribute bound to dynamic content
BINDING_ATTRIBUTES = {
    "core/heading": "content",
    "core/paragraph": "content",
    "core/button": "text",
    "core/image": "url",
}

PATTERN_CATEGORIES = {
    "headers": "header",
    "footers": "footer",
    "heroes": "featured",
    "cards": "columns",
    "forms": "call-to-action",
    "ctas": "call-to-action",
    "galleries": "gallery",
    "testimonials": "text",
    "pricing": "columns",
    "content": "text",
    "navigation": "header",
}

TEMPLATE_PART_AREAS = {
    "header": ("header", "header"),
    "footer": ("footer", "footer"),
    "sidebar": ("uncategorized", "aside"),
}

SPACING_UNITS = ["px", "em", "rem", "%", "vh", "vw"]


# =============================================================================
# Document Model
# =============================================================================


class GutenbergBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    blockName: str = Field(min_length=1)
    attrs: dict[str, Any] = Field(default_factory=dict)
    innerBlocks: list["GutenbergBlock"] = Field(default_factory=list)
    innerHTML: str = ""


class BlockPattern(BaseModel):
    title: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str = ""
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    content: str = ""
    blockTypes: list[str] = Field(default_factory=list)


class ReusableBlock(BaseModel):
    id: int
    title: str = Field(min_length=1)
    content: str = ""
    syncStatus: Literal["sync", "unsynced"] = "sync"


class TemplatePartEntry(BaseModel):
    slug: str = Field(min_length=1)
    title: str = ""
    area: Literal["header", "footer", "sidebar", "uncategorized"]
    content: str = ""


class GutenbergDocument(BaseModel):
    """Top level of a Gutenberg export."""

    model_config = ConfigDict(extra="allow")

    blocks: list[GutenbergBlock] = Field(default_factory=list)
    patterns: list[BlockPattern] = Field(default_factory=list)
    reusable_blocks: list[ReusableBlock] = Field(default_factory=list)
    global_styles: dict[str, Any] | None = None
    template_parts: list[TemplatePartEntry] | None = None


# =============================================================================
# Block Grammar
# =============================================================================


def _comment_name(block_name: str) -> str:
    return block_name[5:] if block_name.startswith("core/") else block_name


# Escapes applied by WordPress so attribute JSON cannot end the block comment
ATTRIBUTE_ESCAPES = (
    ("--", "\\u002d\\u002d"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\\\"", "\\u0022"),
)


def serialize_block_attributes(attrs: dict[str, Any]) -> str:
    """Block comment attribute JSON, escaped the way WordPress core does it."""
    text = json.dumps(attrs, separators=(",", ":"), ensure_ascii=False)
    for raw, escaped in ATTRIBUTE_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def serialize_block(block: dict[str, Any]) -> str:
    """Render one block (and its inner blocks) as block grammar."""
    name = _comment_name(block["blockName"])
    attrs = block.get("attrs") or {}
    attrs_json = f" {serialize_block_attributes(attrs)}" if attrs else ""
    inner_html = block.get("innerHTML") or ""
    inner_blocks = block.get("innerBlocks") or []

    if not inner_html and not inner_blocks:
        return f"<!-- wp:{name}{attrs_json} /-->"

    if inner_blocks:
        children = serialize_block_grammar(inner_blocks)
        split = inner_html.find("</")
        if split == -1:
            body = f"{inner_html}\n{children}"
        else:
            body = f"{inner_html[:split]}\n{children}\n{inner_html[split:]}"
    else:
        body = inner_html
    return f"<!-- wp:{name}{attrs_json} -->\n{body}\n<!-- /wp:{name} -->"


def serialize_block_grammar(blocks: list[dict[str, Any]]) -> str:
    """Render blocks as post content.

    Inner blocks are placed before the first closing tag of their parent's
    markup, which is where the wrapper's content goes for every container
    block this exporter emits.

    Example:
        >>> serialize_block_grammar([{"blockName": "core/separator", "attrs": {}}])
        '<!-- wp:separator /-->'
    """
    return "\n\n".join(serialize_block(block) for block in blocks)


# =============================================================================
# Helpers
# =============================================================================


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _sides(dimensions: DimensionSet | None) -> dict[str, str] | None:
    if dimensions is None:
        return None
    return {
        side: value.css()
        for side, value in (
            ("top", dimensions.top),
            ("right", dimensions.right),
            ("bottom", dimensions.bottom),
            ("left", dimensions.left),
        )
        if value is not None
    }


def _add_class(attrs: dict[str, Any], name: str) -> None:
    existing = attrs.get("className", "").split()
    if name not in existing:
        attrs["className"] = " ".join(existing + [name])


def _gradient_css(gradient: Gradient) -> str:
    stops = ", ".join(f"{stop.color} {format_number(stop.position)}%" for stop in gradient.colors)
    if gradient.type == "radial":
        return f"radial-gradient(circle, {stops})"
    return f"linear-gradient({format_number(gradient.angle or 180)}deg, {stops})"


def _binding_key(source: str) -> str:
    return re.sub(r"[{}%\[\]]", "", source).strip()


def _list_items(component: ComponentInfo) -> str:
    if component.inner_html:
        return component.inner_html
    return "".join(f"<li>{text_of(child)}</li>" for child in component.children)


# =============================================================================
# Exporter
# =============================================================================


@register_exporter
class GutenbergExporter(BuilderExporter):
    """Export component trees as Gutenberg blocks.

    Blocks nest through ``innerBlocks``. Columns are emitted only where the
    source has an explicit columns/column structure; any other container
    becomes a ``core/group``.

    Output node references in ``node_map`` are dotted block-index paths
    into ``blocks`` (``"0.2"`` is the third inner block of the first block).
    """

    @property
    def name(self) -> str:
        return "gutenberg"

    @property
    def content_key(self) -> str:
        return "blocks"

    @property
    def document_model(self) -> type[BaseModel]:
        return GutenbergDocument

    def reset(self) -> None:
        super().reset()
        self.colors: dict[str, str] = {}
        self.fonts: dict[str, tuple[str, str]] = {}
        self.font_sizes: dict[str, str] = {}
        self.spacing: dict[str, str] = {}
        self.custom_css: list[str] = []
        self._rendered: dict[str, dict[str, Any]] = {}

    def registered_ids(self) -> list[str]:
        return (
            list(self.colors.values())
            + [slug for slug, _ in self.fonts.values()]
            + list(self.font_sizes.values())
        )

    def serialize_native(self, document: dict[str, Any]) -> str:
        return serialize_block_grammar(document.get("blocks", []))

    def build_document(self, components: list[ComponentInfo]) -> dict[str, Any]:
        blocks = [
            self._block(component, str(index), str(index), None)
            for index, component in enumerate(components)
        ]
        document: dict[str, Any] = {
            "blocks": blocks,
            "patterns": self._patterns(components),
            "reusable_blocks": self._reusable_blocks(components),
            "global_styles": self._global_styles(),
        }
        if self.options.template_parts is not None:
            document["template_parts"] = self._template_parts()
        return document

    # -------------------------------------------------------------------------
    # Registries
    # -------------------------------------------------------------------------

    def register_color(self, value: str) -> str:
        """Palette slug for a literal color, registering it on first use."""
        key = normalize_color_to_hex(value)
        if key not in self.colors:
            self.colors[key] = f"color-{len(self.colors) + 1}"
        return self.colors[key]

    def register_font(self, value: str) -> str:
        key = primary_font_family(value)
        if key not in self.fonts:
            self.fonts[key] = (f"font-{len(self.fonts) + 1}", str(value))
        return self.fonts[key][0]

    def register_font_size(self, value: str) -> str:
        if value not in self.font_sizes:
            self.font_sizes[value] = f"size-{len(self.font_sizes) + 1}"
        return self.font_sizes[value]

    def _note_spacing(self, *sets: DimensionSet | None) -> None:
        for dimensions in sets:
            for side in (dimensions.top, dimensions.right, dimensions.bottom, dimensions.left) if dimensions else ():
                if side is not None and not side.is_keyword and side.value > 0:
                    css = side.css()
                    self.spacing.setdefault(css, f"spacing-{len(self.spacing) + 1}")

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _block_name(self, component: ComponentInfo, parent_name: str | None) -> str:
        vocabulary = self.vocabulary
        name = vocabulary.map_type(component, default="core/group")
        explicit_columns = bool(component.children) and all(
            vocabulary.map_type(child) == "core/column" for child in component.children
        )
        if name in ("core/columns", "core/group") and explicit_columns:
            name = "core/columns"
        elif name == "core/columns":
            name = "core/group"
        if name == "core/column" and parent_name != "core/columns":
            name = "core/group"
        return name

    def _block(
        self,
        component: ComponentInfo,
        path: str,
        block_path: str,
        parent_name: str | None,
    ) -> dict[str, Any]:
        widget = None if parent_name == "core/columns" else self.detect_widget(component)
        if widget is not None:
            block = self._widget_block(component, widget)
            self.absorb(component, path, block_path)
            self._rendered[path] = block
            return block

        block_name = self._block_name(component, parent_name)
        is_container = self.is_container(component, block_name)
        if is_container:
            self.map_node(path, block_path)
        else:
            self.absorb(component, path, block_path)

        attrs = self._attrs(component, block_name, self._type_defaults(component, block_name))
        inner_blocks = []
        if is_container:
            inner_blocks = [
                self._block(child, f"{path}.{index}", f"{block_path}.{index}", block_name)
                for index, child in enumerate(component.children)
            ]
        block = {
            "blockName": block_name,
            "attrs": attrs,
            "innerBlocks": inner_blocks,
            "innerHTML": self._inner_html(component, block_name, attrs, is_container),
        }
        self._rendered[path] = block
        return block

    def _type_defaults(self, component: ComponentInfo, block_name: str) -> dict[str, Any]:
        attributes = component.attributes
        styles = component.styles
        attrs: dict[str, Any] = {}

        if block_name == "core/heading":
            attrs["level"] = heading_level(component)
        elif block_name == "core/image":
            attrs["url"] = attributes.get("src", "")
            attrs["alt"] = attributes.get("alt", "")
            for key in ("width", "height"):
                dimension = parse_dimension(attributes.get(key) or styles.get(key))
                if dimension is not None and dimension.unit == "px":
                    attrs[key] = int(dimension.value)
            attrs["sizeSlug"] = "large"
            attrs["linkDestination"] = "none"
        elif block_name == "core/button":
            attrs["text"] = text_of(component) or "Button"
            attrs["url"] = link_of(component) or "#"
            if attributes.get("target"):
                attrs["linkTarget"] = attributes["target"]
        elif block_name == "core/buttons":
            attrs["layout"] = {"type": "flex"}
        elif block_name == "core/columns":
            attrs["isStackedOnMobile"] = True
        elif block_name == "core/column":
            span = column_span(component)
            if span:
                attrs["width"] = f"{format_number(round(span / 12 * 100, 2))}%"
            elif styles.get("width"):
                attrs["width"] = str(styles["width"])
        elif block_name in GROUP_BLOCKS:
            if styles.get("display") in ("flex", "inline-flex"):
                vertical = str(styles.get("flexDirection", "row")).startswith("column")
                attrs["layout"] = {
                    "type": "flex",
                    "orientation": "vertical" if vertical else "horizontal",
                }
            else:
                attrs["layout"] = {"type": "constrained"}
            if component.tag in GROUP_TAGS:
                attrs["tagName"] = component.tag
        elif block_name == "core/cover":
            image = background_image(component)
            if image:
                attrs["url"] = image
                attrs["dimRatio"] = 50
            min_height = parse_dimension(styles.get("minHeight"))
            if min_height is not None and not min_height.is_keyword:
                attrs["minHeight"] = format_number(min_height.value)
                attrs["minHeightUnit"] = min_height.unit
        elif block_name == "core/list":
            attrs["ordered"] = component.tag == "ol"
        elif block_name == "core/navigation":
            attrs["orientation"] = "horizontal"
            attrs["overlayMenu"] = "mobile"
        elif block_name == "core/spacer":
            attrs["height"] = str(styles.get("height") or "100px")
        elif block_name == "core/separator":
            attrs["opacity"] = "alpha-channel"
        elif block_name == "core/video":
            attrs["src"] = attributes.get("src", "")

        if component.class_name:
            attrs["className"] = component.class_name
        if component.id:
            attrs["anchor"] = component.id
        return attrs

    def _attrs(
        self,
        component: ComponentInfo,
        block_name: str,
        defaults: dict[str, Any],
    ) -> dict[str, Any]:
        """Assemble attributes: defaults, styles, descriptors, then tokens."""
        descriptors = self.describe(component)
        attrs = dict(defaults)
        style = self._style(component, descriptors)
        if component.styles.get("textAlign") in ("left", "center", "right"):
            attrs[self.vocabulary.property_key("textAlign")] = component.styles["textAlign"]
        self._apply_descriptors(attrs, style, block_name, descriptors)
        self._apply_presets(attrs, style, component, descriptors)
        if style:
            attrs["style"] = style
        if descriptors.custom_css:
            self.custom_css.append(descriptors.custom_css)
        return attrs

    def _style(self, component: ComponentInfo, descriptors: ComponentDescriptors) -> dict[str, Any]:
        styles = component.styles
        style: dict[str, Any] = {}

        color = {}
        if styles.get("color") and not is_transparent_color(styles["color"]):
            color["text"] = styles["color"]
        if styles.get("backgroundColor") and not is_transparent_color(styles["backgroundColor"]):
            color["background"] = styles["backgroundColor"]
        if color:
            style["color"] = color

        typography = {}
        for prop in ("fontSize", "fontFamily", "lineHeight", "letterSpacing", "textTransform"):
            if styles.get(prop) not in (None, ""):
                typography[prop] = str(styles[prop])
        if styles.get("fontWeight") not in (None, ""):
            typography["fontWeight"] = str(styles["fontWeight"])
        if typography:
            style["typography"] = typography

        box = descriptors.box_model
        spacing = {}
        if box.padding is not None:
            spacing["padding"] = _sides(box.padding)
        if box.margin is not None:
            spacing["margin"] = _sides(box.margin)
        if styles.get("gap"):
            spacing["blockGap"] = str(styles["gap"])
        if spacing:
            style["spacing"] = spacing
        self._note_spacing(box.padding, box.margin)

        border = {}
        radius = parse_shorthand_dimension(styles.get("borderRadius"))
        if radius is not None:
            border["radius"] = radius.top.css() if radius.is_linked else _sides(radius)
        if box.border is not None:
            border["width"] = box.border.top.css() if box.border.is_linked else _sides(box.border)
            if styles.get("borderColor") and not is_transparent_color(styles["borderColor"]):
                border["color"] = styles["borderColor"]
            if styles.get("borderStyle"):
                border["style"] = styles["borderStyle"]
        if border:
            style["border"] = border
        return style

    def _apply_descriptors(
        self,
        attrs: dict[str, Any],
        style: dict[str, Any],
        block_name: str,
        descriptors: ComponentDescriptors,
    ) -> None:
        vocabulary = self.vocabulary

        for breakpoint in sorted(descriptors.responsive.hidden):
            _add_class(attrs, f"hide-on-{breakpoint}")

        if descriptors.animation is not None:
            name = vocabulary.animation_name(descriptors.animation.type)
            _add_class(attrs, "animate__animated")
            _add_class(attrs, f"animate__{name}")

        if descriptors.hover is not None and descriptors.hover.animation:
            _add_class(attrs, f"hover-{descriptors.hover.animation}")

        if descriptors.box_shadow is not None:
            style["shadow"] = descriptors.box_shadow.css()

        motion = descriptors.motion
        if motion is not None:
            if block_name == "core/cover" and motion.has("parallax"):
                attrs["hasParallax"] = True
            if motion.sticky is not None and block_name in GROUP_BLOCKS:
                style["position"] = {"type": "sticky", "top": motion.sticky.top or "0px"}

        dynamic = descriptors.dynamic
        if dynamic is not None and block_name in BINDING_ATTRIBUTES:
            attrs["metadata"] = {
                "bindings": {
                    BINDING_ATTRIBUTES[block_name]: {
                        "source": "core/post-meta",
                        "args": {"key": _binding_key(dynamic.source)},
                    }
                }
            }

    def _apply_presets(
        self,
        attrs: dict[str, Any],
        style: dict[str, Any],
        component: ComponentInfo,
        descriptors: ComponentDescriptors,
    ) -> None:
        """Replace literal colors, fonts and sizes with preset slugs."""
        links = descriptors.tokens
        color = style.get("color", {})
        for prop, css_key in (("color", "text"), ("backgroundColor", "background")):
            value = color.get(css_key)
            if not value:
                continue
            attrs[self.vocabulary.property_key(prop)] = (
                links.color_tokens.get(prop) or self.register_color(value)
            )
            del color[css_key]
        if "color" in style and not style["color"]:
            del style["color"]

        typography = style.get("typography", {})
        if typography.get("fontFamily"):
            token = links.font_tokens.get("fontFamily")
            attrs["fontFamily"] = _slug(token) if token else self.register_font(typography["fontFamily"])
            del typography["fontFamily"]
        if typography.get("fontSize"):
            token = links.size_tokens.get("fontSize")
            attrs["fontSize"] = token or self.register_font_size(typography["fontSize"])
            del typography["fontSize"]
        if "typography" in style and not style["typography"]:
            del style["typography"]

    def _inner_html(
        self,
        component: ComponentInfo,
        block_name: str,
        attrs: dict[str, Any],
        is_container: bool,
    ) -> str:
        content = "" if is_container else html_of(component)

        if block_name == "core/heading":
            level = attrs["level"]
            return f'<h{level} class="wp-block-heading">{content}</h{level}>'
        if block_name == "core/paragraph":
            return f"<p>{content}</p>"
        if block_name == "core/button":
            return (
                '<div class="wp-block-button"><a class="wp-block-button__link wp-element-button" '
                f'href="{escape(attrs["url"])}">{escape(attrs["text"])}</a></div>'
            )
        if block_name == "core/image":
            return (
                '<figure class="wp-block-image size-large">'
                f'<img src="{escape(attrs["url"])}" alt="{escape(attrs["alt"])}"/></figure>'
            )
        if block_name == "core/list":
            tag = "ol" if attrs.get("ordered") else "ul"
            return f"<{tag}>{_list_items(component)}</{tag}>"
        if block_name == "core/quote":
            return f'<blockquote class="wp-block-quote">{content}</blockquote>'
        if block_name == "core/preformatted":
            return f'<pre class="wp-block-preformatted">{content}</pre>'
        if block_name == "core/code":
            return f'<pre class="wp-block-code"><code>{content}</code></pre>'
        if block_name == "core/separator":
            return '<hr class="wp-block-separator has-alpha-channel-opacity"/>'
        if block_name == "core/spacer":
            return (
                f'<div style="height:{attrs["height"]}" aria-hidden="true" '
                'class="wp-block-spacer"></div>'
            )
        if block_name == "core/video":
            return f'<figure class="wp-block-video"><video controls src="{escape(attrs["src"])}"></video></figure>'
        if block_name in GROUP_BLOCKS:
            tag = attrs.get("tagName", "div")
            return f'<{tag} class="wp-block-group">{content}</{tag}>'
        if block_name == "core/columns":
            return '<div class="wp-block-columns"></div>'
        if block_name == "core/column":
            width = attrs.get("width")
            style = f' style="flex-basis:{width}"' if width else ""
            return f'<div class="wp-block-column"{style}></div>'
        if block_name == "core/buttons":
            return '<div class="wp-block-buttons"></div>'
        if block_name == "core/cover":
            image = ""
            if attrs.get("url"):
                image = (
                    '<img class="wp-block-cover__image-background" alt="" '
                    f'src="{escape(attrs["url"])}" data-object-fit="cover"/>'
                )
            return (
                f'<div class="wp-block-cover">{image}'
                f'<div class="wp-block-cover__inner-container">{content}</div></div>'
            )
        if block_name in DYNAMIC_BLOCKS:
            return ""
        return content

    # -------------------------------------------------------------------------
    # Specialized Widgets
    # -------------------------------------------------------------------------

    def _widget_block(
        self, component: ComponentInfo, detected: SpecializedWidget
    ) -> dict[str, Any]:
        converters = {
            WidgetKind.ICON: self._icon_block,
            WidgetKind.ICON_LIST: self._icon_list_block,
            WidgetKind.GALLERY: self._gallery_block,
            WidgetKind.CAROUSEL: self._carousel_block,
            WidgetKind.TESTIMONIAL: self._testimonial_block,
            WidgetKind.PRICING_TABLE: self._pricing_table_block,
        }
        block = converters[detected.kind](component, detected.widget)
        block["attrs"] = self._attrs(component, block["blockName"], block["attrs"])
        return block

    def _icon_block(self, component: ComponentInfo, widget: IconWidget) -> dict[str, Any]:
        if widget.library == "svg":
            markup = widget.icon
        else:
            css = icon_class(widget.icon, widget.library, component.classes)
            text = widget.icon if widget.library == "material" else ""
            markup = (
                f'<span class="{css}" style="font-size: {widget.size}px; '
                f'color: {widget.color};">{text}</span>'
            )
        if widget.link:
            markup = f'<a href="{escape(widget.link)}">{markup}</a>'
        return {
            "blockName": "core/html",
            "attrs": {"className": "icon-widget"},
            "innerBlocks": [],
            "innerHTML": markup,
        }

    def _icon_list_block(self, component: ComponentInfo, widget: IconListWidget) -> dict[str, Any]:
        items = []
        for item in widget.items:
            color = f' style="color: {item.icon_color}"' if item.icon_color else ""
            icon = f'<i class="{icon_class(item.icon, item.library)}"{color}></i>'
            text = f"<span>{item.text}</span>"
            if item.link:
                text = f'<a href="{escape(item.link)}">{text}</a>'
            items.append(f"<li>{icon} {text}</li>")
        return {
            "blockName": "core/list",
            "attrs": {"ordered": False, "className": "icon-list"},
            "innerBlocks": [],
            "innerHTML": f'<ul class="icon-list {widget.layout}">{"".join(items)}</ul>',
        }

    def _gallery_block(self, component: ComponentInfo, widget: GalleryWidget) -> dict[str, Any]:
        images = []
        for image in widget.images:
            caption = f'<figcaption class="wp-element-caption">{image.caption}</figcaption>' if image.caption else ""
            images.append(
                {
                    "blockName": "core/image",
                    "attrs": {"url": image.url, "alt": image.alt, "sizeSlug": "large"},
                    "innerBlocks": [],
                    "innerHTML": (
                        '<figure class="wp-block-image size-large">'
                        f'<img src="{escape(image.url)}" alt="{escape(image.alt)}"/>{caption}</figure>'
                    ),
                }
            )
        columns = widget.desktop_columns
        cropped = widget.aspect_ratio != "auto"
        return {
            "blockName": "core/gallery",
            "attrs": {
                "columns": columns,
                "imageCrop": cropped,
                "linkTo": "media" if widget.lightbox else "none",
            },
            "innerBlocks": images,
            "innerHTML": (
                f'<figure class="wp-block-gallery has-nested-images columns-{columns}'
                f'{" is-cropped" if cropped else ""}"></figure>'
            ),
        }

    def _carousel_block(self, component: ComponentInfo, widget: CarouselWidget) -> dict[str, Any]:
        slides = []
        for slide in widget.slides:
            parts = []
            if slide.image:
                parts.append(f'<img src="{escape(slide.image)}" alt="{escape(slide.title or "")}"/>')
            if slide.title:
                parts.append(f"<h3>{slide.title}</h3>")
            if slide.subtitle:
                parts.append(f'<p class="subtitle">{slide.subtitle}</p>')
            if slide.content:
                parts.append(f'<div class="content">{slide.content}</div>')
            if slide.link:
                parts.append(f'<a href="{escape(slide.link)}">Learn More</a>')
            slides.append(f'<div class="carousel-slide">{"".join(parts)}</div>')
        options = (
            f'data-autoplay="{str(widget.autoplay).lower()}" '
            f'data-speed="{widget.autoplay_speed}" '
            f'data-slides-to-show="{widget.slides_to_show}"'
        )
        return {
            "blockName": "core/html",
            "attrs": {"className": "carousel-widget"},
            "innerBlocks": [],
            "innerHTML": f'<div class="carousel" {options}>{"".join(slides)}</div>',
        }

    def _testimonial_block(
        self, component: ComponentInfo, widget: TestimonialWidget
    ) -> dict[str, Any]:
        quotes = []
        for item in widget.testimonials:
            image = (
                f'<img src="{escape(item.author_image)}" alt="{escape(item.author_name)}" '
                'class="author-image"/>'
                if item.author_image
                else ""
            )
            title = f'<span class="title">{item.author_title}</span>' if item.author_title else ""
            rating = f'<div class="rating">{"★" * item.rating}</div>' if item.rating else ""
            quotes.append(
                f'<blockquote class="testimonial"><div class="content">{item.content}</div>'
                f"<footer>{image}<cite><strong>{item.author_name}</strong>{title}</cite>"
                f"{rating}</footer></blockquote>"
            )
        return {
            "blockName": "core/html",
            "attrs": {"className": "testimonial-widget"},
            "innerBlocks": [],
            "innerHTML": f'<div class="testimonials {widget.layout}">{"".join(quotes)}</div>',
        }

    def _pricing_table_block(
        self, component: ComponentInfo, widget: PricingTableWidget
    ) -> dict[str, Any]:
        plans = []
        for plan in widget.plans:
            price = f"{format_number(plan.price)}"
            amount = (
                f'<span class="currency">{widget.currency}</span><span class="amount">{price}</span>'
                if widget.currency_position == "before"
                else f'<span class="amount">{price}</span><span class="currency">{widget.currency}</span>'
            )
            features = "".join(
                f'<li class="{"included" if feature.included else "excluded"}">{feature.text}</li>'
                for feature in plan.features
            )
            ribbon = f'<div class="ribbon">{plan.ribbon}</div>' if plan.ribbon else ""
            highlighted = " highlighted" if plan.highlighted else ""
            plans.append(
                f'<div class="pricing-plan{highlighted}">{ribbon}'
                f'<h3 class="plan-title">{plan.title}</h3>'
                f'<div class="price">{amount}<span class="period">{widget.period}</span></div>'
                f'<ul class="features">{features}</ul>'
                f'<a href="{escape(plan.button_link)}" class="button">{plan.button_text}</a></div>'
            )
        return {
            "blockName": "core/html",
            "attrs": {"className": "pricing-table-widget"},
            "innerBlocks": [],
            "innerHTML": f'<div class="pricing-table">{"".join(plans)}</div>',
        }

    # -------------------------------------------------------------------------
    # Patterns & Reusable Blocks
    # -------------------------------------------------------------------------

    def _rendered_nodes(self, components: list[ComponentInfo]) -> list[tuple[str, ComponentInfo]]:
        return [
            (path, node)
            for path, node in iter_components(components)
            if path in self._rendered
        ]

    def _library_block_type(self, template: ComponentTemplate) -> str:
        return self.vocabulary.type_map.get(template.component_type.lower(), "core/group")

    def _patterns(self, components: list[ComponentInfo]) -> list[dict[str, Any]]:
        thresholds = self.options.thresholds
        if self.options.library is not None:
            return [
                {
                    "title": template.name,
                    "slug": template.id,
                    "description": f"Reusable {template.component_type} pattern (usage: {template.usage})",
                    "categories": [PATTERN_CATEGORIES.get(template.category, "text")],
                    "keywords": list(template.tags),
                    "content": template.html,
                    "blockTypes": [self._library_block_type(template)],
                }
                for template in promoted_templates(self.options.library, thresholds.pattern_min_score)
            ]
        if not self.options.use_patterns:
            return []

        def signature(item: tuple[str, ComponentInfo]) -> str:
            node = item[1]
            return f"{node.component_type}:{node.tag}:{len(node.children)}"

        containers = [item for item in self._rendered_nodes(components) if item[1].children]
        repeated = repeated_signatures(containers, signature, thresholds.pattern_min_occurrences)
        return [
            {
                "title": f"Pattern {index}",
                "slug": f"pattern-{index}",
                "description": f"Repeated {key}",
                "categories": ["custom"],
                "keywords": [],
                "content": serialize_block(self._rendered[path]),
                "blockTypes": [self._rendered[path]["blockName"]],
            }
            for index, (key, (path, _)) in enumerate(repeated, start=1)
        ]

    def _reusable_blocks(self, components: list[ComponentInfo]) -> list[dict[str, Any]]:
        if self.options.library is not None:
            blocks = []
            for template in promoted_templates(
                self.options.library, self.options.thresholds.saved_block_min_score
            ):
                digits = re.sub(r"\D", "", template.id)
                blocks.append(
                    {
                        "id": int(digits) if digits else self.next_id(),
                        "title": template.name,
                        "content": template.html,
                        "syncStatus": "sync",
                    }
                )
            return blocks
        if not self.options.extract_reusable:
            return []
        return [
            {
                "id": self.next_id(),
                "title": f"Reusable {node.component_type}",
                "content": serialize_block(self._rendered[path]),
                "syncStatus": "sync",
            }
            for path, node in self._rendered_nodes(components)
            if node.component_type in REUSABLE_TYPES
        ]

    # -------------------------------------------------------------------------
    # Template Parts
    # -------------------------------------------------------------------------

    def _template_parts(self) -> list[dict[str, Any]]:
        parts = self.options.template_parts
        minimum = self.options.thresholds.template_part_min_confidence
        candidates: list[tuple[str, TemplatePart]] = [
            (kind, part)
            for kind, part in (
                ("header", parts.header),
                ("footer", parts.footer),
                ("sidebar", parts.sidebar),
            )
            if part is not None
        ]
        candidates.extend((f"part-{index}", part) for index, part in enumerate(parts.other, start=1))

        entries = []
        for slug, part in candidates:
            if part.confidence < minimum:
                continue
            area, tag = TEMPLATE_PART_AREAS.get(slug, ("uncategorized", "div"))
            entries.append(
                {
                    "slug": slug,
                    "title": part.name or slug.title(),
                    "area": area,
                    "content": (
                        f'<!-- wp:group {{"tagName":"{tag}"}} -->\n'
                        f'<{tag} class="wp-block-group">\n'
                        f"<!-- wp:html -->\n{part.html}\n<!-- /wp:html -->\n"
                        f"</{tag}>\n<!-- /wp:group -->"
                    ),
                }
            )
        return entries

    # -------------------------------------------------------------------------
    # Global Styles
    # -------------------------------------------------------------------------

    def _global_styles(self) -> dict[str, Any]:
        """theme.json (version 2) settings and styles."""
        palette = self.options.palette
        typography = self.options.typography

        colors = []
        if palette is not None:
            colors = [
                {
                    "slug": token,
                    "color": normalize_color_to_hex(color.hex),
                    "name": color.name or token.replace("-", " ").title(),
                }
                for token, color in palette_tokens(palette)
            ]
        colors.extend(
            {"slug": slug, "color": value, "name": slug.replace("-", " ").title()}
            for value, slug in self.colors.items()
        )
        gradients = []
        if palette is not None:
            gradients = [
                {
                    "slug": f"gradient-{index}",
                    "gradient": _gradient_css(gradient),
                    "name": gradient.name or f"Gradient {index}",
                }
                for index, gradient in enumerate(palette.gradients, start=1)
            ]

        families = []
        sizes = []
        if typography is not None:
            families = [
                {
                    "slug": _slug(family.name),
                    "fontFamily": ", ".join([family.name, *family.fallbacks]),
                    "name": family.name,
                }
                for family in typography.font_families
            ]
            sizes = [
                {"slug": size.name, "size": f"{format_number(size.px)}px", "name": size.name.title()}
                for size in typography.type_scale.sizes
            ]
            if not sizes:
                base = typography.global_settings.base_font_size
                ratio = typography.type_scale.ratio
                sizes = [
                    {"slug": "small", "size": f"{round(base / ratio)}px", "name": "Small"},
                    {"slug": "medium", "size": f"{format_number(base)}px", "name": "Medium"},
                    {"slug": "large", "size": f"{round(base * ratio)}px", "name": "Large"},
                    {"slug": "x-large", "size": f"{round(base * ratio * ratio)}px", "name": "Extra Large"},
                ]
        families.extend(
            {"slug": slug, "fontFamily": value, "name": value.split(",")[0].strip().strip("'\"")}
            for slug, value in self.fonts.values()
        )
        sizes.extend(
            {"slug": slug, "size": value, "name": slug.replace("-", " ").title()}
            for value, slug in self.font_sizes.items()
        )

        settings = self.options.typography.global_settings if typography is not None else None
        return {
            "version": 2,
            "settings": {
                "color": {"palette": colors, "gradients": gradients},
                "typography": {
                    "fontFamilies": families,
                    "fontSizes": sizes,
                    "lineHeight": True,
                    "letterSpacing": True,
                },
                "spacing": {
                    "spacingSizes": [
                        {"slug": slug, "size": value, "name": slug.replace("-", " ").title()}
                        for value, slug in self.spacing.items()
                    ],
                    "units": list(SPACING_UNITS),
                },
                "layout": {"contentSize": "840px", "wideSize": "1200px"},
            },
            "styles": {
                "color": {
                    "background": "#ffffff",
                    "text": settings.base_color if settings else "#000000",
                },
                "typography": {
                    "fontFamily": families[0]["fontFamily"] if families else "sans-serif",
                    "fontSize": f"{format_number(settings.base_font_size)}px" if settings else "16px",
                    "lineHeight": str(format_number(settings.base_line_height)) if settings else "1.5",
                },
                "elements": self._element_styles(),
                "css": "\n\n".join(self.custom_css),
            },
        }

    def _element_styles(self) -> dict[str, Any]:
        typography = self.options.typography
        if typography is None:
            return {}
        text_styles = typography.text_styles
        elements: dict[str, Any] = {}
        for level, style in text_styles.headings():
            elements[level] = {
                "typography": {
                    "fontFamily": style.font_family,
                    "fontSize": style.font_size,
                    "fontWeight": str(style.font_weight),
                    "lineHeight": str(style.line_height),
                }
            }
        if text_styles.link is not None:
            elements["link"] = {
                "typography": {
                    "fontFamily": text_styles.link.font_family,
                    "textDecoration": "underline",
                },
                "color": {"text": text_styles.link.color or "inherit"},
            }
        if text_styles.button is not None:
            elements["button"] = {
                "typography": {
                    "fontFamily": text_styles.button.font_family,
                    "fontSize": text_styles.button.font_size,
                    "fontWeight": str(text_styles.button.font_weight),
                    "textTransform": text_styles.button.text_transform or "none",
                }
            }
        return elements
