"""Specialized widget detection.

Recognizes icons, icon lists, galleries, carousels, testimonials and pricing
tables in the component tree. A detected widget absorbs the whole subtree
of its node; exporters convert it with a dedicated widget converter instead
of the generic element mapping.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from builder_export.core.log import get_logger
from builder_export.ir import ComponentInfo

logger = get_logger(__name__)

HEADING_TAG = re.compile(r"^h[1-6]$")
ROTATION_PATTERN = re.compile(r"rotate\((-?[\d.]+)deg\)")
FONTAWESOME_PATTERN = re.compile(r"fa-[\w-]+")
DASHICONS_PATTERN = re.compile(r"dashicons-[\w-]+")
LEADING_INT = re.compile(r"-?\d+")
PRICE_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")
REPEAT_PATTERN = re.compile(r"repeat\(\s*(\d+)")
COL_CLASS = re.compile(r"col-(?:\w+-)?(\d+)")
RATING_CLASS = re.compile(r"rating-(\d)")

# Tags whose presence means a subtree is content, not an image gallery.
CONTENT_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6", "p", "button", "form"})


class WidgetKind(str, Enum):
    """Specialized widget kinds, in detection priority order."""

    ICON = "icon"
    GALLERY = "gallery"
    CAROUSEL = "carousel"
    TESTIMONIAL = "testimonial"
    PRICING_TABLE = "pricing-table"
    ICON_LIST = "icon-list"


# =============================================================================
# Widget Models
# =============================================================================


@dataclass
class IconWidget:
    icon: str
    library: str
    size: int = 24
    color: str = "#000"
    hover_color: str | None = None
    link: str | None = None
    link_target: str | None = None
    alignment: str = "left"
    rotation: float = 0


@dataclass
class IconListItem:
    icon: str
    library: str
    text: str = ""
    link: str | None = None
    icon_color: str | None = None


@dataclass
class IconListWidget:
    items: list[IconListItem]
    layout: str = "vertical"
    icon_position: str = "left"
    spacing: int = 10
    divider: bool = False


@dataclass
class GalleryImage:
    url: str
    alt: str = ""
    title: str | None = None
    caption: str | None = None
    link: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass
class GalleryWidget:
    images: list[GalleryImage]
    layout: str = "grid"
    columns: int | dict[str, int] = field(
        default_factory=lambda: {"mobile": 1, "tablet": 2, "desktop": 3}
    )
    gap: int = 10
    aspect_ratio: str = "auto"
    lightbox: bool = True
    captions: bool = False
    hover_effect: str = "none"
    lazy_load: bool = True

    @property
    def desktop_columns(self) -> int:
        if isinstance(self.columns, dict):
            return self.columns.get("desktop", 3)
        return self.columns


@dataclass
class CarouselSlide:
    type: str
    image: str | None = None
    title: str | None = None
    subtitle: str | None = None
    content: str = ""
    link: str | None = None


@dataclass
class CarouselWidget:
    slides: list[CarouselSlide]
    autoplay: bool = True
    autoplay_speed: int = 3000
    pause_on_hover: bool = True
    infinite: bool = True
    arrows: bool = True
    dots: bool = True
    slides_to_show: int = 1
    slides_to_scroll: int = 1
    effect: str = "slide"
    direction: str = "horizontal"
    speed: int = 300


@dataclass
class Testimonial:
    content: str
    author_name: str = "Author Name"
    author_title: str | None = None
    author_image: str | None = None
    rating: int | None = None


@dataclass
class TestimonialWidget:
    testimonials: list[Testimonial]
    layout: str = "single"
    image_shape: str = "circle"
    alignment: str = "center"

    @property
    def show_image(self) -> bool:
        return any(item.author_image for item in self.testimonials)

    @property
    def show_rating(self) -> bool:
        return any(item.rating is not None for item in self.testimonials)


@dataclass
class PricingFeature:
    text: str
    included: bool = True


@dataclass
class PricingPlan:
    title: str = "Plan Name"
    price: float = 0
    features: list[PricingFeature] = field(default_factory=list)
    button_text: str = "Get Started"
    button_link: str = "#"
    ribbon: str | None = None
    highlighted: bool = False


@dataclass
class PricingTableWidget:
    plans: list[PricingPlan]
    layout: str = "columns"
    currency: str = "$"
    currency_position: str = "before"
    period: str = "/month"

    @property
    def highlight_plan(self) -> int:
        """Index of the first highlighted plan, -1 when none is."""
        for index, plan in enumerate(self.plans):
            if plan.highlighted:
                return index
        return -1


Widget = (
    IconWidget
    | IconListWidget
    | GalleryWidget
    | CarouselWidget
    | TestimonialWidget
    | PricingTableWidget
)


@dataclass
class SpecializedWidget:
    """A detected widget and its kind."""

    kind: WidgetKind
    widget: Widget


# =============================================================================
# Tree Helpers
# =============================================================================


def _descendants(component: ComponentInfo) -> Iterator[ComponentInfo]:
    for child in component.children:
        yield child
        yield from _descendants(child)


def _find(component: ComponentInfo, predicate) -> ComponentInfo | None:
    for node in _descendants(component):
        if predicate(node):
            return node
    return None


def _has_any_class(component: ComponentInfo, *names: str) -> bool:
    return any(name in component.classes for name in names)


def _leading_int(value, default: int) -> int:
    match = LEADING_INT.search(str(value)) if value not in (None, "") else None
    return int(match.group(0)) if match else default


def _heading_text(component: ComponentInfo) -> str | None:
    if HEADING_TAG.match(component.tag):
        return component.text_content
    heading = _find(component, lambda node: bool(HEADING_TAG.match(node.tag)))
    return heading.text_content if heading else None


def _link_of(component: ComponentInfo) -> str | None:
    if component.attributes.get("href"):
        return component.attributes["href"]
    anchor = _find(component, lambda node: node.tag == "a" and "href" in node.attributes)
    return anchor.attributes["href"] if anchor else None


# =============================================================================
# Icons
# =============================================================================


def detect_icon(component: ComponentInfo) -> tuple[str, str] | None:
    """Return (icon, library) when the node is an icon."""
    classes = component.class_name

    if "fa-" in classes:
        match = FONTAWESOME_PATTERN.search(classes)
        if match:
            return match.group(0), "fontawesome"
    if "dashicons-" in classes:
        match = DASHICONS_PATTERN.search(classes)
        if match:
            return match.group(0), "dashicons"
    if "material-icons" in classes:
        return component.text_content.strip() or "icon", "material"
    if component.tag == "svg":
        return component.inner_html, "svg"
    return None


def extract_icon_widget(component: ComponentInfo) -> IconWidget | None:
    icon = detect_icon(component)
    if icon is None:
        return None

    styles = component.styles
    analysis = component.advanced_analysis
    hover_color = None
    if analysis is not None and analysis.interactive_states is not None:
        hover_color = analysis.interactive_states.hover.get("color")

    rotation = ROTATION_PATTERN.search(str(styles.get("transform") or ""))
    return IconWidget(
        icon=icon[0],
        library=icon[1],
        size=_leading_int(styles.get("fontSize"), 24),
        color=str(styles.get("color") or "#000"),
        hover_color=hover_color,
        link=component.attributes.get("href"),
        link_target=component.attributes.get("target"),
        alignment=str(styles.get("textAlign") or "left"),
        rotation=float(rotation.group(1)) if rotation else 0,
    )


def _item_icon(child: ComponentInfo) -> tuple[str, str] | None:
    icon = detect_icon(child)
    if icon is not None:
        return icon
    for grandchild in child.children:
        icon = detect_icon(grandchild)
        if icon is not None:
            return icon
    return None


def _is_horizontal(component: ComponentInfo) -> bool:
    return (
        component.styles.get("flexDirection") == "row"
        or component.styles.get("display") == "inline-flex"
        or component.has_class("horizontal")
    )


def extract_icon_list_widget(component: ComponentInfo) -> IconListWidget | None:
    """Two or more children that are all icons (or lead with an icon)."""
    if len(component.children) < 2:
        return None

    items = []
    for child in component.children:
        icon = _item_icon(child)
        if icon is None:
            return None
        items.append(
            IconListItem(
                icon=icon[0],
                library=icon[1],
                text=child.text_content.strip(),
                link=_link_of(child),
                icon_color=child.styles.get("color"),
            )
        )

    return IconListWidget(
        items=items,
        layout="horizontal" if _is_horizontal(component) else "vertical",
    )


# =============================================================================
# Galleries
# =============================================================================


def _gallery_image(node: ComponentInfo, caption: str | None, link: str | None) -> GalleryImage:
    attributes = node.attributes
    width = _leading_int(attributes.get("width"), 0)
    height = _leading_int(attributes.get("height"), 0)
    return GalleryImage(
        url=attributes.get("src") or attributes.get("data-src", ""),
        alt=attributes.get("alt", ""),
        title=attributes.get("title"),
        caption=caption,
        link=link,
        width=width or None,
        height=height or None,
    )


def collect_images(
    component: ComponentInfo, caption: str | None = None, link: str | None = None
) -> list[GalleryImage]:
    """Every img in the subtree, in document order.

    An img inside a figure takes the figure's figcaption text as caption;
    an img inside a link takes the link's href.
    """
    if component.tag == "img":
        return [_gallery_image(component, caption, link)]

    if component.tag == "figure":
        figcaption = next(
            (child for child in component.children if child.tag == "figcaption"), None
        )
        if figcaption is not None:
            caption = figcaption.text_content.strip() or caption
    if component.tag == "a" and component.attributes.get("href"):
        link = component.attributes["href"]

    images = []
    for child in component.children:
        images.extend(collect_images(child, caption, link))
    return images


def _gallery_columns(component: ComponentInfo) -> int | dict[str, int]:
    template = component.styles.get("gridTemplateColumns")
    if template:
        template = str(template)
        repeat = REPEAT_PATTERN.search(template)
        if repeat:
            return int(repeat.group(1))
        return len(template.split())

    col = COL_CLASS.search(component.class_name)
    if col:
        return int(col.group(1))
    return {"mobile": 1, "tablet": 2, "desktop": 3}


def _gallery_layout(component: ComponentInfo) -> str:
    for layout in ("masonry", "justified"):
        if component.has_class(layout):
            return layout
    if component.has_class("carousel") or component.has_class("slider"):
        return "carousel"
    return "grid"


def _gallery_hover(component: ComponentInfo) -> str:
    analysis = component.advanced_analysis
    if analysis is None or analysis.interactive_states is None:
        return "none"
    hover = analysis.interactive_states.hover
    transform = str(hover.get("transform") or "")
    if "scale" in transform:
        return "zoom"
    if "opacity" in hover and hover["opacity"] != component.styles.get("opacity"):
        return "fade"
    if "translate" in transform:
        return "slide"
    return "none"


def extract_gallery_widget(component: ComponentInfo) -> GalleryWidget | None:
    """Two or more images with no headings, paragraphs or buttons around them."""
    if component.tag == "img":
        return None
    if any(node.tag in CONTENT_TAGS for node in _descendants(component)):
        return None

    images = collect_images(component)
    if len(images) < 2:
        return None

    return GalleryWidget(
        images=images,
        layout=_gallery_layout(component),
        columns=_gallery_columns(component),
        gap=_leading_int(component.styles.get("gap"), 10),
        captions=any(image.caption for image in images),
        hover_effect=_gallery_hover(component),
    )


# =============================================================================
# Carousels
# =============================================================================


def _subtitle(component: ComponentInfo) -> str | None:
    def is_subtitle(node: ComponentInfo) -> bool:
        return node.has_class("subtitle") or node.has_class("sub-title")

    if is_subtitle(component):
        return component.text_content
    node = _find(component, is_subtitle)
    return node.text_content if node else None


def extract_carousel_widget(component: ComponentInfo) -> CarouselWidget | None:
    if not any(component.has_class(name) for name in ("carousel", "slider", "swiper")):
        return None
    if not component.children:
        return None

    slides = []
    for child in component.children:
        images = collect_images(child)
        slides.append(
            CarouselSlide(
                type="image" if images else "content",
                image=images[0].url if images else None,
                title=_heading_text(child),
                subtitle=_subtitle(child),
                content=child.text_content.strip(),
                link=_link_of(child),
            )
        )
    return CarouselWidget(slides=slides)


# =============================================================================
# Testimonials
# =============================================================================


def _rating(component: ComponentInfo) -> int | None:
    match = RATING_CLASS.search(component.class_name)
    if match:
        return int(match.group(1))
    stars = [
        child
        for child in component.children
        if child.has_class("star") or child.has_class("rating")
    ]
    if stars:
        return min(len(stars), 5)
    return None


def _testimonial(item: ComponentInfo) -> Testimonial:
    author = _find(
        item,
        lambda node: node.tag == "cite"
        or _has_any_class(node, "author", "author-name", "testimonial-author"),
    )
    title = _find(item, lambda node: _has_any_class(node, "author-title", "author-role"))
    quote = _find(
        item,
        lambda node: node.tag in ("blockquote", "p") or node.has_class("testimonial-content"),
    )
    images = collect_images(item)

    return Testimonial(
        content=(quote.text_content if quote else item.text_content).strip(),
        author_name=author.text_content.strip() if author and author.text_content.strip() else "Author Name",
        author_title=title.text_content.strip() if title else None,
        author_image=images[0].url if images else None,
        rating=_rating(item),
    )


def extract_testimonial_widget(component: ComponentInfo) -> TestimonialWidget | None:
    if not (component.has_class("testimonial") or component.has_class("review")):
        return None

    def is_item(node: ComponentInfo) -> bool:
        return node.has_class("testimonial-item") or node.has_class("review-item")

    items = [component] if is_item(component) else []
    items.extend(child for child in component.children if is_item(child))
    if not items:
        return None

    testimonials = [_testimonial(item) for item in items]
    return TestimonialWidget(
        testimonials=testimonials,
        layout="single" if len(testimonials) == 1 else "grid",
    )


# =============================================================================
# Pricing Tables
# =============================================================================


def _price(component: ComponentInfo) -> float:
    node = _find(component, lambda candidate: candidate.has_class("price"))
    if node is None:
        return 0
    match = PRICE_PATTERN.search(node.text_content)
    if not match:
        return 0
    return float(match.group(0).replace(",", "."))


def _plan(card: ComponentInfo) -> PricingPlan:
    features = [
        PricingFeature(
            text=node.text_content.strip(),
            included=not any(
                node.has_class(flag) for flag in ("excluded", "disabled", "unavailable")
            ),
        )
        for node in _descendants(card)
        if node.tag == "li"
    ]
    button = _find(card, lambda node: node.tag in ("a", "button"))
    ribbon = _find(card, lambda node: node.has_class("ribbon") or node.has_class("badge"))

    return PricingPlan(
        title=_heading_text(card) or "Plan Name",
        price=_price(card),
        features=features,
        button_text=(button.text_content.strip() if button else "") or "Get Started",
        button_link=(button.attributes.get("href") if button else None) or "#",
        ribbon=ribbon.text_content.strip() if ribbon else None,
        highlighted=card.has_class("featured") or card.has_class("highlighted"),
    )


def extract_pricing_table_widget(component: ComponentInfo) -> PricingTableWidget | None:
    if not (component.has_class("pricing") or component.has_class("plan")):
        return None

    cards = [
        child
        for child in component.children
        if child.has_class("pricing-plan") or child.has_class("plan-card")
    ]
    if not cards:
        return None
    return PricingTableWidget(plans=[_plan(card) for card in cards])


# =============================================================================
# Dispatch
# =============================================================================

DETECTORS = (
    (WidgetKind.ICON, extract_icon_widget),
    (WidgetKind.GALLERY, extract_gallery_widget),
    (WidgetKind.CAROUSEL, extract_carousel_widget),
    (WidgetKind.TESTIMONIAL, extract_testimonial_widget),
    (WidgetKind.PRICING_TABLE, extract_pricing_table_widget),
    (WidgetKind.ICON_LIST, extract_icon_list_widget),
)


def detect_specialized_widget(component: ComponentInfo) -> SpecializedWidget | None:
    """Run the detectors in priority order and return the first match."""
    for kind, detector in DETECTORS:
        widget = detector(component)
        if widget is not None:
            logger.debug("Detected %s widget on <%s>", kind.value, component.tag)
            return SpecializedWidget(kind=kind, widget=widget)
    return None
