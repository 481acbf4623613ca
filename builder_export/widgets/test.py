"""Unit tests for specialized widget detection."""

import pytest

from builder_export.ir import ComponentInfo
from builder_export.widgets import (
    WidgetKind,
    detect_specialized_widget,
    extract_carousel_widget,
    extract_gallery_widget,
    extract_icon_list_widget,
    extract_icon_widget,
    extract_pricing_table_widget,
    extract_testimonial_widget,
)


def _tree(data: dict) -> ComponentInfo:
    return ComponentInfo.model_validate(data)


def _img(src: str, **attributes) -> dict:
    return {"tagName": "img", "attributes": {"src": src, **attributes}}


class TestIconWidget:
    """Tests for icon detection."""

    @pytest.mark.unit
    def test_fontawesome(self):
        """fa- classes yield a fontawesome icon with style details."""
        node = _tree(
            {
                "tagName": "i",
                "className": "fas fa-check-circle",
                "attributes": {"href": "/go", "target": "_blank"},
                "styles": {"fontSize": "32px", "color": "#ff0000", "transform": "rotate(45deg)"},
                "advancedAnalysis": {"interactiveStates": {"hover": {"color": "#00ff00"}}},
            }
        )
        icon = extract_icon_widget(node)
        assert icon.icon == "fa-check-circle"
        assert icon.library == "fontawesome"
        assert icon.size == 32
        assert icon.hover_color == "#00ff00"
        assert icon.link_target == "_blank"
        assert icon.rotation == 45

    @pytest.mark.unit
    def test_defaults(self):
        """Missing size and color fall back to 24 and #000."""
        icon = extract_icon_widget(_tree({"tagName": "span", "className": "dashicons dashicons-admin-home"}))
        assert (icon.icon, icon.library, icon.size, icon.color) == ("dashicons-admin-home", "dashicons", 24, "#000")

    @pytest.mark.unit
    def test_material_and_svg(self):
        """Material icons use their text, SVGs their markup."""
        material = extract_icon_widget(_tree({"className": "material-icons", "textContent": "home"}))
        svg = extract_icon_widget(_tree({"tagName": "svg", "innerHTML": "<path d='M0'/>"}))
        assert (material.icon, material.library) == ("home", "material")
        assert svg.library == "svg"

    @pytest.mark.unit
    def test_not_icon(self):
        """Plain nodes are not icons."""
        assert extract_icon_widget(_tree({"tagName": "span", "className": "label"})) is None


class TestIconListWidget:
    """Tests for icon list detection."""

    @pytest.mark.unit
    def test_list_items_lead_with_icons(self):
        """li > i.fa items form a horizontal list."""
        node = _tree(
            {
                "tagName": "ul",
                "className": "features horizontal",
                "children": [
                    {"tagName": "li", "textContent": "Fast", "children": [{"tagName": "i", "className": "fa fa-bolt"}]},
                    {"tagName": "li", "textContent": "Safe", "children": [{"tagName": "i", "className": "fa fa-lock"}]},
                ],
            }
        )
        widget = extract_icon_list_widget(node)
        assert [item.icon for item in widget.items] == ["fa-bolt", "fa-lock"]
        assert [item.text for item in widget.items] == ["Fast", "Safe"]
        assert widget.layout == "horizontal"

    @pytest.mark.unit
    def test_requires_all_icons(self):
        """A child without an icon disqualifies the list."""
        node = _tree(
            {
                "children": [
                    {"tagName": "i", "className": "fa fa-bolt"},
                    {"tagName": "span", "textContent": "plain"},
                ]
            }
        )
        assert extract_icon_list_widget(node) is None

    @pytest.mark.unit
    def test_requires_two_children(self):
        """A single icon child is not a list."""
        assert extract_icon_list_widget(_tree({"children": [{"className": "fa fa-x"}]})) is None


class TestGalleryWidget:
    """Tests for gallery detection."""

    @pytest.mark.unit
    def test_five_images(self, gallery_tree):
        """Five images in a three-track grid."""
        gallery = extract_gallery_widget(gallery_tree[0])
        assert len(gallery.images) == 5
        assert gallery.images[0].url == "/img/1.jpg"
        assert gallery.columns == 3
        assert gallery.gap == 16
        assert gallery.lightbox and gallery.lazy_load

    @pytest.mark.unit
    def test_single_image_is_not_gallery(self, single_image_tree):
        """One image never forms a gallery."""
        assert extract_gallery_widget(single_image_tree[0]) is None

    @pytest.mark.unit
    def test_figure_captions_and_layout(self):
        """figcaption text becomes the caption; masonry class sets layout."""
        node = _tree(
            {
                "className": "masonry col-4",
                "children": [
                    {"tagName": "figure", "children": [_img("/a.jpg"), {"tagName": "figcaption", "textContent": "A"}]},
                    {"tagName": "figure", "children": [_img("/b.jpg")]},
                ],
            }
        )
        gallery = extract_gallery_widget(node)
        assert [image.caption for image in gallery.images] == ["A", None]
        assert gallery.captions
        assert gallery.layout == "masonry"
        assert gallery.columns == 4

    @pytest.mark.unit
    def test_default_columns_and_repeat(self):
        """Responsive default without hints; repeat() counts tracks."""
        plain = extract_gallery_widget(_tree({"children": [_img("/a"), _img("/b")]}))
        repeat = extract_gallery_widget(
            _tree({"styles": {"gridTemplateColumns": "repeat(4, 1fr)"}, "children": [_img("/a"), _img("/b")]})
        )
        assert plain.columns == {"mobile": 1, "tablet": 2, "desktop": 3}
        assert plain.desktop_columns == 3
        assert repeat.columns == 4

    @pytest.mark.unit
    def test_content_subtree_is_not_gallery(self):
        """Images next to headings are page content, not a gallery."""
        node = _tree({"children": [{"tagName": "h2"}, _img("/a"), _img("/b")]})
        assert extract_gallery_widget(node) is None

    @pytest.mark.unit
    def test_hover_zoom(self):
        """scale() on hover is a zoom effect."""
        node = _tree(
            {
                "children": [_img("/a"), _img("/b")],
                "advancedAnalysis": {"interactiveStates": {"hover": {"transform": "scale(1.1)"}}},
            }
        )
        assert extract_gallery_widget(node).hover_effect == "zoom"


class TestCarouselWidget:
    """Tests for carousel detection."""

    @pytest.mark.unit
    def test_slides(self):
        """Each child becomes a slide with title, subtitle and link."""
        node = _tree(
            {
                "className": "swiper-container",
                "children": [
                    {
                        "className": "slide",
                        "children": [
                            _img("/s1.jpg"),
                            {"tagName": "h2", "textContent": "First"},
                            {"tagName": "p", "className": "subtitle", "textContent": "Sub"},
                            {"tagName": "a", "attributes": {"href": "/one"}, "textContent": "More"},
                        ],
                    },
                    {"className": "slide", "textContent": "Only text"},
                ],
            }
        )
        carousel = extract_carousel_widget(node)
        first, second = carousel.slides
        assert (first.type, first.image, first.title, first.subtitle, first.link) == (
            "image",
            "/s1.jpg",
            "First",
            "Sub",
            "/one",
        )
        assert second.type == "content"
        assert carousel.autoplay_speed == 3000
        assert carousel.speed == 300

    @pytest.mark.unit
    def test_requires_children(self):
        """An empty slider is not a carousel."""
        assert extract_carousel_widget(_tree({"className": "slider"})) is None


class TestTestimonialWidget:
    """Tests for testimonial detection."""

    @pytest.mark.unit
    def test_items(self):
        """Items record quote, author, title, image and rating."""
        node = _tree(
            {
                "className": "testimonials",
                "children": [
                    {
                        "className": "testimonial-item rating-4",
                        "children": [
                            {"tagName": "blockquote", "textContent": "Great!"},
                            {"tagName": "cite", "textContent": "Ada"},
                            {"className": "author-title", "textContent": "CTO"},
                            _img("/ada.png"),
                        ],
                    },
                    {
                        "className": "review-item",
                        "textContent": "Nice",
                        "children": [{"className": "star"} for _ in range(7)],
                    },
                ],
            }
        )
        widget = extract_testimonial_widget(node)
        first, second = widget.testimonials
        assert (first.content, first.author_name, first.author_title, first.author_image, first.rating) == (
            "Great!",
            "Ada",
            "CTO",
            "/ada.png",
            4,
        )
        assert second.author_name == "Author Name"
        assert second.rating == 5
        assert widget.layout == "grid"
        assert widget.show_rating

    @pytest.mark.unit
    def test_self_item(self):
        """A lone testimonial item is a single testimonial."""
        widget = extract_testimonial_widget(_tree({"className": "review-item", "textContent": "Solid"}))
        assert widget.layout == "single"
        assert widget.testimonials[0].content == "Solid"

    @pytest.mark.unit
    @pytest.mark.parametrize("class_name", ["preview-card", "testimonials-section", "review"])
    def test_no_items_no_widget(self, class_name):
        """Containers merely classed like testimonials keep their structure."""
        node = _tree(
            {
                "className": class_name,
                "children": [
                    {"componentType": "heading", "tagName": "h3", "textContent": "Title"},
                    {"componentType": "paragraph", "tagName": "p", "textContent": "Copy"},
                    {"tagName": "a", "className": "btn", "attributes": {"href": "/x"}, "textContent": "Go"},
                ],
            }
        )
        assert extract_testimonial_widget(node) is None
        assert detect_specialized_widget(node) is None


class TestPricingTableWidget:
    """Tests for pricing table detection."""

    @pytest.mark.unit
    def test_plans(self):
        """Plans parse title, price, features, button and highlight."""
        node = _tree(
            {
                "className": "pricing",
                "children": [
                    {
                        "className": "pricing-plan",
                        "children": [
                            {"tagName": "h3", "textContent": "Pro"},
                            {"className": "price", "textContent": "$29.99/mo"},
                            {
                                "tagName": "ul",
                                "children": [
                                    {"tagName": "li", "textContent": "SSL"},
                                    {"tagName": "li", "className": "excluded", "textContent": "Support"},
                                ],
                            },
                            {"tagName": "a", "attributes": {"href": "/buy"}, "textContent": "Buy"},
                        ],
                    },
                    {"className": "plan-card featured"},
                ],
            }
        )
        table = extract_pricing_table_widget(node)
        pro, default = table.plans
        assert (pro.title, pro.price, pro.button_text, pro.button_link) == ("Pro", 29.99, "Buy", "/buy")
        assert [(f.text, f.included) for f in pro.features] == [("SSL", True), ("Support", False)]
        assert (default.title, default.price, default.button_text, default.button_link) == (
            "Plan Name",
            0,
            "Get Started",
            "#",
        )
        assert table.highlight_plan == 1
        assert (table.currency, table.currency_position, table.period) == ("$", "before", "/month")

    @pytest.mark.unit
    def test_requires_plan_children(self):
        """A pricing class without plan cards is not a table."""
        assert extract_pricing_table_widget(_tree({"className": "pricing", "children": [{}]})) is None


class TestDetectSpecializedWidget:
    """Tests for priority dispatch."""

    @pytest.mark.unit
    def test_gallery_before_carousel(self):
        """An image-only slider is a gallery with carousel layout."""
        node = _tree({"className": "slider", "children": [_img("/a"), _img("/b")]})
        detected = detect_specialized_widget(node)
        assert detected.kind is WidgetKind.GALLERY
        assert detected.widget.layout == "carousel"

    @pytest.mark.unit
    def test_icon_first(self):
        """Icon detection wins over everything else."""
        node = _tree({"className": "fa fa-images gallery", "children": [_img("/a"), _img("/b")]})
        assert detect_specialized_widget(node).kind is WidgetKind.ICON

    @pytest.mark.unit
    def test_no_widget(self, card_tree):
        """Generic content has no specialized widget."""
        assert detect_specialized_widget(card_tree[0]) is None
