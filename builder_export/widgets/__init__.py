"""Specialized widget detectors."""

from builder_export.widgets.lib import (
    DETECTORS,
    CarouselSlide,
    CarouselWidget,
    GalleryImage,
    GalleryWidget,
    IconListItem,
    IconListWidget,
    IconWidget,
    PricingFeature,
    PricingPlan,
    PricingTableWidget,
    SpecializedWidget,
    Testimonial,
    TestimonialWidget,
    Widget,
    WidgetKind,
    collect_images,
    detect_icon,
    detect_specialized_widget,
    extract_carousel_widget,
    extract_gallery_widget,
    extract_icon_list_widget,
    extract_icon_widget,
    extract_pricing_table_widget,
    extract_testimonial_widget,
)

__all__ = [
    # Models
    "WidgetKind",
    "Widget",
    "SpecializedWidget",
    "IconWidget",
    "IconListWidget",
    "IconListItem",
    "GalleryWidget",
    "GalleryImage",
    "CarouselWidget",
    "CarouselSlide",
    "TestimonialWidget",
    "Testimonial",
    "PricingTableWidget",
    "PricingPlan",
    "PricingFeature",
    # Detectors
    "DETECTORS",
    "detect_specialized_widget",
    "detect_icon",
    "collect_images",
    "extract_icon_widget",
    "extract_icon_list_widget",
    "extract_gallery_widget",
    "extract_carousel_widget",
    "extract_testimonial_widget",
    "extract_pricing_table_widget",
]
