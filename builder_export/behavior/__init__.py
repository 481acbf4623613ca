"""Responsive, hover, animation, motion and dynamic-content descriptors."""

from builder_export.behavior.lib import (
    ComponentDescriptors,
    DynamicContent,
    EntranceAnimation,
    HoverEffects,
    MotionEffects,
    ResponsiveSettings,
    ScrollEffect,
    StickyEffect,
    TransitionEffect,
    camel_to_kebab,
    css_selector,
    css_value,
    describe_component,
    detect_dynamic_content,
    extract_entrance_animation,
    extract_hover_effects,
    extract_motion_effects,
    extract_responsive_settings,
    generate_custom_css,
    hover_animation_for,
    map_animation_name,
    parse_time_ms,
    parse_transition,
)

__all__ = [
    # Descriptors
    "ComponentDescriptors",
    "ResponsiveSettings",
    "HoverEffects",
    "TransitionEffect",
    "EntranceAnimation",
    "MotionEffects",
    "ScrollEffect",
    "StickyEffect",
    "DynamicContent",
    # Extractors
    "describe_component",
    "extract_responsive_settings",
    "extract_hover_effects",
    "extract_entrance_animation",
    "extract_motion_effects",
    "detect_dynamic_content",
    "generate_custom_css",
    # Helpers
    "camel_to_kebab",
    "css_selector",
    "css_value",
    "hover_animation_for",
    "map_animation_name",
    "parse_time_ms",
    "parse_transition",
]
