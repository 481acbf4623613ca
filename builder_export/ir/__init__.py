"""Intermediate Representation (IR) models for cloned page structures."""

from builder_export.ir.lib import (
    AdvancedAnalysis,
    AnimationInfo,
    BehaviorAnalysis,
    ColorDefinition,
    ColorPalette,
    ComponentInfo,
    ComponentLibrary,
    ComponentTemplate,
    FontFamily,
    GlobalTypographySettings,
    Gradient,
    GradientStop,
    InteractiveStates,
    PseudoElements,
    ResponsiveStyles,
    SemanticColors,
    TemplatePart,
    TemplateParts,
    TextStyle,
    TextStyles,
    TypeScale,
    TypeSize,
    TypographySystem,
    count_components,
    export_json_schema,
    iter_components,
    load_component_tree,
    load_model,
)

__all__ = [
    # Component tree
    "ComponentInfo",
    "AdvancedAnalysis",
    "ResponsiveStyles",
    "InteractiveStates",
    "BehaviorAnalysis",
    "AnimationInfo",
    "PseudoElements",
    # Design analysis inputs
    "ColorPalette",
    "ColorDefinition",
    "SemanticColors",
    "Gradient",
    "GradientStop",
    "TypographySystem",
    "FontFamily",
    "TypeScale",
    "TypeSize",
    "TextStyle",
    "TextStyles",
    "GlobalTypographySettings",
    "ComponentLibrary",
    "ComponentTemplate",
    "TemplatePart",
    "TemplateParts",
    # Tree helpers
    "iter_components",
    "count_components",
    "load_component_tree",
    "load_model",
    "export_json_schema",
]
