"""Core IR models for cloned page structures.

This module defines the Intermediate Representation (IR) that serves as the
contract between the page analyzer and the page-builder exporters. The
analyzer produces JSON conforming to these models (camelCase keys); the
exporters read the validated, snake_case Python objects and never mutate them.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ModelT = TypeVar("ModelT", bound=BaseModel)

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class IRModel(BaseModel):
    """Base model accepting both camelCase aliases and snake_case names."""

    model_config = _MODEL_CONFIG


# =============================================================================
# Advanced Analysis
# =============================================================================


class ResponsiveStyles(IRModel):
    """Computed styles captured per breakpoint."""

    desktop: dict[str, Any] = Field(default_factory=dict)
    laptop: dict[str, Any] = Field(default_factory=dict)
    tablet: dict[str, Any] = Field(default_factory=dict)
    mobile: dict[str, Any] = Field(default_factory=dict)


class InteractiveStates(IRModel):
    """Computed styles captured per interaction state."""

    normal: dict[str, Any] = Field(default_factory=dict)
    hover: dict[str, Any] = Field(default_factory=dict)
    focus: dict[str, Any] = Field(default_factory=dict)
    active: dict[str, Any] = Field(default_factory=dict)


class AnimationInfo(IRModel):
    """A CSS animation observed on an element."""

    name: str = Field(default="", description="Keyframes name")
    duration: str | float | None = Field(None, description="e.g. '1s' or '300ms'")
    timing_function: str | None = None
    delay: str | float | None = None
    iteration_count: str | int | None = None


class BehaviorAnalysis(IRModel):
    has_animations: bool = False
    animations: list[AnimationInfo] = Field(default_factory=list)


class PseudoElements(IRModel):
    before: dict[str, Any] = Field(default_factory=dict)
    after: dict[str, Any] = Field(default_factory=dict)


class AdvancedAnalysis(IRModel):
    """Per-node analysis beyond the flat computed styles."""

    responsive_styles: ResponsiveStyles | None = None
    interactive_states: InteractiveStates | None = None
    behavior: BehaviorAnalysis | None = None
    pseudo_elements: PseudoElements | None = None


# =============================================================================
# Component Tree
# =============================================================================


class ComponentInfo(IRModel):
    """Recursive node of the cloned page tree.

    Each node carries its semantic classification, the raw DOM facts the
    analyzer captured, and the computed styles. Children are owned by their
    parent and kept in document order.

    Attributes:
        component_type: Semantic tag assigned by the analyzer.
        tag_name: Lowercase HTML tag name.
        class_name: Space-separated class attribute.
        id: Element id attribute, if any.
        attributes: Remaining HTML attributes.
        text_content: Visible text of the subtree.
        inner_html: Serialized inner HTML.
        styles: CSS property (camelCase) to value. Values may be nested
            mappings such as ``{"top": "10px", ...}``.
        children: Nested child nodes.
        advanced_analysis: Optional responsive/interactive/behavior data.

    Example:
        >>> node = ComponentInfo.model_validate(
        ...     {"componentType": "heading", "tagName": "h2", "textContent": "Hi"}
        ... )
        >>> node.tag_name
        'h2'
    """

    component_type: str = Field(
        default="unknown", description="Semantic tag such as 'heading' or 'card'"
    )
    tag_name: str = Field(default="div", description="HTML tag name")
    class_name: str = Field(default="", description="Space-separated classes")
    id: str | None = Field(None, description="HTML id attribute")
    attributes: dict[str, str] = Field(default_factory=dict)
    text_content: str = Field(default="", description="Visible text content")
    inner_html: str = Field(
        default="", alias="innerHTML", description="Serialized inner HTML"
    )
    styles: dict[str, Any] = Field(
        default_factory=dict, description="Computed CSS, camelCase keys"
    )
    children: list["ComponentInfo"] = Field(
        default_factory=list,
        description="Nested child nodes in document order",
    )
    advanced_analysis: AdvancedAnalysis | None = None

    @property
    def tag(self) -> str:
        return self.tag_name.lower()

    @property
    def classes(self) -> list[str]:
        """Class names split on whitespace."""
        return self.class_name.split()

    def has_class(self, fragment: str) -> bool:
        """True if any part of the class attribute contains ``fragment``."""
        return fragment in self.class_name.lower()


# =============================================================================
# Design Analysis Inputs
# =============================================================================


class ColorDefinition(IRModel):
    hex: str
    rgb: dict[str, int] | str | None = None
    name: str | None = None
    usage: float | None = None


class SemanticColors(IRModel):
    success: ColorDefinition | None = None
    warning: ColorDefinition | None = None
    error: ColorDefinition | None = None
    info: ColorDefinition | None = None


class GradientStop(IRModel):
    color: str
    position: float = 0


class Gradient(IRModel):
    type: Literal["linear", "radial"] = "linear"
    angle: float | None = None
    colors: list[GradientStop] = Field(default_factory=list)
    name: str | None = None


class ColorPalette(IRModel):
    """Site color palette grouped by role."""

    primary: list[ColorDefinition] = Field(default_factory=list)
    secondary: list[ColorDefinition] = Field(default_factory=list)
    accent: list[ColorDefinition] = Field(default_factory=list)
    neutral: list[ColorDefinition] = Field(default_factory=list)
    semantic: SemanticColors = Field(default_factory=SemanticColors)
    gradients: list[Gradient] = Field(default_factory=list)

    def groups(self) -> list[tuple[str, list[ColorDefinition]]]:
        """Role name and colors, in token order."""
        return [
            ("primary", self.primary),
            ("secondary", self.secondary),
            ("accent", self.accent),
            ("neutral", self.neutral),
        ]

    def all_colors(self) -> list[ColorDefinition]:
        """Every palette color, grouped roles first, then semantic ones."""
        colors = [color for _, group in self.groups() for color in group]
        for name in ("success", "warning", "error", "info"):
            color = getattr(self.semantic, name)
            if color is not None:
                colors.append(color)
        return colors


class FontWeight(IRModel):
    weight: int | str = 400
    style: str = "normal"


class FontContext(IRModel):
    type: str = "other"


class FontFamily(IRModel):
    name: str
    weights: list[FontWeight] = Field(default_factory=list)
    contexts: list[FontContext] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)


class TypeSize(IRModel):
    name: str
    px: float


class TypeScale(IRModel):
    base: float = 16
    ratio: float = 1.25
    sizes: list[TypeSize] = Field(default_factory=list)


class TextStyle(IRModel):
    font_family: str = "inherit"
    font_size: str = "16px"
    font_weight: str | int = 400
    line_height: str | float = 1.5
    letter_spacing: str | None = None
    text_transform: str | None = None
    color: str | None = None


class TextStyles(IRModel):
    h1: TextStyle | None = None
    h2: TextStyle | None = None
    h3: TextStyle | None = None
    h4: TextStyle | None = None
    h5: TextStyle | None = None
    h6: TextStyle | None = None
    body: TextStyle | None = None
    link: TextStyle | None = None
    button: TextStyle | None = None

    def headings(self) -> list[tuple[str, TextStyle]]:
        """Defined h1..h6 styles in order."""
        return [
            (level, style)
            for level in ("h1", "h2", "h3", "h4", "h5", "h6")
            if (style := getattr(self, level)) is not None
        ]


class GlobalTypographySettings(IRModel):
    base_font_size: float = 16
    base_font_family: str = "inherit"
    base_line_height: float = 1.5
    base_color: str = "#333333"
    heading_font_family: str | None = None
    heading_font_weight: int | str | None = None
    heading_color: str | None = None


class TypographySystem(IRModel):
    """Site typography: families, type scale and per-element text styles."""

    font_families: list[FontFamily] = Field(default_factory=list)
    type_scale: TypeScale = Field(default_factory=TypeScale)
    text_styles: TextStyles = Field(default_factory=TextStyles)
    global_settings: GlobalTypographySettings = Field(
        default_factory=GlobalTypographySettings
    )


class ComponentTemplate(IRModel):
    """A reusable component discovered across cloned pages."""

    id: str
    name: str
    category: str = "other"
    component_type: str = "unknown"
    html: str = ""
    styles: dict[str, Any] = Field(default_factory=dict)
    usage: int = 0
    tags: list[str] = Field(default_factory=list)
    reusability_score: float = Field(default=0, ge=0, le=100)


class ComponentLibrary(IRModel):
    templates: list[ComponentTemplate] = Field(default_factory=list)


class TemplatePart(IRModel):
    type: Literal["header", "footer", "sidebar", "other"]
    name: str = ""
    html: str = ""
    confidence: float = Field(default=0, ge=0, le=100)


class TemplateParts(IRModel):
    header: TemplatePart | None = None
    footer: TemplatePart | None = None
    sidebar: TemplatePart | None = None
    other: list[TemplatePart] = Field(default_factory=list)


# =============================================================================
# Tree Helpers
# =============================================================================


def iter_components(
    components: list[ComponentInfo], prefix: str = ""
) -> Iterator[tuple[str, ComponentInfo]]:
    """Walk the forest depth-first in document order.

    Yields:
        (path, node) pairs where path is the dotted child-index string,
        e.g. "0", "0.2", "0.2.1".
    """
    for index, component in enumerate(components):
        path = f"{prefix}.{index}" if prefix else str(index)
        yield path, component
        yield from iter_components(component.children, path)


def count_components(components: list[ComponentInfo]) -> int:
    """Total number of nodes in the forest."""
    return sum(1 for _ in iter_components(components))


def _read_json(source: str | Path | dict | list) -> Any:
    if isinstance(source, (dict, list)):
        return source
    return json.loads(Path(source).read_text(encoding="utf-8"))


def load_component_tree(source: str | Path | dict | list) -> list[ComponentInfo]:
    """Load and validate a component tree.

    Args:
        source: A JSON file path, a single node mapping, or a list of nodes.
            A mapping with a ``components`` key is unwrapped.

    Returns:
        List of root ComponentInfo nodes.

    Raises:
        pydantic.ValidationError: If the data does not fit the model.
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not JSON.
    """
    data = _read_json(source)
    if isinstance(data, dict):
        data = data.get("components", [data])
    return [ComponentInfo.model_validate(item) for item in data]


def load_model(model: type[ModelT], source: str | Path | dict) -> ModelT:
    """Load and validate one analysis input (palette, typography, ...)."""
    return model.model_validate(_read_json(source))


def export_json_schema() -> dict:
    """Export the ComponentInfo JSON Schema.

    Returns:
        dict: JSON Schema representation of ComponentInfo, using the
        camelCase field names the analyzer emits.
    """
    return ComponentInfo.model_json_schema(by_alias=True)
