"""Exporter abstraction for page-builder documents.

This module defines the abstract base class for page-builder exporters,
the option and result types shared by all targets, the structural helpers
used by the section/column/widget builders, and a registry/factory for
accessing exporters by name.
"""

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from html import escape
from typing import Any

from pydantic import BaseModel

from builder_export.behavior import ComponentDescriptors, describe_component
from builder_export.config import EnvVar, ExportThresholds, get_environment, get_thresholds
from builder_export.core.log import get_logger
from builder_export.ir import (
    ColorPalette,
    ComponentInfo,
    ComponentLibrary,
    ComponentTemplate,
    FontFamily,
    TemplateParts,
    TypographySystem,
    iter_components,
)
from builder_export.naming import TargetVocabulary, get_vocabulary
from builder_export.tokens import DesignTokenReference, build_design_token_references
from builder_export.validation import ValidationReport, optimize_export, validate_export
from builder_export.widgets import SpecializedWidget, detect_specialized_widget

logger = get_logger(__name__)

COLUMN_CLASS = re.compile(r"^col(?:umn)?(?:-[a-z]{2})?(?:-(\d{1,2}))?$")
BACKGROUND_URL = re.compile(r"url\(['\"]?([^'\")]+)['\"]?\)")

OUTPUT_FORMATS = ("json", "native")

# Font Awesome style prefix to icon library name
FONTAWESOME_STYLES = {"fas": "fa-solid", "far": "fa-regular", "fab": "fa-brands"}


@dataclass
class ExportOptions:
    """Inputs and switches for one export.

    Attributes:
        title: Document title, where the target has one.
        palette: Site color palette for token linking and global colors.
        typography: Site typography for token linking and global fonts.
        library: Reusable component templates to promote.
        template_parts: Detected header/footer/sidebar parts.
        thresholds: Reusability and confidence cut-offs.
        validate: Run validate_export on the document.
        optimize: Run optimize_export on the document.
        use_patterns: Derive patterns from repeated node signatures.
        extract_reusable: Derive reusable blocks from component types.
    """

    title: str = "Exported Page"
    palette: ColorPalette | None = None
    typography: TypographySystem | None = None
    library: ComponentLibrary | None = None
    template_parts: TemplateParts | None = None
    thresholds: ExportThresholds = field(default_factory=get_thresholds)
    validate: bool = field(
        default_factory=lambda: get_environment(EnvVar.EXPORT_VALIDATE)
    )
    optimize: bool = field(
        default_factory=lambda: get_environment(EnvVar.EXPORT_OPTIMIZE)
    )
    use_patterns: bool = True
    extract_reusable: bool = True


@dataclass
class ExportWarning:
    """Warning emitted when part of a node cannot be represented.

    Attributes:
        node_path: Dotted path of the source node.
        message: Human-readable explanation.
        value: The value that couldn't be represented (optional).
    """

    node_path: str
    message: str
    value: str | None = None


@dataclass
class ExportResult:
    """Result of exporting one component tree.

    Attributes:
        target: Name of the exporter that produced this result.
        document: JSON-native target document.
        report: Validation report, or None when validation was skipped.
        node_map: Source node path to the id or path of its output node.
        warnings: Non-fatal conversion warnings.
    """

    target: str
    document: dict[str, Any]
    report: ValidationReport | None = None
    node_map: dict[str, str] = field(default_factory=dict)
    warnings: list[ExportWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were emitted."""
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """True unless validation ran and found errors."""
        return self.report is None or self.report.is_valid


# =============================================================================
# Structural Helpers
# =============================================================================


@dataclass
class ColumnPlan:
    """One column of a section/row.

    Attributes:
        size: Width in percent.
        component: Source node, or None for a synthesized column.
        path: Source node path, or None for a synthesized column.
        items: (path, node) pairs placed inside the column.
    """

    size: float
    component: ComponentInfo | None = None
    path: str | None = None
    items: list[tuple[str, ComponentInfo]] = field(default_factory=list)


def column_span(component: ComponentInfo) -> int | None:
    """Grid span from a ``col-N``/``col-md-N`` class, if any."""
    for name in component.classes:
        match = COLUMN_CLASS.match(name.lower())
        if match and match.group(1):
            return int(match.group(1))
    return None


def is_column_like(component: ComponentInfo) -> bool:
    if component.component_type.lower() == "column":
        return True
    return any(COLUMN_CLASS.match(name.lower()) for name in component.classes)


def child_paths(component: ComponentInfo, path: str) -> list[tuple[str, ComponentInfo]]:
    return [(f"{path}.{index}", child) for index, child in enumerate(component.children)]


def plan_columns(component: ComponentInfo, path: str) -> list[ColumnPlan]:
    """Split a container's children into columns.

    When every child is column-like each one becomes a column, sized from
    its ``col-N`` class or by an even split. Otherwise all children go into
    a single synthesized 100% column.
    """
    children = child_paths(component, path)
    if not children or not all(is_column_like(child) for _, child in children):
        return [ColumnPlan(size=100, items=children)]

    even = round(100 / len(children), 2)
    plans = []
    for child_path, child in children:
        span = column_span(child)
        size = round(span / 12 * 100, 2) if span else even
        plans.append(ColumnPlan(size, child, child_path, child_paths(child, child_path)))
    return plans


def text_of(component: ComponentInfo) -> str:
    return (component.text_content or "").strip()


def html_of(component: ComponentInfo) -> str:
    """Markup of a node, falling back to its text escaped as HTML."""
    return component.inner_html or escape(text_of(component), quote=False)


def link_of(component: ComponentInfo) -> str | None:
    """href of the node or of its first linked descendant."""
    href = component.attributes.get("href")
    if href:
        return href
    for _, node in iter_components(component.children):
        if node.attributes.get("href"):
            return node.attributes["href"]
    return None


def background_image(component: ComponentInfo) -> str | None:
    value = component.styles.get("backgroundImage")
    if isinstance(value, str):
        match = BACKGROUND_URL.search(value)
        if match:
            return match.group(1)
    return None


def heading_level(component: ComponentInfo, default: int = 2) -> int:
    tag = component.tag
    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return int(tag[1])
    return default


def icon_class(icon: str, library: str, classes: Iterable[str] = ()) -> str:
    """CSS class string for a detected icon, e.g. ``fas fa-star``.

    Font Awesome keeps the node's own style prefix (fab, far) and falls
    back to solid.
    """
    if library == "fontawesome":
        style = next((name for name in classes if name in FONTAWESOME_STYLES), "fas")
        return f"{style} {icon}"
    if library == "dashicons":
        return f"dashicons {icon}"
    if library == "material":
        return "material-icons"
    return icon


def font_for_context(typography: TypographySystem, context: str) -> FontFamily | None:
    """First family used in ``context`` (body, heading), else the first family."""
    for family in typography.font_families:
        if any(item.type == context for item in family.contexts):
            return family
    return typography.font_families[0] if typography.font_families else None


def promoted_templates(
    library: ComponentLibrary | None, min_score: float
) -> list[ComponentTemplate]:
    """Library templates whose reusability score reaches ``min_score``."""
    if library is None:
        return []
    return [t for t in library.templates if t.reusability_score >= min_score]


def repeated_signatures(
    components: Iterable[ComponentInfo], signature, min_occurrences: int
) -> list[tuple[str, ComponentInfo]]:
    """Signatures shared by at least ``min_occurrences`` nodes.

    Args:
        components: Nodes to group.
        signature: Callable mapping a node to its grouping key.
        min_occurrences: Minimum group size.

    Returns:
        (signature, first node) pairs in first-seen order.
    """
    groups: dict[str, list[ComponentInfo]] = {}
    for component in components:
        groups.setdefault(signature(component), []).append(component)
    return [
        (key, members[0])
        for key, members in groups.items()
        if len(members) >= min_occurrences
    ]


# =============================================================================
# Exporter Base
# =============================================================================


class BuilderExporter(ABC):
    """Abstract base class for page-builder exporters.

    Each exporter turns a ComponentInfo forest into one builder's native
    document. Per-export state (id counter, global registries, node map,
    warnings) lives on the instance and is cleared by reset(), which
    export() always calls first. Instances must not be shared between
    concurrent exports; get_exporter() returns a fresh one per call.

    Subclasses must implement:
        - name: Exporter identifier, also the vocabulary name
        - content_key: Document key holding the node content
        - build_document: Forest to document conversion

    Example:
        >>> class MyExporter(BuilderExporter):
        ...     name = "my_builder"
        ...     content_key = "nodes"
        ...     def build_document(self, components):
        ...         return {"nodes": []}
    """

    def __init__(self) -> None:
        self.reset()

    @property
    @abstractmethod
    def name(self) -> str:
        """Exporter identifier string."""
        ...

    @property
    @abstractmethod
    def content_key(self) -> str:
        """Document key holding the converted node content."""
        ...

    @property
    def document_model(self) -> type[BaseModel] | None:
        """Pydantic model the finished document must fit."""
        return None

    @property
    def id_seed(self) -> int:
        """First value handed out by next_id()."""
        return 1

    @property
    def vocabulary(self) -> TargetVocabulary:
        return get_vocabulary(self.name)

    def reset(self) -> None:
        """Clear all per-export state."""
        self._next_id = self.id_seed
        self.node_map: dict[str, str] = {}
        self.warnings: list[ExportWarning] = []
        self.options = ExportOptions()
        self.token_ref: DesignTokenReference | None = None

    @abstractmethod
    def build_document(self, components: list[ComponentInfo]) -> dict[str, Any]:
        """Convert the forest into the target document.

        Called by export() after reset(); self.options and self.token_ref
        are set for the current export.
        """
        ...

    def registered_ids(self) -> list[str]:
        """Global color/font ids registered during the last build."""
        return []

    def export(
        self, components: list[ComponentInfo], options: ExportOptions | None = None
    ) -> ExportResult:
        """Export a component forest.

        Args:
            components: Root nodes in document order.
            options: Export inputs and switches.

        Returns:
            ExportResult with the document, validation report and node map.
        """
        self.reset()
        self.options = options or ExportOptions()
        if self.options.palette is not None or self.options.typography is not None:
            self.token_ref = build_design_token_references(
                self.options.palette, self.options.typography
            )

        components = list(components)
        document = self.build_document(components)
        if self.options.optimize:
            document = optimize_export(document)

        report = None
        if self.options.validate:
            report = validate_export(
                document,
                model=self.document_model,
                content_key=self.content_key,
                registered_ids=self.registered_ids(),
            )

        logger.info(
            "Exported %d root component(s) to %s: %d node(s) mapped, %d warning(s)",
            len(components),
            self.name,
            len(self.node_map),
            len(self.warnings),
        )
        return ExportResult(
            target=self.name,
            document=document,
            report=report,
            node_map=dict(self.node_map),
            warnings=list(self.warnings),
        )

    def serialize(self, result: ExportResult, output_format: str = "json") -> str:
        """Render an export result as text.

        Args:
            result: Result returned by export().
            output_format: "json" for the document as JSON, "native" for
                the builder's own text format where it has one.

        Raises:
            ValueError: If the format is unknown.
        """
        if output_format == "json":
            return json.dumps(result.document, indent=2, ensure_ascii=False)
        if output_format == "native":
            return self.serialize_native(result.document)
        available = ", ".join(OUTPUT_FORMATS)
        raise ValueError(f"Unknown output format '{output_format}'. Available: {available}")

    def serialize_native(self, document: dict[str, Any]) -> str:
        """Builder-native text; JSON for builders that import JSON."""
        return json.dumps(document, indent=2, ensure_ascii=False)

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def map_node(self, path: str | None, target_ref: Any) -> None:
        if path is not None:
            self.node_map[path] = str(target_ref)

    def absorb(self, component: ComponentInfo, path: str, target_ref: Any) -> None:
        """Map a node and its whole subtree onto one output node."""
        self.map_node(path, target_ref)
        for descendant_path, _ in iter_components(component.children, path):
            self.map_node(descendant_path, target_ref)

    def warn(self, path: str, message: str, value: Any = None) -> None:
        self.warnings.append(
            ExportWarning(path, message, None if value is None else str(value))
        )

    def describe(self, component: ComponentInfo) -> ComponentDescriptors:
        return describe_component(component, self.token_ref)

    def detect_widget(self, component: ComponentInfo) -> SpecializedWidget | None:
        return detect_specialized_widget(component)

    def is_container(self, component: ComponentInfo, target_type: str | None) -> bool:
        """True when the node nests its children instead of absorbing them."""
        if not component.children:
            return False
        return target_type is None or self.vocabulary.is_container_type(target_type)


# Exporter registry - populated by exporter modules on import
_registry: dict[str, type[BuilderExporter]] = {}


def register_exporter(exporter_cls: type[BuilderExporter]) -> type[BuilderExporter]:
    """Register an exporter class in the registry.

    Uses a temporary instance to retrieve the exporter name.

    Args:
        exporter_cls: The exporter class to register.

    Returns:
        The exporter class (for decorator chaining).
    """
    _registry[exporter_cls().name] = exporter_cls
    return exporter_cls


def get_exporter(name: str) -> BuilderExporter:
    """Get a fresh exporter instance by name.

    Args:
        name: The exporter identifier (e.g., "elementor", "gutenberg").

    Returns:
        BuilderExporter: A new instance of the requested exporter.

    Raises:
        KeyError: If no exporter with the given name is registered.

    Example:
        >>> exporter = get_exporter("elementor")
        >>> result = exporter.export(components)
    """
    if name not in _registry:
        _import_exporters()
        if name not in _registry:
            available = ", ".join(sorted(_registry)) or "(none)"
            raise KeyError(f"Unknown exporter '{name}'. Available: {available}")
    return _registry[name]()


def list_exporters() -> list[str]:
    """List all registered exporter names.

    Example:
        >>> list_exporters()
        ['beaver-builder', 'elementor', 'gutenberg', 'oxygen']
    """
    _import_exporters()
    return sorted(_registry)


def _import_exporters() -> None:
    """Import exporter modules to trigger registration."""
    import importlib

    for module_name in ("elementor", "gutenberg", "oxygen", "beaver"):
        importlib.import_module(f"builder_export.exporters.{module_name}")
