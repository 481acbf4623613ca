"""Output formatting for component trees and export results.

Generates human-readable text representations of analyzer component
trees and export outcomes for CLI review.
"""

from builder_export.exporters import ExportResult, column_span
from builder_export.ir import ComponentInfo, count_components


def _label(component: ComponentInfo) -> str:
    label = component.tag or "node"
    if component.id:
        label += f"#{component.id}"
    if component.classes:
        label += "".join(f".{name}" for name in component.classes)
    return label


def format_component_tree(components: list[ComponentInfo]) -> str:
    """Format a component forest as a human-readable tree.

    Example output:
        section#hero.hero [hero]
        ├── h1 [heading] "Welcome"
        └── button [button] "Start"
        div.row [container]
        ├── div.col-8 [column, 67%]
        └── div.col-4 [column, 33%]

    Args:
        components: Root components, one tree per root.

    Returns:
        Formatted tree string.
    """
    lines: list[str] = []
    for component in components:
        _format_node(component, lines, "", is_last=True, is_root=True)
    return "\n".join(lines)


def _format_node(
    component: ComponentInfo,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool = False,
) -> None:
    """Recursively format a node and its children."""
    if is_root:
        connector = ""
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")

    attrs = [component.component_type]
    span = column_span(component)
    if span:
        attrs.append(f"{round(span / 12 * 100)}%")

    node_str = f"{_label(component)} [{', '.join(attrs)}]"
    text = (component.text_content or "").strip()
    if text and not component.children:
        if len(text) > 40:
            text = text[:37] + "..."
        node_str += f' "{text}"'
    lines.append(f"{prefix}{connector}{node_str}")

    for i, child in enumerate(component.children):
        is_last_child = i == len(component.children) - 1
        _format_node(child, lines, child_prefix, is_last_child)


def format_export_summary(result: ExportResult, components: list[ComponentInfo]) -> str:
    """One-block summary of an export: coverage, validation and warnings.

    Args:
        result: Result returned by an exporter.
        components: Source forest the result was built from.

    Returns:
        Multi-line summary text.
    """
    total = count_components(components)
    lines = [f"Target: {result.target}", f"Nodes mapped: {len(result.node_map)}/{total}"]
    if result.report is None:
        lines.append("Validation: skipped")
    else:
        status = "passed" if result.report.is_valid else "failed"
        lines.append(
            f"Validation: {status} "
            f"({len(result.report.errors)} error(s), {len(result.report.warnings)} warning(s))"
        )
        for issue in result.report.errors:
            lines.append(f"  error {issue.path or '<document>'}: {issue.message}")
    for warning in result.warnings:
        lines.append(f"  warning {warning.node_path}: {warning.message}")
    return "\n".join(lines)


__all__ = [
    "format_component_tree",
    "format_export_summary",
]
