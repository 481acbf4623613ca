"""builder-export: page-builder export for analyzed component trees."""

from builder_export.exporters import (
    BuilderExporter,
    ExportOptions,
    ExportResult,
    get_exporter,
    list_exporters,
)
from builder_export.ir import ComponentInfo, count_components, export_json_schema, load_component_tree
from builder_export.validation import ValidationReport, optimize_export, validate_export

__all__ = [
    # IR
    "ComponentInfo",
    "load_component_tree",
    "count_components",
    "export_json_schema",
    # Exporters
    "BuilderExporter",
    "ExportOptions",
    "ExportResult",
    "get_exporter",
    "list_exporters",
    # Validation
    "validate_export",
    "optimize_export",
    "ValidationReport",
]
