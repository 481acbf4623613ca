"""Page-builder exporters and the exporter registry."""

from builder_export.exporters.lib import (
    BuilderExporter,
    ColumnPlan,
    ExportOptions,
    ExportResult,
    ExportWarning,
    column_span,
    get_exporter,
    icon_class,
    is_column_like,
    list_exporters,
    plan_columns,
    register_exporter,
)

__all__ = [
    # Base
    "BuilderExporter",
    "ExportOptions",
    "ExportResult",
    "ExportWarning",
    # Structure
    "ColumnPlan",
    "plan_columns",
    "column_span",
    "is_column_like",
    "icon_class",
    # Registry
    "register_exporter",
    "get_exporter",
    "list_exporters",
]
