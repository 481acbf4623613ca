"""Output module for component tree and export summaries."""

from builder_export.output.lib import format_component_tree, format_export_summary

__all__ = [
    "format_component_tree",
    "format_export_summary",
]
