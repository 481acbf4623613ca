"""Beaver Builder export."""

from builder_export.exporters.beaver.lib import BeaverBuilderExporter, BeaverDocument, BeaverNode

__all__ = [
    "BeaverBuilderExporter",
    "BeaverDocument",
    "BeaverNode",
]
