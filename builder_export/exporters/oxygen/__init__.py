"""Oxygen Builder export."""

from builder_export.exporters.oxygen.lib import (
    OxygenDocument,
    OxygenExporter,
    OxygenNode,
    node_to_shortcode,
    tree_to_shortcodes,
)

__all__ = [
    "OxygenExporter",
    "OxygenDocument",
    "OxygenNode",
    "node_to_shortcode",
    "tree_to_shortcodes",
]
