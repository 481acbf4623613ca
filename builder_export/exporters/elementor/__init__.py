"""Elementor page export."""

from builder_export.exporters.elementor.lib import (
    ElementorColumn,
    ElementorDocument,
    ElementorExporter,
    ElementorSection,
    ElementorWidget,
)

__all__ = [
    "ElementorExporter",
    "ElementorDocument",
    "ElementorSection",
    "ElementorColumn",
    "ElementorWidget",
]
