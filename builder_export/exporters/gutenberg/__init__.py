"""Gutenberg block export."""

from builder_export.exporters.gutenberg.lib import (
    BlockPattern,
    GutenbergBlock,
    GutenbergDocument,
    GutenbergExporter,
    ReusableBlock,
    TemplatePartEntry,
    serialize_block,
    serialize_block_attributes,
    serialize_block_grammar,
)

__all__ = [
    "GutenbergExporter",
    "GutenbergDocument",
    "GutenbergBlock",
    "BlockPattern",
    "ReusableBlock",
    "TemplatePartEntry",
    "serialize_block",
    "serialize_block_attributes",
    "serialize_block_grammar",
]
