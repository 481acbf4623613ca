"""CSS dimension, box-model and box-shadow parsing."""

from builder_export.dimension.lib import (
    BoxModel,
    BoxShadow,
    DimensionSet,
    ParsedDimension,
    convert_dimension_to_unit,
    extract_box_model,
    extract_box_shadow,
    format_dimension,
    format_dimension_set,
    format_number,
    parse_dimension,
    parse_shorthand_dimension,
    uniform_dimension_set,
)

__all__ = [
    # Models
    "ParsedDimension",
    "DimensionSet",
    "BoxModel",
    "BoxShadow",
    # Parsing
    "parse_dimension",
    "parse_shorthand_dimension",
    "extract_box_model",
    "extract_box_shadow",
    # Conversion & formatting
    "convert_dimension_to_unit",
    "format_dimension",
    "format_dimension_set",
    "format_number",
    "uniform_dimension_set",
]
