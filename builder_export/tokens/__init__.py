"""Design token linking for palette colors, fonts and type-scale sizes."""

from builder_export.tokens.lib import (
    DesignTokenReference,
    TokenLinks,
    build_design_token_references,
    is_transparent_color,
    link_to_design_tokens,
    normalize_color_to_hex,
    palette_tokens,
    primary_font_family,
)

__all__ = [
    "DesignTokenReference",
    "TokenLinks",
    "build_design_token_references",
    "is_transparent_color",
    "link_to_design_tokens",
    "normalize_color_to_hex",
    "palette_tokens",
    "primary_font_family",
]
