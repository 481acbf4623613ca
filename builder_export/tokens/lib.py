"""Design token linking.

Maps literal style values on a component to the named tokens of the site's
color palette and typography system, so exporters can emit global
references instead of hard-coded values.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from builder_export.dimension import format_number
from builder_export.ir import ColorDefinition, ColorPalette, ComponentInfo, TypographySystem

RGB_PATTERN = re.compile(
    r"rgba?\(\s*(\d+)(?:\s*,\s*|\s+)(\d+)(?:\s*,\s*|\s+)(\d+)\s*(?:[,/]\s*([\d.]+)(%)?)?\s*\)"
)
SHORT_HEX_PATTERN = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])([0-9a-f])?$")
BLANK_COLORS = frozenset({"transparent", "inherit", "initial", "unset", "none"})

COLOR_PROPERTIES = ("color", "backgroundColor", "borderColor")
SEMANTIC_ROLES = ("success", "warning", "error", "info")


@dataclass
class DesignTokenReference:
    """Lookup tables from literal values to token names.

    Attributes:
        colors: Lowercase ``#rrggbb`` to token (``primary-1``, ``success``...).
        fonts: Lowercase family name to the family's display name.
        sizes: ``"{px}px"`` to type-scale size name.
    """

    colors: dict[str, str] = field(default_factory=dict)
    fonts: dict[str, str] = field(default_factory=dict)
    sizes: dict[str, str] = field(default_factory=dict)


@dataclass
class TokenLinks:
    """Token names linked on one component, keyed by CSS property."""

    color_tokens: dict[str, str] = field(default_factory=dict)
    font_tokens: dict[str, str] = field(default_factory=dict)
    size_tokens: dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.color_tokens or self.font_tokens or self.size_tokens)


def normalize_color_to_hex(color: Any) -> str:
    """Lowercase a CSS color and convert rgb()/rgba() and short hex to hex.

    Opaque colors become ``#rrggbb``. A color with alpha below 1 keeps it
    as ``#rrggbbaa``. Named colors and anything unrecognized are returned
    lowercased.

    Example:
        >>> normalize_color_to_hex("rgba(255, 0, 16, 0.5)")
        '#ff001080'
        >>> normalize_color_to_hex("rgb(255, 0, 16)")
        '#ff0010'
        >>> normalize_color_to_hex("#ABC")
        '#aabbcc'
    """
    if color is None or color == "":
        return ""
    text = str(color).strip().lower()

    short = SHORT_HEX_PATTERN.match(text)
    if short:
        channels = "".join(channel * 2 for channel in short.groups() if channel)
        return "#" + (channels[:6] if channels[6:] == "ff" else channels)
    if text.startswith("#"):
        return text[:7] if len(text) == 9 and text.endswith("ff") else text

    rgb = RGB_PATTERN.search(text)
    if rgb:
        r, g, b = (min(int(channel), 255) for channel in rgb.groups()[:3])
        hex_value = f"#{r:02x}{g:02x}{b:02x}"
        alpha = _alpha(rgb.group(4), rgb.group(5))
        if alpha < 255:
            hex_value += f"{alpha:02x}"
        return hex_value
    return text


def _alpha(value: str | None, percent: str | None) -> int:
    """Alpha channel 0-255 from an rgba() alpha component."""
    if value is None:
        return 255
    try:
        fraction = float(value) / 100 if percent else float(value)
    except ValueError:
        return 255
    return round(min(max(fraction, 0.0), 1.0) * 255)


def is_transparent_color(color: Any) -> bool:
    """True for colors that paint nothing (``transparent``, zero alpha, keywords)."""
    if not isinstance(color, str) or not color.strip():
        return False
    text = color.strip().lower()
    if text in BLANK_COLORS:
        return True
    normalized = normalize_color_to_hex(text)
    return normalized.startswith("#") and len(normalized) == 9 and normalized.endswith("00")


def primary_font_family(value: Any) -> str:
    """First family of a font stack, unquoted and lowercased."""
    if not value:
        return ""
    return str(value).split(",")[0].strip().strip("'\"").lower()


def palette_tokens(palette: ColorPalette) -> list[tuple[str, ColorDefinition]]:
    """Token name and color for every palette entry, in token order.

    Grouped roles are numbered (``primary-1``, ``neutral-2``); semantic
    colors use their role name.
    """
    tokens = [
        (f"{role}-{index}", color)
        for role, colors in palette.groups()
        for index, color in enumerate(colors, start=1)
    ]
    for role in SEMANTIC_ROLES:
        color = getattr(palette.semantic, role)
        if color is not None:
            tokens.append((role, color))
    return tokens


def build_design_token_references(
    palette: ColorPalette | None = None,
    typography: TypographySystem | None = None,
) -> DesignTokenReference:
    """Build token lookup tables from the analysis inputs.

    Later palette roles win when the same hex appears twice.
    """
    ref = DesignTokenReference()

    if palette is not None:
        for token, color in palette_tokens(palette):
            ref.colors[normalize_color_to_hex(color.hex)] = token

    if typography is not None:
        for family in typography.font_families:
            ref.fonts[family.name.lower()] = family.name
        for size in typography.type_scale.sizes:
            ref.sizes[f"{format_number(size.px)}px"] = size.name

    return ref


def link_to_design_tokens(
    component: ComponentInfo, token_ref: DesignTokenReference | None
) -> TokenLinks:
    """Link a component's literal styles to design tokens.

    Pure: returns only tokens present in ``token_ref`` and leaves both
    arguments untouched. Values without a matching token are omitted.
    """
    links = TokenLinks()
    if token_ref is None:
        return links
    styles: Mapping[str, Any] = component.styles

    for prop in COLOR_PROPERTIES:
        value = styles.get(prop)
        if not isinstance(value, str) or not value:
            continue
        token = token_ref.colors.get(normalize_color_to_hex(value))
        if token:
            links.color_tokens[prop] = token

    family = primary_font_family(styles.get("fontFamily"))
    if family and family in token_ref.fonts:
        links.font_tokens["fontFamily"] = token_ref.fonts[family]

    size = styles.get("fontSize")
    if size is not None and str(size) in token_ref.sizes:
        links.size_tokens["fontSize"] = token_ref.sizes[str(size)]

    return links
