"""CSS dimension, box-model and box-shadow parsing.

Every parser here is total: unparseable input yields ``None`` (or an empty
BoxModel) so the exporters can simply omit the field.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DIMENSION_PATTERN = re.compile(
    r"^(-?\d+\.?\d*)(px|em|rem|%|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc)?$",
    re.IGNORECASE,
)
KEYWORD_DIMENSIONS = ("auto", "inherit", "initial")
RESPONSIVE_UNITS = ("%", "vh", "vw", "vmin", "vmax", "em", "rem")

# Pixels per unit; em/rem use the caller's base size.
PX_PER_UNIT: dict[str, float] = {
    "px": 1,
    "pt": 1.333,
    "cm": 37.8,
    "mm": 3.78,
    "in": 96,
    "pc": 16,
}
CONVERTIBLE_UNITS = frozenset(PX_PER_UNIT) | {"em", "rem"}

_SHADOW_COLOR = r"(rgba?\([^)]*\)|hsla?\([^)]*\)|#[0-9a-fA-F]{3,8}|[a-zA-Z]+)"
_SHADOW_OFFSETS = (
    r"(-?[\d.]+)(?:px)?\s+(-?[\d.]+)(?:px)?\s+([\d.]+)(?:px)?\s+(-?[\d.]+)(?:px)?"
)
SHADOW_COLOR_LAST = re.compile(rf"{_SHADOW_OFFSETS}\s+{_SHADOW_COLOR}")
SHADOW_COLOR_FIRST = re.compile(rf"{_SHADOW_COLOR}\s+{_SHADOW_OFFSETS}")

SIDES = ("top", "right", "bottom", "left")


def format_number(value: float) -> int | float:
    """Drop a trailing ``.0`` so 10.0 renders as 10."""
    value = float(value)
    return int(value) if value.is_integer() else value


# =============================================================================
# Models
# =============================================================================


@dataclass(frozen=True)
class ParsedDimension:
    """A single CSS length.

    Attributes:
        value: Numeric part (0 for keywords).
        unit: Unit, or the keyword itself for auto/inherit/initial.
        original: Source text.
        is_responsive: True for relative units (%, vw, em, ...).
    """

    value: float
    unit: str
    original: str
    is_responsive: bool = False

    @property
    def is_keyword(self) -> bool:
        return self.unit in KEYWORD_DIMENSIONS

    def css(self) -> str:
        if self.is_keyword:
            return self.unit
        return f"{format_number(self.value)}{self.unit}"


@dataclass(frozen=True)
class DimensionSet:
    """Four-sided value such as margin or padding."""

    top: ParsedDimension | None = None
    right: ParsedDimension | None = None
    bottom: ParsedDimension | None = None
    left: ParsedDimension | None = None

    @property
    def is_linked(self) -> bool:
        """True when all four sides are present and identical."""
        sides = [self.top, self.right, self.bottom, self.left]
        if any(side is None for side in sides):
            return False
        return len({(side.value, side.unit) for side in sides}) == 1

    @property
    def units(self) -> set[str]:
        """Units of the non-zero sides; a bare zero fits any unit."""
        return {
            side.unit
            for side in (self.top, self.right, self.bottom, self.left)
            if side is not None and not side.is_keyword and side.value != 0
        }

    @property
    def unit(self) -> str:
        """Unit shared by the non-zero sides, else the first side's unit.

        Mixed-unit sets have no shared unit; see ``uniform_dimension_set``.
        """
        units = self.units
        if len(units) == 1:
            return next(iter(units))
        for side in (self.top, self.right, self.bottom, self.left):
            if side is not None and not side.is_keyword:
                return side.unit
        return "px"

    def values(self) -> dict[str, int | float]:
        """Numeric side values, 0 for missing sides."""
        return {
            name: format_number(side.value) if side is not None else 0
            for name, side in zip(SIDES, (self.top, self.right, self.bottom, self.left))
        }


@dataclass(frozen=True)
class BoxModel:
    margin: DimensionSet | None = None
    padding: DimensionSet | None = None
    border: DimensionSet | None = None
    width: ParsedDimension | None = None
    height: ParsedDimension | None = None
    min_width: ParsedDimension | None = None
    max_width: ParsedDimension | None = None
    min_height: ParsedDimension | None = None
    max_height: ParsedDimension | None = None


@dataclass(frozen=True)
class BoxShadow:
    horizontal: float
    vertical: float
    blur: float
    spread: float
    color: str
    inset: bool = False

    def css(self) -> str:
        parts = [
            f"{format_number(self.horizontal)}px",
            f"{format_number(self.vertical)}px",
            f"{format_number(self.blur)}px",
            f"{format_number(self.spread)}px",
            self.color,
        ]
        if self.inset:
            parts.insert(0, "inset")
        return " ".join(parts)


# =============================================================================
# Parsing
# =============================================================================


def parse_dimension(value: Any) -> ParsedDimension | None:
    """Parse one CSS length.

    Args:
        value: String such as "12px", "1.5em", "auto", or a bare number.

    Returns:
        ParsedDimension, or None for empty or unparseable input.

    Example:
        >>> parse_dimension("1.5rem").unit
        'rem'
        >>> parse_dimension("12").unit
        'px'
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, ParsedDimension):
        return value
    if not isinstance(value, (str, int, float)):
        return None

    text = str(value).strip()
    if text in KEYWORD_DIMENSIONS:
        return ParsedDimension(value=0, unit=text, original=text)

    match = DIMENSION_PATTERN.match(text)
    if not match:
        return None

    unit = (match.group(2) or "px").lower()
    return ParsedDimension(
        value=float(match.group(1)),
        unit=unit,
        original=text,
        is_responsive=unit in RESPONSIVE_UNITS,
    )


def parse_shorthand_dimension(value: Any) -> DimensionSet | None:
    """Parse a margin/padding style shorthand.

    One token applies to all sides, two are vertical/horizontal, three are
    top/horizontal/bottom, four are top/right/bottom/left. A mapping with
    side keys is taken side by side.

    Returns:
        DimensionSet, or None when any token fails to parse.
    """
    if isinstance(value, DimensionSet):
        return value
    if isinstance(value, Mapping):
        sides = {name: parse_dimension(value.get(name)) for name in SIDES}
        if not any(sides.values()):
            return None
        return DimensionSet(**sides)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return None

    parsed = [parse_dimension(part) for part in value.split()]
    if not parsed or len(parsed) > 4 or any(part is None for part in parsed):
        return None

    if len(parsed) == 1:
        return DimensionSet(parsed[0], parsed[0], parsed[0], parsed[0])
    if len(parsed) == 2:
        vertical, horizontal = parsed
        return DimensionSet(vertical, horizontal, vertical, horizontal)
    if len(parsed) == 3:
        top, horizontal, bottom = parsed
        return DimensionSet(top, horizontal, bottom, horizontal)
    return DimensionSet(*parsed)


def _sides_from_longhands(styles: Mapping[str, Any], template: str) -> DimensionSet | None:
    sides = {
        name: parse_dimension(styles.get(template.format(name.capitalize())))
        for name in SIDES
    }
    if not any(sides.values()):
        return None
    return DimensionSet(**sides)


def extract_box_model(styles: Mapping[str, Any] | None) -> BoxModel:
    """Collect margin, padding, border widths and sizing from computed styles.

    Shorthands win over per-side longhands (marginTop, borderLeftWidth, ...).
    """
    styles = styles or {}

    def four_sided(shorthand: str, template: str) -> DimensionSet | None:
        if styles.get(shorthand):
            return parse_shorthand_dimension(styles[shorthand])
        return _sides_from_longhands(styles, template)

    return BoxModel(
        margin=four_sided("margin", "margin{}"),
        padding=four_sided("padding", "padding{}"),
        border=four_sided("borderWidth", "border{}Width"),
        width=parse_dimension(styles.get("width")),
        height=parse_dimension(styles.get("height")),
        min_width=parse_dimension(styles.get("minWidth")),
        max_width=parse_dimension(styles.get("maxWidth")),
        min_height=parse_dimension(styles.get("minHeight")),
        max_height=parse_dimension(styles.get("maxHeight")),
    )


def extract_box_shadow(source: Mapping[str, Any] | str | None) -> BoxShadow | None:
    """Parse the first shadow of a CSS box-shadow value.

    Accepts either the raw value or a styles mapping holding ``boxShadow``.
    Both "Xpx Ypx Bpx Spx color" and the computed "color Xpx Ypx Bpx Spx"
    orders are understood.
    """
    if isinstance(source, Mapping):
        source = source.get("boxShadow")
    if not isinstance(source, str):
        return None

    text = source.strip()
    if not text or text == "none":
        return None

    inset = bool(re.search(r"\binset\b", text))
    match = SHADOW_COLOR_LAST.search(text)
    if match:
        horizontal, vertical, blur, spread, color = match.groups()
    else:
        match = SHADOW_COLOR_FIRST.search(text)
        if not match:
            return None
        color, horizontal, vertical, blur, spread = match.groups()

    try:
        return BoxShadow(
            horizontal=float(horizontal),
            vertical=float(vertical),
            blur=float(blur),
            spread=float(spread),
            color=color,
            inset=inset,
        )
    except ValueError:
        return None


# =============================================================================
# Conversion & Formatting
# =============================================================================


def convert_dimension_to_unit(
    dimension: ParsedDimension, target_unit: str, base_size: float = 16
) -> ParsedDimension:
    """Convert between absolute and font-relative units.

    Viewport and percent units have no fixed pixel size and are treated
    as pixels, matching how builders store them.
    """
    if dimension.unit in ("em", "rem"):
        px = dimension.value * base_size
    else:
        px = dimension.value * PX_PER_UNIT.get(dimension.unit, 1)

    if target_unit in ("em", "rem"):
        converted = px / base_size
    else:
        converted = px / PX_PER_UNIT.get(target_unit, 1)

    return ParsedDimension(
        value=round(converted, 2),
        unit=target_unit,
        original=f"{converted}{target_unit}",
        is_responsive=dimension.is_responsive,
    )


def uniform_dimension_set(
    dimensions: DimensionSet | None, base_size: float = 16
) -> DimensionSet | None:
    """Dimension set whose sides share one unit.

    Sets that already share a unit are returned unchanged. Mixed absolute
    and font-relative units are converted to px. A mix involving %, vw or
    another unit without a fixed pixel size yields None.
    """
    if dimensions is None or len(dimensions.units) <= 1:
        return dimensions
    if not dimensions.units <= CONVERTIBLE_UNITS:
        return None

    def to_px(side: ParsedDimension | None) -> ParsedDimension | None:
        if side is None or side.is_keyword:
            return side
        return convert_dimension_to_unit(side, "px", base_size)

    return DimensionSet(
        top=to_px(dimensions.top),
        right=to_px(dimensions.right),
        bottom=to_px(dimensions.bottom),
        left=to_px(dimensions.left),
    )


def format_dimension(dimension: ParsedDimension | None) -> str:
    if dimension is None:
        return ""
    return dimension.css()


def format_dimension_set(dimensions: DimensionSet | None) -> str:
    """Render the shortest equivalent CSS shorthand."""
    if dimensions is None:
        return ""

    top, right, bottom, left = (
        format_dimension(side)
        for side in (dimensions.top, dimensions.right, dimensions.bottom, dimensions.left)
    )
    if top == right == bottom == left:
        return top
    if top == bottom and left == right:
        return f"{top} {left}"
    if left == right:
        return f"{top} {left} {bottom}"
    return f"{top} {right} {bottom} {left}"
