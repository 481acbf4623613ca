"""Unit tests for dimension parsing."""

import pytest

from builder_export.dimension import (
    DimensionSet,
    convert_dimension_to_unit,
    extract_box_model,
    extract_box_shadow,
    format_dimension_set,
    parse_dimension,
    parse_shorthand_dimension,
    uniform_dimension_set,
)


class TestParseDimension:
    """Tests for single-length parsing."""

    @pytest.mark.unit
    def test_unit_defaults_to_px(self):
        """Bare numbers are pixels."""
        dim = parse_dimension("12")
        assert dim.value == 12
        assert dim.unit == "px"

    @pytest.mark.unit
    def test_relative_units_are_responsive(self):
        """Percent and em are flagged responsive."""
        assert parse_dimension("50%").is_responsive
        assert parse_dimension("1.5em").is_responsive
        assert not parse_dimension("10px").is_responsive

    @pytest.mark.unit
    def test_keywords(self):
        """auto/inherit/initial keep the keyword as unit."""
        dim = parse_dimension("auto")
        assert dim.value == 0
        assert dim.unit == "auto"
        assert dim.css() == "auto"

    @pytest.mark.unit
    def test_negative_and_decimal(self):
        """Negative decimals parse."""
        assert parse_dimension("-2.5rem").value == -2.5

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", None, "calc(100% - 10px)", "10 px", "abc"])
    def test_unparseable_returns_none(self, value):
        """Invalid input yields None."""
        assert parse_dimension(value) is None


class TestParseShorthandDimension:
    """Tests for four-sided shorthand parsing."""

    @pytest.mark.unit
    def test_single_value_is_linked(self):
        """One token applies to all sides."""
        dims = parse_shorthand_dimension("15px")
        assert dims.is_linked
        assert dims.values() == {"top": 15, "right": 15, "bottom": 15, "left": 15}

    @pytest.mark.unit
    def test_four_values_unlinked(self):
        """Four distinct tokens map clockwise and are unlinked."""
        dims = parse_shorthand_dimension("10px 20px 30px 40px")
        assert not dims.is_linked
        assert dims.values() == {"top": 10, "right": 20, "bottom": 30, "left": 40}

    @pytest.mark.unit
    def test_two_values(self):
        """Two tokens are vertical then horizontal."""
        dims = parse_shorthand_dimension("5px 10px")
        assert dims.top.value == 5 and dims.bottom.value == 5
        assert dims.left.value == 10 and dims.right.value == 10

    @pytest.mark.unit
    def test_three_values(self):
        """Three tokens are top, horizontal, bottom."""
        dims = parse_shorthand_dimension("1px 2px 3px")
        assert dims.values() == {"top": 1, "right": 2, "bottom": 3, "left": 2}

    @pytest.mark.unit
    def test_mapping_passes_through(self):
        """Side mappings are parsed per side."""
        dims = parse_shorthand_dimension({"top": "4px", "right": "0", "bottom": "4px", "left": "0"})
        assert dims.values() == {"top": 4, "right": 0, "bottom": 4, "left": 0}

    @pytest.mark.unit
    def test_bad_token_returns_none(self):
        """Any unparseable token invalidates the whole value."""
        assert parse_shorthand_dimension("10px wide") is None
        assert parse_shorthand_dimension("1px 2px 3px 4px 5px") is None


class TestExtractBoxModel:
    """Tests for box-model extraction."""

    @pytest.mark.unit
    def test_shorthand_and_longhand(self):
        """Shorthand margin and per-side padding both parse."""
        box = extract_box_model({"margin": "0 auto", "paddingTop": "8px", "width": "50%"})
        assert box.margin.left.unit == "auto"
        assert box.padding.top.value == 8
        assert box.padding.bottom is None
        assert box.width.unit == "%"

    @pytest.mark.unit
    def test_border_widths(self):
        """borderWidth longhands fill the border set."""
        box = extract_box_model({"borderLeftWidth": "2px"})
        assert box.border.left.value == 2

    @pytest.mark.unit
    def test_empty_styles(self):
        """No styles gives an empty model."""
        box = extract_box_model(None)
        assert box.margin is None and box.width is None


class TestExtractBoxShadow:
    """Tests for box-shadow parsing."""

    @pytest.mark.unit
    def test_color_last(self):
        """Author order with hex color parses."""
        shadow = extract_box_shadow("2px 4px 6.5px 0px #000000")
        assert (shadow.horizontal, shadow.vertical, shadow.blur, shadow.spread) == (2, 4, 6.5, 0)
        assert shadow.color == "#000000"
        assert not shadow.inset

    @pytest.mark.unit
    def test_computed_color_first(self):
        """Computed order with rgba color parses."""
        shadow = extract_box_shadow({"boxShadow": "rgba(0, 0, 0, 0.1) 0px 4px 6px -1px"})
        assert shadow.color == "rgba(0, 0, 0, 0.1)"
        assert shadow.spread == -1

    @pytest.mark.unit
    def test_unitless_zero(self):
        """Unitless zero offsets are valid CSS and parse."""
        shadow = extract_box_shadow("0 4px 6px 0 rgba(0, 0, 0, 0.1)")
        assert (shadow.horizontal, shadow.vertical, shadow.blur, shadow.spread) == (0, 4, 6, 0)
        assert shadow.color == "rgba(0, 0, 0, 0.1)"

    @pytest.mark.unit
    def test_decimals_and_unitless_computed(self):
        """Decimal offsets parse in computed order without units."""
        shadow = extract_box_shadow("rgb(0, 0, 0) 0.5px 1.25px 3.5 0")
        assert (shadow.horizontal, shadow.vertical, shadow.blur, shadow.spread) == (0.5, 1.25, 3.5, 0)
        assert shadow.color == "rgb(0, 0, 0)"

    @pytest.mark.unit
    def test_inset(self):
        """inset keyword is detected."""
        assert extract_box_shadow("inset 0px 1px 2px 0px red").inset

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["none", "", "0 0 black", None])
    def test_unparseable(self, value):
        """none and malformed shadows yield None."""
        assert extract_box_shadow(value) is None


class TestConversions:
    """Tests for unit conversion and formatting."""

    @pytest.mark.unit
    def test_rem_to_px(self):
        """rem converts through the base size."""
        assert convert_dimension_to_unit(parse_dimension("1.5rem"), "px").value == 24

    @pytest.mark.unit
    def test_in_to_cm(self):
        """Absolute units round to two decimals."""
        assert convert_dimension_to_unit(parse_dimension("1in"), "cm").value == 2.54

    @pytest.mark.unit
    def test_custom_base(self):
        """Base size is configurable."""
        assert convert_dimension_to_unit(parse_dimension("20px"), "em", base_size=10).value == 2

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("10px", "10px"),
            ("10px 20px", "10px 20px"),
            ("10px 20px 30px", "10px 20px 30px"),
            ("10px 20px 30px 40px", "10px 20px 30px 40px"),
            ("10px 20px 10px 20px", "10px 20px"),
        ],
    )
    def test_format_shortest_shorthand(self, source, expected):
        """Formatting picks the shortest equivalent shorthand."""
        assert format_dimension_set(parse_shorthand_dimension(source)) == expected

    @pytest.mark.unit
    def test_format_none(self):
        """Missing sets format as empty strings."""
        assert format_dimension_set(None) == ""
        assert DimensionSet().is_linked is False


class TestUniformDimensionSet:
    """Tests for bringing a dimension set onto one unit."""

    @pytest.mark.unit
    def test_shared_unit_unchanged(self):
        """A set that already shares a unit is returned as-is."""
        dimensions = parse_shorthand_dimension("1em 2em")
        assert uniform_dimension_set(dimensions) is dimensions

    @pytest.mark.unit
    def test_zero_fits_any_unit(self):
        """Bare zero sides take the unit of the other sides."""
        dimensions = parse_shorthand_dimension("0 2em")
        assert dimensions.units == {"em"}
        assert dimensions.unit == "em"
        assert uniform_dimension_set(dimensions) is dimensions

    @pytest.mark.unit
    def test_mixed_absolute_units_become_px(self):
        """px and em sides convert to px."""
        uniform = uniform_dimension_set(parse_shorthand_dimension("10px 2em"))
        assert uniform.unit == "px"
        assert uniform.values() == {"top": 10, "right": 32, "bottom": 10, "left": 32}

    @pytest.mark.unit
    def test_percent_mix_has_no_unit(self):
        """A mix with % cannot be converted."""
        assert uniform_dimension_set(parse_shorthand_dimension("10px 5%")) is None
        assert uniform_dimension_set(None) is None
