"""Unit tests for IR models."""

import json

import pytest
from pydantic import ValidationError

from builder_export.ir import (
    ColorPalette,
    ComponentInfo,
    TemplateParts,
    TypographySystem,
    count_components,
    export_json_schema,
    iter_components,
    load_component_tree,
    load_model,
)


class TestComponentInfo:
    """Tests for ComponentInfo model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Minimal node fills in defaults."""
        node = ComponentInfo()
        assert node.component_type == "unknown"
        assert node.tag_name == "div"
        assert node.children == []
        assert node.advanced_analysis is None

    @pytest.mark.unit
    def test_camel_case_aliases(self):
        """Analyzer JSON uses camelCase keys."""
        node = ComponentInfo.model_validate(
            {
                "componentType": "heading",
                "tagName": "H2",
                "className": "title big",
                "textContent": "Hello",
                "styles": {"fontSize": "32px"},
            }
        )
        assert node.component_type == "heading"
        assert node.tag == "h2"
        assert node.classes == ["title", "big"]
        assert node.styles["fontSize"] == "32px"

    @pytest.mark.unit
    def test_snake_case_names_accepted(self):
        """Python callers can use field names."""
        node = ComponentInfo(component_type="button", text_content="Go")
        assert node.text_content == "Go"

    @pytest.mark.unit
    def test_nested_children(self):
        """Children validate recursively."""
        node = ComponentInfo.model_validate(
            {"children": [{"children": [{"tagName": "p"}]}]}
        )
        assert node.children[0].children[0].tag_name == "p"

    @pytest.mark.unit
    def test_advanced_analysis(self):
        """Advanced analysis parses nested structures."""
        node = ComponentInfo.model_validate(
            {
                "advancedAnalysis": {
                    "responsiveStyles": {"mobile": {"display": "none"}},
                    "behavior": {
                        "hasAnimations": True,
                        "animations": [{"name": "fadeInUp", "duration": "1s"}],
                    },
                }
            }
        )
        analysis = node.advanced_analysis
        assert analysis.responsive_styles.mobile == {"display": "none"}
        assert analysis.behavior.animations[0].name == "fadeInUp"

    @pytest.mark.unit
    def test_has_class_substring(self):
        """has_class matches class fragments case-insensitively."""
        node = ComponentInfo(class_name="Hero-Section")
        assert node.has_class("hero")
        assert not node.has_class("footer")

    @pytest.mark.unit
    def test_invalid_children_type(self):
        """Non-list children are rejected."""
        with pytest.raises(ValidationError):
            ComponentInfo.model_validate({"children": "nope"})


class TestAnalysisInputs:
    """Tests for palette, typography and template-part models."""

    @pytest.mark.unit
    def test_palette_all_colors_order(self):
        """all_colors lists grouped roles before semantic colors."""
        palette = ColorPalette.model_validate(
            {
                "primary": [{"hex": "#111111"}],
                "accent": [{"hex": "#222222"}],
                "semantic": {"error": {"hex": "#ff0000"}},
            }
        )
        assert [c.hex for c in palette.all_colors()] == [
            "#111111",
            "#222222",
            "#ff0000",
        ]

    @pytest.mark.unit
    def test_typography_defaults(self):
        """Empty typography has a usable type scale."""
        typography = TypographySystem()
        assert typography.type_scale.base == 16
        assert typography.text_styles.headings() == []

    @pytest.mark.unit
    def test_template_part_confidence_range(self):
        """Confidence above 100 is rejected."""
        with pytest.raises(ValidationError):
            TemplateParts.model_validate({"header": {"type": "header", "confidence": 150}})


class TestTreeHelpers:
    """Tests for tree traversal and loading."""

    @pytest.mark.unit
    def test_iter_components_paths(self):
        """Paths are dotted child indexes in document order."""
        tree = [
            ComponentInfo(children=[ComponentInfo(), ComponentInfo(children=[ComponentInfo()])]),
            ComponentInfo(),
        ]
        paths = [path for path, _ in iter_components(tree)]
        assert paths == ["0", "0.0", "0.1", "0.1.0", "1"]
        assert count_components(tree) == 5

    @pytest.mark.unit
    def test_load_from_dict(self):
        """A single mapping loads as a one-node forest."""
        tree = load_component_tree({"componentType": "card"})
        assert len(tree) == 1
        assert tree[0].component_type == "card"

    @pytest.mark.unit
    def test_load_unwraps_components_key(self):
        """A mapping with 'components' is unwrapped."""
        tree = load_component_tree({"components": [{"tagName": "p"}, {"tagName": "h1"}]})
        assert [node.tag for node in tree] == ["p", "h1"]

    @pytest.mark.unit
    def test_load_from_file(self, tmp_path):
        """JSON files are read and validated."""
        path = tmp_path / "tree.json"
        path.write_text(json.dumps([{"tagName": "img"}]), encoding="utf-8")
        assert load_component_tree(path)[0].tag == "img"

    @pytest.mark.unit
    def test_load_invalid_raises(self):
        """Model errors surface as ValidationError."""
        with pytest.raises(ValidationError):
            load_component_tree([{"styles": "color: red"}])

    @pytest.mark.unit
    def test_load_model(self):
        """load_model validates analysis inputs."""
        palette = load_model(ColorPalette, {"primary": [{"hex": "#abcdef"}]})
        assert palette.primary[0].hex == "#abcdef"

    @pytest.mark.unit
    def test_json_schema_uses_aliases(self):
        """Exported schema uses camelCase field names."""
        schema = export_json_schema()
        properties = schema["$defs"]["ComponentInfo"]["properties"]
        assert "componentType" in properties
        assert "component_type" not in properties
