"""Unit tests for the exporter base, structural helpers and registry."""

import pytest

from builder_export.exporters import (
    ExportOptions,
    get_exporter,
    icon_class,
    list_exporters,
    plan_columns,
)
from builder_export.ir import count_components, iter_components, load_component_tree
from builder_export.validation import optimize_export

TARGETS = ["beaver-builder", "elementor", "gutenberg", "oxygen"]

GALLERY_TYPES = {"gallery", "image-gallery", "core/gallery", "oxy-gallery"}


def _walk(value, children_key):
    if isinstance(value, list):
        for item in value:
            yield from _walk(item, children_key)
    elif isinstance(value, dict):
        yield value
        yield from _walk(value.get(children_key, []), children_key)


def _element_types(target: str, document: dict) -> list[str]:
    """Element type names in document order, per target."""
    if target == "elementor":
        return [
            node.get("widgetType", node["elType"])
            for node in _walk(document["content"], "elements")
        ]
    if target == "gutenberg":
        return [node["blockName"] for node in _walk(document["blocks"], "innerBlocks")]
    if target == "oxygen":
        return [node["name"] for node in _walk(document["tree"], "children")]
    return [
        node["settings"]["type"]
        for node in document["nodes"].values()
        if node["type"] == "module"
    ]


class TestRegistry:
    """Tests for exporter registration and lookup."""

    @pytest.mark.unit
    def test_list_exporters(self):
        """All four builders are registered, sorted."""
        assert list_exporters() == TARGETS

    @pytest.mark.unit
    def test_get_exporter_fresh_instance(self):
        """Each lookup returns a new instance."""
        first = get_exporter("oxygen")
        second = get_exporter("oxygen")
        assert first is not second
        assert first.name == "oxygen"

    @pytest.mark.unit
    def test_unknown_exporter(self):
        """Unknown names raise KeyError listing the available exporters."""
        with pytest.raises(KeyError, match="Available: beaver-builder, elementor"):
            get_exporter("divi")


class TestStructuralHelpers:
    """Tests for column planning and icon classes."""

    @pytest.mark.unit
    def test_plan_columns_from_spans(self, landing_tree):
        """col-N classes size the columns."""
        plans = plan_columns(landing_tree[1], "1")

        assert [plan.size for plan in plans] == [66.67, 33.33]
        assert plans[0].path == "1.0"
        assert [path for path, _ in plans[0].items] == ["1.0.0", "1.0.1"]

    @pytest.mark.unit
    def test_plan_columns_even_split(self):
        """Columns without spans share the width evenly."""
        [row] = load_component_tree(
            {
                "tagName": "div",
                "children": [{"componentType": "column", "tagName": "div"} for _ in range(3)],
            }
        )
        assert [plan.size for plan in plan_columns(row, "0")] == [33.33, 33.33, 33.33]

    @pytest.mark.unit
    def test_plan_columns_synthesized(self, card_tree):
        """Non-column children go into one synthesized full-width column."""
        [plan] = plan_columns(card_tree[0], "0")

        assert plan.size == 100
        assert plan.component is None
        assert len(plan.items) == 3

    @pytest.mark.unit
    def test_icon_class(self):
        """Font Awesome keeps its style prefix and defaults to solid."""
        assert icon_class("fa-star", "fontawesome") == "fas fa-star"
        assert icon_class("fa-github", "fontawesome", ["fab", "fa-github"]) == "fab fa-github"
        assert icon_class("dashicons-admin-home", "dashicons") == "dashicons dashicons-admin-home"


class TestAllTargets:
    """Properties every exporter must hold."""

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_structural_completeness(self, target, landing_tree):
        """Every source node path appears in the node map."""
        result = get_exporter(target).export(landing_tree)
        paths = {path for path, _ in iter_components(landing_tree)}

        assert set(result.node_map) == paths
        assert len(result.node_map) == count_components(landing_tree)

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_valid_documents(self, target, landing_tree):
        """Exports of the landing page validate cleanly."""
        result = get_exporter(target).export(landing_tree)
        assert result.report is not None
        assert result.is_valid, result.report.errors

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_card_scenario(self, target, card_tree):
        """The card keeps its heading, text and button, with the link."""
        exporter = get_exporter(target)
        result = exporter.export(card_tree)
        types = _element_types(target, result.document)

        assert len(types) >= 3
        assert '"/x"' in exporter.serialize(result)

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_gallery_scenario(self, target, gallery_tree, single_image_tree):
        """Five images make a gallery; a single image does not."""
        exporter = get_exporter(target)
        gallery = exporter.export(gallery_tree)
        single = exporter.export(single_image_tree)

        assert GALLERY_TYPES & set(_element_types(target, gallery.document))
        assert not GALLERY_TYPES & set(_element_types(target, single.document))

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_optimization_idempotent(self, target, landing_tree):
        """Optimized documents are fixed points of optimize_export."""
        document = get_exporter(target).export(landing_tree).document
        assert optimize_export(document) == document

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_unoptimized_export(self, target, card_tree):
        """Optimization can be switched off."""
        result = get_exporter(target).export(card_tree, ExportOptions(optimize=False))
        assert result.document

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_reset_between_exports(self, target, landing_tree, card_tree):
        """A previous export leaves no state behind."""
        exporter = get_exporter(target)
        fresh = exporter.export(card_tree).document
        exporter.export(landing_tree)
        assert exporter.export(card_tree).document == fresh

    @pytest.mark.unit
    @pytest.mark.parametrize("target", TARGETS)
    def test_unknown_format(self, target, card_tree):
        """serialize rejects unknown formats."""
        exporter = get_exporter(target)
        result = exporter.export(card_tree)
        with pytest.raises(ValueError, match="Unknown output format"):
            exporter.serialize(result, "xml")
