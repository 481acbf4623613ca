"""Tests for the builder-export CLI."""

import json

import pytest

from builder_export.__main__ import main


@pytest.fixture
def tree_file(tmp_path):
    """Write a card component tree to disk."""
    path = tmp_path / "tree.json"
    path.write_text(
        json.dumps(
            {
                "componentType": "card",
                "tagName": "div",
                "className": "card",
                "children": [
                    {"componentType": "heading", "tagName": "h3", "textContent": "Title"},
                    {
                        "componentType": "button",
                        "tagName": "a",
                        "attributes": {"href": "/x"},
                        "textContent": "Go",
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestExportCommand:
    """Tests for the export command."""

    @pytest.mark.unit
    def test_export_to_file(self, tree_file, tmp_path):
        """Export writes the target document as JSON."""
        output = tmp_path / "out.json"
        code = main(["export", str(tree_file), "--target", "elementor", "-o", str(output)])

        assert code == 0
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["content"][0]["elType"] == "section"

    @pytest.mark.unit
    def test_export_native_to_stdout(self, tree_file, capsys):
        """Native Gutenberg output is block grammar on stdout."""
        code = main(["export", str(tree_file), "-t", "gutenberg", "-f", "native"])

        assert code == 0
        assert capsys.readouterr().out.startswith("<!-- wp:group")

    @pytest.mark.unit
    def test_export_with_palette(self, tree_file, tmp_path, capsys):
        """Analysis inputs are loaded from their files."""
        palette = tmp_path / "palette.json"
        palette.write_text(json.dumps({"primary": [{"hex": "#1a73e8"}]}), encoding="utf-8")
        code = main(["export", str(tree_file), "-t", "beaver-builder", "--palette", str(palette)])

        assert code == 0
        document = json.loads(capsys.readouterr().out)
        assert document["color_scheme"]["primary"] == ["#1a73e8"]

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """An unreadable tree exits with 1."""
        assert main(["export", str(tmp_path / "nope.json"), "-t", "oxygen"]) == 1

    @pytest.mark.unit
    def test_invalid_tree(self, tmp_path):
        """A tree failing the model exits with 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"children": "not-a-list"}), encoding="utf-8")
        assert main(["export", str(path), "-t", "oxygen"]) == 1

    @pytest.mark.unit
    def test_unknown_target(self, tree_file):
        """An unknown target is rejected by argument parsing."""
        with pytest.raises(SystemExit):
            main(["export", str(tree_file), "-t", "divi"])


class TestOtherCommands:
    """Tests for targets, tree and dispatch."""

    @pytest.mark.unit
    def test_targets(self, capsys):
        """targets lists every exporter."""
        assert main(["targets"]) == 0
        assert capsys.readouterr().out.split() == [
            "beaver-builder",
            "elementor",
            "gutenberg",
            "oxygen",
        ]

    @pytest.mark.unit
    def test_tree(self, tree_file, capsys):
        """tree prints the component tree."""
        assert main(["tree", str(tree_file)]) == 0
        assert capsys.readouterr().out.splitlines()[0] == "div.card [card]"

    @pytest.mark.unit
    def test_no_command(self):
        """No command shows help and exits with 1."""
        assert main([]) == 1

    @pytest.mark.unit
    def test_unknown_command(self):
        """An unknown command exits with 1."""
        assert main(["render"]) == 1
