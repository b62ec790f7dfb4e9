"""Tests for the class-atlas command line."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from class_atlas.cli import app

runner = CliRunner()


@pytest.fixture
def catalog_file(tmp_path, catalog_data, monkeypatch):
    """Sample catalog written to disk; cwd moved away from any class-atlas.toml."""
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# diagram
# ---------------------------------------------------------------------------


class TestDiagram:
    def test_dot_to_stdout(self, catalog_file):
        result = runner.invoke(app, ["diagram", "Bag", "--catalog", str(catalog_file)])
        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("digraph G {")
        assert "Bag -> Collection [arrowhead=empty]" in result.stdout
        assert "Collection -> Countable [arrowhead=empty style=dashed]" in result.stdout

    def test_write_dot_file(self, catalog_file, tmp_path):
        out = tmp_path / "bag.dot"
        result = runner.invoke(app, ["diagram", "Bag", "-c", str(catalog_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("digraph G {")

    def test_no_parents(self, catalog_file):
        result = runner.invoke(app, ["diagram", "Bag", "-c", str(catalog_file), "--no-parents"])
        assert result.exit_code == 0, result.output
        assert "Collection" not in result.stdout.replace("item : Collection", "")

    def test_show_private_and_inherited(self, catalog_file):
        result = runner.invoke(
            app, ["diagram", "Collection", "-c", str(catalog_file), "--show-private", "--inherited"]
        )
        assert result.exit_code == 0, result.output
        assert "– items = []" in result.stdout

    def test_extension_and_note(self, catalog_file):
        result = runner.invoke(
            app, ["diagram", "Loner", "-c", str(catalog_file), "-e", "json", "--note", "standalone"]
        )
        assert result.exit_code == 0, result.output
        assert "«extension»\\njson" in result.stdout
        assert '[label="standalone\\n" shape=note' in result.stdout
        assert "-> Loner [len=1 style=dashed arrowhead=none]" in result.stdout

    def test_settings_file_applies(self, catalog_file, tmp_path):
        (tmp_path / "class-atlas.toml").write_text("[options]\nshow_constants = false\n")
        result = runner.invoke(app, ["diagram", "Collection", "-c", str(catalog_file)])
        assert result.exit_code == 0, result.output
        assert "readOnly" not in result.stdout

    def test_unknown_type(self, catalog_file):
        result = runner.invoke(app, ["diagram", "Ghost", "-c", str(catalog_file)])
        assert result.exit_code == 1

    def test_nothing_to_draw(self, catalog_file):
        result = runner.invoke(app, ["diagram", "-c", str(catalog_file)])
        assert result.exit_code == 1

    def test_bad_catalog(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        bad = tmp_path / "bad.json"
        bad.write_text('{"types": [{"name": "A", "parent": "B"}]}', encoding="utf-8")
        result = runner.invoke(app, ["diagram", "A", "-c", str(bad)])
        assert result.exit_code == 1

    def test_missing_graphviz(self, catalog_file, tmp_path, monkeypatch):
        monkeypatch.setenv("CLASS_ATLAS_RENDER__DOT_BINARY", str(tmp_path / "no-such-dot"))
        result = runner.invoke(app, ["diagram", "Loner", "-c", str(catalog_file), "-o", str(tmp_path / "x.png")])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# components
# ---------------------------------------------------------------------------


class TestComponents:
    def test_counts(self, catalog_file):
        result = runner.invoke(app, ["components", "Loner", "Bag", "-c", str(catalog_file)])
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "2 component(s)"
        assert lines[1] == "1. Loner"
        assert lines[2].startswith("2. Bag, Collection")

    def test_requires_names(self, catalog_file):
        result = runner.invoke(app, ["components", "-c", str(catalog_file)])
        assert result.exit_code != 0
