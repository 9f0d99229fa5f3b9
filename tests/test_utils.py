"""Tests for scene loading helpers."""

import io
import json

import pytest

from scene_codegen.utils import (
    SceneLoaderError,
    load_scene,
    load_scene_from_file,
    load_scene_from_stream,
)


class TestLoadSceneFromFile:
    """Tests for reading scenes from disk."""

    def test_load_file(self, scene_file, form_scene):
        """Test a JSON file is parsed."""
        source, data = load_scene_from_file(scene_file)
        assert source == str(scene_file)
        assert data == form_scene

    def test_missing_file(self, tmp_path):
        """Test missing files raise SceneLoaderError."""
        with pytest.raises(SceneLoaderError, match="File not found"):
            load_scene_from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises SceneLoaderError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SceneLoaderError, match="Invalid JSON"):
            load_scene_from_file(path)

    def test_other_extension(self, tmp_path):
        """Test files without a .json suffix still load."""
        path = tmp_path / "scene.txt"
        path.write_text(json.dumps([{"type": "ui-button"}]), encoding="utf-8")
        assert load_scene_from_file(path)[1] == [{"type": "ui-button"}]


class TestLoadSceneFromStream:
    """Tests for reading scenes from streams."""

    def test_stream(self):
        """Test streams are parsed and named."""
        assert load_scene_from_stream(io.StringIO("[]"), "pipe") == ("pipe", [])

    def test_invalid_stream(self):
        """Test malformed stream content raises SceneLoaderError."""
        with pytest.raises(SceneLoaderError, match="Invalid JSON in <stdin>"):
            load_scene_from_stream(io.StringIO("nope"))

    def test_dash_reads_stdin(self, monkeypatch):
        """Test '-' reads from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO('{"objects": []}'))
        assert load_scene("-") == ("<stdin>", {"objects": []})

    def test_path_source(self, scene_file):
        """Test other sources are treated as paths."""
        assert load_scene(str(scene_file))[0] == str(scene_file)
