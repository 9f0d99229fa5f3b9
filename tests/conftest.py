"""Shared pytest fixtures for scene_codegen tests."""

import json
from pathlib import Path

import pytest

from scene_codegen.core.config import ExportOptions
from scene_codegen.targets.avalonia import AvaloniaExporter, TreeNormalizer


@pytest.fixture
def button_scene() -> list:
    """Return a scene with a single generic button."""
    return [{"type": "button", "properties": {"text": "OK"}}]


@pytest.fixture
def positioned_scene() -> list:
    """Return two buttons placed at absolute coordinates."""
    return [
        {"type": "ui-button", "x": 10, "y": 20, "properties": {"text": "A"}},
        {"type": "ui-button", "x": 10, "y": 60, "properties": {"text": "B"}},
    ]


@pytest.fixture
def form_scene() -> dict:
    """Return a small login form with bindings, a command and a click handler."""
    return {
        "title": "Login",
        "width": 400,
        "height": 300,
        "objects": [
            {
                "type": "ui-textbox",
                "name": "userName",
                "properties": {"text": "{Binding UserName}"},
            },
            {
                "type": "ui-textblock",
                "properties": {"text": "{Binding UserName}"},
            },
            {
                "type": "ui-button",
                "name": "saveButton",
                "properties": {
                    "text": "Save",
                    "command": "{Binding SaveCommand}",
                    "onClick": True,
                },
            },
        ],
    }


@pytest.fixture
def default_options() -> ExportOptions:
    """Return default export options."""
    return ExportOptions()


@pytest.fixture
def normalizer() -> TreeNormalizer:
    """Return a normalizer with the shared converter set."""
    return TreeNormalizer()


@pytest.fixture
def exporter() -> AvaloniaExporter:
    """Return an exporter with default options."""
    return AvaloniaExporter()


@pytest.fixture
def scene_file(tmp_path: Path, form_scene: dict) -> Path:
    """Write the form scene to a JSON file and return its path."""
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(form_scene), encoding="utf-8")
    return path
