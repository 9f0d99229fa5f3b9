"""Tests for the target registry."""

import json

import pytest

from scene_codegen.core.config import ExportOptions, RootKind
from scene_codegen.core.generator import ExportPreview, ExportResult, SceneExporter
from scene_codegen.registry import (
    RegistryError,
    TargetRegistry,
    get_exporter,
    get_registry,
    is_target_supported,
    list_supported_targets,
)
from scene_codegen.targets.avalonia import AvaloniaExporter


class DummyExporter(SceneExporter):
    """Minimal exporter used to exercise registration."""

    @property
    def target_name(self) -> str:
        return "dummy"

    @property
    def file_extension(self) -> str:
        return ".txt"

    def export(self, scene, options=None):
        return ExportResult()

    def preview(self, scene, options=None):
        return ExportPreview(component_count=0, supported_count=0)


@pytest.fixture
def registry() -> TargetRegistry:
    """Return a registry with the dummy target registered."""
    registry = TargetRegistry()
    registry.register("dummy", DummyExporter, aliases=["fake", "Dummy"])
    return registry


class TestRegistration:
    """Tests for registering and resolving targets."""

    def test_register_and_resolve(self, registry):
        """Test names and aliases resolve case-insensitively."""
        assert registry.list_targets() == ["dummy"]
        assert registry.resolve_name("FAKE") == "dummy"
        assert registry.get_exporter_class("fake") is DummyExporter
        assert registry.get_aliases("dummy") == ["fake"]

    def test_duplicate_registration_is_skipped(self, registry):
        """Test re-registering without replace keeps the original."""
        registry.register("dummy", AvaloniaExporter)
        assert registry.get_exporter_class("dummy") is DummyExporter

    def test_replace(self, registry):
        """Test replace swaps the registered class."""
        registry.register("dummy", AvaloniaExporter, replace=True)
        assert registry.get_exporter_class("dummy") is AvaloniaExporter

    def test_invalid_class(self):
        """Test only SceneExporter subclasses can be registered."""
        with pytest.raises(RegistryError, match="SceneExporter"):
            TargetRegistry().register("bad", dict)

    def test_alias_conflicts_with_target(self, registry):
        """Test aliases cannot shadow a target name."""
        with pytest.raises(RegistryError, match="conflicts"):
            registry.register("other", AvaloniaExporter, aliases=["dummy"])

    def test_alias_conflicts_with_alias(self, registry):
        """Test aliases cannot be claimed twice."""
        with pytest.raises(RegistryError, match="already points"):
            registry.register("other", AvaloniaExporter, aliases=["fake"])

    def test_unregister(self, registry):
        """Test unregistering removes the target and its aliases."""
        registry.unregister("dummy")
        assert registry.list_targets() == []
        assert not registry.is_supported("fake")

    def test_unknown_target(self, registry):
        """Test unknown targets raise with the available names."""
        with pytest.raises(RegistryError, match="Available: dummy"):
            registry.get_exporter_class("wpf")


class TestCreateExporter:
    """Tests for exporter instantiation with options."""

    def test_default_options(self, registry):
        """Test exporters get default options when none are given."""
        assert registry.create_exporter("dummy").options == ExportOptions()

    def test_options_instance(self, registry):
        """Test options instances are used as is."""
        options = ExportOptions(class_name="Shell")
        assert registry.create_exporter("dummy", options).options is options

    def test_options_mapping(self, registry):
        """Test option mappings go through from_dict."""
        exporter = registry.create_exporter("dummy", {"rootKind": "window"})
        assert exporter.options.root_kind == RootKind.WINDOW

    def test_options_file(self, registry, tmp_path):
        """Test option file paths are loaded."""
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"className": "FromFile"}))
        assert registry.create_exporter("dummy", str(path)).options.class_name == "FromFile"

    def test_missing_options_file(self, registry, tmp_path):
        """Test config errors surface as RegistryError."""
        with pytest.raises(RegistryError, match="Failed to create"):
            registry.create_exporter("dummy", tmp_path / "missing.json")

    def test_invalid_options_type(self, registry):
        """Test unsupported option values are rejected."""
        with pytest.raises(RegistryError, match="Invalid options type"):
            registry.create_exporter("dummy", 42)


class TestGlobalRegistry:
    """Tests for the built-in registry."""

    def test_builtin_targets(self):
        """Test the Avalonia target is registered with its aliases."""
        assert list_supported_targets() == ["avalonia"]
        assert is_target_supported("axaml")
        assert is_target_supported("Avalonia-XAML")
        assert not is_target_supported("wpf")

    def test_target_info(self):
        """Test target descriptions."""
        info = get_registry().get_target_info("axaml")
        assert info["name"] == "avalonia"
        assert info["class"] == "AvaloniaExporter"
        assert info["file_extension"] == ".axaml"
        assert info["aliases"] == ["avalonia-xaml", "axaml"]

    def test_get_exporter(self):
        """Test exporters are created through the global registry."""
        exporter = get_exporter("avalonia", {"class_name": "Main"})
        assert isinstance(exporter, AvaloniaExporter)
        assert exporter.options.class_name == "Main"
