"""Tests for export options, presets and the config manager."""

import dataclasses
import json

import pytest

from scene_codegen.core.config import (
    ConfigError,
    ConfigManager,
    ExportOptions,
    RootKind,
    load_options,
    normalize_key,
    with_preset,
)


class TestExportOptions:
    """Tests for option defaults and coercion."""

    def test_defaults(self):
        """Test the default option values."""
        options = ExportOptions()
        assert options.root_kind == RootKind.USER_CONTROL
        assert options.namespace == "AsciistratorApp"
        assert options.class_name == "ExportedView"
        assert options.indent_size == 4
        assert options.max_depth == 64
        assert options.mvvm_idiom == "plain"

    def test_options_are_frozen(self):
        """Ensure options cannot be mutated after construction."""
        options = ExportOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.class_name = "Other"

    def test_camel_case_keys(self):
        """Test camelCase keys map onto fields."""
        options = ExportOptions.from_dict({"className": "Main", "includeCodeBehind": True})
        assert options.class_name == "Main"
        assert options.include_code_behind is True

    def test_indent_is_clamped(self):
        """Test out-of-range indents are clamped."""
        assert ExportOptions.from_dict({"indent_size": 20}).indent_size == 8
        assert ExportOptions.from_dict({"indent_size": 0}).indent_size == 1
        assert ExportOptions.from_dict({"indent_size": "wide"}).indent_size == 4

    def test_max_depth_is_clamped(self):
        """Test the nesting limit stays within a stack-safe range."""
        assert ExportOptions.from_dict({"max_depth": 100000}).max_depth == 256
        assert ExportOptions.from_dict({"max_depth": 0}).max_depth == 1
        assert ExportOptions.from_dict({"max_depth": "deep"}).max_depth == 64

    def test_invalid_names_are_sanitized(self):
        """Test class names and namespaces become legal identifiers."""
        options = ExportOptions.from_dict({"className": "my view", "namespace": "../evil.my app"})
        assert options.class_name == "MyView"
        assert options.namespace == "Evil.MyApp"
        assert ExportOptions.from_dict({"class_name": "1Bad"}).class_name == "_1Bad"
        assert ExportOptions.from_dict({"namespace": "Demo.Views"}).namespace == "Demo.Views"

    def test_sanitized_copy(self):
        """Test directly built options can be made safe after the fact."""
        options = ExportOptions(class_name="my view", max_depth=100000).sanitized()
        assert options.class_name == "MyView"
        assert options.max_depth == 256
        assert ExportOptions().sanitized() == ExportOptions()

    def test_root_kind_parsing(self):
        """Test root kinds parse case-insensitively and fall back."""
        assert ExportOptions.from_dict({"root": "window"}).root_kind == RootKind.WINDOW
        assert ExportOptions.from_dict({"root_kind": "user-control"}).root_kind == RootKind.USER_CONTROL
        assert ExportOptions.from_dict({"root_kind": "Dialog"}).root_kind == RootKind.USER_CONTROL

    def test_boolean_text(self):
        """Test boolean options accept text."""
        assert ExportOptions.from_dict({"useTabs": "yes"}).use_tabs is True
        assert ExportOptions.from_dict({"include_comments": "off"}).include_comments is False

    def test_unknown_keys_ignored(self):
        """Test unknown keys do not raise."""
        assert ExportOptions.from_dict({"flux_capacitor": True}) == ExportOptions()

    def test_merged_skips_none(self):
        """Test None overrides keep the current value."""
        options = ExportOptions(class_name="Keep")
        assert options.merged(class_name=None).class_name == "Keep"

    def test_toolkit_wins_over_reactiveui(self):
        """Test the CommunityToolkit idiom takes precedence."""
        options = ExportOptions(use_reactive_ui=True, use_community_toolkit=True)
        assert options.mvvm_idiom == "toolkit"

    def test_indent_unit(self):
        """Test the indent unit reflects tabs and size."""
        assert ExportOptions(indent_size=2).indent_unit == "  "
        assert ExportOptions(use_tabs=True).indent_unit == "\t"

    def test_to_dict_is_json_friendly(self):
        """Test to_dict writes the root kind as text."""
        data = ExportOptions(root_kind=RootKind.WINDOW).to_dict()
        assert data["root_kind"] == "Window"
        json.dumps(data)

    def test_normalize_key_aliases(self):
        """Test legacy option names map to current fields."""
        assert normalize_key("generateComments") == "include_comments"
        assert normalize_key("rootNamespace") == "namespace"


class TestPresets:
    """Tests for option presets."""

    def test_window_preset(self):
        """Test the window preset."""
        options = with_preset("window")
        assert options.root_kind == RootKind.WINDOW
        assert options.class_name == "MainWindow"
        assert options.include_code_behind is True

    def test_preset_alias(self):
        """Test preset aliases resolve."""
        options = with_preset("control")
        assert options.root_kind == RootKind.USER_CONTROL
        assert options.include_title is False

    def test_project_preset_enables_everything(self):
        """Test the project preset turns on every companion file."""
        options = with_preset("full-project")
        assert options.include_view_model
        assert options.generate_theme
        assert options.include_project_files

    def test_overrides_apply_on_top(self):
        """Test overrides win over preset values."""
        assert with_preset("window", class_name="Shell").class_name == "Shell"

    def test_unknown_preset(self):
        """Test unknown presets raise ConfigError."""
        with pytest.raises(ConfigError, match="Unknown preset"):
            with_preset("spaceship")


class TestConfigManager:
    """Tests for loading and validating options."""

    def test_merge_order(self, tmp_path):
        """Test defaults, preset, file and overrides merge in order."""
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"className": "FromFile", "namespace": "Demo"}))

        options = ConfigManager().get_options(
            preset="window",
            overrides={"class_name": "FromFlag"},
            config_file=config,
        )

        assert options.root_kind == RootKind.WINDOW
        assert options.namespace == "Demo"
        assert options.class_name == "FromFlag"

    def test_missing_file(self, tmp_path):
        """Test a missing config file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_options(config_file=tmp_path / "missing.json")

    def test_non_json_suffix(self, tmp_path):
        """Test config files must be JSON."""
        config = tmp_path / "options.yaml"
        config.write_text("class_name: X")
        with pytest.raises(ConfigError, match="must be JSON"):
            load_options(config_file=config)

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises ConfigError."""
        config = tmp_path / "options.json"
        config.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_options(config_file=config)

    def test_json_must_be_object(self, tmp_path):
        """Test config files must hold an object."""
        config = tmp_path / "options.json"
        config.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_options(config_file=config)

    def test_save_options(self, tmp_path):
        """Test saved options load back unchanged."""
        manager = ConfigManager()
        options = with_preset("project", namespace="Saved")
        path = tmp_path / "nested" / "options.json"

        manager.save_options(options, path)

        assert manager.get_options(config_file=path) == options

    def test_list_presets(self):
        """Test the preset names."""
        assert ConfigManager().list_presets() == ["document", "project", "usercontrol", "window"]

    def test_validation_warnings(self):
        """Test questionable option combinations produce warnings."""
        options = ExportOptions(
            class_name="1Bad",
            namespace="My.namespace",
            use_reactive_ui=True,
            use_community_toolkit=True,
            include_view_model=True,
            binding_mode="Sideways",
        )
        warnings = ConfigManager().validate_options(options)

        assert len(warnings) == 5
        assert any("1Bad" in warning for warning in warnings)
        assert any("CommunityToolkit wins" in warning for warning in warnings)

    def test_valid_options_have_no_warnings(self):
        """Test presets validate cleanly."""
        manager = ConfigManager()
        assert manager.validate_options(with_preset("window")) == []
        assert manager.validate_options(with_preset("project")) == []
