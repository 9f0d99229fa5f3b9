"""Tests for scene to canonical-node normalization."""

import pytest

from scene_codegen.core.config import ExportOptions
from scene_codegen.core.generator import DiagnosticKind
from scene_codegen.core.nodes import MarkupFragment, SceneError, SceneNode
from scene_codegen.targets.avalonia.normalizer import normalize, resolve_mapping


def _single(normalizer, node, options=None, diagnostics=None):
    roots = normalizer.normalize([node], options, diagnostics)
    assert len(roots) == 1
    return roots[0]


class TestMappingResolution:
    """Tests for choosing a mapping per node."""

    def test_explicit_target_type_wins(self):
        """Test an explicit target type beats the component type."""
        mapping, alias = resolve_mapping(SceneNode(type="ui-button", target_type="TextBox"))
        assert mapping.source_type == "ui-textbox"
        assert alias is None

    def test_unknown_target_type_is_generic(self):
        """Test unknown target types get a generic mapping."""
        mapping, _alias = resolve_mapping(SceneNode(type="x", target_type="FancyControl"))
        assert mapping.source_type == "generic-fancycontrol"

    def test_alias_before_source_type(self):
        """Test generic names resolve through the alias table."""
        mapping, alias = resolve_mapping(SceneNode(type="PasswordBox"))
        assert mapping.source_type == "ui-password-box"
        assert alias.component_type == "PasswordBox"

    def test_unsupported(self):
        """Test unknown types have no mapping."""
        assert resolve_mapping(SceneNode(type="hologram")) == (None, None)


class TestAttributes:
    """Tests for attribute conversion and ordering."""

    def test_flat_button(self, normalizer, button_scene):
        """Test a generic button maps its text to Content."""
        node = normalizer.normalize(button_scene)[0]
        assert node.target_type == "Button"
        assert node.source_type == "button"
        assert node.attributes == {"Content": "OK"}
        assert node.supported

    def test_default_values_are_omitted(self, normalizer):
        """Test values equal to the control default produce no attributes."""
        node = _single(
            normalizer,
            {
                "type": "ui-button",
                "properties": {
                    "text": "OK",
                    "enabled": True,
                    "isDefault": False,
                    "margin": 0,
                    "opacity": 1,
                    "borderThickness": {"left": 0, "top": 0, "right": 0, "bottom": 0},
                },
            },
        )
        assert node.attributes == {"Content": "OK"}

    def test_uniform_padding(self, normalizer):
        """Test uniform per-side padding collapses."""
        node = _single(
            normalizer,
            {"type": "ui-border", "properties": {"padding": {"left": 4, "top": 4, "right": 4, "bottom": 4}}},
        )
        assert node.attributes == {"Padding": "4"}

    def test_attribute_order(self, normalizer):
        """Test Classes first, mapped properties next, layout last in fixed order."""
        node = _single(
            normalizer,
            {
                "type": "ui-button",
                "properties": {"margin": 4, "width": 100, "text": "Go", "styleClass": "Primary"},
            },
        )
        assert list(node.attributes) == ["Classes", "Content", "Width", "Margin"]
        assert node.attributes["Classes"] == "Primary"

    def test_theme_adds_style_class(self, normalizer, button_scene):
        """Test the mapping style class is applied when a theme is generated."""
        node = normalizer.normalize(button_scene, ExportOptions(generate_theme=True))[0]
        assert node.attributes["Classes"] == "AsciiButton"

    def test_alias_style_class(self, normalizer):
        """Test alias style classes apply without a theme."""
        node = _single(normalizer, {"type": "Card"})
        assert node.target_type == "Border"
        assert node.attributes == {"Classes": "AsciiCard"}

    def test_alias_preset_properties(self, normalizer):
        """Test alias presets become attributes."""
        node = _single(normalizer, {"type": "ProgressRing"})
        assert node.attributes == {"IsIndeterminate": "True"}

    def test_first_rule_for_a_target_wins(self, normalizer):
        """Test later sources for the same target are ignored."""
        node = _single(normalizer, {"type": "ui-button", "properties": {"text": "A", "content": "B"}})
        assert node.attributes == {"Content": "A"}

    def test_binding_passes_through(self, normalizer):
        """Test binding expressions are copied verbatim."""
        node = _single(normalizer, {"type": "ui-textbox", "properties": {"text": "{Binding UserName}"}})
        assert node.attributes == {"Text": "{Binding UserName}"}

    def test_node_content_routes_to_rule(self, normalizer):
        """Test node-level text feeds the content rule."""
        node = _single(normalizer, {"type": "ui-button", "content": "Click"})
        assert node.attributes == {"Content": "Click"}

    def test_password_box_fixed_attribute(self, normalizer):
        """Test fixed attributes are added unless set explicitly."""
        node = _single(normalizer, {"type": "PasswordBox"})
        assert node.attributes == {"PasswordChar": "●"}

    def test_generic_mapping_passes_scalars_through(self, normalizer):
        """Test unknown controls keep their scalar properties."""
        node = _single(
            normalizer,
            {"type": "x", "targetType": "FancyControl", "properties": {"glowLevel": "High"}},
        )
        assert node.target_type == "FancyControl"
        assert node.attributes == {"GlowLevel": "High"}


class TestNestedAndAttached:
    """Tests for nested fragments and attached properties."""

    def test_gradient_is_nested(self, normalizer):
        """Test gradients become nested property elements."""
        node = _single(
            normalizer,
            {"type": "ui-border", "properties": {"background": {"type": "LINEAR_GRADIENT", "gradientStops": []}}},
        )
        assert "Background" not in node.attributes
        assert node.nested_properties["Background"].element == "LinearGradientBrush"

    def test_loose_transform_keys_are_folded(self, normalizer):
        """Test rotation/scale keys form one render transform."""
        node = _single(normalizer, {"type": "ui-button", "properties": {"rotation": 45}})
        assert node.nested_properties == {
            "RenderTransform": MarkupFragment.create("RotateTransform", {"Angle": "45"})
        }

    def test_coordinates_become_canvas_position(self, normalizer, positioned_scene):
        """Test x/y become Canvas attached properties."""
        first = normalizer.normalize(positioned_scene)[0]
        assert first.attached_properties == {"Canvas.Left": "10", "Canvas.Top": "20"}
        assert "Canvas.Left" not in first.attributes

    def test_attached_owner_mismatch_reported(self, normalizer):
        """Test attached properties outside their owner are kept but reported."""
        diagnostics = []
        node = _single(
            normalizer,
            {"type": "layout-stackpanel", "children": [{"type": "ui-button", "properties": {"gridRow": 1}}]},
            diagnostics=diagnostics,
        )
        assert node.children[0].attached_properties == {"Grid.Row": "1"}
        assert [d.kind for d in diagnostics] == [DiagnosticKind.IGNORED_PROPERTY]
        assert "Grid.Row" in diagnostics[0].message

    def test_attached_owner_match(self, normalizer):
        """Test attached properties inside their owner are silent."""
        diagnostics = []
        _single(
            normalizer,
            {"type": "layout-grid", "children": [{"type": "ui-button", "properties": {"gridRow": 1}}]},
            diagnostics=diagnostics,
        )
        assert diagnostics == []

    def test_item_list_becomes_item_children(self, normalizer):
        """Test literal item lists become item containers."""
        node = _single(normalizer, {"type": "ui-combobox", "properties": {"items": ["A", "B"]}})
        assert "ItemsSource" not in node.attributes
        assert [(c.target_type, c.attributes) for c in node.children] == [
            ("ComboBoxItem", {"Content": "A"}),
            ("ComboBoxItem", {"Content": "B"}),
        ]


class TestEventsAndNames:
    """Tests for event wiring and element names."""

    def test_event_flag_derives_handler(self, normalizer):
        """Test a true event flag derives the handler from the element name."""
        node = _single(normalizer, {"type": "ui-button", "name": "saveButton", "properties": {"onClick": True}})
        assert node.attributes == {"Click": "OnSaveButtonClick"}
        assert node.events[0].handler == "OnSaveButtonClick"
        assert node.events[0].args_type == "RoutedEventArgs"

    def test_named_event_handler(self, normalizer):
        """Test explicit handler names are sanitized."""
        node = _single(normalizer, {"type": "ui-listbox", "properties": {"onSelectionChanged": "list changed"}})
        assert node.attributes == {"SelectionChanged": "ListChanged"}
        assert node.events[0].args_type == "SelectionChangedEventArgs"

    def test_invalid_names_are_sanitized(self, normalizer):
        """Test names that are not identifiers are sanitized."""
        node = _single(normalizer, {"type": "ui-button", "name": "save button"})
        assert node.name == "SaveButton"

    def test_duplicate_names_are_renamed(self, normalizer):
        """Test duplicate names get a counter and a diagnostic."""
        diagnostics = []
        roots = normalizer.normalize(
            [{"type": "ui-button", "name": "title"}, {"type": "ui-button", "name": "title"}],
            diagnostics=diagnostics,
        )
        assert [root.name for root in roots] == ["title", "title2"]
        assert diagnostics[0].kind == DiagnosticKind.IGNORED_PROPERTY
        assert diagnostics[0].path == "1"


class TestRecoveredProblems:
    """Tests for diagnostics of recoverable problems."""

    def test_unmapped_component_placeholder(self, normalizer):
        """Test unknown components become unsupported placeholders."""
        diagnostics = []
        node = _single(normalizer, {"type": "hologram", "name": "holo"}, diagnostics=diagnostics)
        assert not node.supported
        assert node.name == "holo"
        assert diagnostics[0].kind == DiagnosticKind.UNMAPPED_COMPONENT
        assert diagnostics[0].path == "0"

    def test_conversion_failure_drops_property(self, normalizer):
        """Test malformed values are dropped and reported."""
        diagnostics = []
        node = _single(normalizer, {"type": "ui-button", "properties": {"width": "wide"}}, diagnostics=diagnostics)
        assert "Width" not in node.attributes
        assert diagnostics[0].kind == DiagnosticKind.CONVERSION_FAILED
        assert diagnostics[0].path == "0/properties/width"

    def test_unknown_property_reported(self, normalizer):
        """Test properties without a rule are reported."""
        diagnostics = []
        _single(normalizer, {"type": "ui-button", "properties": {"sparkle": 1}}, diagnostics=diagnostics)
        assert diagnostics[0].kind == DiagnosticKind.IGNORED_PROPERTY
        assert "sparkle" in diagnostics[0].message

    def test_text_with_children_is_reported(self, normalizer):
        """Test body text that cannot be emitted next to children is reported."""
        diagnostics = []
        scene = [{"type": "ui-panel", "content": "Hello", "children": [{"type": "ui-button"}]}]
        (panel,) = normalizer.normalize(scene, diagnostics=diagnostics)
        assert panel.text_content == "Hello"
        assert [d.kind for d in diagnostics] == [DiagnosticKind.IGNORED_PROPERTY]
        assert diagnostics[0].path == "0/content"
        assert "Panel" in diagnostics[0].message

    def test_text_without_children_is_not_reported(self, normalizer):
        """Test body text alone produces no diagnostic."""
        diagnostics = []
        normalizer.normalize([{"type": "ui-panel", "content": "Hello"}], diagnostics=diagnostics)
        assert diagnostics == []

    def test_depth_guard(self, normalizer):
        """Test the options depth limit applies to normalization."""
        scene = [{"type": "ui-border", "children": [{"type": "ui-border", "children": [{"type": "ui-button"}]}]}]
        with pytest.raises(SceneError):
            normalizer.normalize(scene, ExportOptions(max_depth=2))


def test_normalization_is_deterministic(form_scene):
    """Test repeated normalization gives equal trees."""
    assert normalize(form_scene) == normalize(form_scene)
