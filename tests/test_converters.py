"""Tests for property value converters."""

import pytest

from scene_codegen.core.config import ExportOptions
from scene_codegen.core.nodes import MarkupFragment
from scene_codegen.targets.avalonia.converters import (
    ConversionError,
    ConverterKind,
    ConverterSet,
    convert,
    is_binding_expression,
    is_markup_extension,
    stringify,
)


@pytest.fixture
def converters() -> ConverterSet:
    return ConverterSet()


class TestPrimitives:
    """Tests for scalar conversions."""

    def test_boolean_text(self, converters):
        """Test booleans are written as True/False."""
        assert converters.convert(True, ConverterKind.BOOLEAN) == "True"
        assert converters.convert("TRUE", ConverterKind.BOOLEAN) == "True"
        assert converters.convert(0, ConverterKind.BOOLEAN) == "False"

    def test_nullable_boolean_empty_is_null(self, converters):
        """Test an empty nullable boolean becomes x:Null."""
        assert converters.convert("", ConverterKind.NULLABLE_BOOLEAN) == "{x:Null}"

    def test_integer_truncates(self, converters):
        """Test integers are parsed from their leading digits."""
        assert converters.convert("12px", ConverterKind.INTEGER) == "12"
        assert converters.convert(3.7, ConverterKind.INTEGER) == "3"

    def test_double_drops_integral_fraction(self, converters):
        """Test integral doubles print without a fraction."""
        assert converters.convert(100.0, ConverterKind.DOUBLE) == "100"
        assert converters.convert(12.5, ConverterKind.DOUBLE) == "12.5"

    def test_dimension_keywords(self, converters):
        """Test Auto and star dimensions pass through."""
        assert converters.convert("auto", ConverterKind.DIMENSION) == "Auto"
        assert converters.convert("*", ConverterKind.DIMENSION) == "*"

    def test_none_is_absent(self, converters):
        """Test a missing value converts to None for every kind."""
        assert converters.convert(None, ConverterKind.STRING) is None
        assert converters.convert(None, ConverterKind.THICKNESS) is None

    def test_unknown_kind_stringifies(self, converters):
        """Test an unknown converter name falls back to plain text."""
        assert converters.convert(2.5, "no-such-kind") == "2.5"


class TestStrictConversion:
    """Tests for the raising and lenient conversion entry points."""

    def test_strict_raises_for_malformed_dimension(self, converters):
        """Test strict conversion raises on text that is not a number."""
        with pytest.raises(ConversionError):
            converters.convert_strict("wide", ConverterKind.DIMENSION)

    def test_lenient_returns_none(self, converters):
        """Test lenient conversion swallows the error."""
        assert converters.convert("wide", ConverterKind.DIMENSION) is None

    def test_conversion_error_is_value_error(self):
        """Ensure callers catching ValueError also catch conversion errors."""
        assert issubclass(ConversionError, ValueError)


class TestBindings:
    """Tests for binding expressions."""

    def test_binding_passes_through_any_kind(self, converters):
        """Test binding expressions are never converted."""
        value = "{Binding Width}"
        assert converters.convert(value, ConverterKind.DOUBLE) == value
        assert converters.convert(value, ConverterKind.THICKNESS) == value
        assert converters.convert("{DynamicResource Accent}", ConverterKind.BRUSH) == "{DynamicResource Accent}"

    def test_property_path_becomes_binding(self, converters):
        """Test a bare property path gets wrapped with the binding mode."""
        assert converters.convert("UserName", ConverterKind.BINDING) == "{Binding UserName, Mode=TwoWay}"

    def test_binding_mode_from_options(self, converters):
        """Test the binding mode comes from the options."""
        options = ExportOptions(binding_mode="OneWay")
        assert converters.convert("Items", ConverterKind.BINDING, options) == "{Binding Items, Mode=OneWay}"

    def test_collection_binding_has_no_mode(self, converters):
        """Test collection bindings omit the mode."""
        assert converters.convert("Items", ConverterKind.COLLECTION) == "{Binding Items}"

    def test_command_binding(self, converters):
        """Test command names bind to a ...Command property without a mode."""
        options = ExportOptions(binding_mode="OneWay")
        assert converters.convert("Save", ConverterKind.COMMAND, options) == "{Binding SaveCommand}"
        assert converters.convert("saveCommand", ConverterKind.COMMAND) == "{Binding SaveCommand}"
        assert converters.convert("{Binding Save}", ConverterKind.COMMAND) == "{Binding Save}"

    def test_is_binding_expression(self):
        """Test binding detection by prefix."""
        assert is_binding_expression("{StaticResource Key}")
        assert not is_binding_expression("Binding")
        assert not is_binding_expression(42)

    def test_is_markup_extension(self):
        """Test markup extensions need a known prefix and a closing brace."""
        assert is_markup_extension("{x:Null}")
        assert is_markup_extension("{TemplateBinding Foreground}")
        assert not is_markup_extension("{Binding Name")
        assert not is_markup_extension("{Tom & Jerry}")


class TestThickness:
    """Tests for thickness collapsing."""

    def test_uniform_object_collapses(self, converters):
        """Test four equal sides collapse to one value."""
        value = {"left": 4, "top": 4, "right": 4, "bottom": 4}
        assert converters.convert(value, ConverterKind.THICKNESS) == "4"

    def test_symmetric_object_collapses_to_pair(self, converters):
        """Test equal opposite sides collapse to two values."""
        value = {"left": 1, "top": 2, "right": 1, "bottom": 2}
        assert converters.convert(value, ConverterKind.THICKNESS) == "1,2"

    def test_distinct_sides(self, converters):
        """Test four distinct sides are all written."""
        assert converters.convert([1, 2, 3, 4], ConverterKind.THICKNESS) == "1,2,3,4"

    def test_numeric_text(self, converters):
        """Test numeric text is split on commas and spaces."""
        assert converters.convert("8, 4", ConverterKind.THICKNESS) == "8,4"

    def test_horizontal_vertical_object(self, converters):
        """Test horizontal/vertical objects default the missing axis to zero."""
        assert converters.convert({"horizontal": 5}, ConverterKind.THICKNESS) == "5,0"

    def test_three_values_rejected(self, converters):
        """Test a three-value list is not a thickness."""
        with pytest.raises(ConversionError):
            converters.convert_strict([1, 2, 3], ConverterKind.THICKNESS)


class TestCornerRadius:
    """Tests for corner radius conversion."""

    def test_uniform_corners(self, converters):
        """Test equal corners collapse to one value."""
        value = {"topLeft": 2, "topRight": 2, "bottomRight": 2, "bottomLeft": 2}
        assert converters.convert(value, ConverterKind.CORNER_RADIUS) == "2"

    def test_distinct_corners(self, converters):
        """Test distinct corners are written in order."""
        assert converters.convert([1, 2, 3, 4], ConverterKind.CORNER_RADIUS) == "1,2,3,4"


class TestEnums:
    """Tests for enum table lookups."""

    def test_font_weight_numeric(self, converters):
        """Test CSS numeric weights map to names."""
        assert converters.convert("700", ConverterKind.FONT_WEIGHT) == "Bold"
        assert converters.convert(600, ConverterKind.FONT_WEIGHT) == "SemiBold"

    def test_separators_ignored(self, converters):
        """Test separators in enum names are ignored where tables allow it."""
        assert converters.convert("semi-bold", ConverterKind.FONT_WEIGHT) == "SemiBold"
        assert converters.convert("no-wrap", ConverterKind.TEXT_WRAPPING) == "NoWrap"

    def test_unknown_enum_value_passes_through(self, converters):
        """Test an unknown enum value is written as given."""
        assert converters.convert("Diagonal", ConverterKind.ORIENTATION) == "Diagonal"


class TestColors:
    """Tests for color and brush conversion."""

    def test_rgb_function(self, converters):
        """Test rgb() text becomes hex."""
        assert converters.convert("rgb(255, 0, 0)", ConverterKind.COLOR) == "#ff0000"

    def test_rgba_function_has_alpha_first(self, converters):
        """Test rgba() text puts alpha first."""
        assert converters.convert("rgba(0, 0, 0, 0.5)", ConverterKind.COLOR) == "#80000000"

    def test_color_object(self, converters):
        """Test 0..1 color objects become hex."""
        assert converters.convert({"r": 1, "g": 0, "b": 0}, ConverterKind.COLOR) == "#FF0000"
        assert converters.convert({"r": 0, "g": 0, "b": 0, "a": 0.5}, ConverterKind.COLOR) == "#80000000"

    def test_named_color_unchanged(self, converters):
        """Test named colors pass through."""
        assert converters.convert("Red", ConverterKind.BRUSH) == "Red"

    def test_solid_fill_brush(self, converters):
        """Test solid fills become a color string."""
        fill = {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1}}
        assert converters.convert(fill, ConverterKind.BRUSH) == "#0000FF"


class TestGradients:
    """Tests for gradient brushes and their feature gate."""

    def test_empty_stops_fall_back(self, converters):
        """Test an empty stop list yields a white-to-black gradient."""
        result = converters.convert({"type": "LINEAR_GRADIENT", "gradientStops": []}, ConverterKind.BRUSH)

        assert isinstance(result, MarkupFragment)
        assert result.element == "LinearGradientBrush"
        assert [(stop.get("Offset"), stop.get("Color")) for stop in result.children] == [
            ("0", "White"),
            ("1", "Black"),
        ]

    def test_gradients_disabled_flatten_to_first_stop(self, converters):
        """Test disabled gradients fall back to their first stop color."""
        options = ExportOptions(include_gradients=False)
        fill = {
            "type": "LINEAR_GRADIENT",
            "gradientStops": [
                {"position": 0, "color": "#112233"},
                {"position": 1, "color": "#445566"},
            ],
        }
        assert converters.convert(fill, ConverterKind.BRUSH, options) == "#112233"

    def test_gradient_kind_reads_bare_objects(self, converters):
        """Test a gradient without a type is read as linear."""
        result = converters.convert({"angle": 90, "stops": []}, ConverterKind.GRADIENT)
        assert result.get("EndPoint") == "0,1"


class TestTransformsAndEffects:
    """Tests for render transforms and effects."""

    def test_single_rotation(self, converters):
        """Test a single transform is returned without a group."""
        result = converters.convert({"rotation": 45}, ConverterKind.TRANSFORM)
        assert result == MarkupFragment.create("RotateTransform", {"Angle": "45"})

    def test_identity_transform_is_dropped(self, converters):
        """Test an identity transform produces nothing."""
        assert converters.convert({"rotation": 0, "scale": 1}, ConverterKind.TRANSFORM) is None

    def test_several_transforms_are_grouped(self, converters):
        """Test several transforms are wrapped in a group."""
        result = converters.convert({"rotation": 10, "scale": 2}, ConverterKind.TRANSFORM)
        assert result.element == "TransformGroup"
        assert [child.element for child in result.children] == ["RotateTransform", "ScaleTransform"]

    def test_transforms_disabled(self, converters):
        """Test the transform feature gate."""
        options = ExportOptions(include_transforms=False)
        assert converters.convert({"rotation": 45}, ConverterKind.TRANSFORM, options) is None

    def test_first_visible_effect_wins(self, converters):
        """Test hidden effects are skipped in effect lists."""
        effects = [
            {"type": "DROP_SHADOW", "visible": False, "radius": 8},
            {"type": "LAYER_BLUR", "radius": 4},
        ]
        result = converters.convert(effects, ConverterKind.EFFECT)
        assert result == MarkupFragment.create("BlurEffect", {"Radius": "4"})

    def test_drop_shadow_geometry(self, converters):
        """Test shadow offsets become direction and depth."""
        result = converters.convert({"offset": {"x": 0, "y": 4}, "radius": 8}, ConverterKind.EFFECT)
        assert result.get("Direction") == "90"
        assert result.get("ShadowDepth") == "4"
        assert result.get("BlurRadius") == "8"

    def test_effects_disabled(self, converters):
        """Test the effect feature gate."""
        options = ExportOptions(include_effects=False)
        assert converters.convert({"radius": 8}, ConverterKind.EFFECT, options) is None


class TestGridAndEvents:
    """Tests for grid definitions and event handler names."""

    def test_definition_text(self, converters):
        """Test definition strings are normalized per entry."""
        assert converters.convert("auto,1*,2*", ConverterKind.ROW_DEFINITIONS) == "Auto,*,2*"

    def test_definition_objects(self, converters):
        """Test definition objects read their size key."""
        rows = [{"height": "auto"}, {"height": "1*"}, 100]
        assert converters.convert(rows, ConverterKind.ROW_DEFINITIONS) == "Auto,*,100"

    def test_event_handler_name_sanitized(self, converters):
        """Test handler names become identifiers."""
        assert converters.convert("save clicked", ConverterKind.EVENT_HANDLER) == "SaveClicked"

    def test_event_handler_flag(self, converters):
        """Test a boolean handler flag leaves naming to the caller."""
        assert converters.convert(True, ConverterKind.EVENT_HANDLER) is None

    def test_event_handler_ignores_binding_prefix_rule(self, converters):
        """Ensure handler names are never treated as bindings."""
        assert converters.convert("{Binding Save}", ConverterKind.EVENT_HANDLER) == "BindingSave"


def test_stringify_sequences():
    """Test lists are joined with commas."""
    assert stringify([1, 2.5, True]) == "1, 2.5, True"


def test_module_convert_is_deterministic():
    """Test repeated conversion gives identical output."""
    value = {"type": "RADIAL_GRADIENT", "gradientStops": [{"position": 0.5, "color": "Red"}]}
    assert convert(value, ConverterKind.BRUSH) == convert(value, ConverterKind.BRUSH)
