"""
Property value converters for Avalonia markup.

Each :class:`ConverterKind` names one conversion rule. A rule turns a raw
scene value into attribute text or, for brushes, transforms and effects,
into a :class:`MarkupFragment` that must be written as a nested element.
Conversions are pure: the same value, kind and options always give the
same output.
"""

import math
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ...core.config import ExportOptions
from ...core.naming import sanitize_identifier
from ...core.nodes import MarkupFragment
from ...logging_config import get_logger
from . import fragments
from .fragments import format_number, parse_float, parse_int

logger = get_logger(__name__)

ConverterResult = Union[str, MarkupFragment, None]

BINDING_PREFIXES = (
    "{Binding",
    "{x:Bind",
    "{StaticResource",
    "{DynamicResource",
    "{CompiledBinding",
)

MARKUP_EXTENSION_PREFIXES = BINDING_PREFIXES + (
    "{x:Null",
    "{x:Static",
    "{x:Type",
    "{TemplateBinding",
    "{RelativeSource",
)

_PROPERTY_PATH_RE = re.compile(r"^[A-Z][a-zA-Z0-9.]+$")
_COMMAND_NAME_RE = re.compile(r"^[A-Za-z_]\w*$")
_RGB_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*([\d.]+))?\)")
_NAMED_COLOR_RE = re.compile(r"^[A-Za-z]+$")
_NUMERIC_LIST_RE = re.compile(r"^[\d.,\s+-]+$")


class ConverterKind(str, Enum):
    """Conversion rule applied to a property value."""

    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    NULLABLE_BOOLEAN = "nullable-boolean"
    DIMENSION = "dimension"
    BINDING = "binding"
    COLLECTION = "collection"
    ORIENTATION = "orientation"
    DOCK = "dock"
    EXPAND_DIRECTION = "expand-direction"
    SELECTION_MODE = "selection-mode"
    ROW_DEFINITIONS = "row-definitions"
    COLUMN_DEFINITIONS = "column-definitions"
    THICKNESS = "thickness"
    BRUSH = "brush"
    FONT_WEIGHT = "font-weight"
    FONT_STYLE = "font-style"
    HORIZONTAL_ALIGNMENT = "horizontal-alignment"
    VERTICAL_ALIGNMENT = "vertical-alignment"
    TEXT_ALIGNMENT = "text-alignment"
    TEXT_WRAPPING = "text-wrapping"
    SCROLLBAR_VISIBILITY = "scrollbar-visibility"
    GRID_LENGTH = "grid-length"
    CORNER_RADIUS = "corner-radius"
    COLOR = "color"
    GRADIENT = "gradient"
    TRANSFORM = "transform"
    EFFECT = "effect"
    GEOMETRY = "geometry"
    POINT = "point"
    EVENT_HANDLER = "event-handler"
    COMMAND = "command"


# Kinds whose converter may legitimately produce nothing for a set value.
OPTIONAL_RESULT_KINDS = frozenset(
    {
        ConverterKind.BRUSH,
        ConverterKind.GRADIENT,
        ConverterKind.TRANSFORM,
        ConverterKind.EFFECT,
        ConverterKind.EVENT_HANDLER,
    }
)


class ConversionError(ValueError):
    """Raised by strict conversion when a value cannot be converted."""

    pass


# Enum tables: lowercase key -> Avalonia literal.
ORIENTATIONS = {"horizontal": "Horizontal", "vertical": "Vertical", "h": "Horizontal", "v": "Vertical"}
DOCKS = {"left": "Left", "top": "Top", "right": "Right", "bottom": "Bottom"}
EXPAND_DIRECTIONS = {"down": "Down", "up": "Up", "left": "Left", "right": "Right"}
SELECTION_MODES = {
    "single": "Single",
    "multiple": "Multiple",
    "extended": "Extended",
    "toggle": "Toggle",
    "alwaysselected": "AlwaysSelected",
}
HORIZONTAL_ALIGNMENTS = {"left": "Left", "center": "Center", "right": "Right", "stretch": "Stretch"}
VERTICAL_ALIGNMENTS = {"top": "Top", "center": "Center", "bottom": "Bottom", "stretch": "Stretch"}
TEXT_ALIGNMENTS = {
    "left": "Left",
    "center": "Center",
    "right": "Right",
    "justify": "Justify",
    "start": "Start",
    "end": "End",
}
TEXT_WRAPPINGS = {"nowrap": "NoWrap", "wrap": "Wrap", "wrapwithoverflow": "WrapWithOverflow"}
SCROLLBAR_VISIBILITIES = {"disabled": "Disabled", "auto": "Auto", "hidden": "Hidden", "visible": "Visible"}
FONT_WEIGHTS = {
    "thin": "Thin",
    "extralight": "ExtraLight",
    "light": "Light",
    "regular": "Regular",
    "normal": "Normal",
    "medium": "Medium",
    "semibold": "SemiBold",
    "bold": "Bold",
    "extrabold": "ExtraBold",
    "black": "Black",
    "100": "Thin",
    "200": "ExtraLight",
    "300": "Light",
    "400": "Normal",
    "500": "Medium",
    "600": "SemiBold",
    "700": "Bold",
    "800": "ExtraBold",
    "900": "Black",
}
FONT_STYLES = {"normal": "Normal", "italic": "Italic", "oblique": "Oblique"}


def is_binding_expression(value: Any) -> bool:
    """True for strings already written as a binding or resource reference."""
    return isinstance(value, str) and value.startswith(BINDING_PREFIXES)


def is_markup_extension(value: Any) -> bool:
    """True for strings the XAML parser evaluates as a markup extension."""
    return isinstance(value, str) and value.startswith(MARKUP_EXTENSION_PREFIXES) and value.endswith("}")


def stringify(value: Any) -> str:
    """Attribute text for a plain value."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify(item) for item in value)
    return str(value)


def _lookup(table: Dict[str, str], value: Any, strip: Optional[str] = None) -> str:
    key = str(value).lower()
    if strip:
        key = re.sub(strip, "", key)
    return table.get(key, stringify(value))


def _collapse(values: List[str]) -> str:
    """Shortest Thickness form for left, top, right, bottom."""
    left, top, right, bottom = values
    if left == top == right == bottom:
        return left
    if left == right and top == bottom:
        return f"{left},{top}"
    return f"{left},{top},{right},{bottom}"


def _edge(value: Any) -> str:
    number = parse_float(value)
    if number is None:
        raise ConversionError(f"Invalid edge value: {value!r}")
    return format_number(number)


def _hex_byte(number: int) -> str:
    return format(max(0, min(255, number)), "02x")


class ConverterSet:
    """
    Registry of conversion rules keyed by :class:`ConverterKind`.

    :meth:`convert` never raises; :meth:`convert_strict` raises
    :class:`ConversionError` so callers can record why a value was dropped.
    """

    def __init__(self):
        self._converters: Dict[ConverterKind, Callable[[Any, Optional[ExportOptions]], ConverterResult]] = {
            ConverterKind.STRING: self._convert_string,
            ConverterKind.INTEGER: self._convert_integer,
            ConverterKind.DOUBLE: self._convert_double,
            ConverterKind.BOOLEAN: self._convert_boolean,
            ConverterKind.NULLABLE_BOOLEAN: self._convert_nullable_boolean,
            ConverterKind.DIMENSION: self._convert_dimension,
            ConverterKind.BINDING: self._convert_binding,
            ConverterKind.COLLECTION: self._convert_collection,
            ConverterKind.COMMAND: self._convert_command,
            ConverterKind.ORIENTATION: lambda v, o: _lookup(ORIENTATIONS, v),
            ConverterKind.DOCK: lambda v, o: _lookup(DOCKS, v),
            ConverterKind.EXPAND_DIRECTION: lambda v, o: _lookup(EXPAND_DIRECTIONS, v),
            ConverterKind.SELECTION_MODE: lambda v, o: _lookup(SELECTION_MODES, v, r"[^a-z]"),
            ConverterKind.HORIZONTAL_ALIGNMENT: lambda v, o: _lookup(HORIZONTAL_ALIGNMENTS, v),
            ConverterKind.VERTICAL_ALIGNMENT: lambda v, o: _lookup(VERTICAL_ALIGNMENTS, v),
            ConverterKind.TEXT_ALIGNMENT: lambda v, o: _lookup(TEXT_ALIGNMENTS, v),
            ConverterKind.TEXT_WRAPPING: lambda v, o: _lookup(TEXT_WRAPPINGS, v, r"[^a-z]"),
            ConverterKind.SCROLLBAR_VISIBILITY: lambda v, o: _lookup(SCROLLBAR_VISIBILITIES, v),
            ConverterKind.FONT_WEIGHT: lambda v, o: _lookup(FONT_WEIGHTS, v, r"[^a-z0-9]"),
            ConverterKind.FONT_STYLE: lambda v, o: _lookup(FONT_STYLES, v),
            ConverterKind.THICKNESS: self._convert_thickness,
            ConverterKind.CORNER_RADIUS: self._convert_corner_radius,
            ConverterKind.BRUSH: self._convert_brush,
            ConverterKind.COLOR: self._convert_color,
            ConverterKind.GRADIENT: self._convert_gradient,
            ConverterKind.ROW_DEFINITIONS: lambda v, o: self._convert_definitions(v, "height"),
            ConverterKind.COLUMN_DEFINITIONS: lambda v, o: self._convert_definitions(v, "width"),
            ConverterKind.GRID_LENGTH: lambda v, o: self._convert_grid_length(v),
            ConverterKind.TRANSFORM: self._convert_transform,
            ConverterKind.EFFECT: self._convert_effect,
            ConverterKind.GEOMETRY: lambda v, o: fragments.path_geometry(v),
            ConverterKind.POINT: lambda v, o: self._convert_point(v),
            ConverterKind.EVENT_HANDLER: lambda v, o: self._convert_event_handler(v),
        }

    @property
    def kinds(self) -> List[ConverterKind]:
        return list(self._converters)

    def convert(
        self,
        value: Any,
        kind: Union[ConverterKind, str],
        options: Optional[ExportOptions] = None,
    ) -> ConverterResult:
        """
        Convert a property value.

        Args:
            value: Raw scene value
            kind: Conversion rule to apply
            options: Export options (binding mode and feature gates)

        Returns:
            Attribute text, a nested fragment, or ``None`` when the value
            is absent or cannot be converted
        """
        try:
            return self.convert_strict(value, kind, options)
        except ConversionError as e:
            logger.warning(f"Conversion error for {kind}: {e}")
            return None

    def convert_strict(
        self,
        value: Any,
        kind: Union[ConverterKind, str],
        options: Optional[ExportOptions] = None,
    ) -> ConverterResult:
        """
        Convert a property value, raising on malformed input.

        Raises:
            ConversionError: If the value cannot be converted
        """
        if value is None:
            return None

        try:
            kind = ConverterKind(kind)
        except ValueError:
            logger.warning(f"Unknown converter type: {kind}")
            return stringify(value)

        if kind != ConverterKind.EVENT_HANDLER and is_binding_expression(value):
            return value

        try:
            return self._converters[kind](value, options)
        except ConversionError:
            raise
        except (ValueError, TypeError, KeyError, AttributeError, IndexError) as e:
            raise ConversionError(f"Cannot convert {value!r} as {kind.value}: {e}") from e

    # Primitives

    def _convert_string(self, value: Any, options: Optional[ExportOptions]) -> str:
        return stringify(value)

    def _convert_integer(self, value: Any, options: Optional[ExportOptions]) -> str:
        number = parse_int(value)
        if number is None:
            raise ConversionError(f"Not an integer: {value!r}")
        return str(number)

    def _convert_double(self, value: Any, options: Optional[ExportOptions]) -> str:
        number = parse_float(value)
        if number is None:
            raise ConversionError(f"Not a number: {value!r}")
        return format_number(number)

    def _convert_boolean(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, str):
            return "True" if value.lower() == "true" else "False"
        return "True" if value else "False"

    def _convert_nullable_boolean(self, value: Any, options: Optional[ExportOptions]) -> str:
        if value == "":
            return "{x:Null}"
        return self._convert_boolean(value, options)

    def _convert_dimension(self, value: Any, options: Optional[ExportOptions]) -> str:
        if value in ("Auto", "auto"):
            return "Auto"
        if value in ("NaN", "*"):
            return value
        return self._convert_double(value, options)

    # Bindings

    def _convert_binding(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, str) and _PROPERTY_PATH_RE.match(value):
            mode = options.binding_mode if options is not None else "TwoWay"
            return f"{{Binding {value}, Mode={mode}}}"
        return stringify(value)

    def _convert_collection(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, str) and _PROPERTY_PATH_RE.match(value):
            return f"{{Binding {value}}}"
        return stringify(value)

    def _convert_command(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, str) and _COMMAND_NAME_RE.match(value.strip()):
            name = value.strip()
            name = name[:1].upper() + name[1:]
            if not name.endswith("Command"):
                name += "Command"
            return f"{{Binding {name}}}"
        return stringify(value)

    # Geometry

    def _convert_thickness(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, bool):
            raise ConversionError(f"Invalid thickness: {value!r}")
        if isinstance(value, (int, float)):
            return _edge(value)

        if isinstance(value, str):
            if not _NUMERIC_LIST_RE.match(value):
                return value
            parts = [part for part in re.split(r"[\s,]+", value.strip()) if part]
            return self._convert_thickness(parts, options)

        if isinstance(value, (list, tuple)):
            edges = [_edge(part) for part in value]
            if len(edges) == 1:
                return edges[0]
            if len(edges) == 2:
                return _collapse([edges[0], edges[1], edges[0], edges[1]])
            if len(edges) == 4:
                return _collapse(edges)
            raise ConversionError(f"Thickness needs 1, 2 or 4 values, got {len(edges)}")

        if isinstance(value, Mapping):
            if "horizontal" in value or "vertical" in value:
                horizontal = _edge(value.get("horizontal", 0))
                vertical = _edge(value.get("vertical", 0))
                return _collapse([horizontal, vertical, horizontal, vertical])
            return _collapse(
                [_edge(value.get(side, 0)) for side in ("left", "top", "right", "bottom")]
            )

        raise ConversionError(f"Invalid thickness: {value!r}")

    def _convert_corner_radius(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, bool):
            raise ConversionError(f"Invalid corner radius: {value!r}")
        if isinstance(value, (int, float)):
            return _edge(value)

        if isinstance(value, str):
            if not _NUMERIC_LIST_RE.match(value):
                return value
            value = [part for part in re.split(r"[\s,]+", value.strip()) if part]

        if isinstance(value, Mapping):
            value = [
                value.get(corner, 0)
                for corner in ("topLeft", "topRight", "bottomRight", "bottomLeft")
            ]

        if isinstance(value, (list, tuple)):
            corners = [_edge(part) for part in value]
            if len(corners) == 1 or (len(corners) == 4 and len(set(corners)) == 1):
                return corners[0]
            if len(corners) == 4:
                return ",".join(corners)
            raise ConversionError(f"Corner radius needs 1 or 4 values, got {len(corners)}")

        raise ConversionError(f"Invalid corner radius: {value!r}")

    def _convert_point(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, Mapping):
            return f"{_edge(value.get('x', 0))},{_edge(value.get('y', 0))}"
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return f"{_edge(value[0])},{_edge(value[1])}"
        raise ConversionError(f"Invalid point: {value!r}")

    # Colors and brushes

    def _convert_color_string(self, value: str) -> str:
        if value.startswith("{") or value.startswith("#") or _NAMED_COLOR_RE.match(value):
            return value

        match = _RGB_RE.search(value)
        if match:
            r, g, b, alpha = match.groups()
            rgb = "".join(_hex_byte(int(channel)) for channel in (r, g, b))
            if alpha is not None:
                return f"#{_hex_byte(int(math.floor(float(alpha) * 255 + 0.5)))}{rgb}"
            return f"#{rgb}"
        return value

    def _convert_color(self, value: Any, options: Optional[ExportOptions]) -> str:
        if isinstance(value, str):
            return self._convert_color_string(value)
        return fragments.color_to_hex(value)

    def _convert_brush(self, value: Any, options: Optional[ExportOptions]) -> ConverterResult:
        if isinstance(value, str):
            return self._convert_color_string(value)
        if isinstance(value, (Mapping, list, tuple)):
            brush = fragments.fill_to_brush(value)
            return self._gate_gradient(brush, options)
        return stringify(value)

    def _convert_gradient(self, value: Any, options: Optional[ExportOptions]) -> ConverterResult:
        if isinstance(value, str):
            return self._convert_color_string(value)
        if isinstance(value, Mapping) and "type" not in value:
            brush = fragments.linear_gradient(value)
        else:
            brush = fragments.fill_to_brush(value)
        return self._gate_gradient(brush, options)

    def _gate_gradient(self, brush: ConverterResult, options: Optional[ExportOptions]) -> ConverterResult:
        if (
            isinstance(brush, MarkupFragment)
            and brush.element.endswith("GradientBrush")
            and options is not None
            and not options.include_gradients
        ):
            return fragments.flatten_brush(brush)
        return brush

    # Grid definitions

    def _convert_grid_length(self, value: Any) -> str:
        text = str(value).strip()
        if text.lower() == "auto":
            return "Auto"
        if text.endswith("*"):
            factor = text[:-1]
            if factor in ("", "1"):
                return "*"
            return f"{factor}*"
        number = parse_float(text)
        return format_number(number) if number is not None else text

    def _convert_definitions(self, value: Any, size_key: str) -> str:
        if isinstance(value, str):
            return ",".join(self._convert_grid_length(part) for part in value.split(","))
        if isinstance(value, (list, tuple)):
            lengths = []
            for item in value:
                if isinstance(item, Mapping) and item.get(size_key) is not None:
                    item = item[size_key]
                lengths.append(self._convert_grid_length(item))
            return ",".join(lengths)
        return self._convert_grid_length(value)

    # Nested fragments

    def _convert_transform(self, value: Any, options: Optional[ExportOptions]) -> ConverterResult:
        if options is not None and not options.include_transforms:
            return None
        if isinstance(value, str):
            return value
        return fragments.transform_group(value)

    def _convert_effect(self, value: Any, options: Optional[ExportOptions]) -> ConverterResult:
        if options is not None and not options.include_effects:
            return None
        return fragments.effect_fragment(value)

    def _convert_event_handler(self, value: Any) -> Optional[str]:
        if isinstance(value, bool):
            # Handler name is derived from the element by the caller.
            return None
        if isinstance(value, str) and value.strip():
            return sanitize_identifier(value)
        raise ConversionError(f"Invalid event handler: {value!r}")


_default_set: Optional[ConverterSet] = None


def get_converter_set() -> ConverterSet:
    """Get the shared converter set (it holds no mutable state)."""
    global _default_set
    if _default_set is None:
        _default_set = ConverterSet()
    return _default_set


def convert(
    value: Any,
    kind: Union[ConverterKind, str],
    options: Optional[ExportOptions] = None,
) -> ConverterResult:
    """Convert ``value`` with the shared converter set."""
    return get_converter_set().convert(value, kind, options)
