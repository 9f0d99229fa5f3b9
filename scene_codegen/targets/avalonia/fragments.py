"""
Nested-element values: brushes, transforms and effects.

These helpers produce :class:`MarkupFragment` trees rather than attribute
strings, so the markup generator emits them as ``<Tag.Property>`` blocks.
All functions are pure; malformed input raises ``ValueError``/``TypeError``
which the converter set turns into a diagnostic.
"""

import math
import re
from typing import Any, List, Mapping, Optional, Union

from ...core.nodes import MarkupFragment

FALLBACK_STOPS = (("0", "White"), ("1", "Black"))

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)")
_INT_RE = re.compile(r"^\s*[+-]?\d+")

SOLID_FILLS = ("SOLID", "solid")
LINEAR_FILLS = ("LINEAR_GRADIENT", "linearGradient", "linear")
RADIAL_FILLS = ("RADIAL_GRADIENT", "radialGradient", "radial")
IMAGE_FILLS = ("IMAGE", "image")

DROP_SHADOW_EFFECTS = ("DROP_SHADOW", "dropShadow", "drop-shadow", "shadow")
BLUR_EFFECTS = ("LAYER_BLUR", "blur")

IMAGE_STRETCH = {
    "FILL": "Fill",
    "FIT": "Uniform",
    "CROP": "UniformToFill",
    "TILE": "None",
    "fill": "Fill",
    "fit": "Uniform",
    "cover": "UniformToFill",
    "contain": "Uniform",
    "none": "None",
}


def parse_float(value: Any) -> Optional[float]:
    """Parse the leading number of ``value``; ``None`` when absent or non-finite."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_RE.match(str(value))
        if not match:
            return None
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value`` (truncating decimals)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, int):
        return value
    match = _INT_RE.match(str(value))
    return int(match.group(0)) if match else None


def format_number(value: Union[int, float]) -> str:
    """Shortest text for a number; integral floats print without ``.0``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _num(value: Any, default: float = 0) -> str:
    number = parse_float(value)
    return format_number(default if number is None else number)


def _channel(component: Any) -> int:
    number = float(component)
    return max(0, min(255, int(math.floor(number * 255 + 0.5))))


def color_to_hex(color: Any) -> str:
    """
    Convert a color value to XAML text.

    Strings are returned unchanged; ``{r, g, b, a}`` dictionaries with
    components in 0..1 become ``#RRGGBB`` (or ``#AARRGGBB`` when a < 1);
    empty values become ``Transparent``.
    """
    if not color:
        return "Transparent"
    if isinstance(color, str):
        return color
    if isinstance(color, Mapping):
        r = _channel(color.get("r", 0))
        g = _channel(color.get("g", 0))
        b = _channel(color.get("b", 0))
        alpha = float(color.get("a", 1))
        if alpha < 1:
            return f"#{_channel(alpha):02X}{r:02X}{g:02X}{b:02X}"
        return f"#{r:02X}{g:02X}{b:02X}"
    raise TypeError(f"Unsupported color value: {color!r}")


def _point(value: Any, default: str) -> str:
    if isinstance(value, Mapping):
        return f"{_num(value.get('x', 0))},{_num(value.get('y', 0))}"
    return default


def gradient_stops(stops: Any) -> List[MarkupFragment]:
    """GradientStop children; an empty list yields a white-to-black pair."""
    if not stops:
        return [
            MarkupFragment.create("GradientStop", {"Offset": offset, "Color": color})
            for offset, color in FALLBACK_STOPS
        ]
    if not isinstance(stops, (list, tuple)):
        raise TypeError("Gradient stops must be a list")

    result = []
    for stop in stops:
        if not isinstance(stop, Mapping):
            raise TypeError(f"Gradient stop must be an object: {stop!r}")
        offset = stop.get("position", stop.get("offset", 0))
        result.append(
            MarkupFragment.create(
                "GradientStop",
                {"Offset": _num(offset), "Color": color_to_hex(stop.get("color"))},
            )
        )
    return result


def _stops_of(gradient: Mapping) -> Any:
    return gradient.get("gradientStops") or gradient.get("stops")


def linear_gradient(gradient: Mapping) -> MarkupFragment:
    """LinearGradientBrush from handle positions or an angle in degrees."""
    start_point = "0,0"
    end_point = "1,1"

    handles = gradient.get("gradientHandlePositions")
    if isinstance(handles, (list, tuple)) and len(handles) >= 2:
        start_point = _point(handles[0], start_point)
        end_point = _point(handles[1], end_point)
    elif gradient.get("angle") is not None:
        radians = math.radians(float(gradient["angle"]))
        end_point = f"{format_number(round(math.cos(radians), 6))},{format_number(round(math.sin(radians), 6))}"

    return MarkupFragment.create(
        "LinearGradientBrush",
        {"StartPoint": start_point, "EndPoint": end_point},
        gradient_stops(_stops_of(gradient)),
    )


def radial_gradient(gradient: Mapping) -> MarkupFragment:
    """RadialGradientBrush centred on ``center`` (default 0.5,0.5)."""
    center = _point(gradient.get("center"), "0.5,0.5")
    radius = parse_float(gradient.get("radius")) if gradient.get("radius") else None
    radius_text = format_number(radius) if radius is not None else "0.5"

    return MarkupFragment.create(
        "RadialGradientBrush",
        {
            "Center": center,
            "GradientOrigin": center,
            "RadiusX": radius_text,
            "RadiusY": radius_text,
        },
        gradient_stops(_stops_of(gradient)),
    )


def image_brush(fill: Mapping) -> MarkupFragment:
    attributes = {}
    source = fill.get("imageRef") or fill.get("src")
    if source:
        attributes["ImageSource"] = str(source)

    scale_mode = fill.get("scaleMode")
    if scale_mode:
        attributes["Stretch"] = IMAGE_STRETCH.get(scale_mode, "UniformToFill")
        if str(scale_mode).lower() == "tile":
            attributes["TileMode"] = "Tile"

    return MarkupFragment.create("ImageBrush", attributes)


def first_visible(items: Any) -> Optional[Mapping]:
    """First entry not flagged ``visible: false`` (or the first entry)."""
    entries = list(items) if isinstance(items, (list, tuple)) else [items]
    entries = [entry for entry in entries if isinstance(entry, Mapping)]
    if not entries:
        return None
    for entry in entries:
        if entry.get("visible") is not False:
            return entry
    return entries[0]


def fill_to_brush(fills: Any) -> Optional[Union[str, MarkupFragment]]:
    """
    Convert a fill (or list of fills) into a brush.

    Args:
        fills: Fill object or list; the first visible one is used

    Returns:
        Color string for solid fills, a brush fragment otherwise, or
        ``None`` when there is nothing to paint
    """
    fill = first_visible(fills)
    if fill is None:
        return None

    fill_type = fill.get("type")
    if fill_type in SOLID_FILLS or (fill_type is None and "color" in fill):
        return color_to_hex(fill.get("color"))
    if fill_type in LINEAR_FILLS:
        return linear_gradient(fill)
    if fill_type in RADIAL_FILLS:
        return radial_gradient(fill)
    if fill_type in IMAGE_FILLS:
        return image_brush(fill)
    if fill_type is None and ("r" in fill and "g" in fill and "b" in fill):
        return color_to_hex(fill)
    raise ValueError(f"Unsupported fill type: {fill_type}")


def flatten_brush(brush: MarkupFragment) -> str:
    """Solid stand-in for a gradient: its first stop color."""
    for child in brush.children:
        color = child.get("Color")
        if color:
            return color
    return "Transparent"


def _xy(value: Any, default: float) -> tuple:
    if isinstance(value, Mapping):
        x = parse_float(value.get("x"))
        y = parse_float(value.get("y"))
        return (default if x is None else x, default if y is None else y)
    number = parse_float(value)
    if number is None:
        return (default, default)
    return (number, number)


def transform_group(value: Mapping) -> Optional[MarkupFragment]:
    """
    Build a render transform from rotation/scale/skew/translation keys.

    A single transform is returned alone, several are wrapped in a
    TransformGroup, and an identity transform yields ``None``.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"Transform must be an object: {value!r}")

    transforms: List[MarkupFragment] = []

    rotation = parse_float(value.get("rotation", value.get("angle")))
    if rotation:
        transforms.append(MarkupFragment.create("RotateTransform", {"Angle": format_number(rotation)}))

    if value.get("scale") is not None:
        scale_x, scale_y = _xy(value["scale"], 1)
        if scale_x != 1 or scale_y != 1:
            transforms.append(
                MarkupFragment.create(
                    "ScaleTransform",
                    {"ScaleX": format_number(scale_x), "ScaleY": format_number(scale_y)},
                )
            )

    if value.get("skew") is not None:
        skew_x, skew_y = _xy(value["skew"], 0)
        if skew_x or skew_y:
            transforms.append(
                MarkupFragment.create(
                    "SkewTransform",
                    {"AngleX": format_number(skew_x), "AngleY": format_number(skew_y)},
                )
            )

    translate = value.get("translateOffset", value.get("translate"))
    if translate is not None:
        tx, ty = _xy(translate, 0)
        if tx or ty:
            transforms.append(
                MarkupFragment.create("TranslateTransform", {"X": format_number(tx), "Y": format_number(ty)})
            )

    if not transforms:
        return None
    if len(transforms) == 1:
        return transforms[0]
    return MarkupFragment.create("TransformGroup", children=transforms)


def drop_shadow(shadow: Mapping) -> MarkupFragment:
    attributes = {}
    if shadow.get("color"):
        attributes["Color"] = color_to_hex(shadow["color"])

    offset = shadow.get("offset")
    if isinstance(offset, Mapping):
        x = parse_float(offset.get("x")) or 0
        y = parse_float(offset.get("y")) or 0
        attributes["Direction"] = format_number(int(math.floor(math.degrees(math.atan2(y, x)) + 0.5)))
        attributes["ShadowDepth"] = format_number(round(math.hypot(x, y), 4))

    if shadow.get("radius") is not None:
        attributes["BlurRadius"] = _num(shadow["radius"])
    if shadow.get("opacity") is not None:
        attributes["Opacity"] = _num(shadow["opacity"], 1)

    return MarkupFragment.create("DropShadowEffect", attributes)


def blur(effect: Mapping) -> MarkupFragment:
    attributes = {}
    if effect.get("radius") is not None:
        attributes["Radius"] = _num(effect["radius"])
    return MarkupFragment.create("BlurEffect", attributes)


def effect_fragment(value: Any) -> Optional[MarkupFragment]:
    """
    Convert a drop shadow, blur, or list of effects.

    A list yields its first visible, supported effect. An object without
    ``type`` is read as a drop shadow.
    """
    if isinstance(value, (list, tuple)):
        for effect in value:
            if not isinstance(effect, Mapping) or effect.get("visible") is False:
                continue
            if effect.get("type") in DROP_SHADOW_EFFECTS + BLUR_EFFECTS:
                return effect_fragment(effect)
        return None

    if not isinstance(value, Mapping):
        raise TypeError(f"Effect must be an object or list: {value!r}")

    effect_type = value.get("type")
    if effect_type in BLUR_EFFECTS:
        return blur(value)
    if effect_type is None or effect_type in DROP_SHADOW_EFFECTS:
        return drop_shadow(value)
    raise ValueError(f"Unsupported effect type: {effect_type}")


def path_geometry(value: Any) -> str:
    """Path data from a string or a point list (``closed`` appends ``Z``)."""
    if isinstance(value, str):
        return value

    closed = False
    points = value
    if isinstance(value, Mapping):
        points = value.get("points") or []
        closed = bool(value.get("closed"))

    if not isinstance(points, (list, tuple)) or not points:
        raise ValueError("Geometry needs a path string or a non-empty point list")

    commands = []
    for index, point in enumerate(points):
        if isinstance(point, Mapping):
            x, y = point.get("x", 0), point.get("y", 0)
        else:
            x, y = point[0], point[1]
        prefix = "M" if index == 0 else "L"
        commands.append(f"{prefix} {_num(x)},{_num(y)}")
    if closed:
        commands.append("Z")
    return " ".join(commands)
