"""
Framework-agnostic component and property names for Avalonia.

Scenes authored without a target in mind use generic names such as
``button``, ``ListView`` or ``Card``. This table resolves them to an
Avalonia element and, where the element has several table entries,
to the exact mapping.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ...core.naming import to_pascal_case
from .mappings import DEFAULT_NAMESPACE, PRIMITIVES_NAMESPACE


@dataclass(frozen=True)
class ComponentAlias:
    """Generic component name resolved to an Avalonia element."""

    component_type: str
    target_element: str
    target_namespace: str = DEFAULT_NAMESPACE
    mapping_source: Optional[str] = None  # pin a specific table entry
    style_class: Optional[str] = None
    preset_properties: Tuple[Tuple[str, object], ...] = ()
    notes: str = ""


def _alias(component_type: str, target_element: str, **kwargs) -> ComponentAlias:
    return ComponentAlias(component_type, target_element, **kwargs)


COMPONENT_ALIASES: Tuple[ComponentAlias, ...] = (
    # Buttons
    _alias("Button", "Button"),
    _alias("RepeatButton", "RepeatButton"),
    _alias("ToggleButton", "ToggleButton"),
    _alias("RadioButton", "RadioButton"),
    _alias("CheckBox", "CheckBox"),
    _alias("HyperlinkButton", "HyperlinkButton"),
    _alias("DropDownButton", "DropDownButton"),
    _alias("SplitButton", "SplitButton"),
    _alias("ToggleSplitButton", "ToggleSplitButton"),
    # Inputs
    _alias("TextBox", "TextBox", mapping_source="ui-textbox"),
    _alias("TextBlock", "TextBlock"),
    _alias("Label", "Label"),
    _alias("PasswordBox", "TextBox", mapping_source="ui-password-box", notes="Use PasswordChar property"),
    _alias("MaskedTextBox", "MaskedTextBox"),
    _alias("NumericUpDown", "NumericUpDown"),
    _alias("Slider", "Slider"),
    _alias("RangeSlider", "RangeSlider"),
    # Selections
    _alias("ComboBox", "ComboBox"),
    _alias("ListBox", "ListBox"),
    _alias("ListView", "ListBox"),
    _alias("TreeView", "TreeView"),
    _alias("DataGrid", "DataGrid"),
    _alias("AutoCompleteBox", "AutoCompleteBox"),
    # Containers
    _alias("Window", "Window"),
    _alias("UserControl", "UserControl"),
    _alias("Panel", "Panel"),
    _alias("Border", "Border"),
    _alias("ScrollViewer", "ScrollViewer"),
    _alias("Expander", "Expander"),
    _alias(
        "GroupBox",
        "HeaderedContentControl",
        notes="Avalonia uses HeaderedContentControl for GroupBox functionality",
    ),
    _alias("TabControl", "TabControl"),
    _alias("TabItem", "TabItem"),
    _alias("Card", "Border", style_class="AsciiCard", notes="Style as card with CornerRadius and BoxShadow"),
    _alias("Viewbox", "Viewbox"),
    # Layouts
    _alias("StackPanel", "StackPanel"),
    _alias("DockPanel", "DockPanel"),
    _alias("Grid", "Grid"),
    _alias("WrapPanel", "WrapPanel"),
    _alias("UniformGrid", "UniformGrid"),
    _alias("Canvas", "Canvas"),
    _alias("RelativePanel", "RelativePanel"),
    _alias("SplitView", "SplitView"),
    # Indicators
    _alias("ProgressBar", "ProgressBar"),
    _alias(
        "ProgressRing",
        "ProgressBar",
        preset_properties=(("isIndeterminate", True),),
        notes="Use IsIndeterminate=true for ring behavior",
    ),
    _alias("Spinner", "ProgressBar", preset_properties=(("isIndeterminate", True),)),
    _alias("Badge", "Border"),
    # Navigation
    _alias("Menu", "Menu"),
    _alias("MenuItem", "MenuItem"),
    _alias("ContextMenu", "ContextMenu"),
    _alias("ToolBar", "StackPanel", preset_properties=(("orientation", "Horizontal"),)),
    _alias("StatusBar", "StackPanel", preset_properties=(("orientation", "Horizontal"),)),
    _alias("NavigationView", "SplitView"),
    _alias("Breadcrumb", "ItemsControl"),
    # DateTime
    _alias("Calendar", "Calendar"),
    _alias("DatePicker", "DatePicker"),
    _alias("TimePicker", "TimePicker"),
    # Data display
    _alias("Image", "Image"),
    _alias("MediaElement", "Image"),
    _alias("PathIcon", "PathIcon"),
    _alias("SymbolIcon", "PathIcon"),
    # Misc
    _alias("Separator", "Separator"),
    _alias("ToggleSwitch", "ToggleSwitch"),
    _alias("ColorPicker", "ColorPicker"),
    _alias("Flyout", "Flyout"),
    _alias("Popup", "Popup", target_namespace=PRIMITIVES_NAMESPACE),
    _alias("ToolTip", "ToolTip"),
)

# Generic property name -> Avalonia property name.
GLOBAL_PROPERTY_NAMES: Dict[str, str] = {
    # Common
    "name": "Name",
    "isEnabled": "IsEnabled",
    "isVisible": "IsVisible",
    "opacity": "Opacity",
    "tooltip": "ToolTip.Tip",
    "cursor": "Cursor",
    "focusable": "Focusable",
    "isTabStop": "IsTabStop",
    "tabIndex": "TabIndex",
    # Layout
    "width": "Width",
    "height": "Height",
    "minWidth": "MinWidth",
    "minHeight": "MinHeight",
    "maxWidth": "MaxWidth",
    "maxHeight": "MaxHeight",
    "margin": "Margin",
    "padding": "Padding",
    "horizontalAlignment": "HorizontalAlignment",
    "verticalAlignment": "VerticalAlignment",
    # Content
    "content": "Content",
    "text": "Text",
    "header": "Header",
    "title": "Title",
    "placeholder": "Watermark",
    # Appearance
    "background": "Background",
    "foreground": "Foreground",
    "borderBrush": "BorderBrush",
    "borderThickness": "BorderThickness",
    "cornerRadius": "CornerRadius",
    "fontFamily": "FontFamily",
    "fontSize": "FontSize",
    "fontWeight": "FontWeight",
    "fontStyle": "FontStyle",
    # Behavior
    "isChecked": "IsChecked",
    "isSelected": "IsSelected",
    "isExpanded": "IsExpanded",
    "isReadOnly": "IsReadOnly",
    "command": "Command",
    "commandParameter": "CommandParameter",
    "clickMode": "ClickMode",
    # Data
    "items": "Items",
    "itemsSource": "ItemsSource",
    "selectedItem": "SelectedItem",
    "selectedIndex": "SelectedIndex",
    "value": "Value",
    "minimum": "Minimum",
    "maximum": "Maximum",
}

# Per-component overrides of the global names.
COMPONENT_PROPERTY_NAMES: Dict[str, Dict[str, str]] = {
    "PasswordBox": {"passwordChar": "PasswordChar"},
    "ProgressRing": {"isIndeterminate": "IsIndeterminate"},
}


def _key(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", str(name).lower())


_BY_KEY: Dict[str, ComponentAlias] = {_key(a.component_type): a for a in COMPONENT_ALIASES}
_PROPERTY_OVERRIDES: Dict[str, Dict[str, str]] = {
    _key(component): names for component, names in COMPONENT_PROPERTY_NAMES.items()
}


def resolve_alias(component_type: str) -> Optional[ComponentAlias]:
    """Resolve a generic component name (case and separators ignored)."""
    if not component_type:
        return None
    return _BY_KEY.get(_key(component_type))


def property_name(generic: str, component_type: Optional[str] = None) -> str:
    """
    Avalonia property name for a generic property.

    Args:
        generic: Generic property name (e.g. ``placeholder``)
        component_type: Generic component name for component overrides

    Returns:
        Target property name, PascalCase of ``generic`` when unmapped
    """
    if component_type:
        overrides = _PROPERTY_OVERRIDES.get(_key(component_type), {})
        if generic in overrides:
            return overrides[generic]
    return GLOBAL_PROPERTY_NAMES.get(generic) or to_pascal_case(generic)


def list_aliases() -> List[str]:
    return sorted(alias.component_type for alias in COMPONENT_ALIASES)
