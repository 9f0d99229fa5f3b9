"""
Avalonia component mappings.

Static table translating scene component types into Avalonia controls.
Each :class:`Mapping` lists its property rules in emission order; a rule
may declare the control's natural default so unchanged values are left
out of the markup.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .converters import ConverterKind as K

DEFAULT_NAMESPACE = "Avalonia.Controls"
PRIMITIVES_NAMESPACE = "Avalonia.Controls.Primitives"


@dataclass(frozen=True)
class PropertyRule:
    """Source property -> target property through one converter."""

    source: str
    target: str
    converter: K = K.STRING
    default: Any = None


@dataclass(frozen=True)
class Mapping:
    """Immutable description of one scene component type."""

    source_type: str
    target_element: str
    rules: Tuple[PropertyRule, ...] = ()
    target_namespace: str = DEFAULT_NAMESPACE
    content_property: Optional[str] = None
    style_class: Optional[str] = None
    attached_properties: Tuple[str, ...] = ()
    fixed_attributes: Tuple[Tuple[str, str], ...] = ()

    @property
    def category(self) -> str:
        return self.source_type.split("-", 1)[0] + "-"

    def rule_for(self, source: str) -> Optional[PropertyRule]:
        for rule in self.rules:
            if rule.source == source:
                return rule
        return None


def rule(source: str, target: str, converter: K = K.STRING, default: Any = None) -> PropertyRule:
    return PropertyRule(source, target, converter, default)


def _mapping(source_type, target_element, rules, content=None, style=None, **kwargs) -> Mapping:
    return Mapping(
        source_type=source_type,
        target_element=target_element,
        rules=tuple(rules),
        content_property=content,
        style_class=style,
        **kwargs,
    )


# Appearance, typography and event wiring shared by every control.
COMMON_RULES: Tuple[PropertyRule, ...] = (
    rule("background", "Background", K.BRUSH),
    rule("fill", "Background", K.BRUSH),
    rule("fills", "Background", K.BRUSH),
    rule("foreground", "Foreground", K.BRUSH),
    rule("color", "Foreground", K.BRUSH),
    rule("borderBrush", "BorderBrush", K.BRUSH),
    rule("stroke", "BorderBrush", K.BRUSH),
    rule("borderThickness", "BorderThickness", K.THICKNESS, 0),
    rule("strokeWidth", "BorderThickness", K.THICKNESS, 0),
    rule("cornerRadius", "CornerRadius", K.CORNER_RADIUS, 0),
    rule("padding", "Padding", K.THICKNESS, 0),
    rule("fontFamily", "FontFamily", K.STRING),
    rule("fontSize", "FontSize", K.DOUBLE),
    rule("fontWeight", "FontWeight", K.FONT_WEIGHT, "Normal"),
    rule("fontStyle", "FontStyle", K.FONT_STYLE, "Normal"),
    rule("tooltip", "ToolTip.Tip", K.STRING),
    rule("toolTip", "ToolTip.Tip", K.STRING),
    rule("cursor", "Cursor", K.STRING),
    rule("focusable", "Focusable", K.BOOLEAN),
    rule("isTabStop", "IsTabStop", K.BOOLEAN, True),
    rule("tabIndex", "TabIndex", K.INTEGER),
    rule("transformOrigin", "RenderTransformOrigin", K.POINT),
    rule("transform", "RenderTransform", K.TRANSFORM),
    rule("effect", "Effect", K.EFFECT),
    rule("dropShadow", "Effect", K.EFFECT),
    rule("effects", "Effect", K.EFFECT),
    rule("onClick", "Click", K.EVENT_HANDLER),
    rule("onSelectionChanged", "SelectionChanged", K.EVENT_HANDLER),
    rule("onTextChanged", "TextChanged", K.EVENT_HANDLER),
)

# Size, margin, alignment and visibility, emitted after mapped properties.
LAYOUT_RULES: Tuple[PropertyRule, ...] = (
    rule("width", "Width", K.DIMENSION),
    rule("height", "Height", K.DIMENSION),
    rule("minWidth", "MinWidth", K.DIMENSION),
    rule("minHeight", "MinHeight", K.DIMENSION),
    rule("maxWidth", "MaxWidth", K.DIMENSION),
    rule("maxHeight", "MaxHeight", K.DIMENSION),
    rule("margin", "Margin", K.THICKNESS, 0),
    rule("horizontalAlignment", "HorizontalAlignment", K.HORIZONTAL_ALIGNMENT, "Stretch"),
    rule("verticalAlignment", "VerticalAlignment", K.VERTICAL_ALIGNMENT, "Stretch"),
    rule("enabled", "IsEnabled", K.BOOLEAN, True),
    rule("isEnabled", "IsEnabled", K.BOOLEAN, True),
    rule("visible", "IsVisible", K.BOOLEAN, True),
    rule("isVisible", "IsVisible", K.BOOLEAN, True),
    rule("opacity", "Opacity", K.DOUBLE, 1),
)

LAYOUT_TARGET_ORDER: Tuple[str, ...] = (
    "Width",
    "Height",
    "MinWidth",
    "MinHeight",
    "MaxWidth",
    "MaxHeight",
    "Margin",
    "HorizontalAlignment",
    "VerticalAlignment",
    "IsEnabled",
    "IsVisible",
    "Opacity",
)

# Properties a parent panel reads from its children.
ATTACHED_RULES: Tuple[PropertyRule, ...] = (
    rule("gridRow", "Grid.Row", K.INTEGER, 0),
    rule("gridColumn", "Grid.Column", K.INTEGER, 0),
    rule("gridRowSpan", "Grid.RowSpan", K.INTEGER, 1),
    rule("gridColumnSpan", "Grid.ColumnSpan", K.INTEGER, 1),
    rule("dock", "DockPanel.Dock", K.DOCK),
    rule("canvasLeft", "Canvas.Left", K.DOUBLE, 0),
    rule("canvasTop", "Canvas.Top", K.DOUBLE, 0),
    rule("canvasRight", "Canvas.Right", K.DOUBLE),
    rule("canvasBottom", "Canvas.Bottom", K.DOUBLE),
    rule("zIndex", "Panel.ZIndex", K.INTEGER, 0),
)

_BUTTONS = [
    _mapping(
        "ui-button",
        "Button",
        [
            rule("text", "Content"),
            rule("content", "Content"),
            rule("width", "Width", K.DIMENSION),
            rule("height", "Height", K.DIMENSION),
            rule("enabled", "IsEnabled", K.BOOLEAN, True),
            rule("command", "Command", K.COMMAND),
            rule("commandParameter", "CommandParameter", K.BINDING),
            rule("isDefault", "IsDefault", K.BOOLEAN, False),
            rule("isCancel", "IsCancel", K.BOOLEAN, False),
            rule("clickMode", "ClickMode", K.STRING, "Release"),
            rule("horizontalContentAlignment", "HorizontalContentAlignment", K.HORIZONTAL_ALIGNMENT),
            rule("verticalContentAlignment", "VerticalContentAlignment", K.VERTICAL_ALIGNMENT),
        ],
        content="Content",
        style="AsciiButton",
    ),
    _mapping(
        "ui-repeat-button",
        "RepeatButton",
        [
            rule("content", "Content"),
            rule("delay", "Delay", K.INTEGER),
            rule("interval", "Interval", K.INTEGER),
            rule("command", "Command", K.COMMAND),
        ],
        content="Content",
        style="AsciiRepeatButton",
    ),
    _mapping(
        "ui-toggle-button",
        "ToggleButton",
        [
            rule("content", "Content"),
            rule("isChecked", "IsChecked", K.NULLABLE_BOOLEAN),
            rule("isThreeState", "IsThreeState", K.BOOLEAN, False),
        ],
        content="Content",
        style="AsciiToggleButton",
    ),
    _mapping(
        "ui-split-button",
        "SplitButton",
        [rule("content", "Content"), rule("command", "Command", K.COMMAND)],
        content="Content",
        style="AsciiSplitButton",
    ),
    _mapping(
        "ui-toggle-split-button",
        "ToggleSplitButton",
        [
            rule("content", "Content"),
            rule("isChecked", "IsChecked", K.BOOLEAN, False),
            rule("command", "Command", K.COMMAND),
        ],
        content="Content",
        style="AsciiToggleSplitButton",
    ),
    _mapping(
        "ui-dropdown-button",
        "DropDownButton",
        [rule("content", "Content")],
        content="Content",
        style="AsciiDropDownButton",
    ),
    _mapping(
        "ui-hyperlink-button",
        "HyperlinkButton",
        [rule("content", "Content"), rule("navigateUri", "NavigateUri")],
        content="Content",
        style="AsciiHyperlinkButton",
    ),
]

_TEXT_INPUTS = [
    _mapping(
        "ui-textbox",
        "TextBox",
        [
            rule("text", "Text"),
            rule("placeholder", "Watermark"),
            rule("watermark", "Watermark"),
            rule("maxLength", "MaxLength", K.INTEGER, 0),
            rule("multiline", "AcceptsReturn", K.BOOLEAN, False),
            rule("acceptsReturn", "AcceptsReturn", K.BOOLEAN, False),
            rule("acceptsTab", "AcceptsTab", K.BOOLEAN, False),
            rule("readonly", "IsReadOnly", K.BOOLEAN, False),
            rule("textWrapping", "TextWrapping", K.TEXT_WRAPPING, "NoWrap"),
            rule("horizontalScrollBarVisibility", "HorizontalScrollBarVisibility", K.SCROLLBAR_VISIBILITY),
            rule("verticalScrollBarVisibility", "VerticalScrollBarVisibility", K.SCROLLBAR_VISIBILITY),
        ],
        style="AsciiTextBox",
    ),
    _mapping(
        "ui-password-box",
        "TextBox",
        [
            rule("password", "Text"),
            rule("passwordChar", "PasswordChar"),
            rule("revealPassword", "RevealPassword", K.BOOLEAN, False),
            rule("maxLength", "MaxLength", K.INTEGER, 0),
        ],
        style="AsciiPasswordBox",
        fixed_attributes=(("PasswordChar", "●"),),
    ),
    _mapping(
        "ui-masked-textbox",
        "MaskedTextBox",
        [rule("text", "Text"), rule("mask", "Mask"), rule("promptChar", "PromptChar")],
        style="AsciiMaskedTextBox",
    ),
    _mapping(
        "ui-autocomplete-box",
        "AutoCompleteBox",
        [
            rule("text", "Text"),
            rule("watermark", "Watermark"),
            rule("items", "ItemsSource", K.BINDING),
            rule("filterMode", "FilterMode"),
            rule("minimumPrefixLength", "MinimumPrefixLength", K.INTEGER),
            rule("minimumPopulateDelay", "MinimumPopulateDelay"),
        ],
        style="AsciiAutoCompleteBox",
    ),
    _mapping(
        "ui-numeric-updown",
        "NumericUpDown",
        [
            rule("value", "Value", K.DOUBLE),
            rule("minimum", "Minimum", K.DOUBLE),
            rule("maximum", "Maximum", K.DOUBLE),
            rule("increment", "Increment", K.DOUBLE, 1),
            rule("formatString", "FormatString"),
            rule("watermark", "Watermark"),
            rule("showButtonSpinner", "ShowButtonSpinner", K.BOOLEAN, True),
        ],
        style="AsciiNumericUpDown",
    ),
]

_SELECTION = [
    _mapping(
        "ui-checkbox",
        "CheckBox",
        [
            rule("label", "Content"),
            rule("content", "Content"),
            rule("checked", "IsChecked", K.NULLABLE_BOOLEAN),
            rule("isChecked", "IsChecked", K.NULLABLE_BOOLEAN),
            rule("threeState", "IsThreeState", K.BOOLEAN, False),
            rule("isThreeState", "IsThreeState", K.BOOLEAN, False),
        ],
        content="Content",
        style="AsciiCheckBox",
    ),
    _mapping(
        "ui-radio-button",
        "RadioButton",
        [
            rule("content", "Content"),
            rule("isChecked", "IsChecked", K.BOOLEAN),
            rule("groupName", "GroupName"),
        ],
        content="Content",
        style="AsciiRadioButton",
    ),
    _mapping(
        "ui-toggle-switch",
        "ToggleSwitch",
        [
            rule("isOn", "IsChecked", K.BOOLEAN),
            rule("isChecked", "IsChecked", K.BOOLEAN),
            rule("onContent", "OnContent"),
            rule("offContent", "OffContent"),
        ],
        style="AsciiToggleSwitch",
    ),
    _mapping(
        "ui-combobox",
        "ComboBox",
        [
            rule("items", "ItemsSource", K.BINDING),
            rule("selectedItem", "SelectedItem", K.BINDING),
            rule("selectedIndex", "SelectedIndex", K.INTEGER, -1),
            rule("placeholder", "PlaceholderText"),
            rule("placeholderText", "PlaceholderText"),
            rule("isEditable", "IsEditable", K.BOOLEAN, False),
            rule("maxDropDownHeight", "MaxDropDownHeight", K.DIMENSION),
        ],
        content="Items",
        style="AsciiComboBox",
    ),
    _mapping(
        "ui-listbox",
        "ListBox",
        [
            rule("items", "ItemsSource", K.BINDING),
            rule("selectedItem", "SelectedItem", K.BINDING),
            rule("selectedItems", "SelectedItems", K.BINDING),
            rule("selectionMode", "SelectionMode", K.SELECTION_MODE, "Single"),
        ],
        content="Items",
        style="AsciiListBox",
    ),
    _mapping(
        "ui-itemscontrol",
        "ItemsControl",
        [rule("items", "ItemsSource", K.COLLECTION), rule("itemsSource", "ItemsSource", K.COLLECTION)],
        content="Items",
    ),
]

_RANGE_AND_DATE = [
    _mapping(
        "ui-slider",
        "Slider",
        [
            rule("value", "Value", K.DOUBLE, 0),
            rule("minimum", "Minimum", K.DOUBLE, 0),
            rule("maximum", "Maximum", K.DOUBLE, 100),
            rule("smallChange", "SmallChange", K.DOUBLE),
            rule("largeChange", "LargeChange", K.DOUBLE),
            rule("orientation", "Orientation", K.ORIENTATION, "Horizontal"),
            rule("isSnapToTickEnabled", "IsSnapToTickEnabled", K.BOOLEAN, False),
            rule("tickFrequency", "TickFrequency", K.DOUBLE),
            rule("tickPlacement", "TickPlacement"),
        ],
        style="AsciiSlider",
    ),
    _mapping(
        "ui-range-slider",
        "RangeSlider",
        [
            rule("minimum", "Minimum", K.DOUBLE, 0),
            rule("maximum", "Maximum", K.DOUBLE, 100),
            rule("lowerValue", "LowerSelectedValue", K.DOUBLE),
            rule("upperValue", "UpperSelectedValue", K.DOUBLE),
            rule("orientation", "Orientation", K.ORIENTATION, "Horizontal"),
        ],
        style="AsciiRangeSlider",
    ),
    _mapping(
        "ui-datepicker",
        "DatePicker",
        [
            rule("selectedDate", "SelectedDate", K.BINDING),
            rule("displayDate", "DisplayDate", K.BINDING),
            rule("displayDateStart", "DisplayDateStart", K.BINDING),
            rule("displayDateEnd", "DisplayDateEnd", K.BINDING),
            rule("dayFormat", "DayFormat"),
            rule("monthFormat", "MonthFormat"),
            rule("yearFormat", "YearFormat"),
        ],
        style="AsciiDatePicker",
    ),
    _mapping(
        "ui-timepicker",
        "TimePicker",
        [
            rule("selectedTime", "SelectedTime", K.BINDING),
            rule("minuteIncrement", "MinuteIncrement", K.INTEGER, 1),
            rule("clockIdentifier", "ClockIdentifier"),
        ],
        style="AsciiTimePicker",
    ),
    _mapping(
        "ui-calendar",
        "Calendar",
        [
            rule("selectedDate", "SelectedDate", K.BINDING),
            rule("displayMode", "DisplayMode"),
            rule("selectionMode", "SelectionMode"),
            rule("firstDayOfWeek", "FirstDayOfWeek"),
        ],
        style="AsciiCalendar",
    ),
    _mapping("ui-colorpicker", "ColorPicker", [rule("color", "Color", K.COLOR)], style="AsciiColorPicker"),
]

_CONTAINERS = [
    _mapping(
        "ui-window",
        "Window",
        [
            rule("title", "Title"),
            rule("width", "Width", K.DIMENSION),
            rule("height", "Height", K.DIMENSION),
            rule("minWidth", "MinWidth", K.DIMENSION),
            rule("minHeight", "MinHeight", K.DIMENSION),
            rule("maxWidth", "MaxWidth", K.DIMENSION),
            rule("maxHeight", "MaxHeight", K.DIMENSION),
            rule("canResize", "CanResize", K.BOOLEAN, True),
            rule("showInTaskbar", "ShowInTaskbar", K.BOOLEAN, True),
            rule("topmost", "Topmost", K.BOOLEAN, False),
            rule("windowStartupLocation", "WindowStartupLocation"),
            rule("windowState", "WindowState", K.STRING, "Normal"),
            rule("systemDecorations", "SystemDecorations"),
            rule("extendClientAreaToDecorationsHint", "ExtendClientAreaToDecorationsHint", K.BOOLEAN, False),
        ],
        content="Content",
    ),
    _mapping(
        "ui-user-control",
        "UserControl",
        [rule("width", "Width", K.DIMENSION), rule("height", "Height", K.DIMENSION)],
        content="Content",
    ),
    _mapping(
        "ui-border",
        "Border",
        [
            rule("background", "Background", K.BRUSH),
            rule("borderBrush", "BorderBrush", K.BRUSH),
            rule("borderThickness", "BorderThickness", K.THICKNESS, 0),
            rule("cornerRadius", "CornerRadius", K.CORNER_RADIUS, 0),
            rule("padding", "Padding", K.THICKNESS, 0),
        ],
        content="Child",
    ),
    _mapping("ui-panel", "Panel", [rule("background", "Background", K.BRUSH)], content="Children"),
    _mapping(
        "ui-tabcontrol",
        "TabControl",
        [
            rule("tabPlacement", "TabStripPlacement", K.DOCK, "Top"),
            rule("tabStripPlacement", "TabStripPlacement", K.DOCK, "Top"),
            rule("selectedIndex", "SelectedIndex", K.INTEGER),
            rule("selectedItem", "SelectedItem", K.BINDING),
        ],
        content="Items",
        style="AsciiTabControl",
    ),
    _mapping(
        "ui-tabitem",
        "TabItem",
        [rule("header", "Header"), rule("isSelected", "IsSelected", K.BOOLEAN, False)],
        content="Content",
        style="AsciiTabItem",
    ),
    _mapping(
        "ui-expander",
        "Expander",
        [
            rule("header", "Header"),
            rule("expanded", "IsExpanded", K.BOOLEAN, False),
            rule("isExpanded", "IsExpanded", K.BOOLEAN, False),
            rule("direction", "ExpandDirection", K.EXPAND_DIRECTION, "Down"),
            rule("expandDirection", "ExpandDirection", K.EXPAND_DIRECTION, "Down"),
        ],
        content="Content",
        style="AsciiExpander",
    ),
    _mapping(
        "ui-groupbox",
        "HeaderedContentControl",
        [rule("header", "Header")],
        content="Content",
        style="AsciiGroupBox",
    ),
    _mapping(
        "ui-scrollviewer",
        "ScrollViewer",
        [
            rule("horizontalScrollBarVisibility", "HorizontalScrollBarVisibility", K.SCROLLBAR_VISIBILITY),
            rule("verticalScrollBarVisibility", "VerticalScrollBarVisibility", K.SCROLLBAR_VISIBILITY),
            rule("allowAutoHide", "AllowAutoHide", K.BOOLEAN, True),
        ],
        content="Content",
    ),
    _mapping(
        "ui-splitview",
        "SplitView",
        [
            rule("isPaneOpen", "IsPaneOpen", K.BOOLEAN, False),
            rule("displayMode", "DisplayMode"),
            rule("panePlacement", "PanePlacement"),
            rule("openPaneLength", "OpenPaneLength", K.DIMENSION),
            rule("compactPaneLength", "CompactPaneLength", K.DIMENSION),
        ],
        content="Content",
        style="AsciiSplitView",
    ),
    _mapping(
        "ui-flyout",
        "Flyout",
        [rule("placement", "Placement"), rule("showMode", "ShowMode")],
        content="Content",
    ),
    _mapping(
        "ui-popup",
        "Popup",
        [
            rule("isOpen", "IsOpen", K.BOOLEAN, False),
            rule("placement", "Placement"),
            rule("placementTarget", "PlacementTarget", K.BINDING),
            rule("isLightDismissEnabled", "IsLightDismissEnabled", K.BOOLEAN, False),
        ],
        target_namespace=PRIMITIVES_NAMESPACE,
        content="Child",
    ),
    _mapping(
        "ui-viewbox",
        "Viewbox",
        [rule("stretch", "Stretch", K.STRING, "Uniform"), rule("stretchDirection", "StretchDirection")],
        content="Child",
    ),
]

_LAYOUTS = [
    _mapping(
        "layout-grid",
        "Grid",
        [
            rule("rows", "RowDefinitions", K.ROW_DEFINITIONS),
            rule("rowDefinitions", "RowDefinitions", K.ROW_DEFINITIONS),
            rule("columns", "ColumnDefinitions", K.COLUMN_DEFINITIONS),
            rule("columnDefinitions", "ColumnDefinitions", K.COLUMN_DEFINITIONS),
            rule("rowSpacing", "RowSpacing", K.DIMENSION, 0),
            rule("columnSpacing", "ColumnSpacing", K.DIMENSION, 0),
            rule("showGridLines", "ShowGridLines", K.BOOLEAN, False),
        ],
        content="Children",
        attached_properties=("Grid.Row", "Grid.Column", "Grid.RowSpan", "Grid.ColumnSpan"),
    ),
    _mapping(
        "layout-stackpanel",
        "StackPanel",
        [
            rule("orientation", "Orientation", K.ORIENTATION, "Vertical"),
            rule("spacing", "Spacing", K.DIMENSION, 0),
        ],
        content="Children",
    ),
    _mapping(
        "layout-dockpanel",
        "DockPanel",
        [rule("lastChildFill", "LastChildFill", K.BOOLEAN, True)],
        content="Children",
        attached_properties=("DockPanel.Dock",),
    ),
    _mapping(
        "layout-wrappanel",
        "WrapPanel",
        [
            rule("orientation", "Orientation", K.ORIENTATION, "Horizontal"),
            rule("itemWidth", "ItemWidth", K.DIMENSION),
            rule("itemHeight", "ItemHeight", K.DIMENSION),
        ],
        content="Children",
    ),
    _mapping(
        "layout-uniformgrid",
        "UniformGrid",
        [rule("rows", "Rows", K.INTEGER, 0), rule("columns", "Columns", K.INTEGER, 0)],
        content="Children",
    ),
    _mapping(
        "layout-canvas",
        "Canvas",
        [rule("background", "Background", K.BRUSH)],
        content="Children",
        attached_properties=("Canvas.Left", "Canvas.Top", "Canvas.Right", "Canvas.Bottom"),
    ),
    _mapping(
        "layout-relativepanel",
        "RelativePanel",
        [],
        content="Children",
        attached_properties=(
            "RelativePanel.Above",
            "RelativePanel.Below",
            "RelativePanel.LeftOf",
            "RelativePanel.RightOf",
            "RelativePanel.AlignLeftWith",
            "RelativePanel.AlignRightWith",
            "RelativePanel.AlignTopWith",
            "RelativePanel.AlignBottomWith",
            "RelativePanel.AlignHorizontalCenterWith",
            "RelativePanel.AlignVerticalCenterWith",
        ),
    ),
]

_DATA_DISPLAY = [
    _mapping(
        "ui-datagrid",
        "DataGrid",
        [
            rule("items", "ItemsSource", K.BINDING),
            rule("itemsSource", "ItemsSource", K.BINDING),
            rule("autoGenerateColumns", "AutoGenerateColumns", K.BOOLEAN),
            rule("canUserSortColumns", "CanUserSortColumns", K.BOOLEAN, True),
            rule("canUserResizeColumns", "CanUserResizeColumns", K.BOOLEAN),
            rule("canUserReorderColumns", "CanUserReorderColumns", K.BOOLEAN),
            rule("gridLinesVisibility", "GridLinesVisibility"),
            rule("isReadOnly", "IsReadOnly", K.BOOLEAN, False),
            rule("selectionMode", "SelectionMode"),
        ],
        content="Columns",
        style="AsciiDataGrid",
    ),
    _mapping(
        "ui-treeview",
        "TreeView",
        [
            rule("items", "ItemsSource", K.BINDING),
            rule("itemsSource", "ItemsSource", K.BINDING),
            rule("selectionMode", "SelectionMode", K.SELECTION_MODE, "Single"),
            rule("selectedItem", "SelectedItem", K.BINDING),
        ],
        content="Items",
        style="AsciiTreeView",
    ),
    _mapping(
        "ui-treeviewitem",
        "TreeViewItem",
        [
            rule("header", "Header"),
            rule("isExpanded", "IsExpanded", K.BOOLEAN, False),
            rule("isSelected", "IsSelected", K.BOOLEAN, False),
        ],
        content="Items",
        style="AsciiTreeViewItem",
    ),
    _mapping(
        "ui-textblock",
        "TextBlock",
        [
            rule("text", "Text"),
            rule("fontFamily", "FontFamily"),
            rule("fontSize", "FontSize", K.DOUBLE),
            rule("fontWeight", "FontWeight", K.FONT_WEIGHT, "Normal"),
            rule("fontStyle", "FontStyle", K.FONT_STYLE, "Normal"),
            rule("foreground", "Foreground", K.BRUSH),
            rule("textAlignment", "TextAlignment", K.TEXT_ALIGNMENT, "Left"),
            rule("textWrapping", "TextWrapping", K.TEXT_WRAPPING, "NoWrap"),
            rule("textTrimming", "TextTrimming", K.STRING, "None"),
            rule("lineHeight", "LineHeight", K.DOUBLE),
            rule("maxLines", "MaxLines", K.INTEGER, 0),
        ],
        content="Text",
    ),
    _mapping(
        "ui-label",
        "Label",
        [rule("content", "Content"), rule("target", "Target", K.BINDING)],
        content="Content",
    ),
    _mapping(
        "ui-selectable-textblock",
        "SelectableTextBlock",
        [
            rule("text", "Text"),
            rule("fontFamily", "FontFamily"),
            rule("fontSize", "FontSize", K.DOUBLE),
            rule("fontWeight", "FontWeight", K.FONT_WEIGHT, "Normal"),
            rule("selectionBrush", "SelectionBrush", K.BRUSH),
        ],
        content="Text",
    ),
]

_INDICATORS_AND_NAVIGATION = [
    _mapping(
        "ui-progressbar",
        "ProgressBar",
        [
            rule("value", "Value", K.DOUBLE, 0),
            rule("minimum", "Minimum", K.DOUBLE, 0),
            rule("maximum", "Maximum", K.DOUBLE, 100),
            rule("isIndeterminate", "IsIndeterminate", K.BOOLEAN, False),
            rule("orientation", "Orientation", K.ORIENTATION, "Horizontal"),
            rule("showProgressText", "ShowProgressText", K.BOOLEAN, False),
            rule("progressTextFormat", "ProgressTextFormat"),
        ],
        style="AsciiProgressBar",
    ),
    _mapping(
        "ui-tooltip",
        "ToolTip",
        [
            rule("content", "Content"),
            rule("placement", "Placement"),
            rule("showDelay", "ShowDelay", K.INTEGER),
        ],
        content="Content",
    ),
    _mapping("ui-menu", "Menu", [], content="Items", style="AsciiMenu"),
    _mapping(
        "ui-menuitem",
        "MenuItem",
        [
            rule("header", "Header"),
            rule("icon", "Icon"),
            rule("command", "Command", K.COMMAND),
            rule("commandParameter", "CommandParameter", K.BINDING),
            rule("inputGesture", "InputGesture"),
            rule("isEnabled", "IsEnabled", K.BOOLEAN, True),
        ],
        content="Items",
        style="AsciiMenuItem",
    ),
    _mapping("ui-contextmenu", "ContextMenu", [], content="Items", style="AsciiContextMenu"),
    _mapping("ui-separator", "Separator", []),
]

_MEDIA = [
    _mapping(
        "ui-image",
        "Image",
        [
            rule("source", "Source"),
            rule("stretch", "Stretch", K.STRING, "Uniform"),
            rule("stretchDirection", "StretchDirection"),
        ],
    ),
    _mapping(
        "ui-pathicon",
        "PathIcon",
        [rule("data", "Data", K.GEOMETRY), rule("foreground", "Foreground", K.BRUSH)],
    ),
]

AVALONIA_MAPPINGS: Tuple[Mapping, ...] = tuple(
    _BUTTONS
    + _TEXT_INPUTS
    + _SELECTION
    + _RANGE_AND_DATE
    + _CONTAINERS
    + _LAYOUTS
    + _DATA_DISPLAY
    + _INDICATORS_AND_NAVIGATION
    + _MEDIA
)

_BY_SOURCE: Dict[str, Mapping] = {m.source_type: m for m in AVALONIA_MAPPINGS}
_BY_TARGET: Dict[str, Mapping] = {}
for _m in AVALONIA_MAPPINGS:
    # First mapping wins: ui-textbox owns TextBox, not ui-password-box.
    _BY_TARGET.setdefault(_m.target_element, _m)
del _m


def lookup_by_source_type(source_type: str) -> Optional[Mapping]:
    """Find the mapping for a scene component type (e.g. ``ui-button``)."""
    if not source_type:
        return None
    return _BY_SOURCE.get(source_type) or _BY_SOURCE.get(str(source_type).lower())


def lookup_by_target_element(element: str) -> Optional[Mapping]:
    """Find the mapping whose target element is ``element`` (e.g. ``Button``)."""
    if not element:
        return None
    return _BY_TARGET.get(element)


def list_by_category(prefix: str) -> List[Mapping]:
    """All mappings whose source type starts with ``prefix`` (``ui-``, ``layout-``)."""
    return [m for m in AVALONIA_MAPPINGS if m.source_type.startswith(prefix)]


def list_source_types() -> List[str]:
    return [m.source_type for m in AVALONIA_MAPPINGS]


def is_supported(source_type: str) -> bool:
    return lookup_by_source_type(source_type) is not None


def generic_mapping(element: str, namespace: str = DEFAULT_NAMESPACE) -> Mapping:
    """Rule-less mapping for a control known only by name.

    Nodes mapped this way still get the common, layout and attached rules.
    """
    return Mapping(
        source_type=f"generic-{element.lower()}",
        target_element=element,
        target_namespace=namespace,
        content_property="Content",
    )


ATTACHED_OWNERS: Dict[str, Tuple[str, ...]] = {
    m.target_element: m.attached_properties for m in AVALONIA_MAPPINGS if m.attached_properties
}
