"""
ASCII theme generation.

The theme is a resource dictionary: palette colors, matching brushes and
a fixed catalog of control styles keyed by style class. It depends only
on the palette and font settings, never on the scene tree.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from ...core.builder import LineBuilder
from ...core.config import ExportOptions
from ...core.templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
THEME_TEMPLATE = "theme.axaml.j2"
STYLE_GROUP_TEMPLATE = "style_group.axaml.j2"

DEFAULT_COLORS: Dict[str, str] = {
    # Base colors
    "background": "#1E1E1E",
    "backgroundAlt": "#252526",
    "foreground": "#D4D4D4",
    "foregroundDim": "#808080",
    # ASCII art colors
    "asciiGreen": "#00FF00",
    "asciiAmber": "#FFB000",
    "asciiCyan": "#00FFFF",
    "asciiWhite": "#FFFFFF",
    "asciiGray": "#888888",
    # Accent colors
    "primary": "#007ACC",
    "secondary": "#68217A",
    "accent": "#00CC6A",
    "warning": "#CE9178",
    "error": "#F14C4C",
    # Border colors
    "border": "#3E3E42",
    "borderHover": "#007ACC",
    "borderFocus": "#007ACC",
    # State colors
    "hover": "#2A2D2E",
    "pressed": "#094771",
    "selected": "#0E639C",
    "disabled": "#5A5A5A",
}

DEFAULT_FONTS: Dict[str, str] = {
    "family": 'Consolas, "Courier New", monospace',
    "sizeSmall": "11",
    "sizeNormal": "13",
    "sizeLarge": "16",
    "sizeHeader": "20",
    "lineHeight": "1.4",
}

# Setter values starting with "$" are read from the font settings.
FONT_FAMILY = "$family"
FONT_SIZE = "$sizeNormal"


def res(name: str) -> str:
    return f"{{DynamicResource {name}}}"


@dataclass(frozen=True)
class StyleRule:
    selector: str
    setters: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class StyleGroup:
    """Titled block of related style rules."""

    title: str
    styles: Tuple[StyleRule, ...]


def _style(selector: str, *setters: Tuple[str, str]) -> StyleRule:
    return StyleRule(selector, tuple(setters))


BUTTON_STYLES = StyleGroup(
    "Button Styles",
    (
        _style(
            "Button.AsciiButton",
            ("Background", res("BackgroundAlt")),
            ("Foreground", res("Foreground")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("Padding", "12,6"),
            ("FontFamily", FONT_FAMILY),
            ("CornerRadius", "2"),
        ),
        _style(
            "Button.AsciiButton:pointerover",
            ("Background", res("Hover")),
            ("BorderBrush", res("BorderHover")),
        ),
        _style("Button.AsciiButton:pressed", ("Background", res("Pressed"))),
        _style(
            "Button.AsciiPrimaryButton",
            ("Background", res("Primary")),
            ("Foreground", res("AsciiWhite")),
            ("BorderThickness", "0"),
            ("Padding", "16,8"),
            ("FontFamily", FONT_FAMILY),
            ("FontWeight", "SemiBold"),
            ("CornerRadius", "2"),
        ),
    ),
)

TEXTBOX_STYLES = StyleGroup(
    "TextBox Styles",
    (
        _style(
            "TextBox.AsciiTextBox",
            ("Background", res("Background")),
            ("Foreground", res("Foreground")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("Padding", "8,4"),
            ("FontFamily", FONT_FAMILY),
            ("FontSize", FONT_SIZE),
            ("CornerRadius", "2"),
            ("CaretBrush", res("AsciiGreen")),
            ("SelectionBrush", res("Selected")),
        ),
        _style("TextBox.AsciiTextBox:focus", ("BorderBrush", res("BorderFocus"))),
        _style(
            "TextBox.AsciiCodeInput",
            ("Background", res("Background")),
            ("Foreground", res("AsciiGreen")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("Padding", "12,8"),
            ("FontFamily", FONT_FAMILY),
            ("FontSize", FONT_SIZE),
            ("AcceptsReturn", "True"),
            ("TextWrapping", "NoWrap"),
        ),
    ),
)

COMBOBOX_STYLES = StyleGroup(
    "ComboBox Styles",
    (
        _style(
            "ComboBox.AsciiComboBox",
            ("Background", res("BackgroundAlt")),
            ("Foreground", res("Foreground")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("Padding", "8,4"),
            ("FontFamily", FONT_FAMILY),
            ("CornerRadius", "2"),
        ),
        _style("ComboBox.AsciiComboBox:pointerover", ("BorderBrush", res("BorderHover"))),
    ),
)

LISTBOX_STYLES = StyleGroup(
    "ListBox Styles",
    (
        _style(
            "ListBox.AsciiListBox",
            ("Background", res("Background")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("Padding", "2"),
            ("CornerRadius", "2"),
        ),
        _style(
            "ListBoxItem.AsciiListBoxItem",
            ("Padding", "8,4"),
            ("FontFamily", FONT_FAMILY),
            ("Foreground", res("Foreground")),
        ),
        _style("ListBoxItem.AsciiListBoxItem:pointerover", ("Background", res("Hover"))),
        _style("ListBoxItem.AsciiListBoxItem:selected", ("Background", res("Selected"))),
    ),
)

PANEL_STYLES = StyleGroup(
    "Panel Styles",
    (
        _style(
            "Border.AsciiPanel",
            ("Background", res("BackgroundAlt")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("CornerRadius", "4"),
            ("Padding", "12"),
        ),
        _style(
            "Border.AsciiHeaderPanel",
            ("Background", res("Primary")),
            ("Padding", "16,8"),
            ("CornerRadius", "4,4,0,0"),
        ),
        _style(
            "Border.AsciiCard",
            ("Background", res("BackgroundAlt")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("CornerRadius", "4"),
            ("Padding", "16"),
            ("BoxShadow", "0 2 8 0 #40000000"),
        ),
    ),
)

TAB_STYLES = StyleGroup(
    "TabControl Styles",
    (
        _style(
            "TabControl.AsciiTabControl",
            ("Background", res("Background")),
            ("Padding", "0"),
        ),
        _style(
            "TabItem.AsciiTabItem",
            ("Background", "Transparent"),
            ("Foreground", res("ForegroundDim")),
            ("Padding", "16,8"),
            ("FontFamily", FONT_FAMILY),
        ),
        _style(
            "TabItem.AsciiTabItem:pointerover",
            ("Background", res("Hover")),
            ("Foreground", res("Foreground")),
        ),
        _style(
            "TabItem.AsciiTabItem:selected",
            ("Background", res("BackgroundAlt")),
            ("Foreground", res("Foreground")),
            ("BorderBrush", res("Primary")),
            ("BorderThickness", "0,0,0,2"),
        ),
    ),
)

ASCII_ART_STYLES = StyleGroup(
    "ASCII Art Display Styles",
    (
        _style(
            "Border.AsciiArtContainer",
            ("Background", res("Background")),
            ("BorderBrush", res("Border")),
            ("BorderThickness", "1"),
            ("CornerRadius", "2"),
            ("Padding", "8"),
        ),
        _style(
            "TextBlock.AsciiArt",
            ("FontFamily", FONT_FAMILY),
            ("FontSize", FONT_SIZE),
            ("Foreground", res("AsciiGreen")),
            ("TextWrapping", "NoWrap"),
        ),
        _style(
            "Canvas.AsciiCanvas",
            ("Background", res("Background")),
            ("ClipToBounds", "True"),
        ),
    ),
)

THEME_CATALOG: Tuple[StyleGroup, ...] = (
    BUTTON_STYLES,
    TEXTBOX_STYLES,
    COMBOBOX_STYLES,
    LISTBOX_STYLES,
    PANEL_STYLES,
    TAB_STYLES,
    ASCII_ART_STYLES,
)

CONTROL_STYLES: Dict[str, StyleGroup] = {
    "Button": BUTTON_STYLES,
    "TextBox": TEXTBOX_STYLES,
    "ComboBox": COMBOBOX_STYLES,
    "ListBox": LISTBOX_STYLES,
    "TabControl": TAB_STYLES,
    "Border": PANEL_STYLES,
}


def resource_name(key: str) -> str:
    """``backgroundAlt`` -> ``BackgroundAlt``."""
    return key[:1].upper() + key[1:]


class StyleGenerator:
    """Renders the theme resource dictionary and single control styles."""

    def __init__(
        self,
        options: Optional[ExportOptions] = None,
        colors: Optional[Mapping[str, str]] = None,
        fonts: Optional[Mapping[str, str]] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """
        Initialize style generator.

        Args:
            options: Export options (indentation and comments)
            colors: Palette overrides merged onto :data:`DEFAULT_COLORS`
            fonts: Font overrides merged onto :data:`DEFAULT_FONTS`
            template_engine: Engine with the Avalonia templates loaded
        """
        self.options = options or ExportOptions()
        self.colors: Dict[str, str] = {**DEFAULT_COLORS, **{k: str(v) for k, v in (colors or {}).items()}}
        self.fonts: Dict[str, str] = {**DEFAULT_FONTS, **{k: str(v) for k, v in (fonts or {}).items()}}
        self.template_engine = template_engine or create_template_engine(TEMPLATE_DIR)

    @property
    def unit(self) -> str:
        return self.options.indent_unit

    def _resolve(self, group: StyleGroup) -> StyleGroup:
        """Substitute font placeholders in setter values."""
        styles = []
        for style in group.styles:
            setters = tuple(
                (prop, self.fonts.get(value[1:], value) if value.startswith("$") else value)
                for prop, value in style.setters
            )
            styles.append(StyleRule(style.selector, setters))
        return StyleGroup(group.title, tuple(styles))

    def generate_theme(self) -> str:
        """
        Generate the complete theme resource dictionary.

        Returns:
            Theme ``.axaml`` content
        """
        context = {
            "unit": self.unit,
            "pad": self.unit,
            "comments": self.options.include_comments,
            "colors": [(resource_name(key), color) for key, color in self.colors.items()],
            "groups": [self._resolve(group) for group in THEME_CATALOG],
        }
        logger.debug(f"Rendering theme with {len(self.colors)} colors")
        return self.template_engine.render_template(THEME_TEMPLATE, context)

    def generate_control_style(self, control_type: str) -> str:
        """
        Generate the style block for one control type.

        Unknown control types get a minimal style carrying only the
        font family.
        """
        group = CONTROL_STYLES.get(control_type)
        if group is None:
            group = StyleGroup(
                f"{control_type} Styles",
                (_style(f"{control_type}.Ascii{control_type}", ("FontFamily", FONT_FAMILY)),),
            )

        context = {
            "unit": self.unit,
            "pad": "",
            "comments": self.options.include_comments,
            "group": self._resolve(group),
        }
        return self.template_engine.render_template(STYLE_GROUP_TEMPLATE, context).rstrip("\n")

    def generate_app_styles(self, namespace: Optional[str] = None, include_theme: bool = True) -> str:
        """``<Application.Styles>`` block including Fluent and, optionally, the theme file."""
        namespace = namespace or self.options.namespace
        builder = LineBuilder(self.options.indent_size, self.options.use_tabs)
        builder.open("<Application.Styles>")
        builder.line("<FluentTheme />")
        if include_theme:
            builder.line(f'<StyleInclude Source="avares://{namespace}/{self.options.theme_filename}" />')
        builder.close("</Application.Styles>")
        return builder.render()

    def palette_brushes(self) -> Dict[str, Dict[str, str]]:
        """Palette as document brush resources keyed by resource name."""
        return {resource_name(key): {"type": "brush", "color": color} for key, color in self.colors.items()}

    def style_classes(self) -> List[str]:
        """Every style class defined by the theme catalog, in order."""
        classes: List[str] = []
        for group in THEME_CATALOG:
            for style in group.styles:
                name = style.selector.split(".", 1)[1].split(":", 1)[0]
                if name not in classes:
                    classes.append(name)
        return classes


def generate_theme(
    colors: Optional[Mapping[str, str]] = None,
    fonts: Optional[Mapping[str, str]] = None,
    options: Optional[ExportOptions] = None,
) -> str:
    return StyleGenerator(options, colors, fonts).generate_theme()


def generate_control_style(control_type: str, options: Optional[ExportOptions] = None) -> str:
    return StyleGenerator(options).generate_control_style(control_type)


def generate_app_styles(namespace: str, options: Optional[ExportOptions] = None) -> str:
    return StyleGenerator(options).generate_app_styles(namespace)
