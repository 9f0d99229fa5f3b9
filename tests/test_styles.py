"""Tests for the ASCII theme and control styles."""

from scene_codegen.core.config import ExportOptions
from scene_codegen.targets.avalonia.styles import (
    DEFAULT_COLORS,
    StyleGenerator,
    generate_app_styles,
    generate_control_style,
    generate_theme,
    resource_name,
)


class TestTheme:
    """Tests for the theme resource dictionary."""

    def test_theme_header(self):
        """Test the theme is a resource dictionary."""
        lines = generate_theme().splitlines()
        assert lines[0] == '<?xml version="1.0" encoding="utf-8"?>'
        assert lines[1] == "<ResourceDictionary"
        assert lines[-1] == "</ResourceDictionary>"

    def test_palette_colors_and_brushes(self):
        """Test each palette entry yields a color and a brush."""
        theme = generate_theme()
        assert '    <Color x:Key="BackgroundColor">#1E1E1E</Color>' in theme.splitlines()
        assert '    <SolidColorBrush x:Key="Background" Color="#1E1E1E" />' in theme.splitlines()
        assert theme.count("<Color x:Key=") == len(DEFAULT_COLORS)
        assert theme.count("<SolidColorBrush x:Key=") == len(DEFAULT_COLORS)

    def test_style_catalog(self):
        """Test control style groups are rendered with indented setters."""
        lines = generate_theme().splitlines()
        assert "    <!-- Button Styles -->" in lines
        assert '    <Style Selector="Button.AsciiButton">' in lines
        assert '        <Setter Property="Background" Value="{DynamicResource BackgroundAlt}" />' in lines
        assert '    <Style Selector="TextBlock.AsciiArt">' in lines

    def test_palette_overrides(self):
        """Test palette overrides replace and extend the defaults."""
        theme = generate_theme(colors={"background": "#000000", "brand": "#123456"})
        assert '<Color x:Key="BackgroundColor">#000000</Color>' in theme
        assert '<SolidColorBrush x:Key="Brand" Color="#123456" />' in theme

    def test_font_overrides(self):
        """Test font settings feed FontFamily setters."""
        theme = generate_theme(fonts={"family": "Iosevka"})
        assert '<Setter Property="FontFamily" Value="Iosevka" />' in theme

    def test_comments_can_be_disabled(self):
        """Test theme comments follow include_comments."""
        theme = generate_theme(options=ExportOptions(include_comments=False))
        assert "<!--" not in theme

    def test_theme_is_deterministic(self):
        """Test the theme does not vary between calls."""
        assert generate_theme() == generate_theme()


class TestControlStyles:
    """Tests for single control styles."""

    def test_known_control(self):
        """Test a known control renders its catalog group."""
        style = generate_control_style("Button")
        lines = style.splitlines()
        assert lines[0] == "<!-- Button Styles -->"
        assert lines[1] == '<Style Selector="Button.AsciiButton">'
        assert '<Style Selector="Button.AsciiButton:pointerover">' in lines
        assert not style.endswith("\n")

    def test_unknown_control(self):
        """Test unknown controls get a font-only style."""
        lines = generate_control_style("Slider").splitlines()
        assert lines[0] == "<!-- Slider Styles -->"
        assert lines[1] == '<Style Selector="Slider.AsciiSlider">'
        assert len([line for line in lines if "<Setter" in line]) == 1
        assert 'Property="FontFamily"' in lines[2]

    def test_tab_indentation(self):
        """Test setters use the configured indent unit."""
        style = generate_control_style("Button", ExportOptions(use_tabs=True))
        assert '\t<Setter Property="Padding" Value="12,6" />' in style.splitlines()


class TestAppStyles:
    """Tests for application-level style includes."""

    def test_app_styles(self):
        """Test the application styles block."""
        assert generate_app_styles("MyApp") == (
            "<Application.Styles>\n"
            "    <FluentTheme />\n"
            '    <StyleInclude Source="avares://MyApp/AsciiTheme.axaml" />\n'
            "</Application.Styles>"
        )

    def test_app_styles_without_theme(self):
        """Test the theme include can be left out."""
        block = StyleGenerator().generate_app_styles("MyApp", include_theme=False)
        assert "StyleInclude" not in block


class TestStyleData:
    """Tests for style data used by the exporter."""

    def test_style_classes(self):
        """Test style classes are unique and ordered by catalog."""
        classes = StyleGenerator().style_classes()
        assert classes[0] == "AsciiButton"
        assert len(classes) == len(set(classes))
        assert "AsciiArt" in classes

    def test_palette_brushes(self):
        """Test the palette as brush resources."""
        brushes = StyleGenerator().palette_brushes()
        assert brushes["Background"] == {"type": "brush", "color": "#1E1E1E"}
        assert len(brushes) == len(DEFAULT_COLORS)

    def test_resource_name(self):
        """Test palette keys become resource names."""
        assert resource_name("backgroundAlt") == "BackgroundAlt"
