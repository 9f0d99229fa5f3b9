"""
Avalonia desktop project boilerplate.

Renders the fixed files a buildable project needs around an exported
view: the project manifest, entry point, application class and the
view-model base class.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ...core.config import ExportOptions, RootKind
from ...core.generator import FileKind
from ...core.templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger
from .fragments import format_number
from .styles import StyleGenerator

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

TARGET_FRAMEWORK = "net8.0"
AVALONIA_VERSION = "11.1.0"
COMMUNITY_TOOLKIT_VERSION = "8.2.2"

# (filename pattern, template) in output order.
PROJECT_FILES: Tuple[Tuple[str, str], ...] = (
    ("{namespace}.csproj", "csproj.j2"),
    ("Program.cs", "Program.cs.j2"),
    ("App.axaml", "App.axaml.j2"),
    ("App.axaml.cs", "App.axaml.cs.j2"),
    ("ViewModels/ViewModelBase.cs", "ViewModelBase.cs.j2"),
)

TEMPLATE_INDENT = 4


def package_references(options: ExportOptions) -> List[Tuple[str, str]]:
    """NuGet packages for the project, MVVM package last."""
    packages = [
        ("Avalonia", AVALONIA_VERSION),
        ("Avalonia.Desktop", AVALONIA_VERSION),
        ("Avalonia.Themes.Fluent", AVALONIA_VERSION),
        ("Avalonia.Fonts.Inter", AVALONIA_VERSION),
    ]
    if options.mvvm_idiom == "reactiveui":
        packages.append(("Avalonia.ReactiveUI", AVALONIA_VERSION))
    elif options.mvvm_idiom == "toolkit":
        packages.append(("CommunityToolkit.Mvvm", COMMUNITY_TOOLKIT_VERSION))
    return packages


def reindent(text: str, unit: str, size: int = TEMPLATE_INDENT) -> str:
    """Replace each leading group of ``size`` spaces with ``unit``."""
    if unit == " " * size:
        return text
    result = []
    for line in text.split("\n"):
        stripped = line.lstrip(" ")
        levels, rest = divmod(len(line) - len(stripped), size)
        result.append(unit * levels + " " * rest + stripped)
    return "\n".join(result)


def _csharp_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class ProjectGenerator:
    """Renders project boilerplate from jinja2 templates."""

    def __init__(
        self,
        options: Optional[ExportOptions] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.options = options or ExportOptions()
        self.template_engine = template_engine or create_template_engine(TEMPLATE_DIR)

    def _context(self, options: ExportOptions, title: Optional[str], width: float, height: float) -> Dict:
        app_styles = StyleGenerator(options.merged(indent_size=TEMPLATE_INDENT, use_tabs=False))
        return {
            "namespace": options.namespace,
            "class_name": options.class_name,
            "idiom": options.mvvm_idiom,
            "is_window": options.root_kind == RootKind.WINDOW,
            "title": _csharp_string(title or options.class_name),
            "width": format_number(width),
            "height": format_number(height),
            "target_framework": TARGET_FRAMEWORK,
            "packages": package_references(options),
            "styles": app_styles.generate_app_styles(options.namespace, include_theme=options.generate_theme),
        }

    def generate_project_files(
        self,
        options: Optional[ExportOptions] = None,
        title: Optional[str] = None,
        width: float = 800,
        height: float = 600,
    ) -> Dict[str, str]:
        """
        Render every project file.

        Args:
            options: Export options (namespace, class name, MVVM idiom)
            title: Window title used when hosting a non-window view
            width: Hosting window width
            height: Hosting window height

        Returns:
            Ordered mapping of relative filename to content
        """
        options = options or self.options
        context = self._context(options, title, width, height)

        files: Dict[str, str] = {}
        for pattern, template in PROJECT_FILES:
            content = self.template_engine.render_template(template, context)
            if template.endswith(".cs.j2"):
                content = reindent(content, options.indent_unit)
            files[pattern.format(namespace=options.namespace)] = content

        logger.debug(f"Rendered {len(files)} project files for {options.namespace}")
        return files


def project_file_kind(filename: str) -> FileKind:
    """Kind of a generated project file."""
    return FileKind.MARKUP if filename.endswith(".axaml") else FileKind.SOURCE


def generate_project_files(
    options: Optional[ExportOptions] = None,
    title: Optional[str] = None,
    width: float = 800,
    height: float = 600,
) -> Dict[str, str]:
    return ProjectGenerator(options).generate_project_files(options, title, width, height)
