"""
CLI integration for scene export.

Provides the ``export``, ``preview``, ``theme``, ``mappings`` and
``targets`` subcommands.
"""

import argparse
from pathlib import Path
from typing import Any, Dict

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from .core.config import ConfigError, ExportOptions, RootKind, get_config_manager
from .core.generator import ExportError, ExportResult, FileKind
from .logging_config import get_logger
from .registry import RegistryError, get_registry
from .targets.avalonia.mappings import AVALONIA_MAPPINGS, list_by_category
from .targets.avalonia.styles import StyleGenerator
from .utils import SceneLoaderError, load_scene

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

DEFAULT_TARGET = "avalonia"

SYNTAX_LEXERS = {
    FileKind.MARKUP: "xml",
    FileKind.THEME: "xml",
    FileKind.SOURCE: "csharp",
}


def add_subcommands(subparsers) -> None:
    """Register every scene-codegen subcommand."""
    _add_export_parser(subparsers)
    _add_preview_parser(subparsers)
    _add_theme_parser(subparsers)
    _add_mappings_parser(subparsers)
    _add_targets_parser(subparsers)


def _add_option_args(parser: argparse.ArgumentParser):
    """Options shared by commands that build ExportOptions."""
    parser.add_argument("--preset", help="Option preset: document, window, usercontrol or project")
    parser.add_argument("--config", metavar="FILE", help="JSON file with export options")
    parser.add_argument(
        "--target",
        default=DEFAULT_TARGET,
        help=f"Output target (default: {DEFAULT_TARGET})",
    )

    shape = parser.add_argument_group("document shape")
    shape.add_argument("--class-name", help="Class name of the exported view")
    shape.add_argument("--namespace", help="Root namespace of generated code")
    shape.add_argument(
        "--root-kind",
        choices=[kind.value for kind in RootKind],
        help="Root element of the markup document",
    )

    artifacts = parser.add_argument_group("companion files")
    artifacts.add_argument("--code-behind", action="store_true", help="Generate the code-behind class")
    artifacts.add_argument("--view-model", action="store_true", help="Generate a view-model")
    artifacts.add_argument("--theme", action="store_true", help="Generate the ASCII theme")
    artifacts.add_argument("--project", action="store_true", help="Generate project boilerplate")
    mvvm = artifacts.add_mutually_exclusive_group()
    mvvm.add_argument("--reactiveui", action="store_true", help="Use ReactiveUI view-models")
    mvvm.add_argument("--toolkit", action="store_true", help="Use CommunityToolkit.Mvvm view-models")

    formatting = parser.add_argument_group("formatting")
    formatting.add_argument("--indent", type=int, metavar="N", help="Spaces per indent level (1-8)")
    formatting.add_argument("--tabs", action="store_true", help="Indent with tabs")
    formatting.add_argument("--no-comments", action="store_true", help="Omit generated comments")
    formatting.add_argument(
        "--no-design-time", action="store_true", help="Omit design-time namespaces and sizes"
    )


def _add_export_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "export",
        help="Export a scene to Avalonia files",
        description="Export a scene JSON file to markup, companion source and theme files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scene-codegen export scene.json
  scene-codegen export scene.json --preset window --output-dir out/
  scene-codegen export - --code-behind --view-model --toolkit < scene.json
        """.strip(),
    )
    parser.add_argument("scene", help="Scene JSON file, or - for standard input")
    parser.add_argument("--output-dir", "-o", metavar="DIR", help="Write files here (default: print)")
    parser.add_argument("--verbose", action="store_true", help="Show export metadata")
    _add_option_args(parser)
    parser.set_defaults(func=handle_export_command)
    return parser


def _add_preview_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "preview",
        help="Summarize a scene export without generating files",
    )
    parser.add_argument("scene", help="Scene JSON file, or - for standard input")
    _add_option_args(parser)
    parser.set_defaults(func=handle_preview_command)
    return parser


def _add_theme_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("theme", help="Generate the ASCII theme resource dictionary")
    parser.add_argument("--output", "-o", metavar="FILE", help="Write the theme here (default: print)")
    parser.add_argument("--config", metavar="FILE", help="JSON file with export options")
    parser.add_argument("--no-comments", action="store_true", help="Omit section comments")
    parser.set_defaults(func=handle_theme_command)
    return parser


def _add_mappings_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("mappings", help="List component mappings")
    parser.add_argument(
        "--category",
        metavar="PREFIX",
        help="Only mappings whose source type starts with PREFIX (e.g. ui-, layout-)",
    )
    parser.set_defaults(func=handle_mappings_command)
    return parser


def _add_targets_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("targets", help="List supported output targets")
    parser.set_defaults(func=handle_targets_command)
    return parser


def build_options(args: argparse.Namespace) -> ExportOptions:
    """
    Build export options from CLI arguments.

    Merge order: defaults, preset, config file, command-line flags. Flags
    only override when given.

    Args:
        args: Parsed command line arguments

    Returns:
        Frozen export options

    Raises:
        CLIError: If the preset or config file is unusable
    """
    overrides: Dict[str, Any] = {
        "class_name": getattr(args, "class_name", None),
        "namespace": getattr(args, "namespace", None),
        "root_kind": getattr(args, "root_kind", None),
        "indent_size": getattr(args, "indent", None),
    }

    flags = {
        "code_behind": ("include_code_behind", True),
        "view_model": ("include_view_model", True),
        "theme": ("generate_theme", True),
        "project": ("include_project_files", True),
        "reactiveui": ("use_reactive_ui", True),
        "toolkit": ("use_community_toolkit", True),
        "tabs": ("use_tabs", True),
        "no_comments": ("include_comments", False),
        "no_design_time": ("include_design_time_data", False),
    }
    for arg_name, (option, value) in flags.items():
        if getattr(args, arg_name, False):
            overrides[option] = value

    try:
        return get_config_manager().get_options(
            preset=getattr(args, "preset", None),
            overrides=overrides,
            config_file=getattr(args, "config", None),
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def handle_export_command(args: argparse.Namespace) -> int:
    """
    Handle the export subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        source, data = load_scene(args.scene)
        options = build_options(args)
        exporter = get_registry().create_exporter(args.target, options)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task(f"[green]Exporting {source}...", total=None)
            result = exporter.export(data)
            progress.remove_task(task)

        if not result.success:
            console.print(f"[red]✗ Export failed:[/red] {result.error}")
            return 1

        if args.output_dir:
            _write_files(result, Path(args.output_dir))
        else:
            _print_files(result)

        if args.verbose and result.metadata:
            _print_metadata(result)

        _print_diagnostics(result)
        return 0

    except (CLIError, SceneLoaderError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _write_files(result: ExportResult, output_dir: Path):
    table = Table(title="📁 Generated Files", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("File", style="bold green")
    table.add_column("Kind", style="cyan")
    table.add_column("Lines", justify="right", style="dim")

    for name, generated in result.files.items():
        path = output_dir / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(generated.content, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {path}: {e}") from e
        table.add_row(name, generated.kind.value, str(generated.content.count("\n")))

    console.print()
    console.print(table)
    console.print(f"[green]✓[/green] Wrote {len(result.files)} file(s) to [cyan]{output_dir}[/cyan]")


def _print_files(result: ExportResult):
    for name, generated in result.files.items():
        syntax = Syntax(generated.content, SYNTAX_LEXERS[generated.kind], theme="monokai")
        console.print(Panel(syntax, title=f"📄 {name}", border_style="green"))


def _print_metadata(result: ExportResult):
    metadata_table = Table(
        title="📊 Export Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def _print_diagnostics(result: ExportResult):
    if not result.diagnostics:
        return
    console.print("\n[yellow]⚠️  Diagnostics:[/yellow]")
    for warning in result.warnings:
        console.print(f"  [yellow]•[/yellow] {warning}")
    console.print()


def handle_preview_command(args: argparse.Namespace) -> int:
    """Handle the preview subcommand."""
    try:
        _source, data = load_scene(args.scene)
        options = build_options(args)
        exporter = get_registry().create_exporter(args.target, options)
        preview = exporter.preview(data)
    except (CLIError, SceneLoaderError, RegistryError, ExportError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    table = Table(title="🔍 Export Preview", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    table.add_row("Components", str(preview.component_count))
    table.add_row("Supported", str(preview.supported_count))
    unsupported = ", ".join(preview.unsupported_types) or "[dim]none[/dim]"
    table.add_row("Unsupported Types", unsupported)
    table.add_row("Files", str(preview.estimated_file_count))
    table.add_row("Root", preview.root_kind)
    table.add_row("Class", f"{preview.namespace}.{preview.class_name}")

    console.print()
    console.print(table)
    return 0


def handle_theme_command(args: argparse.Namespace) -> int:
    """Handle the theme subcommand."""
    try:
        options = build_options(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    theme = StyleGenerator(options).generate_theme() + "\n"

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(theme, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(f"[green]✓[/green] Theme saved to [cyan]{output_path}[/cyan]")
    else:
        console.print(Syntax(theme, "xml", theme="monokai"))
    return 0


def handle_mappings_command(args: argparse.Namespace) -> int:
    """Handle the mappings subcommand."""
    mappings = list_by_category(args.category) if args.category else list(AVALONIA_MAPPINGS)
    if not mappings:
        console.print(f"[yellow]⚠️ No mappings match '{args.category}'[/yellow]")
        return 1

    table = Table(title="🧩 Component Mappings", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Source Type", style="bold green", no_wrap=True)
    table.add_column("Element", style="cyan")
    table.add_column("Content", style="blue")
    table.add_column("Style Class", style="magenta")
    table.add_column("Rules", justify="right", style="dim")

    for mapping in mappings:
        table.add_row(
            mapping.source_type,
            mapping.target_element,
            mapping.content_property or "[dim]-[/dim]",
            mapping.style_class or "[dim]-[/dim]",
            str(len(mapping.rules)),
        )

    console.print()
    console.print(table)
    console.print(f"[dim]{len(mappings)} mapping(s)[/dim]")
    return 0


def handle_targets_command(args: argparse.Namespace) -> int:
    """Handle the targets subcommand."""
    registry = get_registry()

    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Exporter Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name in registry.list_targets():
        info = registry.get_target_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] scene-codegen export [dim]scene.json[/dim] --target [cyan]TARGET[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0
