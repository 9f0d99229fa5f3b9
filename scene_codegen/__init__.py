"""
scene_codegen: compile design-tool scenes into UI framework source.

Turns a scene tree authored in an ASCII UI editor into Avalonia markup,
C# code-behind and view-models, an ASCII theme and project boilerplate.

Example:
    >>> from scene_codegen import export_scene
    >>> result = export_scene([{"type": "button", "properties": {"text": "OK"}}])
    >>> result.primary_filename
    'ExportedView.axaml'
"""

__version__ = "0.1.0"

from .core import (
    ConfigError,
    Diagnostic,
    DiagnosticKind,
    ExportError,
    ExportOptions,
    ExportPreview,
    ExportResult,
    FileKind,
    GeneratedFile,
    RootKind,
    SceneError,
    SceneExporter,
    load_options,
    with_preset,
)
from .registry import (
    RegistryError,
    TargetRegistry,
    get_exporter,
    get_registry,
    is_target_supported,
    list_supported_targets,
)
from .targets.avalonia import AvaloniaExporter, create_exporter, export_scene, preview_scene
from .utils import SceneLoaderError, load_scene

__all__ = [
    "__version__",
    # Options
    "ExportOptions",
    "RootKind",
    "ConfigError",
    "load_options",
    "with_preset",
    # Results
    "Diagnostic",
    "DiagnosticKind",
    "ExportError",
    "ExportPreview",
    "ExportResult",
    "FileKind",
    "GeneratedFile",
    "SceneError",
    "SceneExporter",
    # Targets
    "AvaloniaExporter",
    "create_exporter",
    "export_scene",
    "preview_scene",
    "RegistryError",
    "TargetRegistry",
    "get_exporter",
    "get_registry",
    "is_target_supported",
    "list_supported_targets",
    # Loading
    "SceneLoaderError",
    "load_scene",
]
