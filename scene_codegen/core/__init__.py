"""
Core export infrastructure.

Target-independent machinery: options, scene model, line builder,
templates, naming and the exporter base classes.
"""

from .builder import LineBuilder
from .config import (
    ConfigError,
    ConfigManager,
    ExportOptions,
    RootKind,
    get_config_manager,
    load_options,
    with_preset,
)
from .generator import (
    Diagnostic,
    DiagnosticKind,
    ExportError,
    ExportPreview,
    ExportResult,
    ExportStage,
    FileKind,
    GeneratedFile,
    SceneExporter,
)
from .nodes import CanonicalNode, MarkupFragment, Scene, SceneError, SceneNode, parse_scene
from .templates import TemplateEngine, TemplateError

__all__ = [
    "LineBuilder",
    "ConfigError",
    "ConfigManager",
    "ExportOptions",
    "RootKind",
    "get_config_manager",
    "load_options",
    "with_preset",
    "Diagnostic",
    "DiagnosticKind",
    "ExportError",
    "ExportPreview",
    "ExportResult",
    "ExportStage",
    "FileKind",
    "GeneratedFile",
    "SceneExporter",
    "CanonicalNode",
    "MarkupFragment",
    "Scene",
    "SceneError",
    "SceneNode",
    "parse_scene",
    "TemplateEngine",
    "TemplateError",
]
