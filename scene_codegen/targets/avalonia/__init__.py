"""
Avalonia target.

Exports scenes to Avalonia ``.axaml`` markup with optional code-behind,
view-model, ASCII theme and project boilerplate.
"""

from .aliases import ComponentAlias, list_aliases, property_name, resolve_alias
from .companion import (
    CompanionGenerator,
    generate_companion_source,
    generate_converter,
    generate_view_model_source,
)
from .converters import ConversionError, ConverterKind, ConverterSet, convert, get_converter_set
from .exporter import AvaloniaExporter, create_exporter, export_scene, preview_scene
from .mappings import (
    AVALONIA_MAPPINGS,
    Mapping,
    PropertyRule,
    is_supported,
    list_by_category,
    list_source_types,
    lookup_by_source_type,
    lookup_by_target_element,
)
from .markup import MarkupGenerator, generate_document, generate_node
from .normalizer import TreeNormalizer, normalize
from .project import ProjectGenerator, generate_project_files
from .styles import StyleGenerator, generate_app_styles, generate_control_style, generate_theme

__all__ = [
    "AvaloniaExporter",
    "create_exporter",
    "export_scene",
    "preview_scene",
    # Mapping registry
    "AVALONIA_MAPPINGS",
    "Mapping",
    "PropertyRule",
    "is_supported",
    "list_by_category",
    "list_source_types",
    "lookup_by_source_type",
    "lookup_by_target_element",
    "ComponentAlias",
    "list_aliases",
    "property_name",
    "resolve_alias",
    # Conversion
    "ConversionError",
    "ConverterKind",
    "ConverterSet",
    "convert",
    "get_converter_set",
    # Pipeline stages
    "TreeNormalizer",
    "normalize",
    "MarkupGenerator",
    "generate_document",
    "generate_node",
    "StyleGenerator",
    "generate_theme",
    "generate_control_style",
    "generate_app_styles",
    "CompanionGenerator",
    "generate_companion_source",
    "generate_view_model_source",
    "generate_converter",
    "ProjectGenerator",
    "generate_project_files",
]
