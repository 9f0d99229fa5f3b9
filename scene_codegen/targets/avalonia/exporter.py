"""
Avalonia export orchestrator.

Runs one export as a fixed sequence of stages (configure, normalize,
generate, assemble) and turns any unexpected failure into an
unsuccessful :class:`ExportResult`. The exporter keeps only default
options and stateless generators, so one instance can serve any number
of sequential calls.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.config import ExportOptions, get_config_manager, with_preset
from ...core.generator import (
    Diagnostic,
    DiagnosticKind,
    ExportError,
    ExportPreview,
    ExportResult,
    ExportStage,
    FileKind,
    GeneratedFile,
    SceneExporter,
    count_components,
)
from ...core.nodes import Scene, SceneError, SceneNode, parse_scene
from ...logging_config import get_logger
from .companion import CompanionGenerator
from .converters import get_converter_set
from .mappings import Mapping, list_source_types
from .markup import DocumentInfo, MarkupGenerator
from .normalizer import TreeNormalizer, resolve_mapping
from .project import PROJECT_FILES, ProjectGenerator, project_file_kind
from .styles import StyleGenerator

logger = get_logger(__name__)


class AvaloniaExporter(SceneExporter):
    """Exports scenes to Avalonia markup, companion C# and theme files."""

    def __init__(self, options: Optional[ExportOptions] = None):
        """
        Initialize exporter.

        Args:
            options: Default options for calls that pass none
        """
        super().__init__(options)
        self.normalizer = TreeNormalizer(get_converter_set())
        self.markup_generator = MarkupGenerator(self.options)
        self.companion_generator = CompanionGenerator(self.options)

    @property
    def target_name(self) -> str:
        return "avalonia"

    @property
    def file_extension(self) -> str:
        return ".axaml"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Avalonia templates directory."""
        return Path(__file__).parent / "templates"

    # Export

    def export(self, scene: Any, options: Optional[ExportOptions] = None) -> ExportResult:
        """
        Export a scene.

        Args:
            scene: Raw scene data or parsed :class:`Scene`
            options: Per-call options (defaults to the exporter's options)

        Returns:
            Export result; ``success`` is False on structural failure
        """
        stage = ExportStage.CONFIGURING
        try:
            options = self.resolve_options(options)
            diagnostics = self._configuration_diagnostics(options)
            options = options.sanitized()

            stage = self._enter(ExportStage.NORMALIZING)
            parsed = parse_scene(scene, options.max_depth)
            roots = self.normalizer.normalize(parsed, options, diagnostics)

            stage = self._enter(ExportStage.GENERATING)
            files = self._generate_files(parsed, roots, options)

            stage = self._enter(ExportStage.ASSEMBLING)
            if options.include_project_files:
                files.update(self._project_files(parsed, options))
            files = {name: GeneratedFile(self.format_code(f.content), f.kind) for name, f in files.items()}

            stage = self._enter(ExportStage.DONE)
        except Exception as e:
            logger.error(f"Export failed during {stage.value}", exc_info=True)
            result = ExportResult.failure(f"Export failed during {stage.value}: {e}", e)
            result.metadata["stage"] = ExportStage.FAILED.value
            return result

        primary = f"{options.class_name}{self.file_extension}"
        logger.info(f"Exported {len(files)} file(s), {len(diagnostics)} diagnostic(s)")
        return ExportResult(
            files=files,
            primary_filename=primary,
            diagnostics=diagnostics,
            metadata={
                "target": self.target_name,
                "stage": stage.value,
                "root_kind": options.root_kind.value,
                "namespace": options.namespace,
                "class_name": options.class_name,
                "component_count": count_components(parsed),
                "file_count": len(files),
            },
        )

    def _enter(self, stage: ExportStage) -> ExportStage:
        logger.debug(f"Export stage: {stage.value}")
        return stage

    def _configuration_diagnostics(self, options: ExportOptions) -> List[Diagnostic]:
        return [
            Diagnostic(DiagnosticKind.CONFIGURATION, warning)
            for warning in get_config_manager().validate_options(options)
        ]

    def _document_info(self, scene: Scene, styles: StyleGenerator, options: ExportOptions) -> DocumentInfo:
        info = DocumentInfo.from_scene(scene)
        if options.include_styles and not options.generate_theme:
            info.resources = {**styles.palette_brushes(), **info.resources}
        return info

    def _generate_files(self, scene: Scene, roots, options: ExportOptions) -> Dict[str, GeneratedFile]:
        class_name = options.class_name
        styles = StyleGenerator(options, scene.palette, scene.fonts, self.template_engine)
        files: Dict[str, GeneratedFile] = {}

        markup = self.markup_generator.generate_document(
            roots, options.root_kind, options, self._document_info(scene, styles, options)
        )
        files[f"{class_name}{self.file_extension}"] = GeneratedFile(markup, FileKind.MARKUP)

        if options.include_code_behind:
            source = self.companion_generator.generate_companion_source(
                roots, class_name, options.root_kind, options.include_view_model, options
            )
            files[f"{class_name}{self.file_extension}.cs"] = GeneratedFile(source, FileKind.SOURCE)

        if options.include_view_model:
            source = self.companion_generator.generate_view_model_source(roots, class_name, options)
            files[f"{class_name}ViewModel.cs"] = GeneratedFile(source, FileKind.SOURCE)

        if options.generate_theme:
            files[options.theme_filename] = GeneratedFile(styles.generate_theme(), FileKind.THEME)

        return files

    def _project_files(self, scene: Scene, options: ExportOptions) -> Dict[str, GeneratedFile]:
        project = ProjectGenerator(options, self.template_engine)
        rendered = project.generate_project_files(options, scene.title, scene.width, scene.height)
        return {name: GeneratedFile(content, project_file_kind(name)) for name, content in rendered.items()}

    # Preview

    def preview(self, scene: Any, options: Optional[ExportOptions] = None) -> ExportPreview:
        """
        Summarize what :meth:`export` would produce.

        Raises:
            ExportError: If the scene is not traversable
        """
        options = self.resolve_options(options).sanitized()
        try:
            parsed = parse_scene(scene, options.max_depth)
        except (SceneError, RecursionError) as e:
            raise ExportError(f"Preview failed: {e}") from e

        supported = 0
        unsupported: List[str] = []
        for node in parsed.walk():
            mapping, _alias = resolve_mapping(node)
            if mapping is not None:
                supported += 1
            elif node.type not in unsupported:
                unsupported.append(node.type)

        return ExportPreview(
            component_count=count_components(parsed),
            supported_count=supported,
            unsupported_types=unsupported,
            estimated_file_count=self.estimate_file_count(options),
            root_kind=options.root_kind.value,
            namespace=options.namespace,
            class_name=options.class_name,
        )

    def estimate_file_count(self, options: ExportOptions) -> int:
        count = 1
        count += int(options.include_code_behind)
        count += int(options.include_view_model)
        count += int(options.generate_theme)
        if options.include_project_files:
            count += len(PROJECT_FILES)
        return count

    # Mapping queries

    def supported_components(self) -> List[str]:
        """Every scene component type with a registered mapping."""
        return list_source_types()

    def get_mapping(self, component_type: str) -> Optional[Mapping]:
        """Mapping used for a component type, resolving generic names."""
        mapping, _alias = resolve_mapping(SceneNode(type=component_type))
        return mapping

    def is_component_supported(self, component_type: str) -> bool:
        return self.get_mapping(component_type) is not None


def create_exporter(preset: Optional[str] = None, **overrides: Any) -> AvaloniaExporter:
    """
    Create an exporter with preset defaults.

    Args:
        preset: ``document``, ``window``, ``usercontrol`` or ``project``
        **overrides: Option values applied on top of the preset

    Returns:
        Configured exporter
    """
    if preset:
        return AvaloniaExporter(with_preset(preset, **overrides))
    return AvaloniaExporter(ExportOptions.from_dict(overrides))


def export_scene(
    scene: Any,
    options: Optional[ExportOptions] = None,
    preset: Optional[str] = None,
    **overrides: Any,
) -> ExportResult:
    """Export a scene with a one-off exporter."""
    if options is not None:
        return AvaloniaExporter(options.merged(**overrides)).export(scene)
    return create_exporter(preset, **overrides).export(scene)


def preview_scene(
    scene: Any,
    options: Optional[ExportOptions] = None,
    preset: Optional[str] = None,
    **overrides: Any,
) -> ExportPreview:
    """Preview a scene export with a one-off exporter."""
    if options is not None:
        return AvaloniaExporter(options.merged(**overrides)).preview(scene)
    return create_exporter(preset, **overrides).preview(scene)
