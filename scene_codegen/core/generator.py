"""
Base exporter interface shared by all output targets.

Defines the contract every target exporter implements, plus the result,
preview and diagnostic containers handed back to callers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ExportOptions
from .nodes import Scene
from .templates import TemplateEngine, create_template_engine


class ExportError(Exception):
    """Base exception for export failures."""

    pass


class FileKind(str, Enum):
    """Kind of a generated artifact."""

    MARKUP = "markup"
    SOURCE = "source"
    THEME = "theme"


class ExportStage(str, Enum):
    """Per-call state of an export run."""

    CONFIGURING = "configuring"
    NORMALIZING = "normalizing"
    GENERATING = "generating"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


class DiagnosticKind(str, Enum):
    """Recovered, non-fatal problems found during export."""

    UNMAPPED_COMPONENT = "unmapped-component"
    CONVERSION_FAILED = "conversion-failed"
    IGNORED_PROPERTY = "ignored-property"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class Diagnostic:
    """One recovered problem, located by scene path."""

    kind: DiagnosticKind
    message: str
    path: str = ""

    def __str__(self) -> str:
        location = f" at {self.path}" if self.path else ""
        return f"[{self.kind.value}] {self.message}{location}"


@dataclass(frozen=True)
class GeneratedFile:
    """Content of one output file."""

    content: str
    kind: FileKind


class ExportResult:
    """Container for export results and metadata."""

    def __init__(
        self,
        files: Optional[Dict[str, GeneratedFile]] = None,
        primary_filename: Optional[str] = None,
        diagnostics: Optional[List[Diagnostic]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a successful export result.

        Args:
            files: Ordered mapping of filename to generated file
            primary_filename: Name of the main markup file
            diagnostics: Recovered problems
            metadata: Additional information about the run
        """
        self.files: Dict[str, GeneratedFile] = dict(files or {})
        self.primary_filename = primary_filename
        self.diagnostics: List[Diagnostic] = list(diagnostics or [])
        self.metadata: Dict[str, Any] = dict(metadata or {})
        self.success = True
        self.error: Optional[str] = None
        self.exception: Optional[BaseException] = None

    @property
    def primary_content(self) -> str:
        """Content of the primary markup file (empty on failure)."""
        if self.primary_filename and self.primary_filename in self.files:
            return self.files[self.primary_filename].content
        return ""

    @property
    def warnings(self) -> List[str]:
        return [str(diagnostic) for diagnostic in self.diagnostics]

    @classmethod
    def failure(
        cls, message: str, exception: Optional[BaseException] = None
    ) -> "ExportResult":
        """Create a failed export result. Failed results never carry files."""
        result = cls()
        result.success = False
        result.error = message
        result.exception = exception
        return result

    def __repr__(self) -> str:
        if not self.success:
            return f"ExportResult(success=False, error={self.error!r})"
        return f"ExportResult(success=True, files={list(self.files)})"


@dataclass
class ExportPreview:
    """Dry-run summary of an export."""

    component_count: int
    supported_count: int
    unsupported_types: List[str] = field(default_factory=list)
    estimated_file_count: int = 1
    root_kind: str = ""
    namespace: str = ""
    class_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_count": self.component_count,
            "supported_count": self.supported_count,
            "unsupported_types": list(self.unsupported_types),
            "estimated_file_count": self.estimated_file_count,
            "root_kind": self.root_kind,
            "namespace": self.namespace,
            "class_name": self.class_name,
        }


class SceneExporter(ABC):
    """Abstract base class for all scene exporters."""

    def __init__(self, options: Optional[ExportOptions] = None):
        """Initialize exporter with default options for its calls."""
        self.options = options or ExportOptions()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the target framework (e.g. 'avalonia')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the extension of the primary markup file (e.g. '.axaml')."""
        pass

    @abstractmethod
    def export(self, scene: Any, options: Optional[ExportOptions] = None) -> ExportResult:
        """
        Export a scene into a file set.

        Implementations must not raise: failures are reported through
        ``ExportResult.success``.

        Args:
            scene: Raw scene data or parsed :class:`Scene`
            options: Per-call options (defaults to the exporter's options)

        Returns:
            Export result
        """
        pass

    @abstractmethod
    def preview(self, scene: Any, options: Optional[ExportOptions] = None) -> ExportPreview:
        """Summarize an export without generating any text."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this target.

        Returns:
            Path to template directory or None for in-memory templates only
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine for this target, created on first use."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render one of the target's templates."""
        return self.template_engine.render_template(template_name, context)

    def resolve_options(self, options: Optional[ExportOptions]) -> ExportOptions:
        return options if options is not None else self.options

    def format_code(self, code: str) -> str:
        """
        Normalize generated text.

        Strips trailing whitespace and collapses runs of blank lines.

        Args:
            code: Raw generated text

        Returns:
            Formatted text ending with a single newline
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


def count_components(scene: Scene) -> int:
    """Number of nodes in a scene, including nested ones."""
    return sum(1 for _ in scene.walk())
