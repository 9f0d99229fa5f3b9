"""
Target registry for managing available scene exporters.

Provides registration by name and alias, and instantiation of exporters
with options built from presets, mappings or JSON files.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from .core.config import ConfigError, ExportOptions, load_options
from .core.generator import SceneExporter
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


OptionsSource = Union[ExportOptions, Mapping[str, Any], str, Path]


class TargetRegistry:
    """Registry of output targets."""

    def __init__(self):
        """Initialize empty registry."""
        self._exporters: Dict[str, Type[SceneExporter]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        exporter_class: Type[SceneExporter],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an exporter for a target.

        Args:
            name: Primary target name (e.g. 'avalonia')
            exporter_class: Class implementing SceneExporter
            aliases: Alternative names for this target
            replace: Replace an existing registration instead of skipping it

        Raises:
            RegistryError: If the class is invalid or an alias conflicts
        """
        if not isinstance(exporter_class, type) or not issubclass(exporter_class, SceneExporter):
            raise RegistryError("Exporter class must inherit from SceneExporter")

        key = name.lower()
        if key in self._exporters and not replace:
            logger.debug(f"Target '{key}' already registered")
            return

        self._exporters[key] = exporter_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == key:
                continue

            if not replace:
                if alias_key in self._exporters:
                    raise RegistryError(f"Alias '{alias}' conflicts with existing target")
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = key

    def unregister(self, name: str):
        """Remove a target and every alias pointing to it."""
        key = name.lower()
        self._exporters.pop(key, None)
        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def resolve_name(self, name: str) -> str:
        """Primary name for a target name or alias."""
        key = name.lower()
        if key in self._exporters:
            return key
        if key in self._aliases:
            return self._aliases[key]
        raise RegistryError(
            f"No exporter registered for target: {name}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def get_exporter_class(self, name: str) -> Type[SceneExporter]:
        """
        Get the exporter class for a target.

        Args:
            name: Target name or alias

        Returns:
            Exporter class

        Raises:
            RegistryError: If the target is unknown
        """
        return self._exporters[self.resolve_name(name)]

    def create_exporter(self, name: str, options: Optional[OptionsSource] = None) -> SceneExporter:
        """
        Create an exporter instance.

        Args:
            name: Target name or alias
            options: Options, option mapping or path to a JSON options file

        Returns:
            Configured exporter

        Raises:
            RegistryError: If the target is unknown or the options are unusable
        """
        exporter_class = self.get_exporter_class(name)

        try:
            if isinstance(options, ExportOptions):
                final_options = options
            elif isinstance(options, (str, Path)):
                final_options = load_options(config_file=options)
            elif isinstance(options, Mapping):
                final_options = ExportOptions.from_dict(options)
            elif options is None:
                final_options = ExportOptions()
            else:
                raise RegistryError(f"Invalid options type: {type(options).__name__}")
        except ConfigError as e:
            raise RegistryError(f"Failed to create {name} exporter: {e}") from e

        return exporter_class(final_options)

    def list_targets(self) -> List[str]:
        """Registered primary target names."""
        return sorted(self._exporters)

    def get_aliases(self, name: str) -> List[str]:
        key = name.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == key)

    def is_supported(self, name: str) -> bool:
        key = name.lower()
        return key in self._exporters or key in self._aliases

    def get_target_info(self, name: str) -> Dict[str, Any]:
        """
        Describe a registered target.

        Args:
            name: Target name or alias

        Returns:
            Name, class, file extension, aliases and module of the target
        """
        key = self.resolve_name(name)
        exporter_class = self._exporters[key]
        exporter = exporter_class()

        return {
            "name": exporter.target_name,
            "class": exporter_class.__name__,
            "file_extension": exporter.file_extension,
            "aliases": self.get_aliases(key),
            "module": exporter_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[TargetRegistry] = None


def get_registry() -> TargetRegistry:
    """Get the global target registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = TargetRegistry()
        _auto_register_targets(_global_registry)
    return _global_registry


def _auto_register_targets(registry: TargetRegistry):
    """Register the built-in targets."""
    from .targets.avalonia import AvaloniaExporter

    registry.register("avalonia", AvaloniaExporter, aliases=["axaml", "avalonia-xaml"])


def get_exporter(name: str, options: Optional[OptionsSource] = None) -> SceneExporter:
    """Create an exporter from the global registry."""
    return get_registry().create_exporter(name, options)


def list_supported_targets() -> List[str]:
    return get_registry().list_targets()


def is_target_supported(name: str) -> bool:
    return get_registry().is_supported(name)
