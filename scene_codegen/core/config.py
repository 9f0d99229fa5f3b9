"""
Configuration management for scene export.

Handles loading and merging export options from presets, JSON files and
caller overrides. Options are immutable once built: every export call
receives its own frozen :class:`ExportOptions` value.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from ..logging_config import get_logger
from .naming import is_valid_identifier, sanitize_identifier, sanitize_namespace, to_snake_case

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class RootKind(str, Enum):
    """Root element of the generated markup document."""

    WINDOW = "Window"
    USER_CONTROL = "UserControl"
    CONTENT_CONTROL = "ContentControl"
    PAGE = "Page"

    @classmethod
    def parse(cls, value: Union[str, "RootKind"]) -> "RootKind":
        """Parse a root kind case-insensitively; raises ValueError if unknown."""
        if isinstance(value, RootKind):
            return value
        wanted = str(value).strip().replace("-", "").replace("_", "").lower()
        for kind in cls:
            if kind.value.lower() == wanted:
                return kind
        raise ValueError(f"Unknown root kind: {value}")


MIN_INDENT = 1
MAX_INDENT = 8
DEFAULT_INDENT = 4
DEFAULT_MAX_DEPTH = 64
MAX_DEPTH_LIMIT = 256

# Option names used by older export dialogs
_KEY_ALIASES = {
    "root_element": "root_kind",
    "root": "root_kind",
    "root_namespace": "namespace",
    "generate_comments": "include_comments",
    "use_reactiveui": "use_reactive_ui",
    "include_project": "include_project_files",
}


@dataclass(frozen=True)
class ExportOptions:
    """Flat, immutable set of recognized export options."""

    # Document shape
    root_kind: RootKind = RootKind.USER_CONTROL
    namespace: str = "AsciistratorApp"
    class_name: str = "ExportedView"
    include_title: bool = True

    # Companion artifacts
    include_styles: bool = True
    include_code_behind: bool = False
    include_view_model: bool = False
    generate_theme: bool = False
    include_project_files: bool = False

    # MVVM idiom
    use_reactive_ui: bool = False
    use_community_toolkit: bool = False
    binding_mode: str = "TwoWay"

    # Formatting
    indent_size: int = DEFAULT_INDENT
    use_tabs: bool = False
    include_design_time_data: bool = True
    include_comments: bool = True

    # Visual features
    include_effects: bool = True
    include_transforms: bool = True
    include_gradients: bool = True

    # Structural guard
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]] = None) -> "ExportOptions":
        """
        Build options from a flat mapping.

        Keys may be snake_case or camelCase. Unknown keys are ignored and
        out-of-range values are clamped, so this never raises for misuse.

        Args:
            values: Raw option values

        Returns:
            Frozen options instance
        """
        return cls().merged(**dict(values or {}))

    def merged(self, **overrides: Any) -> "ExportOptions":
        """Return a copy with ``overrides`` applied (normalized and clamped)."""
        known = {f.name: f for f in fields(self)}
        changes: Dict[str, Any] = {}

        for raw_key, value in overrides.items():
            key = normalize_key(raw_key)
            if key not in known:
                logger.debug(f"Ignoring unknown export option: {raw_key}")
                continue
            if value is None:
                continue
            changes[key] = _coerce_option(key, value, getattr(self, key))

        return replace(self, **changes) if changes else self

    def sanitized(self) -> "ExportOptions":
        """Return a copy whose names and depth limit are safe to generate from."""
        return self.merged(class_name=self.class_name, namespace=self.namespace, max_depth=self.max_depth)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly representation."""
        data = asdict(self)
        data["root_kind"] = self.root_kind.value
        return data

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size

    @property
    def mvvm_idiom(self) -> str:
        """Active view-model idiom: ``toolkit``, ``reactiveui`` or ``plain``."""
        if self.use_community_toolkit:
            return "toolkit"
        if self.use_reactive_ui:
            return "reactiveui"
        return "plain"

    @property
    def theme_filename(self) -> str:
        return "AsciiTheme.axaml"


def normalize_key(key: str) -> str:
    """Map any accepted spelling of an option name to its field name."""
    snake = to_snake_case(key)
    return _KEY_ALIASES.get(snake, snake)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _coerce_int(value: Any, default: int, low: int, high: Optional[int] = None) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    if number < low:
        return low
    if high is not None and number > high:
        return high
    return number


def _coerce_option(key: str, value: Any, current: Any) -> Any:
    """Coerce one option value, falling back to safe defaults."""
    if key == "root_kind":
        try:
            return RootKind.parse(value)
        except ValueError:
            logger.warning(f"Unknown root kind '{value}', using UserControl")
            return RootKind.USER_CONTROL

    if key == "indent_size":
        if isinstance(value, bool):
            return DEFAULT_INDENT
        result = _coerce_int(value, DEFAULT_INDENT, MIN_INDENT, MAX_INDENT)
        if str(result) != str(value).strip():
            logger.debug(f"Indent size {value!r} clamped to {result}")
        return result

    if key == "max_depth":
        result = _coerce_int(value, DEFAULT_MAX_DEPTH, 1, MAX_DEPTH_LIMIT)
        if str(result) != str(value).strip():
            logger.debug(f"Max depth {value!r} clamped to {result}")
        return result

    if key == "class_name":
        return _coerce_name(key, value, current, dotted=False)

    if key == "namespace":
        return _coerce_name(key, value, current, dotted=True)

    if isinstance(current, bool):
        return _coerce_bool(value)

    text = str(value).strip()
    return text or current


def _coerce_name(key: str, value: Any, current: str, dotted: bool) -> str:
    """Replace names that would break file names or C# with a sanitized form."""
    text = str(value).strip()
    if not text:
        return current
    if is_valid_identifier(text, dotted=dotted):
        return text
    cleaned = sanitize_namespace(text) if dotted else sanitize_identifier(text)
    logger.warning(f"Invalid {key.replace('_', ' ')} '{text}', using '{cleaned}'")
    return cleaned


# Presets differ only in option values; nothing is subclassed.
PRESETS: Dict[str, Dict[str, Any]] = {
    "document": {},
    "window": {
        "root_kind": RootKind.WINDOW,
        "class_name": "MainWindow",
        "include_code_behind": True,
    },
    "usercontrol": {
        "root_kind": RootKind.USER_CONTROL,
        "include_code_behind": True,
        "include_title": False,
    },
    "project": {
        "root_kind": RootKind.WINDOW,
        "class_name": "MainWindow",
        "include_code_behind": True,
        "include_view_model": True,
        "generate_theme": True,
        "include_project_files": True,
    },
}

PRESET_ALIASES = {
    "control": "usercontrol",
    "user-control": "usercontrol",
    "embeddable": "usercontrol",
    "full-project": "project",
    "markup": "document",
}


def resolve_preset_name(kind: str) -> str:
    """Resolve a preset name or alias, raising ConfigError when unknown."""
    key = str(kind).strip().lower()
    key = PRESET_ALIASES.get(key, key)
    if key not in PRESETS:
        raise ConfigError(
            f"Unknown preset: {kind}. Available: {', '.join(sorted(PRESETS))}"
        )
    return key


def with_preset(kind: str, **overrides: Any) -> ExportOptions:
    """
    Return options pre-filled for a preset.

    Args:
        kind: ``document``, ``window``, ``usercontrol`` (``control``) or ``project``
        **overrides: Option values applied on top of the preset

    Returns:
        Frozen options
    """
    preset = PRESETS[resolve_preset_name(kind)]
    return ExportOptions().merged(**preset).merged(**overrides)


class ConfigManager:
    """Manages option loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._presets: Dict[str, Dict[str, Any]] = {
            name: dict(values) for name, values in PRESETS.items()
        }

    def list_presets(self) -> List[str]:
        """Names of the available presets."""
        return sorted(self._presets)

    def get_options(
        self,
        preset: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> ExportOptions:
        """
        Get complete options.

        Merge order: defaults, preset, config file, overrides.

        Args:
            preset: Optional preset name
            overrides: Option overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged frozen options
        """
        options = ExportOptions()

        if preset:
            options = options.merged(**self._presets[resolve_preset_name(preset)])

        if config_file:
            options = options.merged(**self._load_config_file(config_file))

        if overrides:
            options = options.merged(**dict(overrides))

        return options

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load options from a JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug(f"Loaded {len(config)} option(s) from {path}")
        return config

    def save_options(self, options: ExportOptions, config_path: Union[str, Path]):
        """
        Save options to a JSON file.

        Args:
            options: Options to save
            config_path: Path to save configuration
        """
        path = Path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(options.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_options(self, options: ExportOptions) -> List[str]:
        """
        Validate options and return warnings.

        Args:
            options: Options to validate

        Returns:
            List of warning messages (empty if valid)
        """
        warnings = []

        if not is_valid_identifier(options.class_name):
            warnings.append(f"Class name '{options.class_name}' is not a valid identifier")

        if not is_valid_identifier(options.namespace, dotted=True):
            warnings.append(f"Namespace '{options.namespace}' is not a valid namespace")

        if options.use_reactive_ui and options.use_community_toolkit:
            warnings.append(
                "Both ReactiveUI and CommunityToolkit requested; CommunityToolkit wins"
            )

        if options.include_view_model and not options.include_code_behind:
            warnings.append(
                "View-model requested without code-behind; DataContext will not be assigned"
            )

        if options.include_project_files and options.root_kind != RootKind.WINDOW:
            warnings.append(
                f"Project files host a {options.root_kind.value} inside a generated Window"
            )

        if options.binding_mode not in ("OneWay", "TwoWay", "OneTime", "OneWayToSource", "Default"):
            warnings.append(f"Unknown binding mode '{options.binding_mode}'")

        return warnings


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_options(
    preset: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> ExportOptions:
    """
    Convenience function to load export options.

    Args:
        preset: Optional preset name
        overrides: Option overrides
        config_file: Optional JSON configuration file

    Returns:
        Frozen export options
    """
    return get_config_manager().get_options(preset, overrides, config_file)
