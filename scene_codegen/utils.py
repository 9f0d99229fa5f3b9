"""Utility functions for loading scene JSON.

Scenes are read from a file or from standard input; anything that is
not valid JSON is reported as :class:`SceneLoaderError`.
"""

import json
import sys
from pathlib import Path
from typing import IO, Any

from .logging_config import get_logger

logger = get_logger(__name__)

STDIN_SOURCE = "-"


class SceneLoaderError(Exception):
    """Custom exception for scene loading errors."""

    pass


def load_scene_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load scene JSON from a local file.

    Args:
        file_path: Path to the scene file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SceneLoaderError: If the file is missing, unreadable or not JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading scene from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise SceneLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise SceneLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SceneLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info(f"Loaded scene from {file_path}")
    return str(file_path), data


def load_scene_from_stream(stream: IO[str], name: str = "<stdin>") -> tuple[str, Any]:
    """Load scene JSON from an open text stream."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise SceneLoaderError(f"Invalid JSON in {name}: {e}") from e
    logger.info(f"Loaded scene from {name}")
    return name, data


def load_scene(source: str | Path) -> tuple[str, Any]:
    """Load scene JSON from a file path, or from stdin when ``source`` is ``-``.

    Args:
        source: File path or ``-``.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SceneLoaderError: If the scene cannot be read or parsed.
    """
    if str(source) == STDIN_SOURCE:
        return load_scene_from_stream(sys.stdin)
    return load_scene_from_file(source)
