"""Logging setup for scene_codegen.

Every module obtains its logger through :func:`get_logger` so that all
records hang off the ``scene_codegen`` root logger and can be configured
in one place by the CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "scene_codegen"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str | int = "WARNING",
    use_rich: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package root logger.

    Calling this more than once only updates the level; handlers are
    installed a single time.

    Args:
        level: Level name or number.
        use_rich: Render records through ``rich`` instead of a plain stream.
        console: Console for the rich handler (defaults to stderr).

    Returns:
        The configured root logger of the package.
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if _configured:
        return logger

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    logger.addHandler(handler)
    _configured = True
    return logger
