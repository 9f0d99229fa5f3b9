"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from scene_codegen import logging_config
from scene_codegen.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def clean_root_logger(monkeypatch):
    """Give each test an unconfigured package logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    logger.handlers = []
    monkeypatch.setattr(logging_config, "_configured", False)
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


class TestGetLogger:
    """Tests for logger naming."""

    def test_prefixes_foreign_names(self):
        """Test names outside the package are namespaced."""
        assert get_logger("foo").name == "scene_codegen.foo"

    def test_keeps_package_names(self):
        """Test package module names are used as is."""
        assert get_logger("scene_codegen.cli_integration").name == "scene_codegen.cli_integration"
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


class TestSetupLogging:
    """Tests for configuring the package logger."""

    def test_level_by_name(self, clean_root_logger):
        """Test level names are accepted case-insensitively."""
        assert setup_logging("debug").level == logging.DEBUG

    def test_invalid_level_falls_back(self, clean_root_logger):
        """Test unknown level names fall back to WARNING."""
        assert setup_logging("chatty").level == logging.WARNING

    def test_handler_installed_once(self, clean_root_logger):
        """Ensure repeated setup only changes the level."""
        setup_logging("INFO")
        logger = setup_logging(logging.ERROR)
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_rich_handler(self, clean_root_logger):
        """Test the rich handler is the default."""
        logger = setup_logging()
        assert isinstance(logger.handlers[0], RichHandler)

    def test_plain_handler(self, clean_root_logger):
        """Test a plain stream handler can be requested."""
        logger = setup_logging(use_rich=False)
        assert type(logger.handlers[0]) is logging.StreamHandler
