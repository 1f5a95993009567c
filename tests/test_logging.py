"""Tests for the package logger setup."""

import logging

from rich.console import Console

from jscomplexity.logging_config import get_logger, setup_logging


class TestGetLogger:
    """Logger naming."""

    def test_namespaces_under_package(self):
        assert get_logger("walker").name == "jscomplexity.walker"
        assert get_logger("jscomplexity.api").name == "jscomplexity.api"
        assert get_logger().name == "jscomplexity"


class TestSetupLogging:
    """Handler installation and levels."""

    def teardown_method(self):
        setup_logging(console=Console(stderr=True))

    def test_levels(self):
        console = Console(stderr=True)
        assert setup_logging(console=console).level == logging.WARNING
        assert setup_logging(verbose=True, console=console).level == logging.DEBUG
        assert setup_logging(verbose=True, quiet=True, console=console).level == logging.ERROR

    def test_repeated_setup_does_not_stack_handlers(self):
        console = Console(stderr=True)
        setup_logging(console=console)
        logger = setup_logging(console=console)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(verbose=True, log_file=str(log_file), console=Console(stderr=True))
        get_logger("api").debug("collected 3 source files")
        for handler in logger.handlers:
            handler.flush()

        assert "jscomplexity.api: collected 3 source files" in log_file.read_text(encoding="utf-8")
