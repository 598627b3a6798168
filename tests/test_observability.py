"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from pmprofiler.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_take_precedence(self):
        env = {"PMP_LOG_LEVEL": "ERROR"}
        assert resolve_level(debug=True, environ=env) == "DEBUG"
        assert resolve_level(verbose=True, environ=env) == "INFO"
        assert resolve_level(quiet=True, environ={}) == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(environ={"PMP_LOG_LEVEL": "INFO"}) == "INFO"
        assert resolve_level(environ={}) == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_log_file(self, tmp_path: Path):
        log_file = tmp_path / "pmprofiler.log"
        setup_logging("WARNING", log_file=str(log_file))
        logging.getLogger("pmprofiler.test").debug("line %s", "written")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "line written" in log_file.read_text()
        console = logging.getLogger().handlers[0]
        assert console.level == logging.WARNING
