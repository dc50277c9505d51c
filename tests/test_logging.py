"""
Tests for logging setup — level precedence and file output.
"""

import logging
from pathlib import Path

import pytest

from distrocmd.core.observability.logging_config import (
    FILE_ENV_VAR,
    FILE_LEVEL_ENV_VAR,
    LEVEL_ENV_VAR,
    level_from_flags,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    for var in (LEVEL_ENV_VAR, FILE_ENV_VAR, FILE_LEVEL_ENV_VAR):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:
    def test_flags(self):
        assert level_from_flags(debug=True, quiet=True) == "DEBUG"
        assert level_from_flags(verbose=True) == "INFO"
        assert level_from_flags(quiet=True) == "ERROR"

    def test_no_flag(self):
        assert level_from_flags() is None


class TestSetupLogging:
    def test_default_is_warning(self):
        assert setup_logging() == logging.WARNING
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_env_level_used_without_flag(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV_VAR, "INFO")
        assert setup_logging(level_from_flags()) == logging.INFO

    def test_flag_beats_env(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV_VAR, "ERROR")
        assert setup_logging(level_from_flags(debug=True)) == logging.DEBUG

    def test_bad_level_falls_back_to_warning(self):
        assert setup_logging("LOUD") == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler_from_env(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "engine.log"
        monkeypatch.setenv(FILE_ENV_VAR, str(log_file))
        monkeypatch.setenv(FILE_LEVEL_ENV_VAR, "DEBUG")
        setup_logging("WARNING")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        logging.getLogger("distrocmd.test").debug("resolved firefox")
        for h in root.handlers:
            h.flush()
        assert "resolved firefox" in log_file.read_text()

    def test_third_party_quieted(self):
        setup_logging("INFO")
        assert logging.getLogger("werkzeug").level == logging.WARNING
