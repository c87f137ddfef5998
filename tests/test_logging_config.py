"""Tests for logging setup."""

import logging

import pytest

from batch_note.utils.logging_config import LoggingConfig


@pytest.fixture
def fresh_logging(monkeypatch):
    monkeypatch.setattr(LoggingConfig, "_initialized", False)
    monkeypatch.setattr(LoggingConfig, "_handlers", [])
    yield
    LoggingConfig.shutdown()


def test_file_log_captures_debug(tmp_path, fresh_logging):
    LoggingConfig.setup_logging(tmp_path / "logs", console_level=logging.WARNING)
    logging.getLogger("batch_note.test").debug("composite drawn")

    LoggingConfig.shutdown()

    log_text = (tmp_path / "logs" / "batch_note.log").read_text(encoding="utf-8")
    assert "[DEBUG] batch_note.test: composite drawn" in log_text


def test_setup_runs_once(tmp_path, fresh_logging):
    LoggingConfig.setup_logging(tmp_path / "a")
    LoggingConfig.setup_logging(tmp_path / "b")

    assert not (tmp_path / "b").exists()
    assert len(LoggingConfig._handlers) == 2


def test_shutdown_detaches_handlers(tmp_path, fresh_logging):
    LoggingConfig.setup_logging(tmp_path / "logs")
    added = list(LoggingConfig._handlers)

    LoggingConfig.shutdown()

    root_handlers = logging.getLogger().handlers
    assert all(handler not in root_handlers for handler in added)
    assert LoggingConfig._initialized is False
