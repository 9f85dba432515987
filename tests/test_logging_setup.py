#!/usr/bin/env python3
"""
Tests for logging configuration
"""

import json
import logging

import pytest

from ignorefilter.utils import TRACE_LEVEL, configure_logging, get_logger, log_with_context
from ignorefilter.utils.logging_setup import DockerFormatter, resolve_level


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    for name in ("IGNOREFILTER_LOG_LEVEL", "LOG_LEVEL", "DOCKER_CONTAINER"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_resolve_level_precedence(monkeypatch):
    assert resolve_level() == logging.WARNING
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    assert resolve_level() == logging.INFO
    monkeypatch.setenv("IGNOREFILTER_LOG_LEVEL", "debug")
    assert resolve_level() == logging.DEBUG
    assert resolve_level("trace") == TRACE_LEVEL
    assert resolve_level("nonsense") == logging.WARNING


def test_configure_logging_uses_stderr(capsys):
    configure_logging("INFO")
    get_logger("ignorefilter.test").info("hello")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello" in captured.err


def test_trace_level(capsys):
    configure_logging("TRACE")
    get_logger("ignorefilter.test").trace("fine detail")
    assert "fine detail" in capsys.readouterr().err


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "filter.log"
    configure_logging("INFO", log_file=str(log_file))
    get_logger("ignorefilter.test").info("to file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "to file" in log_file.read_text()


def test_docker_formatter_includes_context():
    logger = logging.getLogger("ignorefilter.test.json")
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Capture()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        log_with_context(logger, logging.WARNING, "filtered", survivors=3)
    finally:
        logger.removeHandler(handler)

    data = json.loads(DockerFormatter().format(records[0]))
    assert data["message"] == "filtered"
    assert data["level"] == "WARNING"
    assert data["survivors"] == 3
