"""Tests for command-line logging setup (logging_config.py)."""

import logging

import pytest

from uz_affix.logging_config import DEBUG_FORMAT, SIMPLE_FORMAT, setup_logging


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


def test_default_setup():
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter._fmt == SIMPLE_FORMAT


def test_replaces_existing_handlers():
    root = logging.getLogger()
    stale = logging.NullHandler()
    root.addHandler(stale)
    setup_logging(level=logging.WARNING)
    assert stale not in root.handlers
    assert root.level == logging.WARNING


def test_debug_forces_debug_level():
    setup_logging(level=logging.WARNING, debug=True)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers[0].formatter._fmt == DEBUG_FORMAT


def test_log_file_gets_run_banner(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(log_file=log_file)
    assert len(logging.getLogger().handlers) == 2
    logging.getLogger("uz_affix.test").info("hello from the test")
    text = log_file.read_text(encoding="utf-8")
    assert "NEW RUN STARTED" in text
    assert "hello from the test" in text


def test_no_banner_without_log_file(capsys):
    setup_logging()
    assert "NEW RUN STARTED" not in capsys.readouterr().err
