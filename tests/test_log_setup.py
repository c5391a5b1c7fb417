"""Tests for logging setup."""

import logging

import pytest

from apptimer.log_setup import LOG_FORMAT, setup_logging


@pytest.fixture
def bare_root(monkeypatch):
    """Root logger without handlers, restored after the test."""
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    level = root.level
    yield root
    root.setLevel(level)


def test_installs_stream_handler(bare_root):
    """Test a single formatted stream handler is added at the given level."""
    setup_logging(logging.DEBUG)

    (handler,) = bare_root.handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.level == logging.DEBUG
    assert handler.formatter._fmt == LOG_FORMAT
    assert bare_root.level == logging.DEBUG


def test_defaults_to_info(bare_root):
    """Test the default level is INFO."""
    setup_logging()

    assert bare_root.handlers[0].level == logging.INFO


def test_idempotent(bare_root):
    """Test calling twice doesn't add a second handler."""
    setup_logging()
    setup_logging()

    assert len(bare_root.handlers) == 1
