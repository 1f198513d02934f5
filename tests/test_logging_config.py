"""
Tests for the shared logging set up.
"""

from __future__ import annotations

import logging

import pytest

from calculator_api.app.core.config import Settings
from calculator_api.app.core.logging_config import HANDLER_NAME, UVICORN_LOGGERS, setup_logging


@pytest.fixture
def clean_logging():
    """Remove handlers installed by ``setup_logging`` and restore levels."""
    root = logging.getLogger()
    level = root.level
    saved = {}
    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        saved[name] = (server_logger.handlers[:], server_logger.propagate)
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    yield root
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    for name, (handlers, propagate) in saved.items():
        server_logger = logging.getLogger(name)
        server_logger.handlers[:] = handlers
        server_logger.propagate = propagate


def own_handlers(root):
    return [h for h in root.handlers if h.get_name() == HANDLER_NAME]


def test_console_handler_installed_once(clean_logging):
    settings = Settings(log_level="warning", log_file=None)

    setup_logging(settings)
    setup_logging(settings)

    assert len(own_handlers(clean_logging)) == 1
    assert clean_logging.level == logging.WARNING


def test_unknown_level_falls_back_to_info(clean_logging):
    setup_logging(Settings(log_level="chatty", log_file=None))

    assert clean_logging.level == logging.INFO


def test_uvicorn_loggers_share_root_handlers(clean_logging):
    logging.getLogger("uvicorn.error").addHandler(logging.NullHandler())

    setup_logging(Settings(log_level="INFO", log_file=None))

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        assert server_logger.handlers == []
        assert server_logger.propagate is True


def test_log_file_uses_shared_format(clean_logging, tmp_path):
    log_file = tmp_path / "calculator.log"
    setup_logging(Settings(log_level="INFO", log_file=str(log_file)))

    logging.getLogger("uvicorn.error").info("Application startup complete.")
    for handler in own_handlers(clean_logging):
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("[INFO] uvicorn.error: Application startup complete.")
