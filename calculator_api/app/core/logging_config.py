"""
Logging set up for the calculator service.

``setup_logging`` attaches one console handler (and a file handler
when ``LOG_FILE`` is set) to the root logger and routes the uvicorn
loggers through it, so server start‑up, storage connection failures
and request errors share a single format.  ``run.py`` starts uvicorn
with ``log_config=None`` so uvicorn keeps this configuration.
"""

import logging
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Marks the handlers installed here; repeated create_app calls are no‑ops.
HANDLER_NAME = "calculator_api"


def build_handlers(settings: Settings) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from ``settings``.

    ``LOG_LEVEL`` names an stdlib level; unknown names fall back to
    ``INFO``.  Uvicorn's own handlers are removed and its loggers
    propagate to the root instead.
    """
    root = logging.getLogger()
    if any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        return

    level = logging.getLevelName(settings.log_level.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    for handler in build_handlers(settings):
        root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
