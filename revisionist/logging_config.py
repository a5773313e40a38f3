"""Root logger setup for the HTTP host.

``main.py`` calls :func:`setup_logging` once; library modules only ever do
``LOG = logging.getLogger(__name__)`` and never configure handlers.

Adapters log provider, model, token counts and HTTP status. Credentials
and prompt text stay out of log records.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from revisionist import config

FORMATS = {
    "json": (
        '{"time":"%(asctime)s","level":"%(levelname)s",'
        '"logger":"%(name)s","message":"%(message)s"}'
    ),
    "text": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
}

# Chatty at INFO: every pooled connection and every access line.
QUIET_LOGGERS = ("urllib3", "uvicorn.access")


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Handler:
    """Install a single stdout handler on the root logger and return it.

    ``level`` and ``log_format`` default to ``LOG_LEVEL`` / ``LOG_FORMAT``.
    An unknown level falls back to INFO, an unknown format to ``text``.
    Calling it again replaces the handler instead of stacking a second one.
    """
    level_name = (level or config.LOG_LEVEL).upper()
    fmt = FORMATS.get((log_format or config.LOG_FORMAT).lower(), FORMATS["text"])

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%dT%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


__all__ = ["FORMATS", "setup_logging"]
