"""Application logging helpers.

`get_logger(name)` returns the named stdlib logger configured once: level from
`bookshelf.config.log_level_name()`, a single stream handler with the
bookshelf format, and no propagation to the root logger.
"""
from __future__ import annotations

import logging
import threading

from bookshelf import config as app_config

_LOCK = threading.Lock()
_FORMAT = "[bookshelf] %(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "bookshelf") -> logging.Logger:
    with _LOCK:
        logger = logging.getLogger(name)
        level = getattr(logging, app_config.log_level_name(), logging.INFO)
        logger.setLevel(level)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
        return logger


__all__ = ["get_logger"]
