#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pq_logging.py
-------------

Shared logger factory for the library modules.

Every module asks for its logger once, at import time::

    from pq_logging import init_logger
    logger = init_logger(__name__)

All loggers hang off a single package root (``updatable_pq``). By default
that root only carries a ``NullHandler`` and propagates, so records reach
whatever handlers the application configured. Setting the
``UPDATABLE_PQ_LOG_LEVEL`` environment variable (a level name such as
``DEBUG`` or a number such as ``10``) attaches a stderr handler at that
level instead. An unrecognised value falls back to ``INFO`` with a warning.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "updatable_pq"
LOG_LEVEL_ENV_VAR = "UPDATABLE_PQ_LOG_LEVEL"

_FORMAT = "%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())
_default_handler: Optional[logging.Handler] = None


def _parse_level(raw: str) -> Optional[int]:
    """Map a level name or number to its int value, or ``None``."""
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    # getLevelName returns "Level X" for names it does not know
    return level if isinstance(level, int) else None


def _setup_logger() -> None:
    global _default_handler
    if _default_handler is not None:
        return
    raw = os.environ.get(LOG_LEVEL_ENV_VAR)
    if raw is None:
        return

    level = _parse_level(raw)
    _root_logger.setLevel(logging.INFO if level is None else level)
    _default_handler = logging.StreamHandler(sys.stderr)
    _default_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    _root_logger.addHandler(_default_handler)
    # Records printed here are not handed to the application's handlers too.
    _root_logger.propagate = False

    if level is None:
        _root_logger.warning(
            "Unknown log level %r in %s, using INFO", raw, LOG_LEVEL_ENV_VAR
        )


# The root logger is configured on first import of this module.
_setup_logger()


def init_logger(name: str) -> logging.Logger:
    """Return the library logger for module *name*."""
    return _root_logger.getChild(name)
