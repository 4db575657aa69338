"""Explicit logging initialisation for the widget_agent logger tree.

Library modules only create loggers (``logging.getLogger(__name__)``); nothing
is configured on import. Applications call :func:`configure_logging` once at
start-up and :func:`reset_logging` on teardown (tests, embedded use).
"""

from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER_NAME = "widget_agent"

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: int | str = logging.INFO, *, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """Attach a single handler to the ``widget_agent`` logger and set its level.

    Calling it again replaces the previously installed handler.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = handler or logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_handler)
    root.setLevel(level)
    root.propagate = False
    return root


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`."""
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.setLevel(logging.NOTSET)
    root.propagate = True
