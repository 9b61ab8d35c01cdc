# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the taggedhttp package logger."""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "taggedhttp"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(level: str | int | None = None) -> int:
    """Turn a level name or number into a logging level; TAGGEDHTTP_LOG_LEVEL fills in, WARNING otherwise."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv("TAGGEDHTTP_LOG_LEVEL") or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | int | None = None, *, handler: logging.Handler | None = None) -> logging.Logger:
    """
    Attach a handler to the package logger and set its level.

    Only the `taggedhttp` logger is touched, so an application's root configuration is left
    alone. Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_log_level(level))

    for existing in [h for h in logger.handlers if getattr(h, "_taggedhttp_handler", False)]:
        logger.removeHandler(existing)

    new_handler = handler or logging.StreamHandler()
    if new_handler.formatter is None:
        new_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    new_handler._taggedhttp_handler = True  # type: ignore[attr-defined]
    logger.addHandler(new_handler)
    return logger


__all__ = ["resolve_log_level", "setup_logging"]
