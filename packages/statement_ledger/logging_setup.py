"""Logging for the ``statement_ledger`` package.

Modules log through :func:`get_logger`; the package logger carries a
``NullHandler`` so library use stays silent. The CLI and the web app factory
call :func:`configure_logging` once at startup, which attaches one stderr
handler at the level named by ``STATEMENT_LEDGER_LOG_LEVEL`` (default INFO).
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "statement_ledger"
LEVEL_ENV_VAR = "STATEMENT_LEDGER_LOG_LEVEL"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def resolve_level(level: int | str | None = None) -> int:
    """Numeric level for ``level``, falling back to the env var, then INFO.

    Unknown names resolve to INFO rather than failing startup.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(level: int | str | None = None) -> None:
    """Attach a stderr handler to the package logger (idempotent)."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(level))
    if any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
