from __future__ import annotations

import logging

import pytest

from statement_ledger.logging_setup import configure_logging, get_logger, resolve_level


@pytest.mark.parametrize(
    "level,expected",
    [
        (logging.DEBUG, logging.DEBUG),
        ("warning", logging.WARNING),
        (" 30 ", 30),
        ("loud", logging.INFO),
    ],
)
def test_resolve_level_from_argument(level, expected):
    assert resolve_level(level) == expected


def test_resolve_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    assert resolve_level() == logging.INFO
    monkeypatch.setenv("STATEMENT_LEDGER_LOG_LEVEL", "debug")
    assert resolve_level() == logging.DEBUG


def test_configure_logging_attaches_one_handler():
    configure_logging("ERROR")
    configure_logging("ERROR")
    logger = logging.getLogger("statement_ledger")
    streams = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1
    assert logger.level == logging.ERROR
    assert get_logger("statement_ledger.web").getEffectiveLevel() == logging.ERROR
