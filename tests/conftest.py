"""Pytest configuration for test isolation.

Settings are read from the environment (and a local ``.env`` at entry
points). Tests must not pick up a developer's real credentials or overrides,
so every test starts with the package's variables removed.
"""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "OPENAI_API_KEY",
    "STATEMENT_LEDGER_MODEL",
    "STATEMENT_LEDGER_MAX_TEXT_CHARS",
    "STATEMENT_LEDGER_DEFAULT_CURRENCY",
    "STATEMENT_LEDGER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
