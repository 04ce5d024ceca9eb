"""Runtime settings for ``statement_ledger``.

Settings are an explicit value passed to whatever calls the transcription
service. Nothing here runs at import time: entry points load ``.env`` with
``python-dotenv`` and then call :meth:`Settings.from_env` once.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_MAX_TEXT_CHARS = 8000
DEFAULT_CURRENCY = "$"


def _int_from_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Read-only configuration for one process.

    Attributes
    ----------
    openai_api_key:
        Credential for the transcription service. ``None`` means transcription
        is unavailable; the pipeline reports that as an extraction failure.
    model:
        Model name used for transcription.
    max_text_chars:
        Document text beyond this many characters is not sent for
        transcription.
    default_currency:
        Currency symbol used when neither the statement nor an entry names one.
    """

    openai_api_key: str | None = None
    model: str = DEFAULT_MODEL
    max_text_chars: int = DEFAULT_MAX_TEXT_CHARS
    default_currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env
        api_key = (env.get("OPENAI_API_KEY") or "").strip() or None
        model = (env.get("STATEMENT_LEDGER_MODEL") or "").strip() or DEFAULT_MODEL
        currency = (env.get("STATEMENT_LEDGER_DEFAULT_CURRENCY") or "").strip() or DEFAULT_CURRENCY
        return cls(
            openai_api_key=api_key,
            model=model,
            max_text_chars=_int_from_env(
                env, "STATEMENT_LEDGER_MAX_TEXT_CHARS", DEFAULT_MAX_TEXT_CHARS
            ),
            default_currency=currency,
        )


__all__ = ["DEFAULT_CURRENCY", "DEFAULT_MAX_TEXT_CHARS", "DEFAULT_MODEL", "Settings"]
