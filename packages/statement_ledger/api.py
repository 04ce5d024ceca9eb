"""Public orchestration for ``statement_ledger``.

:func:`analyse_statement` runs one upload end to end, strictly in order:

1. text extraction (``pdfplumber``),
2. transcription (OpenAI Responses API),
3. assembly (normalize, reconcile, resolve currency).

Request-level failures never raise out of this function: they come back as
:meth:`Ledger.empty` with ``error`` set, so callers handle one shape.
"""

from __future__ import annotations

from typing import Any

from .assembler import assemble_ledger, parse_transcription
from .config import Settings
from .errors import ExtractionError
from .extraction import extract_text
from .logging_setup import get_logger
from .models import Ledger
from .transcription import transcribe_statement

_logger = get_logger("statement_ledger.api")


def analyse_statement(data: bytes, *, settings: Settings, client: Any | None = None) -> Ledger:
    """Turn PDF bytes into a reconciled :class:`Ledger`.

    Parameters
    ----------
    data:
        Raw document bytes as uploaded.
    settings:
        Explicit configuration (credentials, model, truncation limit,
        fallback currency).
    client:
        Optional OpenAI-compatible client exposing ``responses.create``;
        defaults to one built from ``settings``.
    """

    try:
        text = extract_text(data)
        raw = transcribe_statement(text, settings=settings, client=client)
        payload = parse_transcription(raw)
    except ExtractionError as e:
        _logger.error("analyse:failed message=%r detail=%s", e.message, e)
        return Ledger.empty(e.message, currency=settings.default_currency)
    return assemble_ledger(payload, fallback_currency=settings.default_currency)


__all__ = ["analyse_statement"]
