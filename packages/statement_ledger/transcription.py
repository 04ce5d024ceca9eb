"""Transcription call: statement text → JSON text via the OpenAI Responses API.

One request per document, no retries or timeouts beyond the SDK defaults.
Any SDK failure, or a response with no text, raises
:class:`~statement_ledger.errors.ExtractionError`. Decoding the JSON is left to
:func:`statement_ledger.assembler.parse_transcription`.
"""

from __future__ import annotations

import time
from typing import Any

from openai import OpenAI, OpenAIError

from . import prompting
from .config import Settings
from .errors import ExtractionError
from .extraction import truncate_text
from .logging_setup import get_logger

_logger = get_logger("statement_ledger.transcription")


def create_client(settings: Settings) -> OpenAI:
    """Build an SDK client from explicit settings (no environment reads)."""

    if not settings.openai_api_key:
        raise ExtractionError(detail="OPENAI_API_KEY is not configured")
    return OpenAI(api_key=settings.openai_api_key)


def _response_text(resp: Any) -> str | None:
    """Locate the text output on a Responses SDK result.

    Prefer ``resp.output_text``; fall back to ``resp.output[0].content[0].text``.
    """

    text = getattr(resp, "output_text", None)
    if isinstance(text, str) and text:
        return text
    output = getattr(resp, "output", None)
    if not output:
        return None
    content = getattr(output[0], "content", None)
    if not content:
        return None
    txt_obj = getattr(content[0], "text", None)
    if isinstance(txt_obj, str):
        return txt_obj
    # Some SDK versions wrap the text in an object with a ``value`` string.
    maybe_val = getattr(txt_obj, "value", None)
    return maybe_val if isinstance(maybe_val, str) else None


def transcribe_statement(text: str, *, settings: Settings, client: Any | None = None) -> str:
    """Send the statement text (truncated to ``settings.max_text_chars``) and
    return the model's raw text answer, expected to hold a JSON object."""

    user_content = prompting.build_user_content(truncate_text(text, settings.max_text_chars))
    client = client if client is not None else create_client(settings)

    t0 = time.perf_counter()
    try:
        resp = client.responses.create(
            model=settings.model,
            instructions=prompting.build_system_instructions(),
            input=user_content,
            text=prompting.build_text_config(),
        )
    except OpenAIError as e:
        _logger.error(
            "transcribe:failed model=%s latency_ms=%.2f error=%s",
            settings.model,
            (time.perf_counter() - t0) * 1000.0,
            e.__class__.__name__,
        )
        raise ExtractionError(detail=f"transcription request failed: {e}") from e

    out = _response_text(resp)
    _logger.info(
        "transcribe:done model=%s latency_ms=%.2f chars=%d",
        settings.model,
        (time.perf_counter() - t0) * 1000.0,
        len(out or ""),
    )
    if not out:
        raise ExtractionError(detail="empty transcription response")
    return out


__all__ = ["create_client", "transcribe_statement"]
