"""PDF text extraction (``pdfplumber``).

Returns the concatenated page text of an uploaded document. A document that
yields no text at all (scanned image, corrupt file, not a PDF) raises
:class:`~statement_ledger.errors.ExtractionError`.
"""

from __future__ import annotations

import io

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from .errors import NO_TEXT_MESSAGE, ExtractionError
from .logging_setup import get_logger

_logger = get_logger("statement_ledger.extraction")


def extract_text(data: bytes) -> str:
    """Return the text of every page in ``data``, pages separated by newlines."""

    if not data:
        raise ExtractionError(NO_TEXT_MESSAGE, detail="empty document")
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except (PdfminerException, PDFSyntaxError) as e:
        raise ExtractionError(NO_TEXT_MESSAGE, detail=f"unreadable PDF: {e}") from e

    text = "\n".join(pages)
    if not text.strip():
        raise ExtractionError(NO_TEXT_MESSAGE, detail="no extractable text")
    _logger.info("extract:done pages=%d chars=%d", len(pages), len(text))
    return text


def truncate_text(text: str, limit: int) -> str:
    """Keep the first ``limit`` characters; the rest is not transcribed."""

    if len(text) <= limit:
        return text
    _logger.warning("extract:truncated chars=%d limit=%d", len(text), limit)
    return text[:limit]


__all__ = ["extract_text", "truncate_text"]
