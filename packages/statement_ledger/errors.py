"""Request-level error taxonomy for ``statement_ledger``.

Entry-level problems (ambiguous or invalid transactions) are not errors: the
normalizer drops them. Indeterminate reconciliation is not an error either; it
surfaces as ``reconciles=None``. Only the conditions below abort a request.
"""

from __future__ import annotations

NO_FILE_MESSAGE = "No file uploaded"
NO_TEXT_MESSAGE = "Could not extract text from PDF"
TRANSCRIPTION_FAILED_MESSAGE = "Failed to extract statement details"


class StatementLedgerError(Exception):
    """Base class for request-level failures."""


class InputError(StatementLedgerError, ValueError):
    """The upload is missing or is not binary content."""

    def __init__(self, message: str = NO_FILE_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class ExtractionError(StatementLedgerError):
    """No usable text or structured data could be obtained from the document.

    ``message`` is the user-facing text placed in the ``error`` field of the
    placeholder ledger; ``str(exc)`` may carry more detail for logs.
    """

    def __init__(self, message: str = TRANSCRIPTION_FAILED_MESSAGE, *, detail: str | None = None):
        super().__init__(detail or message)
        self.message = message


__all__ = [
    "ExtractionError",
    "InputError",
    "NO_FILE_MESSAGE",
    "NO_TEXT_MESSAGE",
    "StatementLedgerError",
    "TRANSCRIPTION_FAILED_MESSAGE",
]
