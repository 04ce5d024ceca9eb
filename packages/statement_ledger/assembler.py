"""Statement assembly: transcription text → :class:`~statement_ledger.models.Ledger`.

Two stages:

- :func:`parse_transcription` decodes the service's text. Empty text, invalid
  JSON or a non-object top level raise :class:`ExtractionError`; nothing is
  salvaged from a response that fails here.
- :func:`assemble_ledger` takes the decoded object and is total: header
  fields of the wrong type become ``None``, a missing or non-list
  ``transactions`` field becomes empty, and bad entries are dropped by the
  normalizer.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from .config import DEFAULT_CURRENCY
from .errors import TRANSCRIPTION_FAILED_MESSAGE, ExtractionError
from .logging_setup import get_logger
from .models import Ledger, Transaction, is_number, to_decimal, to_minor_units
from .normalizer import partition_entries
from .reconciliation import reconcile, reconciliation_difference

_logger = get_logger("statement_ledger.assembler")


def parse_transcription(text: str | None) -> Mapping[str, Any]:
    """Decode the transcription response into a JSON object."""

    if text is None or not text.strip():
        raise ExtractionError(detail="empty transcription response")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(detail=f"transcription response is not JSON: {e}") from e
    if not isinstance(decoded, Mapping):
        raise ExtractionError(
            detail=f"transcription response top level is {type(decoded).__name__}, not an object"
        )
    return decoded


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _balance(value: Any) -> Decimal | None:
    if not is_number(value):
        return None
    exact = to_decimal(value)
    try:
        to_minor_units(exact)
    except ValueError:
        return None
    return exact


def _minor_or_none(value: Decimal | None) -> int | None:
    return None if value is None else to_minor_units(value)


def _statement_currency(
    payload: Mapping[str, Any], transactions: list[Transaction], fallback_currency: str
) -> str:
    explicit = payload.get("currency")
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip()
    if transactions:
        return transactions[0].currency
    return fallback_currency


def assemble_ledger(
    payload: Mapping[str, Any], *, fallback_currency: str = DEFAULT_CURRENCY
) -> Ledger:
    """Build the ledger for one decoded transcription object.

    The statement-level ``currency`` (when a non-blank string) is the default
    for entries that name none; the ledger's own currency falls back to the
    first transaction's currency and then to ``fallback_currency``.
    """

    raw_transactions = payload.get("transactions")
    if not isinstance(raw_transactions, list | tuple):
        raw_transactions = []

    statement_currency = _string_or_none(payload.get("currency"))
    transactions, dropped = partition_entries(
        raw_transactions,
        default_currency=statement_currency,
        fallback_currency=fallback_currency,
    )

    starting = _balance(payload.get("startingBalance"))
    ending = _balance(payload.get("endingBalance"))
    reconciles = reconcile(starting, ending, transactions)

    _logger.info(
        "assemble:done transactions=%d dropped=%d reconciles=%s difference_minor=%s",
        len(transactions),
        len(dropped),
        reconciles,
        reconciliation_difference(starting, ending, transactions),
    )

    return Ledger(
        name=_string_or_none(payload.get("name")),
        address=_string_or_none(payload.get("address")),
        date=_string_or_none(payload.get("date")),
        starting_balance_minor=_minor_or_none(starting),
        ending_balance_minor=_minor_or_none(ending),
        currency=_statement_currency(payload, transactions, fallback_currency),
        transactions=tuple(transactions),
        reconciles=reconciles,
    )


def ledger_from_transcription(
    text: str | None, *, fallback_currency: str = DEFAULT_CURRENCY
) -> Ledger:
    """Parse and assemble; an unusable response yields the placeholder ledger
    with ``error`` set instead of raising."""

    try:
        payload = parse_transcription(text)
    except ExtractionError as e:
        _logger.error("assemble:parse_failed error=%s", e)
        return Ledger.empty(TRANSCRIPTION_FAILED_MESSAGE, currency=fallback_currency)
    return assemble_ledger(payload, fallback_currency=fallback_currency)


__all__ = ["assemble_ledger", "ledger_from_transcription", "parse_transcription"]
