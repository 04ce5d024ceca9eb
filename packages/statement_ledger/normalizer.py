"""Raw transcription entries → canonical :class:`~statement_ledger.models.Transaction`.

The transcription service returns loosely typed JSON. Each entry is first
reduced to a :class:`RawTransactionEntry` whose fields are either a value of
the expected primitive type or ``None`` (never a validation failure), and the
drop rules are then applied to that typed view:

1. ``date`` and ``description`` must both be strings.
2. ``moneyIn``/``moneyOut`` count only when numeric; otherwise they are 0.
3. Both positive → ambiguous, dropped.
4. Either negative → invalid, dropped.
5. ``amount = moneyIn if moneyIn > 0 else -moneyOut``.
6. Currency: entry → statement default → fallback symbol.

Dropped entries are excluded silently from the result. :func:`partition_entries`
also returns why each one was dropped so callers can log it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_CURRENCY
from .logging_setup import get_logger
from .models import PLACEHOLDER_DESCRIPTION, Transaction, is_number, to_decimal

_logger = get_logger("statement_ledger.normalizer")

_ZERO = Decimal(0)

# Drop reasons (stable strings; they appear in debug logs).
REASON_NOT_AN_OBJECT = "not_an_object"
REASON_MISSING_TEXT = "date_or_description_not_string"
REASON_BLANK_DATE = "blank_date"
REASON_AMBIGUOUS = "ambiguous_both_directions"
REASON_NEGATIVE = "negative_amount"
REASON_OUT_OF_RANGE = "amount_out_of_range"


class DroppedEntry(NamedTuple):
    """Position (0-based, in the source list) and reason of a dropped entry."""

    position: int
    reason: str


class RawTransactionEntry(BaseModel):
    """Typed view of one untrusted transaction entry.

    Validators run in ``before`` mode and coerce anything of the wrong type to
    ``None`` so that constructing this model never fails for a mapping input.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    date: str | None = None
    description: str | None = None
    money_in: Decimal | None = Field(default=None, alias="moneyIn")
    money_out: Decimal | None = Field(default=None, alias="moneyOut")
    currency: str | None = None

    @field_validator("date", "description", mode="before")
    @classmethod
    def _string_or_none(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("money_in", "money_out", mode="before")
    @classmethod
    def _number_or_none(cls, v: Any) -> Decimal | None:
        return to_decimal(v) if is_number(v) else None

    @field_validator("currency", mode="before")
    @classmethod
    def _currency_or_none(cls, v: Any) -> str | None:
        if not isinstance(v, str):
            return None
        return v.strip() or None


def _resolve_currency(
    entry_currency: str | None, default_currency: str | None, fallback_currency: str
) -> str:
    if entry_currency:
        return entry_currency
    if isinstance(default_currency, str) and default_currency.strip():
        return default_currency.strip()
    return fallback_currency


def _normalize_one(
    raw: Any,
    *,
    default_currency: str | None,
    fallback_currency: str,
) -> Transaction | str:
    """Return a Transaction, or the drop reason as a string."""

    if not isinstance(raw, Mapping):
        return REASON_NOT_AN_OBJECT
    entry = RawTransactionEntry.model_validate(dict(raw))

    if entry.date is None or entry.description is None:
        return REASON_MISSING_TEXT
    date = entry.date.strip()
    if not date:
        return REASON_BLANK_DATE

    money_in = entry.money_in if entry.money_in is not None else _ZERO
    money_out = entry.money_out if entry.money_out is not None else _ZERO
    if money_in > 0 and money_out > 0:
        return REASON_AMBIGUOUS
    if money_in < 0 or money_out < 0:
        return REASON_NEGATIVE

    try:
        return Transaction.from_amount(
            date=date,
            description=entry.description.strip() or PLACEHOLDER_DESCRIPTION,
            amount=money_in if money_in > 0 else -money_out,
            currency=_resolve_currency(entry.currency, default_currency, fallback_currency),
        )
    except ValueError:
        return REASON_OUT_OF_RANGE


def partition_entries(
    entries: Iterable[Any],
    *,
    default_currency: str | None = None,
    fallback_currency: str = DEFAULT_CURRENCY,
) -> tuple[list[Transaction], list[DroppedEntry]]:
    """Normalize ``entries`` and report which ones were dropped.

    Order of the returned transactions follows the source order.
    """

    kept: list[Transaction] = []
    dropped: list[DroppedEntry] = []
    for position, raw in enumerate(entries):
        result = _normalize_one(
            raw, default_currency=default_currency, fallback_currency=fallback_currency
        )
        if isinstance(result, Transaction):
            kept.append(result)
            continue
        _logger.debug("normalize:drop position=%d reason=%s", position, result)
        dropped.append(DroppedEntry(position=position, reason=result))
    return kept, dropped


def normalize_transactions(
    entries: Iterable[Any],
    *,
    default_currency: str | None = None,
    fallback_currency: str = DEFAULT_CURRENCY,
) -> list[Transaction]:
    """Return the canonical transactions for ``entries``, dropping malformed,
    ambiguous, or negative ones. Never raises for entry-level problems."""

    kept, _dropped = partition_entries(
        entries, default_currency=default_currency, fallback_currency=fallback_currency
    )
    return kept


__all__ = [
    "DroppedEntry",
    "RawTransactionEntry",
    "normalize_transactions",
    "partition_entries",
]
