"""Data models and money helpers for ``statement_ledger``.

Money is held as signed integer minor units (cents) everywhere inside the
package. Conversion to :class:`~decimal.Decimal` or JSON numbers happens only
at formatting and serialization boundaries.

Wire shape (what the HTTP endpoint returns and the CLI saves)::

    {
      "name": str | null, "address": str | null, "date": str | null,
      "startingBalance": number | null, "endingBalance": number | null,
      "currency": str,
      "transactions": [{"date": str, "desc": str, "amount": number, "currency": str}],
      "reconciles": bool | null,
      "error": str            # present only on failure
    }
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator

from .config import DEFAULT_CURRENCY

# ---------------------------------------------------------------------------
# Money helpers
# ---------------------------------------------------------------------------

MINOR_UNIT = Decimal("0.01")
PLACEHOLDER_DESCRIPTION = "No Description"


def is_number(value: Any) -> bool:
    """Return True for finite ``int``/``float``/``Decimal`` values.

    ``bool`` is an ``int`` subclass in Python but never counts as a number
    here, and ``NaN``/``Infinity`` (which :func:`json.loads` accepts) don't
    either.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def to_decimal(value: int | float | Decimal) -> Decimal:
    """Exact decimal for a number. Floats go through ``str`` first so ``0.1``
    becomes ``Decimal("0.1")`` rather than its binary expansion."""

    if not is_number(value):
        raise ValueError(f"not a finite number: {value!r}")
    return Decimal(str(value)) if isinstance(value, float) else Decimal(value)


def to_minor_units(value: int | float | Decimal) -> int:
    """Convert a decimal amount to integer minor units, rounding half away
    from zero at the second decimal place."""

    d = to_decimal(value)
    try:
        q = d.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"amount out of range: {value!r}") from exc
    return int(q.scaleb(2))


def from_minor_units(minor: int) -> Decimal:
    """Return ``minor`` cents as a two-place :class:`Decimal`."""

    return Decimal(minor).scaleb(-2).quantize(MINOR_UNIT)


def format_amount(minor: int) -> str:
    """Exactly two decimals, ASCII dot, leading minus for negatives."""

    return f"{from_minor_units(minor):.2f}"


def format_money(minor: int, currency: str) -> str:
    """Display form with the currency before the magnitude (``-$3.50``)."""

    magnitude = f"{from_minor_units(abs(minor)):.2f}"
    return f"-{currency}{magnitude}" if minor < 0 else f"{currency}{magnitude}"


def _json_number(d: Decimal) -> int | float:
    return int(d) if d == d.to_integral_value() else float(d)


# ---------------------------------------------------------------------------
# Canonical records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """One validated movement of funds.

    ``amount_minor`` is signed: positive for money in (credit), negative for
    money out (debit). ``date`` and ``description`` are trimmed and non-empty.
    ``exact_amount`` is set only when the source amount has sub-cent digits
    that ``amount_minor`` rounds away; reconciliation sums :attr:`amount`.
    """

    date: str
    description: str
    amount_minor: int
    currency: str
    exact_amount: Decimal | None = None

    @classmethod
    def from_amount(
        cls, *, date: str, description: str, amount: Decimal, currency: str
    ) -> Transaction:
        """Build from an exact amount; raises ``ValueError`` when out of range."""

        minor = to_minor_units(amount)
        exact = None if amount == from_minor_units(minor) else amount
        return cls(
            date=date,
            description=description,
            amount_minor=minor,
            currency=currency,
            exact_amount=exact,
        )

    @property
    def amount(self) -> Decimal:
        if self.exact_amount is not None:
            return self.exact_amount
        return from_minor_units(self.amount_minor)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "desc": self.description,
            "amount": _json_number(self.amount),
            "currency": self.currency,
        }

    def as_raw_entry(self) -> dict[str, Any]:
        """Return the transcription-shaped entry that normalizes back to this
        transaction (credit in ``moneyIn``, debit in ``moneyOut``)."""

        amount = self.amount
        return {
            "date": self.date,
            "description": self.description,
            "moneyIn": _json_number(amount) if amount > 0 else None,
            "moneyOut": _json_number(-amount) if amount < 0 else None,
            "currency": self.currency,
        }


@dataclass(frozen=True, slots=True)
class Ledger:
    """The validated statement result for one upload.

    Built once per request and never mutated. ``reconciles`` is tri-state:
    ``None`` means the balances were insufficient to judge. ``error`` is set
    only on the placeholder produced by :meth:`empty`.
    """

    name: str | None = None
    address: str | None = None
    date: str | None = None
    starting_balance_minor: int | None = None
    ending_balance_minor: int | None = None
    currency: str = DEFAULT_CURRENCY
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    reconciles: bool | None = None
    error: str | None = None

    @classmethod
    def empty(cls, error: str, *, currency: str = DEFAULT_CURRENCY) -> Ledger:
        return cls(currency=currency, error=error)

    @property
    def starting_balance(self) -> Decimal | None:
        if self.starting_balance_minor is None:
            return None
        return from_minor_units(self.starting_balance_minor)

    @property
    def ending_balance(self) -> Decimal | None:
        if self.ending_balance_minor is None:
            return None
        return from_minor_units(self.ending_balance_minor)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "address": self.address,
            "date": self.date,
            "startingBalance": (
                None
                if self.starting_balance_minor is None
                else _json_number(from_minor_units(self.starting_balance_minor))
            ),
            "endingBalance": (
                None
                if self.ending_balance_minor is None
                else _json_number(from_minor_units(self.ending_balance_minor))
            ),
            "currency": self.currency,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "reconciles": self.reconciles,
        }
        if self.error is not None:
            body["error"] = self.error
        return body

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> Ledger:
        """Rebuild a ledger from its wire shape (e.g. a saved ``--json`` run).

        Unlike the assembler this is strict: the input is expected to be our
        own output, so a malformed body raises ``pydantic.ValidationError``.
        """

        parsed = _LedgerWire.model_validate(body)
        currency = parsed.currency or DEFAULT_CURRENCY
        return cls(
            name=parsed.name,
            address=parsed.address,
            date=parsed.date,
            starting_balance_minor=(
                None if parsed.startingBalance is None else to_minor_units(parsed.startingBalance)
            ),
            ending_balance_minor=(
                None if parsed.endingBalance is None else to_minor_units(parsed.endingBalance)
            ),
            currency=currency,
            transactions=tuple(
                Transaction.from_amount(
                    date=t.date,
                    description=t.desc,
                    amount=t.amount,
                    currency=t.currency or currency,
                )
                for t in parsed.transactions
            ),
            reconciles=parsed.reconciles,
            error=parsed.error,
        )


@dataclass(frozen=True, slots=True)
class TransactionPage:
    """One page of a filtered transaction view.

    ``total`` is the filtered count; ``page_count`` is at least 1 so page 1
    always exists, possibly empty.
    """

    items: tuple[Transaction, ...]
    page: int
    page_size: int
    page_count: int
    total: int


# ---------------------------------------------------------------------------
# Wire-shape validation (our own output read back in)
# ---------------------------------------------------------------------------


class _TransactionWire(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    date: StrictStr
    desc: StrictStr
    amount: Decimal
    currency: StrictStr | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _finite_number(cls, v: Any) -> Any:
        if not is_number(v):
            raise ValueError("amount must be a finite number")
        return to_decimal(v)

    @field_validator("date", "desc")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be a non-empty string")
        return v


class _LedgerWire(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = None
    address: StrictStr | None = None
    date: StrictStr | None = None
    startingBalance: Decimal | None = None
    endingBalance: Decimal | None = None
    currency: StrictStr | None = None
    transactions: list[_TransactionWire] = []
    reconciles: StrictBool | None = None
    error: StrictStr | None = None

    @field_validator("startingBalance", "endingBalance", mode="before")
    @classmethod
    def _finite_or_none(cls, v: Any) -> Any:
        if v is None:
            return None
        if not is_number(v):
            raise ValueError("balance must be a finite number or null")
        return to_decimal(v)


__all__ = [
    "Ledger",
    "MINOR_UNIT",
    "PLACEHOLDER_DESCRIPTION",
    "Transaction",
    "TransactionPage",
    "format_amount",
    "format_money",
    "from_minor_units",
    "is_number",
    "to_decimal",
    "to_minor_units",
]
