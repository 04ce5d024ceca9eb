"""Balance reconciliation: does ``starting + Σ amounts == ending``?

Sums are exact :class:`~decimal.Decimal` arithmetic over each transaction's
:attr:`~statement_ledger.models.Transaction.amount`. Rounding happens once per
side of the comparison: ``starting + Σ amount`` and ``ending`` are each rounded
to two decimal places (half away from zero, see
:func:`~statement_ledger.models.to_minor_units`) and compared in minor units.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from .models import Transaction, to_minor_units


def reconciliation_difference(
    starting_balance: Decimal | None,
    ending_balance: Decimal | None,
    transactions: Iterable[Transaction],
) -> int | None:
    """Return ``round(ending) - round(starting + Σ amount)`` in minor units.

    ``None`` when either balance is missing. Zero means the statement
    reconciles.
    """

    if starting_balance is None or ending_balance is None:
        return None
    total = sum((tx.amount for tx in transactions), Decimal(0))
    return to_minor_units(ending_balance) - to_minor_units(starting_balance + total)


def reconcile(
    starting_balance: Decimal | None,
    ending_balance: Decimal | None,
    transactions: Iterable[Transaction],
) -> bool | None:
    """Tri-state verdict: ``True``/``False``, or ``None`` when indeterminate."""

    diff = reconciliation_difference(starting_balance, ending_balance, transactions)
    if diff is None:
        return None
    return diff == 0


__all__ = ["reconcile", "reconciliation_difference"]
