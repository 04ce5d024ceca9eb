"""Search and pagination over a ledger's transactions.

Everything here is a pure function of its inputs: the ledger's transaction
sequence is never mutated, and the same inputs always yield the same page.
:class:`ViewState` carries the interactive search/page/page-size triple and
resets the page to 1 whenever the search term or the page size changes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from .models import Transaction, TransactionPage, format_amount

PAGE_SIZE_CHOICES: tuple[int, ...] = (5, 10, 15, 25, 50)
DEFAULT_PAGE_SIZE = 10


def _matches(tx: Transaction, term: str) -> bool:
    return (
        term in tx.date.casefold()
        or term in tx.description.casefold()
        or term in format_amount(tx.amount_minor)
    )


def filter_transactions(
    transactions: Sequence[Transaction], search: str = ""
) -> list[Transaction]:
    """Case-insensitive substring match on date, description, or the amount
    formatted to two decimals (``-3.5`` matches ``"3.50"`` and ``"-3.50"``).

    A blank term matches everything in the original order.
    """

    term = search.strip().casefold()
    if not term:
        return list(transactions)
    return [tx for tx in transactions if _matches(tx, term)]


def page_count(total: int, page_size: int) -> int:
    """``ceil(total / page_size)`` with a floor of 1."""

    if page_size < 1:
        raise ValueError(f"page_size must be a positive integer, got {page_size}")
    return max(1, math.ceil(total / page_size))


def paginate(items: Sequence[Transaction], page: int, page_size: int) -> TransactionPage:
    """Return the 1-based ``page`` of ``items``.

    Pages past the end are empty rather than an error.
    """

    if page < 1:
        raise ValueError(f"page must be a positive integer, got {page}")
    count = page_count(len(items), page_size)
    start = (page - 1) * page_size
    return TransactionPage(
        items=tuple(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        page_count=count,
        total=len(items),
    )


@dataclass(frozen=True, slots=True)
class ViewState:
    """Search term, current page and page size for one ledger view."""

    search: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be a positive integer, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size}")

    def with_search(self, search: str) -> ViewState:
        if search == self.search:
            return self
        return replace(self, search=search, page=1)

    def with_page_size(self, page_size: int) -> ViewState:
        if page_size == self.page_size:
            return self
        return replace(self, page_size=page_size, page=1)

    def with_page(self, page: int) -> ViewState:
        return replace(self, page=page)


def view_transactions(
    transactions: Sequence[Transaction], state: ViewState | None = None
) -> TransactionPage:
    """Filter by ``state.search`` and return ``state.page``."""

    state = state or ViewState()
    filtered = filter_transactions(transactions, state.search)
    return paginate(filtered, state.page, state.page_size)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PAGE_SIZE_CHOICES",
    "ViewState",
    "filter_transactions",
    "page_count",
    "paginate",
    "view_transactions",
]
