"""Terminal rendering of a ledger view (``rich``).

Read-only: takes a :class:`Ledger` and a :class:`TransactionPage` computed by
:mod:`statement_ledger.query` and prints them. No filtering happens here.
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Ledger, TransactionPage, format_money

_NA = "N/A"


def _balance(minor: int | None, currency: str) -> str:
    return _NA if minor is None else format_money(minor, currency)


def reconciliation_text(reconciles: bool | None) -> Text | None:
    """Badge for the verdict; ``None`` when indeterminate (nothing shown)."""

    if reconciles is None:
        return None
    if reconciles:
        return Text("Balances reconcile", style="bold green")
    return Text("Balances do not reconcile", style="bold red")


def summary_panel(ledger: Ledger) -> Panel:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column()
    grid.add_row("Name", ledger.name or _NA)
    grid.add_row("Date", ledger.date or _NA)
    address = ledger.address
    grid.add_row(
        "Address",
        "\n".join(p.strip() for p in address.split(",")) if address else _NA,
    )
    grid.add_row("Starting Balance", _balance(ledger.starting_balance_minor, ledger.currency))
    grid.add_row("Ending Balance", _balance(ledger.ending_balance_minor, ledger.currency))

    parts: list = [grid]
    badge = reconciliation_text(ledger.reconciles)
    if badge is not None:
        parts.append(badge)
    return Panel(Group(*parts), title="Statement", expand=False)


def transactions_table(page: TransactionPage) -> Table:
    table = Table(
        caption=f"Page {page.page} of {page.page_count} ({page.total} matching)",
        show_lines=False,
    )
    table.add_column("Date", no_wrap=True)
    table.add_column("Description")
    table.add_column("Amount", justify="right", no_wrap=True)
    for tx in page.items:
        style = "red" if tx.amount_minor < 0 else "green"
        amount = Text(format_money(tx.amount_minor, tx.currency), style=style)
        table.add_row(tx.date, tx.description, amount)
    if not page.items:
        table.add_row("", Text("No transactions found.", style="dim"), "")
    return table


def render_ledger(ledger: Ledger, page: TransactionPage, *, console: Console | None = None) -> None:
    """Print the summary panel, then the transactions page."""

    console = console or Console()
    if ledger.error is not None:
        console.print(Text(f"Error: {ledger.error}", style="bold red"))
    console.print(summary_panel(ledger))
    console.print(transactions_table(page))


__all__ = ["reconciliation_text", "render_ledger", "summary_panel", "transactions_table"]
