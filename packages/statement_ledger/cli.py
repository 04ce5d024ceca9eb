"""CLI for the ``statement_ledger`` package.

Command handlers (``cmd_*``) return a process exit code and are callable
directly; the Typer app below wraps them. Environment variables (notably
``OPENAI_API_KEY``) are loaded from a local ``.env`` with ``python-dotenv``
before any command runs.

Subcommands
-----------
- ``analyse --pdf-path P [--json]``: run the full pipeline on a PDF.
- ``view --ledger-path P [--search S] [--page N] [--page-size N]``: search and
  page through a ledger saved with ``analyse --json``.
- ``serve [--host H] [--port N]``: run the HTTP API with uvicorn.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from .config import Settings
from .logging_setup import configure_logging
from .models import Ledger
from .query import DEFAULT_PAGE_SIZE, PAGE_SIZE_CHOICES, ViewState, view_transactions
from .render import render_ledger


def cmd_analyse(pdf_path: str, *, as_json: bool = False, console: Console | None = None) -> int:
    """Analyse one PDF and print the ledger (JSON or rendered first page)."""

    from .api import analyse_statement

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    if not settings.openai_api_key:
        print("Error: OPENAI_API_KEY is not set in the environment.", file=sys.stderr)
        return 1

    try:
        data = Path(pdf_path).read_bytes()
    except FileNotFoundError:
        print(f"Error: File not found: {pdf_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {pdf_path}", file=sys.stderr)
        return 1

    ledger = analyse_statement(data, settings=settings)

    if as_json:
        print(json.dumps(ledger.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_ledger(ledger, view_transactions(ledger.transactions), console=console)
    return 1 if ledger.error is not None else 0


def cmd_view(
    ledger_path: str,
    *,
    search: str = "",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    console: Console | None = None,
) -> int:
    """Render one page of a saved ledger after applying ``search``."""

    if page_size not in PAGE_SIZE_CHOICES:
        choices = ", ".join(str(n) for n in PAGE_SIZE_CHOICES)
        print(f"Error: --page-size must be one of {choices}", file=sys.stderr)
        return 1

    try:
        body = json.loads(Path(ledger_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        print(f"Error: File not found: {ledger_path}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Ledger file is not valid JSON: {e}", file=sys.stderr)
        return 1

    try:
        ledger = Ledger.from_dict(body)
        state = ViewState(search=search, page=page, page_size=page_size)
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    render_ledger(ledger, view_transactions(ledger.transactions, state), console=console)
    return 0


def cmd_serve(host: str, port: int) -> int:
    """Serve the HTTP API (blocking)."""

    import uvicorn

    from .web import create_app

    uvicorn.run(create_app(), host=host, port=port)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Turn bank statement PDFs into a validated, reconciled ledger. "
        "Loads OPENAI_API_KEY from a local .env before running."
    ),
)


@app.command("analyse")
def analyse_cmd(
    pdf_path: Annotated[
        Path, typer.Option("--pdf-path", help="Path to a bank statement PDF", dir_okay=False)
    ],
    as_json: Annotated[bool, typer.Option("--json", help="Print the ledger as JSON")] = False,
) -> None:
    """Extract, transcribe, and reconcile a statement PDF."""

    raise typer.Exit(cmd_analyse(str(pdf_path), as_json=as_json))


@app.command("view")
def view_cmd(
    ledger_path: Annotated[
        Path,
        typer.Option(
            "--ledger-path", help="Ledger JSON saved from 'analyse --json'", dir_okay=False
        ),
    ],
    search: Annotated[str, typer.Option(help="Match date, description, or amount")] = "",
    page: Annotated[int, typer.Option(min=1, help="1-based page number")] = 1,
    page_size: Annotated[
        int, typer.Option(help="Transactions per page: 5, 10, 15, 25 or 50")
    ] = DEFAULT_PAGE_SIZE,
) -> None:
    """Search and page through a saved ledger."""

    raise typer.Exit(cmd_view(str(ledger_path), search=search, page=page, page_size=page_size))


@app.command("serve")
def serve_cmd(
    host: Annotated[str, typer.Option(help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Bind port")] = 8000,
) -> None:
    """Run the upload API."""

    raise typer.Exit(cmd_serve(host, port))


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory (without overriding already-set
    variables) and configure logging before any subcommand."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    app()
