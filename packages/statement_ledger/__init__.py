"""Public interface for the ``statement_ledger`` package.

Re-exports the API functions and public models as the stable import surface.
No runtime logic lives here.
"""

from .api import analyse_statement
from .assembler import assemble_ledger, ledger_from_transcription, parse_transcription
from .config import Settings
from .errors import ExtractionError, InputError, StatementLedgerError
from .models import Ledger, Transaction, TransactionPage
from .normalizer import DroppedEntry, RawTransactionEntry, normalize_transactions, partition_entries
from .query import ViewState, filter_transactions, paginate, view_transactions
from .reconciliation import reconcile, reconciliation_difference

__all__ = [
    # API
    "analyse_statement",
    "assemble_ledger",
    "filter_transactions",
    "ledger_from_transcription",
    "normalize_transactions",
    "paginate",
    "parse_transcription",
    "partition_entries",
    "reconcile",
    "reconciliation_difference",
    "view_transactions",
    # Models / types
    "DroppedEntry",
    "Ledger",
    "RawTransactionEntry",
    "Settings",
    "Transaction",
    "TransactionPage",
    "ViewState",
    # Errors
    "ExtractionError",
    "InputError",
    "StatementLedgerError",
]
