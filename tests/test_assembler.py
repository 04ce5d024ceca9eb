from __future__ import annotations

import json

import pytest

from statement_ledger import (
    ExtractionError,
    Ledger,
    assemble_ledger,
    ledger_from_transcription,
    parse_transcription,
)


def _payload(**overrides):
    body = {
        "name": "Jane Doe",
        "address": "1 High Street, Springfield",
        "date": "31-01-2024",
        "startingBalance": 100.0,
        "endingBalance": 75.0,
        "transactions": [
            {"date": "05-01-2024", "description": "Groceries", "moneyIn": None, "moneyOut": 20.0},
            {"date": "09-01-2024", "description": "Coffee", "moneyIn": 0, "moneyOut": 5.0},
        ],
    }
    body.update(overrides)
    return body


def test_assembles_header_transactions_and_verdict():
    ledger = assemble_ledger(_payload())
    assert ledger.name == "Jane Doe"
    assert ledger.address == "1 High Street, Springfield"
    assert ledger.date == "31-01-2024"
    assert ledger.starting_balance_minor == 10000
    assert ledger.ending_balance_minor == 7500
    assert [t.amount_minor for t in ledger.transactions] == [-2000, -500]
    assert ledger.reconciles is True
    assert ledger.error is None


def test_mismatched_balances_do_not_reconcile():
    assert assemble_ledger(_payload(endingBalance=80.0)).reconciles is False


@pytest.mark.parametrize("value", [None, "100.00", True, [], {"amount": 1}])
def test_non_numeric_balance_is_null_and_verdict_indeterminate(value):
    ledger = assemble_ledger(_payload(startingBalance=value))
    assert ledger.starting_balance_minor is None
    assert ledger.reconciles is None


@pytest.mark.parametrize("value", [42, ["a"], {"x": 1}, True])
def test_non_string_header_fields_become_null(value):
    ledger = assemble_ledger(_payload(name=value, address=value, date=value))
    assert (ledger.name, ledger.address, ledger.date) == (None, None, None)


@pytest.mark.parametrize("value", [None, "oops", {"date": "x"}, 3])
def test_missing_or_non_list_transactions_are_empty(value):
    body = _payload(transactions=value, startingBalance=10.0, endingBalance=10.0)
    ledger = assemble_ledger(body)
    assert ledger.transactions == ()
    assert ledger.reconciles is True


def test_statement_currency_resolution():
    txs = [{"date": "d", "description": "x", "moneyIn": 1, "currency": "EUR"}]
    assert assemble_ledger(_payload(currency="GBP", transactions=txs)).currency == "GBP"
    assert assemble_ledger(_payload(transactions=txs)).currency == "EUR"
    assert assemble_ledger(_payload(transactions=[])).currency == "$"
    assert assemble_ledger(_payload(transactions=[]), fallback_currency="CHF").currency == "CHF"


def test_statement_currency_is_default_for_entries():
    txs = [{"date": "d", "description": "x", "moneyIn": 1}]
    ledger = assemble_ledger(_payload(currency="GBP", transactions=txs))
    assert [t.currency for t in ledger.transactions] == ["GBP"]


@pytest.mark.parametrize("text", [None, "", "   ", "not json", "[1, 2]", '"a string"', "{"])
def test_unparseable_transcription_raises_extraction_error(text):
    with pytest.raises(ExtractionError):
        parse_transcription(text)


def test_unparseable_transcription_yields_placeholder_ledger():
    ledger = ledger_from_transcription("Sorry, I cannot help with that.")
    assert ledger == Ledger.empty("Failed to extract statement details")
    assert ledger.to_dict() == {
        "name": None,
        "address": None,
        "date": None,
        "startingBalance": None,
        "endingBalance": None,
        "currency": "$",
        "transactions": [],
        "reconciles": None,
        "error": "Failed to extract statement details",
    }


def test_ledger_from_transcription_success_has_no_error_key():
    body = ledger_from_transcription(json.dumps(_payload())).to_dict()
    assert "error" not in body
    assert body["transactions"] == [
        {"date": "05-01-2024", "desc": "Groceries", "amount": -20, "currency": "$"},
        {"date": "09-01-2024", "desc": "Coffee", "amount": -5, "currency": "$"},
    ]
    assert body["startingBalance"] == 100
    assert body["reconciles"] is True
