from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from statement_ledger import Ledger, Settings, Transaction
from statement_ledger.models import format_amount, format_money, is_number, to_minor_units


@pytest.mark.parametrize(
    "value,expected",
    [(0, True), (1.5, True), (Decimal("2.10"), True), (True, False), (float("nan"), False),
     (float("inf"), False), ("1", False), (None, False)],
)
def test_is_number(value, expected):
    assert is_number(value) is expected


def test_minor_unit_formatting():
    assert to_minor_units(0.1 + 0.2) == 30
    assert format_amount(-350) == "-3.50"
    assert format_amount(5) == "0.05"
    assert format_money(-350, "$") == "-$3.50"
    assert format_money(200000, "EUR") == "EUR2000.00"


def test_ledger_wire_shape_reads_back():
    ledger = Ledger(
        name="Jane",
        starting_balance_minor=10000,
        ending_balance_minor=9650,
        currency="$",
        transactions=(
            Transaction(date="01-01-2024", description="Coffee", amount_minor=-350, currency="$"),
            Transaction.from_amount(
                date="02-01-2024", description="Interest", amount=Decimal("0.004"), currency="$"
            ),
        ),
        reconciles=True,
    )
    assert Ledger.from_dict(ledger.to_dict()) == ledger


def test_ledger_from_dict_rejects_malformed_transactions():
    with pytest.raises(ValidationError):
        Ledger.from_dict({"transactions": [{"date": "x", "desc": "y", "amount": "12"}]})


def test_settings_from_env_defaults_and_overrides():
    assert Settings.from_env({}) == Settings()
    s = Settings.from_env(
        {
            "OPENAI_API_KEY": " sk-test ",
            "STATEMENT_LEDGER_MODEL": "gpt-x",
            "STATEMENT_LEDGER_MAX_TEXT_CHARS": "100",
            "STATEMENT_LEDGER_DEFAULT_CURRENCY": "EUR",
        }
    )
    assert s == Settings(
        openai_api_key="sk-test", model="gpt-x", max_text_chars=100, default_currency="EUR"
    )


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_settings_reject_bad_text_limit(raw):
    with pytest.raises(ValueError):
        Settings.from_env({"STATEMENT_LEDGER_MAX_TEXT_CHARS": raw})
