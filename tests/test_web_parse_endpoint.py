from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import statement_ledger.api as api_mod
import statement_ledger.web as web_mod
from statement_ledger import ExtractionError, Settings
from statement_ledger.web import create_app
from tests.helpers.openai_stub import OpenAIStub, json_responder

SETTINGS = Settings(openai_api_key="sk-test")

STATEMENT = {
    "name": "Jane Doe",
    "address": "1 High Street, Springfield",
    "date": "31-01-2024",
    "startingBalance": 100.0,
    "endingBalance": 80.0,
    "transactions": [
        {"date": "01-01-2024", "description": "Coffee Shop", "moneyOut": 3.5},
        {"date": "02-01-2024", "description": "  ", "moneyOut": 21.5},
    ],
}


def _client(stub: OpenAIStub | None = None) -> TestClient:
    app = create_app(SETTINGS, client=stub or OpenAIStub(json_responder(STATEMENT)))
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def pdf_text(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(api_mod, "extract_text", lambda _data: "statement text")


def test_upload_returns_ledger(pdf_text):
    resp = _client().post(
        "/api/parse", files={"file": ("statement.pdf", b"%PDF-1.4", "application/pdf")}
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "name": "Jane Doe",
        "address": "1 High Street, Springfield",
        "date": "31-01-2024",
        "startingBalance": 100,
        "endingBalance": 80,
        "currency": "$",
        "transactions": [
            {"date": "01-01-2024", "desc": "Coffee Shop", "amount": -3.5, "currency": "$"},
            {"date": "02-01-2024", "desc": "No Description", "amount": -21.5, "currency": "$"},
        ],
        "reconciles": False,
    }


def test_missing_file_is_input_error(pdf_text):
    resp = _client().post("/api/parse", data={"other": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}


def test_non_binary_file_field_is_input_error(pdf_text):
    resp = _client().post("/api/parse", data={"file": "not a file"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}


def test_no_text_returns_placeholder_ledger(monkeypatch: pytest.MonkeyPatch):
    def _no_text(_data: bytes) -> str:
        raise ExtractionError("Could not extract text from PDF")

    monkeypatch.setattr(api_mod, "extract_text", _no_text)
    resp = _client().post("/api/parse", files={"file": ("s.pdf", b"x", "application/pdf")})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "Could not extract text from PDF"
    assert body["transactions"] == []
    assert body["reconciles"] is None


def test_unparseable_transcription_returns_placeholder_ledger(pdf_text):
    client = _client(OpenAIStub(lambda _t: "no json here"))
    resp = client.post("/api/parse", files={"file": ("s.pdf", b"x", "application/pdf")})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Failed to extract statement details"
    assert resp.json()["name"] is None


def test_unexpected_failure_returns_500(monkeypatch: pytest.MonkeyPatch):
    def _boom(*_a, **_kw):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(web_mod, "analyse_statement", _boom)
    resp = _client().post("/api/parse", files={"file": ("s.pdf", b"x", "application/pdf")})
    assert resp.status_code == 500
    assert resp.json() == {"error": "disk on fire"}


def test_health():
    assert _client().get("/api/health").json() == {"status": "ok"}
