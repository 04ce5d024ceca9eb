"""FastAPI application exposing the statement upload endpoint.

Routes
------
- ``POST /api/parse``: multipart upload under the ``file`` field; returns the
  ledger JSON (see :mod:`statement_ledger.models`).
- ``GET /api/health``: liveness probe.

Status codes: 200 on success, 400 ``{"error"}`` when no file is present,
422 with the placeholder ledger shape when no text or structured data could be
extracted, 500 ``{"error"}`` for anything unexpected.
"""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from .api import analyse_statement
from .config import Settings
from .errors import InputError
from .logging_setup import configure_logging, get_logger

UPLOAD_FIELD = "file"

_logger = get_logger("statement_ledger.web")


async def _read_upload(request: Request) -> tuple[str, bytes]:
    form = await request.form()
    upload = form.get(UPLOAD_FIELD)
    if upload is None or not isinstance(upload, UploadFile):
        raise InputError()
    data = await upload.read()
    return upload.filename or "", data


def register_error_handlers(app: FastAPI) -> None:
    """Map request-level errors to ``{"error": ...}`` JSON bodies."""

    @app.exception_handler(InputError)
    async def _input_error(_request: Request, exc: InputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def _unexpected(_request: Request, exc: Exception) -> JSONResponse:
        _logger.exception("web:unexpected_error error=%s", exc.__class__.__name__)
        return JSONResponse(status_code=500, content={"error": str(exc) or "Unexpected error"})


def create_app(settings: Settings | None = None, *, client: Any | None = None) -> FastAPI:
    """Build the application.

    ``settings`` default to :meth:`Settings.from_env` after loading ``.env``;
    ``client`` lets tests inject a stub transcription client.
    """

    if settings is None:
        load_dotenv(override=False)
        settings = Settings.from_env()
    configure_logging()

    app = FastAPI(
        title="Statement Ledger",
        description="Bank statement PDF → validated, reconciled transaction ledger.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.client = client
    register_error_handlers(app)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/parse")
    async def parse_statement(request: Request) -> JSONResponse:
        filename, data = await _read_upload(request)
        _logger.info("parse:received filename=%r bytes=%d", filename, len(data))
        ledger = await run_in_threadpool(
            analyse_statement,
            data,
            settings=request.app.state.settings,
            client=request.app.state.client,
        )
        status = 422 if ledger.error is not None else 200
        return JSONResponse(status_code=status, content=ledger.to_dict())

    return app


__all__ = ["UPLOAD_FIELD", "create_app", "register_error_handlers"]
