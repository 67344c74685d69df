"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from encounter_summary.exceptions import EncounterSummaryError, PatientNotFoundError, RecordStoreError

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(PatientNotFoundError)
    async def handle_not_found(request: Request, exc: PatientNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc), "type": "patient_not_found"})

    @app.exception_handler(RecordStoreError)
    async def handle_store_error(request: Request, exc: RecordStoreError) -> JSONResponse:
        log.error(f"Record store failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"error": str(exc), "type": "record_store_error"})

    @app.exception_handler(EncounterSummaryError)
    async def handle_generic_error(request: Request, exc: EncounterSummaryError) -> JSONResponse:
        log.error(f"Unhandled summary error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "encounter_summary_error"})
