"""Encounter summary endpoint."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from encounter_summary.formatters import format_summary_as_text

router = APIRouter(tags=["summary"])


@router.get("/patients/{patient_id}/summary")
async def get_summary(
    request: Request,
    patient_id: str,
    format: Literal["json", "text", "pdf"] = Query(default="json"),
) -> Response:
    """Summarize a patient's clinical history.

    ``json`` returns the camelCase result, ``text`` the plain-text export and
    ``pdf`` a downloadable document.
    """
    orchestrator = request.app.state.orchestrator
    patient, result = await orchestrator.summarize_with_patient(patient_id)

    if format == "text":
        return PlainTextResponse(format_summary_as_text(result))

    if format == "pdf":
        from encounter_summary.formatters.pdf_formatter import PDFFormatter, pdf_filename

        settings = request.app.state.settings
        pdf_bytes = PDFFormatter(settings.pdf).format(result, patient_name=patient.full_name)
        filename = pdf_filename(patient.full_name or patient.id, result.generated_at)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return JSONResponse(result.to_wire())
