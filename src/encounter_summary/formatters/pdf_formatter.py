"""PDF output formatter using reportlab.

Requires the ``pdf`` optional dependency::

    pip install encounter-summary[pdf]
"""

from __future__ import annotations

import re
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

from encounter_summary.core.config import PDFFormattingConfig
from encounter_summary.core.text import format_timestamp
from encounter_summary.models import SummaryResult

try:
    from reportlab.lib import colors as rl_colors
    from reportlab.lib.enums import TA_CENTER
    from reportlab.lib.pagesizes import A4, LETTER
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import Flowable, SimpleDocTemplate, Spacer
    from reportlab.platypus import Paragraph as _RawParagraph
except ImportError as _exc:
    raise ImportError(
        "reportlab is required for PDF output. Install with: pip install encounter-summary[pdf]"
    ) from _exc


# Glyphs the base-14 fonts cannot render.
_UNICODE_REPLACEMENTS: dict[str, str] = {
    "\u2011": "-",       # non-breaking hyphen
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u202f": " ",       # narrow no-break space
    "\u00a0": " ",       # non-breaking space
    "\u2018": "'",       # left single quote
    "\u2019": "'",       # right single quote
    "\u201c": '"',       # left double quote
    "\u201d": '"',       # right double quote
    "\u2026": "...",     # ellipsis
    "\u2191": "^",       # upwards arrow
    "\u2193": "v",       # downwards arrow
}


def _sanitize_text(text: str) -> str:
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return escape(text)


def Paragraph(text: str, *args: Any, **kwargs: Any) -> _RawParagraph:  # noqa: N802
    """Sanitized Paragraph wrapper that escapes markup and swaps unsupported glyphs."""
    return _RawParagraph(_sanitize_text(str(text)), *args, **kwargs)


_PAGE_SIZES = {"letter": LETTER, "a4": A4}

_LIST_SECTIONS: tuple[tuple[str, str], ...] = (
    ("KEY FINDINGS", "key_findings"),
    ("ACTIVE DIAGNOSES", "active_diagnoses"),
    ("CURRENT MEDICATIONS", "current_medications"),
    ("PENDING INVESTIGATIONS", "pending_investigations"),
    ("ABNORMAL RESULTS", "abnormal_results"),
)


def pdf_filename(patient_name: str, when: datetime | None = None) -> str:
    """``Clinical_Summary_<Name>_<yyyymmdd>.pdf`` with whitespace runs as ``_``."""
    stamp = (when or datetime.now()).strftime("%Y%m%d")
    name = re.sub(r"\s+", "_", patient_name.strip())
    return f"Clinical_Summary_{name}_{stamp}.pdf"


class PDFFormatter:
    """Renders :class:`SummaryResult` as a printable PDF.

    Unlike the text export, only sections with content are rendered.
    """

    def __init__(self, config: PDFFormattingConfig | None = None) -> None:
        self._config = config or PDFFormattingConfig()
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, A4)
        self._margin: float = self._config.margin_inches * inch
        self._styles = self._build_styles()

    def format(self, summary: SummaryResult, **kwargs: Any) -> bytes:
        """Render *summary* to PDF bytes.

        Keyword Args:
            patient_name: Printed under the title when given.
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._page_size,
            leftMargin=self._margin,
            rightMargin=self._margin,
            topMargin=self._margin,
            bottomMargin=self._margin + 0.3 * inch,
            title="Clinical Encounter Summary",
        )
        story = self._build_story(summary, patient_name=kwargs.get("patient_name"))
        doc.build(story, onFirstPage=self._footer, onLaterPages=self._footer)
        return buffer.getvalue()

    def format_to_file(self, summary: SummaryResult, path: Path, **kwargs: Any) -> Path:
        """Write PDF to *path* and return it."""
        path.write_bytes(self.format(summary, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        base = getSampleStyleSheet()
        font = self._config.font_family
        body_sz = self._config.body_font_size
        heading_sz = self._config.heading_font_size
        return {
            "title": ParagraphStyle(
                "title",
                parent=base["Title"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                alignment=TA_CENTER,
                spaceAfter=10,
            ),
            "heading": ParagraphStyle(
                "heading",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=body_sz + 1,
                leading=(body_sz + 1) * 1.3,
                spaceBefore=10,
                spaceAfter=4,
            ),
            "body": ParagraphStyle(
                "body",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                spaceAfter=4,
            ),
            "bullet": ParagraphStyle(
                "bullet",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                leftIndent=14,
                bulletIndent=4,
                spaceAfter=2,
            ),
            "meta": ParagraphStyle(
                "meta",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                textColor=rl_colors.grey,
            ),
        }

    def _build_story(self, summary: SummaryResult, patient_name: str | None = None) -> list[Flowable]:
        styles = self._styles
        story: list[Flowable] = [Paragraph("CLINICAL ENCOUNTER SUMMARY", styles["title"])]
        if patient_name:
            story.append(Paragraph(f"Patient: {patient_name}", styles["meta"]))
        story.append(Paragraph(f"Generated: {format_timestamp(summary.generated_at)}", styles["meta"]))
        story.append(Spacer(1, 0.15 * inch))

        story.append(Paragraph("SUMMARY", styles["heading"]))
        story.append(Paragraph(summary.summary, styles["body"]))

        for heading, field in _LIST_SECTIONS:
            items: list[str] = getattr(summary, field)
            if items:
                story.append(Paragraph(heading, styles["heading"]))
                story.extend(Paragraph(item, styles["bullet"], bulletText="•") for item in items)

        if summary.treatment_progress:
            story.append(Paragraph("TREATMENT PROGRESS", styles["heading"]))
            story.append(Paragraph(summary.treatment_progress, styles["body"]))

        if summary.recommendations:
            story.append(Paragraph("RECOMMENDATIONS", styles["heading"]))
            story.extend(
                Paragraph(item, styles["bullet"], bulletText="•") for item in summary.recommendations
            )
        return story

    def _footer(self, canvas: Any, doc: Any) -> None:
        canvas.saveState()
        width, _ = self._page_size
        canvas.setFont(self._config.font_family, 8)
        canvas.setFillColor(rl_colors.grey)
        canvas.drawString(self._margin, self._margin - 14, f"Page {canvas.getPageNumber()}")
        canvas.drawRightString(width - self._margin, self._margin - 14, "Clinical Encounter Summary")
        canvas.restoreState()
