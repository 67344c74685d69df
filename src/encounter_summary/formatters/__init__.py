"""Output formatters for rendering SummaryResult to various formats.

Usage::

    from encounter_summary.formatters import PDFFormatter, TextFormatter

    text = TextFormatter().format(summary)
    pdf_bytes = PDFFormatter().format(summary, patient_name="Ada Obi")
"""

from __future__ import annotations

from typing import Any

from encounter_summary.formatters.json_formatter import JSONFormatter
from encounter_summary.formatters.protocols import IOutputFormatter
from encounter_summary.formatters.text_formatter import TextFormatter, format_summary_as_text

__all__ = [
    "IOutputFormatter",
    "JSONFormatter",
    "PDFFormatter",
    "TextFormatter",
    "format_summary_as_text",
    "get_formatter",
]


def __getattr__(name: str) -> Any:
    """Lazy-load PDFFormatter so reportlab is only imported when needed."""
    if name == "PDFFormatter":
        from encounter_summary.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def get_formatter(output_format: str, **kwargs: Any) -> IOutputFormatter:
    """Formatter for ``text``, ``json`` or ``pdf``; *kwargs* go to the PDF formatter."""
    if output_format == "text":
        return TextFormatter()
    if output_format == "json":
        return JSONFormatter()
    if output_format == "pdf":
        from encounter_summary.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter(**kwargs)
    raise ValueError(f"Unknown output format: {output_format!r}")
