"""Plain-text summary document.

Section order and empty-list placeholders are fixed; downstream exports
compare this output verbatim.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from encounter_summary.core.text import format_timestamp
from encounter_summary.models import SummaryResult

RULE = "=" * 50

# (heading, field, placeholder when the list is empty)
LIST_SECTIONS: tuple[tuple[str, str, str], ...] = (
    ("KEY FINDINGS", "key_findings", "No key findings documented"),
    ("ACTIVE DIAGNOSES", "active_diagnoses", "No active diagnoses"),
    ("CURRENT MEDICATIONS", "current_medications", "No active medications"),
    ("PENDING INVESTIGATIONS", "pending_investigations", "No pending investigations"),
    ("ABNORMAL RESULTS", "abnormal_results", "No abnormal results flagged"),
)
RECOMMENDATIONS_PLACEHOLDER = "No specific recommendations"
TREATMENT_PLACEHOLDER = "Not documented"


def _bullets(items: list[str], placeholder: str) -> str:
    if not items:
        return f"• {placeholder}"
    return "\n".join(f"• {item}" for item in items)


def format_summary_as_text(summary: SummaryResult) -> str:
    """Render *summary* as the plain-text export document."""
    blocks = [
        f"CLINICAL ENCOUNTER SUMMARY\nGenerated: {format_timestamp(summary.generated_at)}\n{RULE}",
        f"SUMMARY:\n{summary.summary}",
    ]
    for heading, field, placeholder in LIST_SECTIONS:
        blocks.append(f"{heading}:\n{_bullets(getattr(summary, field), placeholder)}")
    blocks.append(f"TREATMENT PROGRESS:\n{summary.treatment_progress or TREATMENT_PLACEHOLDER}")
    blocks.append(f"RECOMMENDATIONS:\n{_bullets(summary.recommendations, RECOMMENDATIONS_PLACEHOLDER)}")
    return "\n\n".join(blocks) + "\n"


class TextFormatter:
    """Renders :class:`SummaryResult` as UTF-8 plain text."""

    def format(self, summary: SummaryResult, **kwargs: Any) -> bytes:
        return format_summary_as_text(summary).encode("utf-8")

    def format_to_file(self, summary: SummaryResult, path: Path, **kwargs: Any) -> Path:
        path.write_bytes(self.format(summary, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "text/plain; charset=utf-8"
