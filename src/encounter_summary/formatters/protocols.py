"""Output formatter protocol: the contract all formatters implement."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from encounter_summary.models import SummaryResult


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for summary formatters (text, JSON, PDF)."""

    def format(self, summary: SummaryResult, **kwargs: Any) -> bytes:
        """Render the summary into output bytes."""
        ...

    def format_to_file(self, summary: SummaryResult, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'text/plain')."""
        ...


__all__ = ["IOutputFormatter"]
