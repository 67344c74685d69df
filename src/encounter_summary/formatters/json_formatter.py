"""JSON output formatter: camelCase wire shape for API responses and files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from encounter_summary.models import SummaryResult


class JSONFormatter:
    """Renders :class:`SummaryResult` as indented camelCase JSON bytes."""

    def format(self, summary: SummaryResult, **kwargs: Any) -> bytes:
        """Serialize *summary* to pretty-printed JSON bytes."""
        return json.dumps(summary.to_wire(), indent=2, ensure_ascii=False).encode("utf-8")

    def format_to_file(self, summary: SummaryResult, path: Path, **kwargs: Any) -> Path:
        """Write JSON to *path* and return it."""
        path.write_bytes(self.format(summary, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/json"
