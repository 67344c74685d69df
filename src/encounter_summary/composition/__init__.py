"""Local, template-based narrative composition."""

from __future__ import annotations

from encounter_summary.composition.local import build_local_summary, compose_narrative

__all__ = ["build_local_summary", "compose_narrative"]
