"""Deterministic fact extraction from a clinical snapshot."""

from __future__ import annotations

from encounter_summary.extraction.facts import ABNORMAL_KEYWORDS, describe_vitals, extract_facts, is_abnormal

__all__ = ["ABNORMAL_KEYWORDS", "describe_vitals", "extract_facts", "is_abnormal"]
