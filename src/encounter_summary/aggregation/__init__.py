"""Concurrent aggregation of a patient's clinical records."""

from __future__ import annotations

from encounter_summary.aggregation.aggregator import ClinicalDataAggregator, sort_most_recent_first

__all__ = ["ClinicalDataAggregator", "sort_most_recent_first"]
