"""encounter-summary: clinical encounter summaries with a guaranteed local fallback.

Usage::

    from encounter_summary import AppSettings, MemoryRecordStore, SummarizationOrchestrator

    orchestrator = SummarizationOrchestrator(store, AppSettings())
    result = await orchestrator.summarize("patient-1")
"""

from __future__ import annotations

from encounter_summary.aggregation import ClinicalDataAggregator
from encounter_summary.composition import build_local_summary, compose_narrative
from encounter_summary.core.config import AppSettings, LLMConfig, ProviderKind
from encounter_summary.exceptions import (
    EncounterSummaryError,
    PatientNotFoundError,
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderUnavailableError,
    RecordStoreError,
    ResponseParseError,
)
from encounter_summary.extraction import extract_facts
from encounter_summary.formatters import JSONFormatter, TextFormatter, format_summary_as_text
from encounter_summary.models import (
    ExtractedFacts,
    PatientClinicalSnapshot,
    RecordKind,
    SummaryResult,
)
from encounter_summary.orchestrator import SummarizationOrchestrator
from encounter_summary.providers import LLMClient, RemoteSummarizer, extract_json_object
from encounter_summary.store import IRecordStore, JsonFileRecordStore, MemoryRecordStore

__all__ = [
    "AppSettings",
    "ClinicalDataAggregator",
    "EncounterSummaryError",
    "ExtractedFacts",
    "IRecordStore",
    "JSONFormatter",
    "JsonFileRecordStore",
    "LLMClient",
    "LLMConfig",
    "MemoryRecordStore",
    "PatientClinicalSnapshot",
    "PatientNotFoundError",
    "ProviderAuthError",
    "ProviderError",
    "ProviderKind",
    "ProviderRequestError",
    "ProviderUnavailableError",
    "RecordKind",
    "RecordStoreError",
    "RemoteSummarizer",
    "ResponseParseError",
    "SummarizationOrchestrator",
    "SummaryResult",
    "TextFormatter",
    "build_local_summary",
    "compose_narrative",
    "extract_facts",
    "extract_json_object",
    "format_summary_as_text",
]
