"""Summarization orchestrator, the top-level entry point.

Aggregate, extract facts, then try the remote provider when one is
configured. Any remote failure degrades to the local summary; only
``PatientNotFoundError`` and ``RecordStoreError`` reach the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from encounter_summary.aggregation.aggregator import ClinicalDataAggregator
from encounter_summary.composition.local import build_local_summary
from encounter_summary.core.config import AppSettings, ProviderKind
from encounter_summary.extraction.facts import extract_facts
from encounter_summary.models import ExtractedFacts, Patient, PatientClinicalSnapshot, SummaryResult
from encounter_summary.providers.client import LLMClient
from encounter_summary.providers.remote import Err, FailureKind, RemoteSummarizer
from encounter_summary.store.protocols import IRecordStore

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SummarizationOrchestrator:
    """Produces a :class:`SummaryResult` for a patient, always.

    Args:
        store: Record store to read from.
        settings: Application settings; the provider is resolved once here.
        llm_client: Optional pre-built client (tests inject a fake).
        clock: Returns "now"; defaults to the UTC wall clock.
    """

    def __init__(
        self,
        store: IRecordStore,
        settings: AppSettings,
        *,
        llm_client: LLMClient | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._aggregator = ClinicalDataAggregator(store)
        self._remote = RemoteSummarizer(settings, client=llm_client)
        self._clock = clock or _utcnow

    @property
    def provider(self) -> ProviderKind:
        return self._remote.provider

    def extract(self, snapshot: PatientClinicalSnapshot, now: datetime) -> ExtractedFacts:
        return extract_facts(
            snapshot,
            now=now,
            stale_after_days=self._settings.summary.vitals_stale_after_days,
        )

    async def facts_for(self, patient_id: str) -> tuple[PatientClinicalSnapshot, ExtractedFacts]:
        """Aggregate and extract without composing a narrative."""
        snapshot = await self._aggregator.aggregate(patient_id)
        return snapshot, self.extract(snapshot, self._clock())

    async def summarize(self, patient_id: str) -> SummaryResult:
        """Summary for *patient_id*; remote when configured, local otherwise.

        Raises:
            PatientNotFoundError: Unknown patient.
            RecordStoreError: The record store could not be read.
        """
        _, result = await self.summarize_with_patient(patient_id)
        return result

    async def summarize_with_patient(self, patient_id: str) -> tuple[Patient, SummaryResult]:
        """Like :meth:`summarize`, also returning the patient record."""
        now = self._clock()
        snapshot = await self._aggregator.aggregate(patient_id)
        return snapshot.patient, await self._summarize_snapshot(snapshot, now)

    async def _summarize_snapshot(self, snapshot: PatientClinicalSnapshot, now: datetime) -> SummaryResult:
        patient_id = snapshot.patient.id
        facts = self.extract(snapshot, now)
        local = build_local_summary(snapshot, facts, now=now)

        if self._remote.provider is ProviderKind.NONE:
            log.info(f"No summarization provider configured; using local summary for {patient_id}")
            return local

        try:
            outcome = await self._remote.summarize(snapshot, facts, now=now)
        except Exception:
            log.exception(f"Remote summarization raised unexpectedly for {patient_id}; using local summary")
            return local

        if isinstance(outcome, Err):
            if outcome.kind is FailureKind.UNAVAILABLE:
                log.info(f"Remote summarization unavailable: {outcome.error}; using local summary")
            elif outcome.kind is FailureKind.PARSE and outcome.fallback is not None:
                log.warning(f"Could not parse remote summary for {patient_id}: {outcome.error}")
                return outcome.fallback
            else:
                log.warning(
                    f"Remote summarization failed ({outcome.kind.value}) for {patient_id}: "
                    f"{outcome.error}; using local summary"
                )
            return local

        log.info(f"Remote summary generated for {patient_id} via {self._remote.provider.value}")
        return outcome.value
