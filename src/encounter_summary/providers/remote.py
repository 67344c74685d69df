"""Remote summarization adapter.

Builds the prompt, makes one provider call, and folds the response into a
:class:`SummaryResult`. Outcomes are returned as :class:`Ok` or :class:`Err`
rather than raised, so the caller can branch on :class:`FailureKind`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

from encounter_summary.composition.local import build_local_summary
from encounter_summary.core.config import AppSettings, ProviderKind
from encounter_summary.exceptions import (
    EncounterSummaryError,
    ProviderAuthError,
    ProviderRequestError,
    ProviderUnavailableError,
    ResponseParseError,
)
from encounter_summary.models import ExtractedFacts, PatientClinicalSnapshot, SummaryResult
from encounter_summary.providers.client import LLMClient
from encounter_summary.providers.json_parser import extract_json_object
from encounter_summary.providers.prompts import SYSTEM_PROMPT, build_summary_prompt

log = logging.getLogger(__name__)

SUMMARY_FAILED = "Summary generation failed"


class FailureKind(str, Enum):
    UNAVAILABLE = "unavailable"
    AUTH = "auth"
    REQUEST = "request"
    PARSE = "parse"


@dataclass(frozen=True)
class Ok:
    value: SummaryResult


@dataclass(frozen=True)
class Err:
    """A failed remote attempt.

    ``fallback`` is set only for ``PARSE``: the raw response as narrative
    with locally extracted lists.
    """

    kind: FailureKind
    error: EncounterSummaryError
    fallback: SummaryResult | None = None


RemoteOutcome = Union[Ok, Err]

_FAILURE_KINDS: tuple[tuple[type[EncounterSummaryError], FailureKind], ...] = (
    (ProviderUnavailableError, FailureKind.UNAVAILABLE),
    (ProviderAuthError, FailureKind.AUTH),
    (ProviderRequestError, FailureKind.REQUEST),
    (ResponseParseError, FailureKind.PARSE),
)


def failure_kind_for(error: EncounterSummaryError) -> FailureKind:
    for error_type, kind in _FAILURE_KINDS:
        if isinstance(error, error_type):
            return kind
    return FailureKind.REQUEST


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def merge_remote_result(
    parsed: dict[str, Any], facts: ExtractedFacts, *, now: datetime
) -> SummaryResult:
    """Combine provider output with local facts.

    Medications, pending investigations, abnormal results and treatment
    progress always come from *facts*, whatever the provider returned.
    """
    summary = parsed.get("summary")
    return SummaryResult(
        summary=summary if isinstance(summary, str) and summary else SUMMARY_FAILED,
        key_findings=_string_list(parsed.get("keyFindings")),
        active_diagnoses=_string_list(parsed.get("activeDiagnoses")),
        current_medications=list(facts.current_medications),
        pending_investigations=list(facts.pending_investigations),
        abnormal_results=list(facts.abnormal_results),
        treatment_progress=facts.treatment_progress,
        recommendations=_string_list(parsed.get("recommendations")),
        generated_at=now,
        source="remote",
    )


def unparsed_remote_result(
    raw_response: str,
    snapshot: PatientClinicalSnapshot,
    facts: ExtractedFacts,
    *,
    now: datetime,
    max_chars: int = 1500,
) -> SummaryResult:
    """Raw response prose as the narrative; every list from the local facts."""
    local = build_local_summary(snapshot, facts, now=now)
    narrative = raw_response[:max_chars] or local.summary
    return local.model_copy(update={"summary": narrative, "source": "remote_unparsed"})


class RemoteSummarizer:
    """Best-effort summary from the configured generative-text provider."""

    def __init__(self, settings: AppSettings, client: LLMClient | None = None) -> None:
        self._settings = settings
        self._provider = settings.llm.resolve_provider()
        self._client = client

    @property
    def provider(self) -> ProviderKind:
        return self._provider

    def _get_client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(self._settings.llm, self._provider)
        return self._client

    async def summarize(
        self, snapshot: PatientClinicalSnapshot, facts: ExtractedFacts, *, now: datetime
    ) -> RemoteOutcome:
        if not self._settings.llm.api_key.strip():
            return Err(FailureKind.UNAVAILABLE, ProviderUnavailableError("No API key configured"))
        if self._provider is ProviderKind.NONE:
            return Err(
                FailureKind.UNAVAILABLE,
                ProviderUnavailableError("API key does not match a known provider"),
            )

        prompt = build_summary_prompt(snapshot, now=now)
        try:
            response = await self._get_client().complete(prompt, system_prompt=SYSTEM_PROMPT)
        except (ProviderUnavailableError, ProviderAuthError, ProviderRequestError) as exc:
            return Err(failure_kind_for(exc), exc)

        try:
            parsed = extract_json_object(response)
        except ResponseParseError as exc:
            fallback = unparsed_remote_result(
                response,
                snapshot,
                facts,
                now=now,
                max_chars=self._settings.summary.remote_summary_max_chars,
            )
            return Err(FailureKind.PARSE, exc, fallback=fallback)

        return Ok(merge_remote_result(parsed, facts, now=now))
