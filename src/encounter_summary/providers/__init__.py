"""Remote summarization: prompt, LiteLLM client, response parsing and merge."""

from __future__ import annotations

from encounter_summary.providers.client import LLMClient
from encounter_summary.providers.json_parser import extract_json_object
from encounter_summary.providers.prompts import SYSTEM_PROMPT, build_summary_prompt
from encounter_summary.providers.remote import (
    Err,
    FailureKind,
    Ok,
    RemoteOutcome,
    RemoteSummarizer,
    merge_remote_result,
)

__all__ = [
    "Err",
    "FailureKind",
    "LLMClient",
    "Ok",
    "RemoteOutcome",
    "RemoteSummarizer",
    "SYSTEM_PROMPT",
    "build_summary_prompt",
    "extract_json_object",
    "merge_remote_result",
]
