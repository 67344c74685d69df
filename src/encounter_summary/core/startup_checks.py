"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from encounter_summary.core.config import ProviderKind, detect_provider_from_key

if TYPE_CHECKING:
    from encounter_summary.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings, *, check_store: bool = True) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_api_key(settings)
    if check_store:
        _check_store(settings)


def _check_api_key(settings: AppSettings) -> None:
    """An explicit provider needs a key; an unrecognised key under ``auto`` only warns."""
    llm = settings.llm
    has_key = bool(llm.api_key.strip())
    if llm.provider in ("openai", "anthropic") and not has_key:
        raise ValueError(
            f"ENCSUM_LLM_API_KEY is required for provider '{llm.provider}'. "
            f"Set it, or use ENCSUM_LLM_PROVIDER=auto to fall back to local summaries."
        )
    if llm.provider == "auto" and has_key and detect_provider_from_key(llm.api_key) is ProviderKind.NONE:
        log.warning(
            "ENCSUM_LLM_API_KEY does not look like an OpenAI or Anthropic key; "
            "summaries will be generated locally. Set ENCSUM_LLM_PROVIDER to force a provider."
        )
    if not has_key:
        log.info("No ENCSUM_LLM_API_KEY configured; using local summaries only")


def _check_store(settings: AppSettings) -> None:
    """The file store must point at an existing export."""
    if settings.store.backend == "file" and not settings.store.path.is_file():
        raise ValueError(
            f"ENCSUM_STORE_PATH={settings.store.path} does not exist. "
            f"Point it at a record export or set ENCSUM_STORE_BACKEND=memory."
        )
