"""Nested pydantic-settings configuration for the application.

Each group reads its own ``ENCSUM_<GROUP>_*`` env vars::

    export ENCSUM_LLM_API_KEY=sk-ant-...
    export ENCSUM_STORE_PATH=./records.json
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ProviderKind(str, Enum):
    """Generative-text provider a configuration resolves to."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    NONE = "none"


def detect_provider_from_key(api_key: str) -> ProviderKind:
    """Infer the provider from a credential's literal prefix.

    ``sk-ant`` keys are Anthropic; any other ``sk-`` key is OpenAI.
    """
    key = api_key.strip()
    if key.startswith("sk-ant"):
        return ProviderKind.ANTHROPIC
    if key.startswith("sk-"):
        return ProviderKind.OPENAI
    return ProviderKind.NONE


class LLMConfig(BaseSettings):
    """Remote summarization provider configuration.

    Env vars use ``ENCSUM_LLM_`` prefix::

        export ENCSUM_LLM_PROVIDER=anthropic
        export ENCSUM_LLM_API_KEY=sk-ant-...
    """

    model_config = {"env_prefix": "ENCSUM_LLM_"}

    provider: Literal["auto", "openai", "anthropic", "none"] = "auto"
    api_key: str = ""
    openai_model: str = "gpt-4-turbo-preview"
    anthropic_model: str = "claude-3-sonnet-20240229"
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout: float = Field(default=60.0, gt=0.0)
    openai_base_url: str | None = None
    anthropic_base_url: str | None = None
    anthropic_version: str = "2023-06-01"

    def resolve_provider(self) -> ProviderKind:
        """Decide the provider once; an explicit ``provider`` wins over key sniffing."""
        if not self.api_key.strip() or self.provider == "none":
            return ProviderKind.NONE
        if self.provider == "auto":
            return detect_provider_from_key(self.api_key)
        return ProviderKind(self.provider)


class SummaryConfig(BaseSettings):
    """Summary generation tunables.

    Env vars use ``ENCSUM_SUMMARY_`` prefix.
    """

    model_config = {"env_prefix": "ENCSUM_SUMMARY_"}

    vitals_stale_after_days: int = Field(default=7, ge=0)
    remote_summary_max_chars: int = Field(default=1500, gt=0)


class StoreConfig(BaseSettings):
    """Record store configuration.

    Env vars use ``ENCSUM_STORE_`` prefix.
    """

    model_config = {"env_prefix": "ENCSUM_STORE_"}

    backend: Literal["file", "memory"] = "file"
    path: Path = Path("./records.json")


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``ENCSUM_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "ENCSUM_OBSERVABILITY_"}

    service_name: str = "encounter-summary"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP API configuration.

    Env vars use ``ENCSUM_API_`` prefix.
    """

    model_config = {"env_prefix": "ENCSUM_API_"}

    title: str = "Encounter Summary API"
    description: str = "Clinical encounter summaries with local fallback"
    host: str = "0.0.0.0"
    port: int = 8080


class PDFFormattingConfig(BaseSettings):
    """PDF output formatting configuration.

    Env vars use ``ENCSUM_PDF_`` prefix::

        export ENCSUM_PDF_PAGE_SIZE=a4
    """

    model_config = {"env_prefix": "ENCSUM_PDF_"}

    page_size: Literal["letter", "a4"] = "a4"
    margin_inches: float = Field(default=0.75, gt=0.0, le=3.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=10, ge=6, le=72)
    heading_font_size: int = Field(default=14, ge=6, le=72)


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    pdf: PDFFormattingConfig = Field(default_factory=PDFFormattingConfig)
