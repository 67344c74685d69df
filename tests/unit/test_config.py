"""Tests for configuration groups and provider resolution."""

from __future__ import annotations

import pytest

from encounter_summary.core.config import (
    AppSettings,
    LLMConfig,
    ProviderKind,
    SummaryConfig,
    detect_provider_from_key,
)


class TestDetectProviderFromKey:
    def test_anthropic_prefix(self) -> None:
        assert detect_provider_from_key("sk-ant-api03-abc") is ProviderKind.ANTHROPIC

    def test_openai_prefix(self) -> None:
        assert detect_provider_from_key("sk-proj-abc") is ProviderKind.OPENAI

    def test_anthropic_checked_before_generic_sk(self) -> None:
        """``sk-ant`` also starts with ``sk-``; it must still route to Anthropic."""
        assert detect_provider_from_key("sk-ant-xyz") is not ProviderKind.OPENAI

    def test_unrecognised_key(self) -> None:
        assert detect_provider_from_key("AIzaSy-something") is ProviderKind.NONE

    def test_surrounding_whitespace_ignored(self) -> None:
        assert detect_provider_from_key("  sk-ant-abc \n") is ProviderKind.ANTHROPIC


class TestResolveProvider:
    def test_no_key_is_none_even_when_explicit(self) -> None:
        assert LLMConfig(provider="openai", api_key="").resolve_provider() is ProviderKind.NONE

    def test_auto_uses_key_prefix(self) -> None:
        assert LLMConfig(provider="auto", api_key="sk-ant-1").resolve_provider() is ProviderKind.ANTHROPIC
        assert LLMConfig(provider="auto", api_key="sk-1").resolve_provider() is ProviderKind.OPENAI

    def test_explicit_provider_wins_over_prefix(self) -> None:
        cfg = LLMConfig(provider="anthropic", api_key="proxy-key-123")
        assert cfg.resolve_provider() is ProviderKind.ANTHROPIC

    def test_explicit_none_disables_remote(self) -> None:
        assert LLMConfig(provider="none", api_key="sk-1").resolve_provider() is ProviderKind.NONE


class TestSettingsFromEnv:
    def test_llm_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENCSUM_LLM_API_KEY", "sk-ant-env")
        monkeypatch.setenv("ENCSUM_LLM_TIMEOUT", "12.5")
        cfg = LLMConfig()
        assert cfg.api_key == "sk-ant-env"
        assert cfg.timeout == 12.5

    def test_app_settings_reads_groups_at_construction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENCSUM_SUMMARY_VITALS_STALE_AFTER_DAYS", "14")
        monkeypatch.setenv("ENCSUM_STORE_BACKEND", "memory")
        settings = AppSettings()
        assert settings.summary.vitals_stale_after_days == 14
        assert settings.store.backend == "memory"

    def test_defaults(self) -> None:
        cfg = LLMConfig(api_key="")
        assert cfg.openai_model == "gpt-4-turbo-preview"
        assert cfg.anthropic_model == "claude-3-sonnet-20240229"
        assert cfg.temperature == 0.3
        assert cfg.max_tokens == 2000
        assert cfg.anthropic_version == "2023-06-01"
        assert SummaryConfig().remote_summary_max_chars == 1500

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError):
            LLMConfig(timeout=0)
