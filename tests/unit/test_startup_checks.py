"""Tests for startup validation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from encounter_summary.core.config import AppSettings, LLMConfig, StoreConfig
from encounter_summary.core.startup_checks import validate_settings


def _settings(provider: str = "auto", api_key: str = "", backend: str = "memory", path: Path | None = None) -> AppSettings:
    store = StoreConfig(backend=backend, path=path) if path is not None else StoreConfig(backend=backend)
    return AppSettings(llm=LLMConfig(provider=provider, api_key=api_key), store=store)


class TestApiKeyChecks:
    def test_no_key_is_fine_under_auto(self) -> None:
        validate_settings(_settings())

    @pytest.mark.parametrize("provider", ["openai", "anthropic"])
    def test_explicit_provider_requires_key(self, provider: str) -> None:
        with pytest.raises(ValueError, match="ENCSUM_LLM_API_KEY"):
            validate_settings(_settings(provider=provider))

    def test_explicit_provider_with_key(self) -> None:
        validate_settings(_settings(provider="anthropic", api_key="proxy-key"))

    def test_unrecognised_key_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="encounter_summary.core.startup_checks"):
            validate_settings(_settings(api_key="pk-live-123"))
        assert any("does not look like" in r.getMessage() for r in caplog.records)

    def test_provider_none_needs_no_key(self) -> None:
        validate_settings(_settings(provider="none"))


class TestStoreChecks:
    def test_missing_export_file(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="ENCSUM_STORE_PATH"):
            validate_settings(_settings(backend="file", path=tmp_path / "absent.json"))

    def test_existing_export_file(self, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text("{}", encoding="utf-8")
        validate_settings(_settings(backend="file", path=path))

    def test_store_check_can_be_skipped(self, tmp_path: Path) -> None:
        validate_settings(_settings(backend="file", path=tmp_path / "absent.json"), check_store=False)
