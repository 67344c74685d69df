"""Shared fixtures for encounter-summary tests."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest
import structlog

from encounter_summary.core.config import AppSettings, LLMConfig, StoreConfig
from encounter_summary.store.memory_backend import MemoryRecordStore
from tests.fakes.sample_records import NOW, empty_store, populated_store


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store() -> MemoryRecordStore:
    """Patient ``p1`` with every record kind populated."""
    return populated_store()


@pytest.fixture
def bare_store() -> MemoryRecordStore:
    """Patient ``p1`` with no clinical records."""
    return empty_store()


@pytest.fixture
def local_settings() -> AppSettings:
    """No API key: summaries are always produced locally."""
    return AppSettings(
        llm=LLMConfig(provider="auto", api_key=""),
        store=StoreConfig(backend="memory"),
    )


@pytest.fixture
def openai_settings() -> AppSettings:
    return AppSettings(
        llm=LLMConfig(provider="auto", api_key="sk-test-openai"),
        store=StoreConfig(backend="memory"),
    )


@pytest.fixture
def anthropic_settings() -> AppSettings:
    return AppSettings(
        llm=LLMConfig(provider="auto", api_key="sk-ant-test"),
        store=StoreConfig(backend="memory"),
    )


@pytest.fixture(autouse=True)
def _restore_logging():
    """setup_logging() replaces root handlers; undo it between tests."""
    root = logging.getLogger()
    package_logger = logging.getLogger("encounter_summary")
    handlers, level, package_level = root.handlers[:], root.level, package_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    package_logger.setLevel(package_level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
