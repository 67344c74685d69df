"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from encounter_summary.api.middleware.error_handler import register_error_handlers
from encounter_summary.api.routes import health, summary
from encounter_summary.core.config import APIConfig, AppSettings
from encounter_summary.core.logging_config import setup_logging
from encounter_summary.core.startup_checks import validate_settings
from encounter_summary.orchestrator import SummarizationOrchestrator
from encounter_summary.providers.client import LLMClient
from encounter_summary.store import IRecordStore, build_store


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("encounter-summary")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: AppSettings | None = None,
    store: IRecordStore | None = None,
    llm_client: LLMClient | None = None,
) -> FastAPI:
    """Build the application.

    Settings default to the environment; a pre-built *store* skips the
    store-path check and backend construction.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        app_settings = settings or AppSettings()
        validate_settings(app_settings, check_store=store is None)
        setup_logging(app_settings.observability)

        record_store = store or build_store(app_settings.store.backend, app_settings.store.path)
        app.state.settings = app_settings
        app.state.orchestrator = SummarizationOrchestrator(record_store, app_settings, llm_client=llm_client)
        yield

    api_config = settings.api if settings is not None else APIConfig()
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(summary.router, prefix="/api")
    return app


app = create_app()
