"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe; always returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    """Readiness probe; reports the store and summarization provider in use."""
    settings = request.app.state.settings
    orchestrator = request.app.state.orchestrator
    return {
        "status": "ready",
        "store": settings.store.backend,
        "provider": orchestrator.provider.value,
    }
