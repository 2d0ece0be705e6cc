"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe, 200 whenever the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(req: Request) -> dict[str, str]:
    """Readiness probe: the classifier and analytics engine are wired."""
    state = req.app.state
    if not hasattr(state, "classifier") or not hasattr(state, "engine"):
        return {"status": "starting"}
    return {"status": "ready"}
