"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    state = request.app.state
    store = getattr(state, "store", None)
    if store is None:
        return {"status": "starting"}
    cache = getattr(state, "cache", None)
    if cache is None:
        cache_status = "disabled"
    else:
        cache_status = "ok" if cache.ping() else "unavailable"
    return {"status": "ready", "store": type(store).__name__, "cache": cache_status}
