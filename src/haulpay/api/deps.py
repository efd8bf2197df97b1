"""Request-scoped access to the wired backends."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request


def get_store(request: Request) -> Any:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Store not initialized")
    return store
