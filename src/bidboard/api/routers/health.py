"""
bidboard.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that exercises the remote store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from bidboard.api.deps import store_from_app
from bidboard.domain import PROFILES
from bidboard.store.base import RemoteStore, StoreError

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(store: RemoteStore = Depends(store_from_app)) -> dict[str, str]:
    # Readiness: a cheap filtered read proves the backend is reachable.
    try:
        await store.find_one(PROFILES, {"id": "readiness-probe"})
    except StoreError as e:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return {"status": "ready"}
