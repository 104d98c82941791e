from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_502_BAD_GATEWAY,
)

from bidboard.admin.mutations import MutationErrorKind, PendingMutation
from bidboard.admin.viewer import AdminViewer, UnknownRowError, ViewerSnapshot
from bidboard.api.deps import admin_viewer
from bidboard.domain import ADMIN_TABLES
from bidboard.result import Err

router = APIRouter(prefix="/v1/admin", tags=["admin"])


class PendingResponse(BaseModel):
    kind: str
    table: str
    row_id: str | None = None
    label: str | None = None

    @classmethod
    def of(cls, pending: PendingMutation) -> PendingResponse:
        return cls(
            kind=str(pending.kind),
            table=pending.table,
            row_id=pending.row_id,
            label=pending.label,
        )


class StatusResponse(BaseModel):
    success: bool
    message: str


class ViewerResponse(BaseModel):
    tables: dict[str, list[dict[str, Any]]]
    selections: dict[str, list[str]]
    pending: PendingResponse | None = None
    status: StatusResponse | None = None
    error: str | None = None

    @classmethod
    def of(cls, snap: ViewerSnapshot) -> ViewerResponse:
        return cls(
            tables={t: [dict(r) for r in rows.rows] for t, rows in snap.rows.items()},
            selections={t: sorted(sel.ids) for t, sel in snap.selections.items()},
            pending=PendingResponse.of(snap.pending) if snap.pending else None,
            status=(
                StatusResponse(success=snap.status.success, message=snap.status.message)
                if snap.status
                else None
            ),
            error=snap.error,
        )


def _table(table: str) -> str:
    if table not in ADMIN_TABLES:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=f"Unknown table: {table}")
    return table


@router.get("/viewer", response_model=ViewerResponse)
async def get_viewer(viewer: AdminViewer = Depends(admin_viewer)) -> ViewerResponse:
    return ViewerResponse.of(viewer.snapshot())


@router.post("/viewer/refresh", response_model=ViewerResponse)
async def refresh_viewer(viewer: AdminViewer = Depends(admin_viewer)) -> ViewerResponse:
    result = await viewer.refresh()
    if isinstance(result, Err):
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=result.error)
    return ViewerResponse.of(viewer.snapshot())


@router.post("/tables/{table}/select-all", response_model=ViewerResponse)
async def toggle_all(table: str, viewer: AdminViewer = Depends(admin_viewer)) -> ViewerResponse:
    viewer.toggle_all(_table(table))
    return ViewerResponse.of(viewer.snapshot())


@router.post("/tables/{table}/selection/{row_id}", response_model=ViewerResponse)
async def toggle_row(
    table: str, row_id: str, viewer: AdminViewer = Depends(admin_viewer)
) -> ViewerResponse:
    viewer.toggle(_table(table), row_id)
    return ViewerResponse.of(viewer.snapshot())


@router.delete("/tables/{table}/selection", response_model=ViewerResponse)
async def clear_selection(
    table: str, viewer: AdminViewer = Depends(admin_viewer)
) -> ViewerResponse:
    viewer.clear(_table(table))
    return ViewerResponse.of(viewer.snapshot())


@router.post("/tables/{table}/rows/{row_id}/delete-request", response_model=PendingResponse)
async def request_row_delete(
    table: str, row_id: str, viewer: AdminViewer = Depends(admin_viewer)
) -> PendingResponse:
    try:
        pending = viewer.request_delete(_table(table), row_id)
    except UnknownRowError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(e)) from e
    return PendingResponse.of(pending)


@router.post("/tables/{table}/delete-request", response_model=PendingResponse)
async def request_selection_delete(
    table: str, viewer: AdminViewer = Depends(admin_viewer)
) -> PendingResponse:
    return PendingResponse.of(viewer.request_delete_selected(_table(table)))


@router.delete("/pending", response_model=ViewerResponse)
async def cancel_pending(viewer: AdminViewer = Depends(admin_viewer)) -> ViewerResponse:
    viewer.cancel()
    return ViewerResponse.of(viewer.snapshot())


@router.post("/pending/confirm", response_model=ViewerResponse)
async def confirm_pending(viewer: AdminViewer = Depends(admin_viewer)) -> ViewerResponse:
    result = await viewer.confirm()
    if result is None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="No pending deletion")
    if isinstance(result, Err):
        if result.error.kind == MutationErrorKind.already_in_flight:
            raise HTTPException(status_code=HTTP_409_CONFLICT, detail=result.error.message)
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=result.error.message)
    return ViewerResponse.of(viewer.snapshot())
