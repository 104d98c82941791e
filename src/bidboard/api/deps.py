"""
bidboard.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (settings, remote store, services, viewer registry).
"""

from __future__ import annotations

from fastapi import Depends, Request

from bidboard.admin.viewer import AdminViewer, AdminViewerRegistry
from bidboard.auth.deps import get_admin_principal
from bidboard.auth.models import Principal
from bidboard.services.accounts import AccountService
from bidboard.services.listings import ListingService
from bidboard.settings import Settings
from bidboard.store.base import RemoteStore


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def store_from_app(request: Request) -> RemoteStore:
    # The store is created on app startup in `bidboard.api.app.create_app`.
    return request.app.state.store  # type: ignore[attr-defined]


def account_service(request: Request) -> AccountService:
    return request.app.state.accounts  # type: ignore[attr-defined]


def listing_service(request: Request) -> ListingService:
    return request.app.state.listings  # type: ignore[attr-defined]


def admin_viewer(
    request: Request,
    principal: Principal = Depends(get_admin_principal),
) -> AdminViewer:
    registry: AdminViewerRegistry = request.app.state.admin_viewers  # type: ignore[attr-defined]
    return registry.for_principal(principal)
