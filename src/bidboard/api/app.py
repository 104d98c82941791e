"""
bidboard.api.app

FastAPI app factory for the bidboard service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine or HTTP client, remote store).
- Wire services, the admin gate and the viewer registry once per process.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from bidboard.admin.viewer import AdminViewerRegistry
from bidboard.api.routers.accounts import router as accounts_router
from bidboard.api.routers.admin import router as admin_router
from bidboard.api.routers.dev_auth import router as dev_auth_router
from bidboard.api.routers.health import router as health_router
from bidboard.api.routers.listings import router as listings_router
from bidboard.auth.admin import JwtAdminAuthenticator
from bidboard.auth.jwt import JwtConfig
from bidboard.db.init_db import init_db
from bidboard.db.session import create_engine, create_sessionmaker
from bidboard.observability.logging import configure_logging, get_logger
from bidboard.observability.middleware import RequestContextMiddleware
from bidboard.services.accounts import AccountService
from bidboard.services.listings import ListingService
from bidboard.settings import Settings
from bidboard.store.http import HttpRemoteStore
from bidboard.store.sql import SqlRemoteStore

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name, env=settings.env, level=settings.log_level
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, store_backend=settings.store_backend)
        app.state.settings = settings
        app.state.engine = None
        app.state.http = None

        if settings.store_backend == "sql":
            engine = create_engine(settings)
            app.state.engine = engine
            app.state.store = SqlRemoteStore(create_sessionmaker(engine))
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically.
                await init_db(engine)
        else:
            http = httpx.AsyncClient(
                base_url=settings.remote_url,
                timeout=settings.remote_timeout_seconds,
            )
            app.state.http = http
            app.state.store = HttpRemoteStore(
                http=http,
                api_key=settings.remote_api_key,
                service_key=settings.remote_service_key,
            )

        # Services hold no per-request state; the provisioning graph compiles once here.
        app.state.accounts = AccountService(store=app.state.store, settings=settings)
        app.state.listings = ListingService(store=app.state.store)
        app.state.admin_authenticator = JwtAdminAuthenticator(
            cfg=JwtConfig.from_settings(settings),
            admin_role=settings.admin_role,
        )
        app.state.admin_viewers = AdminViewerRegistry(
            store=app.state.store,
            authenticator=app.state.admin_authenticator,
        )
        try:
            yield
        finally:
            if app.state.http is not None:
                await app.state.http.aclose()
            if app.state.engine is not None:
                await app.state.engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="bidboard",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(accounts_router)
    app.include_router(listings_router)
    app.include_router(admin_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business logic stays in services/provisioning/admin.
