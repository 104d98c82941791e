"""
bidboard.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Bind the acting subject into the request log context.
- Gate administrative endpoints through the app's `AdminAuthenticator`.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from bidboard.auth.admin import AdminAccessDenied, AdminAuthenticator
from bidboard.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, principal_claims
from bidboard.auth.models import Principal
from bidboard.observability.middleware import bind_subject
from bidboard.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def _settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(_settings_from_app),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
        subject, roles = principal_claims(payload)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    bind_subject(subject)
    return Principal(subject=subject, roles=roles)


def admin_authenticator_from_app(request: Request) -> AdminAuthenticator:
    # Created on app startup in `bidboard.api.app.create_app`.
    return request.app.state.admin_authenticator  # type: ignore[attr-defined]


async def get_admin_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    authenticator: AdminAuthenticator = Depends(admin_authenticator_from_app),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    try:
        principal = await authenticator.authenticate(creds.credentials)
    except AdminAccessDenied as e:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=str(e)) from e
    bind_subject(principal.subject)
    return principal
