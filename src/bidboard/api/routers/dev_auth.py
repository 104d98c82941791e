from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from bidboard.api.deps import settings_from_app
from bidboard.auth.jwt import JwtConfig, issue_token
from bidboard.auth.models import USER_ROLE
from bidboard.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)
    roles: list[str] = Field(default_factory=lambda: [USER_ROLE])
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    subject: str
    roles: list[str]


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_from_app),
) -> DevTokenResponse:
    # Stands in for sign-in when exercising the admin viewer locally; never in prod.
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    allowed = {USER_ROLE, settings.admin_role}
    unknown = sorted(set(body.roles) - allowed)
    if unknown:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"Unknown roles: {', '.join(unknown)}",
        )

    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=body.subject,
        roles=body.roles,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token, subject=body.subject, roles=body.roles)
