from __future__ import annotations

from datetime import date, datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_409_CONFLICT,
    HTTP_502_BAD_GATEWAY,
)

from bidboard.api.deps import account_service
from bidboard.provisioning.errors import ProvisionError
from bidboard.result import Err
from bidboard.services.accounts import AccountService, SignInErrorKind
from bidboard.validation.validator import FormError

router = APIRouter(prefix="/v1/accounts", tags=["accounts"])


class ProfileResponse(BaseModel):
    id: str
    name: str
    roll_number: str
    college: str
    date_of_birth: date
    created_at: datetime | None = None


class SessionResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: int
    user_id: str
    email: str


@router.post("/sign-up", status_code=HTTP_201_CREATED, response_model=ProfileResponse)
async def sign_up(
    body: dict[str, Any] = Body(...),
    svc: AccountService = Depends(account_service),
) -> ProfileResponse:
    result = await svc.sign_up(body)
    if isinstance(result, Err):
        raise _sign_up_error(result.error)
    return ProfileResponse.model_validate(result.value.model_dump())


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    body: dict[str, Any] = Body(...),
    svc: AccountService = Depends(account_service),
) -> SessionResponse:
    result = await svc.sign_in(body)
    if isinstance(result, Err):
        err = result.error
        if isinstance(err, FormError):
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=err.message)
        if err.kind == SignInErrorKind.invalid_credentials:
            raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=err.message)
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=err.message)

    session = result.value
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        expires_in=session.expires_in,
        user_id=session.identity.id,
        email=session.identity.email,
    )


def _sign_up_error(err: FormError | ProvisionError) -> HTTPException:
    if isinstance(err, FormError):
        return HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=err.message)
    if err.is_rejection:
        return HTTPException(status_code=HTTP_409_CONFLICT, detail=err.message)
    return HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=err.message)
