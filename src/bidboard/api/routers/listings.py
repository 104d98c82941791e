from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_502_BAD_GATEWAY

from bidboard.api.deps import listing_service
from bidboard.auth.deps import get_principal
from bidboard.auth.models import Principal
from bidboard.domain import Listing
from bidboard.result import Err
from bidboard.services.listings import ListingService
from bidboard.store.base import StoreError

router = APIRouter(prefix="/v1/listings", tags=["listings"])


class ListingResponse(BaseModel):
    id: str
    title: str
    description: str
    image_url: str
    link: str
    user_id: str
    created_at: datetime | None = None

    @classmethod
    def of(cls, listing: Listing) -> ListingResponse:
        return cls.model_validate(listing.model_dump())


@router.get("", response_model=list[ListingResponse])
async def list_listings(svc: ListingService = Depends(listing_service)) -> list[ListingResponse]:
    try:
        listings = await svc.list()
    except StoreError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    return [ListingResponse.of(item) for item in listings]


@router.post("", status_code=HTTP_201_CREATED, response_model=ListingResponse)
async def create_listing(
    body: dict[str, Any] = Body(...),
    principal: Principal = Depends(get_principal),
    svc: ListingService = Depends(listing_service),
) -> ListingResponse:
    try:
        result = await svc.create(principal, body)
    except StoreError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    if isinstance(result, Err):
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=result.error.message)
    return ListingResponse.of(result.value)
