"""
bidboard.services.listings

Auction listing reads and creation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bidboard.auth.models import Principal
from bidboard.domain import AUCTIONS, Listing
from bidboard.observability.logging import get_logger
from bidboard.result import Err, Ok, Result
from bidboard.store.base import RemoteStore
from bidboard.validation.forms import ListingForm
from bidboard.validation.validator import FormError, validate

log = get_logger(__name__)


class ListingService:
    def __init__(self, *, store: RemoteStore) -> None:
        self._store = store

    async def list(self) -> list[Listing]:
        # Newest first; StoreError propagates to the caller.
        rows = await self._store.select(AUCTIONS, order_by="created_at", descending=True)
        return [Listing.model_validate(r) for r in rows]

    async def create(self, owner: Principal, raw: Mapping[str, Any]) -> Result[Listing, FormError]:
        validated = validate(ListingForm, raw)
        if isinstance(validated, Err):
            return validated
        form = validated.value

        row = await self._store.insert(
            AUCTIONS,
            {
                "title": form.title,
                "description": form.description,
                "image_url": form.image_url,
                "link": form.link,
                "user_id": owner.subject,
            },
        )
        log.info("listing_created", listing_id=row.get("id"), owner=owner.subject)
        return Ok(Listing.model_validate(row))
