"""
bidboard.domain

Domain records shared by the store adapters, orchestrators and API layer.

Responsibilities:
- Name the remote tables the service works with.
- Define typed views over raw rows (Profile, Listing) and the Identity handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

PROFILES = "profiles"
AUCTIONS = "auctions"

# Tables the administrative viewer may inspect and mutate.
ADMIN_TABLES: tuple[str, ...] = (PROFILES, AUCTIONS)


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authentication-provider record. Owned by the remote store, not by this service.
    """

    id: str
    email: str
    metadata: dict[str, Any] = field(default_factory=dict)


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    roll_number: str
    college: str
    date_of_birth: date
    created_at: datetime | None = None


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    title: str
    description: str
    image_url: str
    link: str
    user_id: str
    created_at: datetime | None = None


# --- Module Notes -----------------------------------------------------------
# Rows travel between layers as plain dicts (the admin viewer shows them raw);
# `Profile.model_validate(row)` / `Listing.model_validate(row)` give typed views.
