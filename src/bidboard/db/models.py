"""
bidboard.db.models

Persistence schema backing the SQL remote store.

Responsibilities:
- Define ORM models for the three remote tables:
  - IdentityRecord: authentication identities (hashed password + sign-up metadata)
  - ProfileRecord: one profile per identity, unique roll number
  - AuctionRecord: auction listings owned by an identity
"""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import JSON, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bidboard.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no timezone-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


class IdentityRecord(Base):
    __tablename__ = "identities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(512), nullable=False)
    # "metadata" is reserved on declarative classes.
    user_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class ProfileRecord(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String(36), ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    roll_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    college: Mapped[str] = mapped_column(String(256), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class AuctionRecord(Base):
    __tablename__ = "auctions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


# --- Module Notes -----------------------------------------------------------
# Table names double as the RemoteStore table keys (`domain.PROFILES`, `domain.AUCTIONS`).
