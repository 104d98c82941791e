"""
bidboard.store.sql

RemoteStore implementation over SQLAlchemy async sessions.

Responsibilities:
- Map table names to ORM models and expose filtered CRUD on them.
- Own identities: hash passwords on create, verify them on authenticate.
- Translate SQLAlchemy failures into `StoreError` with the backend message.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bidboard.auth.passwords import hash_password, verify_password
from bidboard.db.base import Base
from bidboard.db.models import AuctionRecord, IdentityRecord, ProfileRecord
from bidboard.domain import AUCTIONS, PROFILES, Identity
from bidboard.observability.logging import get_logger
from bidboard.store.base import DuplicateIdentityError, InvalidCredentialsError, StoreError

log = get_logger(__name__)

_MODELS: dict[str, type[Base]] = {
    PROFILES: ProfileRecord,
    AUCTIONS: AuctionRecord,
}


class SqlRemoteStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> dict[str, Any] | None:
        model = _model(table)
        stmt = select(model).filter_by(**dict(filters)).limit(1)
        async with self._session_factory() as session:
            try:
                row = (await session.execute(stmt)).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise StoreError(_message(e)) from e
        return _as_dict(row) if row is not None else None

    async def select(
        self, table: str, *, order_by: str = "created_at", descending: bool = True
    ) -> list[dict[str, Any]]:
        model = _model(table)
        column = getattr(model, order_by, None)
        if column is None:
            raise StoreError(f"column {table}.{order_by} does not exist")
        stmt = select(model).order_by(desc(column) if descending else asc(column))
        async with self._session_factory() as session:
            try:
                rows = (await session.execute(stmt)).scalars().all()
            except SQLAlchemyError as e:
                raise StoreError(_message(e)) from e
        return [_as_dict(r) for r in rows]

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        model = _model(table)
        try:
            obj = model(**dict(fields))
        except TypeError as e:
            raise StoreError(str(e)) from e

        async with self._session_factory() as session:
            session.add(obj)
            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(_message(e)) from e
        return _as_dict(obj)

    async def delete_by_id(self, table: str, row_id: str) -> None:
        await self.delete_by_ids(table, [row_id])

    async def delete_by_ids(self, table: str, ids: Iterable[str]) -> None:
        model = _model(table)
        id_list = list(ids)
        if not id_list:
            return
        stmt = delete(model).where(model.id.in_(id_list))  # type: ignore[attr-defined]
        async with self._session_factory() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(_message(e)) from e
        log.info("rows_deleted", table=table, requested=len(id_list), deleted=result.rowcount)

    async def create_identity(
        self, *, email: str, password: str, metadata: Mapping[str, Any]
    ) -> Identity:
        async with self._session_factory() as session:
            existing = (
                await session.execute(select(IdentityRecord).where(IdentityRecord.email == email))
            ).scalar_one_or_none()
            if existing is not None:
                raise DuplicateIdentityError("User already registered", status_code=422)

            record = IdentityRecord(
                email=email,
                password_hash=hash_password(password),
                user_metadata=dict(metadata),
            )
            session.add(record)
            try:
                await session.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent sign-up for the same email.
                await session.rollback()
                raise DuplicateIdentityError("User already registered", status_code=422) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(_message(e)) from e
        return _identity(record)

    async def delete_identity(self, identity_id: str) -> None:
        stmt = delete(IdentityRecord).where(IdentityRecord.id == identity_id)
        async with self._session_factory() as session:
            try:
                await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(_message(e)) from e

    async def authenticate(self, *, email: str, password: str) -> Identity:
        async with self._session_factory() as session:
            try:
                record = (
                    await session.execute(
                        select(IdentityRecord).where(IdentityRecord.email == email)
                    )
                ).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise StoreError(_message(e)) from e
        if record is None or not verify_password(password, record.password_hash):
            raise InvalidCredentialsError("Invalid login credentials", status_code=400)
        return _identity(record)


def _model(table: str) -> type[Base]:
    try:
        return _MODELS[table]
    except KeyError:
        raise StoreError(f'relation "{table}" does not exist', status_code=404) from None


def _as_dict(obj: Base) -> dict[str, Any]:
    return {c.key: getattr(obj, c.key) for c in obj.__mapper__.column_attrs}


def _identity(record: IdentityRecord) -> Identity:
    return Identity(id=record.id, email=record.email, metadata=dict(record.user_metadata or {}))


def _message(e: SQLAlchemyError) -> str:
    # DBAPI errors carry the driver's message; prefer it over SQLAlchemy's wrapper text.
    orig = getattr(e, "orig", None)
    return str(orig) if orig is not None else str(e)


# --- Module Notes -----------------------------------------------------------
# Each call opens its own session and commits immediately; the store has no
# multi-table transaction visible to callers, matching the remote backend it stands in for.
