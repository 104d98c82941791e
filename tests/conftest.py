"""
tests.conftest

Shared fixtures.

Responsibilities:
- Provide an in-memory RemoteStore with failure injection and call recording.
- Provide small row/payload builders used across test modules.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

import pytest

from bidboard.domain import AUCTIONS, PROFILES, Identity
from bidboard.store.base import DuplicateIdentityError, InvalidCredentialsError, StoreError


class FakeRemoteStore:
    """
    In-memory stand-in for the remote backend.

    - `fail[op] = StoreError(...)` makes the next and every later `op` call raise.
    - `delete_gate` (asyncio.Event) holds deletes in flight until set.
    - `calls` records (op, *args) for every call, including failed ones.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {PROFILES: [], AUCTIONS: []}
        self.identities: dict[str, Identity] = {}
        self.passwords: dict[str, str] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail: dict[str, StoreError] = {}
        self.delete_gate: asyncio.Event | None = None
        self._clock = datetime(2024, 1, 1, 12, 0, 0)

    def calls_to(self, op: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == op]

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append((op, *args))
        if op in self.fail:
            raise self.fail[op]

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _table(self, table: str) -> list[dict[str, Any]]:
        if table not in self.tables:
            raise StoreError(f'relation "{table}" does not exist')
        return self.tables[table]

    def seed(self, table: str, *rows: dict[str, Any]) -> None:
        for row in rows:
            self._table(table).append({"created_at": self._tick(), **row})

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> dict[str, Any] | None:
        self._record("find_one", table, dict(filters))
        for row in self._table(table):
            if all(row.get(k) == v for k, v in filters.items()):
                return dict(row)
        return None

    async def select(
        self, table: str, *, order_by: str = "created_at", descending: bool = True
    ) -> list[dict[str, Any]]:
        self._record("select", table)
        rows = sorted(self._table(table), key=lambda r: r[order_by], reverse=descending)
        return [dict(r) for r in rows]

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        self._record("insert", table, dict(fields))
        rows = self._table(table)
        if table == PROFILES and any(r["roll_number"] == fields["roll_number"] for r in rows):
            raise StoreError(
                'duplicate key value violates unique constraint "profiles_roll_number_key"'
            )
        row = {"id": str(uuid.uuid4()), "created_at": self._tick(), **dict(fields)}
        rows.append(row)
        return dict(row)

    async def delete_by_id(self, table: str, row_id: str) -> None:
        self._record("delete_by_id", table, row_id)
        await self._wait_gate()
        self.tables[table] = [r for r in self._table(table) if r["id"] != row_id]

    async def delete_by_ids(self, table: str, ids: Iterable[str]) -> None:
        id_set = set(ids)
        self._record("delete_by_ids", table, frozenset(id_set))
        await self._wait_gate()
        self.tables[table] = [r for r in self._table(table) if r["id"] not in id_set]

    async def create_identity(
        self, *, email: str, password: str, metadata: Mapping[str, Any]
    ) -> Identity:
        self._record("create_identity", email)
        if any(i.email == email for i in self.identities.values()):
            raise DuplicateIdentityError("User already registered")
        identity = Identity(id=str(uuid.uuid4()), email=email, metadata=dict(metadata))
        self.identities[identity.id] = identity
        self.passwords[identity.id] = password
        return identity

    async def delete_identity(self, identity_id: str) -> None:
        self._record("delete_identity", identity_id)
        self.identities.pop(identity_id, None)

    async def authenticate(self, *, email: str, password: str) -> Identity:
        self._record("authenticate", email)
        for identity in self.identities.values():
            if identity.email == email and self.passwords[identity.id] == password:
                return identity
        raise InvalidCredentialsError("Invalid login credentials")

    async def _wait_gate(self) -> None:
        if self.delete_gate is not None:
            await self.delete_gate.wait()


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def sign_up_payload() -> dict[str, str]:
    return {
        "name": "X",
        "email": "x@x.com",
        "password": "secret",
        "rollNumber": "R1",
        "college": "C",
        "dateOfBirth": "2000-01-01",
    }


def profile_row(row_id: str, *, name: str | None = None, roll_number: str | None = None) -> dict:
    return {
        "id": row_id,
        "name": name or f"user-{row_id}",
        "roll_number": roll_number or f"roll-{row_id}",
        "college": "C",
        "date_of_birth": "2000-01-01",
    }


def auction_row(row_id: str, *, title: str | None = None, user_id: str = "owner") -> dict:
    return {
        "id": row_id,
        "title": title or f"lot-{row_id}",
        "description": "d",
        "image_url": "https://img.example.com/1.png",
        "link": "https://example.com/lot",
        "user_id": user_id,
    }


# --- Module Notes -----------------------------------------------------------
# Row builders are imported by test modules via `from conftest import ...`.
