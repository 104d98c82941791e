"""
bidboard.store.base

RemoteStore capability surface and its error types.

Responsibilities:
- Describe the filtered CRUD + identity operations the core relies on.
- Give adapters a shared exception taxonomy (`StoreError` and subclasses).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from bidboard.domain import Identity


class StoreError(Exception):
    """
    Any failure reported by the backend. `str(e)` is the raw backend message.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DuplicateIdentityError(StoreError):
    pass


class InvalidCredentialsError(StoreError):
    pass


class RemoteStore(Protocol):
    async def find_one(self, table: str, filters: Mapping[str, Any]) -> dict[str, Any] | None: ...

    async def select(
        self, table: str, *, order_by: str = "created_at", descending: bool = True
    ) -> list[dict[str, Any]]: ...

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]: ...

    async def delete_by_id(self, table: str, row_id: str) -> None: ...

    async def delete_by_ids(self, table: str, ids: Iterable[str]) -> None: ...

    async def create_identity(
        self, *, email: str, password: str, metadata: Mapping[str, Any]
    ) -> Identity: ...

    async def delete_identity(self, identity_id: str) -> None: ...

    async def authenticate(self, *, email: str, password: str) -> Identity: ...


# --- Module Notes -----------------------------------------------------------
# Deleting ids that no longer exist is a successful no-op for every adapter, so callers
# may retry a failed delete without re-deriving the ids.
