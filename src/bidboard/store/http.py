"""
bidboard.store.http

RemoteStore implementation for a hosted PostgREST + GoTrue style backend.

Responsibilities:
- Call `/rest/v1/{table}` for filtered CRUD and `/auth/v1/*` for identities.
- Attach the anon API key to every call and the service key to admin calls.
- Translate non-2xx responses into `StoreError` with the backend message.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from bidboard.domain import Identity
from bidboard.store.base import DuplicateIdentityError, InvalidCredentialsError, StoreError


class HttpRemoteStore:
    def __init__(self, *, http: httpx.AsyncClient, api_key: str, service_key: str = "") -> None:
        self._http = http
        self._api_key = api_key
        self._service_key = service_key

    def _headers(self, *, service: bool = False, prefer: str | None = None) -> dict[str, str]:
        key = self._service_key if service and self._service_key else self._api_key
        headers = {"apikey": key, "Authorization": f"Bearer {key}"}
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> dict[str, Any] | None:
        params = {"select": "*", "limit": "1"}
        params.update({k: f"eq.{v}" for k, v in filters.items()})
        r = await self._send("GET", f"/rest/v1/{table}", params=params, headers=self._headers())
        rows = r.json()
        return rows[0] if rows else None

    async def select(
        self, table: str, *, order_by: str = "created_at", descending: bool = True
    ) -> list[dict[str, Any]]:
        direction = "desc" if descending else "asc"
        params = {"select": "*", "order": f"{order_by}.{direction}"}
        r = await self._send("GET", f"/rest/v1/{table}", params=params, headers=self._headers())
        return list(r.json())

    async def insert(self, table: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        r = await self._send(
            "POST",
            f"/rest/v1/{table}",
            json=to_jsonable_python(dict(fields)),
            headers=self._headers(prefer="return=representation"),
        )
        body = r.json()
        if isinstance(body, list):
            if not body:
                raise StoreError(f"insert into {table} returned no row")
            return body[0]
        return body

    async def delete_by_id(self, table: str, row_id: str) -> None:
        await self._send(
            "DELETE",
            f"/rest/v1/{table}",
            params={"id": f"eq.{row_id}"},
            headers=self._headers(),
        )

    async def delete_by_ids(self, table: str, ids: Iterable[str]) -> None:
        id_list = list(ids)
        if not id_list:
            return
        await self._send(
            "DELETE",
            f"/rest/v1/{table}",
            params={"id": f"in.({','.join(_quote(i) for i in id_list)})"},
            headers=self._headers(),
        )

    async def create_identity(
        self, *, email: str, password: str, metadata: Mapping[str, Any]
    ) -> Identity:
        try:
            r = await self._send(
                "POST",
                "/auth/v1/signup",
                json={"email": email, "password": password, "data": dict(metadata)},
                headers=self._headers(),
            )
        except StoreError as e:
            if e.message == "User already registered":
                raise DuplicateIdentityError(e.message, status_code=e.status_code) from e
            raise
        body = r.json()
        # Depending on email confirmation settings the user is top-level or nested.
        user = body.get("user") or body
        if not user.get("id"):
            raise StoreError("sign-up response did not include a user")
        return _identity(user)

    async def delete_identity(self, identity_id: str) -> None:
        await self._send(
            "DELETE",
            f"/auth/v1/admin/users/{identity_id}",
            headers=self._headers(service=True),
        )

    async def authenticate(self, *, email: str, password: str) -> Identity:
        try:
            r = await self._send(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=self._headers(),
            )
        except StoreError as e:
            if e.message == "Invalid login credentials":
                raise InvalidCredentialsError(e.message, status_code=e.status_code) from e
            raise
        return _identity(r.json().get("user") or {})

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            r = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise StoreError(str(e) or e.__class__.__name__) from e
        if r.is_error:
            raise StoreError(_error_message(r), status_code=r.status_code)
        return r


def _error_message(r: httpx.Response) -> str:
    # PostgREST uses "message", GoTrue uses "msg" / "error_description".
    try:
        body = r.json()
    except ValueError:
        return r.text or r.reason_phrase
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if value:
                return str(value)
    return r.text or r.reason_phrase


def _quote(value: str) -> str:
    # Double-quoted list items may contain commas and parentheses.
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'

def _identity(user: Mapping[str, Any]) -> Identity:
    return Identity(
        id=str(user.get("id", "")),
        email=str(user.get("email", "")),
        metadata=dict(user.get("user_metadata") or {}),
    )


# --- Module Notes -----------------------------------------------------------
# base_url and timeouts live on the injected httpx.AsyncClient (see `api.app`).
