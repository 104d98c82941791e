"""
tests.test_http_store

HttpRemoteStore request shapes and error mapping (httpx.MockTransport).
"""

from __future__ import annotations

import json

import httpx
import pytest

from bidboard.domain import AUCTIONS, PROFILES
from bidboard.store.base import DuplicateIdentityError, InvalidCredentialsError, StoreError
from bidboard.store.http import HttpRemoteStore


def _store(handler) -> HttpRemoteStore:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://backend")
    return HttpRemoteStore(http=http, api_key="anon", service_key="service")


@pytest.mark.asyncio
async def test_find_one_builds_equality_filter() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "p1", "roll_number": "R1"}])

    row = await _store(handler).find_one(PROFILES, {"roll_number": "R1"})

    assert row == {"id": "p1", "roll_number": "R1"}
    assert seen[0].url.path == "/rest/v1/profiles"
    assert seen[0].url.params["roll_number"] == "eq.R1"
    assert seen[0].headers["apikey"] == "anon"


@pytest.mark.asyncio
async def test_delete_by_ids_uses_in_filter() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    await _store(handler).delete_by_ids(AUCTIONS, ["a", "b"])

    assert seen[0].method == "DELETE"
    assert seen[0].url.params["id"] == 'in.("a","b")'


@pytest.mark.asyncio
async def test_delete_by_ids_quotes_reserved_characters() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    await _store(handler).delete_by_ids(AUCTIONS, ["lot,1", "lot(2)", 'say "hi"'])

    assert seen[0].url.params["id"] == 'in.("lot,1","lot(2)","say \\"hi\\"")'


@pytest.mark.asyncio
async def test_error_body_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "permission denied for table profiles"})

    with pytest.raises(StoreError) as exc:
        await _store(handler).delete_by_id(PROFILES, "a")

    assert str(exc.value) == "permission denied for table profiles"
    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_sign_up_duplicate_maps_to_duplicate_identity() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"code": 422, "msg": "User already registered"})

    with pytest.raises(DuplicateIdentityError):
        await _store(handler).create_identity(email="x@x.com", password="secret", metadata={})


@pytest.mark.asyncio
async def test_sign_up_sends_metadata_and_reads_user() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"user": {"id": "u1", "email": "x@x.com"}})

    identity = await _store(handler).create_identity(
        email="x@x.com", password="secret", metadata={"roll_number": "R1"}
    )

    assert identity.id == "u1"
    assert bodies[0]["data"] == {"roll_number": "R1"}


@pytest.mark.asyncio
async def test_delete_identity_uses_service_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    await _store(handler).delete_identity("u1")

    assert seen[0].url.path == "/auth/v1/admin/users/u1"
    assert seen[0].headers["Authorization"] == "Bearer service"


@pytest.mark.asyncio
async def test_bad_credentials_map_to_invalid_credentials() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )

    with pytest.raises(InvalidCredentialsError):
        await _store(handler).authenticate(email="x@x.com", password="nope")


@pytest.mark.asyncio
async def test_transport_failure_is_a_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StoreError):
        await _store(handler).select(PROFILES)
