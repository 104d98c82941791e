"""
tests.test_api

End-to-end flows through the FastAPI app with the SQL store on a temp database.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from bidboard.api.app import create_app
from bidboard.provisioning import provisioner
from bidboard.settings import Settings


@pytest_asyncio.fixture
async def client(tmp_path) -> AsyncIterator[httpx.AsyncClient]:
    settings = Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path}/api.db",
        jwt_secret="api-test-secret",
    )
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


async def _sign_up(client: httpx.AsyncClient, payload: dict) -> httpx.Response:
    return await client.post("/v1/accounts/sign-up", json=payload)


async def _bearer(client: httpx.AsyncClient, subject: str, *roles: str) -> dict[str, str]:
    r = await client.post("/v1/dev/token", json={"subject": subject, "roles": list(roles)})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.mark.asyncio
async def test_sign_up_then_sign_in(client, sign_up_payload) -> None:
    r = await _sign_up(client, sign_up_payload)
    assert r.status_code == 201
    profile = r.json()
    assert profile["roll_number"] == "R1"
    assert profile["date_of_birth"] == "2000-01-01"

    r = await client.post(
        "/v1/accounts/sign-in", json={"email": "x@x.com", "password": "secret"}
    )
    assert r.status_code == 200
    assert r.json()["user_id"] == profile["id"]

    r = await client.post("/v1/accounts/sign-in", json={"email": "x@x.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password. Please try again."


@pytest.mark.asyncio
async def test_sign_up_validation_and_duplicates(client, sign_up_payload) -> None:
    r = await _sign_up(client, {**sign_up_payload, "password": "123"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Password must be at least 6 characters"

    assert (await _sign_up(client, sign_up_payload)).status_code == 201

    r = await _sign_up(client, {**sign_up_payload, "email": "other@x.com"})
    assert r.status_code == 409
    assert r.json()["detail"] == "A user with this roll number already exists"

    r = await _sign_up(client, {**sign_up_payload, "rollNumber": "R2"})
    assert r.status_code == 409
    assert r.json()["detail"] == "This email is already registered. Please sign in instead."


@pytest.mark.asyncio
async def test_listings_create_and_list(client, sign_up_payload) -> None:
    await _sign_up(client, sign_up_payload)
    r = await client.post(
        "/v1/accounts/sign-in", json={"email": "x@x.com", "password": "secret"}
    )
    session = r.json()
    headers = {"Authorization": f"Bearer {session['access_token']}"}
    listing = {
        "title": "Brass lamp",
        "description": "Working condition",
        "imageUrl": "https://img.example.com/lamp.png",
        "link": "https://example.com/lamp",
    }

    assert (await client.post("/v1/listings", json=listing)).status_code == 401

    r = await client.post("/v1/listings", json={**listing, "link": "nope"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid link"

    r = await client.post("/v1/listings", json=listing, headers=headers)
    assert r.status_code == 201
    assert r.json()["user_id"] == session["user_id"]

    r = await client.get("/v1/listings")
    assert r.status_code == 200
    assert [item["title"] for item in r.json()] == ["Brass lamp"]


@pytest.mark.asyncio
async def test_admin_viewer_requires_admin_role(client) -> None:
    assert (await client.get("/v1/admin/viewer")).status_code == 401

    user = await _bearer(client, "someone", "user")
    assert (await client.get("/v1/admin/viewer", headers=user)).status_code == 403


@pytest.mark.asyncio
async def test_admin_batch_delete_flow(client, sign_up_payload) -> None:
    ids = []
    for n in range(3):
        r = await _sign_up(
            client, {**sign_up_payload, "email": f"u{n}@x.com", "rollNumber": f"R{n}"}
        )
        ids.append(r.json()["id"])
    admin = await _bearer(client, "ops", "admin")

    r = await client.post("/v1/admin/viewer/refresh", headers=admin)
    assert r.status_code == 200
    assert len(r.json()["tables"]["profiles"]) == 3

    for row_id in ids[:2]:
        await client.post(f"/v1/admin/tables/profiles/selection/{row_id}", headers=admin)

    r = await client.post("/v1/admin/tables/profiles/delete-request", headers=admin)
    assert r.json()["kind"] == "BATCH"

    r = await client.post("/v1/admin/pending/confirm", headers=admin)
    assert r.status_code == 200
    body = r.json()
    assert [row["id"] for row in body["tables"]["profiles"]] == [ids[2]]
    assert body["selections"]["profiles"] == []
    assert body["pending"] is None
    assert body["status"] == {"success": True, "message": "Records deleted successfully"}

    r = await client.post("/v1/admin/pending/confirm", headers=admin)
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_admin_single_delete_and_cancel(client, sign_up_payload) -> None:
    r = await _sign_up(client, sign_up_payload)
    row_id = r.json()["id"]
    admin = await _bearer(client, "ops", "admin")
    await client.post("/v1/admin/viewer/refresh", headers=admin)

    r = await client.post(
        f"/v1/admin/tables/profiles/rows/{row_id}/delete-request", headers=admin
    )
    assert r.json() == {"kind": "SINGLE", "table": "profiles", "row_id": row_id, "label": "X"}

    r = await client.delete("/v1/admin/pending", headers=admin)
    assert r.json()["pending"] is None
    assert len(r.json()["tables"]["profiles"]) == 1

    assert (
        await client.post("/v1/admin/tables/identities/select-all", headers=admin)
    ).status_code == 404


@pytest.mark.asyncio
async def test_provisioning_graph_is_compiled_once_per_app(
    tmp_path, monkeypatch, sign_up_payload
) -> None:
    built = []
    real_build_graph = provisioner.build_graph

    def counting_build_graph(**kwargs):
        built.append(kwargs)
        return real_build_graph(**kwargs)

    monkeypatch.setattr(provisioner, "build_graph", counting_build_graph)
    app = create_app(
        settings=Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path}/once.db")
    )
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            assert (await _sign_up(c, sign_up_payload)).status_code == 201
            second = {**sign_up_payload, "email": "y@x.com", "rollNumber": "R2"}
            assert (await _sign_up(c, second)).status_code == 201

    assert len(built) == 1


@pytest.mark.asyncio
async def test_dev_token_defaults_to_user_role_and_rejects_unknown_roles(client) -> None:
    r = await client.post("/v1/dev/token", json={"subject": "bidder-1"})
    assert r.status_code == 200
    assert r.json()["roles"] == ["user"]

    r = await client.post("/v1/dev/token", json={"subject": "bidder-1", "roles": ["root"]})
    assert r.status_code == 400
    assert r.json()["detail"] == "Unknown roles: root"
