"""Note endpoints over ASGI."""

import uuid
from datetime import datetime

import pytest

from notebox.core.repositories.note_repository import NoteRepository


async def add(client, title="Groceries", content="milk, eggs", tags=None):
    resp = await client.post(
        "/api/note/add", json={"title": title, "content": content, "tags": tags or []}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["note"]


@pytest.mark.asyncio
async def test_notes_require_session(async_client):
    for method, path in [
        ("GET", "/api/note/all"),
        ("POST", "/api/note/add"),
        ("GET", "/api/note/search?query=x"),
        ("DELETE", f"/api/note/delete/{uuid.uuid4()}"),
    ]:
        resp = await async_client.request(method, path)
        assert resp.status_code == 401, path
        assert resp.json()["error"] == "unauthenticated"


@pytest.mark.asyncio
async def test_add_note(signed_in_client):
    client, user = await signed_in_client()
    resp = await client.post(
        "/api/note/add",
        json={"title": " Groceries ", "content": "milk, eggs", "tags": ["home", "home ", "", "errands"]},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    note = body["note"]
    assert note["title"] == "Groceries"
    assert note["tags"] == ["home", "errands"]
    assert note["is_pinned"] is False
    assert note["owner_id"] == user["id"]


@pytest.mark.asyncio
async def test_owner_id_in_body_is_ignored(signed_in_client):
    client, user = await signed_in_client()
    resp = await client.post(
        "/api/note/add",
        json={"title": "t", "content": "c", "owner_id": str(uuid.uuid4())},
    )
    assert resp.status_code == 201
    assert resp.json()["note"]["owner_id"] == user["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "content": "c"},
        {"title": "t", "content": "   "},
        {"content": "c"},
        {"title": "x" * 201, "content": "c"},
    ],
)
async def test_add_note_validation(auth_client, payload):
    resp = await auth_client.post("/api/note/add", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


@pytest.mark.asyncio
async def test_get_note(auth_client):
    note = await add(auth_client)
    resp = await auth_client.get(f"/api/note/{note['id']}")
    assert resp.status_code == 200
    assert resp.json()["note"] == note


@pytest.mark.asyncio
async def test_get_missing_and_malformed_ids(auth_client):
    missing = await auth_client.get(f"/api/note/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"

    malformed = await auth_client.get("/api/note/not-a-uuid")
    assert malformed.status_code == 400


@pytest.mark.asyncio
async def test_edit_round_trip(auth_client):
    note = await add(auth_client, tags=["home"])
    resp = await auth_client.put(
        f"/api/note/edit/{note['id']}", json={"content": "milk, eggs, bread", "tags": ["shop"]}
    )
    assert resp.status_code == 200
    edited = resp.json()["note"]
    assert edited["title"] == "Groceries"
    assert edited["content"] == "milk, eggs, bread"
    assert edited["tags"] == ["shop"]
    assert edited["created_at"] == note["created_at"]
    assert datetime.fromisoformat(edited["updated_at"]) >= datetime.fromisoformat(edited["created_at"])

    listed = (await auth_client.get("/api/note/all")).json()["notes"]
    assert listed == [edited]


@pytest.mark.asyncio
async def test_edit_without_changes(auth_client):
    note = await add(auth_client)
    resp = await auth_client.put(f"/api/note/edit/{note['id']}", json={})
    assert resp.status_code == 400
    assert resp.json()["message"] == "No changes provided"


@pytest.mark.asyncio
async def test_edit_rejects_blank_title(auth_client):
    note = await add(auth_client)
    resp = await auth_client.put(f"/api/note/edit/{note['id']}", json={"title": "  "})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_note(auth_client):
    note = await add(auth_client)
    resp = await auth_client.delete(f"/api/note/delete/{note['id']}")
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert (await auth_client.get(f"/api/note/{note['id']}")).status_code == 404
    assert (await auth_client.delete(f"/api/note/delete/{note['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_pin_toggle_accepts_both_keys(auth_client):
    note = await add(auth_client)
    pinned = await auth_client.put(f"/api/note/update-note-pinned/{note['id']}", json={"isPinned": True})
    assert pinned.status_code == 200
    assert pinned.json()["note"]["is_pinned"] is True

    unpinned = await auth_client.put(
        f"/api/note/update-note-pinned/{note['id']}", json={"is_pinned": False}
    )
    assert unpinned.json()["note"]["is_pinned"] is False

    missing_flag = await auth_client.put(f"/api/note/update-note-pinned/{note['id']}", json={})
    assert missing_flag.status_code == 400


@pytest.mark.asyncio
async def test_list_pinned_first_then_most_recent(auth_client):
    a = await add(auth_client, title="a")
    await add(auth_client, title="b")
    await add(auth_client, title="c")
    await auth_client.put(f"/api/note/update-note-pinned/{a['id']}", json={"is_pinned": True})

    notes = (await auth_client.get("/api/note/all")).json()["notes"]
    assert [n["title"] for n in notes] == ["a", "c", "b"]


@pytest.mark.asyncio
async def test_list_only_own_notes(signed_in_client):
    alice, _ = await signed_in_client()
    bob, _ = await signed_in_client()
    for i in range(3):
        await add(alice, title=f"alice {i}")
    await add(bob, title="bob")

    alice_notes = (await alice.get("/api/note/all")).json()["notes"]
    bob_notes = (await bob.get("/api/note/all")).json()["notes"]
    assert len(alice_notes) == 3
    assert [n["title"] for n in bob_notes] == ["bob"]


@pytest.mark.asyncio
async def test_search(auth_client):
    await add(auth_client, title="Groceries", content="milk, eggs")
    await add(auth_client, title="Ideas", content="Buy MILK tomorrow")
    await add(auth_client, title="Work", content="deadline friday")

    found = (await auth_client.get("/api/note/search", params={"query": "milk"})).json()["notes"]
    assert {n["title"] for n in found} == {"Groceries", "Ideas"}

    for query in ("", "   ", "caviar"):
        resp = await auth_client.get("/api/note/search", params={"query": query})
        assert resp.status_code == 200
        assert resp.json()["notes"] == []

    no_param = await auth_client.get("/api/note/search")
    assert no_param.json()["notes"] == []


@pytest.mark.asyncio
async def test_search_does_not_cross_users(signed_in_client):
    alice, _ = await signed_in_client()
    bob, _ = await signed_in_client()
    await add(alice, title="Secret plan", content="top secret")

    resp = await bob.get("/api/note/search", params={"query": "secret"})
    assert resp.json()["notes"] == []


@pytest.mark.asyncio
async def test_overlong_search_query_matches_nothing(auth_client):
    await add(auth_client, title="x" * 150, content="x" * 150)

    resp = await auth_client.get("/api/note/search", params={"query": "x" * 201})
    assert resp.status_code == 200
    assert resp.json()["notes"] == []


@pytest.mark.asyncio
async def test_store_failure_is_readable_cross_origin(auth_client, monkeypatch):
    async def broken(self, user_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(NoteRepository, "list_user_notes", broken)

    resp = await auth_client.get(
        "/api/note/all",
        headers={"Origin": "http://localhost:5173", "X-Request-ID": "req-500"},
    )
    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert resp.headers["x-request-id"] == "req-500"
    body = resp.json()
    assert body["success"] is False
    assert body["statusCode"] == 500
    assert body["error"] == "internal_error"
    assert body["message"] == "Internal server error"
