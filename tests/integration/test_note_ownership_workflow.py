"""End-to-end ownership scenarios across two signed-in users."""

import pytest


@pytest.mark.asyncio
async def test_groceries_scenario(signed_in_client):
    u1, _ = await signed_in_client(email="u1@example.com", username="U1")
    u2, _ = await signed_in_client(email="u2@example.com", username="U2")

    added = await u1.post("/api/note/add", json={"title": "Groceries", "content": "milk, eggs"})
    assert added.status_code == 201
    note_id = added.json()["note"]["id"]

    denied = await u2.delete(f"/api/note/delete/{note_id}")
    assert denied.status_code == 403
    assert denied.json()["error"] == "forbidden"

    still_there = await u1.get(f"/api/note/{note_id}")
    assert still_there.status_code == 200

    deleted = await u1.delete(f"/api/note/delete/{note_id}")
    assert deleted.status_code == 200

    gone = await u1.get(f"/api/note/{note_id}")
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_foreign_note_is_never_leaked(signed_in_client):
    owner, _ = await signed_in_client()
    intruder, _ = await signed_in_client()

    note = (
        await owner.post(
            "/api/note/add", json={"title": "Diary", "content": "very private words", "tags": ["me"]}
        )
    ).json()["note"]
    note_id = note["id"]

    attempts = [
        await intruder.get(f"/api/note/{note_id}"),
        await intruder.put(f"/api/note/edit/{note_id}", json={"content": "defaced"}),
        await intruder.put(f"/api/note/update-note-pinned/{note_id}", json={"is_pinned": True}),
        await intruder.delete(f"/api/note/delete/{note_id}"),
    ]
    for resp in attempts:
        assert resp.status_code in (403, 404)
        assert "very private words" not in resp.text
        assert "Diary" not in resp.text

    unchanged = (await owner.get(f"/api/note/{note_id}")).json()["note"]
    assert unchanged == note


@pytest.mark.asyncio
async def test_full_note_lifecycle(signed_in_client):
    client, _ = await signed_in_client()

    ids = []
    for title in ("first", "second", "third"):
        resp = await client.post("/api/note/add", json={"title": title, "content": f"{title} body"})
        ids.append(resp.json()["note"]["id"])

    await client.put(f"/api/note/update-note-pinned/{ids[0]}", json={"is_pinned": True})
    await client.put(f"/api/note/edit/{ids[1]}", json={"content": "second body, revised"})

    titles = [n["title"] for n in (await client.get("/api/note/all")).json()["notes"]]
    assert titles == ["first", "second", "third"]

    found = (await client.get("/api/note/search", params={"query": "REVISED"})).json()["notes"]
    assert [n["id"] for n in found] == [ids[1]]

    await client.delete(f"/api/note/delete/{ids[2]}")
    remaining = (await client.get("/api/note/all")).json()["notes"]
    assert len(remaining) == 2

    await client.post("/api/auth/signout")
    assert (await client.get("/api/note/all")).status_code == 401
