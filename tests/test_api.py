# tests/test_api.py
"""HTTP and WebSocket tests for the zippclip endpoints."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from zipper_stage.api.v1.endpoints.zippclips import watch_zippers
from zipper_stage.store.memory import InMemoryRecordStore

API = "/api/v1/zippclips"
T0 = datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)


def _seed(store: InMemoryRecordStore, *clips: tuple[str, str | None]) -> None:
    async def _insert() -> None:
        await store.insert("profiles", {"id": "u1", "username": "rider", "full_name": "Ride R"})
        for offset, (clip_id, parent) in enumerate(clips):
            await store.insert(
                "zippclips",
                {
                    "id": clip_id,
                    "user_id": "u1",
                    "parent_zippclip_id": parent,
                    "media_url": f"https://cdn/{clip_id}.mp4",
                    "media_type": "video",
                    "created_at": T0 + timedelta(minutes=offset),
                },
            )

    asyncio.run(_insert())


def test_chain_endpoint(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("c", None), ("b", "c"), ("a", "b"))

    res = client.get(f"{API}/a/chain")

    assert res.status_code == 200
    data = res.json()
    assert [item["id"] for item in data] == ["c", "b", "a"]
    assert [item["depth"] for item in data] == [2, 1, 0]
    assert data[0]["user"]["username"] == "rider"


def test_chain_status_endpoint_flags_cycles(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("a", "b"), ("b", "a"))

    res = client.get(f"{API}/a/chain/status")

    assert res.status_code == 200
    assert res.json()["status"] == "truncated"
    assert len(res.json()["links"]) == 10


def test_parents_endpoint(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("c", None), ("b", "c"), ("a", "b"))

    res = client.get(f"{API}/a/parents", params={"levels": 1})

    assert res.status_code == 200
    assert [item["id"] for item in res.json()] == ["b"]


def test_origin_endpoint(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("c", None), ("b", "c"), ("orphan", "gone"))

    found = client.get(f"{API}/b/origin")
    missing = client.get(f"{API}/orphan/origin")

    assert found.status_code == 200
    assert found.json()["id"] == "c"
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Could not find original video"


def test_zipper_count_and_listing(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("root", None), ("k1", "root"), ("k2", "root"), ("k3", "root"))

    count = client.get(f"{API}/root/zippers/count")
    listing = client.get(f"{API}/root/zippers", params={"limit": 2})
    latest = client.get(f"{API}/root/zippers/latest")

    assert count.json() == {"zippers": 3}
    assert [item["id"] for item in listing.json()] == ["k3", "k2"]
    assert [item["id"] for item in latest.json()] == ["k3"]

    cursor = listing.json()[-1]["created_at"]
    older = client.get(f"{API}/root/zippers", params={"limit": 2, "before": cursor})
    assert [item["id"] for item in older.json()] == ["k1"]


def test_listing_limit_is_validated(client: TestClient) -> None:
    assert client.get(f"{API}/root/zippers", params={"limit": 0}).status_code == 422
    assert client.get(f"{API}/root/zippers", params={"limit": 1000}).status_code == 422


def test_reads_degrade_when_store_is_down(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("root", None), ("k1", "root"))
    override_store.online = False

    assert client.get(f"{API}/root/zippers/count").json() == {"zippers": 0}
    assert client.get(f"{API}/root/zippers").json() == []
    assert client.get(f"{API}/k1/chain").json() == []
    assert client.get(f"{API}/k1/origin").status_code == 404


def test_create_and_delete(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("root", None))

    created = client.post(
        f"{API}/",
        json={"media_url": "https://cdn/new.mp4", "media_type": "video", "parent_zippclip_id": "root"},
    )
    assert created.status_code == 201
    new_id = created.json()["id"]
    assert client.get(f"{API}/root/zippers/count").json() == {"zippers": 1}

    assert client.delete(f"{API}/{new_id}").status_code == 204
    assert client.delete(f"{API}/{new_id}").status_code == 404
    assert client.get(f"{API}/root/zippers/count").json() == {"zippers": 0}


def test_create_with_unknown_parent(client: TestClient) -> None:
    res = client.post(f"{API}/", json={"media_url": "https://cdn/x.jpg", "parent_zippclip_id": "nope"})

    assert res.status_code == 400
    assert res.json()["detail"] == "Parent zippclip not found"


def test_create_when_store_is_down(client: TestClient, override_store: InMemoryRecordStore) -> None:
    override_store.online = False

    res = client.post(f"{API}/", json={"media_url": "https://cdn/x.jpg"})

    assert res.status_code == 503


def test_live_zipper_updates(client: TestClient, override_store: InMemoryRecordStore) -> None:
    _seed(override_store, ("root", None))

    with client.websocket_connect(f"{API}/root/zippers/live") as ws:
        initial = ws.receive_json()
        assert initial == {"post_id": "root", "count": 0, "latest": []}

        created = client.post(f"{API}/", json={"media_url": "https://cdn/k.mp4", "parent_zippclip_id": "root"})
        after_insert = ws.receive_json()
        assert after_insert["count"] == 1
        assert after_insert["latest"][0]["id"] == created.json()["id"]

        client.delete(f"{API}/{created.json()['id']}")
        after_delete = ws.receive_json()
        assert after_delete["count"] == 0
        assert after_delete["latest"] == []


@pytest.mark.asyncio
async def test_live_watcher_unsubscribes_after_failed_send(
    mocker: Any, service: Any, store: InMemoryRecordStore, add_clip: Any
) -> None:
    await add_clip("root")
    websocket = mocker.AsyncMock()
    websocket.send_json.side_effect = WebSocketDisconnect(code=1006)

    async def _hang_up() -> str:
        await asyncio.sleep(0.01)
        raise WebSocketDisconnect(code=1000)

    websocket.receive_text.side_effect = _hang_up

    await watch_zippers(websocket, "root", service)

    websocket.send_json.assert_awaited_once()
    assert len(store.feed) == 0
