# tests/test_health.py
from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    """Verify the service reports healthy."""
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_root_describes_api(client: TestClient) -> None:
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["name"] == "Zipper API"
