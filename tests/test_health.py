import asyncio

from devops_app.availability import PROBE_SQL, probe

from .conftest import FakeDatastore, run


def test_health_is_healthy(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["timestamp"].endswith("Z")
    assert body["uptime"] >= 0


def test_health_ignores_a_dead_database(client, datastore):
    datastore.fail = ConnectionRefusedError("connection refused")
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert datastore.calls == []


def test_status_operational_when_probe_succeeds(client, datastore):
    response = client.get("/status")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert body["database"] == "connected"
    assert body["environment"] == "test"
    assert "error" not in body
    assert datastore.calls == [(PROBE_SQL, ())]


def test_status_degraded_when_probe_fails(client, datastore):
    datastore.fail = ConnectionRefusedError("Connection failed")
    response = client.get("/status")
    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "degraded"
    assert body["database"] == "disconnected"
    assert body["error"] == "Connection failed"
    assert "timestamp" in body


def test_status_degraded_on_timeout(client, datastore):
    # asyncpg pool acquire raises a bare asyncio.TimeoutError
    datastore.fail = asyncio.TimeoutError()
    response = client.get("/status")
    assert response.status_code == 503
    assert response.json() == {
        "status": "degraded",
        "timestamp": response.json()["timestamp"],
        "database": "disconnected",
        "error": "TimeoutError",
    }


def test_status_recovers_without_memory(client, datastore):
    datastore.fail = OSError("down")
    assert client.get("/status").status_code == 503
    datastore.fail = None
    assert client.get("/status").status_code == 200


def test_probe_is_repeatable():
    ds = FakeDatastore(fail=OSError("down"))
    reports = [run(probe(ds, "prod")) for _ in range(3)]
    assert {r.status for r in reports} == {"degraded"}
    assert {r.error for r in reports} == {"down"}
    assert len(ds.calls) == 3

    ds.fail = None
    reports = [run(probe(ds, "prod")) for _ in range(3)]
    assert {(r.status, r.database) for r in reports} == {("operational", "connected")}
    assert len(ds.calls) == 6
