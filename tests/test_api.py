from __future__ import annotations

import inspect

import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from benched.core.registry import SessionRegistry
from benched.runtime.synthetic import SyntheticConfig, populate_registry
from benched.serve.api import create_app
from benched.utils.timers import ManualClock


def make_client():
    clock = ManualClock()
    registry = SessionRegistry(resolver=lambda: "main", clock=clock)
    session = registry.register("main")
    for idx in range(3):
        session.start_frame(idx)
        with session.measure("render"):
            clock.advance(0.002)
        session.end_frame()
    return TestClient(create_app(registry)), session


def test_health_endpoint():
    client, _ = make_client()
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_sessions():
    client, _ = make_client()
    [info] = client.get("/sessions").json()
    assert info["context_id"] == "main"
    assert info["name"] == "main.default"
    assert info["frames"] == 3


def test_phase_table_by_context_or_name():
    client, _ = make_client()
    for key in ("main", "main.default"):
        body = client.get(f"/sessions/{key}/tables/phases").json()
        assert body["rows"][0][:2] == ["render", "3"]


def test_unknown_session_and_table():
    client, _ = make_client()
    assert client.get("/sessions/nope/tables/raw").status_code == 404
    assert client.get("/sessions/main/tables/nope").status_code == 404


def test_digest_uses_current_samples():
    client, session = make_client()
    session.start_frame(3)
    with session.measure("input"):
        pass
    body = client.get("/sessions/main/phases/digest").json()
    assert [d["phase"] for d in body] == ["input"]


def test_export_endpoint(tmp_path):
    client, _ = make_client()
    body = client.post("/sessions/main/export", json={"output_dir": str(tmp_path)}).json()
    assert body["failed"] == []
    assert any(path.endswith("raw.csv") for path in body["written"])


def test_app_over_synthetic_registry():
    registry = SessionRegistry()
    populate_registry(registry, SyntheticConfig(frames=10, seed=4, progress=False), context_id="sim")
    client = TestClient(create_app(registry))

    [info] = client.get("/sessions").json()
    assert info["name"] == "sim.default"
    assert info["frames"] == 10
    body = client.get("/sessions/sim/tables/raw").json()
    assert len(body["rows"]) == 10


def test_export_handler_runs_in_threadpool():
    app = create_app(SessionRegistry())
    [route] = [r for r in app.routes if getattr(r, "path", None) == "/sessions/{name}/export"]
    assert not inspect.iscoroutinefunction(route.endpoint)
