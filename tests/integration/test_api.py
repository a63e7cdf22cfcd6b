"""Integration tests for the FastAPI REST API."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from pomreconciler.api.app import create_app
from pomreconciler.api.deps import init_runtime, reset_runtime
from pomreconciler.api.runtime import ReconcileRuntime
from pomreconciler.parser.locator import fallback_range
from pomreconciler.service.collaborators import OUTGOING_METHOD
from pomreconciler.service.subscriptions import OBSERVED_KINDS, ReconcileHooks
from pomreconciler.settings import Settings
from tests.conftest import BROKEN_POM, VALID_POM, write_pom


class _RecordingHooks(ReconcileHooks):
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def on_editor_content_changed(self, endpoint_id, changes) -> None:  # type: ignore[no-untyped-def]
        self.calls.append(("content", endpoint_id))

    def on_file_operation(self, endpoint_id, operation) -> None:  # type: ignore[no-untyped-def]
        self.calls.append(("file", endpoint_id))


@pytest.fixture
def hooks() -> _RecordingHooks:
    return _RecordingHooks()


@pytest.fixture
def runtime(workspace: Path, hooks: _RecordingHooks):
    settings = Settings(workspace_root=workspace, reconcile_workers=2)
    rt = ReconcileRuntime.build(settings, hooks)
    yield rt
    rt.close()


@pytest.fixture
def app(runtime: ReconcileRuntime):
    app = create_app(settings=runtime.settings)
    # ASGITransport doesn't trigger lifespan
    init_runtime(runtime)
    yield app
    reset_runtime()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _drain_until(client: AsyncClient, endpoint_id: str, count: int) -> list[dict]:
    collected: list[dict] = []
    for _ in range(100):
        response = await client.get(f"/endpoints/{endpoint_id}/notifications")
        collected.extend(response.json()["notifications"])
        if len(collected) >= count:
            break
        await asyncio.sleep(0.02)
    return collected


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealthEndpoint:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert "X-Request-Duration-Ms" in response.headers


# ---------------------------------------------------------------------------
# Reconcile
# ---------------------------------------------------------------------------


class TestReconcileEndpoint:
    async def test_clean_document(
        self, client: AsyncClient, workspace: Path, runtime: ReconcileRuntime
    ) -> None:
        path = write_pom(workspace, VALID_POM)
        runtime.registry.register("/app")
        response = await client.post("/reconcile", json={"documentPath": path})
        assert response.status_code == 200
        assert response.json() == {"documentPath": path, "problems": []}

    async def test_semantic_problems_on_the_wire(
        self, client: AsyncClient, workspace: Path
    ) -> None:
        path = write_pom(workspace, VALID_POM)
        put = await client.put(
            "/projects", json={"identity": "/app", "problems": ["Missing artifact", "Bad parent"]}
        )
        assert put.status_code == 200
        response = await client.post("/reconcile", json={"documentPath": path})
        start, end = fallback_range(VALID_POM)
        assert response.json()["problems"] == [
            {"error": True, "message": "Missing artifact", "sourceStart": start, "sourceEnd": end},
            {"error": True, "message": "Bad parent", "sourceStart": start, "sourceEnd": end},
        ]

    async def test_structural_problem(self, client: AsyncClient, workspace: Path) -> None:
        path = write_pom(workspace, BROKEN_POM)
        response = await client.post("/reconcile", json={"documentPath": path})
        [problem] = response.json()["problems"]
        assert problem["error"] is True
        assert problem["sourceEnd"] == problem["sourceStart"] + 1

    async def test_nul_byte_in_path_is_not_a_server_error(self, client: AsyncClient) -> None:
        response = await client.post("/reconcile", json={"documentPath": "/app/po\u0000m.xml"})
        assert response.status_code == 200
        assert response.json()["problems"] == []

    async def test_missing_document(self, client: AsyncClient) -> None:
        response = await client.post("/reconcile", json={"documentPath": "/ghost/pom.xml"})
        assert response.status_code == 200
        assert response.json()["problems"] == []

    async def test_empty_path_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/reconcile", json={"documentPath": ""})
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Endpoint-scoped delivery
# ---------------------------------------------------------------------------


class TestEndpointDelivery:
    async def test_result_delivered_to_endpoint(
        self, client: AsyncClient, workspace: Path, runtime: ReconcileRuntime
    ) -> None:
        path = write_pom(workspace, VALID_POM)
        runtime.registry.register("/app", ["Missing artifact"])
        response = await client.post("/endpoints/ws-1/reconcile", json={"documentPath": path})
        assert response.status_code == 202

        [notification] = await _drain_until(client, "ws-1", 1)
        assert notification["method"] == OUTGOING_METHOD
        assert notification["params"]["documentPath"] == path
        assert [p["message"] for p in notification["params"]["problems"]] == ["Missing artifact"]

        other = await client.get("/endpoints/ws-2/notifications")
        assert other.json()["notifications"] == []

    async def test_rejected_after_shutdown(
        self, client: AsyncClient, runtime: ReconcileRuntime
    ) -> None:
        runtime.close()
        response = await client.post(
            "/endpoints/ws-1/reconcile", json={"documentPath": "/app/pom.xml"}
        )
        assert response.status_code == 503


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    async def test_events_reach_hooks(
        self, client: AsyncClient, runtime: ReconcileRuntime, hooks: _RecordingHooks
    ) -> None:
        assert len(runtime.subscriptions.handles) == len(OBSERVED_KINDS)
        r1 = await client.post(
            "/endpoints/ws-1/events/editor-content",
            json={"fileLocation": "/app/pom.xml", "offset": 4, "length": 0, "text": "x"},
        )
        r2 = await client.post(
            "/endpoints/ws-2/events/file-operation",
            json={"path": "/app/pom.xml", "type": "start"},
        )
        assert r1.status_code == 202
        assert r2.status_code == 202
        assert hooks.calls == [("content", "ws-1"), ("file", "ws-2")]

    async def test_invalid_operation_type(self, client: AsyncClient) -> None:
        response = await client.post(
            "/endpoints/ws-1/events/file-operation",
            json={"path": "/app/pom.xml", "type": "explode"},
        )
        assert response.status_code == 422

    async def test_no_delivery_to_hooks_after_close(
        self, client: AsyncClient, runtime: ReconcileRuntime, hooks: _RecordingHooks
    ) -> None:
        runtime.close()
        runtime.close()
        await client.post(
            "/endpoints/ws-1/events/file-operation",
            json={"path": "/app/pom.xml", "type": "stop"},
        )
        assert hooks.calls == []


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class TestProjects:
    async def test_put_list_delete(self, client: AsyncClient) -> None:
        await client.put("/projects", json={"identity": "app", "problems": ["x"]})
        listed = await client.get("/projects")
        assert listed.json() == [{"identity": "/app", "problems": ["x"]}]

        deleted = await client.delete("/projects", params={"identity": "/app"})
        assert deleted.status_code == 204
        assert (await client.get("/projects")).json() == []

    async def test_delete_unknown(self, client: AsyncClient) -> None:
        response = await client.delete("/projects", params={"identity": "/nope"})
        assert response.status_code == 404

    async def test_identity_outside_workspace(self, client: AsyncClient) -> None:
        response = await client.put("/projects", json={"identity": "/../x"})
        assert response.status_code == 400
