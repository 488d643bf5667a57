"""Tests for the inventory HTTP client."""

import httpx
import pytest

from inventory.generator import generate_snippets
from inventory.sdk import InventoryClient, InventoryClientError


def create_client(handler, env: str = "demo") -> InventoryClient:
    return InventoryClient("http://inventory.test/", env=env, transport=httpx.MockTransport(handler))


class TestInventoryClient:
    """Test request construction and response parsing."""

    def test_env_is_always_sent(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=[])

        with create_client(handler) as client:
            assert client.list_workflows(q="order", include_soft_deleted=True) == []

        assert seen[0].path == "/api/workflows"
        assert seen[0].params["env"] == "demo"
        assert seen[0].params["q"] == "order"
        assert seen[0].params["includeSoftDeleted"] == "true"
        assert "tag" not in seen[0].params
        assert "active" not in seen[0].params

    def test_active_filter_is_lower_case(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params)
            return httpx.Response(200, json=[])

        with create_client(handler) as client:
            client.list_workflows(active=False)
        assert seen[0]["active"] == "false"

    def test_get_snippets(self):
        payload = generate_snippets(
            {"workflow": {"workflow_id": "wf_1", "name": "Order Sync"}}
        ).model_dump(mode="json", by_alias=True)

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/workflows/wf_1/snippets"
            return httpx.Response(200, json=payload)

        with create_client(handler) as client:
            result = client.get_snippets("wf_1")

        assert result.workflow.workflow_id == "wf_1"
        assert result.metadata.generated_at == payload["metadata"]["generatedAt"]
        assert result.snippet("diagram").language == "mermaid"

    def test_workflow_id_is_path_encoded(self):
        """Reserved characters in ids stay inside the path segment."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(404, json={"detail": "Workflow not found"})

        with create_client(handler) as client:
            with pytest.raises(InventoryClientError):
                client.get_workflow("wf?x=1/a#b")
            with pytest.raises(InventoryClientError):
                client.get_snippets("wf?x=1/a#b")

        assert seen[0].path == "/api/workflows/wf?x=1/a#b"
        assert seen[1].path == "/api/workflows/wf?x=1/a#b/snippets"
        assert b"%3F" in seen[0].raw_path
        assert b"%2F" in seen[0].raw_path
        assert dict(seen[0].params) == {"env": "demo"}
        assert dict(seen[1].params) == {"env": "demo"}

    def test_get_workflow(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={
                "workflow": {"workflow_id": "wf_1", "name": "Order Sync"},
                "snapshots": [
                    {"id": "s1", "workflow_id": "wf_1", "captured_at": "2026-01-01T00:00:00+00:00"}
                ],
                "snapshot_error": None,
            })

        with create_client(handler) as client:
            workflow, snapshots = client.get_workflow("wf_1")
        assert workflow.name == "Order Sync"
        assert [s.id for s in snapshots] == ["s1"]

    def test_sync_runs(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params)
            if request.url.params.get("daily") == "true":
                return httpx.Response(200, json=[{
                    "day": "2026-01-01", "trigger_source": "schedule", "runs_total": 2,
                    "runs_success": 2, "runs_error": 0, "workflows_seen": 6,
                    "workflows_changed": 2, "snapshots_inserted": 2, "errors_count": 0,
                }])
            return httpx.Response(200, json=[
                {"id": "r1", "status": "error", "started_at": "2026-01-01T00:00:00+00:00"}
            ])

        with create_client(handler) as client:
            runs = client.list_sync_runs(trigger_source="manual", status="error")
            daily = client.list_sync_runs_daily()

        assert runs[0].status == "error"
        assert seen[0]["triggerSource"] == "manual"
        assert daily[0].runs_total == 2

    def test_error_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"detail": "Workflow not found: wf_x"})

        with create_client(handler) as client:
            with pytest.raises(InventoryClientError) as excinfo:
                client.get_snippets("wf_x")

        assert excinfo.value.status_code == 404
        assert excinfo.value.detail == "Workflow not found: wf_x"

    def test_non_json_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        with create_client(handler) as client:
            with pytest.raises(InventoryClientError) as excinfo:
                client.health()
        assert excinfo.value.detail == "bad gateway"
