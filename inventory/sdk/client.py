"""HTTP client for the inventory API.

Usage:

    from inventory.sdk import InventoryClient
    with InventoryClient("http://localhost:8000", env="demo") as client:
        result = client.get_snippets("wf_order_sync")
        print(result.snippet("diagram").body)
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from inventory.models.inventory_record import (
    HealthResponse,
    SyncRunDaily,
    SyncRunRecord,
    WorkflowRecord,
    WorkflowSnapshotRecord,
)
from inventory.models.snippet import GenerationResult


class InventoryClientError(Exception):
    """non-2xx response from the inventory API."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class InventoryClient:
    """thin wrapper over the /api routes. every call carries the runtime env."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        env: str = "dev",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.env = env
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/api",
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "InventoryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _workflow_path(self, workflow_id: str) -> str:
        # "/", "?" and "#" in ids are percent-encoded
        return f"/workflows/{quote(workflow_id, safe='')}"

    def _get(self, path: str, **params: Any) -> Any:
        query = {key: value for key, value in params.items() if value is not None}
        query["env"] = self.env
        response = self._client.get(path, params=query)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise InventoryClientError(response.status_code, str(detail))
        return response.json()

    def health(self) -> HealthResponse:
        return HealthResponse.model_validate(self._get("/health"))

    def list_workflows(
        self,
        q: str | None = None,
        tag: str | None = None,
        active: bool | None = None,
        include_soft_deleted: bool = False,
    ) -> list[WorkflowRecord]:
        data = self._get(
            "/workflows",
            q=q,
            tag=tag,
            active=None if active is None else str(active).lower(),
            includeSoftDeleted="true" if include_soft_deleted else None,
        )
        return [WorkflowRecord.model_validate(item) for item in data]

    def get_workflow(self, workflow_id: str) -> tuple[WorkflowRecord, list[WorkflowSnapshotRecord]]:
        """a workflow and its most recent snapshots."""
        data = self._get(self._workflow_path(workflow_id))
        return (
            WorkflowRecord.model_validate(data["workflow"]),
            [WorkflowSnapshotRecord.model_validate(item) for item in data.get("snapshots", [])],
        )

    def get_snippets(self, workflow_id: str) -> GenerationResult:
        return GenerationResult.model_validate(self._get(f"{self._workflow_path(workflow_id)}/snippets"))

    def list_sync_runs(
        self,
        day: str | None = None,
        trigger_source: str | None = None,
        status: str | None = None,
    ) -> list[SyncRunRecord]:
        data = self._get("/sync-runs", day=day, triggerSource=trigger_source, status=status)
        return [SyncRunRecord.model_validate(item) for item in data]

    def list_sync_runs_daily(self) -> list[SyncRunDaily]:
        data = self._get("/sync-runs", daily="true")
        return [SyncRunDaily.model_validate(item) for item in data]
