"""Data models for the inventory tables populated by the crawler.

These mirror the `workflows`, `workflow_snapshots`, `workflow_nodes`,
`workflow_connections` and `inventory_sync_runs` tables. The dashboard only
reads them.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class WorkflowRecord(BaseModel):
    """a workflow as last seen by the crawler."""

    workflow_id: str
    name: str = ""
    active: bool = False
    is_archived: bool = False
    tags: list[str] = Field(default_factory=list)
    node_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    first_seen_at: str | None = None
    last_seen_at: str | None = None
    soft_deleted_at: str | None = None
    latest_snapshot_id: str | None = None
    latest_snapshot_captured_at: str | None = None
    latest_definition_hash: str | None = None


class WorkflowSnapshotRecord(BaseModel):
    """point-in-time capture of a workflow definition."""

    id: str
    workflow_id: str
    captured_at: str
    workflow_jsonb: Any = None  # raw n8n export document
    definition_hash: str | None = None
    version_id: str | None = None
    version_counter: int | None = None
    has_webhook_trigger: bool | None = None
    webhook_path: str | None = None
    sync_run_id: str | None = None
    node_count: int | None = None
    connection_count: int | None = None


class WorkflowNodeRow(BaseModel):
    """flattened node row, used when snapshot JSON is missing."""

    id: str
    workflow_id: str
    node_name: str
    node_type: str
    node_id: str | None = None
    disabled: bool = False
    position_x: float | None = None
    position_y: float | None = None


class WorkflowConnectionRow(BaseModel):
    """flattened connection row, used when snapshot JSON is missing."""

    id: str
    workflow_id: str
    source_node: str
    target_node: str
    connection_type: str = "main"
    source_output: int = 0
    target_input: int = 0


class SyncRunRecord(BaseModel):
    """one crawler run."""

    id: str
    status: str  # "success", "error", "running"
    started_at: str
    finished_at: str | None = None
    workflows_seen: int = 0
    workflows_changed: int = 0
    workflows_unchanged: int = 0
    snapshots_inserted: int = 0
    duration_seconds: float | None = None
    errors_count: int = 0
    errors_json: Any = None
    trigger_source: str | None = None
    notes: str | None = None


class SyncRunDaily(BaseModel):
    """sync runs aggregated per day and trigger source."""

    day: str
    trigger_source: str
    runs_total: int
    runs_success: int
    runs_error: int
    workflows_seen: int
    workflows_changed: int
    snapshots_inserted: int
    errors_count: int


class TableHealth(BaseModel):
    """reachability and row count of one inventory table."""

    name: str
    status: Literal["ok", "error"]
    count: int | None = None
    error: str | None = None


class EnvStatus(BaseModel):
    """which runtime environments have a database configured."""

    environment: str
    available_environments: dict[str, bool]
    database_path: str


class HealthResponse(BaseModel):
    tables: list[TableHealth]
    env_status: EnvStatus
