"""API routes for the workflow inventory and generated snippets."""

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from inventory.generator import GeneratorSettings, generate_snippets
from inventory.models.inventory_record import (
    EnvStatus,
    HealthResponse,
    SyncRunDaily,
    SyncRunRecord,
    TableHealth,
    WorkflowRecord,
    WorkflowSnapshotRecord,
)
from inventory.models.snippet import GenerationInput, GenerationResult
from server.config import available_environments, get_db_path, normalize_env
from server.inventory_db import (
    REQUIRED_TABLES,
    count_rows,
    get_latest_snapshot,
    get_workflow as db_get_workflow,
    list_connection_rows,
    list_node_rows,
    list_snapshots,
    list_sync_runs as db_list_sync_runs,
    list_sync_runs_daily,
    list_workflows as db_list_workflows,
    schema_sql,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SYNC_RUN_STATUSES = {"success", "error", "running"}

# generator caps (loaded at start-up)
_generator_settings: GeneratorSettings | None = None


class WorkflowDetail(BaseModel):
    """a workflow with its most recent snapshots."""

    workflow: WorkflowRecord
    snapshots: list[WorkflowSnapshotRecord]
    snapshot_error: str | None = None


class SchemaSql(BaseModel):
    sql: str


# --- Helper Functions ---


def _db_failure(action: str, exc: sqlite3.Error) -> HTTPException:
    logger.error("inventory query failed while %s: %s", action, exc)
    return HTTPException(status_code=500, detail=f"Inventory query failed: {exc}")


def load_generator_settings() -> GeneratorSettings:
    """read SNIPPET_MAX_* overrides. raises ValueError on a bad value."""
    global _generator_settings
    _generator_settings = GeneratorSettings.from_env()
    return _generator_settings


def _get_generator_settings() -> GeneratorSettings:
    """Get or load the generator settings."""
    if _generator_settings is None:
        return load_generator_settings()
    return _generator_settings


def _load_workflow(workflow_id: str, env: str) -> WorkflowRecord:
    """Load a workflow, raise 404 if not found."""
    try:
        workflow = db_get_workflow(workflow_id, env=env)
    except sqlite3.Error as exc:
        raise _db_failure("loading workflow", exc) from exc
    if workflow is None:
        raise HTTPException(status_code=404, detail=f"Workflow not found: {workflow_id}")
    return workflow


# --- Endpoints ---


@router.get("/health")
def health(env: str | None = None) -> HealthResponse:
    """row counts for every inventory table in the selected environment."""
    env = normalize_env(env)
    tables: list[TableHealth] = []
    for name in REQUIRED_TABLES:
        try:
            tables.append(TableHealth(name=name, status="ok", count=count_rows(name, env=env)))
        except sqlite3.Error as exc:
            tables.append(TableHealth(name=name, status="error", error=str(exc)))
    return HealthResponse(
        tables=tables,
        env_status=EnvStatus(
            environment=env,
            available_environments=available_environments(),
            database_path=str(get_db_path(env)),
        ),
    )


@router.get("/migrate/sql")
def migrate_sql() -> SchemaSql:
    """schema script for creating the inventory tables."""
    return SchemaSql(sql=schema_sql())


@router.get("/workflows")
def list_workflows(
    env: str | None = None,
    q: str | None = None,
    tag: str | None = None,
    active: bool | None = None,
    include_soft_deleted: bool = Query(False, alias="includeSoftDeleted"),
) -> list[WorkflowRecord]:
    """list workflows, most recently updated first."""
    try:
        return db_list_workflows(
            env=normalize_env(env),
            q=q.strip() if q else None,
            tag=tag or None,
            active=active,
            include_soft_deleted=include_soft_deleted,
        )
    except sqlite3.Error as exc:
        raise _db_failure("listing workflows", exc) from exc


@router.get("/workflows/{workflow_id}")
def get_workflow(workflow_id: str, env: str | None = None) -> WorkflowDetail:
    """a workflow and its 10 most recent snapshots."""
    env = normalize_env(env)
    workflow = _load_workflow(workflow_id, env)
    try:
        snapshots = list_snapshots(workflow_id, env=env, limit=10)
    except sqlite3.Error as exc:
        logger.warning("snapshot lookup failed for %s: %s", workflow_id, exc)
        return WorkflowDetail(workflow=workflow, snapshots=[], snapshot_error=str(exc))
    return WorkflowDetail(workflow=workflow, snapshots=snapshots)


@router.get("/workflows/{workflow_id}/snippets")
def get_workflow_snippets(workflow_id: str, env: str | None = None) -> GenerationResult:
    """generate python, typescript, diagram and notes snippets for a workflow.

    Secondary lookups that fail are reported as generator warnings instead
    of failing the request.
    """
    env = normalize_env(env)
    workflow = _load_workflow(workflow_id, env)
    warnings: list[str] = []

    snapshot = None
    try:
        snapshot = get_latest_snapshot(workflow_id, env=env)
    except sqlite3.Error as exc:
        logger.warning("snapshot lookup failed for %s: %s", workflow_id, exc)
        warnings.append(f"Snapshot lookup failed: {exc}")

    node_rows = []
    try:
        node_rows = [row.model_dump() for row in list_node_rows(workflow_id, env=env)]
    except sqlite3.Error as exc:
        logger.warning("node row lookup failed for %s: %s", workflow_id, exc)
        warnings.append(f"Node row lookup failed: {exc}")

    connection_rows = []
    try:
        connection_rows = [row.model_dump() for row in list_connection_rows(workflow_id, env=env)]
    except sqlite3.Error as exc:
        logger.warning("connection row lookup failed for %s: %s", workflow_id, exc)
        warnings.append(f"Connection row lookup failed: {exc}")

    return generate_snippets(
        GenerationInput(
            workflow=workflow.model_dump(),
            snapshot=snapshot.model_dump() if snapshot else None,
            fallback_nodes=node_rows,
            fallback_connections=connection_rows,
            initial_warnings=warnings,
        ),
        settings=_get_generator_settings(),
    )


@router.get("/sync-runs", response_model=None)
def list_sync_runs(
    env: str | None = None,
    daily: bool = False,
    day: str | None = None,
    trigger_source: str | None = Query(None, alias="triggerSource"),
    status: str | None = None,
) -> list[SyncRunRecord] | list[SyncRunDaily]:
    """recent sync runs, or per-day aggregates when daily=true."""
    env = normalize_env(env)
    try:
        if daily:
            return list_sync_runs_daily(env=env)
        return db_list_sync_runs(
            env=env,
            day=day[:10] if day else None,
            trigger_source=trigger_source or None,
            status=status if status in SYNC_RUN_STATUSES else None,
        )
    except sqlite3.Error as exc:
        raise _db_failure("listing sync runs", exc) from exc
