"""SQLite storage for the workflow inventory.

The crawler owns these tables; the dashboard reads them. The insert helpers
exist for the seed script and tests.
"""

import json
import sqlite3
from typing import Any

from inventory.models.inventory_record import (
    SyncRunDaily,
    SyncRunRecord,
    WorkflowConnectionRow,
    WorkflowNodeRow,
    WorkflowRecord,
    WorkflowSnapshotRecord,
)
from server.config import get_db_path

REQUIRED_TABLES = (
    "workflows",
    "workflow_snapshots",
    "workflow_nodes",
    "workflow_connections",
    "inventory_sync_runs",
)

SCHEMA_STATEMENTS = (
    """
    create table if not exists workflows (
        workflow_id text primary key,
        name text not null default '',
        active integer not null default 0,
        is_archived integer not null default 0,
        tags_json text not null default '[]',
        node_count integer not null default 0,
        created_at text,
        updated_at text,
        first_seen_at text,
        last_seen_at text,
        soft_deleted_at text,
        latest_snapshot_id text,
        latest_snapshot_captured_at text,
        latest_definition_hash text
    )
    """,
    """
    create table if not exists workflow_snapshots (
        id text primary key,
        workflow_id text not null references workflows(workflow_id) on delete cascade,
        captured_at text not null,
        workflow_jsonb text,
        definition_hash text,
        version_id text,
        version_counter integer,
        has_webhook_trigger integer,
        webhook_path text,
        sync_run_id text,
        node_count integer,
        connection_count integer
    )
    """,
    """
    create index if not exists idx_workflow_snapshots_workflow
        on workflow_snapshots(workflow_id, captured_at)
    """,
    """
    create table if not exists workflow_nodes (
        id text primary key,
        workflow_id text not null references workflows(workflow_id) on delete cascade,
        node_name text not null default '',
        node_type text not null default '',
        node_id text,
        disabled integer not null default 0,
        position_x real,
        position_y real
    )
    """,
    """
    create index if not exists idx_workflow_nodes_workflow on workflow_nodes(workflow_id)
    """,
    """
    create table if not exists workflow_connections (
        id text primary key,
        workflow_id text not null references workflows(workflow_id) on delete cascade,
        source_node text not null default '',
        target_node text not null default '',
        connection_type text not null default 'main',
        source_output integer not null default 0,
        target_input integer not null default 0
    )
    """,
    """
    create index if not exists idx_workflow_connections_workflow
        on workflow_connections(workflow_id)
    """,
    """
    create table if not exists inventory_sync_runs (
        id text primary key,
        status text not null default 'pending',
        started_at text not null,
        finished_at text,
        workflows_seen integer not null default 0,
        workflows_changed integer not null default 0,
        workflows_unchanged integer not null default 0,
        snapshots_inserted integer not null default 0,
        duration_seconds real,
        errors_count integer not null default 0,
        errors_json text,
        trigger_source text,
        notes text
    )
    """,
    """
    create index if not exists idx_inventory_sync_runs_started
        on inventory_sync_runs(started_at)
    """,
)


def schema_sql() -> str:
    """the schema as a single script, for operators creating tables by hand."""
    body = ";\n".join(" ".join(line.strip() for line in stmt.strip().splitlines()) for stmt in SCHEMA_STATEMENTS)
    return f"-- Workflow inventory tables (SQLite)\n{body};\n"


def _connect(env: str | None = None, create: bool = False) -> sqlite3.Connection:
    """open the env database. without create, a missing file raises sqlite3.OperationalError."""
    path = get_db_path(env)
    if create:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path)
    else:
        conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=rw", uri=True)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(env: str | None = None) -> None:
    with _connect(env, create=True) as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(statement)
        conn.commit()


def _row_values(row: sqlite3.Row) -> dict[str, Any]:
    # NULL columns fall back to model defaults
    return {key: row[key] for key in row.keys() if row[key] is not None}


def _load_json(value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError:
        return None


def _workflow_from_row(row: sqlite3.Row) -> WorkflowRecord:
    values = _row_values(row)
    tags = _load_json(values.pop("tags_json", None))
    values["tags"] = [tag for tag in tags if isinstance(tag, str)] if isinstance(tags, list) else []
    return WorkflowRecord.model_validate(values)


def _snapshot_from_row(row: sqlite3.Row) -> WorkflowSnapshotRecord:
    values = _row_values(row)
    values["workflow_jsonb"] = _load_json(values.get("workflow_jsonb"))
    return WorkflowSnapshotRecord.model_validate(values)


def _sync_run_from_row(row: sqlite3.Row) -> SyncRunRecord:
    values = _row_values(row)
    values["errors_json"] = _load_json(values.get("errors_json"))
    return SyncRunRecord.model_validate(values)


# --- Queries ---


def count_rows(table: str, env: str | None = None) -> int:
    """row count for one of REQUIRED_TABLES. raises sqlite3.Error if missing."""
    if table not in REQUIRED_TABLES:
        raise ValueError(f"unknown inventory table: {table}")
    with _connect(env) as conn:
        row = conn.execute(f"select count(*) as n from {table}").fetchone()
    return int(row["n"])


def list_workflows(
    env: str | None = None,
    q: str | None = None,
    tag: str | None = None,
    active: bool | None = None,
    include_soft_deleted: bool = False,
) -> list[WorkflowRecord]:
    """workflows, most recently updated first."""
    clauses: list[str] = []
    params: list[Any] = []
    if q:
        clauses.append("(lower(name) like ? or lower(workflow_id) like ?)")
        pattern = f"%{q.lower()}%"
        params.extend([pattern, pattern])
    if tag:
        clauses.append("exists (select 1 from json_each(workflows.tags_json) where value = ?)")
        params.append(tag)
    if active is not None:
        clauses.append("active = ?")
        params.append(1 if active else 0)
    if not include_soft_deleted:
        clauses.append("soft_deleted_at is null")

    where = f"where {' and '.join(clauses)}" if clauses else ""
    with _connect(env) as conn:
        rows = conn.execute(
            f"select * from workflows {where} order by updated_at desc",
            params,
        ).fetchall()
    return [_workflow_from_row(row) for row in rows]


def get_workflow(workflow_id: str, env: str | None = None) -> WorkflowRecord | None:
    with _connect(env) as conn:
        row = conn.execute(
            "select * from workflows where workflow_id = ?",
            (workflow_id,),
        ).fetchone()
    if not row:
        return None
    return _workflow_from_row(row)


def list_snapshots(
    workflow_id: str,
    env: str | None = None,
    limit: int = 10,
) -> list[WorkflowSnapshotRecord]:
    """most recent snapshots first."""
    with _connect(env) as conn:
        rows = conn.execute(
            """
            select * from workflow_snapshots
            where workflow_id = ?
            order by captured_at desc
            limit ?
            """,
            (workflow_id, limit),
        ).fetchall()
    return [_snapshot_from_row(row) for row in rows]


def get_latest_snapshot(workflow_id: str, env: str | None = None) -> WorkflowSnapshotRecord | None:
    snapshots = list_snapshots(workflow_id, env=env, limit=1)
    return snapshots[0] if snapshots else None


def list_node_rows(workflow_id: str, env: str | None = None) -> list[WorkflowNodeRow]:
    with _connect(env) as conn:
        rows = conn.execute(
            "select * from workflow_nodes where workflow_id = ? order by rowid",
            (workflow_id,),
        ).fetchall()
    return [WorkflowNodeRow.model_validate(_row_values(row)) for row in rows]


def list_connection_rows(workflow_id: str, env: str | None = None) -> list[WorkflowConnectionRow]:
    with _connect(env) as conn:
        rows = conn.execute(
            "select * from workflow_connections where workflow_id = ? order by rowid",
            (workflow_id,),
        ).fetchall()
    return [WorkflowConnectionRow.model_validate(_row_values(row)) for row in rows]


def list_sync_runs(
    env: str | None = None,
    day: str | None = None,
    trigger_source: str | None = None,
    status: str | None = None,
    limit: int = 25,
) -> list[SyncRunRecord]:
    """most recent sync runs first. day is matched against the started_at date."""
    clauses: list[str] = []
    params: list[Any] = []
    if day:
        clauses.append("substr(started_at, 1, 10) = ?")
        params.append(day)
    if trigger_source:
        clauses.append("trigger_source = ?")
        params.append(trigger_source)
    if status:
        clauses.append("status = ?")
        params.append(status)

    where = f"where {' and '.join(clauses)}" if clauses else ""
    params.append(limit)
    with _connect(env) as conn:
        rows = conn.execute(
            f"select * from inventory_sync_runs {where} order by started_at desc limit ?",
            params,
        ).fetchall()
    return [_sync_run_from_row(row) for row in rows]


def list_sync_runs_daily(env: str | None = None, limit: int = 30) -> list[SyncRunDaily]:
    """sync runs grouped by day and trigger source, newest day first."""
    with _connect(env) as conn:
        rows = conn.execute(
            """
            select
                substr(started_at, 1, 10) as day,
                coalesce(trigger_source, 'unknown') as trigger_source,
                count(*) as runs_total,
                sum(case when status = 'success' then 1 else 0 end) as runs_success,
                sum(case when status = 'error' then 1 else 0 end) as runs_error,
                sum(workflows_seen) as workflows_seen,
                sum(workflows_changed) as workflows_changed,
                sum(snapshots_inserted) as snapshots_inserted,
                sum(errors_count) as errors_count
            from inventory_sync_runs
            group by substr(started_at, 1, 10), coalesce(trigger_source, 'unknown')
            order by day desc, trigger_source
            limit ?
            """,
            (limit,),
        ).fetchall()
    return [SyncRunDaily.model_validate(dict(row)) for row in rows]


# --- Inserts ---


def upsert_workflow(workflow: WorkflowRecord, env: str | None = None) -> None:
    """insert or update a workflow row."""
    values = workflow.model_dump()
    values["tags_json"] = json.dumps(values.pop("tags"))
    columns = list(values)
    updates = ", ".join(f"{col} = excluded.{col}" for col in columns if col != "workflow_id")
    with _connect(env, create=True) as conn:
        conn.execute(
            f"""
            insert into workflows ({', '.join(columns)})
            values ({', '.join('?' for _ in columns)})
            on conflict(workflow_id) do update set {updates}
            """,
            [values[col] for col in columns],
        )
        conn.commit()


def insert_snapshot(snapshot: WorkflowSnapshotRecord, env: str | None = None) -> None:
    values = snapshot.model_dump()
    if values["workflow_jsonb"] is not None:
        values["workflow_jsonb"] = json.dumps(values["workflow_jsonb"])
    _insert("workflow_snapshots", values, env)


def insert_node_rows(rows: list[WorkflowNodeRow], env: str | None = None) -> None:
    for row in rows:
        _insert("workflow_nodes", row.model_dump(), env)


def insert_connection_rows(rows: list[WorkflowConnectionRow], env: str | None = None) -> None:
    for row in rows:
        _insert("workflow_connections", row.model_dump(), env)


def insert_sync_run(run: SyncRunRecord, env: str | None = None) -> None:
    values = run.model_dump()
    if values["errors_json"] is not None:
        values["errors_json"] = json.dumps(values["errors_json"])
    _insert("inventory_sync_runs", values, env)


def _insert(table: str, values: dict[str, Any], env: str | None) -> None:
    columns = list(values)
    with _connect(env, create=True) as conn:
        conn.execute(
            f"insert into {table} ({', '.join(columns)}) values ({', '.join('?' for _ in columns)})",
            [values[col] for col in columns],
        )
        conn.commit()
