"""Seed an inventory database with demo workflows and sync runs.

Generates three workflows:
- Order Sync: snapshot JSON with a trigger, an HTTP call and a Postgres write
- Lead Router: no snapshot, only flattened node and connection rows
- Archive Cleanup: soft-deleted, with a disabled node

Usage:
    python -m server.scripts.seed_inventory --env demo
"""

import argparse
from datetime import datetime, timedelta, timezone

from inventory.models.inventory_record import (
    SyncRunRecord,
    WorkflowConnectionRow,
    WorkflowNodeRow,
    WorkflowRecord,
    WorkflowSnapshotRecord,
)
from inventory.utils.identifiers import generate_row_id, utc_timestamp
from server.config import RUNTIME_ENVS, get_db_path
from server.inventory_db import (
    init_db,
    insert_connection_rows,
    insert_node_rows,
    insert_snapshot,
    insert_sync_run,
    upsert_workflow,
)


def create_order_sync_document() -> dict:
    """n8n export for the Order Sync demo workflow."""
    return {
        "id": "wf_order_sync",
        "name": "Order Sync",
        "nodes": [
            {"id": "a1", "name": "Every Hour", "type": "n8n-nodes-base.scheduleTrigger"},
            {"id": "a2", "name": "Fetch Orders", "type": "n8n-nodes-base.httpRequest"},
            {"id": "a3", "name": "Has Orders?", "type": "n8n-nodes-base.if"},
            {"id": "a4", "name": "Store Orders", "type": "n8n-nodes-base.postgres"},
            {"id": "a5", "name": "Notify Team", "type": "n8n-nodes-base.slack"},
        ],
        "connections": {
            "Every Hour": {"main": [[{"node": "Fetch Orders", "type": "main", "index": 0}]]},
            "Fetch Orders": {"main": [[{"node": "Has Orders?", "type": "main", "index": 0}]]},
            "Has Orders?": {
                "main": [
                    [{"node": "Store Orders", "type": "main", "index": 0}],
                    [{"node": "Notify Team", "type": "main", "index": 0}],
                ]
            },
        },
    }


def seed_order_sync(env: str, now: datetime) -> WorkflowRecord:
    document = create_order_sync_document()
    captured_at = now.isoformat()
    workflow = WorkflowRecord(
        workflow_id="wf_order_sync",
        name="Order Sync",
        active=True,
        tags=["orders", "erp"],
        node_count=len(document["nodes"]),
        created_at=(now - timedelta(days=30)).isoformat(),
        updated_at=captured_at,
        first_seen_at=(now - timedelta(days=30)).isoformat(),
        last_seen_at=captured_at,
    )
    upsert_workflow(workflow, env=env)
    insert_snapshot(
        WorkflowSnapshotRecord(
            id=generate_row_id(),
            workflow_id=workflow.workflow_id,
            captured_at=captured_at,
            workflow_jsonb=document,
            definition_hash="sha256:demo-order-sync",
            node_count=len(document["nodes"]),
            connection_count=4,
        ),
        env=env,
    )
    return workflow


def seed_lead_router(env: str, now: datetime) -> WorkflowRecord:
    workflow = WorkflowRecord(
        workflow_id="wf_lead_router",
        name="Lead Router",
        active=True,
        tags=["crm"],
        node_count=3,
        created_at=(now - timedelta(days=12)).isoformat(),
        updated_at=(now - timedelta(hours=2)).isoformat(),
        last_seen_at=now.isoformat(),
    )
    upsert_workflow(workflow, env=env)
    names = [
        ("Inbound Webhook", "n8n-nodes-base.webhook"),
        ("Score Lead", "@n8n/n8n-nodes-langchain.openAi"),
        ("Upsert Contact", "n8n-nodes-base.airtable"),
    ]
    insert_node_rows(
        [
            WorkflowNodeRow(
                id=generate_row_id(),
                workflow_id=workflow.workflow_id,
                node_name=name,
                node_type=node_type,
            )
            for name, node_type in names
        ],
        env=env,
    )
    insert_connection_rows(
        [
            WorkflowConnectionRow(
                id=generate_row_id(),
                workflow_id=workflow.workflow_id,
                source_node=source,
                target_node=target,
            )
            for source, target in [("Inbound Webhook", "Score Lead"), ("Score Lead", "Upsert Contact")]
        ],
        env=env,
    )
    return workflow


def seed_archive_cleanup(env: str, now: datetime) -> WorkflowRecord:
    workflow = WorkflowRecord(
        workflow_id="wf_archive_cleanup",
        name="Archive Cleanup",
        is_archived=True,
        tags=["maintenance"],
        node_count=2,
        updated_at=(now - timedelta(days=40)).isoformat(),
        soft_deleted_at=(now - timedelta(days=7)).isoformat(),
    )
    upsert_workflow(workflow, env=env)
    insert_snapshot(
        WorkflowSnapshotRecord(
            id=generate_row_id(),
            workflow_id=workflow.workflow_id,
            captured_at=(now - timedelta(days=40)).isoformat(),
            workflow_jsonb={
                "nodes": [
                    {"name": "Weekly", "type": "n8n-nodes-base.cron"},
                    {"name": "Purge Rows", "type": "n8n-nodes-base.mysql", "disabled": True},
                ],
                "connections": {"Weekly": {"main": [[{"node": "Purge Rows"}]]}},
            },
        ),
        env=env,
    )
    return workflow


def seed_sync_runs(env: str, now: datetime) -> list[SyncRunRecord]:
    runs = []
    for offset, status, source in [
        (0, "success", "schedule"),
        (1, "success", "schedule"),
        (1, "error", "manual"),
        (2, "running", "schedule"),
    ]:
        started = now - timedelta(days=offset, minutes=5)
        run = SyncRunRecord(
            id=generate_row_id(),
            status=status,
            started_at=started.isoformat(),
            finished_at=None if status == "running" else (started + timedelta(minutes=2)).isoformat(),
            workflows_seen=3,
            workflows_changed=1 if status == "success" else 0,
            workflows_unchanged=2,
            snapshots_inserted=1 if status == "success" else 0,
            duration_seconds=None if status == "running" else 120.0,
            errors_count=1 if status == "error" else 0,
            errors_json=[{"message": "n8n API timeout"}] if status == "error" else None,
            trigger_source=source,
        )
        insert_sync_run(run, env=env)
        runs.append(run)
    return runs


def main():
    parser = argparse.ArgumentParser(description="Seed an inventory database with demo data.")
    parser.add_argument(
        "--env",
        choices=RUNTIME_ENVS,
        default="dev",
        help="runtime environment whose database is seeded",
    )
    args = parser.parse_args()

    init_db(args.env)
    now = datetime.now(timezone.utc)

    print(f"Seeding {get_db_path(args.env)}...")
    for seed in (seed_order_sync, seed_lead_router, seed_archive_cleanup):
        workflow = seed(args.env, now)
        print(f"  Workflow: {workflow.workflow_id} ({workflow.name})")

    runs = seed_sync_runs(args.env, now)
    print(f"  Sync runs: {len(runs)}")
    print(f"Done at {utc_timestamp()}")


if __name__ == "__main__":
    main()
