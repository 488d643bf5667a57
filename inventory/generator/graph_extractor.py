"""Extract a normalized node/edge graph from workflow JSON or inventory rows.

The snapshot's n8n export looks like:

    {
        "nodes": [{"id": ..., "name": "Start", "type": "n8n-nodes-base.manualTrigger"}],
        "connections": {
            "Start": {"main": [[{"node": "Fetch", "type": "main", "index": 0}]]}
        }
    }

Individually malformed entries are skipped without a warning. Falling back
to the flattened rows is reported, once per axis.
"""

from __future__ import annotations

import json
import math
from typing import Any

from inventory.generator.normalizer import dedupe_edges, dedupe_nodes
from inventory.models.workflow_graph import (
    DEFAULT_CONNECTION_TYPE,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)
from inventory.utils.text import slugify

# snapshot fields that may carry the document, oldest shape last
WORKFLOW_DOCUMENT_FIELDS = ("workflow_json", "workflow_jsonb")

FALLBACK_NODES_WARNING = (
    "Used fallback node rows because snapshot JSON nodes were unavailable."
)
FALLBACK_CONNECTIONS_WARNING = (
    "Used fallback connection rows because snapshot JSON connections were unavailable."
)


def as_record(value: Any) -> dict | None:
    return value if isinstance(value, dict) else None


def as_string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_index(value: Any) -> int | None:
    """read an integer from a number or numeric string.

    Booleans, non-finite and fractional values count as missing.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        if math.isfinite(parsed) and parsed.is_integer():
            return int(parsed)
    return None


def _first_string(row: dict, *fields: str) -> str | None:
    for field in fields:
        value = as_string(row.get(field))
        if value is not None:
            return value
    return None


def _first_index(row: dict, *fields: str) -> int | None:
    for field in fields:
        value = as_index(row.get(field))
        if value is not None:
            return value
    return None


def resolve_workflow_document(snapshot: dict | None) -> dict | None:
    """Find the workflow JSON document on a snapshot record.

    Checks each field in WORKFLOW_DOCUMENT_FIELDS in order. Text values are
    decoded as JSON first; anything that is not an object counts as absent.
    """
    if not snapshot:
        return None
    for field in WORKFLOW_DOCUMENT_FIELDS:
        value = snapshot.get(field)
        if isinstance(value, (str, bytes)):
            try:
                value = json.loads(value)
            except ValueError:
                continue
        document = as_record(value)
        if document is not None:
            return document
    return None


def _build_node(index: int, name: str | None, node_type: str | None, node_id: str | None, disabled: Any) -> WorkflowGraphNode:
    name = name if name is not None else f"Step {index + 1}"
    return WorkflowGraphNode(
        id=node_id if node_id is not None else f"{slugify(name)}_{index + 1}",
        name=name,
        type=node_type if node_type is not None else "unknown",
        disabled=disabled is True,
    )


def parse_nodes(document: dict | None) -> list[WorkflowGraphNode]:
    """parse the document's nodes array, deduplicated on (name, type)."""
    if not document:
        return []
    raw_nodes = document.get("nodes")
    if not isinstance(raw_nodes, list):
        return []

    nodes: list[WorkflowGraphNode] = []
    for index, raw in enumerate(raw_nodes):
        record = as_record(raw)
        if record is None:
            continue
        nodes.append(_build_node(
            index,
            as_string(record.get("name")),
            as_string(record.get("type")),
            as_string(record.get("id")),
            record.get("disabled"),
        ))
    return dedupe_nodes(nodes)


def parse_edges(document: dict | None) -> list[WorkflowGraphEdge]:
    """parse the document's connections map, deduplicated on the five-tuple."""
    if not document:
        return []
    connections = as_record(document.get("connections"))
    if connections is None:
        return []

    edges: list[WorkflowGraphEdge] = []
    for source, kinds in connections.items():
        kinds = as_record(kinds)
        if kinds is None:
            continue
        for kind, outputs in kinds.items():
            if not isinstance(outputs, list):
                continue
            for output_index, targets in enumerate(outputs):
                if not isinstance(targets, list):
                    continue
                for target in targets:
                    descriptor = as_record(target)
                    if descriptor is None:
                        continue
                    target_name = as_string(descriptor.get("node"))
                    if not target_name:
                        continue
                    edge_type = as_string(descriptor.get("type"))
                    target_index = as_index(descriptor.get("index"))
                    edges.append(WorkflowGraphEdge(
                        source=str(source),
                        target=target_name,
                        type=edge_type if edge_type is not None else str(kind),
                        source_output_index=output_index,
                        target_input_index=target_index if target_index is not None else 0,
                    ))
    return dedupe_edges(edges)


def parse_fallback_nodes(rows: list) -> list[WorkflowGraphNode]:
    """parse flattened workflow_nodes rows."""
    nodes: list[WorkflowGraphNode] = []
    for index, raw in enumerate(rows or []):
        row = as_record(raw)
        if row is None:
            continue
        nodes.append(_build_node(
            index,
            _first_string(row, "node_name", "name"),
            _first_string(row, "node_type", "type"),
            as_string(row.get("node_id")),
            row.get("disabled"),
        ))
    return dedupe_nodes(nodes)


def parse_fallback_edges(rows: list) -> list[WorkflowGraphEdge]:
    """parse flattened workflow_connections rows. rows without both ends are skipped."""
    edges: list[WorkflowGraphEdge] = []
    for raw in rows or []:
        row = as_record(raw)
        if row is None:
            continue
        source = _first_string(row, "source_node_name", "source_node")
        target = _first_string(row, "target_node_name", "target_node")
        if not source or not target:
            continue
        output_index = _first_index(row, "source_output_index", "source_output")
        input_index = _first_index(row, "target_input_index", "target_input")
        edge_type = _first_string(row, "connection_type", "type")
        edges.append(WorkflowGraphEdge(
            source=source,
            target=target,
            type=edge_type if edge_type is not None else DEFAULT_CONNECTION_TYPE,
            source_output_index=output_index if output_index is not None else 0,
            target_input_index=input_index if input_index is not None else 0,
        ))
    return dedupe_edges(edges)


def extract_graph(
    document: dict | None,
    fallback_nodes: list | None = None,
    fallback_connections: list | None = None,
) -> tuple[list[WorkflowGraphNode], list[WorkflowGraphEdge], list[str]]:
    """Extract nodes and edges, falling back to flattened rows per axis.

    Nodes and edges fall back independently: a document with nodes but no
    connections still takes its edges from the connection rows.

    Returns:
        (nodes, edges, warnings) with one warning per fallback that
        produced entries.
    """
    warnings: list[str] = []
    nodes = parse_nodes(document)
    edges = parse_edges(document)

    if not nodes:
        nodes = parse_fallback_nodes(fallback_nodes or [])
        if nodes:
            warnings.append(FALLBACK_NODES_WARNING)

    if not edges:
        edges = parse_fallback_edges(fallback_connections or [])
        if edges:
            warnings.append(FALLBACK_CONNECTIONS_WARNING)

    return nodes, edges, warnings
