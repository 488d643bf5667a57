"""Graph normalization: stable dedup and synthetic nodes for dangling edges."""

from inventory.models.workflow_graph import (
    SYNTHETIC_NODE_TYPE,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)
from inventory.utils.text import slugify


def dedupe_nodes(nodes: list[WorkflowGraphNode]) -> list[WorkflowGraphNode]:
    """keep the first node for each (name, type) pair."""
    seen: set[tuple[str, str]] = set()
    result: list[WorkflowGraphNode] = []
    for node in nodes:
        if node.dedupe_key in seen:
            continue
        seen.add(node.dedupe_key)
        result.append(node)
    return result


def dedupe_edges(edges: list[WorkflowGraphEdge]) -> list[WorkflowGraphEdge]:
    """keep the first edge for each (source, target, type, output, input) key."""
    seen: set[tuple[str, str, str, int, int]] = set()
    result: list[WorkflowGraphEdge] = []
    for edge in edges:
        if edge.dedupe_key in seen:
            continue
        seen.add(edge.dedupe_key)
        result.append(edge)
    return result


def _synthetic_node(name: str) -> WorkflowGraphNode:
    return WorkflowGraphNode(
        id=f"synthetic_{slugify(name)}",
        name=name,
        type=SYNTHETIC_NODE_TYPE,
        disabled=False,
    )


def ensure_edge_nodes(
    nodes: list[WorkflowGraphNode],
    edges: list[WorkflowGraphEdge],
) -> tuple[list[WorkflowGraphNode], list[str]]:
    """Append a placeholder node for every edge endpoint with no declared node.

    Placeholders follow the original nodes in edge order (source before
    target), one per name.

    Returns:
        (nodes, warnings) where warnings holds at most one entry.
    """
    result = list(nodes)
    known = {node.name for node in result}

    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint in known:
                continue
            result.append(_synthetic_node(endpoint))
            known.add(endpoint)

    added = len(result) - len(nodes)
    warnings: list[str] = []
    if added > 0:
        warnings.append(f"Added {added} synthetic node(s) referenced by connections.")
    return result, warnings
