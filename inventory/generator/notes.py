"""Markdown summary of a workflow graph."""

from inventory.generator.families import infer_node_family
from inventory.generator.settings import MAX_IO_NOTES
from inventory.models.workflow_graph import (
    NodeFamily,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)


def _bullets(items: list[str], empty: str) -> list[str]:
    if not items:
        return [f"- {empty}"]
    return [f"- {item}" for item in items]


def build_notes(
    workflow_id: str,
    workflow_name: str,
    nodes: list[WorkflowGraphNode],
    edges: list[WorkflowGraphEdge],
    warnings: list[str],
    max_io_nodes: int = MAX_IO_NOTES,
) -> str:
    """Summary, trigger nodes, I/O candidates, disabled nodes and warnings.

    The warnings section is only present when there is something to list.
    """
    triggers = [node.name for node in nodes if infer_node_family(node.type) is NodeFamily.trigger]
    io_nodes = [node.name for node in nodes if infer_node_family(node.type) is NodeFamily.io]
    disabled = [node.name for node in nodes if node.disabled]

    lines = [
        "### Workflow Summary",
        f"- Workflow: {workflow_name}",
        f"- Workflow ID: `{workflow_id}`",
        f"- Nodes: {len(nodes)}",
        f"- Connections: {len(edges)}",
        "",
        "### Trigger Nodes",
        *_bullets(triggers, "None detected"),
        "",
        "### External I/O Candidates",
        *_bullets(io_nodes[:max_io_nodes], "None detected"),
        "",
        "### Disabled Nodes",
        *_bullets(disabled, "None"),
    ]

    if warnings:
        lines.extend(["", "### Generator Warnings", *_bullets(warnings, "None")])

    return "\n".join(lines)
