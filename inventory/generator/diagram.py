"""Mermaid flowchart builder.

Nodes are declared with positional ids (N1, N2, ...) so that names never
leak into mermaid identifiers; names only appear inside escaped labels.
"""

from inventory.generator.families import infer_node_family, short_node_type
from inventory.generator.settings import (
    MAX_DIAGRAM_EDGES,
    MAX_LABEL_NAME,
    MAX_LABEL_TYPE,
)
from inventory.models.workflow_graph import (
    DEFAULT_CONNECTION_TYPE,
    FAMILY_ORDER,
    NodeFamily,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)
from inventory.utils.text import escape_label, truncate

# fill, stroke, text color
FAMILY_STYLES: dict[NodeFamily, tuple[str, str, str]] = {
    NodeFamily.trigger: ("#E8F4FF", "#007CE8", "#00003D"),
    NodeFamily.io: ("#F5F8FF", "#6B8DE3", "#00003D"),
    NodeFamily.data: ("#ECFFF2", "#1CD000", "#00003D"),
    NodeFamily.logic: ("#FFF5E8", "#F59E0B", "#00003D"),
    NodeFamily.ai: ("#F6EEFF", "#8B5CF6", "#1E1B4B"),
    NodeFamily.step: ("#F3F4F7", "#3B82F6", "#00003D"),
}


def node_label(node: WorkflowGraphNode) -> str:
    """two-line label: truncated name, then truncated short type."""
    name = truncate(node.name, MAX_LABEL_NAME)
    short_type = truncate(short_node_type(node.type), MAX_LABEL_TYPE)
    return escape_label(f"{name}\\n{short_type}")


def build_diagram(
    workflow_name: str,
    nodes: list[WorkflowGraphNode],
    edges: list[WorkflowGraphEdge],
    max_edges: int = MAX_DIAGRAM_EDGES,
) -> tuple[str, list[str]]:
    """Render the graph as a left-to-right mermaid flowchart.

    Only the first max_edges edges are drawn.

    Returns:
        (diagram text, warnings) where warnings notes any truncation.
    """
    lines = ["flowchart LR"]
    for family in FAMILY_ORDER:
        fill, stroke, color = FAMILY_STYLES[family]
        lines.append(f"  classDef {family.value} fill:{fill},stroke:{stroke},color:{color};")

    mermaid_ids: dict[str, str] = {}
    family_members: dict[NodeFamily, list[str]] = {family: [] for family in FAMILY_ORDER}

    for index, node in enumerate(nodes):
        mermaid_id = f"N{index + 1}"
        # same name with a different type: edges attach to the later node
        mermaid_ids[node.name] = mermaid_id
        lines.append(f'  {mermaid_id}["{node_label(node)}"]')
        family_members[infer_node_family(node.type)].append(mermaid_id)

    for edge in edges[:max_edges]:
        source_id = mermaid_ids.get(edge.source)
        target_id = mermaid_ids.get(edge.target)
        if source_id is None or target_id is None:
            continue
        if edge.type and edge.type != DEFAULT_CONNECTION_TYPE:
            lines.append(f"  {source_id} -->|{escape_label(edge.type)}| {target_id}")
        else:
            lines.append(f"  {source_id} --> {target_id}")

    warnings: list[str] = []
    if len(edges) > max_edges:
        warnings.append(f"Diagram truncated to {max_edges} edges (from {len(edges)}).")

    for family in FAMILY_ORDER:
        members = family_members[family]
        if members:
            lines.append(f"  class {','.join(members)} {family.value};")

    lines.append(f"  %% Generated for workflow: {escape_label(workflow_name)}")
    return "\n".join(lines), warnings
