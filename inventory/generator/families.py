"""Node type helpers: short names and family inference."""

from inventory.models.workflow_graph import NodeFamily

# checked in order, first match wins
FAMILY_KEYWORDS: tuple[tuple[NodeFamily, tuple[str, ...]], ...] = (
    (NodeFamily.trigger, ("trigger",)),
    (NodeFamily.io, ("http", "webhook", "slack", "email")),
    (NodeFamily.data, ("postgres", "mysql", "mongo", "database", "supabase", "airtable")),
    (NodeFamily.logic, ("if", "switch", "merge", "function", "code")),
    (NodeFamily.ai, ("openai", "langchain", "ai")),
)


def short_node_type(node_type: str) -> str:
    """'n8n-nodes-base.httpRequest' -> 'httpRequest'."""
    return node_type.split(".")[-1] or node_type


def infer_node_family(node_type: str) -> NodeFamily:
    """classify a node type by case-insensitive keyword match."""
    lowered = node_type.lower()
    for family, keywords in FAMILY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return family
    return NodeFamily.step
