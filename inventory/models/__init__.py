"""Core data models for the workflow inventory."""

from inventory.models.workflow_graph import (
    DEFAULT_CONNECTION_TYPE,
    FAMILY_ORDER,
    SYNTHETIC_NODE_TYPE,
    NodeFamily,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)
from inventory.models.snippet import (
    GeneratedSnippet,
    GenerationInput,
    GenerationMetadata,
    GenerationResult,
    SnippetType,
    WorkflowSummary,
)
from inventory.models.inventory_record import (
    EnvStatus,
    HealthResponse,
    SyncRunDaily,
    SyncRunRecord,
    TableHealth,
    WorkflowConnectionRow,
    WorkflowNodeRow,
    WorkflowRecord,
    WorkflowSnapshotRecord,
)

__all__ = [
    # Graph
    "DEFAULT_CONNECTION_TYPE",
    "FAMILY_ORDER",
    "SYNTHETIC_NODE_TYPE",
    "NodeFamily",
    "WorkflowGraphEdge",
    "WorkflowGraphNode",
    # Snippets
    "GeneratedSnippet",
    "GenerationInput",
    "GenerationMetadata",
    "GenerationResult",
    "SnippetType",
    "WorkflowSummary",
    # Inventory tables
    "EnvStatus",
    "HealthResponse",
    "SyncRunDaily",
    "SyncRunRecord",
    "TableHealth",
    "WorkflowConnectionRow",
    "WorkflowNodeRow",
    "WorkflowRecord",
    "WorkflowSnapshotRecord",
]
