"""Data model for the normalized workflow graph.

Nodes and edges are derived per request from a snapshot's workflow JSON or
from the flattened inventory rows, and discarded once the snippets are built.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NodeFamily(str, Enum):
    """Styling/grouping category inferred from a node type."""

    trigger = "trigger"
    io = "io"
    data = "data"
    logic = "logic"
    ai = "ai"
    step = "step"


# class order used for diagram class lines
FAMILY_ORDER = (
    NodeFamily.trigger,
    NodeFamily.io,
    NodeFamily.data,
    NodeFamily.logic,
    NodeFamily.ai,
    NodeFamily.step,
)

SYNTHETIC_NODE_TYPE = "unknown.synthetic"
DEFAULT_CONNECTION_TYPE = "main"


class WorkflowGraphNode(BaseModel):
    """a workflow step. edges reference it by name, not id."""

    id: str
    name: str
    type: str
    disabled: bool = False

    @property
    def dedupe_key(self) -> tuple[str, str]:
        return (self.name, self.type)


class WorkflowGraphEdge(BaseModel):
    """a typed connection between two named nodes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source: str
    target: str
    type: str = DEFAULT_CONNECTION_TYPE
    source_output_index: int = 0
    target_input_index: int = 0

    @property
    def dedupe_key(self) -> tuple[str, str, str, int, int]:
        return (
            self.source,
            self.target,
            self.type,
            self.source_output_index,
            self.target_input_index,
        )
