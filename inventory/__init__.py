"""Workflow inventory - n8n inventory models and snippet generation."""

from inventory.generator import (
    GeneratorSettings,
    InvalidGenerationInput,
    generate_snippets,
)
from inventory.models.snippet import (
    GeneratedSnippet,
    GenerationInput,
    GenerationResult,
    SnippetType,
)
from inventory.models.workflow_graph import (
    NodeFamily,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)

__all__ = [
    # Graph
    "NodeFamily",
    "WorkflowGraphEdge",
    "WorkflowGraphNode",
    # Snippets
    "GeneratedSnippet",
    "GenerationInput",
    "GenerationResult",
    "SnippetType",
    # High-level APIs
    "GeneratorSettings",
    "InvalidGenerationInput",
    "generate_snippets",
]
