"""Generated snippet models.

A generation call takes a workflow record (plus optional snapshot and
fallback rows) and returns four snippets: python, typescript, diagram, notes.
None of these are persisted.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnippetType(str, Enum):
    """Kinds of generated content."""

    code = "code"
    diagram = "diagram"
    notes = "notes"


class GeneratedSnippet(BaseModel):
    """a single generated artifact. body is the literal text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str  # "{workflow_id}-{kind}"
    title: str
    type: SnippetType
    language: str | None = None
    source: str  # generator version
    body: str
    tags: list[str] = Field(default_factory=list)
    updated_at: str


class GenerationInput(BaseModel):
    """Raw records fetched by the caller.

    Records are kept as plain dicts because the inventory tables have
    drifted over time; the extractor checks each field alias itself.
    """

    workflow: dict[str, Any]
    snapshot: dict[str, Any] | None = None
    fallback_nodes: list[Any] = Field(default_factory=list)
    fallback_connections: list[Any] = Field(default_factory=list)
    initial_warnings: list[str] = Field(default_factory=list)


class WorkflowSummary(BaseModel):
    """workflow identity echoed back with the snippets."""

    workflow_id: str
    name: str
    tags: list[str] = Field(default_factory=list)
    node_count: int
    latest_definition_hash: str | None = None
    latest_snapshot_id: str | None = None
    latest_snapshot_captured_at: str | None = None


class GenerationMetadata(BaseModel):
    """metadata for one generation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    generator_version: str
    generated_at: str
    snapshot_id: str | None = None
    snapshot_captured_at: str | None = None
    node_count: int
    connection_count: int
    warnings: list[str] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Everything returned by generate_snippets()."""

    workflow: WorkflowSummary
    metadata: GenerationMetadata
    snippets: list[GeneratedSnippet]

    def snippet(self, kind: str) -> GeneratedSnippet | None:
        """look up a snippet by its kind suffix (python, typescript, diagram, notes)."""
        suffix = f"-{kind}"
        for snippet in self.snippets:
            if snippet.id.endswith(suffix):
                return snippet
        return None
