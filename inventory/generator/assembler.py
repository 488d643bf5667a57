"""Snippet generation entry point.

Pipeline: resolve the workflow identity, extract the graph (snapshot JSON
first, flattened rows per axis second), add synthetic nodes for dangling
edges, then build the four artifacts. Warnings from each stage are
concatenated in that order, so the notes snippet lists everything that
happened before it.

Usage:

    from inventory.generator import generate_snippets
    result = generate_snippets(GenerationInput(workflow=row, snapshot=snapshot))
"""

from __future__ import annotations

import logging
from typing import Any

from inventory.generator.code_stubs import build_python_stub, build_typescript_stub
from inventory.generator.diagram import build_diagram
from inventory.generator.graph_extractor import (
    as_index,
    as_record,
    as_string,
    extract_graph,
    resolve_workflow_document,
)
from inventory.generator.normalizer import ensure_edge_nodes
from inventory.generator.notes import build_notes
from inventory.generator.settings import GeneratorSettings
from inventory.models.snippet import (
    GeneratedSnippet,
    GenerationInput,
    GenerationMetadata,
    GenerationResult,
    SnippetType,
    WorkflowSummary,
)
from inventory.utils.identifiers import utc_timestamp
from inventory.utils.text import unique

logger = logging.getLogger(__name__)

BASE_TAGS = ("generated", "inventory")


class InvalidGenerationInput(ValueError):
    """raised when the workflow record cannot identify a workflow."""


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str)]


def _first_of(*values: Any) -> str | None:
    for value in values:
        text = as_string(value)
        if text is not None:
            return text
    return None


def resolve_workflow_identity(workflow: dict) -> tuple[str, str, list[str]]:
    """Return (workflow_id, display name, tags).

    A blank or missing name falls back to the id.
    """
    workflow_id = as_string(workflow.get("workflow_id"))
    if not workflow_id:
        raise InvalidGenerationInput("workflow record must have a non-empty 'workflow_id'")
    name = as_string(workflow.get("name")) or workflow_id
    return workflow_id, name, _string_list(workflow.get("tags"))


def generate_snippets(
    data: GenerationInput | dict,
    settings: GeneratorSettings | None = None,
) -> GenerationResult:
    """Build python, typescript, diagram and notes snippets for one workflow.

    Malformed graph data never raises: bad entries are skipped and missing
    sources fall back to the flattened rows, with warnings in the metadata.

    Args:
        data: workflow record, optional snapshot, fallback rows and any
            warnings the caller already collected.
        settings: output caps, defaults to GeneratorSettings().

    Returns:
        GenerationResult with the four snippets sharing one timestamp.

    Raises:
        InvalidGenerationInput: the workflow record has no workflow_id.
    """
    if not isinstance(data, GenerationInput):
        data = GenerationInput.model_validate(data)
    settings = settings or GeneratorSettings()

    workflow = data.workflow
    snapshot = as_record(data.snapshot)
    workflow_id, workflow_name, workflow_tags = resolve_workflow_identity(workflow)
    base_tags = unique([*BASE_TAGS, *workflow_tags])

    warnings = list(data.initial_warnings)

    document = resolve_workflow_document(snapshot)
    nodes, edges, extract_warnings = extract_graph(
        document,
        data.fallback_nodes,
        data.fallback_connections,
    )
    warnings.extend(extract_warnings)
    for warning in extract_warnings:
        logger.info("workflow %s: %s", workflow_id, warning)

    nodes, synthetic_warnings = ensure_edge_nodes(nodes, edges)
    warnings.extend(synthetic_warnings)

    snapshot = snapshot or {}
    snapshot_id = _first_of(
        workflow.get("latest_snapshot_id"),
        snapshot.get("snapshot_id"),
        snapshot.get("id"),
    )
    captured_at = _first_of(
        workflow.get("latest_snapshot_captured_at"),
        snapshot.get("captured_at"),
    )
    definition_hash = _first_of(
        workflow.get("latest_definition_hash"),
        snapshot.get("definition_hash"),
    )
    generated_at = utc_timestamp()

    diagram, diagram_warnings = build_diagram(
        workflow_name, nodes, edges, max_edges=settings.max_diagram_edges
    )
    warnings.extend(diagram_warnings)
    for warning in diagram_warnings:
        logger.info("workflow %s: %s", workflow_id, warning)

    python = build_python_stub(workflow_id, workflow_name, nodes, settings.max_code_steps)
    typescript = build_typescript_stub(workflow_id, workflow_name, nodes, settings.max_code_steps)
    notes = build_notes(
        workflow_id, workflow_name, nodes, edges, warnings, max_io_nodes=settings.max_io_notes
    )

    def snippet(kind: str, title: str, snippet_type: SnippetType, language: str, body: str) -> GeneratedSnippet:
        return GeneratedSnippet(
            id=f"{workflow_id}-{kind}",
            title=f"{workflow_name} {title}",
            type=snippet_type,
            language=language,
            source=settings.generator_version,
            body=body,
            tags=[*base_tags, kind],
            updated_at=generated_at,
        )

    snippets = [
        snippet("python", "runner (Python)", SnippetType.code, "python", python),
        snippet("typescript", "runner (TypeScript)", SnippetType.code, "typescript", typescript),
        snippet("diagram", "flow diagram", SnippetType.diagram, "mermaid", diagram),
        snippet("notes", "generated notes", SnippetType.notes, "markdown", notes),
    ]

    record_node_count = as_index(workflow.get("node_count"))

    logger.debug(
        "generated snippets for %s: %d nodes, %d connections, %d warnings",
        workflow_id, len(nodes), len(edges), len(warnings),
    )

    return GenerationResult(
        workflow=WorkflowSummary(
            workflow_id=workflow_id,
            name=workflow_name,
            tags=workflow_tags,
            node_count=record_node_count if record_node_count is not None else len(nodes),
            latest_definition_hash=definition_hash,
            latest_snapshot_id=snapshot_id,
            latest_snapshot_captured_at=captured_at,
        ),
        metadata=GenerationMetadata(
            generator_version=settings.generator_version,
            generated_at=generated_at,
            snapshot_id=snapshot_id,
            snapshot_captured_at=captured_at,
            node_count=len(nodes),
            connection_count=len(edges),
            warnings=warnings,
        ),
        snippets=snippets,
    )
