"""Snippet generation from workflow graphs."""

from inventory.generator.assembler import (
    InvalidGenerationInput,
    generate_snippets,
    resolve_workflow_identity,
)
from inventory.generator.code_stubs import build_python_stub, build_typescript_stub
from inventory.generator.diagram import build_diagram
from inventory.generator.families import infer_node_family, short_node_type
from inventory.generator.graph_extractor import (
    extract_graph,
    parse_edges,
    parse_fallback_edges,
    parse_fallback_nodes,
    parse_nodes,
    resolve_workflow_document,
)
from inventory.generator.normalizer import dedupe_edges, dedupe_nodes, ensure_edge_nodes
from inventory.generator.notes import build_notes
from inventory.generator.settings import GENERATOR_VERSION, GeneratorSettings

__all__ = [
    # Orchestration
    "InvalidGenerationInput",
    "generate_snippets",
    "resolve_workflow_identity",
    # Extraction and normalization
    "extract_graph",
    "parse_edges",
    "parse_fallback_edges",
    "parse_fallback_nodes",
    "parse_nodes",
    "resolve_workflow_document",
    "dedupe_edges",
    "dedupe_nodes",
    "ensure_edge_nodes",
    # Builders
    "build_diagram",
    "build_notes",
    "build_python_stub",
    "build_typescript_stub",
    "infer_node_family",
    "short_node_type",
    # Settings
    "GENERATOR_VERSION",
    "GeneratorSettings",
]
