"""Tests for graph normalization."""

from inventory.generator.normalizer import dedupe_edges, dedupe_nodes, ensure_edge_nodes
from inventory.models.workflow_graph import (
    SYNTHETIC_NODE_TYPE,
    WorkflowGraphEdge,
    WorkflowGraphNode,
)


def _node(name: str, node_type: str = "x", node_id: str | None = None) -> WorkflowGraphNode:
    return WorkflowGraphNode(id=node_id or name.lower(), name=name, type=node_type)


class TestDedupeNodes:
    """Test node deduplication on (name, type)."""

    def test_first_occurrence_wins(self):
        nodes = dedupe_nodes([_node("A", node_id="first"), _node("B"), _node("A", node_id="second")])
        assert [(n.name, n.id) for n in nodes] == [("A", "first"), ("B", "b")]

    def test_same_name_different_type_kept(self):
        """Name collisions with different types are separate nodes."""
        nodes = dedupe_nodes([_node("A", "x"), _node("A", "y")])
        assert len(nodes) == 2

    def test_idempotent(self):
        nodes = dedupe_nodes([_node("A"), _node("A"), _node("B")])
        assert dedupe_nodes(nodes) == nodes


class TestDedupeEdges:
    """Test edge deduplication on the full five-tuple."""

    def test_identical_edges_collapse(self):
        edge = WorkflowGraphEdge(source="A", target="B")
        assert dedupe_edges([edge, edge.model_copy()]) == [edge]

    def test_differing_indices_kept(self):
        """Edges that differ only by port index are distinct."""
        edges = dedupe_edges([
            WorkflowGraphEdge(source="A", target="B"),
            WorkflowGraphEdge(source="A", target="B", source_output_index=1),
            WorkflowGraphEdge(source="A", target="B", target_input_index=1),
            WorkflowGraphEdge(source="A", target="B", type="ai_tool"),
        ])
        assert len(edges) == 4


class TestEnsureEdgeNodes:
    """Test synthetic node insertion for dangling edge endpoints."""

    def test_no_dangling_edges(self):
        """A closed graph is returned unchanged without warnings."""
        nodes = [_node("A"), _node("B")]
        result, warnings = ensure_edge_nodes(nodes, [WorkflowGraphEdge(source="A", target="B")])
        assert result == nodes
        assert warnings == []

    def test_adds_synthetic_nodes_in_edge_order(self):
        """Placeholders are appended source before target, once per name."""
        nodes = [_node("Start")]
        edges = [
            WorkflowGraphEdge(source="Start", target="Ghost"),
            WorkflowGraphEdge(source="Ghost", target="Other Ghost"),
            WorkflowGraphEdge(source="Start", target="Ghost", source_output_index=1),
        ]
        result, warnings = ensure_edge_nodes(nodes, edges)

        assert [n.name for n in result] == ["Start", "Ghost", "Other Ghost"]
        assert result[1].id == "synthetic_ghost"
        assert result[2].id == "synthetic_other_ghost"
        assert all(n.type == SYNTHETIC_NODE_TYPE for n in result[1:])
        assert all(n.disabled is False for n in result[1:])
        assert warnings == ["Added 2 synthetic node(s) referenced by connections."]

    def test_every_endpoint_resolves(self):
        """After normalization every edge endpoint names a node."""
        edges = [
            WorkflowGraphEdge(source="X", target="Y"),
            WorkflowGraphEdge(source="Y", target="Z"),
        ]
        result, _ = ensure_edge_nodes([], edges)
        names = {n.name for n in result}
        assert all(e.source in names and e.target in names for e in edges)

    def test_input_list_not_mutated(self):
        nodes = [_node("A")]
        ensure_edge_nodes(nodes, [WorkflowGraphEdge(source="A", target="B")])
        assert len(nodes) == 1
