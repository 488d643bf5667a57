"""Tests for the markdown notes builder."""

from inventory.generator.notes import build_notes
from inventory.models.workflow_graph import WorkflowGraphEdge, WorkflowGraphNode


class TestBuildNotes:
    """Test notes sections."""

    def _section(self, body: str, header: str) -> list[str]:
        lines = body.split("\n")
        start = lines.index(header) + 1
        section = []
        for line in lines[start:]:
            if not line:
                break
            section.append(line)
        return section

    def test_summary(self):
        nodes = [
            WorkflowGraphNode(id="a", name="Start", type="n8n-nodes-base.manualTrigger"),
            WorkflowGraphNode(id="b", name="Fetch", type="n8n-nodes-base.httpRequest"),
        ]
        edges = [WorkflowGraphEdge(source="Start", target="Fetch")]
        body = build_notes("wf_1", "Order Sync", nodes, edges, [])

        assert self._section(body, "### Workflow Summary") == [
            "- Workflow: Order Sync",
            "- Workflow ID: `wf_1`",
            "- Nodes: 2",
            "- Connections: 1",
        ]
        assert self._section(body, "### Trigger Nodes") == ["- Start"]
        assert self._section(body, "### External I/O Candidates") == ["- Fetch"]
        assert self._section(body, "### Disabled Nodes") == ["- None"]
        assert "### Generator Warnings" not in body

    def test_empty_sections(self):
        body = build_notes("wf_1", "W", [], [], [])
        assert self._section(body, "### Trigger Nodes") == ["- None detected"]
        assert self._section(body, "### External I/O Candidates") == ["- None detected"]
        assert self._section(body, "### Disabled Nodes") == ["- None"]

    def test_io_candidates_capped(self):
        nodes = [
            WorkflowGraphNode(id=f"n{i}", name=f"Call {i}", type="n8n-nodes-base.httpRequest")
            for i in range(10)
        ]
        body = build_notes("wf_1", "W", nodes, [], [])
        assert len(self._section(body, "### External I/O Candidates")) == 8

        body = build_notes("wf_1", "W", nodes, [], [], max_io_nodes=3)
        assert self._section(body, "### External I/O Candidates") == ["- Call 0", "- Call 1", "- Call 2"]

    def test_disabled_nodes(self):
        nodes = [
            WorkflowGraphNode(id="a", name="Weekly", type="n8n-nodes-base.cron"),
            WorkflowGraphNode(id="b", name="Purge Rows", type="n8n-nodes-base.mysql", disabled=True),
        ]
        body = build_notes("wf_1", "W", nodes, [], [])
        assert self._section(body, "### Disabled Nodes") == ["- Purge Rows"]

    def test_warnings_section_last(self):
        body = build_notes("wf_1", "W", [], [], ["first", "second"])
        lines = body.split("\n")
        assert lines[-3:] == ["### Generator Warnings", "- first", "- second"]
