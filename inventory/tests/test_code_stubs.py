"""Tests for the Python and TypeScript runner stubs."""

from inventory.generator.code_stubs import (
    build_python_stub,
    build_typescript_stub,
    python_function_name,
    typescript_function_name,
)
from inventory.models.workflow_graph import WorkflowGraphNode


def _nodes(count: int) -> list[WorkflowGraphNode]:
    return [
        WorkflowGraphNode(id=f"n{i}", name=f"Step {i}", type="n8n-nodes-base.set")
        for i in range(1, count + 1)
    ]


class TestFunctionNames:
    """Test identifier derivation from workflow names."""

    def test_python_name(self):
        assert python_function_name("Order Sync") == "run_order_sync"
        assert python_function_name("!!!") == "run_workflow"
        assert python_function_name("x" * 50) == "run_" + "x" * 36

    def test_typescript_name(self):
        assert typescript_function_name("Order Sync") == "runOrderSync"
        assert typescript_function_name("lead-router v2") == "runLeadRouterV2"
        assert typescript_function_name("***") == "runWorkflow"
        assert typescript_function_name("y" * 50) == "runY" + "y" * 39


class TestPythonStub:
    """Test the Python runner body."""

    def test_layout(self):
        nodes = [
            WorkflowGraphNode(id="a", name="Start", type="n8n-nodes-base.manualTrigger"),
            WorkflowGraphNode(id="b", name="Fetch", type="n8n-nodes-base.httpRequest"),
        ]
        body = build_python_stub("wf_1", "Order Sync", nodes)
        lines = body.split("\n")

        assert lines[0] == "from typing import Any, Dict, List"
        assert "def run_order_sync(context: Dict[str, Any]) -> Dict[str, Any]:" in lines
        assert '    workflow_id = "wf_1"' in lines
        assert '        {"name": "Start", "type": "manualTrigger"},' in lines
        assert '        {"name": "Fetch", "type": "httpRequest"},' in lines
        assert '        "workflow_name": "Order Sync",' in lines
        assert lines[-1] == "    }"

    def test_names_are_escaped_literals(self):
        nodes = [WorkflowGraphNode(id="a", name='Say "hi"\nnow', type="x")]
        body = build_python_stub("wf_1", "W", nodes)
        assert '{"name": "Say \\"hi\\"\\nnow", "type": "x"},' in body

    def test_step_cap(self):
        """Only the first 14 nodes are emitted, with a trailing note."""
        body = build_python_stub("wf_1", "W", _nodes(15))
        assert body.count('{"name": "Step ') == 14
        assert '"Step 14"' in body
        assert '"Step 15"' not in body
        assert body.endswith("# Truncated to 14 sampled steps from 15 total nodes.")

    def test_no_note_at_cap(self):
        body = build_python_stub("wf_1", "W", _nodes(14))
        assert "Truncated" not in body

    def test_deterministic(self):
        nodes = _nodes(3)
        assert build_python_stub("wf_1", "W", nodes) == build_python_stub("wf_1", "W", nodes)


class TestTypeScriptStub:
    """Test the TypeScript runner body."""

    def test_layout(self):
        nodes = [WorkflowGraphNode(id="a", name="Fetch", type="n8n-nodes-base.httpRequest")]
        body = build_typescript_stub("wf_1", "Order Sync", nodes)
        lines = body.split("\n")

        assert lines[0] == "type WorkflowStep = { name: string; type: string };"
        assert "export async function runOrderSync(context: Record<string, unknown>) {" in lines
        assert '  const workflowId = "wf_1";' in lines
        assert '    { name: "Fetch", type: "httpRequest" },' in lines
        assert "    contextKeys: Object.keys(context)," in lines
        assert lines[-1] == "}"

    def test_step_cap(self):
        body = build_typescript_stub("wf_1", "W", _nodes(20), max_steps=5)
        assert body.count('{ name: "Step ') == 5
        assert body.endswith("// Truncated to 5 sampled steps from 20 total nodes.")

    def test_empty_graph(self):
        body = build_typescript_stub("wf_1", "W", [])
        assert "  const steps: WorkflowStep[] = [\n  ];" in body
