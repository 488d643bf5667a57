"""Python and TypeScript runner stubs.

Each stub declares the first few workflow steps as a literal list and walks
them. Output depends only on the arguments, so regenerating a snippet for an
unchanged workflow gives the same text.
"""

import json

from inventory.generator.families import short_node_type
from inventory.generator.settings import MAX_CODE_STEPS
from inventory.models.workflow_graph import WorkflowGraphNode
from inventory.utils.text import slugify


def _literal(value: str) -> str:
    """JSON string literal, valid in both target languages."""
    return json.dumps(value, ensure_ascii=False)


def _truncation_note(comment: str, max_steps: int, total: int) -> list[str]:
    if total <= max_steps:
        return []
    return ["", f"{comment} Truncated to {max_steps} sampled steps from {total} total nodes."]


def python_function_name(workflow_name: str) -> str:
    return f"run_{slugify(workflow_name)[:36]}"


def typescript_function_name(workflow_name: str) -> str:
    """camel-case the slug: 'order_sync' -> 'runOrderSync'."""
    camel = "".join(segment[:1].upper() + segment[1:] for segment in slugify(workflow_name).split("_"))
    camel = "".join(char for char in camel if char.isascii() and char.isalnum())
    return f"run{camel[:40] or 'Workflow'}"


def build_python_stub(
    workflow_id: str,
    workflow_name: str,
    nodes: list[WorkflowGraphNode],
    max_steps: int = MAX_CODE_STEPS,
) -> str:
    """Python runner for the first max_steps nodes."""
    steps = [
        f'        {{"name": {_literal(node.name)}, "type": {_literal(short_node_type(node.type))}}},'
        for node in nodes[:max_steps]
    ]
    lines = [
        "from typing import Any, Dict, List",
        "",
        "",
        f"def {python_function_name(workflow_name)}(context: Dict[str, Any]) -> Dict[str, Any]:",
        '    """Auto-generated from n8n inventory snapshot data."""',
        f"    workflow_id = {_literal(workflow_id)}",
        "",
        "    steps: List[Dict[str, str]] = [",
        *steps,
        "    ]",
        "",
        "    for step in steps:",
        "        print(f\"[n8n-step] {step['name']} ({step['type']})\")",
        "",
        "    return {",
        '        "workflow_id": workflow_id,',
        f'        "workflow_name": {_literal(workflow_name)},',
        '        "steps_emitted": len(steps),',
        "    }",
    ]
    lines.extend(_truncation_note("#", max_steps, len(nodes)))
    return "\n".join(lines)


def build_typescript_stub(
    workflow_id: str,
    workflow_name: str,
    nodes: list[WorkflowGraphNode],
    max_steps: int = MAX_CODE_STEPS,
) -> str:
    """TypeScript runner for the first max_steps nodes."""
    steps = [
        f"    {{ name: {_literal(node.name)}, type: {_literal(short_node_type(node.type))} }},"
        for node in nodes[:max_steps]
    ]
    lines = [
        "type WorkflowStep = { name: string; type: string };",
        "",
        f"export async function {typescript_function_name(workflow_name)}(context: Record<string, unknown>) {{",
        f"  const workflowId = {_literal(workflow_id)};",
        "",
        "  const steps: WorkflowStep[] = [",
        *steps,
        "  ];",
        "",
        "  for (const step of steps) {",
        "    console.log(`[n8n-step] ${step.name} (${step.type})`);",
        "  }",
        "",
        "  return {",
        "    workflowId,",
        f"    workflowName: {_literal(workflow_name)},",
        "    stepsEmitted: steps.length,",
        "    contextKeys: Object.keys(context),",
        "  };",
        "}",
    ]
    lines.extend(_truncation_note("//", max_steps, len(nodes)))
    return "\n".join(lines)
