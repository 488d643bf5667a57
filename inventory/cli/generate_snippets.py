#!/usr/bin/env python3
"""CLI script to generate snippets from a local workflow file.

Usage:
    python -m inventory.cli.generate_snippets <workflow_export.json>

    # or with JSON output
    python -m inventory.cli.generate_snippets <workflow_export.json> --json

    # write each snippet body to a directory
    python -m inventory.cli.generate_snippets <workflow_export.json> --output-dir out/

The file may be an n8n workflow export ({"id", "name", "nodes",
"connections"}), a snapshot record ({"workflow_id", "workflow_jsonb"}), or a
full generation input ({"workflow", "snapshot", "fallback_nodes", ...}).
"""

import argparse
import json
import sys
from pathlib import Path

from inventory.generator import GeneratorSettings, generate_snippets
from inventory.generator.graph_extractor import WORKFLOW_DOCUMENT_FIELDS
from inventory.models.snippet import GenerationInput, GenerationResult

# file extension per snippet language
EXTENSIONS = {
    "python": "py",
    "typescript": "ts",
    "mermaid": "mmd",
    "markdown": "md",
}


def load_generation_input(data: dict, workflow_id: str | None = None) -> GenerationInput:
    """Turn a loaded JSON file into a GenerationInput.

    Args:
        data: parsed file contents
        workflow_id: replaces any id the file carries

    Returns:
        GenerationInput ready for generate_snippets()
    """
    if "workflow" in data:
        generation_input = GenerationInput.model_validate(data)
    elif any(field in data for field in WORKFLOW_DOCUMENT_FIELDS):
        workflow = {
            "workflow_id": data.get("workflow_id"),
            "name": data.get("name"),
            "tags": data.get("tags"),
        }
        generation_input = GenerationInput(workflow=workflow, snapshot=data)
    else:
        # plain n8n export, tags may be objects with a name
        tags = [tag.get("name") if isinstance(tag, dict) else tag for tag in data.get("tags") or []]
        workflow = {"workflow_id": data.get("id"), "name": data.get("name"), "tags": tags}
        generation_input = GenerationInput(workflow=workflow, snapshot={"workflow_json": data})

    if workflow_id:
        generation_input.workflow["workflow_id"] = workflow_id
    return generation_input


def format_result(result: GenerationResult) -> str:
    """Format a generation result for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append(f"SNIPPETS: {result.workflow.name}")
    lines.append("=" * 60)
    lines.append("")
    lines.append(f"Workflow ID: {result.workflow.workflow_id}")
    lines.append(f"Nodes:       {result.metadata.node_count}")
    lines.append(f"Connections: {result.metadata.connection_count}")
    lines.append(f"Generated:   {result.metadata.generated_at}")
    lines.append("")

    if result.metadata.warnings:
        lines.append("-" * 40)
        lines.append("WARNINGS")
        lines.append("-" * 40)
        for warning in result.metadata.warnings:
            lines.append(f"  • {warning}")
        lines.append("")

    for snippet in result.snippets:
        lines.append("-" * 40)
        lines.append(f"{snippet.title} [{snippet.language}]")
        lines.append("-" * 40)
        lines.append(snippet.body)
        lines.append("")

    return "\n".join(lines)


def write_snippets(result: GenerationResult, output_dir: Path) -> list[Path]:
    """Write each snippet body to output_dir, named after the snippet id."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for snippet in result.snippets:
        extension = EXTENSIONS.get(snippet.language or "", "txt")
        path = output_dir / f"{snippet.id}.{extension}"
        path.write_text(snippet.body + "\n", encoding="utf-8")
        written.append(path)
    return written


def main():
    parser = argparse.ArgumentParser(
        description="Generate code, diagram and notes snippets from a workflow file."
    )
    parser.add_argument(
        "workflow_file",
        type=Path,
        help="path to the workflow JSON file",
    )
    parser.add_argument(
        "--workflow-id",
        help="workflow id to use, overriding any id in the file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output the full result as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="also write each snippet body to this directory",
    )

    args = parser.parse_args()

    if not args.workflow_file.exists():
        print(f"Error: workflow file not found: {args.workflow_file}", file=sys.stderr)
        sys.exit(1)

    try:
        data = json.loads(args.workflow_file.read_text(encoding="utf-8"))
    except ValueError as exc:
        print(f"Error: invalid JSON in {args.workflow_file}: {exc}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(data, dict):
        print("Error: workflow file must contain a JSON object", file=sys.stderr)
        sys.exit(1)

    try:
        result = generate_snippets(
            load_generation_input(data, args.workflow_id),
            settings=GeneratorSettings.from_env(),
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(result.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_result(result))

    if args.output_dir:
        for path in write_snippets(result, args.output_dir):
            print(f"wrote {path}", file=sys.stderr)


if __name__ == "__main__":
    main()
