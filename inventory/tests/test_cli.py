"""Tests for the generate_snippets CLI."""

import json
import sys

import pytest

from inventory.cli.generate_snippets import (
    format_result,
    load_generation_input,
    main,
    write_snippets,
)
from inventory.generator import generate_snippets

N8N_EXPORT = {
    "id": "wf_export",
    "name": "Exported Flow",
    "tags": [{"id": "1", "name": "billing"}, "ops"],
    "nodes": [
        {"name": "Hook", "type": "n8n-nodes-base.webhook"},
        {"name": "Reply", "type": "n8n-nodes-base.respondToWebhook"},
    ],
    "connections": {"Hook": {"main": [[{"node": "Reply", "type": "main", "index": 0}]]}},
}


class TestLoadGenerationInput:
    """Test the three accepted file shapes."""

    def test_n8n_export(self):
        data = load_generation_input(N8N_EXPORT)
        assert data.workflow == {"workflow_id": "wf_export", "name": "Exported Flow", "tags": ["billing", "ops"]}
        assert data.snapshot == {"workflow_json": N8N_EXPORT}

    def test_snapshot_record(self):
        snapshot = {"workflow_id": "wf_snap", "workflow_jsonb": json.dumps(N8N_EXPORT)}
        data = load_generation_input(snapshot)
        assert data.workflow["workflow_id"] == "wf_snap"
        assert data.snapshot == snapshot
        assert generate_snippets(data).metadata.node_count == 2

    def test_full_input(self):
        data = load_generation_input({
            "workflow": {"workflow_id": "wf_full"},
            "fallback_nodes": [{"node_name": "A"}],
        })
        assert data.workflow == {"workflow_id": "wf_full"}
        assert data.fallback_nodes == [{"node_name": "A"}]

    def test_workflow_id_override(self):
        data = load_generation_input({"nodes": []}, workflow_id="wf_cli")
        assert data.workflow["workflow_id"] == "wf_cli"

    def test_workflow_id_override_replaces_file_id(self):
        """--workflow-id wins over the id in the export."""
        data = load_generation_input(N8N_EXPORT, workflow_id="wf_cli")
        assert data.workflow["workflow_id"] == "wf_cli"
        assert generate_snippets(data).snippets[0].id == "wf_cli-python"


class TestOutput:
    """Test formatting and file output."""

    def test_format_result(self):
        result = generate_snippets(load_generation_input(N8N_EXPORT))
        output = format_result(result)
        assert "SNIPPETS: Exported Flow" in output
        assert "Exported Flow flow diagram [mermaid]" in output
        assert "WARNINGS" not in output

    def test_write_snippets(self, tmp_path):
        result = generate_snippets(load_generation_input(N8N_EXPORT))
        paths = write_snippets(result, tmp_path / "out")
        assert [p.name for p in paths] == [
            "wf_export-python.py",
            "wf_export-typescript.ts",
            "wf_export-diagram.mmd",
            "wf_export-notes.md",
        ]
        assert paths[2].read_text(encoding="utf-8").startswith("flowchart LR\n")


class TestMain:
    """Test the argparse entry point."""

    def test_json_output(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "flow.json"
        path.write_text(json.dumps(N8N_EXPORT), encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["generate_snippets", str(path), "--json"])

        main()

        data = json.loads(capsys.readouterr().out)
        assert data["workflow"]["workflow_id"] == "wf_export"
        assert data["metadata"]["connectionCount"] == 1

    def test_missing_workflow_id_exits(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "flow.json"
        path.write_text(json.dumps({"nodes": []}), encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["generate_snippets", str(path)])

        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 1
        assert "workflow_id" in capsys.readouterr().err

    def test_missing_file_exits(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["generate_snippets", str(tmp_path / "nope.json")])
        with pytest.raises(SystemExit):
            main()
