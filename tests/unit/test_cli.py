import json

from fixtures.histories import describe, simple_history, workflow_started
from typer.testing import CliRunner

import chronoscope.cli as cli
from chronoscope.cli import app
from chronoscope.client import InMemoryHistoryClient
from chronoscope.contracts import WorkflowExecutionInfo


def _use_client(monkeypatch, client):
    monkeypatch.setattr(cli, "get_client", lambda: client)


def test_timeline_command_prints_json(monkeypatch):
    client = InMemoryHistoryClient()
    client.add_history("wf1", simple_history())
    _use_client(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(app, ["timeline", "wf1", "--namespace", "default"])
    assert result.exit_code == 0, f"Command failed. Output: {result.stdout}"
    data = json.loads(result.stdout)
    assert [item["type"] for item in data] == ["workflow", "activity"]
    assert data[0]["status"] == "COMPLETED"


def test_timeline_command_reports_missing_workflow(monkeypatch):
    _use_client(monkeypatch, InMemoryHistoryClient())

    runner = CliRunner()
    result = runner.invoke(app, ["timeline", "missing", "--namespace", "default"])
    assert result.exit_code == 1
    assert "workflow missing not found" in result.stdout


def test_timeline_command_reconciles_running_workflow(monkeypatch):
    client = InMemoryHistoryClient()
    client.add_history("wf1", [workflow_started(1, "wf1")])
    client.add_snapshot("wf1", describe("wf1", status="WORKFLOW_EXECUTION_STATUS_CANCELED"))
    _use_client(monkeypatch, client)

    result = CliRunner().invoke(app, ["timeline", "wf1", "--namespace", "default"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)[0]["status"] == "CANCELED"


def test_search_command_lists_executions(monkeypatch):
    client = InMemoryHistoryClient()
    client.add_executions(
        "default",
        [
            WorkflowExecutionInfo.model_validate(
                {
                    "execution": {"workflowId": "wf1", "runId": "r1"},
                    "status": "WORKFLOW_EXECUTION_STATUS_COMPLETED",
                }
            )
        ],
    )
    _use_client(monkeypatch, client)

    runner = CliRunner()
    result = runner.invoke(app, ["search", "--namespace", "default"])
    assert result.exit_code == 0
    assert "wf1\tr1\tCompleted" in result.stdout

    result = runner.invoke(app, ["search", "--namespace", "empty"])
    assert result.exit_code == 0
    assert "No workflows found" in result.stdout


def test_project_command_reads_history_page_and_event_list(tmp_path):
    events = [e.model_dump(by_alias=True, exclude_none=True) for e in simple_history()]
    page_file = tmp_path / "page.json"
    page_file.write_text(json.dumps({"history": {"events": events}}))
    list_file = tmp_path / "events.json"
    list_file.write_text(json.dumps(events))

    runner = CliRunner()
    for path in (page_file, list_file):
        result = runner.invoke(app, ["project", str(path), "--run-id", "r-7"])
        assert result.exit_code == 0, f"Command failed. Output: {result.stdout}"
        data = json.loads(result.stdout)
        assert data[0]["runId"] == "r-7"
        assert data[1]["result"] == "42"


def test_project_command_errors(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["project", str(tmp_path / "absent.json")])
    assert result.exit_code == 1
    assert "Specified path does not exist" in result.stdout

    no_root = tmp_path / "no_root.json"
    no_root.write_text(json.dumps([]))
    result = runner.invoke(app, ["project", str(no_root)])
    assert result.exit_code == 1
    assert "Root workflow not found" in result.stdout

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    result = runner.invoke(app, ["project", str(broken)])
    assert result.exit_code == 1
    assert "Could not read history" in result.stdout


def test_unsupported_client_backend_exits_cleanly(tmp_path, monkeypatch):
    monkeypatch.setenv("CHRONOSCOPE_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("CHRONOSCOPE_CLIENT", "grpc")

    result = CliRunner().invoke(app, ["timeline", "wf1", "--namespace", "default"])
    assert result.exit_code == 1
    assert "Unsupported client backend: grpc" in result.stdout
