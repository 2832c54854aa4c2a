"""Command line interface for inspecting workflow timelines."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from chronoscope.client import get_client
from chronoscope.config import load_config
from chronoscope.contracts import HistoryEvent, HistoryPage
from chronoscope.exceptions import ChronoscopeError
from chronoscope.service import TimelineService, timeline_to_json
from chronoscope.timeline import project_history

app = typer.Typer(help="CLI for chronoscope workflow timelines")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, help="Log level (DEBUG, INFO, WARNING, ERROR); defaults to config"
    ),
) -> None:
    """chronoscope CLI entry point."""
    level = log_level or load_config().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


async def _fetch_timeline(namespace: str, workflow_id: str, run_id: str) -> List[dict]:
    async with get_client() as client:
        items = await TimelineService(client).get_root_workflow_timeline(
            namespace, workflow_id, run_id
        )
    return timeline_to_json(items)


async def _search(namespace: str, query: str):
    async with get_client() as client:
        return await TimelineService(client).search_workflows(namespace, query)


@app.command("timeline")
def timeline(
    workflow_id: str,
    namespace: str = typer.Option(..., help="Namespace of the workflow"),
    run_id: str = typer.Option("", help="Run id; latest run when omitted"),
) -> None:
    """
    Show the reconciled timeline of a workflow run.

    Fetches the full event history, projects it into workflow and activity
    records and overlays live status for anything still open.

    Example:
        chronoscope timeline order-123 --namespace payments
    """
    try:
        data = asyncio.run(_fetch_timeline(namespace, workflow_id, run_id))
    except ChronoscopeError as exc:
        _fail(str(exc))
    _echo_json(data)


@app.command("search")
def search(
    query: str = typer.Argument("", help="Visibility query"),
    namespace: str = typer.Option(..., help="Namespace to search"),
) -> None:
    """
    List workflow executions matching a visibility query.

    Example:
        chronoscope search "WorkflowType='OrderWorkflow'" --namespace payments
        # Output: order-123    3f1c...    Running
    """
    try:
        executions = asyncio.run(_search(namespace, query))
    except ChronoscopeError as exc:
        _fail(str(exc))
    if not executions:
        typer.echo("No workflows found")
        return
    for execution in executions:
        workflow_id = execution.execution.workflow_id if execution.execution else ""
        run_id = execution.execution.run_id if execution.execution else ""
        typer.echo(f"{workflow_id}\t{run_id}\t{execution.status or ''}")


def _load_events(history_file: Path) -> List[HistoryEvent]:
    data = json.loads(history_file.read_text())
    if isinstance(data, list):
        return [HistoryEvent.model_validate(e) for e in data]
    return HistoryPage.model_validate(data).history.events


@app.command("project")
def project(
    history_file: Path,
    run_id: str = typer.Option("", help="Run id to record on the root workflow"),
) -> None:
    """
    Project a saved history JSON file without contacting the platform.

    Accepts either a history page (``{"history": {"events": [...]}}``) or a
    bare list of events.
    """
    if not history_file.exists():
        _fail("Specified path does not exist")
    try:
        events = _load_events(history_file)
    except (ValueError, ValidationError) as exc:
        _fail(f"Could not read history: {exc}")
    try:
        items = project_history(events, run_id=run_id or None)
    except ChronoscopeError as exc:
        _fail(str(exc))
    _echo_json(timeline_to_json(items))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
