"""Timeline service: fetch a history, project it and reconcile live state."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence, Union

from .client import HistoryClient
from .contracts import WorkflowExecutionInfo
from .exceptions import WorkflowNotFoundError
from .timeline import (
    Activity,
    Workflow,
    display_label,
    open_workflows,
    project_history,
    reconcile,
    status_from_execution_status,
)

logger = logging.getLogger(__name__)


class TimelineService:
    """Builds dashboard timelines from a :class:`HistoryClient`."""

    def __init__(self, client: HistoryClient) -> None:
        self._client = client

    async def get_root_workflow_timeline(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> List[Union[Workflow, Activity]]:
        """Return the reconciled timeline of one workflow run.

        Args:
            namespace: Namespace the workflow runs in.
            workflow_id: Id of the root workflow.
            run_id: Optional run id; the latest run when empty.

        Raises:
            WorkflowNotFoundError: If the root workflow does not exist.
            RootWorkflowNotFoundError: If its history has no start event.
            UpstreamError: For any other platform failure.
        """
        events = await self._client.get_history(namespace, workflow_id, run_id)
        logger.info(f"Projecting {len(events)} events of {workflow_id}")
        items = project_history(events, run_id=run_id or None, namespace=namespace)

        for workflow in open_workflows(items):
            # root: same run as the fetched history, not the derived run id
            poll_run_id = (workflow.run_id or "") if workflow.is_child else run_id
            try:
                snapshot = await self._client.describe_workflow(
                    namespace, workflow.workflow_id, poll_run_id
                )
            except WorkflowNotFoundError:
                if not workflow.is_child:
                    raise
                logger.warning(
                    f"Child workflow {workflow.workflow_id} not found, keeping projected state"
                )
                continue
            reconcile(items, snapshot, workflow=workflow)

        return items

    async def search_workflows(
        self, namespace: str, query: str = ""
    ) -> List[WorkflowExecutionInfo]:
        """Search executions, relabelling statuses for display (``TimedOut``)."""
        executions = await self._client.search_workflows(namespace, query)
        for execution in executions:
            if execution.status:
                execution.status = display_label(
                    status_from_execution_status(execution.status)
                )
        return executions


def timeline_to_json(items: Sequence[Union[Workflow, Activity]]) -> List[Dict[str, Any]]:
    """camelCase dictionaries for dashboard consumers."""
    return [item.to_json_dict() for item in items]
