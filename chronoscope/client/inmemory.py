"""In-memory implementation of the history client."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..contracts import DescribeWorkflowResponse, HistoryEvent, WorkflowExecutionInfo
from ..exceptions import WorkflowNotFoundError
from .base import HistoryClient


class InMemoryHistoryClient(HistoryClient):
    """Serve canned histories and live snapshots from local memory.

    Useful for tests or offline inspection. Entries registered without a run
    id answer for any run of that workflow.
    """

    def __init__(self) -> None:
        self._histories: Dict[Tuple[str, str], List[HistoryEvent]] = {}
        self._snapshots: Dict[Tuple[str, str], DescribeWorkflowResponse] = {}
        self._executions: Dict[str, List[WorkflowExecutionInfo]] = {}
        self.describe_calls: List[Tuple[str, str, str]] = []

    # ------------------------------------------------------------------
    def add_history(
        self, workflow_id: str, events: List[HistoryEvent], run_id: str = ""
    ) -> None:
        self._histories[(workflow_id, run_id)] = list(events)

    def add_snapshot(
        self, workflow_id: str, snapshot: DescribeWorkflowResponse, run_id: str = ""
    ) -> None:
        self._snapshots[(workflow_id, run_id)] = snapshot

    def add_executions(
        self, namespace: str, executions: List[WorkflowExecutionInfo]
    ) -> None:
        self._executions.setdefault(namespace, []).extend(executions)

    @staticmethod
    def _lookup(store: Dict, workflow_id: str, run_id: str) -> Optional[object]:
        if (workflow_id, run_id) in store:
            return store[(workflow_id, run_id)]
        return store.get((workflow_id, ""))

    # ------------------------------------------------------------------
    async def get_history(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> List[HistoryEvent]:
        events = self._lookup(self._histories, workflow_id, run_id)
        if events is None:
            raise WorkflowNotFoundError(workflow_id)
        return list(events)

    async def describe_workflow(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> DescribeWorkflowResponse:
        self.describe_calls.append((namespace, workflow_id, run_id))
        snapshot = self._lookup(self._snapshots, workflow_id, run_id)
        if snapshot is None:
            raise WorkflowNotFoundError(workflow_id)
        return snapshot.model_copy(deep=True)

    async def search_workflows(
        self, namespace: str, query: str = ""
    ) -> List[WorkflowExecutionInfo]:
        executions = self._executions.get(namespace, [])
        return [e.model_copy(deep=True) for e in executions]
