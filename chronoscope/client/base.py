"""Base interface for workflow platform clients."""

from __future__ import annotations

import abc
from typing import List

from ..contracts import DescribeWorkflowResponse, HistoryEvent, WorkflowExecutionInfo


class HistoryClient(metaclass=abc.ABCMeta):
    """Abstract read-only client for histories and live workflow state."""

    async def connect(self) -> None:
        """Open underlying connections (no-op by default)."""
        pass

    async def close(self) -> None:
        """Release underlying connections (no-op by default)."""
        pass

    async def __aenter__(self) -> "HistoryClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @abc.abstractmethod
    async def get_history(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> List[HistoryEvent]:
        """Return the complete, ordered event history of a run.

        Raises:
            WorkflowNotFoundError: If the workflow does not exist.
            UpstreamError: For any other failure.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def describe_workflow(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> DescribeWorkflowResponse:
        """Return live execution status and pending activities of a run."""
        raise NotImplementedError

    @abc.abstractmethod
    async def search_workflows(
        self, namespace: str, query: str = ""
    ) -> List[WorkflowExecutionInfo]:
        """Return executions matching a visibility ``query``."""
        raise NotImplementedError
