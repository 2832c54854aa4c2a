"""Error types raised by chronoscope."""

from __future__ import annotations

from typing import Optional


class ChronoscopeError(Exception):
    """Base class for all chronoscope errors."""


class RootWorkflowNotFoundError(ChronoscopeError):
    """The history contains no workflow-execution-started event."""

    def __init__(self, workflow_id: Optional[str] = None) -> None:
        self.workflow_id = workflow_id
        message = "Root workflow not found"
        if workflow_id:
            message = f"{message} in history of {workflow_id}"
        super().__init__(message)


class WorkflowNotFoundError(ChronoscopeError):
    """The platform reports that the requested workflow does not exist."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(f"workflow {workflow_id} not found")


class UpstreamError(ChronoscopeError):
    """Any other non-success answer from the platform."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause


class ConfigurationError(ChronoscopeError):
    """Required client settings are missing."""
