"""Canonical status taxonomy and the tables that map platform vocabularies onto it."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from ..contracts import EventType

logger = logging.getLogger(__name__)


class Status(str, Enum):
    """Status values exposed on timeline items."""

    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    CANCELED = "CANCELED"
    TERMINATED = "TERMINATED"
    SCHEDULED = "SCHEDULED"
    STARTED = "STARTED"
    PENDING = "PENDING"
    RETRYING = "RETRYING"
    INITIATED = "INITIATED"


TERMINAL_STATUSES = frozenset(
    {
        Status.COMPLETED.value,
        Status.FAILED.value,
        Status.TIMED_OUT.value,
        Status.CANCELED.value,
        Status.TERMINATED.value,
    }
)

EVENT_TYPE_STATUS: Dict[str, Status] = {
    EventType.WORKFLOW_EXECUTION_STARTED.value: Status.RUNNING,
    EventType.CHILD_WORKFLOW_EXECUTION_STARTED.value: Status.RUNNING,
    EventType.ACTIVITY_TASK_STARTED.value: Status.RUNNING,
    EventType.WORKFLOW_EXECUTION_COMPLETED.value: Status.COMPLETED,
    EventType.CHILD_WORKFLOW_EXECUTION_COMPLETED.value: Status.COMPLETED,
    EventType.ACTIVITY_TASK_COMPLETED.value: Status.COMPLETED,
    EventType.WORKFLOW_EXECUTION_FAILED.value: Status.FAILED,
    EventType.CHILD_WORKFLOW_EXECUTION_FAILED.value: Status.FAILED,
    EventType.ACTIVITY_TASK_FAILED.value: Status.FAILED,
    EventType.WORKFLOW_EXECUTION_TIMED_OUT.value: Status.TIMED_OUT,
    EventType.CHILD_WORKFLOW_EXECUTION_TIMED_OUT.value: Status.TIMED_OUT,
    EventType.ACTIVITY_TASK_TIMED_OUT.value: Status.TIMED_OUT,
    EventType.WORKFLOW_EXECUTION_CANCELED.value: Status.CANCELED,
    EventType.CHILD_WORKFLOW_EXECUTION_CANCELED.value: Status.CANCELED,
    EventType.ACTIVITY_TASK_CANCELED.value: Status.CANCELED,
    EventType.WORKFLOW_EXECUTION_TERMINATED.value: Status.TERMINATED,
    EventType.CHILD_WORKFLOW_EXECUTION_TERMINATED.value: Status.TERMINATED,
    EventType.ACTIVITY_TASK_SCHEDULED.value: Status.SCHEDULED,
}

EXECUTION_STATUS: Dict[str, Status] = {
    "WORKFLOW_EXECUTION_STATUS_RUNNING": Status.RUNNING,
    "WORKFLOW_EXECUTION_STATUS_COMPLETED": Status.COMPLETED,
    "WORKFLOW_EXECUTION_STATUS_FAILED": Status.FAILED,
    "WORKFLOW_EXECUTION_STATUS_TIMED_OUT": Status.TIMED_OUT,
    "WORKFLOW_EXECUTION_STATUS_CANCELED": Status.CANCELED,
    "WORKFLOW_EXECUTION_STATUS_TERMINATED": Status.TERMINATED,
}


def status_from_event_type(event_type: str) -> str:
    """Map an event type to its canonical status; unknown types pass through."""
    status = EVENT_TYPE_STATUS.get(event_type)
    if status is None:
        logger.warning(f"No canonical status for event type {event_type!r}")
        return event_type
    return status.value


def status_from_execution_status(execution_status: Optional[str]) -> Optional[str]:
    """Map a live-poll execution status to its canonical status.

    Unknown strings pass through unchanged.
    """
    if execution_status is None:
        return None
    status = EXECUTION_STATUS.get(execution_status)
    if status is None:
        logger.warning(f"No canonical status for execution status {execution_status!r}")
        return execution_status
    return status.value


def is_terminal(status: Optional[str]) -> bool:
    return status in TERMINAL_STATUSES


def display_label(status: str) -> str:
    """Render a status for listings, e.g. ``TIMED_OUT`` -> ``TimedOut``."""
    return "".join(word.capitalize() for word in status.lower().split("_"))
