"""Projection of event histories into timelines."""

from .models import Activity, ChronologicalItem, TimelineItem, Workflow
from .projector import HistoryProjector, project_history
from .reconciler import open_workflows, reconcile
from .status import (
    Status,
    display_label,
    is_terminal,
    status_from_event_type,
    status_from_execution_status,
)

__all__ = [
    "Activity",
    "ChronologicalItem",
    "HistoryProjector",
    "Status",
    "TimelineItem",
    "Workflow",
    "display_label",
    "is_terminal",
    "open_workflows",
    "project_history",
    "reconcile",
    "status_from_event_type",
    "status_from_execution_status",
]
