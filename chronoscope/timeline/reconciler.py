"""Overlay live-poll data onto a projected timeline."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from ..contracts import DescribeWorkflowResponse, PendingActivityInfo
from ..payloads import json_snapshot
from .models import Activity, Workflow
from .status import Status, is_terminal, status_from_execution_status

logger = logging.getLogger(__name__)

TimelineList = List[Union[Workflow, Activity]]


def open_workflows(timeline: Sequence[Union[Workflow, Activity]]) -> List[Workflow]:
    """Workflow records (root and children) the event log left open."""
    return [
        item
        for item in timeline
        if isinstance(item, Workflow) and not is_terminal(item.status)
    ]


def _matches(workflow: Workflow, snapshot: DescribeWorkflowResponse) -> bool:
    execution = snapshot.workflow_execution_info.execution
    if execution is None or execution.workflow_id != workflow.workflow_id:
        return False
    if execution.run_id and workflow.run_id:
        return execution.run_id == workflow.run_id
    return True


def _find_pending_activity(
    timeline: Sequence[Union[Workflow, Activity]], workflow_id: str, activity_id: str
) -> Optional[Activity]:
    # latest open record wins when an activity id was reused
    for item in reversed(timeline):
        if (
            isinstance(item, Activity)
            and item.activity_id == activity_id
            and item.workflow_id == workflow_id
            and not is_terminal(item.status)
        ):
            return item
    return None


def apply_pending_activity(activity: Activity, pending: PendingActivityInfo) -> None:
    """Copy one pending-activity entry onto its activity record."""
    if pending.attempt is not None:
        activity.attempts = pending.attempt
    if pending.attempt is not None and pending.attempt > 1:
        activity.status = Status.RETRYING.value
    elif activity.status == Status.SCHEDULED.value:
        activity.status = Status.PENDING.value
    activity.last_started_time = pending.last_started_time
    activity.last_attempt_complete_time = pending.last_attempt_complete_time
    activity.last_worker_identity = pending.last_worker_identity
    if pending.last_failure:
        activity.last_failure = json_snapshot(pending.last_failure)


def reconcile(
    timeline: TimelineList,
    snapshot: DescribeWorkflowResponse,
    workflow: Optional[Workflow] = None,
) -> TimelineList:
    """Patch open records of ``timeline`` in place from a live poll.

    The snapshot is applied to ``workflow`` when given, otherwise to every open
    workflow record whose execution matches the snapshot's. Records already
    closed in the log are never touched.
    """
    if workflow is not None:
        targets = [workflow] if not is_terminal(workflow.status) else []
    else:
        targets = [wf for wf in open_workflows(timeline) if _matches(wf, snapshot)]
    if not targets:
        logger.debug("Live snapshot matched no open workflow")
        return timeline

    info = snapshot.workflow_execution_info
    for wf in targets:
        status = status_from_execution_status(info.status)
        if status is not None:
            wf.status = status
        if info.start_time:
            wf.start_time = info.start_time
        if info.close_time:
            wf.end_time = info.close_time
        if info.parent_execution is not None:
            wf.parent_workflow_id = info.parent_execution.workflow_id
            wf.parent_run_id = info.parent_execution.run_id

        for pending in snapshot.pending_activities or []:
            if not pending.activity_id:
                continue
            activity = _find_pending_activity(timeline, wf.workflow_id, pending.activity_id)
            if activity is None:
                logger.debug(
                    f"Pending activity {pending.activity_id} of {wf.workflow_id} "
                    "has no open record"
                )
                continue
            apply_pending_activity(activity, pending)
    return timeline
