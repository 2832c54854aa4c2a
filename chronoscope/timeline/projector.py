"""Fold a workflow's event history into an ordered timeline."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..contracts import (
    ActivityTaskCompletedEventAttributes,
    ActivityTaskFailedEventAttributes,
    ActivityTaskScheduledEventAttributes,
    ActivityTaskStartedEventAttributes,
    ActivityTaskTimedOutEventAttributes,
    ChildWorkflowExecutionCompletedEventAttributes,
    ChildWorkflowExecutionStartedEventAttributes,
    EventType,
    HistoryEvent,
    Payloads,
    StartChildWorkflowExecutionInitiatedEventAttributes,
    WireModel,
    WorkflowExecutionStartedEventAttributes,
)
from ..exceptions import RootWorkflowNotFoundError
from ..payloads import decode_payloads, json_snapshot
from .models import Activity, TimelineItem, Workflow
from .status import Status, is_terminal, status_from_event_type

logger = logging.getLogger(__name__)

Handler = Callable[[HistoryEvent, Any], None]


def _decode(block: Optional[Payloads]) -> Optional[str]:
    return decode_payloads(block.payloads if block else None)


def _raw(block: Optional[WireModel]) -> Optional[Dict[str, Any]]:
    return block.raw() if block is not None else None


class HistoryProjector:
    """Single left-to-right fold over one history.

    Activities are indexed by the id of their scheduled event and child
    workflows by the id of their initiated event; later events are correlated
    only through those ids. Use one instance per history.
    """

    def __init__(
        self, run_id: Optional[str] = None, namespace: Optional[str] = None
    ) -> None:
        self._run_id = run_id or None
        self._namespace = namespace
        self.items: List[Union[Workflow, Activity]] = []
        self.root: Optional[Workflow] = None
        self.activities: Dict[str, Activity] = {}
        self.children: Dict[str, Workflow] = {}
        self._handlers: Dict[EventType, Handler] = {
            EventType.WORKFLOW_EXECUTION_STARTED: self._on_workflow_started,
            EventType.WORKFLOW_EXECUTION_COMPLETED: self._on_workflow_closed,
            EventType.WORKFLOW_EXECUTION_FAILED: self._on_workflow_closed,
            EventType.WORKFLOW_EXECUTION_TIMED_OUT: self._on_workflow_closed,
            EventType.WORKFLOW_EXECUTION_CANCELED: self._on_workflow_closed,
            EventType.WORKFLOW_EXECUTION_TERMINATED: self._on_workflow_closed,
            EventType.ACTIVITY_TASK_SCHEDULED: self._on_activity_scheduled,
            EventType.ACTIVITY_TASK_STARTED: self._on_activity_started,
            EventType.ACTIVITY_TASK_COMPLETED: self._on_activity_closed,
            EventType.ACTIVITY_TASK_FAILED: self._on_activity_closed,
            EventType.ACTIVITY_TASK_TIMED_OUT: self._on_activity_closed,
            EventType.ACTIVITY_TASK_CANCELED: self._on_activity_closed,
            EventType.START_CHILD_WORKFLOW_EXECUTION_INITIATED: self._on_child_initiated,
            EventType.CHILD_WORKFLOW_EXECUTION_STARTED: self._on_child_started,
            EventType.CHILD_WORKFLOW_EXECUTION_COMPLETED: self._on_child_closed,
            EventType.CHILD_WORKFLOW_EXECUTION_FAILED: self._on_child_closed,
            EventType.CHILD_WORKFLOW_EXECUTION_TIMED_OUT: self._on_child_closed,
            EventType.CHILD_WORKFLOW_EXECUTION_CANCELED: self._on_child_closed,
            EventType.CHILD_WORKFLOW_EXECUTION_TERMINATED: self._on_child_closed,
        }

    def project(self, events: Iterable[HistoryEvent]) -> List[Union[Workflow, Activity]]:
        """Apply every event in order and return the timeline.

        Raises:
            RootWorkflowNotFoundError: If no workflow-execution-started event
                was seen.
        """
        for event in events:
            self.apply(event)
        if self.root is None:
            logger.error("Root workflow not found")
            raise RootWorkflowNotFoundError()
        return self.items

    def apply(self, event: HistoryEvent) -> None:
        """Apply one event. Unknown types and missing attributes are skipped."""
        kind = event.kind
        if kind is None:
            logger.debug(f"Skipping unknown event type {event.event_type} (event {event.event_id})")
            return
        handler = self._handlers.get(kind)
        if handler is None:
            # workflow task events carry no timeline state
            return
        attrs = event.attributes()
        if attrs is None:
            logger.debug(f"Skipping {kind.name} event {event.event_id}: no attributes")
            return
        handler(event, attrs)

    # ------------------------------------------------------------------
    def _close(self, item: TimelineItem, event: HistoryEvent) -> None:
        item.end_time = event.event_time
        item.add_related_event(event.event_id)
        item.status = status_from_event_type(event.event_type)

    def _require_root(self, event: HistoryEvent) -> Optional[Workflow]:
        if self.root is None:
            logger.warning(
                f"Skipping {event.event_type} event {event.event_id}: no root workflow yet"
            )
        return self.root

    # ------------------------------------------------------------------
    def _on_workflow_started(
        self, event: HistoryEvent, attrs: WorkflowExecutionStartedEventAttributes
    ) -> None:
        if self.root is not None:
            logger.warning(f"Ignoring second workflow start event {event.event_id}")
            return
        parent = attrs.parent_workflow_execution
        self.root = Workflow(
            type="workflow",
            workflow_id=attrs.workflow_id or "",
            run_id=self._run_id
            or attrs.original_execution_run_id
            or attrs.first_execution_run_id,
            workflow_type=attrs.workflow_type.name if attrs.workflow_type else None,
            namespace=self._namespace,
            status=Status.RUNNING.value,
            start_time=event.event_time,
            input=_decode(attrs.input),
            attempts=attrs.attempt,
            header=attrs.header,
            memo=attrs.memo,
            search_attributes=attrs.search_attributes,
            task_queue=_raw(attrs.task_queue),
            parent_workflow_id=parent.workflow_id if parent else None,
            parent_run_id=parent.run_id if parent else None,
            parent_workflow_namespace=attrs.parent_workflow_namespace,
            original_execution_run_id=attrs.original_execution_run_id,
            first_execution_run_id=attrs.first_execution_run_id,
            workflow_task_timeout=attrs.workflow_task_timeout,
            workflow_run_timeout=attrs.workflow_run_timeout,
            task_id=event.task_id,
            related_event_ids=[event.event_id],
        )
        self.items.insert(0, self.root)

    def _on_workflow_closed(self, event: HistoryEvent, attrs: Any) -> None:
        root = self._require_root(event)
        if root is None or is_terminal(root.status):
            return
        self._close(root, event)
        root.result = self._closing_result(event.kind, attrs)

    @staticmethod
    def _closing_result(kind: Optional[EventType], attrs: Any) -> Optional[str]:
        if kind in (
            EventType.WORKFLOW_EXECUTION_COMPLETED,
            EventType.CHILD_WORKFLOW_EXECUTION_COMPLETED,
        ):
            return _decode(attrs.result)
        if kind in (
            EventType.WORKFLOW_EXECUTION_FAILED,
            EventType.WORKFLOW_EXECUTION_TERMINATED,
            EventType.CHILD_WORKFLOW_EXECUTION_FAILED,
            EventType.CHILD_WORKFLOW_EXECUTION_TERMINATED,
        ):
            return json_snapshot(attrs)
        return None

    # ------------------------------------------------------------------
    def _on_activity_scheduled(
        self, event: HistoryEvent, attrs: ActivityTaskScheduledEventAttributes
    ) -> None:
        root = self._require_root(event)
        if root is None:
            return
        activity = Activity(
            activity_id=attrs.activity_id or "",
            activity_type=attrs.activity_type.name if attrs.activity_type else None,
            workflow_id=root.workflow_id,
            workflow_run_id=root.run_id,
            scheduled_event_id=event.event_id,
            schedule_time=event.event_time,
            status=Status.SCHEDULED.value,
            input=_decode(attrs.input),
            header=attrs.header,
            task_queue=_raw(attrs.task_queue),
            schedule_to_close_timeout=attrs.schedule_to_close_timeout,
            schedule_to_start_timeout=attrs.schedule_to_start_timeout,
            start_to_close_timeout=attrs.start_to_close_timeout,
            heartbeat_timeout=attrs.heartbeat_timeout,
            retry_policy=attrs.retry_policy,
            workflow_task_completed_event_id=attrs.workflow_task_completed_event_id,
            task_id=event.task_id,
            related_event_ids=[event.event_id],
        )
        self.activities[event.event_id] = activity
        self.items.append(activity)

    def _find_activity(
        self, event: HistoryEvent, scheduled_event_id: Optional[str]
    ) -> Optional[Activity]:
        activity = self.activities.get(scheduled_event_id) if scheduled_event_id else None
        if activity is None:
            logger.warning(
                f"{event.event_type} event {event.event_id} references unknown "
                f"scheduled event {scheduled_event_id}"
            )
        return activity

    def _on_activity_started(
        self, event: HistoryEvent, attrs: ActivityTaskStartedEventAttributes
    ) -> None:
        activity = self._find_activity(event, attrs.scheduled_event_id)
        if activity is None or is_terminal(activity.status):
            return
        if activity.status == Status.SCHEDULED.value:
            activity.status = Status.STARTED.value
        activity.start_time = event.event_time
        activity.add_related_event(event.event_id)
        if attrs.attempt is not None:
            activity.attempts = attrs.attempt
        if attrs.last_failure:
            activity.last_failure = json_snapshot(attrs.last_failure)

    def _on_activity_closed(self, event: HistoryEvent, attrs: Any) -> None:
        activity = self._find_activity(event, attrs.scheduled_event_id)
        if activity is None or is_terminal(activity.status):
            return
        self._close(activity, event)
        if isinstance(attrs, ActivityTaskCompletedEventAttributes):
            activity.result = _decode(attrs.result)
        elif isinstance(attrs, ActivityTaskFailedEventAttributes):
            if attrs.failure is not None:
                activity.failure = json_snapshot(attrs.failure)
        elif isinstance(attrs, ActivityTaskTimedOutEventAttributes):
            activity.timeout_type = attrs.timeout_type or _timeout_type(attrs.failure)

    # ------------------------------------------------------------------
    def _on_child_initiated(
        self,
        event: HistoryEvent,
        attrs: StartChildWorkflowExecutionInitiatedEventAttributes,
    ) -> None:
        root = self._require_root(event)
        if root is None:
            return
        child = self.children.get(event.event_id)
        if child is None:
            child = Workflow(
                type="childWorkflow",
                workflow_id=attrs.workflow_id or "",
                status=Status.INITIATED.value,
                start_time=event.event_time,
                initiated_event_id=event.event_id,
                related_event_ids=[event.event_id],
            )
            self.children[event.event_id] = child
            self.items.append(child)
        else:
            child.add_related_event(event.event_id)
            child.workflow_id = child.workflow_id or attrs.workflow_id or ""

        child.workflow_type = child.workflow_type or (
            attrs.workflow_type.name if attrs.workflow_type else None
        )
        child.parent_workflow_id = root.workflow_id
        child.parent_run_id = root.run_id
        child.namespace = attrs.namespace
        child.input = _decode(attrs.input)
        child.task_queue = _raw(attrs.task_queue)
        child.workflow_execution_timeout = attrs.workflow_execution_timeout
        child.workflow_run_timeout = attrs.workflow_run_timeout
        child.workflow_task_timeout = attrs.workflow_task_timeout
        child.workflow_id_reuse_policy = attrs.workflow_id_reuse_policy
        child.retry_policy = attrs.retry_policy
        child.header = attrs.header
        child.memo = attrs.memo
        child.search_attributes = attrs.search_attributes
        child.workflow_task_completed_event_id = attrs.workflow_task_completed_event_id
        child.task_id = event.task_id

    def _on_child_started(
        self, event: HistoryEvent, attrs: ChildWorkflowExecutionStartedEventAttributes
    ) -> None:
        key = attrs.initiated_event_id
        if not key:
            logger.warning(f"Child start event {event.event_id} has no initiated event id")
            return
        execution = attrs.workflow_execution
        child = self.children.get(key)
        if child is None:
            root = self._require_root(event)
            if root is None:
                return
            child = Workflow(
                type="childWorkflow",
                workflow_id=(execution.workflow_id if execution else None) or "",
                workflow_type=attrs.workflow_type.name if attrs.workflow_type else None,
                namespace=attrs.namespace,
                parent_workflow_id=root.workflow_id,
                parent_run_id=root.run_id,
                initiated_event_id=key,
                status=Status.INITIATED.value,
            )
            self.children[key] = child
            self.items.append(child)
        elif is_terminal(child.status):
            return

        child.start_time = event.event_time
        child.add_related_event(event.event_id)
        child.status = Status.RUNNING.value
        if execution is not None:
            child.run_id = execution.run_id
            child.workflow_id = child.workflow_id or execution.workflow_id or ""

    def _on_child_closed(self, event: HistoryEvent, attrs: Any) -> None:
        key = attrs.initiated_event_id
        child = self.children.get(key) if key else None
        if child is None:
            logger.warning(
                f"{event.event_type} event {event.event_id} references unknown "
                f"initiated event {key}"
            )
            return
        if is_terminal(child.status):
            return
        self._close(child, event)
        child.result = self._closing_result(event.kind, attrs)
        if isinstance(attrs, ChildWorkflowExecutionCompletedEventAttributes):
            execution = attrs.workflow_execution
            if execution is not None and execution.run_id and not child.run_id:
                child.run_id = execution.run_id


def _timeout_type(failure: Optional[Dict[str, Any]]) -> Optional[str]:
    if not failure:
        return None
    info = failure.get("timeoutFailureInfo") or {}
    return info.get("timeoutType")


def project_history(
    events: Iterable[HistoryEvent],
    run_id: Optional[str] = None,
    namespace: Optional[str] = None,
) -> List[Union[Workflow, Activity]]:
    """Project ``events`` into a timeline; the root workflow comes first."""
    return HistoryProjector(run_id=run_id, namespace=namespace).project(events)
