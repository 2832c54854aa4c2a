"""Wire contracts for the workflow platform's history and describe APIs."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for platform payloads: camelCase on the wire, unknown keys kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    def raw(self) -> Dict[str, Any]:
        """Return the block as it appeared on the wire."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EventType(str, Enum):
    """History event types the projector understands."""

    WORKFLOW_EXECUTION_STARTED = "EVENT_TYPE_WORKFLOW_EXECUTION_STARTED"
    WORKFLOW_TASK_SCHEDULED = "EVENT_TYPE_WORKFLOW_TASK_SCHEDULED"
    WORKFLOW_TASK_STARTED = "EVENT_TYPE_WORKFLOW_TASK_STARTED"
    WORKFLOW_TASK_COMPLETED = "EVENT_TYPE_WORKFLOW_TASK_COMPLETED"
    ACTIVITY_TASK_SCHEDULED = "EVENT_TYPE_ACTIVITY_TASK_SCHEDULED"
    ACTIVITY_TASK_STARTED = "EVENT_TYPE_ACTIVITY_TASK_STARTED"
    ACTIVITY_TASK_COMPLETED = "EVENT_TYPE_ACTIVITY_TASK_COMPLETED"
    ACTIVITY_TASK_FAILED = "EVENT_TYPE_ACTIVITY_TASK_FAILED"
    ACTIVITY_TASK_TIMED_OUT = "EVENT_TYPE_ACTIVITY_TASK_TIMED_OUT"
    ACTIVITY_TASK_CANCELED = "EVENT_TYPE_ACTIVITY_TASK_CANCELED"
    WORKFLOW_EXECUTION_COMPLETED = "EVENT_TYPE_WORKFLOW_EXECUTION_COMPLETED"
    WORKFLOW_EXECUTION_FAILED = "EVENT_TYPE_WORKFLOW_EXECUTION_FAILED"
    WORKFLOW_EXECUTION_TIMED_OUT = "EVENT_TYPE_WORKFLOW_EXECUTION_TIMED_OUT"
    WORKFLOW_EXECUTION_CANCELED = "EVENT_TYPE_WORKFLOW_EXECUTION_CANCELED"
    WORKFLOW_EXECUTION_TERMINATED = "EVENT_TYPE_WORKFLOW_EXECUTION_TERMINATED"
    START_CHILD_WORKFLOW_EXECUTION_INITIATED = (
        "EVENT_TYPE_START_CHILD_WORKFLOW_EXECUTION_INITIATED"
    )
    CHILD_WORKFLOW_EXECUTION_STARTED = "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_STARTED"
    CHILD_WORKFLOW_EXECUTION_COMPLETED = "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_COMPLETED"
    CHILD_WORKFLOW_EXECUTION_FAILED = "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_FAILED"
    CHILD_WORKFLOW_EXECUTION_TIMED_OUT = "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_TIMED_OUT"
    CHILD_WORKFLOW_EXECUTION_CANCELED = "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_CANCELED"
    CHILD_WORKFLOW_EXECUTION_TERMINATED = (
        "EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_TERMINATED"
    )

    @classmethod
    def parse(cls, value: str) -> Optional["EventType"]:
        """Return the member for ``value`` or ``None`` for unknown types."""
        try:
            return cls(value)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Shared shapes


class Payload(WireModel):
    metadata: Optional[Dict[str, str]] = None
    data: Optional[str] = None


class Payloads(WireModel):
    payloads: Optional[List[Payload]] = None


class WorkflowExecution(WireModel):
    workflow_id: Optional[str] = None
    run_id: Optional[str] = None


class NamedType(WireModel):
    name: Optional[str] = None


class TaskQueue(WireModel):
    name: Optional[str] = None
    kind: Optional[str] = None
    normal_name: Optional[str] = None


# ---------------------------------------------------------------------------
# Event attribute blocks


class WorkflowExecutionStartedEventAttributes(WireModel):
    workflow_id: Optional[str] = None
    workflow_type: Optional[NamedType] = None
    task_queue: Optional[TaskQueue] = None
    input: Optional[Payloads] = None
    workflow_task_timeout: Optional[str] = None
    workflow_run_timeout: Optional[str] = None
    original_execution_run_id: Optional[str] = None
    first_execution_run_id: Optional[str] = None
    identity: Optional[str] = None
    attempt: Optional[int] = None
    parent_workflow_namespace: Optional[str] = None
    parent_workflow_execution: Optional[WorkflowExecution] = None
    header: Optional[Dict[str, Any]] = None
    memo: Optional[Dict[str, Any]] = None
    search_attributes: Optional[Dict[str, Any]] = None


class WorkflowTaskScheduledEventAttributes(WireModel):
    task_queue: Optional[TaskQueue] = None
    start_to_close_timeout: Optional[str] = None
    attempt: Optional[int] = None


class WorkflowTaskStartedEventAttributes(WireModel):
    scheduled_event_id: Optional[str] = None
    identity: Optional[str] = None


class WorkflowTaskCompletedEventAttributes(WireModel):
    scheduled_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    identity: Optional[str] = None


class ActivityTaskScheduledEventAttributes(WireModel):
    activity_id: Optional[str] = None
    activity_type: Optional[NamedType] = None
    task_queue: Optional[TaskQueue] = None
    header: Optional[Dict[str, Any]] = None
    input: Optional[Payloads] = None
    schedule_to_close_timeout: Optional[str] = None
    schedule_to_start_timeout: Optional[str] = None
    start_to_close_timeout: Optional[str] = None
    heartbeat_timeout: Optional[str] = None
    workflow_task_completed_event_id: Optional[str] = None
    retry_policy: Optional[Dict[str, Any]] = None


class ActivityTaskStartedEventAttributes(WireModel):
    scheduled_event_id: Optional[str] = None
    identity: Optional[str] = None
    request_id: Optional[str] = None
    attempt: Optional[int] = None
    last_failure: Optional[Dict[str, Any]] = None


class ActivityTaskCompletedEventAttributes(WireModel):
    result: Optional[Payloads] = None
    scheduled_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    identity: Optional[str] = None


class ActivityTaskFailedEventAttributes(WireModel):
    failure: Optional[Dict[str, Any]] = None
    scheduled_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    retry_state: Optional[str] = None


class ActivityTaskTimedOutEventAttributes(WireModel):
    failure: Optional[Dict[str, Any]] = None
    scheduled_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    timeout_type: Optional[str] = None
    retry_state: Optional[str] = None


class ActivityTaskCanceledEventAttributes(WireModel):
    details: Optional[Payloads] = None
    scheduled_event_id: Optional[str] = None
    started_event_id: Optional[str] = None


class WorkflowExecutionCompletedEventAttributes(WireModel):
    result: Optional[Payloads] = None
    workflow_task_completed_event_id: Optional[str] = None


class WorkflowExecutionFailedEventAttributes(WireModel):
    failure: Optional[Dict[str, Any]] = None
    retry_state: Optional[str] = None
    workflow_task_completed_event_id: Optional[str] = None


class WorkflowExecutionTimedOutEventAttributes(WireModel):
    retry_state: Optional[str] = None


class WorkflowExecutionCanceledEventAttributes(WireModel):
    details: Optional[Payloads] = None
    workflow_task_completed_event_id: Optional[str] = None


class WorkflowExecutionTerminatedEventAttributes(WireModel):
    reason: Optional[str] = None
    identity: Optional[str] = None
    details: Optional[Payloads] = None


class StartChildWorkflowExecutionInitiatedEventAttributes(WireModel):
    namespace: Optional[str] = None
    workflow_id: Optional[str] = None
    workflow_type: Optional[NamedType] = None
    task_queue: Optional[TaskQueue] = None
    input: Optional[Payloads] = None
    workflow_execution_timeout: Optional[str] = None
    workflow_run_timeout: Optional[str] = None
    workflow_task_timeout: Optional[str] = None
    workflow_id_reuse_policy: Optional[str] = None
    retry_policy: Optional[Dict[str, Any]] = None
    header: Optional[Dict[str, Any]] = None
    memo: Optional[Dict[str, Any]] = None
    search_attributes: Optional[Dict[str, Any]] = None
    workflow_task_completed_event_id: Optional[str] = None


class ChildWorkflowExecutionStartedEventAttributes(WireModel):
    namespace: Optional[str] = None
    initiated_event_id: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    header: Optional[Dict[str, Any]] = None


class ChildWorkflowExecutionCompletedEventAttributes(WireModel):
    result: Optional[Payloads] = None
    namespace: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    initiated_event_id: Optional[str] = None
    started_event_id: Optional[str] = None


class ChildWorkflowExecutionFailedEventAttributes(WireModel):
    failure: Optional[Dict[str, Any]] = None
    namespace: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    initiated_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    retry_state: Optional[str] = None


class ChildWorkflowExecutionTimedOutEventAttributes(WireModel):
    namespace: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    initiated_event_id: Optional[str] = None
    started_event_id: Optional[str] = None
    retry_state: Optional[str] = None


class ChildWorkflowExecutionCanceledEventAttributes(WireModel):
    details: Optional[Payloads] = None
    namespace: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    initiated_event_id: Optional[str] = None
    started_event_id: Optional[str] = None


class ChildWorkflowExecutionTerminatedEventAttributes(WireModel):
    namespace: Optional[str] = None
    workflow_execution: Optional[WorkflowExecution] = None
    workflow_type: Optional[NamedType] = None
    initiated_event_id: Optional[str] = None
    started_event_id: Optional[str] = None


# Attribute block populated for each event type.
ATTRIBUTES_FIELD: Dict[EventType, str] = {
    EventType.WORKFLOW_EXECUTION_STARTED: "workflow_execution_started_event_attributes",
    EventType.WORKFLOW_TASK_SCHEDULED: "workflow_task_scheduled_event_attributes",
    EventType.WORKFLOW_TASK_STARTED: "workflow_task_started_event_attributes",
    EventType.WORKFLOW_TASK_COMPLETED: "workflow_task_completed_event_attributes",
    EventType.ACTIVITY_TASK_SCHEDULED: "activity_task_scheduled_event_attributes",
    EventType.ACTIVITY_TASK_STARTED: "activity_task_started_event_attributes",
    EventType.ACTIVITY_TASK_COMPLETED: "activity_task_completed_event_attributes",
    EventType.ACTIVITY_TASK_FAILED: "activity_task_failed_event_attributes",
    EventType.ACTIVITY_TASK_TIMED_OUT: "activity_task_timed_out_event_attributes",
    EventType.ACTIVITY_TASK_CANCELED: "activity_task_canceled_event_attributes",
    EventType.WORKFLOW_EXECUTION_COMPLETED: "workflow_execution_completed_event_attributes",
    EventType.WORKFLOW_EXECUTION_FAILED: "workflow_execution_failed_event_attributes",
    EventType.WORKFLOW_EXECUTION_TIMED_OUT: "workflow_execution_timed_out_event_attributes",
    EventType.WORKFLOW_EXECUTION_CANCELED: "workflow_execution_canceled_event_attributes",
    EventType.WORKFLOW_EXECUTION_TERMINATED: "workflow_execution_terminated_event_attributes",
    EventType.START_CHILD_WORKFLOW_EXECUTION_INITIATED: (
        "start_child_workflow_execution_initiated_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_STARTED: (
        "child_workflow_execution_started_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_COMPLETED: (
        "child_workflow_execution_completed_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_FAILED: (
        "child_workflow_execution_failed_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_TIMED_OUT: (
        "child_workflow_execution_timed_out_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_CANCELED: (
        "child_workflow_execution_canceled_event_attributes"
    ),
    EventType.CHILD_WORKFLOW_EXECUTION_TERMINATED: (
        "child_workflow_execution_terminated_event_attributes"
    ),
}


class HistoryEvent(WireModel):
    """One entry of a workflow's event history.

    Exactly one ``*_event_attributes`` block is expected to be populated, the
    one matching ``event_type``. Use :meth:`attributes` rather than reading the
    blocks directly.
    """

    event_id: str
    event_time: Optional[str] = None
    event_type: str
    version: Optional[str] = None
    task_id: Optional[str] = None

    workflow_execution_started_event_attributes: Optional[
        WorkflowExecutionStartedEventAttributes
    ] = None
    workflow_task_scheduled_event_attributes: Optional[
        WorkflowTaskScheduledEventAttributes
    ] = None
    workflow_task_started_event_attributes: Optional[
        WorkflowTaskStartedEventAttributes
    ] = None
    workflow_task_completed_event_attributes: Optional[
        WorkflowTaskCompletedEventAttributes
    ] = None
    activity_task_scheduled_event_attributes: Optional[
        ActivityTaskScheduledEventAttributes
    ] = None
    activity_task_started_event_attributes: Optional[
        ActivityTaskStartedEventAttributes
    ] = None
    activity_task_completed_event_attributes: Optional[
        ActivityTaskCompletedEventAttributes
    ] = None
    activity_task_failed_event_attributes: Optional[
        ActivityTaskFailedEventAttributes
    ] = None
    activity_task_timed_out_event_attributes: Optional[
        ActivityTaskTimedOutEventAttributes
    ] = None
    activity_task_canceled_event_attributes: Optional[
        ActivityTaskCanceledEventAttributes
    ] = None
    workflow_execution_completed_event_attributes: Optional[
        WorkflowExecutionCompletedEventAttributes
    ] = None
    workflow_execution_failed_event_attributes: Optional[
        WorkflowExecutionFailedEventAttributes
    ] = None
    workflow_execution_timed_out_event_attributes: Optional[
        WorkflowExecutionTimedOutEventAttributes
    ] = None
    workflow_execution_canceled_event_attributes: Optional[
        WorkflowExecutionCanceledEventAttributes
    ] = None
    workflow_execution_terminated_event_attributes: Optional[
        WorkflowExecutionTerminatedEventAttributes
    ] = None
    start_child_workflow_execution_initiated_event_attributes: Optional[
        StartChildWorkflowExecutionInitiatedEventAttributes
    ] = None
    child_workflow_execution_started_event_attributes: Optional[
        ChildWorkflowExecutionStartedEventAttributes
    ] = None
    child_workflow_execution_completed_event_attributes: Optional[
        ChildWorkflowExecutionCompletedEventAttributes
    ] = None
    child_workflow_execution_failed_event_attributes: Optional[
        ChildWorkflowExecutionFailedEventAttributes
    ] = None
    child_workflow_execution_timed_out_event_attributes: Optional[
        ChildWorkflowExecutionTimedOutEventAttributes
    ] = None
    child_workflow_execution_canceled_event_attributes: Optional[
        ChildWorkflowExecutionCanceledEventAttributes
    ] = None
    child_workflow_execution_terminated_event_attributes: Optional[
        ChildWorkflowExecutionTerminatedEventAttributes
    ] = None

    @property
    def kind(self) -> Optional[EventType]:
        """The known event type, or ``None`` when the platform sent a new one."""
        return EventType.parse(self.event_type)

    def attributes(self) -> Optional[WireModel]:
        """Return the attribute block selected by ``event_type``."""
        kind = self.kind
        if kind is None:
            return None
        return getattr(self, ATTRIBUTES_FIELD[kind])


class History(WireModel):
    events: List[HistoryEvent] = Field(default_factory=list)


class HistoryPage(WireModel):
    """One page of ``GET .../history``."""

    history: History = Field(default_factory=History)
    next_page_token: Optional[str] = None


# ---------------------------------------------------------------------------
# Live poll (describe) and search


class WorkflowExecutionInfo(WireModel):
    execution: Optional[WorkflowExecution] = None
    type: Optional[NamedType] = None
    start_time: Optional[str] = None
    close_time: Optional[str] = None
    status: Optional[str] = None
    history_length: Optional[str] = None
    parent_execution: Optional[WorkflowExecution] = None
    execution_time: Optional[str] = None
    memo: Optional[Dict[str, Any]] = None
    search_attributes: Optional[Dict[str, Any]] = None
    task_queue: Optional[str] = None
    root_execution: Optional[WorkflowExecution] = None


class PendingActivityInfo(WireModel):
    activity_id: Optional[str] = None
    activity_type: Optional[NamedType] = None
    state: Optional[str] = None
    attempt: Optional[int] = None
    maximum_attempts: Optional[int] = None
    scheduled_time: Optional[str] = None
    last_started_time: Optional[str] = None
    last_attempt_complete_time: Optional[str] = None
    last_worker_identity: Optional[str] = None
    last_failure: Optional[Dict[str, Any]] = None


class PendingChildExecutionInfo(WireModel):
    workflow_id: Optional[str] = None
    run_id: Optional[str] = None
    workflow_type_name: Optional[str] = None
    initiated_id: Optional[str] = None


class DescribeWorkflowResponse(WireModel):
    """Live-poll answer for one workflow execution."""

    workflow_execution_info: WorkflowExecutionInfo = Field(
        default_factory=WorkflowExecutionInfo
    )
    pending_activities: Optional[List[PendingActivityInfo]] = None
    pending_children: Optional[List[PendingChildExecutionInfo]] = None


class SearchResponse(WireModel):
    executions: Optional[List[WorkflowExecutionInfo]] = None
    next_page_token: Optional[str] = None
