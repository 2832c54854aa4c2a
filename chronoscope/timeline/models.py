"""Timeline records produced by the projector."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TimelineItem(BaseModel):
    """Fields and behaviour shared by every timeline record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    input: Optional[str] = None
    result: Optional[str] = None
    attempts: Optional[int] = None
    header: Optional[Dict[str, Any]] = None
    task_queue: Optional[Dict[str, Any]] = None
    task_id: Optional[str] = None
    workflow_task_completed_event_id: Optional[str] = None
    related_event_ids: List[str] = Field(default_factory=list)

    def add_related_event(self, event_id: str) -> None:
        """Record that ``event_id`` touched this item (no duplicates)."""
        if event_id not in self.related_event_ids:
            self.related_event_ids.append(event_id)

    def to_json_dict(self) -> Dict[str, Any]:
        """camelCase representation for dashboards."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Workflow(TimelineItem):
    """A root or child workflow execution."""

    type: Literal["workflow", "childWorkflow"] = "workflow"
    workflow_id: str
    run_id: Optional[str] = None
    workflow_type: Optional[str] = None
    namespace: Optional[str] = None
    parent_workflow_id: Optional[str] = None
    parent_run_id: Optional[str] = None
    parent_workflow_namespace: Optional[str] = None
    original_execution_run_id: Optional[str] = None
    first_execution_run_id: Optional[str] = None
    initiated_event_id: Optional[str] = None
    workflow_execution_timeout: Optional[str] = None
    workflow_run_timeout: Optional[str] = None
    workflow_task_timeout: Optional[str] = None
    workflow_id_reuse_policy: Optional[str] = None
    retry_policy: Optional[Dict[str, Any]] = None
    memo: Optional[Dict[str, Any]] = None
    search_attributes: Optional[Dict[str, Any]] = None

    @property
    def is_child(self) -> bool:
        return self.type == "childWorkflow"


class Activity(TimelineItem):
    """An activity task and its attempts."""

    type: Literal["activity"] = "activity"
    activity_id: str
    activity_type: Optional[str] = None
    workflow_id: str
    workflow_run_id: Optional[str] = None
    scheduled_event_id: str
    schedule_time: Optional[str] = None
    failure: Optional[str] = None
    timeout_type: Optional[str] = None
    last_failure: Optional[str] = None
    last_started_time: Optional[str] = None
    last_attempt_complete_time: Optional[str] = None
    last_worker_identity: Optional[str] = None
    schedule_to_close_timeout: Optional[str] = None
    schedule_to_start_timeout: Optional[str] = None
    start_to_close_timeout: Optional[str] = None
    heartbeat_timeout: Optional[str] = None
    retry_policy: Optional[Dict[str, Any]] = None


ChronologicalItem = Annotated[Union[Workflow, Activity], Field(discriminator="type")]
