"""Pending-activity reconciler tests."""

import json

from fixtures.histories import (
    activity_completed,
    activity_scheduled,
    activity_started,
    child_initiated,
    child_started,
    describe,
    workflow_started,
)

from chronoscope.timeline import open_workflows, project_history, reconcile


def _timeline():
    return project_history(
        [
            workflow_started(1, "wf1"),
            activity_scheduled(2, "a1"),
            activity_scheduled(3, "a2"),
            activity_started(4, 3),
            activity_scheduled(5, "done"),
            activity_completed(6, 5, result="ok"),
        ]
    )


def _pending(activity_id, attempt, **extra):
    entry = {
        "activityId": activity_id,
        "attempt": attempt,
        "lastStartedTime": "2024-05-01T10:01:00Z",
        "lastAttemptCompleteTime": "2024-05-01T10:01:30Z",
        "lastWorkerIdentity": "worker-7",
    }
    entry.update(extra)
    return entry


def test_scheduled_activity_with_first_attempt_becomes_pending():
    timeline = _timeline()
    reconcile(timeline, describe("wf1", pending_activities=[_pending("a1", 1)]))
    act = timeline[1]
    assert act.status == "PENDING"
    assert act.attempts == 1
    assert act.last_started_time == "2024-05-01T10:01:00Z"
    assert act.last_attempt_complete_time == "2024-05-01T10:01:30Z"
    assert act.last_worker_identity == "worker-7"
    assert act.last_failure is None


def test_retried_activity_becomes_retrying_regardless_of_status():
    timeline = _timeline()
    reconcile(
        timeline,
        describe(
            "wf1",
            pending_activities=[
                _pending("a1", 3),
                _pending("a2", 3, lastFailure={"message": "timeout"}),
            ],
        ),
    )
    assert timeline[1].status == "RETRYING"
    assert timeline[2].status == "RETRYING"
    assert timeline[2].attempts == 3
    assert json.loads(timeline[2].last_failure) == {"message": "timeout"}


def test_started_activity_with_first_attempt_keeps_status():
    timeline = _timeline()
    reconcile(timeline, describe("wf1", pending_activities=[_pending("a2", 1)]))
    assert timeline[2].status == "STARTED"
    assert timeline[2].attempts == 1


def test_resolved_activities_are_untouched():
    timeline = _timeline()
    before = timeline[3].model_dump()
    reconcile(timeline, describe("wf1", pending_activities=[_pending("done", 4)]))
    assert timeline[3].model_dump() == before
    assert timeline[3].status == "COMPLETED"


def test_activities_missing_from_snapshot_are_untouched():
    timeline = _timeline()
    reconcile(timeline, describe("wf1", pending_activities=[]))
    assert timeline[1].status == "SCHEDULED"
    assert timeline[1].attempts is None


def test_workflow_fields_are_overlaid_from_execution_info():
    timeline = _timeline()
    reconcile(
        timeline,
        describe(
            "wf1",
            status="WORKFLOW_EXECUTION_STATUS_TIMED_OUT",
            closeTime="2024-05-01T11:00:00Z",
            parentExecution={"workflowId": "parent", "runId": "parent-run"},
        ),
    )
    root = timeline[0]
    assert root.status == "TIMED_OUT"
    assert root.start_time == "2024-05-01T10:00:01Z"
    assert root.end_time == "2024-05-01T11:00:00Z"
    assert root.parent_workflow_id == "parent"
    assert root.parent_run_id == "parent-run"


def test_unmapped_execution_status_passes_through():
    timeline = _timeline()
    reconcile(timeline, describe("wf1", status="WORKFLOW_EXECUTION_STATUS_PAUSED"))
    assert timeline[0].status == "WORKFLOW_EXECUTION_STATUS_PAUSED"


def test_snapshot_for_other_execution_is_ignored():
    timeline = _timeline()
    reconcile(
        timeline,
        describe(
            "someone-else",
            status="WORKFLOW_EXECUTION_STATUS_FAILED",
            pending_activities=[_pending("a1", 2)],
        ),
    )
    assert timeline[0].status == "RUNNING"
    assert timeline[1].status == "SCHEDULED"


def test_child_snapshot_does_not_touch_root_activities():
    timeline = project_history(
        [
            workflow_started(1, "wf1"),
            activity_scheduled(2, "a1"),
            child_initiated(3, "child-1"),
            child_started(4, 3, "child-1", run_id="child-run"),
        ]
    )
    child = timeline[2]
    reconcile(
        timeline,
        describe(
            "child-1",
            run_id="child-run",
            status="WORKFLOW_EXECUTION_STATUS_COMPLETED",
            pending_activities=[_pending("a1", 5)],
        ),
        workflow=child,
    )
    assert child.status == "COMPLETED"
    assert timeline[1].status == "SCHEDULED"


def test_open_workflows_lists_only_unfinished_records():
    timeline = project_history(
        [
            workflow_started(1, "wf1"),
            child_initiated(2, "child-1"),
        ]
    )
    assert [wf.workflow_id for wf in open_workflows(timeline)] == ["wf1", "child-1"]
    timeline[0].status = "COMPLETED"
    assert [wf.workflow_id for wf in open_workflows(timeline)] == ["child-1"]


def test_pending_entry_without_attempt_keeps_recorded_attempts():
    timeline = project_history(
        [
            workflow_started(1, "wf1"),
            activity_scheduled(2, "a1"),
            activity_started(3, 2, attempt=2),
        ]
    )
    reconcile(timeline, describe("wf1", pending_activities=[{"activityId": "a1"}]))
    act = timeline[1]
    assert act.attempts == 2
    assert act.status == "STARTED"
