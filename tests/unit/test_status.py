"""Status normalization tests."""

import logging

import pytest

from chronoscope.timeline.status import (
    Status,
    display_label,
    is_terminal,
    status_from_event_type,
    status_from_execution_status,
)


@pytest.mark.parametrize(
    "event_type,expected",
    [
        ("EVENT_TYPE_WORKFLOW_EXECUTION_STARTED", Status.RUNNING),
        ("EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_STARTED", Status.RUNNING),
        ("EVENT_TYPE_ACTIVITY_TASK_STARTED", Status.RUNNING),
        ("EVENT_TYPE_ACTIVITY_TASK_COMPLETED", Status.COMPLETED),
        ("EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_FAILED", Status.FAILED),
        ("EVENT_TYPE_WORKFLOW_EXECUTION_TIMED_OUT", Status.TIMED_OUT),
        ("EVENT_TYPE_ACTIVITY_TASK_CANCELED", Status.CANCELED),
        ("EVENT_TYPE_CHILD_WORKFLOW_EXECUTION_TERMINATED", Status.TERMINATED),
        ("EVENT_TYPE_ACTIVITY_TASK_SCHEDULED", Status.SCHEDULED),
    ],
)
def test_event_type_mapping(event_type, expected):
    assert status_from_event_type(event_type) == expected.value


@pytest.mark.parametrize(
    "execution_status,expected",
    [
        ("WORKFLOW_EXECUTION_STATUS_RUNNING", "RUNNING"),
        ("WORKFLOW_EXECUTION_STATUS_COMPLETED", "COMPLETED"),
        ("WORKFLOW_EXECUTION_STATUS_FAILED", "FAILED"),
        ("WORKFLOW_EXECUTION_STATUS_TIMED_OUT", "TIMED_OUT"),
        ("WORKFLOW_EXECUTION_STATUS_CANCELED", "CANCELED"),
        ("WORKFLOW_EXECUTION_STATUS_TERMINATED", "TERMINATED"),
    ],
)
def test_execution_status_mapping(execution_status, expected):
    assert status_from_execution_status(execution_status) == expected


def test_unmapped_inputs_pass_through_and_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="chronoscope.timeline.status"):
        assert status_from_event_type("EVENT_TYPE_SOMETHING_NEW") == "EVENT_TYPE_SOMETHING_NEW"
        assert (
            status_from_execution_status("WORKFLOW_EXECUTION_STATUS_PAUSED")
            == "WORKFLOW_EXECUTION_STATUS_PAUSED"
        )
    assert len(caplog.records) == 2
    assert status_from_execution_status(None) is None


def test_terminal_statuses():
    for status in ("COMPLETED", "FAILED", "TIMED_OUT", "CANCELED", "TERMINATED"):
        assert is_terminal(status)
    for status in ("RUNNING", "SCHEDULED", "STARTED", "PENDING", "RETRYING", "INITIATED", None):
        assert not is_terminal(status)


def test_display_label():
    assert display_label("TIMED_OUT") == "TimedOut"
    assert display_label("RUNNING") == "Running"
