"""chronoscope: readable timelines from workflow event histories."""

from .client import HistoryClient, InMemoryHistoryClient, TemporalHttpClient, get_client
from .config import ChronoscopeConfig, TemporalConfig, load_config
from .contracts import DescribeWorkflowResponse, EventType, HistoryEvent
from .exceptions import (
    ChronoscopeError,
    ConfigurationError,
    RootWorkflowNotFoundError,
    UpstreamError,
    WorkflowNotFoundError,
)
from .payloads import decode_payloads
from .service import TimelineService, timeline_to_json
from .timeline import Activity, HistoryProjector, Status, Workflow, project_history, reconcile

__version__ = "0.1.0"
__all__ = [
    "Activity",
    "ChronoscopeConfig",
    "ChronoscopeError",
    "ConfigurationError",
    "DescribeWorkflowResponse",
    "EventType",
    "HistoryClient",
    "HistoryEvent",
    "HistoryProjector",
    "InMemoryHistoryClient",
    "RootWorkflowNotFoundError",
    "Status",
    "TemporalConfig",
    "TemporalHttpClient",
    "TimelineService",
    "UpstreamError",
    "Workflow",
    "WorkflowNotFoundError",
    "decode_payloads",
    "get_client",
    "load_config",
    "project_history",
    "reconcile",
    "timeline_to_json",
]
