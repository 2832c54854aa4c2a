"""httpx client for the workflow platform's HTTP API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..config import TemporalConfig
from ..contracts import (
    DescribeWorkflowResponse,
    HistoryEvent,
    HistoryPage,
    SearchResponse,
    WorkflowExecutionInfo,
)
from ..exceptions import ConfigurationError, UpstreamError, WorkflowNotFoundError
from ..utils.retry import with_retries
from .base import HistoryClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise UpstreamError(f"Unexpected {model.__name__} payload: {e}", cause=e) from e


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, UpstreamError):
        return exc.status_code is None or exc.status_code >= 500
    return False


class TemporalHttpClient(HistoryClient):
    """Read histories and live state over the platform's REST API."""

    def __init__(
        self,
        config: TemporalConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not config.api_key:
            raise ConfigurationError(
                "Temporal API Key is required - set TEMPORAL_API_KEY envvar"
            )
        self._config = config
        self._base_url = config.resolved_base_url()
        self._headers = {"Authorization": f"Bearer {config.api_key}"}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers,
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    async def _get_json(
        self, path: str, params: Dict[str, str], workflow_id: Optional[str], context: str
    ) -> Dict[str, Any]:
        await self.connect()

        async def _once() -> Dict[str, Any]:
            try:
                resp = await self._client.get(path, params=params)
            except httpx.HTTPError as e:
                raise UpstreamError(f"Failed to {context}: {e}", cause=e) from e
            if resp.status_code == 404 and workflow_id is not None:
                raise WorkflowNotFoundError(workflow_id)
            if resp.status_code >= 400:
                raise UpstreamError(
                    f"Failed to {context}. Status: {resp.status_code}",
                    status_code=resp.status_code,
                )
            try:
                return resp.json()
            except ValueError as e:
                raise UpstreamError(
                    f"Failed to {context}: invalid JSON response",
                    status_code=resp.status_code,
                    cause=e,
                ) from e

        return await with_retries(
            _once, self._config.max_retries, _is_transient, description=context
        )

    @staticmethod
    def _workflow_path(namespace: str, workflow_id: str) -> str:
        return (
            f"/api/v1/namespaces/{quote(namespace, safe='')}"
            f"/workflows/{quote(workflow_id, safe='')}"
        )

    # ------------------------------------------------------------------
    async def get_history(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> List[HistoryEvent]:
        path = self._workflow_path(namespace, workflow_id) + "/history"
        events: List[HistoryEvent] = []
        next_page_token = ""
        page_number = 0
        while True:
            data = await self._get_json(
                path,
                {"execution.runId": run_id, "next_page_token": next_page_token},
                workflow_id,
                "fetch workflow history",
            )
            page = _validate(HistoryPage, data)
            events.extend(page.history.events)
            page_number += 1
            logger.debug(
                f"Fetched history page {page_number} of {workflow_id} "
                f"({len(page.history.events)} events)"
            )
            if not page.next_page_token:
                break
            next_page_token = page.next_page_token
        return events

    async def describe_workflow(
        self, namespace: str, workflow_id: str, run_id: str = ""
    ) -> DescribeWorkflowResponse:
        data = await self._get_json(
            self._workflow_path(namespace, workflow_id),
            {"execution.runId": run_id},
            workflow_id,
            "fetch workflow data",
        )
        return _validate(DescribeWorkflowResponse, data)

    async def search_workflows(
        self, namespace: str, query: str = ""
    ) -> List[WorkflowExecutionInfo]:
        data = await self._get_json(
            f"/api/v1/namespaces/{quote(namespace, safe='')}/workflows",
            {"query": query or ""},
            None,
            "search workflows",
        )
        return _validate(SearchResponse, data).executions or []
