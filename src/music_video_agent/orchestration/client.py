"""REST client for the task orchestration service"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..core.config import (
    AGENT_DID,
    NVM_API_KEY,
    ORCHESTRATION_API_URL,
    ORCHESTRATION_REQUEST_TIMEOUT,
    SUBSCRIBE_EVENT_TYPES,
)
from ..core.errors import OrchestrationError
from .subscriber import EventHandler, RedisEventSubscriber

logger = logging.getLogger(__name__)

STEP_PATH = "/api/v1/agents/steps/{step_id}"
PENDING_STEPS_PATH = "/api/v1/agents/{did}/steps"
CREATE_STEPS_PATH = "/api/v1/agents/{did}/tasks/{task_id}/steps"
UPDATE_STEP_PATH = "/api/v1/agents/{did}/tasks/{task_id}/step/{step_id}"
TASK_LOG_PATH = "/api/v1/agents/tasks/{task_id}/log"


@dataclass
class ApiResponse:
    """Status code and decoded body of a write request"""
    status: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class OrchestrationClient(ABC):
    """Step store and event source the dispatcher works against"""

    @abstractmethod
    async def get_step(self, step_id: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def create_steps(self, did: str, task_id: str, payload: Dict[str, Any]) -> ApiResponse:
        """Create a batch of steps, status 201 signals success"""

    @abstractmethod
    async def update_step(self, did: str, step: Dict[str, Any]) -> ApiResponse:
        ...

    @abstractmethod
    async def log_task(self, entry: Dict[str, Any]):
        """Append an entry to a task's log"""

    @abstractmethod
    async def subscribe(self, handler: EventHandler, join_agent_rooms: Optional[List[str]] = None,
                        subscribe_event_types: Optional[Sequence[str]] = None,
                        get_pending_events_on_subscribe: bool = False):
        """Deliver step events to ``handler`` until cancelled"""

    async def close(self):
        pass


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpOrchestrationClient(OrchestrationClient):
    """
    Orchestration service over HTTP with bearer auth. Reads raise on error
    status; writes return an ApiResponse so callers decide what a status means.
    """

    def __init__(
        self,
        base_url: str = ORCHESTRATION_API_URL,
        api_key: str = NVM_API_KEY,
        agent_did: str = AGENT_DID,
        timeout: float = ORCHESTRATION_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        subscriber: Optional[RedisEventSubscriber] = None,
    ):
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self.agent_did = agent_did
        self.subscriber = subscriber
        self.client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise OrchestrationError(f"{method} {path} failed: {e}") from e

    def _raise_for_status(self, response: httpx.Response):
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OrchestrationError(
                f"{response.request.method} {response.request.url.path} returned {response.status_code}: {response.text}"
            ) from e

    async def get_step(self, step_id: str) -> Dict[str, Any]:
        response = await self._request("GET", STEP_PATH.format(step_id=step_id))
        self._raise_for_status(response)
        return response.json()

    async def get_pending_steps(self, did: str) -> List[Dict[str, Any]]:
        response = await self._request("GET", PENDING_STEPS_PATH.format(did=did), params={"status": "Pending"})
        self._raise_for_status(response)
        data = response.json()
        if isinstance(data, dict):
            return data.get("steps", [])
        return data

    async def create_steps(self, did: str, task_id: str, payload: Dict[str, Any]) -> ApiResponse:
        response = await self._request("POST", CREATE_STEPS_PATH.format(did=did, task_id=task_id), json=payload)
        return ApiResponse(response.status_code, _decode_body(response))

    async def update_step(self, did: str, step: Dict[str, Any]) -> ApiResponse:
        path = UPDATE_STEP_PATH.format(did=did, task_id=step["task_id"], step_id=step["step_id"])
        response = await self._request("PUT", path, json=step)
        return ApiResponse(response.status_code, _decode_body(response))

    async def log_task(self, entry: Dict[str, Any]):
        response = await self._request("POST", TASK_LOG_PATH.format(task_id=entry["task_id"]), json=entry)
        self._raise_for_status(response)

    async def subscribe(self, handler: EventHandler, join_agent_rooms: Optional[List[str]] = None,
                        subscribe_event_types: Optional[Sequence[str]] = None,
                        get_pending_events_on_subscribe: bool = False):
        rooms = join_agent_rooms or [self.agent_did]
        event_types = subscribe_event_types or SUBSCRIBE_EVENT_TYPES
        if self.subscriber is None:
            self.subscriber = RedisEventSubscriber()

        if get_pending_events_on_subscribe:
            # Catch up on steps that became ready while the worker was down
            for room in rooms:
                pending = await self.get_pending_steps(room)
                logger.info(f"[Orchestration] {len(pending)} pending steps for {room}")
                for step in pending:
                    await handler(json.dumps({"step_id": step["step_id"], "event_type": event_types[0]}))

        await self.subscriber.listen(handler, rooms, event_types)

    async def close(self):
        await self.client.aclose()
        if self.subscriber is not None:
            await self.subscriber.close()
