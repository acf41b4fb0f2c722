"""Redis pub/sub delivery of step events"""

import json
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import redis.asyncio as redis

from ..core.config import REDIS_URL, EVENT_CHANNEL_PREFIX

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[Any]]


class RedisEventSubscriber:
    """
    Listens on one pub/sub channel per agent room and hands every matching
    event to a handler. Events are processed concurrently, each in its own task.
    """

    def __init__(self, redis_url: str = REDIS_URL, channel_prefix: str = EVENT_CHANNEL_PREFIX, redis_client=None):
        if redis_client is None:
            pool = redis.ConnectionPool.from_url(
                redis_url,
                max_connections=10,
                decode_responses=True,
                socket_keepalive=True
            )
            redis_client = redis.Redis(connection_pool=pool)
        self.redis = redis_client
        self.channel_prefix = channel_prefix
        self._tasks = set()

    def channel_for(self, room: str) -> str:
        return f"{self.channel_prefix}:{room}"

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            logger.warning(f"[Subscriber] Redis unreachable: {e}")
            return False

    async def dispatch_message(self, message: Dict[str, Any], handler: EventHandler,
                               event_types: Optional[Sequence[str]] = None) -> bool:
        """Hand one pub/sub message to ``handler``.

        Returns True when the handler was called. Handler errors are logged and
        never propagate, so one bad event cannot end the subscription.
        """
        if message.get("type") != "message":
            return False

        data = message.get("data")
        if event_types:
            try:
                event = json.loads(data)
            except (TypeError, ValueError):
                logger.error(f"[Subscriber] Dropping malformed event: {data!r}")
                return False
            if not isinstance(event, dict) or event.get("event_type") not in event_types:
                logger.debug(f"[Subscriber] Ignoring event: {data!r}")
                return False

        try:
            await handler(data)
        except Exception as e:
            logger.error(f"[Subscriber] Event handler failed: {e}")
        return True

    async def listen(self, handler: EventHandler, rooms: List[str], event_types: Optional[Sequence[str]] = None):
        """Subscribe to the rooms' channels and dispatch events until cancelled"""
        channels = [self.channel_for(room) for room in rooms]
        pubsub = self.redis.pubsub()
        await pubsub.subscribe(*channels)
        logger.info(f"[Subscriber] Listening on {channels} for {list(event_types or [])}")

        try:
            async for message in pubsub.listen():
                task = asyncio.create_task(self.dispatch_message(message, handler, event_types))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        finally:
            await pubsub.unsubscribe(*channels)
            await pubsub.aclose()

    async def close(self):
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.redis.aclose()
