"""FastAPI application: health checks and webhook delivery of step events"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..core.config import IS_DUMMY, SUBSCRIBE_EVENT_TYPES
from ..core.dispatcher import StepDispatcher, build_dispatcher
from ..orchestration import HttpOrchestrationClient, RedisEventSubscriber
from .api_types import StepEvent, EventResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan"""
    # Startup
    orchestration = None
    if app.state.dispatcher is None:
        app.state.subscriber = RedisEventSubscriber()
        orchestration = HttpOrchestrationClient(subscriber=app.state.subscriber)
        app.state.dispatcher = build_dispatcher(
            orchestration, dummy=app.state.dummy, variant_name=app.state.variant_name
        )
        logger.info("[API] Dispatcher ready")

    yield

    # Shutdown
    if orchestration is not None:
        await orchestration.close()


def create_app(dispatcher: Optional[StepDispatcher] = None, dummy: bool = IS_DUMMY,
               variant_name: Optional[str] = None) -> FastAPI:
    """Build the app, with a ready dispatcher injected or one wired at startup"""
    app = FastAPI(
        title="Music Video Script Agent",
        description="Task-step worker producing music video production plans",
        version=__version__,
        lifespan=lifespan
    )
    app.state.dispatcher = dispatcher
    app.state.dummy = dummy
    app.state.variant_name = variant_name
    app.state.subscriber = None

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "name": "Music Video Script Agent",
            "version": __version__,
            "status": "running"
        }

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        dispatcher = app.state.dispatcher
        if app.state.subscriber is None:
            redis_status = "not configured"
        elif await app.state.subscriber.ping():
            redis_status = "connected"
        else:
            redis_status = "unreachable"

        return {
            "status": "healthy" if dispatcher is not None else "starting",
            "variant": dispatcher.variant.name if dispatcher is not None else None,
            "dummy": app.state.dummy,
            "redis": redis_status,
            "timestamp": datetime.now().isoformat()
        }

    @app.post("/events", response_model=EventResponse)
    async def receive_event(event: StepEvent):
        """Dispatch a step event, the step is processed before the response is sent"""
        if event.event_type is not None and event.event_type not in SUBSCRIBE_EVENT_TYPES:
            return EventResponse(step_id=event.step_id, status="ignored")

        result = await app.state.dispatcher.handle_event(event.model_dump(exclude_none=True))
        if result is None:
            return EventResponse(step_id=event.step_id, status="ignored")
        return EventResponse(step_id=event.step_id, status=result.status.value, output=result.output)

    return app


app = create_app()
