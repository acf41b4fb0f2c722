"""Worker entry point: subscribe to step events, or serve them over HTTP"""

import sys
import asyncio
import argparse
import logging
from typing import List, Optional

from .core.config import AGENT_DID, IS_DUMMY, LOG_LEVEL, SUBSCRIBE_EVENT_TYPES, WORKFLOW_VARIANT, WORKFLOW_VARIANTS
from .core.dispatcher import build_dispatcher
from .core.task_log import configure_logging
from .orchestration import HttpOrchestrationClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="music-video-agent",
        description="Turns a song idea into a music video production plan, one workflow step at a time",
    )
    parser.add_argument("--serve", action="store_true",
                        help="Receive step events over HTTP instead of the Redis subscription")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address for --serve")
    parser.add_argument("--port", type=int, default=8080, help="Port for --serve")
    parser.add_argument("--dummy", action="store_true", default=IS_DUMMY,
                        help="Use canned content instead of calling the LLM")
    parser.add_argument("--variant", choices=sorted(WORKFLOW_VARIANTS), default=WORKFLOW_VARIANT,
                        help="Workflow variant to create in the init step")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: %(default)s)")
    return parser


async def run_worker(dummy: bool, variant_name: str):
    """Subscribe to step events and dispatch them until cancelled"""
    orchestration = HttpOrchestrationClient()
    try:
        dispatcher = build_dispatcher(orchestration, dummy=dummy, variant_name=variant_name)
        logger.info(f"[Worker] Subscribing as {AGENT_DID or '<unset agent DID>'}")
        await orchestration.subscribe(
            dispatcher.handle_event,
            join_agent_rooms=[AGENT_DID],
            subscribe_event_types=SUBSCRIBE_EVENT_TYPES,
            get_pending_events_on_subscribe=False,
        )
    finally:
        await orchestration.close()


def serve(host: str, port: int, dummy: bool, variant_name: str):
    import uvicorn
    from .api.main import create_app

    uvicorn.run(create_app(dummy=dummy, variant_name=variant_name), host=host, port=port)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.serve:
            serve(args.host, args.port, args.dummy, args.variant)
        else:
            asyncio.run(run_worker(args.dummy, args.variant))
    except KeyboardInterrupt:
        logger.info("[Worker] Stopped")
    except Exception as e:
        logger.error(f"[Worker] Fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
