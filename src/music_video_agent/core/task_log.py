"""Task logging: local log records mirrored to the orchestrator's task log"""

import logging
from typing import Optional

from .state import StepStatus

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "debug": logging.DEBUG,
    "info": logging.INFO,
}


def configure_logging(level: str = "INFO"):
    """Configure process-wide logging once at startup"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def log_task(orchestration, task_id: str, level: str, message: str, task_status: Optional[StepStatus] = None):
    """Log a message locally and send it to the orchestrator's task log.

    A failure to deliver the remote entry is logged and does not interrupt
    step processing.
    """
    logger.log(LOG_LEVELS.get(level, logging.INFO), f"{task_id} :: {message}")

    entry = {"task_id": task_id, "level": level, "message": message}
    if task_status is not None:
        entry["task_status"] = task_status.value

    try:
        await orchestration.log_task(entry)
    except Exception as e:
        logger.error(f"[Task Log] Could not send log entry for task {task_id}: {e}")
