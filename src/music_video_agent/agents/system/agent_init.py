"""
Workflow initialization: creates the task's pipeline of steps
"""

import logging

from ...core.artifacts import decode_artifacts
from ...core.config import STEP_CREATED_STATUS
from ...core.errors import ArtifactError
from ...core.state import Step, StepResult
from ...core.task_log import log_task
from ...core.workflow import FAILURE_OUTPUTS, StepName, build_workflow_steps
from ..base import StepContext

logger = logging.getLogger(__name__)


async def init_step(step: Step, ctx: StepContext) -> StepResult:
    """Create every step that follows ``init`` in one batch.

    A rejected batch is logged as an error but init is still completed,
    so the task is never left waiting on its first step.
    """
    logger.info(f"[Init] Building '{ctx.variant.name}' workflow for task {step.task_id}")

    try:
        artifacts = decode_artifacts(step.input_artifacts)
    except ArtifactError as e:
        logger.error(f"[Init] Invalid input artifacts: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.INIT], error=str(e))

    steps = build_workflow_steps(step, ctx.variant)

    try:
        response = await ctx.orchestration.create_steps(step.did, step.task_id, {"steps": steps})
    except Exception as e:
        logger.error(f"[Init] Step creation request failed: {e}")
        await log_task(ctx.orchestration, step.task_id, "error", f"Error creating steps: {e}")
    else:
        if response.status == STEP_CREATED_STATUS:
            await log_task(ctx.orchestration, step.task_id, "info", "Steps created successfully.")
        else:
            logger.error(f"[Init] Step creation rejected with status {response.status}")
            await log_task(ctx.orchestration, step.task_id, "error", f"Error creating steps: {response.data}")

    return StepResult.completed(
        step.input_query or "",
        artifacts=artifacts,
        message=f"Workflow initialized with {len(steps)} steps.",
    )
