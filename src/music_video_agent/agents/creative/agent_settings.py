"""
Settings step: the distinct locations the script takes place in
"""

import logging

from ...core.artifacts import ScenesArtifact, SettingsArtifact, parse_artifact
from ...core.state import Step, StepResult
from ...core.workflow import FAILURE_OUTPUTS, StepName
from ..base import StepContext

logger = logging.getLogger(__name__)


async def generate_settings_step(step: Step, ctx: StepContext) -> StepResult:
    """Handles both generateSettings and its extractSettings alias"""
    logger.info(f"[Settings Step] Generating settings for task {step.task_id}...")

    try:
        previous = parse_artifact(step.input_artifacts, ScenesArtifact)
        settings = await ctx.generator.extract_settings(previous.script)
        artifact = SettingsArtifact(**previous.carry(settings=settings))
    except Exception as e:
        logger.error(f"[Settings Step] Error during settings generation: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.GENERATE_SETTINGS], error=str(e))

    logger.info(f"[Settings Step] Generated {len(settings)} settings: {[setting.id for setting in settings]}")
    return StepResult.completed("Settings generation completed.", artifacts=artifact)
