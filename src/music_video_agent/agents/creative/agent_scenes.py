"""
Scene extraction step
"""

import time
import logging
from typing import List

from ...core.artifacts import Scene, ScenesArtifact, ScriptArtifact, parse_artifact
from ...core.rebalancer import timeline
from ...core.state import Step, StepResult
from ...core.workflow import FAILURE_OUTPUTS, StepName
from ..base import StepContext, format_time

logger = logging.getLogger(__name__)


def sequence_scenes(scenes: List[Scene]) -> List[Scene]:
    """Number scenes 1..N in script order and derive timecodes from the durations"""
    numbers = [scene.scene_number for scene in scenes]
    if numbers != list(range(1, len(scenes) + 1)):
        logger.warning(f"[Scenes Step] Renumbering scenes {numbers}")

    marks = timeline(scenes)
    return [
        scene.model_copy(update={"scene_number": number, "start_time": start, "end_time": end})
        for number, (scene, (start, end)) in enumerate(zip(scenes, marks), start=1)
    ]


async def extract_scenes_step(step: Step, ctx: StepContext) -> StepResult:
    logger.info(f"[Scenes Step] Extracting scenes for task {step.task_id}...")
    start_time = time.time()

    try:
        previous = parse_artifact(step.input_artifacts, ScriptArtifact)
        scenes = sequence_scenes(await ctx.generator.extract_scenes(previous.script, previous.duration))
        artifact = ScenesArtifact(**previous.carry(scenes=scenes))
    except Exception as e:
        logger.error(f"[Scenes Step] Error during scenes extraction: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.EXTRACT_SCENES], error=str(e))

    logger.info(f"[Scenes Step] Extracted {len(scenes)} scenes in {format_time(time.time() - start_time)}")
    return StepResult.completed(
        "Scenes extraction completed.",
        artifacts=artifact,
        message="Scenes extraction completed successfully.",
    )
