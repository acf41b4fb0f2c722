"""
Scene transformation step: final per-scene production prompts
"""

import time
import logging
from typing import List

from ...core.artifacts import Character, CharactersArtifact, ProductionArtifact, ProductionPrompt, Scene, Setting, parse_artifact
from ...core.errors import ArtifactError, ContentGenerationError
from ...core.rebalancer import rebalance_durations, timeline, total_duration
from ...core.state import Step, StepResult
from ...core.workflow import FAILURE_OUTPUTS, StepName
from ..base import StepContext, format_time

logger = logging.getLogger(__name__)


def filter_character_references(prompts: List[ProductionPrompt], characters: List[Character]) -> int:
    """Drop character names that are not in the roster, matching names exactly.

    Returns the number of references removed.
    """
    roster = {character.name for character in characters}
    dropped = 0
    for prompt in prompts:
        unknown = [name for name in prompt.characters_in_scene if name not in roster]
        if unknown:
            logger.warning(f"[Transform Step] Scene {prompt.scene_number}: dropping unknown characters {unknown}")
            prompt.characters_in_scene = [name for name in prompt.characters_in_scene if name in roster]
            dropped += len(unknown)
    return dropped


def clear_unknown_settings(prompts: List[ProductionPrompt], settings: List[Setting]) -> int:
    """Clear setting references that match no extracted setting"""
    known = {setting.id for setting in settings}
    cleared = 0
    for prompt in prompts:
        if prompt.setting_id is not None and prompt.setting_id not in known:
            logger.warning(f"[Transform Step] Scene {prompt.scene_number}: unknown setting '{prompt.setting_id}'")
            prompt.setting_id = None
            cleared += 1
    return cleared


def align_with_scenes(prompts: List[ProductionPrompt], scenes: List[Scene]):
    """Fill scene number and duration a prompt left out from its scene"""
    for prompt, scene in zip(prompts, scenes):
        if prompt.scene_number is None:
            prompt.scene_number = scene.scene_number
        if prompt.duration is None:
            prompt.duration = scene.duration


async def transform_scenes_step(step: Step, ctx: StepContext) -> StepResult:
    """Scene transformation step - one self-contained generation prompt per scene.

    In variants with duration targeting the prompt durations are rebalanced
    against the song length forwarded from the script step.
    """
    logger.info(f"[Transform Step] Transforming scenes for task {step.task_id}...")
    start_time = time.time()

    try:
        previous = parse_artifact(step.input_artifacts, CharactersArtifact)
        if not previous.scenes:
            raise ArtifactError("No scenes to transform")

        prompts = await ctx.generator.transform_scenes(
            previous.scenes,
            previous.characters,
            previous.settings,
            previous.script,
        )
        if len(prompts) != len(previous.scenes):
            raise ContentGenerationError(
                f"Expected {len(previous.scenes)} production prompts, got {len(prompts)}"
            )

        align_with_scenes(prompts, previous.scenes)
        filter_character_references(prompts, previous.characters)
        clear_unknown_settings(prompts, previous.settings)

        if ctx.variant.rebalance_durations:
            if not previous.duration:
                raise ArtifactError("Missing target duration for rebalancing")
            rebalance_durations(prompts, previous.duration, rng=ctx.rng)

        artifact = ProductionArtifact(
            transformed_scenes=prompts,
            settings=previous.settings,
            characters=previous.characters,
            script=previous.script,
            scenes=previous.scenes,
            duration=previous.duration,
        )
    except Exception as e:
        logger.error(f"[Transform Step] Error during scenes transformation: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.TRANSFORM_SCENES], error=str(e))

    marks = timeline(prompts)
    logger.info(
        f"[Transform Step] {len(prompts)} production prompts, {total_duration(prompts)}s "
        f"({marks[0][0]} - {marks[-1][1]}) in {format_time(time.time() - start_time)}"
    )
    return StepResult.completed(
        "Scenes transformation completed.",
        artifacts=artifact,
        message="Scenes transformation completed successfully.",
    )
