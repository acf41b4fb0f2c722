"""
Character steps: roster extraction and image prompt synthesis
"""

import time
import logging
from typing import List

from ...core.artifacts import Character, CharactersArtifact, SettingsArtifact, parse_artifact
from ...core.state import Step, StepResult
from ...core.workflow import FAILURE_OUTPUTS, StepName
from ..base import StepContext, format_time

logger = logging.getLogger(__name__)


def merge_image_prompts(roster: List[Character], transformed: List[Character]) -> List[Character]:
    """Copy generated image prompts onto the extracted roster, matched by name.

    Names and order come from ``roster``. Generated entries with unknown names
    are dropped.
    """
    known = {character.name for character in roster}
    prompts = {}
    for character in transformed:
        if character.name not in known:
            logger.warning(f"[Character Step] Ignoring prompt for unknown character: {character.name}")
        elif character.image_prompt:
            prompts[character.name] = character.image_prompt

    return [
        character.model_copy(update={"image_prompt": prompts.get(character.name, character.image_prompt)})
        for character in roster
    ]


async def extract_characters_step(step: Step, ctx: StepContext) -> StepResult:
    """Character extraction step - describes everyone who appears in the script.

    Characters are extracted from the generated script, using the forwarded
    lyrics and tags as context.
    """
    logger.info(f"[Character Step] Extracting characters for task {step.task_id}...")
    start_time = time.time()

    try:
        previous = parse_artifact(step.input_artifacts, SettingsArtifact)
        characters = await ctx.generator.extract_characters(previous.script, previous.lyrics, previous.tags)
        artifact = CharactersArtifact(**previous.carry(characters=characters))
    except Exception as e:
        logger.error(f"[Character Step] Error during characters extraction: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.EXTRACT_CHARACTERS], error=str(e))

    names = [character.name for character in characters]
    logger.info(f"[Character Step] Extracted {len(characters)} characters {names} in {format_time(time.time() - start_time)}")
    return StepResult.completed(
        "Characters extraction completed.",
        artifacts=artifact,
        message="Characters extraction completed successfully.",
    )


async def transform_characters_step(step: Step, ctx: StepContext) -> StepResult:
    """Adds an image prompt to every character, the rest of the artifact is forwarded as is"""
    logger.info(f"[Character Step] Transforming characters for task {step.task_id}...")

    try:
        previous = parse_artifact(step.input_artifacts, CharactersArtifact)
        transformed = await ctx.generator.transform_characters(previous.characters, previous.script)
        characters = merge_image_prompts(previous.characters, transformed)
        artifact = CharactersArtifact(**previous.carry(characters=characters))
    except Exception as e:
        logger.error(f"[Character Step] Error during characters transformation: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.TRANSFORM_CHARACTERS], error=str(e))

    missing = [character.name for character in characters if not character.image_prompt]
    if missing:
        logger.warning(f"[Character Step] No image prompt generated for: {missing}")
    return StepResult.completed("Characters transformation completed.", artifacts=artifact)
