"""
Script step: writes the shooting script the rest of the pipeline works from
"""

import time
import logging

from ...core.artifacts import ScriptArtifact, SongBrief, parse_artifact
from ...core.errors import ArtifactError
from ...core.state import Step, StepResult
from ...core.workflow import FAILURE_OUTPUTS, StepName
from ..base import StepContext, format_time

logger = logging.getLogger(__name__)


async def generate_script_step(step: Step, ctx: StepContext) -> StepResult:
    """Script writing step - song metadata or a bare idea in, script out"""
    logger.info(f"[Script Step] Starting script generation for task {step.task_id}...")
    start_time = time.time()

    try:
        if ctx.variant.requires_song_brief:
            brief = parse_artifact(step.input_artifacts, SongBrief)
            script = await ctx.generator.generate_script(brief)
            artifact = ScriptArtifact(script=script, lyrics=brief.lyrics, tags=brief.tags, duration=brief.duration)
        else:
            idea = (step.input_query or "").strip()
            if not idea:
                raise ArtifactError("Missing idea in input query")
            script = await ctx.generator.generate_script(idea)
            # No song in this variant, later steps still expect the fields
            artifact = ScriptArtifact(script=script, lyrics="", tags=[])
    except Exception as e:
        logger.error(f"[Script Step] Error during script generation: {e}")
        return StepResult.failed(FAILURE_OUTPUTS[StepName.GENERATE_SCRIPT], error=str(e))

    logger.info(f"[Script Step] Generated script ({len(script)} chars) in {format_time(time.time() - start_time)}")
    return StepResult.completed("Script generation completed.", artifacts=artifact)
