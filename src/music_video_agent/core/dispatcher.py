"""Step dispatcher: routes step events to the handler for the step's name"""

import json
import random
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from .artifacts import dump_artifact
from .config import IS_DUMMY
from .errors import ArtifactError
from .state import Step, StepResult, StepStatus
from .task_log import log_task
from .workflow import FAILURE_OUTPUTS, StepName, WorkflowVariant, get_workflow_variant
from ..agents.base import StepContext
from ..agents.system import init_step
from ..agents.creative import (
    build_content_generator,
    generate_script_step,
    extract_scenes_step,
    generate_settings_step,
    extract_characters_step,
    transform_characters_step,
    transform_scenes_step,
)

logger = logging.getLogger(__name__)

StepHandler = Callable[[Step, StepContext], Awaitable[StepResult]]

STEP_HANDLERS: Dict[StepName, StepHandler] = {
    StepName.INIT: init_step,
    StepName.GENERATE_SCRIPT: generate_script_step,
    StepName.EXTRACT_SCENES: extract_scenes_step,
    StepName.GENERATE_SETTINGS: generate_settings_step,
    StepName.EXTRACT_SETTINGS: generate_settings_step,
    StepName.EXTRACT_CHARACTERS: extract_characters_step,
    StepName.TRANSFORM_CHARACTERS: transform_characters_step,
    StepName.TRANSFORM_SCENES: transform_scenes_step,
}

GENERIC_FAILURE_OUTPUT = "Step processing failed."


def decode_event(raw: Any) -> Optional[str]:
    """Step id carried by an event payload, None when the payload is unusable"""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(f"[Dispatcher] Malformed event payload: {e}")
            return None
    else:
        data = raw

    if not isinstance(data, dict) or not data.get("step_id"):
        logger.error(f"[Dispatcher] Event without step_id: {raw!r}")
        return None
    return str(data["step_id"])


class StepDispatcher:
    """
    Loads the step an event points at, runs its handler and writes the
    outcome back. Nothing raised while handling one event escapes
    handle_event, so the subscription loop keeps running.
    """

    def __init__(self, orchestration, generator, variant: Optional[WorkflowVariant] = None,
                 rng: Optional[random.Random] = None, handlers: Optional[Dict[StepName, StepHandler]] = None):
        self.orchestration = orchestration
        self.generator = generator
        self.variant = variant or get_workflow_variant()
        self.context = StepContext(generator, orchestration, self.variant, rng or random.Random())
        self.handlers = dict(STEP_HANDLERS if handlers is None else handlers)

    async def handle_event(self, raw: Any) -> Optional[StepResult]:
        """Process one step event.

        Returns the applied StepResult, or None when the event was dropped
        (malformed payload, unknown step, or a step that is no longer Pending).
        """
        step_id = decode_event(raw)
        if step_id is None:
            return None

        try:
            step = Step.model_validate(await self.orchestration.get_step(step_id))
        except Exception as e:
            logger.error(f"[Dispatcher] Could not load step {step_id}: {e}")
            return None

        if step.step_status != StepStatus.PENDING:
            logger.info(f"[Dispatcher] Skipping step {step_id} ({step.name}), status is {step.step_status.value}")
            return None

        await log_task(self.orchestration, step.task_id, "info", f"Processing step: {step.name}")

        step_name = StepName.lookup(step.name)
        handler = self.handlers.get(step_name) if step_name is not None else None
        if handler is None:
            logger.warning(f"[Dispatcher] Unrecognized step name '{step.name}', ignoring step {step_id}")
            return None

        result = await self._run_handler(handler, step, step_name)
        return await self._write_back(step, step_name, result)

    async def _run_handler(self, handler: StepHandler, step: Step, step_name: StepName) -> StepResult:
        try:
            result = await handler(step, self.context)
        except Exception as e:
            logger.error(f"[Dispatcher] Handler for {step_name.value} raised: {e}")
            return StepResult.failed(FAILURE_OUTPUTS.get(step_name, GENERIC_FAILURE_OUTPUT), error=str(e))

        if not isinstance(result, StepResult):
            logger.error(f"[Dispatcher] Handler for {step_name.value} returned {type(result).__name__}")
            return StepResult.failed(FAILURE_OUTPUTS.get(step_name, GENERIC_FAILURE_OUTPUT))
        return result

    async def _write_back(self, step: Step, step_name: StepName, result: StepResult) -> StepResult:
        try:
            artifacts = dump_artifact(result.artifacts)
        except ArtifactError as e:
            logger.error(f"[Dispatcher] Not persisting output of {step.step_id}: {e}")
            result = StepResult.failed(FAILURE_OUTPUTS.get(step_name, GENERIC_FAILURE_OUTPUT), error=str(e))
            artifacts = None

        if result.error:
            logger.error(f"[Dispatcher] Step {step.step_id} ({step_name.value}) failed: {result.error}")

        updated = step.model_copy(update={
            "step_status": result.status,
            "output": result.output,
            "output_artifacts": artifacts,
        })

        try:
            response = await self.orchestration.update_step(step.did, updated.to_payload())
            if not response.ok:
                logger.error(f"[Dispatcher] Update of step {step.step_id} rejected with status {response.status}: {response.data}")
        except Exception as e:
            logger.error(f"[Dispatcher] Could not update step {step.step_id}: {e}")

        if not result.succeeded:
            task_status = StepStatus.FAILED
        elif step.is_last:
            task_status = StepStatus.COMPLETED
        else:
            task_status = None
        await log_task(
            self.orchestration,
            step.task_id,
            "info" if result.succeeded else "error",
            result.message or result.output,
            task_status=task_status,
        )
        return result


def build_dispatcher(orchestration, dummy: bool = IS_DUMMY, variant_name: Optional[str] = None,
                     rng: Optional[random.Random] = None) -> StepDispatcher:
    """Wire a dispatcher with the configured workflow variant and content generator"""
    variant = get_workflow_variant(variant_name)
    generator = build_content_generator(dummy)
    logger.info(f"[Dispatcher] Workflow '{variant.name}' ({variant.label}), dummy={dummy}")
    return StepDispatcher(orchestration, generator, variant, rng)
