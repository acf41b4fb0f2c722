"""Workflow definition: step names, variants and step chain construction"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .config import WORKFLOW_VARIANT, WORKFLOW_VARIANTS
from .errors import WorkflowError
from .state import Step


class StepName(str, Enum):
    INIT = "init"
    GENERATE_SCRIPT = "generateScript"
    EXTRACT_SCENES = "extractScenes"
    GENERATE_SETTINGS = "generateSettings"
    EXTRACT_SETTINGS = "extractSettings"
    EXTRACT_CHARACTERS = "extractCharacters"
    TRANSFORM_CHARACTERS = "transformCharacters"
    TRANSFORM_SCENES = "transformScenes"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional["StepName"]:
        """Resolve a step name, None when this worker does not know it"""
        try:
            return cls(name)
        except ValueError:
            return None


# Human-readable output persisted on a failed step
FAILURE_OUTPUTS = {
    StepName.INIT: "Failed to initialize workflow.",
    StepName.GENERATE_SCRIPT: "Failed to generate script.",
    StepName.EXTRACT_SCENES: "Failed to extract scenes.",
    StepName.GENERATE_SETTINGS: "Failed to generate settings.",
    StepName.EXTRACT_SETTINGS: "Failed to generate settings.",
    StepName.EXTRACT_CHARACTERS: "Failed to extract characters.",
    StepName.TRANSFORM_CHARACTERS: "Failed to transform characters.",
    StepName.TRANSFORM_SCENES: "Failed to transform scenes.",
}


@dataclass(frozen=True)
class WorkflowVariant:
    name: str
    label: str
    steps: Tuple[StepName, ...]
    requires_song_brief: bool
    rebalance_durations: bool


def get_workflow_variant(name: Optional[str] = None) -> WorkflowVariant:
    """Load a workflow variant from configuration"""
    name = name or WORKFLOW_VARIANT
    if name not in WORKFLOW_VARIANTS:
        raise WorkflowError(f"Unknown workflow variant: {name}. Must be one of {list(WORKFLOW_VARIANTS)}")

    definition = WORKFLOW_VARIANTS[name]
    try:
        steps = tuple(StepName(step_name) for step_name in definition["steps"])
    except ValueError as e:
        raise WorkflowError(f"Workflow variant '{name}' references an unknown step: {e}") from e
    if not steps or StepName.INIT in steps:
        raise WorkflowError(f"Workflow variant '{name}' must list the steps that follow init")

    return WorkflowVariant(
        name=name,
        label=definition.get("label", name),
        steps=steps,
        requires_song_brief=definition.get("requires_song_brief", False),
        rebalance_durations=definition.get("rebalance_durations", False),
    )


def generate_step_id() -> str:
    return f"step-{uuid.uuid4()}"


def build_workflow_steps(
    init_step: Step,
    variant: WorkflowVariant,
    id_factory: Callable[[], str] = generate_step_id,
) -> List[Dict]:
    """Build the linked step records that follow ``init_step``.

    The first record's predecessor is the init step; every other record points
    at the one before it, and only the final record is marked ``is_last``.
    """
    steps = []
    predecessor = init_step.step_id
    for index, step_name in enumerate(variant.steps):
        step_id = id_factory()
        steps.append({
            "step_id": step_id,
            "task_id": init_step.task_id,
            "predecessor": predecessor,
            "name": step_name.value,
            "is_last": index == len(variant.steps) - 1,
        })
        predecessor = step_id
    return steps
