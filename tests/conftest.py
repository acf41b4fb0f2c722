"""Shared fakes for the orchestration service and the content generator"""

import json
import random
from typing import Any, Dict, List, Optional

import pytest

from music_video_agent.agents.base import StepContext
from music_video_agent.agents.creative.client_content import ContentGenerator
from music_video_agent.core.artifacts import Character, ProductionPrompt, Scene, Setting
from music_video_agent.core.workflow import get_workflow_variant
from music_video_agent.orchestration.client import ApiResponse, OrchestrationClient


class FakeOrchestrationClient(OrchestrationClient):
    """In-memory step store recording every call"""

    def __init__(self, steps: Optional[List[Dict[str, Any]]] = None, create_status: int = 201,
                 fail_logs: bool = False, fail_updates: bool = False, fail_create: bool = False):
        self.steps = {step["step_id"]: dict(step) for step in steps or []}
        self.create_status = create_status
        self.fail_logs = fail_logs
        self.fail_updates = fail_updates
        self.fail_create = fail_create
        self.created: List[Dict[str, Any]] = []
        self.updates: List[Dict[str, Any]] = []
        self.logs: List[Dict[str, Any]] = []

    async def get_step(self, step_id: str) -> Dict[str, Any]:
        if step_id not in self.steps:
            raise KeyError(step_id)
        return dict(self.steps[step_id])

    async def create_steps(self, did: str, task_id: str, payload: Dict[str, Any]) -> ApiResponse:
        if self.fail_create:
            raise ConnectionError("orchestrator unavailable")
        self.created.append({"did": did, "task_id": task_id, **payload})
        return ApiResponse(self.create_status, {"steps": payload["steps"]})

    async def update_step(self, did: str, step: Dict[str, Any]) -> ApiResponse:
        if self.fail_updates:
            raise ConnectionError("orchestrator unavailable")
        json.dumps(step)  # what goes over the wire must be JSON
        self.updates.append(step)
        self.steps[step["step_id"]] = step
        return ApiResponse(200, step)

    async def log_task(self, entry: Dict[str, Any]):
        if self.fail_logs:
            raise ConnectionError("log endpoint unavailable")
        self.logs.append(entry)

    async def subscribe(self, handler, join_agent_rooms=None, subscribe_event_types=None,
                        get_pending_events_on_subscribe=False):
        pass


def make_scenes(durations: List[int]) -> List[Scene]:
    return [Scene(sceneNumber=number, duration=duration, shotType="Wide shot")
            for number, duration in enumerate(durations, start=1)]


class FakeContentGenerator(ContentGenerator):
    """Scripted generator; set ``fail`` to the operation name that should raise"""

    def __init__(self, scene_durations: Optional[List[int]] = None, fail: Optional[str] = None):
        self.scene_durations = scene_durations or [5, 10, 5]
        self.fail = fail
        self.prompt_overrides: Optional[List[ProductionPrompt]] = None
        self.calls: List[tuple] = []

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if self.fail == name:
            raise RuntimeError(f"{name} exploded")

    async def generate_script(self, params):
        self._record("generate_script", params)
        return "INT. ROOFTOP - NIGHT\nMaya sings to the skyline."

    async def extract_scenes(self, script, duration=None):
        self._record("extract_scenes", script, duration)
        return make_scenes(self.scene_durations)

    async def extract_settings(self, script):
        self._record("extract_settings", script)
        return [Setting(id="rooftop", name="Rooftop", keyFeatures=["skyline"])]

    async def extract_characters(self, script, lyrics, tags):
        self._record("extract_characters", script, lyrics, tags)
        return [Character(name="Maya"), Character(name="Leo")]

    async def transform_characters(self, characters, script):
        self._record("transform_characters", characters, script)
        return [character.model_copy(update={"image_prompt": f"Portrait of {character.name}"})
                for character in characters]

    async def transform_scenes(self, scenes, characters, settings, script):
        self._record("transform_scenes", scenes, characters, settings, script)
        if self.prompt_overrides is not None:
            return self.prompt_overrides
        return [
            ProductionPrompt(
                sceneNumber=scene.scene_number,
                prompt=f"Scene {scene.scene_number}",
                charactersInScene=["Maya"],
                settingId="rooftop",
                duration=scene.duration,
            )
            for scene in scenes
        ]


@pytest.fixture
def orchestration():
    return FakeOrchestrationClient()


@pytest.fixture
def generator():
    return FakeContentGenerator()


@pytest.fixture
def music_video_context(orchestration, generator):
    return StepContext(generator, orchestration, get_workflow_variant("music_video"), random.Random(7))


@pytest.fixture
def story_context(orchestration, generator):
    return StepContext(generator, orchestration, get_workflow_variant("story"), random.Random(7))


@pytest.fixture
def make_step():
    def _make_step(name: str, input_artifacts: Any = None, **fields) -> Dict[str, Any]:
        step = {
            "step_id": fields.pop("step_id", f"step-{name}"),
            "task_id": "task-1",
            "did": "did:nv:agent",
            "name": name,
            "step_status": "Pending",
            "is_last": False,
        }
        if input_artifacts is not None:
            step["input_artifacts"] = input_artifacts if isinstance(input_artifacts, str) else json.dumps(input_artifacts)
        step.update(fields)
        return step
    return _make_step


@pytest.fixture
def song_brief():
    return {
        "title": "Night Math",
        "tags": "synthpop, dreamy",
        "lyrics": "When the night feels endless and I'm wide awake",
        "idea": "Two strangers count the city lights from a rooftop",
        "duration": 30,
    }


@pytest.fixture
def characters_artifact():
    """Artifact as it arrives at the transformScenes step"""
    return [{
        "script": "INT. ROOFTOP - NIGHT",
        "lyrics": "la la",
        "tags": ["synthpop"],
        "duration": 30,
        "scenes": [{"sceneNumber": n, "duration": 5} for n in range(1, 6)],
        "settings": [{"id": "rooftop", "name": "Rooftop"}],
        "characters": [{"name": "Maya"}, {"name": "Leo"}],
    }]
