"""Event dispatch: routing, idempotency guard and failure containment"""

import asyncio
import json
import logging
import random

import pytest

from conftest import FakeContentGenerator, FakeOrchestrationClient

from music_video_agent.agents.creative import DummyContentGenerator
from music_video_agent.core.dispatcher import StepDispatcher, build_dispatcher, decode_event
from music_video_agent.core.state import StepResult, StepStatus
from music_video_agent.core.workflow import StepName, get_workflow_variant


def make_dispatcher(orchestration, generator=None, variant="music_video", **kwargs):
    return StepDispatcher(
        orchestration,
        generator or FakeContentGenerator(),
        get_workflow_variant(variant),
        random.Random(1),
        **kwargs,
    )


def dispatch(dispatcher, event):
    return asyncio.run(dispatcher.handle_event(event))


@pytest.mark.parametrize("raw", ["not json", b"\xff\xfe", '["step-1"]', "{}", {"step_id": ""}, None])
def test_malformed_events_are_dropped(raw):
    assert decode_event(raw) is None


def test_event_formats_are_accepted():
    assert decode_event('{"step_id": "a", "event_type": "step-updated"}') == "a"
    assert decode_event(b'{"step_id": "b"}') == "b"
    assert decode_event({"step_id": "c"}) == "c"


def test_malformed_event_touches_nothing(caplog):
    orchestration = FakeOrchestrationClient()

    with caplog.at_level(logging.ERROR):
        result = dispatch(make_dispatcher(orchestration), "{{{")

    assert result is None
    assert orchestration.updates == [] and orchestration.logs == []
    assert "Malformed event payload" in caplog.text


def test_missing_step_is_logged_not_raised():
    orchestration = FakeOrchestrationClient()

    assert dispatch(make_dispatcher(orchestration), {"step_id": "ghost"}) is None
    assert orchestration.updates == []


def test_unknown_step_name_is_ignored(make_step, caplog):
    step = make_step("renderVideo", step_id="step-x")
    orchestration = FakeOrchestrationClient(steps=[step])

    with caplog.at_level(logging.WARNING, logger="music_video_agent.core.dispatcher"):
        result = dispatch(make_dispatcher(orchestration), {"step_id": "step-x"})

    assert result is None
    assert orchestration.updates == []
    assert orchestration.steps["step-x"] == step
    assert "Unrecognized step name 'renderVideo'" in caplog.text


@pytest.mark.parametrize("status", ["Completed", "Failed", "In_Progress"])
def test_non_pending_steps_are_skipped(make_step, status):
    generator = FakeContentGenerator()
    orchestration = FakeOrchestrationClient(steps=[make_step("generateScript", step_id="s", step_status=status)])

    assert dispatch(make_dispatcher(orchestration, generator), {"step_id": "s"}) is None
    assert orchestration.updates == [] and orchestration.logs == []
    assert generator.calls == []


def test_success_writes_back_artifacts_and_logs(make_step, song_brief):
    orchestration = FakeOrchestrationClient(steps=[make_step("generateScript", [song_brief], step_id="s")])

    result = dispatch(make_dispatcher(orchestration), json.dumps({"step_id": "s"}))

    assert result.succeeded
    update = orchestration.updates[0]
    assert update["step_status"] == "Completed"
    assert update["output"] == "Script generation completed."
    assert update["output_artifacts"][0]["lyrics"] == song_brief["lyrics"]
    assert update["did"] == "did:nv:agent"
    assert orchestration.logs[0]["message"] == "Processing step: generateScript"
    assert orchestration.logs[-1] == {"task_id": "task-1", "level": "info", "message": "Script generation completed."}


def test_generator_failure_marks_step_failed(make_step):
    artifact = [{"script": "S", "lyrics": "L", "tags": []}]
    orchestration = FakeOrchestrationClient(steps=[make_step("extractScenes", artifact, step_id="s")])

    result = dispatch(make_dispatcher(orchestration, FakeContentGenerator(fail="extract_scenes")), {"step_id": "s"})

    assert result.status == StepStatus.FAILED
    update = orchestration.updates[0]
    assert update["step_status"] == "Failed"
    assert update["output"] == "Failed to extract scenes."
    assert "output_artifacts" not in update
    assert orchestration.logs[-1]["task_status"] == "Failed"
    assert orchestration.logs[-1]["level"] == "error"


@pytest.mark.parametrize("name, operation, variant, output", [
    ("generateScript", "generate_script", "music_video", "Failed to generate script."),
    ("extractSettings", "extract_settings", "story", "Failed to generate settings."),
    ("extractCharacters", "extract_characters", "music_video", "Failed to extract characters."),
    ("transformCharacters", "transform_characters", "story", "Failed to transform characters."),
])
def test_every_generator_failure_is_contained(make_step, song_brief, characters_artifact,
                                              name, operation, variant, output):
    artifact = [dict(song_brief, script="S", scenes=[], settings=[])]
    if operation == "transform_characters":
        artifact = characters_artifact
    orchestration = FakeOrchestrationClient(steps=[make_step(name, artifact, step_id="s", input_query="an idea")])
    generator = FakeContentGenerator(fail=operation)

    result = dispatch(make_dispatcher(orchestration, generator, variant=variant), {"step_id": "s"})

    assert generator.calls[-1][0] == operation
    assert result.status == StepStatus.FAILED
    assert f"{operation} exploded" in result.error
    update = orchestration.updates[0]
    assert update["step_status"] == "Failed"
    assert update["output"] == output
    assert orchestration.logs[-1]["task_status"] == "Failed"


def test_raising_handler_is_contained(make_step):
    async def explode(step, ctx):
        raise KeyError("boom")

    orchestration = FakeOrchestrationClient(steps=[make_step("extractScenes", step_id="s")])
    dispatcher = make_dispatcher(orchestration, handlers={StepName.EXTRACT_SCENES: explode})

    result = dispatch(dispatcher, {"step_id": "s"})

    assert result.status == StepStatus.FAILED
    assert orchestration.updates[0]["output"] == "Failed to extract scenes."


def test_unserializable_output_is_not_persisted(make_step):
    async def leaky(step, ctx):
        return StepResult.completed("done", artifacts={"handle": object()})

    orchestration = FakeOrchestrationClient(steps=[make_step("generateScript", step_id="s")])
    dispatcher = make_dispatcher(orchestration, handlers={StepName.GENERATE_SCRIPT: leaky})

    result = dispatch(dispatcher, {"step_id": "s"})

    assert result.status == StepStatus.FAILED
    assert orchestration.updates[0]["step_status"] == "Failed"
    assert orchestration.updates[0]["output"] == "Failed to generate script."


def test_write_back_and_log_failures_do_not_escape(make_step, song_brief):
    orchestration = FakeOrchestrationClient(
        steps=[make_step("generateScript", [song_brief], step_id="s")],
        fail_updates=True,
        fail_logs=True,
    )

    result = dispatch(make_dispatcher(orchestration), {"step_id": "s"})

    assert result.succeeded
    assert orchestration.updates == []


def test_last_step_completes_the_task(make_step, characters_artifact):
    orchestration = FakeOrchestrationClient(steps=[make_step("transformScenes", characters_artifact, step_id="s", is_last=True)])

    result = dispatch(make_dispatcher(orchestration), {"step_id": "s"})

    assert result.succeeded
    final = orchestration.updates[0]["output_artifacts"][0]
    assert len(final["transformedScenes"]) == len(final["scenes"]) == 5
    assert orchestration.logs[-1]["task_status"] == "Completed"


def test_build_dispatcher_uses_canned_content_in_dummy_mode():
    dispatcher = build_dispatcher(FakeOrchestrationClient(), dummy=True, variant_name="story")

    assert isinstance(dispatcher.generator, DummyContentGenerator)
    assert dispatcher.variant.name == "story"


@pytest.mark.parametrize("variant", ["music_video", "story"])
def test_dummy_pipeline_runs_end_to_end(variant, song_brief):
    init = {
        "step_id": "step-init", "task_id": "task-1", "did": "did:nv:agent", "name": "init",
        "step_status": "Pending", "input_query": "Two strangers on a rooftop",
        "input_artifacts": json.dumps([song_brief]),
    }
    orchestration = FakeOrchestrationClient(steps=[init])
    dispatcher = build_dispatcher(orchestration, dummy=True, variant_name=variant, rng=random.Random(3))

    assert dispatch(dispatcher, {"step_id": "step-init"}).succeeded

    # Play the orchestrator: hand each step its predecessor's output
    previous = orchestration.steps["step-init"]
    for record in orchestration.created[0]["steps"]:
        step = dict(
            record,
            did="did:nv:agent",
            step_status="Pending",
            input_query=previous["output"],
            input_artifacts=json.dumps(previous["output_artifacts"]),
        )
        orchestration.steps[step["step_id"]] = step
        result = dispatch(dispatcher, {"step_id": step["step_id"]})
        assert result.succeeded, result.error
        previous = orchestration.steps[step["step_id"]]

    final = previous["output_artifacts"][0]
    assert len(final["transformedScenes"]) == len(final["scenes"])
    assert {name for p in final["transformedScenes"] for name in p["charactersInScene"]} <= {"Maya", "Leo"}
    if variant == "music_video":
        assert 30 <= sum(p["duration"] for p in final["transformedScenes"]) <= 35
    else:
        assert all(c.get("imagePrompt") for c in final["characters"])
    assert orchestration.logs[-1]["task_status"] == "Completed"
