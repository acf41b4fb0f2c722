"""LLM content generator chains, driven by fake LLMs"""

import asyncio
import json

import pytest
from langchain_core.language_models.fake import FakeListLLM
from langchain_core.runnables import RunnableLambda

from conftest import make_scenes

from music_video_agent.agents.creative.client_content import LLMContentGenerator, pair_prompts_with_scenes
from music_video_agent.core.artifacts import Character, Setting, SongBrief
from music_video_agent.core.errors import ContentGenerationError


def fake_llms(responses_by_schema):
    """LLM factory answering per response schema, like the real factory is called"""
    def factory(response_schema=None):
        return FakeListLLM(responses=responses_by_schema.get(response_schema, ["unused"]))
    return factory


def generator_with(responses_by_schema, **kwargs):
    return LLMContentGenerator(llm_factory=fake_llms(responses_by_schema), **kwargs)


def test_script_from_song_brief():
    generator = generator_with({None: ["  FADE IN: a rooftop at night.  "]})
    brief = SongBrief(title="Night Math", tags=["pop"], lyrics="la", idea="rooftop", duration=60)

    assert asyncio.run(generator.generate_script(brief)) == "FADE IN: a rooftop at night."


def test_empty_script_is_an_error():
    generator = generator_with({None: ["   "]})

    with pytest.raises(ContentGenerationError):
        asyncio.run(generator.generate_script("an idea"))


def test_scenes_are_parsed_from_fenced_wrapped_json():
    scenes = [{"sceneNumber": 1, "duration": 6, "shotType": "Wide"}, {"sceneNumber": 2, "duration": 10}]
    generator = generator_with({"scene_extraction": ["```json\n" + json.dumps({"scenes": scenes}) + "\n```"]})

    result = asyncio.run(generator.extract_scenes("script", 60))

    assert [scene.duration for scene in result] == [5, 10]
    assert result[0].shot_type == "Wide"


def test_non_json_scenes_are_an_error():
    generator = generator_with({"scene_extraction": ["I could not find any scenes."]})

    with pytest.raises(ContentGenerationError):
        asyncio.run(generator.extract_scenes("script"))


def test_invalid_records_are_an_error():
    generator = generator_with({"setting_extraction": [json.dumps([{"name": "No id"}])]})

    with pytest.raises(ContentGenerationError, match="settings"):
        asyncio.run(generator.extract_settings("script"))


def test_characters_and_their_transformation():
    generator = generator_with({
        "character_extraction": [json.dumps([{"name": "Maya", "ageRange": "25-30"}])],
        "character_transformation": [json.dumps([{"name": "Maya", "imagePrompt": "Full body portrait"}])],
    })

    characters = asyncio.run(generator.extract_characters("script", "lyrics", ["pop"]))
    transformed = asyncio.run(generator.transform_characters(characters, "script"))

    assert characters[0].age_range == "25-30"
    assert transformed[0].image_prompt == "Full body portrait"


def test_bare_string_prompts_are_paired_with_scenes():
    generator = generator_with({"scene_transformation": [json.dumps(["first prompt", "second prompt"])]})
    scenes = make_scenes([10, 5])

    prompts = asyncio.run(generator.transform_scenes(scenes, [Character(name="Maya")], [Setting(id="a", name="A")], "s"))

    assert [(p.scene_number, p.prompt, p.duration) for p in prompts] == [(1, "first prompt", 10), (2, "second prompt", 5)]


def test_pairing_keeps_values_the_model_provided():
    paired = pair_prompts_with_scenes([{"prompt": "p", "sceneNumber": 7, "duration": 10}, "extra"], make_scenes([5]))

    assert paired == [{"prompt": "p", "sceneNumber": 7, "duration": 10}, {"prompt": "extra"}]


def test_slow_generation_times_out():
    async def slow(prompt):
        await asyncio.sleep(1)
        return "[]"

    generator = LLMContentGenerator(llm_factory=lambda response_schema=None: RunnableLambda(slow), timeout=0.05)

    with pytest.raises(ContentGenerationError, match="timed out"):
        asyncio.run(generator.extract_settings("script"))
