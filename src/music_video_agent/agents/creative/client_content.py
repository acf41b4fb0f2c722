"""Content generator: LangChain chains over Gemini for every content step"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, Union

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import RunnableLambda
from pydantic import BaseModel, ValidationError

from ...core.artifacts import Character, ProductionPrompt, Scene, Setting, SongBrief
from ...core.config import CONTENT_TIMEOUT, DEFAULT_VIDEO_DURATION
from ...core.errors import ContentGenerationError
from ...core.llm import get_llm
from ...prompts import (
    SCRIPT_PROMPT_TEMPLATE,
    STORY_SCRIPT_PROMPT_TEMPLATE,
    SCENE_EXTRACTION_PROMPT_TEMPLATE,
    SETTING_EXTRACTION_PROMPT_TEMPLATE,
    CHARACTER_EXTRACTION_PROMPT_TEMPLATE,
    CHARACTER_TRANSFORMATION_PROMPT_TEMPLATE,
    SCENE_TRANSFORMATION_PROMPT_TEMPLATE,
)
from ..base import as_record_list, parse_json_response

logger = logging.getLogger(__name__)


class ContentGenerator(ABC):
    """Text and JSON generation the step handlers delegate to.

    Every operation is a possibly slow remote call and may raise.
    """

    @abstractmethod
    async def generate_script(self, params: Union[SongBrief, str]) -> str:
        """Write a script from song metadata or a bare idea"""

    @abstractmethod
    async def extract_scenes(self, script: str, duration: Optional[int] = None) -> List[Scene]:
        """Break a script into timed scenes"""

    @abstractmethod
    async def extract_settings(self, script: str) -> List[Setting]:
        """List the distinct locations of a script"""

    @abstractmethod
    async def extract_characters(self, script: str, lyrics: str, tags: Sequence[str]) -> List[Character]:
        """Describe every character appearing in a script"""

    @abstractmethod
    async def transform_characters(self, characters: List[Character], script: str) -> List[Character]:
        """Fill in image prompts for a character roster"""

    @abstractmethod
    async def transform_scenes(
        self,
        scenes: List[Scene],
        characters: List[Character],
        settings: List[Setting],
        script: str,
    ) -> List[ProductionPrompt]:
        """Turn scenes into self-contained generation prompts, one per scene"""


def to_prompt_json(records: Sequence[BaseModel]) -> str:
    return json.dumps([record.model_dump(by_alias=True, exclude_none=True) for record in records])


def validate_records(records: list, model: Type[BaseModel], label: str) -> list:
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as e:
        raise ContentGenerationError(f"Invalid {label} returned by generator: {e}") from e


def pair_prompts_with_scenes(records: list, scenes: Sequence[Scene]) -> List[Dict[str, Any]]:
    """Align transform output with scenes by position.

    Bare strings become prompt records; scene number and duration are taken
    from the scene at the same position when the record does not carry them.
    """
    paired = []
    for index, record in enumerate(records):
        if isinstance(record, str):
            record = {"prompt": record}
        elif isinstance(record, dict):
            record = dict(record)
        else:
            raise ContentGenerationError(f"Unexpected production prompt: {record!r}")

        if index < len(scenes):
            scene = scenes[index]
            if record.get("sceneNumber") is None:
                record["sceneNumber"] = scene.scene_number
            if record.get("duration") is None:
                record["duration"] = scene.duration
        paired.append(record)
    return paired


class LLMContentGenerator(ContentGenerator):
    """Content generation with one LangChain runnable chain per operation"""

    def __init__(self, llm_factory: Callable[..., Any] = get_llm, timeout: Optional[float] = CONTENT_TIMEOUT):
        self.timeout = timeout
        self.script_chain = self._build_chain(SCRIPT_PROMPT_TEMPLATE, llm_factory)
        self.story_script_chain = self._build_chain(STORY_SCRIPT_PROMPT_TEMPLATE, llm_factory)
        self.scene_chain = self._build_chain(SCENE_EXTRACTION_PROMPT_TEMPLATE, llm_factory)
        self.setting_chain = self._build_chain(SETTING_EXTRACTION_PROMPT_TEMPLATE, llm_factory)
        self.character_chain = self._build_chain(CHARACTER_EXTRACTION_PROMPT_TEMPLATE, llm_factory)
        self.character_transformation_chain = self._build_chain(CHARACTER_TRANSFORMATION_PROMPT_TEMPLATE, llm_factory)
        self.scene_transformation_chain = self._build_chain(SCENE_TRANSFORMATION_PROMPT_TEMPLATE, llm_factory)

    @staticmethod
    def _build_chain(prompt_config: Dict[str, Any], llm_factory: Callable[..., Any]):
        """prompt | llm | text, plus JSON parsing when the template declares a schema"""
        schema_name = prompt_config.get("schema")
        llm = llm_factory(response_schema=schema_name)
        chain = PromptTemplate.from_template(prompt_config["template"]) | llm | StrOutputParser()
        if schema_name:
            chain = chain | RunnableLambda(parse_json_response)
        return chain

    async def _invoke(self, chain, inputs: Dict[str, Any], label: str) -> Any:
        logger.info(f"[Content Generator] Running {label}")
        try:
            if self.timeout:
                return await asyncio.wait_for(chain.ainvoke(inputs), timeout=self.timeout)
            return await chain.ainvoke(inputs)
        except asyncio.TimeoutError as e:
            raise ContentGenerationError(f"{label} timed out after {self.timeout}s") from e

    async def generate_script(self, params: Union[SongBrief, str]) -> str:
        if isinstance(params, SongBrief):
            script = await self._invoke(self.script_chain, {
                "title": params.title,
                "tags": ", ".join(params.tags),
                "lyrics": params.lyrics,
                "idea": params.idea,
                "duration": params.duration,
            }, "script generation")
        else:
            script = await self._invoke(self.story_script_chain, {"idea": params}, "script generation")

        script = script.strip()
        if not script:
            raise ContentGenerationError("Generated script is empty")
        return script

    async def extract_scenes(self, script: str, duration: Optional[int] = None) -> List[Scene]:
        result = await self._invoke(self.scene_chain, {
            "script": script,
            "duration": duration or DEFAULT_VIDEO_DURATION,
        }, "scene extraction")
        return validate_records(as_record_list(result, "scenes"), Scene, "scenes")

    async def extract_settings(self, script: str) -> List[Setting]:
        result = await self._invoke(self.setting_chain, {"script": script}, "settings extraction")
        return validate_records(as_record_list(result, "settings"), Setting, "settings")

    async def extract_characters(self, script: str, lyrics: str, tags: Sequence[str]) -> List[Character]:
        result = await self._invoke(self.character_chain, {
            "script": script,
            "lyrics": lyrics,
            "tags": ", ".join(tags),
        }, "character extraction")
        return validate_records(as_record_list(result, "characters"), Character, "characters")

    async def transform_characters(self, characters: List[Character], script: str) -> List[Character]:
        result = await self._invoke(self.character_transformation_chain, {
            "characters": to_prompt_json(characters),
            "script": script,
        }, "character transformation")
        return validate_records(as_record_list(result, "characters"), Character, "characters")

    async def transform_scenes(
        self,
        scenes: List[Scene],
        characters: List[Character],
        settings: List[Setting],
        script: str,
    ) -> List[ProductionPrompt]:
        result = await self._invoke(self.scene_transformation_chain, {
            "scenes": to_prompt_json(scenes),
            "characters": to_prompt_json(characters),
            "settings": to_prompt_json(settings),
            "script": script,
        }, "scene transformation")
        records = pair_prompts_with_scenes(as_record_list(result, "production prompts"), scenes)
        return validate_records(records, ProductionPrompt, "production prompts")
