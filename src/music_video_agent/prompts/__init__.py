"""Prompt templates for the content generation chains

Templates are dicts with the prompt text and the name of the response
schema the LLM output is constrained to.
"""

from .script import SCRIPT_PROMPT_TEMPLATE, STORY_SCRIPT_PROMPT_TEMPLATE
from .scenes import SCENE_EXTRACTION_PROMPT_TEMPLATE
from .settings import SETTING_EXTRACTION_PROMPT_TEMPLATE
from .characters import CHARACTER_EXTRACTION_PROMPT_TEMPLATE, CHARACTER_TRANSFORMATION_PROMPT_TEMPLATE
from .transform import SCENE_TRANSFORMATION_PROMPT_TEMPLATE

__all__ = [
    'SCRIPT_PROMPT_TEMPLATE',
    'STORY_SCRIPT_PROMPT_TEMPLATE',
    'SCENE_EXTRACTION_PROMPT_TEMPLATE',
    'SETTING_EXTRACTION_PROMPT_TEMPLATE',
    'CHARACTER_EXTRACTION_PROMPT_TEMPLATE',
    'CHARACTER_TRANSFORMATION_PROMPT_TEMPLATE',
    'SCENE_TRANSFORMATION_PROMPT_TEMPLATE',
]
