"""
Creative agents: content generation steps and the generator clients they use
"""

from .agent_script import generate_script_step
from .agent_scenes import extract_scenes_step
from .agent_settings import generate_settings_step
from .agent_character import extract_characters_step, transform_characters_step
from .agent_transform import transform_scenes_step
from .client_content import ContentGenerator, LLMContentGenerator
from .client_dummy import DummyContentGenerator, build_content_generator

__all__ = [
    'generate_script_step',
    'extract_scenes_step',
    'generate_settings_step',
    'extract_characters_step',
    'transform_characters_step',
    'transform_scenes_step',
    'ContentGenerator',
    'LLMContentGenerator',
    'DummyContentGenerator',
    'build_content_generator',
]
