"""
Step handlers: one async function per workflow step
"""

from .base import StepContext
from .system import init_step
from .creative import (
    generate_script_step,
    extract_scenes_step,
    generate_settings_step,
    extract_characters_step,
    transform_characters_step,
    transform_scenes_step,
)

__all__ = [
    'StepContext',
    'init_step',
    'generate_script_step',
    'extract_scenes_step',
    'generate_settings_step',
    'extract_characters_step',
    'transform_characters_step',
    'transform_scenes_step',
]
