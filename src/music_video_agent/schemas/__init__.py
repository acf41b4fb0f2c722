"""
Schema registry for structured output.
Gemini response schemas for the JSON-producing content steps.
"""

import importlib
from typing import Dict, Any


# Available schemas
AVAILABLE_SCHEMAS = [
    "scene_extraction",
    "setting_extraction",
    "character_extraction",
    "character_transformation",
    "scene_transformation",
]


def get_schema(schema_name: str) -> Dict[str, Any]:
    """
    Load the Gemini response schema for a content step.

    Args:
        schema_name: Name of the schema module (e.g., "scene_extraction")

    Returns:
        Schema dictionary for Gemini structured output

    Raises:
        ValueError: If schema_name is not a known schema
    """
    if schema_name not in AVAILABLE_SCHEMAS:
        raise ValueError(f"Invalid schema_name: {schema_name}. Must be one of {AVAILABLE_SCHEMAS}")

    module = importlib.import_module(f"{__name__}.{schema_name}")
    return module.GEMINI_SCHEMA
