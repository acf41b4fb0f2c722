"""
Shared utilities for step handlers
"""

import json
import random
import logging
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import ContentGenerationError
from ..core.workflow import WorkflowVariant

logger = logging.getLogger(__name__)


@dataclass
class StepContext:
    """Collaborators a step handler works with"""
    generator: Any  # ContentGenerator
    orchestration: Any  # OrchestrationClient
    variant: WorkflowVariant
    rng: random.Random = field(default_factory=random.Random)


def format_time(seconds: float) -> str:
    """Format time in seconds to minutes and seconds"""
    minutes = int(seconds // 60)
    remaining_seconds = seconds % 60
    if minutes > 0:
        return f"{minutes}m {remaining_seconds:.1f}s"
    else:
        return f"{remaining_seconds:.1f}s"


def clean_json_response(response_text: str) -> str:
    """
    Clean JSON response from markdown code blocks and extra trailing brackets.
    LLMs may wrap JSON in ```json...``` blocks which need to be stripped.
    Some models occasionally add extra closing brackets at the end.

    Args:
        response_text: Raw text that might contain markdown-wrapped JSON

    Returns:
        Clean JSON string ready for parsing
    """
    response_text = response_text.strip()
    if response_text.startswith("```json"):
        # Remove opening ```json and closing ```
        response_text = response_text[7:]
        if response_text.endswith("```"):
            response_text = response_text[:-3]
        response_text = response_text.strip()
    elif response_text.startswith("```"):
        response_text = response_text[3:]
        if response_text.endswith("```"):
            response_text = response_text[:-3]
        response_text = response_text.strip()

    # Remove extra trailing closing brackets, at most 3
    for opener, closer in (("{", "}"), ("[", "]")):
        removals = 0
        while removals < 3:
            if response_text.count(closer) <= response_text.count(opener):
                break
            if not response_text.rstrip().endswith(closer):
                break  # Extra closer is not at the end, don't touch it
            response_text = response_text.rstrip()[:-1]
            removals += 1

    return response_text.strip()


def parse_json_response(response_text: str) -> Any:
    """Parse an LLM text response as JSON"""
    cleaned = clean_json_response(response_text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"[JSON Parser] Could not parse response (first 400 chars): {cleaned[:400]}")
        raise ContentGenerationError(f"Response is not valid JSON: {e}") from e


def as_record_list(result: Any, label: str) -> list:
    """Normalize a JSON result into a list of records.

    Accepts a bare list, or an object wrapping exactly one list
    (e.g. {"scenes": [...]}).
    """
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        lists = [value for value in result.values() if isinstance(value, list)]
        if len(lists) == 1:
            return lists[0]
    raise ContentGenerationError(f"Expected a JSON array of {label}, got {type(result).__name__}")
