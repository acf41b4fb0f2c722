"""Schema for character transformation: the same roster with image prompts filled in."""

from .character_extraction import CHARACTER_PROPERTIES

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": CHARACTER_PROPERTIES,
        "required": ["name", "imagePrompt"]
    }
}
