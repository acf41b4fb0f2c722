"""Schema for character extraction."""

CHARACTER_PROPERTIES = {
    "name": {"type": "STRING"},
    "ageRange": {"type": "STRING"},
    "gender": {"type": "STRING"},
    "heightBuild": {"type": "STRING"},
    "distinctiveFeatures": {"type": "STRING"},
    "wardrobeDetails": {"type": "STRING"},
    "movementStyle": {"type": "STRING"},
    "keyAccessories": {"type": "STRING"},
    "sceneSpecificChanges": {"type": "STRING"},
    "imagePrompt": {"type": "STRING"}
}

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": CHARACTER_PROPERTIES,
        "required": ["name", "imagePrompt"]
    }
}
