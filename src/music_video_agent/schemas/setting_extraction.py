"""Schema for settings extraction: distinct locations referenced by scenes."""

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "name": {"type": "STRING"},
            "description": {"type": "STRING"},
            "imagePrompt": {"type": "STRING"},
            "keyFeatures": {
                "type": "ARRAY",
                "items": {"type": "STRING"}
            }
        },
        "required": ["id", "name", "description", "imagePrompt", "keyFeatures"]
    }
}
