"""Schema for scene transformation: one production prompt per scene."""

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "sceneNumber": {"type": "INTEGER"},
            "prompt": {"type": "STRING"},
            "charactersInScene": {
                "type": "ARRAY",
                "items": {"type": "STRING"}
            },
            "settingId": {"type": "STRING"},
            "duration": {"type": "INTEGER"}
        },
        "required": ["sceneNumber", "prompt", "charactersInScene", "settingId"]
    }
}
