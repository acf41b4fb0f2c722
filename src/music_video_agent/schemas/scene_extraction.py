"""Schema for scene extraction: one object per timed scene."""

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "sceneNumber": {"type": "INTEGER"},
            "startTime": {"type": "STRING"},
            "endTime": {"type": "STRING"},
            "duration": {"type": "INTEGER"},
            "shotType": {"type": "STRING"},
            "cameraMovement": {"type": "STRING"},
            "cameraEquipment": {"type": "STRING"},
            "lightingSetup": {"type": "STRING"},
            "colorPalette": {"type": "STRING"},
            "visualReferences": {
                "type": "ARRAY",
                "items": {"type": "STRING"}
            },
            "characterActions": {"type": "STRING"},
            "transitionType": {"type": "STRING"},
            "specialNotes": {"type": "STRING"}
        },
        "required": ["sceneNumber", "startTime", "endTime", "duration", "shotType"]
    }
}
