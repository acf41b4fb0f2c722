"""Scene extraction prompt"""

SCENE_EXTRACTION_PROMPT_TEMPLATE = {
    "template": """Extract the technical scene details from the script below as a JSON array, one object per scene in script order, with these fields:
- sceneNumber (1, 2, 3... contiguous, matching the script order)
- startTime (MM:SS)
- endTime (MM:SS)
- duration (seconds, exactly 5 or 10)
- shotType (include both vertical/horizontal framing)
- cameraMovement
- cameraEquipment (specific model references)
- lightingSetup (type + color temperature + position)
- colorPalette (main + accent colors)
- visualReferences (2-3 comparable films or scenes)
- characterActions (timing linked to the music, using the character names from the script)
- transitionType
- specialNotes (equipment needs, safety considerations)

Scenes run back to back: each startTime is the previous endTime. The total of all durations should be close to {duration} seconds.

Example:
{{
  "sceneNumber": 1,
  "startTime": "00:00",
  "endTime": "00:10",
  "duration": 10,
  "shotType": "Medium close-up/wide",
  "cameraMovement": "Slow dolly zoom",
  "cameraEquipment": "Sony FE 24-70mm f/2.8 GM II on Ronin 4D",
  "lightingSetup": "Softbox key light (5600K) at 45 degrees, LED fill (3200K)",
  "colorPalette": "Desaturated teal base with neon pink accents",
  "visualReferences": ["Blade Runner 2049 rainy scenes", "Euphoria club lighting"],
  "characterActions": "Mara spins the mic stand on the drum hit at 00:06",
  "transitionType": "RGB split glitch transition",
  "specialNotes": "Needs rain machine and lens waterproofing"
}}

Script:
{script}

Return only a valid JSON array. Use double quotes.""",
    "schema": "scene_extraction"
}
