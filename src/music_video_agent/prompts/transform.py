"""Scene transformation prompt"""

SCENE_TRANSFORMATION_PROMPT_TEMPLATE = {
    "template": """Transform the scene technical details into self-contained video production prompts, exactly one prompt per scene, in scene order.

Replace every character name with a full physical description using this format:
"[Gender] [Age] [Height] [Species] with [Physical Features], wearing [Attire]".

Example transformation:
Before: "Larry gestures wildly"
After: "A male humanoid AI in late 20s appearance, 6'1\\" with glowing blue circuit patterns under translucent synthetic skin, wearing a distressed leather jacket, gestures wildly"

Each prompt must include:
1. Shot composition details (framing, movement)
2. Camera specifications (lens, stabilizer)
3. Lighting setup (type, placement, color)
4. Color grading notes
5. Special effects requirements
6. Transition execution instructions
7. Character descriptions and actions

For each scene return an object with:
- sceneNumber (from SCENE_DATA)
- prompt
- charactersInScene (names from CHARACTER_DATA that appear in the scene, spelled exactly as in CHARACTER_DATA)
- settingId (the id from SETTING_DATA where the scene takes place)
- duration (from SCENE_DATA)

CHARACTER_DATA: {characters}
SETTING_DATA: {settings}
SCENE_DATA: {scenes}
Script Context: {script}

Return only a valid JSON array of objects. No explanations.""",
    "schema": "scene_transformation"
}
