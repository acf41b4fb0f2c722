"""Character extraction and transformation prompts"""

CHARACTER_EXTRACTION_PROMPT_TEMPLATE = {
    "template": """Extract ALL characters from the music video script below with detailed physical descriptors. Use the song lyrics and tags for mood and style.

For each character include:
- name (exactly as written in the script, or "Unnamed [role]")
- ageRange
- gender
- heightBuild
- distinctiveFeatures (tattoos, scars, cybernetics)
- wardrobeDetails (include brand references if relevant)
- movementStyle
- keyAccessories
- sceneSpecificChanges (wardrobe or makeup evolution)
- imagePrompt (a self-contained prompt for a full-body reference image of the character)

Example:
{{
  "name": "Lead Singer",
  "ageRange": "25-30",
  "gender": "Androgynous",
  "heightBuild": "5'10\\", lean muscular",
  "distinctiveFeatures": "Glowing circuit tattoos on neck, cybernetic left eye",
  "wardrobeDetails": "Distressed leather jacket, chrome belt",
  "movementStyle": "Jagged, robotic gestures",
  "keyAccessories": "Neon microphone with smoke effects",
  "sceneSpecificChanges": "Jacket tears gradually throughout the video",
  "imagePrompt": "Full-body portrait of an androgynous singer in their late twenties..."
}}

Details of a character must not reference other characters, they are processed independently.

Tags: {tags}
Lyrics:
{lyrics}

Script:
{script}

Return only a valid JSON array. No markdown.""",
    "schema": "character_extraction"
}

CHARACTER_TRANSFORMATION_PROMPT_TEMPLATE = {
    "template": """For each character below write an imagePrompt: a self-contained prompt for a full-body reference image that states species, gender, age, height and build, physical features and attire. Keep every other field and the name exactly as given.

CHARACTER_DATA: {characters}
Script Context: {script}

Return the same JSON array of characters, in the same order, with imagePrompt filled in.""",
    "schema": "character_transformation"
}
