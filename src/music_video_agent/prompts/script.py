"""Script generation prompts"""

# Music video script from song metadata
SCRIPT_PROMPT_TEMPLATE = {
    "template": """You are a professional music video director. Write a technical shooting script for a music video of {duration} seconds for the song below.

SONG
Title: {title}
Tags: {tags}
Idea: {idea}
Lyrics:
{lyrics}

The script must include:
1. Scene breakdown with exact timings in seconds. Every scene lasts exactly 5 or 10 seconds and the scenes together cover the whole song.
2. Shot types (close-up, wide, etc.) and camera movements
3. Color palette and lighting for each scene
4. Equipment suggestions (lenses, stabilizers)
5. Visual references (cinematic comparisons)
6. Transition types between scenes
7. Character actions synchronized with the music and lyrics

Give every character a name and use exactly the same name every time the character appears.

Follow this structure for every scene:
SCENE [N] - [DURATION]
SHOT TYPE | CAMERA MOVEMENT | LOCATION
AESTHETIC: [description]
CHARACTER ACTIONS: [specific movements]
TRANSITION: [type]

Script:""",
    "schema": None
}

# Short film script from a free-text idea
STORY_SCRIPT_PROMPT_TEMPLATE = {
    "template": """You are a professional scriptwriter. Based on the following idea, write a complete script for a short film or music video.

Include the list of characters with detailed visual descriptions: species, race, height, age, gender, clothing and psychological traits. Describe every character, including minor or unnamed ones, and use the same name for a character throughout.
Describe the setting, mood and any other details needed to stage each scene. Split the story into numbered scenes of 5 or 10 seconds each.
If the idea is short or unclear, expand on it to create a complete script.

Idea:
{idea}

Script:""",
    "schema": None
}
