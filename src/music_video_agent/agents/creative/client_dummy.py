"""Canned content generator for running the worker without an LLM"""

import logging
from typing import List, Optional, Sequence, Union

from ...core.artifacts import Character, ProductionPrompt, Scene, Setting, SongBrief
from ...core.config import DEFAULT_VIDEO_DURATION
from ...core.rebalancer import LONG_CLIP, SHORT_CLIP
from .client_content import ContentGenerator, LLMContentGenerator

logger = logging.getLogger(__name__)

DUMMY_SETTINGS = [
    {
        "id": "rooftop",
        "name": "City Rooftop",
        "description": "A flat concrete rooftop above a dense downtown at dusk.",
        "imagePrompt": "Concrete rooftop at dusk, city skyline, warm sodium lights, light haze",
        "keyFeatures": ["water tower", "string lights", "skyline view"],
    },
    {
        "id": "subway",
        "name": "Night Subway Car",
        "description": "An almost empty subway car rattling through tunnels.",
        "imagePrompt": "Empty subway car at night, fluorescent light, reflections in dark windows",
        "keyFeatures": ["flickering lights", "plastic seats", "tunnel reflections"],
    },
]

DUMMY_CHARACTERS = [
    {
        "name": "Maya",
        "ageRange": "25-30",
        "gender": "female",
        "heightBuild": "tall, athletic",
        "distinctiveFeatures": "short silver hair",
        "wardrobeDetails": "oversized denim jacket over a red hoodie",
        "movementStyle": "restless, quick steps",
        "keyAccessories": "vintage headphones",
        "sceneSpecificChanges": "hood up in the subway scenes",
    },
    {
        "name": "Leo",
        "ageRange": "28-35",
        "gender": "male",
        "heightBuild": "medium, slim",
        "distinctiveFeatures": "freckles, round glasses",
        "wardrobeDetails": "black turtleneck, grey trousers",
        "movementStyle": "calm and deliberate",
        "keyAccessories": "film camera",
        "sceneSpecificChanges": "camera strap loosened on the rooftop",
    },
]

SHOT_TYPES = ["Wide shot", "Medium shot", "Close-up", "Tracking shot"]


class DummyContentGenerator(ContentGenerator):
    """Deterministic canned output shaped like the real generator's"""

    async def generate_script(self, params: Union[SongBrief, str]) -> str:
        if isinstance(params, SongBrief):
            heading = f"MUSIC VIDEO SCRIPT: {params.title} ({params.duration}s)"
            idea = params.idea
        else:
            heading = "SHORT FILM SCRIPT"
            idea = params
        return (
            f"{heading}\n\n"
            f"Concept: {idea}\n\n"
            "SCENE 1 - City Rooftop. Maya waits at the edge, headphones on.\n"
            "SCENE 2 - Night Subway Car. Leo photographs Maya through the window.\n"
            "SCENE 3 - City Rooftop. Maya and Leo watch the lights come on."
        )

    async def extract_scenes(self, script: str, duration: Optional[int] = None) -> List[Scene]:
        target = duration or DEFAULT_VIDEO_DURATION
        count = max(1, round(target / LONG_CLIP))
        return [
            Scene(
                sceneNumber=number,
                duration=LONG_CLIP if number % 2 else SHORT_CLIP,
                shotType=SHOT_TYPES[(number - 1) % len(SHOT_TYPES)],
                cameraMovement="Slow push in",
                lightingSetup="Practical lights with soft fill",
                colorPalette="Teal and amber",
                visualReferences=["In the Mood for Love", "Drive"],
                characterActions="Maya and Leo move through the night city",
                transitionType="Cut",
            )
            for number in range(1, count + 1)
        ]

    async def extract_settings(self, script: str) -> List[Setting]:
        return [Setting.model_validate(setting) for setting in DUMMY_SETTINGS]

    async def extract_characters(self, script: str, lyrics: str, tags: Sequence[str]) -> List[Character]:
        return [Character.model_validate(character) for character in DUMMY_CHARACTERS]

    async def transform_characters(self, characters: List[Character], script: str) -> List[Character]:
        return [
            character.model_copy(update={
                "image_prompt": f"Full body portrait of {character.name}, {character.wardrobe_details or 'casual clothes'}",
            })
            for character in characters
        ]

    async def transform_scenes(
        self,
        scenes: List[Scene],
        characters: List[Character],
        settings: List[Setting],
        script: str,
    ) -> List[ProductionPrompt]:
        names = [character.name for character in characters]
        prompts = []
        for index, scene in enumerate(scenes):
            setting = settings[index % len(settings)] if settings else None
            prompts.append(ProductionPrompt(
                sceneNumber=scene.scene_number,
                prompt=f"{scene.shot_type or 'Shot'} of {' and '.join(names) or 'the city'}"
                       f"{' at ' + setting.name if setting else ''}, {scene.color_palette or 'natural'} palette",
                charactersInScene=names,
                settingId=setting.id if setting else None,
                duration=scene.duration,
            ))
        return prompts


def build_content_generator(dummy: bool = False, **kwargs) -> ContentGenerator:
    """Create the content generator for this process"""
    if dummy:
        logger.info("[Content Generator] Dummy mode, returning canned content")
        return DummyContentGenerator()
    return LLMContentGenerator(**kwargs)
