"""Typed artifacts handed from one step to its successor

Each artifact extends the previous one, so the context accumulated by earlier
steps (lyrics, tags, target duration) is carried forward as typed fields.
Wire names are camelCase, Python attributes snake_case.
"""

import json
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import SCENE_DURATIONS
from .errors import ArtifactError

ArtifactT = TypeVar("ArtifactT", bound=BaseModel)


def snap_duration(value: Any) -> int:
    """Snap a duration in seconds to the nearest allowed clip length"""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid duration: {value!r}")
    return min(SCENE_DURATIONS, key=lambda allowed: abs(allowed - seconds))


def split_tags(value: Any) -> Any:
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return value


class ArtifactModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def carry(self, **fields) -> dict:
        """Everything accumulated so far plus ``fields``, ready for the next artifact"""
        data = self.model_dump(exclude_none=True)
        data.update(fields)
        return data


# ==== Production records ====

class Scene(ArtifactModel):
    scene_number: int = Field(alias="sceneNumber")
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    duration: int
    shot_type: Optional[str] = Field(None, alias="shotType")
    camera_movement: Optional[str] = Field(None, alias="cameraMovement")
    camera_equipment: Optional[str] = Field(None, alias="cameraEquipment")
    lighting_setup: Optional[str] = Field(None, alias="lightingSetup")
    color_palette: Optional[str] = Field(None, alias="colorPalette")
    visual_references: List[str] = Field(default_factory=list, alias="visualReferences")
    character_actions: Optional[str] = Field(None, alias="characterActions")
    transition_type: Optional[str] = Field(None, alias="transitionType")
    special_notes: Optional[str] = Field(None, alias="specialNotes")

    @field_validator("duration", mode="before")
    @classmethod
    def _snap_duration(cls, value):
        return snap_duration(value)

    @field_validator("visual_references", mode="before")
    @classmethod
    def _wrap_reference(cls, value):
        if isinstance(value, str):
            return [value]
        return value


class Setting(ArtifactModel):
    id: str
    name: str
    description: Optional[str] = None
    image_prompt: Optional[str] = Field(None, alias="imagePrompt")
    key_features: List[str] = Field(default_factory=list, alias="keyFeatures")


class Character(ArtifactModel):
    name: str  # must match the script text exactly
    age_range: Optional[str] = Field(None, alias="ageRange")
    gender: Optional[str] = None
    height_build: Optional[str] = Field(None, alias="heightBuild")
    distinctive_features: Optional[str] = Field(None, alias="distinctiveFeatures")
    wardrobe_details: Optional[str] = Field(None, alias="wardrobeDetails")
    movement_style: Optional[str] = Field(None, alias="movementStyle")
    key_accessories: Optional[str] = Field(None, alias="keyAccessories")
    scene_specific_changes: Optional[str] = Field(None, alias="sceneSpecificChanges")
    image_prompt: Optional[str] = Field(None, alias="imagePrompt")


class ProductionPrompt(ArtifactModel):
    scene_number: Optional[int] = Field(None, alias="sceneNumber")
    prompt: str
    characters_in_scene: List[str] = Field(default_factory=list, alias="charactersInScene")
    setting_id: Optional[str] = Field(None, alias="settingId")
    duration: Optional[int] = None

    @field_validator("duration", mode="before")
    @classmethod
    def _snap_duration(cls, value):
        if value is None:
            return None
        return snap_duration(value)


# ==== Step-to-step artifacts ====

class SongBrief(ArtifactModel):
    """Song metadata the music video script is written from"""
    title: str
    tags: List[str]
    lyrics: str
    idea: str
    duration: int  # target video length in seconds

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        return split_tags(value)

    @field_validator("title", "lyrics", "idea")
    @classmethod
    def _required_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Missing required song metadata")
        return value

    @field_validator("tags")
    @classmethod
    def _required_tags(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("Missing required song metadata")
        return value

    @field_validator("duration")
    @classmethod
    def _positive_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Missing required song metadata")
        return value


class ScriptArtifact(ArtifactModel):
    script: str
    lyrics: str
    tags: List[str]
    duration: Optional[int] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        return split_tags(value)


class ScenesArtifact(ScriptArtifact):
    scenes: List[Scene]


class SettingsArtifact(ScenesArtifact):
    settings: List[Setting]


class CharactersArtifact(SettingsArtifact):
    characters: List[Character]


class ProductionArtifact(ArtifactModel):
    """Terminal output of the pipeline"""
    transformed_scenes: List[ProductionPrompt] = Field(alias="transformedScenes")
    settings: List[Setting]
    characters: List[Character]
    script: str
    scenes: List[Scene]
    duration: Optional[int] = None


# ==== (De)serialization boundaries ====

def parse_artifact(raw: Any, model: Type[ArtifactT]) -> ArtifactT:
    """Decode a step's input artifacts into ``model``.

    Accepts the JSON string stored by the orchestrator or an already decoded
    value, and unwraps the single-element list artifacts travel in.
    """
    if raw is None or raw == "":
        raise ArtifactError("Missing input artifacts")

    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ArtifactError(f"Input artifacts are not valid JSON: {e}") from e
    else:
        data = raw

    if isinstance(data, list):
        if not data:
            raise ArtifactError("Input artifacts are empty")
        data = data[0]

    if not isinstance(data, dict):
        raise ArtifactError(f"Expected an artifact object, got {type(data).__name__}")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ArtifactError(f"Invalid {model.__name__}: {e}") from e


def decode_artifacts(raw: Any) -> Optional[list]:
    """Decode input artifacts without validating their shape"""
    if raw is None or raw == "":
        return None
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ArtifactError(f"Input artifacts are not valid JSON: {e}") from e
    else:
        data = raw
    return data if isinstance(data, list) else [data]


def dump_artifact(artifact: Any) -> Optional[list]:
    """Serialize an artifact into the list form stored as output_artifacts"""
    if artifact is None:
        return None

    try:
        if isinstance(artifact, BaseModel):
            payload = artifact.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            payload = artifact
        items = payload if isinstance(payload, list) else [payload]
        json.dumps(items)
    except (TypeError, ValueError) as e:
        raise ArtifactError(f"Output artifacts are not JSON-serializable: {e}") from e

    return items
