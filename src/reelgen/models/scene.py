"""Scene plan data model."""

from pathlib import Path
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
import yaml


class SceneVideoAsset(BaseModel):
    """The asset bound to a scene, optionally trimmed to a sub-segment."""

    id: str = Field(..., description="Asset identifier")
    url: str = Field(..., description="Asset URL as returned by the planner")
    title: str = Field(default="", description="Asset title")
    trim_start: Optional[str] = Field(None, description="Trim offset in seconds")
    trim_duration: Optional[str] = Field(None, description="Trim length in seconds")

    @field_validator("trim_start", "trim_duration", mode="before")
    @classmethod
    def _numbers_to_strings(cls, value: Any) -> Any:
        # Models return trims as numbers about as often as strings.
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return f"{value:g}"
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _trim_pairing(self) -> "SceneVideoAsset":
        if (self.trim_start is None) != (self.trim_duration is None):
            raise ValueError("trim_start and trim_duration must be given together")
        return self

    @property
    def is_trimmed(self) -> bool:
        return self.trim_start is not None and self.trim_duration is not None


class Scene(BaseModel):
    """One script segment bound to exactly one video asset."""

    scene_number: int = Field(..., description="1-based scene position")
    script_text: str = Field(..., description="Narration for this scene")
    video_asset: SceneVideoAsset = Field(..., description="Bound asset (never null)")
    reasoning: str = Field(default="", description="Why the asset was chosen")


class ScenePlan(BaseModel):
    """Ordered list of scenes produced before template expansion."""

    scenes: List[Scene] = Field(..., description="Scenes in narration order", min_length=1)

    @classmethod
    def from_yaml(cls, path: Path) -> "ScenePlan":
        """Load a plan from a YAML (or JSON) file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: Path) -> None:
        """Save the plan to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(exclude_none=True), f, default_flow_style=False, sort_keys=False)
