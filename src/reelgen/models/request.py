"""Template generation request model."""

from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
import yaml

from ..config import config
from .asset import VideoAsset
from .captions import CaptionConfig

MAX_ASSETS = 10


class EditorialProfile(BaseModel):
    """Creator persona used to flavor the generated template."""

    persona_description: str = Field(default="", description="Who is speaking")
    tone_of_voice: str = Field(default="", description="How it should sound")
    audience: str = Field(default="", description="Who it is for")
    style_notes: str = Field(default="", description="Free-form style guidance")
    examples: Optional[str] = Field(None, description="Example scripts or videos")


class TemplateRequest(BaseModel):
    """Everything one template generation needs."""

    script: str = Field(..., description="Voice-over script")
    assets: List[VideoAsset] = Field(..., description="Candidate video clips")
    voice_id: str = Field(
        default_factory=lambda: config.default_voice_id,
        description="Voice used for every narration element"
    )
    caption_config: Optional[CaptionConfig] = Field(None, description="Caption settings")
    editorial_profile: Optional[EditorialProfile] = Field(None, description="Creator persona")
    system_prompt: Optional[str] = Field(None, description="Overrides the template builder's system prompt")

    @field_validator("script")
    @classmethod
    def _script_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("script cannot be empty")
        return value.strip()

    @field_validator("voice_id", mode="before")
    @classmethod
    def _default_voice(cls, value: Optional[str]) -> str:
        return value or config.default_voice_id

    @field_validator("assets")
    @classmethod
    def _check_assets(cls, value: List[VideoAsset]) -> List[VideoAsset]:
        if not value:
            raise ValueError("at least one video asset is required")
        if len(value) > MAX_ASSETS:
            raise ValueError(f"at most {MAX_ASSETS} video assets are allowed, got {len(value)}")
        missing = [a.id for a in value if not a.upload_url.strip()]
        if missing:
            raise ValueError(f"assets without an upload URL: {', '.join(missing)}")
        return value

    @model_validator(mode="after")
    def _unique_asset_ids(self) -> "TemplateRequest":
        ids = [a.id for a in self.assets]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate asset ids: {', '.join(duplicates)}")
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "TemplateRequest":
        """Load a request from a YAML (or JSON) file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))
