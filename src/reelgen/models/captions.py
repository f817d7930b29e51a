"""Caption configuration model."""

import re
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TRANSCRIPT_EFFECTS = ("karaoke", "highlight", "fade", "bounce", "slide", "enlarge")

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class CaptionPlacement(str, Enum):
    """Vertical position of captions on screen."""
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class CaptionConfig(BaseModel):
    """User-facing caption settings.

    Accepts the camelCase names sent by clients (``presetId``,
    ``transcriptColor``...) as well as the snake_case attribute names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabled: bool = Field(default=True, description="Render captions at all")
    preset_id: Optional[str] = Field(None, description="Named caption preset")
    placement: CaptionPlacement = Field(
        default=CaptionPlacement.BOTTOM, description="Caption position"
    )
    transcript_color: Optional[str] = Field(None, description="Highlight color override, #RRGGBB")
    transcript_effect: Optional[str] = Field(None, description="Transcript animation override")

    @field_validator("placement", mode="before")
    @classmethod
    def _middle_is_center(cls, value: Any) -> Any:
        if value is None:
            return CaptionPlacement.BOTTOM
        return "center" if value == "middle" else value

    @field_validator("transcript_color")
    @classmethod
    def _check_color(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _HEX_COLOR.match(value):
            raise ValueError(f"transcript color must be #RRGGBB, got {value!r}")
        return value

    @field_validator("transcript_effect")
    @classmethod
    def _check_effect(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in TRANSCRIPT_EFFECTS:
            raise ValueError(
                f"Unknown transcript effect: {value}. Available: {list(TRANSCRIPT_EFFECTS)}"
            )
        return value

    @classmethod
    def default(cls) -> "CaptionConfig":
        """Settings applied when a request carries no caption configuration."""
        return cls(
            enabled=True,
            preset_id="karaoke",
            placement=CaptionPlacement.BOTTOM,
            transcript_color="#04f827",
            transcript_effect="karaoke",
        )
