"""Video asset data model."""

import re
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_TIMECODE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})$")


def parse_timecode(value: str) -> float:
    """Convert an ``MM:SS`` (or ``H:MM:SS``) string to seconds."""
    match = _TIMECODE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time code: {value!r} (expected MM:SS)")
    hours, minutes, seconds = match.groups()
    if int(seconds) >= 60:
        raise ValueError(f"Invalid time code: {value!r} (seconds must be < 60)")
    return int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)


class Segment(BaseModel):
    """A time-coded section of an analyzed video."""

    start_time: str = Field(..., description="Segment start, MM:SS")
    end_time: str = Field(..., description="Segment end, MM:SS")
    description: str = Field(default="", description="What happens in the segment")
    key_points: List[str] = Field(default_factory=list, description="Notable moments")

    model_config = ConfigDict(frozen=True)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_timecode(cls, value: str) -> str:
        parse_timecode(value)
        return value

    @property
    def start_seconds(self) -> float:
        return parse_timecode(self.start_time)

    @property
    def end_seconds(self) -> float:
        return parse_timecode(self.end_time)

    @property
    def duration_seconds(self) -> float:
        """Length of the segment, ``end_time - start_time``."""
        return self.end_seconds - self.start_seconds


class AnalysisData(BaseModel):
    """Analysis output attached to a video asset."""

    segments: List[Segment] = Field(default_factory=list, description="Ordered segments")

    model_config = ConfigDict(frozen=True, extra="allow")


class VideoAsset(BaseModel):
    """Read-only view of a user's uploaded video clip."""

    id: str = Field(..., description="Asset identifier")
    upload_url: str = Field(..., description="Playable URL of the clip")
    title: str = Field(default="", description="Asset title")
    description: str = Field(default="", description="Asset description")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    user_id: Optional[str] = Field(None, description="Owner of the asset")
    duration_seconds: Optional[float] = Field(None, description="Full clip length, if known")
    analysis_data: Optional[AnalysisData] = Field(None, description="Time-coded analysis")

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def segments(self) -> List[Segment]:
        if self.analysis_data is None:
            return []
        return list(self.analysis_data.segments)

    @property
    def is_analyzed(self) -> bool:
        """True when the asset has at least one usable segment."""
        return bool(self.segments)

    def prompt_view(self) -> dict[str, Any]:
        """Projection of the asset shown to the text-generation model."""
        view: dict[str, Any] = {
            "id": self.id,
            "url": self.upload_url,
            "title": self.title,
            "description": self.description,
            "tags": self.tags,
        }
        if self.duration_seconds:
            view["duration_seconds"] = self.duration_seconds
        if self.is_analyzed:
            view["analysis_data"] = {
                "segments": [
                    {
                        "start_time": s.start_time,
                        "end_time": s.end_time,
                        "start_seconds": s.start_seconds,
                        "duration_seconds": s.duration_seconds,
                        "description": s.description,
                        "key_points": s.key_points,
                    }
                    for s in self.segments
                ]
            }
        return view
