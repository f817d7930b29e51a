"""Data models for the render template generator."""

from .asset import AnalysisData, Segment, VideoAsset, parse_timecode
from .captions import CaptionConfig, CaptionPlacement, TRANSCRIPT_EFFECTS
from .request import EditorialProfile, TemplateRequest
from .scene import Scene, ScenePlan, SceneVideoAsset
from .template import (
    AudioElement,
    CaptionElement,
    CompositionElement,
    OtherElement,
    RenderTemplate,
    TextElement,
    VideoElement,
)

__all__ = [
    "AnalysisData",
    "Segment",
    "VideoAsset",
    "parse_timecode",
    "CaptionConfig",
    "CaptionPlacement",
    "TRANSCRIPT_EFFECTS",
    "EditorialProfile",
    "TemplateRequest",
    "Scene",
    "ScenePlan",
    "SceneVideoAsset",
    "AudioElement",
    "CaptionElement",
    "CompositionElement",
    "OtherElement",
    "RenderTemplate",
    "TextElement",
    "VideoElement",
]
