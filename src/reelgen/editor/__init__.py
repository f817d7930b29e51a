"""Render template editing: caption styles and post-processing passes."""

from .captions import (
    CaptionStyle,
    PRESETS,
    caption_element_skeleton,
    caption_properties,
    get_preset,
    register_preset,
    resolve_caption_style,
)
from .postprocess import (
    apply_captions,
    embed_voice_id,
    normalize_audio_sources,
    normalize_videos,
    normalize_voice_ids,
    postprocess_template,
    remove_captions,
)

__all__ = [
    # Captions
    "CaptionStyle",
    "PRESETS",
    "caption_element_skeleton",
    "caption_properties",
    "get_preset",
    "register_preset",
    "resolve_caption_style",
    # Post-processing
    "apply_captions",
    "embed_voice_id",
    "normalize_audio_sources",
    "normalize_videos",
    "normalize_voice_ids",
    "postprocess_template",
    "remove_captions",
]
