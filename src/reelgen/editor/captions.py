"""Caption styling for render templates."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Optional

from ..errors import CaptionConfigError
from ..models import CaptionConfig, CaptionPlacement


@dataclass(frozen=True)
class CaptionStyle:
    """Render-engine text properties for a caption preset."""

    transcript_effect: str = "karaoke"
    transcript_color: str = "#04f827"
    font_family: str = "Montserrat"
    font_weight: str = "700"
    font_size: str = "8 vmin"
    fill_color: str = "#ffffff"
    stroke_color: str = "#333333"
    stroke_width: str = "1.05 vmin"
    background_color: str = "rgba(216,216,216,0)"
    background_x_padding: str = "26%"
    background_y_padding: str = "7%"
    background_border_radius: str = "28%"
    transcript_placement: str = "animate"
    transcript_maximum_length: int = 25
    width: str = "90%"
    height: str = "100%"


# Preset styles
PRESETS: dict[str, CaptionStyle] = {
    "karaoke": CaptionStyle(),
    "beasty": CaptionStyle(transcript_effect="highlight", transcript_color="#FFFD03"),
    "highlight-yellow": CaptionStyle(transcript_effect="highlight", transcript_color="#FFE500"),
    "fade": CaptionStyle(transcript_effect="fade", transcript_color="#ffffff"),
    "bounce": CaptionStyle(transcript_effect="bounce", transcript_color="#ff4081"),
    "slide": CaptionStyle(transcript_effect="slide", transcript_color="#00bcd4"),
    "enlarge": CaptionStyle(transcript_effect="enlarge", transcript_color="#9c27b0"),
}

Y_ALIGNMENT = {
    CaptionPlacement.TOP: "10%",
    CaptionPlacement.CENTER: "50%",
    CaptionPlacement.BOTTOM: "90%",
}

# Properties tying a caption to its scene and narration; styling never touches them.
IDENTITY_PROPERTIES = ("id", "name", "type", "track", "time", "duration", "transcript_source")

# Older positioning and shadow properties that fight with the resolved style.
CONFLICTING_PROPERTIES = (
    "x",
    "y",
    "highlight_color",
    "shadow_x",
    "shadow_y",
    "shadow_blur",
    "shadow_color",
    "text_transform",
)


def get_preset(name: str) -> CaptionStyle:
    """Get a caption preset by name.

    Raises:
        CaptionConfigError: If the preset does not exist.
    """
    if name not in PRESETS:
        raise CaptionConfigError(
            f"Unknown caption preset: {name}. Available: {list(PRESETS.keys())}",
            {"preset_id": name},
        )
    return PRESETS[name]


def register_preset(name: str, style: CaptionStyle) -> None:
    """Register a custom caption preset."""
    PRESETS[name] = style


def resolve_caption_style(caption_config: CaptionConfig) -> CaptionStyle:
    """Preset named by the config, with its explicit overrides applied."""
    style = get_preset(caption_config.preset_id or "karaoke")
    overrides: dict[str, Any] = {}
    if caption_config.transcript_color:
        overrides["transcript_color"] = caption_config.transcript_color
    if caption_config.transcript_effect:
        overrides["transcript_effect"] = caption_config.transcript_effect
    return replace(style, **overrides)


def caption_properties(caption_config: Optional[CaptionConfig]) -> dict[str, Any]:
    """Convert a caption configuration into caption element properties.

    Returns an empty dict when captions are disabled; no configuration means
    the default karaoke style at the bottom of the frame.
    """
    caption_config = caption_config or CaptionConfig.default()
    if not caption_config.enabled:
        return {}

    properties = asdict(resolve_caption_style(caption_config))
    properties["x_alignment"] = "50%"
    properties["y_alignment"] = Y_ALIGNMENT[caption_config.placement]
    return properties


def caption_element_skeleton(caption_config: Optional[CaptionConfig]) -> Optional[dict[str, Any]]:
    """Example caption element shown to the template model, or None if disabled."""
    properties = caption_properties(caption_config)
    if not properties:
        return None
    return {
        "id": "caption-1",
        "name": "Subtitle-1",
        "type": "text",
        "track": 3,
        "time": 0,
        "duration": None,
        "transcript_source": "<id of this scene's voice-over audio element>",
        **properties,
    }
