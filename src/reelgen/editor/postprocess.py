"""Deterministic fixes applied to generated render templates.

Each pass is idempotent and independent of the others, returns how many
elements it changed, and mutates the template in place.
"""

import logging
import re
from typing import Optional

from ..config import config
from ..models import (
    AudioElement,
    CaptionConfig,
    CaptionElement,
    RenderTemplate,
    VideoElement,
)
from .captions import CONFLICTING_PROPERTIES, IDENTITY_PROPERTIES, caption_properties

logger = logging.getLogger(__name__)

VOICE_ID_PATTERN = re.compile(r"voice_id=(\S*)")


def normalize_audio_sources(template: RenderTemplate) -> int:
    """Move narration text from an audio element's ``text`` key to ``source``."""
    changed = 0
    for element in template.iter_elements():
        match element:
            case AudioElement():
                text = element.model_extra.get("text")
                if isinstance(text, str):
                    element.source = element.model_extra.pop("text")
                    logger.debug(f"Moved audio text to source on element {element.id}")
                    changed += 1
            case _:
                pass
    return changed


def normalize_videos(template: RenderTemplate) -> int:
    """Force ``fit="cover"`` and ``duration=null`` on every video element.

    A null duration makes each clip last exactly as long as its composition,
    which is driven by the narration.
    """
    changed = 0
    for element in template.iter_elements():
        match element:
            case VideoElement():
                if (
                    element.fit != "cover"
                    or element.duration is not None
                    or "duration" not in element.model_fields_set
                ):
                    changed += 1
                element.fit = "cover"
                element.duration = None
            case _:
                pass
    return changed


def remove_captions(template: RenderTemplate) -> int:
    """Drop every caption element, leaving all other elements in place."""
    removed = 0
    for container in template.containers():
        kept = [e for e in container if not isinstance(e, CaptionElement)]
        removed += len(container) - len(kept)
        container[:] = kept
    return removed


def apply_captions(template: RenderTemplate, caption_config: Optional[CaptionConfig]) -> int:
    """Style every caption element, or remove them all when captions are off."""
    properties = caption_properties(caption_config)
    if not properties:
        removed = remove_captions(template)
        logger.info(f"Captions disabled: removed {removed} caption elements")
        return removed

    style = {k: v for k, v in properties.items() if k not in IDENTITY_PROPERTIES}
    changed = 0
    for element in template.iter_elements():
        match element:
            case CaptionElement():
                before = element.model_dump(exclude_unset=True)
                for key in CONFLICTING_PROPERTIES:
                    element.model_extra.pop(key, None)
                for key, value in style.items():
                    setattr(element, key, value)
                if element.model_dump(exclude_unset=True) != before:
                    changed += 1
            case _:
                pass
    return changed


def embed_voice_id(provider: Optional[str], voice_id: str, provider_template: str) -> str:
    """Return ``provider`` rewritten so that it names exactly ``voice_id``."""
    if not provider or not provider.strip():
        return provider_template.format(voice_id=voice_id)

    found = VOICE_ID_PATTERN.findall(provider)
    if not found:
        return f"{provider.rstrip()} voice_id={voice_id}"
    if all(v == voice_id for v in found):
        return provider
    return VOICE_ID_PATTERN.sub(lambda _: f"voice_id={voice_id}", provider)


def normalize_voice_ids(
    template: RenderTemplate,
    voice_id: str,
    provider_template: Optional[str] = None,
) -> int:
    """Make every audio provider descriptor use the template's voice."""
    provider_template = provider_template or config.voice_provider_template
    changed = 0
    for index, element in enumerate(template.iter_elements()):
        match element:
            case AudioElement():
                fixed = embed_voice_id(element.provider, voice_id, provider_template)
                if fixed != element.provider:
                    logger.warning(
                        f"Audio element {element.id or index}: provider "
                        f"{element.provider!r} rewritten to use voice {voice_id}"
                    )
                    element.provider = fixed
                    changed += 1
            case _:
                pass
    return changed


def postprocess_template(
    template: RenderTemplate,
    voice_id: str,
    caption_config: Optional[CaptionConfig] = None,
    provider_template: Optional[str] = None,
) -> RenderTemplate:
    """Run every post-processing pass over ``template``.

    Args:
        template: Template to fix in place.
        voice_id: Voice every narration element must use.
        caption_config: Caption settings; None applies the default style.
        provider_template: Audio provider descriptor with a ``{voice_id}`` slot.

    Returns:
        The same template, for chaining.
    """
    audio = normalize_audio_sources(template)
    videos = normalize_videos(template)
    captions = apply_captions(template, caption_config)
    voices = normalize_voice_ids(template, voice_id, provider_template)
    logger.info(
        f"Post-processed template: {audio} audio sources, {videos} videos, "
        f"{captions} captions, {voices} voice ids changed"
    )
    return template
