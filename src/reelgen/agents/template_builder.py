"""Render template generation agent."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import config
from ..editor.captions import caption_element_skeleton
from ..errors import ModelContractError
from ..models import (
    AudioElement,
    CaptionConfig,
    CaptionElement,
    EditorialProfile,
    RenderTemplate,
    ScenePlan,
    VideoAsset,
    VideoElement,
)
from ..services.docs import load_render_docs
from .base import BaseAgent, load_prompt

logger = logging.getLogger(__name__)


@dataclass
class TemplateInput:
    """Input data for the template generator."""

    script: str
    assets: list[VideoAsset]
    voice_id: str
    plan: ScenePlan
    editorial_profile: Optional[EditorialProfile] = None
    caption_config: Optional[CaptionConfig] = None
    system_prompt: Optional[str] = None


class TemplateGenerator(BaseAgent[TemplateInput, RenderTemplate]):
    """Agent that expands a validated scene plan into a render template.

    Each scene becomes one composition holding its video, its voice-over and
    its caption. The scene plan is ground truth: asset choices and trims are
    not the model's to change.
    """

    def __init__(
        self,
        *args,
        docs_path: Optional[Path] = None,
        provider_template: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._docs_path = docs_path or config.render_docs_path
        self._provider_template = provider_template or config.voice_provider_template

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "TemplateGenerator"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for template generation."""
        return load_prompt("template_builder")

    async def run(self, input_data: TemplateInput) -> RenderTemplate:
        """Generate the render template for a scene plan.

        Raises:
            ModelContractError: If the response is not a template with one
                composition per scene.
        """
        self._logger.info(
            f"Generating template for {len(input_data.plan.scenes)} scenes "
            f"with voice {input_data.voice_id}"
        )

        prompt = self._build_prompt(input_data)
        response = await self._create_message(
            prompt=prompt,
            max_tokens=8192,
            temperature=0.2,
            system=input_data.system_prompt,
        )

        template = RenderTemplate.from_document(self._parse_json(response), stage=self.name)
        self._check_compositions(template, input_data.plan, input_data.caption_config)
        return template

    def _check_compositions(
        self,
        template: RenderTemplate,
        plan: ScenePlan,
        caption_config: Optional[CaptionConfig] = None,
    ) -> None:
        """Each scene must expand to a composition with its video, voice and caption.

        Captions are required only while enabled; stray ones in a template with
        captions off are removed during post-processing.
        """
        captions_enabled = caption_config is None or caption_config.enabled
        allowed_captions = (1,) if captions_enabled else (0, 1)
        compositions = template.compositions()
        if len(compositions) != len(plan.scenes):
            raise ModelContractError(
                self.name,
                f"expected {len(plan.scenes)} scene compositions, got {len(compositions)}",
            )

        for number, composition in enumerate(compositions, start=1):
            videos = sum(isinstance(e, VideoElement) for e in composition.elements)
            audios = sum(isinstance(e, AudioElement) for e in composition.elements)
            captions = sum(isinstance(e, CaptionElement) for e in composition.elements)
            if videos < 1 or audios != 1 or captions not in allowed_captions:
                raise ModelContractError(
                    self.name,
                    f"scene {number} composition has {videos} video, {audios} audio and "
                    f"{captions} caption elements (expected at least 1, exactly 1, "
                    f"{'exactly 1' if captions_enabled else 'at most 1'})",
                )

    def _build_prompt(self, input_data: TemplateInput) -> str:
        """Build the user prompt for template generation."""
        prompt_parts = [
            "SCRIPT:",
            input_data.script,
            "",
            "SCENE PLAN (ground truth, do not change any asset, URL or trim):",
            json.dumps(input_data.plan.model_dump(exclude_none=True), indent=2, ensure_ascii=False),
            "",
            f"VOICE ID: {input_data.voice_id}",
            f"VOICE PROVIDER: {self._provider_template.format(voice_id=input_data.voice_id)}",
        ]

        if input_data.editorial_profile:
            prompt_parts.extend([
                "",
                "EDITORIAL PROFILE:",
                json.dumps(
                    input_data.editorial_profile.model_dump(exclude_none=True),
                    indent=2,
                    ensure_ascii=False,
                ),
            ])

        caption = caption_element_skeleton(input_data.caption_config)
        if caption:
            prompt_parts.extend([
                "",
                "USE THIS EXACT STRUCTURE FOR CAPTIONS:",
                json.dumps(caption, indent=2, ensure_ascii=False),
            ])
            needs = "a video, a voice-over and a caption"
        else:
            needs = "a video and a voice-over (captions are disabled)"

        prompt_parts.extend([
            "",
            "RENDER ENGINE DOCUMENTATION:",
            load_render_docs(self._docs_path),
            "",
            "Generate the render template JSON for this video, using EXACTLY the video "
            f"assets assigned in the scene plan. Every scene needs {needs}.",
        ])

        return "\n".join(prompt_parts)
