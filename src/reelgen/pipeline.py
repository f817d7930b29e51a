"""Render template generation pipeline.

Stages run one after another, each consuming the previous stage's output:

1. ScenePlanner: script + assets -> scene plan
2. SceneRepairer: fix narration that outlasts its video (bounded retries)
3. reconcile_scene_urls: force scene URLs to the real asset URLs
4. TemplateGenerator: scene plan -> render template
5. apply_scene_plan + postprocess_template: deterministic fixes
6. validate_template_structure: final acceptance gate

Create one pipeline per request; instances hold no state besides their
collaborators.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .agents import PlannerInput, ScenePlanner, SceneRepairer, TemplateGenerator, TemplateInput
from .config import Config, config as default_config
from .editor import postprocess_template
from .models import RenderTemplate, ScenePlan, TemplateRequest
from .services.anthropic import AnthropicClient
from .services.assets import AssetSource, fetch_assets
from .validators import (
    DurationSettings,
    apply_scene_plan,
    reconcile_scene_urls,
    validate_template_structure,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outputs of one pipeline run."""

    plan: ScenePlan
    template: RenderTemplate

    @property
    def document(self) -> dict:
        return self.template.to_document()


class TemplatePipeline:
    """Turns a template request into a validated render template."""

    def __init__(
        self,
        client: Optional[AnthropicClient] = None,
        settings: Optional[Config] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            client: Text-generation client shared by every stage. Created if
                not provided.
            settings: Configuration. Defaults to the global config.
        """
        self._config = settings or default_config
        self._client = client or AnthropicClient(model=self._config.default_model)
        durations = DurationSettings.from_config(self._config)

        self.planner = ScenePlanner(client=self._client, model=self._config.default_model)
        self.repairer = SceneRepairer(
            client=self._client,
            model=self._config.default_model,
            settings=durations,
            max_attempts=self._config.max_repair_attempts,
        )
        self.generator = TemplateGenerator(
            client=self._client,
            model=self._config.default_model,
            docs_path=self._config.render_docs_path,
            provider_template=self._config.voice_provider_template,
        )

    async def plan(self, request: TemplateRequest) -> ScenePlan:
        """Plan scenes, repair their durations and reconcile their URLs."""
        plan = await self.planner.run(
            PlannerInput(script=request.script, assets=request.assets)
        )
        plan = await self.repairer.repair(plan, request.script, request.assets)
        return reconcile_scene_urls(plan, request.assets)

    async def generate(self, request: TemplateRequest) -> PipelineResult:
        """Run every stage for one request.

        Raises:
            ModelContractError: If a model response breaks its schema.
            AssetIntegrityError: If the plan references an unknown asset.
            DurationRepairExhausted: If duration violations cannot be repaired.
            TemplateStructureError: If the final template is malformed.
        """
        logger.info(
            f"Generating template: {len(request.script.split())} words, "
            f"{len(request.assets)} assets, voice {request.voice_id}"
        )

        plan = await self.plan(request)

        template = await self.generator.run(
            TemplateInput(
                script=request.script,
                assets=request.assets,
                voice_id=request.voice_id,
                plan=plan,
                editorial_profile=request.editorial_profile,
                caption_config=request.caption_config,
                system_prompt=request.system_prompt,
            )
        )

        synced = apply_scene_plan(template, plan)
        if synced:
            logger.warning(f"Restored scene plan URLs/trims on {synced} video elements")

        postprocess_template(
            template,
            voice_id=request.voice_id,
            caption_config=request.caption_config,
            provider_template=self._config.voice_provider_template,
        )
        validate_template_structure(template.to_document())

        logger.info(f"Template ready with {len(template.compositions())} scenes")
        return PipelineResult(plan=plan, template=template)

    async def generate_for_owner(
        self,
        source: AssetSource,
        owner_id: str,
        script: str,
        asset_ids: Optional[list[str]] = None,
        **options,
    ) -> PipelineResult:
        """Fetch an owner's assets, then run the pipeline over them.

        Args:
            source: Where the owner's assets come from.
            owner_id: Owner whose assets may be used.
            script: Voice-over script.
            asset_ids: Restrict to these assets, in this order.
            **options: Remaining TemplateRequest fields (voice_id, caption_config...).
        """
        assets = await fetch_assets(source, owner_id, asset_ids)
        request = TemplateRequest(script=script, assets=assets, **options)
        return await self.generate(request)
