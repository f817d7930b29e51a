"""Scene planning agent."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from pydantic import ValidationError

from ..errors import ModelContractError
from ..models import ScenePlan, VideoAsset
from .base import BaseAgent, load_prompt

logger = logging.getLogger(__name__)

# Allowed drift between a scene's trim and the segment it was taken from.
TRIM_TOLERANCE_SECONDS = 0.5


def assets_prompt_json(assets: Iterable[VideoAsset]) -> str:
    """Assets as shown to the model, with segment timings in seconds."""
    return json.dumps([a.prompt_view() for a in assets], indent=2, ensure_ascii=False)


def check_trims(plan: ScenePlan, assets: Iterable[VideoAsset], stage: str) -> None:
    """Verify every trim was taken from an analysis segment of its asset.

    Scenes bound to unknown asset ids are left for the URL reconciler.

    Raises:
        ModelContractError: If a trim is on an unanalyzed asset or matches no segment.
    """
    by_id = {a.id: a for a in assets}

    for scene in plan.scenes:
        video_asset = scene.video_asset
        asset = by_id.get(video_asset.id)
        if not video_asset.is_trimmed or asset is None:
            continue

        if not asset.is_analyzed:
            raise ModelContractError(
                stage,
                f"scene {scene.scene_number} trims asset {asset.id}, which has no analysis segments",
            )

        try:
            start = float(video_asset.trim_start)
            duration = float(video_asset.trim_duration)
        except ValueError as e:
            raise ModelContractError(
                stage, f"scene {scene.scene_number} has a non-numeric trim: {e}"
            ) from e

        if not any(
            abs(start - segment.start_seconds) <= TRIM_TOLERANCE_SECONDS
            and abs(duration - segment.duration_seconds) <= TRIM_TOLERANCE_SECONDS
            for segment in asset.segments
        ):
            raise ModelContractError(
                stage,
                f"scene {scene.scene_number} trim start={start:g}s duration={duration:g}s "
                f"matches no segment of asset {asset.id}",
            )


def parse_scene_plan(data: dict[str, Any], assets: Iterable[VideoAsset], stage: str) -> ScenePlan:
    """Validate a model's JSON against the scene plan schema and invariants.

    Raises:
        ModelContractError: If the data is not a valid scene plan.
    """
    try:
        plan = ScenePlan.model_validate(data)
    except ValidationError as e:
        raise ModelContractError(stage, f"response does not match the scene plan schema: {e}") from e

    check_trims(plan, assets, stage)
    return plan


@dataclass
class PlannerInput:
    """Input data for the scene planner."""

    script: str
    assets: list[VideoAsset]


class ScenePlanner(BaseAgent[PlannerInput, ScenePlan]):
    """Agent that splits a script into scenes, each bound to one video asset.

    Assets with analysis data are trimmed to the segment that best matches the
    scene's text; other assets are used whole.
    """

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScenePlanner"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for scene planning."""
        return load_prompt("scene_planner")

    async def run(self, input_data: PlannerInput) -> ScenePlan:
        """Plan the scenes for a script.

        Args:
            input_data: Script and the assets it may use.

        Returns:
            A scene plan in which every scene has a video asset.

        Raises:
            ModelContractError: If the response is not a valid scene plan.
        """
        self._logger.info(
            f"Planning scenes for a {len(input_data.script.split())}-word script "
            f"with {len(input_data.assets)} assets"
        )

        prompt = self._build_prompt(input_data)
        response = await self._create_message(
            prompt=prompt,
            max_tokens=4096,
            temperature=0.4,
        )

        plan = parse_scene_plan(self._parse_json(response), input_data.assets, self.name)
        self._logger.info(f"Planned {len(plan.scenes)} scenes")
        return plan

    def _build_prompt(self, input_data: PlannerInput) -> str:
        """Build the user prompt for scene planning."""
        analyzed = [a.id for a in input_data.assets if a.is_analyzed]

        prompt_parts = [
            "SCRIPT:",
            input_data.script,
            "",
            "AVAILABLE VIDEOS:",
            assets_prompt_json(input_data.assets),
            "",
        ]

        if analyzed:
            prompt_parts.append(
                f"VIDEOS WITH ANALYSIS DATA: {', '.join(analyzed)}. "
                "When one of these is assigned, pick its best matching segment for the scene."
            )
        else:
            prompt_parts.append(
                "No video has analysis data: omit trim_start and trim_duration for every scene."
            )

        prompt_parts.extend([
            "",
            "REMEMBER: every scene MUST have a video_asset. Never leave video_asset null.",
        ])

        return "\n".join(prompt_parts)
