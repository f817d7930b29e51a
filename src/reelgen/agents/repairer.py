"""Scene duration repair agent."""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import config
from ..errors import DurationRepairExhausted
from ..models import ScenePlan, VideoAsset
from ..validators.durations import (
    DurationSettings,
    DurationViolation,
    format_violation_report,
    validate_scene_durations,
)
from .base import BaseAgent, load_prompt
from .planner import assets_prompt_json, parse_scene_plan

logger = logging.getLogger(__name__)


@dataclass
class RepairInput:
    """Input data for one repair attempt."""

    script: str
    assets: list[VideoAsset]
    plan: ScenePlan
    violations: list[DurationViolation]


class SceneRepairer(BaseAgent[RepairInput, ScenePlan]):
    """Agent that rebalances a scene plan whose narration outlasts its videos."""

    def __init__(
        self,
        *args,
        settings: Optional[DurationSettings] = None,
        max_attempts: Optional[int] = None,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._settings = settings or DurationSettings.from_config()
        self._max_attempts = max_attempts or config.max_repair_attempts

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "SceneRepairer"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for duration repair."""
        return load_prompt("scene_repair")

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def run(self, input_data: RepairInput) -> ScenePlan:
        """Ask the model for one revised plan.

        Raises:
            ModelContractError: If the response is not a valid scene plan.
        """
        prompt = self._build_prompt(input_data)
        response = await self._create_message(
            prompt=prompt,
            max_tokens=4096,
            temperature=0.3,
        )
        return parse_scene_plan(self._parse_json(response), input_data.assets, self.name)

    async def repair(
        self,
        plan: ScenePlan,
        script: str,
        assets: list[VideoAsset],
    ) -> ScenePlan:
        """Return a plan with no duration violations.

        The plan is returned unchanged when it already fits. Otherwise the
        model is asked for a revision up to `max_attempts` times, re-checking
        after each one.

        Raises:
            DurationRepairExhausted: If violations remain after the last attempt.
        """
        violations = validate_scene_durations(plan, assets, self._settings)
        if not violations:
            self._logger.info("Scene durations fit their videos")
            return plan

        for attempt in range(1, self._max_attempts + 1):
            self._logger.warning(
                f"Repair attempt {attempt}/{self._max_attempts} for "
                f"{len(violations)} duration violations:\n{format_violation_report(violations)}"
            )
            plan = await self.run(
                RepairInput(script=script, assets=assets, plan=plan, violations=violations)
            )
            violations = validate_scene_durations(plan, assets, self._settings)
            if not violations:
                self._logger.info(f"Scene durations repaired on attempt {attempt}")
                return plan

        raise DurationRepairExhausted(violations, self._max_attempts)

    def _build_prompt(self, input_data: RepairInput) -> str:
        """Build the user prompt for a repair attempt."""
        prompt_parts = [
            "SCRIPT:",
            input_data.script,
            "",
            "AVAILABLE VIDEOS:",
            assets_prompt_json(input_data.assets),
            "",
            "CURRENT SCENE PLAN:",
            json.dumps(input_data.plan.model_dump(exclude_none=True), indent=2, ensure_ascii=False),
            "",
            "DURATION VIOLATIONS:",
            format_violation_report(input_data.violations),
            "",
            f"Narration is estimated at {self._settings.words_to_seconds_factor:g} seconds per word "
            f"and may use at most {self._settings.safety_margin:.0%} of a clip's length.",
            "Return the complete revised scene plan.",
        ]
        return "\n".join(prompt_parts)
