"""Narration length checks against the video assigned to each scene.

Spoken length is estimated from word count, so these checks are heuristics,
not audio measurements. A scene whose video length is unknown is skipped
rather than failed.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from ..config import Config, config as default_config
from ..models import ScenePlan, VideoAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DurationSettings:
    """Tunable constants for duration estimation."""

    words_to_seconds_factor: float = 0.7
    safety_margin: float = 0.95

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "DurationSettings":
        cfg = cfg or default_config
        return cls(
            words_to_seconds_factor=cfg.words_to_seconds_factor,
            safety_margin=cfg.duration_safety_margin,
        )


@dataclass(frozen=True)
class DurationViolation:
    """A scene whose estimated narration exceeds its usable video length."""

    scene_index: int
    estimated_text_seconds: float
    available_video_seconds: float
    overage_seconds: float

    def describe(self) -> str:
        return (
            f"Scene {self.scene_index + 1}: text {self.estimated_text_seconds:.1f}s "
            f"exceeds video duration {self.available_video_seconds:.1f}s "
            f"by {self.overage_seconds:.1f}s"
        )

    def as_dict(self) -> dict:
        return asdict(self)


def count_words(text: str) -> int:
    return len(text.split())


def estimate_text_seconds(text: str, factor: float) -> float:
    """Estimated spoken length of ``text`` in seconds."""
    return count_words(text) * factor


def _positive_number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def available_video_seconds(
    trim_duration: Optional[str],
    asset: Optional[VideoAsset],
) -> Optional[float]:
    """Usable clip length for a scene, or None when it cannot be known."""
    trimmed = _positive_number(trim_duration)
    if trimmed is not None:
        return trimmed
    if asset is not None and asset.duration_seconds and asset.duration_seconds > 0:
        return float(asset.duration_seconds)
    return None


def validate_scene_durations(
    plan: ScenePlan,
    assets: Optional[Iterable[VideoAsset]] = None,
    settings: Optional[DurationSettings] = None,
) -> list[DurationViolation]:
    """Find scenes whose narration would outlast their video.

    Args:
        plan: Scene plan to check.
        assets: Assets providing full clip lengths for untrimmed scenes.
        settings: Estimation constants. Defaults to the global config.

    Returns:
        One violation per offending scene, in scene order.
    """
    settings = settings or DurationSettings.from_config()
    by_id = {a.id: a for a in assets or []}
    violations: list[DurationViolation] = []

    for index, scene in enumerate(plan.scenes):
        available = available_video_seconds(
            scene.video_asset.trim_duration,
            by_id.get(scene.video_asset.id),
        )
        if available is None:
            logger.debug(f"Scene {index + 1}: no known video length, skipping")
            continue

        estimated = estimate_text_seconds(scene.script_text, settings.words_to_seconds_factor)
        max_allowed = available * settings.safety_margin

        if estimated > max_allowed:
            violations.append(
                DurationViolation(
                    scene_index=index,
                    estimated_text_seconds=estimated,
                    available_video_seconds=available,
                    overage_seconds=estimated - max_allowed,
                )
            )

    return violations


def format_violation_report(violations: Iterable[DurationViolation]) -> str:
    """One line per violation, as sent back to the model for repair."""
    return "\n".join(v.describe() for v in violations)
