"""Deterministic checks and repairs on scene plans and templates."""

from .assets import apply_scene_plan, reconcile_scene_urls
from .durations import (
    DurationSettings,
    DurationViolation,
    estimate_text_seconds,
    format_violation_report,
    validate_scene_durations,
)
from .structure import TEMPLATE_HEIGHT, TEMPLATE_WIDTH, validate_template_structure

__all__ = [
    "apply_scene_plan",
    "reconcile_scene_urls",
    "DurationSettings",
    "DurationViolation",
    "estimate_text_seconds",
    "format_violation_report",
    "validate_scene_durations",
    "TEMPLATE_HEIGHT",
    "TEMPLATE_WIDTH",
    "validate_template_structure",
]
