"""Fatal pipeline errors.

Every error carries a ``context`` dict with enough detail (scene index,
expected and actual values) to reproduce the failure without calling the
model again.
"""

from typing import Any, Optional


class PipelineError(ValueError):
    """Base class for fatal template-generation failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class ModelContractError(PipelineError):
    """The text-generation model returned unparsable or schema-invalid output."""

    def __init__(self, stage: str, detail: str, raw: Optional[str] = None) -> None:
        context: dict[str, Any] = {"stage": stage, "detail": detail}
        if raw is not None:
            context["raw_excerpt"] = raw[:500]
        super().__init__(f"{stage}: {detail}", context)
        self.stage = stage
        self.detail = detail


class AssetIntegrityError(PipelineError):
    """A scene references an asset id that is not in the request's asset list."""

    def __init__(self, scene_index: int, asset_id: str, known_ids: list[str]) -> None:
        super().__init__(
            f"Scene {scene_index + 1} references unknown video asset '{asset_id}'",
            {"scene_index": scene_index, "asset_id": asset_id, "known_ids": known_ids},
        )
        self.scene_index = scene_index
        self.asset_id = asset_id


class DurationRepairExhausted(PipelineError):
    """Duration violations survived every repair attempt."""

    def __init__(self, violations: list, attempts: int) -> None:
        report = "; ".join(v.describe() for v in violations)
        super().__init__(
            f"Scene duration validation failed after {attempts} repair attempts: {report}",
            {
                "attempts": attempts,
                "violations": [v.as_dict() for v in violations],
            },
        )
        self.violations = violations
        self.attempts = attempts


class TemplateStructureError(PipelineError):
    """The final render template failed the structural acceptance gate."""

    def __init__(self, field: str, expected: Any, actual: Any) -> None:
        super().__init__(
            f"Invalid template: '{field}' expected {expected}, got {actual!r}",
            {"field": field, "expected": expected, "actual": actual},
        )
        self.field = field


class CaptionConfigError(PipelineError):
    """A caption configuration names a preset or value that does not exist."""
