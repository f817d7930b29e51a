"""Keep scene plans and templates pointing at real assets.

Models sometimes return a plausible but wrong URL for an asset they picked.
The asset id is trusted; the URL is always taken from the asset list. An id
that matches no asset means the model invented one, which is fatal.
"""

import logging
from typing import Iterable

from ..errors import AssetIntegrityError, ModelContractError
from ..models import RenderTemplate, ScenePlan, VideoAsset, VideoElement

logger = logging.getLogger(__name__)


def reconcile_scene_urls(plan: ScenePlan, assets: Iterable[VideoAsset]) -> ScenePlan:
    """Return a copy of ``plan`` whose scene URLs match the asset list.

    Raises:
        AssetIntegrityError: If a scene references an unknown asset id.
    """
    by_id = {a.id: a for a in assets}
    reconciled = plan.model_copy(deep=True)

    for index, scene in enumerate(reconciled.scenes):
        asset = by_id.get(scene.video_asset.id)
        if asset is None:
            raise AssetIntegrityError(index, scene.video_asset.id, sorted(by_id))

        if scene.video_asset.url != asset.upload_url:
            logger.warning(
                f"Scene {index + 1}: replacing URL {scene.video_asset.url!r} "
                f"with {asset.upload_url!r} for asset {asset.id}"
            )
            scene.video_asset.url = asset.upload_url

    return reconciled


def _seconds(value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise ModelContractError("scene_plan", f"trim value {value!r} is not a number") from e


def apply_scene_plan(template: RenderTemplate, plan: ScenePlan) -> int:
    """Write each scene's asset URL and trim onto its composition's video.

    The first video element of composition ``i`` is the clip for scene ``i``.
    Trim properties are set when the scene is trimmed and removed when it is
    not.

    Returns:
        Number of video elements that changed.

    Raises:
        ModelContractError: If the composition count differs from the scene count.
    """
    compositions = template.compositions()
    if len(compositions) != len(plan.scenes):
        raise ModelContractError(
            "template",
            f"expected {len(plan.scenes)} scene compositions, got {len(compositions)}",
        )

    changed = 0
    for scene, composition in zip(plan.scenes, compositions):
        video = next((e for e in composition.elements if isinstance(e, VideoElement)), None)
        if video is None:
            raise ModelContractError(
                "template", f"scene {scene.scene_number} composition has no video element"
            )

        before = video.model_dump(exclude_unset=True)
        asset = scene.video_asset
        video.source = asset.url

        if asset.is_trimmed:
            setattr(video, "trim_start", _seconds(asset.trim_start))
            setattr(video, "trim_duration", _seconds(asset.trim_duration))
        else:
            video.model_extra.pop("trim_start", None)
            video.model_extra.pop("trim_duration", None)

        if video.model_dump(exclude_unset=True) != before:
            changed += 1

    return changed
