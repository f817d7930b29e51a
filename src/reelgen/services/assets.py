"""Video asset sources."""

import logging
from typing import Iterable, Optional, Protocol

from ..models import VideoAsset

logger = logging.getLogger(__name__)


class AssetSource(Protocol):
    """Anything that can list a user's video assets."""

    async def list_assets(self, owner_id: str) -> list[VideoAsset]:
        ...


class StaticAssetSource:
    """Asset source over a list the caller already holds."""

    def __init__(self, assets: Iterable[VideoAsset]) -> None:
        self._assets = list(assets)

    async def list_assets(self, owner_id: str) -> list[VideoAsset]:
        owned = [a for a in self._assets if a.user_id in (None, owner_id)]
        logger.debug(f"Found {len(owned)} assets for owner {owner_id}")
        return owned


async def fetch_assets(
    source: AssetSource,
    owner_id: str,
    asset_ids: Optional[list[str]] = None,
) -> list[VideoAsset]:
    """List an owner's assets, optionally narrowed to a selection.

    Raises:
        ValueError: If a selected id does not belong to the owner.
    """
    assets = await source.list_assets(owner_id)
    if asset_ids is None:
        return assets

    by_id = {a.id: a for a in assets}
    missing = [i for i in asset_ids if i not in by_id]
    if missing:
        raise ValueError(f"Unknown video assets for {owner_id}: {', '.join(missing)}")
    return [by_id[i] for i in asset_ids]
