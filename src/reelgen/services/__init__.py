"""External service integrations."""

from .anthropic import AnthropicClient
from .assets import AssetSource, StaticAssetSource, fetch_assets
from .docs import load_render_docs

__all__ = [
    "AnthropicClient",
    "AssetSource",
    "StaticAssetSource",
    "fetch_assets",
    "load_render_docs",
]
